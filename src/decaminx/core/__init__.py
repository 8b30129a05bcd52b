"""
Core module - Configuration, logging and exceptions.
"""

from decaminx.core.config import ConfigManager, PuzzleConfig, SamplingConfig, load_puzzle_config
from decaminx.core.exceptions import (
    DecaminxError,
    ConfigurationError,
    GeometryError,
    CapabilityNotImplementedError,
)

__all__ = [
    # Config
    "ConfigManager",
    "PuzzleConfig",
    "SamplingConfig",
    "load_puzzle_config",
    # Exceptions
    "DecaminxError",
    "ConfigurationError",
    "GeometryError",
    "CapabilityNotImplementedError",
]
