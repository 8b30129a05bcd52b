"""
Configuration management for Decaminx.

Handles loading and validation of puzzle geometry and sampling settings.
A puzzle file holds a ``puzzle`` section, which is the base, and optional
``classifier`` and ``sampling`` sections that are merged into it.
"""

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from decaminx.core.exceptions import ConfigurationError
from decaminx.core.logging import get_logger

logger = get_logger(__name__)


class SamplingConfig(BaseModel):
    """Lattice sampling settings for boundary extraction."""

    spacing: float = Field(default=1.0, gt=0.0)
    tries: int = Field(default=12, ge=1)


class PuzzleConfig(BaseModel):
    """Puzzle geometry and classifier configuration model."""

    name: str = "decaminx"
    ball_radius: float = Field(default=18.0, gt=0.0)
    min_angle: float = Field(default=0.7619934, gt=0.0, lt=math.pi / 2)
    max_angle: float = Field(default=1.0945351, gt=0.0, lt=math.pi / 2)
    deep_interior_enabled: bool = False
    corner_rounding_k: float = Field(default=1.0, gt=0.0)
    sampling: SamplingConfig = Field(default_factory=SamplingConfig)

    @model_validator(mode="after")
    def _check_angles(self) -> "PuzzleConfig":
        if self.max_angle < self.min_angle:
            raise ValueError(
                f"max_angle ({self.max_angle}) must not be below min_angle ({self.min_angle})"
            )
        return self


def _puzzle_data_from_document(data: dict[str, Any]) -> dict[str, Any]:
    """Flatten a YAML document into PuzzleConfig keyword arguments."""
    puzzle_data = dict(data.get("puzzle") or {})
    if "classifier" in data:
        puzzle_data.update(data["classifier"] or {})
    if "sampling" in data:
        puzzle_data["sampling"] = data["sampling"] or {}
    return puzzle_data


def load_puzzle_config(file_path: str | Path) -> PuzzleConfig:
    """
    Load a single puzzle configuration file.

    Args:
        file_path: Path to a YAML file with a ``puzzle`` section

    Returns:
        Validated PuzzleConfig

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    path = Path(file_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse puzzle config: {path}",
            details={"error": str(e)},
        ) from e

    if not isinstance(data, dict) or "puzzle" not in data:
        raise ConfigurationError(
            f"Puzzle config has no 'puzzle' section: {path}",
        )

    try:
        config = PuzzleConfig(**_puzzle_data_from_document(data))
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid puzzle config: {path}",
            details={"error": str(e)},
        ) from e

    logger.debug("puzzle_config_loaded", path=str(path), name=config.name)
    return config


@dataclass
class ConfigManager:
    """
    Central configuration manager for Decaminx.

    Loads and validates every puzzle configuration found under
    ``<config_dir>/puzzles/*.yaml``, keyed by file stem.

    Example:
        >>> config = ConfigManager(config_dir=Path("config"))
        >>> puzzle = config.get_puzzle("decaminx")
    """

    config_dir: Path
    _puzzles: dict[str, PuzzleConfig] = field(default_factory=dict, init=False)
    _loaded: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        """Initialize configuration manager."""
        self.config_dir = Path(self.config_dir)
        if not self.config_dir.exists():
            raise ConfigurationError(
                f"Configuration directory not found: {self.config_dir}"
            )

    def load(self) -> None:
        """Load all puzzle configurations from disk."""
        puzzles_dir = self.config_dir / "puzzles"
        if puzzles_dir.exists():
            for config_file in sorted(puzzles_dir.glob("*.yaml")):
                self._puzzles[config_file.stem] = load_puzzle_config(config_file)
        self._loaded = True
        logger.info("puzzle_configs_loaded", count=len(self._puzzles))

    def get_puzzle(self, name: str) -> PuzzleConfig:
        """
        Get puzzle configuration by name.

        Args:
            name: Puzzle configuration name (without .yaml extension)

        Returns:
            PuzzleConfig instance

        Raises:
            ConfigurationError: If puzzle not found
        """
        if not self._loaded:
            self.load()

        if name not in self._puzzles:
            available = list(self._puzzles.keys())
            raise ConfigurationError(
                f"Puzzle configuration not found: {name}",
                details={"available": available},
            )
        return self._puzzles[name]

    def list_puzzles(self) -> list[str]:
        """List available puzzle configurations."""
        if not self._loaded:
            self.load()
        return list(self._puzzles.keys())
