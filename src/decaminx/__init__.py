"""
Decaminx - part classification for a ten-axis dodecahedral twisty puzzle.

Answers, for any point near the puzzle ball's surface, which physical piece
it belongs to, so a mesh builder can carve printable pieces along the cuts.
"""

__version__ = "0.1.0"
__author__ = "Decaminx Contributors"

from decaminx.core.config import ConfigManager, PuzzleConfig
from decaminx.geometry.classifier import PartClassifier, PartResult
from decaminx.geometry.vector import Point

__all__ = [
    "__version__",
    "ConfigManager",
    "PuzzleConfig",
    "PartClassifier",
    "PartResult",
    "Point",
]
