"""
Cut-axis model for the Decaminx.

The puzzle has ten cut axes: the two poles and eight directions ``(±u, ±v, ±w)``
arranged with the rotational symmetry of a dodecahedron about the z axis.
``u``, ``v`` and ``w`` solve::

    u² + v² + w² = 1,   w = 2u² - 1,   w² = u·v

Each axis cuts the ball with a cone whose half-angle is set by the split
cosines below.
"""

import math
from dataclasses import dataclass, field
from typing import Tuple

from decaminx.core.config import PuzzleConfig
from decaminx.geometry.vector import Point

# Closed-form solution of the system above.
AXIS_U = 0.8539500706724498779
AXIS_V = 0.24613487960998085
AXIS_W = 0.458461446402964282

DEFAULT_MIN_ANGLE = 0.7619934
DEFAULT_MAX_ANGLE = 1.0945351
DEFAULT_BALL_RADIUS = 18.0


def build_axes() -> Tuple[Point, ...]:
    """
    Build the ten unit axes in bit order.

    Bits 2-5 are the upper ring and bits 6-9 the lower ring; a quarter turn
    about z maps 2→3→4→5→2 and 6→7→8→9→6.
    """
    u, v, w = AXIS_U, AXIS_V, AXIS_W
    return (
        Point(0.0, 0.0, 1.0),
        Point(0.0, 0.0, -1.0),
        Point(u, v, w),
        Point(-v, u, w),
        Point(-u, -v, w),
        Point(v, -u, w),
        Point(u, -v, -w),
        Point(v, u, -w),
        Point(-u, v, -w),
        Point(-v, -u, -w),
    )


@dataclass(frozen=True)
class AxisModel:
    """
    The fixed axis directions and cut-cone thresholds of one puzzle.

    Attributes:
        ball_radius: Nominal radius of the puzzle ball
        min_angle: Base cut angle in radians
        max_angle: Upper cut angle in radians (recorded, not used by the cone test)
        axes: Ten unit axis directions, index = part-index bit
        normals: Directions used by the cup test; the same vectors as ``axes``
        split_cos: Cosine of ``min_angle + 4 / ball_radius``
        split2_cos: Cosine of ``min_angle + 1 / ball_radius``
    """

    ball_radius: float = DEFAULT_BALL_RADIUS
    min_angle: float = DEFAULT_MIN_ANGLE
    max_angle: float = DEFAULT_MAX_ANGLE
    axes: Tuple[Point, ...] = field(default_factory=build_axes, init=False)
    normals: Tuple[Point, ...] = field(init=False)
    split_cos: float = field(init=False)
    split2_cos: float = field(init=False)

    def __post_init__(self) -> None:
        split_angle = self.min_angle + 4.0 / self.ball_radius
        split2_angle = self.min_angle + 1.0 / self.ball_radius
        # frozen dataclass: derived fields are set once here
        object.__setattr__(self, "normals", self.axes)
        object.__setattr__(self, "split_cos", math.cos(split_angle))
        object.__setattr__(self, "split2_cos", math.cos(split2_angle))

    @classmethod
    def from_config(cls, config: PuzzleConfig) -> "AxisModel":
        return cls(
            ball_radius=config.ball_radius,
            min_angle=config.min_angle,
            max_angle=config.max_angle,
        )

    def __len__(self) -> int:
        return len(self.axes)
