"""
3D vector value type and the small amount of algebra the classifier needs.

``Point`` is an immutable value; every operation returns a new instance.
"""

import math
from dataclasses import dataclass
from typing import Iterator

import numpy as np

from decaminx.core.exceptions import GeometryError


@dataclass(frozen=True)
class Point:
    """
    A point or direction in 3D space.

    Attributes:
        x: X component
        y: Y component
        z: Z component
    """

    x: float
    y: float
    z: float

    @classmethod
    def zero(cls) -> "Point":
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def from_array(cls, values) -> "Point":
        """Build a point from any length-3 sequence or numpy array."""
        arr = np.asarray(values, dtype=np.float64).reshape(-1)
        if arr.shape[0] != 3:
            raise GeometryError(
                "Point needs exactly 3 components",
                details={"shape": tuple(np.shape(values))},
            )
        return cls(float(arr[0]), float(arr[1]), float(arr[2]))

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> "Point":
        return Point(-self.x, -self.y, -self.z)

    def __abs__(self) -> float:
        return self.length()

    def sqr_length(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        return math.sqrt(self.sqr_length())

    def scale(self, factor: float) -> "Point":
        return Point(self.x * factor, self.y * factor, self.z * factor)

    def norm(self) -> "Point":
        """Scale to unit length.

        Raises:
            GeometryError: If the point is the origin.
        """
        length = self.length()
        if length == 0.0:
            raise GeometryError("Cannot normalize a zero-length vector")
        return self.scale(1.0 / length)

    def any_perp(self) -> "Point":
        """
        Return some direction perpendicular to this one.

        The component with the smallest magnitude is zeroed and the other two
        are swapped with one sign flipped. The result is not normalized, so
        only its direction is meaningful.
        """
        ax, ay, az = abs(self.x), abs(self.y), abs(self.z)
        if ax < ay and ax < az:
            return Point(0.0, self.z, -self.y)
        if ay < az:
            return Point(-self.z, 0.0, self.x)
        return Point(self.y, -self.x, 0.0)

    def rotate(self, axle: "Point", angle: float) -> "Point":
        """
        Rotate about a unit axle through the origin (Rodrigues' formula).

        Args:
            axle: Unit rotation axis
            angle: Signed angle in radians, counter-clockwise looking down the axle

        Returns:
            Rotated point
        """
        s = math.sin(angle)
        c = math.cos(angle)
        t = 1.0 - c
        ax, ay, az = axle.x, axle.y, axle.z

        m00 = c + t * ax * ax
        m01 = t * ax * ay - s * az
        m02 = t * ax * az + s * ay

        m10 = t * ax * ay + s * az
        m11 = c + t * ay * ay
        m12 = t * ay * az - s * ax

        m20 = t * ax * az - s * ay
        m21 = t * ay * az + s * ax
        m22 = c + t * az * az

        return Point(
            self.x * m00 + self.y * m01 + self.z * m02,
            self.x * m10 + self.y * m11 + self.z * m12,
            self.x * m20 + self.y * m21 + self.z * m22,
        )


def dot(lhs: Point, rhs: Point) -> float:
    return lhs.x * rhs.x + lhs.y * rhs.y + lhs.z * rhs.z


def cross(lhs: Point, rhs: Point) -> Point:
    return Point(
        lhs.y * rhs.z - lhs.z * rhs.y,
        lhs.z * rhs.x - lhs.x * rhs.z,
        lhs.x * rhs.y - lhs.y * rhs.x,
    )


def dist_pl(p: Point, p1: Point, p2: Point) -> float:
    """
    Distance from point ``p`` to the segment ``p1``-``p2``.

    Outside the segment's span the distance to the nearer endpoint is
    returned. A zero-length segment degrades to the distance to ``p2``.
    """
    p12 = p2 - p1
    seg_len = p12.length()
    d1 = p1 - p
    d2 = p2 - p
    if seg_len == 0.0:
        return d2.length()
    direction = p12.scale(1.0 / seg_len)
    along = dot(d2, direction)
    if along <= 0.0:
        return d2.length()
    if along >= seg_len:
        return d1.length()
    return cross(d1, direction).length()
