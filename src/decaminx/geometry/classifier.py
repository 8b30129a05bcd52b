"""
Part classification for the Decaminx.

Given a point near the surface of the puzzle ball, ``PartClassifier`` works out
which physical piece the point belongs to. The answer is a bitmask with bit *i*
set when the point is well inside axis *i*'s cut cone, plus ``RADIAL_SPLIT_BIT``
for the secondary radial split. Zero means the point belongs to no piece: it
lies in a cut gap, an axle keep-out, outside a rounded corner, or in a region
this classifier does not model.

A mesh builder samples the classifier on a lattice. Wherever two neighbouring
samples disagree there is a cut surface, which ``find_root`` then locates.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple

from decaminx.core.config import PuzzleConfig
from decaminx.core.exceptions import CapabilityNotImplementedError
from decaminx.core.logging import get_logger
from decaminx.geometry.axes import AxisModel
from decaminx.geometry.vector import Point, cross, dot

logger = get_logger(__name__)

PartIndex = int

VOID: PartIndex = 0
RADIAL_SPLIT_BIT = 10

# Only pieces around these axes are currently produced.
ACCEPTED_AXIS_BITS: Tuple[int, ...] = (0, 3)
ACCEPTED_INDICES: FrozenSet[int] = frozenset(1 << bit for bit in ACCEPTED_AXIS_BITS)

# Deep-interior region markers, only produced when that branch is enabled.
HEMISPHERE_NORTH = 2023
HEMISPHERE_SOUTH = 2024
CENTER_REGION_BASE = 2024
CENTER_REGIONS: Tuple[Tuple[float, float, int], ...] = ((7.0, 7.0, 1), (-7.0, -7.0, 2))

DEEP_INTERIOR_DEPTH = 4.0
CUP_REJECT_DOT = 28.5
CUP_RELAX_DOT = 28.0


class ResultKind(Enum):
    """Kind of classification outcome."""

    VOID = "void"  # Belongs to no piece
    PART = "part"  # Regular piece, index is an axis bitmask
    SPECIAL = "special"  # Deep-interior region marker


@dataclass(frozen=True)
class PartResult:
    """
    Tagged classification result.

    Attributes:
        kind: What the index means
        index: Bitmask for PART, marker for SPECIAL, always 0 for VOID
    """

    kind: ResultKind
    index: PartIndex = VOID

    @classmethod
    def void(cls) -> "PartResult":
        return cls(ResultKind.VOID, VOID)

    @classmethod
    def part(cls, index: PartIndex) -> "PartResult":
        return cls(ResultKind.PART, index)

    @classmethod
    def special(cls, marker: int) -> "PartResult":
        return cls(ResultKind.SPECIAL, marker)

    def __bool__(self) -> bool:
        return self.kind is not ResultKind.VOID


@dataclass
class NearAxis:
    """An axis the point sits close to the cut of, with a closeness score."""

    margin: float
    axis: Point


@dataclass
class MarginScratch:
    """
    Caller-owned margin buffers for one classification at a time.

    Reusing an instance avoids allocating per call. It must not be shared by
    concurrent callers; each worker keeps its own.
    """

    positive: List[NearAxis] = field(default_factory=list)
    negative: List[NearAxis] = field(default_factory=list)

    def clear(self) -> None:
        self.positive.clear()
        self.negative.clear()


@dataclass(frozen=True)
class Thresholds:
    """Split cosines for the inner and outer side of the cut gap at one depth."""

    cos_in: float
    cos_out: float
    middle: bool = False


class AxisMatch(Enum):
    """Where a point sits relative to one axis's cut cone."""

    POSITIVE = "positive"  # Inside the cone, the bit is set
    AMBIGUOUS = "ambiguous"  # In the cut gap
    NEGATIVE = "negative"  # Outside the cone but facing the axis
    OUTSIDE = "outside"  # Behind the axis


class Capability(Enum):
    """Queries a classifier may support."""

    PART_INDEX = "part_index"
    STICKER_INDEX = "sticker_index"
    FACE_COUNT = "face_count"


def select_thresholds(depth: float, split_cos: float, split2_cos: float) -> Thresholds:
    """
    Pick the cut-gap cosines for a depth below the nominal surface.

    Deep in the shell the gap uses ``split_cos`` on both sides, above the
    surface ``split2_cos``. In between the two blend linearly so the piece
    edges come out chamfered.
    """
    if depth > 0.6:
        return Thresholds(split_cos, split_cos)
    if depth > 0.4:
        return Thresholds(split_cos, split_cos - (depth - 0.6) * 0.15)
    if depth > 0.0:
        return Thresholds(split_cos, split2_cos, middle=True)
    if depth > -0.2:
        return Thresholds(split2_cos - (depth + 0.2) * 0.15, split2_cos)
    return Thresholds(split2_cos, split2_cos)


def match_axis(d: float, cut_factor: float, thresholds: Thresholds) -> Tuple[AxisMatch, float]:
    """
    Compare a point's projection ``d`` on an axis against the cut cone.

    Returns:
        The match and a margin. The margin is only meaningful for POSITIVE
        and NEGATIVE; values at or below zero mean the point is far from the cut.
    """
    outer = thresholds.cos_out * cut_factor
    inner = thresholds.cos_in * cut_factor
    if d > outer:
        return AxisMatch.POSITIVE, 1.0 - (d - outer) * 0.8
    if d > inner:
        return AxisMatch.AMBIGUOUS, 0.0
    if d > 0.0:
        return AxisMatch.NEGATIVE, 1.0 - (inner - d) * 0.8
    return AxisMatch.OUTSIDE, 0.0


def corner_is_rounded(margin1: float, margin2: float, k: float = 1.0) -> bool:
    """Quarter-circle fillet test where two cuts meet."""
    d1 = max(0.0, 1.0 - k * (1.0 - margin1))
    d2 = max(0.0, 1.0 - k * (1.0 - margin2))
    return d1 * d1 + d2 * d2 < 1.0


class PartClassifier:
    """
    Maps points to Decaminx part indices.

    The classifier holds no per-call state. Margin buffers are either passed
    in by the caller as a ``MarginScratch`` or allocated for each call.

    Example:
        >>> classifier = PartClassifier()
        >>> classifier.classify(Point(2.0, 0.0, 17.9))
        1
    """

    capabilities: FrozenSet[Capability] = frozenset({Capability.PART_INDEX})

    def __init__(
        self,
        axis_model: Optional[AxisModel] = None,
        deep_interior_enabled: bool = False,
        corner_rounding_k: float = 1.0,
    ):
        """
        Initialize the classifier.

        Args:
            axis_model: Axes and split cosines; the default Decaminx model if omitted.
            deep_interior_enabled: Classify points deeper than 4 below the
                surface into hemisphere and center-region markers instead of void.
            corner_rounding_k: Fillet tightness for the corner-rounding test.
        """
        self.axis_model = axis_model if axis_model is not None else AxisModel()
        self.deep_interior_enabled = deep_interior_enabled
        self.corner_rounding_k = corner_rounding_k
        logger.debug(
            "classifier_created",
            ball_radius=self.axis_model.ball_radius,
            split_cos=self.axis_model.split_cos,
            split2_cos=self.axis_model.split2_cos,
            deep_interior_enabled=deep_interior_enabled,
        )

    @classmethod
    def from_config(cls, config: PuzzleConfig) -> "PartClassifier":
        return cls(
            axis_model=AxisModel.from_config(config),
            deep_interior_enabled=config.deep_interior_enabled,
            corner_rounding_k=config.corner_rounding_k,
        )

    # ------------------------------------------------------------------
    # Public queries
    # ------------------------------------------------------------------

    def classify(
        self,
        point: Point,
        axis_count: Optional[int] = None,
        current_normal: int = 0,
        scratch: Optional[MarginScratch] = None,
    ) -> PartIndex:
        """
        Part index of ``point``, or 0 when it belongs to no piece.

        Args:
            point: Query point
            axis_count: Only test the first ``axis_count`` axes (all by default)
            current_normal: Face the caller is building; accepted for
                interface compatibility and not used
            scratch: Margin buffers to reuse; cleared before use

        Returns:
            Part bitmask, a special marker, or 0
        """
        return self.resolve(point, axis_count, current_normal, scratch).index

    def resolve(
        self,
        point: Point,
        axis_count: Optional[int] = None,
        current_normal: int = 0,
        scratch: Optional[MarginScratch] = None,
    ) -> PartResult:
        """Classify ``point`` and say whether the index is a part, a marker or void."""
        model = self.axis_model
        r = point.length()
        depth = model.ball_radius - r

        if depth > DEEP_INTERIOR_DEPTH:
            if not self.deep_interior_enabled:
                return PartResult.void()
            return self._classify_deep_interior(point)

        if scratch is None:
            scratch = MarginScratch()
        else:
            scratch.clear()

        thresholds = select_thresholds(depth, model.split_cos, model.split2_cos)
        index = self._cone_pass(point, r, depth, thresholds, axis_count, scratch)
        if index is None:
            return PartResult.void()

        if index not in ACCEPTED_INDICES:
            return PartResult.void()

        index = self._refine_single_axis(point, r, depth, index)
        if index is None:
            return PartResult.void()

        if not self._corners_rounded(scratch, thresholds.middle):
            return PartResult.void()

        return PartResult.part(index)

    def cone_bits(self, point: Point, axis_count: Optional[int] = None) -> Optional[int]:
        """
        Raw per-axis cone membership before acceptance and refinement.

        Returns:
            Bitmask of axes whose cone contains the point, or None when the
            cup test, the cut gap or an axle keep-out rejects it
        """
        r = point.length()
        depth = self.axis_model.ball_radius - r
        thresholds = select_thresholds(
            depth, self.axis_model.split_cos, self.axis_model.split2_cos
        )
        return self._cone_pass(point, r, depth, thresholds, axis_count, MarginScratch())

    def sticker_index(self, pos: Tuple[float, float], current_normal: int) -> PartIndex:
        """
        Part index of a point on a flat sticker face.

        Raises:
            CapabilityNotImplementedError: Always, no 2D sticker layout exists yet.
        """
        raise CapabilityNotImplementedError(
            "Sticker index mapping is not implemented for the Decaminx",
            capability=Capability.STICKER_INDEX.value,
            details={"pos": tuple(pos), "current_normal": current_normal},
        )

    def face_count(self) -> int:
        """
        Number of sticker faces.

        Raises:
            CapabilityNotImplementedError: Always, no 2D sticker layout exists yet.
        """
        raise CapabilityNotImplementedError(
            "Face count is not implemented for the Decaminx",
            capability=Capability.FACE_COUNT.value,
        )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _cut_factor(self, r: float) -> float:
        radius = self.axis_model.ball_radius
        return r * 0.7 + max(radius - 2.0, min(r, radius)) * 0.3

    def _cone_pass(
        self,
        point: Point,
        r: float,
        depth: float,
        thresholds: Thresholds,
        axis_count: Optional[int],
        scratch: MarginScratch,
    ) -> Optional[int]:
        """Cup test and per-axis cone test; None means rejected."""
        model = self.axis_model

        cup = False
        for normal in model.normals:
            d = dot(point, normal)
            if d > CUP_REJECT_DOT:
                return None
            if d > CUP_RELAX_DOT:
                cup = True

        axes = model.axes if axis_count is None else model.axes[:axis_count]
        cut_factor = self._cut_factor(r)
        max_dist_to_axle = 3.2 if depth < -1.0 else 1.35

        index = 0
        for bit, axis in enumerate(axes):
            match, margin = match_axis(dot(point, axis), cut_factor, thresholds)
            if match is AxisMatch.AMBIGUOUS:
                return None
            if match is AxisMatch.NEGATIVE:
                if margin > 0.0:
                    scratch.negative.append(NearAxis(margin, axis))
                continue
            if match is AxisMatch.OUTSIDE:
                continue

            index += 1 << bit
            if margin > 0.0:
                scratch.positive.append(NearAxis(margin, axis))
            if not cup and cross(point, axis).length() < max_dist_to_axle:
                return None

        return index

    def _refine_single_axis(
        self, point: Point, r: float, depth: float, index: int
    ) -> Optional[int]:
        """Apply the radial split around a lone axis; None means rejected."""
        if bin(index).count("1") != 1:
            return index
        if depth > 3.8:
            return None

        axis = self.axis_model.axes[index.bit_length() - 1]
        side = dot(point, axis.any_perp())
        dist_to_axle = cross(point, axis).length()

        add_radius = 22.5 if side > 0.2 else 24.5
        if r > 26.5 or (dist_to_axle < 4.25 and r > add_radius):
            return index + (1 << RADIAL_SPLIT_BIT)

        reject_radius = 22.3 if side > -0.2 else 24.3
        if r > 26.3 or (dist_to_axle < 4.35 and r > reject_radius):
            return None

        return index

    def _corners_rounded(self, scratch: MarginScratch, middle: bool) -> bool:
        k = self.corner_rounding_k
        pos, neg = scratch.positive, scratch.negative

        if len(pos) == 2 and not corner_is_rounded(pos[0].margin, pos[1].margin, k):
            return False
        if len(neg) == 2 and not corner_is_rounded(neg[0].margin, neg[1].margin, k):
            return False
        if (
            len(pos) == 1
            and len(neg) == 1
            and not middle
            and not corner_is_rounded(pos[0].margin, neg[0].margin, k)
        ):
            return False
        return True

    def _classify_deep_interior(self, point: Point) -> PartResult:
        """
        Hemisphere and center-region carve-outs for the ball's core.

        Only reachable with ``deep_interior_enabled``. The markers are region
        identifiers, not piece bitmasks.
        """
        for axis in self.axis_model.axes:
            if dot(point, axis) > 0.0 and cross(point, axis).length() < 1.25:
                return PartResult.void()

        for cx, cy, k in CENTER_REGIONS:
            manhattan = abs(point.x - cx) + abs(point.y - cy)
            if manhattan < 2.5:
                return PartResult.special(CENTER_REGION_BASE + k)
            if manhattan < 2.8:
                return PartResult.void()

        if abs(point.z) < 0.1:
            return PartResult.void()
        if point.z > 0.0:
            return PartResult.special(HEMISPHERE_NORTH)
        return PartResult.special(HEMISPHERE_SOUTH)
