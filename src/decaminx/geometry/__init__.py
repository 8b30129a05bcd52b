"""
Geometry module - Vector math, cut axes, part classification and boundary search.

Provides:
- Point, dot, cross, dist_pl: 3D vector algebra
- AxisModel: the ten cut axes and split cosines
- PartClassifier: point to part-index classification
- find_root: bisection toward a cut surface
- BoundarySampler: lattice sampling and boundary extraction
"""

from decaminx.geometry.vector import Point, cross, dist_pl, dot
from decaminx.geometry.axes import AxisModel, build_axes
from decaminx.geometry.classifier import (
    Capability,
    MarginScratch,
    PartClassifier,
    PartResult,
    ResultKind,
)
from decaminx.geometry.root_finder import bisect_brackets, find_root
from decaminx.geometry.sampler import BoundarySample, BoundarySampler

__all__ = [
    "Point",
    "dot",
    "cross",
    "dist_pl",
    "AxisModel",
    "build_axes",
    "Capability",
    "MarginScratch",
    "PartClassifier",
    "PartResult",
    "ResultKind",
    "find_root",
    "bisect_brackets",
    "BoundarySample",
    "BoundarySampler",
]
