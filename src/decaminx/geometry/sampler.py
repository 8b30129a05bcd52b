"""
Lattice sampling of the part classifier.

Classifies a cubic lattice of points covering the puzzle's surface shell, then
refines every lattice edge whose two ends disagree into a boundary point with
``find_root``. The boundary points are what a mesh builder stitches into cut
surfaces.
"""

import math
from collections import Counter
from dataclasses import dataclass
from functools import partial
from typing import Dict, List, Optional, Tuple

import numpy as np

from decaminx.core.config import SamplingConfig
from decaminx.core.logging import get_logger
from decaminx.geometry.classifier import MarginScratch, PartClassifier
from decaminx.geometry.root_finder import find_root
from decaminx.geometry.vector import Point

logger = get_logger(__name__)


@dataclass
class BoundarySample:
    """
    A point on a cut surface.

    Attributes:
        point: Refined boundary location
        inside: Part index on the side the search started from
        outside: Part index on the other side
    """

    point: Point
    inside: int
    outside: int


class BoundarySampler:
    """
    Samples a classifier on a lattice and extracts cut-surface points.

    The sampler owns one ``MarginScratch`` and reuses it for every
    classification, so an instance must not be shared between threads.
    """

    def __init__(
        self,
        classifier: PartClassifier,
        spacing: float = 1.0,
        tries: int = 12,
        shell: Optional[Tuple[float, float]] = None,
    ):
        """
        Initialize the sampler.

        Args:
            classifier: Classifier to sample.
            spacing: Lattice pitch.
            tries: Bisection midpoints per boundary edge.
            shell: (inner, outer) radius range to sample. Defaults to 4 below
                and 1 above the ball radius.
        """
        if spacing <= 0.0:
            raise ValueError(f"spacing must be positive, got {spacing}")
        if tries < 1:
            raise ValueError(f"tries must be at least 1, got {tries}")

        radius = classifier.axis_model.ball_radius
        self.classifier = classifier
        self.spacing = spacing
        self.tries = tries
        self.shell = shell if shell is not None else (radius - 4.0, radius + 1.0)
        self._scratch = MarginScratch()
        self._grid: Optional[np.ndarray] = None
        self._mask: Optional[np.ndarray] = None
        self._indices: Optional[np.ndarray] = None

    @classmethod
    def from_config(
        cls, classifier: PartClassifier, config: SamplingConfig
    ) -> "BoundarySampler":
        return cls(classifier, spacing=config.spacing, tries=config.tries)

    def classify_point(self, point: Point) -> int:
        return self.classifier.classify(point, scratch=self._scratch)

    def lattice(self) -> np.ndarray:
        """Lattice points inside the shell, shape ``(N, 3)``."""
        grid, mask = self._lattice_grid()
        return grid[mask]

    def classify_lattice(self) -> np.ndarray:
        """Part index of every point returned by ``lattice()``."""
        _, mask = self._lattice_grid()
        return self._classified_grid()[mask]

    def part_histogram(self) -> Dict[int, int]:
        """Count of lattice points per part index, void included."""
        counts = Counter(int(i) for i in self.classify_lattice())
        return dict(sorted(counts.items()))

    def boundary_points(self) -> List[BoundarySample]:
        """
        Refine every disagreeing lattice edge into a boundary point.

        An edge joins two lattice neighbours along x, y or z that are both in
        the shell. The search starts from the nonzero end; when both ends are
        nonzero it starts from the lower-coordinate end.
        """
        grid, mask = self._lattice_grid()
        indices = self._classified_grid()
        classify = partial(self.classifier.classify, scratch=self._scratch)

        samples: List[BoundarySample] = []
        for axis in range(3):
            lo = [slice(None)] * 3
            hi = [slice(None)] * 3
            lo[axis] = slice(None, -1)
            hi[axis] = slice(1, None)
            lo_t, hi_t = tuple(lo), tuple(hi)

            a = indices[lo_t]
            b = indices[hi_t]
            edges = mask[lo_t] & mask[hi_t] & (a != b) & ((a != 0) | (b != 0))

            for cell in zip(*np.nonzero(edges)):
                near = tuple(cell)
                far = list(cell)
                far[axis] += 1
                far = tuple(far)

                ia, ib = int(indices[near]), int(indices[far])
                pa = Point.from_array(grid[near])
                pb = Point.from_array(grid[far])
                if ia == 0:
                    ia, ib, pa, pb = ib, ia, pb, pa

                root = find_root(classify, pa, pb, ia, self.tries)
                samples.append(BoundarySample(point=root, inside=ia, outside=ib))

        logger.info(
            "boundary_sampling_complete",
            lattice_points=int(mask.sum()),
            boundary_points=len(samples),
            spacing=self.spacing,
            tries=self.tries,
        )
        return samples

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _lattice_grid(self) -> Tuple[np.ndarray, np.ndarray]:
        if self._grid is None:
            inner, outer = self.shell
            n = int(math.ceil(outer / self.spacing))
            coords = np.arange(-n, n + 1, dtype=np.float64) * self.spacing
            grid = np.stack(np.meshgrid(coords, coords, coords, indexing="ij"), axis=-1)
            radii = np.linalg.norm(grid, axis=-1)
            self._grid = grid
            self._mask = (radii >= inner) & (radii <= outer)
            logger.debug(
                "lattice_built",
                side=len(coords),
                in_shell=int(self._mask.sum()),
            )
        return self._grid, self._mask

    def _classified_grid(self) -> np.ndarray:
        if self._indices is None:
            grid, mask = self._lattice_grid()
            indices = np.zeros(mask.shape, dtype=np.int64)
            for cell in zip(*np.nonzero(mask)):
                indices[cell] = self.classify_point(Point.from_array(grid[cell]))
            self._indices = indices
        return self._indices
