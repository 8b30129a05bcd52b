"""
Bisection search for the surface between two differently classified points.

The iteration count is fixed rather than tolerance based. Each step halves
the bracket no matter how the classification behaves inside it, so both the
cost and the error bound are known up front.
"""

from typing import Callable, Iterator, Tuple

from decaminx.geometry.vector import Point

ClassifyFn = Callable[[Point], int]


def bisect_brackets(
    classify: ClassifyFn,
    pos1: Point,
    pos2: Point,
    target: int,
    steps: int,
) -> Iterator[Tuple[Point, Point]]:
    """
    Yield the bracket ``(pos1, pos2)`` before and after each bisection step.

    ``pos1`` always classifies as ``target`` (the start is assumed to) and
    ``pos2`` never does.
    """
    yield pos1, pos2
    for _ in range(steps):
        mid = (pos1 + pos2).scale(0.5)
        if classify(mid) == target:
            pos1 = mid
        else:
            pos2 = mid
        yield pos1, pos2


def find_root(
    classify: ClassifyFn,
    pos1: Point,
    pos2: Point,
    target: int,
    tries: int,
) -> Point:
    """
    Locate the classification boundary between two points.

    Args:
        classify: Point classifier, e.g. ``PartClassifier.classify``
        pos1: Endpoint that classifies as ``target``
        pos2: Endpoint that does not
        target: Part index on the ``pos1`` side
        tries: Number of midpoints formed; the last one is returned without
            being classified, so ``tries - 1`` classifications are made

    Returns:
        Midpoint of the final bracket, within ``|pos1 - pos2| / 2**tries``
        of a crossing

    Raises:
        ValueError: If ``tries`` is less than 1
    """
    if tries < 1:
        raise ValueError(f"tries must be at least 1, got {tries}")

    for pos1, pos2 in bisect_brackets(classify, pos1, pos2, target, tries - 1):
        pass
    return (pos1 + pos2).scale(0.5)
