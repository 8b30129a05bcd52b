"""
Sample the Decaminx cut surfaces around the pole cap and summarize them.

Classifies a fine lattice in a thin shell above the ball, refines every
disagreeing lattice edge into a boundary point and reports, per pair of
neighbouring parts, how many boundary points were found and their radius range.
"""

from collections import defaultdict
from pathlib import Path

from decaminx.core.config import load_puzzle_config
from decaminx.core.logging import configure_logging
from decaminx.geometry.classifier import PartClassifier
from decaminx.geometry.sampler import BoundarySampler

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "puzzles" / "decaminx.yaml"


def main():
    configure_logging(level="INFO")

    config = load_puzzle_config(CONFIG_PATH)
    classifier = PartClassifier.from_config(config)
    sampler = BoundarySampler(classifier, spacing=0.5, tries=config.sampling.tries, shell=(21.5, 27.5))

    print("Lattice histogram:")
    for index, count in sampler.part_histogram().items():
        print(f"  {index:>5}: {count}")

    radii = defaultdict(list)
    for sample in sampler.boundary_points():
        radii[(sample.inside, sample.outside)].append(sample.point.length())

    print("Boundaries (inside -> outside):")
    for (inside, outside), values in sorted(radii.items()):
        print(f"  {inside:>5} -> {outside:<5} {len(values):>6} points, r in [{min(values):.3f}, {max(values):.3f}]")


if __name__ == "__main__":
    main()
