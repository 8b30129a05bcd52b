"""
Command-line interface for Decaminx.

Provides commands for classifying points, locating cut boundaries, sampling
the puzzle shell and inspecting configuration.
"""

from pathlib import Path
from typing import Optional

import click
import structlog
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from decaminx import __version__
from decaminx.core.config import PuzzleConfig, load_puzzle_config
from decaminx.core.exceptions import DecaminxError
from decaminx.core.logging import configure_logging, get_logger
from decaminx.geometry.classifier import PartClassifier
from decaminx.geometry.root_finder import find_root
from decaminx.geometry.sampler import BoundarySampler
from decaminx.geometry.vector import Point

console = Console()
logger = get_logger(__name__)

# Negative coordinates are arguments, not options.
COORDINATE_CONTEXT = {"ignore_unknown_options": True}


def _fail(message: str, error: Exception) -> None:
    console.print(f"[red]✗[/red] {message}: {escape(str(error))}")
    raise SystemExit(1)


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Puzzle configuration YAML file",
)
@click.option("--log-level", default="WARNING", help="Minimum log level")
@click.option("--json-logs", is_flag=True, help="Emit JSON log lines")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write JSON log lines to this file",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Optional[Path],
    log_level: str,
    json_logs: bool,
    log_file: Optional[Path],
) -> None:
    """Decaminx - part classification for a ten-axis twisty puzzle."""
    configure_logging(
        level=log_level,
        json_output=json_logs,
        log_file=str(log_file) if log_file else None,
    )
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(command=ctx.invoked_subcommand)
    ctx.ensure_object(dict)
    try:
        config = load_puzzle_config(config_path) if config_path else PuzzleConfig()
    except DecaminxError as e:
        _fail("Failed to load configuration", e)
    ctx.obj["config"] = config
    ctx.obj["classifier"] = PartClassifier.from_config(config)


# =============================================================================
# Classification Commands
# =============================================================================


@main.command("classify", context_settings=COORDINATE_CONTEXT)
@click.argument("x", type=float)
@click.argument("y", type=float)
@click.argument("z", type=float)
@click.pass_context
def classify(ctx: click.Context, x: float, y: float, z: float) -> None:
    """Print the part index of the point X Y Z."""
    classifier: PartClassifier = ctx.obj["classifier"]
    result = classifier.resolve(Point(x, y, z))
    console.print(f"{result.index} ({result.kind.value})")


@main.command("boundary", context_settings=COORDINATE_CONTEXT)
@click.argument("coords", nargs=6, type=float)
@click.option("--tries", "-t", type=int, default=None, help="Bisection midpoints")
@click.pass_context
def boundary(ctx: click.Context, coords: tuple, tries: Optional[int]) -> None:
    """Locate the cut surface between X1 Y1 Z1 and X2 Y2 Z2."""
    classifier: PartClassifier = ctx.obj["classifier"]
    config: PuzzleConfig = ctx.obj["config"]
    pos1 = Point(*coords[:3])
    pos2 = Point(*coords[3:])

    target = classifier.classify(pos1)
    other = classifier.classify(pos2)
    if target == other:
        console.print(
            f"[red]✗[/red] Both endpoints classify as {target}; no boundary to find"
        )
        raise SystemExit(1)

    try:
        root = find_root(
            classifier.classify, pos1, pos2, target, tries or config.sampling.tries
        )
    except ValueError as e:
        _fail("Boundary search failed", e)

    console.print(f"{root.x:.6f} {root.y:.6f} {root.z:.6f}")
    logger.info("boundary_found", inside=target, outside=other, point=tuple(root))


@main.command("sample")
@click.option("--spacing", "-s", type=float, default=None, help="Lattice pitch")
@click.pass_context
def sample(ctx: click.Context, spacing: Optional[float]) -> None:
    """Sample the puzzle shell and summarize parts and boundaries."""
    classifier: PartClassifier = ctx.obj["classifier"]
    config: PuzzleConfig = ctx.obj["config"]

    try:
        sampler = BoundarySampler(
            classifier,
            spacing=spacing or config.sampling.spacing,
            tries=config.sampling.tries,
        )
    except ValueError as e:
        _fail("Invalid sampling parameters", e)

    histogram = sampler.part_histogram()
    boundary_points = sampler.boundary_points()

    table = Table(title=f"Parts ({config.name})")
    table.add_column("Index", style="cyan")
    table.add_column("Lattice points")
    for index, count in histogram.items():
        table.add_row("void" if index == 0 else str(index), str(count))
    console.print(table)
    console.print(f"Boundary points: {len(boundary_points)}")


# =============================================================================
# Configuration Commands
# =============================================================================


@main.group()
def config() -> None:
    """Configuration commands."""
    pass


@config.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show the effective puzzle configuration."""
    puzzle: PuzzleConfig = ctx.obj["config"]
    classifier: PartClassifier = ctx.obj["classifier"]

    table = Table(title=f"Puzzle: {puzzle.name}")
    table.add_column("Property", style="cyan")
    table.add_column("Value")

    table.add_row("Ball radius", f"{puzzle.ball_radius:g}")
    table.add_row("Min angle", f"{puzzle.min_angle:g}")
    table.add_row("Max angle", f"{puzzle.max_angle:g}")
    table.add_row("Split cos", f"{classifier.axis_model.split_cos:.6f}")
    table.add_row("Split2 cos", f"{classifier.axis_model.split2_cos:.6f}")
    table.add_row("Deep interior", "on" if puzzle.deep_interior_enabled else "off")
    table.add_row("Corner rounding k", f"{puzzle.corner_rounding_k:g}")
    table.add_row("Sampling spacing", f"{puzzle.sampling.spacing:g}")
    table.add_row("Sampling tries", str(puzzle.sampling.tries))

    console.print(table)


if __name__ == "__main__":
    main()
