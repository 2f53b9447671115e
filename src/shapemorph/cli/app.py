"""CLI application entry point for shapemorph.

This module provides the main CLI interface using Typer.
"""

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer

from shapemorph import __version__
from shapemorph.cli.output import (
    console,
    print_cubics,
    print_error,
    print_frame_table,
    print_header,
    print_shape_info,
    print_shape_table,
    print_step,
    print_success,
)
from shapemorph.config import (
    LoggingConfig,
    MorphConfig,
    OutputConfig,
    ShapeMorphSettings,
)
from shapemorph.core import Morph, ShapeCache, corner_count
from shapemorph.domain import Corner, Cubic, Edge, RoundedPolygon
from shapemorph.exceptions import ShapeMorphError, ShapeNotFoundError
from shapemorph.utils import MorphLogger, configure_logging

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Create the Typer app
app = typer.Typer(
    name="shapemorph",
    help="Build rounded polygons and sample morphs between them.",
    add_completion=False,
    no_args_is_help=True,
)


@dataclass
class CliState:
    """Per-invocation state shared between the global callback and commands."""

    settings: ShapeMorphSettings
    shapes: ShapeCache
    morph_logger: MorphLogger
    verbose: bool = False
    quiet: bool = False


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Shapemorph[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_options(
    ctx: typer.Context,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Build rounded polygons and sample morphs between them."""
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if log_level.upper() not in LOG_LEVELS:
        print_error(
            f"Invalid log level: {log_level}",
            details=f"Valid values: {', '.join(LOG_LEVELS)}",
        )
        raise typer.Exit(code=1)

    settings = ShapeMorphSettings(
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level.upper(),
        ),
    )
    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )
    ctx.obj = CliState(
        settings=settings,
        shapes=ShapeCache(),
        morph_logger=MorphLogger(logger),
        verbose=verbose,
        quiet=quiet,
    )


def _get_shape(state: CliState, name: str) -> RoundedPolygon:
    shape = state.shapes.get(name)
    state.morph_logger.log_shape_built(name, len(shape.features), len(shape.cubics))
    return shape


def _cubics_bounds(cubics: list[Cubic]) -> tuple[float, float, float, float]:
    """Exact bounding box of a list of cubics."""
    boxes = [c.calculate_bounds(approximate=False) for c in cubics]
    return (
        min(b[0] for b in boxes),
        min(b[1] for b in boxes),
        max(b[2] for b in boxes),
        max(b[3] for b in boxes),
    )


@app.command()
def shapes(ctx: typer.Context) -> None:
    """List the built-in shape presets."""
    state: CliState = ctx.obj
    rows = []
    for name in state.shapes.names():
        shape = _get_shape(state, name)
        rows.append((name, corner_count(shape), len(shape.cubics)))

    if state.quiet:
        for name, _, _ in rows:
            console.print(name)
        return

    print_shape_table(rows)


@app.command()
def inspect(
    ctx: typer.Context,
    name: Annotated[
        str,
        typer.Argument(
            help="Preset shape name (see 'shapemorph shapes')",
            show_default=False,
        ),
    ],
) -> None:
    """Show the feature breakdown and bounds of a preset shape."""
    state: CliState = ctx.obj
    precision = state.settings.output.precision

    try:
        shape = _get_shape(state, name)
    except ShapeNotFoundError as e:
        print_error(str(e), details=f"Available: {', '.join(state.shapes.names())}")
        raise typer.Exit(code=1)

    corners = [f for f in shape.features if isinstance(f, Corner)]
    convex_corners = sum(1 for c in corners if c.convex)
    print_shape_info(
        name=name,
        edges=sum(1 for f in shape.features if isinstance(f, Edge)),
        convex_corners=convex_corners,
        concave_corners=len(corners) - convex_corners,
        cubics=len(shape.cubics),
        center=(shape.center_x, shape.center_y),
        bounds=shape.calculate_bounds(approximate=False),
        precision=precision,
    )

    if state.verbose:
        print_step("Cubics")
        print_cubics(list(shape.cubics), precision)


@app.command()
def morph(
    ctx: typer.Context,
    start: Annotated[
        str,
        typer.Argument(
            help="Start shape name",
            show_default=False,
        ),
    ],
    end: Annotated[
        str,
        typer.Argument(
            help="End shape name",
            show_default=False,
        ),
    ],
    steps: Annotated[
        int,
        typer.Option(
            "--steps",
            "-s",
            help="Number of evenly spaced frames to sample (2-1000)",
            min=2,
            max=1000,
        ),
    ] = 5,
    progress: Annotated[
        float | None,
        typer.Option(
            "--progress",
            "-p",
            help="Print the interpolated cubics at this progress",
        ),
    ] = None,
    segments: Annotated[
        int,
        typer.Option(
            "--segments",
            help="Chords per cubic used for arc length measurement (1-64)",
            min=1,
            max=64,
        ),
    ] = 3,
) -> None:
    """Match two preset shapes and sample the morph between them.

    Example:
        shapemorph morph square circle --steps 5
    """
    state: CliState = ctx.obj
    settings = state.settings.model_copy(
        update={
            "morph": MorphConfig(measure_segments=segments),
            "output": OutputConfig(steps=steps),
        }
    )
    precision = settings.output.precision
    morph_logger = state.morph_logger

    if not state.quiet:
        print_header(__version__)

    morph_logger.start()
    try:
        start_shape = _get_shape(state, start)
        end_shape = _get_shape(state, end)

        if not state.quiet:
            print_step(f"Matching {start} -> {end}")

        t0 = time.perf_counter()
        shape_morph = Morph(start_shape, end_shape, settings.morph.create_measurer())
        morph_logger.log_morph_built(start, end, len(shape_morph), (time.perf_counter() - t0) * 1000)

        if not state.quiet:
            console.print(f"  {len(shape_morph)} pairs")

        rows = []
        for i in range(settings.output.steps):
            frame_progress = i / (settings.output.steps - 1)
            cubics = shape_morph.as_cubics(frame_progress)
            morph_logger.log_frame_sampled(frame_progress, len(cubics))
            rows.append((frame_progress, len(cubics), _cubics_bounds(cubics)))

        if not state.quiet:
            print_step("Frames")
        print_frame_table(rows, precision)

        if progress is not None:
            cubics = shape_morph.as_cubics(progress)
            morph_logger.log_frame_sampled(progress, len(cubics))
            if not state.quiet:
                print_step(f"Cubics at {progress:g}")
            print_cubics(cubics, precision)

    except ShapeNotFoundError as e:
        morph_logger.log_error("morph", e)
        print_error(str(e), details=f"Available: {', '.join(state.shapes.names())}")
        raise typer.Exit(code=1)
    except ShapeMorphError as e:
        morph_logger.log_error("morph", e)
        print_error(str(e))
        raise typer.Exit(code=1)

    morph_logger.finish()
    if not state.quiet:
        print_success(
            f"{morph_logger.stats.frames_sampled} frames sampled"
            f" (morph built in {morph_logger.stats.build_time_ms:.1f} ms)",
            morph_logger.stats.duration_seconds,
        )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
