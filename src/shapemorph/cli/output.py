"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from shapemorph.domain import Cubic

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info

Bounds = tuple[float, float, float, float]


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def format_bounds(bounds: Bounds, precision: int) -> str:
    """Format a (left, top, right, bottom) box."""
    return ", ".join(f"{v:.{precision}f}" for v in bounds)


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Shapemorph[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_shape_table(rows: list[tuple[str, int, int]]) -> None:
    """Print the preset listing.

    Args:
        rows: (name, corner count, cubic count) per shape
    """
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Shape")
    table.add_column("Corners", justify="right")
    table.add_column("Cubics", justify="right")
    for name, corners, cubics in rows:
        table.add_row(name, str(corners), str(cubics))
    console.print(table)


def print_shape_info(
    name: str,
    edges: int,
    convex_corners: int,
    concave_corners: int,
    cubics: int,
    center: tuple[float, float],
    bounds: Bounds,
    precision: int,
) -> None:
    """Print a single shape's outline summary.

    Args:
        name: Shape name
        edges: Number of edge features
        convex_corners: Number of convex corner features
        concave_corners: Number of concave corner features
        cubics: Number of cubics in the closed outline
        center: Shape center
        bounds: Exact bounding box
        precision: Decimal places for coordinates
    """
    line = Text("  ")
    line.append(name, style="bold")
    console.print(line)
    console.print(
        f"  {edges} edges {SYM_DOT} {convex_corners} convex corners {SYM_DOT} "
        f"{concave_corners} concave corners"
    )
    console.print(f"  {cubics} cubics")
    console.print(f"  Center  {center[0]:.{precision}f}, {center[1]:.{precision}f}")
    console.print(f"  Bounds  {format_bounds(bounds, precision)}")


def print_frame_table(rows: list[tuple[float, int, Bounds]], precision: int) -> None:
    """Print sampled morph frames.

    Args:
        rows: (progress, cubic count, bounds) per frame
        precision: Decimal places for coordinates
    """
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Progress", justify="right")
    table.add_column("Cubics", justify="right")
    table.add_column("Bounds")
    for progress, count, bounds in rows:
        table.add_row(f"{progress:.3f}", str(count), format_bounds(bounds, precision))
    console.print(table)


def print_cubics(cubics: list[Cubic], precision: int) -> None:
    """Print the eight coordinates of each cubic, one per line."""
    for i, cubic in enumerate(cubics):
        coords = " ".join(f"{v:.{precision}f}" for v in cubic.points)
        console.print(f"  {i:>3}  {coords}", soft_wrap=True)


def print_success(message: str, total_time_s: float) -> None:
    """Print success message with elapsed time."""
    console.print(f"\n[bold green]{SYM_OK} {message}[/bold green] in {_format_time(total_time_s)}")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
