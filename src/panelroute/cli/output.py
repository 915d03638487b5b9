"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""

import math
from collections.abc import Sequence

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from panelroute.domain import DetectedArc, FreeMousebite, PathSegment, RoutingSegment

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for the routing steps.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  {task.description}"),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Panelroute[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_panel_info(
    document_path: str, width: float, height: float, boards: int, instances: int
) -> None:
    """Print panel information.

    Args:
        document_path: Path to the panel document
        width: Panel width in mm
        height: Panel height in mm
        boards: Number of board designs
        instances: Number of placements
    """
    line = Text("  ")
    line.append(document_path)
    console.print(line)
    console.print(
        f"  {width:g} × {height:g} mm {SYM_DOT} {boards} boards {SYM_DOT} {instances} placements"
    )


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


def _segment_row(index: int, segment: PathSegment | RoutingSegment) -> list[str]:
    row = [
        str(index),
        "arc" if segment.arc is not None else "line",
        f"({segment.start.x:.3f}, {segment.start.y:.3f})",
        f"({segment.end.x:.3f}, {segment.end.y:.3f})",
        f"{segment.length:.3f}",
    ]
    if segment.arc is not None:
        direction = "cw" if segment.arc.clockwise else "ccw"
        row.append(
            f"c=({segment.arc.center.x:.3f}, {segment.arc.center.y:.3f}) "
            f"r={segment.arc.radius:.3f} {direction}"
        )
    else:
        row.append("")
    return row


def print_segments(title: str, segments: Sequence[PathSegment | RoutingSegment]) -> None:
    """Print a table of line/arc segments.

    Args:
        title: Table title
        segments: Segments to list
    """
    table = Table(title=title, show_lines=False)
    table.add_column("#", justify="right")
    table.add_column("Type")
    table.add_column("Start")
    table.add_column("End")
    table.add_column("Length", justify="right")
    table.add_column("Arc")

    for index, segment in enumerate(segments):
        table.add_row(*_segment_row(index, segment))

    console.print(table)
    total = sum(seg.length for seg in segments)
    console.print(f"  {len(segments)} segments {SYM_DOT} {total:.3f} mm")


def print_detected_arcs(board_id: str, arcs: Sequence[DetectedArc]) -> None:
    """Print arcs recovered from a board's linearized outline.

    Args:
        board_id: Board the arcs belong to
        arcs: Detected arcs in board-local coordinates
    """
    console.print(f"  [bold]{board_id}[/bold]: {len(arcs)} detected arcs")
    for arc in arcs:
        sweep = "full circle" if arc.is_full_circle else f"{math.degrees(arc.sweep):.1f}°"
        console.print(
            f"    c=({arc.center.x:.3f}, {arc.center.y:.3f}) r={arc.radius:.3f} {SYM_DOT} {sweep}"
        )


def print_mousebites(mousebites: Sequence[FreeMousebite]) -> None:
    """Print a table of arc mousebites in panel coordinates."""
    table = Table(title="Arc mousebites", show_lines=False)
    table.add_column("Owner")
    table.add_column("Center")
    table.add_column("Radius", justify="right")
    table.add_column("Span")
    table.add_column("Holes", justify="right")

    for mousebite in mousebites:
        table.add_row(
            mousebite.board_instance_id or "panel corner",
            f"({mousebite.arc_center.x:.3f}, {mousebite.arc_center.y:.3f})",
            f"{mousebite.arc_radius:.3f}",
            f"{math.degrees(mousebite.arc_start_angle):.1f}° to "
            f"{math.degrees(mousebite.arc_end_angle):.1f}°",
            str(len(mousebite.hole_centers())),
        )

    console.print(table)
    console.print(f"  {len(mousebites)} mousebites")


def print_success(
    output_path: str,
    total_time_s: float,
    outlines: int,
    contours: int,
    sync_copies: int,
    skipped: int,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        total_time_s: Total processing time in seconds
        outlines: Number of outlines built
        contours: Number of contours generated
        sync_copies: Number of sync copies produced
        skipped: Number of skipped placements
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    line = Text("  ")
    line.append(output_path, style="bold")
    console.print(line)

    skipped_style = "yellow" if skipped > 0 else "green"
    console.print(
        f"  {outlines} outlines {SYM_DOT} {contours} contours {SYM_DOT} "
        f"{sync_copies} sync copies {SYM_DOT} "
        f"[{skipped_style}]{skipped} skipped[/{skipped_style}]"
    )


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
