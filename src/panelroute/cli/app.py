"""CLI application entry point for panelroute.

This module provides the main CLI interface using Typer.
"""

import math
from pathlib import Path
from typing import Annotated

import typer

from panelroute import __version__
from panelroute.cli.output import (
    SYM_DOT,
    SYM_OK,
    console,
    create_progress,
    print_detected_arcs,
    print_error,
    print_header,
    print_mousebites,
    print_panel_info,
    print_segments,
    print_step,
    print_success,
)
from panelroute.config import (
    LoggingConfig,
    MousebiteConfig,
    PanelrouteSettings,
    RoutingConfig,
    SyncConfig,
)
from panelroute.core import (
    RoutingProcessor,
    build_outline_segments,
    count_arcs_in_board,
    detect_arcs_from_points,
    extract_outline_data,
    find_nearest_arc_at_point,
    get_outline_subpath,
    offset_outline,
    sync_master_contours,
)
from panelroute.domain import Board, BoardInstance, OutlineDirection, Panel, Point
from panelroute.exceptions import DocumentError, PanelrouteError
from panelroute.io import ContourWriter, PanelReader

# Create the Typer app
app = typer.Typer(
    name="panelroute",
    help="Compute CNC routing contours for PCB production panels.",
    add_completion=False,
    no_args_is_help=True,
)

DocumentArg = Annotated[
    Path,
    typer.Argument(help="Path to the panel document (JSON)", show_default=False),
]
InstanceOpt = Annotated[
    str,
    typer.Option("--instance", "-i", help="Board instance id", show_default=False),
]
ToolDiameterOpt = Annotated[
    float,
    typer.Option(
        "--tool-diameter",
        "-d",
        help="Milling tool diameter in mm",
        min=0.0,
        max=10.0,
    ),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Panelroute[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
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
    """Compute CNC routing contours for PCB production panels."""


def parse_point(value: str) -> Point:
    """Parse an "x,y" command-line value into a Point."""
    parts = value.split(",")
    if len(parts) != 2:
        raise typer.BadParameter(f"Expected X,Y but got '{value}'")
    try:
        return Point(float(parts[0]), float(parts[1]))
    except ValueError:
        raise typer.BadParameter(f"Expected numeric X,Y but got '{value}'") from None


def _load_panel(document: Path) -> Panel:
    try:
        return PanelReader(document).load()
    except DocumentError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None


def _placement(panel: Panel, instance_id: str) -> tuple[Board, BoardInstance]:
    instance = panel.get_instance(instance_id)
    if instance is None:
        print_error(f"Board instance '{instance_id}' not found in panel")
        raise typer.Exit(code=1)
    board = panel.get_board(instance.board_id)
    if board is None:
        print_error(f"Board '{instance.board_id}' not found in panel")
        raise typer.Exit(code=1)
    return board, instance


@app.command()
def outline(document: DocumentArg, instance: InstanceOpt) -> None:
    """Print a placement's outline in panel coordinates."""
    panel = _load_panel(document)
    board, placement = _placement(panel, instance)
    segments = build_outline_segments(board, placement)
    print_segments(f"Outline of {placement.id} ({board.name or board.id})", segments)


@app.command()
def arcs(
    document: DocumentArg,
    board_id: Annotated[
        str | None,
        typer.Option("--board", "-b", help="Only inspect this board"),
    ] = None,
    tolerance: Annotated[
        float,
        typer.Option("--tolerance", help="Max radial deviation in mm", min=0.001),
    ] = 0.15,
    min_points: Annotated[
        int,
        typer.Option("--min-points", help="Minimum points per arc", min=3),
    ] = 5,
    min_radius: Annotated[
        float,
        typer.Option("--min-radius", help="Minimum arc radius in mm", min=0.0),
    ] = 0.3,
) -> None:
    """Count native arcs and detect arcs hidden in linearized outlines."""
    panel = _load_panel(document)
    boards = panel.boards
    if board_id is not None:
        boards = [b for b in panel.boards if b.id == board_id]
        if not boards:
            print_error(f"Board '{board_id}' not found in panel")
            raise typer.Exit(code=1)

    for board in boards:
        points, native_arcs = extract_outline_data(board)
        count = count_arcs_in_board(
            board, tolerance=tolerance, min_points=min_points, min_radius=min_radius
        )
        source = "native" if native_arcs else "detected"
        console.print(f"\n[bold]{board.id}[/bold] {SYM_DOT} {count} arcs ({source})")
        if not native_arcs:
            detected = detect_arcs_from_points(
                points, tolerance=tolerance, min_points=min_points, min_radius=min_radius
            )
            print_detected_arcs(board.id, detected)


@app.command()
def offset(
    document: DocumentArg,
    instance: InstanceOpt,
    tool_diameter: ToolDiameterOpt = 2.0,
    flip: Annotated[
        bool,
        typer.Option("--flip", help="Offset to the inner side of the outline"),
    ] = False,
) -> None:
    """Print the tool-compensated contour around a placement."""
    panel = _load_panel(document)
    board, placement = _placement(panel, instance)
    segments = offset_outline(
        build_outline_segments(board, placement), tool_diameter / 2, flip=flip
    )
    print_segments(f"Offset contour of {placement.id} (tool {tool_diameter:g} mm)", segments)


@app.command()
def subpath(
    document: DocumentArg,
    instance: InstanceOpt,
    from_point: Annotated[
        str,
        typer.Option("--from", help="Start point as X,Y", show_default=False),
    ],
    to_point: Annotated[
        str,
        typer.Option("--to", help="End point as X,Y", show_default=False),
    ],
    tool_diameter: ToolDiameterOpt = 2.0,
    direction: Annotated[
        OutlineDirection | None,
        typer.Option("--direction", help="Force the travel direction"),
    ] = None,
    flip: Annotated[
        bool,
        typer.Option("--flip", help="Offset to the inner side of the outline"),
    ] = False,
) -> None:
    """Print the offset path along a placement's outline between two points."""
    start = parse_point(from_point)
    end = parse_point(to_point)

    panel = _load_panel(document)
    board, placement = _placement(panel, instance)
    result = get_outline_subpath(
        build_outline_segments(board, placement),
        start,
        end,
        tool_diameter / 2,
        force_direction=direction,
        flip_offset=flip,
    )

    if result.is_empty:
        console.print("No usable path between these points")
        return

    print_segments(f"Subpath ({result.direction.value})", result.segments)


@app.command("nearest-arc")
def nearest_arc(
    document: DocumentArg,
    at: Annotated[
        str,
        typer.Option("--at", help="Query point as X,Y", show_default=False),
    ],
    max_distance: Annotated[
        float,
        typer.Option("--max-distance", help="Search radius in mm", min=0.0),
    ] = 20.0,
) -> None:
    """Find the board or panel-corner arc nearest to a point."""
    query = parse_point(at)
    panel = _load_panel(document)
    result = find_nearest_arc_at_point(panel, query, max_distance=max_distance)

    if result is None:
        console.print("No arc near this point")
        return

    owner = result.instance_id or "panel corner"
    console.print(
        f"[bold]{owner}[/bold] {SYM_DOT} center=({result.center.x:.3f}, {result.center.y:.3f}) "
        f"r={result.radius:.3f} {SYM_DOT} angle={math.degrees(result.click_angle):.1f}° "
        f"{SYM_DOT} distance={result.distance:.3f}"
    )


@app.command()
def generate(
    document: DocumentArg,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}-routed.json)",
        ),
    ] = None,
    tool_diameter: ToolDiameterOpt = 2.0,
    clearance: Annotated[
        float,
        typer.Option("--clearance", help="Extra distance from board edge in mm", min=0.0),
    ] = 0.0,
    board_outlines: Annotated[
        bool,
        typer.Option("--board-outlines/--no-board-outlines", help="Route around boards"),
    ] = True,
    panel_outline: Annotated[
        bool,
        typer.Option("--panel-outline/--no-panel-outline", help="Route the panel frame"),
    ] = True,
    strict_orientation: Annotated[
        bool,
        typer.Option(
            "--strict-orientation",
            help="Do not sync onto placements rotated differently from the master",
        ),
    ] = False,
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
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
) -> None:
    """Generate routing contours for a panel and write the routed document.

    Auto contours are regenerated around every placement (interrupted at
    tabs) and around the panel frame. Manual contours are kept and their
    sync copies refreshed.

    Example:
        panelroute generate panel.json -d 2.4
    """
    if not document.is_file():
        print_error(
            f"Input file not found: {document}",
            details=f"The file '{document}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)

    settings = PanelrouteSettings(
        routing=RoutingConfig(
            tool_diameter=tool_diameter,
            clearance=clearance,
            generate_board_outlines=board_outlines,
            generate_panel_outline=panel_outline,
        ),
        sync=SyncConfig(strict_orientation=strict_orientation),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "WARNING",
        ),
    )

    output_path = output or ContourWriter.get_routed_path(document)

    try:
        if not quiet:
            print_step("Loading panel")
            panel = _load_panel(document)
            print_panel_info(
                str(document), panel.width, panel.height, len(panel.boards), len(panel.instances)
            )
            print_step("Routing")

        processor = RoutingProcessor(settings, quiet=quiet)

        if not quiet:
            steps = ["load", "outlines", "arcs", "contours", "save"]
            with create_progress() as progress:
                task_id = progress.add_task("Routing", total=len(steps))

                def update_progress(step: str) -> None:
                    progress.update(task_id, completed=steps.index(step) + 1, description=step)

                stats = processor.process(document, output_path, progress_callback=update_progress)

            print_success(
                output_path=str(output_path),
                total_time_s=stats.duration_seconds,
                outlines=stats.outlines_built,
                contours=stats.contours_generated,
                sync_copies=stats.sync_copies,
                skipped=stats.skipped_count,
            )
        else:
            processor.process(document, output_path)

    except PanelrouteError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None


@app.command()
def sync(
    document: DocumentArg,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}-routed.json)",
        ),
    ] = None,
    strict_orientation: Annotated[
        bool,
        typer.Option(
            "--strict-orientation",
            help="Do not sync onto placements rotated differently from the master",
        ),
    ] = False,
) -> None:
    """Refresh the sync copies of every master contour in a panel document."""
    panel = _load_panel(document)
    contours = sync_master_contours(
        panel.instances, panel.routing_contours, strict_orientation=strict_orientation
    )
    output_path = output or ContourWriter.get_routed_path(document)

    try:
        ContourWriter(output_path).save(contours, panel=panel)
    except PanelrouteError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    copies = sum(1 for c in contours if c.is_sync_copy)
    console.print(f"[bold green]{SYM_OK}[/bold green] {copies} sync copies {SYM_DOT} {output_path}")


@app.command()
def mousebites(
    document: DocumentArg,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}-routed.json)",
        ),
    ] = None,
    hole_diameter: Annotated[
        float,
        typer.Option("--hole-diameter", help="Drill diameter in mm", min=0.01, max=5.0),
    ] = 0.5,
    hole_spacing: Annotated[
        float,
        typer.Option("--hole-spacing", help="Hole center distance in mm", min=0.01, max=10.0),
    ] = 0.8,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
) -> None:
    """Drill breakaway holes along every rounded board and panel corner.

    Replaces the document's arc mousebites and writes the result.

    Example:
        panelroute mousebites panel.json --hole-spacing 1.0
    """
    panel = _load_panel(document)

    settings = PanelrouteSettings(
        mousebites=MousebiteConfig(hole_diameter=hole_diameter, hole_spacing=hole_spacing),
        logging=LoggingConfig(log_file=log_file),
    )

    output_path = output or ContourWriter.get_routed_path(document)

    try:
        processor = RoutingProcessor(settings, quiet=True)
        processor.generate_mousebites(panel)
        ContourWriter(output_path).save(panel.routing_contours, panel=panel)
    except PanelrouteError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    print_mousebites(panel.free_mousebites)
    console.print(f"[bold green]{SYM_OK}[/bold green] {output_path}")


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
