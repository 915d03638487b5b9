"""Routing workflow orchestration.

This module ties the pure geometry functions to documents, configuration
and logging. The geometry modules never log; everything observable about
a run is reported here through RoutingLogger.

Key components:
- RoutingProcessor: Main orchestrator for panel routing runs
"""

import time
from collections.abc import Callable
from pathlib import Path

from panelroute.config import PanelrouteSettings
from panelroute.core.arc_detector import count_arcs_in_board, extract_outline_data
from panelroute.core.contours import auto_generate_contours
from panelroute.core.mousebites import auto_generate_arc_mousebites, mousebite_at_nearest_arc
from panelroute.core.nearest_arc import NearestArcResult, find_nearest_arc_at_point
from panelroute.core.offset import offset_outline
from panelroute.core.outline import build_outline_segments
from panelroute.core.subpath import Subpath, get_outline_subpath
from panelroute.core.sync import sync_master_contours
from panelroute.domain import (
    CreationMethod,
    OutlineDirection,
    FreeMousebite,
    Panel,
    PathSegment,
    Point,
    RoutingContour,
    RoutingSegment,
)
from panelroute.exceptions import BoardNotFoundError, InstanceNotFoundError
from panelroute.io import ContourWriter, PanelReader
from panelroute.utils import RoutingLogger, RoutingStats, configure_logging


class RoutingProcessor:
    """Orchestrates routing contour generation for a panel.

    Manages the complete workflow:
    1. Load the panel document
    2. Build every placement's outline and count its arcs
    3. Auto-generate board and panel contours
    4. Synchronize master contours onto sibling placements
    5. Save the routed document

    Example:
        settings = PanelrouteSettings()
        processor = RoutingProcessor(settings)
        stats = processor.process(
            document_path=Path("panel.json"),
            output_path=Path("panel-routed.json"),
        )
    """

    def __init__(self, config: PanelrouteSettings, quiet: bool = False) -> None:
        """Initialize routing processor with configuration.

        Args:
            config: Panelroute settings
            quiet: Suppress console log output
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=quiet,
        )
        self.routing_logger = RoutingLogger(self.logger)

    @property
    def stats(self) -> RoutingStats:
        return self.routing_logger.stats

    def build_outline(self, panel: Panel, instance_id: str) -> list[PathSegment]:
        """Outline of one placement in panel coordinates.

        Raises:
            InstanceNotFoundError: If the placement does not exist
            BoardNotFoundError: If its board does not exist
        """
        instance = panel.get_instance(instance_id)
        if instance is None:
            raise InstanceNotFoundError(instance_id)
        board = panel.get_board(instance.board_id)
        if board is None:
            raise BoardNotFoundError(instance.board_id)

        outline = build_outline_segments(board, instance)
        self.routing_logger.log_outline_built(
            instance.id, len(outline), sum(1 for seg in outline if seg.is_arc)
        )
        return outline

    def build_outlines(self, panel: Panel) -> dict[str, list[PathSegment]]:
        """Outlines of every placement, keyed by instance id.

        Placements of unknown boards are skipped and logged.
        """
        outlines: dict[str, list[PathSegment]] = {}
        for instance in panel.instances:
            if panel.get_board(instance.board_id) is None:
                self.routing_logger.log_instance_skipped(
                    instance.id, f"unknown board '{instance.board_id}'"
                )
                continue
            outlines[instance.id] = self.build_outline(panel, instance.id)
        return outlines

    def count_arcs(self, panel: Panel) -> dict[str, int]:
        """Arc count per board (native arcs, else detected arcs)."""
        detection = self.config.arc_detection
        counts: dict[str, int] = {}
        for board in panel.boards:
            _, native_arcs = extract_outline_data(board)
            counts[board.id] = count_arcs_in_board(
                board,
                tolerance=detection.tolerance,
                min_points=detection.min_points,
                min_radius=detection.min_radius,
            )
            self.routing_logger.log_arcs_detected(board.id, counts[board.id], bool(native_arcs))
        return counts

    def offset_instance(
        self, panel: Panel, instance_id: str, flip: bool = False
    ) -> list[RoutingSegment]:
        """Tool-compensated closed contour around one placement."""
        offset = self.config.offset
        return offset_outline(
            self.build_outline(panel, instance_id),
            self.config.routing.tool_diameter / 2,
            flip=flip,
            min_offset_radius=offset.min_offset_radius,
            min_segment_length=offset.min_segment_length,
            miter_limit=offset.miter_limit,
        )

    def subpath(
        self,
        panel: Panel,
        instance_id: str,
        from_point: Point,
        to_point: Point,
        force_direction: OutlineDirection | None = None,
        flip: bool = False,
    ) -> Subpath:
        """Tool-compensated path between two points on a placement's outline."""
        offset = self.config.offset
        result = get_outline_subpath(
            self.build_outline(panel, instance_id),
            from_point,
            to_point,
            self.config.routing.tool_diameter / 2,
            force_direction=force_direction,
            flip_offset=flip,
            max_locate_distance=self.config.subpath.max_locate_distance,
            arc_endpoint_penalty=self.config.subpath.arc_endpoint_penalty,
            min_offset_radius=offset.min_offset_radius,
            min_segment_length=offset.min_segment_length,
            miter_limit=offset.miter_limit,
        )
        if result.is_empty:
            self.routing_logger.log_empty_subpath(instance_id, "no usable path between points")
        return result

    def nearest_arc(self, panel: Panel, query: Point) -> NearestArcResult | None:
        """Closest snapping arc to a query point."""
        nearest = self.config.nearest_arc
        return find_nearest_arc_at_point(
            panel,
            query,
            max_distance=nearest.max_distance,
            duplicate_center_tolerance=nearest.duplicate_center_tolerance,
            duplicate_radius_tolerance=nearest.duplicate_radius_tolerance,
            min_radius=nearest.min_radius,
            min_points_for_detection=nearest.min_points_for_detection,
        )

    def generate_mousebites(self, panel: Panel) -> list[FreeMousebite]:
        """Replace the panel's arc mousebites with one per rounded corner."""
        mousebites = auto_generate_arc_mousebites(
            panel, self.config.mousebites, self.config.arc_detection
        )
        corners = sum(1 for m in mousebites if m.board_instance_id is None)
        self.routing_logger.log_mousebites_generated(len(mousebites) - corners, corners)
        panel.free_mousebites = mousebites
        return mousebites

    def mousebite_at(self, panel: Panel, query: Point) -> FreeMousebite | None:
        """Mousebite centered on the arc nearest to a query point, if any."""
        nearest = self.nearest_arc(panel, query)
        if nearest is None:
            return None
        return mousebite_at_nearest_arc(nearest, self.config.mousebites)

    def sync(self, panel: Panel) -> list[RoutingContour]:
        """Recompute sync copies for the panel's contours."""
        start = time.time()
        contours = sync_master_contours(
            panel.instances,
            panel.routing_contours,
            strict_orientation=self.config.sync.strict_orientation,
        )
        masters = {c.master_contour_id for c in contours if c.is_sync_copy}
        copies = sum(1 for c in contours if c.is_sync_copy)
        self.routing_logger.log_sync(len(masters), copies, (time.time() - start) * 1000)
        return contours

    def generate(self, panel: Panel) -> list[RoutingContour]:
        """Regenerate auto contours and resynchronize manual ones."""
        contours = auto_generate_contours(panel, self.config.routing)
        for contour in contours:
            if contour.creation_method != CreationMethod.AUTO:
                continue
            self.routing_logger.log_contour_generated(
                contour.id, contour.contour_type.value, len(contour.segments), contour.length
            )
        panel.routing_contours = contours
        return self.sync(panel)

    def process(
        self,
        document_path: Path,
        output_path: Path | None = None,
        progress_callback: Callable[[str], None] | None = None,
    ) -> RoutingStats:
        """Run the complete routing workflow on a panel document.

        Args:
            document_path: Path to the panel document
            output_path: Path for the routed document (auto-generated if None)
            progress_callback: Optional callback(step_name) for progress updates

        Returns:
            RoutingStats with counts and timing

        Raises:
            DocumentLoadError: If the document cannot be read
            DocumentFormatError: If the document is malformed
            DocumentSaveError: If the output cannot be written
        """
        stats = self.routing_logger.stats
        stats.start_time = time.time()

        if output_path is None:
            output_path = ContourWriter.get_routed_path(document_path)

        self.logger.info(
            "Starting routing run",
            input=str(document_path),
            output=str(output_path),
        )

        def step(name: str) -> None:
            if progress_callback is not None:
                progress_callback(name)

        step("load")
        panel = PanelReader(document_path).load()
        self.logger.info(
            "Panel loaded",
            boards=len(panel.boards),
            instances=len(panel.instances),
            contours=len(panel.routing_contours),
        )

        step("outlines")
        self.build_outlines(panel)

        step("arcs")
        self.count_arcs(panel)

        step("contours")
        contours = self.generate(panel)

        step("save")
        ContourWriter(output_path).save(contours, panel=panel)

        stats.end_time = time.time()
        self.logger.info(
            "Routing complete",
            outlines=stats.outlines_built,
            contours=stats.contours_generated,
            sync_copies=stats.sync_copies,
            skipped=stats.skipped_count,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return stats
