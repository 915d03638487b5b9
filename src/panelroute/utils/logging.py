"""Logging utilities for Panelroute."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import structlog


@dataclass
class RoutingStats:
    """Statistics from a routing run."""

    outlines_built: int = 0
    arcs_detected: int = 0
    contours_generated: int = 0
    sync_copies: int = 0
    mousebites_generated: int = 0
    empty_subpaths: int = 0
    skipped_count: int = 0
    skipped: list[tuple[str, str]] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate run duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (auto-generated if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    if log_file is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = Path(f"panelroute_{timestamp}.log")

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(getattr(logging, file_level.upper()))
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("panelroute")
    logger.info("Logging initialized", log_file=str(log_file), level=file_level)

    return logger


class RoutingLogger:
    """Logger for tracking routing progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = RoutingStats()

    def log_outline_built(self, instance_id: str, segment_count: int, arc_count: int) -> None:
        """Log a reconstructed placement outline."""
        self._logger.debug(
            "Outline built",
            instance=instance_id,
            segments=segment_count,
            arcs=arc_count,
        )
        self._stats.outlines_built += 1

    def log_arcs_detected(self, board_id: str, arc_count: int, native: bool) -> None:
        """Log arc detection results for a board."""
        self._logger.debug(
            "Arcs counted",
            board=board_id,
            arcs=arc_count,
            source="native" if native else "detected",
        )
        self._stats.arcs_detected += arc_count

    def log_contour_generated(
        self,
        contour_id: str,
        contour_type: str,
        segment_count: int,
        length: float,
    ) -> None:
        """Log a generated routing contour."""
        self._logger.info(
            "Contour generated",
            contour=contour_id,
            type=contour_type,
            segments=segment_count,
            length_mm=round(length, 3),
        )
        self._stats.contours_generated += 1

    def log_sync(self, master_count: int, copy_count: int, duration_ms: float) -> None:
        """Log a master sync pass."""
        self._logger.info(
            "Master contours synchronized",
            masters=master_count,
            copies=copy_count,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.sync_copies = copy_count

    def log_mousebites_generated(self, board_count: int, corner_count: int) -> None:
        """Log an arc mousebite generation pass."""
        self._logger.info(
            "Arc mousebites generated",
            board_arcs=board_count,
            panel_corners=corner_count,
        )
        self._stats.mousebites_generated = board_count + corner_count

    def log_empty_subpath(self, instance_id: str, reason: str) -> None:
        """Log a subpath query without a usable result."""
        self._logger.debug("Empty subpath", instance=instance_id, reason=reason)
        self._stats.empty_subpaths += 1

    def log_instance_skipped(self, instance_id: str, reason: str) -> None:
        """Log a placement that could not be processed."""
        self._logger.warning("Instance skipped", instance=instance_id, reason=reason)
        self._stats.skipped_count += 1
        self._stats.skipped.append((instance_id, reason))

    @property
    def stats(self) -> RoutingStats:
        """Get current routing statistics."""
        return self._stats
