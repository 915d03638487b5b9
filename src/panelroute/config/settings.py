"""Configuration settings for Panelroute."""

from pathlib import Path

from pydantic import BaseModel, Field


class ArcDetectionConfig(BaseModel):
    """Configuration for recovering arcs from linearized outlines.

    These are tuned heuristics for typical Gerber exports, exposed so the
    boundary behavior can be tuned per run.
    """

    tolerance: float = Field(
        default=0.15,
        gt=0.0,
        le=5.0,
        description="Max radial deviation of a run point from the fitted circle (mm)",
    )
    min_points: int = Field(
        default=5,
        ge=3,
        le=100,
        description="Minimum number of points forming an arc",
    )
    min_radius: float = Field(
        default=0.3,
        ge=0.0,
        description="Smallest accepted arc radius (mm)",
    )
    max_radius: float = Field(
        default=500.0,
        gt=0.0,
        description="Largest accepted arc radius (mm)",
    )
    full_circle_gap: float = Field(
        default=0.1,
        gt=0.0,
        description="Max distance between first and last run point of a closed circle (mm)",
    )
    full_circle_min_points: int = Field(
        default=12,
        ge=3,
        description="A closed run must have more points than this to count as a full circle",
    )


class OffsetConfig(BaseModel):
    """Configuration for tool-radius compensation."""

    min_offset_radius: float = Field(
        default=0.01,
        gt=0.0,
        description="Offset arcs below this radius are dropped (mm)",
    )
    min_segment_length: float = Field(
        default=0.001,
        gt=0.0,
        description="Offset segments shorter than this are dropped (mm)",
    )
    miter_limit: float = Field(
        default=4.0,
        ge=1.0,
        le=100.0,
        description="Max miter distance from the corner, in multiples of the tool radius",
    )


class SubpathConfig(BaseModel):
    """Configuration for extracting routing paths along an outline."""

    max_locate_distance: float = Field(
        default=2.0,
        gt=0.0,
        description="Endpoints further than this from the outline are rejected (mm)",
    )
    arc_endpoint_penalty: float = Field(
        default=0.5,
        ge=0.0,
        description="Distance added when a point falls outside an arc's sweep (mm)",
    )


class NearestArcConfig(BaseModel):
    """Configuration for snapping to outline arcs and panel corner fillets."""

    max_distance: float = Field(
        default=20.0,
        gt=0.0,
        description="Max radial distance from the query point to an arc (mm)",
    )
    duplicate_center_tolerance: float = Field(
        default=0.5,
        ge=0.0,
        description="Detected arcs with a center this close to a known arc are duplicates (mm)",
    )
    duplicate_radius_tolerance: float = Field(
        default=0.5,
        ge=0.0,
        description="Detected arcs with a radius this close to a known arc are duplicates (mm)",
    )
    min_radius: float = Field(
        default=0.1,
        ge=0.0,
        description="Arcs below this radius are ignored (mm)",
    )
    min_points_for_detection: int = Field(
        default=6,
        ge=3,
        description="Outlines with fewer points are not scanned for hidden arcs",
    )


class MousebiteConfig(BaseModel):
    """Configuration for breakaway holes drilled along arcs."""

    hole_diameter: float = Field(
        default=0.5,
        gt=0.0,
        le=5.0,
        description="Drill diameter (mm)",
    )
    hole_spacing: float = Field(
        default=0.8,
        gt=0.0,
        le=10.0,
        description="Center distance between neighbouring holes (mm)",
    )
    arc_length: float = Field(
        default=5.0,
        gt=0.0,
        description="Length of a mousebite placed by clicking near an arc (mm)",
    )
    min_radius: float = Field(
        default=0.1,
        ge=0.0,
        description="Arcs below this radius get no mousebite (mm)",
    )


class RoutingConfig(BaseModel):
    """Configuration for automatic routing contour generation."""

    tool_diameter: float = Field(
        default=2.0,
        gt=0.0,
        le=10.0,
        description="Milling tool diameter (mm)",
    )
    generate_board_outlines: bool = Field(
        default=True,
        description="Generate a contour around every board instance",
    )
    generate_panel_outline: bool = Field(
        default=True,
        description="Generate the outer panel contour",
    )
    clearance: float = Field(
        default=0.0,
        ge=0.0,
        le=10.0,
        description="Additional distance between board edge and cut (mm)",
    )


class SyncConfig(BaseModel):
    """Configuration for master contour synchronization."""

    strict_orientation: bool = Field(
        default=False,
        description="Skip sibling placements whose rotation differs from the master",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class PanelrouteSettings(BaseModel):
    """Main application settings."""

    arc_detection: ArcDetectionConfig = Field(default_factory=ArcDetectionConfig)
    offset: OffsetConfig = Field(default_factory=OffsetConfig)
    subpath: SubpathConfig = Field(default_factory=SubpathConfig)
    nearest_arc: NearestArcConfig = Field(default_factory=NearestArcConfig)
    mousebites: MousebiteConfig = Field(default_factory=MousebiteConfig)
    routing: RoutingConfig = Field(default_factory=RoutingConfig)
    sync: SyncConfig = Field(default_factory=SyncConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> PanelrouteSettings:
    """Get default application settings."""
    return PanelrouteSettings()
