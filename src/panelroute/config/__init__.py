"""Configuration management for panelroute.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- ArcDetectionConfig: Arc recovery heuristics
- OffsetConfig: Tool-radius compensation limits
- SubpathConfig: Outline endpoint location settings
- NearestArcConfig: Arc snapping settings
- MousebiteConfig: Arc mousebite hole settings
- RoutingConfig: Automatic contour generation settings
- SyncConfig: Master contour synchronization settings
- LoggingConfig: Logging settings
- PanelrouteSettings: Main application settings
"""

from panelroute.config.settings import (
    ArcDetectionConfig,
    LoggingConfig,
    MousebiteConfig,
    NearestArcConfig,
    OffsetConfig,
    PanelrouteSettings,
    RoutingConfig,
    SubpathConfig,
    SyncConfig,
    get_default_settings,
)

__all__ = [
    "ArcDetectionConfig",
    "LoggingConfig",
    "MousebiteConfig",
    "NearestArcConfig",
    "OffsetConfig",
    "PanelrouteSettings",
    "RoutingConfig",
    "SubpathConfig",
    "SyncConfig",
    "get_default_settings",
]
