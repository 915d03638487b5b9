"""Utility functions for panelroute.

This module provides utility functions including:

- Logging setup and configuration
- Routing progress and statistics tracking
"""

from panelroute.utils.logging import (
    RoutingLogger,
    RoutingStats,
    configure_logging,
)

__all__ = [
    "RoutingLogger",
    "RoutingStats",
    "configure_logging",
]
