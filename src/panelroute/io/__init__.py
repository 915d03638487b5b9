"""Document I/O layer for panelroute.

This module handles reading panel documents and writing routing output.
It keeps file handling out of the pure geometry core.

Key classes:
- PanelReader: Load a panel document into domain models
- ContourWriter: Save routing contours
"""

from panelroute.io.reader import PanelReader
from panelroute.io.writer import ContourWriter

__all__ = [
    "ContourWriter",
    "PanelReader",
]
