"""Panelroute - contour geometry for PCB panel routing.

Panelroute rebuilds board outlines (lines and arcs) from drawing commands,
detects arcs hidden in linearized polylines, computes tool-radius compensated
routing paths and keeps manually drawn routing contours in sync across every
placement of the same board design.

Example:
    $ panelroute generate panel.json -o contours.json

This will write the auto-generated routing contours (plus synchronized copies
of the master board's manual contours) for every board in the panel.
"""

__version__ = "0.1.0"
__author__ = "Panelroute Developers"

__all__ = ["__author__", "__version__"]
