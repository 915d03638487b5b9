"""Routing output writer.

This module provides the ContourWriter class for saving routing contours,
either alone or together with the panel they belong to.
"""

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from panelroute.domain import Panel, RoutingContour
from panelroute.exceptions import DocumentSaveError


class ContourWriter:
    """Writes routing contours as JSON.

    Example:
        writer = ContourWriter(Path("panel-routed.json"))
        writer.save(contours, panel=panel)
    """

    def __init__(self, output_path: Path) -> None:
        """Initialize the contour writer.

        Args:
            output_path: Path where the document will be saved
        """
        self._output_path = output_path

    @staticmethod
    def build_document(
        contours: Sequence[RoutingContour], panel: Panel | None = None
    ) -> dict[str, Any]:
        """Build the JSON document for a set of contours.

        With a panel the full panel document is produced, its contours
        replaced by the given ones, so the output can be loaded again.
        """
        if panel is None:
            return {"routingContours": [c.to_dict() for c in contours]}

        panel_data = panel.to_dict()
        panel_data["routingContours"] = [c.to_dict() for c in contours]
        return {"panel": panel_data}

    def save(self, contours: Sequence[RoutingContour], panel: Panel | None = None) -> None:
        """Save contours to the output path.

        Raises:
            DocumentSaveError: If the file cannot be written
        """
        document = self.build_document(contours, panel)
        try:
            with self._output_path.open("w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
        except OSError as e:
            raise DocumentSaveError(str(self._output_path), str(e)) from e

    @staticmethod
    def get_routed_path(input_path: Path) -> Path:
        """Generate output path with the routed naming convention.

        Converts: panel.json -> panel-routed.json

        Args:
            input_path: Original document path

        Returns:
            Path with -routed suffix before extension
        """
        return input_path.parent / f"{input_path.stem}-routed{input_path.suffix}"
