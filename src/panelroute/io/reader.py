"""Panel document reader.

This module provides the PanelReader class for loading a panel layout
(boards with their drawing commands, placements, tabs and existing routing
contours) from a JSON document into domain models.
"""

import json
from collections.abc import Iterator
from pathlib import Path

from panelroute.domain import Board, BoardInstance, Panel
from panelroute.exceptions import (
    BoardNotFoundError,
    DocumentFormatError,
    DocumentLoadError,
    InstanceNotFoundError,
)


class PanelReader:
    """Loads panel documents and exposes their domain models.

    Example:
        reader = PanelReader(Path("panel.json"))
        reader.load()
        for board, instance in reader.iter_placements():
            print(instance.id, board.name)
    """

    def __init__(self, document_path: Path) -> None:
        """Initialize the panel reader.

        Args:
            document_path: Path to the JSON panel document
        """
        self._document_path = document_path
        self._panel: Panel | None = None

    def load(self) -> Panel:
        """Load and parse the document.

        Returns:
            The loaded panel

        Raises:
            DocumentLoadError: If the file is missing or is not valid JSON
            DocumentFormatError: If the JSON does not describe a panel
        """
        path = str(self._document_path)
        if not self._document_path.exists():
            raise DocumentLoadError(path, "file not found")

        try:
            with self._document_path.open(encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise DocumentLoadError(path, str(e)) from e

        if not isinstance(data, dict) or not isinstance(data.get("panel"), dict):
            raise DocumentFormatError(path, "missing 'panel' object")

        try:
            self._panel = Panel.from_dict(data["panel"])
        except (KeyError, TypeError, ValueError) as e:
            raise DocumentFormatError(path, f"{type(e).__name__}: {e}") from e

        return self._panel

    @property
    def panel(self) -> Panel:
        """The loaded panel.

        Raises:
            RuntimeError: If the document has not been loaded yet
        """
        if self._panel is None:
            raise RuntimeError("Panel not loaded. Call load() first.")
        return self._panel

    def get_board(self, board_id: str) -> Board:
        """Get a board by id.

        Raises:
            BoardNotFoundError: If no board has this id
        """
        board = self.panel.get_board(board_id)
        if board is None:
            raise BoardNotFoundError(board_id)
        return board

    def get_instance(self, instance_id: str) -> BoardInstance:
        """Get a placement by id.

        Raises:
            InstanceNotFoundError: If no placement has this id
        """
        instance = self.panel.get_instance(instance_id)
        if instance is None:
            raise InstanceNotFoundError(instance_id)
        return instance

    def get_placement(self, instance_id: str) -> tuple[Board, BoardInstance]:
        """Get a placement together with its board.

        Raises:
            InstanceNotFoundError: If no placement has this id
            BoardNotFoundError: If the placement refers to an unknown board
        """
        instance = self.get_instance(instance_id)
        return self.get_board(instance.board_id), instance

    def iter_placements(self) -> Iterator[tuple[Board, BoardInstance]]:
        """Iterate over placements with a known board, in document order."""
        yield from self.panel.placements()
