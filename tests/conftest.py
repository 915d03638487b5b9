"""Shared fixtures for panel documents."""

import json
from pathlib import Path
from typing import Any

import pytest


def _line(x1: float, y1: float, x2: float, y2: float) -> dict[str, Any]:
    return {"type": "line", "start": {"x": x1, "y": y1}, "end": {"x": x2, "y": y2}}


@pytest.fixture
def panel_data() -> dict[str, Any]:
    """Panel with two placements of one 20 x 10 board and a manual contour."""
    return {
        "panel": {
            "name": "demo",
            "width": 100,
            "height": 80,
            "cornerRadius": 0,
            "boards": [
                {
                    "id": "b1",
                    "name": "Sensor",
                    "width": 20,
                    "height": 10,
                    "layers": [
                        {
                            "name": "sensor.gm1",
                            "type": "outline",
                            "commands": [
                                _line(0, 0, 20, 0),
                                _line(20, 0, 20, 10),
                                _line(20, 10, 0, 10),
                                _line(0, 10, 0, 0),
                            ],
                        },
                        {"name": "sensor.gtl", "type": "copper", "commands": []},
                    ],
                }
            ],
            "instances": [
                {"id": "i1", "boardId": "b1", "position": {"x": 0, "y": 0}, "rotation": 0},
                {"id": "i2", "boardId": "b1", "position": {"x": 50, "y": 0}, "rotation": 0},
            ],
            "tabs": [
                {
                    "id": "t1",
                    "boardInstanceId": "i1",
                    "edge": "bottom",
                    "position": 0.5,
                    "width": 4,
                    "type": "mousebites",
                }
            ],
            "routingContours": [
                {
                    "id": "manual-1",
                    "contourType": "boardOutline",
                    "segments": [
                        {"start": {"x": 0, "y": -1}, "end": {"x": 10, "y": -1}}
                    ],
                    "toolDiameter": 2.0,
                    "visible": True,
                    "boardInstanceId": "i1",
                    "creationMethod": "freeDraw",
                }
            ],
        }
    }


@pytest.fixture
def panel_file(tmp_path: Path, panel_data: dict[str, Any]) -> Path:
    """The sample panel written to a temporary JSON document."""
    path = tmp_path / "panel.json"
    path.write_text(json.dumps(panel_data), encoding="utf-8")
    return path
