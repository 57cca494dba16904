from __future__ import annotations

import pytest

from mousepad_grid.config import BORDER_RGBA, HORIZONTAL_RGBA, INTERSECTION_RGBA, VERTICAL_RGBA, GridConfig


@pytest.fixture
def small_config() -> GridConfig:
    """100x80 pad, 20px pitch, 3px lines: 4 latitude and 5 longitude lines."""
    return GridConfig(
        width=100,
        height=80,
        line_thickness=3,
        grid_pitch=20,
        horizontal_color=HORIZONTAL_RGBA,
        vertical_color=VERTICAL_RGBA,
        border_color=BORDER_RGBA,
        intersection_color=INTERSECTION_RGBA,
    )
