"""
renderer.py - Draws the mousepad grid onto a fresh Canvas.

Order of operations is fixed: border, horizontal (latitude) lines, vertical
(longitude) lines, intersection blocks. Later steps overwrite earlier ones.
"""

from __future__ import annotations

import logging

from mousepad_grid.canvas import Canvas
from mousepad_grid.config import GridConfig, validate_config
from mousepad_grid.geometry import GridGeometry

logger = logging.getLogger(__name__)


def render(
    config: GridConfig,
    include_latitude: bool = True,
    include_longitude: bool = True,
) -> Canvas:
    """
    Render the grid described by ``config``.

    Args:
        config: Grid dimensions, spacing and colours
        include_latitude: Draw the horizontal lines
        include_longitude: Draw the vertical lines

    Returns:
        A new Canvas owned by the caller

    Raises:
        ConfigurationError: if the config is invalid; raised before the
            canvas is allocated
    """
    validate_config(config)
    geometry = GridGeometry.from_config(config)
    logger.debug(
        f"Geometry: {geometry.latitude_line_count} latitude lines from y={geometry.latitude_start_offset}, "
        f"{geometry.longitude_line_count} longitude lines from x={geometry.longitude_start_offset}"
    )

    canvas = Canvas.new(config.width, config.height, config.background_color)

    if config.include_border:
        draw_border(canvas, config)
    if include_latitude:
        draw_latitude_lines(canvas, config, geometry)
    if include_longitude:
        draw_longitude_lines(canvas, config, geometry)
    if include_latitude and include_longitude and config.color_intersections:
        draw_intersections(canvas, config, geometry)

    return canvas


def render_split(config: GridConfig) -> tuple[Canvas, Canvas]:
    """Two independent renders: latitude lines only, then longitude lines only."""
    return (
        render(config, include_latitude=True, include_longitude=False),
        render(config, include_latitude=False, include_longitude=True),
    )


def draw_border(canvas: Canvas, config: GridConfig) -> None:
    """Nested 1-pixel outlines, ``line_thickness`` of them, starting at the image edge."""
    for inset in range(config.line_thickness):
        x0, y0 = inset, inset
        x1, y1 = canvas.max_x - inset, canvas.max_y - inset
        if x0 > x1 or y0 > y1:
            # the rings have met in the middle; the image is all border
            logger.debug(f"Border stopped after {inset} rings on a {canvas.width}x{canvas.height} canvas")
            break
        canvas.rect(x0, y0, x1, y1, config.border_color)


def draw_latitude_lines(canvas: Canvas, config: GridConfig, geometry: GridGeometry) -> None:
    """Full-width horizontal lines, each ``line_thickness`` rows tall."""
    for y in geometry.latitude_starts:
        for i in range(config.line_thickness):
            canvas.line(0, y + i, canvas.max_x, y + i, config.horizontal_color)


def draw_longitude_lines(canvas: Canvas, config: GridConfig, geometry: GridGeometry) -> None:
    """Full-height vertical lines, each ``line_thickness`` columns wide."""
    for x in geometry.longitude_starts:
        for i in range(config.line_thickness):
            canvas.line(x + i, 0, x + i, canvas.max_y, config.vertical_color)


def draw_intersections(canvas: Canvas, config: GridConfig, geometry: GridGeometry) -> None:
    """Overwrite every line crossing with a thickness x thickness block."""
    last = config.line_thickness - 1
    for x in geometry.longitude_starts:
        for y in geometry.latitude_starts:
            canvas.fill_rect(x, y, x + last, y + last, config.intersection_color)
