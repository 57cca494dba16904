"""
Mousepad calibration grid generator.

Contains:
- config.py: GridConfig, RGBA colour helpers and config loading
- geometry.py: line counts and centring offsets
- canvas.py: the Pillow-backed RGBA pixel surface
- renderer.py: border, line and intersection drawing
- generate_mousepad_png.py: command-line entry point
"""

from mousepad_grid.canvas import Canvas
from mousepad_grid.config import ConfigurationError, GridConfig
from mousepad_grid.geometry import GridGeometry
from mousepad_grid.renderer import render, render_split

__all__ = ["Canvas", "ConfigurationError", "GridConfig", "GridGeometry", "render", "render_split"]
