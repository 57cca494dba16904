"""
config.py - Grid configuration for the mousepad generator.

Holds the immutable GridConfig, the RGBA colour helpers, validation and the
loaders that turn a YAML mapping into a GridConfig.

Unless otherwise specified, all dimensional measurements are in PIXELS.
"""

from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from mousepad_grid.utils import load_yaml_config

RGBA = tuple[int, int, int, int]

TRANSPARENT: RGBA = (0, 0, 0, 0)

# Colours of the classic SGI calibration pad.
# intersection_color is horizontal_color + vertical_color
HORIZONTAL_RGBA: RGBA = (0, 0, 255, 255)
VERTICAL_RGBA: RGBA = (255, 0, 0, 255)
BORDER_RGBA: RGBA = (0, 255, 0, 128)
INTERSECTION_RGBA: RGBA = (255, 0, 255, 255)

COLOR_FIELDS = (
    "horizontal_color",
    "vertical_color",
    "border_color",
    "intersection_color",
    "background_color",
)

# https://www.retrotechnology.com/herbs_stuff/sgi.html
# "..is either 85 squares per inch, or 60 squares per inch - the two in the photo. I have a few at
# about 25 squares per inch. I call these fine (85), medium (60), and coarse (25)"
GRID_DENSITIES = {
    "fine": 85,
    "medium": 60,
    "coarse": 25,
}
DEFAULT_DPI = 300

_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{8})$")


class ConfigurationError(ValueError):
    """Raised when a grid configuration cannot be rendered."""


@dataclass(frozen=True)
class GridConfig:
    """Everything a render call needs.

    grid_pitch is measured between the starts of adjacent lines and ignores
    line_thickness, so it must stay larger than the thickness.
    """

    width: int = 800
    height: int = 600
    line_thickness: int = 5
    grid_pitch: int = 90
    include_border: bool = True
    color_intersections: bool = True
    horizontal_color: RGBA = HORIZONTAL_RGBA
    vertical_color: RGBA = VERTICAL_RGBA
    border_color: RGBA = BORDER_RGBA
    intersection_color: RGBA = INTERSECTION_RGBA
    background_color: RGBA = TRANSPARENT


# ============================================================================
# Colours
# ============================================================================


def parse_hex_color(text: str) -> RGBA:
    """
    Parse an ``rrggbbaa`` string (optionally prefixed with ``#``).

    Args:
        text: Eight hex digits, red first and alpha last

    Returns:
        The colour as an (r, g, b, a) tuple
    """
    match = _HEX_COLOR.match(str(text).strip())
    if match is None:
        raise ConfigurationError(f"Colour must be 8 hex digits in rrggbbaa order, got {text!r}")
    return unpack_rgba(int(match.group(1), 16))


def pack_rgba(color: RGBA) -> int:
    """Pack an RGBA tuple into a 32-bit 0xRRGGBBAA integer."""
    r, g, b, a = _check_color(color, "color")
    return (r << 24) | (g << 16) | (b << 8) | a


def unpack_rgba(value: int) -> RGBA:
    """Split a 32-bit 0xRRGGBBAA integer into an RGBA tuple."""
    if not 0 <= value <= 0xFFFFFFFF:
        raise ConfigurationError(f"Packed colour out of range: {value:#x}")
    return ((value >> 24) & 0xFF, (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)


def format_hex_color(color: RGBA) -> str:
    return f"{pack_rgba(color):08x}"


def _check_color(color: Any, name: str) -> RGBA:
    try:
        channels = tuple(color)
    except TypeError:
        raise ConfigurationError(f"{name} must be an (r, g, b, a) tuple, got {color!r}") from None
    if len(channels) != 4:
        raise ConfigurationError(f"{name} must have 4 channels, got {color!r}")
    for channel in channels:
        if isinstance(channel, bool) or not isinstance(channel, int) or not 0 <= channel <= 255:
            raise ConfigurationError(f"{name} channels must be integers in 0..255, got {color!r}")
    return channels  # type: ignore[return-value]


# ============================================================================
# Validation
# ============================================================================


def validate_config(config: GridConfig) -> None:
    """Raise ConfigurationError if ``config`` cannot be rendered."""
    for name in ("width", "height", "line_thickness", "grid_pitch"):
        value = getattr(config, name)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    for name in ("include_border", "color_intersections"):
        check_flag(getattr(config, name), name)

    if config.width <= 0 or config.height <= 0:
        raise ConfigurationError(
            f"Image dimensions must be positive, got {config.width}x{config.height}"
        )
    if config.line_thickness < 1:
        raise ConfigurationError(f"line_thickness must be >= 1, got {config.line_thickness}")
    if config.grid_pitch <= config.line_thickness:
        raise ConfigurationError(
            f"grid_pitch ({config.grid_pitch}) must be greater than "
            f"line_thickness ({config.line_thickness})"
        )

    for name in COLOR_FIELDS:
        _check_color(getattr(config, name), name)


def check_flag(value: Any, name: str) -> bool:
    """Reject anything but a real bool; a quoted "false" would otherwise count as true."""
    if not isinstance(value, bool):
        raise ConfigurationError(f"{name} must be true or false, got {value!r}")
    return value


# ============================================================================
# Density presets
# ============================================================================


def pitch_for_density(density: str, dpi: int = DEFAULT_DPI) -> int:
    """
    Grid pitch in pixels for one of the classic mousepad densities.

    Args:
        density: "fine", "medium" or "coarse"
        dpi: Print resolution the image is meant for

    Returns:
        Pixels between line starts, rounded to the nearest pixel
    """
    if density not in GRID_DENSITIES:
        raise ConfigurationError(
            f"Unknown density {density!r}; expected one of {sorted(GRID_DENSITIES)}"
        )
    if isinstance(dpi, bool) or not isinstance(dpi, int):
        raise ConfigurationError(f"dpi must be an integer, got {dpi!r}")
    if dpi <= 0:
        raise ConfigurationError(f"dpi must be positive, got {dpi}")
    return round(dpi / GRID_DENSITIES[density])


# ============================================================================
# Loading
# ============================================================================

# Keys a config file may hold in addition to the GridConfig fields.
OUTPUT_KEYS = ("separate_files", "output", "density", "dpi")


def grid_config_from_mapping(values: Mapping[str, Any], base: GridConfig | None = None) -> GridConfig:
    """
    Build a GridConfig from plain values, e.g. a parsed YAML document.

    Colour values may be ``rrggbbaa`` strings, packed integers or 4-item
    sequences. Keys listed in OUTPUT_KEYS are ignored here; any other
    unknown key is an error.

    Args:
        values: Mapping of GridConfig field names to values
        base: Config supplying the values not present in ``values``

    Returns:
        A new GridConfig (not yet validated)
    """
    field_names = {f.name for f in dataclasses.fields(GridConfig)}
    unknown = set(values) - field_names - set(OUTPUT_KEYS)
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {sorted(unknown)}")

    overrides: dict[str, Any] = {}
    for name, value in values.items():
        if name not in field_names or value is None:
            continue
        if name in COLOR_FIELDS:
            overrides[name] = _coerce_color(value, name)
        else:
            overrides[name] = value

    return dataclasses.replace(base or GridConfig(), **overrides)


def _coerce_color(value: Any, name: str) -> RGBA:
    if isinstance(value, str):
        return parse_hex_color(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return unpack_rgba(value)
    return _check_color(value, name)


def load_config_file(config_path: Path) -> dict:
    """
    Read a YAML config file, reporting every failure as a ConfigurationError.

    Args:
        config_path: Path to the YAML file

    Returns:
        The parsed mapping
    """
    try:
        return load_yaml_config(config_path)
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Config file not found: {config_path}") from exc
    except (yaml.YAMLError, TypeError) as exc:
        raise ConfigurationError(f"Invalid config file {config_path}: {exc}") from exc
