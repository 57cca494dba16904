#!/usr/bin/env python3
"""Generate a mousepad calibration grid as a transparent PNG.

The image has an RGBA canvas (fully transparent background unless a
background colour is given), a border, horizontal and vertical rule lines
and coloured intersection blocks, all snapped to whole pixels.

Usage:
    generate-mousepad --output mousepad.png
    generate-mousepad --config configs/mousepad.yaml --separate_files
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from mousepad_grid.config import (
    COLOR_FIELDS,
    DEFAULT_DPI,
    GRID_DENSITIES,
    ConfigurationError,
    GridConfig,
    check_flag,
    grid_config_from_mapping,
    load_config_file,
    pitch_for_density,
    validate_config,
)
from mousepad_grid.geometry import GridGeometry
from mousepad_grid.renderer import render
from mousepad_grid.utils import (
    EXIT_CONFIG_ERROR,
    EXIT_GENERAL_ERROR,
    EXIT_SUCCESS,
    LOG_LEVELS,
    configure_logging,
)

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = "mousepad.png"


# ---------------------------
# Output file names
# ---------------------------


def split_output_filename(filename: str) -> tuple[str, str]:
    """
    Latitude and longitude file names for split-file mode.

    Everything after the first dot is treated as the extension, so
    "a.b.png" becomes "a_lat.b.png" and "a_lon.b.png". A name without a dot
    gets the bare suffix ("grid" becomes "grid_lat"), not the "grid_lat."
    that joining an empty extension would produce.
    """
    base, dot, tail = filename.partition(".")
    if not dot:
        return f"{base}_lat", f"{base}_lon"
    return f"{base}_lat.{tail}", f"{base}_lon.{tail}"


def split_output_paths(path: Path) -> tuple[Path, Path]:
    """Apply split_output_filename to the file name only, keeping the directory."""
    lat_name, lon_name = split_output_filename(path.name)
    return path.with_name(lat_name), path.with_name(lon_name)


def plan_outputs(output: Path, separate_files: bool) -> list[tuple[str, Path, bool, bool]]:
    """Return (label, path, include_latitude, include_longitude) for every image to write."""
    if not separate_files:
        return [("combined", output, True, True)]
    lat_path, lon_path = split_output_paths(output)
    return [
        ("latitude", lat_path, True, False),
        ("longitude", lon_path, False, True),
    ]


# ---------------------------
# Settings
# ---------------------------


def resolve_settings(args: argparse.Namespace) -> dict[str, Any]:
    """
    Merge the optional YAML file with command-line flags (flags win).

    A density only sets the pitch when no explicit grid_pitch is given at the
    same or a later layer.
    """
    settings: dict[str, Any] = {}
    if args.config:
        settings.update(load_config_file(Path(args.config)))

    cli: dict[str, Any] = {
        "width": args.width,
        "height": args.height,
        "line_thickness": args.line_thickness,
        "grid_pitch": args.grid_pitch,
        "density": args.density,
        "dpi": args.dpi,
        "output": args.output,
    }
    for name in COLOR_FIELDS:
        cli[name] = getattr(args, name)
    if args.no_border:
        cli["include_border"] = False
    if args.no_intersections:
        cli["color_intersections"] = False
    if args.separate_files:
        cli["separate_files"] = True
    cli = {key: value for key, value in cli.items() if value is not None}

    if "density" in cli and "grid_pitch" not in cli:
        settings.pop("grid_pitch", None)
    settings.update(cli)

    settings["separate_files"] = check_flag(settings.get("separate_files", False), "separate_files")

    if settings.get("grid_pitch") is None and settings.get("density"):
        dpi = settings.get("dpi")
        if dpi is None:
            dpi = DEFAULT_DPI
        settings["grid_pitch"] = pitch_for_density(settings["density"], dpi)
        logger.info(f"Density {settings['density']!r} at {dpi} dpi gives grid_pitch={settings['grid_pitch']}")

    return settings


def describe_config(config: GridConfig) -> str:
    return (
        f"{config.width}x{config.height}px, pitch={config.grid_pitch}, "
        f"thickness={config.line_thickness}, border={config.include_border}, "
        f"intersections={config.color_intersections}"
    )


# ---------------------------
# Entry point
# ---------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a mousepad calibration grid as a transparent PNG.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Default 800x600 pad with 90px pitch and 5px lines
  generate-mousepad --output mousepad.png

  # Fine SGI-style pad for a 600 dpi print, horizontal and vertical lines in separate files
  generate-mousepad --density fine --dpi 600 --line_thickness 2 --separate_files

  # Colours are rrggbbaa
  generate-mousepad --horizontal_color 000000ff --vertical_color 000000ff --no_intersections
        """
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML file with grid settings; command-line flags override it"
    )
    parser.add_argument("--width", type=int, default=None, help="Image width in pixels (default: 800)")
    parser.add_argument("--height", type=int, default=None, help="Image height in pixels (default: 600)")
    parser.add_argument(
        "--line_thickness",
        type=int,
        default=None,
        help="Line thickness in pixels (default: 5)"
    )
    parser.add_argument(
        "--grid_pitch",
        type=int,
        default=None,
        help="Pixels from the start of one line to the start of the next (default: 90)"
    )
    parser.add_argument(
        "--density",
        choices=sorted(GRID_DENSITIES),
        default=None,
        help="Derive grid_pitch from a classic mousepad density (squares per inch)"
    )
    parser.add_argument(
        "--dpi",
        type=int,
        default=None,
        help=f"Print resolution used with --density (default: {DEFAULT_DPI})"
    )
    parser.add_argument("--no_border", action="store_true", help="Do not draw the border")
    parser.add_argument(
        "--no_intersections",
        action="store_true",
        help="Leave line crossings in the line colours"
    )
    parser.add_argument(
        "--separate_files",
        action="store_true",
        help="Write horizontal and vertical lines to <name>_lat.<ext> and <name>_lon.<ext>"
    )
    parser.add_argument("--horizontal_color", type=str, default=None, help="rrggbbaa (default: 0000ffff)")
    parser.add_argument("--vertical_color", type=str, default=None, help="rrggbbaa (default: ff0000ff)")
    parser.add_argument("--border_color", type=str, default=None, help="rrggbbaa (default: 00ff0080)")
    parser.add_argument("--intersection_color", type=str, default=None, help="rrggbbaa (default: ff00ffff)")
    parser.add_argument("--background_color", type=str, default=None, help="rrggbbaa (default: 00000000)")
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help=f"Output PNG path, or file name mask with --separate_files (default: {DEFAULT_OUTPUT})"
    )
    parser.add_argument(
        "--dry_run",
        action="store_true",
        help="Only compute the geometry and output paths, write nothing"
    )
    parser.add_argument(
        "--log_level",
        choices=list(LOG_LEVELS),
        default="info",
        help="Logging verbosity (default: info)"
    )
    parser.add_argument("--log_file", type=str, default=None, help="Also append log records to this file")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point; returns the process exit code."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, Path(args.log_file) if args.log_file else None)

    try:
        settings = resolve_settings(args)
        config = grid_config_from_mapping(settings)
        validate_config(config)
    except ConfigurationError as e:
        logger.critical(f"Invalid configuration: {e}")
        print(json.dumps({"status": "error", "error": str(e), "exit_code": EXIT_CONFIG_ERROR}, indent=2))
        return EXIT_CONFIG_ERROR

    output = Path(settings.get("output") or DEFAULT_OUTPUT)
    outputs = plan_outputs(output, bool(settings.get("separate_files", False)))
    geometry = GridGeometry.from_config(config)

    logger.info(f"Grid: {describe_config(config)}")
    logger.debug(f"Geometry: {geometry.as_dict()}")

    result: dict[str, Any] = {
        "status": "dry_run" if args.dry_run else "success",
        "geometry": geometry.as_dict(),
        "outputs": {label: str(path) for label, path, _, _ in outputs},
    }

    if args.dry_run:
        for label, path, _, _ in outputs:
            logger.info(f"[DRY-RUN] Would write {label} image to {path}")
        print(json.dumps(result, indent=2))
        return EXIT_SUCCESS

    try:
        for label, path, include_latitude, include_longitude in outputs:
            canvas = render(config, include_latitude=include_latitude, include_longitude=include_longitude)
            written = canvas.save(path)
            logger.info(f"Wrote {label} image: {written.resolve()}")
    except Exception as e:
        logger.exception("Failed to write mousepad image")
        print(json.dumps({"status": "error", "error": str(e), "exit_code": EXIT_GENERAL_ERROR}, indent=2))
        return EXIT_GENERAL_ERROR

    print(json.dumps(result, indent=2))
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
