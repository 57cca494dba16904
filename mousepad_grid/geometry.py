"""Line counts and centring offsets derived from a GridConfig."""

from __future__ import annotations

from dataclasses import dataclass

from mousepad_grid.config import GridConfig


def line_count(dimension: int, pitch: int) -> int:
    return dimension // pitch


def start_offset(dimension: int, count: int, pitch: int, thickness: int) -> int:
    """
    Offset of the first line so the drawn span sits in the middle of ``dimension``.

    The span runs from the first pixel of the first line to the last pixel of
    the last line: ``count * pitch - pitch + thickness``.
    """
    return (dimension - (count * pitch - pitch + thickness)) // 2


@dataclass(frozen=True)
class GridGeometry:
    latitude_line_count: int
    longitude_line_count: int
    latitude_start_offset: int
    longitude_start_offset: int
    pitch: int
    thickness: int

    @classmethod
    def from_config(cls, config: GridConfig) -> "GridGeometry":
        lat_count = line_count(config.height, config.grid_pitch)
        lon_count = line_count(config.width, config.grid_pitch)
        return cls(
            latitude_line_count=lat_count,
            longitude_line_count=lon_count,
            latitude_start_offset=start_offset(
                config.height, lat_count, config.grid_pitch, config.line_thickness
            ),
            longitude_start_offset=start_offset(
                config.width, lon_count, config.grid_pitch, config.line_thickness
            ),
            pitch=config.grid_pitch,
            thickness=config.line_thickness,
        )

    @property
    def latitude_starts(self) -> list[int]:
        """First row of every horizontal line, top to bottom."""
        return [self.latitude_start_offset + i * self.pitch for i in range(self.latitude_line_count)]

    @property
    def longitude_starts(self) -> list[int]:
        """First column of every vertical line, left to right."""
        return [self.longitude_start_offset + i * self.pitch for i in range(self.longitude_line_count)]

    def as_dict(self) -> dict:
        return {
            "latitude_line_count": self.latitude_line_count,
            "longitude_line_count": self.longitude_line_count,
            "latitude_start_offset": self.latitude_start_offset,
            "longitude_start_offset": self.longitude_start_offset,
        }
