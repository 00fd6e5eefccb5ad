"""
Survey Lattice Module

Lays out a regular rows x cols lattice of sampling points centred on a
geographic coordinate. The lattice is recomputed from stored grid parameters
every time a survey starts, so generation must be deterministic.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

import numpy as np

from .units import meters_to_degrees
from .validation import (
    InvalidSpecError,
    validate_coordinate,
    validate_count,
    validate_lattice_extent,
    validate_spacing,
)


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees."""
    latitude: float
    longitude: float

    def as_tuple(self) -> Tuple[float, float]:
        return (self.latitude, self.longitude)

    def to_lonlat(self) -> Tuple[float, float]:
        """(x, y) order used by GeoJSON and shapely."""
        return (self.longitude, self.latitude)

    @classmethod
    def coerce(cls, value: Union['GeoPoint', Sequence[float]]) -> 'GeoPoint':
        """Accept a GeoPoint or a (lat, lon) pair."""
        if isinstance(value, GeoPoint):
            return value
        try:
            lat, lon = value
        except (TypeError, ValueError):
            raise InvalidSpecError(
                f"center must be a GeoPoint or (lat, lon) pair, got {value!r}"
            )
        return cls(latitude=lat, longitude=lon)


@dataclass(frozen=True)
class GridSpec:
    """
    Validated input for lattice generation.

    Attributes:
        center: Centre of the lattice
        spacing: Distance between adjacent points in decimal degrees,
            applied to both latitude and longitude
        rows: Number of rows (latitude direction)
        cols: Number of columns (longitude direction)
    """
    center: GeoPoint
    spacing: float
    rows: int
    cols: int

    def __post_init__(self):
        center = GeoPoint.coerce(self.center)
        lat, lon = validate_coordinate(center.latitude, center.longitude)
        object.__setattr__(self, "center", GeoPoint(lat, lon))
        object.__setattr__(self, "spacing", validate_spacing(self.spacing, "Grid spacing (degrees)"))
        object.__setattr__(self, "rows", validate_count(self.rows, "rows"))
        object.__setattr__(self, "cols", validate_count(self.cols, "cols"))
        if not all(math.isfinite(edge) for edge in self.bounds):
            raise InvalidSpecError(
                f"A {self.rows}x{self.cols} lattice with spacing {self.spacing} "
                "has no finite extent"
            )

    @classmethod
    def from_meters(
        cls,
        center: Union[GeoPoint, Sequence[float]],
        spacing_meters: float,
        rows: int,
        cols: int,
    ) -> GridSpec:
        """Build a spec from a spacing in meters (see units.meters_to_degrees)."""
        return cls(
            center=GeoPoint.coerce(center),
            spacing=meters_to_degrees(spacing_meters),
            rows=rows,
            cols=cols,
        )

    @property
    def shape(self) -> Tuple[int, int]:
        """Lattice dimensions (rows, cols)."""
        return (self.rows, self.cols)

    @property
    def num_points(self) -> int:
        return self.rows * self.cols

    @property
    def origin(self) -> GeoPoint:
        """Position of point (0, 0): the south-west corner of the lattice."""
        return GeoPoint(
            self.center.latitude - (self.rows - 1) * self.spacing / 2,
            self.center.longitude - (self.cols - 1) * self.spacing / 2,
        )

    @property
    def latitudes(self) -> np.ndarray:
        """Latitude of each row, increasing with row index."""
        return self.origin.latitude + np.arange(self.rows) * self.spacing

    @property
    def longitudes(self) -> np.ndarray:
        """Longitude of each column, increasing with column index."""
        return self.origin.longitude + np.arange(self.cols) * self.spacing

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """Extent of the lattice points (min_lat, min_lon, max_lat, max_lon)."""
        origin = self.origin
        return (
            origin.latitude,
            origin.longitude,
            origin.latitude + max(self.rows - 1, 0) * self.spacing,
            origin.longitude + max(self.cols - 1, 0) * self.spacing,
        )

    def point_at(self, row: int, col: int) -> GeoPoint:
        """Lattice point at (row, col)."""
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(f"({row}, {col}) outside {self.rows}x{self.cols} lattice")
        return GeoPoint(
            float(self.latitudes[row]),
            float(self.longitudes[col]),
        )

    def points(self) -> List[GeoPoint]:
        """All lattice points in row-major order."""
        if self.rows == 0 or self.cols == 0:
            return []

        validate_lattice_extent(self.bounds, self.num_points)

        lons = self.longitudes
        return [
            GeoPoint(float(lat), float(lon))
            for lat in self.latitudes
            for lon in lons
        ]


def generate_lattice(
    center: Union[GeoPoint, Sequence[float]],
    spacing: float,
    rows: int,
    cols: int,
) -> List[GeoPoint]:
    """
    Generate a regular lattice of survey points centred on a coordinate.

    Points are ordered row-major: row index (latitude) increasing, then
    column index (longitude) increasing within a row. The mean of the
    returned points equals the centre.

    Args:
        center: Lattice centre as GeoPoint or (lat, lon)
        spacing: Distance between adjacent points in decimal degrees
        rows: Number of rows (0 gives an empty lattice)
        cols: Number of columns (0 gives an empty lattice)

    Returns:
        List of rows * cols GeoPoints

    Raises:
        InvalidSpecError: If spacing is not positive or rows/cols are negative
    """
    return GridSpec(center=GeoPoint.coerce(center), spacing=spacing, rows=rows, cols=cols).points()


def lattice_array(points: Sequence[GeoPoint]) -> np.ndarray:
    """Stack points into an (n, 2) array of [latitude, longitude]."""
    if len(points) == 0:
        return np.empty((0, 2), dtype=np.float64)
    return np.array([p.as_tuple() for p in points], dtype=np.float64)


def centroid(points: Sequence[GeoPoint]) -> GeoPoint:
    """Arithmetic mean of a set of points."""
    if len(points) == 0:
        raise ValueError("Cannot compute the centroid of an empty point set")
    lat, lon = lattice_array(points).mean(axis=0)
    return GeoPoint(float(lat), float(lon))
