"""
Survey Records

Typed views of the project and grid records handed out by the persistence
layer. Records arrive as loosely typed mappings (camelCase keys, numbers
that may be ints, floats or strings); from_dict() validates and coerces them
before any lattice is generated.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from .lattice import GeoPoint, GridSpec
from .units import DEFAULT_SPACING_METERS, meters_to_degrees
from .validation import RecordError


def record_float(record: Mapping[str, Any], key: str) -> Optional[float]:
    value = record.get(key)
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise RecordError(f"'{key}' must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise RecordError(f"'{key}' must be a number, got {value!r}")


def record_int(record: Mapping[str, Any], key: str) -> Optional[int]:
    value = record.get(key)
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise RecordError(f"'{key}' must be an integer, got {value!r}")
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise RecordError(f"'{key}' must be an integer, got {value!r}")
    if not number.is_integer():
        raise RecordError(f"'{key}' must be a whole number, got {value!r}")
    return int(number)


def record_str(record: Mapping[str, Any], key: str) -> Optional[str]:
    value = record.get(key)
    if value is None:
        return None
    return str(value)


def record_datetime(record: Mapping[str, Any], key: str) -> datetime:
    value = record.get(key)
    if isinstance(value, datetime):
        return value
    if value is None:
        raise RecordError(f"'{key}' is required")
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        raise RecordError(f"'{key}' must be an ISO 8601 timestamp, got {value!r}")


def parse_boundary_points(serialized: Optional[str]) -> List[GeoPoint]:
    """
    Decode a serialized boundary polygon.

    Accepts a JSON list of {"lat": .., "lon": ..} objects or [lat, lon] pairs.
    """
    if not serialized:
        return []
    try:
        raw = json.loads(serialized)
    except json.JSONDecodeError as e:
        raise RecordError(f"boundaryPoints is not valid JSON: {e}")
    if not isinstance(raw, list):
        raise RecordError("boundaryPoints must be a JSON list of vertices")

    vertices = []
    for item in raw:
        if isinstance(item, Mapping):
            vertex = {"lat": item.get("lat"), "lon": item.get("lon")}
        elif isinstance(item, (list, tuple)) and len(item) == 2:
            vertex = {"lat": item[0], "lon": item[1]}
        else:
            raise RecordError(f"Invalid boundary vertex: {item!r}")
        lat = record_float(vertex, "lat")
        lon = record_float(vertex, "lon")
        if lat is None or lon is None:
            raise RecordError(f"Boundary vertex is missing a coordinate: {item!r}")
        vertices.append(GeoPoint(lat, lon))
    return vertices


def serialize_boundary_points(vertices: List[GeoPoint]) -> str:
    return json.dumps([{"lat": v.latitude, "lon": v.longitude} for v in vertices])


def spec_from_record(record: Mapping[str, Any]) -> Optional[GridSpec]:
    """
    Lattice parameters from an untyped grid record.

    Only centerLat, centerLon, spacing (meters), rows and cols are read.
    Returns None when any of them is missing.
    """
    center_lat = record_float(record, "centerLat")
    center_lon = record_float(record, "centerLon")
    spacing = record_float(record, "spacing")
    rows = record_int(record, "rows")
    cols = record_int(record, "cols")

    if None in (center_lat, center_lon, spacing, rows, cols):
        return None
    return GridSpec.from_meters(GeoPoint(center_lat, center_lon), spacing, rows, cols)


@dataclass
class SurveyProject:
    """A survey project owning grids and readings."""
    name: str
    description: str = ""
    created_at: datetime = field(default_factory=datetime.now)
    id: Optional[int] = None
    grid_spacing: Optional[float] = None
    boundary_points: Optional[str] = None

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> SurveyProject:
        name = record_str(record, "name")
        if not name:
            raise RecordError("'name' is required")
        return cls(
            id=record_int(record, "id"),
            name=name,
            description=record_str(record, "description") or "",
            created_at=record_datetime(record, "createdAt"),
            grid_spacing=record_float(record, "gridSpacing"),
            boundary_points=record_str(record, "boundaryPoints"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "createdAt": self.created_at.isoformat(),
            "gridSpacing": self.grid_spacing,
            "boundaryPoints": self.boundary_points,
        }


@dataclass
class SurveyGrid:
    """
    A stored survey grid.

    Only the parameters are persisted; the lattice itself is rebuilt from
    center/spacing/rows/cols whenever a survey starts.

    Attributes:
        spacing: Distance between points in meters
        points: Number of lattice points recorded when the grid was created
        boundary_points_json: Serialized boundary polygon, if the grid was
            drawn by boundary rather than by centre
    """
    project_id: int
    name: str
    created_at: datetime = field(default_factory=datetime.now)
    id: Optional[int] = None
    description: Optional[str] = None
    spacing: Optional[float] = None
    rows: Optional[int] = None
    cols: Optional[int] = None
    points: Optional[int] = None
    center_lat: Optional[float] = None
    center_lon: Optional[float] = None
    boundary_points_json: Optional[str] = None

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> SurveyGrid:
        """
        Build a typed grid from an untyped record.

        Raises:
            RecordError: If a present field is malformed or a required one is missing
        """
        project_id = record_int(record, "projectId")
        if project_id is None:
            raise RecordError("'projectId' is required")
        name = record_str(record, "name")
        if not name:
            raise RecordError("'name' is required")

        return cls(
            id=record_int(record, "id"),
            project_id=project_id,
            name=name,
            description=record_str(record, "description"),
            created_at=record_datetime(record, "createdAt"),
            spacing=record_float(record, "spacing"),
            rows=record_int(record, "rows"),
            cols=record_int(record, "cols"),
            points=record_int(record, "points"),
            center_lat=record_float(record, "centerLat"),
            center_lon=record_float(record, "centerLon"),
            boundary_points_json=record_str(record, "boundaryPoints"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "projectId": self.project_id,
            "name": self.name,
            "description": self.description,
            "createdAt": self.created_at.isoformat(),
            "spacing": self.spacing,
            "rows": self.rows,
            "cols": self.cols,
            "points": self.points,
            "centerLat": self.center_lat,
            "centerLon": self.center_lon,
            "boundaryPoints": self.boundary_points_json,
        }

    @property
    def center(self) -> Optional[GeoPoint]:
        if self.center_lat is None or self.center_lon is None:
            return None
        return GeoPoint(self.center_lat, self.center_lon)

    @property
    def boundary_points(self) -> List[GeoPoint]:
        return parse_boundary_points(self.boundary_points_json)

    @property
    def has_lattice_inputs(self) -> bool:
        """True when center, spacing, rows and cols are all present."""
        return (
            self.center is not None
            and self.spacing is not None
            and self.rows is not None
            and self.cols is not None
        )

    @property
    def spacing_degrees(self) -> float:
        """Stored spacing in degrees (default spacing when unset)."""
        return meters_to_degrees(self.spacing)

    @property
    def estimated_area_m2(self) -> float:
        """Rough surveyed area: spacing^2 per lattice point."""
        if self.rows is None or self.cols is None:
            return 0.0
        spacing = self.spacing if self.spacing is not None else DEFAULT_SPACING_METERS
        return spacing * spacing * self.rows * self.cols

    def to_spec(self) -> Optional[GridSpec]:
        """
        Lattice parameters for this grid, or None when any input is missing.

        Raises:
            InvalidSpecError: If the stored values cannot describe a lattice
        """
        if not self.has_lattice_inputs:
            return None
        return GridSpec.from_meters(self.center, self.spacing, self.rows, self.cols)

    def summary(self) -> str:
        """One-line description in the style of the project grid list."""
        parts = []
        if self.spacing is not None:
            parts.append(f"{self.spacing:g} m")
        if self.rows is not None and self.cols is not None:
            parts.append(f"{self.rows}×{self.cols}")
        if self.points is not None:
            parts.append(f"{self.points} points")
        return " · ".join(parts)
