"""
Survey Start and Grid Creation

Entry points used by the presentation layer: authoring a grid, previewing
its lattice, and rebuilding the lattice from a stored grid when a survey
starts. Both paths build their GridSpec through GridSpec.from_meters so the
meters to degrees conversion and the default spacing are shared.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Mapping, Optional, Sequence, Union

from .cells import GridCell, build_cells
from .lattice import GeoPoint, GridSpec, centroid
from .records import SurveyGrid, record_float, record_int, serialize_boundary_points, spec_from_record
from .units import DEFAULT_SPACING_METERS
from .validation import InvalidSpecError, RecordError


DEFAULT_ROWS = 7
DEFAULT_COLS = 7

GridRecord = Union[SurveyGrid, Mapping[str, Any]]


@dataclass
class SurveyOverlay:
    """
    Lattice handed to the survey screen.

    Readings taken against these points are tagged with grid_id.
    """
    grid_id: Optional[int]
    center: Optional[GeoPoint]
    points: List[GeoPoint] = field(default_factory=list)
    cells: List[GridCell] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.points


def _grid_spec(grid_record: GridRecord) -> Optional[GridSpec]:
    if isinstance(grid_record, SurveyGrid):
        return grid_record.to_spec()
    if isinstance(grid_record, Mapping):
        return spec_from_record(grid_record)
    raise TypeError(
        f"grid_record must be a SurveyGrid or a mapping, got {type(grid_record).__name__}"
    )


def compute_survey_lattice(grid_record: GridRecord) -> List[GeoPoint]:
    """
    Rebuild the survey lattice for a stored grid.

    Args:
        grid_record: SurveyGrid or raw record with centerLat, centerLon,
            spacing (meters), rows and cols

    Returns:
        Row-major lattice, or an empty list when any input is missing

    Raises:
        InvalidSpecError: If the inputs are present but invalid
        RecordError: If a raw record field is malformed
    """
    spec = _grid_spec(grid_record)
    if spec is None:
        return []
    return spec.points()


def start_survey(grid_record: GridRecord) -> SurveyOverlay:
    """Prepare the lattice overlay for a survey on the given grid."""
    spec = _grid_spec(grid_record)
    if isinstance(grid_record, SurveyGrid):
        grid_id = grid_record.id
        center = grid_record.center
    else:
        grid_id = record_int(grid_record, "id")
        lat = record_float(grid_record, "centerLat")
        lon = record_float(grid_record, "centerLon")
        center = GeoPoint(lat, lon) if lat is not None and lon is not None else None

    if spec is None:
        return SurveyOverlay(grid_id=grid_id, center=center)

    cells = build_cells(spec)
    return SurveyOverlay(
        grid_id=grid_id,
        center=center,
        points=[cell.center for cell in cells],
        cells=cells,
    )


def preview_lattice(
    center: Union[GeoPoint, Sequence[float]],
    spacing_meters: Optional[float] = None,
    rows: int = DEFAULT_ROWS,
    cols: int = DEFAULT_COLS,
) -> List[GeoPoint]:
    """Lattice shown while a grid is being authored."""
    return GridSpec.from_meters(center, spacing_meters, rows, cols).points()


def boundary_center(vertices: Sequence[Union[GeoPoint, Sequence[float]]]) -> GeoPoint:
    """
    Centre for a grid drawn by boundary: the mean of its vertices.

    Raises:
        InvalidSpecError: If fewer than three vertices are given
    """
    points = [GeoPoint.coerce(v) for v in vertices]
    if len(points) < 3:
        raise InvalidSpecError(
            f"A boundary needs at least 3 vertices, got {len(points)}"
        )
    return centroid(points)


def create_grid(
    project_id: int,
    name: str,
    center: Optional[Union[GeoPoint, Sequence[float]]] = None,
    spacing_meters: Optional[float] = None,
    rows: int = DEFAULT_ROWS,
    cols: int = DEFAULT_COLS,
    description: Optional[str] = None,
    boundary: Optional[Sequence[Union[GeoPoint, Sequence[float]]]] = None,
    created_at: Optional[datetime] = None,
) -> SurveyGrid:
    """
    Author a new grid record.

    Either a centre or a boundary (three or more vertices) must be given;
    with only a boundary the lattice is centred on the boundary's vertex mean.
    The returned record reloads to exactly the lattice previewed here.

    Raises:
        RecordError: If the name is blank
        InvalidSpecError: If the lattice parameters are invalid or no centre can be found
    """
    if not name or not name.strip():
        raise RecordError("Please enter a grid name")

    boundary_points = [GeoPoint.coerce(v) for v in boundary] if boundary else []
    if center is None:
        if not boundary_points:
            raise InvalidSpecError("A grid needs a centre point or a boundary")
        center = boundary_center(boundary_points)
    center = GeoPoint.coerce(center)

    if spacing_meters is None:
        spacing_meters = DEFAULT_SPACING_METERS

    spec = GridSpec.from_meters(center, spacing_meters, rows, cols)
    lattice = spec.points()
    if not lattice:
        raise InvalidSpecError(f"Grid '{name}' has no points ({spec.rows} rows x {spec.cols} cols)")

    return SurveyGrid(
        project_id=project_id,
        name=name.strip(),
        description=description,
        created_at=created_at or datetime.now(),
        spacing=float(spacing_meters),
        rows=spec.rows,
        cols=spec.cols,
        points=len(lattice),
        center_lat=spec.center.latitude,
        center_lon=spec.center.longitude,
        boundary_points_json=serialize_boundary_points(boundary_points) if boundary_points else None,
    )
