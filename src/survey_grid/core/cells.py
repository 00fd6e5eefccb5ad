"""
Survey Cells

Each lattice point owns a square cell of side `spacing` that a surveyor
walks and marks as started or completed.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Sequence

from shapely.geometry import Polygon

from .lattice import GeoPoint, GridSpec


class CellStatus(Enum):
    """Progress of a single survey cell."""
    NOT_STARTED = 0
    IN_PROGRESS = 1
    COMPLETED = 2


@dataclass
class GridCell:
    """
    A square survey cell around one lattice point.

    Attributes:
        id: "<row>_<col>" position in the lattice
        center: Lattice point at the middle of the cell
        bounds: Corners in order SW, SE, NE, NW
        status: Survey progress
        point_count: Readings recorded inside the cell
    """
    id: str
    center: GeoPoint
    bounds: List[GeoPoint]
    status: CellStatus = CellStatus.NOT_STARTED
    start_time: Optional[datetime] = None
    completed_time: Optional[datetime] = None
    point_count: int = 0
    notes: Optional[str] = None

    @property
    def row(self) -> int:
        return int(self.id.split("_")[0])

    @property
    def col(self) -> int:
        return int(self.id.split("_")[1])

    @property
    def polygon(self) -> Polygon:
        """Cell outline as a shapely Polygon in (lon, lat) order."""
        return Polygon([corner.to_lonlat() for corner in self.bounds])

    def start(self, when: Optional[datetime] = None) -> None:
        if self.status is CellStatus.NOT_STARTED:
            self.status = CellStatus.IN_PROGRESS
            self.start_time = when or datetime.now()

    def complete(self, when: Optional[datetime] = None) -> None:
        when = when or datetime.now()
        if self.start_time is None:
            self.start_time = when
        self.status = CellStatus.COMPLETED
        self.completed_time = when

    def record_point(self) -> None:
        """Count a reading taken in this cell, starting it if needed."""
        self.start()
        self.point_count += 1

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "centerLat": self.center.latitude,
            "centerLon": self.center.longitude,
            "bounds": [{"lat": p.latitude, "lon": p.longitude} for p in self.bounds],
            "status": self.status.value,
            "startTime": self.start_time.isoformat() if self.start_time else None,
            "completedTime": self.completed_time.isoformat() if self.completed_time else None,
            "pointCount": self.point_count,
            "notes": self.notes,
        }


def cell_bounds(center: GeoPoint, spacing: float) -> List[GeoPoint]:
    """Corners of the square of side `spacing` centred on `center`."""
    half = spacing / 2
    return [
        GeoPoint(center.latitude - half, center.longitude - half),
        GeoPoint(center.latitude - half, center.longitude + half),
        GeoPoint(center.latitude + half, center.longitude + half),
        GeoPoint(center.latitude + half, center.longitude - half),
    ]


def build_cells(spec: GridSpec) -> List[GridCell]:
    """One cell per lattice point, in the same row-major order as spec.points()."""
    points = spec.points()
    cells = []
    for index, point in enumerate(points):
        row, col = divmod(index, spec.cols)
        cells.append(GridCell(
            id=f"{row}_{col}",
            center=point,
            bounds=cell_bounds(point, spec.spacing),
        ))
    return cells


def optimize_survey_path(cells: Sequence[GridCell]) -> List[GridCell]:
    """
    Reorder cells into a snake (boustrophedon) walking path.

    Rows are visited in ascending order; even rows run west to east and odd
    rows east to west.
    """
    rows: Dict[int, List[GridCell]] = {}
    for cell in cells:
        rows.setdefault(cell.row, []).append(cell)

    path = []
    for position, row in enumerate(sorted(rows)):
        ordered = sorted(rows[row], key=lambda c: c.col)
        if position % 2 == 1:
            ordered.reverse()
        path.extend(ordered)
    return path


def calculate_coverage(cells: Sequence[GridCell]) -> float:
    """Percentage of cells marked completed (0.0 for no cells)."""
    if not cells:
        return 0.0
    completed = sum(1 for c in cells if c.status is CellStatus.COMPLETED)
    return completed / len(cells) * 100
