"""
Export utilities for survey lattices.

Provides CSV, GeoJSON and JSON summary exports.
Uses only standard library for CSV/JSON to avoid dependencies.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Dict, Any, List, Sequence

if TYPE_CHECKING:
    from ..core.lattice import GeoPoint, GridSpec
    from ..core.cells import GridCell


WGS84 = "EPSG:4326"


def export_lattice_csv(
    points: Sequence['GeoPoint'],
    filepath: str,
    cols: int,
    include_header: bool = True,
) -> None:
    """
    Export lattice points to CSV.

    Columns: index, row, col, latitude, longitude

    Args:
        points: Lattice in row-major order
        filepath: Output CSV file path
        cols: Number of columns in the lattice (to recover row/col)
        include_header: Whether to include column header row (default: True)
    """
    filepath = Path(filepath)

    with open(filepath, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)

        if include_header:
            writer.writerow(['index', 'row', 'col', 'latitude', 'longitude'])

        for index, point in enumerate(points):
            row, col = divmod(index, cols)
            writer.writerow([
                index, row, col,
                f"{point.latitude:.8f}",
                f"{point.longitude:.8f}",
            ])


def cells_feature_collection(
    cells: Sequence['GridCell'],
    properties: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Build a GeoJSON FeatureCollection with one polygon per cell.

    Coordinates are [longitude, latitude] as GeoJSON requires.
    """
    features: List[Dict[str, Any]] = []

    for index, cell in enumerate(cells):
        features.append({
            "type": "Feature",
            "id": f"GRID_{index + 1}",
            "geometry": cell.polygon.__geo_interface__,
            "properties": {
                "cell_id": cell.id,
                "grid_index": index + 1,
                "center_lat": cell.center.latitude,
                "center_lon": cell.center.longitude,
                "status": cell.status.name.lower(),
                "point_count": cell.point_count,
                "notes": cell.notes,
            }
        })

    return {
        "type": "FeatureCollection",
        "crs": {
            "type": "name",
            "properties": {"name": WGS84}
        },
        "properties": properties or {},
        "features": features,
    }


def export_cells_geojson(
    cells: Sequence['GridCell'],
    filepath: str,
    properties: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Export survey cells as GeoJSON polygons.

    Args:
        cells: Cells from build_cells() or a SurveyOverlay
        filepath: Output GeoJSON file path
        properties: Optional collection-level properties
    """
    geojson = cells_feature_collection(cells, properties)

    with open(filepath, 'w', encoding='utf-8') as f:
        json.dump(geojson, f, indent=2)


def lattice_summary(spec: 'GridSpec') -> Dict[str, Any]:
    """Describe a lattice for reports and JSON output."""
    from ..core.units import degrees_to_meters

    min_lat, min_lon, max_lat, max_lon = spec.bounds
    return {
        "center": {"lat": spec.center.latitude, "lon": spec.center.longitude},
        "rows": spec.rows,
        "cols": spec.cols,
        "points": spec.num_points,
        "spacing_degrees": spec.spacing,
        "spacing_meters": degrees_to_meters(spec.spacing),
        "bounds": {
            "min_lat": min_lat,
            "min_lon": min_lon,
            "max_lat": max_lat,
            "max_lon": max_lon,
        },
    }


def export_summary_json(
    spec: 'GridSpec',
    filepath: str,
    include_points: bool = False,
    indent: int = 2,
) -> None:
    """
    Export lattice summary to JSON.

    Args:
        spec: GridSpec describing the lattice
        filepath: Output JSON file path
        include_points: Include every lattice point (can be large)
        indent: JSON indentation level (default: 2)
    """
    data = lattice_summary(spec)

    if include_points:
        data['lattice'] = [
            {'lat': p.latitude, 'lon': p.longitude}
            for p in spec.points()
        ]

    with open(filepath, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=indent)
