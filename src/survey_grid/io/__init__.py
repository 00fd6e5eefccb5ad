"""I/O modules for saving survey lattices."""

from .exporters import (
    export_lattice_csv,
    export_cells_geojson,
    export_summary_json,
    cells_feature_collection,
    lattice_summary,
)

__all__ = [
    "export_lattice_csv",
    "export_cells_geojson",
    "export_summary_json",
    "cells_feature_collection",
    "lattice_summary",
]
