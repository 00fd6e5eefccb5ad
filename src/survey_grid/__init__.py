"""
Survey Grid

A Python library for laying out regular lattices of sampling points
around a centre coordinate for field surveys.
"""

__version__ = "0.1.0"

from .core.lattice import GeoPoint, GridSpec, generate_lattice
from .core.units import meters_to_degrees
from .core.cells import GridCell, build_cells
from .core.records import SurveyGrid, SurveyProject
from .core.survey import compute_survey_lattice, start_survey, create_grid

__all__ = [
    "GeoPoint",
    "GridSpec",
    "generate_lattice",
    "meters_to_degrees",
    "GridCell",
    "build_cells",
    "SurveyGrid",
    "SurveyProject",
    "compute_survey_lattice",
    "start_survey",
    "create_grid",
]
