"""Core data structures and algorithms."""

from .lattice import GeoPoint, GridSpec, generate_lattice
from .units import meters_to_degrees, METERS_PER_DEGREE, DEFAULT_SPACING_METERS
from .survey import compute_survey_lattice, start_survey

__all__ = [
    "GeoPoint",
    "GridSpec",
    "generate_lattice",
    "meters_to_degrees",
    "METERS_PER_DEGREE",
    "DEFAULT_SPACING_METERS",
    "compute_survey_lattice",
    "start_survey",
]
