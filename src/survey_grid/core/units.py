"""
Unit Conversion

Meters to decimal degrees using a single flat-earth constant. Both the grid
creation path and the survey start path convert through this module, so a
stored grid always reloads to the lattice it was authored with.
"""

from __future__ import annotations

from typing import Optional

from .validation import validate_spacing


# Mean length of one degree of latitude at the equator
METERS_PER_DEGREE = 111320.0

# Spacing assumed when a grid record has none
DEFAULT_SPACING_METERS = 10.0


def meters_to_degrees(spacing_meters: Optional[float] = None) -> float:
    """
    Convert a spacing in meters to an approximate spacing in degrees.

    The same value is used for latitude and longitude. No cos(latitude)
    correction is applied, so east-west spacing shrinks away from the equator.

    Args:
        spacing_meters: Spacing in meters (None uses DEFAULT_SPACING_METERS)

    Returns:
        Spacing in decimal degrees

    Raises:
        InvalidSpecError: If spacing is not a positive number
    """
    if spacing_meters is None:
        spacing_meters = DEFAULT_SPACING_METERS

    spacing_meters = validate_spacing(spacing_meters, "Grid spacing (meters)")
    return spacing_meters / METERS_PER_DEGREE


def degrees_to_meters(spacing_degrees: float) -> float:
    """Inverse of meters_to_degrees."""
    spacing_degrees = validate_spacing(spacing_degrees, "Grid spacing (degrees)")
    return spacing_degrees * METERS_PER_DEGREE
