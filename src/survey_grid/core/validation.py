"""
Input Validation Module

Provides validation functions and custom exceptions for the survey_grid package.
All validation functions provide clear, actionable error messages.
"""

from __future__ import annotations

import math
import numbers
import os
import warnings
from pathlib import Path
from typing import Tuple, Union


# Lattices beyond this many points are legal but unusual for a walked survey
MAX_POINTS_WARNING = 100_000


class ValidationError(ValueError):
    """Base exception for validation errors with user-friendly messages."""
    pass


class InvalidSpecError(ValidationError):
    """Grid dimensions or spacing cannot describe a lattice."""
    pass


class RecordError(ValidationError):
    """An untyped grid/project record has a malformed field."""
    pass


class FilePermissionError(ValidationError):
    """Cannot write to specified path."""
    pass


def validate_spacing(spacing: float, context: str = "spacing") -> float:
    """
    Validate spacing is a positive number.

    Args:
        spacing: The spacing value to validate
        context: Description of what this spacing is for (used in error messages)

    Returns:
        The validated spacing as a float

    Raises:
        InvalidSpecError: If spacing is None, not a number, <= 0, or infinite
    """
    if spacing is None:
        raise InvalidSpecError(f"{context} cannot be None")

    if isinstance(spacing, bool) or not isinstance(spacing, numbers.Real):
        raise InvalidSpecError(
            f"{context} must be a number, got {type(spacing).__name__}"
        )

    if not spacing > 0:
        raise InvalidSpecError(
            f"{context} must be positive, got {spacing}. "
            "Typical survey spacings are 1-50 meters."
        )

    if not math.isfinite(spacing):
        raise InvalidSpecError(f"{context} must be finite, got {spacing}")

    return float(spacing)


def validate_count(count: int, context: str = "count") -> int:
    """
    Validate a row/column count is a non-negative integer.

    Zero is accepted and yields an empty lattice.

    Raises:
        InvalidSpecError: If count is None, not an integer, or negative
    """
    if count is None:
        raise InvalidSpecError(f"{context} cannot be None")

    if isinstance(count, bool) or not isinstance(count, numbers.Integral):
        raise InvalidSpecError(
            f"{context} must be an integer, got {type(count).__name__}"
        )

    if count < 0:
        raise InvalidSpecError(f"{context} cannot be negative, got {count}")

    return int(count)


def validate_coordinate(latitude: float, longitude: float) -> Tuple[float, float]:
    """
    Validate a latitude/longitude pair in decimal degrees.

    Raises:
        ValidationError: If either value is missing, not a number, or out of range
    """
    for name, value in (("latitude", latitude), ("longitude", longitude)):
        if value is None:
            raise ValidationError(f"{name} cannot be None")
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise ValidationError(
                f"{name} must be a number, got {type(value).__name__}"
            )

    if not -90.0 <= latitude <= 90.0:
        raise ValidationError(
            f"latitude must be between -90 and 90 degrees, got {latitude}"
        )
    if not -180.0 <= longitude <= 180.0:
        raise ValidationError(
            f"longitude must be between -180 and 180 degrees, got {longitude}"
        )

    return float(latitude), float(longitude)


def validate_lattice_extent(
    bounds: Tuple[float, float, float, float],
    num_points: int,
) -> None:
    """
    Warn about lattices the generator will produce but that are unlikely to be intended.

    Args:
        bounds: (min_lat, min_lon, max_lat, max_lon) of the lattice
        num_points: Number of lattice points
    """
    min_lat, min_lon, max_lat, max_lon = bounds

    if min_lat < -90.0 or max_lat > 90.0 or min_lon < -180.0 or max_lon > 180.0:
        warnings.warn(
            f"Lattice extends beyond valid coordinates "
            f"(lat {min_lat:.6f} to {max_lat:.6f}, lon {min_lon:.6f} to {max_lon:.6f}). "
            "Coordinates are not wrapped at the poles or the antimeridian.",
            UserWarning,
            stacklevel=3
        )

    if num_points > MAX_POINTS_WARNING:
        warnings.warn(
            f"Creating very large lattice ({num_points:,} points). "
            "Consider a wider spacing or fewer rows/columns.",
            UserWarning,
            stacklevel=3
        )


def validate_output_path(filepath: Union[str, Path], context: str = "output file") -> Path:
    """
    Validate output path is writable before attempting to write.

    Args:
        filepath: The path to validate
        context: Description of what will be written (used in error messages)

    Returns:
        The validated path as a Path object

    Raises:
        FilePermissionError: If directory doesn't exist or isn't writable
    """
    path = Path(filepath)
    parent = path.parent

    # Handle empty parent (current directory)
    if str(parent) == '.':
        parent = Path.cwd()

    if not parent.exists():
        raise FilePermissionError(
            f"Cannot write {context}: directory '{parent}' does not exist. "
            "Create the directory first or specify a different path."
        )

    if not os.access(parent, os.W_OK):
        raise FilePermissionError(
            f"Cannot write {context}: no write permission for directory '{parent}'."
        )

    if path.exists() and not os.access(path, os.W_OK):
        raise FilePermissionError(
            f"Cannot overwrite {context}: file '{path}' exists but is not writable."
        )

    return path
