"""Utility modules."""

from .visualization import plot_lattice, save_figure

__all__ = ["plot_lattice", "save_figure"]
