"""
Visualization Utilities

Plotting functions for survey lattices, cells and walking paths.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple, TYPE_CHECKING

import numpy as np

try:
    import matplotlib.pyplot as plt
    from matplotlib.patches import Polygon as MplPolygon
    HAS_MATPLOTLIB = True
except ImportError:
    HAS_MATPLOTLIB = False

if TYPE_CHECKING:
    from ..core.lattice import GeoPoint
    from ..core.cells import GridCell


def require_matplotlib():
    if not HAS_MATPLOTLIB:
        raise ImportError("matplotlib is required. Install with: pip install matplotlib")


# Face colours by CellStatus name
STATUS_COLORS = {
    "NOT_STARTED": (0.85, 0.85, 0.85, 0.4),
    "IN_PROGRESS": (1.0, 0.75, 0.2, 0.5),
    "COMPLETED": (0.3, 0.7, 0.3, 0.5),
}


def plot_lattice(
    points: Sequence['GeoPoint'],
    cells: Optional[Sequence['GridCell']] = None,
    ax: Optional['plt.Axes'] = None,
    title: str = "Survey Lattice",
    center: Optional['GeoPoint'] = None,
    boundary: Optional[Sequence['GeoPoint']] = None,
    show_path: bool = False,
    figsize: Tuple[int, int] = (8, 8),
) -> 'plt.Figure':
    """
    Plot lattice points, optionally with their cells and snake walking path.

    Args:
        points: Lattice points in row-major order
        cells: Optional cells to draw, coloured by status
        ax: Optional matplotlib axes (creates new figure if None)
        title: Plot title
        center: Optional centre marker
        boundary: Optional boundary polygon vertices
        show_path: Draw the snake survey path through the cells
        figsize: Figure size if creating new figure

    Returns:
        matplotlib Figure
    """
    require_matplotlib()

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    if cells:
        for cell in cells:
            patch = MplPolygon(
                [corner.to_lonlat() for corner in cell.bounds],
                closed=True,
                facecolor=STATUS_COLORS[cell.status.name],
                edgecolor='gray',
                linewidth=0.5,
            )
            ax.add_patch(patch)

    if len(points) > 0:
        coords = np.array([p.to_lonlat() for p in points])
        ax.scatter(coords[:, 0], coords[:, 1], s=12, c='navy', zorder=3, label='Survey points')

    if show_path and cells:
        from ..core.cells import optimize_survey_path

        path = np.array([c.center.to_lonlat() for c in optimize_survey_path(cells)])
        ax.plot(path[:, 0], path[:, 1], 'b--', linewidth=1, alpha=0.7, label='Walking path')

    if boundary:
        ring = [v.to_lonlat() for v in boundary]
        ring.append(ring[0])
        xs, ys = zip(*ring)
        ax.plot(xs, ys, 'r-', linewidth=2, label='Boundary')

    if center is not None:
        ax.plot(center.longitude, center.latitude, 'r+', markersize=14, mew=2, label='Centre')

    ax.set_xlabel('Longitude')
    ax.set_ylabel('Latitude')
    ax.set_title(title)
    ax.set_aspect('equal', adjustable='datalim')
    ax.autoscale_view()
    if ax.get_legend_handles_labels()[0]:
        ax.legend(loc='upper right', fontsize=8)

    return fig


def save_figure(
    figure: 'plt.Figure',
    filepath: str,
    dpi: int = 150,
) -> None:
    """Save figure to file."""
    figure.savefig(filepath, dpi=dpi, bbox_inches='tight')
    plt.close(figure)
