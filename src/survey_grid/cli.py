"""
Command Line Interface for Survey Grid Generation

Usage:
    survey-grid generate --lat <lat> --lon <lon> [--spacing <m>] [--rows <n>] [--cols <n>]
    survey-grid survey <grid.json>
    survey-grid convert <meters>
"""

import json
import sys
from typing import Optional

import click

from .core.cells import build_cells, optimize_survey_path
from .core.lattice import GeoPoint, GridSpec
from .core.records import SurveyGrid
from .core.survey import DEFAULT_ROWS, DEFAULT_COLS
from .core.units import DEFAULT_SPACING_METERS, METERS_PER_DEGREE, meters_to_degrees
from .core.validation import ValidationError, validate_output_path


@click.group()
@click.version_option(version="0.1.0")
def main():
    """Survey Grid Generator

    Lay out regular lattices of sampling points for field surveys
    and rebuild them from stored grid records.
    """
    pass


def _print_lattice_summary(spec: GridSpec) -> None:
    min_lat, min_lon, max_lat, max_lon = spec.bounds
    click.echo("\n" + "=" * 50)
    click.echo("SURVEY LATTICE")
    click.echo("=" * 50)
    click.echo(f"Centre:         {spec.center.latitude:.8f}, {spec.center.longitude:.8f}")
    click.echo(f"Dimensions:     {spec.rows} x {spec.cols}")
    click.echo(f"Points:         {spec.num_points:,}")
    click.echo(f"Spacing:        {spec.spacing:.10f} deg ({spec.spacing * METERS_PER_DEGREE:.2f} m)")
    if spec.num_points:
        click.echo(f"")
        click.echo(f"Extent:")
        click.echo(f"  Latitude:     {min_lat:.8f} to {max_lat:.8f}")
        click.echo(f"  Longitude:    {min_lon:.8f} to {max_lon:.8f}")
    click.echo("=" * 50)


def _write_outputs(
    spec: GridSpec,
    csv_path: Optional[str],
    geojson_path: Optional[str],
    properties: Optional[dict] = None,
) -> None:
    """Write optional CSV/GeoJSON outputs, exiting on failure."""
    if csv_path:
        try:
            from .io.exporters import export_lattice_csv
            path = validate_output_path(csv_path, "CSV output")
            export_lattice_csv(spec.points(), path, cols=spec.cols)
            click.echo(f"Lattice exported to: {csv_path}")
        except (ValidationError, OSError) as e:
            click.echo(f"Error exporting CSV: {e}", err=True)
            sys.exit(1)

    if geojson_path:
        try:
            from .io.exporters import export_cells_geojson
            path = validate_output_path(geojson_path, "GeoJSON output")
            export_cells_geojson(build_cells(spec), path, properties=properties)
            click.echo(f"Cells exported to: {geojson_path}")
        except (ValidationError, OSError) as e:
            click.echo(f"Error exporting GeoJSON: {e}", err=True)
            sys.exit(1)


@main.command()
@click.option('--lat', required=True, type=float, help='Centre latitude (decimal degrees)')
@click.option('--lon', required=True, type=float, help='Centre longitude (decimal degrees)')
@click.option('--spacing', '-s', default=DEFAULT_SPACING_METERS, type=float,
              help=f'Point spacing in meters (default: {DEFAULT_SPACING_METERS:g})')
@click.option('--rows', '-r', default=DEFAULT_ROWS, type=int, help=f'Number of rows (default: {DEFAULT_ROWS})')
@click.option('--cols', '-c', default=DEFAULT_COLS, type=int, help=f'Number of columns (default: {DEFAULT_COLS})')
@click.option('--points/--no-points', default=False, help='List every lattice point')
@click.option('--snake', is_flag=True, help='List points in snake walking order')
@click.option('--csv', 'csv_path', type=click.Path(), help='Export lattice points to CSV file')
@click.option('--geojson', 'geojson_path', type=click.Path(), help='Export cells to GeoJSON')
@click.option('--output', '-o', type=click.Path(), help='Output JSON file for summary')
@click.option('--plot', type=click.Path(), help='Save lattice plot to PNG/PDF file')
def generate(
    lat: float,
    lon: float,
    spacing: float,
    rows: int,
    cols: int,
    points: bool,
    snake: bool,
    csv_path: Optional[str],
    geojson_path: Optional[str],
    output: Optional[str],
    plot: Optional[str],
):
    """Generate a survey lattice around a centre point.

    Examples:

        # 7x7 lattice with 10 m spacing
        survey-grid generate --lat 51.5 --lon -0.12

        # 3x5 lattice with 25 m spacing, saved as GeoJSON
        survey-grid generate --lat 51.5 --lon -0.12 -s 25 -r 3 -c 5 --geojson grid.geojson
    """
    try:
        spec = GridSpec.from_meters(GeoPoint(lat, lon), spacing, rows, cols)
        lattice = spec.points()
    except ValidationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _print_lattice_summary(spec)

    if points or snake:
        click.echo("")
        if snake:
            for cell in optimize_survey_path(build_cells(spec)):
                click.echo(f"  {cell.id:>7}  {cell.center.latitude:.8f}  {cell.center.longitude:.8f}")
        else:
            for index, point in enumerate(lattice):
                row, col = divmod(index, spec.cols)
                click.echo(f"  {row}_{col:<5}  {point.latitude:.8f}  {point.longitude:.8f}")

    _write_outputs(spec, csv_path, geojson_path)

    if output:
        try:
            from .io.exporters import export_summary_json
            output_path = validate_output_path(output, "output JSON file")
            export_summary_json(spec, output_path, include_points=True)
            click.echo(f"\nSummary saved to: {output}")
        except (ValidationError, OSError) as e:
            click.echo(f"Error saving output: {e}", err=True)
            sys.exit(1)

    if plot:
        try:
            from .utils.visualization import plot_lattice, save_figure
            path = validate_output_path(plot, "plot")
            fig = plot_lattice(lattice, cells=build_cells(spec), center=spec.center, show_path=snake)
            save_figure(fig, str(path))
            click.echo(f"Plot saved to: {plot}")
        except ImportError:
            click.echo("Warning: matplotlib required for plotting", err=True)
        except (ValidationError, OSError) as e:
            click.echo(f"Error saving plot: {e}", err=True)
            sys.exit(1)


@main.command()
@click.argument('grid_file', type=click.Path(exists=True))
@click.option('--csv', 'csv_path', type=click.Path(), help='Export lattice points to CSV file')
@click.option('--geojson', 'geojson_path', type=click.Path(), help='Export cells to GeoJSON')
def survey(grid_file: str, csv_path: Optional[str], geojson_path: Optional[str]):
    """Rebuild the survey lattice for a stored grid record.

    GRID_FILE is a JSON object with the stored grid fields
    (projectId, name, createdAt, spacing, rows, cols, centerLat, centerLon).

    Example:
        survey-grid survey grid.json --csv points.csv
    """
    try:
        with open(grid_file, 'r', encoding='utf-8') as f:
            record = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        click.echo(f"Error reading grid file: {e}", err=True)
        sys.exit(1)

    if not isinstance(record, dict):
        click.echo("Error: grid file must contain a JSON object", err=True)
        sys.exit(1)

    try:
        grid = SurveyGrid.from_dict(record)
        spec = grid.to_spec()
    except ValidationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Grid:           {grid.name}" + (f" (id {grid.id})" if grid.id is not None else ""))
    summary = grid.summary()
    if summary:
        click.echo(f"Parameters:     {summary}")

    if spec is None:
        click.echo("Grid has no centre, spacing, rows or cols; no lattice to survey.")
        return

    if grid.points is not None and grid.points != spec.num_points:
        click.echo(
            f"Warning: record lists {grid.points} points but the lattice has {spec.num_points}",
            err=True
        )

    _print_lattice_summary(spec)
    _write_outputs(spec, csv_path, geojson_path, properties={"grid_id": grid.id, "name": grid.name})


@main.command()
@click.argument('meters', type=float)
def convert(meters: float):
    """Convert a spacing in meters to decimal degrees.

    Uses the fixed approximation of 111320 m per degree.
    """
    try:
        degrees = meters_to_degrees(meters)
    except ValidationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"{meters:g} m = {degrees:.10f} deg")


if __name__ == '__main__':
    main()
