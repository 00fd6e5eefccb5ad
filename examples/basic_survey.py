"""
Basic Survey Grid Example

This example demonstrates:
1. Authoring a grid around a centre point
2. Storing it as a plain record
3. Rebuilding the lattice when a survey starts
4. Walking the cells in snake order and tracking coverage

Run from the project root:
    python examples/basic_survey.py
"""

import sys
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from survey_grid.core.lattice import GeoPoint
from survey_grid.core.cells import optimize_survey_path, calculate_coverage
from survey_grid.core.records import SurveyGrid
from survey_grid.core.survey import create_grid, start_survey


def main():
    print("=" * 60)
    print("SURVEY GRID - EXAMPLE")
    print("=" * 60)

    # [1] Author a 5x5 grid with 10 m spacing
    print("\n[1] Creating grid...")
    grid = create_grid(
        project_id=1,
        name="Field 1",
        center=GeoPoint(52.2053, 0.1218),
        spacing_meters=10.0,
        rows=5,
        cols=5,
    )
    print(f"   {grid.name}: {grid.summary()}")
    print(f"   Approx. area: {grid.estimated_area_m2:,.0f} m^2")

    # [2] The persistence layer only keeps the parameters
    record = grid.to_dict()
    record["id"] = 1

    # [3] Starting a survey rebuilds the lattice from the stored record
    print("\n[2] Starting survey...")
    overlay = start_survey(SurveyGrid.from_dict(record))
    print(f"   Grid id: {overlay.grid_id}")
    print(f"   Points:  {len(overlay.points)}")

    # [4] Walk the first two rows
    print("\n[3] Walking cells in snake order...")
    path = optimize_survey_path(overlay.cells)
    for cell in path[:10]:
        cell.record_point()
        cell.complete()
        print(f"   {cell.id:>5}  {cell.center.latitude:.7f}, {cell.center.longitude:.7f}")

    print(f"\n   Coverage: {calculate_coverage(overlay.cells):.1f}%")
    print("=" * 60)


if __name__ == "__main__":
    main()
