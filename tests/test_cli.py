"""
CLI command tests using Click's test runner.
"""

import csv
import json

import pytest

from survey_grid.cli import main


class TestCLIGenerate:
    """Test 'generate' command."""

    def test_generate_default(self, cli_runner):
        """7x7 lattice at 10 m by default."""
        result = cli_runner.invoke(main, ['generate', '--lat', '10.0', '--lon', '20.0'])

        assert result.exit_code == 0
        assert 'SURVEY LATTICE' in result.output
        assert 'Dimensions:     7 x 7' in result.output
        assert 'Points:         49' in result.output
        assert '(10.00 m)' in result.output

    def test_generate_points_listing(self, cli_runner):
        result = cli_runner.invoke(main, [
            'generate', '--lat', '10.0', '--lon', '20.0',
            '--rows', '2', '--cols', '3', '--points',
        ])

        assert result.exit_code == 0
        assert '1_2' in result.output
        assert '2_0' not in result.output

    def test_generate_snake_order(self, cli_runner):
        result = cli_runner.invoke(main, [
            'generate', '--lat', '10.0', '--lon', '20.0', '-r', '3', '-c', '3', '--snake',
        ])

        assert result.exit_code == 0
        assert result.output.index('1_2') < result.output.index('1_0')
        assert result.output.index('2_0') < result.output.index('2_2')

    def test_generate_negative_rows(self, cli_runner):
        result = cli_runner.invoke(main, [
            'generate', '--lat', '10.0', '--lon', '20.0', '--rows=-1',
        ])

        assert result.exit_code != 0
        assert 'cannot be negative' in result.output

    def test_generate_zero_spacing(self, cli_runner):
        result = cli_runner.invoke(main, [
            'generate', '--lat', '10.0', '--lon', '20.0', '--spacing', '0',
        ])

        assert result.exit_code != 0
        assert 'must be positive' in result.output

    def test_generate_invalid_latitude(self, cli_runner):
        result = cli_runner.invoke(main, ['generate', '--lat', '95', '--lon', '20.0'])

        assert result.exit_code != 0
        assert 'latitude must be between' in result.output

    def test_generate_missing_center(self, cli_runner):
        result = cli_runner.invoke(main, ['generate', '--lat', '10.0'])

        assert result.exit_code != 0

    def test_generate_csv(self, cli_runner, tmp_path):
        output_csv = tmp_path / "points.csv"
        result = cli_runner.invoke(main, [
            'generate', '--lat', '10.0', '--lon', '20.0', '-r', '3', '-c', '3',
            '--csv', str(output_csv),
        ])

        assert result.exit_code == 0
        assert output_csv.exists()
        with open(output_csv, newline='') as f:
            rows = list(csv.reader(f))
        assert len(rows) == 10

    def test_generate_geojson_and_summary(self, cli_runner, tmp_path):
        output_geojson = tmp_path / "cells.geojson"
        output_json = tmp_path / "summary.json"
        result = cli_runner.invoke(main, [
            'generate', '--lat', '10.0', '--lon', '20.0', '-r', '3', '-c', '3',
            '--geojson', str(output_geojson),
            '--output', str(output_json),
        ])

        assert result.exit_code == 0
        with open(output_geojson) as f:
            assert len(json.load(f)['features']) == 9
        with open(output_json) as f:
            data = json.load(f)
        assert data['points'] == 9
        assert len(data['lattice']) == 9

    def test_generate_unwritable_output(self, cli_runner, tmp_path):
        result = cli_runner.invoke(main, [
            'generate', '--lat', '10.0', '--lon', '20.0',
            '--csv', str(tmp_path / "missing" / "points.csv"),
        ])

        assert result.exit_code != 0
        assert 'does not exist' in result.output

    @pytest.mark.requires_matplotlib
    def test_generate_plot(self, cli_runner, tmp_path):
        output_png = tmp_path / "lattice.png"
        result = cli_runner.invoke(main, [
            'generate', '--lat', '10.0', '--lon', '20.0', '--snake',
            '--plot', str(output_png),
        ])

        assert result.exit_code == 0
        assert output_png.exists()

    @pytest.mark.requires_matplotlib
    def test_generate_plot_write_failure(self, cli_runner, tmp_path, monkeypatch):
        from survey_grid.utils import visualization

        def fail_save(figure, filepath, dpi=150):
            raise OSError("disk full")

        monkeypatch.setattr(visualization, "save_figure", fail_save)
        result = cli_runner.invoke(main, [
            'generate', '--lat', '10.0', '--lon', '20.0',
            '--plot', str(tmp_path / "lattice.png"),
        ])

        assert result.exit_code == 1
        assert 'Error saving plot: disk full' in result.output


class TestCLISurvey:
    """Test 'survey' command."""

    def test_survey_grid_file(self, cli_runner, grid_file):
        result = cli_runner.invoke(main, ['survey', str(grid_file)])

        assert result.exit_code == 0
        assert 'North field (id 3)' in result.output
        assert '10 m · 3×3 · 9 points' in result.output
        assert 'Points:         9' in result.output

    def test_survey_missing_inputs(self, cli_runner, tmp_path, grid_record):
        grid_record['centerLat'] = None
        path = tmp_path / "grid.json"
        path.write_text(json.dumps(grid_record), encoding='utf-8')

        result = cli_runner.invoke(main, ['survey', str(path)])

        assert result.exit_code == 0
        assert 'no lattice to survey' in result.output

    def test_survey_point_count_mismatch_warns(self, cli_runner, tmp_path, grid_record):
        grid_record['points'] = 12
        path = tmp_path / "grid.json"
        path.write_text(json.dumps(grid_record), encoding='utf-8')

        result = cli_runner.invoke(main, ['survey', str(path)])

        assert result.exit_code == 0
        assert 'record lists 12 points' in result.output

    def test_survey_malformed_record(self, cli_runner, tmp_path, grid_record):
        grid_record['rows'] = 'three'
        path = tmp_path / "grid.json"
        path.write_text(json.dumps(grid_record), encoding='utf-8')

        result = cli_runner.invoke(main, ['survey', str(path)])

        assert result.exit_code != 0
        assert "'rows' must be an integer" in result.output

    def test_survey_invalid_json(self, cli_runner, tmp_path):
        path = tmp_path / "grid.json"
        path.write_text("{not json", encoding='utf-8')

        result = cli_runner.invoke(main, ['survey', str(path)])

        assert result.exit_code != 0
        assert 'Error reading grid file' in result.output

    def test_survey_missing_file(self, cli_runner):
        result = cli_runner.invoke(main, ['survey', 'nonexistent.json'])

        assert result.exit_code != 0

    def test_survey_csv(self, cli_runner, grid_file, tmp_path):
        output_csv = tmp_path / "points.csv"
        result = cli_runner.invoke(main, ['survey', str(grid_file), '--csv', str(output_csv)])

        assert result.exit_code == 0
        assert len(output_csv.read_text().splitlines()) == 10


class TestCLIConvert:
    """Test 'convert' command."""

    def test_convert_one_degree(self, cli_runner):
        result = cli_runner.invoke(main, ['convert', '111320'])

        assert result.exit_code == 0
        assert '1.0000000000 deg' in result.output

    def test_convert_ten_meters(self, cli_runner):
        result = cli_runner.invoke(main, ['convert', '10'])

        assert result.exit_code == 0
        assert '0.0000898311 deg' in result.output

    def test_convert_zero(self, cli_runner):
        result = cli_runner.invoke(main, ['convert', '0'])

        assert result.exit_code != 0
        assert 'must be positive' in result.output
