"""Tests for the rtameter command line."""

import json

from click.testing import CliRunner

from rtameter.__main__ import main
from rtameter.config import MeterConfig


class TestSnapshot:

    def test_renders_frame(self):
        result = CliRunner().invoke(
            main, ["snapshot", "--width", "10", "--height", "10",
                   "--values", "1.0", "--frequencies", "1000", "--no-labels"],
        )
        assert result.exit_code == 0, result.output
        assert "1k" in result.output
        assert "█" in result.output

    def test_db_values(self):
        result = CliRunner().invoke(
            main, ["snapshot", "--width", "30", "--height", "10",
                   "--values=-30,-6", "--frequencies", "100,1000", "--db"],
        )
        assert result.exit_code == 0, result.output
        assert "Peak: -6.00dB" in result.output

    def test_default_frequencies(self):
        result = CliRunner().invoke(main, ["snapshot", "--width", "30", "--height", "8", "--values", "0.2,0.4"])
        assert result.exit_code == 0, result.output
        assert "20k" in result.output

    def test_mismatched_frequencies(self):
        result = CliRunner().invoke(main, ["snapshot", "--values", "0.1,0.2", "--frequencies", "100"])
        assert result.exit_code == 2

    def test_missing_values(self):
        result = CliRunner().invoke(main, ["snapshot"])
        assert result.exit_code == 1
        assert "No band values" in result.output

    def test_bad_number(self):
        result = CliRunner().invoke(main, ["snapshot", "--values", "0.1,loud"])
        assert result.exit_code == 2

    def test_non_negative_floor(self):
        result = CliRunner().invoke(main, ["snapshot", "--values", "0.1", "--min-db", "3"])
        assert result.exit_code == 2

    def test_infinite_floor(self):
        result = CliRunner().invoke(main, ["snapshot", "--values", "0.1", "--min-db=-inf"])
        assert result.exit_code == 2


class TestDemo:

    def test_invalid_config_exits(self, tmp_path):
        result = CliRunner().invoke(
            main, ["demo", "--config", str(tmp_path / "none.json"), "--min-db", "5"],
        )
        assert result.exit_code == 1
        assert "Invalid min_db" in result.output

    def test_unreadable_config_exits(self, tmp_path):
        path = tmp_path / "meter.json"
        path.write_text(json.dumps({"min_db": "quiet"}))
        result = CliRunner().invoke(main, ["demo", "--config", str(path)])
        assert result.exit_code == 1
        assert "Invalid min_db in config" in result.output

    def test_malformed_json_exits(self, tmp_path):
        path = tmp_path / "meter.json"
        path.write_text("{min_db: -60")
        result = CliRunner().invoke(main, ["demo", "--config", str(path)])
        assert result.exit_code == 1
        assert "cannot read" in result.output


class TestInitConfig:

    def test_writes_defaults(self, tmp_path):
        path = tmp_path / "meter.json"
        result = CliRunner().invoke(main, ["init-config", "--path", str(path)])
        assert result.exit_code == 0
        assert MeterConfig.load(path) == MeterConfig()

    def test_refuses_to_overwrite(self, tmp_path):
        path = tmp_path / "meter.json"
        path.write_text("{}")
        result = CliRunner().invoke(main, ["init-config", "--path", str(path)])
        assert result.exit_code == 1
        assert path.read_text() == "{}"

    def test_force_overwrites(self, tmp_path):
        path = tmp_path / "meter.json"
        path.write_text("{}")
        result = CliRunner().invoke(main, ["init-config", "--path", str(path), "--force"])
        assert result.exit_code == 0
        assert "min_db" in path.read_text()
