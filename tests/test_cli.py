"""Tests for the command line interface."""

from __future__ import annotations

from click.testing import CliRunner

from kairaus.cli import cli


class TestCli:
    def test_parse(self, two_soundings_path):
        result = CliRunner().invoke(cli, ["parse", str(two_soundings_path)])
        assert result.exit_code == 0
        assert "Investigations: 2" in result.output

    def test_parse_strict_failure(self, tmp_path):
        path = tmp_path / "bad.txt"
        path.write_text("1.0 3 Sa\n-1\n", encoding="utf-8")
        result = CliRunner().invoke(cli, ["parse", "--strict", str(path)])
        assert result.exit_code != 0
        assert "line 1" in result.output

    def test_count(self, fixtures_dir):
        result = CliRunner().invoke(cli, ["count", "--workers", "1", str(fixtures_dir)])
        assert result.exit_code == 0
        assert "PA" in result.output
        assert "NO" in result.output
