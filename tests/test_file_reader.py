"""Tests for reading files from disk."""

from __future__ import annotations

import pytest

from kairaus.errors import InfraFileError
from kairaus.models.vocabulary import CoordinateSystem, MethodToken
from kairaus.parsers.file_reader import decode_bytes, parse_file, read_lines


class TestDecoding:
    def test_utf8_bom_stripped(self):
        text, encoding = decode_bytes("\ufeffFO 1".encode("utf-8"))
        assert text == "FO 1"
        assert encoding == "utf-8-sig"

    def test_latin1_fallback(self):
        text, encoding = decode_bytes("HM sävi".encode("iso-8859-1"))
        assert text == "HM sävi"
        assert encoding == "iso-8859-1"

    def test_blank_lines_dropped(self, tmp_path):
        path = tmp_path / "blank.txt"
        path.write_text("FO 1\n\n   \nTT HE\r\n-1\n", encoding="utf-8")
        lines, _ = read_lines(path)
        assert lines == ["FO 1", "TT HE", "-1"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(InfraFileError):
            read_lines(tmp_path / "nope.txt")


class TestParseFile:
    def test_two_soundings(self, two_soundings_path):
        infra = parse_file(two_soundings_path)
        assert infra.file_info.encoding == "utf-8-sig"
        assert infra.spatial.coordinate_system.value is CoordinateSystem.GK25
        assert [inv.method_token for inv in infra.investigations] == [MethodToken.PA, MethodToken.NO]

    def test_weight_sounding_values(self, two_soundings_path):
        inv = parse_file(two_soundings_path).investigations[0]
        assert inv.coordinates.x.value == 6672000.5
        assert [n.value for n in inv.notes] == ["kallio lähellä"]
        second = inv.observations[1].values
        assert second.hits.value == 12
        assert second.load.is_missing
        assert second.soil_type.value == "Sa"  # backfilled
        assert [(layer.soil_type, layer.thickness) for layer in inv.soil_layers] == [("Sa", 2.0), ("Ct", 0.5)]
        assert inv.total_depth == 2.5

    def test_samples_with_lab_results(self, two_soundings_path):
        inv = parse_file(two_soundings_path).investigations[1]
        assert inv.coordinates.date.is_missing
        first, second = inv.observations
        assert len(first.values.lab_results) == 2
        assert second.values.lab_results == []
        assert inv.total_depth is None

    def test_path_recorded(self, two_soundings_path):
        inv = parse_file(two_soundings_path).investigations[0]
        assert inv.file_info.path == str(two_soundings_path)

    def test_unterminated_file(self, unterminated_path):
        assert parse_file(unterminated_path).investigations == []
