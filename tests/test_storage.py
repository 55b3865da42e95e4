"""Tests for multi-file parsing, Parquet export and reports."""

from __future__ import annotations

import shutil
from collections import Counter

import pandas as pd
import pytest

from kairaus.config import INVESTIGATION_INDEX_FILE, METADATA_DIR, OBSERVATIONS_FILE
from kairaus.errors import InfraFileError
from kairaus.models.vocabulary import MethodToken
from kairaus.parsers.file_reader import parse_file
from kairaus.parsers.infra_parser import parse_lines
from kairaus.storage import collection as collection_module
from kairaus.storage.catalog import dataset_info, get_investigation_index
from kairaus.storage.collection import discover_files, parse_folder
from kairaus.storage.report import render_counts, render_file
from kairaus.storage.writer import investigation_to_dict, observations_to_dataframe, run_conversion


@pytest.fixture
def raw_dir(tmp_path, two_soundings_path, unterminated_path):
    raw = tmp_path / "raw"
    (raw / "site").mkdir(parents=True)
    shutil.copy(two_soundings_path, raw / "a.txt")
    shutil.copy(unterminated_path, raw / "site" / "b.txt")
    (raw / "site" / "c.txt").write_text("TT HE\n1.0 3 Sa\n-1 TM\n", encoding="utf-8")
    (raw / "notes.md").write_text("not an investigation file", encoding="utf-8")
    return raw


class TestCollection:
    def test_discover(self, raw_dir):
        names = [p.name for p in discover_files(raw_dir)]
        assert names == ["a.txt", "b.txt", "c.txt"]

    def test_parse_folder(self, raw_dir):
        collection = parse_folder(raw_dir, workers=1, progress=False)
        assert len(collection) == 3
        assert collection.errors == []
        assert collection.count_investigations() == {
            MethodToken.PA: 1,
            MethodToken.NO: 1,
            MethodToken.HE: 1,
        }

    def test_strict_failure_recorded(self, raw_dir):
        (raw_dir / "bad.txt").write_text("TT HE\n1.0 3 Sa\nLB w 1 %\n-1\n", encoding="utf-8")
        collection = parse_folder(raw_dir, workers=1, strict=True, progress=False)
        assert len(collection.errors) == 1
        assert collection.errors[0][0].name == "bad.txt"
        assert len(collection) == 3

    def test_unexpected_failure_recorded(self, raw_dir, monkeypatch):
        real_parse_file = collection_module.parse_file

        def parse_file_failing_on_c(path, strict=False):
            if path.name == "c.txt":
                raise RuntimeError("disk hiccup")
            return real_parse_file(path, strict=strict)

        monkeypatch.setattr(collection_module, "parse_file", parse_file_failing_on_c)
        collection = parse_folder(raw_dir, workers=1, progress=False)
        assert [(p.name, msg) for p, msg in collection.errors] == [("c.txt", "disk hiccup")]
        assert collection.count_investigations() == {MethodToken.PA: 1, MethodToken.NO: 1}

    def test_non_finite_row_does_not_abort_folder(self, tmp_path):
        (tmp_path / "good.txt").write_text("TT HE\n1.0 3 Sa\n-1 TM\n", encoding="utf-8")
        (tmp_path / "odd.txt").write_text("TT PA\n5.0 nan 3 clay\n-1 TM\n", encoding="utf-8")
        collection = parse_folder(tmp_path, workers=1, progress=False)
        assert collection.errors == []
        assert len(collection) == 2

    def test_no_files(self, tmp_path):
        with pytest.raises(InfraFileError, match="No files"):
            parse_folder(tmp_path, workers=1, progress=False)

    def test_not_a_directory(self, tmp_path):
        with pytest.raises(InfraFileError):
            parse_folder(tmp_path / "missing", workers=1, progress=False)


class TestWriter:
    def test_investigation_record(self, two_soundings_path):
        inv = parse_file(two_soundings_path).investigations[0]
        record = investigation_to_dict(inv, 0)
        assert record["method"] == "PA"
        assert record["coordinate_system"] == "ETRS-GK25"
        assert record["observation_count"] == 3
        assert record["soil_layers"] == "Sa:2|Ct:0.5"
        assert record["investigation_id"].endswith("#0")

    def test_observation_frame(self, two_soundings_path):
        inv = parse_file(two_soundings_path).investigations[0]
        df = observations_to_dataframe(inv, 0)
        assert list(df["depth"]) == [1.0, 2.0, 2.5]
        assert df["hits"].isna().tolist() == [True, False, True]
        assert df.loc[0, "fallbacks"] == ""

    def test_fallbacks_recorded(self):
        inv = parse_lines(["TT HE", "1.0 many Sa", "-1"]).investigations[0]
        df = observations_to_dataframe(inv, 0)
        assert df.loc[0, "fallbacks"] == "hits=many"

    def test_annotations_exported(self):
        lines = ["TT HE", "HM site note", "TX site text", "HT site hidden", "1.0 3 Sa", "HT row hidden", "-1"]
        inv = parse_lines(lines).investigations[0]
        record = investigation_to_dict(inv, 0)
        assert record["notes"] == "site note"
        assert record["free_text"] == "site text"
        assert record["hidden_text"] == "site hidden"
        df = observations_to_dataframe(inv, 0)
        assert df.loc[0, "hidden_text"] == "row hidden"
        assert "water_observed" in df.columns

    def test_run_conversion(self, raw_dir, tmp_path):
        out = tmp_path / "out"
        run_conversion(raw_dir, out, workers=1)
        index = pd.read_parquet(out / METADATA_DIR / INVESTIGATION_INDEX_FILE)
        assert len(index) == 3
        obs = pd.read_parquet(out / OBSERVATIONS_FILE)
        assert len(obs) == 6
        assert set(obs["method"]) == {"PA", "NO", "HE"}


class TestCatalog:
    def test_dataset_info(self, raw_dir, tmp_path):
        out = tmp_path / "out"
        run_conversion(raw_dir, out, workers=1)
        assert len(get_investigation_index(out)) == 3
        info = dataset_info(out)
        assert "Total investigations: 3" in info
        assert "Source files: 2" in info

    def test_missing_index(self, tmp_path):
        assert "Run 'kairaus convert' first" in dataset_info(tmp_path)


class TestReport:
    def test_render_counts(self):
        text = render_counts(Counter({MethodToken.PA: 2, MethodToken.HE: 1}))
        assert "Investigations: 3" in text
        assert "Weight sounding test" in text

    def test_render_empty_counts(self):
        assert "No investigations" in render_counts(Counter())

    def test_render_file(self, two_soundings_path):
        text = render_file(parse_file(two_soundings_path))
        assert "ETRS-GK25" in text
        assert "Disturbed sampling" in text
        assert "soil layers: Sa 2 m, Ct 0.5 m" in text
