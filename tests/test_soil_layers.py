"""Tests for derived investigation properties."""

from __future__ import annotations

from kairaus.analysis.soil_layers import (
    backfill_soil_types,
    compute_properties,
    compute_soil_layers,
    compute_total_depth,
)
from kairaus.models.investigation import Investigation
from kairaus.models.observation import Observation
from kairaus.models.vocabulary import MethodToken
from kairaus.parsers.observation_rows import build_values


def _investigation(method: MethodToken, rows: list[str]) -> Investigation:
    inv = Investigation()
    inv.observations = [Observation(values=build_values(method, row.split())) for row in rows]
    return inv


def _layers(inv: Investigation) -> list[tuple[str, float]]:
    return [(layer.soil_type, round(layer.thickness, 6)) for layer in inv.soil_layers]


class TestBackfill:
    def test_fills_from_previous(self):
        inv = _investigation(MethodToken.HE, ["1.0 3 Sa", "2.0 4 -", "3.0 5 Ct", "4.0 6"])
        backfill_soil_types(inv)
        assert [o.values.soil_type.value for o in inv.observations] == ["Sa", "Sa", "Ct", "Ct"]

    def test_leading_rows_stay_unset(self):
        inv = _investigation(MethodToken.HE, ["1.0 3 -", "2.0 4 Sa"])
        backfill_soil_types(inv)
        assert inv.observations[0].values.soil_type.is_missing

    def test_idempotent(self):
        inv = _investigation(MethodToken.HE, ["1.0 3 Sa", "2.0 4 -", "3.0 5 -"])
        backfill_soil_types(inv)
        first = [o.values.soil_type for o in inv.observations]
        backfill_soil_types(inv)
        assert [o.values.soil_type for o in inv.observations] == first

    def test_samples_are_backfilled(self):
        inv = _investigation(MethodToken.NO, ["1.0 S1 1.5 Mr", "2.0 S2 2.5"])
        backfill_soil_types(inv)
        assert inv.observations[1].values.soil_type.value == "Mr"


class TestTotalDepth:
    def test_last_observation_depth(self):
        inv = _investigation(MethodToken.HE, ["1.0 3 Sa", "2.5 4 Sa"])
        compute_total_depth(inv)
        assert inv.total_depth == 2.5

    def test_no_observations(self):
        inv = Investigation()
        compute_total_depth(inv)
        assert inv.total_depth is None

    def test_last_depth_unparsed(self):
        inv = _investigation(MethodToken.HE, ["1.0 3 Sa", "x 4 Sa"])
        compute_total_depth(inv)
        assert inv.total_depth is None

    def test_variant_without_depth(self):
        inv = _investigation(MethodToken.VP, ["10.5 15062021"])
        compute_total_depth(inv)
        assert inv.total_depth is None


class TestSoilLayers:
    def test_merges_equal_neighbours(self):
        inv = _investigation(MethodToken.HE, ["1.0 3 clay", "2.0 4 clay", "2.5 5 sand"])
        compute_soil_layers(inv)
        assert _layers(inv) == [("clay", 2.0), ("sand", 0.5)]

    def test_negative_thickness_skipped(self):
        inv = _investigation(MethodToken.HE, ["2.0 3 Sa", "1.5 4 Ct", "3.0 5 Ct"])
        compute_soil_layers(inv)
        assert _layers(inv) == [("Sa", 2.0), ("Ct", 1.0)]

    def test_rows_without_soil_type_skipped(self):
        inv = _investigation(MethodToken.HE, ["1.0 3 Sa", "2.0 4 -", "3.0 5 Ct"])
        compute_soil_layers(inv)
        assert _layers(inv) == [("Sa", 1.0), ("Ct", 2.0)]

    def test_properties_backfill_first(self):
        inv = _investigation(MethodToken.HE, ["1.0 3 Sa", "2.0 4 -", "3.0 5 Ct"])
        compute_properties(inv)
        assert _layers(inv) == [("Sa", 2.0), ("Ct", 1.0)]
        assert inv.total_depth == 3.0
