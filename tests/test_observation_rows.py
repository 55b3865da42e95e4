"""Tests for method-specific data row layouts."""

from __future__ import annotations

import pytest

from kairaus.models.observation import (
    VARIANTS,
    ConePenetration,
    DisturbedSample,
    DynamicProbing,
    GroundwaterPipe,
    StaticDynamicPenetration,
    WeightSounding,
)
from kairaus.models.vocabulary import MethodToken
from kairaus.parsers.observation_rows import build_values, split_hits_or_pressure, split_load_or_hits


class TestWeightSounding:
    def test_positive_is_load(self):
        load, hits = split_load_or_hits("2.5")
        assert load.value == 2.5
        assert hits.is_missing

    def test_negative_is_hits(self):
        load, hits = split_load_or_hits("-3")
        assert load.is_missing
        assert hits.value == 3

    def test_negative_fraction_truncated(self):
        _, hits = split_load_or_hits("-3,7")
        assert hits.value == 3

    def test_unparsed_sets_neither(self):
        assert split_load_or_hits("x") == split_load_or_hits(None)
        assert split_load_or_hits("-")[0].is_missing

    @pytest.mark.parametrize("raw", ["nan", "inf", "-inf", "-nan"])
    def test_non_finite_sets_neither(self, raw):
        load, hits = split_load_or_hits(raw)
        assert load.is_missing
        assert hits.is_missing

    def test_hits_beyond_int32_is_fallback(self):
        load, hits = split_load_or_hits("-1e12")
        assert load.is_missing
        assert hits.is_fallback
        assert hits.raw == "-1e12"

    def test_largest_int32_hits(self):
        _, hits = split_load_or_hits("-2147483647")
        assert hits.value == 2147483647

    def test_non_finite_row_still_parses(self):
        values = build_values(MethodToken.PA, "5.0 -inf 3 clay".split())
        assert values.depth.value == 5.0
        assert values.load.is_missing
        assert values.hits.is_missing
        assert values.half_turns.value == 3

    def test_row(self):
        values = build_values(MethodToken.PA, "5.0 1.2 3 clay".split())
        assert isinstance(values, WeightSounding)
        assert values.depth.value == 5.0
        assert values.load.value == 1.2
        assert values.hits.is_missing
        assert values.half_turns.value == 3
        assert values.soil_type.value == "clay"


class TestStaticDynamic:
    def test_hits_mode(self):
        hits, pressure = split_hits_or_pressure("1.0 14 20.5 H Sa".split())
        assert hits.value == 14
        assert pressure.is_missing

    def test_pressure_mode(self):
        hits, pressure = split_hits_or_pressure("1.0 3,5 20.5 P Sa".split())
        assert hits.is_missing
        assert pressure.value == 3.5

    def test_no_mode_sets_neither(self):
        values = build_values(MethodToken.HP, ["1.0", "14"])
        assert isinstance(values, StaticDynamicPenetration)
        assert values.depth.value == 1.0
        assert values.hits.is_missing
        assert values.pressure.is_missing
        assert values.mode.is_missing


class TestGenericLayouts:
    def test_short_row_fills_missing(self):
        values = build_values(MethodToken.HE, ["1.2"])
        assert isinstance(values, DynamicProbing)
        assert values.hits.is_missing
        assert values.soil_type.is_missing

    def test_bad_column_is_fallback(self):
        values = build_values(MethodToken.HE, ["1.2", "many", "Sa"])
        assert values.hits.is_fallback
        assert values.soil_type.value == "Sa"

    def test_cone_penetration_columns(self):
        values = build_values(MethodToken.CP, "0.02 1.5 0.01 2.3 Sa".split())
        assert isinstance(values, ConePenetration)
        assert values.depth.value == 0.02
        assert values.tip_resistance.value == 2.3
        assert values.soil_type.value == "Sa"

    def test_standpipe_row_has_date(self):
        values = build_values(MethodToken.VP, "10.5 15062021 - Kpa".split())
        assert isinstance(values, GroundwaterPipe)
        assert values.date.value.year == 2021

    def test_sample_starts_without_lab_results(self):
        values = build_values(MethodToken.NO, "1.0 S1 1.5 Mr".split())
        assert isinstance(values, DisturbedSample)
        assert values.sample_id.value == "S1"
        assert values.lab_results == []

    def test_test_pit_columns(self):
        values = build_values(MethodToken.KO, "0.8 Sa".split())
        assert type(values) is VARIANTS[MethodToken.KO]
        assert values.depth.value == 0.8
        assert values.soil_type.value == "Sa"
