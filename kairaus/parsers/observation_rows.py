"""Build observation values from numeric data rows.

A data row is the whole line, leading depth included, so column 0 is the
first value. Most methods map columns one-to-one through ``COLUMNS``; two
overload a column:

    PA  column 1 is a load when >= 0, and a hit count (absolute value,
        truncated) when negative.
    HP  column 1 is a hit count or a pressure, depending on the mode flag
        ``H`` / ``P`` in column 3. Any other flag leaves both unset.
"""

from __future__ import annotations

import math
from typing import Sequence

from kairaus.config import INT32_MAX
from kairaus.models.observation import (
    VARIANTS,
    ObservationValues,
    StaticDynamicPenetration,
    WeightSounding,
)
from kairaus.models.parsed import MISSING, ParsedField, field_at, parse_field
from kairaus.models.vocabulary import MethodToken, decode_float, decode_int, decode_str

HP_HITS_MODE = "H"
HP_PRESSURE_MODE = "P"


def split_load_or_hits(raw: str | None) -> tuple[ParsedField[float], ParsedField[int]]:
    """Disambiguate the PA load/hits column into ``(load, hits)``; at most one is set.

    Non-finite numbers set neither. A hit count outside the 32-bit range is
    kept as a fallback.
    """
    if raw is None:
        return MISSING, MISSING
    value = parse_field(raw, decode_float)
    if not value.is_parsed or not math.isfinite(value.value):
        return MISSING, MISSING
    if value.value >= 0:
        return value, MISSING
    hits = int(abs(value.value))
    if hits > INT32_MAX:
        return MISSING, ParsedField.fallback(raw)
    return MISSING, ParsedField.parsed(hits)


def split_hits_or_pressure(params: Sequence[str]) -> tuple[ParsedField[int], ParsedField[float]]:
    """Disambiguate the HP hits/pressure column into ``(hits, pressure)`` by the mode flag."""
    mode = params[3] if len(params) > 3 else None
    if mode == HP_HITS_MODE:
        return field_at(params, 1, decode_int), MISSING
    if mode == HP_PRESSURE_MODE:
        return MISSING, field_at(params, 1, decode_float)
    return MISSING, MISSING


def _weight_sounding(params: Sequence[str]) -> WeightSounding:
    load, hits = split_load_or_hits(params[1] if len(params) > 1 else None)
    return WeightSounding(
        depth=field_at(params, 0, decode_float),
        load=load,
        hits=hits,
        half_turns=field_at(params, 2, decode_int),
        soil_type=field_at(params, 3, decode_str),
    )


def _static_dynamic(params: Sequence[str]) -> StaticDynamicPenetration:
    hits, pressure = split_hits_or_pressure(params)
    return StaticDynamicPenetration(
        depth=field_at(params, 0, decode_float),
        hits=hits,
        pressure=pressure,
        torque=field_at(params, 2, decode_float),
        mode=field_at(params, 3, decode_str),
        soil_type=field_at(params, 4, decode_str),
    )


_SPECIAL_BUILDERS = {
    MethodToken.PA: _weight_sounding,
    MethodToken.HP: _static_dynamic,
}


def build_values(method: MethodToken, params: Sequence[str]) -> ObservationValues:
    """Read a data row into the row shape of ``method``."""
    special = _SPECIAL_BUILDERS.get(method)
    if special is not None:
        return special(params)

    cls = VARIANTS[method]
    columns = {
        name: field_at(params, index, decoder)
        for index, (name, decoder) in enumerate(cls.COLUMNS)
    }
    return cls(**columns)
