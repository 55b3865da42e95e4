"""Observation rows: one dataclass per measurement method.

An investigation's method token decides which of the 27 row shapes its
numeric data rows are read into. ``COLUMNS`` gives each shape's positional
layout; PA and HP additionally overload one column (see
``kairaus.parsers.observation_rows``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import ClassVar, Union

from kairaus.models.parsed import MISSING, Decoder, ParsedField
from kairaus.models.vocabulary import MethodToken, decode_date, decode_float, decode_int, decode_str

FloatField = ParsedField[float]
IntField = ParsedField[int]
StrField = ParsedField[str]
DateField = ParsedField[date]


@dataclass
class GrainSize:
    """Sieve result: share of the sample passing a given grain size."""

    grain_mm: FloatField = MISSING
    pass_percent: FloatField = MISSING


@dataclass
class LabOther:
    """Any other laboratory attribute, kept as text."""

    attribute: StrField = MISSING
    result: StrField = MISSING
    unit: StrField = MISSING


LabResult = Union[GrainSize, LabOther]


@dataclass
class WeightSounding:
    token: ClassVar[MethodToken] = MethodToken.PA
    COLUMNS: ClassVar[tuple] = ()  # column 1 is sign-encoded

    depth: FloatField = MISSING
    load: FloatField = MISSING
    hits: IntField = MISSING
    half_turns: IntField = MISSING
    soil_type: StrField = MISSING


@dataclass
class StickDrilling:
    token: ClassVar[MethodToken] = MethodToken.PI
    COLUMNS: ClassVar[tuple] = (("depth", decode_float), ("soil_type", decode_str))

    depth: FloatField = MISSING
    soil_type: StrField = MISSING


@dataclass
class HammerDrilling:
    token: ClassVar[MethodToken] = MethodToken.LY
    COLUMNS: ClassVar[tuple] = (
        ("depth", decode_float),
        ("load", decode_float),
        ("hits", decode_int),
        ("soil_type", decode_str),
    )

    depth: FloatField = MISSING
    load: FloatField = MISSING
    hits: IntField = MISSING
    soil_type: StrField = MISSING


@dataclass
class FieldVane:
    token: ClassVar[MethodToken] = MethodToken.SI
    COLUMNS: ClassVar[tuple] = (
        ("depth", decode_float),
        ("shear_str", decode_float),
        ("disturbed_shear_str", decode_float),
        ("sensitivity", decode_float),
        ("residual_str", decode_float),
    )

    depth: FloatField = MISSING
    shear_str: FloatField = MISSING
    disturbed_shear_str: FloatField = MISSING
    sensitivity: FloatField = MISSING
    residual_str: FloatField = MISSING


@dataclass
class DynamicProbing:
    token: ClassVar[MethodToken] = MethodToken.HE
    COLUMNS: ClassVar[tuple] = (("depth", decode_float), ("hits", decode_int), ("soil_type", decode_str))

    depth: FloatField = MISSING
    hits: IntField = MISSING
    soil_type: StrField = MISSING


@dataclass
class DynamicProbingTorque:
    token: ClassVar[MethodToken] = MethodToken.HK
    COLUMNS: ClassVar[tuple] = (
        ("depth", decode_float),
        ("hits", decode_int),
        ("torque", decode_float),
        ("soil_type", decode_str),
    )

    depth: FloatField = MISSING
    hits: IntField = MISSING
    torque: FloatField = MISSING
    soil_type: StrField = MISSING


@dataclass
class PipeDrilling:
    token: ClassVar[MethodToken] = MethodToken.PT
    COLUMNS: ClassVar[tuple] = (("depth", decode_float), ("soil_type", decode_str))

    depth: FloatField = MISSING
    soil_type: StrField = MISSING


@dataclass
class PinDrilling:
    token: ClassVar[MethodToken] = MethodToken.TR
    COLUMNS: ClassVar[tuple] = (("depth", decode_float), ("soil_type", decode_str))

    depth: FloatField = MISSING
    soil_type: StrField = MISSING


@dataclass
class StaticPenetration:
    token: ClassVar[MethodToken] = MethodToken.PR
    COLUMNS: ClassVar[tuple] = (
        ("depth", decode_float),
        ("total_resistance", decode_float),
        ("sleeve_friction", decode_float),
        ("soil_type", decode_str),
    )

    depth: FloatField = MISSING
    total_resistance: FloatField = MISSING
    sleeve_friction: FloatField = MISSING
    soil_type: StrField = MISSING


@dataclass
class ConePenetration:
    token: ClassVar[MethodToken] = MethodToken.CP
    COLUMNS: ClassVar[tuple] = (
        ("depth", decode_float),
        ("total_resistance", decode_float),
        ("sleeve_friction", decode_float),
        ("tip_resistance", decode_float),
        ("soil_type", decode_str),
    )

    depth: FloatField = MISSING
    total_resistance: FloatField = MISSING
    sleeve_friction: FloatField = MISSING
    tip_resistance: FloatField = MISSING
    soil_type: StrField = MISSING


@dataclass
class PiezoconePenetration:
    token: ClassVar[MethodToken] = MethodToken.CU
    COLUMNS: ClassVar[tuple] = (
        ("depth", decode_float),
        ("total_resistance", decode_float),
        ("sleeve_friction", decode_float),
        ("tip_resistance", decode_float),
        ("pore_water_pressure", decode_float),
        ("soil_type", decode_str),
    )

    depth: FloatField = MISSING
    total_resistance: FloatField = MISSING
    sleeve_friction: FloatField = MISSING
    tip_resistance: FloatField = MISSING
    pore_water_pressure: FloatField = MISSING
    soil_type: StrField = MISSING


@dataclass
class StaticDynamicPenetration:
    token: ClassVar[MethodToken] = MethodToken.HP
    COLUMNS: ClassVar[tuple] = ()  # column 1 meaning depends on the mode flag in column 3

    depth: FloatField = MISSING
    hits: IntField = MISSING
    pressure: FloatField = MISSING
    torque: FloatField = MISSING
    mode: StrField = MISSING
    soil_type: StrField = MISSING


@dataclass
class DrillRigSounding:
    token: ClassVar[MethodToken] = MethodToken.PO
    COLUMNS: ClassVar[tuple] = (("depth", decode_float), ("time", decode_int), ("soil_type", decode_str))

    depth: FloatField = MISSING
    time: IntField = MISSING
    soil_type: StrField = MISSING


@dataclass
class MwdDrilling:
    token: ClassVar[MethodToken] = MethodToken.MW
    COLUMNS: ClassVar[tuple] = (
        ("depth", decode_float),
        ("advance_rate", decode_float),
        ("compressive_force", decode_float),
        ("flushing_pressure", decode_float),
        ("water_consumption", decode_float),
        ("torque", decode_float),
        ("rotation_speed", decode_float),
        ("hits", decode_str),
        ("soil_type", decode_str),
    )

    depth: FloatField = MISSING
    advance_rate: FloatField = MISSING
    compressive_force: FloatField = MISSING
    flushing_pressure: FloatField = MISSING
    water_consumption: FloatField = MISSING
    torque: FloatField = MISSING
    rotation_speed: FloatField = MISSING
    hits: StrField = MISSING  # hammering on/off flag, kept as text
    soil_type: StrField = MISSING


_PIPE_COLUMNS: tuple[tuple[str, Decoder], ...] = (
    ("surface_elev", decode_float),
    ("date", decode_date),
    ("pipe_top_elev", decode_float),
    ("pipe_bot_elev", decode_float),
    ("sieve_len", decode_float),
    ("measurer", decode_str),
)


@dataclass
class GroundwaterPipe:
    token: ClassVar[MethodToken] = MethodToken.VP
    COLUMNS: ClassVar[tuple] = _PIPE_COLUMNS

    surface_elev: FloatField = MISSING
    date: DateField = MISSING
    pipe_top_elev: FloatField = MISSING
    pipe_bot_elev: FloatField = MISSING
    sieve_len: FloatField = MISSING
    measurer: StrField = MISSING


@dataclass
class PerchedWaterPipe:
    token: ClassVar[MethodToken] = MethodToken.VO
    COLUMNS: ClassVar[tuple] = _PIPE_COLUMNS

    surface_elev: FloatField = MISSING
    date: DateField = MISSING
    pipe_top_elev: FloatField = MISSING
    pipe_bot_elev: FloatField = MISSING
    sieve_len: FloatField = MISSING
    measurer: StrField = MISSING


@dataclass
class WellWaterLevel:
    token: ClassVar[MethodToken] = MethodToken.VK
    COLUMNS: ClassVar[tuple] = (
        ("surface_elev", decode_float),
        ("date", decode_date),
        ("water_type", decode_str),
    )

    surface_elev: FloatField = MISSING
    date: DateField = MISSING
    water_type: StrField = MISSING


@dataclass
class BedrockGroundwaterPipe:
    token: ClassVar[MethodToken] = MethodToken.VPK
    COLUMNS: ClassVar[tuple] = (("surface_elev", decode_float), ("date", decode_date))

    surface_elev: FloatField = MISSING
    date: DateField = MISSING


@dataclass
class PorePressure:
    token: ClassVar[MethodToken] = MethodToken.HV
    COLUMNS: ClassVar[tuple] = (
        ("depth", decode_float),
        ("pressure", decode_float),
        ("date", decode_date),
        ("measurer", decode_str),
    )

    depth: FloatField = MISSING
    pressure: FloatField = MISSING
    date: DateField = MISSING
    measurer: StrField = MISSING


@dataclass
class AirVoidPipe:
    token: ClassVar[MethodToken] = MethodToken.HU
    COLUMNS: ClassVar[tuple] = _PIPE_COLUMNS

    surface_elev: FloatField = MISSING
    date: DateField = MISSING
    pipe_top_elev: FloatField = MISSING
    pipe_bot_elev: FloatField = MISSING
    sieve_len: FloatField = MISSING
    measurer: StrField = MISSING


@dataclass
class Pressuremeter:
    token: ClassVar[MethodToken] = MethodToken.PS
    COLUMNS: ClassVar[tuple] = (
        ("depth", decode_float),
        ("modulus", decode_float),
        ("fail_pressure", decode_float),
    )

    depth: FloatField = MISSING
    modulus: FloatField = MISSING
    fail_pressure: FloatField = MISSING


@dataclass
class SettlementMeasurement:
    token: ClassVar[MethodToken] = MethodToken.PM
    COLUMNS: ClassVar[tuple] = (("elev", decode_float), ("date", decode_date), ("measurer", decode_str))

    elev: FloatField = MISSING
    date: DateField = MISSING
    measurer: StrField = MISSING


@dataclass
class TestPit:
    token: ClassVar[MethodToken] = MethodToken.KO
    COLUMNS: ClassVar[tuple] = (
        ("depth", decode_float),
        ("soil_type", decode_str),
        ("stones", decode_float),
        ("boulders", decode_int),
        ("max_width", decode_float),
        ("min_width", decode_float),
    )

    depth: FloatField = MISSING
    soil_type: StrField = MISSING
    stones: FloatField = MISSING
    boulders: IntField = MISSING
    max_width: FloatField = MISSING
    min_width: FloatField = MISSING


@dataclass
class CoreSamplingExtended:
    token: ClassVar[MethodToken] = MethodToken.KE
    COLUMNS: ClassVar[tuple] = (("start_depth", decode_float), ("end_depth", decode_float))

    start_depth: FloatField = MISSING
    end_depth: FloatField = MISSING


@dataclass
class CoreSamplingVideo:
    token: ClassVar[MethodToken] = MethodToken.KR
    COLUMNS: ClassVar[tuple] = (("start_depth", decode_float), ("end_depth", decode_float))

    start_depth: FloatField = MISSING
    end_depth: FloatField = MISSING


_SAMPLE_COLUMNS: tuple[tuple[str, Decoder], ...] = (
    ("start_depth", decode_float),
    ("sample_id", decode_str),
    ("end_depth", decode_float),
    ("soil_type", decode_str),
)


@dataclass
class _Sample:
    start_depth: FloatField = MISSING
    sample_id: StrField = MISSING
    end_depth: FloatField = MISSING
    soil_type: StrField = MISSING
    lab_results: list[LabResult] = field(default_factory=list)

    @property
    def lab_sieve(self) -> list[GrainSize]:
        return [r for r in self.lab_results if isinstance(r, GrainSize)]

    @property
    def lab_other(self) -> list[LabOther]:
        return [r for r in self.lab_results if isinstance(r, LabOther)]


@dataclass
class DisturbedSample(_Sample):
    token: ClassVar[MethodToken] = MethodToken.NO
    COLUMNS: ClassVar[tuple] = _SAMPLE_COLUMNS


@dataclass
class UndisturbedSample(_Sample):
    token: ClassVar[MethodToken] = MethodToken.NE
    COLUMNS: ClassVar[tuple] = _SAMPLE_COLUMNS


ObservationValues = Union[
    WeightSounding,
    StickDrilling,
    HammerDrilling,
    FieldVane,
    DynamicProbing,
    DynamicProbingTorque,
    PipeDrilling,
    PinDrilling,
    StaticPenetration,
    ConePenetration,
    PiezoconePenetration,
    StaticDynamicPenetration,
    DrillRigSounding,
    MwdDrilling,
    GroundwaterPipe,
    PerchedWaterPipe,
    WellWaterLevel,
    BedrockGroundwaterPipe,
    PorePressure,
    AirVoidPipe,
    Pressuremeter,
    SettlementMeasurement,
    TestPit,
    CoreSamplingExtended,
    CoreSamplingVideo,
    DisturbedSample,
    UndisturbedSample,
]

VARIANTS: dict[MethodToken, type] = {cls.token: cls for cls in ObservationValues.__args__}

SAMPLE_VARIANTS = (DisturbedSample, UndisturbedSample)

# Variants whose first column is a depth below ground
DEPTH_VARIANTS = (
    WeightSounding,
    StickDrilling,
    HammerDrilling,
    FieldVane,
    DynamicProbing,
    DynamicProbingTorque,
    PipeDrilling,
    PinDrilling,
    StaticPenetration,
    ConePenetration,
    PiezoconePenetration,
    StaticDynamicPenetration,
    DrillRigSounding,
    MwdDrilling,
    PorePressure,
    Pressuremeter,
    TestPit,
)

SOIL_TYPE_VARIANTS = (
    WeightSounding,
    StickDrilling,
    HammerDrilling,
    DynamicProbing,
    DynamicProbingTorque,
    PipeDrilling,
    PinDrilling,
    StaticPenetration,
    ConePenetration,
    PiezoconePenetration,
    StaticDynamicPenetration,
    DrillRigSounding,
    MwdDrilling,
    TestPit,
    DisturbedSample,
    UndisturbedSample,
)


def is_sample(values: ObservationValues) -> bool:
    return isinstance(values, SAMPLE_VARIANTS)


def has_soil_type(values: ObservationValues) -> bool:
    return isinstance(values, SOIL_TYPE_VARIANTS)


def depth_of(values: ObservationValues) -> ParsedField[float] | None:
    """The depth column, or None for variants that have no depth."""
    if isinstance(values, DEPTH_VARIANTS):
        return values.depth
    return None


def soil_type_of(values: ObservationValues) -> ParsedField[str] | None:
    if isinstance(values, SOIL_TYPE_VARIANTS):
        return values.soil_type
    return None


@dataclass
class Observation:
    """One data row plus the annotation lines that followed it."""

    values: ObservationValues
    notes: list[StrField] = field(default_factory=list)
    free_text: list[StrField] = field(default_factory=list)
    hidden_text: list[StrField] = field(default_factory=list)
    unofficial_soil_type: list[StrField] = field(default_factory=list)
    water_observed: StrField = MISSING

    @property
    def token(self) -> MethodToken:
        return self.values.token
