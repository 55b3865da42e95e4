"""Token decoders for every column type of the format.

Each decoder turns one raw token into a Python value or raises
``DecodeError``. ``parse_field`` wraps the result into a ParsedField, so the
decoders never see the generic missing token.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from enum import Enum

from kairaus.config import DATE_FORMAT, INT32_MAX, INT32_MIN, UNKNOWN_DATE_TOKEN
from kairaus.models.parsed import DecodeError, UnknownValue

_INT_RE = re.compile(r"^[+-]?[0-9]+$")


class CoordinateSystem(Enum):
    UNKNOWN = "Unknown"
    WGS84 = "WGS84"
    HKI = "HKI"
    VANTAA = "VANTAA"
    ESPOO = "ESPOO"
    KKJ0 = "KKJ0"
    KKJ1 = "KKJ1"
    KKJ2 = "KKJ2"
    KKJ3 = "KKJ3"
    KKJ4 = "KKJ4"
    KKJ5 = "KKJ5"
    YKJ = "YKJ"
    GK19 = "ETRS-GK19"
    GK20 = "ETRS-GK20"
    GK21 = "ETRS-GK21"
    GK22 = "ETRS-GK22"
    GK23 = "ETRS-GK23"
    GK24 = "ETRS-GK24"
    GK25 = "ETRS-GK25"
    GK26 = "ETRS-GK26"
    GK27 = "ETRS-GK27"
    GK28 = "ETRS-GK28"
    GK29 = "ETRS-GK29"
    GK30 = "ETRS-GK30"
    GK31 = "ETRS-GK31"
    TM34 = "ETRS-TM34"
    TM35 = "ETRS-TM35"
    TM36 = "ETRS-TM36"


class ElevationSystem(Enum):
    UNKNOWN = "Unknown"
    N2000 = "N2000"
    N60 = "N60"
    N43 = "N43"
    NN = "NN"
    LN = "LN"


class ClassificationName(Enum):
    GEO = "GEO"
    ISO = "ISO"


class Sampler(Enum):
    UNKNOWN = "Unknown"
    K = "K"
    L = "L"
    PMK = "PMK"
    R = "R"
    ST50 = "ST50"
    ST60 = "ST60"


class TerminationToken(Enum):
    UNKNOWN = "Unknown"
    TM = "TM"
    KI = "KI"
    KL = "KL"
    KA = "KA"
    KK = "KK"
    MS = "MS"
    KN = "KN"
    JA = "JA"


class InitialBoreToken(Enum):
    UNKNOWN = "Unknown"
    SI = "SI"
    LK = "LK"
    AP = "AP"
    LY = "LY"
    VA = "VA"
    JA = "JA"


class Digitized(Enum):
    NO = "No"
    YES = "Yes"


class MethodToken(Enum):
    """Measurement method of an investigation; decides the observation row layout."""

    PA = "PA"  # weight sounding
    PI = "PI"  # stick drilling
    LY = "LY"  # hammer drilling
    SI = "SI"  # field vane
    HE = "HE"  # dynamic probing
    HK = "HK"  # dynamic probing with torque
    PT = "PT"  # pipe drilling
    TR = "TR"  # pin drilling
    PR = "PR"  # static penetration
    CP = "CP"  # CPT
    CU = "CU"  # CPTU
    HP = "HP"  # static-dynamic penetration
    PO = "PO"  # drill rig sounding
    MW = "MW"  # MWD drilling
    VP = "VP"  # groundwater standpipe
    VO = "VO"  # perched water standpipe
    VK = "VK"  # water level in well
    VPK = "VPK"  # bedrock groundwater standpipe
    HV = "HV"  # piezometer
    HU = "HU"  # air void pipe
    PS = "PS"  # pressuremeter
    PM = "PM"  # settlement measurement
    KO = "KO"  # test pit
    KE = "KE"  # core sampling, extended
    KR = "KR"  # core sampling, video
    NO = "NO"  # disturbed sample
    NE = "NE"  # undisturbed sample


# Accepted spellings (upper case) per member; members missing here have no input form
COORDINATE_SYSTEM_ALIASES: dict[str, CoordinateSystem] = {
    "WGS84": CoordinateSystem.WGS84,
    "WGS": CoordinateSystem.WGS84,
    "HKI": CoordinateSystem.HKI,
    "VANTAA": CoordinateSystem.VANTAA,
    "ESPOO": CoordinateSystem.ESPOO,
    "KKJ0": CoordinateSystem.KKJ0,
    "KKJ1": CoordinateSystem.KKJ1,
    "KKJ2": CoordinateSystem.KKJ2,
    "KKJ3": CoordinateSystem.KKJ3,
    "KKJ4": CoordinateSystem.KKJ4,
    "KKJ5": CoordinateSystem.KKJ5,
    "YKJ": CoordinateSystem.YKJ,
    "TM35": CoordinateSystem.TM35,
    "ETRSTM35": CoordinateSystem.TM35,
    "ETRS-TM35": CoordinateSystem.TM35,
    "TM35FIN": CoordinateSystem.TM35,
    "ETRSTM35FIN": CoordinateSystem.TM35,
    "ETRS-TM35FIN": CoordinateSystem.TM35,
}
for _zone in range(19, 32):
    _member = CoordinateSystem[f"GK{_zone}"]
    for _alias in (f"GK{_zone}", f"ETRSGK{_zone}", f"ETRS-GK{_zone}"):
        COORDINATE_SYSTEM_ALIASES[_alias] = _member

ELEVATION_SYSTEM_ALIASES: dict[str, ElevationSystem] = {
    m.value: m for m in ElevationSystem if m is not ElevationSystem.UNKNOWN
}

CLASSIFICATION_ALIASES: dict[str, ClassificationName] = {m.value: m for m in ClassificationName}

SAMPLER_ALIASES: dict[str, Sampler] = {
    "K": Sampler.K,
    "L": Sampler.L,
    "PMK": Sampler.PMK,
    "R": Sampler.R,
    "ST50": Sampler.ST50,
    "ST-50": Sampler.ST50,
    "ST60": Sampler.ST60,
    "ST-60": Sampler.ST60,
}

TERMINATION_ALIASES: dict[str, TerminationToken] = {
    m.value: m for m in TerminationToken if m is not TerminationToken.UNKNOWN
}

INITIAL_BORE_ALIASES: dict[str, InitialBoreToken] = {
    m.value: m for m in InitialBoreToken if m is not InitialBoreToken.UNKNOWN
}

METHOD_ALIASES: dict[str, MethodToken] = {m.value: m for m in MethodToken}
METHOD_ALIASES.update({
    "WST": MethodToken.PA,
    "FVT": MethodToken.SI,
    "DP": MethodToken.HE,
    "CPT": MethodToken.CP,
    "CPTU": MethodToken.CU,
    "PMT": MethodToken.PS,
})


def decode_str(raw: str) -> str:
    return raw


def decode_float(raw: str) -> float:
    """Decimal number; a comma is accepted as the decimal separator."""
    normalized = raw.replace(",", ".")
    if "_" in normalized:
        raise DecodeError(raw)
    try:
        return float(normalized)
    except ValueError:
        raise DecodeError(raw) from None


def decode_int(raw: str) -> int:
    """Signed 32-bit integer."""
    if not _INT_RE.match(raw):
        raise DecodeError(raw)
    value = int(raw)
    if not INT32_MIN <= value <= INT32_MAX:
        raise DecodeError(raw)
    return value


def decode_date(raw: str) -> date:
    """Compact ddMMyyyy date. ``00000000`` means the date is not known."""
    if raw == UNKNOWN_DATE_TOKEN:
        raise UnknownValue(raw)
    try:
        return datetime.strptime(raw, DATE_FORMAT).date()
    except ValueError:
        raise DecodeError(raw) from None


def decode_digitized(raw: str) -> Digitized:
    return Digitized.YES if raw == "D" else Digitized.NO


def _lookup(table: dict[str, Enum], raw: str):
    member = table.get(raw.strip().upper())
    if member is None:
        raise DecodeError(raw)
    return member


def decode_coordinate_system(raw: str) -> CoordinateSystem:
    return _lookup(COORDINATE_SYSTEM_ALIASES, raw)


def decode_elevation_system(raw: str) -> ElevationSystem:
    return _lookup(ELEVATION_SYSTEM_ALIASES, raw)


def decode_classification(raw: str) -> ClassificationName:
    return _lookup(CLASSIFICATION_ALIASES, raw)


def decode_sampler(raw: str) -> Sampler:
    return _lookup(SAMPLER_ALIASES, raw)


def decode_termination(raw: str) -> TerminationToken:
    return _lookup(TERMINATION_ALIASES, raw)


def decode_initial_bore(raw: str) -> InitialBoreToken:
    return _lookup(INITIAL_BORE_ALIASES, raw)


def decode_method(raw: str) -> MethodToken:
    """Method token; unknown methods are a decoding failure, never a default member."""
    return _lookup(METHOD_ALIASES, raw)
