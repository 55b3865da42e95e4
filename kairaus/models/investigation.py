"""Investigation records: one borehole or sounding and its header lines."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from kairaus.models.infra_file import FileInfo, Spatial
from kairaus.models.observation import Observation
from kairaus.models.parsed import MISSING, ParsedField
from kairaus.models.vocabulary import (
    ClassificationName,
    Digitized,
    InitialBoreToken,
    MethodToken,
    Sampler,
    TerminationToken,
)


@dataclass
class Organisations:
    owner_name: ParsedField[str] = MISSING  # OM
    investigator_name: ParsedField[str] = MISSING  # OR


@dataclass
class Classification:
    name: ParsedField[ClassificationName] = MISSING


@dataclass
class Work:
    id: ParsedField[str] = MISSING
    name: ParsedField[str] = MISSING


@dataclass
class Record:
    """Field record and digitization details (PK line)."""

    number: ParsedField[int] = MISSING
    driller: ParsedField[str] = MISSING
    inspector: ParsedField[str] = MISSING
    processor: ParsedField[str] = MISSING
    digitized: ParsedField[Digitized] = MISSING
    condition: ParsedField[str] = MISSING


@dataclass
class Method:
    """Method descriptor (TT line); ``token`` selects the observation row layout."""

    token: ParsedField[MethodToken] = MISSING
    category: ParsedField[int] = MISSING
    id: ParsedField[str] = MISSING
    standard: ParsedField[str] = MISSING
    sampler: ParsedField[Sampler] = MISSING
    specifier: ParsedField[str] = MISSING


@dataclass
class Equipment:
    number: ParsedField[int] = MISSING
    description: ParsedField[str] = MISSING
    cone_size: ParsedField[str] = MISSING


@dataclass
class Coordinates:
    x: ParsedField[float] = MISSING
    y: ParsedField[float] = MISSING
    start_elevation: ParsedField[float] = MISSING
    date: ParsedField[date] = MISSING
    point_id: ParsedField[str] = MISSING


@dataclass
class Line:
    name: ParsedField[str] = MISSING
    stake: ParsedField[float] = MISSING
    distance: ParsedField[float] = MISSING


@dataclass
class Termination:
    token: ParsedField[TerminationToken] = MISSING


@dataclass
class Program:
    name: ParsedField[str] = MISSING
    date: ParsedField[date] = MISSING
    author: ParsedField[str] = MISSING
    guide: list[ParsedField[str]] = field(default_factory=list)


@dataclass
class DepthlessRockSample:
    attribute: ParsedField[str] = MISSING
    value: ParsedField[str] = MISSING


@dataclass
class InitialBorehole:
    depth: ParsedField[float] = MISSING
    method: ParsedField[InitialBoreToken] = MISSING
    soil_type: ParsedField[str] = MISSING


@dataclass
class Standpipe:
    """Groundwater standpipe installation (ZP, TP and LP lines)."""

    # ZP
    top_elevation: ParsedField[float] = MISSING
    ground_elevation: ParsedField[float] = MISSING
    protection_top_elevation: ParsedField[float] = MISSING
    cover_elevation: ParsedField[float] = MISSING
    sieve_bottom_elevation: ParsedField[float] = MISSING
    # TP
    upper_structure: ParsedField[str] = MISSING
    sieve_length: ParsedField[float] = MISSING
    sieve_type: ParsedField[str] = MISSING
    diameter: ParsedField[float] = MISSING
    material: ParsedField[str] = MISSING
    # LP
    measure_point: ParsedField[str] = MISSING
    details: ParsedField[str] = MISSING
    locked: ParsedField[str] = MISSING
    lock_owner: ParsedField[str] = MISSING
    installer: ParsedField[str] = MISSING


@dataclass
class SoilLayer:
    """A run of observations sharing one soil type."""

    soil_type: str
    thickness: float


@dataclass
class Investigation:
    """A single sounding, closed by a terminator line."""

    # Copied from the enclosing file once parsing completes
    file_info: FileInfo = field(default_factory=FileInfo)
    spatial: Spatial = field(default_factory=Spatial)

    organisations: Organisations = field(default_factory=Organisations)
    classification: Classification = field(default_factory=Classification)
    work: Work = field(default_factory=Work)
    record: Record = field(default_factory=Record)
    method: Method = field(default_factory=Method)
    equipment: Equipment = field(default_factory=Equipment)
    coordinates: Coordinates = field(default_factory=Coordinates)
    line: Line = field(default_factory=Line)
    termination: Termination = field(default_factory=Termination)
    program: Program = field(default_factory=Program)
    depthless_rock_sample: DepthlessRockSample = field(default_factory=DepthlessRockSample)
    initial_borehole: InitialBorehole = field(default_factory=InitialBorehole)
    standpipe: Standpipe = field(default_factory=Standpipe)
    # Text lines seen before the first observation
    notes: list[ParsedField[str]] = field(default_factory=list)
    free_text: list[ParsedField[str]] = field(default_factory=list)
    hidden_text: list[ParsedField[str]] = field(default_factory=list)
    observations: list[Observation] = field(default_factory=list)

    # Computed by kairaus.analysis.soil_layers
    total_depth: float | None = None
    soil_layers: list[SoilLayer] = field(default_factory=list)

    @property
    def method_token(self) -> MethodToken | None:
        return self.method.token.get()

    @property
    def last_observation(self) -> Observation | None:
        return self.observations[-1] if self.observations else None
