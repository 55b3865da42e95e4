"""File-level models: the parsed contents of one input file."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from kairaus.models.parsed import MISSING, ParsedField
from kairaus.models.vocabulary import CoordinateSystem, ElevationSystem, MethodToken

if TYPE_CHECKING:
    from kairaus.models.investigation import Investigation


@dataclass
class FileInfo:
    """Where the lines came from; carried through unchanged."""

    path: str | None = None
    encoding: str | None = None


@dataclass
class Format:
    version: ParsedField[str] = MISSING
    used_software: ParsedField[str] = MISSING
    software_version: ParsedField[str] = MISSING


@dataclass
class Spatial:
    coordinate_system: ParsedField[CoordinateSystem] = MISSING
    elevation_system: ParsedField[ElevationSystem] = MISSING

    @property
    def coordinate_system_or_unknown(self) -> CoordinateSystem:
        return self.coordinate_system.get(CoordinateSystem.UNKNOWN)

    @property
    def elevation_system_or_unknown(self) -> ElevationSystem:
        return self.elevation_system.get(ElevationSystem.UNKNOWN)


def count_methods(investigations: list[Investigation]) -> Counter[MethodToken]:
    """Count investigations per parsed method token."""
    counts: Counter[MethodToken] = Counter()
    for inv in investigations:
        token = inv.method.token
        if token.is_parsed:
            counts[token.value] += 1
    return counts


@dataclass
class InfraFile:
    """One parsed file: format, spatial reference, and its investigations."""

    file_info: FileInfo = field(default_factory=FileInfo)
    format: Format = field(default_factory=Format)
    spatial: Spatial = field(default_factory=Spatial)
    investigations: list[Investigation] = field(default_factory=list)

    def count_investigations(self) -> Counter[MethodToken]:
        return count_methods(self.investigations)
