"""Data models for files, investigations, observations, and field values."""

from kairaus.models.infra_file import FileInfo, Format, InfraFile, Spatial
from kairaus.models.investigation import Investigation, SoilLayer
from kairaus.models.observation import GrainSize, LabOther, Observation
from kairaus.models.parsed import FieldState, ParsedField
from kairaus.models.vocabulary import CoordinateSystem, ElevationSystem, MethodToken, TerminationToken

__all__ = [
    "ParsedField",
    "FieldState",
    "InfraFile",
    "FileInfo",
    "Format",
    "Spatial",
    "Investigation",
    "SoilLayer",
    "Observation",
    "GrainSize",
    "LabOther",
    "MethodToken",
    "CoordinateSystem",
    "ElevationSystem",
    "TerminationToken",
]
