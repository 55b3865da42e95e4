"""Derived investigation properties: soil type backfill, total depth, soil layers."""

from __future__ import annotations

from kairaus.models.investigation import Investigation, SoilLayer
from kairaus.models.observation import depth_of, has_soil_type, soil_type_of
from kairaus.models.parsed import ParsedField


def backfill_soil_types(investigation: Investigation) -> None:
    """Fill unparsed soil types with the last parsed soil type above them.

    Observations are walked in input order. Rows without a soil type column
    do not interrupt the run.
    """
    last_soil_type: str | None = None

    for observation in investigation.observations:
        values = observation.values
        if not has_soil_type(values):
            continue
        if values.soil_type.is_parsed:
            last_soil_type = values.soil_type.value
        elif last_soil_type is not None:
            values.soil_type = ParsedField.parsed(last_soil_type)


def compute_total_depth(investigation: Investigation) -> None:
    """Total depth is the parsed depth of the last observation, if it has one."""
    investigation.total_depth = None
    last = investigation.last_observation
    if last is None:
        return
    depth = depth_of(last.values)
    if depth is not None and depth.is_parsed:
        investigation.total_depth = depth.value


def compute_soil_layers(investigation: Investigation) -> None:
    """Group observations into consecutive layers of equal soil type.

    Each observation with a parsed depth and soil type contributes the
    distance from the previous contributing depth (starting at the surface).
    Rows that would give a negative thickness are dropped.
    """
    layers: list[SoilLayer] = []
    previous_depth = 0.0

    for observation in investigation.observations:
        depth = depth_of(observation.values)
        soil_type = soil_type_of(observation.values)
        if depth is None or not depth.is_parsed:
            continue
        if soil_type is None or not soil_type.is_parsed:
            continue

        thickness = depth.value - previous_depth
        if thickness < 0:
            continue

        if layers and layers[-1].soil_type == soil_type.value:
            layers[-1].thickness += thickness
        else:
            layers.append(SoilLayer(soil_type=soil_type.value, thickness=thickness))
        previous_depth = depth.value

    investigation.soil_layers = layers


def compute_properties(investigation: Investigation) -> None:
    """Run the post-processing steps in order."""
    backfill_soil_types(investigation)
    compute_total_depth(investigation)
    compute_soil_layers(investigation)
