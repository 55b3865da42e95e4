"""Export parsed investigations to Parquet tables."""

from __future__ import annotations

import dataclasses
import logging
from enum import Enum
from pathlib import Path
from typing import Any

import pandas as pd

from kairaus.config import DEFAULT_FILE_PATTERN, DEFAULT_WORKERS, INVESTIGATION_INDEX_FILE, METADATA_DIR, OBSERVATIONS_FILE
from kairaus.models.investigation import Investigation
from kairaus.models.observation import is_sample
from kairaus.models.parsed import ParsedField
from kairaus.storage.collection import parse_folder

logger = logging.getLogger(__name__)


def field_value(value: ParsedField) -> Any:
    """Plain value for a table cell: parsed value (enums by token), else None."""
    if not value.is_parsed:
        return None
    if isinstance(value.value, Enum):
        return value.value.value
    return value.value


def _join_text(entries: list[ParsedField[str]]) -> str:
    return " | ".join(e.get("") for e in entries)


def investigation_id(inv: Investigation, index: int) -> str:
    """Identifier unique within a conversion run: source path plus position in the file."""
    return f"{inv.file_info.path or '<lines>'}#{index}"


def investigation_to_dict(inv: Investigation, index: int = 0) -> dict:
    """Flatten an investigation's header fields for the investigation index."""
    return {
        "investigation_id": investigation_id(inv, index),
        "source_path": inv.file_info.path,
        "encoding": inv.file_info.encoding,
        "coordinate_system": inv.spatial.coordinate_system_or_unknown.value,
        "elevation_system": inv.spatial.elevation_system_or_unknown.value,
        "method": field_value(inv.method.token),
        "method_id": field_value(inv.method.id),
        "standard": field_value(inv.method.standard),
        "owner": field_value(inv.organisations.owner_name),
        "investigator": field_value(inv.organisations.investigator_name),
        "work_id": field_value(inv.work.id),
        "work_name": field_value(inv.work.name),
        "x": field_value(inv.coordinates.x),
        "y": field_value(inv.coordinates.y),
        "start_elevation": field_value(inv.coordinates.start_elevation),
        "date": field_value(inv.coordinates.date),
        "point_id": field_value(inv.coordinates.point_id),
        "termination": field_value(inv.termination.token),
        "observation_count": len(inv.observations),
        "total_depth": inv.total_depth,
        "soil_layers": "|".join(f"{layer.soil_type}:{layer.thickness:g}" for layer in inv.soil_layers),
        "notes": _join_text(inv.notes),
        "free_text": _join_text(inv.free_text),
        "hidden_text": _join_text(inv.hidden_text),
    }


def observations_to_dataframe(inv: Investigation, index: int = 0) -> pd.DataFrame:
    """Long-format table of an investigation's observation rows.

    Columns are the union of the row shapes present; fallback and missing
    values are empty cells, with the fallback tokens kept in ``fallbacks``.
    """
    records = []
    for position, obs in enumerate(inv.observations):
        record: dict[str, Any] = {
            "investigation_id": investigation_id(inv, index),
            "position": position,
            "method": obs.token.value,
        }
        fallbacks = []
        for f in dataclasses.fields(obs.values):
            value = getattr(obs.values, f.name)
            if not isinstance(value, ParsedField):
                continue
            record[f.name] = field_value(value)
            if value.is_fallback:
                fallbacks.append(f"{f.name}={value.raw}")
        record["fallbacks"] = ";".join(fallbacks)
        record["notes"] = _join_text(obs.notes)
        record["free_text"] = _join_text(obs.free_text)
        record["hidden_text"] = _join_text(obs.hidden_text)
        record["unofficial_soil_type"] = _join_text(obs.unofficial_soil_type)
        record["water_observed"] = field_value(obs.water_observed)
        if is_sample(obs.values):
            record["lab_result_count"] = len(obs.values.lab_results)
        records.append(record)
    return pd.DataFrame(records)


def write_investigation_index(output_dir: Path, records: list[dict]) -> Path:
    """Write the investigation index as a single Parquet file."""
    index_path = output_dir / METADATA_DIR / INVESTIGATION_INDEX_FILE
    index_path.parent.mkdir(parents=True, exist_ok=True)
    df = pd.DataFrame(records)
    df.to_parquet(index_path, engine="pyarrow", index=False)
    return index_path


def write_observations(output_dir: Path, frames: list[pd.DataFrame]) -> Path | None:
    """Write all observation rows as one Parquet file."""
    frames = [f for f in frames if not f.empty]
    if not frames:
        return None
    out_path = output_dir / OBSERVATIONS_FILE
    out_path.parent.mkdir(parents=True, exist_ok=True)
    df = pd.concat(frames, ignore_index=True)
    # Mixed-type columns (e.g. a date column next to text) are stored as text
    for col in df.columns:
        if df[col].dtype == object:
            df[col] = df[col].map(lambda v: None if pd.isna(v) else str(v))
    df.to_parquet(out_path, engine="pyarrow", index=False)
    return out_path


def run_conversion(
    raw_dir: Path,
    output_dir: Path,
    pattern: str = DEFAULT_FILE_PATTERN,
    workers: int = DEFAULT_WORKERS,
    strict: bool = False,
) -> None:
    """Parse a directory of investigation files and write the Parquet tables."""
    output_dir.mkdir(parents=True, exist_ok=True)

    collection = parse_folder(raw_dir, pattern=pattern, workers=workers, strict=strict)

    index_records = []
    frames = []
    positions: dict[str | None, int] = {}
    for inv in collection.investigations:
        index = positions.get(inv.file_info.path, 0)
        positions[inv.file_info.path] = index + 1
        index_records.append(investigation_to_dict(inv, index))
        frames.append(observations_to_dataframe(inv, index))

    index_path = write_investigation_index(output_dir, index_records)
    logger.info("Wrote investigation index with %d records to %s", len(index_records), index_path)
    obs_path = write_observations(output_dir, frames)
    if obs_path:
        logger.info("Wrote observations to %s", obs_path)

    # Summary
    print("\nConversion complete:")
    print(f"  Investigations indexed: {len(index_records)}")
    print(f"  Observations: {sum(len(f) for f in frames)}")
    print(f"  Errors: {len(collection.errors)}")
    if collection.errors:
        print("\nErrors:")
        for path, err in collection.errors[:20]:
            print(f"  {path.name}: {err}")
        if len(collection.errors) > 20:
            print(f"  ... and {len(collection.errors) - 20} more")
