"""Load converted tables back from an output directory."""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from kairaus.config import INVESTIGATION_INDEX_FILE, METADATA_DIR, OBSERVATIONS_FILE


def get_investigation_index(output_dir: Path) -> pd.DataFrame:
    """Load the investigation index as a DataFrame."""
    index_path = output_dir / METADATA_DIR / INVESTIGATION_INDEX_FILE
    if not index_path.exists():
        raise FileNotFoundError(f"Investigation index not found at {index_path}. Run 'kairaus convert' first.")
    return pd.read_parquet(index_path)


def get_observations(output_dir: Path) -> pd.DataFrame:
    """Load all observation rows as a DataFrame."""
    obs_path = output_dir / OBSERVATIONS_FILE
    if not obs_path.exists():
        raise FileNotFoundError(f"Observations not found at {obs_path}. Run 'kairaus convert' first.")
    return pd.read_parquet(obs_path)


def dataset_info(output_dir: Path) -> str:
    """Generate a dataset summary string."""
    try:
        df = get_investigation_index(output_dir)
    except FileNotFoundError as e:
        return str(e)

    lines = [
        "Dataset Summary",
        "=" * 50,
        f"Total investigations: {len(df)}",
    ]

    if "source_path" in df.columns:
        lines.append(f"Source files: {df['source_path'].nunique()}")

    if "method" in df.columns:
        method_counts = df["method"].dropna().value_counts().to_dict()
        lines.append(f"Methods: {method_counts}")

    if "coordinate_system" in df.columns:
        lines.append(f"Coordinate systems: {df['coordinate_system'].value_counts().to_dict()}")

    if "date" in df.columns:
        dates = pd.to_datetime(df["date"], errors="coerce").dropna()
        if not dates.empty:
            lines.append(f"Date range: {dates.min().date()} to {dates.max().date()}")

    if "observation_count" in df.columns:
        lines.append(f"Total observations: {df['observation_count'].sum():,}")

    if "total_depth" in df.columns:
        depths = df["total_depth"].dropna()
        if not depths.empty:
            lines.append(f"Total depth sounded: {depths.sum():.1f} m (max {depths.max():.1f} m)")

    return "\n".join(lines)
