"""Parse many investigation files into one flat collection."""

from __future__ import annotations

import logging
from collections import Counter
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

from tqdm import tqdm

from kairaus.config import DEFAULT_FILE_PATTERN, DEFAULT_WORKERS
from kairaus.errors import InfraFileError
from kairaus.models.infra_file import count_methods
from kairaus.models.investigation import Investigation
from kairaus.models.vocabulary import MethodToken
from kairaus.parsers.file_reader import parse_file

logger = logging.getLogger(__name__)


@dataclass
class InvestigationCollection:
    """Investigations from many files; each carries its own file metadata."""

    investigations: list[Investigation] = field(default_factory=list)
    errors: list[tuple[Path, str]] = field(default_factory=list)

    def count_investigations(self) -> Counter[MethodToken]:
        return count_methods(self.investigations)

    def __len__(self) -> int:
        return len(self.investigations)


def discover_files(raw_dir: Path, pattern: str = DEFAULT_FILE_PATTERN) -> list[Path]:
    """Find all investigation files below ``raw_dir``."""
    return sorted(p for p in raw_dir.rglob(pattern) if p.is_file())


def _parse_investigations(path: Path, strict: bool) -> list[Investigation]:
    return parse_file(path, strict=strict).investigations


def parse_folder(
    raw_dir: Path,
    pattern: str = DEFAULT_FILE_PATTERN,
    workers: int = DEFAULT_WORKERS,
    strict: bool = False,
    progress: bool = True,
) -> InvestigationCollection:
    """Parse every matching file below ``raw_dir`` in parallel.

    With one worker the files are parsed in this process. Files that fail
    for any reason are logged and recorded in ``errors``; the investigations
    of the others are merged in file-path order.
    """
    raw_dir = Path(raw_dir)
    if not raw_dir.is_dir():
        raise InfraFileError(f"Not a directory: {raw_dir}")

    paths = discover_files(raw_dir, pattern)
    if not paths:
        raise InfraFileError(f"No files matching {pattern!r} found in {raw_dir}")

    logger.info("Found %d files in %s", len(paths), raw_dir)

    per_file: dict[Path, list[Investigation]] = {}
    collection = InvestigationCollection()

    if workers <= 1:
        iterator = tqdm(paths, desc="Parsing investigation files") if progress else paths
        for path in iterator:
            try:
                per_file[path] = _parse_investigations(path, strict)
            except Exception as e:
                collection.errors.append((path, str(e)))
                logger.error("Error parsing %s: %s", path, e)
    else:
        with ProcessPoolExecutor(max_workers=workers) as pool:
            futures = {pool.submit(_parse_investigations, p, strict): p for p in paths}
            done = as_completed(futures)
            if progress:
                done = tqdm(done, total=len(futures), desc="Parsing investigation files")
            for future in done:
                path = futures[future]
                try:
                    per_file[path] = future.result()
                except Exception as e:
                    collection.errors.append((path, str(e)))
                    logger.error("Error parsing %s: %s", path, e)

    for path in paths:
        collection.investigations.extend(per_file.get(path, []))

    if not collection.investigations:
        raise InfraFileError(f"No investigations could be parsed from {raw_dir}")

    return collection
