"""Read investigation files from disk.

Files in the wild are UTF-8 (sometimes with a BOM) or Latin-1 from older
field software. Latin-1 decodes any byte sequence, so it is the last resort.
"""

from __future__ import annotations

from pathlib import Path

from kairaus.config import ENCODINGS
from kairaus.errors import InfraFileError
from kairaus.models.infra_file import InfraFile
from kairaus.parsers.infra_parser import parse_lines


def decode_bytes(raw: bytes) -> tuple[str, str]:
    """Decode raw file content, returning ``(text, encoding_name)``."""
    for encoding in ENCODINGS:
        try:
            return raw.decode(encoding), encoding
        except UnicodeDecodeError:
            continue
    raise InfraFileError("Could not decode file content")


def read_lines(path: Path) -> tuple[list[str], str]:
    """Read a file into non-blank lines plus the encoding used."""
    try:
        with open(path, "rb") as f:
            raw = f.read()
    except OSError as e:
        raise InfraFileError(f"Failed to read file '{path}': {e}") from e

    text, encoding = decode_bytes(raw)
    lines = [line for line in text.splitlines() if line.strip()]
    return lines, encoding


def parse_file(path: Path, strict: bool = False) -> InfraFile:
    """Read and parse one investigation file."""
    path = Path(path)
    lines, encoding = read_lines(path)
    return parse_lines(lines, encoding=encoding, path=str(path), strict=strict)
