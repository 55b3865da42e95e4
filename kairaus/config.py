"""Record codes, tokens, and output paths."""

from __future__ import annotations

import re

# Token that marks an explicitly absent column, whatever its type
MISSING_TOKEN = "-"

# Date column value meaning "date not known"
UNKNOWN_DATE_TOKEN = "00000000"
DATE_FORMAT = "%d%m%Y"

# Integer columns are signed 32-bit
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

# Line-leading record codes
FILE_RECORD_CODES = {"FO", "KJ"}
INVESTIGATION_RECORD_CODES = {
    "OM", "ML", "OR", "TY", "PK", "TT", "LA", "XY", "LN",
    "GR", "GL", "AT", "AL", "ZP", "TP", "LP",
}
ANNOTATION_RECORD_CODES = {"HM", "TX", "HT", "EM"}
LAB_RECORD_CODES = {"LB", "RK"}
TERMINATOR_CODE = "-1"

# Leading token of an observation data row: optional sign, digits, optional decimals
NUMERIC_ROW_RE = re.compile(r"^[+-]?[0-9]+([.,][0-9]+)?$")

# Output subdirectories
METADATA_DIR = "metadata"
INVESTIGATION_INDEX_FILE = "investigation_index.parquet"
OBSERVATIONS_FILE = "observations.parquet"

# Raw input discovery
DEFAULT_FILE_PATTERN = "*.txt"
DEFAULT_WORKERS = 4

# Decoding order for raw bytes
ENCODINGS = ("utf-8-sig", "iso-8859-1")
