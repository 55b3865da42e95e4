"""Shared fixtures for kairaus tests."""

from __future__ import annotations

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir():
    return FIXTURES_DIR


@pytest.fixture
def two_soundings_path():
    return FIXTURES_DIR / "two_soundings.txt"


@pytest.fixture
def unterminated_path():
    return FIXTURES_DIR / "unterminated.txt"


@pytest.fixture
def weight_sounding_lines():
    return [
        "FO 1 GEOCALC 5",
        "KJ WGS84 N2000",
        "TT PA 1 m1 std k 0",
        "5.0 1.2 3 clay",
        "-1 TM",
    ]
