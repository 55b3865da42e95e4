"""Tri-state field values: parsed, fallback (raw text kept), or missing.

Every scalar column of the format is stored as a ``ParsedField``. A column
whose token fails its type-specific decoding is not an error: the raw token is
kept as a fallback so that malformed input stays diagnosable.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, Sequence, TypeVar

from kairaus.config import MISSING_TOKEN

T = TypeVar("T")


class DecodeError(ValueError):
    """Raised by a decoder when a token cannot be converted."""


class UnknownValue(ValueError):
    """Raised by a decoder when a token explicitly means "not known"."""


class FieldState(Enum):
    PARSED = "parsed"
    FALLBACK = "fallback"
    MISSING = "missing"


@dataclass(frozen=True)
class ParsedField(Generic[T]):
    """A single column value."""

    state: FieldState = FieldState.MISSING
    value: T | None = None
    raw: str | None = None  # kept only for fallbacks

    @classmethod
    def parsed(cls, value: T) -> ParsedField[T]:
        return cls(FieldState.PARSED, value=value)

    @classmethod
    def fallback(cls, raw: str) -> ParsedField[T]:
        return cls(FieldState.FALLBACK, raw=raw)

    @classmethod
    def missing(cls) -> ParsedField[T]:
        return cls(FieldState.MISSING)

    @property
    def is_parsed(self) -> bool:
        return self.state is FieldState.PARSED

    @property
    def is_fallback(self) -> bool:
        return self.state is FieldState.FALLBACK

    @property
    def is_missing(self) -> bool:
        return self.state is FieldState.MISSING

    def get(self, default: Any = None) -> Any:
        """Return the parsed value, or ``default`` for fallbacks and missing values."""
        return self.value if self.is_parsed else default

    def display(self) -> str | None:
        """Text for reports: the value, the raw token marked as fallback, or None."""
        if self.is_parsed:
            value = self.value
            return value.value if isinstance(value, Enum) else str(value)
        if self.is_fallback:
            return f"{self.raw} (fallback)"
        return None

    def __str__(self) -> str:
        if self.is_parsed:
            return str(self.value)
        if self.is_fallback:
            return f"Fallback({self.raw})"
        return "Missing"


MISSING: ParsedField[Any] = ParsedField.missing()

Decoder = Callable[[str], T]


def parse_field(raw: str, decoder: Decoder[T]) -> ParsedField[T]:
    """Decode one raw token into a ParsedField."""
    if raw == MISSING_TOKEN:
        return MISSING
    try:
        return ParsedField.parsed(decoder(raw))
    except UnknownValue:
        return MISSING
    except DecodeError:
        return ParsedField.fallback(raw)


def field_at(params: Sequence[str], index: int, decoder: Decoder[T]) -> ParsedField[T]:
    """Decode the token at ``index``; columns past the end of the line are missing."""
    if index < len(params):
        return parse_field(params[index], decoder)
    return MISSING
