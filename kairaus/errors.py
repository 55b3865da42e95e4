"""Exceptions raised while reading and parsing investigation files."""

from __future__ import annotations


class InfraParseError(ValueError):
    """Base class for parse failures."""


class StructuralError(InfraParseError):
    """A line has no valid target: a data row without a usable method, or a
    lab result without a sample observation to attach to.

    Only raised in strict mode; lenient parsing logs and skips the line.
    """

    def __init__(self, message: str, line_number: int | None = None, line: str = ""):
        self.line_number = line_number
        self.line = line
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class InfraFileError(InfraParseError):
    """The input could not be read or decoded at all."""
