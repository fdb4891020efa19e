"""
Error types for VTTCore.

Parsing never raises for malformed input. The parser returns one of the
``ParseError`` variants below instead of a document, and callers branch on
the variant. The exception classes wrap those values for the raising
convenience API (``loads``, ``from_json`` and friends) and for I/O failures.
"""

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class ParseError:
    """Base class for every parse failure variant."""

    @property
    def message(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class MissingHeader(ParseError):
    """The first non-empty line is not a WEBVTT signature."""
    line: Optional[int] = None

    @property
    def message(self) -> str:
        if self.line is None:
            return "Missing WEBVTT header"
        return f"Missing WEBVTT header (line {self.line})"


@dataclass(frozen=True)
class InvalidTimestamp(ParseError):
    """Timing text failed the timestamp grammar or a field range check."""
    raw: str
    line: Optional[int] = None

    @property
    def message(self) -> str:
        if self.line is None:
            return f"Invalid timestamp: {self.raw!r}"
        return f"Invalid timestamp on line {self.line}: {self.raw!r}"


@dataclass(frozen=True)
class InvalidCueBlock(ParseError):
    """Malformed settings token or a structurally broken cue block."""
    line: Optional[int]
    reason: str

    @property
    def message(self) -> str:
        if self.line is None:
            return f"Invalid cue block: {self.reason}"
        return f"Invalid cue block on line {self.line}: {self.reason}"


@dataclass(frozen=True)
class UnexpectedEof(ParseError):
    """Input ended before any header line could be read."""

    @property
    def message(self) -> str:
        return "Unexpected end of input: no WEBVTT header found"


class WebVTTError(Exception):
    """Base exception for VTTCore."""


class WebVTTParseError(WebVTTError, ValueError):
    """Raised by the convenience API when parsing fails."""

    def __init__(self, error: ParseError):
        super().__init__(error.message)
        self.error = error


class WebVTTValidationError(WebVTTError, ValueError):
    """Raised when a document that must be well formed is not."""

    def __init__(self, problems: List[str]):
        super().__init__("Invalid WebVTT document: " + "; ".join(problems))
        self.problems = list(problems)


class VTTDownloadError(WebVTTError):
    """Raised when a VTT file cannot be fetched or saved."""
