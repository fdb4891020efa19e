"""
Shared utility functions for VTTCore.

Timestamp grammar helpers used by the data model and the parser, plus the
line handling shared by parser and validation.
"""

import re
from typing import List, Optional

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE

TIMING_ARROW = "-->"
HEADER_SIGNATURE = "WEBVTT"

# Hours are optional and unbounded; minutes and seconds are range-checked after matching
_TIMESTAMP_PATTERN = re.compile(r'(?:([0-9]+):)?([0-9]{1,2}):([0-9]{1,2})\.([0-9]{3})')
_NOTE_PATTERN = re.compile(r'NOTE(?:[ \t].*)?')


def parse_timestamp_ms(text: str) -> Optional[int]:
    """
    Convert ``HH:MM:SS.mmm`` or ``MM:SS.mmm`` to milliseconds.

    Args:
        text: Timestamp text, without surrounding whitespace

    Returns:
        Total milliseconds, or None when the text is not a valid timestamp

    Example:
        >>> parse_timestamp_ms("00:01:02.000")
        62000
        >>> parse_timestamp_ms("1:02.000")
        62000
        >>> parse_timestamp_ms("00:60:00.000") is None
        True
    """
    match = _TIMESTAMP_PATTERN.fullmatch(text)
    if not match:
        return None

    hours, minutes, seconds, millis = match.groups()
    minutes = int(minutes)
    seconds = int(seconds)
    if minutes > 59 or seconds > 59:
        return None

    return (int(hours or 0) * MS_PER_HOUR
            + minutes * MS_PER_MINUTE
            + seconds * MS_PER_SECOND
            + int(millis))


def format_timestamp_ms(milliseconds: int) -> str:
    """
    Convert milliseconds to ``HH:MM:SS.mmm``.

    Hours are zero-padded to two digits and never truncated.

    Example:
        >>> format_timestamp_ms(62000)
        '00:01:02.000'
        >>> format_timestamp_ms(100 * 3600 * 1000)
        '100:00:00.000'
    """
    hours, remainder = divmod(milliseconds, MS_PER_HOUR)
    minutes, remainder = divmod(remainder, MS_PER_MINUTE)
    seconds, millis = divmod(remainder, MS_PER_SECOND)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{millis:03d}"


def timestamp_to_seconds(timestamp: str) -> float:
    """
    Convert a WebVTT timestamp to seconds.

    Raises:
        ValueError: If the timestamp is malformed

    Example:
        >>> timestamp_to_seconds("00:01:30.500")
        90.5
    """
    milliseconds = parse_timestamp_ms(timestamp)
    if milliseconds is None:
        raise ValueError(f"Invalid timestamp: {timestamp!r}")
    return milliseconds / MS_PER_SECOND


def seconds_to_timestamp(seconds: float) -> str:
    """
    Convert seconds to ``HH:MM:SS.mmm``, rounding to the nearest millisecond.

    Example:
        >>> seconds_to_timestamp(90.5)
        '00:01:30.500'
    """
    if seconds < 0:
        raise ValueError(f"Timestamp cannot be negative: {seconds}")
    return format_timestamp_ms(int(round(seconds * MS_PER_SECOND)))


def normalize_newlines(content: str) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return content.replace('\r\n', '\n').replace('\r', '\n')


def split_lines(content: str) -> List[str]:
    """Split content into lines after normalising line endings and dropping a BOM."""
    content = normalize_newlines(content)
    if content.startswith('\ufeff'):
        content = content[1:]
    return content.split('\n')


def is_blank(line: str) -> bool:
    return not line.strip()


def is_timing_line(line: str) -> bool:
    return TIMING_ARROW in line


def is_note_line(line: str) -> bool:
    """True for a line that opens a NOTE comment block."""
    return bool(_NOTE_PATTERN.fullmatch(line))


def is_header_line(line: str) -> bool:
    """True for a line that starts with ``WEBVTT`` once surrounding whitespace is removed."""
    return line.strip().startswith(HEADER_SIGNATURE)
