"""
WebVTT parser for VTTCore.

A single forward pass over the input lines:

1. skip leading blank lines and require the ``WEBVTT`` signature line
2. read ``Key: Value`` header metadata up to the first blank line
3. read the body as blank-line separated NOTE comment blocks and cue blocks

The first problem stops the pass and is returned as a ``ParseError`` value;
no partial document is produced.
"""

import dataclasses
import logging
from typing import List, Optional, Tuple, Union

from .errors import (
    InvalidCueBlock,
    InvalidTimestamp,
    MissingHeader,
    ParseError,
    UnexpectedEof,
    WebVTTParseError,
)
from .models import Cue, CueSettings, Metadata, Timestamp, WebVTT
from .utils import (
    TIMING_ARROW,
    is_blank,
    is_header_line,
    is_note_line,
    is_timing_line,
    split_lines,
)

logger = logging.getLogger(__name__)

ParseResult = Union[WebVTT, ParseError]

METADATA_SEPARATOR = ": "


def parse_webvtt(content: str) -> ParseResult:
    """
    Parse WebVTT text into a document.

    Args:
        content: Raw WebVTT text; CRLF and CR line endings are accepted

    Returns:
        The parsed WebVTT document, or the ParseError describing the first
        problem found

    Example:
        >>> doc = parse_webvtt("WEBVTT\\n\\n00:01:02.000 --> 00:03:04.000\\nHello, world!")
        >>> doc.cues[0].payload
        'Hello, world!'
    """
    lines = split_lines(content)

    index = _skip_blank_lines(lines, 0)
    if index >= len(lines):
        return UnexpectedEof()

    if not is_header_line(lines[index]):
        return MissingHeader(line=index + 1)

    document = WebVTT()
    index = _parse_metadata(lines, index + 1, document.metadata)

    while True:
        index = _skip_blank_lines(lines, index)
        if index >= len(lines):
            break

        if is_note_line(lines[index]):
            index = _skip_comment_block(lines, index)
            continue

        result = _parse_cue_block(lines, index)
        if isinstance(result, ParseError):
            logger.debug(f"WebVTT parse failed: {result.message}")
            return result

        cue, index = result
        document.add_cue(cue)

    logger.debug(f"Parsed WebVTT document: {len(document.metadata)} metadata entries, "
                 f"{len(document.cues)} cues")
    return document


def loads(content: str) -> WebVTT:
    """
    Parse WebVTT text, raising instead of returning an error value.

    Raises:
        WebVTTParseError: If the text is not valid WebVTT; the structured
            error is available as ``exc.error``
    """
    result = parse_webvtt(content)
    if isinstance(result, ParseError):
        raise WebVTTParseError(result)
    return result


def _skip_blank_lines(lines: List[str], index: int) -> int:
    while index < len(lines) and is_blank(lines[index]):
        index += 1
    return index


def _parse_metadata(lines: List[str], index: int, metadata: Metadata) -> int:
    """Read header lines up to the first blank line; return the index after them."""
    while index < len(lines) and not is_blank(lines[index]):
        line = lines[index]
        key, separator, value = line.partition(METADATA_SEPARATOR)
        if separator and key.strip():
            metadata.set(key, value)
        else:
            # Free text in the header block is tolerated
            logger.debug(f"Ignoring header line {index + 1}: {line[:80]!r}")
        index += 1
    return index


def _skip_comment_block(lines: List[str], index: int) -> int:
    start = index
    while index < len(lines) and not is_blank(lines[index]):
        index += 1
    logger.debug(f"Skipped NOTE block at line {start + 1} ({index - start} lines)")
    return index


def _parse_cue_block(lines: List[str], index: int) -> Union[Tuple[Cue, int], ParseError]:
    """
    Parse one cue block starting at ``index``.

    Returns:
        (cue, index of the first line after the block), or a ParseError
    """
    identifier: Optional[str] = None
    timing_index = index

    if not is_timing_line(lines[index]):
        if index + 1 < len(lines) and is_timing_line(lines[index + 1]):
            identifier = lines[index]
            timing_index = index + 1
        elif index + 1 < len(lines) and not is_blank(lines[index + 1]):
            return InvalidCueBlock(line=index + 1, reason="cue block has no timing line")
        else:
            return InvalidCueBlock(line=index + 1, reason=f"line {lines[index][:80]!r} is not part of a cue")

    timing = _parse_timing_line(lines[timing_index], timing_index + 1)
    if isinstance(timing, ParseError):
        return timing
    start, end, settings = timing

    # Only an empty line ends the payload; whitespace-only lines belong to it
    payload_end = timing_index + 1
    while payload_end < len(lines) and lines[payload_end] != "":
        payload_end += 1
    payload = "\n".join(lines[timing_index + 1:payload_end])

    cue = Cue(start=start, end=end, payload=payload, identifier=identifier, settings=settings)
    return cue, payload_end


def _parse_timing_line(line: str, line_number: int) -> Union[
        Tuple[Timestamp, Timestamp, Optional[CueSettings]], ParseError]:
    """Split ``start --> end [settings]`` and parse each part."""
    start_text, _, remainder = line.partition(TIMING_ARROW)

    start = Timestamp.parse(start_text.strip())
    if isinstance(start, ParseError):
        return dataclasses.replace(start, line=line_number)

    tokens = remainder.split()
    if not tokens:
        return InvalidTimestamp(raw="", line=line_number)

    end = Timestamp.parse(tokens[0])
    if isinstance(end, ParseError):
        return dataclasses.replace(end, line=line_number)

    settings = CueSettings.parse(tokens[1:])
    if isinstance(settings, ParseError):
        return dataclasses.replace(settings, line=line_number)

    return start, end, settings if settings.pairs else None
