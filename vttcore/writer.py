"""
WebVTT writer for VTTCore.

Turns a document into canonical WebVTT text. The output of
``write_webvtt`` parses back to an equal document whenever
``validate_document`` reports no problems.
"""

import logging
from typing import List

from .errors import WebVTTValidationError
from .models import Cue, WebVTT
from .utils import HEADER_SIGNATURE, TIMING_ARROW, is_blank, is_note_line

logger = logging.getLogger(__name__)


def format_cue(cue: Cue) -> str:
    """
    Format a single cue block, without a trailing newline.

    Example:
        >>> format_cue(Cue(Timestamp(1000), Timestamp(5000), "Test"))
        '00:00:01.000 --> 00:00:05.000\\nTest'
    """
    lines = []
    if cue.identifier is not None:
        lines.append(cue.identifier)
    lines.append(cue.timing_line)
    if cue.payload:
        lines.append(cue.payload)
    return "\n".join(lines)


def write_webvtt(document: WebVTT, validate: bool = False) -> str:
    """
    Write a document as canonical WebVTT text.

    Args:
        document: Document to write
        validate: Raise instead of writing when the document would not
            round-trip (see ``validate_document``)

    Returns:
        WebVTT text ending in a single newline

    Raises:
        WebVTTValidationError: If validate is True and problems were found
    """
    if validate:
        problems = validate_document(document)
        if problems:
            raise WebVTTValidationError(problems)

    lines = [HEADER_SIGNATURE]
    for key, value in document.metadata.items():
        lines.append(f"{key}: {value}")

    for cue in document.cues:
        lines.append("")
        lines.append(format_cue(cue))

    return "\n".join(lines) + "\n"


def dumps(document: WebVTT) -> str:
    """Alias of ``write_webvtt`` with validation enabled."""
    return write_webvtt(document, validate=True)


def validate_document(document: WebVTT) -> List[str]:
    """
    Check a document for states the text format cannot represent.

    Documents built in code are not checked on construction, so a cue may
    end before it starts or carry a payload with an empty line in it. This
    lists every such problem; an empty list means ``write_webvtt`` output
    parses back to an equal document.
    """
    problems = []

    for key, value in document.metadata.items():
        if not key.strip():
            problems.append("metadata key is blank")
        if "\n" in key or "\r" in key or ": " in key:
            problems.append(f"metadata key {key!r} contains a line break or ': '")
        if "\n" in value or "\r" in value:
            problems.append(f"metadata value for {key!r} contains a line break")

    for number, cue in enumerate(document.cues, start=1):
        problems.extend(f"cue {number}: {problem}" for problem in _validate_cue(cue))

    if problems:
        logger.debug(f"Document validation found {len(problems)} problems")
    return problems


def _validate_cue(cue: Cue) -> List[str]:
    problems = []

    if cue.end <= cue.start:
        problems.append(f"end {cue.end} is not after start {cue.start}")

    if cue.identifier is not None:
        identifier = cue.identifier
        if is_blank(identifier):
            problems.append("identifier is blank")
        elif "\n" in identifier or "\r" in identifier:
            problems.append("identifier contains a line break")
        elif TIMING_ARROW in identifier:
            problems.append(f"identifier contains {TIMING_ARROW!r}")
        elif is_note_line(identifier):
            problems.append("identifier would be read as a NOTE comment")

    if cue.settings:
        for key, value in cue.settings:
            if not key or ":" in key or key != "".join(key.split()):
                problems.append(f"setting key {key!r} is empty or contains ':' or whitespace")
            if ":" in value or value != "".join(value.split()):
                problems.append(f"setting value {value!r} for {key!r} contains ':' or whitespace")

    if "\r" in cue.payload:
        problems.append("payload contains a carriage return")
    if "" in cue.payload.split("\n") and cue.payload:
        problems.append("payload contains an empty line")

    return problems
