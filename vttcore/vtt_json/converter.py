"""
Structured-data conversion for WebVTT documents.

Two views are offered:

- the opaque view, where a document is its canonical WebVTT text held in a
  single string value (``to_value``/``from_value``, ``to_json``/``from_json``)
- the structured view, a plain dictionary of header metadata and cues with
  timestamps serialised as ``HH:MM:SS.mmm`` strings (``to_dict``/``from_dict``)

Both views parse back into equal documents.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from ..errors import ParseError, WebVTTParseError
from ..models import Cue, CueSettings, Metadata, Timestamp, WebVTT
from ..parser import loads
from ..writer import write_webvtt

logger = logging.getLogger(__name__)


def to_value(document: WebVTT) -> str:
    """Serialise a document as one string value: its canonical text."""
    return write_webvtt(document)


def from_value(value: Any) -> WebVTT:
    """
    Rebuild a document from the string produced by ``to_value``.

    Raises:
        ValueError: If value is not a string
        WebVTTParseError: If the string is not valid WebVTT
    """
    if not isinstance(value, str):
        raise ValueError(f"Expected a WebVTT string, got {type(value).__name__}")
    return loads(value)


def to_json(document: WebVTT, **kwargs: Any) -> str:
    """
    Dump the canonical text as a JSON string value.

    Example:
        >>> to_json(WebVTT())
        '"WEBVTT\\\\n"'
    """
    return json.dumps(to_value(document), **kwargs)


def from_json(data: str) -> WebVTT:
    """Load a document from the JSON produced by ``to_json``."""
    return from_value(json.loads(data))


def cue_to_dict(cue: Cue) -> Dict[str, Any]:
    """Convert a cue to a JSON-friendly dictionary."""
    return {
        "identifier": cue.identifier,
        "start": cue.start.format(),
        "end": cue.end.format(),
        "settings": [[key, value] for key, value in cue.settings] if cue.settings else None,
        "payload": cue.payload,
    }


def cue_from_dict(data: Dict[str, Any]) -> Cue:
    """
    Build a cue from ``cue_to_dict`` output.

    Raises:
        ValueError: If a required field is missing or has the wrong shape
        WebVTTParseError: If a timestamp string is malformed
    """
    if not isinstance(data, dict):
        raise ValueError(f"Cue must be a dictionary, got {type(data).__name__}")

    try:
        start = data["start"]
        end = data["end"]
    except KeyError as e:
        raise ValueError(f"Cue is missing required field {e.args[0]!r}")

    identifier = data.get("identifier")
    if identifier is not None and not isinstance(identifier, str):
        raise ValueError(f"Cue identifier must be a string, got {type(identifier).__name__}")

    payload = data.get("payload")
    if payload is None:
        payload = ""
    elif not isinstance(payload, str):
        raise ValueError(f"Cue payload must be a string, got {type(payload).__name__}")

    settings: Optional[CueSettings] = None
    raw_settings = data.get("settings")
    if raw_settings:
        settings = CueSettings([_as_pair(pair, "setting") for pair in _as_list(raw_settings, "settings")])

    return Cue(
        start=_as_timestamp(start),
        end=_as_timestamp(end),
        payload=payload,
        identifier=identifier,
        settings=settings,
    )


def to_dict(document: WebVTT) -> Dict[str, Any]:
    """
    Convert a document to a dictionary.

    Example:
        >>> to_dict(WebVTT())
        {'header': {'metadata': []}, 'cues': []}
    """
    return {
        "header": {
            "metadata": [[key, value] for key, value in document.metadata.items()],
        },
        "cues": [cue_to_dict(cue) for cue in document.cues],
    }


def from_dict(data: Dict[str, Any]) -> WebVTT:
    """Build a document from ``to_dict`` output."""
    if not isinstance(data, dict):
        raise ValueError(f"Expected a dictionary, got {type(data).__name__}")

    header = data.get("header") or {}
    if not isinstance(header, dict):
        raise ValueError(f"Header must be a dictionary, got {type(header).__name__}")

    raw_metadata = header.get("metadata") or []
    # Older dumps may hold metadata as a plain mapping
    if isinstance(raw_metadata, dict):
        raw_metadata = list(raw_metadata.items())

    metadata = Metadata([_as_pair(entry, "metadata entry") for entry in _as_list(raw_metadata, "metadata")])
    cues: List[Cue] = [cue_from_dict(cue) for cue in _as_list(data.get("cues") or [], "cues")]

    logger.debug(f"Loaded document from dict: {len(metadata)} metadata entries, {len(cues)} cues")
    return WebVTT(metadata=metadata, cues=cues)


def _as_list(value: Any, what: str) -> list:
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"{what} must be a list, got {type(value).__name__}")
    return list(value)


def _as_pair(entry: Any, what: str):
    if not isinstance(entry, (list, tuple)) or len(entry) != 2:
        raise ValueError(f"Invalid {what}: {entry!r}")
    key, value = entry
    return str(key), str(value)


def _as_timestamp(value: Any) -> Timestamp:
    if isinstance(value, Timestamp):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Timestamp must be a string, got {type(value).__name__}")
    result = Timestamp.parse(value)
    if isinstance(result, ParseError):
        raise WebVTTParseError(result)
    return result
