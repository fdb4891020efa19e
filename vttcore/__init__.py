"""
VTTCore - WebVTT parsing and writing

Converts WebVTT text into a document model and back, preserving enough
fidelity for a lossless round-trip of every document the model can hold.

Features:
- Parse WebVTT text into timestamps, cue settings, cues and header metadata
- Structured parse errors returned as values, never raised for bad input
- Write documents back as canonical WebVTT text
- Validate programmatically built documents before writing
- Wrap documents for JSON and other structured-data formats
- Load from files, HTTP URLs and HLS (M3U8) playlists

Example usage:
    >>> from vttcore import parse_webvtt, write_webvtt, ParseError
    >>>
    >>> doc = parse_webvtt("WEBVTT\\n\\n1\\n00:00:01.000 --> 00:00:05.000\\nHi")
    >>> if isinstance(doc, ParseError):
    ...     print(doc.message)
    >>> doc.cues[0].identifier
    '1'
    >>> write_webvtt(doc)
    'WEBVTT\\n\\n1\\n00:00:01.000 --> 00:00:05.000\\nHi\\n'
"""

import logging

__version__ = "0.1.0"
__author__ = "VTTCore Contributors"
__license__ = "MIT"

# Add NullHandler to prevent "No handler found" warnings
# Users should configure logging in their application if they want to see logs
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Timestamp helpers
from .utils import (
    timestamp_to_seconds,
    seconds_to_timestamp,
)

# Errors
from .errors import (
    ParseError,
    MissingHeader,
    InvalidTimestamp,
    InvalidCueBlock,
    UnexpectedEof,
    WebVTTError,
    WebVTTParseError,
    WebVTTValidationError,
    VTTDownloadError,
)

# Data models
from .models import Timestamp, CueSettings, Cue, Metadata, WebVTT, DownloadConfig

# Parsing and writing
from .parser import parse_webvtt, loads
from .writer import write_webvtt, dumps, format_cue, validate_document

# Structured-data adapters
from .vtt_json import to_value, from_value, to_json, from_json, to_dict, from_dict

# File and HTTP loading
from .downloader import VTTDownloader, load_file, save_file, is_hls_playlist, download_vtt_segments_from_hls

__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__license__",

    # Core parsing and writing
    "parse_webvtt",
    "loads",
    "write_webvtt",
    "dumps",
    "format_cue",
    "validate_document",
    "timestamp_to_seconds",
    "seconds_to_timestamp",

    # Models
    "Timestamp",
    "CueSettings",
    "Cue",
    "Metadata",
    "WebVTT",
    "DownloadConfig",

    # Errors
    "ParseError",
    "MissingHeader",
    "InvalidTimestamp",
    "InvalidCueBlock",
    "UnexpectedEof",
    "WebVTTError",
    "WebVTTParseError",
    "WebVTTValidationError",
    "VTTDownloadError",

    # Structured-data adapters
    "to_value",
    "from_value",
    "to_json",
    "from_json",
    "to_dict",
    "from_dict",

    # I/O
    "VTTDownloader",
    "load_file",
    "save_file",
    "is_hls_playlist",
    "download_vtt_segments_from_hls",
]
