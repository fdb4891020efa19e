"""
Structured-data adapters for WebVTT documents.

Wraps a document as one opaque string value (its canonical WebVTT text) for
embedding in JSON or any other serialisation framework, and offers a
dictionary view of metadata and cues.
"""

from .converter import (
    to_value,
    from_value,
    to_json,
    from_json,
    to_dict,
    from_dict,
    cue_to_dict,
    cue_from_dict,
)

__all__ = [
    # Opaque string view
    "to_value",
    "from_value",
    "to_json",
    "from_json",

    # Structured view
    "to_dict",
    "from_dict",
    "cue_to_dict",
    "cue_from_dict",
]
