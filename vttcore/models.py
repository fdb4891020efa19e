"""
Data models for VTTCore.

Defines the WebVTT document model: timestamps, cue settings, cues, header
metadata and the document aggregate, plus the configuration dataclass used
by the downloader.
"""

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from .errors import InvalidCueBlock, InvalidTimestamp, ParseError, WebVTTParseError
from .utils import (
    MS_PER_HOUR,
    MS_PER_MINUTE,
    MS_PER_SECOND,
    format_timestamp_ms,
    parse_timestamp_ms,
)


@dataclass(frozen=True, order=True)
class Timestamp:
    """A point in time with millisecond resolution."""
    milliseconds: int = 0

    def __post_init__(self):
        if not isinstance(self.milliseconds, int) or isinstance(self.milliseconds, bool):
            raise TypeError(f"Timestamp milliseconds must be an int, got {self.milliseconds!r}")
        if self.milliseconds < 0:
            raise ValueError(f"Timestamp cannot be negative: {self.milliseconds}")

    @classmethod
    def parse(cls, text: str) -> Union["Timestamp", InvalidTimestamp]:
        """
        Parse ``HH:MM:SS.mmm`` or ``MM:SS.mmm``.

        Returns an ``InvalidTimestamp`` carrying the raw text instead of raising.

        Example:
            >>> Timestamp.parse("00:01:02.000")
            Timestamp(milliseconds=62000)
        """
        milliseconds = parse_timestamp_ms(text)
        if milliseconds is None:
            return InvalidTimestamp(raw=text)
        return cls(milliseconds)

    @classmethod
    def from_string(cls, text: str) -> "Timestamp":
        """Like ``parse`` but raises ``WebVTTParseError`` on bad input."""
        result = cls.parse(text)
        if isinstance(result, ParseError):
            raise WebVTTParseError(result)
        return result

    @classmethod
    def from_seconds(cls, seconds: float) -> "Timestamp":
        return cls(int(round(seconds * MS_PER_SECOND)))

    @classmethod
    def from_components(cls, hours: int = 0, minutes: int = 0, seconds: int = 0,
                        milliseconds: int = 0) -> "Timestamp":
        return cls(hours * MS_PER_HOUR + minutes * MS_PER_MINUTE
                   + seconds * MS_PER_SECOND + milliseconds)

    @property
    def total_seconds(self) -> float:
        return self.milliseconds / MS_PER_SECOND

    def format(self) -> str:
        """Format as ``HH:MM:SS.mmm``."""
        return format_timestamp_ms(self.milliseconds)

    def __str__(self) -> str:
        return self.format()


@dataclass
class CueSettings:
    """
    Ordered ``key:value`` settings from a cue timing line.

    Keys may repeat and unknown keys are kept, so the pairs are stored as a
    plain list rather than a mapping.
    """
    pairs: List[Tuple[str, str]] = field(default_factory=list)

    def __post_init__(self):
        self.pairs = [(key, value) for key, value in self.pairs]

    @classmethod
    def parse(cls, tokens: Union[str, Iterable[str]]) -> Union["CueSettings", InvalidCueBlock]:
        """
        Parse whitespace-separated ``key:value`` tokens.

        Args:
            tokens: The settings text, or the already split tokens

        Returns:
            CueSettings, or InvalidCueBlock naming the first malformed token

        Example:
            >>> CueSettings.parse("align:start line:0").pairs
            [('align', 'start'), ('line', '0')]
        """
        if isinstance(tokens, str):
            tokens = tokens.split()

        pairs = []
        for token in tokens:
            if token.count(':') != 1:
                return InvalidCueBlock(line=None, reason=f"malformed cue setting {token!r}")
            key, value = token.split(':')
            if not key:
                return InvalidCueBlock(line=None, reason=f"cue setting without a key {token!r}")
            pairs.append((key, value))
        return cls(pairs)

    def add(self, key: str, value: str) -> None:
        self.pairs.append((key, value))

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return the last value stored for ``key``."""
        for stored_key, value in reversed(self.pairs):
            if stored_key == key:
                return value
        return default

    def get_all(self, key: str) -> List[str]:
        return [value for stored_key, value in self.pairs if stored_key == key]

    def format(self) -> str:
        return " ".join(f"{key}:{value}" for key, value in self.pairs)

    def __len__(self) -> int:
        return len(self.pairs)

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self.pairs)

    def __str__(self) -> str:
        return self.format()


@dataclass
class Cue:
    """A single subtitle entry: time range, optional identifier and settings, payload."""
    start: Timestamp
    end: Timestamp
    payload: str = ""
    identifier: Optional[str] = None
    settings: Optional[CueSettings] = None

    def __post_init__(self):
        if isinstance(self.start, str):
            self.start = Timestamp.from_string(self.start)
        if isinstance(self.end, str):
            self.end = Timestamp.from_string(self.end)
        # An empty settings list and no settings are written identically
        if self.settings is not None and not self.settings.pairs:
            self.settings = None

    def __eq__(self, other):
        if not isinstance(other, Cue):
            return NotImplemented
        # Settings emptied after construction still compare equal to absent settings
        return ((self.start, self.end, self.payload, self.identifier, self.settings or None)
                == (other.start, other.end, other.payload, other.identifier, other.settings or None))

    @property
    def duration(self) -> int:
        """Length in milliseconds; negative when end precedes start."""
        return self.end.milliseconds - self.start.milliseconds

    @property
    def timing_line(self) -> str:
        line = f"{self.start.format()} --> {self.end.format()}"
        if self.settings:
            line += f" {self.settings.format()}"
        return line


@dataclass
class Metadata:
    """
    Header key/value entries in first-seen order.

    Setting an existing key replaces its value in place.
    """
    entries: List[Tuple[str, str]] = field(default_factory=list)

    def __post_init__(self):
        entries, self.entries = self.entries, []
        for key, value in entries:
            self.set(key, value)

    def set(self, key: str, value: str) -> None:
        for index, (stored_key, _) in enumerate(self.entries):
            if stored_key == key:
                self.entries[index] = (key, value)
                return
        self.entries.append((key, value))

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        for stored_key, value in self.entries:
            if stored_key == key:
                return value
        return default

    def keys(self) -> List[str]:
        return [key for key, _ in self.entries]

    def items(self) -> List[Tuple[str, str]]:
        return list(self.entries)

    def __getitem__(self, key: str) -> str:
        for stored_key, value in self.entries:
            if stored_key == key:
                return value
        raise KeyError(key)

    def __setitem__(self, key: str, value: str) -> None:
        self.set(key, value)

    def __contains__(self, key: object) -> bool:
        return any(stored_key == key for stored_key, _ in self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())


@dataclass
class WebVTT:
    """
    A complete WebVTT document: header metadata and an ordered list of cues.

    Example:
        >>> vtt = WebVTT()
        >>> vtt.add_metadata("Language", "en-US")
        >>> vtt.add_cue(Cue(Timestamp(1000), Timestamp(5000), "Hello, world!", identifier="1"))
        >>> print(vtt.to_string(), end="")
        WEBVTT
        Language: en-US
        <BLANKLINE>
        1
        00:00:01.000 --> 00:00:05.000
        Hello, world!
    """
    metadata: Metadata = field(default_factory=Metadata)
    cues: List[Cue] = field(default_factory=list)

    def add_cue(self, cue: Cue) -> None:
        self.cues.append(cue)

    def add_metadata(self, key: str, value: str) -> None:
        self.metadata.set(key, value)

    @classmethod
    def parse(cls, content: str) -> Union["WebVTT", ParseError]:
        """Parse text, returning the document or the first ParseError."""
        from .parser import parse_webvtt
        return parse_webvtt(content)

    @classmethod
    def from_string(cls, content: str) -> "WebVTT":
        """Parse text, raising ``WebVTTParseError`` on failure."""
        from .parser import loads
        return loads(content)

    def to_string(self, validate: bool = False) -> str:
        from .writer import write_webvtt
        return write_webvtt(self, validate=validate)

    def validate(self) -> List[str]:
        """Return a list of problems; empty when the document round-trips cleanly."""
        from .writer import validate_document
        return validate_document(self)

    def __len__(self) -> int:
        return len(self.cues)

    def __iter__(self) -> Iterator[Cue]:
        return iter(self.cues)

    def __str__(self) -> str:
        return self.to_string()


@dataclass
class DownloadConfig:
    """Configuration for VTT download operations."""
    url: str
    output_dir: str
    stream_id: Optional[str] = None
    timeout: int = 30
    verify_ssl: bool = True
