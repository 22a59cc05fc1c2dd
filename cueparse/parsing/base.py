"""Base utilities for WebVTT parsing: normalization, timestamps and metadata lines."""

import re
from typing import Iterable, NamedTuple, Optional, Tuple

from ..errors import ParserError
from ..models import ParseErrorKind


SIGNATURE = "WEBVTT"
NOTE_KEYWORD = "NOTE"
TIME_RANGE_SEPARATOR = " --> "
TIME_RANGE_MARKER = "-->"

# letters and a colon, then a value of at least two characters
META_NOTE_PATTERN = re.compile(r"[A-Za-z]+?:[ \t]*[^\s].+")


class TimestampMatch(NamedTuple):
    """A timestamp found inside a token."""
    start: int
    end: int
    hours: Optional[str]
    minutes: str
    seconds: str
    fraction: str

    @property
    def value(self) -> float:
        """Time in seconds."""
        secs = float(f"{self.seconds}.{self.fraction}")
        secs += int(self.minutes) * 60
        secs += int(self.hours or 0) * 3600
        return secs


def normalize_content(content: str) -> str:
    """
    Canonicalize line endings and trim the document.

    Args:
        content: Raw WebVTT text

    Returns:
        Text with only ``\\n`` line endings and no surrounding whitespace

    Raises:
        ParserError: If content is not a string
    """
    if not isinstance(content, str):
        raise ParserError(
            ParseErrorKind.INVALID_INPUT,
            f"Input must be a string, got {type(content).__name__}"
        )

    # Remove BOM if present
    if content.startswith('\ufeff'):
        content = content[1:]

    content = content.replace('\r\n', '\n')
    content = content.replace('\r', '\n')
    return content.strip()


def _digits(text: str, pos: int, count: int) -> Optional[str]:
    chunk = text[pos:pos + count]
    if len(chunk) == count and chunk.isascii() and chunk.isdigit():
        return chunk
    return None


def _match_at(text: str, pos: int) -> Optional[TimestampMatch]:
    """Try ``[H{1,2}][:]MM:SS.f{2,3}`` anchored at pos."""
    for hour_len in (2, 1, 0):
        hours = _digits(text, pos, hour_len) if hour_len else None
        if hour_len and hours is None:
            continue
        for colon in (True, False):
            i = pos + hour_len
            if colon:
                if text[i:i + 1] != ':':
                    continue
                i += 1

            minutes = _digits(text, i, 2)
            if minutes is None or text[i + 2:i + 3] != ':':
                continue
            i += 3

            seconds = _digits(text, i, 2)
            if seconds is None or text[i + 2:i + 3] != '.':
                continue
            i += 3

            fraction = _digits(text, i, 3) or _digits(text, i, 2)
            if fraction is None:
                continue

            return TimestampMatch(pos, i + len(fraction), hours, minutes, seconds, fraction)
    return None


def find_timestamp(token: str) -> Optional[TimestampMatch]:
    """
    Find the leftmost timestamp inside a token.

    The grammar is an optional 1-2 digit hour group, an optional colon,
    a 2-digit minute group, a colon, a 2-digit second group, a decimal
    point and 2-3 fractional digits. Surrounding text is allowed, which is
    how cue settings trail the end timestamp.
    """
    for pos in range(len(token)):
        match = _match_at(token, pos)
        if match is not None:
            return match
    return None


def parse_timestamp_vtt(timestamp: str) -> float:
    """
    Parse a VTT timestamp ([HH:]MM:SS.fff) to seconds.

    Args:
        timestamp: Token containing a timestamp

    Returns:
        Time in seconds

    Raises:
        ValueError: If no timestamp is found in the token
    """
    match = find_timestamp(timestamp)
    if match is None:
        raise ValueError(f"Invalid VTT timestamp format: {timestamp}")
    return match.value


def strip_timestamp(token: str) -> str:
    """Remove the first timestamp from a token and trim what is left."""
    match = find_timestamp(token)
    if match is None:
        return token.strip()
    return (token[:match.start] + token[match.end:]).strip()


def parse_meta_line(line: str) -> Tuple[str, str]:
    """
    Split a ``key: value`` line on its first colon.

    Colons inside the value are kept as they are.
    """
    key, _, value = line.partition(':')
    return key.strip(), value.strip()


def parse_meta_lines(lines: Iterable[str]) -> dict[str, str]:
    """Fold metadata lines into a mapping, later keys overwriting earlier ones."""
    meta: dict[str, str] = {}
    for line in lines:
        key, value = parse_meta_line(line)
        meta[key] = value
    return meta


def is_meta_note(note: str) -> bool:
    """Whether a comment's text is shaped like ``Key:value``."""
    return META_NOTE_PATTERN.search(note) is not None


__all__ = [
    "SIGNATURE",
    "NOTE_KEYWORD",
    "TIME_RANGE_SEPARATOR",
    "TIME_RANGE_MARKER",
    "TimestampMatch",
    "normalize_content",
    "find_timestamp",
    "parse_timestamp_vtt",
    "strip_timestamp",
    "parse_meta_line",
    "parse_meta_lines",
    "is_meta_note",
]
