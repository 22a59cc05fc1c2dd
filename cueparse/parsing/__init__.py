from .base import find_timestamp, normalize_content, parse_meta_line, parse_timestamp_vtt
from .vtt_parser import CueOutcome, CueStatus, parse_cue, parse_vtt

__all__ = [
    "CueOutcome",
    "CueStatus",
    "find_timestamp",
    "normalize_content",
    "parse_cue",
    "parse_meta_line",
    "parse_timestamp_vtt",
    "parse_vtt",
]
