"""Parse WebVTT subtitle documents into timed cues."""

from .errors import ParserError
from .models import Cue, CueError, Document, DocumentStats, ParseErrorKind, ParseOptions
from .parsing import parse_cue, parse_vtt
from .stats import summarize_document

__all__ = [
    "Cue",
    "CueError",
    "Document",
    "DocumentStats",
    "ParseErrorKind",
    "ParseOptions",
    "ParserError",
    "parse_cue",
    "parse_vtt",
    "summarize_document",
]
