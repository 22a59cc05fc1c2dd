"""Pydantic models for parsed WebVTT documents."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ParseErrorKind(str, Enum):
    """Kinds of parse failures."""
    # Structural: always raised immediately
    INVALID_INPUT = "invalid_input"
    MISSING_SIGNATURE = "missing_signature"
    HEADER_COMMENT_FORMAT = "header_comment_format"
    MISSING_BLANK_LINE_AFTER_SIGNATURE = "missing_blank_line_after_signature"
    # Cue-level: collected per block
    STANDALONE_IDENTIFIER = "standalone_identifier"
    IDENTIFIER_NOT_FOLLOWED_BY_TIMESTAMP = "identifier_not_followed_by_timestamp"
    INVALID_TIMESTAMP = "invalid_timestamp"
    TIMING_ORDER = "timing_order"


STRUCTURAL_ERROR_KINDS = frozenset({
    ParseErrorKind.INVALID_INPUT,
    ParseErrorKind.MISSING_SIGNATURE,
    ParseErrorKind.HEADER_COMMENT_FORMAT,
    ParseErrorKind.MISSING_BLANK_LINE_AFTER_SIGNATURE,
})


class ParseOptions(BaseModel):
    """Options for a single parse call."""
    model_config = ConfigDict(frozen=True)

    meta: bool = Field(default=False, description="Extract header and comment metadata")
    strict: bool = Field(default=True, description="Raise on the first cue-level error")


class Cue(BaseModel):
    """A single timed caption."""
    model_config = ConfigDict(frozen=True)

    identifier: str = Field(default="", description="Cue identifier, may be empty")
    start: float = Field(..., ge=0, description="Start time in seconds")
    end: float = Field(..., ge=0, description="End time in seconds")
    text: str = Field(..., description="Payload text, lines joined with newlines")
    styles: str = Field(default="", description="Raw cue settings after the end timestamp")
    notes: tuple[str, ...] = Field(default=(), description="Comments preceding this cue")

    @property
    def duration(self) -> float:
        """Duration in seconds."""
        return self.end - self.start


class CueError(BaseModel):
    """A recorded parse failure."""
    model_config = ConfigDict(frozen=True)

    kind: ParseErrorKind = Field(..., description="Type of failure")
    message: str = Field(..., description="Human-readable description")
    cue_index: Optional[int] = Field(default=None, description="0-based ordinal of the offending cue block")
    cause: Optional[str] = Field(default=None, description="Underlying error, if any")


class Document(BaseModel):
    """Result of parsing a WebVTT document."""
    model_config = ConfigDict(frozen=True)

    valid: bool = Field(..., description="True when no cue-level errors were recorded")
    strict: bool = Field(..., description="Whether strict mode was active")
    cues: tuple[Cue, ...] = Field(default=(), description="Parsed cues in source order")
    errors: tuple[CueError, ...] = Field(default=(), description="Cue-level errors in source order")
    meta: Optional[dict[str, str]] = Field(
        default=None,
        description="Header and comment metadata, only when requested"
    )


class DocumentStats(BaseModel):
    """Summary statistics for a parsed document."""
    total_cues: int = Field(..., description="Number of parsed cues")
    total_errors: int = Field(..., description="Number of cue-level errors")
    total_duration: float = Field(..., description="Sum of cue durations in seconds")
    first_start: Optional[float] = Field(default=None, description="Earliest cue start")
    last_end: Optional[float] = Field(default=None, description="Latest cue end")
    notes_count: int = Field(default=0, description="Number of notes attached to cues")
    errors_by_kind: dict[str, int] = Field(default_factory=dict, description="Error counts by kind")


class ParseTextRequest(BaseModel):
    """Request body for parsing raw text."""
    content: str = Field(..., description="WebVTT document text")
    meta: Optional[bool] = Field(default=None, description="Override metadata extraction")
    strict: Optional[bool] = Field(default=None, description="Override strict mode")


class ParseResponse(BaseModel):
    """Response for the parse endpoints."""
    valid: bool
    strict: bool
    cues: list[Cue]
    errors: list[CueError]
    meta: Optional[dict[str, str]] = None
    stats: DocumentStats
