"""WebVTT subtitle file parser."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from loguru import logger

from ..errors import ParserError
from ..models import Cue, Document, ParseErrorKind, ParseOptions
from .base import (
    NOTE_KEYWORD,
    SIGNATURE,
    TIME_RANGE_MARKER,
    TIME_RANGE_SEPARATOR,
    is_meta_note,
    normalize_content,
    parse_meta_line,
    parse_meta_lines,
    parse_timestamp_vtt,
    strip_timestamp,
)


class CueStatus(str, Enum):
    """What happened to a single cue block."""
    CUE = "cue"
    DROPPED = "dropped"
    NOT_A_CUE = "not_a_cue"
    FAILED = "failed"


@dataclass(frozen=True)
class CueOutcome:
    """Result of parsing one cue block."""
    status: CueStatus
    cue: Optional[Cue] = None
    error: Optional[ParserError] = None


@dataclass
class BlockFold:
    """State threaded through the block loop."""
    strict: bool
    notes: List[str] = field(default_factory=list)
    comment_meta: dict[str, str] = field(default_factory=dict)
    cues: List[Cue] = field(default_factory=list)
    errors: List[ParserError] = field(default_factory=list)
    ordinal: int = 0


def split_document(text: str) -> Tuple[str, List[str]]:
    """
    Split normalized text into the header and the blank-line separated blocks.

    Args:
        text: Normalized document text

    Returns:
        Tuple of (header, blocks)
    """
    header, *blocks = text.split('\n\n')
    return header, blocks


def validate_header(header: str, meta: bool) -> dict[str, str]:
    """
    Check the signature line and collect header metadata.

    Args:
        header: Everything before the first blank line
        meta: Whether header lines after the signature are metadata

    Returns:
        Header metadata (empty unless ``meta`` is set)

    Raises:
        ParserError: If the signature or header comment is malformed, or a
            second header line is present while ``meta`` is off
    """
    if not header.startswith(SIGNATURE):
        raise ParserError(ParseErrorKind.MISSING_SIGNATURE, f'Must start with "{SIGNATURE}"')

    header_lines = header.split('\n')
    header_comment = header_lines[0][len(SIGNATURE):]

    if header_comment and header_comment[0] not in (' ', '\t'):
        raise ParserError(
            ParseErrorKind.HEADER_COMMENT_FORMAT,
            "Header comment must start with space or tab"
        )

    if not meta:
        if len(header_lines) > 1 and header_lines[1] != '':
            raise ParserError(
                ParseErrorKind.MISSING_BLANK_LINE_AFTER_SIGNATURE,
                "Missing blank line after signature"
            )
        return {}

    return parse_meta_lines(header_lines[1:])


def _split_time_range(line: str, index: int) -> Tuple[float, float, str]:
    times = line.split(TIME_RANGE_SEPARATOR)
    if len(times) != 2:
        raise ParserError(
            ParseErrorKind.INVALID_TIMESTAMP,
            f"Invalid cue timestamp (cue #{index})",
            cue_index=index,
        )

    try:
        start = parse_timestamp_vtt(times[0])
        end = parse_timestamp_vtt(times[1])
    except ValueError as e:
        raise ParserError(
            ParseErrorKind.INVALID_TIMESTAMP,
            f"Invalid cue timestamp (cue #{index})",
            cue_index=index,
            cause=e,
        ) from e

    return start, end, strip_timestamp(times[1])


def _check_timing(start: float, end: float, index: int, strict: bool) -> None:
    if strict:
        if start > end:
            raise ParserError(
                ParseErrorKind.TIMING_ORDER,
                f"Start timestamp greater than end (cue #{index})",
                cue_index=index,
            )
        if end <= start:
            raise ParserError(
                ParseErrorKind.TIMING_ORDER,
                f"End must be greater than start (cue #{index})",
                cue_index=index,
            )
    elif end < start:
        raise ParserError(
            ParseErrorKind.TIMING_ORDER,
            f"End must be greater or equal to start when not strict (cue #{index})",
            cue_index=index,
        )


def _read_cue(block: str, index: int, strict: bool, notes: List[str]) -> CueOutcome:
    lines = [line for line in block.split('\n') if line]

    if lines and lines[0].strip().startswith(NOTE_KEYWORD):
        return CueOutcome(CueStatus.NOT_A_CUE)

    if len(lines) == 1 and TIME_RANGE_MARKER not in lines[0]:
        raise ParserError(
            ParseErrorKind.STANDALONE_IDENTIFIER,
            f"Cue identifier cannot be standalone (cue #{index})",
            cue_index=index,
        )

    if len(lines) > 1 and not (TIME_RANGE_MARKER in lines[0] or TIME_RANGE_MARKER in lines[1]):
        raise ParserError(
            ParseErrorKind.IDENTIFIER_NOT_FOLLOWED_BY_TIMESTAMP,
            f"Cue identifier needs to be followed by timestamp (cue #{index})",
            cue_index=index,
        )

    identifier = ''
    if len(lines) > 1 and TIME_RANGE_MARKER in lines[1]:
        identifier = lines.pop(0)

    start, end, styles = _split_time_range(lines[0] if lines else '', index)
    _check_timing(start, end, index, strict)

    text = '\n'.join(lines[1:])
    if not text:
        return CueOutcome(CueStatus.DROPPED)

    cue = Cue(
        identifier=identifier,
        start=start,
        end=end,
        text=text,
        styles=styles,
        notes=tuple(notes),
    )
    return CueOutcome(CueStatus.CUE, cue=cue)


def parse_cue(block: str, index: int, strict: bool = True, notes: Optional[List[str]] = None) -> CueOutcome:
    """
    Parse a single cue block.

    A cue block is an optional identifier line, a time range line
    (``start --> end [settings]``) and one or more text lines.

    Args:
        block: Block text without surrounding blank lines
        index: 0-based ordinal of the cue, used in error messages
        strict: Require end to be strictly after start
        notes: Comments seen since the previous cue

    Returns:
        CueOutcome; a cue with no text is ``DROPPED`` rather than failed
    """
    try:
        return _read_cue(block, index, strict, notes or [])
    except ParserError as e:
        return CueOutcome(CueStatus.FAILED, error=e)


def _fold_block(fold: BlockFold, block: str) -> None:
    stripped = block.strip()

    if stripped.startswith(NOTE_KEYWORD):
        note = stripped[len(NOTE_KEYWORD):].strip()
        if is_meta_note(note):
            key, value = parse_meta_line(note)
            fold.comment_meta[key] = value
            logger.debug(f"Comment metadata {key!r}")
        else:
            fold.notes.append(note)
        return

    index = fold.ordinal
    fold.ordinal += 1
    outcome = parse_cue(block, index, fold.strict, fold.notes)

    if outcome.status == CueStatus.FAILED:
        logger.warning(f"Skipping cue #{index}: {outcome.error.message}")
        fold.errors.append(outcome.error)
        return

    if outcome.status == CueStatus.CUE:
        fold.cues.append(outcome.cue)
    elif outcome.status == CueStatus.DROPPED:
        logger.debug(f"Dropping cue #{index} with empty text")
    fold.notes = []


def parse_blocks(blocks: List[str], strict: bool = True) -> BlockFold:
    """
    Classify and parse the body blocks in order.

    NOTE blocks either carry ``Key:value`` metadata or become notes attached
    to the next cue. Every other block is parsed as a cue; failures are
    collected rather than raised.
    """
    fold = BlockFold(strict=strict)
    for block in blocks:
        _fold_block(fold, block)
    return fold


def parse_vtt(content: str, options: Optional[ParseOptions] = None, **overrides) -> Document:
    """
    Parse WebVTT subtitle content into a Document.

    VTT format:
    ```
    WEBVTT Optional header comment
    Kind: captions

    NOTE a remark for the next cue

    1
    00:00:01.000 --> 00:00:04.000 align:start
    First subtitle text

    00:05.000 --> 00:08.000
    Second subtitle
    with multiple lines
    ```

    Note: header lines after the signature are only allowed with ``meta``.

    Args:
        content: Raw VTT file content
        options: Parse options, defaults to ``ParseOptions()``
        **overrides: ``meta`` and/or ``strict`` overriding ``options``

    Returns:
        Document with cues, collected errors and optional metadata

    Raises:
        ParserError: On structural problems, or on the first cue-level
            error when strict mode is on
    """
    options = options or ParseOptions()
    if overrides:
        options = ParseOptions(**{**options.model_dump(), **overrides})

    text = normalize_content(content)
    header, blocks = split_document(text)
    header_meta = validate_header(header, options.meta)

    fold = parse_blocks(blocks, options.strict)

    if options.strict and fold.errors:
        raise fold.errors[0]

    meta = None
    if options.meta:
        meta = {**header_meta, **fold.comment_meta}

    logger.info(f"Parsed {len(fold.cues)} cues with {len(fold.errors)} errors from VTT")

    return Document(
        valid=not fold.errors,
        strict=options.strict,
        cues=tuple(fold.cues),
        errors=tuple(e.detail for e in fold.errors),
        meta=meta,
    )
