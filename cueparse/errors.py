"""Exception raised for WebVTT parse failures."""

from typing import Optional

from .models import CueError, ParseErrorKind, STRUCTURAL_ERROR_KINDS


class ParserError(ValueError):
    """
    A parse failure.

    Structural failures are raised straight out of ``parse_vtt``. Cue-level
    failures are collected into ``Document.errors`` and only raised when
    strict mode promotes the first one.
    """

    def __init__(
        self,
        kind: ParseErrorKind,
        message: str,
        cue_index: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.cue_index = cue_index
        self.cause = cause

    @property
    def structural(self) -> bool:
        return self.kind in STRUCTURAL_ERROR_KINDS

    @property
    def detail(self) -> CueError:
        """Serializable form of this error."""
        return CueError(
            kind=self.kind,
            message=self.message,
            cue_index=self.cue_index,
            cause=str(self.cause) if self.cause is not None else None,
        )
