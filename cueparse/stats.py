"""Summary statistics for parsed documents."""

from .models import Document, DocumentStats


def summarize_document(document: Document) -> DocumentStats:
    """
    Summarize a parsed document.

    Args:
        document: Result of ``parse_vtt``

    Returns:
        Cue and error counts, timing bounds and total cue duration
    """
    cues = document.cues

    by_kind: dict[str, int] = {}
    for error in document.errors:
        kind_name = error.kind.value
        by_kind[kind_name] = by_kind.get(kind_name, 0) + 1

    return DocumentStats(
        total_cues=len(cues),
        total_errors=len(document.errors),
        total_duration=sum(cue.duration for cue in cues),
        first_start=min((cue.start for cue in cues), default=None),
        last_end=max((cue.end for cue in cues), default=None),
        notes_count=sum(len(cue.notes) for cue in cues),
        errors_by_kind=by_kind,
    )
