"""Subtitle cue models."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import timedelta

import structlog

from magiclip.core.errors import MalformedCueError

logger = structlog.get_logger()

_ZERO = timedelta(0)


@dataclass(frozen=True)
class RawCue:
    """Cue record as handed over by a subtitle parser, not yet validated."""

    start: timedelta
    end: timedelta
    text: str


@dataclass(frozen=True)
class Cue:
    """Validated subtitle cue.

    ``index`` is the position of the raw record within its file, so indices
    stay strictly increasing even when malformed records are dropped.
    """

    index: int
    start: timedelta
    end: timedelta
    text: str


def normalize_cue(raw: RawCue, index: int) -> Cue:
    """Validate a raw cue and turn it into a Cue.

    Args:
        raw: Raw cue record from the parser
        index: Position of the record within its file

    Returns:
        Cue with trimmed text

    Raises:
        MalformedCueError: If timestamps are negative or reversed, or the
            text is empty after trimming
    """
    if index < 0:
        raise MalformedCueError(f"Index must be non-negative, got {index}")
    if raw.start < _ZERO or raw.end < _ZERO:
        raise MalformedCueError(
            f"Timestamps must be non-negative, got {raw.start} --> {raw.end}"
        )
    if raw.start > raw.end:
        raise MalformedCueError(
            f"Start time {raw.start} must not be after end time {raw.end}"
        )
    text = raw.text.strip()
    if not text:
        raise MalformedCueError("Text cannot be empty or whitespace-only")

    return Cue(index=index, start=raw.start, end=raw.end, text=text)


def normalize_cues(raws: Iterable[RawCue]) -> tuple[list[Cue], int]:
    """Normalize a file's raw cues, dropping the malformed ones.

    Returns:
        Tuple of (valid cues in input order, number of dropped cues)
    """
    cues: list[Cue] = []
    dropped = 0
    for index, raw in enumerate(raws):
        try:
            cues.append(normalize_cue(raw, index))
        except MalformedCueError as e:
            dropped += 1
            logger.debug("cue_dropped", index=index, reason=str(e))
    return cues, dropped
