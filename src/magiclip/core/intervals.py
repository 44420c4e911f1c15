"""Turn matched cues into padded candidate intervals."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import timedelta

from magiclip.core.cue import Cue
from magiclip.core.matcher import MatchSpan

_ZERO = timedelta(0)


@dataclass(frozen=True)
class CandidateInterval:
    """Padded, clamped window around one or more matched cues."""

    start: timedelta
    end: timedelta
    source_cue_indices: tuple[int, ...]


def file_bound(cues: Sequence[Cue], duration: timedelta | None = None) -> timedelta:
    """Return the upper clamp for a file's intervals.

    Args:
        cues: Normalized cues of the file
        duration: Externally known file duration, if any

    Returns:
        The larger of the latest cue end and ``duration``
    """
    bound = max((cue.end for cue in cues), default=_ZERO)
    if duration is not None and duration > bound:
        bound = duration
    return bound


def build_candidates(
    cues: Sequence[Cue],
    spans: Iterable[MatchSpan],
    lead_padding: timedelta,
    trail_padding: timedelta,
    bound: timedelta,
) -> list[CandidateInterval]:
    """Build one candidate interval per matched cue.

    Args:
        cues: Normalized cues of the file
        spans: Match spans against those cues
        lead_padding: Time added before each cue start
        trail_padding: Time added after each cue end
        bound: Upper clamp, usually from ``file_bound``

    Returns:
        Candidate intervals in span order, overlapping ones not merged

    Notes:
        - Starts are clamped to zero and ends to ``bound``
        - A cue matched by more than one span yields a single candidate
        - Spans pointing at unknown cue indices are skipped
    """
    by_index = {cue.index: cue for cue in cues}
    seen: set[int] = set()
    candidates = []

    for span in spans:
        cue = by_index.get(span.cue_index)
        if cue is None or cue.index in seen:
            continue
        seen.add(cue.index)

        start = max(_ZERO, cue.start - lead_padding)
        end = min(bound, cue.end + trail_padding)
        # Only reachable when bound is below the cue itself
        start = min(start, end)
        candidates.append(
            CandidateInterval(start=start, end=end, source_cue_indices=(cue.index,))
        )

    return candidates
