"""Merge candidate intervals into final, non-overlapping clips."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import timedelta

from magiclip.core.intervals import CandidateInterval


@dataclass(frozen=True)
class ClipInterval:
    """Final clip window within one file."""

    file_identifier: str
    start: timedelta
    end: timedelta
    contributing_cue_indices: tuple[int, ...]

    @property
    def duration(self) -> timedelta:
        """Length of the clip."""
        return self.end - self.start


def _sort_key(candidate: CandidateInterval) -> tuple[timedelta, timedelta, int]:
    return (
        candidate.start,
        candidate.end,
        min(candidate.source_cue_indices, default=-1),
    )


def resolve_overlaps(
    candidates: Iterable[CandidateInterval],
    file_identifier: str,
) -> list[ClipInterval]:
    """Merge a file's candidates into sorted, non-overlapping clips.

    Args:
        candidates: Candidate intervals in any order
        file_identifier: File the candidates belong to

    Returns:
        Clips sorted by start, each carrying the sorted union of the cue
        indices it covers

    Notes:
        - Touching intervals (next start == running end) are merged
        - Ties on start are broken by end, then by lowest cue index, so the
          result does not depend on input order
    """
    ordered = sorted(candidates, key=_sort_key)
    if not ordered:
        return []

    clips = []
    first = ordered[0]
    run_start, run_end = first.start, first.end
    run_indices = set(first.source_cue_indices)

    for candidate in ordered[1:]:
        if candidate.start <= run_end:
            run_end = max(run_end, candidate.end)
            run_indices.update(candidate.source_cue_indices)
            continue
        clips.append(
            ClipInterval(
                file_identifier=file_identifier,
                start=run_start,
                end=run_end,
                contributing_cue_indices=tuple(sorted(run_indices)),
            )
        )
        run_start, run_end = candidate.start, candidate.end
        run_indices = set(candidate.source_cue_indices)

    clips.append(
        ClipInterval(
            file_identifier=file_identifier,
            start=run_start,
            end=run_end,
            contributing_cue_indices=tuple(sorted(run_indices)),
        )
    )
    return clips
