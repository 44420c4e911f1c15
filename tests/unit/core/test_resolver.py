"""Tests for overlap resolution."""

import random
from datetime import timedelta

import pytest

from magiclip.core.intervals import CandidateInterval
from magiclip.core.resolver import ClipInterval, resolve_overlaps


def _c(start: float, end: float, *indices: int) -> CandidateInterval:
    return CandidateInterval(
        start=timedelta(seconds=start),
        end=timedelta(seconds=end),
        source_cue_indices=tuple(indices),
    )


def _clip(start: float, end: float, *indices: int) -> ClipInterval:
    return ClipInterval(
        file_identifier="f.srt",
        start=timedelta(seconds=start),
        end=timedelta(seconds=end),
        contributing_cue_indices=tuple(indices),
    )


@pytest.mark.unit
class TestResolveOverlaps:
    """Test resolve_overlaps function."""

    def test_empty(self):
        """No candidates gives no clips."""
        assert resolve_overlaps([], "f.srt") == []

    def test_single(self):
        """A single candidate becomes a single clip."""
        assert resolve_overlaps([_c(1, 2, 0)], "f.srt") == [_clip(1, 2, 0)]

    def test_overlapping_merge(self):
        """[9,13] and [11.5,15] merge into [9,15] with both cues."""
        result = resolve_overlaps([_c(9, 13, 0), _c(11.5, 15, 1)], "f.srt")
        assert result == [_clip(9, 15, 0, 1)]

    def test_touching_merge(self):
        """Intervals that touch end-to-start are merged."""
        result = resolve_overlaps([_c(0, 5, 0), _c(5, 8, 1)], "f.srt")
        assert result == [_clip(0, 8, 0, 1)]

    def test_disjoint_kept_apart(self):
        """Separated intervals stay separate and sorted."""
        result = resolve_overlaps([_c(10, 12, 3), _c(0, 1, 0)], "f.srt")
        assert result == [_clip(0, 1, 0), _clip(10, 12, 3)]

    def test_contained_interval(self):
        """An interval inside another does not shrink the running end."""
        result = resolve_overlaps([_c(0, 10, 0), _c(2, 3, 1), _c(4, 12, 2)], "f.srt")
        assert result == [_clip(0, 12, 0, 1, 2)]

    def test_chain_merge(self):
        """A chain of overlaps collapses into one clip."""
        result = resolve_overlaps(
            [_c(0, 2, 0), _c(1.5, 4, 1), _c(3.5, 6, 2), _c(7, 8, 3)], "f.srt"
        )
        assert result == [_clip(0, 6, 0, 1, 2), _clip(7, 8, 3)]

    def test_indices_sorted_union(self):
        """Contributing cue indices are a sorted, de-duplicated union."""
        result = resolve_overlaps([_c(0, 5, 4, 2), _c(1, 3, 2, 1)], "f.srt")
        assert result[0].contributing_cue_indices == (1, 2, 4)

    def test_file_identifier_attached(self):
        """Every clip carries the file identifier."""
        result = resolve_overlaps([_c(0, 1, 0), _c(5, 6, 1)], "movie.en.srt")
        assert {clip.file_identifier for clip in result} == {"movie.en.srt"}

    def test_zero_length_candidates(self):
        """Zero-length candidates at the same point merge."""
        result = resolve_overlaps([_c(3, 3, 1), _c(3, 3, 0)], "f.srt")
        assert result == [_clip(3, 3, 0, 1)]

    def test_input_order_does_not_matter(self):
        """Any permutation of the input gives the same clips."""
        candidates = [
            _c(0, 2, 0),
            _c(1, 3, 1),
            _c(5, 6, 2),
            _c(5, 6, 3),
            _c(6, 9, 4),
            _c(20, 21, 5),
        ]
        expected = resolve_overlaps(candidates, "f.srt")

        rng = random.Random(1234)
        for _ in range(25):
            shuffled = candidates[:]
            rng.shuffle(shuffled)
            assert resolve_overlaps(shuffled, "f.srt") == expected

    def test_duration_property(self):
        """ClipInterval.duration is end - start."""
        assert _clip(1.5, 4, 0).duration == timedelta(seconds=2.5)


@pytest.mark.unit
class TestResolverInvariants:
    """Invariants over randomly generated candidate sets."""

    @pytest.mark.parametrize("seed", range(20))
    def test_sorted_non_overlapping_and_covering(self, seed):
        """Output is sorted, gaps are strict and every candidate is covered once."""
        rng = random.Random(seed)
        candidates = []
        for index in range(rng.randint(0, 30)):
            start = rng.randint(0, 600) / 10
            end = start + rng.randint(0, 80) / 10
            candidates.append(_c(start, end, index))

        clips = resolve_overlaps(candidates, "f.srt")

        for clip in clips:
            assert clip.start <= clip.end
        for left, right in zip(clips, clips[1:], strict=False):
            assert left.end < right.start

        for candidate in candidates:
            covering = [
                clip
                for clip in clips
                if clip.start <= candidate.start and candidate.end <= clip.end
            ]
            assert len(covering) == 1
            source_index = candidate.source_cue_indices[0]
            assert source_index in covering[0].contributing_cue_indices

        all_indices = [i for clip in clips for i in clip.contributing_cue_indices]
        assert sorted(all_indices) == list(range(len(candidates)))
