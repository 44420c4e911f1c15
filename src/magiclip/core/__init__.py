"""Core clip-finding engine."""

from magiclip.core.cue import Cue, RawCue, normalize_cue, normalize_cues
from magiclip.core.errors import (
    InvalidPaddingError,
    InvalidPatternError,
    MagiclipError,
    MalformedCueError,
    ParseError,
)
from magiclip.core.intervals import CandidateInterval, build_candidates, file_bound
from magiclip.core.matcher import MatchSpan, Matcher, PatternKind, PatternSpec
from magiclip.core.orchestrator import (
    ClipConfig,
    FileError,
    FileReport,
    Report,
    ReportAccumulator,
    find_clips,
    process_file,
)
from magiclip.core.resolver import ClipInterval, resolve_overlaps

__all__ = [
    "CandidateInterval",
    "ClipConfig",
    "ClipInterval",
    "Cue",
    "FileError",
    "FileReport",
    "InvalidPaddingError",
    "InvalidPatternError",
    "MagiclipError",
    "MalformedCueError",
    "MatchSpan",
    "Matcher",
    "ParseError",
    "PatternKind",
    "PatternSpec",
    "RawCue",
    "Report",
    "ReportAccumulator",
    "build_candidates",
    "file_bound",
    "find_clips",
    "normalize_cue",
    "normalize_cues",
    "process_file",
    "resolve_overlaps",
]
