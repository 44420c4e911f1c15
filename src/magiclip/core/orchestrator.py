"""Run the clip-finding pipeline over many subtitle files in parallel."""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING

import structlog

from magiclip.core.cue import RawCue, normalize_cues
from magiclip.core.errors import InvalidPaddingError, ParseError
from magiclip.core.intervals import build_candidates, file_bound
from magiclip.core.matcher import Matcher, PatternKind, PatternSpec
from magiclip.core.resolver import ClipInterval, resolve_overlaps
from magiclip.utils.config import get_settings

if TYPE_CHECKING:
    from magiclip.utils.config import Settings

logger = structlog.get_logger()

Supplier = Callable[[str], Sequence[RawCue]]

# Maps per-file exceptions to the error code reported for that file
_ERROR_CODES: dict[type, str] = {
    ParseError: "parse_failed",
}
_DEFAULT_ERROR_CODE = "processing_failed"


@dataclass(frozen=True)
class ClipConfig:
    """Configuration shared by every file in a batch."""

    pattern: PatternSpec
    lead_padding: timedelta = timedelta(0)
    trail_padding: timedelta = timedelta(0)

    @classmethod
    def from_settings(
        cls,
        text: str,
        *,
        kind: PatternKind = PatternKind.LITERAL,
        settings: Settings | None = None,
    ) -> ClipConfig:
        """Build a config whose defaults come from application settings."""
        settings = settings or get_settings()
        return cls(
            pattern=PatternSpec(
                text=text,
                kind=kind,
                case_sensitive=settings.case_sensitive,
            ),
            lead_padding=timedelta(seconds=settings.lead_padding_seconds),
            trail_padding=timedelta(seconds=settings.trail_padding_seconds),
        )


@dataclass(frozen=True)
class FileError:
    """Why a file produced no clips."""

    code: str
    message: str


@dataclass(frozen=True)
class FileReport:
    """Outcome for a single subtitle file."""

    file_identifier: str
    clips: tuple[ClipInterval, ...] = ()
    dropped_cue_count: int = 0
    error: FileError | None = None

    @property
    def ok(self) -> bool:
        """True when the file was processed without error."""
        return self.error is None


@dataclass(frozen=True)
class Report:
    """Per-file results, sorted by file identifier."""

    files: tuple[FileReport, ...]

    def __len__(self) -> int:
        """Return number of files."""
        return len(self.files)

    def __iter__(self) -> Iterator[FileReport]:
        """Iterate over file reports."""
        return iter(self.files)

    def __getitem__(self, index: int) -> FileReport:
        """Get file report by position (0-based)."""
        return self.files[index]

    def get(self, file_identifier: str) -> FileReport | None:
        """Look up a file report by identifier."""
        for file_report in self.files:
            if file_report.file_identifier == file_identifier:
                return file_report
        return None

    @property
    def failed(self) -> list[FileReport]:
        """File reports that carry an error."""
        return [f for f in self.files if f.error is not None]


class ReportAccumulator:
    """Collects file reports from worker threads."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._reports: dict[str, FileReport] = {}

    def add(self, file_report: FileReport) -> int:
        """Record a file report. Returns the number of reports so far."""
        with self._lock:
            self._reports[file_report.file_identifier] = file_report
            return len(self._reports)

    def build(self) -> Report:
        """Return the report sorted by file identifier."""
        with self._lock:
            ordered = sorted(self._reports.values(), key=lambda r: r.file_identifier)
        return Report(files=tuple(ordered))


def _validate_padding(config: ClipConfig) -> None:
    """Reject negative paddings before any file is touched."""
    for name, value in (
        ("lead_padding", config.lead_padding),
        ("trail_padding", config.trail_padding),
    ):
        if value < timedelta(0):
            raise InvalidPaddingError(f"{name} must be non-negative, got {value}")


def _error_code(exc: Exception) -> str:
    for exc_type, code in _ERROR_CODES.items():
        if isinstance(exc, exc_type):
            return code
    return _DEFAULT_ERROR_CODE


def process_file(
    file_identifier: str,
    supplier: Supplier,
    matcher: Matcher,
    config: ClipConfig,
    duration: timedelta | None = None,
) -> FileReport:
    """Find the clips of a single file.

    Steps: supply cues -> normalize -> match -> pad -> merge.

    Args:
        file_identifier: File to process, passed to ``supplier``
        supplier: Returns the raw cues of a file
        matcher: Compiled pattern
        config: Batch configuration
        duration: Known file duration, widens the clamp bound

    Returns:
        FileReport with clips and the number of dropped cues

    Raises:
        ParseError: If the supplier cannot read the file
    """
    raws = supplier(file_identifier)
    cues, dropped = normalize_cues(raws)

    spans = [span for cue in cues for span in matcher.match(cue)]
    bound = file_bound(cues, duration)
    candidates = build_candidates(
        cues, spans, config.lead_padding, config.trail_padding, bound
    )
    clips = resolve_overlaps(candidates, file_identifier)

    for clip in clips:
        logger.debug(
            "clip_resolved",
            file=file_identifier,
            start=clip.start.total_seconds(),
            end=clip.end.total_seconds(),
            cues=list(clip.contributing_cue_indices),
        )

    return FileReport(
        file_identifier=file_identifier,
        clips=tuple(clips),
        dropped_cue_count=dropped,
    )


def _process_isolated(
    file_identifier: str,
    supplier: Supplier,
    matcher: Matcher,
    config: ClipConfig,
    duration: timedelta | None,
) -> FileReport:
    """Run ``process_file``, turning any failure into a per-file error."""
    log = logger.bind(file=file_identifier)
    try:
        file_report = process_file(file_identifier, supplier, matcher, config, duration)
    except Exception as exc:
        code = _error_code(exc)
        log.warning("file_failed", error_code=code, error=str(exc))
        return FileReport(
            file_identifier=file_identifier,
            error=FileError(code=code, message=str(exc)),
        )

    if file_report.dropped_cue_count:
        log.warning("cues_dropped", count=file_report.dropped_cue_count)
    log.info("file_processed", clips=len(file_report.clips))
    return file_report


def find_clips(
    files: Iterable[str],
    supplier: Supplier,
    config: ClipConfig,
    *,
    max_workers: int | None = None,
    file_durations: Mapping[str, timedelta] | None = None,
    on_progress: Callable[[int, int], None] | None = None,
) -> Report:
    """Find clip intervals in every file, processing files in parallel.

    Args:
        files: File identifiers; duplicates are processed once
        supplier: Returns the raw cues of a file, raising ParseError when
            the file is unreadable. Called from worker threads.
        config: Pattern and paddings shared by all files
        max_workers: Worker pool size (default: ``Settings.max_workers``)
        file_durations: Optional known durations per file identifier
        on_progress: Optional callback for progress updates. Called with
            (completed_count, total_count) from the worker thread after
            each file is recorded. Exceptions raised by the callback are
            logged and do not affect the report.

    Returns:
        Report with one entry per file, sorted by file identifier

    Raises:
        InvalidPaddingError: If a padding is negative
        InvalidPatternError: If the pattern kind is unknown or a regex
            pattern does not compile
        ValueError: If max_workers is less than 1
    """
    _validate_padding(config)
    matcher = Matcher(config.pattern)

    workers = max_workers if max_workers is not None else get_settings().max_workers
    if workers < 1:
        raise ValueError(f"max_workers must be at least 1, got {workers}")

    identifiers = list(dict.fromkeys(files))
    durations = file_durations or {}
    total = len(identifiers)
    accumulator = ReportAccumulator()

    logger.info(
        "batch_started",
        files=total,
        workers=workers,
        pattern=config.pattern.text,
        kind=str(matcher.kind),
    )

    def _work(file_identifier: str) -> None:
        file_report = _process_isolated(
            file_identifier,
            supplier,
            matcher,
            config,
            durations.get(file_identifier),
        )
        completed = accumulator.add(file_report)
        if on_progress is None:
            return
        try:
            on_progress(completed, total)
        except Exception as exc:
            logger.warning(
                "progress_callback_failed",
                file=file_identifier,
                completed=completed,
                error=str(exc),
                exc_info=True,
            )

    with ThreadPoolExecutor(
        max_workers=workers, thread_name_prefix="magiclip"
    ) as executor:
        futures = [executor.submit(_work, f) for f in identifiers]
        for future in futures:
            future.result()

    report = accumulator.build()
    logger.info(
        "batch_complete",
        files=len(report),
        failed=len(report.failed),
        clips=sum(len(f.clips) for f in report),
    )
    return report
