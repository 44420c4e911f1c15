"""Pydantic v2 schemas for the JSON report."""

from datetime import timedelta
from typing import Self

from pydantic import BaseModel, RootModel

from magiclip.core.orchestrator import FileReport, Report
from magiclip.core.resolver import ClipInterval


def _seconds(value: timedelta) -> float:
    """Seconds with millisecond precision."""
    return round(value.total_seconds(), 3)


class ErrorSchema(BaseModel):
    """Structured per-file error."""

    code: str
    message: str


class ClipSchema(BaseModel):
    """One clip, times in seconds from file start."""

    start: float
    end: float
    cues: list[int]

    @classmethod
    def from_clip(cls, clip: ClipInterval) -> Self:
        return cls(
            start=_seconds(clip.start),
            end=_seconds(clip.end),
            cues=list(clip.contributing_cue_indices),
        )


class FileReportSchema(BaseModel):
    """Report entry for one file. ``error`` is only set on failure."""

    file: str
    clips: list[ClipSchema] = []
    dropped_cue_count: int = 0
    error: ErrorSchema | None = None

    @classmethod
    def from_file_report(cls, file_report: FileReport) -> Self:
        error = None
        if file_report.error is not None:
            error = ErrorSchema(
                code=file_report.error.code,
                message=file_report.error.message,
            )
        return cls(
            file=file_report.file_identifier,
            clips=[ClipSchema.from_clip(c) for c in file_report.clips],
            dropped_cue_count=file_report.dropped_cue_count,
            error=error,
        )


class ReportSchema(RootModel[list[FileReportSchema]]):
    """Whole report, in file identifier order."""

    @classmethod
    def from_report(cls, report: Report) -> Self:
        return cls([FileReportSchema.from_file_report(f) for f in report])


def report_to_dict(report: Report) -> list[dict[str, object]]:
    """Convert a report to plain JSON-compatible data."""
    return ReportSchema.from_report(report).model_dump(exclude_none=True)


def dump_report(report: Report, *, indent: int | None = None) -> str:
    """Serialize a report to JSON."""
    return ReportSchema.from_report(report).model_dump_json(
        exclude_none=True, indent=indent
    )
