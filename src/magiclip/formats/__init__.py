"""Subtitle format handlers."""

from magiclip.formats.srt import SRTParseError, parse_srt, read_srt_file

__all__ = [
    "SRTParseError",
    "parse_srt",
    "read_srt_file",
]
