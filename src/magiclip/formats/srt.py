"""SRT parser used as a cue supplier."""

import re
from datetime import timedelta
from pathlib import Path

from magiclip.core.cue import RawCue
from magiclip.core.errors import ParseError

_TIMING_RE = re.compile(
    r"(\d{1,3}):(\d{2}):(\d{2})[,.](\d{3})\s*-->\s*(\d{1,3}):(\d{2}):(\d{2})[,.](\d{3})"
)


class SRTParseError(ParseError):
    """Exception raised when SRT parsing fails."""


def _to_timedelta(hours: str, minutes: str, seconds: str, millis: str) -> timedelta:
    return timedelta(
        hours=int(hours),
        minutes=int(minutes),
        seconds=int(seconds),
        milliseconds=int(millis),
    )


def parse_srt(content: str) -> list[RawCue]:
    """Parse SRT format string into raw cues.

    Args:
        content: SRT format string content

    Returns:
        Raw cues in file order. Timing and text are not validated here;
        a block with no text lines yields a cue with empty text.

    Raises:
        SRTParseError: If the content is empty or a block is structurally
            broken (bad index or timing line)
    """
    content = content.lstrip("\ufeff").replace("\r\n", "\n").replace("\r", "\n")
    if not content.strip():
        raise SRTParseError("Content cannot be empty")

    # Split into blocks by blank lines
    blocks = re.split(r"\n\s*\n", content.strip())

    cues = []
    for block_num, block in enumerate(blocks, start=1):
        lines = block.strip().split("\n")

        if len(lines) < 2:
            raise SRTParseError(
                f"Block {block_num}: Invalid format, expected at least 2 lines "
                f"(index, timing), got {len(lines)}"
            )

        try:
            int(lines[0].strip())
        except ValueError as e:
            raise SRTParseError(
                f"Block {block_num}: Invalid index '{lines[0].strip()}', "
                "must be integer"
            ) from e

        timing_line = lines[1].strip()
        timing_match = _TIMING_RE.match(timing_line)
        if not timing_match:
            raise SRTParseError(
                f"Block {block_num}: Invalid timing format '{timing_line}', "
                f"expected 'HH:MM:SS,mmm --> HH:MM:SS,mmm'"
            )

        groups = timing_match.groups()
        cues.append(
            RawCue(
                start=_to_timedelta(*groups[:4]),
                end=_to_timedelta(*groups[4:]),
                text="\n".join(lines[2:]).strip(),
            )
        )

    return cues


def read_srt_file(path: str | Path) -> list[RawCue]:
    """Read and parse an SRT file.

    Matches the supplier signature expected by ``find_clips``.

    Raises:
        SRTParseError: If the file cannot be read, decoded or parsed
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise SRTParseError(f"Failed to read {path}: {e}") from e

    try:
        return parse_srt(content)
    except SRTParseError as e:
        raise SRTParseError(f"{path}: {e}") from e
