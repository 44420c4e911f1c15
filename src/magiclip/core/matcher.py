"""Pattern matching against cue text."""

import re
from dataclasses import dataclass
from enum import StrEnum

from magiclip.core.cue import Cue
from magiclip.core.errors import InvalidPatternError


class PatternKind(StrEnum):
    """How the pattern text is interpreted."""

    LITERAL = "literal"
    REGEX = "regex"


@dataclass(frozen=True)
class PatternSpec:
    """Pattern supplied by the caller."""

    text: str
    kind: PatternKind = PatternKind.LITERAL
    case_sensitive: bool = False


@dataclass(frozen=True)
class MatchSpan:
    """A cue that matched, with the first matched substring."""

    cue_index: int
    matched_text: str
    pattern_kind: PatternKind


class Matcher:
    """Compiled pattern, built once per batch and shared by all workers.

    Literal patterns are escaped and go through the same compiled regex
    path as regex patterns, so case folding behaves identically for both
    kinds. ``re.IGNORECASE`` on str patterns folds Unicode case without
    consulting the locale.

    The folding is Unicode case-insensitive equivalence, which is wider
    than comparing lowercased text: ``s`` also matches U+017F (long s) and
    ``k`` matches U+212A (Kelvin sign), although neither lowercases to the
    ASCII letter.

    Raises:
        InvalidPatternError: If the kind is unknown or a regex does not
            compile
    """

    def __init__(self, pattern: PatternSpec) -> None:
        self.pattern = pattern
        try:
            self.kind = PatternKind(pattern.kind)
        except ValueError as e:
            raise InvalidPatternError(
                pattern.text, f"unknown kind {pattern.kind!r}"
            ) from e
        flags = 0 if pattern.case_sensitive else re.IGNORECASE

        if self.kind == PatternKind.REGEX:
            source = pattern.text
        else:
            source = re.escape(pattern.text)

        try:
            self._compiled = re.compile(source, flags)
        except re.error as e:
            raise InvalidPatternError(pattern.text, str(e)) from e

    def matches(self, text: str) -> bool:
        """Return True if the pattern occurs anywhere in text."""
        return self._compiled.search(text) is not None

    def match(self, cue: Cue) -> list[MatchSpan]:
        """Match a cue, returning at most one span.

        Clips are cut per cue, so several hits inside one cue collapse
        into the span of the first hit.
        """
        hit = self._compiled.search(cue.text)
        if hit is None:
            return []
        return [
            MatchSpan(
                cue_index=cue.index,
                matched_text=hit.group(0),
                pattern_kind=self.kind,
            )
        ]
