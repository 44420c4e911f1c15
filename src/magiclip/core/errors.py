"""Error hierarchy shared by the clip-finding engine."""


class MagiclipError(Exception):
    """Base class for all magiclip errors."""


class InvalidPatternError(MagiclipError, ValueError):
    """Raised when a regex pattern does not compile."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")


class InvalidPaddingError(MagiclipError, ValueError):
    """Raised when a lead or trail padding is negative."""


class MalformedCueError(MagiclipError, ValueError):
    """Raised when a raw cue fails validation."""


class ParseError(MagiclipError):
    """Raised by a cue supplier when a file cannot be read or parsed."""
