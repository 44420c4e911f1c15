"""Find subtitle cues matching a pattern and turn them into clip intervals."""

__version__ = "0.2.0"
