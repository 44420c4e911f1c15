"""Utility modules."""

from magiclip.utils.config import Settings, get_settings
from magiclip.utils.logging import setup_logging

__all__ = [
    "Settings",
    "get_settings",
    "setup_logging",
]
