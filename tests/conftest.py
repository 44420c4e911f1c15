"""Pytest configuration and shared fixtures."""

from collections.abc import Callable, Generator
from datetime import timedelta
from pathlib import Path

import pytest

from magiclip.core.cue import Cue, RawCue
from magiclip.utils.config import get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the get_settings LRU cache before and after each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def no_env_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run test in a directory without .env file."""
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()


@pytest.fixture
def make_cue() -> Callable[..., Cue]:
    """Build a Cue from seconds."""

    def _make(index: int, start: float, end: float, text: str) -> Cue:
        return Cue(
            index=index,
            start=timedelta(seconds=start),
            end=timedelta(seconds=end),
            text=text,
        )

    return _make


@pytest.fixture
def make_raw() -> Callable[..., RawCue]:
    """Build a RawCue from seconds."""

    def _make(start: float, end: float, text: str) -> RawCue:
        return RawCue(
            start=timedelta(seconds=start),
            end=timedelta(seconds=end),
            text=text,
        )

    return _make


@pytest.fixture
def sample_srt_content() -> str:
    """Return sample SRT content for testing."""
    return """1
00:00:10,000 --> 00:00:12,000
The cat is here.

2
00:00:12,500 --> 00:00:14,000
cat sat

3
00:00:30,000 --> 00:00:33,000
Nothing to see.

4
00:01:00,000 --> 00:01:02,500
Another CAT appears.
"""
