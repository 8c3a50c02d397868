"""Tests for :mod:`backend.config`."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))
from backend.config import ConfigurationError, Settings


def test_zero_poll_interval_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(music_api_key="test-key", poll_interval_seconds=0)


def test_require_api_key_returns_stripped_key() -> None:
    assert Settings(music_api_key=" test-key ").require_api_key() == "test-key"


def test_require_api_key_raises_when_unset() -> None:
    with pytest.raises(ConfigurationError):
        Settings(music_api_key="").require_api_key()
