"""Tests for EnvReader class."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from video_enhancer.config.env import EnvReader


class TestEnvReaderGetStr:
    """Tests for EnvReader.get_str method."""

    def test_returns_value_when_set(self) -> None:
        """Should return the value when environment variable is set."""
        reader = EnvReader(env={"MY_VAR": "hello"})
        assert reader.get_str("MY_VAR") == "hello"

    def test_returns_default_when_not_set(self) -> None:
        """Should return default when environment variable is not set."""
        reader = EnvReader(env={})
        assert reader.get_str("MY_VAR", "default") == "default"

    def test_empty_value_is_unset(self) -> None:
        """Should treat an empty value as unset."""
        reader = EnvReader(env={"MY_VAR": ""})
        assert reader.get_str("MY_VAR", "default") == "default"


class TestEnvReaderGetInt:
    """Tests for EnvReader.get_int method."""

    def test_returns_value_when_set(self) -> None:
        """Should parse and return integer when environment variable is set."""
        reader = EnvReader(env={"MY_VAR": "42"})
        assert reader.get_int("MY_VAR") == 42

    def test_parses_negative_integer(self) -> None:
        """Should parse negative integers correctly."""
        reader = EnvReader(env={"MY_VAR": "-5"})
        assert reader.get_int("MY_VAR") == -5

    def test_returns_default_and_warns_for_invalid(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Should return default and log warning for invalid integer."""
        reader = EnvReader(env={"MY_VAR": "not_a_number"})
        with caplog.at_level(logging.WARNING):
            result = reader.get_int("MY_VAR", 100)
        assert result == 100
        assert "Invalid integer value for MY_VAR: not_a_number" in caplog.text


class TestEnvReaderGetBool:
    """Tests for EnvReader.get_bool method."""

    @pytest.mark.parametrize("value", ["true", "1", "YES", "On"])
    def test_true_values(self, value: str) -> None:
        """Should recognize common true spellings."""
        assert EnvReader(env={"MY_VAR": value}).get_bool("MY_VAR") is True

    @pytest.mark.parametrize("value", ["false", "0", "no", "off"])
    def test_false_values(self, value: str) -> None:
        """Should treat other values as false."""
        assert EnvReader(env={"MY_VAR": value}).get_bool("MY_VAR") is False


class TestEnvReaderGetPath:
    """Tests for EnvReader.get_path method."""

    def test_returns_path(self) -> None:
        """Should return a Path for the value."""
        reader = EnvReader(env={"MY_VAR": "/opt/ffmpeg/bin/ffmpeg"})
        assert reader.get_path("MY_VAR") == Path("/opt/ffmpeg/bin/ffmpeg")

    def test_expands_tilde(self) -> None:
        """Should expand ~ to the home directory."""
        reader = EnvReader(env={"MY_VAR": "~/bin/ffmpeg"})
        assert reader.get_path("MY_VAR") == Path.home() / "bin" / "ffmpeg"

    def test_does_not_require_existence(self) -> None:
        """Should return paths that do not exist."""
        reader = EnvReader(env={"MY_VAR": "/does/not/exist"})
        assert reader.get_path("MY_VAR") == Path("/does/not/exist")
