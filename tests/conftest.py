"""Shared test fixtures for video-enhancer."""

import json
import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from video_enhancer.domain.models import StreamCodecInfo

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_ffprobe_fixture(name: str) -> dict:
    """Load an ffprobe JSON fixture by name (without .json extension)."""
    fixture_path = FIXTURES_DIR / "ffprobe" / f"{name}.json"
    return json.loads(fixture_path.read_text())


@pytest.fixture
def h264_aac_fixture() -> dict:
    """ffprobe output for an H.264/AAC MP4."""
    return load_ffprobe_fixture("h264_aac")


@pytest.fixture
def vp9_opus_fixture() -> dict:
    """ffprobe output for a VP9/Opus WebM."""
    return load_ffprobe_fixture("vp9_opus")


@pytest.fixture
def video_only_fixture() -> dict:
    """ffprobe output for an HEVC file with cover art and no audio."""
    return load_ffprobe_fixture("video_only_with_cover")


@pytest.fixture
def data_only_fixture() -> dict:
    """ffprobe output for a file with no audio or video stream."""
    return load_ffprobe_fixture("data_only")


@pytest.fixture
def multi_audio_fixture() -> dict:
    """ffprobe output for an MKV with a stereo AAC track and a default 5.1 DTS track."""
    return load_ffprobe_fixture("multi_audio")


@pytest.fixture
def h264_aac_info() -> StreamCodecInfo:
    """Stream info for an H.264/AAC input."""
    return StreamCodecInfo(
        video_codec="h264",
        audio_codec="aac",
        container_format="mov,mp4,m4a,3gp,3g2,mj2",
        duration_seconds=12.0,
    )


@pytest.fixture
def vp9_opus_info() -> StreamCodecInfo:
    """Stream info for a VP9/Opus input."""
    return StreamCodecInfo(
        video_codec="vp9",
        audio_codec="opus",
        container_format="matroska,webm",
        duration_seconds=8.5,
    )


@pytest.fixture
def input_video(tmp_path: Path) -> Path:
    """Create a placeholder input file."""
    path = tmp_path / "clip.mp4"
    path.write_bytes(b"\x00" * 64)
    return path


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path):
    """Point the config loader at an empty location and clear env overrides.

    Keeps tests independent of ~/.video-enhancer/config.toml and of any
    VIDEO_ENHANCER_* variables set in the developer's shell.
    """
    env = {
        key: value
        for key, value in os.environ.items()
        if not key.startswith("VIDEO_ENHANCER_")
    }
    env["VIDEO_ENHANCER_CONFIG_PATH"] = str(tmp_path / "no-config.toml")
    with patch.dict(os.environ, env, clear=True):
        yield


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Restore root logger handlers and level changed by configure_logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
