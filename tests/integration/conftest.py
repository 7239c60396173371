"""Integration test fixtures for the video-enhancer CLI.

This module provides pytest fixtures for:
- Tool availability detection (ffmpeg, ffprobe)
- Stubbed tools, introspector and executor for CLI runs
- A tiny generated test clip when ffmpeg is installed
"""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from video_enhancer.domain.models import StreamCodecInfo
from video_enhancer.executor import EnhanceResult
from video_enhancer.introspector import StubIntrospector
from video_enhancer.planning.types import InvocationPlan
from video_enhancer.tools import ToolPaths

FAKE_TOOLS = ToolPaths(ffmpeg=Path("/usr/bin/ffmpeg"), ffprobe=Path("/usr/bin/ffprobe"))


# =============================================================================
# Tool Availability Fixtures
# =============================================================================


def _tool_available(name: str) -> bool:
    """Check if an external tool is available in PATH."""
    return shutil.which(name) is not None


@pytest.fixture(scope="session")
def ffmpeg_available() -> bool:
    """Check if ffmpeg and ffprobe are both available."""
    return _tool_available("ffmpeg") and _tool_available("ffprobe")


# =============================================================================
# Stubbed collaborators
# =============================================================================


@dataclass
class RecordingExecutor:
    """Executor stand-in that records invocations and writes the output."""

    invocations: list[InvocationPlan] = field(default_factory=list)
    error: BaseException | None = None

    def execute(self, invocation, progress_callback=None) -> EnhanceResult:
        self.invocations.append(invocation)
        if self.error is not None:
            raise self.error
        invocation.output_path.write_bytes(b"enhanced")
        return EnhanceResult(output_path=invocation.output_path, elapsed_seconds=1.5)


@dataclass
class StubbedCLI:
    """Handles to the stubbed collaborators of a CLI run."""

    introspector: StubIntrospector
    executor: RecordingExecutor

    def use_codecs(self, info: StreamCodecInfo) -> None:
        self.introspector._info = info


@pytest.fixture
def cli_runner() -> CliRunner:
    """Click test runner."""
    return CliRunner()


@pytest.fixture
def stubbed_cli() -> Iterator[StubbedCLI]:
    """Replace tool lookup, ffprobe and ffmpeg for the enhance command."""
    stubs = StubbedCLI(introspector=StubIntrospector(), executor=RecordingExecutor())
    with (
        patch("video_enhancer.cli.enhance.resolve_tools", return_value=FAKE_TOOLS),
        patch(
            "video_enhancer.cli.enhance._make_introspector",
            return_value=stubs.introspector,
        ),
        patch(
            "video_enhancer.cli.enhance._make_executor", return_value=stubs.executor
        ),
    ):
        yield stubs


# =============================================================================
# Real media
# =============================================================================


@pytest.fixture
def generated_clip(tmp_path: Path, ffmpeg_available: bool) -> Path:
    """Generate a 2-second H.264/AAC clip with ffmpeg."""
    if not ffmpeg_available:
        pytest.skip("ffmpeg/ffprobe not available")
    path = tmp_path / "generated.mp4"
    subprocess.run(
        [
            "ffmpeg",
            "-y",
            "-hide_banner",
            "-loglevel",
            "error",
            "-f",
            "lavfi",
            "-i",
            "testsrc=duration=2:size=160x120:rate=15",
            "-f",
            "lavfi",
            "-i",
            "sine=frequency=440:duration=2",
            "-c:v",
            "libx264",
            "-pix_fmt",
            "yuv420p",
            "-c:a",
            "aac",
            "-shortest",
            str(path),
        ],
        check=True,
        capture_output=True,
        timeout=60,
    )
    return path
