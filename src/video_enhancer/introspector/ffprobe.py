"""FFprobe-based implementation of MediaIntrospector protocol."""

import json
import logging
import subprocess  # nosec B404 - subprocess is required for ffprobe invocation
from pathlib import Path

from video_enhancer.core.exceptions import (
    InputNotFoundError,
    ProbeError,
    ProcessSpawnError,
)
from video_enhancer.domain.models import StreamCodecInfo
from video_enhancer.introspector.parsers import parse_stream_info

logger = logging.getLogger(__name__)

DEFAULT_PROBE_TIMEOUT = 60


class FFprobeIntrospector:
    """ffprobe-based implementation of MediaIntrospector protocol."""

    def __init__(self, ffprobe_path: Path, timeout: int = DEFAULT_PROBE_TIMEOUT):
        """Initialize the introspector.

        Args:
            ffprobe_path: Resolved path to the ffprobe binary.
            timeout: Seconds to wait for ffprobe before giving up.
        """
        self._ffprobe_path = ffprobe_path
        self._timeout = timeout

    @property
    def ffprobe_path(self) -> Path:
        return self._ffprobe_path

    def probe(self, path: Path) -> StreamCodecInfo:
        """Probe a media file.

        Args:
            path: Path to the media file.

        Returns:
            StreamCodecInfo for the file.

        Raises:
            ProbeError: If the file cannot be probed.
            ProcessSpawnError: If ffprobe cannot be started.
        """
        if not path.exists():
            raise InputNotFoundError(f"File not found: {path}")
        if not path.is_file():
            raise ProbeError(f"Not a file: {path}")

        try:
            data = self._run_ffprobe(path)
        except subprocess.TimeoutExpired as e:
            raise ProbeError(f"ffprobe timed out for {path} after {e.timeout}s") from e
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or "").strip() or f"exit code {e.returncode}"
            raise ProbeError(f"ffprobe failed for {path}: {detail}") from e
        except json.JSONDecodeError as e:
            raise ProbeError(f"Invalid ffprobe output for {path}: {e}") from e

        info = parse_stream_info(data, str(path))
        logger.debug(
            "Probed %s: video=%s audio=%s duration=%s",
            path,
            info.video_codec,
            info.audio_codec,
            info.duration_seconds,
            extra={
                "path": str(path),
                "video_codec": info.video_codec,
                "audio_codec": info.audio_codec,
            },
        )
        return info

    def _run_ffprobe(self, path: Path) -> dict:
        """Run ffprobe and return parsed JSON output.

        Raises:
            subprocess.CalledProcessError: If ffprobe returns non-zero.
            json.JSONDecodeError: If output is not valid JSON.
            ProcessSpawnError: If ffprobe cannot be started.
        """
        command = [
            str(self._ffprobe_path),
            "-v",
            "error",
            "-print_format",
            "json",
            "-show_streams",
            "-show_format",
            str(path),
        ]
        try:
            result = subprocess.run(  # nosec B603 - ffprobe path is resolved
                command,
                capture_output=True,
                text=True,
                errors="replace",
                check=True,
                timeout=self._timeout,
            )
        except OSError as e:
            raise ProcessSpawnError("ffprobe", str(e), self._ffprobe_path) from e

        data = json.loads(result.stdout)
        if not isinstance(data, dict):
            raise json.JSONDecodeError("Expected a JSON object", result.stdout, 0)
        return data
