"""Stub implementation of MediaIntrospector for testing."""

from pathlib import Path

from video_enhancer.core.exceptions import InputNotFoundError
from video_enhancer.domain.models import StreamCodecInfo


class StubIntrospector:
    """Returns fixed stream info instead of running ffprobe.

    Records every probed path in `probed` so tests can assert on calls.
    """

    def __init__(
        self,
        info: StreamCodecInfo | None = None,
        require_exists: bool = True,
    ) -> None:
        self._info = info or StreamCodecInfo(
            video_codec="h264",
            audio_codec="aac",
            container_format="mov,mp4,m4a,3gp,3g2,mj2",
            duration_seconds=10.0,
        )
        self._require_exists = require_exists
        self.probed: list[Path] = []

    def probe(self, path: Path) -> StreamCodecInfo:
        """Return the configured stream info.

        Raises:
            InputNotFoundError: If require_exists is set and the file does not exist.
        """
        self.probed.append(path)
        if self._require_exists and not path.exists():
            raise InputNotFoundError(f"File not found: {path}")
        return self._info
