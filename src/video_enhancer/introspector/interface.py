"""MediaIntrospector interface for probing input files."""

from pathlib import Path
from typing import Protocol

from video_enhancer.domain.models import StreamCodecInfo


class MediaIntrospector(Protocol):
    """Protocol for media introspection implementations.

    Implementations report the codecs of the first video and audio stream
    of a file, plus its container format and duration.
    """

    def probe(self, path: Path) -> StreamCodecInfo:
        """Probe a media file.

        Args:
            path: Path to the media file.

        Returns:
            StreamCodecInfo for the file.

        Raises:
            ProbeError: If the file cannot be read or has no media streams.
        """
        ...
