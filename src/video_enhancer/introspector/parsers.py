"""Pure parsing functions for ffprobe JSON output.

These functions turn ffprobe's JSON into a StreamCodecInfo. They do no I/O
so they can be tested against canned ffprobe output.
"""

import logging

from video_enhancer.core.exceptions import ProbeError
from video_enhancer.domain.models import StreamCodecInfo

logger = logging.getLogger(__name__)


def parse_duration(value: str | None) -> float | None:
    """Parse a duration string from ffprobe into seconds.

    Args:
        value: Duration string from ffprobe (e.g., "12.480000") or None.

    Returns:
        Duration in seconds, or None if missing, unparsable or not positive.
    """
    if value is None:
        return None
    try:
        duration = float(value)
    except (ValueError, TypeError):
        return None
    if duration <= 0 or duration != duration:
        return None
    return duration


def first_codec(streams: list[dict], codec_type: str) -> str | None:
    """Return the codec name of the first stream of a type.

    Attached pictures (cover art) are not counted as video.
    """
    for stream in streams:
        if stream.get("codec_type") != codec_type:
            continue
        if codec_type == "video" and stream.get("disposition", {}).get(
            "attached_pic"
        ):
            continue
        codec = stream.get("codec_name")
        if codec:
            return str(codec).casefold()
    return None


def parse_stream_info(data: dict, source: str | None = None) -> StreamCodecInfo:
    """Parse ffprobe JSON output into a StreamCodecInfo.

    Args:
        data: Parsed ffprobe JSON output.
        source: File path for error messages.

    Returns:
        StreamCodecInfo with the first video/audio codec and the duration.

    Raises:
        ProbeError: If the output has neither a video nor an audio stream.
    """
    label = source or "input"
    streams = data.get("streams")
    if not isinstance(streams, list):
        raise ProbeError(
            f"Missing 'streams' in ffprobe output for {label}. "
            "File may be corrupted or not a valid media file."
        )

    video_codec = first_codec(streams, "video")
    audio_codec = first_codec(streams, "audio")
    if video_codec is None and audio_codec is None:
        raise ProbeError(f"No video or audio stream found in {label}")

    format_info = data.get("format") or {}
    duration = parse_duration(format_info.get("duration"))
    if duration is None:
        # Fall back to the longest stream duration
        durations = [parse_duration(s.get("duration")) for s in streams]
        known = [d for d in durations if d is not None]
        duration = max(known) if known else None
    if duration is None:
        logger.debug("No duration reported for %s; progress will be unknown", label)

    return StreamCodecInfo(
        video_codec=video_codec,
        audio_codec=audio_codec,
        container_format=format_info.get("format_name"),
        duration_seconds=duration,
    )
