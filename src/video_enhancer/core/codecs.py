"""Centralized codec registry and container compatibility.

This module is the single source of truth for codec knowledge:
- Codec alias groups for normalization
- Which codecs each destination container accepts for stream copy
- Which encoders to use when a stream has to be re-encoded
"""

from __future__ import annotations

from dataclasses import dataclass

# =============================================================================
# Codec Alias Groups
# =============================================================================
# Groups of equivalent codec identifiers. The key is the canonical name.

VIDEO_CODEC_ALIASES: dict[str, frozenset[str]] = {
    "h264": frozenset({"h264", "h.264", "avc", "avc1", "x264"}),
    "hevc": frozenset({"hevc", "h265", "h.265", "x265", "hvc1", "hev1"}),
    "vp8": frozenset({"vp8", "libvpx"}),
    "vp9": frozenset({"vp9", "vp09", "libvpx-vp9"}),
    "av1": frozenset({"av1", "av01", "libaom-av1", "libsvtav1"}),
    "mpeg4": frozenset({"mpeg4", "mp4v", "xvid", "divx"}),
    "mpeg2video": frozenset({"mpeg2video", "mpeg2"}),
    "prores": frozenset({"prores", "apcn", "apch"}),
    "mjpeg": frozenset({"mjpeg", "jpeg"}),
}

AUDIO_CODEC_ALIASES: dict[str, frozenset[str]] = {
    "aac": frozenset({"aac", "aac_latm", "mp4a"}),
    "mp3": frozenset({"mp3", "mp3float", "libmp3lame"}),
    "ac3": frozenset({"ac3", "ac-3", "a52"}),
    "eac3": frozenset({"eac3", "e-ac-3", "ec3"}),
    "opus": frozenset({"opus", "libopus"}),
    "vorbis": frozenset({"vorbis", "libvorbis"}),
    "flac": frozenset({"flac"}),
    "alac": frozenset({"alac"}),
    "pcm": frozenset({"pcm_s16le", "pcm_s24le", "pcm_s32le", "pcm_f32le", "pcm"}),
    "dts": frozenset({"dts", "dca"}),
    "truehd": frozenset({"truehd", "mlp"}),
}


# =============================================================================
# Container Compatibility Table
# =============================================================================
# Keyed by container extension (without the dot). Each entry lists the
# canonical codecs that may be stream-copied into that container. Containers
# missing from the table accept everything.


@dataclass(frozen=True)
class ContainerSupport:
    """Codecs a container accepts without re-encoding."""

    video: frozenset[str]
    audio: frozenset[str]


_ISO_BMFF = ContainerSupport(
    video=frozenset({"h264", "hevc", "av1", "mpeg4", "mpeg2video", "mjpeg"}),
    audio=frozenset({"aac", "mp3", "ac3", "eac3", "alac", "flac"}),
)

_QUICKTIME = ContainerSupport(
    video=frozenset({"h264", "hevc", "mpeg4", "mpeg2video", "prores", "mjpeg"}),
    audio=frozenset({"aac", "mp3", "ac3", "eac3", "alac", "pcm"}),
)

_WEBM = ContainerSupport(
    video=frozenset({"vp8", "vp9", "av1"}),
    audio=frozenset({"opus", "vorbis"}),
)

CONTAINER_SUPPORT: dict[str, ContainerSupport] = {
    "mp4": _ISO_BMFF,
    "m4v": _ISO_BMFF,
    "mov": _QUICKTIME,
    "webm": _WEBM,
}

# Containers that accept any codec
UNRESTRICTED_CONTAINERS: frozenset[str] = frozenset({"mkv", "mka", "nut"})


# =============================================================================
# Encoder Tables
# =============================================================================


@dataclass(frozen=True)
class EncoderChoice:
    """Encoder settings used when a stream must be re-encoded."""

    encoder: str
    bitrate: str | None = None


DEFAULT_VIDEO_ENCODER = EncoderChoice(encoder="libx264")
DEFAULT_AUDIO_ENCODER = EncoderChoice(encoder="aac", bitrate="192k")

VIDEO_ENCODERS_BY_CONTAINER: dict[str, EncoderChoice] = {
    "webm": EncoderChoice(encoder="libvpx-vp9"),
}

AUDIO_ENCODERS_BY_CONTAINER: dict[str, EncoderChoice] = {
    "webm": EncoderChoice(encoder="libopus", bitrate="160k"),
}


# =============================================================================
# Functions
# =============================================================================


def normalize_container(container: str) -> str:
    """Normalize a container extension ("MP4", ".mp4" -> "mp4")."""
    return container.casefold().strip().lstrip(".")


def get_canonical_codec(codec: str | None, track_type: str) -> str:
    """Get the canonical name for a codec.

    Args:
        codec: Codec name to canonicalize (as reported by ffprobe).
        track_type: One of 'video', 'audio'.

    Returns:
        Canonical codec name (the alias group key), or the normalized
        input if the codec is unknown.
    """
    if codec is None:
        return ""
    normalized = codec.casefold().strip()
    if not normalized:
        return normalized

    aliases = VIDEO_CODEC_ALIASES if track_type == "video" else AUDIO_CODEC_ALIASES
    for canonical, variants in aliases.items():
        if normalized == canonical or normalized in variants:
            return canonical
    if track_type == "audio" and normalized.startswith("pcm_"):
        return "pcm"

    return normalized


def is_codec_compatible(codec: str, container: str, track_type: str) -> bool:
    """Check if a codec can be stream-copied into a container.

    Args:
        codec: Codec name.
        container: Destination container extension ('mp4', '.mkv', ...).
        track_type: Track type ('video' or 'audio').

    Returns:
        True if the codec is compatible with the container.
    """
    container_key = normalize_container(container)
    if container_key in UNRESTRICTED_CONTAINERS:
        return True

    support = CONTAINER_SUPPORT.get(container_key)
    if support is None:
        # Unknown container - assume compatible and let ffmpeg decide
        return True

    canonical = get_canonical_codec(codec, track_type)
    allowed = support.video if track_type == "video" else support.audio
    return canonical in allowed


def get_video_encoder(container: str) -> EncoderChoice:
    """Get the video encoder to use for a destination container."""
    return VIDEO_ENCODERS_BY_CONTAINER.get(
        normalize_container(container), DEFAULT_VIDEO_ENCODER
    )


def get_audio_encoder(container: str) -> EncoderChoice:
    """Get the audio encoder to use for a destination container."""
    return AUDIO_ENCODERS_BY_CONTAINER.get(
        normalize_container(container), DEFAULT_AUDIO_ENCODER
    )
