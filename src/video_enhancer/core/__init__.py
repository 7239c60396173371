"""Core utilities shared across video-enhancer modules.

- codecs: codec aliases, container compatibility, encoder tables
- exceptions: the error hierarchy
"""

from video_enhancer.core.codecs import (
    CONTAINER_SUPPORT,
    ContainerSupport,
    EncoderChoice,
    get_audio_encoder,
    get_canonical_codec,
    get_video_encoder,
    is_codec_compatible,
    normalize_container,
)
from video_enhancer.core.exceptions import (
    ConfigError,
    InputNotFoundError,
    InvalidEncodeParameter,
    ProbeError,
    ProcessExecutionError,
    ProcessSpawnError,
    UnsupportedContainerForCopy,
    ValidationError,
    VideoEnhancerError,
)

__all__ = [
    # Codecs
    "CONTAINER_SUPPORT",
    "ContainerSupport",
    "EncoderChoice",
    "get_audio_encoder",
    "get_canonical_codec",
    "get_video_encoder",
    "is_codec_compatible",
    "normalize_container",
    # Exceptions
    "ConfigError",
    "InputNotFoundError",
    "InvalidEncodeParameter",
    "ProbeError",
    "ProcessExecutionError",
    "ProcessSpawnError",
    "UnsupportedContainerForCopy",
    "ValidationError",
    "VideoEnhancerError",
]
