"""Logging setup for video-enhancer."""

from video_enhancer.logging.config import (
    build_formatter,
    configure_logging,
    enable_debug_logging,
)
from video_enhancer.logging.handlers import JSONFormatter, TextFormatter

__all__ = [
    "JSONFormatter",
    "TextFormatter",
    "build_formatter",
    "configure_logging",
    "enable_debug_logging",
]
