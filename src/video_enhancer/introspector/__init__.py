"""Introspector module for video-enhancer.

- MediaIntrospector: Protocol defining the probe interface
- FFprobeIntrospector: Production implementation using ffprobe
- StubIntrospector: Stub implementation for testing
"""

from video_enhancer.introspector.ffprobe import FFprobeIntrospector
from video_enhancer.introspector.interface import MediaIntrospector
from video_enhancer.introspector.parsers import parse_duration, parse_stream_info
from video_enhancer.introspector.stub import StubIntrospector

__all__ = [
    "MediaIntrospector",
    "FFprobeIntrospector",
    "StubIntrospector",
    "parse_duration",
    "parse_stream_info",
]
