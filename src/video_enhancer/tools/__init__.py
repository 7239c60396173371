"""External tool resolution and ffmpeg output parsing."""

from video_enhancer.tools.detection import (
    detect_tool,
    find_tool,
    parse_version_string,
    resolve_tools,
)
from video_enhancer.tools.ffmpeg_progress import FFmpegProgress, parse_stderr_progress
from video_enhancer.tools.models import ToolInfo, ToolPaths, ToolStatus

__all__ = [
    "FFmpegProgress",
    "ToolInfo",
    "ToolPaths",
    "ToolStatus",
    "detect_tool",
    "find_tool",
    "parse_stderr_progress",
    "parse_version_string",
    "resolve_tools",
]
