"""Process execution for planned ffmpeg invocations."""

from video_enhancer.executor.executor import EnhanceExecutor, EnhanceResult
from video_enhancer.executor.ffmpeg_utils import (
    cleanup_temp_file,
    create_temp_output,
    validate_output,
)

__all__ = [
    "EnhanceExecutor",
    "EnhanceResult",
    "cleanup_temp_file",
    "create_temp_output",
    "validate_output",
]
