"""Copy/encode planning and ffmpeg invocation building."""

from video_enhancer.planning.decisions import (
    decide_stream_mode,
    decide_streams,
    ensure_copy_compatible,
)
from video_enhancer.planning.encode_params import (
    CRF_MAX,
    CRF_MIN,
    DEFAULT_CRF,
    DEFAULT_PRESET,
    DEFAULT_THREADS,
    VALID_PRESETS,
    resolve_encode_parameters,
)
from video_enhancer.planning.planner import (
    build_audio_args,
    build_invocation,
    build_map_args,
    build_video_args,
    create_encode_plan,
    expected_output_duration,
)
from video_enhancer.planning.types import (
    Copy,
    Encode,
    EncodeParameters,
    EncodePlan,
    InvocationPlan,
    StreamDecisions,
    StreamMode,
)

__all__ = [
    # Types
    "Copy",
    "Encode",
    "EncodeParameters",
    "EncodePlan",
    "InvocationPlan",
    "StreamDecisions",
    "StreamMode",
    # Decisions
    "decide_stream_mode",
    "decide_streams",
    "ensure_copy_compatible",
    # Encode parameters
    "CRF_MAX",
    "CRF_MIN",
    "DEFAULT_CRF",
    "DEFAULT_PRESET",
    "DEFAULT_THREADS",
    "VALID_PRESETS",
    "resolve_encode_parameters",
    # Invocation
    "build_audio_args",
    "build_invocation",
    "build_map_args",
    "build_video_args",
    "create_encode_plan",
    "expected_output_duration",
]
