"""Domain models and enums shared across video-enhancer modules."""

from video_enhancer.domain.enums import DecisionReason, StreamKind
from video_enhancer.domain.models import (
    ADJUSTMENT_FIELDS,
    IDENTITY_CONTROL_VALUE,
    IDENTITY_SPEED,
    AdjustmentRequest,
    StreamCodecInfo,
)

__all__ = [
    "ADJUSTMENT_FIELDS",
    "IDENTITY_CONTROL_VALUE",
    "IDENTITY_SPEED",
    "AdjustmentRequest",
    "DecisionReason",
    "StreamCodecInfo",
    "StreamKind",
]
