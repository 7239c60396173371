"""Domain enums for video-enhancer."""

from enum import Enum


class StreamKind(Enum):
    """Kind of media stream the planner makes a decision for."""

    VIDEO = "video"
    AUDIO = "audio"


class DecisionReason(Enum):
    """Why a stream has to be re-encoded instead of copied."""

    FILTERS_REQUESTED = "filters_requested"  # Color/detail/scale stages present
    SPEED_CHANGE = "speed_change"  # Samples must be re-timed
    CONTAINER_INCOMPATIBLE = "container_incompatible"  # Codec not allowed in output
