"""Filter mapping and filter graph construction.

- controls.py: 0-100 controls -> native filter parameters (FilterParameterSet)
- stages.py: filter stage types and FilterGraphSpec
- graph.py: composition of stages into a FilterGraphSpec

Usage:
    from video_enhancer.filters import build_filter_graph
    graph = build_filter_graph(AdjustmentRequest(brightness=60), speed=1.25)
    graph.video_filter()  # "eq=...,setpts=PTS/1.25"
"""

from video_enhancer.filters.controls import (
    DenoiseStrength,
    FilterParameterSet,
    center_norm,
    map_brightness,
    map_contrast,
    map_controls,
    map_denoise,
    map_saturation,
    map_sharpen,
)
from video_enhancer.filters.graph import build_filter_graph, compose_filter_graph
from video_enhancer.filters.stages import (
    ColorStage,
    DenoiseStage,
    FilterGraphSpec,
    ScaleStage,
    SharpenStage,
    TempoStage,
    TimestampStage,
)

__all__ = [
    # Controls
    "DenoiseStrength",
    "FilterParameterSet",
    "center_norm",
    "map_brightness",
    "map_contrast",
    "map_controls",
    "map_denoise",
    "map_saturation",
    "map_sharpen",
    # Stages
    "ColorStage",
    "DenoiseStage",
    "FilterGraphSpec",
    "ScaleStage",
    "SharpenStage",
    "TempoStage",
    "TimestampStage",
    # Composition
    "build_filter_graph",
    "compose_filter_graph",
]
