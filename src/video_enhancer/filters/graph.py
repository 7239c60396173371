"""Filter graph composition.

Turns native filter parameters and a speed factor into a FilterGraphSpec.
Stages for controls at their identity point are omitted, so an all-default
request yields an empty graph for both streams.
"""

from __future__ import annotations

import logging
import math

from video_enhancer.core.exceptions import ValidationError
from video_enhancer.domain.models import IDENTITY_SPEED, AdjustmentRequest
from video_enhancer.filters.controls import FilterParameterSet, map_controls
from video_enhancer.filters.stages import (
    AudioStage,
    ColorStage,
    DenoiseStage,
    FilterGraphSpec,
    ScaleStage,
    SharpenStage,
    TempoStage,
    TimestampStage,
    VideoStage,
)

logger = logging.getLogger(__name__)


def compose_filter_graph(
    params: FilterParameterSet, speed: float = IDENTITY_SPEED
) -> FilterGraphSpec:
    """Compose the video and audio filter graphs.

    Args:
        params: Native filter parameters from the control mapper.
        speed: Playback speed factor (> 0, 1.0 = unchanged).

    Returns:
        FilterGraphSpec with stages in the fixed order.

    Raises:
        ValidationError: If speed is not a finite positive number.
    """
    if not math.isfinite(speed) or speed <= 0:
        raise ValidationError("speed", speed, "a number greater than 0")

    video: list[VideoStage] = []
    audio: list[AudioStage] = []

    if params.denoise is not None:
        video.append(
            DenoiseStage(
                spatial=params.denoise.spatial, temporal=params.denoise.temporal
            )
        )

    if params.sharpen_amount is not None:
        video.append(SharpenStage(amount=params.sharpen_amount))

    if params.has_color:
        color = ColorStage()
        video.append(
            ColorStage(
                brightness=(
                    params.brightness
                    if params.brightness is not None
                    else color.brightness
                ),
                contrast=(
                    params.contrast if params.contrast is not None else color.contrast
                ),
                saturation=(
                    params.saturation
                    if params.saturation is not None
                    else color.saturation
                ),
            )
        )

    if params.scale_height is not None:
        video.append(ScaleStage(height=params.scale_height))

    # A speed change always re-times both streams from the same factor
    if speed != IDENTITY_SPEED:
        video.append(TimestampStage(speed=speed))
        audio.append(TempoStage(tempo=speed))

    graph = FilterGraphSpec(video=tuple(video), audio=tuple(audio))
    logger.debug(
        "Composed filter graph: video=%s audio=%s",
        graph.video_filter(),
        graph.audio_filter(),
    )
    return graph


def build_filter_graph(
    request: AdjustmentRequest, speed: float = IDENTITY_SPEED
) -> FilterGraphSpec:
    """Map a request's controls and compose the resulting filter graph."""
    return compose_filter_graph(map_controls(request), speed)
