"""Mapping of 0-100 user controls to native ffmpeg filter parameters.

Every control is first normalized around its identity point:

    n = (value - 50) / 50        # -1.0 at 0, 0.0 at 50, +1.0 at 100

and then scaled into the domain of the filter that implements it. Value 50
always maps exactly to the filter's no-op constant, so the composer can omit
the stage with an exact comparison rather than a float tolerance.
"""

from __future__ import annotations

from dataclasses import dataclass

from video_enhancer.domain.models import IDENTITY_CONTROL_VALUE, AdjustmentRequest

# eq=brightness is an additive offset in [-1, 1]; keep to a perceptually safe band
BRIGHTNESS_MAX = 0.25
BRIGHTNESS_NOOP = 0.0

# eq=contrast / eq=saturation are multipliers around 1.0
CONTRAST_SPAN = 0.25
CONTRAST_NOOP = 1.0
SATURATION_SPAN = 0.25
SATURATION_NOOP = 1.0

# unsharp luma_amount at value 100 (7x7 luma matrix)
SHARPEN_MAX = 1.0
SHARPEN_NOOP = 0.0

# hqdn3d spatial and temporal luma strengths at value 100
DENOISE_SPATIAL_MAX = 1.8
DENOISE_TEMPORAL_MAX = 9.0
DENOISE_NOOP = 0.0


@dataclass(frozen=True)
class DenoiseStrength:
    """hqdn3d strengths (applied to luma and chroma alike)."""

    spatial: float
    temporal: float


@dataclass(frozen=True)
class FilterParameterSet:
    """Native filter parameters for the requested adjustments.

    A field is None when its control sits at the identity point; the
    filter graph composer omits the corresponding stage.
    """

    brightness: float | None = None
    contrast: float | None = None
    saturation: float | None = None
    sharpen_amount: float | None = None
    denoise: DenoiseStrength | None = None
    scale_height: int | None = None

    @property
    def has_color(self) -> bool:
        """True if any of brightness, contrast or saturation is set."""
        return any(
            v is not None for v in (self.brightness, self.contrast, self.saturation)
        )


def center_norm(value: int) -> float:
    """Normalize a 0-100 control value to [-1.0, 1.0] around 50."""
    return (value - IDENTITY_CONTROL_VALUE) / IDENTITY_CONTROL_VALUE


def map_brightness(value: int) -> float:
    """Map brightness 0-100 to an eq brightness offset in [-0.25, 0.25]."""
    return center_norm(value) * BRIGHTNESS_MAX


def map_contrast(value: int) -> float:
    """Map contrast 0-100 to an eq contrast multiplier in [0.75, 1.25]."""
    return CONTRAST_NOOP + center_norm(value) * CONTRAST_SPAN


def map_saturation(value: int) -> float:
    """Map saturation 0-100 to an eq saturation multiplier in [0.75, 1.25]."""
    return SATURATION_NOOP + center_norm(value) * SATURATION_SPAN


def map_sharpen(value: int) -> float:
    """Map sharpen 0-100 to an unsharp luma amount in [0.0, 1.0].

    Values up to 50 yield 0.0 (no sharpening).
    """
    return max(center_norm(value), 0.0) * SHARPEN_MAX


def map_denoise(value: int) -> DenoiseStrength:
    """Map denoise 0-100 to hqdn3d strengths.

    Values up to 50 yield zero strength (denoise off).
    """
    norm = max(center_norm(value), 0.0)
    return DenoiseStrength(
        spatial=norm * DENOISE_SPATIAL_MAX,
        temporal=norm * DENOISE_TEMPORAL_MAX,
    )


def _unless(value: float, noop: float) -> float | None:
    return None if value == noop else value


def map_controls(request: AdjustmentRequest) -> FilterParameterSet:
    """Map every control of a request to its native parameter.

    Args:
        request: Validated adjustment request.

    Returns:
        FilterParameterSet with None for each control at its identity point.
    """
    denoise = map_denoise(request.denoise)
    return FilterParameterSet(
        brightness=_unless(map_brightness(request.brightness), BRIGHTNESS_NOOP),
        contrast=_unless(map_contrast(request.contrast), CONTRAST_NOOP),
        saturation=_unless(map_saturation(request.saturation), SATURATION_NOOP),
        sharpen_amount=_unless(map_sharpen(request.sharpen), SHARPEN_NOOP),
        denoise=None if denoise.spatial == DENOISE_NOOP else denoise,
        scale_height=request.scale_height,
    )
