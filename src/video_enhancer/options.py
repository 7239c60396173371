"""Boundary validation of raw enhance options.

Raw values from the command line, the interactive prompts or the config
file are validated here with pydantic before anything is planned. Control
values and the speed factor are checked at this layer; encode parameters
(crf, preset, threads) are only type-checked here and validated by the
encode parameter resolver during planning.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from video_enhancer.core.exceptions import ValidationError
from video_enhancer.domain.models import (
    CONTROL_MAX,
    CONTROL_MIN,
    IDENTITY_CONTROL_VALUE,
    IDENTITY_SPEED,
    AdjustmentRequest,
)
from video_enhancer.planning.encode_params import (
    DEFAULT_CRF,
    DEFAULT_PRESET,
    DEFAULT_THREADS,
)

# Extension used for the default output when the input has none
DEFAULT_OUTPUT_SUFFIX = ".mp4"

_CONTROL_DOMAIN = f"an integer between {CONTROL_MIN} and {CONTROL_MAX}"

# Expected-domain text per field, used in error messages
_EXPECTED: dict[str, str] = {
    "input_path": "a file path",
    "output_path": "a file path",
    "speed": "a number greater than 0",
    "brightness": _CONTROL_DOMAIN,
    "contrast": _CONTROL_DOMAIN,
    "saturation": _CONTROL_DOMAIN,
    "sharpen": _CONTROL_DOMAIN,
    "denoise": _CONTROL_DOMAIN,
    "scale_height": "a positive even integer",
    "crf": "an integer",
    "preset": "a string",
    "threads": "an integer",
}


def _control_field() -> Any:
    return Field(default=IDENTITY_CONTROL_VALUE, ge=CONTROL_MIN, le=CONTROL_MAX)


class EnhanceOptionsModel(BaseModel):
    """Pydantic model for one enhance request."""

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    input_path: Path
    output_path: Path | None = None
    speed: float = Field(default=IDENTITY_SPEED, gt=0)

    brightness: int = _control_field()
    contrast: int = _control_field()
    saturation: int = _control_field()
    sharpen: int = _control_field()
    denoise: int = _control_field()

    scale_height: int | None = Field(default=None, gt=0)

    crf: int = DEFAULT_CRF
    preset: str = DEFAULT_PRESET
    threads: int = DEFAULT_THREADS

    @field_validator("scale_height")
    @classmethod
    def validate_scale_height(cls, v: int | None) -> int | None:
        """Require an even height (chroma subsampling needs it)."""
        if v is not None and v % 2 != 0:
            raise ValueError(f"scale height must be even, got {v}")
        return v

    @field_validator("preset")
    @classmethod
    def normalize_preset(cls, v: str) -> str:
        """Normalize preset case and whitespace."""
        return v.strip().casefold()


@dataclass(frozen=True)
class EnhanceOptions:
    """Validated enhance options, split into domain values."""

    input_path: Path
    output_path: Path
    request: AdjustmentRequest
    speed: float
    crf: int
    preset: str
    threads: int

    @property
    def container(self) -> str:
        """Destination container extension without the dot."""
        return self.output_path.suffix.lstrip(".").casefold()


def default_output_path(input_path: Path, speed: float = IDENTITY_SPEED) -> Path:
    """Derive the output path next to the input.

    "clip.mov" at speed 1.25 becomes "clip_enhanced_speed1.25.mov".
    """
    suffix = input_path.suffix or DEFAULT_OUTPUT_SUFFIX
    return input_path.with_name(f"{input_path.stem}_enhanced_speed{speed:g}{suffix}")


def _to_validation_error(error: PydanticValidationError) -> ValidationError:
    """Convert the first pydantic error into a ValidationError."""
    first = error.errors()[0]
    loc = first.get("loc", ())
    field = str(loc[0]) if loc else "options"
    return ValidationError(
        field,
        first.get("input"),
        _EXPECTED.get(field, first.get("msg", "a valid value")),
    )


def parse_enhance_options(raw: dict[str, Any]) -> EnhanceOptions:
    """Validate raw enhance options.

    Args:
        raw: Option values keyed by field name. None values fall back to
            the defaults.

    Returns:
        EnhanceOptions with the output path resolved.

    Raises:
        ValidationError: If any value is missing, malformed or out of range.
    """
    data = {key: value for key, value in raw.items() if value is not None}
    try:
        model = EnhanceOptionsModel.model_validate(data)
    except PydanticValidationError as e:
        raise _to_validation_error(e) from e

    output_path = model.output_path or default_output_path(
        model.input_path, model.speed
    )
    if output_path.resolve() == model.input_path.resolve():
        raise ValidationError(
            "output_path", str(output_path), "a path different from the input"
        )

    return EnhanceOptions(
        input_path=model.input_path,
        output_path=output_path,
        request=AdjustmentRequest(
            brightness=model.brightness,
            contrast=model.contrast,
            saturation=model.saturation,
            sharpen=model.sharpen,
            denoise=model.denoise,
            scale_height=model.scale_height,
        ),
        speed=model.speed,
        crf=model.crf,
        preset=model.preset,
        threads=model.threads,
    )
