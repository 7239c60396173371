"""Encode parameter resolution.

Validates the user's rate control, preset and thread count and passes
them through unchanged. Thread count 0 is kept as-is so the encoder can
pick its own value.
"""

from __future__ import annotations

from video_enhancer.core.exceptions import InvalidEncodeParameter

from .types import EncodeParameters

CRF_MIN = 0
CRF_MAX = 51

VALID_PRESETS = (
    "ultrafast",
    "superfast",
    "veryfast",
    "faster",
    "fast",
    "medium",
    "slow",
    "slower",
    "veryslow",
    "placebo",
)

DEFAULT_CRF = 17
DEFAULT_PRESET = "slow"
DEFAULT_THREADS = 0


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def resolve_encode_parameters(
    crf: int = DEFAULT_CRF,
    preset: str = DEFAULT_PRESET,
    threads: int = DEFAULT_THREADS,
) -> EncodeParameters:
    """Validate and resolve encode parameters.

    Args:
        crf: Rate control value, an integer in [0, 51].
        preset: Encoder effort label from VALID_PRESETS.
        threads: Thread count hint, 0 or more (0 = encoder decides).

    Returns:
        EncodeParameters with the values passed through.

    Raises:
        InvalidEncodeParameter: If any value is outside its domain.
    """
    if not _is_int(crf) or not CRF_MIN <= crf <= CRF_MAX:
        raise InvalidEncodeParameter(
            "crf", crf, f"an integer between {CRF_MIN} and {CRF_MAX}"
        )

    if not isinstance(preset, str) or preset not in VALID_PRESETS:
        raise InvalidEncodeParameter(
            "preset", preset, f"one of: {', '.join(VALID_PRESETS)}"
        )

    if not _is_int(threads) or threads < 0:
        raise InvalidEncodeParameter(
            "threads", threads, "an integer >= 0 (0 = let the encoder choose)"
        )

    return EncodeParameters(crf=crf, preset=preset, threads=threads)
