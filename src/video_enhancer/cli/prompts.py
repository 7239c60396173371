"""Interactive prompts used when `enhance` runs without --input."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click

from video_enhancer.domain.models import (
    ADJUSTMENT_FIELDS,
    CONTROL_MAX,
    CONTROL_MIN,
    IDENTITY_CONTROL_VALUE,
    IDENTITY_SPEED,
)
from video_enhancer.options import default_output_path


def _prompt_scale_height() -> int | str | None:
    value = click.prompt(
        "Output height in pixels (blank keeps the source height)",
        default="",
        show_default=False,
    ).strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        # Left as text so the options model reports it
        return value


def prompt_enhance_options() -> dict[str, Any]:
    """Ask for the enhance options one by one.

    Returns:
        Raw option values keyed by field name, ready for
        parse_enhance_options().
    """
    click.echo("video-enhancer: interactive mode (press Enter to keep defaults)")
    input_path = click.prompt(
        "Input video",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
    )
    speed = click.prompt(
        "Playback speed (1.0 = unchanged)",
        type=click.FloatRange(min=0, min_open=True),
        default=IDENTITY_SPEED,
    )

    raw: dict[str, Any] = {"input_path": input_path, "speed": speed}
    for name in ADJUSTMENT_FIELDS:
        raw[name] = click.prompt(
            f"{name.capitalize()} ({CONTROL_MIN}-{CONTROL_MAX}, "
            f"{IDENTITY_CONTROL_VALUE} = unchanged)",
            type=click.IntRange(CONTROL_MIN, CONTROL_MAX),
            default=IDENTITY_CONTROL_VALUE,
        )
    raw["scale_height"] = _prompt_scale_height()
    raw["output_path"] = click.prompt(
        "Output file",
        type=click.Path(dir_okay=False, path_type=Path),
        default=str(default_output_path(input_path, speed)),
    )
    return raw
