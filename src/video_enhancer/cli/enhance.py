"""`enhance` command: adjust, rescale and re-time one video file."""

from __future__ import annotations

import json
import logging
import shlex
import sys
from pathlib import Path
from typing import Any, NoReturn

import click

from video_enhancer.cli.exit_codes import exit_code_for
from video_enhancer.cli.progress import ProgressDisplay
from video_enhancer.cli.prompts import prompt_enhance_options
from video_enhancer.config import get_config
from video_enhancer.core.exceptions import (
    InputNotFoundError,
    ValidationError,
    VideoEnhancerError,
)
from video_enhancer.domain.models import (
    CONTROL_MAX,
    CONTROL_MIN,
    IDENTITY_CONTROL_VALUE,
    IDENTITY_SPEED,
)
from video_enhancer.executor import EnhanceExecutor, EnhanceResult
from video_enhancer.introspector import FFprobeIntrospector, MediaIntrospector
from video_enhancer.logging import enable_debug_logging
from video_enhancer.options import EnhanceOptions, parse_enhance_options
from video_enhancer.planning import (
    VALID_PRESETS,
    Copy,
    EncodePlan,
    InvocationPlan,
    StreamMode,
    build_invocation,
    create_encode_plan,
    expected_output_duration,
    resolve_encode_parameters,
)
from video_enhancer.tools import resolve_tools

logger = logging.getLogger(__name__)

_CONTROL = click.IntRange(CONTROL_MIN, CONTROL_MAX)


def _is_interactive() -> bool:
    """Check if stdin is a terminal (patched in tests)."""
    return sys.stdin.isatty()


def _make_introspector(ffprobe_path: Path) -> MediaIntrospector:
    return FFprobeIntrospector(ffprobe_path)


def _make_executor(verbose: bool) -> EnhanceExecutor:
    return EnhanceExecutor(log_stderr=verbose)


def _fail(error: BaseException, json_output: bool = False) -> NoReturn:
    """Report an error and exit with its exit code."""
    code = exit_code_for(error)
    message = str(error) or type(error).__name__
    if json_output:
        click.echo(
            json.dumps(
                {"status": "error", "error": message, "exit_code": int(code)},
                indent=2,
            )
        )
    click.echo(f"Error: {message}", err=True)
    raise SystemExit(code)


def _mode_summary(mode: StreamMode) -> dict[str, Any]:
    if isinstance(mode, Copy):
        return {"mode": "copy"}
    return {
        "mode": "encode",
        "reasons": [reason.value for reason in mode.reasons],
        "stages": [stage.name for stage in mode.stages],
    }


def plan_summary(
    options: EnhanceOptions, plan: EncodePlan, invocation: InvocationPlan
) -> dict[str, Any]:
    """Describe a plan and its command as a JSON-serializable dict."""
    return {
        "input": str(options.input_path),
        "output": str(options.output_path),
        "speed": options.speed,
        "video": _mode_summary(invocation.video),
        "audio": _mode_summary(invocation.audio),
        "video_filter": plan.graph.video_filter(),
        "audio_filter": plan.graph.audio_filter(),
        "encode": {
            "crf": plan.parameters.crf,
            "preset": plan.parameters.preset,
            "threads": plan.parameters.threads,
        },
        "warnings": list(invocation.warnings),
        "command": invocation.to_command(),
    }


def _echo_summary(summary: dict[str, Any]) -> None:
    click.echo(f"Input:   {summary['input']}")
    click.echo(f"Output:  {summary['output']}")
    for stream in ("video", "audio"):
        decision = summary[stream]
        line = decision["mode"]
        if decision["mode"] == "encode" and decision["reasons"]:
            line += f" ({', '.join(decision['reasons'])})"
        click.echo(f"{stream.capitalize() + ':':<9}{line}")
    if summary["video_filter"]:
        click.echo(f"Video filter: {summary['video_filter']}")
    if summary["audio_filter"]:
        click.echo(f"Audio filter: {summary['audio_filter']}")
    click.echo(f"Command: {shlex.join(summary['command'])}")


def _collect_raw_options(params: dict[str, Any]) -> dict[str, Any]:
    """Build raw option values from CLI parameters or interactive prompts."""
    if params["input_path"] is None:
        if not _is_interactive():
            raise ValidationError(
                "input",
                None,
                "an input file path (or run in a terminal for interactive mode)",
            )
        raw = prompt_enhance_options()
    else:
        raw = {
            name: params[name]
            for name in (
                "input_path",
                "output_path",
                "speed",
                "brightness",
                "contrast",
                "saturation",
                "sharpen",
                "denoise",
                "scale_height",
            )
        }
    for name in ("crf", "preset", "threads"):
        raw[name] = params[name]
    return raw


def run_enhance(
    raw: dict[str, Any],
    config_path: Path | None = None,
    ffmpeg_path: Path | None = None,
    ffprobe_path: Path | None = None,
    verbose: bool = False,
    dry_run: bool = False,
    json_output: bool = False,
) -> tuple[dict[str, Any], EnhanceResult | None]:
    """Plan and (unless dry_run) run one enhancement.

    Encode parameters are validated before any external process is
    started, including ffprobe.

    Returns:
        Tuple of (plan summary, result). result is None for a dry run.

    Raises:
        VideoEnhancerError: On any validation, probe or process failure.
    """
    config = get_config(
        config_path=config_path, ffmpeg_path=ffmpeg_path, ffprobe_path=ffprobe_path
    )
    for name in ("crf", "preset", "threads"):
        if raw.get(name) is None:
            raw[name] = getattr(config.encoding, name)

    options = parse_enhance_options(raw)
    resolve_encode_parameters(options.crf, options.preset, options.threads)

    if not options.input_path.exists():
        raise InputNotFoundError(f"Input file not found: {options.input_path}")

    tools = resolve_tools(config.tools.ffmpeg, config.tools.ffprobe)
    codec_info = _make_introspector(tools.ffprobe).probe(options.input_path)

    plan = create_encode_plan(
        options.request,
        options.speed,
        codec_info,
        options.container,
        crf=options.crf,
        preset=options.preset,
        threads=options.threads,
    )
    invocation = build_invocation(
        plan, options.input_path, options.output_path, tools.ffmpeg, verbose=verbose
    )
    summary = plan_summary(options, plan, invocation)

    for warning in invocation.warnings:
        click.echo(f"Warning: {warning}", err=True)

    if dry_run:
        return summary, None

    expected = expected_output_duration(codec_info.duration_seconds, options.speed)
    executor = _make_executor(verbose)
    with ProgressDisplay(expected, enabled=not json_output) as display:
        result = executor.execute(invocation, progress_callback=display.update)
    return summary, result


@click.command("enhance")
@click.option(
    "--input",
    "-i",
    "input_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Input video file. Omit to be prompted interactively.",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output file (default: <input>_enhanced_speed<S>.<ext>).",
)
@click.option(
    "--speed",
    "-s",
    type=float,
    default=IDENTITY_SPEED,
    show_default=True,
    help="Playback speed factor; 1.0 keeps the original speed.",
)
@click.option(
    "--brightness",
    type=_CONTROL,
    default=IDENTITY_CONTROL_VALUE,
    show_default=True,
    help="Brightness (0-100, 50 = unchanged).",
)
@click.option(
    "--contrast",
    type=_CONTROL,
    default=IDENTITY_CONTROL_VALUE,
    show_default=True,
    help="Contrast (0-100, 50 = unchanged).",
)
@click.option(
    "--saturation",
    type=_CONTROL,
    default=IDENTITY_CONTROL_VALUE,
    show_default=True,
    help="Saturation (0-100, 50 = unchanged).",
)
@click.option(
    "--sharpen",
    type=_CONTROL,
    default=IDENTITY_CONTROL_VALUE,
    show_default=True,
    help="Sharpening (0-100, 50 and below = none).",
)
@click.option(
    "--denoise",
    type=_CONTROL,
    default=IDENTITY_CONTROL_VALUE,
    show_default=True,
    help="Denoising (0-100, 50 and below = none).",
)
@click.option(
    "--scale",
    "scale_height",
    type=int,
    default=None,
    help="Output height in pixels (even); width follows the aspect ratio.",
)
@click.option(
    "--crf",
    type=int,
    default=None,
    help="Rate control value, 0-51 (default: 17 or config).",
)
@click.option(
    "--preset",
    type=str,
    default=None,
    help=f"Encoder preset: {', '.join(VALID_PRESETS)} (default: slow or config).",
)
@click.option(
    "--threads",
    type=int,
    default=None,
    help="Encoder threads; 0 lets the encoder decide (default: 0 or config).",
)
@click.option(
    "--ffmpeg",
    "ffmpeg_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to ffmpeg (default: PATH lookup).",
)
@click.option(
    "--ffprobe",
    "ffprobe_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to ffprobe (default: PATH lookup).",
)
@click.option("--verbose", "-v", is_flag=True, help="Show ffmpeg's own log output.")
@click.option(
    "--dry-run",
    is_flag=True,
    help="Print the decisions and ffmpeg command without running it.",
)
@click.option("--json", "json_output", is_flag=True, help="Output results as JSON.")
@click.pass_context
def enhance_command(ctx: click.Context, **params: Any) -> None:
    """Adjust color and detail, rescale and change the speed of a video.

    Streams that need no change are copied without re-encoding. With all
    controls at 50 and speed 1.0 the file is remuxed as-is.

    Exit codes:
      0 - Success
      2 - Interrupted
      10 - Invalid option or encode parameter
      11 - Invalid configuration
      20 - Input file not found
      21 - Input could not be probed
      30 - ffmpeg/ffprobe not available
      40 - ffmpeg failed
    """
    obj = ctx.obj or {}
    json_output = params["json_output"]
    verbose = params["verbose"]

    if verbose:
        enable_debug_logging()

    try:
        raw = _collect_raw_options(params)
        summary, result = run_enhance(
            raw,
            config_path=obj.get("config_path"),
            ffmpeg_path=params["ffmpeg_path"],
            ffprobe_path=params["ffprobe_path"],
            verbose=verbose,
            dry_run=params["dry_run"],
            json_output=json_output,
        )
    except (VideoEnhancerError, KeyboardInterrupt) as e:
        logger.debug("enhance failed", exc_info=True)
        _fail(e, json_output)

    if json_output:
        summary["status"] = "planned" if result is None else "done"
        if result is not None:
            summary["elapsed_seconds"] = round(result.elapsed_seconds, 3)
        click.echo(json.dumps(summary, indent=2))
        return

    if result is None:
        _echo_summary(summary)
        return

    click.echo(f"Done: {result.output_path} ({result.elapsed_seconds:.1f}s)")
