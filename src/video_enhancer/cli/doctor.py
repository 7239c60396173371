"""`doctor` command: check that ffmpeg and ffprobe can be found and run."""

import json
from pathlib import Path

import click

from video_enhancer.cli.exit_codes import ExitCode
from video_enhancer.config import get_config
from video_enhancer.core.exceptions import ConfigError
from video_enhancer.tools import ToolInfo, detect_tool


def _format_status(available: bool) -> str:
    """Format status for display."""
    return "✓" if available else "✗"


def _format_version(version: str | None) -> str:
    """Format version for display."""
    return version if version else "unknown version"


@click.command("doctor")
@click.option(
    "--ffmpeg",
    "ffmpeg_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to ffmpeg to check instead of the configured one.",
)
@click.option(
    "--ffprobe",
    "ffprobe_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to ffprobe to check instead of the configured one.",
)
@click.option("--json", "json_output", is_flag=True, help="Output results as JSON")
@click.pass_context
def doctor_command(
    ctx: click.Context,
    ffmpeg_path: Path | None,
    ffprobe_path: Path | None,
    json_output: bool,
) -> None:
    """Check ffmpeg and ffprobe availability and versions.

    Exit codes:
      0 - Both tools available
      11 - Invalid configuration
      30 - A tool is missing or cannot be run
    """
    obj = ctx.obj or {}
    try:
        config = get_config(
            config_path=obj.get("config_path"),
            ffmpeg_path=ffmpeg_path,
            ffprobe_path=ffprobe_path,
        )
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(ExitCode.CONFIG_ERROR) from e

    tools: list[ToolInfo] = [
        detect_tool("ffmpeg", config.tools.ffmpeg),
        detect_tool("ffprobe", config.tools.ffprobe),
    ]
    all_available = all(tool.is_available() for tool in tools)

    if json_output:
        click.echo(
            json.dumps(
                {
                    "config_file": (
                        str(config.config_path) if config.config_path else None
                    ),
                    "tools": [tool.to_dict() for tool in tools],
                },
                indent=2,
            )
        )
    else:
        click.echo("video-enhancer tool check")
        click.echo("=" * 30)
        for tool in tools:
            status = _format_status(tool.is_available())
            if tool.is_available():
                click.echo(
                    f"  {status} {tool.name}: {_format_version(tool.version)} "
                    f"({tool.path})"
                )
            else:
                click.echo(f"  {status} {tool.name}: {tool.status_message}")
        if not all_available:
            click.echo()
            click.echo("Install ffmpeg: https://ffmpeg.org/download.html")

    if not all_available:
        raise SystemExit(ExitCode.TOOL_NOT_AVAILABLE)
