"""CLI module for video-enhancer."""

import logging
import sys
from dataclasses import replace
from pathlib import Path

import click

from video_enhancer.cli.exit_codes import ExitCode
from video_enhancer.config import get_config
from video_enhancer.core.exceptions import ConfigError
from video_enhancer.logging import configure_logging

logger = logging.getLogger(__name__)


def _configure_logging(
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Configure logging from the config file, environment and CLI options.

    Raises:
        ConfigError: If the configuration is invalid.
    """
    config = get_config(config_path=config_path)
    overrides = {
        "level": log_level,
        "file": log_file,
        "format": "json" if log_json else None,
    }
    try:
        logging_config = replace(
            config.logging,
            **{key: value for key, value in overrides.items() if value is not None},
        )
    except ValueError as e:
        raise ConfigError(str(e)) from e
    configure_logging(logging_config)
    logger.debug(
        "Configuration loaded from %s",
        config.config_path or "defaults",
        extra={"config_path": str(config.config_path or "")},
    )


@click.group()
@click.version_option(package_name="video-enhancer")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: ~/.video-enhancer/config.toml).",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: warning).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """video-enhancer - color, detail and speed adjustments driven by ffmpeg."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path

    try:
        _configure_logging(config_path, log_level, log_file, log_json)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.CONFIG_ERROR)


def _register_commands() -> None:
    from video_enhancer.cli.doctor import doctor_command
    from video_enhancer.cli.enhance import enhance_command

    main.add_command(enhance_command)
    main.add_command(doctor_command)


_register_commands()
