"""Configuration loader with precedence handling.

Configuration is merged with the following precedence (highest to lowest):
1. CLI arguments (passed directly to get_config)
2. Environment variables (VIDEO_ENHANCER_*)
3. Config file (~/.video-enhancer/config.toml)
4. Default values

Environment variables:
- VIDEO_ENHANCER_CONFIG_PATH: Path to config file
- VIDEO_ENHANCER_FFMPEG_PATH: Path to ffmpeg executable
- VIDEO_ENHANCER_FFPROBE_PATH: Path to ffprobe executable
- VIDEO_ENHANCER_CRF, VIDEO_ENHANCER_PRESET, VIDEO_ENHANCER_THREADS:
  Default encode parameters
- VIDEO_ENHANCER_LOG_LEVEL, VIDEO_ENHANCER_LOG_FILE: Logging overrides
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from video_enhancer.config.env import ENV_PREFIX, EnvReader
from video_enhancer.config.models import (
    EncodingConfig,
    EnhancerConfig,
    LoggingConfig,
    ToolPathsConfig,
)
from video_enhancer.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".video-enhancer"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"

_KNOWN_SECTIONS = frozenset({"tools", "encoding", "logging"})


def get_default_config_path(env_reader: EnvReader | None = None) -> Path:
    """Get the config file path, honoring VIDEO_ENHANCER_CONFIG_PATH."""
    reader = env_reader or EnvReader()
    return reader.get_path(f"{ENV_PREFIX}CONFIG_PATH") or DEFAULT_CONFIG_FILE


def load_config_file(path: Path) -> dict[str, Any]:
    """Load configuration from a TOML file.

    Args:
        path: Path to config file.

    Returns:
        Parsed configuration dict. Empty dict if the file doesn't exist.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    if not path.exists():
        logger.debug("No config file at %s", path)
        return {}
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in config file {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    unknown = set(data) - _KNOWN_SECTIONS
    if unknown:
        logger.warning(
            "Ignoring unknown config sections in %s: %s",
            path,
            ", ".join(sorted(unknown)),
        )
    return data


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"Config section [{name}] must be a table")
    return section


def _optional_path(value: Any) -> Path | None:
    if value is None:
        return None
    return Path(str(value)).expanduser()


def _first(*values: Any) -> Any:
    """Return the first value that is not None."""
    for value in values:
        if value is not None:
            return value
    return None


def get_config(
    config_path: Path | None = None,
    # CLI overrides (highest precedence)
    ffmpeg_path: Path | None = None,
    ffprobe_path: Path | None = None,
    # Optional dependency injection for testing
    env_reader: EnvReader | None = None,
) -> EnhancerConfig:
    """Get configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides VIDEO_ENHANCER_CONFIG_PATH).
        ffmpeg_path: CLI override for ffmpeg path.
        ffprobe_path: CLI override for ffprobe path.
        env_reader: Optional EnvReader for testing (uses os.environ if None).

    Returns:
        EnhancerConfig with merged configuration.

    Raises:
        ConfigError: If the config file or a configured value is invalid.
    """
    reader = env_reader or EnvReader()
    path = config_path or get_default_config_path(reader)
    data = load_config_file(path)

    tools_file = _section(data, "tools")
    encoding_file = _section(data, "encoding")
    logging_file = _section(data, "logging")

    try:
        tools = ToolPathsConfig(
            ffmpeg=_first(
                ffmpeg_path,
                reader.get_path(f"{ENV_PREFIX}FFMPEG_PATH"),
                _optional_path(tools_file.get("ffmpeg")),
            ),
            ffprobe=_first(
                ffprobe_path,
                reader.get_path(f"{ENV_PREFIX}FFPROBE_PATH"),
                _optional_path(tools_file.get("ffprobe")),
            ),
        )
        defaults = EncodingConfig()
        encoding = EncodingConfig(
            crf=_first(
                reader.get_int(f"{ENV_PREFIX}CRF"),
                encoding_file.get("crf"),
                defaults.crf,
            ),
            preset=_first(
                reader.get_str(f"{ENV_PREFIX}PRESET"),
                encoding_file.get("preset"),
                defaults.preset,
            ),
            threads=_first(
                reader.get_int(f"{ENV_PREFIX}THREADS"),
                encoding_file.get("threads"),
                defaults.threads,
            ),
        )
        log_defaults = LoggingConfig()
        logging_config = LoggingConfig(
            level=_first(
                reader.get_str(f"{ENV_PREFIX}LOG_LEVEL"),
                logging_file.get("level"),
                log_defaults.level,
            ),
            file=_first(
                reader.get_path(f"{ENV_PREFIX}LOG_FILE"),
                _optional_path(logging_file.get("file")),
            ),
            format=_first(logging_file.get("format"), log_defaults.format),
            include_stderr=bool(
                _first(logging_file.get("include_stderr"), log_defaults.include_stderr)
            ),
            max_bytes=_first(logging_file.get("max_bytes"), log_defaults.max_bytes),
            backup_count=_first(
                logging_file.get("backup_count"), log_defaults.backup_count
            ),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    return EnhancerConfig(
        tools=tools,
        encoding=encoding,
        logging=logging_config,
        config_path=path if data else None,
    )
