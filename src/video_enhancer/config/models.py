"""Configuration models for video-enhancer.

Each section is a dataclass validated in __post_init__; invalid values
raise ValueError, which the loader reports as ConfigError.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from video_enhancer.planning.encode_params import (
    DEFAULT_CRF,
    DEFAULT_PRESET,
    DEFAULT_THREADS,
)

VALID_LOG_LEVELS = frozenset({"debug", "info", "warning", "error"})
VALID_LOG_FORMATS = frozenset({"text", "json"})


def _require_int(name: str, value: object) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{name} must be an integer, got {value!r}")


@dataclass(frozen=True)
class ToolPathsConfig:
    """Explicit paths to external tools (None = look up on PATH)."""

    ffmpeg: Path | None = None
    ffprobe: Path | None = None


@dataclass(frozen=True)
class EncodingConfig:
    """Default encode parameters.

    Only types are checked here; ranges are checked when a plan is made so
    that a bad value is reported the same way wherever it came from.
    """

    crf: int = DEFAULT_CRF
    preset: str = DEFAULT_PRESET
    threads: int = DEFAULT_THREADS

    def __post_init__(self) -> None:
        """Validate configuration."""
        _require_int("crf", self.crf)
        _require_int("threads", self.threads)
        if not isinstance(self.preset, str):
            raise ValueError(f"preset must be a string, got {self.preset!r}")


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    # Log level: debug, info, warning, error
    level: str = "warning"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        if (
            not isinstance(self.level, str)
            or self.level.casefold() not in VALID_LOG_LEVELS
        ):
            raise ValueError(
                f"level must be one of {sorted(VALID_LOG_LEVELS)}, got {self.level}"
            )
        if (
            not isinstance(self.format, str)
            or self.format.casefold() not in VALID_LOG_FORMATS
        ):
            raise ValueError(
                f"format must be one of {sorted(VALID_LOG_FORMATS)}, "
                f"got {self.format}"
            )
        if self.max_bytes <= 0:
            raise ValueError(f"max_bytes must be positive, got {self.max_bytes}")
        if self.backup_count < 0:
            raise ValueError(
                f"backup_count must be non-negative, got {self.backup_count}"
            )


@dataclass(frozen=True)
class EnhancerConfig:
    """Merged configuration."""

    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)
    encoding: EncodingConfig = field(default_factory=EncodingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    config_path: Path | None = None
    """Config file that was read, if any."""
