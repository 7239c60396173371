"""Configuration module for video-enhancer."""

from video_enhancer.config.env import ENV_PREFIX, EnvReader
from video_enhancer.config.loader import (
    DEFAULT_CONFIG_FILE,
    get_config,
    get_default_config_path,
    load_config_file,
)
from video_enhancer.config.models import (
    EncodingConfig,
    EnhancerConfig,
    LoggingConfig,
    ToolPathsConfig,
)

__all__ = [
    "DEFAULT_CONFIG_FILE",
    "ENV_PREFIX",
    "EncodingConfig",
    "EnhancerConfig",
    "EnvReader",
    "LoggingConfig",
    "ToolPathsConfig",
    "get_config",
    "get_default_config_path",
    "load_config_file",
]
