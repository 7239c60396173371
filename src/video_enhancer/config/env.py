"""Environment variable reader with dependency injection support."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

ENV_PREFIX = "VIDEO_ENHANCER_"


class EnvReader:
    """Environment variable reader with type conversion.

    Accepts an optional env mapping so tests can inject variables without
    touching os.environ:

        reader = EnvReader(env={"VIDEO_ENHANCER_CRF": "20"})
        reader.get_int("VIDEO_ENHANCER_CRF")  # 20
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        """Initialize the environment reader.

        Args:
            env: Optional mapping to use instead of os.environ.
        """
        self._env: Mapping[str, str] = env if env is not None else os.environ

    def get_str(self, var: str, default: str | None = None) -> str | None:
        """Get a string, treating an empty value as unset."""
        value = self._env.get(var)
        if value is None or value == "":
            return default
        return value

    def get_int(self, var: str, default: int | None = None) -> int | None:
        """Get an integer.

        Returns default if the variable is unset or not an integer; the
        latter is logged as a warning.
        """
        value = self.get_str(var)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid integer value for %s: %s", var, value)
            return default

    def get_bool(self, var: str, default: bool | None = None) -> bool | None:
        """Get a boolean ("true", "1", "yes", "on" are true)."""
        value = self.get_str(var)
        if value is None:
            return default
        return value.casefold() in ("true", "1", "yes", "on")

    def get_path(self, var: str, default: Path | None = None) -> Path | None:
        """Get a path with ~ expanded.

        The path is not checked for existence here; tool resolution reports
        a missing file with the path that was tried.
        """
        value = self.get_str(var)
        if value is None:
            return default
        return Path(value).expanduser()
