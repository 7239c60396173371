"""Log formatters for video-enhancer.

The planner, introspector, executor and CLI attach structured fields to
their records with extra={...}: the stream and codec a decision was made
for, the container, the ffmpeg command, the output path. JSONFormatter
emits those fields as top-level keys; TextFormatter appends them to the
message as key=value pairs.
"""

from __future__ import annotations

import json
import logging
import shlex
from datetime import datetime, timezone
from typing import Any

# Structured fields logged by this package, in output order
RECORD_FIELDS: tuple[str, ...] = (
    "stream",
    "codec",
    "video_codec",
    "audio_codec",
    "container",
    "video_mode",
    "audio_mode",
    "video_filter",
    "audio_filter",
    "path",
    "output",
    "config_path",
    "elapsed_seconds",
    "command",
)

# Attributes present on every LogRecord, plus those set by Formatter.format()
_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", logging.NOTSET, "", 0, "", None, None))
) | {"message", "asctime"}


def split_fields(record: logging.LogRecord) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split a record's extra attributes into known fields and the rest.

    Returns:
        Tuple of (known fields in RECORD_FIELDS order, other extras).
    """
    extras = {
        key: value
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRS and not key.startswith("_")
    }
    known = {name: extras.pop(name) for name in RECORD_FIELDS if name in extras}
    return known, extras


def _text_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return shlex.join(str(item) for item in value)
    if isinstance(value, float):
        return f"{value:.3f}"
    return shlex.quote(str(value))


class JSONFormatter(logging.Formatter):
    """One JSON object per record.

    Keys: timestamp (ISO-8601 UTC), level, logger, message, then any of
    RECORD_FIELDS the record carries. Other extras go under "extra", and a
    traceback under "exception". The ffmpeg command stays a list.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        known, other = split_fields(record)
        entry.update(known)
        if other:
            entry["extra"] = other
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Plain text with the record's known fields appended.

    "Plan: video=encode audio=copy [video_mode=encode container=mp4]"
    """

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        known, _ = split_fields(record)
        if not known:
            return line
        pairs = " ".join(f"{key}={_text_value(value)}" for key, value in known.items())
        return f"{line} [{pairs}]"
