"""FFmpeg stderr progress parsing.

With `-stats`, ffmpeg writes a status line roughly once per second:

    frame= 1234 fps= 30 q=28.0 size= 2048kB time=00:01:23.45 bitrate=... speed=2.0x

Audio-only outputs start the line with "size=" instead of "frame=".
"""

import re
from dataclasses import dataclass


@dataclass
class FFmpegProgress:
    """Parsed FFmpeg progress line."""

    frame: int | None = None
    fps: float | None = None
    bitrate: str | None = None
    out_time_us: int | None = None  # Output time in microseconds
    speed: str | None = None

    @property
    def out_time_seconds(self) -> float | None:
        """Get output time in seconds."""
        if self.out_time_us is not None:
            return self.out_time_us / 1_000_000
        return None

    def get_percent(self, duration_seconds: float | None) -> float:
        """Calculate progress percentage based on duration.

        Args:
            duration_seconds: Expected output duration in seconds.

        Returns:
            Progress percentage (0.0 to 100.0), or 0.0 if unknown.
        """
        if duration_seconds is None or duration_seconds <= 0:
            return 0.0
        out_time = self.out_time_seconds
        if out_time is None:
            return 0.0
        return min(100.0, (out_time / duration_seconds) * 100)


PROGRESS_PATTERNS = {
    "frame": re.compile(r"frame=\s*(\d+)"),
    "fps": re.compile(r"fps=\s*([\d.]+)"),
    "bitrate": re.compile(r"bitrate=\s*([^\s]+)"),
    "speed": re.compile(r"speed=\s*([^\s]+)"),
}

TIME_PATTERN = re.compile(r"time=\s*(-?)(\d+):(\d+):(\d+)(?:\.(\d+))?")


def _convert_progress_value(key: str, value: str) -> int | float | str | None:
    if key == "frame":
        try:
            return int(value)
        except ValueError:
            return None
    if key == "fps":
        try:
            return float(value)
        except ValueError:
            return None
    return value if value != "N/A" else None


def parse_time_us(line: str) -> int | None:
    """Extract time=HH:MM:SS.cc from a line as microseconds.

    Negative times (reported before the first packet) count as zero.
    """
    match = TIME_PATTERN.search(line)
    if not match:
        return None
    negative, hours, minutes, seconds, fraction = match.groups()
    if negative:
        return 0
    micros = 0
    if fraction:
        # Right-pad so ".45" is 450000us and ".456789" is 456789us
        micros = int(fraction[:6].ljust(6, "0"))
    return (int(hours) * 3600 + int(minutes) * 60 + int(seconds)) * 1_000_000 + micros


def parse_stderr_progress(line: str) -> FFmpegProgress | None:
    """Parse an FFmpeg stderr progress line.

    Args:
        line: A line from FFmpeg stderr.

    Returns:
        Parsed FFmpegProgress or None if not a progress line.
    """
    stripped = line.strip()
    if not (stripped.startswith("frame=") or stripped.startswith("size=")):
        return None
    if "time=" not in stripped:
        return None

    result = FFmpegProgress()
    for key, pattern in PROGRESS_PATTERNS.items():
        match = pattern.search(stripped)
        if match:
            converted = _convert_progress_value(key, match.group(1))
            if converted is not None:
                setattr(result, key, converted)

    result.out_time_us = parse_time_us(stripped)
    return result
