"""Data models for resolved external tools."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ToolStatus(Enum):
    """Status of an external tool."""

    AVAILABLE = "available"  # Tool found and version detected
    MISSING = "missing"  # Tool not found in PATH or configured location
    ERROR = "error"  # Tool found but version detection failed


@dataclass(frozen=True)
class ToolPaths:
    """Resolved ffmpeg and ffprobe binaries."""

    ffmpeg: Path
    ffprobe: Path


@dataclass
class ToolInfo:
    """Detection result for one tool, as shown by `doctor`."""

    name: str
    path: Path | None = None
    version: str | None = None
    version_tuple: tuple[int, ...] | None = None
    status: ToolStatus = ToolStatus.MISSING
    status_message: str | None = None

    def is_available(self) -> bool:
        """Return True if the tool is available and usable."""
        return self.status == ToolStatus.AVAILABLE

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "path": str(self.path) if self.path else None,
            "version": self.version,
            "status": self.status.value,
            "message": self.status_message,
        }
