"""External tool resolution and version detection.

An explicitly configured path (CLI flag, environment or config file) must
point at an existing file; it is never silently replaced by a PATH lookup.
Without one, the tool is looked up on PATH.
"""

import logging
import platform
import re
import shutil
import subprocess  # nosec B404 - subprocess is required for tool detection
from pathlib import Path

from video_enhancer.core.exceptions import ProcessSpawnError
from video_enhancer.tools.models import ToolInfo, ToolPaths, ToolStatus

logger = logging.getLogger(__name__)

# Timeout for version detection commands (seconds)
DETECTION_TIMEOUT = 10

VERSION_PATTERNS = {
    "ffmpeg": r"ffmpeg version (\S+)",
    "ffprobe": r"ffprobe version (\S+)",
}


def parse_version_string(version_str: str) -> tuple[int, ...] | None:
    """Parse a version string into a comparable tuple.

    Handles:
    - "6.1.1" -> (6, 1, 1)
    - "n6.1.1" -> (6, 1, 1)  (ffmpeg nightlies)
    - "7.0-static" -> (7, 0)

    Args:
        version_str: Version string to parse.

    Returns:
        Tuple of version components, or None if parsing fails.
    """
    if not version_str:
        return None

    version_str = version_str.lstrip("nv")
    match = re.match(r"(\d+(?:\.\d+)*)", version_str)
    if not match:
        return None
    return tuple(int(p) for p in match.group(1).split("."))


def _which(name: str) -> Path | None:
    found = shutil.which(name)
    if found is None and platform.system() == "Windows":
        found = shutil.which(f"{name}.exe")
    return Path(found) if found else None


def find_tool(name: str, configured_path: Path | None = None) -> Path:
    """Resolve a tool executable.

    Args:
        name: Tool name ("ffmpeg" or "ffprobe").
        configured_path: Explicit path from CLI, environment or config.

    Returns:
        Path to the executable.

    Raises:
        ProcessSpawnError: If the configured path is not a file, or the tool
            is not on PATH.
    """
    if configured_path is not None:
        path = configured_path.expanduser()
        if path.is_file():
            return path
        raise ProcessSpawnError(name, "configured path is not a file", path)

    path = _which(name)
    if path is None:
        raise ProcessSpawnError(
            name,
            "not found in PATH. Install ffmpeg or set the path with "
            f"--{name}, VIDEO_ENHANCER_{name.upper()}_PATH or the config file",
        )
    logger.debug("Resolved %s to %s", name, path)
    return path


def resolve_tools(
    ffmpeg_path: Path | None = None, ffprobe_path: Path | None = None
) -> ToolPaths:
    """Resolve both ffmpeg and ffprobe.

    Raises:
        ProcessSpawnError: If either tool cannot be resolved.
    """
    return ToolPaths(
        ffmpeg=find_tool("ffmpeg", ffmpeg_path),
        ffprobe=find_tool("ffprobe", ffprobe_path),
    )


def _run_command(
    args: list[str], timeout: int = DETECTION_TIMEOUT
) -> tuple[str, str, int]:
    """Run a command and capture output.

    Returns:
        Tuple of (stdout, stderr, returncode). returncode is -1 if the
        command could not be run.
    """
    try:
        result = subprocess.run(  # nosec B603 - args are tool paths and fixed flags
            args,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
        )
        return result.stdout, result.stderr, result.returncode
    except subprocess.TimeoutExpired:
        logger.warning("Command timed out: %s", " ".join(args))
        return "", "timeout", -1
    except OSError as e:
        logger.warning("Command failed: %s - %s", " ".join(args), e)
        return "", str(e), -1


def detect_tool(name: str, configured_path: Path | None = None) -> ToolInfo:
    """Detect a tool and its version.

    Never raises; failures are reported through ToolInfo.status.
    """
    info = ToolInfo(name=name)
    try:
        path = find_tool(name, configured_path)
    except ProcessSpawnError as e:
        info.path = e.path
        info.status = ToolStatus.MISSING
        info.status_message = str(e)
        return info

    info.path = path
    stdout, stderr, rc = _run_command([str(path), "-version"])
    if rc != 0:
        info.status = ToolStatus.ERROR
        info.status_message = f"Failed to get {name} version: {stderr.strip()}"
        return info

    version_match = re.search(VERSION_PATTERNS[name], stdout)
    if version_match:
        info.version = version_match.group(1)
        info.version_tuple = parse_version_string(info.version)
        if info.version_tuple is None:
            logger.warning(
                "Could not parse %s version '%s' into comparable tuple",
                name,
                info.version,
            )

    info.status = ToolStatus.AVAILABLE
    return info
