"""Temp file management and output validation for the ffmpeg executor."""

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)

TEMP_PREFIX = ".ve_temp_"


def create_temp_output(
    output_path: Path,
    temp_dir: Path | None = None,
    prefix: str = TEMP_PREFIX,
) -> Path:
    """Generate a temp output path for the write-then-move pattern.

    The temp file keeps the output's extension so ffmpeg picks the same
    muxer for it.

    Args:
        output_path: Final output path.
        temp_dir: Directory for temp files (None = same as output).
        prefix: Prefix for temp file name.

    Returns:
        Path for temporary output file.
    """
    if temp_dir:
        return temp_dir / f"{prefix}{output_path.name}"
    return output_path.with_name(f"{prefix}{output_path.name}")


def validate_output(output_path: Path) -> tuple[bool, str | None]:
    """Check that ffmpeg produced a non-empty output file.

    Returns:
        Tuple of (is_valid, error_message). error_message is None if valid.
    """
    if not output_path.exists():
        return False, f"Output file does not exist: {output_path}"

    try:
        output_size = output_path.stat().st_size
    except OSError as e:
        return False, f"Could not stat output file: {e}"

    if output_size == 0:
        return False, f"Output file is empty: {output_path}"

    return True, None


def move_into_place(temp_path: Path, output_path: Path) -> None:
    """Move a finished temp file to its final path, replacing any old file."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    shutil.move(str(temp_path), str(output_path))
    logger.debug("Moved %s to %s", temp_path, output_path)


def cleanup_temp_file(path: Path) -> None:
    """Remove a temporary file, logging any errors.

    Args:
        path: Path to temp file to remove.
    """
    if path.exists():
        try:
            path.unlink()
            logger.debug("Cleaned up temp file: %s", path)
        except OSError as e:
            logger.warning("Could not clean up temp file %s: %s", path, e)
