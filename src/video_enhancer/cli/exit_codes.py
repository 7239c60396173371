"""Exit codes for the video-enhancer CLI.

Exit code ranges:
    0: Success
    1-9: General errors
    10-19: Validation errors (options, encode parameters, config)
    20-29: Input file errors
    30-39: Tool/dependency errors
    40-49: Operation errors
"""

from enum import IntEnum

from video_enhancer.core.exceptions import (
    ConfigError,
    InputNotFoundError,
    InvalidEncodeParameter,
    ProbeError,
    ProcessExecutionError,
    ProcessSpawnError,
    ValidationError,
)


class ExitCode(IntEnum):
    """Exit codes for video-enhancer CLI commands."""

    # Success (0)
    SUCCESS = 0

    # General errors (1-9)
    GENERAL_ERROR = 1
    INTERRUPTED = 2  # Ctrl+C / SIGINT

    # Validation errors (10-19)
    VALIDATION_ERROR = 10
    CONFIG_ERROR = 11

    # Input file errors (20-29)
    INPUT_NOT_FOUND = 20
    PROBE_ERROR = 21

    # Tool/dependency errors (30-39)
    TOOL_NOT_AVAILABLE = 30

    # Operation errors (40-49)
    OPERATION_FAILED = 40


_ERROR_EXIT_CODES: tuple[tuple[type[Exception], ExitCode], ...] = (
    (ValidationError, ExitCode.VALIDATION_ERROR),
    (InvalidEncodeParameter, ExitCode.VALIDATION_ERROR),
    (ConfigError, ExitCode.CONFIG_ERROR),
    (InputNotFoundError, ExitCode.INPUT_NOT_FOUND),
    (ProbeError, ExitCode.PROBE_ERROR),
    (ProcessSpawnError, ExitCode.TOOL_NOT_AVAILABLE),
    (ProcessExecutionError, ExitCode.OPERATION_FAILED),
)


def exit_code_for(error: BaseException) -> ExitCode:
    """Map an exception to the exit code the CLI reports for it."""
    if isinstance(error, KeyboardInterrupt):
        return ExitCode.INTERRUPTED
    for error_type, code in _ERROR_EXIT_CODES:
        if isinstance(error, error_type):
            return code
    return ExitCode.GENERAL_ERROR
