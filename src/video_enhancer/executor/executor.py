"""Runs a planned ffmpeg invocation.

EnhanceExecutor starts ffmpeg on a temp sibling of the output, reads its
stderr on a background thread, reports progress, and moves the temp file
into place only when ffmpeg exits cleanly. On any failure or interrupt the
process is stopped and the temp file removed.
"""

import logging
import queue
import subprocess  # nosec B404 - subprocess is required for FFmpeg invocation
import threading
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from video_enhancer.core.exceptions import ProcessExecutionError, ProcessSpawnError
from video_enhancer.executor import ffmpeg_utils
from video_enhancer.planning.types import InvocationPlan
from video_enhancer.tools.ffmpeg_progress import FFmpegProgress, parse_stderr_progress

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[FFmpegProgress], None]


@dataclass
class EnhanceResult:
    """Result of a successful ffmpeg run."""

    output_path: Path
    elapsed_seconds: float
    last_progress: FFmpegProgress | None = None
    warnings: list[str] = field(default_factory=list)


class EnhanceExecutor:
    """Executes InvocationPlans with ffmpeg."""

    STDERR_DRAIN_TIMEOUT: float = 5.0  # Timeout for draining stderr after exit
    STDERR_TAIL_LINES: int = 20  # Lines of stderr kept for error messages
    TERMINATE_GRACE: float = 5.0  # Seconds to wait after terminate() before kill()

    def __init__(self, timeout: float | None = None, log_stderr: bool = False):
        """Initialize the executor.

        Args:
            timeout: Maximum run time in seconds. None means no limit.
            log_stderr: Log ffmpeg's non-progress stderr lines at debug level.
        """
        self._timeout = timeout
        self._log_stderr = log_stderr

    def execute(
        self,
        invocation: InvocationPlan,
        progress_callback: ProgressCallback | None = None,
    ) -> EnhanceResult:
        """Run ffmpeg for an invocation plan.

        Args:
            invocation: Planned ffmpeg invocation.
            progress_callback: Called with each parsed progress line.

        Returns:
            EnhanceResult for the finished output.

        Raises:
            ProcessSpawnError: If ffmpeg cannot be started.
            ProcessExecutionError: If ffmpeg fails, times out, or produces
                no output.
        """
        output_path = invocation.output_path
        temp_output = ffmpeg_utils.create_temp_output(output_path)
        cmd = invocation.to_command(temp_output)

        logger.info(
            "Running ffmpeg: %s -> %s",
            invocation.input_path,
            output_path,
            extra={"command": cmd, "output": str(output_path)},
        )
        start = time.monotonic()

        try:
            returncode, stderr_tail, last_progress = self._run_ffmpeg(
                cmd, progress_callback
            )
            if returncode != 0:
                raise ProcessExecutionError(returncode, "\n".join(stderr_tail))

            is_valid, error = ffmpeg_utils.validate_output(temp_output)
            if not is_valid:
                raise ProcessExecutionError(0, error or "no output produced")

            ffmpeg_utils.move_into_place(temp_output, output_path)
        except BaseException:
            # Includes KeyboardInterrupt; partial output must not survive
            ffmpeg_utils.cleanup_temp_file(temp_output)
            raise

        elapsed = time.monotonic() - start
        logger.info(
            "Finished %s in %.1fs",
            output_path,
            elapsed,
            extra={"output": str(output_path), "elapsed_seconds": round(elapsed, 3)},
        )
        return EnhanceResult(
            output_path=output_path,
            elapsed_seconds=elapsed,
            last_progress=last_progress,
            warnings=list(invocation.warnings),
        )

    def _spawn(self, cmd: list[str]) -> subprocess.Popen:
        try:
            return subprocess.Popen(  # nosec B603 - argv list, no shell
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
            )
        except OSError as e:
            raise ProcessSpawnError("ffmpeg", str(e), Path(cmd[0])) from e

    def _stop(self, process: subprocess.Popen) -> None:
        """Terminate a running process, killing it if it does not exit."""
        if process.poll() is not None:
            return
        process.terminate()
        try:
            process.wait(timeout=self.TERMINATE_GRACE)
        except subprocess.TimeoutExpired:
            process.kill()
            process.wait()

    def _run_ffmpeg(
        self,
        cmd: list[str],
        progress_callback: ProgressCallback | None,
    ) -> tuple[int, list[str], FFmpegProgress | None]:
        """Run ffmpeg with threaded stderr reading.

        Returns:
            Tuple of (return_code, stderr_tail, last_progress).

        Raises:
            ProcessSpawnError: If ffmpeg cannot be started.
            ProcessExecutionError: If the timeout expires.
        """
        process = self._spawn(cmd)

        stderr_tail: deque[str] = deque(maxlen=self.STDERR_TAIL_LINES)
        stderr_queue: queue.Queue[str | None] = queue.Queue()
        last_progress: FFmpegProgress | None = None

        def read_stderr() -> None:
            """Read stderr lines and put them in the queue."""
            try:
                assert process.stderr is not None
                for line in process.stderr:
                    stderr_queue.put(line)
            except (ValueError, OSError) as e:
                # Pipe closed or process terminated
                logger.debug("Stderr reader stopped: %s", e)
            finally:
                stderr_queue.put(None)  # Signal end of output

        reader_thread = threading.Thread(target=read_stderr, daemon=True)
        reader_thread.start()
        start_time = time.monotonic()

        def handle(line: str) -> None:
            nonlocal last_progress
            progress = parse_stderr_progress(line)
            if progress is None:
                text = line.rstrip()
                if text:
                    stderr_tail.append(text)
                    if self._log_stderr:
                        logger.debug("ffmpeg: %s", text)
                return
            last_progress = progress
            if progress_callback:
                progress_callback(progress)

        try:
            while True:
                if (
                    self._timeout is not None
                    and time.monotonic() - start_time >= self._timeout
                ):
                    logger.warning("ffmpeg timed out after %s seconds", self._timeout)
                    self._stop(process)
                    raise ProcessExecutionError(
                        -1, f"timed out after {self._timeout} seconds"
                    )
                try:
                    line = stderr_queue.get(timeout=0.5)
                except queue.Empty:
                    if process.poll() is not None and not reader_thread.is_alive():
                        break
                    continue
                if line is None:
                    break
                handle(line)
        except BaseException:
            self._stop(process)
            raise

        reader_thread.join(timeout=self.STDERR_DRAIN_TIMEOUT)
        while True:
            try:
                line = stderr_queue.get_nowait()
            except queue.Empty:
                break
            if line is None:
                break
            handle(line)

        process.wait()
        return process.returncode, list(stderr_tail), last_progress
