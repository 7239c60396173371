"""Progress display for a running ffmpeg invocation."""

from __future__ import annotations

import click

from video_enhancer.tools.ffmpeg_progress import FFmpegProgress

# (upper bound in percent, label); the last entry covers the rest
STAGE_LABELS: tuple[tuple[float, str], ...] = (
    (10.0, "Preparing filters"),
    (65.0, "Encoding video"),
    (95.0, "Adjusting/encoding audio"),
)
FINAL_STAGE_LABEL = "Finalizing and muxing"


def stage_label(percent: float) -> str:
    """Return the stage label shown for a progress percentage."""
    for upper, label in STAGE_LABELS:
        if percent < upper:
            return label
    return FINAL_STAGE_LABEL


class ProgressDisplay:
    """click progress bar driven by ffmpeg progress lines.

    Usage:
        with ProgressDisplay(expected_duration) as display:
            executor.execute(invocation, progress_callback=display.update)
    """

    def __init__(self, expected_duration: float | None, enabled: bool = True):
        self._duration = expected_duration
        self._enabled = enabled
        self._bar = None
        self._shown = 0

    def __enter__(self) -> ProgressDisplay:
        if self._enabled:
            self._bar = click.progressbar(
                length=100,
                label=stage_label(0.0),
                show_percent=True,
                show_eta=self._duration is not None,
                file=click.get_text_stream("stderr"),
            )
            self._bar.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._bar is not None:
            if exc_type is None:
                self._advance(100)
                self._bar.label = FINAL_STAGE_LABEL
            self._bar.__exit__(exc_type, exc, tb)
            self._bar = None

    @property
    def percent(self) -> int:
        """Percentage shown so far."""
        return self._shown

    def _advance(self, target: int) -> None:
        if target > self._shown:
            if self._bar is not None:
                self._bar.update(target - self._shown)
            self._shown = target

    def update(self, progress: FFmpegProgress) -> None:
        """Advance the bar to the progress reported by ffmpeg."""
        percent = progress.get_percent(self._duration)
        if self._bar is not None:
            self._bar.label = stage_label(percent)
        self._advance(int(percent))
