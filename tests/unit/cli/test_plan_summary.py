"""Tests for plan_summary in cli/enhance.py."""

from pathlib import Path

from video_enhancer.cli.enhance import plan_summary
from video_enhancer.domain.models import AdjustmentRequest, StreamCodecInfo
from video_enhancer.options import parse_enhance_options
from video_enhancer.planning import build_invocation, create_encode_plan

FFMPEG = Path("/usr/bin/ffmpeg")


class TestPlanSummary:
    """Tests for plan_summary."""

    def test_reports_modes_the_command_uses(
        self, h264_aac_info: StreamCodecInfo, input_video: Path
    ) -> None:
        """A copy planned for mp4 but written as webm is reported as encode."""
        output = input_video.with_suffix(".webm")
        options = parse_enhance_options(
            {"input_path": input_video, "output_path": output}
        )
        plan = create_encode_plan(AdjustmentRequest(), 1.0, h264_aac_info, "mp4")
        invocation = build_invocation(
            plan, options.input_path, options.output_path, FFMPEG
        )

        summary = plan_summary(options, plan, invocation)

        assert plan.is_pure_copy
        assert summary["video"] == {
            "mode": "encode",
            "reasons": ["container_incompatible"],
            "stages": [],
        }
        assert summary["audio"]["mode"] == "encode"
        assert "libvpx-vp9" in summary["command"]
        assert len(summary["warnings"]) == 2

    def test_copy_summary(
        self, h264_aac_info: StreamCodecInfo, input_video: Path
    ) -> None:
        """Copied streams are summarised without reasons or stages."""
        options = parse_enhance_options({"input_path": input_video})
        plan = create_encode_plan(AdjustmentRequest(), 1.0, h264_aac_info, "mp4")
        invocation = build_invocation(
            plan, options.input_path, options.output_path, FFMPEG
        )

        summary = plan_summary(options, plan, invocation)

        assert summary["video"] == {"mode": "copy"}
        assert summary["audio"] == {"mode": "copy"}
        assert summary["command"].count("-map") == 2
