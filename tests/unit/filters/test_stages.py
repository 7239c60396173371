"""Unit tests for filters/stages.py."""

import math

import pytest

from video_enhancer.filters.stages import (
    ColorStage,
    DenoiseStage,
    FilterGraphSpec,
    ScaleStage,
    SharpenStage,
    TempoStage,
    TimestampStage,
)


class TestStageSerialization:
    """Each stage renders in ffmpeg filter syntax."""

    def test_denoise(self) -> None:
        """hqdn3d uses the same strength for luma and chroma."""
        assert DenoiseStage(spatial=0.9, temporal=4.5).to_filter() == (
            "hqdn3d=0.900:0.900:4.500:4.500"
        )

    def test_sharpen(self) -> None:
        """unsharp uses a 7x7 luma matrix."""
        assert SharpenStage(amount=0.4).to_filter() == (
            "unsharp=luma_msize_x=7:luma_msize_y=7:luma_amount=0.400"
        )

    def test_color(self) -> None:
        """eq renders all three parameters with six decimals."""
        stage = ColorStage(brightness=0.05, contrast=1.1, saturation=0.9)
        assert stage.to_filter() == (
            "eq=contrast=1.100000:saturation=0.900000:brightness=0.050000"
        )

    def test_color_defaults_are_neutral(self) -> None:
        """Unset color controls keep eq's neutral values."""
        assert ColorStage(brightness=0.05).to_filter() == (
            "eq=contrast=1.000000:saturation=1.000000:brightness=0.050000"
        )

    def test_scale(self) -> None:
        """scale keeps the aspect ratio with an even width."""
        assert ScaleStage(height=720).to_filter() == "scale=-2:720"

    def test_timestamp(self) -> None:
        """setpts divides timestamps by the speed."""
        assert TimestampStage(speed=1.25).to_filter() == "setpts=PTS/1.25"

    def test_timestamp_factor(self) -> None:
        """The timestamp factor is the inverse of the speed."""
        assert TimestampStage(speed=1.25).pts_factor == pytest.approx(0.8)


class TestTempoStage:
    """Tests for the atempo chain."""

    def test_in_range_tempo_is_single_factor(self) -> None:
        """A tempo inside [0.5, 2.0] needs one atempo filter."""
        stage = TempoStage(tempo=1.25)
        assert stage.atempo_factors() == (1.25,)
        assert stage.to_filter() == "atempo=1.250000"

    def test_exact_bounds(self) -> None:
        """Tempos at the bounds render as a single factor."""
        assert TempoStage(tempo=2.0).to_filter() == "atempo=2.0"
        assert TempoStage(tempo=0.5).to_filter() == "atempo=0.5"

    @pytest.mark.parametrize("tempo", [0.1, 0.3, 0.75, 1.5, 3.0, 4.0, 10.0])
    def test_factor_product_equals_tempo(self, tempo: float) -> None:
        """The chain multiplies back to the requested tempo."""
        factors = TempoStage(tempo=tempo).atempo_factors()
        assert math.prod(factors) == pytest.approx(tempo)
        assert all(0.5 <= f <= 2.0 for f in factors)

    def test_large_tempo_is_chained(self) -> None:
        """A 3x tempo is split into 2.0 and 1.5."""
        assert TempoStage(tempo=3.0).to_filter() == "atempo=2.0,atempo=1.500000"

    def test_power_of_two_has_no_unit_remainder(self) -> None:
        """A 4x tempo is exactly two 2.0 factors."""
        assert TempoStage(tempo=4.0).atempo_factors() == (2.0, 2.0)


class TestFilterGraphSpec:
    """Tests for FilterGraphSpec."""

    def test_empty_graph(self) -> None:
        """The default graph has no stages and renders nothing."""
        graph = FilterGraphSpec()
        assert graph.is_empty
        assert graph.video_filter() is None
        assert graph.audio_filter() is None

    def test_renders_in_order(self) -> None:
        """Stages are joined with commas in the given order."""
        graph = FilterGraphSpec(
            video=(
                DenoiseStage(spatial=0.9, temporal=4.5),
                ColorStage(brightness=0.05),
                TimestampStage(speed=2.0),
            ),
            audio=(TempoStage(tempo=2.0),),
        )
        assert graph.video_stage_names == ("denoise", "color", "speed")
        assert graph.video_filter() == (
            "hqdn3d=0.900:0.900:4.500:4.500,"
            "eq=contrast=1.000000:saturation=1.000000:brightness=0.050000,"
            "setpts=PTS/2.0"
        )
        assert graph.audio_filter() == "atempo=2.0"

    def test_rejects_out_of_order_stages(self) -> None:
        """Color before denoise violates the fixed order."""
        with pytest.raises(ValueError, match="out of order"):
            FilterGraphSpec(
                video=(ColorStage(), DenoiseStage(spatial=1.0, temporal=1.0))
            )

    def test_rejects_repeated_stages(self) -> None:
        """A stage kind may appear only once."""
        with pytest.raises(ValueError):
            FilterGraphSpec(video=(SharpenStage(amount=0.1), SharpenStage(amount=0.2)))

    def test_rejects_non_tempo_audio_stage(self) -> None:
        """The audio graph only holds tempo stages."""
        with pytest.raises(ValueError, match="tempo"):
            FilterGraphSpec(audio=(ColorStage(),))  # type: ignore[arg-type]
