"""Unit tests for introspector/parsers.py."""

import pytest

from video_enhancer.core.exceptions import ProbeError
from video_enhancer.introspector.parsers import (
    first_codec,
    parse_duration,
    parse_stream_info,
)


class TestParseDuration:
    """Tests for parse_duration."""

    def test_parses_float_string(self) -> None:
        """A numeric string is parsed."""
        assert parse_duration("12.480000") == pytest.approx(12.48)

    @pytest.mark.parametrize("value", [None, "N/A", "", "0", "-3.0", "nan"])
    def test_unusable_values(self, value: str | None) -> None:
        """Missing, unparsable and non-positive values yield None."""
        assert parse_duration(value) is None


class TestFirstCodec:
    """Tests for first_codec."""

    def test_skips_attached_pictures(self) -> None:
        """Cover art is not counted as the video stream."""
        streams = [
            {
                "codec_type": "video",
                "codec_name": "mjpeg",
                "disposition": {"attached_pic": 1},
            },
            {"codec_type": "video", "codec_name": "HEVC"},
        ]
        assert first_codec(streams, "video") == "hevc"

    def test_missing_type(self) -> None:
        """None when no stream of the type exists."""
        assert first_codec([{"codec_type": "video", "codec_name": "h264"}], "audio") is None


class TestParseStreamInfo:
    """Tests for parse_stream_info."""

    def test_h264_aac(self, h264_aac_fixture: dict) -> None:
        """An H.264/AAC file reports both codecs and the format duration."""
        info = parse_stream_info(h264_aac_fixture)
        assert info.video_codec == "h264"
        assert info.audio_codec == "aac"
        assert info.container_format == "mov,mp4,m4a,3gp,3g2,mj2"
        assert info.duration_seconds == pytest.approx(12.01)

    def test_vp9_opus(self, vp9_opus_fixture: dict) -> None:
        """A VP9/Opus file reports both codecs."""
        info = parse_stream_info(vp9_opus_fixture)
        assert info.video_codec == "vp9"
        assert info.audio_codec == "opus"
        assert info.duration_seconds == pytest.approx(8.5)

    def test_video_only_with_cover(self, video_only_fixture: dict) -> None:
        """Cover art is skipped and the stream duration is used."""
        info = parse_stream_info(video_only_fixture)
        assert info.video_codec == "hevc"
        assert info.audio_codec is None
        assert not info.has_audio
        assert info.duration_seconds == pytest.approx(30.5)

    def test_first_audio_stream_wins(self, multi_audio_fixture: dict) -> None:
        """The first audio stream is reported even when a later one is default."""
        info = parse_stream_info(multi_audio_fixture)
        assert info.video_codec == "h264"
        assert info.audio_codec == "aac"

    def test_no_media_streams(self, data_only_fixture: dict) -> None:
        """A file without audio or video is rejected."""
        with pytest.raises(ProbeError, match="No video or audio stream"):
            parse_stream_info(data_only_fixture, "data.bin")

    def test_missing_streams_key(self) -> None:
        """Output without a streams list is rejected."""
        with pytest.raises(ProbeError, match="Missing 'streams'"):
            parse_stream_info({"format": {}}, "broken.mp4")
