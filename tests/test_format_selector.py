"""Tests for the pure rendition selection pipeline (core/format_selector.py).

Every test is a pure function call — no I/O, no mocking, no side
effects.  These tests exercise:

* Capability filtering per :class:`FormatKind`
* Quality-label parsing
* Ranking (bitrate desc for audio, resolution desc for combined)
* Stable tie-breaking and determinism
* ``NoFormatFoundError`` when nothing matches — never a substitute
"""

from __future__ import annotations

import pytest

from ytgrab.core.format_selector import (
    filter_renditions,
    matches_kind,
    quality_value,
    rank_renditions,
    select,
)
from ytgrab.core.models import FormatKind, MediaRendition
from ytgrab.exceptions import NoFormatFoundError


# ---------------------------------------------------------------------------
# Factory helper
# ---------------------------------------------------------------------------

def _rendition(
    *,
    url: str = "https://rr1.googlevideo.com/videoplayback?id=1",
    has_video: bool = True,
    has_audio: bool = True,
    quality_label: str | None = "720p",
    audio_bitrate: float | None = None,
    container: str = "mp4",
) -> MediaRendition:
    return MediaRendition(
        url=url,
        has_video=has_video,
        has_audio=has_audio,
        quality_label=quality_label,
        audio_bitrate=audio_bitrate,
        container=container,
    )


def _audio(bitrate: float | None, url: str = "https://a/1") -> MediaRendition:
    return _rendition(
        url=url,
        has_video=False,
        has_audio=True,
        quality_label=None,
        audio_bitrate=bitrate,
        container="m4a",
    )


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------

class TestMatchesKind:
    @pytest.mark.parametrize(
        ("has_video", "has_audio", "expected"),
        [(True, True, True), (True, False, False), (False, True, False), (False, False, False)],
    )
    def test_video_and_audio(self, has_video: bool, has_audio: bool, expected: bool) -> None:
        r = _rendition(has_video=has_video, has_audio=has_audio)
        assert matches_kind(r, FormatKind.VIDEO_AND_AUDIO) is expected

    @pytest.mark.parametrize(
        ("has_video", "has_audio", "expected"),
        [(True, True, False), (True, False, False), (False, True, True), (False, False, False)],
    )
    def test_audio_only(self, has_video: bool, has_audio: bool, expected: bool) -> None:
        r = _rendition(has_video=has_video, has_audio=has_audio)
        assert matches_kind(r, FormatKind.AUDIO_ONLY) is expected


class TestFilterRenditions:
    def test_drops_missing_url(self) -> None:
        renditions = [_rendition(url=""), _rendition(url="https://ok")]
        result = filter_renditions(renditions, FormatKind.VIDEO_AND_AUDIO)
        assert [r.url for r in result] == ["https://ok"]

    def test_empty_input(self) -> None:
        assert filter_renditions([], FormatKind.AUDIO_ONLY) == []


# ---------------------------------------------------------------------------
# Quality parsing
# ---------------------------------------------------------------------------

class TestQualityValue:
    @pytest.mark.parametrize(
        ("label", "expected"),
        [
            ("1080p", 1080),
            ("720p60", 720),
            ("2160p60 HDR", 2160),
            ("144p", 144),
            (None, 0),
            ("", 0),
            ("medium", 0),
        ],
    )
    def test_parsing(self, label: str | None, expected: int) -> None:
        assert quality_value(label) == expected


# ---------------------------------------------------------------------------
# Ranking
# ---------------------------------------------------------------------------

class TestRankRenditions:
    def test_video_sorted_by_resolution_desc(self) -> None:
        renditions = [
            _rendition(quality_label="360p"),
            _rendition(quality_label="1080p"),
            _rendition(quality_label="720p"),
        ]
        ranked = rank_renditions(renditions, FormatKind.VIDEO_AND_AUDIO)
        assert [r.quality_label for r in ranked] == ["1080p", "720p", "360p"]

    def test_unlabelled_video_sorts_last(self) -> None:
        renditions = [_rendition(quality_label=None), _rendition(quality_label="240p")]
        ranked = rank_renditions(renditions, FormatKind.VIDEO_AND_AUDIO)
        assert [r.quality_label for r in ranked] == ["240p", None]

    def test_audio_sorted_by_bitrate_desc(self) -> None:
        ranked = rank_renditions([_audio(48), _audio(160), _audio(128)], FormatKind.AUDIO_ONLY)
        assert [r.audio_bitrate for r in ranked] == [160, 128, 48]

    def test_audio_without_bitrate_sorts_last(self) -> None:
        ranked = rank_renditions([_audio(None), _audio(32)], FormatKind.AUDIO_ONLY)
        assert [r.audio_bitrate for r in ranked] == [32, None]


# ---------------------------------------------------------------------------
# select()
# ---------------------------------------------------------------------------

class TestSelect:
    def test_empty_raises(self) -> None:
        with pytest.raises(NoFormatFoundError):
            select([], FormatKind.VIDEO_AND_AUDIO)

    def test_best_combined_ignores_video_only(self) -> None:
        renditions = [
            _rendition(url="https://480", quality_label="480p"),
            _rendition(url="https://1080", quality_label="1080p"),
            _rendition(url="https://720", quality_label="720p", has_audio=False),
        ]
        assert select(renditions, FormatKind.VIDEO_AND_AUDIO).url == "https://1080"

    def test_best_audio(self) -> None:
        renditions = [_audio(128, url="https://128"), _audio(256, url="https://256")]
        assert select(renditions, FormatKind.AUDIO_ONLY).url == "https://256"

    def test_no_combined_does_not_fall_back_to_audio(self) -> None:
        renditions = [_audio(128), _rendition(has_audio=False)]
        with pytest.raises(NoFormatFoundError, match="combined") as exc_info:
            select(renditions, FormatKind.VIDEO_AND_AUDIO)
        assert exc_info.value.hint is not None
        assert "mp3" in exc_info.value.hint

    def test_audio_only_excludes_muxed(self) -> None:
        with pytest.raises(NoFormatFoundError, match="audio"):
            select([_rendition()], FormatKind.AUDIO_ONLY)

    def test_only_urlless_candidates_raises(self) -> None:
        with pytest.raises(NoFormatFoundError):
            select([_rendition(url="")], FormatKind.VIDEO_AND_AUDIO)

    def test_ties_keep_input_order(self) -> None:
        renditions = [
            _rendition(url="https://first", quality_label="720p", container="webm"),
            _rendition(url="https://second", quality_label="720p", container="mp4"),
        ]
        assert select(renditions, FormatKind.VIDEO_AND_AUDIO).url == "https://first"

    def test_deterministic(self) -> None:
        renditions = [_audio(128, url=f"https://{i}") for i in range(5)]
        picks = {select(renditions, FormatKind.AUDIO_ONLY).url for _ in range(10)}
        assert picks == {"https://0"}

    def test_result_has_requested_capabilities(self) -> None:
        renditions = [_audio(300), _rendition(quality_label="360p")]
        picked = select(renditions, FormatKind.VIDEO_AND_AUDIO)
        assert picked.has_video and picked.has_audio
        picked = select(renditions, FormatKind.AUDIO_ONLY)
        assert picked.has_audio and not picked.has_video
