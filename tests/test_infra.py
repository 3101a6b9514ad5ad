"""Tests for the infrastructure adapters (infra/).

``requests`` sessions and ``yt_dlp`` are mocked at the boundary — no
internet access.  These tests verify header/timeout wiring and that raw
third-party exceptions never escape untranslated.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest
import requests
import yt_dlp
from yt_dlp.utils import DownloadError

from ytgrab.exceptions import (
    FetchError,
    ResolverError,
    VideoUnavailableError,
)
from ytgrab.infra.http_fetcher import RequestsPageFetcher
from ytgrab.infra.media_streamer import RequestsMediaStream, RequestsMediaStreamer
from ytgrab.infra.ytdlp_provider import YtDlpInfoProvider


def _session(response: Any = None, error: Exception | None = None) -> MagicMock:
    session = MagicMock()
    session.headers = {}
    if error is not None:
        session.get.side_effect = error
    else:
        session.get.return_value = response
    return session


def _response(status: int = 200, text: str = "", chunks: list[bytes] | None = None) -> MagicMock:
    response = MagicMock()
    response.status_code = status
    response.ok = status < 400
    response.text = text
    response.headers = {"Content-Type": "video/mp4"}
    response.iter_content.return_value = iter(chunks or [])
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status} Client Error", response=response,
        )
    return response


# ---------------------------------------------------------------------------
# RequestsPageFetcher
# ---------------------------------------------------------------------------

class TestRequestsPageFetcher:
    def test_sets_browser_headers(self) -> None:
        session = _session(_response(text="ok"))
        RequestsPageFetcher(user_agent="UA/1.0", accept_language="de", session=session)
        assert session.headers["User-Agent"] == "UA/1.0"
        assert session.headers["Accept-Language"] == "de"

    def test_returns_body_and_passes_params(self) -> None:
        session = _session(_response(text="<html>"))
        fetcher = RequestsPageFetcher(timeout=3.5, session=session)
        body = fetcher.fetch_text("https://www.youtube.com/results", {"search_query": "a b"})
        assert body == "<html>"
        session.get.assert_called_once_with(
            "https://www.youtube.com/results",
            params={"search_query": "a b"},
            timeout=3.5,
        )

    def test_http_error_mapped(self) -> None:
        fetcher = RequestsPageFetcher(session=_session(_response(status=429)))
        with pytest.raises(FetchError, match="Status code: 429"):
            fetcher.fetch_text("https://www.youtube.com/results")

    def test_connection_error_mapped(self) -> None:
        session = _session(error=requests.ConnectionError("refused"))
        fetcher = RequestsPageFetcher(session=session)
        with pytest.raises(FetchError, match="refused") as exc_info:
            fetcher.fetch_text("https://www.youtube.com/results")
        assert exc_info.value.hint is not None

    def test_timeout_mapped(self) -> None:
        session = _session(error=requests.Timeout("slow"))
        with pytest.raises(FetchError):
            RequestsPageFetcher(session=session).fetch_text("https://www.youtube.com")


# ---------------------------------------------------------------------------
# RequestsMediaStreamer
# ---------------------------------------------------------------------------

class TestRequestsMediaStreamer:
    def test_streams_chunks_and_closes(self) -> None:
        response = _response(chunks=[b"ab", b"", b"cd"])
        streamer = RequestsMediaStreamer(timeout=7, session=_session(response))
        stream = streamer.open_stream("https://media")

        assert stream.content_type == "video/mp4"
        assert list(stream.iter_chunks()) == [b"ab", b"cd"]
        response.close.assert_called()

    def test_opens_with_stream_flag(self) -> None:
        session = _session(_response())
        RequestsMediaStreamer(timeout=7, session=session).open_stream("https://media")
        session.get.assert_called_once_with("https://media", stream=True, timeout=7)

    def test_error_status_closes_and_raises(self) -> None:
        response = _response(status=403)
        streamer = RequestsMediaStreamer(session=_session(response))
        with pytest.raises(FetchError, match="403"):
            streamer.open_stream("https://media")
        response.close.assert_called_once()

    def test_connection_error_mapped(self) -> None:
        streamer = RequestsMediaStreamer(session=_session(error=requests.ConnectionError("x")))
        with pytest.raises(FetchError):
            streamer.open_stream("https://media")

    def test_interrupted_stream_mapped(self) -> None:
        response = _response()
        response.iter_content.side_effect = requests.exceptions.ChunkedEncodingError("cut")
        stream = RequestsMediaStream(response)
        with pytest.raises(FetchError, match="interrupted"):
            list(stream.iter_chunks())
        response.close.assert_called()


# ---------------------------------------------------------------------------
# YtDlpInfoProvider
# ---------------------------------------------------------------------------

def _patch_youtube_dl(
    monkeypatch: pytest.MonkeyPatch,
    *,
    info: Any = None,
    error: Exception | None = None,
) -> MagicMock:
    ydl = MagicMock()
    ydl.__enter__.return_value = ydl
    ydl.__exit__.return_value = False
    if error is not None:
        ydl.extract_info.side_effect = error
    else:
        ydl.extract_info.return_value = info

    factory = MagicMock(return_value=ydl)
    monkeypatch.setattr(yt_dlp, "YoutubeDL", factory)
    return factory


class TestYtDlpInfoProvider:
    def test_returns_info(self, monkeypatch: pytest.MonkeyPatch) -> None:
        info = {"id": "abc", "title": "t", "formats": []}
        factory = _patch_youtube_dl(monkeypatch, info=info)
        result = YtDlpInfoProvider().fetch_info("https://www.youtube.com/watch?v=abc")

        assert result == info
        assert result is not info
        opts = factory.call_args.args[0]
        assert opts["skip_download"] is True
        assert opts["quiet"] is True
        assert opts["extractor_args"] == {"youtube": {"skip": ["hls", "dash"]}}
        assert "http_headers" not in opts

    def test_user_agent_forwarded(self, monkeypatch: pytest.MonkeyPatch) -> None:
        factory = _patch_youtube_dl(monkeypatch, info={"id": "abc", "formats": []})
        YtDlpInfoProvider(user_agent="UA/3").fetch_info("https://www.youtube.com/watch?v=abc")
        assert factory.call_args.args[0]["http_headers"] == {"User-Agent": "UA/3"}

    def test_manifest_formats_dropped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        formats = [
            {"format_id": "18", "protocol": "https", "url": "https://rr1/18"},
            {"format_id": "96", "protocol": "m3u8_native", "url": "https://m/96.m3u8"},
            {"format_id": "sb0", "protocol": "mhtml", "url": "https://sb/0"},
            {"format_id": "137", "protocol": "http_dash_segments", "url": "https://d"},
        ]
        _patch_youtube_dl(monkeypatch, info={"id": "abc", "formats": formats})
        result = YtDlpInfoProvider().fetch_info("https://www.youtube.com/watch?v=abc")

        assert [f["format_id"] for f in result["formats"]] == ["18"]
        assert len(formats) == 4

    @pytest.mark.parametrize(
        "message",
        ["ERROR: Private video", "Video unavailable", "This video has been removed"],
    )
    def test_unavailable_mapped(self, monkeypatch: pytest.MonkeyPatch, message: str) -> None:
        _patch_youtube_dl(monkeypatch, error=DownloadError(message))
        with pytest.raises(VideoUnavailableError):
            YtDlpInfoProvider().fetch_info("https://www.youtube.com/watch?v=abc")

    def test_other_download_error_mapped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _patch_youtube_dl(monkeypatch, error=DownloadError("HTTP Error 403"))
        with pytest.raises(ResolverError, match="403"):
            YtDlpInfoProvider().fetch_info("https://www.youtube.com/watch?v=abc")

    def test_unexpected_error_mapped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _patch_youtube_dl(monkeypatch, error=KeyError("formats"))
        with pytest.raises(ResolverError, match="Unexpected yt-dlp error"):
            YtDlpInfoProvider().fetch_info("https://www.youtube.com/watch?v=abc")

    @pytest.mark.parametrize("info", [None, ["not", "a", "dict"]])
    def test_bad_info_mapped(self, monkeypatch: pytest.MonkeyPatch, info: Any) -> None:
        _patch_youtube_dl(monkeypatch, info=info)
        with pytest.raises(ResolverError):
            YtDlpInfoProvider().fetch_info("https://www.youtube.com/watch?v=abc")
