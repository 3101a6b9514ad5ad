"""Regression tests for the lazy yt-dlp dependency boundary.

These tests ensure code paths that do not need yt-dlp (help, version,
search, the web app with injected services) still work when yt-dlp is
absent, while the resolver fails cleanly with a typed environment error.
"""

from __future__ import annotations

import sys
from unittest.mock import MagicMock

import pytest

from pages import search_page, video_item
from ytgrab.cli.app import main
from ytgrab.config import Settings
from ytgrab.core.search_service import SearchService
from ytgrab.exceptions import EnvironmentError
from ytgrab.infra.ytdlp_provider import YtDlpInfoProvider
from ytgrab.web import create_app


def _remove_ytdlp(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "yt_dlp", None)
    monkeypatch.setitem(sys.modules, "yt_dlp.utils", None)


def test_help_works_without_ytdlp(monkeypatch: pytest.MonkeyPatch) -> None:
    _remove_ytdlp(monkeypatch)
    with pytest.raises(SystemExit) as exc_info:
        main(["--help"])
    assert exc_info.value.code == 0


def test_version_works_without_ytdlp(monkeypatch: pytest.MonkeyPatch) -> None:
    _remove_ytdlp(monkeypatch)
    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])
    assert exc_info.value.code == 0


def test_search_route_works_without_ytdlp(monkeypatch: pytest.MonkeyPatch) -> None:
    _remove_ytdlp(monkeypatch)
    fetcher = MagicMock()
    fetcher.fetch_text.return_value = search_page([video_item()])
    app = create_app(
        Settings(),
        search_service=SearchService(fetcher),
        download_service=MagicMock(),
    )

    response = app.test_client().get("/api/search?q=lofi")
    assert response.status_code == 200


def test_info_extraction_raises_environment_error_without_ytdlp(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _remove_ytdlp(monkeypatch)
    provider = YtDlpInfoProvider()

    with pytest.raises(EnvironmentError, match="yt-dlp is not installed"):
        provider.fetch_info("https://www.youtube.com/watch?v=dQw4w9WgXcQ")
