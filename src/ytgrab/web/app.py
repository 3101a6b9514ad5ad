"""Flask application factory.

Wires infrastructure adapters into the core services and attaches them
to the application.  Tests pass their own services to avoid any network
access.
"""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from ytgrab.config import Settings
from ytgrab.core.download_service import DownloadService
from ytgrab.core.search_service import SearchService
from ytgrab.web.errors import register_error_handlers
from ytgrab.web.routes import DOWNLOAD_SERVICE_KEY, SEARCH_SERVICE_KEY, api


def build_services(settings: Settings) -> tuple[SearchService, DownloadService]:
    """Create the production services backed by requests and yt-dlp."""
    from ytgrab.infra.http_fetcher import RequestsPageFetcher
    from ytgrab.infra.media_streamer import RequestsMediaStreamer
    from ytgrab.infra.ytdlp_provider import YtDlpInfoProvider

    fetcher = RequestsPageFetcher(
        timeout=settings.request_timeout,
        user_agent=settings.user_agent,
        accept_language=settings.accept_language,
    )
    streamer = RequestsMediaStreamer(
        timeout=settings.request_timeout,
        user_agent=settings.user_agent,
    )
    provider = YtDlpInfoProvider(user_agent=settings.user_agent)
    return SearchService(fetcher), DownloadService(provider, streamer)


def create_app(
    settings: Settings | None = None,
    *,
    search_service: SearchService | None = None,
    download_service: DownloadService | None = None,
) -> Flask:
    """Build the Flask application.

    Parameters
    ----------
    settings:
        Runtime configuration; defaults to :meth:`Settings.from_env`.
    search_service, download_service:
        Pre-built services.  Any left as ``None`` is built from *settings*.
    """
    settings = settings if settings is not None else Settings.from_env()

    if search_service is None or download_service is None:
        default_search, default_download = build_services(settings)
        if search_service is None:
            search_service = default_search
        if download_service is None:
            download_service = default_download

    app = Flask(__name__)
    app.config["YTGRAB_PUBLIC_URL"] = settings.public_url
    app.json.sort_keys = False
    app.extensions[SEARCH_SERVICE_KEY] = search_service
    app.extensions[DOWNLOAD_SERVICE_KEY] = download_service

    CORS(app)
    app.register_blueprint(api)
    register_error_handlers(app)
    return app
