"""Infrastructure layer — external system integration.

This layer wraps all interaction with YouTube over HTTP (``requests``)
and with yt-dlp.  Every raw third-party exception must be caught here
and re-raised as a :class:`~ytgrab.exceptions.YtGrabError` subclass.

Rules
-----
* No imports from ``cli`` or ``web``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from ytgrab.infra.http_fetcher import RequestsPageFetcher
from ytgrab.infra.media_streamer import RequestsMediaStream, RequestsMediaStreamer
from ytgrab.infra.ytdlp_provider import YtDlpInfoProvider

__all__: list[str] = [
    "RequestsMediaStream",
    "RequestsMediaStreamer",
    "RequestsPageFetcher",
    "YtDlpInfoProvider",
]
