"""Core search service — fetches pages and runs the extractors.

Depends on a :class:`~ytgrab.core.protocols.PageFetcher` injected at
construction time (dependency inversion), keeping the core free of any
HTTP client imports.

Guarantees
----------
* Pure orchestration — no direct I/O, no ``print()``.
* Only :class:`~ytgrab.exceptions.YtGrabError` subclasses escape.
"""

from __future__ import annotations

from collections.abc import Mapping

from ytgrab.core.models import SearchResponse, VideoDetails, watch_url
from ytgrab.core.protocols import PageFetcher
from ytgrab.core.search_extractor import extract
from ytgrab.core.video_details import extract_video_details
from ytgrab.exceptions import FetchError, MissingParameterError, YtGrabError

SEARCH_URL: str = "https://www.youtube.com/results"


class SearchService:
    """Stateless service behind the search and video-details endpoints.

    Parameters
    ----------
    fetcher:
        Any object satisfying the :class:`PageFetcher` protocol.
    """

    def __init__(self, fetcher: PageFetcher) -> None:
        self._fetcher: PageFetcher = fetcher

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def search(self, query: str | None) -> SearchResponse:
        """Search YouTube for *query* and return the videos found.

        An empty result list is returned as-is; callers decide whether
        that is an error.

        Raises
        ------
        MissingParameterError
            If *query* is missing or blank.
        FetchError
            If the results page cannot be fetched.
        ExtractionError, SchemaError
            If the page no longer has the expected shape.
        """
        if query is None or not query.strip():
            raise MissingParameterError('Query parameter "q" is required')

        html = self._fetch(SEARCH_URL, {"search_query": query})
        return SearchResponse(query=query, results=tuple(extract(html)))

    def video_details(self, video_id: str | None) -> VideoDetails:
        """Fetch the watch page for *video_id* and read its metadata.

        Raises
        ------
        MissingParameterError
            If *video_id* is missing or blank.
        FetchError, ExtractionError, SchemaError
            As for :meth:`search`.
        """
        if video_id is None or not video_id.strip():
            raise MissingParameterError("Video ID is required")

        html = self._fetch(watch_url(video_id.strip()))
        return extract_video_details(html)

    # ------------------------------------------------------------------
    # Fetcher delegation (safe boundary)
    # ------------------------------------------------------------------

    def _fetch(self, url: str, params: Mapping[str, str] | None = None) -> str:
        """Call the fetcher and ensure only our exceptions escape."""
        try:
            return self._fetcher.fetch_text(url, params)
        except YtGrabError:
            raise
        except Exception as exc:
            raise FetchError(f"Unexpected fetch error: {exc}") from exc
