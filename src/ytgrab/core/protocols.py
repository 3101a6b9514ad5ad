"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any, Protocol


class PageFetcher(Protocol):
    """Contract for fetching server-rendered HTML pages."""

    def fetch_text(self, url: str, params: Mapping[str, str] | None = None) -> str:
        """Fetch *url* (with optional query *params*) and return the body.

        Implementations must send browser-like headers and map all
        transport exceptions to :class:`~ytgrab.exceptions.FetchError`.
        """
        ...  # pragma: no cover


class InfoProvider(Protocol):
    """Contract for video-information backends.

    Any object that implements :meth:`fetch_info` with the correct
    signature satisfies this protocol structurally (no explicit
    inheritance required).
    """

    def fetch_info(self, url: str) -> dict[str, Any]:
        """Fetch raw metadata for *url* and return a provider-specific dict.

        The returned dict must contain at least:

        * ``"id"`` — video identifier (``str``)
        * ``"title"`` — video title (``str``)
        * ``"formats"`` — list of format dicts (``list[dict]``), each with
          ``url``, ``vcodec``, ``acodec`` and optionally ``height``,
          ``format_note``, ``abr``, ``ext``

        Raises
        ------
        ResolverError
            When the backend fails to extract metadata.
        VideoUnavailableError
            When the target video is confirmed unavailable.
        """
        ...  # pragma: no cover


class MediaStream(Protocol):
    """An open upstream media response."""

    content_type: str | None

    def iter_chunks(self) -> Iterator[bytes]:
        ...  # pragma: no cover

    def close(self) -> None:
        ...  # pragma: no cover


class MediaStreamer(Protocol):
    """Contract for opening rendition URLs as byte streams."""

    def open_stream(self, url: str) -> MediaStream:
        """Open *url* for streaming.

        Raises
        ------
        FetchError
            When the upstream request fails or returns an error status.
        """
        ...  # pragma: no cover
