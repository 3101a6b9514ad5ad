"""requests backed implementation of :class:`~ytgrab.core.protocols.MediaStreamer`.

Opens a rendition URL as a streaming response so the web layer can pipe
bytes to the client without buffering the whole file.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import requests

from ytgrab.config import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from ytgrab.exceptions import FetchError
from ytgrab.utils import truncate

logger = logging.getLogger(__name__)

CHUNK_SIZE: int = 1024 * 1024


class RequestsMediaStream:
    """Wraps an open streaming :class:`requests.Response`."""

    def __init__(self, response: requests.Response, chunk_size: int = CHUNK_SIZE) -> None:
        self._response = response
        self._chunk_size = chunk_size
        self.content_type: str | None = response.headers.get("Content-Type")

    def iter_chunks(self) -> Iterator[bytes]:
        try:
            for chunk in self._response.iter_content(chunk_size=self._chunk_size):
                if chunk:
                    yield chunk
        except requests.RequestException as exc:
            raise FetchError(f"Media stream interrupted: {exc}") from exc
        finally:
            self.close()

    def close(self) -> None:
        self._response.close()


class RequestsMediaStreamer:
    """Concrete :class:`MediaStreamer` using a shared :class:`requests.Session`."""

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        session: requests.Session | None = None,
    ) -> None:
        self._timeout = timeout
        self._session = session if session is not None else requests.Session()
        self._session.headers.update({"User-Agent": user_agent})

    def open_stream(self, url: str) -> RequestsMediaStream:
        """Open *url* for streaming.

        Raises
        ------
        FetchError
            On connection failures, timeouts and non-2xx responses.
        """
        logger.debug("Streaming %s", truncate(url))
        try:
            response = self._session.get(url, stream=True, timeout=self._timeout)
        except requests.RequestException as exc:
            raise FetchError(f"Could not open media stream: {exc}") from exc

        if not response.ok:
            response.close()
            raise FetchError(
                f"Status code: {response.status_code}, Message: media request rejected",
            )
        return RequestsMediaStream(response)
