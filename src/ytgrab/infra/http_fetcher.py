"""requests backed implementation of :class:`~ytgrab.core.protocols.PageFetcher`.

Fetches YouTube's server-rendered pages with browser-like headers.  All
``requests`` exceptions are mapped to :class:`~ytgrab.exceptions.FetchError`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

import requests

from ytgrab.config import DEFAULT_ACCEPT_LANGUAGE, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from ytgrab.exceptions import FetchError

logger = logging.getLogger(__name__)


class RequestsPageFetcher:
    """Concrete :class:`PageFetcher` using a shared :class:`requests.Session`.

    Parameters
    ----------
    timeout:
        Per-request timeout in seconds.
    user_agent, accept_language:
        Header values sent with every request.
    session:
        Optional pre-built session (tests inject a mock here).
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        accept_language: str = DEFAULT_ACCEPT_LANGUAGE,
        session: requests.Session | None = None,
    ) -> None:
        self._timeout = timeout
        self._session = session if session is not None else requests.Session()
        self._session.headers.update(
            {
                "User-Agent": user_agent,
                "Accept-Language": accept_language,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            }
        )

    def fetch_text(self, url: str, params: Mapping[str, str] | None = None) -> str:
        """GET *url* and return the decoded body.

        Raises
        ------
        FetchError
            On connection failures, timeouts and non-2xx responses.
        """
        logger.debug("GET %s params=%s", url, dict(params or {}))
        try:
            response = self._session.get(url, params=params, timeout=self._timeout)
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else "unknown"
            raise FetchError(
                f"Status code: {status}, Message: {exc}",
            ) from exc
        except requests.RequestException as exc:
            raise FetchError(
                f"Could not reach {url}: {exc}",
                hint="Check your network connection.",
            ) from exc
        return response.text
