"""yt-dlp backed implementation of :class:`~ytgrab.core.protocols.InfoProvider`.

Resolves a watch URL to yt-dlp's info dict, trimmed to the formats a
client can fetch directly.  YouTube's HLS and DASH manifests are skipped
at extraction time (``extractor_args``) and any manifest or storyboard
entry that still slips through is removed before the dict leaves this
module.

This module is the **only** place in the codebase that imports ``yt_dlp``;
its exceptions are re-raised as :class:`~ytgrab.exceptions.YtGrabError`
subclasses.
"""

from __future__ import annotations

import logging
from typing import Any

from ytgrab.core.download_service import is_direct_format
from ytgrab.exceptions import EnvironmentError, ResolverError, VideoUnavailableError

logger = logging.getLogger(__name__)

# Lower-cased fragments of DownloadError messages meaning the video itself
# cannot be served, as opposed to a transient or extractor failure.
UNAVAILABLE_SIGNALS: tuple[str, ...] = (
    "video unavailable",
    "private video",
    "has been removed",
    "is not available",
    "no longer available",
    "account associated with this video has been terminated",
    "sign in to confirm your age",
)

# Manifest-based format sources the YouTube extractor can skip outright.
SKIPPED_MANIFESTS: tuple[str, ...] = ("hls", "dash")


def is_unavailable(message: str) -> bool:
    lowered = message.lower()
    return any(signal in lowered for signal in UNAVAILABLE_SIGNALS)


def direct_formats_only(info: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of *info* whose ``formats`` are all single-GET URLs."""
    trimmed = dict(info)
    formats = info.get("formats")
    if isinstance(formats, list):
        kept = [f for f in formats if isinstance(f, dict) and is_direct_format(f)]
        if len(kept) != len(formats):
            logger.debug(
                "Dropped %d manifest format(s) for %s",
                len(formats) - len(kept),
                info.get("id", "<unknown>"),
            )
        trimmed["formats"] = kept
    return trimmed


class YtDlpInfoProvider:
    """Concrete :class:`InfoProvider` backed by the yt-dlp Python API.

    Usage::

        provider = YtDlpInfoProvider()
        info = provider.fetch_info("https://www.youtube.com/watch?v=...")
        info["formats"]   # progressive and adaptive https formats only
    """

    def __init__(self, *, user_agent: str | None = None) -> None:
        self._user_agent = user_agent

    def build_opts(self) -> dict[str, Any]:
        """Options for a single-video lookup that writes nothing to disk."""
        opts: dict[str, Any] = {
            "quiet": True,
            "no_warnings": True,
            "no_color": True,
            "noplaylist": True,
            "skip_download": True,
            "extractor_args": {"youtube": {"skip": list(SKIPPED_MANIFESTS)}},
        }
        if self._user_agent:
            opts["http_headers"] = {"User-Agent": self._user_agent}
        return opts

    def fetch_info(self, url: str) -> dict[str, Any]:
        """Return yt-dlp's info dict for *url* with direct formats only.

        Raises
        ------
        EnvironmentError
            If yt-dlp is not installed.
        VideoUnavailableError
            When yt-dlp reports the video as private, removed or restricted.
        ResolverError
            For every other extraction failure.
        """
        try:
            import yt_dlp
            import yt_dlp.utils
        except ModuleNotFoundError as exc:
            raise EnvironmentError(
                "yt-dlp is not installed. Install with: pip install yt-dlp",
            ) from exc

        logger.debug("Resolving formats for %s", url)
        try:
            with yt_dlp.YoutubeDL(self.build_opts()) as ydl:
                info: Any = ydl.extract_info(url, download=False)
        except yt_dlp.utils.DownloadError as exc:
            if is_unavailable(str(exc)):
                raise VideoUnavailableError(
                    str(exc),
                    hint="The video may be private, removed, or geo-restricted.",
                ) from exc
            raise ResolverError(str(exc)) from exc
        except Exception as exc:
            raise ResolverError(f"Unexpected yt-dlp error: {exc}") from exc

        if not isinstance(info, dict):
            raise ResolverError(
                "yt-dlp returned no usable information for the given URL.",
                hint="The ID may not point to a valid video.",
            )
        return direct_formats_only(info)
