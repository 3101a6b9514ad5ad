"""Core download service — resolves a video ID to a downloadable rendition.

This service delegates video-information lookup to an
:class:`~ytgrab.core.protocols.InfoProvider` and byte streaming to a
:class:`~ytgrab.core.protocols.MediaStreamer`, both injected at
construction time.  It is responsible for:

* Validating the requested video ID.
* Dropping manifest (HLS/DASH) formats and converting the remaining
  raw format dicts into :class:`~ytgrab.core.models.MediaRendition` values.
* Running the format selector.
* Ensuring only :class:`~ytgrab.exceptions.YtGrabError` subclasses
  escape.

Guarantees
----------
* Pure orchestration — no direct I/O, no ``print()``.
* No yt-dlp import.
"""

from __future__ import annotations

from typing import Any

from ytgrab.core.format_selector import select
from ytgrab.core.models import DownloadTarget, FormatKind, MediaRendition, watch_url
from ytgrab.core.protocols import InfoProvider, MediaStream, MediaStreamer
from ytgrab.exceptions import (
    FetchError,
    MissingParameterError,
    ResolverError,
    YtGrabError,
    append_ytdlp_upgrade_suggestion,
)

_NO_CODEC: str = "none"

# yt-dlp protocols whose format URL is the media file itself.  HLS/DASH
# manifests (m3u8, m3u8_native, http_dash_segments) and storyboards
# (mhtml) point at playlists and are never offered to clients.
DIRECT_PROTOCOLS: frozenset[str] = frozenset({"http", "https"})


def is_direct_format(raw: dict[str, Any]) -> bool:
    """Return ``True`` when *raw* can be fetched with a single GET.

    Formats without a ``protocol`` key fall back to the URL scheme.
    """
    protocol = raw.get("protocol")
    if protocol is None:
        url = raw.get("url")
        return isinstance(url, str) and url.startswith(("http://", "https://"))
    return protocol in DIRECT_PROTOCOLS


class DownloadService:
    """Stateless service behind the download endpoints.

    Parameters
    ----------
    provider:
        Any object satisfying the :class:`InfoProvider` protocol.
    streamer:
        Any object satisfying the :class:`MediaStreamer` protocol.  Only
        required by :meth:`open_stream`.
    """

    def __init__(
        self,
        provider: InfoProvider,
        streamer: MediaStreamer | None = None,
    ) -> None:
        self._provider: InfoProvider = provider
        self._streamer: MediaStreamer | None = streamer

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(self, video_id: str | None, kind: FormatKind) -> DownloadTarget:
        """Pick the best rendition of *kind* for *video_id*.

        Raises
        ------
        MissingParameterError
            If *video_id* is missing or blank.
        ResolverError
            If the provider fails to return video information.
        VideoUnavailableError
            If the video is confirmed unavailable.
        NoFormatFoundError
            If no rendition offers the requested capabilities.
        """
        if video_id is None or not video_id.strip():
            raise MissingParameterError("Video ID is required")
        video_id = video_id.strip()

        info = self._fetch(watch_url(video_id))
        renditions = self.parse_renditions(self._extract_raw_formats(info))
        rendition = select(renditions, kind)

        return DownloadTarget(
            video_id=video_id,
            title=str(info.get("title") or video_id),
            kind=kind,
            rendition=rendition,
        )

    def open_stream(self, target: DownloadTarget) -> MediaStream:
        """Open the selected rendition of *target* as a byte stream.

        Raises
        ------
        FetchError
            When the media request fails.
        """
        if self._streamer is None:
            raise FetchError("No media streamer configured")
        try:
            return self._streamer.open_stream(target.rendition.url)
        except YtGrabError:
            raise
        except Exception as exc:
            raise FetchError(f"Unexpected streaming error: {exc}") from exc

    # ------------------------------------------------------------------
    # Provider delegation (safe boundary)
    # ------------------------------------------------------------------

    def _fetch(self, url: str) -> dict[str, Any]:
        """Call the provider and ensure only our exceptions escape."""
        try:
            return self._provider.fetch_info(url)
        except YtGrabError:
            # Already one of ours — let it propagate unchanged.
            raise
        except Exception as exc:
            raise ResolverError(
                f"Unexpected provider error: {exc}",
                hint=append_ytdlp_upgrade_suggestion(
                    "YouTube may have changed its player.",
                ),
            ) from exc

    # ------------------------------------------------------------------
    # Raw-dict → domain-model parsers (pure)
    # ------------------------------------------------------------------

    @staticmethod
    def _extract_raw_formats(info: dict[str, Any]) -> list[dict[str, Any]]:
        """Pull the directly downloadable entries of ``formats`` from *info*."""
        raw: object = info.get("formats")
        if not isinstance(raw, list):
            return []
        return [
            entry for entry in raw
            if isinstance(entry, dict) and is_direct_format(entry)
        ]

    @staticmethod
    def _has_track(codec: object) -> bool:
        return isinstance(codec, str) and codec != _NO_CODEC

    @classmethod
    def parse_rendition(cls, raw: dict[str, Any]) -> MediaRendition:
        """Convert one raw format dict to a :class:`MediaRendition`."""
        height = raw.get("height")
        note = raw.get("format_note")
        if isinstance(height, int) and height > 0:
            quality_label: str | None = f"{height}p"
        elif isinstance(note, str) and note:
            quality_label = note
        else:
            quality_label = None

        abr = raw.get("abr")
        audio_bitrate: float | None = (
            float(abr) if isinstance(abr, (int, float)) and abr > 0 else None
        )

        return MediaRendition(
            url=str(raw.get("url") or ""),
            has_video=cls._has_track(raw.get("vcodec")),
            has_audio=cls._has_track(raw.get("acodec")),
            quality_label=quality_label,
            audio_bitrate=audio_bitrate,
            container=str(raw.get("ext") or ""),
        )

    @classmethod
    def parse_renditions(
        cls,
        raw_formats: list[dict[str, Any]],
    ) -> list[MediaRendition]:
        """Convert a list of raw format dicts to domain models."""
        return [cls.parse_rendition(entry) for entry in raw_formats]
