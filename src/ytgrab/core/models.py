"""Domain models for ytgrab.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access and JSON-ready projection.  They carry zero
I/O and zero dependencies on external packages.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

from ytgrab.utils import sanitize_filename

WATCH_URL_TEMPLATE: str = "https://www.youtube.com/watch?v={video_id}"


def watch_url(video_id: str) -> str:
    """Return the canonical watch-page URL for *video_id*."""
    return WATCH_URL_TEMPLATE.format(video_id=video_id)


# ---------------------------------------------------------------------------
# Search results
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class VideoRecord:
    """One playable video scraped from a search results page."""

    title: str
    """Human-readable video title."""

    video_id: str
    """YouTube video ID (e.g. ``dQw4w9WgXcQ``).  Never empty."""

    channel_name: str = ""
    channel_id: str = ""
    thumbnail_url: str = ""
    """URL of the largest thumbnail offered."""

    view_count_text: str = "No view data"
    published_text: str = "No date data"
    description: str = "No description available"
    duration_text: str = "Live"
    """Display duration (``"4:13"``); ``"Live"`` when YouTube omits it."""

    @property
    def video_url(self) -> str:
        return watch_url(self.video_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "videoId": self.video_id,
            "channelName": self.channel_name,
            "channelId": self.channel_id,
            "thumbnailUrl": self.thumbnail_url,
            "viewCountText": self.view_count_text,
            "publishedText": self.published_text,
            "description": self.description,
            "durationText": self.duration_text,
            "videoUrl": self.video_url,
        }


@dataclass(frozen=True, slots=True)
class SearchResponse:
    """A query together with its results, in page order."""

    query: str
    results: tuple[VideoRecord, ...]

    def __len__(self) -> int:
        return len(self.results)

    def __bool__(self) -> bool:
        return len(self.results) > 0


@dataclass(frozen=True, slots=True)
class VideoDetails:
    """Watch-page metadata for a single video."""

    video_id: str
    title: str
    description: str
    view_count: str
    length_seconds: str
    channel_id: str
    channel_name: str
    thumbnail_url: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "videoId": self.video_id,
            "title": self.title,
            "description": self.description,
            "viewCount": self.view_count,
            "lengthSeconds": self.length_seconds,
            "channelId": self.channel_id,
            "channelName": self.channel_name,
            "thumbnailUrl": self.thumbnail_url,
            "videoUrl": watch_url(self.video_id),
        }


# ---------------------------------------------------------------------------
# Renditions
# ---------------------------------------------------------------------------

class FormatKind(enum.Enum):
    """The kind of media the caller wants to download."""

    VIDEO_AND_AUDIO = "mp4"
    AUDIO_ONLY = "mp3"

    @classmethod
    def from_format(cls, value: str) -> FormatKind:
        """Map a ``format`` query value (``mp4``/``mp3``) to a kind.

        Raises
        ------
        ValueError
            If *value* names neither supported format.
        """
        return cls(value.strip().lower())

    @property
    def extension(self) -> str:
        return self.value

    @property
    def mimetype(self) -> str:
        return "audio/mpeg" if self is FormatKind.AUDIO_ONLY else "video/mp4"


@dataclass(frozen=True, slots=True)
class MediaRendition:
    """One concrete encoded stream offered for a video."""

    url: str
    has_video: bool
    has_audio: bool
    quality_label: str | None = None
    """Display quality such as ``"720p"``; ``None`` for audio streams."""

    audio_bitrate: float | None = None
    """Average audio bitrate in kbit/s, or ``None`` if unknown."""

    container: str = ""
    """Container extension (e.g. ``mp4``, ``webm``, ``m4a``)."""


@dataclass(frozen=True, slots=True)
class DownloadTarget:
    """A selected rendition plus what is needed to hand it to a client."""

    video_id: str
    title: str
    kind: FormatKind
    rendition: MediaRendition

    @property
    def filename(self) -> str:
        return f"{sanitize_filename(self.title)}.{self.kind.extension}"

    @property
    def mimetype(self) -> str:
        return self.kind.mimetype
