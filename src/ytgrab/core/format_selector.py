"""Pure rendition filtering and ranking logic.

Every function in this module is a **pure** transformation — no I/O,
no side effects, fully deterministic, and trivially unit-testable.

Pipeline order (enforced by :func:`select`):

1. **Filter** — drop renditions without a URL, then keep only those whose
   capability flags match the requested :class:`FormatKind`.
2. **Rank** — audio by bitrate desc; combined streams by the numeric part
   of the quality label desc.  Python's sort is stable, so ties keep
   input order.
3. **Pick** — the top-ranked rendition, or :class:`NoFormatFoundError`.

There is no fallback to a different kind: callers that want
audio when no combined stream exists must ask for it explicitly.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from ytgrab.core.models import FormatKind, MediaRendition
from ytgrab.exceptions import NoFormatFoundError

_QUALITY_NUMBER = re.compile(r"(\d+)p")


# ---------------------------------------------------------------------------
# 1. Filter
# ---------------------------------------------------------------------------

def matches_kind(rendition: MediaRendition, kind: FormatKind) -> bool:
    """Return ``True`` when *rendition* carries exactly what *kind* needs.

    ``AUDIO_ONLY`` means an audio track **and** no video track.
    """
    if kind is FormatKind.AUDIO_ONLY:
        return rendition.has_audio and not rendition.has_video
    return rendition.has_video and rendition.has_audio


def filter_renditions(
    renditions: Sequence[MediaRendition],
    kind: FormatKind,
) -> list[MediaRendition]:
    """Keep renditions with a URL whose capabilities match *kind*."""
    return [r for r in renditions if r.url and matches_kind(r, kind)]


# ---------------------------------------------------------------------------
# 2. Rank
# ---------------------------------------------------------------------------

def quality_value(quality_label: str | None) -> int:
    """Parse the vertical resolution out of a label (``"1080p60"`` → 1080).

    Missing or unparseable labels rank as ``0``.
    """
    if not quality_label:
        return 0
    match = _QUALITY_NUMBER.search(quality_label)
    return int(match.group(1)) if match else 0


def _audio_key(rendition: MediaRendition) -> tuple[int, float]:
    # Renditions without a bitrate sort after every rendition with one.
    if rendition.audio_bitrate is None:
        return (1, 0.0)
    return (0, -rendition.audio_bitrate)


def _video_key(rendition: MediaRendition) -> int:
    return -quality_value(rendition.quality_label)


def rank_renditions(
    renditions: Sequence[MediaRendition],
    kind: FormatKind,
) -> list[MediaRendition]:
    """Sort *renditions* best-first for *kind* (stable)."""
    if kind is FormatKind.AUDIO_ONLY:
        return sorted(renditions, key=_audio_key)
    return sorted(renditions, key=_video_key)


# ---------------------------------------------------------------------------
# Composite pipeline
# ---------------------------------------------------------------------------

def select(
    renditions: Sequence[MediaRendition],
    kind: FormatKind,
) -> MediaRendition:
    """Return the best rendition of *kind*.

    Raises
    ------
    NoFormatFoundError
        If no rendition with a URL offers the requested capabilities.
    """
    candidates = filter_renditions(renditions, kind)
    if not candidates:
        if kind is FormatKind.AUDIO_ONLY:
            raise NoFormatFoundError("No audio format found")
        raise NoFormatFoundError(
            "No combined video/audio format found",
            hint="Retry with format=mp3 for an audio-only download.",
        )
    return rank_renditions(candidates, kind)[0]
