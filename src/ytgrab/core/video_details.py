"""Extract :class:`VideoDetails` from a watch page's embedded player response."""

from __future__ import annotations

from typing import Any

from ytgrab.core.embedded_data import descend, extract_embedded_json
from ytgrab.core.models import VideoDetails
from ytgrab.exceptions import SchemaError

PLAYER_RESPONSE_MARKER: str = "var ytInitialPlayerResponse = "


def _optional(details: dict[str, Any], key: str, default: str = "") -> str:
    value = details.get(key)
    return default if value is None else str(value)


def extract_video_details(html: str) -> VideoDetails:
    """Read title, channel and counters from ``ytInitialPlayerResponse``.

    Raises
    ------
    ExtractionError
        If the player response marker or its closing tag is absent.
    SchemaError
        If the payload is not JSON or lacks ``videoDetails.videoId``.
    """
    data = extract_embedded_json(html, PLAYER_RESPONSE_MARKER)
    details = descend(data, ("videoDetails",))
    if not isinstance(details, dict):
        raise SchemaError("videoDetails is not an object")

    video_id = _optional(details, "videoId")
    if not video_id:
        raise SchemaError("videoDetails has no videoId")

    try:
        thumbnail_url = str(descend(details, ("thumbnail", "thumbnails", -1, "url")))
    except SchemaError:
        thumbnail_url = ""

    return VideoDetails(
        video_id=video_id,
        title=_optional(details, "title"),
        description=_optional(details, "shortDescription", "No description available"),
        view_count=_optional(details, "viewCount", "0"),
        length_seconds=_optional(details, "lengthSeconds", "0"),
        channel_id=_optional(details, "channelId"),
        channel_name=_optional(details, "author"),
        thumbnail_url=thumbnail_url,
    )
