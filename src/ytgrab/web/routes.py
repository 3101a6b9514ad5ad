"""HTTP routes: search, video details, redirect and streaming downloads.

No business logic lives here — every route reads its query arguments
and delegates to the core services that
:func:`~ytgrab.web.app.create_app` stores on the application.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlencode

from flask import Blueprint, Response, current_app, jsonify, redirect, request, stream_with_context

from ytgrab.core.download_service import DownloadService
from ytgrab.core.models import DownloadTarget, FormatKind, VideoRecord
from ytgrab.core.search_service import SearchService
from ytgrab.exceptions import InvalidParameterError, NoResultsError
from ytgrab.utils import truncate
from ytgrab.web.docs import render_docs

logger = logging.getLogger(__name__)

api = Blueprint("api", __name__)

SEARCH_SERVICE_KEY: str = "ytgrab.search"
DOWNLOAD_SERVICE_KEY: str = "ytgrab.download"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _search_service() -> SearchService:
    return current_app.extensions[SEARCH_SERVICE_KEY]


def _download_service() -> DownloadService:
    return current_app.extensions[DOWNLOAD_SERVICE_KEY]


def _public_url() -> str:
    return current_app.config["YTGRAB_PUBLIC_URL"]


def _requested_kind() -> FormatKind:
    raw = request.args.get("format") or FormatKind.VIDEO_AND_AUDIO.value
    try:
        return FormatKind.from_format(raw)
    except ValueError as exc:
        raise InvalidParameterError(
            f"Unsupported format {raw!r}",
            hint="Use format=mp4 or format=mp3.",
        ) from exc


def download_links(video_id: str, base_url: str) -> dict[str, str]:
    """Absolute redirect and streaming links for both formats."""
    links: dict[str, str] = {}
    for prefix, path in (("download", "/api/download"), ("direct", "/api/direct-download")):
        for kind in FormatKind:
            query = urlencode({"videoId": video_id, "format": kind.value})
            links[f"{prefix}{kind.value.capitalize()}"] = f"{base_url}{path}?{query}"
    return links


def serialize_record(record: VideoRecord, base_url: str) -> dict[str, Any]:
    payload = record.to_dict()
    payload.update(download_links(record.video_id, base_url))
    return payload


def _attachment(target: DownloadTarget) -> Response:
    stream = _download_service().open_stream(target)
    logger.info("Streaming %s as %s", target.video_id, target.filename)
    return Response(
        stream_with_context(stream.iter_chunks()),
        mimetype=target.mimetype,
        headers={"Content-Disposition": f'attachment; filename="{target.filename}"'},
    )


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@api.get("/")
def home() -> str:
    return render_docs(_public_url())


@api.get("/api/search")
def search():
    response = _search_service().search(request.args.get("q"))
    if not response:
        raise NoResultsError(f"No videos found for {response.query!r}")

    base_url = _public_url()
    return jsonify(
        {
            "query": response.query,
            "results": [serialize_record(r, base_url) for r in response.results],
        }
    )


@api.get("/api/video/<video_id>")
def video_details(video_id: str):
    return jsonify(_search_service().video_details(video_id).to_dict())


@api.get("/api/download")
def download():
    kind = _requested_kind()
    target = _download_service().resolve(request.args.get("videoId"), kind)
    logger.info("Redirecting to: %s", truncate(target.rendition.url))
    return redirect(target.rendition.url, code=302)


@api.get("/api/direct-download")
def direct_download():
    kind = _requested_kind()
    target = _download_service().resolve(request.args.get("videoId"), kind)
    return _attachment(target)


@api.get("/download/<video_id>")
def legacy_download(video_id: str):
    target = _download_service().resolve(video_id, FormatKind.VIDEO_AND_AUDIO)
    return _attachment(target)
