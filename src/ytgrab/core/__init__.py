"""Core / service layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli``, ``infra`` or ``web``.
* Extraction and selection functions take no configuration.
"""

from ytgrab.core.download_service import DownloadService
from ytgrab.core.format_selector import select
from ytgrab.core.models import (
    DownloadTarget,
    FormatKind,
    MediaRendition,
    SearchResponse,
    VideoDetails,
    VideoRecord,
)
from ytgrab.core.protocols import InfoProvider, MediaStream, MediaStreamer, PageFetcher
from ytgrab.core.search_extractor import extract
from ytgrab.core.search_service import SearchService

__all__: list[str] = [
    "DownloadService",
    "DownloadTarget",
    "FormatKind",
    "InfoProvider",
    "MediaRendition",
    "MediaStream",
    "MediaStreamer",
    "PageFetcher",
    "SearchResponse",
    "SearchService",
    "VideoDetails",
    "VideoRecord",
    "extract",
    "select",
]
