"""Search Extractor — turns a search results page into :class:`VideoRecord`\\ s.

Pipeline (enforced by :func:`extract`):

1. **Slice** — locate ``var ytInitialData = `` and parse the JSON after it.
2. **Descend** — walk to the first section's item list.
3. **Filter** — keep only ``videoRenderer`` entries (ads, shelves, channel
   cards are dropped).
4. **Project** — map each entry through :data:`FIELDS`.  Optional fields
   fall back to their default; an entry whose required fields cannot be
   read is skipped without failing the batch.

Every function in this module is pure and deterministic.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from ytgrab.core.embedded_data import PathStep, descend, extract_embedded_json, join_runs
from ytgrab.core.models import VideoRecord
from ytgrab.exceptions import SchemaError

logger = logging.getLogger(__name__)

INITIAL_DATA_MARKER: str = "var ytInitialData = "
VIDEO_RENDERER_KEY: str = "videoRenderer"

ITEMS_PATH: tuple[PathStep, ...] = (
    "contents",
    "twoColumnSearchResultsRenderer",
    "primaryContents",
    "sectionListRenderer",
    "contents",
    0,
    "itemSectionRenderer",
    "contents",
)


# ---------------------------------------------------------------------------
# Field table
# ---------------------------------------------------------------------------

def _text(node: Any) -> str:
    """Read a YouTube text node (``simpleText`` or ``runs``)."""
    if isinstance(node, dict):
        if "simpleText" in node:
            return str(node["simpleText"])
        if "runs" in node:
            return join_runs(node["runs"])
    raise SchemaError("expected a text node")


def _string(node: Any) -> str:
    if not isinstance(node, str):
        raise SchemaError(f"expected a string, got {type(node).__name__}")
    return node


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """How to read one :class:`VideoRecord` field from a ``videoRenderer``.

    A spec with ``default=None`` is *required*: a missing or empty value
    disqualifies the whole entry.
    """

    name: str
    path: tuple[PathStep, ...]
    read: Callable[[Any], str] = _string
    default: str | None = None

    @property
    def required(self) -> bool:
        return self.default is None


FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("title", ("title",), _text),
    FieldSpec("video_id", ("videoId",)),
    FieldSpec("channel_name", ("ownerText", "runs", 0, "text"), default=""),
    FieldSpec(
        "channel_id",
        ("ownerText", "runs", 0, "navigationEndpoint", "browseEndpoint", "browseId"),
        default="",
    ),
    FieldSpec("thumbnail_url", ("thumbnail", "thumbnails", -1, "url"), default=""),
    FieldSpec("view_count_text", ("viewCountText",), _text, "No view data"),
    FieldSpec("published_text", ("publishedTimeText",), _text, "No date data"),
    FieldSpec(
        "description",
        ("detailedMetadataSnippets", 0, "snippetText", "runs"),
        join_runs,
        "No description available",
    ),
    FieldSpec("duration_text", ("lengthText",), _text, "Live"),
)


def read_field(renderer: dict[str, Any], spec: FieldSpec) -> str:
    """Return the value of *spec* in *renderer*, or its default.

    Raises
    ------
    SchemaError
        If a required field is missing or empty.
    """
    try:
        value = spec.read(descend(renderer, spec.path))
    except SchemaError:
        if spec.required:
            raise
        return spec.default  # type: ignore[return-value]

    if spec.required and not value:
        raise SchemaError(f"required field {spec.name!r} is empty")
    return value


def project_video(renderer: dict[str, Any]) -> VideoRecord:
    """Build a :class:`VideoRecord` from one ``videoRenderer`` object."""
    values = {spec.name: read_field(renderer, spec) for spec in FIELDS}
    return VideoRecord(**values)


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

def find_items(data: Any) -> list[Any]:
    """Descend to the ordered item list of the first results section."""
    items = descend(data, ITEMS_PATH)
    if not isinstance(items, list):
        raise SchemaError("search result items are not a list")
    return items


def filter_video_renderers(items: Sequence[Any]) -> list[dict[str, Any]]:
    """Return the ``videoRenderer`` payloads, in order, ignoring all else."""
    return [
        item[VIDEO_RENDERER_KEY]
        for item in items
        if isinstance(item, dict) and isinstance(item.get(VIDEO_RENDERER_KEY), dict)
    ]


def extract(html: str) -> list[VideoRecord]:
    """Extract the playable videos listed on a search results page.

    Raises
    ------
    ExtractionError
        If the ``ytInitialData`` marker or its closing tag is absent.
    SchemaError
        If the payload is not JSON or the item list is not where expected.
    """
    data = extract_embedded_json(html, INITIAL_DATA_MARKER)
    renderers = filter_video_renderers(find_items(data))

    records: list[VideoRecord] = []
    for position, renderer in enumerate(renderers):
        try:
            records.append(project_video(renderer))
        except SchemaError as exc:
            logger.debug("Skipping search item %d: %s", position, exc)
    return records
