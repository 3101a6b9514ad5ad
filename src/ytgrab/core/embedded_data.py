"""Locate and navigate JSON blobs embedded in YouTube's server-rendered pages.

YouTube inlines its page state as ``var ytInitialData = {...};</script>``.
Two helpers isolate the fragile parts:

* :func:`extract_embedded_json` — marker/delimiter slicing + JSON parsing.
* :func:`descend` — walks a named path through the parsed structure so a
  shape change upstream fails in exactly one place, with the step that
  broke in the message.

Both are pure functions; no I/O.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any, Union

from ytgrab.exceptions import ExtractionError, SchemaError

CLOSING_DELIMITER: str = "</script>"

PathStep = Union[str, int]
"""A mapping key or a sequence index (negative indices count from the end)."""


# ---------------------------------------------------------------------------
# Marker / delimiter slicing
# ---------------------------------------------------------------------------

def slice_payload(html: str, marker: str) -> str:
    """Return the raw text assigned after *marker* in an inline script.

    The payload ends at the next ``</script>``.  Trailing whitespace and a
    single trailing ``;`` are trimmed so that both ``...};</script>`` and
    ``...}</script>`` yield clean JSON text.

    Raises
    ------
    ExtractionError
        If *marker* or the closing delimiter is absent.
    """
    start = html.find(marker)
    if start == -1:
        raise ExtractionError(
            f"marker not found: {marker.strip()!r}",
            hint="YouTube may have changed its page layout.",
        )

    payload_start = start + len(marker)
    end = html.find(CLOSING_DELIMITER, payload_start)
    if end == -1:
        raise ExtractionError(
            f"closing delimiter {CLOSING_DELIMITER!r} not found after marker",
        )

    payload = html[payload_start:end].rstrip()
    if payload.endswith(";"):
        payload = payload[:-1].rstrip()
    return payload


def extract_embedded_json(html: str, marker: str) -> Any:
    """Slice the payload after *marker* and parse it as JSON.

    Raises
    ------
    ExtractionError
        If the marker or closing delimiter is absent.
    SchemaError
        If the payload is not valid JSON.
    """
    payload = slice_payload(html, marker)
    try:
        return json.loads(payload)
    except ValueError as exc:
        raise SchemaError(f"embedded payload is not valid JSON: {exc}") from exc


# ---------------------------------------------------------------------------
# Path descent
# ---------------------------------------------------------------------------

def _step(node: Any, key: PathStep) -> Any:
    if isinstance(key, int):
        if isinstance(node, Sequence) and not isinstance(node, str):
            return node[key]
        raise TypeError(f"expected a list, got {type(node).__name__}")
    if isinstance(node, dict):
        return node[key]
    raise TypeError(f"expected an object, got {type(node).__name__}")


def descend(data: Any, path: Sequence[PathStep]) -> Any:
    """Follow *path* from *data* and return the value found there.

    Raises
    ------
    SchemaError
        Naming the first step that does not exist.
    """
    node = data
    for depth, key in enumerate(path):
        try:
            node = _step(node, key)
        except (KeyError, IndexError, TypeError) as exc:
            walked = ".".join(str(k) for k in path[:depth]) or "<root>"
            raise SchemaError(
                f"expected path step {key!r} missing under {walked}",
            ) from exc
    return node


def join_runs(runs: Any) -> str:
    """Concatenate the ``text`` of each entry in a YouTube ``runs`` list."""
    if not isinstance(runs, list):
        raise SchemaError("expected a list of text runs")
    return "".join(str(run.get("text", "")) for run in runs if isinstance(run, dict))
