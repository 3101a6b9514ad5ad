"""Custom exception hierarchy for ytgrab.

All exceptions that cross layer boundaries must inherit from
:class:`YtGrabError`.  Raw third-party exceptions (``requests``,
``yt_dlp``) must NEVER propagate beyond the infrastructure layer — they
must be caught and re-raised as a typed subclass defined here.

Each class carries the HTTP status the web error boundary answers with
and a short ``title`` rendered as the ``error`` field of the JSON body.

Hierarchy
---------
YtGrabError
├── MissingParameterError
├── InvalidParameterError
├── ExtractionError
├── SchemaError
├── NoResultsError
├── NoFormatFoundError
├── VideoUnavailableError
├── FetchError
├── ResolverError
└── EnvironmentError
"""

from __future__ import annotations


class YtGrabError(Exception):
    """Base exception for all ytgrab errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the HTTP and CLI error boundaries can render a
    clean message without leaking internal stack traces.
    """

    status_code: int = 500
    title: str = "Server Error"

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Request parameters ----------------------------------------------------

class MissingParameterError(YtGrabError):
    """Raised when the caller omitted a required query parameter."""

    status_code = 400
    title = "Missing parameter"


class InvalidParameterError(YtGrabError):
    """Raised when a parameter or setting has an unusable value."""

    status_code = 400
    title = "Invalid parameter"


# --- Page scraping ---------------------------------------------------------

class ExtractionError(YtGrabError):
    """Raised when the embedded data marker or its delimiter is missing."""

    title = "Failed to search YouTube"


class SchemaError(YtGrabError):
    """Raised when the embedded payload is unparseable or has moved."""

    title = "Failed to search YouTube"


class NoResultsError(YtGrabError):
    """Raised when a search produced no playable videos."""

    status_code = 404
    title = "No videos found"


# --- Format resolution -----------------------------------------------------

class NoFormatFoundError(YtGrabError):
    """Raised when no rendition offers the requested capabilities."""

    status_code = 404
    title = "No suitable format found"


class VideoUnavailableError(YtGrabError):
    """Raised when the target video is unavailable (private, removed, etc.)."""

    status_code = 404
    title = "Video unavailable"


# --- Upstream collaborators ------------------------------------------------

class FetchError(YtGrabError):
    """Raised when an upstream page or media request fails."""

    title = "Upstream request failed"


class ResolverError(YtGrabError):
    """Raised when yt-dlp fails to resolve video information."""

    title = "Failed to get video URL"


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(YtGrabError):
    """Raised when a required runtime dependency is not available."""


def append_ytdlp_upgrade_suggestion(hint: str) -> str:
    """Append yt-dlp upgrade guidance to an existing hint text.

    The suggestion is appended only once and preserves the original
    hint content verbatim.
    """
    marker = "Also try updating yt-dlp:"
    if marker in hint:
        return hint
    return "\n".join(
        (
            hint,
            marker,
            "    pip install --upgrade yt-dlp",
        )
    )
