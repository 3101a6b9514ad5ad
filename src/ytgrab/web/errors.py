"""HTTP error boundary.

Maps :class:`~ytgrab.exceptions.YtGrabError` subclasses to their status
codes and renders every failure as ``{"error": ..., "message": ...}``.
Unexpected exceptions are logged with a traceback and answered with a
generic 500 body.
"""

from __future__ import annotations

import logging
from typing import Any

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from ytgrab.exceptions import YtGrabError

logger = logging.getLogger(__name__)


def error_body(title: str, message: str, hint: str | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"error": title, "message": message}
    if hint:
        body["hint"] = hint
    return body


def register_error_handlers(app: Flask) -> None:
    """Install the JSON error handlers on *app*."""

    @app.errorhandler(YtGrabError)
    def handle_ytgrab_error(exc: YtGrabError):
        if exc.status_code >= 500:
            logger.warning("%s: %s", type(exc).__name__, exc)
        else:
            logger.info("%s: %s", type(exc).__name__, exc)
        return jsonify(error_body(exc.title, str(exc), exc.hint)), exc.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(exc: HTTPException):
        return jsonify(error_body(exc.name, exc.description or "")), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        logger.exception("Unhandled application error")
        return jsonify(error_body("Server Error", str(exc))), 500
