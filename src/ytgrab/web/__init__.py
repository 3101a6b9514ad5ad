"""Web layer — Flask application, routes and the HTTP error boundary.

This package is an outer layer: it may import from ``core``, ``infra``
and ``utils``, but no other layer may import from ``web``.
"""

from ytgrab.web.app import create_app

__all__: list[str] = ["create_app"]
