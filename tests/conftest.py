"""Shared pytest fixtures and configuration for the ytgrab test suite.

Guidelines
----------
* No internet access in any test.
* requests sessions and yt-dlp must be mocked at the infra boundary.
* Core tests must be pure — no side effects.
* HTML fixtures are built with the helpers in ``pages.py``.
"""

from __future__ import annotations
