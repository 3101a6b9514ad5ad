"""CLI layer — argument parsing, user interaction, and error boundary.

This package is the outermost layer of the application.  It may import
from ``core``, ``infra``, ``web`` and ``utils``, but no other layer may
import from ``cli``.
"""
