"""CLI console and logging helpers.

A single Rich console targeting stderr is shared by user-facing output
and the log handler, so progress messages and log records interleave
cleanly.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

console = Console(stderr=True)

_NOISY_LOGGERS: tuple[str, ...] = ("urllib3",)


def configure_logging(level: str = "INFO") -> None:
	"""Route the root logger through a :class:`RichHandler`.

	Calling this more than once replaces the previous handler instead of
	stacking duplicates.
	"""
	numeric = logging.getLevelName(level.upper())
	if not isinstance(numeric, int):
		numeric = logging.INFO

	handler = RichHandler(console=console, rich_tracebacks=True, show_path=False)
	handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

	root = logging.getLogger()
	for existing in list(root.handlers):
		if isinstance(existing, RichHandler):
			root.removeHandler(existing)
	root.addHandler(handler)
	root.setLevel(numeric)

	for name in _NOISY_LOGGERS:
		logging.getLogger(name).setLevel(max(numeric, logging.WARNING))
