"""``ytgrab doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment satisfies ytgrab's requirements.

This module lives in the CLI layer and renders via Rich.  No business
logic resides here; it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import platform
import sys
from importlib import metadata

from rich.table import Table

from ytgrab.cli import exit_codes
from ytgrab.cli.console import console
from ytgrab.version import __version__

OK: str = "[green]OK[/green]"
FAIL: str = "[red]FAIL[/red]"

# (row label, distribution name) for each required third-party package.
REQUIRED_PACKAGES: tuple[tuple[str, str], ...] = (
    ("yt-dlp", "yt-dlp"),
    ("Flask", "flask"),
    ("flask-cors", "flask-cors"),
    ("requests", "requests"),
)


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = OK if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _package_check(label: str, distribution: str) -> tuple[str, str, str]:
    """Return (label, value, status) for an installed distribution."""
    try:
        return label, metadata.version(distribution), OK
    except metadata.PackageNotFoundError:
        return label, "NOT INSTALLED", FAIL


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    return "OS", value, OK


def collect_checks() -> list[tuple[str, str, str]]:
    return [
        ("ytgrab", __version__, OK),
        _python_version_check(),
        *(_package_check(label, dist) for label, dist in REQUIRED_PACKAGES),
        _os_check(),
    ]


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor() -> int:
    """Execute all diagnostic checks and render a Rich summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all checks pass,
        :data:`exit_codes.GENERAL_ERROR` if any check fails.
    """
    checks = collect_checks()
    has_failure = any("FAIL" in status for _, _, status in checks)

    table = Table(
        title="ytgrab doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)

    for label, value, status in checks:
        table.add_row(label, value, status)

    console.print()
    console.print(table)
    console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
