"""Rich rendering of search results and resolved downloads for the CLI.

All display-related logic lives here — no business logic, no fetching,
no parsing.
"""

from __future__ import annotations

import json

from rich.table import Table

from ytgrab.cli.console import console
from ytgrab.core.models import DownloadTarget, SearchResponse


# ---------------------------------------------------------------------------
# Presentation helpers (pure transforms — no I/O themselves)
# ---------------------------------------------------------------------------

def _format_bitrate(bitrate: float | None) -> str:
    """Render a bitrate as ``"128 kbps"`` or ``"—"`` when unknown."""
    if bitrate is None:
        return "—"
    return f"{bitrate:.0f} kbps"


def results_as_json(response: SearchResponse) -> str:
    return json.dumps(
        {
            "query": response.query,
            "results": [record.to_dict() for record in response.results],
        },
        indent=2,
        ensure_ascii=False,
    )


# ---------------------------------------------------------------------------
# Rich output
# ---------------------------------------------------------------------------

def display_results(response: SearchResponse) -> None:
    """Print a Rich table of the videos found for a query."""
    table = Table(
        title=f"Results for {response.query!r}",
        show_header=True,
        header_style="bold magenta",
        border_style="dim",
    )
    table.add_column("#", justify="right", style="dim", width=4)
    table.add_column("Title", justify="left", min_width=30)
    table.add_column("Channel", justify="left", min_width=12)
    table.add_column("Duration", justify="right", min_width=8)
    table.add_column("Views", justify="right", min_width=10)
    table.add_column("Video ID", justify="left", style="cyan", no_wrap=True)

    for i, record in enumerate(response.results, start=1):
        table.add_row(
            str(i),
            record.title,
            record.channel_name,
            record.duration_text,
            record.view_count_text,
            record.video_id,
        )

    console.print()
    console.print(table)
    console.print()


def display_target(target: DownloadTarget) -> None:
    """Print the rendition chosen for a download."""
    rendition = target.rendition
    console.print()
    console.print(f"[bold cyan]Title:[/bold cyan]     {target.title}")
    console.print(f"[bold cyan]File:[/bold cyan]      {target.filename}")
    console.print(f"[bold cyan]Container:[/bold cyan] {rendition.container or '—'}")
    console.print(f"[bold cyan]Quality:[/bold cyan]   {rendition.quality_label or '—'}")
    console.print(f"[bold cyan]Audio:[/bold cyan]     {_format_bitrate(rendition.audio_bitrate)}")
    console.print()
