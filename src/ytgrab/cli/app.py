"""CLI application entry point and command routing for ytgrab.

This module is the **sole error boundary** for command-line use.  It
catches :class:`~ytgrab.exceptions.YtGrabError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core/service,
  infrastructure and web layers.
* Machine-readable output (JSON, URLs) goes to stdout; everything else is
  rendered on the stderr Rich console.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import logging
import sys

from ytgrab.cli import exit_codes
from ytgrab.cli.console import configure_logging, console
from ytgrab.config import Settings
from ytgrab.exceptions import YtGrabError
from ytgrab.version import __version__

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    * ``ytgrab serve``              — run the HTTP API
    * ``ytgrab search <query>``     — one-off search
    * ``ytgrab resolve <video_id>`` — print the selected media URL
    * ``ytgrab doctor``             — environment diagnostics
    * ``ytgrab --version``
    """
    parser = argparse.ArgumentParser(
        prog="ytgrab",
        description="YouTube search scraping and download-redirect service.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: $YTGRAB_LOG_LEVEL or INFO).",
    )
    commands = parser.add_subparsers(dest="command")

    serve = commands.add_parser("serve", help="Run the HTTP API server.")
    serve.add_argument("--host", default=None, help="Bind address.")
    serve.add_argument("--port", type=int, default=None, help="Listen port.")
    serve.add_argument(
        "--base-url",
        default=None,
        help="Public URL prefix used in download links.",
    )
    serve.add_argument("--debug", action="store_true", help="Enable Flask debug mode.")

    search = commands.add_parser("search", help="Search YouTube and list videos.")
    search.add_argument("query", help="Search terms.")
    search.add_argument("--json", action="store_true", help="Print JSON to stdout.")

    resolve = commands.add_parser("resolve", help="Print the best media URL for a video.")
    resolve.add_argument("video_id", help="YouTube video ID.")
    resolve.add_argument(
        "-f",
        "--format",
        choices=("mp4", "mp3"),
        default="mp4",
        help="mp4 (video with audio) or mp3 (audio only).",
    )

    commands.add_parser("doctor", help="Run environment diagnostics.")
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_serve(settings: Settings, args: argparse.Namespace) -> int:
    """Build the Flask app and run it until interrupted."""
    from ytgrab.web.app import create_app

    settings = settings.with_overrides(
        host=args.host,
        port=args.port,
        base_url=args.base_url,
    )
    app = create_app(settings)
    logger.info("Serving on %s:%d (links use %s)", settings.host, settings.port, settings.public_url)
    app.run(host=settings.host, port=settings.port, debug=args.debug)
    return exit_codes.SUCCESS


def _handle_search(settings: Settings, args: argparse.Namespace) -> int:
    """Run one search and render the results."""
    from ytgrab.cli.results import display_results, results_as_json
    from ytgrab.core.search_service import SearchService
    from ytgrab.infra.http_fetcher import RequestsPageFetcher

    service = SearchService(
        RequestsPageFetcher(
            timeout=settings.request_timeout,
            user_agent=settings.user_agent,
            accept_language=settings.accept_language,
        )
    )
    response = service.search(args.query)

    if args.json:
        print(results_as_json(response))
        return exit_codes.SUCCESS

    if not response:
        console.print("[yellow]No videos found.[/yellow]")
        return exit_codes.GENERAL_ERROR

    display_results(response)
    return exit_codes.SUCCESS


def _handle_resolve(settings: Settings, args: argparse.Namespace) -> int:
    """Resolve a video ID and print the selected rendition URL."""
    from ytgrab.cli.results import display_target
    from ytgrab.core.download_service import DownloadService
    from ytgrab.core.models import FormatKind
    from ytgrab.infra.ytdlp_provider import YtDlpInfoProvider

    service = DownloadService(YtDlpInfoProvider(user_agent=settings.user_agent))
    console.print(f"\n[bold]Resolving formats…[/bold]  {args.video_id}")
    target = service.resolve(args.video_id, FormatKind.from_format(args.format))

    display_target(target)
    print(target.rendition.url)
    return exit_codes.SUCCESS


def _handle_doctor() -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from ytgrab.cli.doctor import run_doctor

    return run_doctor()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the ytgrab CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    settings = Settings.from_env()
    configure_logging(args.log_level or settings.log_level)

    if args.command == "doctor":
        return _handle_doctor()
    if args.command == "search":
        return _handle_search(settings, args)
    if args.command == "resolve":
        return _handle_resolve(settings, args)
    return _handle_serve(settings, args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except YtGrabError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
