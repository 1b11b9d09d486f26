"""Entry point for ``python -m smartcal``.

Subcommands:
    parse   -- Parse a dictated utterance into an event draft.
    suggest -- Suggest alternatives for an event.

Exit codes:
    0 -- Success (also when no subcommand is given; help is printed).
    1 -- A domain or configuration error (message on stderr).
    2 -- Argument parsing error (handled by argparse).
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import random
import sys
from datetime import datetime

from smartcal.config import SCORERS, ConfigError, load_settings
from smartcal.display import print_alternatives, print_draft
from smartcal.exceptions import SmartCalError
from smartcal.log import get_logger, setup_logging
from smartcal.models.event import Event, TimeWindow
from smartcal.resolver import AlternativeResolver
from smartcal.scoring import build_scorer
from smartcal.transcript import FileTranscriptSource, StaticTranscriptSource, capture_draft

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="smartcal",
        description="Parse dictated events and suggest alternatives.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # --- "parse" subcommand -------------------------------------------
    parse_parser = subparsers.add_parser(
        "parse",
        help="Parse an utterance such as 'Lunch with Bob on June 25 at 1pm'.",
    )
    source = parse_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("utterance", nargs="?", default=None, help="The utterance text.")
    source.add_argument("--file", type=str, default=None, help="Read the utterance from a file.")
    parse_parser.add_argument(
        "--now",
        type=str,
        default=None,
        help="Reference time (ISO 8601) instead of the current time.",
    )
    _add_verbose(parse_parser)

    # --- "suggest" subcommand -----------------------------------------
    suggest_parser = subparsers.add_parser(
        "suggest",
        help="Suggest alternatives for an event.",
    )
    suggest_parser.add_argument("--title", required=True, help="Event title.")
    suggest_parser.add_argument("--category", required=True, help="Event category.")
    suggest_parser.add_argument("--start", required=True, help="Event start (ISO 8601).")
    suggest_parser.add_argument("--end", required=True, help="Event end (ISO 8601).")
    suggest_parser.add_argument("--location", default=None, help="Event location.")
    suggest_parser.add_argument(
        "--smart",
        action="store_true",
        default=False,
        help="Use the personalised suggestion pool.",
    )
    suggest_parser.add_argument(
        "--prefer",
        action="append",
        default=[],
        metavar="TAG",
        help="Preference tag for --smart (repeatable).",
    )
    suggest_parser.add_argument(
        "--window-start",
        default=None,
        help="Start of the available slot for --smart (defaults to --start).",
    )
    suggest_parser.add_argument(
        "--window-end",
        default=None,
        help="End of the available slot for --smart (defaults to --end).",
    )
    suggest_parser.add_argument(
        "--scorer",
        choices=SCORERS,
        default=None,
        help="Confidence scorer (defaults to SMARTCAL_SCORER).",
    )
    suggest_parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the random scorer.",
    )
    _add_verbose(suggest_parser)

    return parser


def _add_verbose(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug-level logging.",
    )


def _parse_iso(value: str, option: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError as exc:
        raise SmartCalError(f"{option}: not an ISO 8601 datetime: {value!r}") from exc


def _handle_parse(args: argparse.Namespace) -> int:
    """Execute the ``parse`` subcommand."""
    now = _parse_iso(args.now, "--now") if args.now else None
    source = (
        FileTranscriptSource(args.file)
        if args.file is not None
        else StaticTranscriptSource(args.utterance)
    )
    draft = asyncio.run(capture_draft(source, now=now))
    print_draft(draft)
    return 0


def _handle_suggest(args: argparse.Namespace) -> int:
    """Execute the ``suggest`` subcommand."""
    settings = load_settings()
    if not args.verbose:
        setup_logging(settings.log_level)
    if args.scorer is not None:
        settings = dataclasses.replace(settings, scorer=args.scorer)

    event = Event.from_raw(
        {
            "title": args.title,
            "category": args.category,
            "start_time": args.start,
            "end_time": args.end,
            "location": args.location,
        }
    )

    rng = random.Random(args.seed) if args.seed is not None else None
    resolver = AlternativeResolver(scorer=build_scorer(settings, rng=rng))

    if args.smart:
        window = TimeWindow.from_raw(
            {
                "start": args.window_start or event.start_time,
                "end": args.window_end or event.end_time,
            }
        )
        response = resolver.suggest_smart_alternatives(event, args.prefer, window)
    else:
        response = resolver.generate_alternatives(event)

    print_alternatives(event, response)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the smartcal CLI.

    Args:
        argv: Command-line arguments.  Defaults to ``sys.argv[1:]``.

    Returns:
        Exit code: ``0`` on success, ``1`` on error.
    """
    parser = build_parser()
    args = parser.parse_args(argv if argv is not None else sys.argv[1:])

    if args.command is None:
        parser.print_help()
        return 0

    setup_logging("DEBUG" if args.verbose else "INFO")

    handlers = {"parse": _handle_parse, "suggest": _handle_suggest}
    try:
        return handlers[args.command](args)
    except (SmartCalError, ConfigError, FileNotFoundError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
