#!/usr/bin/env python3
"""CLI entry point for translating canonical calls into _kmq commands.

Usage:
    # Translate calls from a JSON-lines file
    PYTHONPATH=. python scripts/translate_events.py --input calls.jsonl

    # Read from stdin, tagging the session as a given user agent
    cat calls.jsonl | PYTHONPATH=. python scripts/translate_events.py --user-agent "iPhone"
"""
import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.kmq_core.api.routes import run_calls
from src.kmq_core.config import load_options, load_skip_page_view
from src.kmq_core.exceptions import OptionsError
from src.kmq_core.schemas.events import CanonicalCall


logger = logging.getLogger("translate_events")

_call_adapter = TypeAdapter(CanonicalCall)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def parse_calls(lines) -> list:
    """Parse one canonical call per non-blank line."""
    calls = []
    for line_no, line in enumerate(lines, start=1):
        line = line.strip()
        if not line:
            continue
        try:
            calls.append(_call_adapter.validate_json(line))
        except ValidationError as exc:
            raise ValueError(f"Invalid call on line {line_no}: {exc}") from exc
    return calls


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="KMQ canonical call translator")
    parser.add_argument(
        "--input",
        type=str,
        help="JSON-lines file of canonical calls. Defaults to stdin.",
    )
    parser.add_argument(
        "--user-agent",
        type=str,
        default="",
        help="User agent used for mobile session detection",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    setup_logging(args.verbose)

    try:
        options = load_options()
        skip_page_view = load_skip_page_view()
    except OptionsError as exc:
        logger.error("%s", exc)
        return 2

    if args.input:
        with open(args.input, encoding="utf-8") as handle:
            calls = parse_calls(handle)
    else:
        calls = parse_calls(sys.stdin)

    logger.info("Translating %s calls", len(calls))

    _, collector = run_calls(
        calls,
        options,
        user_agent=args.user_agent,
        skip_page_view=skip_page_view,
    )

    for command in collector.commands:
        print(json.dumps(list(command), default=str))
    for item in collector.objects:
        print(json.dumps(["KM.set", item], default=str))

    logger.info(
        "Done: %s commands, %s line items, %s page views",
        len(collector.commands),
        len(collector.objects),
        collector.page_views,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
