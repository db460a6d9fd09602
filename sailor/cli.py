"""
CLI (Command Line Interface).

This module provides quick terminal commands, e.g.:

    sailor events [--provider static|scrapingbee] [--branch ...] [--category ...]
    sailor parse <page.html> [--out events.json]
    sailor validate <page.html>
    sailor serve [--host ...] [--port ...]

Note:
- The HTTP endpoint lives in sailor/api.py
- This CLI prints plain text (or JSON with --json)
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from sailor import config
from sailor.display import CATEGORIES, render_text, split_csv, unique_branches
from sailor.model import EventRecord
from sailor.parse import DocumentParseError, events_to_json, parse_html_file, validate_sailing_content
from sailor.providers import make_provider
from sailor.service import SailorService


def _read_text(path: Path) -> str | None:
    """
    Read a file for the parse/validate commands.

    Returns None (after printing why) instead of raising, so the
    commands can exit with a clean error code.
    """
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        print(f"File not found: {path}")
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Could not read {path}: {exc}")
    return None


def _cmd_events(args: argparse.Namespace) -> int:
    """
    Fetch events through the service and print them grouped by category.
    """
    service = SailorService(make_provider(args.provider, html_file_path=args.html))
    result = service.get_sailing_events()

    if args.json:
        print(json.dumps(result, ensure_ascii=False, indent=2))
        return 0 if result["success"] else 1

    if not result["success"]:
        print(f"{result['message']}: {result['error']}")
        return 1

    events = [EventRecord.from_dict(e) for e in result["events"]]

    # same comma-separated format as the page's query string
    branches = split_csv(args.branch or "")
    categories = split_csv(args.category or "") or list(CATEGORIES)

    unknown = [c for c in categories if c not in CATEGORIES]
    if unknown:
        print(f"Unknown category: {', '.join(unknown)} (choose from: {', '.join(CATEGORIES)})")
        return 1

    print(f"Provider: {result['provider']} | events: {len(events)}")
    branch_list = unique_branches(events)
    if branch_list:
        print(f"Branches: {', '.join(branch_list)}")
    print()
    print(render_text(events, branches, categories))
    return 0


def _cmd_parse(args: argparse.Namespace) -> int:
    """
    Run the parser on a saved page and print/write JSON.
    """
    path = Path(args.file)
    if not path.exists():
        print(f"File not found: {path}")
        return 1

    try:
        events = parse_html_file(path, base_url=args.base_url)
    except (OSError, UnicodeDecodeError, DocumentParseError) as exc:
        print(f"Could not parse {path}: {exc}")
        return 1

    payload = events_to_json(events)

    out_path = (args.out or "").strip()
    if not out_path:
        print(payload)
        return 0

    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(payload, encoding="utf-8")
    print(f"Parsed {len(events)} events to: {out}")
    return 0


def _cmd_validate(args: argparse.Namespace) -> int:
    """
    Report whether a saved page looks like the sailing schedule.
    """
    html = _read_text(Path(args.file))
    if html is None:
        return 1

    if validate_sailing_content(html):
        print("Sailing content found.")
        return 0

    print("No sailing content found.")
    return 1


def _cmd_serve(args: argparse.Namespace) -> int:
    from sailor.api import serve

    serve(host=args.host, port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="sailor", description="Sailor sailing schedule CLI")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_events = sub.add_parser("events", help="Fetch and list sailing events")
    p_events.add_argument(
        "--provider",
        choices=[config.PROVIDER_STATIC, config.PROVIDER_SCRAPINGBEE],
        default=config.DEFAULT_PROVIDER,
        help="Where to read the schedule page from",
    )
    p_events.add_argument("--html", type=Path, default=None, help="HTML file for the static provider")
    p_events.add_argument("--branch", type=str, default="", help="Comma-separated branches to show")
    p_events.add_argument("--category", type=str, default="", help="Comma-separated categories to show")
    p_events.add_argument("--json", action="store_true", help="Print the raw JSON envelope")

    p_parse = sub.add_parser("parse", help="Parse a saved schedule page into JSON")
    p_parse.add_argument("file", type=str, help="Saved HTML page")
    p_parse.add_argument("--out", type=str, default="", help="Output file (default: stdout)")
    p_parse.add_argument("--base-url", type=str, default=config.SITE_URL, help="Base URL for relative links")

    p_validate = sub.add_parser("validate", help="Check that a page contains sailing content")
    p_validate.add_argument("file", type=str, help="Saved HTML page")

    p_serve = sub.add_parser("serve", help="Run the HTTP endpoint")
    p_serve.add_argument("--host", type=str, default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=8000)

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "events":
        raise SystemExit(_cmd_events(args))
    if args.command == "parse":
        raise SystemExit(_cmd_parse(args))
    if args.command == "validate":
        raise SystemExit(_cmd_validate(args))
    if args.command == "serve":
        raise SystemExit(_cmd_serve(args))

    raise SystemExit(2)
