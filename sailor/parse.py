"""
Parsing (HTML -> structured event records).

- Takes the raw HTML of the sailor.co.il students schedule page
- Finds every event box (both the normal and the misspelled box markup)
- Extracts EACH box as exactly ONE EventRecord
- Boxes without a title are dropped

Important rules (DO NOT CHANGE):
- 1 event box = 1 record
- Missing elements are never an error, they become ""
- dayOfWeek comes only from the date, eventType only from the title
"""

from __future__ import annotations

import argparse
import json
import logging
import re
import sys
from datetime import date, timedelta
from pathlib import Path
from typing import List, Optional, Tuple
from urllib.parse import urljoin

from bs4 import BeautifulSoup, ParserRejectedMarkup, Tag

from sailor.config import SITE_URL
from sailor.model import (
    EVENT_TYPE_PRE_PRACTICAL,
    EVENT_TYPE_STUDENTS,
    HEBREW_DAYS,
    EventRecord,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Markup constants
# ---------------------------------------------------------------------------

# The live site renders some boxes as "siingle-yachts-box" (sic)
BOX_SELECTOR = (
    ".single-yachts-box-sails .yachts-box, "
    ".siingle-yachts-box.single-yachts-box-sails"
)

CONTENT_MARKERS = (
    "single-yachts-box-sails",
    "yachts-box",
    "siingle-yachts-box",
    "הפלגות",
    "sailing",
)

# Label keyword -> record field. First match wins.
META_LABELS = (
    ("כלי השייט", "boat"),
    ("סניף", "branch"),
    ("רציף", "pier"),
)

# The value span has no class of its own, it is "the span that is not
# the label and not one of the boat icons"
META_VALUE_SELECTOR = (
    "span:not(.messages)"
    ":not(.flaticon-boat-1)"
    ":not(.flaticon-boat-2)"
    ":not(.flaticon-boat-3)"
)

PRE_PRACTICAL_TOKEN = "טרום"

DATE_TIME_RE = re.compile(
    r"(\d{2}/\d{2}/\d{4})\s+(\d{2}:\d{2})\s*-\s*(\d{2}:\d{2})",
    re.ASCII,
)


class DocumentParseError(ValueError):
    """
    Raised when a document cannot be turned into an HTML tree at all.
    """


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _text(el: Optional[Tag]) -> str:
    """
    Trimmed text content of an element, "" if the element is missing.

    Uses the plain concatenated text (like DOM textContent) so that
    inline markup does not swallow the spaces between words.
    """
    if el is None:
        return ""
    return el.get_text().strip()


def _href(el: Optional[Tag], base_url: str) -> str:
    """
    Absolute href of a link element, "" if the element or href is missing.
    """
    if el is None:
        return ""
    href = el.get("href")
    if not href:
        return ""
    href = str(href).strip()
    if not base_url:
        return href
    return urljoin(base_url, href)


# ---------------------------------------------------------------------------
# Content validation
# ---------------------------------------------------------------------------


def validate_sailing_content(html: str) -> bool:
    """
    Cheap pre-check: does the raw HTML look like the sailing schedule page?

    Only substring tests, no parsing. An error page or unrelated HTML
    contains none of the markers.
    """
    ok = any(marker in html for marker in CONTENT_MARKERS)
    if ok:
        logger.debug("Sailing content markers found (%d chars)", len(html))
    else:
        logger.info("No sailing content markers found (%d chars)", len(html))
    return ok


# ---------------------------------------------------------------------------
# Document / candidate selection
# ---------------------------------------------------------------------------


def parse_document(html: str | bytes) -> BeautifulSoup:
    """
    Parse raw markup into a BeautifulSoup tree.

    Raises DocumentParseError if the input is not markup text or the
    parser rejects it.
    """
    if not isinstance(html, (str, bytes)):
        raise DocumentParseError(f"Expected HTML text, got {type(html).__name__}")
    try:
        return BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as exc:
        raise DocumentParseError(f"Could not parse HTML: {exc}") from exc


def select_candidates(soup: BeautifulSoup | Tag) -> List[Tag]:
    """
    Return all event boxes in document order (empty list if none).
    """
    return list(soup.select(BOX_SELECTOR))


# ---------------------------------------------------------------------------
# Date / time
# ---------------------------------------------------------------------------


def parse_date_time(box: Tag) -> Tuple[str, str, str]:
    """
    Read '27/10/2025 14:00 - 16:00' from the date label.

    Returns (date, start_time, end_time) exactly as written on the page,
    or three empty strings if the label is missing or does not match.
    """
    label = box.select_one(".sail-time-date-label")
    if label is None:
        return "", "", ""

    # The label is split over several lines/spans in the markup
    text = " ".join(label.get_text().split())

    match = DATE_TIME_RE.search(text)
    if not match:
        return "", "", ""

    return match.group(1), match.group(2), match.group(3)


def day_of_week(date_str: str) -> str:
    """
    Hebrew day abbreviation for a 'DD/MM/YYYY' date ('' for empty input).

    Computed from the given date only, never from today's date.
    Out-of-range days and months roll over like a calendar would
    (31/02/2025 is read as 03/03/2025). Non-numeric input gives ''.
    """
    if not date_str:
        return ""

    parts = date_str.split("/")
    if len(parts) != 3:
        return ""

    try:
        day, month, year = (int(p) for p in parts)
        year += (month - 1) // 12
        month = (month - 1) % 12 + 1
        weekday = (date(year, month, 1) + timedelta(days=day - 1)).weekday()
    except (ValueError, OverflowError):
        return ""

    # date.weekday(): Monday = 0 ... Sunday = 6; the table starts on Sunday
    return HEBREW_DAYS[(weekday + 1) % 7]


# ---------------------------------------------------------------------------
# Meta list (boat / branch / pier)
# ---------------------------------------------------------------------------


def parse_meta_data(box: Tag) -> Tuple[str, str, str]:
    """
    Extract (boat, branch, pier) from the box's meta list.

    Each <li class="main-items"> holds an icon span, a label span
    (class "messages") and the value span. The label text decides
    which field the value belongs to; unknown labels are ignored.
    """
    found = {"boat": "", "branch": "", "pier": ""}

    meta_list = box.select_one("ul.meta-list-sail")
    if meta_list is None:
        return found["boat"], found["branch"], found["pier"]

    # </li> is optional in HTML; unclosed items end up nested in the previous one
    for li in meta_list.select("li.main-items"):
        label = _text(li.select_one("span.messages"))
        value = _text(li.select_one(META_VALUE_SELECTOR))

        for keyword, field in META_LABELS:
            if keyword in label:
                found[field] = value
                break

    return found["boat"], found["branch"], found["pier"]


# ---------------------------------------------------------------------------
# Event box parsing (CORE LOGIC)
# ---------------------------------------------------------------------------


def classify_event_type(title: str) -> str:
    """
    "טרום מעשי" if the title mentions "טרום", otherwise "תלמידים".
    """
    if PRE_PRACTICAL_TOKEN in title:
        return EVENT_TYPE_PRE_PRACTICAL
    return EVENT_TYPE_STUDENTS


def parse_event_box(box: Tag, base_url: str = SITE_URL) -> EventRecord:
    """
    Parses exactly one event box into exactly one EventRecord.

    Every field is looked up on its own; a missing element only
    empties that field.
    """
    title = _text(box.find("h2"))

    date_str, start_time, end_time = parse_date_time(box)
    boat, branch, pier = parse_meta_data(box)

    return EventRecord(
        title=title,
        date=date_str,
        start_time=start_time,
        end_time=end_time,
        day_of_week=day_of_week(date_str),
        description=_text(box.select_one("span.text-truncate")),
        boat=boat,
        branch=branch,
        pier=pier,
        event_type=classify_event_type(title),
        more_url=_href(box.select_one("a.btn-more-detail"), base_url),
        order_url=_href(box.select_one("a.btn-cart"), base_url),
        price=_text(box.select_one(".sail-price")),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_sailing_events(html: str | bytes, base_url: str = SITE_URL) -> List[EventRecord]:
    """
    Parses a whole schedule page and returns the records in page order.
    """
    soup = parse_document(html)
    boxes = select_candidates(soup)

    logger.info("Found %d sailing boxes", len(boxes))
    if not boxes:
        return []

    events: List[EventRecord] = []
    for index, box in enumerate(boxes, start=1):
        event = parse_event_box(box, base_url=base_url)
        if not event.title:
            logger.debug("Skipping box %d: no title", index)
            continue
        logger.debug("Parsed box %d: %s", index, event.title)
        events.append(event)

    logger.info("Parsed %d events (%d boxes without title)", len(events), len(boxes) - len(events))
    return events


def parse_html_file(path: Path, base_url: str = SITE_URL) -> List[EventRecord]:
    """
    Reads a saved schedule page from disk and parses it.
    """
    html = Path(path).read_text(encoding="utf-8")
    return parse_sailing_events(html, base_url=base_url)


def events_to_json(events: List[EventRecord]) -> str:
    return json.dumps([e.to_dict() for e in events], ensure_ascii=False, indent=2)


# ---------------------------------------------------------------------------
# CLI connection
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    # Argument parser for CLI usage
    p = argparse.ArgumentParser(
        prog="sailor.parse",
        description="Parse a saved sailor.co.il schedule page into JSON",
    )

    p.add_argument("--html", type=Path, required=True, help="Saved HTML page")

    # Optional output file; stdout if omitted
    p.add_argument("--out", type=Path, default=None)

    p.add_argument("--base-url", type=str, default=SITE_URL, help="Base URL for relative links")

    return p


def main(argv: list[str] | None = None) -> None:
    # Parse CLI arguments
    args = build_parser().parse_args(argv)

    try:
        events = parse_html_file(args.html, base_url=args.base_url)
    except FileNotFoundError:
        print(f"File not found: {args.html}")
        raise SystemExit(1)
    except (OSError, UnicodeDecodeError, DocumentParseError) as exc:
        print(f"Could not parse {args.html}: {exc}")
        raise SystemExit(1)

    payload = events_to_json(events)

    if args.out is None:
        sys.stdout.write(payload + "\n")
        return

    args.out.parent.mkdir(parents=True, exist_ok=True)
    args.out.write_text(payload, encoding="utf-8")
    print(f"Parsing finished. {len(events)} events written to {args.out.resolve()}")


# Entry point for CLI execution
if __name__ == "__main__":
    main()
