"""
Display helpers: filtering, grouping and plain-text output of sailing events.

Mirrors what the web page does with the API result:
- events are filtered by branch and category (empty selection = no filter)
- the remaining events are shown in two fixed groups, students first
- the filter state round-trips through the query string (?branch=...&category=...)
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple
from urllib.parse import parse_qs, urlencode

from sailor.model import EVENT_TYPE_PRE_PRACTICAL, EVENT_TYPE_STUDENTS, EventRecord


CATEGORIES = (EVENT_TYPE_STUDENTS, EVENT_TYPE_PRE_PRACTICAL)

GROUP_TITLES = {
    EVENT_TYPE_STUDENTS: "הפלגות תלמידים",
    EVENT_TYPE_PRE_PRACTICAL: "הפלגות טרום מעשי",
}

NO_EVENTS_TEXT = "לא נמצאו הפלגות"
EMPTY_GROUP_TEXT = "אין הפלגות זמינות מקטגוריה זו."


def split_csv(value: str) -> List[str]:
    return [x.strip() for x in value.split(",") if x.strip()]


def unique_branches(events: Iterable[EventRecord]) -> List[str]:
    """
    Sorted, de-duplicated branch names (records without a branch are skipped).
    """
    return sorted({e.branch for e in events if e.branch})


def filters_from_query(query: str) -> Tuple[List[str], List[str]]:
    """
    Read (branches, categories) from a query string.

    Missing 'category' means both categories are selected.
    """
    params = parse_qs(query.lstrip("?"))

    branch_raw = params.get("branch", [""])[0]
    category_raw = params.get("category", [""])[0]

    branches = split_csv(branch_raw)
    categories = split_csv(category_raw) if category_raw else list(CATEGORIES)
    return branches, categories


def filters_to_query(branches: Sequence[str], categories: Sequence[str]) -> str:
    """
    Inverse of filters_from_query; empty selections are left out.
    """
    params: List[Tuple[str, str]] = []
    if branches:
        params.append(("branch", ",".join(branches)))
    if categories:
        params.append(("category", ",".join(categories)))
    return urlencode(params)


def filter_events(
    events: Iterable[EventRecord],
    branches: Sequence[str] = (),
    categories: Sequence[str] = (),
) -> List[EventRecord]:
    out = list(events)
    if branches:
        out = [e for e in out if e.branch in branches]
    if categories:
        out = [e for e in out if e.event_type in categories]
    return out


def group_events(events: Iterable[EventRecord]) -> List[Tuple[str, List[EventRecord]]]:
    """
    Split events into the two display groups, keeping page order inside each.

    Both groups are always returned, even when empty.
    """
    events = list(events)
    return [(GROUP_TITLES[cat], [e for e in events if e.event_type == cat]) for cat in CATEGORIES]


def format_event(ev: EventRecord) -> str:
    """
    Multi-line text block for one event.
    """
    lines = [
        ev.title,
        f"  תאריך: {ev.date} ({ev.day_of_week or '—'})",
        f"  שעות: {ev.start_time} - {ev.end_time}",
        f"  סניף: {ev.branch} | רציף: {ev.pier}",
        f"  כלי שייט: {ev.boat}",
    ]
    if ev.price:
        lines.append(f"  מחיר: {ev.price}")
    if ev.description:
        lines.append(f"  {ev.description}")
    if ev.more_url:
        lines.append(f"  לפרטים נוספים: {ev.more_url}")
    if ev.order_url:
        lines.append(f"  להזמנה: {ev.order_url}")
    return "\n".join(lines)


def render_text(
    events: Iterable[EventRecord],
    branches: Sequence[str] = (),
    categories: Sequence[str] = (),
) -> str:
    """
    Filter, group and format events for the terminal.
    """
    filtered = filter_events(events, branches, categories)
    if not filtered:
        return NO_EVENTS_TEXT

    blocks: List[str] = []
    for title, group in group_events(filtered):
        blocks.append(f"== {title} ({len(group)}) ==")
        if not group:
            blocks.append(EMPTY_GROUP_TEXT)
            continue
        blocks.extend(format_event(ev) for ev in group)

    return "\n\n".join(blocks)
