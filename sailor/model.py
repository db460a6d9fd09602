"""
Central data model definitions used across the project.

This module defines the canonical structure of a sailing EventRecord so that:
- the parser, the providers, the HTTP endpoint and the CLI share the same field names
- every record serializes to the same camelCase JSON schema the web client reads
- absent values are always empty strings (never None)
"""

from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Any, Dict


# Event categories shown as the two display groups
EVENT_TYPE_PRE_PRACTICAL = "טרום מעשי"
EVENT_TYPE_STUDENTS = "תלמידים"

# Day index (0 = Sunday) -> Hebrew abbreviation with geresh
HEBREW_DAYS = ("א׳", "ב׳", "ג׳", "ד׳", "ה׳", "ו׳", "ש׳")

# Python attribute -> JSON key
_WIRE_KEYS = {
    "title": "title",
    "date": "date",
    "start_time": "startTime",
    "end_time": "endTime",
    "day_of_week": "dayOfWeek",
    "description": "description",
    "boat": "boat",
    "branch": "branch",
    "pier": "pier",
    "event_type": "eventType",
    "more_url": "moreUrl",
    "order_url": "orderUrl",
    "price": "price",
}


@dataclass(frozen=True)
class EventRecord:
    """
    Represents one scheduled sailing session as listed on the sailor.co.il site.

    Each EventRecord corresponds to exactly one event box on the page.
    """

    title: str = ""
    date: str = ""
    start_time: str = ""
    end_time: str = ""
    day_of_week: str = ""
    description: str = ""
    boat: str = ""
    branch: str = ""
    pier: str = ""
    event_type: str = EVENT_TYPE_STUDENTS
    more_url: str = ""
    order_url: str = ""
    price: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {_WIRE_KEYS[f.name]: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EventRecord":
        """
        Build a record from its JSON form. Missing or null keys become "".
        """
        values: Dict[str, str] = {}
        for attr, key in _WIRE_KEYS.items():
            raw = data.get(key)
            values[attr] = "" if raw is None else str(raw)
        if not values["event_type"]:
            values["event_type"] = EVENT_TYPE_STUDENTS
        return cls(**values)
