"""
Sailor schedule: sailing-class events from the sailor.co.il students page.
"""

from sailor.model import EventRecord
from sailor.parse import DocumentParseError, parse_sailing_events, validate_sailing_content

__all__ = [
    "EventRecord",
    "DocumentParseError",
    "parse_sailing_events",
    "validate_sailing_content",
]
