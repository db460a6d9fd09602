"""
Service layer: runs one provider and wraps the result in the response envelope.

Envelope on success:
    {"success": true, "events": [...], "contentFound": bool, "provider": str, "timestamp": str}

Envelope on failure:
    {"success": false, "error": str, "message": str, "provider": str, "timestamp": str}

The service never raises for provider or parse failures; callers decide
what to do with success == False.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sailor.parse import DocumentParseError
from sailor.providers import BaseProvider, ProviderError

logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    """
    Current UTC time as ISO-8601 with milliseconds and a 'Z' suffix.
    """
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class SailorService:
    """
    Fetches sailing events through an exchangeable provider.
    """

    def __init__(self, provider: Optional[BaseProvider] = None):
        self.provider = provider

    def set_provider(self, provider: BaseProvider) -> None:
        self.provider = provider

    @property
    def provider_name(self) -> str:
        return self.provider.name if self.provider is not None else "None"

    def get_sailing_events(self) -> Dict[str, Any]:
        if self.provider is None:
            return {
                "success": False,
                "error": "No provider configured",
                "message": "Sailing data provider is not configured",
                "timestamp": utc_timestamp(),
            }

        name = self.provider_name
        logger.info("Using %s provider to fetch sailing data", name)

        try:
            events = self.provider.get_sailing_events()
        except ProviderError as exc:
            logger.error("%s provider error: %s", name, exc.details)
            return self._failure(exc.details)
        except DocumentParseError as exc:
            logger.error("%s returned unparseable HTML: %s", name, exc)
            return self._failure(str(exc))

        return {
            "success": True,
            "events": [e.to_dict() for e in events],
            "contentFound": len(events) > 0,
            "provider": name,
            "timestamp": utc_timestamp(),
        }

    def _failure(self, error: str) -> Dict[str, Any]:
        return {
            "success": False,
            "error": error,
            "message": f"Failed to fetch sailing data from {self.provider_name}",
            "provider": self.provider_name,
            "timestamp": utc_timestamp(),
        }
