"""
Transport providers: where the schedule HTML comes from.

Two sources exist:
- StaticHTMLProvider  -> a saved copy of the page on disk (default, used for dev/tests)
- ScrapingBeeProvider -> the live page, rendered through the ScrapingBee API

Both hand the raw HTML to the same parser in sailor.parse.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

import requests

from sailor import config
from sailor.model import EventRecord
from sailor.parse import parse_sailing_events, validate_sailing_content

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """
    Raised when a provider cannot deliver HTML (file or network problem).
    """

    def __init__(self, message: str, provider: str, details: str = ""):
        super().__init__(message)
        self.message = message
        self.provider = provider
        # e.g. "Status: 403, Data: ..." for HTTP errors
        self.details = details or message


class BaseProvider(ABC):
    """
    Base class for all HTML sources.
    """

    name = "Base"

    @abstractmethod
    def fetch_html(self) -> str:
        """
        Return the raw schedule page as text or raise ProviderError.
        """
        ...

    def get_sailing_events(self) -> List[EventRecord]:
        """
        Fetch the page and parse it.

        Returns [] when the page does not look like the schedule page.
        """
        html = self.fetch_html()

        if not validate_sailing_content(html):
            logger.info("%s: no sailing content found", self.name)
            return []

        events = parse_sailing_events(html)
        logger.info("%s: parsed %d sailing events", self.name, len(events))
        return events


# ---------------------------------------------------------------------------
# Static file
# ---------------------------------------------------------------------------


class StaticHTMLProvider(BaseProvider):
    """
    Reads the schedule page from a local HTML export.
    """

    name = "StaticHTML"

    def __init__(self, html_file_path: str | Path | None = None):
        self.html_file_path = Path(html_file_path) if html_file_path is not None else config.settings.sailor_html_file

    def fetch_html(self) -> str:
        logger.info("Reading HTML from file: %s", self.html_file_path)
        try:
            html = self.html_file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Error reading static HTML file: %s", exc)
            raise ProviderError(f"Failed to read HTML file: {exc}", provider=self.name) from exc

        logger.info("Static HTML file read, length: %d", len(html))
        return html


# ---------------------------------------------------------------------------
# ScrapingBee (live site)
# ---------------------------------------------------------------------------


class ScrapingBeeProvider(BaseProvider):
    """
    Fetches the live page through ScrapingBee (JS rendering + Israeli proxy).
    """

    name = "ScrapingBee"

    def __init__(
        self,
        api_key: Optional[str] = None,
        target_url: str = config.TARGET_URL,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key if api_key is not None else config.settings.scrapingbee_api_key
        self.target_url = target_url
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else config.settings.sailor_fetch_timeout

    def _params(self) -> dict[str, str]:
        params = {"api_key": self.api_key, "url": self.target_url}
        params.update(config.SCRAPINGBEE_OPTIONS)
        return params

    def fetch_html(self) -> str:
        if not self.api_key:
            raise ProviderError(
                "ScrapingBee API key is not configured (set SCRAPINGBEE_API_KEY)",
                provider=self.name,
            )

        logger.info("Fetching %s through ScrapingBee", self.target_url)
        try:
            resp = self.session.get(config.SCRAPINGBEE_URL, params=self._params(), timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            details = str(exc)
            response = getattr(exc, "response", None)
            if response is not None:
                details = f"Status: {response.status_code}, Data: {_response_data(response)}"
            logger.error("ScrapingBee request failed: %s", details)
            raise ProviderError(f"ScrapingBee request failed: {exc}", provider=self.name, details=details) from exc

        html = resp.text
        logger.info("ScrapingBee response received, length: %d", len(html))
        return html


def _response_data(response: requests.Response) -> str:
    """
    Body of an error response, JSON-encoded like the API returns it.
    """
    try:
        return json.dumps(response.json(), ensure_ascii=False)
    except ValueError:
        return json.dumps(response.text, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------


def make_provider(provider_type: str | None = None, html_file_path: str | Path | None = None) -> BaseProvider:
    """
    'scrapingbee' -> live site, anything else -> static file.
    """
    kind = (provider_type or config.DEFAULT_PROVIDER).strip().lower()
    if kind == config.PROVIDER_SCRAPINGBEE:
        return ScrapingBeeProvider()
    return StaticHTMLProvider(html_file_path)
