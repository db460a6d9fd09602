"""
Tests for the HTML providers.

Provider contract:
- fetch -> validate -> parse
- page without sailing markers -> []
- file / network problems -> ProviderError (never a parse error)
"""

import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

import requests

from sailor import config
from sailor.providers import (
    ProviderError,
    ScrapingBeeProvider,
    StaticHTMLProvider,
    make_provider,
)


def _http_error_response(status: int, body: bytes) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp._content = body
    resp.url = config.SCRAPINGBEE_URL
    return resp


class TestStaticHTMLProvider(unittest.TestCase):
    def test_reads_bundled_export(self) -> None:
        provider = StaticHTMLProvider(config.DATA_DIR / "sailor-website-export.html")
        events = provider.get_sailing_events()
        self.assertEqual(len(events), 3)
        self.assertEqual(provider.name, "StaticHTML")

    def test_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            provider = StaticHTMLProvider(Path(d) / "missing.html")
            with self.assertRaises(ProviderError) as ctx:
                provider.get_sailing_events()
        self.assertIn("Failed to read HTML file", ctx.exception.message)
        self.assertEqual(ctx.exception.provider, "StaticHTML")

    def test_unrelated_page_gives_no_events(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "error.html"
            p.write_text("<html><body><h1>Not Found</h1></body></html>", encoding="utf-8")
            self.assertEqual(StaticHTMLProvider(p).get_sailing_events(), [])


class TestScrapingBeeProvider(unittest.TestCase):
    def test_fetch_uses_render_and_proxy_options(self) -> None:
        html = (config.DATA_DIR / "sailor-website-export.html").read_text(encoding="utf-8")
        resp = MagicMock()
        resp.text = html
        session = MagicMock()
        session.get.return_value = resp

        provider = ScrapingBeeProvider(api_key="test-key", session=session, timeout=5)
        events = provider.get_sailing_events()

        self.assertEqual(len(events), 3)
        args, kwargs = session.get.call_args
        self.assertEqual(args[0], config.SCRAPINGBEE_URL)
        self.assertEqual(kwargs["timeout"], 5)
        params = kwargs["params"]
        self.assertEqual(params["api_key"], "test-key")
        self.assertEqual(params["url"], config.TARGET_URL)
        self.assertEqual(params["render_js"], "true")
        self.assertEqual(params["premium_proxy"], "true")
        self.assertEqual(params["country_code"], "il")
        resp.raise_for_status.assert_called_once()

    def test_missing_api_key(self) -> None:
        session = MagicMock()
        provider = ScrapingBeeProvider(api_key="", session=session)
        with self.assertRaises(ProviderError):
            provider.fetch_html()
        session.get.assert_not_called()

    def test_http_error_details(self) -> None:
        session = MagicMock()
        session.get.return_value = _http_error_response(403, b'{"message": "forbidden"}')

        provider = ScrapingBeeProvider(api_key="k", session=session)
        with self.assertRaises(ProviderError) as ctx:
            provider.fetch_html()

        self.assertEqual(ctx.exception.details, 'Status: 403, Data: {"message": "forbidden"}')
        self.assertEqual(ctx.exception.provider, "ScrapingBee")

    def test_connection_error(self) -> None:
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("connection refused")

        provider = ScrapingBeeProvider(api_key="k", session=session)
        with self.assertRaises(ProviderError) as ctx:
            provider.fetch_html()
        self.assertEqual(ctx.exception.details, "connection refused")


class TestMakeProvider(unittest.TestCase):
    def test_default_is_static(self) -> None:
        self.assertIsInstance(make_provider(None), StaticHTMLProvider)
        self.assertIsInstance(make_provider("static"), StaticHTMLProvider)
        self.assertIsInstance(make_provider("something-else"), StaticHTMLProvider)

    def test_scrapingbee_reads_key_from_settings(self) -> None:
        with patch.object(config.settings, "scrapingbee_api_key", "env-key"):
            provider = make_provider("ScrapingBee")
        self.assertIsInstance(provider, ScrapingBeeProvider)
        self.assertEqual(provider.api_key, "env-key")

    def test_static_with_custom_path(self) -> None:
        provider = make_provider("static", html_file_path="/tmp/page.html")
        self.assertEqual(provider.html_file_path, Path("/tmp/page.html"))


if __name__ == "__main__":
    unittest.main()
