"""
Configuration: fixed URLs and paths plus environment-driven settings.

Fixed values are plain module constants. Anything that may differ per
deployment (API key, page export path, fetch timeout) lives on `settings`,
read from the environment once at import time.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

PACKAGE_DIR = Path(__file__).resolve().parent
DATA_DIR = PACKAGE_DIR / "data"
BUNDLED_HTML_PATH = DATA_DIR / "sailor-website-export.html"


# ---------------------------------------------------------------------------
# URLs
# ---------------------------------------------------------------------------

# Relative links on the page are resolved against the site root
SITE_URL = "https://sailor.co.il/"
TARGET_URL = "https://sailor.co.il/הפלגותתלמידים"

SCRAPINGBEE_URL = "https://app.scrapingbee.com/api/v1/"

# The site renders the schedule with JS and blocks non-Israeli traffic
SCRAPINGBEE_OPTIONS = {
    "render_js": "true",
    "wait": "3000",
    "premium_proxy": "true",
    "country_code": "il",
}


# ---------------------------------------------------------------------------
# Provider selection
# ---------------------------------------------------------------------------

PROVIDER_STATIC = "static"
PROVIDER_SCRAPINGBEE = "scrapingbee"
DEFAULT_PROVIDER = PROVIDER_STATIC


# ---------------------------------------------------------------------------
# Environment settings
# ---------------------------------------------------------------------------


class Settings(BaseSettings):
    scrapingbee_api_key: str = ""
    sailor_html_file: Path = BUNDLED_HTML_PATH
    sailor_fetch_timeout: float = Field(default=60.0, gt=0)

    @field_validator("scrapingbee_api_key", mode="before")
    @classmethod
    def strip_api_key(cls, v: str) -> str:
        return (v or "").strip()

    @field_validator("sailor_html_file", mode="before")
    @classmethod
    def default_empty_html_file(cls, v):
        if v is None or not str(v).strip():
            return BUNDLED_HTML_PATH
        return v

    model_config = {"env_prefix": "", "case_sensitive": False}


settings = Settings()
