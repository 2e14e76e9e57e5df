# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Scrape run configuration.

Browser launch settings live in ``browser_session.BrowserConfig``; this
module holds what to scrape, where to write it and how long to wait.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_LISTING_URL = "https://themes.gohugo.io"
DEFAULT_PATH_PREFIX = "/themes/"
DEFAULT_TITLE_PREFIX = "View details for "
DEFAULT_OUTPUT_DIR = Path("analysis")
DEFAULT_LIMIT = 10

STRUCTURE_REPORT_FILE = "themes-site-structure.json"
SCREENSHOT_FILE = "themes-site-screenshot.png"
THEMES_FILE = "themes-with-github.json"


@dataclass(frozen=True, slots=True)
class ScrapeConfig:
    """Immutable settings for one analyze/extract run."""

    listing_url: str = DEFAULT_LISTING_URL
    path_prefix: str = DEFAULT_PATH_PREFIX
    title_prefix: str = DEFAULT_TITLE_PREFIX
    output_dir: Path = DEFAULT_OUTPUT_DIR
    limit: int = DEFAULT_LIMIT
    listing_settle_ms: int = 2000  # pause after the listing page settles
    detail_settle_ms: int = 1000  # pause after each detail page settles
    request_delay_s: float = 1.0  # fixed pause between detail visits
    detail_timeout_ms: int = 10000
    scroll_listing: bool = False  # scroll to bottom before link discovery

    def __post_init__(self) -> None:
        if self.limit < 0:
            raise ValueError(f"limit must be >= 0, got {self.limit}")
        if self.listing_settle_ms < 0:
            raise ValueError(f"listing_settle_ms must be >= 0, got {self.listing_settle_ms}")
        if self.detail_settle_ms < 0:
            raise ValueError(f"detail_settle_ms must be >= 0, got {self.detail_settle_ms}")
        if self.request_delay_s < 0:
            raise ValueError(f"request_delay_s must be >= 0, got {self.request_delay_s}")
        if self.detail_timeout_ms <= 0:
            raise ValueError(f"detail_timeout_ms must be > 0, got {self.detail_timeout_ms}")
        if not self.path_prefix:
            raise ValueError("path_prefix must not be empty")

    @property
    def structure_report_path(self) -> Path:
        return Path(self.output_dir) / STRUCTURE_REPORT_FILE

    @property
    def screenshot_path(self) -> Path:
        return Path(self.output_dir) / SCREENSHOT_FILE

    @property
    def themes_path(self) -> Path:
        return Path(self.output_dir) / THEMES_FILE
