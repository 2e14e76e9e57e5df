# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Single-page fetch capability used by the extraction loop.

The loop only needs "URL in, rendered HTML out". ``BrowserFetcher`` backs
it with a live Playwright page; tests substitute recorded HTML.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from .browser_session import BrowserSession

logger = logging.getLogger(__name__)


@runtime_checkable
class PageFetcher(Protocol):
    async def fetch(self, url: str) -> str:
        """Return the rendered HTML of *url*."""
        ...


class BrowserFetcher:
    """Navigate the session's page to each URL and return its rendered HTML."""

    def __init__(self, session: BrowserSession, *, timeout_ms: int = 10000, settle_ms: int = 1000):
        self.session = session
        self.timeout_ms = timeout_ms
        self.settle_ms = settle_ms

    async def fetch(self, url: str) -> str:
        nav = await self.session.navigate(url, timeout_ms=self.timeout_ms)
        logger.debug("Loaded %s (status=%s)", nav.url, nav.http_status)
        await self.session.settle(self.settle_ms)
        return await self.session.get_page_html()
