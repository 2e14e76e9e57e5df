# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Playwright browser session management for themescout.

Manages the Chromium lifecycle for a single page: launch, navigation
with a network-idle wait, fixed settle pauses, HTML capture and
full-page screenshots.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from contextlib import suppress
from dataclasses import dataclass
from pathlib import Path

from playwright.async_api import (
    Browser,
    BrowserContext,
    Page,
    Playwright,
    async_playwright,
)
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .errors import BrowserError

logger = logging.getLogger(__name__)

DEFAULT_VIEWPORT = {"width": 1280, "height": 800}
DEFAULT_LOCALE = "en-US"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)


@dataclass
class BrowserConfig:
    """Browser launch configuration."""

    headless: bool = True
    locale: str = DEFAULT_LOCALE
    viewport_width: int = 1280
    viewport_height: int = 800
    user_agent: str = DEFAULT_USER_AGENT
    timeout_ms: int = 30000
    wait_until: str = "networkidle"


@dataclass(frozen=True, slots=True)
class NavigationResult:
    """Outcome of a page navigation."""

    url: str
    http_status: int | None = None


# ── Chromium auto-install ─────────────────────────────────────────

_chromium_install_attempted = False
_AUTO_INSTALL_TIMEOUT = 300  # seconds, Chromium is a ~140MB download


async def _auto_install_chromium() -> bool:
    """Run ``playwright install chromium`` once per process.

    Returns True if install succeeded, False otherwise.
    """
    global _chromium_install_attempted  # noqa: PLW0603
    if _chromium_install_attempted:
        return False
    _chromium_install_attempted = True

    logger.info("Chromium not found, running 'playwright install chromium' …")
    try:
        proc = await asyncio.create_subprocess_exec(
            sys.executable,
            "-m",
            "playwright",
            "install",
            "chromium",
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        _stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=_AUTO_INSTALL_TIMEOUT)
        if proc.returncode == 0:
            logger.info("Chromium installed successfully")
            return True
        logger.warning(
            "playwright install chromium failed (rc=%d): %s",
            proc.returncode,
            stderr.decode(errors="replace")[:500],
        )
        return False
    except TimeoutError:
        logger.warning("Chromium install timed out after %ds", _AUTO_INSTALL_TIMEOUT)
        return False
    except Exception:
        logger.warning("Chromium auto-install failed", exc_info=True)
        return False


def chromium_launch_args(config: BrowserConfig) -> list[str]:
    """Return Chromium launch arguments for a quiet scraping profile."""
    return [
        "--disable-blink-features=AutomationControlled",
        f"--lang={config.locale}",
        "--disable-extensions",
        "--disable-dev-shm-usage",
        "--disable-background-networking",
        "--disable-sync",
        "--no-first-run",
        "--disable-breakpad",
        "--noerrdialogs",
    ]


class BrowserSession:
    """One Chromium browser with one page, driven sequentially."""

    def __init__(self, config: BrowserConfig | None = None):
        self.config = config or BrowserConfig()
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._page: Page | None = None

    @property
    def page(self) -> Page:
        if self._page is None:
            raise RuntimeError("Browser session not started. Use async with or call start().")
        return self._page

    @property
    def context(self) -> BrowserContext:
        if self._context is None:
            raise RuntimeError("Browser session not started.")
        return self._context

    async def _launch_browser(self) -> None:
        """Launch Chromium, auto-installing on first 'executable not found' error."""
        args = chromium_launch_args(self.config)
        try:
            self._browser = await self._playwright.chromium.launch(
                headless=self.config.headless,
                args=args,
            )
        except Exception as exc:
            if "executable doesn't exist" in str(exc).lower():
                if await _auto_install_chromium():
                    self._browser = await self._playwright.chromium.launch(
                        headless=self.config.headless,
                        args=args,
                    )
                else:
                    raise BrowserError(
                        "Chromium is not installed and auto-install failed. Please run: playwright install chromium"
                    ) from exc
            else:
                raise

    async def start(self) -> None:
        """Launch browser and create the working page."""
        self._playwright = await async_playwright().start()
        await self._launch_browser()
        self._context = await self._browser.new_context(
            viewport={
                "width": self.config.viewport_width,
                "height": self.config.viewport_height,
            },
            locale=self.config.locale,
            user_agent=self.config.user_agent,
            accept_downloads=False,
        )
        self._page = await self._context.new_page()
        logger.info("Browser session started (headless=%s)", self.config.headless)

    async def stop(self) -> None:
        """Close browser and clean up. Safe to call on a crashed browser."""
        if self._context:
            with suppress(Exception):
                await self._context.close()
            self._context = None
        self._page = None

        if self._browser:
            with suppress(Exception):
                await self._browser.close()
            self._browser = None
        if self._playwright:
            with suppress(Exception):
                await self._playwright.stop()
            self._playwright = None

        logger.info("Browser session stopped")

    async def __aenter__(self) -> BrowserSession:
        try:
            await self.start()
        except BaseException:
            await self.stop()
            raise
        return self

    async def __aexit__(self, *args) -> None:
        await self.stop()

    async def navigate(self, url: str, timeout_ms: int | None = None) -> NavigationResult:
        """Load *url* and wait until the network is idle.

        Raises:
            BrowserError: on timeout or any Playwright navigation failure.
        """
        timeout = timeout_ms if timeout_ms is not None else self.config.timeout_ms
        try:
            response = await self.page.goto(url, wait_until=self.config.wait_until, timeout=timeout)
        except PlaywrightTimeoutError as exc:
            raise BrowserError(f"Navigation timed out after {timeout}ms: {url}", url=url) from exc
        except PlaywrightError as exc:
            raise BrowserError(f"Navigation failed: {url}: {exc.message}", url=url) from exc
        return NavigationResult(url=self.page.url, http_status=response.status if response else None)

    async def settle(self, ms: int) -> None:
        """Fixed pause for late client-side rendering."""
        if ms > 0:
            await self.page.wait_for_timeout(ms)

    async def scroll_to_bottom(self) -> None:
        """Scroll to the end of the document to trigger lazy-loaded content."""
        await self.page.evaluate("() => window.scrollTo(0, document.body.scrollHeight)")

    async def get_page_html(self) -> str:
        """Get the current page's rendered HTML."""
        return await self.page.content()

    async def get_page_url(self) -> str:
        """Get the current page URL."""
        return self.page.url

    async def get_page_title(self) -> str:
        """Get the current page title."""
        return await self.page.title()

    async def screenshot(self, path: str | Path, full_page: bool = True) -> bytes:
        """Capture the page to *path*, creating its parent directory."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        return await self.page.screenshot(path=str(target), full_page=full_page)

