# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Analyze and extract runs: one browser session, strictly sequential.

Error tiers:
- per theme: any failure while fetching or extracting one detail page is
  logged as a warning and that theme is skipped (no partial record)
- per run: anything else propagates to the caller; the browser session is
  closed on every exit path by ``async with``
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from . import StructureReport, ThemeLink, ThemeRecord
from .browser_session import BrowserConfig, BrowserSession
from .config import ScrapeConfig
from .extractor import discover_theme_links, extract_theme_metadata
from .fetcher import BrowserFetcher, PageFetcher
from .pacing import RequestPacer
from .serializer import report_to_dict, themes_document, write_json
from .structure import analyze_structure

logger = logging.getLogger(__name__)

SessionFactory = Callable[[BrowserConfig | None], BrowserSession]


async def extract_themes(
    fetcher: PageFetcher,
    links: Sequence[ThemeLink],
    *,
    pacer: RequestPacer | None = None,
) -> list[ThemeRecord]:
    """Visit each link in order and build one record per successful visit."""
    pacer = pacer or RequestPacer()
    records: list[ThemeRecord] = []
    total = len(links)

    for index, link in enumerate(links, start=1):
        logger.info("%d/%d: Fetching %s", index, total, link.name)
        try:
            html = await fetcher.fetch(link.url)
            metadata = extract_theme_metadata(html, link.url)
        except Exception as e:
            logger.warning("Error fetching %s: %s", link.name, e)
            continue
        records.append(ThemeRecord.from_parts(link, metadata))
        await pacer.pause()

    logger.info("Extracted %d/%d themes", len(records), total)
    return records


async def _load_listing(session: BrowserSession, config: ScrapeConfig) -> str:
    """Navigate to the listing page, wait for it to settle and return its HTML."""
    await session.navigate(config.listing_url)
    await session.settle(config.listing_settle_ms)
    if config.scroll_listing:
        await session.scroll_to_bottom()
        await session.settle(config.detail_settle_ms)
    return await session.get_page_html()


async def run_extraction(
    config: ScrapeConfig,
    browser_config: BrowserConfig | None = None,
    *,
    session_factory: SessionFactory = BrowserSession,
) -> list[ThemeRecord]:
    """Discover up to ``config.limit`` themes, scrape each, write the JSON summary."""
    async with session_factory(browser_config) as session:
        listing_html = await _load_listing(session, config)
        links = discover_theme_links(
            listing_html,
            await session.get_page_url(),
            limit=config.limit,
            path_prefix=config.path_prefix,
            title_prefix=config.title_prefix,
        )
        logger.info("Found %d theme detail pages", len(links))

        fetcher = BrowserFetcher(session, timeout_ms=config.detail_timeout_ms, settle_ms=config.detail_settle_ms)
        records = await extract_themes(fetcher, links, pacer=RequestPacer(config.request_delay_s))

        write_json(config.themes_path, themes_document(records))
    return records


async def run_analysis(
    config: ScrapeConfig,
    browser_config: BrowserConfig | None = None,
    *,
    session_factory: SessionFactory = BrowserSession,
) -> StructureReport:
    """Analyze the listing page, write the structure report and a full-page screenshot."""
    async with session_factory(browser_config) as session:
        html = await _load_listing(session, config)
        title = await session.get_page_title()
        logger.info("Page title: %s", title)

        report = analyze_structure(html, await session.get_page_url(), title=title)

        write_json(config.structure_report_path, report_to_dict(report))
        await session.screenshot(config.screenshot_path, full_page=True)
    return report
