# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Shared test configuration and fixtures."""

try:
    import themescout  # noqa: F401
except ImportError:
    raise ImportError("themescout is not installed. Run: pip install -e '.[dev]'") from None

import pytest

LISTING_URL = "https://themes.gohugo.io/"


@pytest.fixture(autouse=True)
def _block_real_browser(request, monkeypatch):
    """Safety net: prevent real Chromium launches in unit tests.

    Tests drive pipelines through fake sessions; anything that reaches
    ``async_playwright()`` gets a clear error instead of a browser.

    Opt out with::

        @pytest.mark.allow_real_session
    """
    if "allow_real_session" in request.keywords:
        return

    def _no_real_playwright():
        raise RuntimeError("Test tried to launch a real browser. Pass a fake session_factory instead.")

    monkeypatch.setattr("themescout.browser_session.async_playwright", _no_real_playwright)


def listing_html(names: list[str], *, with_index_link: bool = True) -> str:
    """Listing page with one detail link per theme name."""
    anchors = []
    if with_index_link:
        anchors.append('<a href="/themes/">All themes</a>')
    anchors.append('<a href="https://gohugo.io/">Hugo</a>')
    for name in names:
        anchors.append(f'<a href="/themes/{name}/">View details for {name.title()}</a>')
    return f"<html><head><title>Hugo Themes</title></head><body><nav>{''.join(anchors)}</nav></body></html>"


def detail_html(
    name: str,
    *,
    github: bool = True,
    author: str | None = "Jane Doe",
    body_text: str = "A clean theme.",
) -> str:
    """Theme detail page with optional GitHub link and author line."""
    parts = [f"<p>{name} description</p>"]
    if github:
        parts.append(f'<a href="https://github.com/example/{name}">Download</a>')
    parts.append(f'<a href="https://{name}.example.org/">Demo</a>')
    meta = []
    if author is not None:
        meta.append(f"Author: {author}")
    meta.append("License: MIT")
    parts.append("<div>" + "\n".join(meta) + "\n</div>")
    parts.append(f"<div>{body_text}</div>")
    return f"<html><head><title>{name}</title></head><body>{''.join(parts)}</body></html>"


@pytest.fixture
def make_listing_html():
    return listing_html


@pytest.fixture
def make_detail_html():
    return detail_html
