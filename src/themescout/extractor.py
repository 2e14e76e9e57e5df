# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Theme link discovery and detail-page metadata extraction.

Both run on rendered HTML parsed with lxml, so they can be exercised with
plain HTML fixtures. Field extraction is heuristic by nature:
- GitHub URL: first anchor pointing at github.com
- demo URL: first anchor whose text mentions "demo" or "preview"
- author / license / Hugo version: ``<Label>[:\\s]+<value>`` over visible text
- features: keyword substring test over lowercased visible text
- description: first <p>

A label appearing in unrelated prose produces a false positive; that is an
accepted limitation of the text-pattern approach.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from urllib.parse import urlparse

import lxml.html

from . import ThemeLink, ThemeMetadata
from .config import DEFAULT_PATH_PREFIX, DEFAULT_TITLE_PREFIX
from .dom import parse_html, text_of, visible_text

logger = logging.getLogger(__name__)

GITHUB_DOMAIN = "github.com"
DEMO_KEYWORDS = ("demo", "preview")

FEATURE_KEYWORDS: tuple[str, ...] = (
    "responsive",
    "dark mode",
    "search",
    "multilingual",
    "seo",
    "fast",
    "minimal",
    "blog",
    "portfolio",
    "documentation",
)

# GitHub links that belong to Hugo itself or to repo sub-pages, not to a theme repo.
_NON_THEME_REPO_MARKERS = ("gohugoio/hugo", "/releases", "/issues", "/wiki")


# --- Label rules ---


@dataclass(frozen=True, slots=True)
class LabelRule:
    """Best-effort ``<label>[:\\s]+<value>`` lookup over page text."""

    field: str
    label: str
    value_pattern: str = r"[^\n]+"
    value_prefix: str = ""  # matched but not captured, e.g. a "v" before a version

    @property
    def regex(self) -> re.Pattern[str]:
        return re.compile(
            rf"{re.escape(self.label)}[:\s]+{self.value_prefix}({self.value_pattern})",
            re.IGNORECASE,
        )

    def find(self, text: str) -> str | None:
        """Trimmed value after the first occurrence of the label, or None."""
        m = self.regex.search(text)
        if not m:
            return None
        return m.group(1).strip()


LABEL_RULES: tuple[LabelRule, ...] = (
    LabelRule("author", "Author"),
    LabelRule("license", "License"),
    LabelRule("min_hugo_version", "Hugo", value_pattern=r"[0-9.]+", value_prefix="v?"),
)


# --- Link discovery ---


def _theme_name(path: str, path_prefix: str) -> str | None:
    """Path remainder after *path_prefix*, trailing slashes stripped.

    None when the prefix is absent or nothing follows it (the index link).
    A remainder of only slashes gives an empty name.
    """
    idx = path.find(path_prefix)
    if idx < 0:
        return None
    remainder = path[idx + len(path_prefix) :]
    if not remainder:
        return None
    return remainder.rstrip("/")


def discover_theme_links(
    html: str,
    base_url: str,
    *,
    limit: int,
    path_prefix: str = DEFAULT_PATH_PREFIX,
    title_prefix: str = DEFAULT_TITLE_PREFIX,
) -> list[ThemeLink]:
    """First *limit* detail links on the listing page, in document order."""
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")
    if limit == 0:
        return []

    doc = parse_html(html, base_url)
    links: list[ThemeLink] = []
    for anchor in doc.iter("a"):
        href = anchor.get("href")
        if not href:
            continue
        name = _theme_name(urlparse(href).path, path_prefix)
        if name is None:
            continue
        title = text_of(anchor).replace(title_prefix, "", 1).strip()
        links.append(ThemeLink(url=href, name=name, title=title))
        if len(links) >= limit:
            break

    logger.debug("Discovered %d theme links (limit=%d)", len(links), limit)
    return links


# --- Detail page ---


def _first_github_link(doc: lxml.html.HtmlElement) -> str | None:
    for anchor in doc.iter("a"):
        href = anchor.get("href") or ""
        if GITHUB_DOMAIN in href:
            return href
    return None


def theme_repo_links(doc: lxml.html.HtmlElement) -> list[str]:
    """GitHub links that look like a theme's own repository, deduplicated."""
    seen: dict[str, None] = {}
    for anchor in doc.iter("a"):
        href = anchor.get("href") or ""
        lowered = href.lower()
        if GITHUB_DOMAIN not in lowered:
            continue
        if any(marker in lowered for marker in _NON_THEME_REPO_MARKERS):
            continue
        seen.setdefault(href, None)
    return list(seen)


def _first_demo_link(doc: lxml.html.HtmlElement) -> str | None:
    for anchor in doc.iter("a"):
        text = text_of(anchor).lower()
        if any(kw in text for kw in DEMO_KEYWORDS):
            return anchor.get("href") or None
    return None


def detect_features(text: str) -> tuple[str, ...]:
    """Vocabulary keywords present anywhere in *text* (case-insensitive substring)."""
    lowered = text.lower()
    return tuple(kw for kw in FEATURE_KEYWORDS if kw in lowered)


def _first_paragraph(doc: lxml.html.HtmlElement) -> str | None:
    for p in doc.iter("p"):
        return text_of(p).strip()
    return None


def extract_from_document(doc: lxml.html.HtmlElement) -> ThemeMetadata:
    """Run every extraction rule over an already-parsed document."""
    page_text = visible_text(doc)
    labelled = {rule.field: rule.find(page_text) for rule in LABEL_RULES}
    return ThemeMetadata(
        github_url=_first_github_link(doc),
        demo_url=_first_demo_link(doc),
        description=_first_paragraph(doc),
        features=detect_features(page_text),
        repo_candidates=tuple(theme_repo_links(doc)),
        **labelled,
    )


def extract_theme_metadata(html: str, url: str) -> ThemeMetadata:
    """Extract metadata from a rendered detail page.

    Raises:
        ExtractionError: if *html* is empty or cannot be parsed.
    """
    return extract_from_document(parse_html(html, url))
