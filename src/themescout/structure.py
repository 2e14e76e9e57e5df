# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Listing-page structure analysis for manual selector discovery.

Three independent passes over one parsed document:

1. Container candidates: try a fixed selector list, report match counts
   and a snapshot of the first match.
2. Class frequencies: tally every class token, then project the top N
   (descending count, first-seen order on ties).
3. Theme-card samples: the first few elements that look like cards.

Selectors are reported in CSS form and evaluated via their XPath
translation, so no CSS engine is needed on top of lxml.
"""

from __future__ import annotations

import logging

import lxml.html

from . import ContainerCandidate, ElementSnapshot, StructureReport
from .dom import inner_html, iter_elements, parse_html, tag_name, text_of, truncate

logger = logging.getLogger(__name__)

TOP_CLASSES_LIMIT = 20
THEME_CARD_SAMPLE_SIZE = 5

_SAMPLE_TEXT_LEN = 100
_CARD_TEXT_LEN = 200
_CARD_HTML_LEN = 500


def _has_class(name: str) -> str:
    return f"contains(concat(' ', normalize-space(@class), ' '), ' {name} ')"


# (CSS selector as reported, equivalent XPath)
CONTAINER_SELECTORS: tuple[tuple[str, str], ...] = (
    (".theme", f"//*[{_has_class('theme')}]"),
    (".card", f"//*[{_has_class('card')}]"),
    (".item", f"//*[{_has_class('item')}]"),
    (".box", f"//*[{_has_class('box')}]"),
    (".tile", f"//*[{_has_class('tile')}]"),
    ('[class*="theme"]', "//*[contains(@class, 'theme')]"),
    ('[class*="card"]', "//*[contains(@class, 'card')]"),
    ('[class*="item"]', "//*[contains(@class, 'item')]"),
    ("article", "//article"),
    ("section", "//section"),
    ('div[class*="grid"]', "//div[contains(@class, 'grid')]"),
)

# article, .card, [class*="theme"], section
THEME_CARD_XPATH = f"//article | //*[{_has_class('card')}] | //*[contains(@class, 'theme')] | //section"


def snapshot_element(el: lxml.html.HtmlElement, text_len: int = _SAMPLE_TEXT_LEN) -> ElementSnapshot:
    """Tag, class, id and a text excerpt of *el*."""
    return ElementSnapshot(
        tag_name=tag_name(el),
        class_name=el.get("class", ""),
        id=el.get("id", ""),
        text=truncate(text_of(el), text_len),
    )


def find_container_candidates(doc: lxml.html.HtmlElement) -> list[ContainerCandidate]:
    """Selectors from CONTAINER_SELECTORS that match at least one element."""
    candidates: list[ContainerCandidate] = []
    for selector, xpath in CONTAINER_SELECTORS:
        matches = doc.xpath(xpath)
        if not matches:
            continue
        candidates.append(ContainerCandidate(selector=selector, count=len(matches), sample=snapshot_element(matches[0])))
    return candidates


def class_frequencies(doc: lxml.html.HtmlElement) -> dict[str, int]:
    """Occurrences of every class token, keyed in first-seen document order."""
    counts: dict[str, int] = {}
    for el in iter_elements(doc):
        for cls in (el.get("class") or "").split():
            counts[cls] = counts.get(cls, 0) + 1
    return counts


def top_classes(frequencies: dict[str, int], limit: int = TOP_CLASSES_LIMIT) -> dict[str, int]:
    """Top *limit* classes by descending count.

    ``sorted`` is stable, so equal counts keep the order of *frequencies*.
    """
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")
    ranked = sorted(frequencies.items(), key=lambda kv: kv[1], reverse=True)
    return dict(ranked[:limit])


def sample_theme_cards(doc: lxml.html.HtmlElement, limit: int = THEME_CARD_SAMPLE_SIZE) -> list[ElementSnapshot]:
    """First *limit* card-like elements with their immediate children."""
    samples = []
    for el in doc.xpath(THEME_CARD_XPATH)[:limit]:
        children = tuple(snapshot_element(child) for child in el if isinstance(child.tag, str))
        samples.append(
            ElementSnapshot(
                tag_name=tag_name(el),
                class_name=el.get("class", ""),
                text=truncate(text_of(el), _CARD_TEXT_LEN),
                inner_html=truncate(inner_html(el), _CARD_HTML_LEN),
                children=children,
            )
        )
    return samples


def analyze_structure(html: str, url: str, title: str | None = None) -> StructureReport:
    """Build the structure report for a rendered listing page."""
    doc = parse_html(html, url)
    if title is None:
        title = (doc.findtext(".//title") or "").strip()

    page_info = {
        "title": title,
        "url": url,
        "totalElements": sum(1 for _ in iter_elements(doc)),
    }
    report = StructureReport(
        page_info=page_info,
        containers=find_container_candidates(doc),
        common_classes=top_classes(class_frequencies(doc)),
        theme_cards=sample_theme_cards(doc),
    )
    logger.info(
        "Structure analyzed: %d elements, %d container candidates, %d card samples",
        report.total_elements,
        len(report.containers),
        len(report.theme_cards),
    )
    return report
