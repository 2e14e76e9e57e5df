# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""themescout: headless-browser scraping of a Hugo theme listing site.

Two pipelines share these record types:
- structure analysis: selector candidates, class frequencies, sample cards
- metadata extraction: per-theme GitHub/demo URLs, author, license, features
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a ``Z`` suffix."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True, slots=True)
class ThemeLink:
    """A detail-page link found on the listing page."""

    url: str
    name: str  # path segment after the detail prefix, may be empty
    title: str  # link text minus the "View details for" phrase, may be empty


@dataclass(frozen=True, slots=True)
class ThemeMetadata:
    """Fields pulled from one rendered detail page."""

    github_url: str | None = None
    demo_url: str | None = None
    author: str | None = None
    license: str | None = None
    min_hugo_version: str | None = None
    description: str | None = None
    features: tuple[str, ...] = ()
    repo_candidates: tuple[str, ...] = ()  # github links minus hugo/releases/issues/wiki


@dataclass(frozen=True, slots=True)
class ThemeRecord:
    """One scraped theme: link fields + page metadata + scrape timestamp."""

    url: str
    name: str
    title: str
    github_url: str | None = None
    demo_url: str | None = None
    author: str | None = None
    license: str | None = None
    min_hugo_version: str | None = None
    description: str | None = None
    features: tuple[str, ...] = ()
    repo_candidates: tuple[str, ...] = ()
    scraped_at: str = field(default_factory=utc_now_iso)

    @classmethod
    def from_parts(cls, link: ThemeLink, metadata: ThemeMetadata) -> ThemeRecord:
        return cls(
            url=link.url,
            name=link.name,
            title=link.title,
            github_url=metadata.github_url,
            demo_url=metadata.demo_url,
            author=metadata.author,
            license=metadata.license,
            min_hugo_version=metadata.min_hugo_version,
            description=metadata.description,
            features=metadata.features,
            repo_candidates=metadata.repo_candidates,
        )


@dataclass(frozen=True, slots=True)
class ElementSnapshot:
    """Truncated view of a DOM element for the structure report."""

    tag_name: str
    class_name: str
    text: str
    id: str = ""
    inner_html: str | None = None
    children: tuple[ElementSnapshot, ...] = ()


@dataclass(frozen=True, slots=True)
class ContainerCandidate:
    """A selector tried against the listing page and what it matched."""

    selector: str
    count: int
    sample: ElementSnapshot | None


@dataclass(frozen=True, slots=True)
class StructureReport:
    """Write-once structural summary of the listing page."""

    page_info: dict
    containers: list[ContainerCandidate]
    common_classes: dict[str, int]  # top-N, descending count, first-seen tie-break
    theme_cards: list[ElementSnapshot]

    @property
    def total_elements(self) -> int:
        return int(self.page_info.get("totalElements", 0))
