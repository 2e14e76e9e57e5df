# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""JSON output for structure reports and scraped theme records.

Key names are camelCase to match the files downstream tooling already reads
(``themes-site-structure.json``, ``themes-with-github.json``).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from . import ElementSnapshot, StructureReport, ThemeRecord, utc_now_iso

logger = logging.getLogger(__name__)


def record_to_dict(record: ThemeRecord) -> dict[str, Any]:
    return {
        "url": record.url,
        "name": record.name,
        "title": record.title,
        "githubUrl": record.github_url,
        "demoUrl": record.demo_url,
        "author": record.author,
        "license": record.license,
        "minHugoVersion": record.min_hugo_version,
        "description": record.description,
        "features": list(record.features),
        "repoCandidates": list(record.repo_candidates),
        "scrapedAt": record.scraped_at,
    }


def themes_document(records: list[ThemeRecord], extracted_at: str | None = None) -> dict[str, Any]:
    """Top-level ``themes-with-github.json`` payload."""
    return {
        "themes": [record_to_dict(r) for r in records],
        "extractedAt": extracted_at or utc_now_iso(),
        "totalCount": len(records),
    }


def _snapshot_to_dict(snap: ElementSnapshot, *, with_id: bool = True) -> dict[str, Any]:
    data: dict[str, Any] = {"tagName": snap.tag_name, "className": snap.class_name}
    if with_id:
        data["id"] = snap.id
    data["textContent"] = snap.text
    return data


def _card_to_dict(card: ElementSnapshot) -> dict[str, Any]:
    return {
        "tagName": card.tag_name,
        "className": card.class_name,
        "innerHTML": card.inner_html or "",
        "textContent": card.text,
        "children": [_snapshot_to_dict(c, with_id=False) for c in card.children],
    }


def report_to_dict(report: StructureReport) -> dict[str, Any]:
    """``themes-site-structure.json`` payload."""
    return {
        "pageInfo": dict(report.page_info),
        "possibleThemeContainers": [
            {
                "selector": c.selector,
                "count": c.count,
                "sample": _snapshot_to_dict(c.sample) if c.sample else None,
            }
            for c in report.containers
        ],
        "commonClasses": dict(report.common_classes),
        "themeCards": [_card_to_dict(card) for card in report.theme_cards],
    }


def to_json(data: Any, indent: int = 2) -> str:
    return json.dumps(data, ensure_ascii=False, indent=indent)


def write_json(path: str | Path, data: Any, indent: int = 2) -> Path:
    """Write *data* as pretty-printed UTF-8 JSON, creating parent directories."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(to_json(data, indent=indent) + "\n", encoding="utf-8")
    logger.info("Wrote %s", target)
    return target
