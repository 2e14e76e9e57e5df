# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""themescout exception hierarchy.

Callers catch ThemeScoutError for any scraper failure. Per-theme failures
in the extraction loop are not distinguished by type: everything raised
while visiting one detail page is logged and skipped.
"""

from __future__ import annotations


class ThemeScoutError(Exception):
    """Base exception for all themescout errors."""


class BrowserError(ThemeScoutError):
    """Browser launch or navigation failure."""

    def __init__(self, message: str, *, url: str = "") -> None:
        super().__init__(message)
        self.url = url


class ExtractionError(ThemeScoutError):
    """Rendered HTML could not be parsed into a document."""
