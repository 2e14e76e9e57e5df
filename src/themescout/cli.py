# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""themescout CLI: analyze and extract commands.

Usage:
    themescout analyze [--url URL] [-o DIR]
    themescout extract [LIMIT] [--url URL] [-o DIR] [--delay SECONDS] [--scroll]
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from tabulate import tabulate

from . import StructureReport, ThemeRecord
from ._progress import print_step, status_spinner
from .browser_session import BrowserConfig
from .config import DEFAULT_LIMIT, DEFAULT_LISTING_URL, DEFAULT_OUTPUT_DIR, ScrapeConfig

logger = logging.getLogger("themescout.cli")


def _non_negative_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {n}")
    return n


def _non_negative_float(value: str) -> float:
    try:
        f = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid float value: {value!r}") from None
    if f < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {f}")
    return f


def _scrape_config(args: argparse.Namespace) -> ScrapeConfig:
    kwargs = {
        "listing_url": args.url,
        "output_dir": Path(args.output_dir),
    }
    if getattr(args, "limit", None) is not None:
        kwargs["limit"] = args.limit
    if getattr(args, "delay", None) is not None:
        kwargs["request_delay_s"] = args.delay
    if getattr(args, "scroll", False):
        kwargs["scroll_listing"] = True
    return ScrapeConfig(**kwargs)


def _browser_config(args: argparse.Namespace) -> BrowserConfig:
    return BrowserConfig(headless=not args.headed)


# ── Summaries ─────────────────────────────────────────────────────


def format_structure_summary(report: StructureReport) -> str:
    """Human-readable digest of a structure report."""
    lines = [
        f"Page: {report.page_info.get('title', '')}",
        f"Total elements: {report.total_elements}",
        f"Potential theme containers found: {len(report.containers)}",
    ]

    plausible = [c for c in report.containers if 1 < c.count < 100][:5]
    if plausible:
        rows = [[c.selector, c.count, f"{c.sample.tag_name}.{c.sample.class_name}" if c.sample else "-"] for c in plausible]
        lines += ["", "Top theme container candidates:", tabulate(rows, headers=["Selector", "Count", "Sample"])]

    top = list(report.common_classes.items())[:10]
    if top:
        rows = [[f".{cls}", count] for cls, count in top]
        lines += ["", "Most common CSS classes:", tabulate(rows, headers=["Class", "Occurrences"])]
    return "\n".join(lines)


def format_extraction_summary(records: list[ThemeRecord], sample_size: int = 5) -> str:
    """Counts per extracted field plus a few themes that have a GitHub URL."""
    with_github = [r for r in records if r.github_url]
    counts = [
        ["Total themes processed", len(records)],
        ["Themes with GitHub URLs", len(with_github)],
        ["Themes with demo URLs", sum(1 for r in records if r.demo_url)],
        ["Themes with author info", sum(1 for r in records if r.author)],
        ["Themes with license info", sum(1 for r in records if r.license)],
    ]
    lines = ["Extraction summary:", tabulate(counts, tablefmt="simple")]

    if with_github:
        rows = [
            [
                r.title or r.name,
                r.github_url,
                r.demo_url or "N/A",
                r.author or "Unknown",
                r.license or "Unknown",
                ", ".join(r.features) or "None detected",
            ]
            for r in with_github[:sample_size]
        ]
        lines += [
            "",
            "Sample themes with GitHub URLs:",
            tabulate(rows, headers=["Theme", "GitHub", "Demo", "Author", "License", "Features"]),
        ]
    return "\n".join(lines)


# ── Commands ──────────────────────────────────────────────────────


def cmd_analyze(args: argparse.Namespace) -> None:
    """Dump listing-page structure and a full-page screenshot."""
    from .pipeline import run_analysis

    config = _scrape_config(args)
    with status_spinner(f"Analyzing {config.listing_url}..."):
        report = asyncio.run(run_analysis(config, _browser_config(args)))

    print(format_structure_summary(report))
    print(f"\nResults saved to:\n  {config.structure_report_path}\n  {config.screenshot_path}")


def cmd_extract(args: argparse.Namespace) -> None:
    """Scrape GitHub URLs and metadata from theme detail pages."""
    from .pipeline import run_extraction

    config = _scrape_config(args)
    print_step(f"Extracting up to {config.limit} themes from {config.listing_url}")
    records = asyncio.run(run_extraction(config, _browser_config(args)))

    print(format_extraction_summary(records))
    print(f"\nResults saved to {config.themes_path}")


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--url", type=str, default=DEFAULT_LISTING_URL, metavar="URL", help="Theme listing page")
    common.add_argument(
        "-o",
        "--output-dir",
        type=str,
        default=str(DEFAULT_OUTPUT_DIR),
        metavar="DIR",
        help=f"Output directory (default: {DEFAULT_OUTPUT_DIR})",
    )
    common.add_argument("--headed", action="store_true", help="Show the browser window")

    parser = argparse.ArgumentParser(
        description="Scrape a Hugo theme listing site",
        prog="themescout",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON lines")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser(
        "analyze",
        parents=[common],
        help="Dump listing-page structure for selector discovery",
    )

    p_extract = subparsers.add_parser(
        "extract",
        parents=[common],
        help="Extract GitHub URLs and metadata from theme detail pages",
        epilog="""\
examples:
  %(prog)s                 Scrape the first 10 themes
  %(prog)s 25              Scrape the first 25 themes
  %(prog)s 5 --delay 2     Pause 2s between detail pages""",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p_extract.add_argument(
        "limit",
        type=_non_negative_int,
        nargs="?",
        default=DEFAULT_LIMIT,
        help=f"Maximum number of detail pages to visit (default: {DEFAULT_LIMIT})",
    )
    p_extract.add_argument(
        "--delay",
        type=_non_negative_float,
        default=None,
        metavar="SECONDS",
        help="Pause between detail pages (default: 1.0)",
    )
    p_extract.add_argument("--scroll", action="store_true", help="Scroll the listing page before collecting links")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    from .logging_config import configure

    configure(json_output=args.json_logs, level="DEBUG" if args.verbose else "INFO")

    commands = {"analyze": cmd_analyze, "extract": cmd_extract}
    try:
        commands[args.command](args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(130)
    except SystemExit:
        raise
    except Exception as e:
        logger.error("%s failed: %s", args.command, e, exc_info=args.verbose)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
