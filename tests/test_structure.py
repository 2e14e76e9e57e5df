"""Tests for listing-page structure analysis (structure.py)."""

from __future__ import annotations

import pytest

from themescout.dom import parse_html
from themescout.structure import (
    CONTAINER_SELECTORS,
    TOP_CLASSES_LIMIT,
    analyze_structure,
    class_frequencies,
    find_container_candidates,
    sample_theme_cards,
    top_classes,
)

URL = "https://themes.gohugo.io/"

LISTING = """<html>
<head><title>Complete List | Hugo Themes</title></head>
<body>
<main class="grid gap-4">
  <article class="theme-card card"><h2 class="title">Ananke</h2><p class="desc">Starter</p></article>
  <article class="theme-card card"><h2 class="title">PaperMod</h2><p class="desc">Fast</p></article>
  <article class="theme-card card"><h2 class="title">Book</h2><p class="desc">Docs</p></article>
</main>
<section class="footer"><div class="grid-footer">links</div></section>
</body>
</html>"""


def _selectors(candidates):
    return {c.selector: c for c in candidates}


class TestContainerCandidates:
    def test_counts_per_selector(self):
        found = _selectors(find_container_candidates(parse_html(LISTING)))
        assert found[".card"].count == 3
        assert found['[class*="theme"]'].count == 3
        assert found['[class*="card"]'].count == 3
        assert found["article"].count == 3
        assert found["section"].count == 1
        assert found['div[class*="grid"]'].count == 1

    def test_class_token_match_is_exact(self):
        # "theme-card" is not the class "theme"
        found = _selectors(find_container_candidates(parse_html(LISTING)))
        assert ".theme" not in found
        assert ".item" not in found

    def test_sample_is_first_match(self):
        found = _selectors(find_container_candidates(parse_html(LISTING)))
        sample = found["article"].sample
        assert sample.tag_name == "ARTICLE"
        assert sample.class_name == "theme-card card"
        assert sample.id == ""
        assert sample.text.startswith("Ananke")

    def test_sample_text_truncated_to_100(self):
        html = f"<html><body><article>{'x' * 300}</article></body></html>"
        found = _selectors(find_container_candidates(parse_html(html)))
        assert len(found["article"].sample.text) == 100

    def test_report_order_follows_selector_list(self):
        found = find_container_candidates(parse_html(LISTING))
        order = [sel for sel, _ in CONTAINER_SELECTORS]
        assert [c.selector for c in found] == [s for s in order if s in {c.selector for c in found}]


class TestClassFrequencies:
    def test_counts_and_first_seen_order(self):
        html = '<html><body><div class="a b"><span class="a"></span><p class="c  b"></p></div></body></html>'
        freq = class_frequencies(parse_html(html))
        assert freq == {"a": 2, "b": 2, "c": 1}
        assert list(freq) == ["a", "b", "c"]

    def test_no_classes(self):
        assert class_frequencies(parse_html("<html><body><div></div></body></html>")) == {}

    def test_noscript_markup_not_counted(self):
        html = (
            '<html><body><noscript class="nojs"><div class="card">x</div></noscript>'
            '<div class="card"></div></body></html>'
        )
        assert class_frequencies(parse_html(html)) == {"nojs": 1, "card": 1}


class TestTopClasses:
    def test_descending_with_stable_ties(self):
        assert list(top_classes({"a": 5, "b": 5, "c": 3})) == ["a", "b", "c"]
        assert list(top_classes({"c": 3, "b": 5, "a": 5})) == ["b", "a", "c"]

    def test_limited_to_twenty(self):
        freq = {f"cls{i}": i for i in range(50)}
        top = top_classes(freq)
        assert len(top) == TOP_CLASSES_LIMIT == 20
        assert list(top)[0] == "cls49"

    def test_custom_limit(self):
        assert top_classes({"a": 1, "b": 2}, limit=1) == {"b": 2}

    def test_negative_limit(self):
        with pytest.raises(ValueError):
            top_classes({"a": 1}, limit=-1)

    def test_does_not_mutate_input(self):
        freq = {"a": 1, "b": 2}
        top_classes(freq)
        assert list(freq) == ["a", "b"]


class TestThemeCards:
    def test_cards_with_children(self):
        cards = sample_theme_cards(parse_html(LISTING))
        assert len(cards) == 4  # 3 articles + the section
        first = cards[0]
        assert first.tag_name == "ARTICLE"
        assert [c.tag_name for c in first.children] == ["H2", "P"]
        assert first.children[0].class_name == "title"
        assert first.children[0].text == "Ananke"
        assert first.inner_html.startswith('<h2 class="title">Ananke</h2>')
        assert cards[-1].tag_name == "SECTION"

    def test_at_most_five_in_document_order(self):
        html = "<html><body>" + "".join(f'<div class="card">{i}</div>' for i in range(8)) + "</body></html>"
        cards = sample_theme_cards(parse_html(html))
        assert [c.text for c in cards] == ["0", "1", "2", "3", "4"]

    def test_inner_html_truncated(self):
        html = f"<html><body><section>{'<span>y</span>' * 100}</section></body></html>"
        (card,) = sample_theme_cards(parse_html(html))
        assert len(card.inner_html) == 500

    def test_element_matching_several_selectors_listed_once(self):
        html = '<html><body><section class="card theme">x</section></body></html>'
        assert len(sample_theme_cards(parse_html(html))) == 1


class TestAnalyzeStructure:
    def test_page_info(self):
        html = "<html><head><title>T</title></head><body><div></div></body></html>"
        report = analyze_structure(html, URL)
        assert report.page_info == {"title": "T", "url": URL, "totalElements": 5}
        assert report.total_elements == 5

    def test_explicit_title_wins(self):
        report = analyze_structure(LISTING, URL, title="Rendered Title")
        assert report.page_info["title"] == "Rendered Title"

    def test_full_report(self):
        report = analyze_structure(LISTING, URL)
        assert report.page_info["title"] == "Complete List | Hugo Themes"
        assert list(report.common_classes)[:4] == ["theme-card", "card", "title", "desc"]
        assert report.common_classes["card"] == 3
        assert len(report.theme_cards) == 4
        assert any(c.selector == ".card" for c in report.containers)
