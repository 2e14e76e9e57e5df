# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""lxml helpers shared by the extractor and the structure analyzer.

Rendered HTML (``page.content()``) is parsed once per page; every query
after that is a plain lxml tree walk or XPath.
"""

from __future__ import annotations

import copy
import re

import lxml.html
from lxml import etree

from .errors import ExtractionError

# Subtrees whose text never renders.
_INVISIBLE_TAGS = ("script", "style", "noscript", "template")

# With scripting on, these hold inert text or a detached fragment, not child elements.
_INERT_CONTAINERS = ("noscript", "template")

_XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>", re.IGNORECASE)


def parse_html(html: str, base_url: str | None = None) -> lxml.html.HtmlElement:
    """Parse rendered HTML into a document root, resolving links against *base_url*."""
    html = _XML_DECLARATION.sub("", html or "", count=1)
    if not html.strip():
        raise ExtractionError("empty HTML document")
    try:
        parser = lxml.html.HTMLParser(recover=True, encoding="utf-8")
        doc = lxml.html.document_fromstring(html.encode("utf-8"), parser=parser)
    except (etree.ParserError, ValueError) as exc:
        raise ExtractionError(f"unparseable HTML: {exc}") from exc
    _empty_inert_containers(doc)
    if base_url:
        doc.make_links_absolute(base_url, resolve_base_href=True, handle_failures="ignore")
    return doc


def _empty_inert_containers(doc: lxml.html.HtmlElement) -> None:
    """Strip the parsed children of noscript/template so queries match the live DOM."""
    for el in doc.xpath("|".join(f"//{tag}" for tag in _INERT_CONTAINERS)):
        for child in list(el):
            el.remove(child)
        el.text = None


def iter_elements(doc: lxml.html.HtmlElement):
    """Yield every element in document order (comments and PIs skipped)."""
    for el in doc.iter():
        if isinstance(el.tag, str):
            yield el


def tag_name(el: lxml.html.HtmlElement) -> str:
    """Upper-case tag name, as the DOM reports it."""
    return el.tag.upper()


def text_of(el: lxml.html.HtmlElement) -> str:
    """Raw text content of an element (whitespace preserved)."""
    return el.text_content() or ""


def truncate(text: str, limit: int) -> str:
    return text[:limit]


def inner_html(el: lxml.html.HtmlElement) -> str:
    """Serialized children of *el*, without the element's own tag."""
    parts = [el.text or ""]
    for child in el:
        parts.append(etree.tostring(child, encoding="unicode", method="html", with_tail=True))
    return "".join(parts)


def visible_text(doc: lxml.html.HtmlElement) -> str:
    """Text content of <body> minus script/style/noscript/template subtrees."""
    body = doc.find("body")
    if body is None:
        body = doc
    body = copy.deepcopy(body)
    for el in body.xpath("|".join(f".//{tag}" for tag in _INVISIBLE_TAGS)):
        el.drop_tree()
    return text_of(body)
