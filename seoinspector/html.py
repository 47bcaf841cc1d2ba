"""HTML helpers shared by the built-in checks.

Every call to parse() builds a fresh tree, so a check may prune its own
tree without affecting any other check reading the same Document.
"""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import urlsplit

from bs4 import BeautifulSoup, Tag

from seoinspector.models import Document

_WHITESPACE = re.compile(r"\s+")
_ABSOLUTE_HTTP = re.compile(r"^https?://", re.IGNORECASE)

# Elements whose text is never visible page copy
NON_VISIBLE_TAGS: tuple[str, ...] = ("script", "style", "noscript", "template")


def parse(document: Document) -> BeautifulSoup:
    return BeautifulSoup(document.content, "html.parser")


def normalize_space(text: Optional[str]) -> str:
    """Trim and collapse internal whitespace runs to a single space."""
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text).strip()


def text_of(tag: Tag) -> str:
    return normalize_space(tag.get_text(" "))


def find_meta(soup: BeautifulSoup, name: str) -> Optional[Tag]:
    """First ``<meta name=...>`` tag whose name matches case-insensitively."""
    pattern = re.compile(rf"^\s*{re.escape(name)}\s*$", re.IGNORECASE)
    return soup.find("meta", attrs={"name": pattern})


def find_link(soup: BeautifulSoup, rel: str) -> Optional[Tag]:
    """First ``<link>`` tag carrying ``rel`` among its rel values."""
    wanted = rel.lower()
    for link in soup.find_all("link"):
        rels = link.get("rel") or []
        if isinstance(rels, str):
            rels = rels.split()
        if any(value.lower() == wanted for value in rels):
            return link
    return None


def attr_text(tag: Optional[Tag], attr: str) -> str:
    """Normalized attribute value, empty string when absent."""
    if tag is None:
        return ""
    value = tag.get(attr)
    if isinstance(value, list):
        value = " ".join(value)
    return normalize_space(value)


def href_host(href: str) -> Optional[str]:
    """Host of an absolute http(s) or protocol-relative href, else None."""
    href = href.strip()
    if href.startswith("//"):
        href = "http:" + href
    if not _ABSOLUTE_HTTP.match(href):
        return None
    host = urlsplit(href).hostname
    return host.lower() if host else None


def is_absolute_href(href: str) -> bool:
    href = href.strip()
    return href.startswith("//") or bool(_ABSOLUTE_HTTP.match(href))
