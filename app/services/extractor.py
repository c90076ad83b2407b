"""Metadata extraction from a parsed HTML document.

Each function takes a read-only :class:`BeautifulSoup` handle and returns a
value; nothing here mutates the tree or performs I/O.
"""

from typing import List, Optional

from bs4 import BeautifulSoup

from app.services.normalizer import normalize

MAX_LINKS = 50
MAX_HEADINGS = 20
PREVIEW_MIN_CHARS = 40
PREVIEW_MAX_CHARS = 280


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


def extract_title(soup: BeautifulSoup) -> Optional[str]:
    title_tag = soup.find("title")
    if title_tag:
        return title_tag.get_text().strip() or None
    return None


def extract_meta(soup: BeautifulSoup, name: str, allow_property: bool = False) -> Optional[str]:
    """Return the ``content`` of ``<meta name=NAME>``.

    With *allow_property*, ``<meta property=NAME>`` is consulted when the
    ``name`` lookup is missing or empty (Open Graph tags use ``property``).
    """
    meta = soup.find("meta", attrs={"name": name})
    if meta and meta.get("content"):
        return str(meta["content"])
    if allow_property:
        meta = soup.find("meta", attrs={"property": name})
        if meta and meta.get("content"):
            return str(meta["content"])
    return None


def extract_headings(soup: BeautifulSoup) -> List[str]:
    """Text of the first h1–h3 elements in document order, empty ones skipped."""
    headings: List[str] = []
    for tag in soup.find_all(["h1", "h2", "h3"], limit=MAX_HEADINGS):
        text = tag.get_text().strip()
        if text:
            headings.append(text)
    return headings


def extract_text_preview(soup: BeautifulSoup) -> Optional[str]:
    """First paragraph longer than ``PREVIEW_MIN_CHARS``, cut to ``PREVIEW_MAX_CHARS``."""
    for paragraph in soup.find_all("p"):
        text = paragraph.get_text().strip()
        if len(text) > PREVIEW_MIN_CHARS:
            return text[:PREVIEW_MAX_CHARS]
    return None


def extract_links(soup: BeautifulSoup, page_url: str) -> List[str]:
    """Canonical outbound links of the first ``MAX_LINKS`` anchors.

    Hrefs are resolved against *page_url*; ones that do not resolve to a URL
    are dropped.  Order of first appearance is kept.
    """
    seen: set = set()
    links: List[str] = []
    for a in soup.find_all("a", href=True, limit=MAX_LINKS):
        href = a.get("href")
        if not href:
            continue
        canonical = normalize(str(href), base=page_url)
        if canonical and canonical not in seen:
            seen.add(canonical)
            links.append(canonical)
    return links[:MAX_LINKS]
