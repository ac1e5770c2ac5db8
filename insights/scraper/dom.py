"""DOM building: decode raw bytes and parse them into a URL-anchored tree."""

from __future__ import annotations

from typing import Optional, Protocol, Union
from urllib.parse import urljoin

from bs4 import BeautifulSoup, UnicodeDammit

from insights.scraper.errors import ParseError
from insights.scraper.models import DocumentTree

# (tag, attribute) pairs whose values are made absolute against the base URL.
_URL_ATTRIBUTES = [
    ("a", "href"),
    ("area", "href"),
    ("img", "src"),
    ("source", "src"),
    ("video", "src"),
    ("audio", "src"),
    ("iframe", "src"),
]


class DocumentBuilder(Protocol):
    """Anything that can parse page content into a :class:`DocumentTree`."""

    def build(
        self,
        content: Union[bytes, str],
        base_url: str,
        encoding: Optional[str] = None,
    ) -> DocumentTree:
        ...


def _decode(content: bytes, encoding: Optional[str]) -> str:
    known = [encoding] if encoding else []
    dammit = UnicodeDammit(
        content,
        known_definite_encodings=known,
        user_encodings=["utf-8"],
        is_html=True,
    )
    if dammit.unicode_markup is None:
        raise ParseError("Could not decode document bytes")
    return dammit.unicode_markup


def _resolve_base(soup: BeautifulSoup, base_url: str) -> str:
    base_tag = soup.find("base", href=True)
    if base_tag is not None:
        return urljoin(base_url, base_tag["href"].strip())
    return base_url


def _fix_relative_urls(soup: BeautifulSoup, base_url: str) -> None:
    for tag_name, attr in _URL_ATTRIBUTES:
        for tag in soup.find_all(tag_name, attrs={attr: True}):
            value = tag[attr].strip()
            if tag_name == "a" and value.lower().startswith("javascript:"):
                # A script link has no target worth keeping; keep its text.
                tag.unwrap()
                continue
            if not value or value.startswith("#"):
                continue
            tag[attr] = urljoin(base_url, value)


def build_document(
    content: Union[bytes, str],
    base_url: str,
    encoding: Optional[str] = None,
) -> DocumentTree:
    """Parse *content* into a :class:`DocumentTree` anchored to *base_url*.

    Parsing is lenient: unclosed tags, a missing doctype or stray end tags
    still yield a best-effort tree.  Only content that cannot be read as
    text at all is rejected.

    Raises:
        ParseError: If *content* is empty, undecodable, or binary.
    """
    if isinstance(content, bytes):
        if not content.strip():
            raise ParseError("Document is empty")
        markup = _decode(content, encoding)
    else:
        markup = content

    if not markup.strip():
        raise ParseError("Document is empty")
    if "\x00" in markup:
        raise ParseError("Document looks like binary data, not HTML")

    soup = BeautifulSoup(markup, "html.parser")
    _fix_relative_urls(soup, _resolve_base(soup, base_url))
    return DocumentTree(url=base_url, soup=soup)


class SoupDocumentBuilder:
    """Default :class:`DocumentBuilder` using BeautifulSoup's ``html.parser``."""

    def build(
        self,
        content: Union[bytes, str],
        base_url: str,
        encoding: Optional[str] = None,
    ) -> DocumentTree:
        return build_document(content, base_url, encoding=encoding)
