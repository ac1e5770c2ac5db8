"""Data models for the extraction pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from bs4 import BeautifulSoup


@dataclass
class RawPage:
    """The raw HTTP response for a single URL fetch.

    ``content`` is kept as bytes: decoding is the DOM builder's job, since a
    page that cannot be decoded is a parse failure rather than a network one.
    """

    url: str
    content: bytes
    status_code: int
    encoding: Optional[str] = None
    content_type: str = ""


@dataclass
class DocumentTree:
    """A parsed HTML document anchored to the URL it was fetched from."""

    url: str
    soup: BeautifulSoup


@dataclass
class ParsedArticle:
    """Title plus the minimal HTML fragment judged to be the article body."""

    title: str
    content_html: str


@dataclass
class ExtractedText:
    """Final pipeline output: bounded plain text ready for summarisation."""

    title: str
    text: str
