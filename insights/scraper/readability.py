"""Readability-based article extraction.

Turns a :class:`DocumentTree` into a :class:`ParsedArticle`: a clean title
plus an HTML fragment that holds the article body.

1. Strip elements that are never content (scripts, page chrome such as
   ``nav`` and ``footer``, hidden nodes, class/id patterns such as
   ``sidebar`` or ``comment``).
2. Hand the stripped page to readability-lxml, which scores paragraphs,
   picks the best container and cleans it.
3. If that summary holds no text (readability dropped a link-heavy
   container, or could not parse the page), keep the stripped body instead.

Only a page with no text left after step 1 fails.  The tree is modified in
place; callers own a fresh tree per request.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Optional

from bs4 import BeautifulSoup
from bs4.element import Doctype, Tag
from readability import Document
from readability.readability import Unparseable

from insights.scraper.errors import ExtractionError
from insights.scraper.models import DocumentTree, ParsedArticle

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Heuristic tables
# ---------------------------------------------------------------------------

_STRIP_TAGS = [
    "script", "style", "noscript", "template", "iframe", "svg", "form",
    "button", "input", "select", "textarea", "object", "embed", "link",
    "meta", "title", "nav", "header", "footer", "aside",
]

_UNLIKELY_CANDIDATES = re.compile(
    r"-ad-|ai2html|banner|breadcrumbs|combx|comment|community|cover-wrap|disqus|"
    r"extra|footer|gdpr|header|legends|menu|related|remark|replies|rss|shoutbox|"
    r"sidebar|skyscraper|social|sponsor|supplemental|ad-break|agegate|pagination|"
    r"pager|popup|yom-remote",
    re.IGNORECASE,
)
_MAYBE_CANDIDATE = re.compile(r"and|article|body|column|content|main|shadow", re.IGNORECASE)
_UNLIKELY_ROLES = frozenset(
    {"menu", "menubar", "complementary", "navigation", "alert", "alertdialog", "dialog"}
)
_HIDDEN_STYLE = re.compile(r"display\s*:\s*none|visibility\s*:\s*hidden", re.IGNORECASE)

_TITLE_SEPARATOR = re.compile(r"\s[|\-–—\\/>»]\s")
_TITLE_HIERARCHY_SEPARATOR = re.compile(r"\s[\\/>»]\s")
_TITLE_SEPARATOR_CHARS = re.compile(r"[|\-–—\\/>»]+")
_META_TITLE_KEYS = ("dc:title", "dcterm:title", "og:title", "title", "twitter:title")

_NO_ARTICLE = "Article parse failed"
# Placeholder readability-lxml returns for pages without a <title>.
_READABILITY_NO_TITLE = "[no-title]"


# ---------------------------------------------------------------------------
# Text helpers
# ---------------------------------------------------------------------------

def _inner_text(tag: Tag) -> str:
    return " ".join(tag.get_text().split())


def _word_count(text: str) -> int:
    return len(text.split())


def _class_and_id(tag: Tag) -> str:
    classes = tag.get("class") or []
    if isinstance(classes, str):
        classes = [classes]
    return " ".join(classes) + " " + (tag.get("id") or "")


# ---------------------------------------------------------------------------
# Title
# ---------------------------------------------------------------------------

def _meta_title(soup: BeautifulSoup) -> str:
    values: Dict[str, str] = {}
    for meta in soup.find_all("meta", attrs={"content": True}):
        key = (meta.get("property") or meta.get("name") or "").strip().lower()
        if key and key not in values:
            values[key] = " ".join(meta["content"].split())
    for key in _META_TITLE_KEYS:
        if values.get(key):
            return values[key]
    return ""


def _clean_title(original: str, soup: BeautifulSoup) -> str:
    """Strip site names from a page title, falling back to a lone ``<h1>``."""
    original = " ".join(original.split())
    current = original
    had_hierarchy_separator = False

    separators = list(_TITLE_SEPARATOR.finditer(original))
    if separators:
        had_hierarchy_separator = bool(_TITLE_HIERARCHY_SEPARATOR.search(original))
        current = original[: separators[-1].start()]
        if _word_count(current) < 3:
            current = original[separators[0].end():]
    elif ": " in original:
        headings = {_inner_text(h) for h in soup.find_all(["h1", "h2"])}
        if original not in headings:
            current = original[original.rfind(":") + 1:]
            if _word_count(current) < 3:
                current = original[original.find(":") + 1:]
            elif _word_count(original[: original.find(":")]) > 5:
                current = original
    elif len(original) > 150 or len(original) < 15:
        h1s = soup.find_all("h1")
        if len(h1s) == 1:
            current = _inner_text(h1s[0])

    current = " ".join(current.split())
    words = _word_count(current)
    if words <= 4 and (
        not had_hierarchy_separator
        or words != _word_count(_TITLE_SEPARATOR_CHARS.sub("", original)) - 1
    ):
        current = original
    return current


def _article_title(soup: BeautifulSoup, page_title: str) -> str:
    """Prefer metadata titles; otherwise clean the title readability found."""
    if page_title == _READABILITY_NO_TITLE:
        page_title = ""
    return _meta_title(soup) or _clean_title(page_title, soup)


# ---------------------------------------------------------------------------
# Pruning
# ---------------------------------------------------------------------------

def _ensure_body(soup: BeautifulSoup) -> Tag:
    """Return ``<body>``, creating one around loose top-level content if needed."""
    if soup.body is not None:
        return soup.body
    container = soup.html or soup
    body = soup.new_tag("body")
    for child in list(container.contents):
        if isinstance(child, Doctype) or (
            isinstance(child, Tag) and child.name in ("head", "title", "meta")
        ):
            continue
        body.append(child.extract())
    container.append(body)
    return body


def _is_hidden(tag: Tag) -> bool:
    if tag.has_attr("hidden") or tag.get("aria-hidden") == "true":
        return True
    return bool(_HIDDEN_STYLE.search(tag.get("style") or ""))


def _prune(root: Tag) -> None:
    for tag in root.find_all(_STRIP_TAGS):
        if not tag.decomposed:
            tag.decompose()

    for tag in root.find_all(True):
        if tag.decomposed or tag.name in ("html", "body", "a"):
            continue
        if _is_hidden(tag) or tag.get("role") in _UNLIKELY_ROLES:
            tag.decompose()
            continue
        match = _class_and_id(tag)
        if (
            _UNLIKELY_CANDIDATES.search(match)
            and not _MAYBE_CANDIDATE.search(match)
            and tag.find_parent(["table", "code"]) is None
        ):
            tag.decompose()


def _drop_empty_paragraphs(article: Tag) -> None:
    for paragraph in article.find_all("p"):
        if not _inner_text(paragraph) and paragraph.find(["img", "embed", "object", "iframe"]) is None:
            paragraph.decompose()


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------

def _summarize(readable: Document, url: str) -> Optional[Tag]:
    """Return readability's cleaned fragment, or ``None`` if it holds no text."""
    try:
        summary_html = readable.summary(html_partial=True)
    except Unparseable as exc:
        logger.debug("Readability could not summarise %s: %s", url, exc)
        return None

    fragment = BeautifulSoup(summary_html or "", "html.parser")
    if not _inner_text(fragment):
        return None
    return fragment


def _body_fragment(soup: BeautifulSoup, body: Tag) -> Tag:
    article = soup.new_tag("div")
    for child in list(body.contents):
        article.append(child.extract())
    return article


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_article(document: DocumentTree) -> ParsedArticle:
    """Isolate the main article of *document*.

    Raises:
        ExtractionError: If no text is left once page chrome is stripped.
            Partial results are never returned.
    """
    soup = document.soup
    body = _ensure_body(soup)
    _prune(body)

    if not _inner_text(body):
        logger.debug("Nothing but page chrome in %s", document.url)
        raise ExtractionError(_NO_ARTICLE)

    readable = Document(str(soup), url=document.url)
    title = _article_title(soup, readable.title())

    article = _summarize(readable, document.url)
    if article is None:
        logger.debug("Readability summary of %s is empty; keeping the stripped body", document.url)
        article = _body_fragment(soup, body)
    _drop_empty_paragraphs(article)

    if not _inner_text(article):
        raise ExtractionError(_NO_ARTICLE)

    return ParsedArticle(title=title, content_html=str(article))
