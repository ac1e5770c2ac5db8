"""The extraction pipeline: fetch → parse → extract → flatten → normalize.

Each run is independent and all-or-nothing: the first failing stage raises
an :class:`~insights.scraper.errors.ExtractionPipelineError` subclass and
nothing partial is returned.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from insights.config import settings
from insights.scraper.dom import DocumentBuilder, SoupDocumentBuilder
from insights.scraper.errors import ExtractionError, ExtractionPipelineError
from insights.scraper.fetcher import Fetcher, HttpFetcher
from insights.scraper.flatten import flatten_html
from insights.scraper.models import ExtractedText
from insights.scraper.normalize import normalize_text
from insights.scraper.readability import extract_article

logger = logging.getLogger(__name__)


class ExtractionPipeline:
    """Turn a web page into bounded plain text.

    The fetcher and document builder are injected so the pipeline can run on
    fixed HTML fixtures without touching the network.
    """

    def __init__(
        self,
        fetcher: Optional[Fetcher] = None,
        builder: Optional[DocumentBuilder] = None,
        max_length: Optional[int] = None,
    ) -> None:
        self.fetcher = fetcher or HttpFetcher()
        self.builder = builder or SoupDocumentBuilder()
        self.max_length = settings.max_text_length if max_length is None else max_length

    def run(self, url: str) -> ExtractedText:
        """Fetch *url* and return its article text."""
        logger.info("Extracting article from %s", url)
        try:
            raw = self.fetcher.fetch(url)
            return self._process(raw.content, raw.url, raw.encoding)
        except ExtractionPipelineError as exc:
            logger.warning("Extraction of %s failed at %s stage: %s", url, exc.kind, exc)
            raise

    def extract_html(
        self,
        content: Union[bytes, str],
        base_url: str,
        encoding: Optional[str] = None,
    ) -> ExtractedText:
        """Run every stage after the fetch on already-retrieved *content*."""
        return self._process(content, base_url, encoding)

    def _process(
        self,
        content: Union[bytes, str],
        base_url: str,
        encoding: Optional[str],
    ) -> ExtractedText:
        document = self.builder.build(content, base_url, encoding=encoding)
        article = extract_article(document)
        if not article.content_html:
            raise ExtractionError("Article parse failed")

        flat = flatten_html(article.content_html)
        text = normalize_text(article.title, flat, max_length=self.max_length)
        logger.info("Extracted %r from %s (%d chars)", article.title, base_url, len(text))
        return ExtractedText(title=article.title, text=text)


def extract_url(url: str) -> ExtractedText:
    """Run the default pipeline on *url*."""
    return ExtractionPipeline().run(url)
