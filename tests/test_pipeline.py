"""End-to-end tests for the extraction pipeline with a stubbed fetcher.

No network: every test injects a ``StubFetcher`` from ``conftest``.
"""

from __future__ import annotations

import logging

import pytest

from insights.scraper.dom import SoupDocumentBuilder
from insights.scraper.errors import ExtractionError, NetworkError, ParseError
from insights.scraper.models import ExtractedText
from insights.scraper.pipeline import ExtractionPipeline

from conftest import ARTICLE_URL

_LONG_PARAGRAPH = (
    "Grid operators balance supply and demand every second, and storage gives "
    "them room to breathe when the wind drops or clouds roll in over the panels."
)


class RecordingBuilder(SoupDocumentBuilder):
    def __init__(self) -> None:
        self.base_urls: list[str] = []

    def build(self, content, base_url, encoding=None):
        self.base_urls.append(base_url)
        return super().build(content, base_url, encoding=encoding)


class TestExtractionPipeline:
    def test_clear_article_yields_bounded_text(self, make_fetcher) -> None:
        pipeline = ExtractionPipeline(fetcher=make_fetcher())
        result = pipeline.run(ARTICLE_URL)

        assert isinstance(result, ExtractedText)
        assert result.title == "My Post"
        assert result.text
        assert len(result.text) <= 10_000
        assert result.text == result.text.strip()

    def test_title_echo_removed(self, make_fetcher) -> None:
        result = ExtractionPipeline(fetcher=make_fetcher()).run(ARTICLE_URL)
        assert result.text.startswith("Renewable energy is changing")

    def test_images_and_link_targets_dropped(self, make_fetcher) -> None:
        result = ExtractionPipeline(fetcher=make_fetcher()).run(ARTICLE_URL)

        assert "full report" in result.text
        assert "https://" not in result.text
        assert "chart.png" not in result.text
        assert "Chart of demand" not in result.text

    def test_is_idempotent(self, make_fetcher) -> None:
        pipeline = ExtractionPipeline(fetcher=make_fetcher())
        assert pipeline.run(ARTICLE_URL) == pipeline.run(ARTICLE_URL)

    def test_long_article_is_capped(self, make_fetcher) -> None:
        body = "".join(f"<p>{_LONG_PARAGRAPH}</p>" for _ in range(150))
        html = f"<html><head><title>Long read</title></head><body><article>{body}</article></body></html>"
        result = ExtractionPipeline(fetcher=make_fetcher(html=html)).run(ARTICLE_URL)

        assert len(result.text) == 10_000

    def test_custom_max_length(self, make_fetcher) -> None:
        result = ExtractionPipeline(fetcher=make_fetcher(), max_length=20).run(ARTICLE_URL)
        assert len(result.text) == 20

    def test_builder_receives_page_url(self, make_fetcher) -> None:
        builder = RecordingBuilder()
        ExtractionPipeline(fetcher=make_fetcher(), builder=builder).run(ARTICLE_URL)
        assert builder.base_urls == [ARTICLE_URL]

    def test_error_status_page_with_article_still_extracts(self, make_fetcher) -> None:
        result = ExtractionPipeline(fetcher=make_fetcher(status_code=404)).run(ARTICLE_URL)
        assert result.text.startswith("Renewable energy")

    def test_short_post_still_yields_text(self, make_fetcher) -> None:
        html = "<html><head><title>Update</title></head><body><p>Back next week.</p></body></html>"
        result = ExtractionPipeline(fetcher=make_fetcher(html=html)).run(ARTICLE_URL)

        assert result.title == "Update"
        assert result.text == "Back next week."

    def test_nav_only_page_fails(self, make_fetcher, nav_only_html) -> None:
        pipeline = ExtractionPipeline(fetcher=make_fetcher(html=nav_only_html))
        with pytest.raises(ExtractionError):
            pipeline.run(ARTICLE_URL)

    def test_empty_body_fails_to_parse(self, make_fetcher) -> None:
        pipeline = ExtractionPipeline(fetcher=make_fetcher(html=""))
        with pytest.raises(ParseError):
            pipeline.run(ARTICLE_URL)

    def test_network_error_short_circuits(self, make_fetcher) -> None:
        builder = RecordingBuilder()
        fetcher = make_fetcher(error=NetworkError("unreachable"))
        pipeline = ExtractionPipeline(fetcher=fetcher, builder=builder)

        with pytest.raises(NetworkError):
            pipeline.run(ARTICLE_URL)
        assert builder.base_urls == []

    def test_failure_is_logged_with_stage(self, make_fetcher, nav_only_html, caplog) -> None:
        pipeline = ExtractionPipeline(fetcher=make_fetcher(html=nav_only_html))
        with caplog.at_level(logging.WARNING, logger="insights.scraper.pipeline"):
            with pytest.raises(ExtractionError):
                pipeline.run(ARTICLE_URL)

        assert "extraction stage" in caplog.text


class TestExtractHtml:
    def test_runs_without_fetch(self, article_html) -> None:
        result = ExtractionPipeline().extract_html(article_html, ARTICLE_URL)
        assert result.title == "My Post"
        assert result.text.startswith("Renewable energy")

    def test_same_html_same_output(self, article_html) -> None:
        first = ExtractionPipeline().extract_html(article_html.encode("utf-8"), ARTICLE_URL)
        second = ExtractionPipeline().extract_html(article_html.encode("utf-8"), ARTICLE_URL)
        assert first == second
