"""Scraper package — fetch a page and reduce it to readable article text."""

from insights.scraper.errors import (
    ExtractionError,
    ExtractionPipelineError,
    NetworkError,
    ParseError,
)
from insights.scraper.models import DocumentTree, ExtractedText, ParsedArticle, RawPage
from insights.scraper.pipeline import ExtractionPipeline, extract_url
from insights.scraper.urls import is_valid_http_url

__all__ = [
    "ExtractionPipeline",
    "extract_url",
    "is_valid_http_url",
    "RawPage",
    "DocumentTree",
    "ParsedArticle",
    "ExtractedText",
    "ExtractionPipelineError",
    "NetworkError",
    "ParseError",
    "ExtractionError",
]
