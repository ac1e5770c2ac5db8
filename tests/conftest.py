"""Shared fixtures: HTML pages and a network-free fetcher."""

from __future__ import annotations

from typing import Callable, Optional

import pytest

from insights.scraper.errors import ExtractionPipelineError
from insights.scraper.models import RawPage

ARTICLE_URL = "https://blog.example.com/posts/my-post"

ARTICLE_HTML = """\
<!DOCTYPE html>
<html>
<head>
  <title>My Post</title>
  <script>window.tracking = true;</script>
</head>
<body>
  <nav><a href="/">Home</a> <a href="/about">About</a> <a href="/archive">Archive</a></nav>
  <header><p>Welcome to a blog written daily about energy, cities and engineering.</p></header>
  <article>
    <h1>My Post</h1>
    <p>Renewable energy is changing the way cities plan their grids, and battery storage is a big part of that shift.</p>
    <p>Engineers now model demand, supply, and storage together, which lets utilities smooth out peaks without building new plants.</p>
    <p><img src="/images/chart.png" alt="Chart of demand"> Read the <a href="/reports/2024">full report</a> for the numbers behind it, including regional breakdowns.</p>
  </article>
  <footer><p>Copyright 2024 Example Blog. All rights reserved, everywhere, forever and ever.</p></footer>
</body>
</html>
"""

NAV_ONLY_HTML = """\
<!DOCTYPE html>
<html>
<head><title>Nothing here</title></head>
<body>
  <nav><a href="/">Home</a> <a href="/about">About</a> <a href="/contact">Contact us today</a></nav>
  <footer><p>Copyright 2024 Example Blog. All rights reserved, everywhere, forever and ever.</p></footer>
</body>
</html>
"""


class StubFetcher:
    """Fetcher that serves fixed content and records requested URLs."""

    def __init__(
        self,
        html: str = ARTICLE_HTML,
        status_code: int = 200,
        error: Optional[ExtractionPipelineError] = None,
    ) -> None:
        self.html = html
        self.status_code = status_code
        self.error = error
        self.calls: list[str] = []

    def fetch(self, url: str) -> RawPage:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return RawPage(
            url=url,
            content=self.html.encode("utf-8"),
            status_code=self.status_code,
            encoding="utf-8",
            content_type="text/html; charset=utf-8",
        )


@pytest.fixture()
def article_html() -> str:
    return ARTICLE_HTML


@pytest.fixture()
def nav_only_html() -> str:
    return NAV_ONLY_HTML


@pytest.fixture()
def make_fetcher() -> Callable[..., StubFetcher]:
    """Return a factory for :class:`StubFetcher` instances."""
    return StubFetcher
