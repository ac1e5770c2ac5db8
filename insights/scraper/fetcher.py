"""HTTP fetcher: one GET per URL, no retries, no rendering."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

import httpx

from insights.config import settings
from insights.scraper.errors import NetworkError
from insights.scraper.models import RawPage

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    """Anything that can turn a URL into a :class:`RawPage`."""

    def fetch(self, url: str) -> RawPage:
        ...


class HttpFetcher:
    """Default :class:`Fetcher` backed by ``httpx``.

    A 4xx/5xx response is *not* treated as a failure: the body is returned
    as-is and the later stages decide whether it holds an article.  Only
    transport-level errors raise :class:`NetworkError`.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
    ) -> None:
        self._timeout = settings.request_timeout if timeout is None else timeout
        self._headers = {"User-Agent": user_agent or settings.user_agent}

    def fetch(self, url: str) -> RawPage:
        try:
            with httpx.Client(
                headers=self._headers,
                timeout=self._timeout,
                follow_redirects=True,
            ) as client:
                response = client.get(url)
                content = response.content
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise NetworkError(f"Failed to fetch {url}: {exc}") from exc

        if response.is_error:
            logger.warning("Fetched %s with status %d; parsing body anyway", url, response.status_code)

        return RawPage(
            url=url,
            content=content,
            status_code=response.status_code,
            encoding=response.charset_encoding,
            content_type=response.headers.get("content-type", ""),
        )


def fetch_url(url: str, *, timeout: Optional[float] = None) -> RawPage:
    """Fetch *url* and return a :class:`RawPage`.

    Raises:
        NetworkError: On DNS failure, refused connection, timeout, too many
            redirects or a URL httpx cannot send.
    """
    return HttpFetcher(timeout=timeout).fetch(url)
