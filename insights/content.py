"""Input resolution: pasted text or a page URL → prose for the insight service.

The summarisation service accepts ``{"text": ...}``; this module produces
that text from whichever input the user supplied.
"""

from __future__ import annotations

from typing import Optional

from insights.scraper import ExtractionPipeline, is_valid_http_url


class ContentError(ValueError):
    """The user's input cannot be turned into content (message is user-facing)."""


def prepare_content(
    *,
    text: Optional[str] = None,
    url: Optional[str] = None,
    pipeline: Optional[ExtractionPipeline] = None,
) -> str:
    """Return the prose to summarise from exactly one of *text* or *url*.

    Raises:
        ContentError: On missing/ambiguous input, an invalid URL, or a page
            whose article text comes back empty.
        ExtractionPipelineError: If the page cannot be fetched or parsed.
    """
    if (text is None) == (url is None):
        raise ContentError("Provide exactly one of text or URL.")

    if text is not None:
        content = text.strip()
        if not content:
            raise ContentError("Please enter blog text.")
        return content

    if not is_valid_http_url(url or ""):
        raise ContentError("Invalid URL. Please include http:// or https://")
    result = (pipeline or ExtractionPipeline()).run(url.strip())
    if not result.text:
        raise ContentError("No blog content found")
    return result.text
