"""Error taxonomy for the extraction pipeline.

Every stage raises a subclass of :class:`ExtractionPipelineError` so callers
can treat the pipeline as all-or-nothing while logs keep the failing stage.
"""

from __future__ import annotations


class ExtractionPipelineError(RuntimeError):
    """Base class for any failure inside the extraction pipeline."""

    kind = "pipeline"


class NetworkError(ExtractionPipelineError):
    """The page could not be fetched (DNS, connection, TLS, redirects...)."""

    kind = "network"


class ParseError(ExtractionPipelineError):
    """The fetched bytes could not be turned into a document tree at all."""

    kind = "parse"


class ExtractionError(ExtractionPipelineError):
    """A document was parsed but no usable article content was found."""

    kind = "extraction"
