# catalog_pipeline/exceptions.py
"""Exceptions raised by the catalog pipeline."""

from typing import Any, Dict, Optional


class CatalogPipelineError(Exception):
    """Base exception for the catalog pipeline."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}


class TransportFailure(CatalogPipelineError):
    """Non-200 response or transport-level error while fetching the catalog page."""

    def __init__(self, message: str, url: str, status_code: Optional[int] = None):
        super().__init__(message, {"url": url, "status_code": status_code})
        self.url = url
        self.status_code = status_code


class ExtractionFailure(CatalogPipelineError):
    """The document could not be parsed or queried."""

    pass


class ExportFailure(CatalogPipelineError):
    """A single export sink could not write its output."""

    def __init__(self, message: str, sink: str, target: str):
        super().__init__(message, {"sink": sink, "target": target})
        self.sink = sink
        self.target = target
