"""
TourGpX — Tour to GPX Converter
Exceptions raised by the conversion stages.
"""

from typing import Optional


class TourError(Exception):
    """Base exception for all conversion errors.

    ``cause`` is the underlying error, if any. ``stage`` is set by the
    converter to the pipeline stage that failed, and both end up in the
    message shown to the user.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.stage: Optional[str] = None

    def __str__(self) -> str:
        text = self.message
        if self.cause is not None:
            text = f"{text}: {self.cause}"
        if self.stage:
            text = f"failed to {self.stage}: {text}"
        return text


class FetchError(TourError):
    """Network error, bad status or exhausted retries."""


class ExtractionError(TourError):
    """Embedded payload markers not found."""


class ParseError(TourError):
    """Payload is not JSON of the expected shape."""


class ConversionError(TourError):
    """Empty or out-of-range coordinate data."""


class WriteError(TourError):
    """Output file could not be created or written."""


class DeadlineExceeded(TourError):
    """Overall conversion deadline expired."""
