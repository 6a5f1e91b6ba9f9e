"""
Exception types raised by the locator pipeline.

Record-level failures (PartialRecordError) are recovered inside the decoder.
Everything else propagates to the API layer, which maps it to a response.
"""


class OverheadError(Exception):
    """Base class for all service errors."""


class FeedFormatError(OverheadError):
    """Upstream payload is not a JSON object of per-flight arrays."""


class PartialRecordError(OverheadError):
    """A single feed row is missing or mistypes a required field."""

    def __init__(self, identifier: str, field: str, reason: str):
        self.identifier = identifier
        self.field = field
        self.reason = reason
        super().__init__(f'{identifier or "<unnamed>"}: {field} {reason}')


class UpstreamUnavailableError(OverheadError):
    """The feed provider could not be reached or rejected the request."""


class InvalidQueryError(OverheadError):
    """Observer query parameters are missing or not numeric."""
