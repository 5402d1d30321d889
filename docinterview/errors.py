"""
Error taxonomy for the document interview core.

Every failure the core can surface maps onto exactly one of these types.
The HTTP layer translates them into status codes; nothing in the core
retries, swallows, or converts them.

Contents:
- DocumentInterviewError: Base class
- ValidationError: Required input missing or malformed (client error)
- ResolutionError: Locator no longer matches the current document (client error)
- UpstreamError: Generation service failed or produced no content (server error)
"""


class DocumentInterviewError(Exception):
    """Base class for all document interview failures"""

    status_code = 500


class ValidationError(DocumentInterviewError):
    """Raised when a required input field is missing or has the wrong shape"""

    status_code = 400


class ResolutionError(DocumentInterviewError):
    """
    Raised when a blank locator cannot be re-resolved against the current text.

    Typical causes: stale offsets after an earlier substitution, a blank that
    has already been filled, or a context window that matches more than once.
    """

    status_code = 400


class UpstreamError(DocumentInterviewError):
    """Raised when the external generation service call fails"""

    status_code = 500
