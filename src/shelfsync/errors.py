# ABOUTME: Error taxonomy for remote store operations.
# ABOUTME: Every failure carries a reason tag so callers can treat them uniformly.


class StoreError(Exception):
    """Base class for failed remote store operations.

    Attributes:
        reason: Short tag identifying the failure kind.
        status_code: HTTP status of the response, if one was received.
    """

    reason = "store"

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TransportError(StoreError):
    """Raised when the store could not be reached or answered with a server error."""

    reason = "transport"


class NotFoundError(StoreError):
    """Raised when an operation references an id the store does not know."""

    reason = "not_found"


class ValidationError(StoreError):
    """Raised when the store rejects a payload, or returns one we cannot parse."""

    reason = "validation"
