"""Error types raised by the link service and storage layer."""

from typing import Optional


class LinkError(Exception):
    """Base class for all link service errors.

    Each subclass carries the HTTP status code the web layer should answer
    with. The message is safe to show to the caller for 4xx errors only.
    """

    status_code: int = 500

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class ValidationError(LinkError):
    """Missing or malformed input."""

    status_code = 400


class ConflictError(LinkError):
    """Short code already taken."""

    status_code = 409


class NotFoundError(LinkError):
    """Short code does not resolve to a link."""

    status_code = 404


class GenerationExhaustedError(LinkError):
    """Every random short code candidate collided with an existing one."""

    status_code = 500


class StorageError(LinkError):
    """Underlying persistence failure (query error, timeout, lost connection)."""

    status_code = 500
