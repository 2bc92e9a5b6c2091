"""Mapping of service errors to HTTP responses."""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shortlinks.common.logging_config import get_logger
from shortlinks.errors import LinkError


logger = get_logger("shortlinks.web")


def error_response(error: LinkError, server_message: str) -> JSONResponse:
    """JSON error body for a service error.

    Client errors carry the service message. Server errors are logged with
    their cause and answered with ``server_message`` only.
    """
    if error.status_code >= 500:
        logger.error(f"{server_message}: {error.message} (cause: {error.cause!r})")
        return JSONResponse({"error": server_message}, status_code=error.status_code)

    return JSONResponse({"error": error.message}, status_code=error.status_code)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies are a 400, not FastAPI's default 422."""
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    if location:
        message = f"{location}: {message}"
    return JSONResponse({"error": message}, status_code=status.HTTP_400_BAD_REQUEST)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        {"error": "Internal server error"},
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
