"""Redirect and liveness routes."""

import time

from fastapi import APIRouter, Request, status
from fastapi.responses import PlainTextResponse, RedirectResponse

from shortlinks.common.logging_config import get_logger
from shortlinks.common.timestamps import normalize_timestamp, utcnow
from shortlinks.errors import LinkError, NotFoundError

from ..api.schemas import LivenessResponse

router = APIRouter()
logger = get_logger("shortlinks.web")


@router.get("/healthz", response_model=LivenessResponse, summary="Liveness check")
async def healthz(request: Request):
    """Process liveness; does not touch the database."""
    return LivenessResponse(
        ok=True,
        version=request.app.version,
        uptime=round(time.monotonic() - request.app.state.started_at, 3),
        timestamp=normalize_timestamp(utcnow()),
        status="running",
    )


@router.get("/{short_code}", include_in_schema=False)
async def redirect_to_url(request: Request, short_code: str):
    """Redirect to the original URL, counting the click."""
    service = request.app.state.service

    try:
        original_url = await service.resolve_and_track(short_code)
    except NotFoundError:
        return PlainTextResponse("Short URL not found", status_code=status.HTTP_404_NOT_FOUND)
    except LinkError as e:
        logger.error(f"Redirect failed for {short_code}: {e.message} (cause: {e.cause!r})")
        return PlainTextResponse("Server error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    # Always 302, never 301
    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)
