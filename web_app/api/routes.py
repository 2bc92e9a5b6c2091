"""API routes implementation."""

from typing import List, Optional

from fastapi import APIRouter, Query, Request, status

from shortlinks.common.timestamps import normalize_timestamp, utcnow
from shortlinks.errors import LinkError

from ..errors import error_response
from .schemas import (
    CreateLinkRequest,
    CreateLinkResponse,
    LinkResponse,
    MessageResponse,
    HealthResponse,
    ErrorResponse,
)

router = APIRouter()


@router.post(
    "/links",
    response_model=CreateLinkResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Missing/invalid URL or bad custom code"},
        409: {"model": ErrorResponse, "description": "Short code already taken"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Create short link",
    description="Shorten a URL. Optionally provide a custom 6-8 character code.",
)
async def create_link(request: Request, body: CreateLinkRequest):
    """Create a short link."""
    service = request.app.state.service

    try:
        created = await service.create_link(
            original_url=body.url,
            custom_code=body.custom_code,
        )
    except LinkError as e:
        return error_response(e, "Failed to shorten URL")

    return created.to_dict()


@router.get(
    "/links",
    response_model=List[LinkResponse],
    responses={500: {"model": ErrorResponse, "description": "Internal server error"}},
    summary="List links",
    description="List all links, optionally filtered by a case-insensitive search and sorted.",
)
async def list_links(
    request: Request,
    search: Optional[str] = Query(None, description="Substring of short code or URL"),
    sort: Optional[str] = Query(
        None,
        description="newest (default), oldest, most-clicked or least-clicked",
    ),
):
    """List links."""
    service = request.app.state.service

    try:
        links = await service.list_links(search=search, sort=sort)
    except LinkError as e:
        return error_response(e, "Failed to fetch links")

    return [link.to_dict() for link in links]


@router.get(
    "/links/{short_code}",
    response_model=LinkResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Short code not found"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Get link information",
    description="Get a link with its click statistics. Does not count as a click.",
)
async def get_link(request: Request, short_code: str):
    """Get information about a link."""
    service = request.app.state.service

    try:
        link = await service.get_link(short_code)
    except LinkError as e:
        return error_response(e, "Server error")

    return link.to_dict()


@router.delete(
    "/links/{short_code}",
    response_model=MessageResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Short code not found"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Delete link",
    description="Permanently delete a link. Its short URL stops redirecting immediately.",
)
async def delete_link(request: Request, short_code: str):
    """Delete a link."""
    service = request.app.state.service

    try:
        await service.delete_link(short_code)
    except LinkError as e:
        return error_response(e, "Deletion failed")

    return {"message": "Deleted successfully"}


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Readiness check",
    description="Check that the database is reachable.",
)
async def health_check(request: Request):
    """Readiness endpoint for load balancers and monitoring."""
    service = request.app.state.service

    health = await service.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        database="healthy" if health["database"] else "unhealthy",
        timestamp=normalize_timestamp(utcnow()),
    )
