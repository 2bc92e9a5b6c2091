"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class CreateLinkRequest(BaseModel):
    """Request to shorten a URL.

    Both fields are optional at the schema level so that a missing URL gets
    the service's own validation message instead of a generic one.
    """

    url: Optional[str] = Field(None, description="Destination URL (http or https)")
    custom_code: Optional[str] = Field(
        None,
        alias="customCode",
        description="Optional custom short code, 6-8 letters or digits",
    )

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {"url": "https://example.com/very/long/path/to/resource"},
                {"url": "https://github.com/user/repo", "customCode": "myrepo1"},
            ]
        },
    )


class LinkResponse(BaseModel):
    """A link as returned by the API."""

    id: int
    short_code: str
    original_url: str
    clicks: Optional[int] = None
    created_at: Optional[str] = Field(None, description="ISO-8601 UTC timestamp")
    last_clicked: Optional[str] = Field(None, description="ISO-8601 UTC timestamp or null")


class CreateLinkResponse(BaseModel):
    """Response after shortening a URL."""

    shortUrl: str = Field(..., description="The complete short URL")
    data: LinkResponse

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "shortUrl": "http://localhost:3000/aB3xY9",
                    "data": {
                        "id": 1,
                        "short_code": "aB3xY9",
                        "original_url": "https://openai.com",
                        "clicks": 0,
                        "created_at": "2024-05-01T12:00:00.000Z",
                        "last_clicked": None,
                    },
                }
            ]
        }
    }


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error message")


class HealthResponse(BaseModel):
    """Readiness check response."""

    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    timestamp: str = Field(..., description="Check timestamp")


class LivenessResponse(BaseModel):
    """Liveness check response."""

    ok: bool
    version: str
    uptime: float = Field(..., description="Seconds since the app was created")
    timestamp: str
    status: str
