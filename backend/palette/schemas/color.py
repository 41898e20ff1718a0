"""
Palette Backend: Pydantic Request/Response Schemas
===================================================

What:  API contract for stored color records, derived color objects, inserts,
       errors and health.
Why:   Kept separate from the SQLAlchemy model so the API shape can differ
       from the table (e.g. ColorObject is never stored).
"""

from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Color Models
# ══════════════════════════════════════════════════════════════════════════


class ColorRecord(BaseModel):
    """
    What:  A stored color as returned by the raw lookup endpoints.
    Who:   GET /, /colorid, /color, /colorname; input to the transform.

    `hex` is expected to match ^#[0-9A-Fa-f]{6}$ but is not validated here:
    rows that violate it must reach the transform and fail loudly there.
    """
    id: str = Field(description="Record identifier")
    hex: str = Field(description="Color as '#RRGGBB'")
    name: str = Field(description="Human-readable color name")

    model_config = {"from_attributes": True}


class ColorObject(BaseModel):
    """
    What:  Derived projection of one ColorRecord.
    Who:   Returned by GET /colors.
    When:  Computed per request; never persisted.
    """
    id: str = Field(description="Record identifier, copied verbatim")
    name: str = Field(description="Color name, copied verbatim")
    hex: str = Field(description="Original hex string, copied verbatim")
    red: int = Field(ge=0, le=255, description="Red channel (0-255)")
    green: int = Field(ge=0, le=255, description="Green channel (0-255)")
    blue: int = Field(ge=0, le=255, description="Blue channel (0-255)")
    chroma: float = Field(ge=0, le=1, description="max - min of normalized channels")
    hue: float = Field(ge=0, lt=360, description="Hue angle in degrees [0, 360)")
    saturation: float = Field(ge=0, le=1, description="chroma / value")
    value: float = Field(ge=0, le=1, description="Max normalized channel")
    luma: float = Field(ge=0, le=1, description="0.3R + 0.59G + 0.11B; white rounds to just under 1")


class ColorCreate(BaseModel):
    """
    What:  Body of POST /addcolor.

    Both fields default to empty so that missing values reach ColorService
    and come back as a 400 with a readable message, not a 422.
    """
    hex: str = Field(default="", description="Color as '#RRGGBB'")
    name: str = Field(default="", description="Human-readable color name")


class InsertResponse(BaseModel):
    """Returned by POST /addcolor with HTTP 201."""
    inserted_id: str = Field(description="Identifier of the new record")


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error body for all API errors.

    Example:
        {
            "error": "malformed_color_data",
            "message": "Malformed hex color '#ZZ0000': red channel 'ZZ' ...",
            "details": {"channel": "red", "substring": "ZZ"},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
