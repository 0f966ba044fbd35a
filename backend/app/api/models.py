"""
Pydantic data models for the simplification API.

These models define the request and response bodies of the
``/api/simplify`` endpoint.  Keeping the schemas separate from the
router makes the API contract easy to inspect and adjust.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class SimplifyRequest(BaseModel):
    """Request body for simplifying a single curve."""

    points: List[List[float]] = Field(
        ..., description="Ordered curve coordinates as [x, y] or [x, y, z] lists"
    )
    tolerance: float = Field(
        ...,
        ge=0.0,
        description="Maximum distance a removed vertex may lie from the simplified curve",
    )
    # When omitted the curve is treated as a ring if it has at least four
    # points and its first and last points coincide.
    ring: Optional[bool] = Field(
        default=None,
        description="Whether the curve is a closed ring (auto-detected when omitted)",
    )


class SimplifyResponse(BaseModel):
    """Simplified curve returned by the API."""

    points: List[List[float]] = Field(..., description="Coordinates of the simplified curve")
    ring: bool = Field(..., description="Whether the result is a closed ring")
    originalSize: int = Field(..., description="Number of coordinates in the input curve")
    resultSize: int = Field(..., description="Number of coordinates in the simplified curve")
