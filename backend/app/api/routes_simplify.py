"""
API route for curve simplification.

A single endpoint accepts an ordered list of coordinates and a
tolerance, runs the Douglas–Peucker driver over a tagged curve and
returns the simplified coordinates.  Input that cannot form a valid
line string or ring is rejected with ``400``.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from .models import SimplifyRequest, SimplifyResponse
from ..services.curves import DEFAULT_FACTORY, LinearRing
from ..services.simplifier import simplify_curve

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/simplify", response_model=SimplifyResponse)
async def simplify(body: SimplifyRequest) -> SimplifyResponse:
    """Simplify the posted curve and return the result."""
    points = body.points
    is_ring = body.ring
    if is_ring is None:
        is_ring = len(points) >= LinearRing.MINIMUM_VALID_SIZE and points[0] == points[-1]
    try:
        if is_ring:
            curve = DEFAULT_FACTORY.create_linear_ring(points)
        else:
            curve = DEFAULT_FACTORY.create_line_string(points)
        if curve.num_points() < 2:
            raise ValueError("At least 2 points are required")
        result = simplify_curve(curve, body.tolerance, is_ring=is_ring)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except Exception as exc:
        logger.exception("simplify endpoint error for %d points: %s", len(points), exc)
        raise HTTPException(status_code=500, detail=f"Failed to simplify curve: {exc}")
    return SimplifyResponse(
        points=[list(p) for p in result.coordinates],
        ring=is_ring,
        originalSize=curve.num_points(),
        resultSize=result.num_points(),
    )
