"""
API Router: Parse Endpoints.

Stateless classification of a typed line, and deterministic metro
lookup for a free-text location.
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from callpad.logging_config import get_logger
from callpad.schemas.detection import ParseRequest
from callpad.services.city_normalizer import CityNormalizer
from callpad.services.input_parser import InputParser

logger = get_logger(__name__)
router = APIRouter(tags=["Parse"])

_parser: Optional[InputParser] = None
_normalizer: Optional[CityNormalizer] = None


def get_parser() -> InputParser:
    global _parser
    if _parser is None:
        _parser = InputParser()
    return _parser


def get_normalizer() -> CityNormalizer:
    global _normalizer
    if _normalizer is None:
        _normalizer = CityNormalizer()
    return _normalizer


class NormalizeLocationRequest(BaseModel):
    location: str = ""


@router.post("/parse-input")
async def parse_input(request: Request) -> dict[str, Any]:
    """
    Classify comma-delimited shorthand into typed items.

    Body: ``{"text": "...", "useAI": false}``. A missing, empty or
    non-string ``text`` yields ``{"items": []}``. ``useAI`` only counts
    when it is the JSON literal ``true``.
    """
    try:
        payload = await request.json()
    except ValueError:
        payload = None

    if not isinstance(payload, dict):
        return {"items": []}
    text = payload.get("text")
    if not isinstance(text, str) or not text.strip():
        return {"items": []}

    parse_request = ParseRequest(text=text, use_ai=payload.get("useAI") is True)
    response = await get_parser().parse(parse_request)
    return response.to_public()


@router.post("/normalize-location")
async def normalize_location(body: NormalizeLocationRequest) -> dict[str, Any]:
    """Resolve a city / suburb ("mesa, az") to its service metro."""
    location = body.location.strip()
    if not location:
        raise HTTPException(status_code=400, detail="Missing location")

    normalizer = get_normalizer()
    query = normalizer.parse_location_query(location)
    metro = normalizer.resolve_metro(location)

    logger.info("location_normalized", metro=metro, state=query.state)
    return {
        "success": metro is not None,
        "location": location,
        "metro": metro,
        "cityName": query.city,
        "state": query.state,
    }
