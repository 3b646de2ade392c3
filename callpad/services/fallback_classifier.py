"""
Fallback Classifier.

Second-pass classification for fragments the pattern detector could not
resolve. Sends one fragment per request to an OpenAI-compatible chat
completions endpoint and parses the JSON item list it returns. If the
reply is not valid JSON a line-oriented "kind: value" parser gets a
chance; if that also finds nothing the fragment stays unknown.

Failures never propagate: an unreachable endpoint or a malformed reply
is logged and treated as "no items".
"""

from __future__ import annotations

import json
import re
from typing import Any, Optional

import httpx

from callpad.config import Settings, get_settings
from callpad.errors import FallbackError, MalformedFallbackResponse, UpstreamUnavailable
from callpad.logging_config import get_logger
from callpad.schemas.detection import DetectedItem, ItemKind

logger = get_logger(__name__)

# Confidence given to items recovered by the text parser
TEXT_FALLBACK_CONFIDENCE = 0.5

SYSTEM_PROMPT = """You are a parser for a bus/limo rental call center. Extract structured data from agent notes typed during a live phone call.

Return ONLY a JSON object of the form {"items": [...]}. Each item has:
- kind: one of phone, email, zip, city, date, time, passengers, hours, pickup_address, destination, dropoff_address, event_type, vehicle_type, name, website, agent, stop, unknown
- value: the extracted/cleaned value
- confidence: 0-1 confidence score
- normalizedCity: the major metro area for city/pickup/dropoff locations when you know it, otherwise omit

Rules:
- Two capitalized words are a person name UNLESS one of them is a venue or business word (hotel, grill, bar, church, park, club, resort, casino, ...), a city, or a vehicle word.
- For addresses, decide pickup vs destination vs dropoff from cues like "from", "to", "going to", "pick up at", "drop off at". A place with no cue is a stop.
- A number followed by am/pm is a time, never a passenger count.
- Dates should be returned as written; do not invent a year.
- If nothing fits, return {"items": []}.

Examples:
"walmart on frye and gilbert" → {"items": [{"kind": "stop", "value": "walmart on frye and gilbert", "confidence": 0.7}]}
"john smith" → {"items": [{"kind": "name", "value": "John Smith", "confidence": 0.9}]}
"Rustler's Rooste" → {"items": [{"kind": "stop", "value": "Rustler's Rooste", "confidence": 0.7}]}
"partybusquotes.com" → {"items": [{"kind": "website", "value": "partybusquotes.com", "confidence": 0.95}]}
"going to the phoenician" → {"items": [{"kind": "destination", "value": "the phoenician", "confidence": 0.85}]}
"pick them up at the hotel" → {"items": [{"kind": "pickup_address", "value": "the hotel", "confidence": 0.8}]}"""

# "kind: value" or "- kind = value" on one line
TEXT_LINE_RE = re.compile(r"^\s*(?:[-*•]\s*)?([a-z_ ]+?)\s*[:=|\-]\s*(.+?)\s*$", re.IGNORECASE)
JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


class FallbackClassifier:
    """
    Generative-model classifier for unresolved fragments.

    One request per fragment; callers are expected to await fragments
    one at a time so the upstream rate limit is respected.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._client = client

    @property
    def enabled(self) -> bool:
        return self._settings.fallback_enabled

    async def classify(self, fragment: str) -> list[DetectedItem]:
        """
        Classify one fragment via the model.

        Returns zero or more items, each with ``original=fragment``.
        Never raises.
        """
        if not self.enabled:
            logger.debug("fallback_disabled", fragment_length=len(fragment))
            return []

        logger.info("fallback_started", fragment_length=len(fragment))
        try:
            content = await self._call_model(fragment)
            items = parse_model_reply(content, fragment)
        except FallbackError as e:
            logger.warning("fallback_failed", error_type=type(e).__name__, error=str(e))
            return []

        logger.info("fallback_complete", items=len(items))
        return items

    async def _call_model(self, fragment: str) -> str:
        """POST to chat completions and return the message content."""
        payload = {
            "model": self._settings.fallback_model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": fragment},
            ],
            "response_format": {"type": "json_object"},
            "max_tokens": self._settings.fallback_max_tokens,
            "temperature": 0.1,
        }
        headers = {
            "Authorization": f"Bearer {self._settings.openai_api_key}",
            "Content-Type": "application/json",
        }
        url = f"{self._settings.openai_base_url.rstrip('/')}/chat/completions"

        try:
            if self._client is not None:
                response = await self._client.post(url, headers=headers, json=payload)
            else:
                async with httpx.AsyncClient(timeout=self._settings.fallback_timeout_seconds) as client:
                    response = await client.post(url, headers=headers, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise UpstreamUnavailable(str(e)) from e
        except ValueError as e:
            raise MalformedFallbackResponse(f"response body is not JSON: {e}") from e

        try:
            return data["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError) as e:
            raise MalformedFallbackResponse(f"unexpected completion shape: {e}") from e


def parse_model_reply(content: str, fragment: str) -> list[DetectedItem]:
    """
    Turn the model's reply into items.

    Structured JSON is preferred; a reply that is not JSON falls back to
    the line-oriented text parser. Raises MalformedFallbackResponse only
    when neither yields anything usable from a non-empty reply.
    """
    if not content.strip():
        return []

    try:
        raw_items = _extract_json_items(content)
    except MalformedFallbackResponse:
        items = parse_text_reply(content, fragment)
        if not items:
            raise
        logger.info("fallback_text_parsed", items=len(items))
        return items

    items: list[DetectedItem] = []
    for raw in raw_items:
        item = _coerce_item(raw, fragment)
        if item is not None:
            items.append(item)
    return items


def _extract_json_items(content: str) -> list[Any]:
    try:
        parsed = json.loads(content)
    except json.JSONDecodeError:
        # Models sometimes wrap the object in prose or code fences
        match = JSON_OBJECT_RE.search(content)
        if not match:
            raise MalformedFallbackResponse("reply contains no JSON object")
        try:
            parsed = json.loads(match.group(0))
        except json.JSONDecodeError as e:
            raise MalformedFallbackResponse(f"reply JSON is invalid: {e}") from e

    if isinstance(parsed, list):
        return parsed
    if isinstance(parsed, dict):
        for key in ("items", "fields", "results"):
            if isinstance(parsed.get(key), list):
                return parsed[key]
        if "kind" in parsed or "type" in parsed:
            return [parsed]
    raise MalformedFallbackResponse("reply JSON has no item list")


def _coerce_kind(raw: Any) -> ItemKind:
    text = str(raw or "").strip().lower().replace(" ", "_").replace("-", "_")
    aliases = {"address": "stop", "pickup": "pickup_address", "dropoff": "dropoff_address",
               "event": "event_type", "vehicle": "vehicle_type", "url": "website"}
    text = aliases.get(text, text)
    try:
        return ItemKind(text)
    except ValueError:
        return ItemKind.UNKNOWN


def _coerce_item(raw: Any, fragment: str) -> Optional[DetectedItem]:
    if not isinstance(raw, dict):
        logger.warning("skipping_malformed_item", item=repr(raw)[:200])
        return None

    value = raw.get("value")
    if value is None or str(value).strip() == "":
        return None

    try:
        confidence = float(raw.get("confidence", 0.5))
    except (TypeError, ValueError):
        confidence = 0.5
    confidence = min(1.0, max(0.0, confidence))

    kind = _coerce_kind(raw.get("kind", raw.get("type")))
    normalized_city = raw.get("normalizedCity") or raw.get("normalized_city")
    return DetectedItem(
        kind=kind,
        value=str(value).strip(),
        confidence=0.0 if kind == ItemKind.UNKNOWN else confidence,
        original=fragment,
        normalized_city=str(normalized_city) if normalized_city else None,
    )


def parse_text_reply(content: str, fragment: str) -> list[DetectedItem]:
    """Best-effort parser for replies like "name: John Smith" one per line."""
    items: list[DetectedItem] = []
    for line in content.splitlines():
        match = TEXT_LINE_RE.match(line)
        if not match:
            continue
        kind = _coerce_kind(match.group(1))
        if kind == ItemKind.UNKNOWN:
            continue
        value = match.group(2).strip().strip("\"'")
        if value:
            items.append(
                DetectedItem(
                    kind=kind,
                    value=value,
                    confidence=TEXT_FALLBACK_CONFIDENCE,
                    original=fragment,
                )
            )
    return items
