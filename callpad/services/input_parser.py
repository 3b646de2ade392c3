"""
Input Parser.

Orchestrates one parse request: segment the text, run every fragment
through the pattern detector, then (optionally) hand the fragments that
came back ``unknown`` to the fallback classifier one at a time.

Output order follows fragment order. A fragment the fallback resolves
may expand into several items, which take the fragment's slot.
"""

from __future__ import annotations

from datetime import date

from callpad.config import Settings, get_settings
from callpad.logging_config import get_logger
from callpad.schemas.detection import DetectedItem, ParseRequest, ParseResponse
from callpad.services.fallback_classifier import FallbackClassifier
from callpad.services.pattern_detector import PatternDetector
from callpad.services.segmenter import split_fragments

logger = get_logger(__name__)


class InputParser:
    """Segmenter → Pattern Detector → Fallback Classifier."""

    def __init__(
        self,
        detector: PatternDetector | None = None,
        fallback: FallbackClassifier | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._detector = detector or PatternDetector()
        self._fallback = fallback or FallbackClassifier(self._settings)

    def detect_all(self, text: str, today: date | None = None) -> list[DetectedItem]:
        """Deterministic pass only; one item per fragment."""
        today = today or date.today()
        return [self._detector.detect(fragment, today) for fragment in split_fragments(text)]

    def _should_escalate(self, item: DetectedItem) -> bool:
        return item.is_unknown and len(item.original) >= self._settings.fallback_min_fragment_length

    async def parse(self, request: ParseRequest, today: date | None = None) -> ParseResponse:
        """Parse one request. Never raises; the worst case per fragment is unknown/0."""
        items = self.detect_all(request.text, today)
        if not items:
            return ParseResponse(items=[])

        unresolved = sum(1 for item in items if item.is_unknown)
        logger.info("input_parsed", fragments=len(items), unresolved=unresolved, use_ai=request.use_ai)

        if not (request.use_ai and unresolved and self._fallback.enabled):
            return ParseResponse(items=items)

        result: list[DetectedItem] = []
        for item in items:
            if not self._should_escalate(item):
                result.append(item)
                continue

            # One upstream request in flight at a time
            fallback_items = await self._fallback.classify(item.original)
            if fallback_items:
                result.extend(fallback_items)
            else:
                result.append(item)

        logger.info("input_parse_complete", items=len(result))
        return ParseResponse(items=result)
