"""
Pattern Detector.

Classifies one comma-delimited fragment of agent shorthand into exactly
one DetectedItem using a fixed, ordered cascade of rules. Each rule
either returns an item or None; the first item wins and later rules
never run. The rules overlap heavily ("mesa az" looks like a city and
like a two-word name, "5pm pu" looks like a time and like a pickup), so
the order in ``PatternDetector.rules`` is part of the behaviour:
reordering it changes classifications.

Order (highest priority first):
    phone, email, website, zip, city_state, agent, pickup_dropoff,
    destination, name_marker, two_token_name, first_name, time,
    absolute_date, relative_date, passengers, hours, event_type,
    vehicle_type, venue, location_fallback

Anything left over is ``unknown`` with confidence 0.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from callpad.data.keywords import DATE_WORDS, NUMBER_WORDS
from callpad.gazetteer import Gazetteer, default_gazetteer
from callpad.logging_config import get_logger
from callpad.schemas.detection import DetectedItem, ItemKind
from callpad.services.city_normalizer import CityNormalizer, clean_location_key
from callpad.services.date_resolver import (
    parse_time,
    resolve_absolute_date,
    resolve_relative_date,
    word_to_number,
)

logger = get_logger(__name__)

# ── Regexes ──────────────────────────────────────────────────────
PHONE_PREFIX_RE = re.compile(r"^(?:phone|cell|mobile|tel|ph|number|num|#)\s*[:#\-]?\s*", re.IGNORECASE)
PHONE_BODY_RE = re.compile(r"^\+?[\d\s\-().]+$")
EMAIL_RE = re.compile(r"^(?:e-?mail\s*:?\s*)?([^\s@]+@[^\s@]+\.[^\s@]+)$", re.IGNORECASE)
WEBSITE_RE = re.compile(
    r"^(?:(?:website|site|url)\s*:?\s*)?"
    r"((?:https?://)?(?:www\.)?[a-z0-9](?:[a-z0-9\-]*[a-z0-9])?(?:\.[a-z0-9\-]+)*"
    r"\.(?:com|net|org|io|co|us|biz|info|app|ai)(?:[/?#]\S*)?)$",
    re.IGNORECASE,
)
ZIP_RE = re.compile(r"^(?:zip(?:\s*code)?\s*:?\s*)?(\d{5}(?:-\d{4})?)$", re.IGNORECASE)
ALPHA_LOCATION_RE = re.compile(r"^[a-z][a-z .'\-]*$")
AGENT_RE = re.compile(r"^(?:agent\s*:?\s*)?([a-z]+)$", re.IGNORECASE)

_PU = r"(?:pick(?:ing)?\s*-?\s*up|p/u|pu)"
_DO = r"(?:drop(?:ping)?\s*-?\s*off|d/o|do)"
PICKUP_POSTFIX_RE = re.compile(rf"^(?P<rest>.+?)\s+(?:is\s+(?:the\s+)?|for\s+)?{_PU}$", re.IGNORECASE)
PICKUP_PREFIX_RE = re.compile(
    rf"^{_PU}(?:\s*[:@]\s*|\s+)(?:(?:is|at|from|in)\s+|@\s*)?(?P<rest>.+)$", re.IGNORECASE
)
DROPOFF_POSTFIX_RE = re.compile(rf"^(?P<rest>.+?)\s+(?:is\s+(?:the\s+)?|for\s+)?{_DO}$", re.IGNORECASE)
DROPOFF_PREFIX_RE = re.compile(
    rf"^{_DO}(?:\s*[:@]\s*|\s+)(?:(?:is|at|in)\s+|@\s*)?(?P<rest>.+)$", re.IGNORECASE
)
PICKUP_MENTION_RE = re.compile(r"\b(?:pick(?:ing)?\s+(?:\w+\s+)?up|pickup|p/u|pu|from)\b", re.IGNORECASE)
BARE_HOUR_RE = re.compile(r"^(?:at\s+|@\s*)?(\d{1,2})$", re.IGNORECASE)
TYPO_DIGIT_RE = re.compile(r"\b([A-Za-z]{2,})\d\b")

DESTINATION_RE = re.compile(
    r"^(?:to|going\s+to|headed\s+to|heading\s+to|destination\s*:?|dest\s*:?)\s+(.+)$", re.IGNORECASE
)
NAME_MARKER_RE = re.compile(
    r"^(?:(?:customer|caller|client|contact|name|cust)\s*:\s*|"
    r"(?:(?:customer|caller)(?:'s)?\s+name\s+is|(?:my\s+)?name\s+is)\s+)(.+)$",
    re.IGNORECASE,
)
TWO_TOKEN_RE = re.compile(r"^([A-Za-z][A-Za-z'\-]+)\s+([A-Za-z][A-Za-z'\-]+)$")
ONE_TOKEN_RE = re.compile(r"^[A-Za-z][A-Za-z'\-]+$")

_PAX_UNIT = (
    r"(?:people|ppl|peeps|poeple|pepole|peopel|peple|persons?|pax|guests?|adults?|heads|"
    r"passengers?|passangers?|passengars?|passenegers?|passanger|psgrs?|pass)"
)
PAX_NUMERIC_RE = re.compile(rf"^(?:party\s+of\s+)?(\d{{1,3}})\s*{_PAX_UNIT}$", re.IGNORECASE)
PAX_PARTY_OF_RE = re.compile(r"^party\s+of\s+(\d{1,3})$", re.IGNORECASE)
PAX_WORD_RE = re.compile(rf"^([a-z]+(?:[\s\-][a-z]+)?)\s+{_PAX_UNIT}$", re.IGNORECASE)
PAX_BARE_RE = re.compile(r"^\d{2,3}$")

HOURS_RE = re.compile(r"^(\d+(?:\.\d+)?)\s*(hours?|hrs?|h)?$", re.IGNORECASE)
HOURS_WORD_RE = re.compile(r"^([a-z]+(?:[\s\-][a-z]+)?)\s+(?:hours?|hrs?)$", re.IGNORECASE)

ADDRESS_RE = re.compile(r"^\d{1,6}\s+[A-Za-z0-9 .'#\-]+$")
CALLED_RE = re.compile(r"^(.+?)\s+(?:called|named)\s+(.+)$", re.IGNORECASE)
NEAR_RE = re.compile(r"^(.+?)\s+(?:near|by|at|on)\s+(.+)$", re.IGNORECASE)
LOCATION_LEAD_RE = re.compile(
    r"^(?:in|near|around|downtown|north|south|east|west|outside(?:\s+of)?|by)\s+", re.IGNORECASE
)

_DIRECTIONS = frozenset({"n", "s", "e", "w", "ne", "nw", "se", "sw", "north", "south", "east", "west"})
# Words that start a phrase rather than a place name
_PHRASE_WORDS = frozenset({
    "to", "from", "at", "in", "near", "going", "headed", "heading", "the", "a", "an",
    "pu", "do", "pickup", "dropoff", "pick", "drop", "destination", "for", "and", "with",
})

# ── Confidence levels ────────────────────────────────────────────
PHONE_CONFIDENCE = 0.95
EMAIL_CONFIDENCE = 0.99
KNOWN_FIRST_NAME_CONFIDENCE = 0.9
UNKNOWN_FIRST_NAME_CONFIDENCE = 0.75
GUESSED_NUMBER_CONFIDENCE = 0.7


@dataclass(frozen=True)
class DetectionContext:
    """The fragment under classification plus the reference date."""

    text: str
    today: date

    @property
    def lowered(self) -> str:
        return self.text.lower()


@dataclass(frozen=True)
class Rule:
    name: str
    match: Callable[[DetectionContext], Optional[DetectedItem]]


def clean_typo_digits(text: str) -> str:
    """Strip a single digit fused to the end of a word ("chicago4" → "chicago")."""
    return TYPO_DIGIT_RE.sub(r"\1", text).strip()


def _display_name(text: str) -> str:
    """Title-case names typed in all lower or all upper case; keep mixed case."""
    if text.islower() or text.isupper():
        return " ".join(part.capitalize() for part in text.split())
    return text


class PatternDetector:
    """
    Deterministic, stateless fragment classifier.

    Usage:
        detector = PatternDetector()
        detector.detect("mesa az")  # DetectedItem(kind=city, normalized_city="Phoenix", ...)
    """

    def __init__(
        self,
        gazetteer: Gazetteer | None = None,
        normalizer: CityNormalizer | None = None,
    ) -> None:
        self._gazetteer = gazetteer or default_gazetteer()
        self._normalizer = normalizer or CityNormalizer(self._gazetteer)
        self.rules: tuple[Rule, ...] = (
            Rule("phone", self._match_phone),
            Rule("email", self._match_email),
            Rule("website", self._match_website),
            Rule("zip", self._match_zip),
            Rule("city_state", self._match_city_state),
            Rule("agent", self._match_agent),
            Rule("pickup_dropoff", self._match_pickup_dropoff),
            Rule("destination", self._match_destination),
            Rule("name_marker", self._match_name_marker),
            Rule("two_token_name", self._match_two_token_name),
            Rule("first_name", self._match_first_name),
            Rule("time", self._match_time),
            Rule("absolute_date", self._match_absolute_date),
            Rule("relative_date", self._match_relative_date),
            Rule("passengers", self._match_passengers),
            Rule("hours", self._match_hours),
            Rule("event_type", self._match_event),
            Rule("vehicle_type", self._match_vehicle),
            Rule("venue", self._match_venue),
            Rule("location_fallback", self._match_location_fallback),
        )

    def rule_names(self) -> list[str]:
        return [rule.name for rule in self.rules]

    def detect(self, fragment: str, today: date | None = None) -> DetectedItem:
        """Classify one fragment. Never raises; no match is ``unknown``/0."""
        text = " ".join(fragment.split())
        if not text:
            return DetectedItem.unknown(fragment)

        ctx = DetectionContext(text=text, today=today or date.today())
        for rule in self.rules:
            try:
                item = rule.match(ctx)
            except Exception as e:
                logger.warning("rule_error", rule=rule.name, fragment=text, error=str(e))
                continue
            if item is not None:
                logger.debug(
                    "fragment_classified",
                    rule=rule.name,
                    kind=item.kind.value,
                    confidence=item.confidence,
                )
                return item

        logger.debug("fragment_unmatched", fragment=text)
        return DetectedItem.unknown(text)

    # ── helpers ──────────────────────────────────────────────────

    @staticmethod
    def _item(
        kind: ItemKind,
        value: str,
        confidence: float,
        ctx: DetectionContext,
        normalized_city: str | None = None,
    ) -> DetectedItem:
        return DetectedItem(
            kind=kind,
            value=value,
            confidence=confidence,
            original=ctx.text,
            normalized_city=normalized_city,
        )

    def _is_vocabulary(self, text: str) -> bool:
        """True when ``text`` is a place, state, date, number or trip keyword."""
        lowered = text.lower()
        g = self._gazetteer
        return bool(
            g.is_known_place(lowered)
            or g.is_state(lowered)
            or lowered in DATE_WORDS
            or lowered in NUMBER_WORDS
            or lowered in g.street_suffixes
            or lowered in _PHRASE_WORDS
            or g.contains_event(lowered)
            or g.vehicle_label(lowered)
            or g.venue_keyword(lowered)
        )

    @staticmethod
    def _is_time_expression(text: str) -> bool:
        """Time check used before accepting a pickup/dropoff location."""
        if parse_time(text) is not None:
            return True
        match = BARE_HOUR_RE.match(text)
        return bool(match) and 1 <= int(match.group(1)) <= 12

    # ── 1. phone ─────────────────────────────────────────────────

    def _match_phone(self, ctx: DetectionContext) -> Optional[DetectedItem]:
        text = ctx.text
        for _ in range(2):  # "cell # 602..." carries two prefixes
            text = PHONE_PREFIX_RE.sub("", text, count=1).strip()
        if not text or not PHONE_BODY_RE.match(text):
            return None

        digits = re.sub(r"\D", "", text)
        if len(digits) == 11 and digits[0] == "1":
            digits = digits[1:]
        if len(digits) != 10:
            return None

        return self._item(
            ItemKind.PHONE,
            f"{digits[:3]}-{digits[3:6]}-{digits[6:]}",
            PHONE_CONFIDENCE,
            ctx,
        )

    # ── 2. email / website ───────────────────────────────────────

    def _match_email(self, ctx: DetectionContext) -> Optional[DetectedItem]:
        match = EMAIL_RE.match(ctx.text)
        if not match:
            return None
        return self._item(ItemKind.EMAIL, match.group(1).lower(), EMAIL_CONFIDENCE, ctx)

    def _match_website(self, ctx: DetectionContext) -> Optional[DetectedItem]:
        match = WEBSITE_RE.match(ctx.text)
        if not match:
            return None
        return self._item(ItemKind.WEBSITE, match.group(1).lower(), 0.9, ctx)

    # ── 3. zip ───────────────────────────────────────────────────

    def _match_zip(self, ctx: DetectionContext) -> Optional[DetectedItem]:
        match = ZIP_RE.match(ctx.text)
        if not match:
            return None
        return self._item(ItemKind.ZIP, match.group(1), 0.95, ctx)

    # ── 4. city + state / known suburb ───────────────────────────

    def _match_city_state(self, ctx: DetectionContext) -> Optional[DetectedItem]:
        key = clean_location_key(ctx.text)
        if not key or not ALPHA_LOCATION_RE.match(key):
            return None

        parts = key.split()
        if len(parts) >= 2 and parts[-1] in self._gazetteer.state_codes:
            city = " ".join(parts[:-1])
            if len(parts) - 1 <= 3 and self._is_plausible_city(city, parts[-1], "," in ctx.text):
                metro = self._normalizer.resolve_metro(key)
                return self._item(ItemKind.CITY, ctx.text, 0.95 if metro else 0.9, ctx, metro)

        metro = self._normalizer.normalize(key)
        if metro:
            return self._item(ItemKind.CITY, ctx.text, 0.95, ctx, metro)
        return None

    def _is_plausible_city(self, city: str, state_token: str, has_comma: bool) -> bool:
        if self._gazetteer.is_known_place(city):
            return True
        if state_token in self._gazetteer.ambiguous_state_tokens and not has_comma:
            return False
        if city.split()[0] in _PHRASE_WORDS:
            return False
        return not any(self._is_vocabulary(word) for word in city.split())

    # ── 5. agent ─────────────────────────────────────────────────

    def _match_agent(self, ctx: DetectionContext) -> Optional[DetectedItem]:
        match = AGENT_RE.match(ctx.text)
        if not match or match.group(1).lower() not in self._gazetteer.agent_roster:
            return None
        return self._item(ItemKind.AGENT, match.group(1).capitalize(), 0.95, ctx)

    # ── 6. pickup / dropoff phrases ──────────────────────────────

    def _match_pickup_dropoff(self, ctx: DetectionContext) -> Optional[DetectedItem]:
        for pattern, kind in (
            (PICKUP_POSTFIX_RE, ItemKind.PICKUP_ADDRESS),
            (PICKUP_PREFIX_RE, ItemKind.PICKUP_ADDRESS),
            (DROPOFF_POSTFIX_RE, ItemKind.DROPOFF_ADDRESS),
            (DROPOFF_PREFIX_RE, ItemKind.DROPOFF_ADDRESS),
        ):
            match = pattern.match(ctx.text)
            if not match:
                continue

            rest = match.group("rest").strip()
            if self._is_time_expression(rest):
                time_value = re.sub(r"^(?:at\s+|@\s*)", "", rest, flags=re.IGNORECASE)
                return self._item(ItemKind.TIME, time_value, 0.9, ctx)

            location = clean_typo_digits(rest)
            if not location:
                continue
            metro = self._normalizer.resolve_metro(location)
            return self._item(kind, location, 0.85, ctx, metro)
        return None

    # ── 7. destination ───────────────────────────────────────────

    def _match_destination(self, ctx: DetectionContext) -> Optional[DetectedItem]:
        match = DESTINATION_RE.match(ctx.text)
        if not match:
            return None
        return self._item(ItemKind.DESTINATION, clean_typo_digits(match.group(1)), 0.85, ctx)

    # ── 8–10. names ──────────────────────────────────────────────

    def _match_name_marker(self, ctx: DetectionContext) -> Optional[DetectedItem]:
        match = NAME_MARKER_RE.match(ctx.text)
        if not match:
            return None
        return self._item(ItemKind.NAME, _display_name(match.group(1).strip()), 0.95, ctx)

    def _match_two_token_name(self, ctx: DetectionContext) -> Optional[DetectedItem]:
        match = TWO_TOKEN_RE.match(ctx.text)
        if not match:
            return None

        first, last = match.group(1), match.group(2)
        known_first = first.lower() in self._gazetteer.first_names
        capitalized = first[0].isupper() and last[0].isupper()
        if not (capitalized or known_first):
            return None
        if self._is_vocabulary(ctx.text) or self._is_vocabulary(first) or self._is_vocabulary(last):
            return None

        confidence = KNOWN_FIRST_NAME_CONFIDENCE if known_first else UNKNOWN_FIRST_NAME_CONFIDENCE
        return self._item(ItemKind.NAME, _display_name(ctx.text), confidence, ctx)

    def _match_first_name(self, ctx: DetectionContext) -> Optional[DetectedItem]:
        if not ONE_TOKEN_RE.match(ctx.text):
            return None
        if ctx.lowered not in self._gazetteer.first_names or self._is_vocabulary(ctx.text):
            return None
        return self._item(ItemKind.NAME, ctx.text.capitalize(), 0.8, ctx)

    # ── 11–13. time and dates ────────────────────────────────────

    def _match_time(self, ctx: DetectionContext) -> Optional[DetectedItem]:
        if parse_time(ctx.text) is None:
            return None
        value = re.sub(r"^(?:at\s+|@\s*)", "", ctx.text, flags=re.IGNORECASE)
        return self._item(ItemKind.TIME, value, 0.9, ctx)

    def _match_absolute_date(self, ctx: DetectionContext) -> Optional[DetectedItem]:
        resolved = resolve_absolute_date(ctx.text, ctx.today)
        if resolved is None:
            return None
        return self._item(ItemKind.DATE, resolved, 0.9, ctx)

    def _match_relative_date(self, ctx: DetectionContext) -> Optional[DetectedItem]:
        text = re.sub(r"^on\s+", "", ctx.text, flags=re.IGNORECASE)
        resolved = resolve_relative_date(text, ctx.today)
        if resolved is None:
            return None
        return self._item(ItemKind.DATE, resolved, 0.9, ctx)

    # ── 14. passengers ───────────────────────────────────────────

    def _match_passengers(self, ctx: DetectionContext) -> Optional[DetectedItem]:
        text = ctx.lowered

        match = PAX_NUMERIC_RE.match(text) or PAX_PARTY_OF_RE.match(text)
        if match:
            count = int(match.group(1))
            if count >= 1:
                return self._item(ItemKind.PASSENGERS, str(count), 0.9, ctx)
            return None

        match = PAX_WORD_RE.match(text)
        if match:
            count = word_to_number(match.group(1))
            if count:
                return self._item(ItemKind.PASSENGERS, str(count), 0.9, ctx)
            return None

        if PAX_BARE_RE.match(text):
            count = int(text)
            if 2 <= count <= 99:
                return self._item(ItemKind.PASSENGERS, str(count), GUESSED_NUMBER_CONFIDENCE, ctx)
            return None

        if text.replace(" ", "").replace("-", "").isalpha():
            count = word_to_number(text)
            if count is not None and 2 <= count <= 60:
                return self._item(ItemKind.PASSENGERS, str(count), GUESSED_NUMBER_CONFIDENCE, ctx)
        return None

    # ── 15. hours ────────────────────────────────────────────────

    def _match_hours(self, ctx: DetectionContext) -> Optional[DetectedItem]:
        match = HOURS_RE.match(ctx.text)
        if match:
            value, has_unit = match.group(1), bool(match.group(2))
            amount = float(value)
        else:
            match = HOURS_WORD_RE.match(ctx.text)
            if not match:
                return None
            count = word_to_number(match.group(1))
            if count is None:
                return None
            value, has_unit, amount = str(count), True, float(count)

        # Above 12 is more likely a phone fragment or typo than a booking
        if not 0 < amount <= 12:
            return None
        return self._item(ItemKind.HOURS, value, 0.85 if has_unit else 0.6, ctx)

    # ── 16–17. event and vehicle keywords ────────────────────────

    def _match_event(self, ctx: DetectionContext) -> Optional[DetectedItem]:
        if not self._gazetteer.contains_event(ctx.text):
            return None
        return self._item(ItemKind.EVENT_TYPE, ctx.text, 0.9, ctx)

    def _match_vehicle(self, ctx: DetectionContext) -> Optional[DetectedItem]:
        label = self._gazetteer.vehicle_label(ctx.text)
        if label is None:
            return None
        return self._item(ItemKind.VEHICLE_TYPE, label, 0.85, ctx)

    # ── 18. venues and businesses ────────────────────────────────

    def _match_venue(self, ctx: DetectionContext) -> Optional[DetectedItem]:
        found = self._venue_shape(ctx)
        if found is None:
            return None

        confidence, metro = found
        kind = ItemKind.PICKUP_ADDRESS if PICKUP_MENTION_RE.search(ctx.text) else ItemKind.STOP
        return self._item(kind, ctx.text, confidence, ctx, metro)

    def _venue_shape(self, ctx: DetectionContext) -> Optional[tuple[float, Optional[str]]]:
        """Return (confidence, metro) for the most specific venue shape found."""
        g = self._gazetteer
        venue = g.venue_keyword(ctx.text)

        if ADDRESS_RE.match(ctx.text):
            tokens = [t.strip(".,").lower() for t in ctx.text.split()[1:]]
            if venue or any(t in g.street_suffixes for t in tokens) or tokens[0] in _DIRECTIONS:
                return 0.8, None

        match = CALLED_RE.match(ctx.text)
        if match and g.venue_keyword(match.group(1)):
            return 0.8, None

        match = NEAR_RE.match(ctx.text)
        if match and g.venue_keyword(match.group(1)):
            return 0.8, None

        if venue:
            words = ctx.lowered.split()
            for size in (3, 2, 1):
                if len(words) > size and g.is_known_place(" ".join(words[:size])):
                    return 0.8, self._normalizer.resolve_metro(" ".join(words[:size]))
            return 0.75, None
        return None

    # ── 19. last-resort location ─────────────────────────────────

    def _match_location_fallback(self, ctx: DetectionContext) -> Optional[DetectedItem]:
        key = clean_location_key(ctx.text)
        if not key:
            return None

        for city in self._gazetteer.city_keywords:
            if key.startswith(city + " ") and self._gazetteer.is_state(key[len(city) + 1:]):
                return self._item(ItemKind.CITY, ctx.text, 0.9, ctx, self._normalizer.resolve_metro(city))

        for city in self._gazetteer.city_keywords:
            if key == city or key.startswith(city + " ") or f" {city}" in key:
                return self._item(ItemKind.CITY, ctx.text, 0.85, ctx, self._normalizer.resolve_metro(city))

        stripped = LOCATION_LEAD_RE.sub("", key)
        metro = self._normalizer.normalize(stripped)
        if metro:
            return self._item(ItemKind.CITY, ctx.text, 0.8, ctx, metro)
        return None
