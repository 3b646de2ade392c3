"""
Read-only lookup tables handed to the pattern detector.

The detector never imports the raw tables itself; it receives a
``Gazetteer`` so tests (and other deployments) can swap in their own
names, places or keywords without touching classification logic.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from callpad.data import keywords, names, places


@dataclass(frozen=True)
class Gazetteer:
    first_names: frozenset[str]
    agent_roster: frozenset[str]
    city_keywords: tuple[str, ...]
    metros: Mapping[str, str]
    metro_states: Mapping[str, frozenset[str]]
    suburb_to_metro: Mapping[str, str]
    state_abbreviations: Mapping[str, str]
    ambiguous_state_tokens: frozenset[str]
    event_keywords: tuple[str, ...]
    vehicle_keywords: tuple[tuple[str, str], ...]
    venue_keywords: tuple[str, ...]
    street_suffixes: frozenset[str]

    @property
    def state_codes(self) -> frozenset[str]:
        return frozenset(code.lower() for code in self.state_abbreviations.values())

    def is_state(self, token: str) -> bool:
        token = token.lower().strip(" .,")
        return token in self.state_abbreviations or token in self.state_codes

    def is_known_place(self, text: str) -> bool:
        """True for any tracked metro, suburb or city keyword (case-insensitive)."""
        key = " ".join(text.lower().split())
        if key in self.metros or key in self.suburb_to_metro or key in self.city_keywords:
            return True
        # Suburb keys disambiguated by state ("glendale az") also make the bare word a place
        return any(k.startswith(key + " ") and self.is_state(k[len(key) + 1:]) for k in self.suburb_to_metro)

    def contains_event(self, text: str) -> Optional[str]:
        lowered = text.lower()
        for keyword in self.event_keywords:
            if keyword == "party":
                pattern = r"\bparty\b(?!\s*bus)"
            else:
                pattern = rf"\b{re.escape(keyword)}\b"
            if re.search(pattern, lowered):
                return keyword
        return None

    def vehicle_label(self, text: str) -> Optional[str]:
        lowered = text.lower()
        for keyword, label in self.vehicle_keywords:
            if keyword in keywords.VEHICLE_WORD_BOUNDARY:
                if re.search(rf"\b{re.escape(keyword)}e?s?\b", lowered):
                    return label
            elif keyword in lowered:
                return label
        return None

    def venue_keyword(self, text: str) -> Optional[str]:
        lowered = text.lower()
        for keyword in self.venue_keywords:
            if re.search(rf"\b{re.escape(keyword)}s?\b", lowered):
                return keyword
        return None


def build_gazetteer(agent_roster: Iterable[str] | None = None) -> Gazetteer:
    """Assemble a gazetteer from the bundled tables."""
    roster = frozenset(n.strip().lower() for n in agent_roster or () if n.strip())
    return Gazetteer(
        first_names=names.FIRST_NAMES,
        agent_roster=roster or keywords.AGENT_ROSTER,
        city_keywords=places.CITY_KEYWORDS,
        metros=MappingProxyType({m.lower(): m for m in places.MAJOR_METROS}),
        metro_states=MappingProxyType({m: frozenset(s) for m, s in places.METRO_STATES.items()}),
        suburb_to_metro=MappingProxyType(dict(places.SUBURB_TO_METRO)),
        state_abbreviations=MappingProxyType(dict(places.STATE_ABBREVIATIONS)),
        ambiguous_state_tokens=places.AMBIGUOUS_STATE_TOKENS,
        event_keywords=keywords.EVENT_KEYWORDS,
        vehicle_keywords=keywords.VEHICLE_KEYWORDS,
        venue_keywords=keywords.VENUE_KEYWORDS,
        street_suffixes=keywords.STREET_SUFFIXES,
    )


@lru_cache(maxsize=1)
def default_gazetteer() -> Gazetteer:
    from callpad.config import get_settings

    return build_gazetteer(get_settings().agent_roster)
