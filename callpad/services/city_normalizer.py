"""
City Normalizer.

Maps suburb and small-city names to the canonical metro used for
vehicle-availability search. Lookup is strip-then-lookup with a dual
key: the full "city state" string is tried first (so "glendale az" and
"glendale ca" can point at different metros), then the bare city with
any trailing state token removed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Mapping, Optional

from callpad.gazetteer import Gazetteer, default_gazetteer

_TRAILING_PUNCT = re.compile(r"[\s.,;:!?]+$")


def clean_location_key(text: str) -> str:
    """Lowercase, drop commas/periods between tokens, collapse whitespace."""
    lowered = text.lower().replace(",", " ").replace(".", " ")
    return " ".join(_TRAILING_PUNCT.sub("", lowered).split())


@dataclass(frozen=True)
class LocationQuery:
    city: str
    state: Optional[str] = None


class CityNormalizer:
    """Read-only suburb → metro resolver."""

    def __init__(self, gazetteer: Gazetteer | None = None) -> None:
        self._gazetteer = gazetteer or default_gazetteer()

    @property
    def suburbs(self) -> Mapping[str, str]:
        return self._gazetteer.suburb_to_metro

    def _states_longest_first(self) -> list[tuple[str, str]]:
        # "west virginia" must win over "virginia"
        return sorted(self._gazetteer.state_abbreviations.items(), key=lambda kv: -len(kv[0]))

    def strip_state(self, key: str) -> tuple[str, Optional[str]]:
        """Split a trailing state abbreviation or full state name off ``key``."""
        parts = key.split()
        if len(parts) >= 2 and parts[-1] in self._gazetteer.state_codes:
            return " ".join(parts[:-1]), parts[-1].upper()

        for state_name, code in self._states_longest_first():
            if key.endswith(" " + state_name) and len(key) > len(state_name) + 1:
                return key[: -len(state_name) - 1].strip(), code

        return key, None

    def normalize(self, city: str) -> Optional[str]:
        """Return the metro for a known suburb/small city, else None."""
        key = clean_location_key(city)
        if not key:
            return None

        if key in self.suburbs:
            return self.suburbs[key]

        bare, state = self.strip_state(key)
        if state:
            combined = f"{bare} {state.lower()}"
            if combined in self.suburbs:
                return self.suburbs[combined]
        if bare in self.suburbs and self.in_service_state(self.suburbs[bare], state):
            return self.suburbs[bare]
        return None

    def in_service_state(self, metro: str, state: Optional[str]) -> bool:
        """False when ``state`` was typed and lies outside the metro's service area."""
        if state is None:
            return True
        states = self._gazetteer.metro_states.get(metro)
        return states is None or state in states

    def resolve_metro(self, city: str) -> Optional[str]:
        """Like ``normalize`` but a tracked metro also resolves to itself."""
        metro = self.normalize(city)
        if metro:
            return metro

        key = clean_location_key(city)
        metros = self._gazetteer.metros
        if key in metros:
            return metros[key]

        bare, state = self.strip_state(key)
        metro = metros.get(bare) or metros.get(bare.replace("saint ", "st "))
        if metro and self.in_service_state(metro, state):
            return metro
        return None

    def parse_location_query(self, query: str) -> LocationQuery:
        """
        Split "Mesa, AZ" / "mesa az" / "mesa arizona" into city and state code.

        The city keeps the caller's casing; the state is a 2-letter code.
        """
        normalized = " ".join(query.strip().split())

        match = re.match(r"^(.+?),?\s+([A-Za-z]{2})$", normalized)
        if match and match.group(2).lower() in self._gazetteer.state_codes:
            return LocationQuery(city=match.group(1).strip(" ,"), state=match.group(2).upper())

        match = re.match(r"^(.+?),\s+(.+)$", normalized)
        if match and match.group(2).lower() in self._gazetteer.state_abbreviations:
            return LocationQuery(
                city=match.group(1).strip(),
                state=self._gazetteer.state_abbreviations[match.group(2).lower()],
            )

        lowered = normalized.lower()
        for state_name, code in self._states_longest_first():
            if lowered.endswith(" " + state_name) and len(lowered) > len(state_name) + 1:
                return LocationQuery(city=normalized[: -len(state_name) - 1].strip(" ,"), state=code)

        return LocationQuery(city=normalized)
