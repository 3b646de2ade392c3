"""Split an agent's typed line into classifiable fragments."""

from __future__ import annotations

FRAGMENT_DELIMITER = ","


def split_fragments(text: str) -> list[str]:
    """Split on commas, trim each piece, drop empties. Never raises."""
    if not isinstance(text, str) or not text.strip():
        return []
    return [part.strip() for part in text.split(FRAGMENT_DELIMITER) if part.strip()]
