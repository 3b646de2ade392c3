"""
Data models for classified input fragments.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class ItemKind(str, Enum):
    PHONE = "phone"
    EMAIL = "email"
    ZIP = "zip"
    CITY = "city"
    DATE = "date"
    TIME = "time"
    PASSENGERS = "passengers"
    HOURS = "hours"
    PICKUP_ADDRESS = "pickup_address"
    DESTINATION = "destination"
    DROPOFF_ADDRESS = "dropoff_address"
    EVENT_TYPE = "event_type"
    VEHICLE_TYPE = "vehicle_type"
    NAME = "name"
    WEBSITE = "website"
    AGENT = "agent"
    STOP = "stop"
    UNKNOWN = "unknown"


LOCATION_KINDS = frozenset({ItemKind.CITY, ItemKind.PICKUP_ADDRESS, ItemKind.DROPOFF_ADDRESS})


class DetectedItem(BaseModel):
    """One classified fragment. Immutable once produced."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: ItemKind
    value: str
    confidence: float = Field(ge=0.0, le=1.0)
    original: str
    normalized_city: Optional[str] = Field(default=None, alias="normalizedCity")

    @field_validator("normalized_city")
    @classmethod
    def _location_kinds_only(cls, value: Optional[str], info: ValidationInfo) -> Optional[str]:
        if info.data.get("kind") not in LOCATION_KINDS:
            return None
        return value

    @classmethod
    def unknown(cls, fragment: str) -> DetectedItem:
        """The universal no-match sentinel."""
        return cls(kind=ItemKind.UNKNOWN, value=fragment, confidence=0.0, original=fragment)

    @property
    def is_unknown(self) -> bool:
        return self.kind == ItemKind.UNKNOWN

    def to_public(self) -> dict:
        """Wire shape: camelCase keys, ``normalizedCity`` only when set."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class ParseRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str = ""
    use_ai: bool = Field(default=False, alias="useAI")


class ParseResponse(BaseModel):
    items: list[DetectedItem] = Field(default_factory=list)

    def to_public(self) -> dict:
        return {"items": [item.to_public() for item in self.items]}
