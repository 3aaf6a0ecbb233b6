"""Property listing models."""

import re
import time
from enum import Enum
from typing import Literal, Optional
from pydantic import BaseModel, Field, model_validator


class PropertyType(str, Enum):
    """Property type values."""
    APARTMENT = "Apartment"
    HOUSE = "House"
    PENTHOUSE = "Penthouse"
    LAND = "Land"
    COMMERCIAL = "Commercial"
    FLAT = "Flat"


def _squash(text: Optional[str]) -> str:
    # "LastUnits", "last_units" and "Last units" compare equal
    return re.sub(r"[\s_-]+", "", str(text or "")).casefold()


class PropertyStatus(str, Enum):
    """Listing status values. SOLD listings are hidden from the showcase."""
    AVAILABLE = "Available"
    RESERVED = "Reserved"
    LAST_UNITS = "Last units"
    SOLD = "Sold"

    @classmethod
    def parse(cls, value: Optional[str]) -> "PropertyStatus":
        """Lookup by value or member name, ignoring case and separators; unknown -> AVAILABLE."""
        if isinstance(value, cls):
            return value
        text = _squash(value)
        for status in cls:
            if text in (_squash(status.value), _squash(status.name)):
                return status
        return cls.AVAILABLE


class PersistenceState(str, Enum):
    """Whether the record exists in the store yet."""
    DRAFT = "draft"
    PERSISTED = "persisted"


class MediaItem(BaseModel):
    """One photo or video; list order is display order."""
    id: str = Field(..., description="Media item ID")
    type: Literal["image", "video"] = Field(default="image", description="image or video")
    url: str = Field(..., description="Media URL")


def now_ms() -> int:
    return int(time.time() * 1000)


class Property(BaseModel):
    """Real estate listing owned by one agent."""
    id: Optional[str] = Field(None, description="Store-assigned ID (absent for drafts)")
    persistence: PersistenceState = Field(default=PersistenceState.DRAFT)

    title: str = ""
    type: PropertyType = PropertyType.APARTMENT
    description: str = ""
    features: list[str] = Field(default_factory=list, description="Free-form tags, insertion order")

    price: float = Field(default=0, ge=0)
    display_price: str = Field(default="", description="Currency string derived from price")

    city: str = ""
    neighborhood: str = ""
    lat: Optional[float] = None
    lng: Optional[float] = None

    bedrooms: int = Field(default=0, ge=0)
    suites: int = Field(default=0, ge=0)
    bathrooms: int = Field(default=0, ge=0)
    parking_spaces: int = Field(default=0, ge=0)
    area: float = Field(default=0, ge=0)

    media: list[MediaItem] = Field(default_factory=list)

    custom_whatsapp_message: str = ""
    financing_simulator_enabled: bool = False
    viewers_min: int = Field(default=0, ge=0)
    viewers_max: int = Field(default=0, ge=0)

    status: PropertyStatus = PropertyStatus.AVAILABLE
    created_at: int = Field(default_factory=now_ms, description="Creation time, epoch ms")

    @model_validator(mode="after")
    def _persisted_needs_id(self) -> "Property":
        if self.persistence == PersistenceState.PERSISTED and not self.id:
            raise ValueError("a persisted property must carry its store id")
        return self

    @property
    def is_persisted(self) -> bool:
        return self.persistence == PersistenceState.PERSISTED

    def mark_persisted(self, property_id: str, created_at: Optional[int] = None) -> "Property":
        """Copy of this property as returned by a successful insert."""
        updates = {"id": property_id, "persistence": PersistenceState.PERSISTED}
        if created_at is not None:
            updates["created_at"] = created_at
        return self.model_copy(update=updates)
