"""Field <-> column mapping between in-memory models and the Supabase tables.

Every read and write path goes through the tables below, so a column rename
only has to be made here.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import ValidationError

from src.models.profile import Profile
from src.models.property import (
    MediaItem,
    PersistenceState,
    Property,
    PropertyStatus,
    PropertyType,
    now_ms,
)
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)


# model field -> column
PROFILE_COLUMNS: dict[str, str] = {
    "name": "name",
    "license_id": "creci",
    "photo_url": "photo_url",
    "whatsapp_number": "whatsapp",
    "header_message": "header_message",
}

PROPERTY_COLUMNS: dict[str, str] = {
    "title": "title",
    "price": "price",
    "display_price": "display_price",
    "city": "city",
    "neighborhood": "neighborhood",
    "lat": "lat",
    "lng": "lng",
    "status": "status",
    "type": "type",
    "description": "description",
    "features": "features",
    "bedrooms": "bedrooms",
    "bathrooms": "bathrooms",
    "suites": "suites",
    "parking_spaces": "parking",
    "area": "area",
    "custom_whatsapp_message": "whatsapp_message",
    "media": "media",
    "financing_simulator_enabled": "simulador",
    "viewers_min": "viewers_min",
    "viewers_max": "viewers_max",
}

PROFILE_FIELDS = {column: field for field, column in PROFILE_COLUMNS.items()}
PROPERTY_FIELDS = {column: field for field, column in PROPERTY_COLUMNS.items()}

OWNER_COLUMN = "user_id"
CREATED_AT_COLUMN = "created_at"

_INT_FIELDS = ("bedrooms", "bathrooms", "suites", "parking_spaces", "viewers_min", "viewers_max")


def _as_number(value: Any, default: float = 0) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if number != number:  # NaN
        return default
    return number


def _as_coordinate(value: Any) -> Optional[float]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _as_type(value: Any) -> PropertyType:
    text = str(value or "").strip().casefold()
    for property_type in PropertyType:
        if text in (property_type.value.casefold(), property_type.name.casefold()):
            return property_type
    return PropertyType.APARTMENT


def _as_media(value: Any) -> list[MediaItem]:
    if not isinstance(value, list):
        return []
    items = []
    for raw in value:
        try:
            items.append(MediaItem.model_validate(raw))
        except ValidationError as e:
            logger.warning("Dropping malformed media entry", error=str(e))
    return items


def timestamp_to_ms(value: Any) -> int:
    """Convert a stored timestamptz (ISO string) into epoch milliseconds."""
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str) and value:
        try:
            return int(datetime.fromisoformat(value.replace("Z", "+00:00")).timestamp() * 1000)
        except ValueError:
            logger.warning("Unparseable created_at, using now", created_at=value)
    return now_ms()


def profile_to_record(profile: Profile, user_id: str) -> dict:
    """Profile -> upsert payload keyed by account id."""
    record = {"id": user_id}
    for field, column in PROFILE_COLUMNS.items():
        record[column] = getattr(profile, field)
    return record


def profile_from_record(row: dict, defaults: Profile) -> Profile:
    """Row -> Profile, taking each blank column from ``defaults``."""
    values = {}
    for column, field in PROFILE_FIELDS.items():
        value = row.get(column)
        values[field] = value if value else getattr(defaults, field)
    return Profile(**values)


def property_to_record(prop: Property, user_id: Optional[str] = None) -> dict:
    """Property -> insert/update payload. id and created_at are owned by the store."""
    data = prop.model_dump(mode="json")
    record = {column: data[field] for field, column in PROPERTY_COLUMNS.items()}
    if user_id:
        record[OWNER_COLUMN] = user_id
    return record


def property_from_record(row: dict) -> Property:
    """Row -> persisted Property with read coercion applied."""
    values: dict[str, Any] = {}
    for column, field in PROPERTY_FIELDS.items():
        values[field] = row.get(column)

    for field in ("title", "display_price", "city", "neighborhood", "description", "custom_whatsapp_message"):
        values[field] = str(values[field] or "")
    values["price"] = max(_as_number(values["price"]), 0)
    values["area"] = max(_as_number(values["area"]), 0)
    for field in _INT_FIELDS:
        values[field] = max(int(_as_number(values[field])), 0)
    values["lat"] = _as_coordinate(values["lat"])
    values["lng"] = _as_coordinate(values["lng"])
    values["status"] = PropertyStatus.parse(values["status"])
    values["type"] = _as_type(values["type"])
    features = values["features"]
    values["features"] = [str(f) for f in features] if isinstance(features, list) else []
    values["media"] = _as_media(values["media"])
    values["financing_simulator_enabled"] = bool(values["financing_simulator_enabled"])

    return Property(
        id=str(row["id"]),
        persistence=PersistenceState.PERSISTED,
        created_at=timestamp_to_ms(row.get(CREATED_AT_COLUMN)),
        **values,
    )
