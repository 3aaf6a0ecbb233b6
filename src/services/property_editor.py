"""Editor operations for properties and the agent profile."""

from typing import Literal, Optional
from ulid import ULID

from src.models.profile import Profile
from src.models.property import MediaItem, Property, PropertyStatus, PropertyType
from src.services import supabase_client
from src.utils.errors import FormValidationError
from src.utils.formatting import format_brl
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

REQUIRED_PROPERTY_FIELDS = {
    "title": "Title is required.",
    "city": "City is required.",
    "neighborhood": "Neighborhood is required.",
}

REQUIRED_PROFILE_FIELDS = {
    "name": "Name is required.",
    "license_id": "Registration number is required.",
    "whatsapp_number": "WhatsApp number is required.",
}

PLACEHOLDER_IMAGES = (
    "https://images.unsplash.com/photo-1600596542815-27838eb2db69?auto=format&fit=crop&w=1200&q=80",
    "https://images.unsplash.com/photo-1512917774080-9991f1c4c750?auto=format&fit=crop&w=1200&q=80",
    "https://images.unsplash.com/photo-1600607687939-ce8a6c25118c?auto=format&fit=crop&w=1200&q=80",
    "https://images.unsplash.com/photo-1600566753086-00f18fb6b3ea?auto=format&fit=crop&w=1200&q=80",
)


def new_property() -> Property:
    """Blank draft as shown by the "new property" form."""
    return Property(
        status=PropertyStatus.AVAILABLE,
        type=PropertyType.APARTMENT,
        viewers_min=15,
        viewers_max=40,
    )


def set_price(prop: Property, price: Optional[float]) -> Property:
    """Change the price; the display string is regenerated with it."""
    try:
        numeric = max(float(price or 0), 0.0)
    except (TypeError, ValueError):
        numeric = 0.0
    return prop.model_copy(update={"price": numeric, "display_price": format_brl(numeric)})


def add_feature(prop: Property, feature: str) -> Property:
    text = (feature or "").strip()
    if not text:
        return prop
    return prop.model_copy(update={"features": [*prop.features, text]})


def remove_feature(prop: Property, index: int) -> Property:
    return prop.model_copy(
        update={"features": [f for i, f in enumerate(prop.features) if i != index]}
    )


def add_media(prop: Property, url: str, media_type: Literal["image", "video"] = "image") -> Property:
    url = (url or "").strip()
    if not url:
        return prop
    item = MediaItem(id=str(ULID()), type=media_type, url=url)
    return prop.model_copy(update={"media": [*prop.media, item]})


def remove_media(prop: Property, media_id: str) -> Property:
    return prop.model_copy(update={"media": [m for m in prop.media if m.id != media_id]})


def validate_property(prop: Property) -> None:
    """Raise FormValidationError listing every empty required field."""
    errors = {
        field: message
        for field, message in REQUIRED_PROPERTY_FIELDS.items()
        if not str(getattr(prop, field) or "").strip()
    }
    if errors:
        raise FormValidationError(errors)


def validate_profile(profile: Profile) -> None:
    errors = {
        field: message
        for field, message in REQUIRED_PROFILE_FIELDS.items()
        if not str(getattr(profile, field) or "").strip()
    }
    if errors:
        raise FormValidationError(errors)


async def load_for_edit(property_id: str) -> Optional[Property]:
    """Property to edit, or None so the caller can redirect to the list."""
    prop = await supabase_client.get_property_by_id(property_id)
    if prop is None:
        logger.info("Property not found for edit", property_id=property_id)
    return prop


async def submit_property(user_id: str, prop: Property) -> Property:
    """Validate then persist. Nothing is written when validation fails."""
    validate_property(prop)
    return await supabase_client.save_property(user_id, prop)


async def submit_profile(user_id: str, profile: Profile) -> None:
    validate_profile(profile)
    await supabase_client.save_profile(user_id, profile)
