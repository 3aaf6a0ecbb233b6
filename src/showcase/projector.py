"""Projection of stored profile/property records into display-ready shapes."""

from typing import Iterable, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.models.profile import Profile
from src.models.property import MediaItem, Property
from src.showcase.links import whatsapp_link
from src.utils.config import ShowcaseConfig
from src.utils.formatting import digits_only


class DisplayModel(BaseModel):
    """Base for view models; serialized with camelCase keys for the page script."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_view(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class ViewerBounds(DisplayModel):
    min: int
    max: int


class DisplayProfile(DisplayModel):
    name: str
    license_id: str = ""
    photo_url: str = ""
    whatsapp_number: str
    header_message: str = ""
    contact_url: str


class DisplayProperty(DisplayModel):
    id: str
    display_title: str
    neighborhood_label: str
    city_label: str
    lat: Optional[float] = None
    lng: Optional[float] = None
    price_label: str
    numeric_price: float = 0
    type_label: str
    bedrooms: int = 0
    suites: int = 0
    bathrooms: int = 0
    parking_spaces: int = 0
    area_label: str
    description: str
    features: list[str] = Field(default_factory=list)
    media: list[MediaItem] = Field(default_factory=list)
    status: str
    financing_simulator_enabled: bool = False
    viewer_bounds: ViewerBounds
    share_image_url: str = ""
    effective_contact_message: str


def format_area(area: Optional[float]) -> str:
    if not area:
        return "-"
    # 120.0 -> "120"
    text = str(int(area)) if float(area).is_integer() else str(area)
    return f"{text}m²"


def contact_message(agent_name: str, title: str, custom_message: Optional[str] = None) -> str:
    if custom_message and custom_message.strip():
        return custom_message
    return f"Hello {agent_name}, I saw the property *{title}* and would like more details."


def project_profile(profile: Optional[Profile]) -> DisplayProfile:
    profile = profile or Profile()
    number = digits_only(profile.whatsapp_number) or ShowcaseConfig.FALLBACK_WHATSAPP
    header = profile.header_message or ""
    return DisplayProfile(
        name=profile.name or "Agent",
        license_id=profile.license_id or "",
        photo_url=profile.photo_url or "",
        whatsapp_number=number,
        header_message=header,
        contact_url=whatsapp_link(number, header),
    )


def project_property(
    prop: Property,
    agent_name: str,
    default_city: Optional[str] = None,
    fallback_id: str = "",
) -> DisplayProperty:
    title = prop.title or "Untitled"
    media = list(prop.media or [])
    return DisplayProperty(
        id=str(prop.id or fallback_id),
        display_title=title,
        neighborhood_label=prop.neighborhood or "Other",
        city_label=prop.city or default_city or ShowcaseConfig.DEFAULT_CITY,
        lat=prop.lat,
        lng=prop.lng,
        price_label=prop.display_price or "On request",
        numeric_price=prop.price or 0,
        type_label=prop.type.value if prop.type else "Property",
        bedrooms=prop.bedrooms,
        suites=prop.suites,
        bathrooms=prop.bathrooms,
        parking_spaces=prop.parking_spaces,
        area_label=format_area(prop.area),
        description=prop.description or "Get in touch for more details.",
        features=list(prop.features or []),
        media=media,
        status=prop.status.value,
        financing_simulator_enabled=prop.financing_simulator_enabled is True,
        viewer_bounds=ViewerBounds(
            min=prop.viewers_min or ShowcaseConfig.VIEWERS_MIN,
            max=prop.viewers_max or ShowcaseConfig.VIEWERS_MAX,
        ),
        share_image_url=media[0].url if media else "",
        effective_contact_message=contact_message(agent_name, title, prop.custom_whatsapp_message),
    )


def project(
    profile: Optional[Profile],
    properties: Iterable[Property],
    default_city: Optional[str] = None,
) -> tuple[DisplayProfile, list[DisplayProperty]]:
    """
    Project one profile and its properties, preserving property order.

    Unsaved drafts have no store id; they are keyed `draft-<position>` so
    cards and detail panels stay distinct within one snapshot.
    """
    display_profile = project_profile(profile)
    display_properties = [
        project_property(p, display_profile.name, default_city, fallback_id=f"draft-{i}")
        for i, p in enumerate(properties)
    ]
    return display_profile, display_properties
