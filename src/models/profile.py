"""Agent profile model - one per account."""

from pydantic import BaseModel, Field


DEFAULT_PHOTO_URL = "https://images.unsplash.com/photo-1560250097-0b93528c311a?auto=format&fit=crop&w=256&q=80"


class Profile(BaseModel):
    """Public-facing agent profile."""
    name: str = Field(default="", description="Agent display name")
    license_id: str = Field(default="", description="Public registration number (CRECI)")
    photo_url: str = Field(default="", description="Photo URL or embedded data URL")
    whatsapp_number: str = Field(default="", description="Country + area + number, digits only")
    header_message: str = Field(default="", description="Default pre-filled contact message")


def default_profile(name: str = "Your Name") -> Profile:
    """Placeholder profile used before the agent has saved one."""
    return Profile(
        name=name,
        license_id="00000",
        photo_url=DEFAULT_PHOTO_URL,
        whatsapp_number="5511999999999",
        header_message="Hello, I would like to know more about your properties.",
    )


def registration_profile(name: str) -> Profile:
    """Profile row written on sign-up."""
    return Profile(
        name=name,
        license_id="",
        photo_url=DEFAULT_PHOTO_URL,
        whatsapp_number="",
        header_message="Hello, I would like to know more about your properties.",
    )
