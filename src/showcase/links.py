"""Outbound link construction: messaging deep links and map embeds."""

from typing import Optional
from urllib.parse import quote

from src.utils.config import ShowcaseConfig
from src.utils.formatting import digits_only

# encodeURIComponent leaves these unescaped
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_component(text: str) -> str:
    return quote(text, safe=_URI_COMPONENT_SAFE)


def whatsapp_link(number: str, message: Optional[str] = None, base_url: Optional[str] = None) -> str:
    """``{base}/{digits}?text={message}``; no query when the message is empty."""
    base = (base_url or ShowcaseConfig.MESSAGING_BASE_URL).rstrip("/")
    url = f"{base}/{digits_only(number)}"
    if message:
        url += f"?text={encode_component(message)}"
    return url


def map_embed_url(
    lat: Optional[float],
    lng: Optional[float],
    neighborhood: str,
    city: str,
    base_url: Optional[str] = None,
) -> str:
    """Coordinate query when both coordinates exist, else a place-name query."""
    base = base_url or ShowcaseConfig.MAP_BASE_URL
    if lat is not None and lng is not None:
        return f"{base}?q={lat},{lng}&hl=pt-br&z=14&output=embed"
    place = encode_component(f"{neighborhood}, {city}")
    return f"{base}?q={place}&hl=pt-br&z=15&output=embed"
