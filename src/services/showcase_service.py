"""Fetch one agent's records and generate their showcase page."""

from typing import Optional

from src.services import supabase_client
from src.showcase.generator import ShowcaseDocument, generate_showcase
from src.utils.logging import get_structured_logger, mask_user_id

logger = get_structured_logger(__name__)


async def build_showcase_for_user(
    user_id: str,
    fallback_name: Optional[str] = None,
    default_city: Optional[str] = None,
) -> ShowcaseDocument:
    """
    Snapshot the agent's profile and properties, then render the page.

    Both reads degrade instead of raising, so an agent without a profile
    row or without properties still gets a page (placeholder profile,
    empty catalog).
    """
    profile = await supabase_client.get_profile(user_id, fallback_name)
    properties = await supabase_client.get_properties(user_id)

    logger.info(
        "Building showcase",
        user_id=mask_user_id(user_id),
        property_count=len(properties),
    )
    return generate_showcase(profile, properties, default_city)
