"""Identity provider wrapper over Supabase Auth."""

from typing import Optional
from pydantic import BaseModel

from src.models.profile import registration_profile
from src.services.supabase_client import SupabaseClient, create_profile
from src.utils.errors import AuthenticationError, SupabaseError
from src.utils.logging import get_structured_logger, mask_sensitive_data, mask_user_id

logger = get_structured_logger(__name__)

_DUPLICATE_MARKERS = ("already registered", "already exists", "user_already_exists")


class AgentSession(BaseModel):
    """Authenticated agent account."""
    user_id: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    access_token: Optional[str] = None


def _session_from_response(response) -> Optional[AgentSession]:
    user = getattr(response, "user", None)
    if user is None:
        return None
    metadata = getattr(user, "user_metadata", None) or {}
    session = getattr(response, "session", None)
    return AgentSession(
        user_id=str(user.id),
        email=getattr(user, "email", None),
        display_name=metadata.get("name"),
        access_token=getattr(session, "access_token", None) if session else None,
    )


async def login(email: str, password: str) -> AgentSession:
    """Sign in with email and password."""
    async with SupabaseClient() as client:
        try:
            response = client.auth.sign_in_with_password({"email": email, "password": password})
        except Exception as e:
            logger.warning("Sign-in failed", email=mask_sensitive_data(email), error=str(e))
            raise AuthenticationError("Invalid credentials. Please try again.")

    session = _session_from_response(response)
    if session is None:
        raise AuthenticationError("Invalid credentials. Please try again.")

    logger.info("Agent signed in", user_id=mask_user_id(session.user_id))
    return session


async def register(email: str, password: str, name: str) -> AgentSession:
    """
    Create an account and its initial profile row.

    The profile insert is best effort: a missing profiles table must not
    undo a successful sign-up, reads fall back to defaults anyway.
    """
    name = (name or "").strip()
    if not name:
        raise AuthenticationError("Please enter a valid name.")

    async with SupabaseClient() as client:
        try:
            response = client.auth.sign_up({
                "email": email,
                "password": password,
                "options": {"data": {"name": name}},
            })
        except Exception as e:
            message = str(e).lower()
            if any(marker in message for marker in _DUPLICATE_MARKERS):
                raise AuthenticationError("This email is already registered.")
            logger.error("Sign-up failed", email=mask_sensitive_data(email), error=str(e))
            raise AuthenticationError("Something went wrong. Please try again.")

    session = _session_from_response(response)
    if session is None:
        raise AuthenticationError("Something went wrong. Please try again.")

    try:
        await create_profile(session.user_id, registration_profile(name))
    except SupabaseError as e:
        logger.warning(
            "Could not create initial profile",
            user_id=mask_user_id(session.user_id),
            error=str(e),
        )

    logger.info("Agent registered", user_id=mask_user_id(session.user_id))
    return session


async def logout() -> None:
    async with SupabaseClient() as client:
        client.auth.sign_out()


async def get_current_user() -> Optional[AgentSession]:
    """Current signed-in account, or None when there is no session."""
    async with SupabaseClient() as client:
        try:
            response = client.auth.get_user()
        except Exception as e:
            logger.debug("No active session", error=str(e))
            return None

    if response is None:
        return None
    return _session_from_response(response)


async def is_authenticated() -> bool:
    return await get_current_user() is not None
