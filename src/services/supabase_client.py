"""Supabase client wrapper and record-store operations for profiles and properties."""

import os
from typing import Optional
from supabase import create_client, Client
from supabase.client import ClientOptions

from src.models.profile import Profile, default_profile
from src.models.property import Property
from src.services.record_mapping import (
    CREATED_AT_COLUMN,
    OWNER_COLUMN,
    profile_from_record,
    profile_to_record,
    property_from_record,
    property_to_record,
    timestamp_to_ms,
)
from src.utils.errors import SchemaMissingError, SupabaseError
from src.utils.logging import get_structured_logger, mask_user_id, timed

logger = get_structured_logger(__name__)

PROFILES_TABLE = "profiles"
PROPERTIES_TABLE = "properties"

# PostgREST: relation does not exist in the schema cache
MISSING_TABLE_CODE = "PGRST205"

# Global client instance (singleton pattern)
_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """Get or create Supabase client singleton."""
    global _client

    if _client is None:
        url = os.environ.get("SUPABASE_URL")
        key = os.environ.get("SUPABASE_SERVICE_ROLE_KEY")

        if not url or not key:
            raise SupabaseError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")

        options = ClientOptions(
            auto_refresh_token=False,
            persist_session=False,
        )

        _client = create_client(url, key, options)
        logger.info("Supabase client initialized", url=url)

    return _client


async def close_supabase_client() -> None:
    """Drop the client reference; supabase-py holds no sockets to close."""
    global _client
    if _client:
        _client = None
        logger.info("Supabase client closed")


class SupabaseClient:
    """Async context manager for Supabase client."""

    def __init__(self):
        self.client: Optional[Client] = None

    async def __aenter__(self) -> Client:
        self.client = get_supabase_client()
        return self.client

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            logger.error(
                "Supabase operation error",
                error=str(exc_val),
                error_type=exc_type.__name__,
            )
        return False


def is_missing_table_error(error: Exception) -> bool:
    """True when the store reports the table is not there (setup script not run)."""
    code = getattr(error, "code", None)
    return code == MISSING_TABLE_CODE or MISSING_TABLE_CODE in str(error)


def _write_error(table: str, action: str, error: Exception) -> SupabaseError:
    if isinstance(error, SupabaseError):
        return error
    if is_missing_table_error(error):
        return SchemaMissingError(table)
    return SupabaseError(f"Error {action}: {getattr(error, 'message', None) or error}")


# Profiles table operations
@timed("supabase.get_profile")
async def get_profile(user_id: Optional[str], fallback_name: Optional[str] = None) -> Profile:
    """
    Load the agent profile.

    Never raises: a missing row, missing table or any other read failure
    degrades to the placeholder profile.
    """
    defaults = default_profile(fallback_name or "Admin")
    if not user_id:
        return default_profile()

    try:
        async with SupabaseClient() as client:
            result = client.table(PROFILES_TABLE).select("*").eq("id", user_id).limit(1).execute()
    except Exception as e:
        if is_missing_table_error(e):
            logger.warning(
                "Profiles table not found, using default profile",
                user_id=mask_user_id(user_id),
            )
        else:
            logger.error("Error fetching profile", user_id=mask_user_id(user_id), error=str(e))
        return defaults

    if not result.data:
        return defaults
    return profile_from_record(result.data[0], defaults)


@timed("supabase.save_profile")
async def save_profile(user_id: str, profile: Profile) -> None:
    """Upsert the profile row for this account."""
    async with SupabaseClient() as client:
        try:
            client.table(PROFILES_TABLE).upsert(profile_to_record(profile, user_id)).execute()
        except Exception as e:
            logger.error("Error saving profile", user_id=mask_user_id(user_id), error=str(e))
            raise _write_error(PROFILES_TABLE, "saving profile", e)

    logger.info("Profile saved", user_id=mask_user_id(user_id))


async def create_profile(user_id: str, profile: Profile) -> None:
    """Insert the initial profile row at sign-up."""
    async with SupabaseClient() as client:
        try:
            client.table(PROFILES_TABLE).insert(profile_to_record(profile, user_id)).execute()
        except Exception as e:
            raise _write_error(PROFILES_TABLE, "creating profile", e)


# Properties table operations
@timed("supabase.get_properties")
async def get_properties(user_id: Optional[str] = None) -> list[Property]:
    """All properties (of one owner when given), newest first. Degrades to []."""
    try:
        async with SupabaseClient() as client:
            query = client.table(PROPERTIES_TABLE).select("*")
            if user_id:
                query = query.eq(OWNER_COLUMN, user_id)
            result = query.order(CREATED_AT_COLUMN, desc=True).execute()
    except Exception as e:
        if is_missing_table_error(e):
            logger.warning("Properties table not found, list will be empty")
        else:
            logger.error("Error fetching properties", error=str(e))
        return []

    return [property_from_record(row) for row in (result.data or [])]


async def get_property_by_id(property_id: str) -> Optional[Property]:
    """Single property, or None when absent or unreadable."""
    if not property_id:
        return None

    try:
        async with SupabaseClient() as client:
            result = client.table(PROPERTIES_TABLE).select("*").eq("id", property_id).limit(1).execute()
    except Exception as e:
        if is_missing_table_error(e):
            logger.warning("Properties table not found", property_id=property_id)
        else:
            logger.error("Error fetching property", property_id=property_id, error=str(e))
        return None

    if not result.data:
        return None
    return property_from_record(result.data[0])


@timed("supabase.save_property")
async def save_property(user_id: Optional[str], prop: Property) -> Property:
    """
    Insert a draft or update a persisted property (full replace).

    Returns the persisted property; drafts come back carrying the
    store-assigned id and creation time.
    """
    payload = property_to_record(prop, user_id)

    async with SupabaseClient() as client:
        try:
            if prop.is_persisted:
                client.table(PROPERTIES_TABLE).update(payload).eq("id", prop.id).execute()
                saved = prop
            else:
                result = client.table(PROPERTIES_TABLE).insert(payload).execute()
                if not result.data:
                    raise SupabaseError("Error saving property: no data returned")
                row = result.data[0]
                saved = prop.mark_persisted(
                    str(row["id"]),
                    timestamp_to_ms(row[CREATED_AT_COLUMN]) if row.get(CREATED_AT_COLUMN) else None,
                )
        except Exception as e:
            logger.error("Error saving property", property_id=prop.id, error=str(e))
            raise _write_error(PROPERTIES_TABLE, "saving property", e)

    logger.info(
        "Property saved",
        property_id=saved.id,
        inserted=not prop.is_persisted,
        user_id=mask_user_id(user_id) if user_id else None,
    )
    return saved


async def delete_property(property_id: str) -> None:
    """Delete a property by id."""
    async with SupabaseClient() as client:
        try:
            client.table(PROPERTIES_TABLE).delete().eq("id", property_id).execute()
        except Exception as e:
            logger.error("Error deleting property", property_id=property_id, error=str(e))
            raise _write_error(PROPERTIES_TABLE, "deleting property", e)

    logger.info("Property deleted", property_id=property_id)
