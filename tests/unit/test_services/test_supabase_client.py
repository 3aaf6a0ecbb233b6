"""Tests for the profile and property record store."""

import pytest
from unittest.mock import MagicMock

from src.models.profile import default_profile
from src.services import supabase_client
from src.services.supabase_client import (
    delete_property,
    get_profile,
    get_properties,
    get_property_by_id,
    is_missing_table_error,
    save_profile,
    save_property,
)
from src.utils.errors import SchemaMissingError, SupabaseError
from tests.utils.helpers import make_query
from tests.utils.factories import create_profile, create_profile_row, create_property, create_property_row


class MissingTable(Exception):
    code = "PGRST205"


@pytest.mark.unit
def test_is_missing_table_error_by_code_and_message():
    assert is_missing_table_error(MissingTable("relation missing"))
    assert is_missing_table_error(Exception("{'code': 'PGRST205', 'message': 'nope'}"))
    assert not is_missing_table_error(Exception("timeout"))


@pytest.mark.unit
def test_get_supabase_client_requires_credentials(monkeypatch):
    monkeypatch.setattr(supabase_client, "_client", None)
    monkeypatch.delenv("SUPABASE_URL", raising=False)

    with pytest.raises(SupabaseError):
        supabase_client.get_supabase_client()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_profile_without_user_returns_placeholder(mock_supabase_client):
    profile = await get_profile(None)

    assert profile == default_profile()
    mock_supabase_client.table.assert_not_called()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_profile_maps_row(mock_supabase_client):
    mock_supabase_client.query = make_query([create_profile_row("user-1", name="Marina", creci="777")])

    profile = await get_profile("user-1")

    assert profile.name == "Marina"
    assert profile.license_id == "777"
    mock_supabase_client.table.assert_called_with("profiles")
    mock_supabase_client.query.eq.assert_called_with("id", "user-1")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_profile_missing_row_uses_fallback_name(mock_supabase_client):
    mock_supabase_client.query = make_query([])

    profile = await get_profile("user-1", fallback_name="Marina")

    assert profile == default_profile("Marina")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_profile_missing_table_degrades(mock_supabase_client):
    """A store without the profiles table still yields a profile."""
    mock_supabase_client.query = make_query(error=MissingTable("missing"))

    profile = await get_profile("user-1")

    assert profile == default_profile("Admin")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_properties_orders_newest_first(mock_supabase_client):
    rows = [create_property_row("user-1", id="b"), create_property_row("user-1", id="a")]
    mock_supabase_client.query = make_query(rows)

    props = await get_properties("user-1")

    assert [p.id for p in props] == ["b", "a"]
    mock_supabase_client.query.eq.assert_called_with("user_id", "user-1")
    mock_supabase_client.query.order.assert_called_with("created_at", desc=True)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_properties_without_owner_reads_all(mock_supabase_client):
    mock_supabase_client.query = make_query([create_property_row()])

    props = await get_properties()

    assert len(props) == 1
    mock_supabase_client.query.eq.assert_not_called()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_properties_error_degrades_to_empty(mock_supabase_client):
    mock_supabase_client.query = make_query(error=Exception("connection reset"))

    assert await get_properties("user-1") == []


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_property_by_id_absent(mock_supabase_client):
    mock_supabase_client.query = make_query([])

    assert await get_property_by_id("nope") is None


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_property_by_id_empty_id_skips_store(mock_supabase_client):
    assert await get_property_by_id("") is None
    mock_supabase_client.table.assert_not_called()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_save_profile_upserts(mock_supabase_client):
    await save_profile("user-1", create_profile(license_id="999"))

    payload = mock_supabase_client.query.upsert.call_args[0][0]
    assert payload["id"] == "user-1"
    assert payload["creci"] == "999"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_save_profile_missing_table_raises_schema_error(mock_supabase_client):
    mock_supabase_client.query = make_query(error=MissingTable("missing"))

    with pytest.raises(SchemaMissingError) as exc_info:
        await save_profile("user-1", create_profile())

    assert exc_info.value.table == "profiles"
    assert "setup script" in str(exc_info.value)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_save_property_inserts_draft(mock_supabase_client):
    """Drafts are inserted and come back with the store id."""
    mock_supabase_client.query = make_query([{"id": "new-id", "created_at": "2024-12-09T12:00:00+00:00"}])
    draft = create_property(title="Loft")

    saved = await save_property("user-1", draft)

    assert saved.id == "new-id"
    assert saved.is_persisted
    assert saved.created_at == 1733745600000
    assert saved.title == "Loft"
    mock_supabase_client.query.insert.assert_called_once()
    mock_supabase_client.query.update.assert_not_called()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_save_property_updates_persisted(mock_supabase_client):
    prop = create_property(id="p-1", title="Loft")

    saved = await save_property("user-1", prop)

    assert saved == prop
    mock_supabase_client.query.update.assert_called_once()
    mock_supabase_client.query.eq.assert_called_with("id", "p-1")
    mock_supabase_client.query.insert.assert_not_called()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_save_property_insert_without_data_fails(mock_supabase_client):
    mock_supabase_client.query = make_query([])

    with pytest.raises(SupabaseError):
        await save_property("user-1", create_property())


@pytest.mark.unit
@pytest.mark.asyncio
async def test_save_property_wraps_store_error(mock_supabase_client):
    error = Exception("permission denied")
    error.message = "permission denied for table properties"
    mock_supabase_client.query = make_query(error=error)

    with pytest.raises(SupabaseError, match="Error saving property: permission denied for table properties"):
        await save_property("user-1", create_property(id="p-1"))


@pytest.mark.unit
@pytest.mark.asyncio
async def test_delete_property(mock_supabase_client):
    await delete_property("p-1")

    mock_supabase_client.query.delete.assert_called_once()
    mock_supabase_client.query.eq.assert_called_with("id", "p-1")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_delete_property_missing_table(mock_supabase_client):
    mock_supabase_client.query = make_query(error=MissingTable("missing"))

    with pytest.raises(SchemaMissingError):
        await delete_property("p-1")


@pytest.fixture
def unconfigured_store(monkeypatch):
    monkeypatch.setattr(supabase_client, "_client", None)
    monkeypatch.setenv("SUPABASE_URL", "")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_profile_without_credentials_degrades(unconfigured_store):
    profile = await get_profile("user-123", "Marina")

    assert profile == default_profile("Marina")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_properties_without_credentials_degrades(unconfigured_store):
    assert await get_properties("user-123") == []


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_property_by_id_without_credentials_degrades(unconfigured_store):
    assert await get_property_by_id("p-1") is None
