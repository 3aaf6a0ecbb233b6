"""Shared pytest fixtures and configuration."""

import os
import pytest
from unittest.mock import MagicMock, patch
from freezegun import freeze_time

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-key")
os.environ.setdefault("LOG_FORMAT", "text")

from tests.utils.factories import create_profile, create_property, create_media_items
from tests.utils.helpers import make_query


@pytest.fixture
def mock_supabase_client():
    """Mock Supabase client with a chainable table query; set ``client.query`` results per test."""
    client = MagicMock()
    client.query = make_query()
    client.table.side_effect = lambda name: client.query
    with patch("src.services.supabase_client.get_supabase_client", return_value=client):
        yield client


@pytest.fixture
def sample_profile():
    return create_profile(name="Marina Costa", whatsapp_number="5579988887777")


@pytest.fixture
def sample_properties():
    """Three listings across two neighborhoods, one of them sold."""
    return [
        create_property(
            id="p-1",
            title="Garden Apartment",
            neighborhood="Jardins",
            price=850000,
            media=create_media_items(3),
        ),
        create_property(
            id="p-2",
            title="Sea View Penthouse",
            neighborhood="Atalaia",
            price=2400000,
            status="Last units",
            media=create_media_items(1),
        ),
        create_property(
            id="p-3",
            title="Corner House",
            neighborhood="Jardins",
            price=990000,
            status="Sold",
        ),
    ]


@pytest.fixture
def freeze_time_fixture():
    """Fixture for freezing time in tests."""
    with freeze_time("2024-12-09 12:00:00") as frozen_time:
        yield frozen_time
