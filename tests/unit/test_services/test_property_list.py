"""Tests for admin list sorting, filtering and memoization."""

import pytest

from src.models.property import PropertyStatus
from src.services.property_list import (
    PropertyListView,
    SortDirection,
    SortKey,
    filter_properties,
    sort_properties,
    status_badge_class,
)
from tests.utils.factories import create_property


@pytest.fixture
def listing():
    return [
        create_property(id="a", title="beach house", price=500000, created_at=3, status=PropertyStatus.SOLD),
        create_property(id="b", title="Attic", price=900000, created_at=1, neighborhood="Jardins"),
        create_property(id="c", title="Cabin", price=500000, created_at=2, status=PropertyStatus.RESERVED),
    ]


@pytest.mark.unit
def test_default_sort_is_newest_first(listing):
    assert [p.id for p in sort_properties(listing)] == ["a", "c", "b"]


@pytest.mark.unit
def test_sort_by_price_is_stable(listing):
    ids = [p.id for p in sort_properties(listing, SortKey.PRICE, SortDirection.ASC)]
    assert ids == ["a", "c", "b"]


@pytest.mark.unit
def test_sort_by_title_ignores_case(listing):
    ids = [p.id for p in sort_properties(listing, SortKey.TITLE, SortDirection.ASC)]
    assert ids == ["b", "a", "c"]


@pytest.mark.unit
def test_filter_by_status_and_query(listing):
    assert [p.id for p in filter_properties(listing, status=PropertyStatus.SOLD)] == ["a"]
    assert [p.id for p in filter_properties(listing, query="JARDINS")] == ["b"]
    assert filter_properties(listing, status=PropertyStatus.SOLD, query="cabin") == []


@pytest.mark.unit
def test_status_badge_classes():
    assert "green" in status_badge_class(PropertyStatus.AVAILABLE)
    assert "red" in status_badge_class(PropertyStatus.SOLD)
    assert "yellow" in status_badge_class(PropertyStatus.RESERVED)
    assert "orange" in status_badge_class(PropertyStatus.LAST_UNITS)


@pytest.mark.unit
def test_list_view_recomputes_only_on_change(listing):
    view = PropertyListView(listing)

    first = view.items
    second = view.items
    assert first is second
    assert view.recompute_count == 1

    view.toggle_direction()
    assert [p.id for p in view.items] == ["b", "c", "a"]
    assert view.recompute_count == 2

    view.set_properties(listing[:1])
    assert [p.id for p in view.items] == ["a"]
    assert view.recompute_count == 3


@pytest.mark.unit
def test_sort_direction_toggles():
    assert SortDirection.ASC.toggled() is SortDirection.DESC
    assert SortDirection.DESC.toggled() is SortDirection.ASC
