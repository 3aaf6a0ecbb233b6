"""Tests for neighborhood grouping."""

import pytest

from src.showcase.catalog import active_properties, is_sold, organize_catalog
from src.showcase.projector import project


@pytest.mark.unit
def test_organize_catalog_groups_in_first_seen_order(sample_profile, sample_properties):
    _, displayed = project(sample_profile, sample_properties)

    catalog = organize_catalog(displayed)

    assert [s.label for s in catalog.sections] == ["Jardins", "Atalaia"]
    assert [p.id for p in catalog.sections[0].properties] == ["p-1"]
    assert catalog.sections[1].count == 1


@pytest.mark.unit
def test_sold_properties_are_hidden(sample_profile, sample_properties):
    _, displayed = project(sample_profile, sample_properties)

    ids = [p.id for p in active_properties(displayed)]

    assert "p-3" not in ids


@pytest.mark.unit
@pytest.mark.parametrize("status,expected", [("Sold", True), (" sold ", True), ("SOLD", True), ("Reserved", False), ("", False)])
def test_is_sold(status, expected):
    assert is_sold(status) is expected


@pytest.mark.unit
def test_empty_catalog():
    catalog = organize_catalog([])

    assert catalog.is_empty
    assert catalog.sections == ()
