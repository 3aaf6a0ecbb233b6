"""Groups active properties into neighborhood sections for the showcase."""

from typing import Iterable
from pydantic import BaseModel, ConfigDict

from src.models.property import PropertyStatus
from src.showcase.projector import DisplayProperty


class NeighborhoodSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    properties: tuple[DisplayProperty, ...]

    @property
    def count(self) -> int:
        return len(self.properties)


class Catalog(BaseModel):
    """Sections in first-seen neighborhood order. No sections is the empty state, not an error."""
    model_config = ConfigDict(frozen=True)

    sections: tuple[NeighborhoodSection, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.sections


def is_sold(status: str) -> bool:
    return (status or "").strip().casefold() == PropertyStatus.SOLD.value.casefold()


def active_properties(properties: Iterable[DisplayProperty]) -> list[DisplayProperty]:
    return [p for p in properties if not is_sold(p.status)]


def organize_catalog(properties: Iterable[DisplayProperty]) -> Catalog:
    grouped: dict[str, list[DisplayProperty]] = {}
    # dict insertion order is the first-seen neighborhood order
    for prop in active_properties(properties):
        grouped.setdefault(prop.neighborhood_label, []).append(prop)

    return Catalog(
        sections=tuple(
            NeighborhoodSection(label=label, properties=tuple(items))
            for label, items in grouped.items()
        )
    )
