"""Admin property list: sorting and filtering."""

from enum import Enum
from typing import Iterable, Optional

from src.models.property import Property, PropertyStatus


class SortKey(str, Enum):
    CREATED_AT = "created_at"
    PRICE = "price"
    STATUS = "status"
    TITLE = "title"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def toggled(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


STATUS_BADGE_CLASSES = {
    PropertyStatus.AVAILABLE: "bg-green-100 text-green-700 border-green-200",
    PropertyStatus.SOLD: "bg-red-100 text-red-700 border-red-200",
    PropertyStatus.RESERVED: "bg-yellow-100 text-yellow-700 border-yellow-200",
    PropertyStatus.LAST_UNITS: "bg-orange-100 text-orange-700 border-orange-200",
}


def status_badge_class(status: PropertyStatus) -> str:
    return STATUS_BADGE_CLASSES.get(status, "bg-gray-100 text-gray-700 border-gray-200")


def _sort_value(prop: Property, key: SortKey):
    if key is SortKey.PRICE:
        return prop.price
    if key is SortKey.CREATED_AT:
        return prop.created_at
    if key is SortKey.STATUS:
        return prop.status.value.lower()
    return prop.title.lower()


def sort_properties(
    properties: Iterable[Property],
    key: SortKey = SortKey.CREATED_AT,
    direction: SortDirection = SortDirection.DESC,
) -> list[Property]:
    """Stable sort; numbers numerically, text case-insensitively."""
    return sorted(
        properties,
        key=lambda p: _sort_value(p, key),
        reverse=direction is SortDirection.DESC,
    )


def filter_properties(
    properties: Iterable[Property],
    status: Optional[PropertyStatus] = None,
    query: Optional[str] = None,
) -> list[Property]:
    """Keep properties matching the status and a free-text query over title/neighborhood/city."""
    needle = (query or "").strip().casefold()
    result = []
    for prop in properties:
        if status is not None and prop.status is not status:
            continue
        if needle:
            haystack = " ".join((prop.title, prop.neighborhood, prop.city)).casefold()
            if needle not in haystack:
                continue
        result.append(prop)
    return result


class PropertyListView:
    """Sorted/filtered view of the admin list, recomputed only when an input changes."""

    def __init__(self, properties: Optional[list[Property]] = None):
        self._properties: list[Property] = list(properties or [])
        self.sort_key = SortKey.CREATED_AT
        self.sort_direction = SortDirection.DESC
        self.status_filter: Optional[PropertyStatus] = None
        self.query = ""
        self._cache_key: Optional[tuple] = None
        self._cached: list[Property] = []
        self._version = 0
        self.recompute_count = 0

    def set_properties(self, properties: list[Property]) -> None:
        self._properties = list(properties)
        self._version += 1

    def toggle_direction(self) -> None:
        self.sort_direction = self.sort_direction.toggled()

    @property
    def items(self) -> list[Property]:
        key = (self._version, self.sort_key, self.sort_direction, self.status_filter, self.query)
        if key != self._cache_key:
            filtered = filter_properties(self._properties, self.status_filter, self.query)
            self._cached = sort_properties(filtered, self.sort_key, self.sort_direction)
            self._cache_key = key
            self.recompute_count += 1
        return self._cached
