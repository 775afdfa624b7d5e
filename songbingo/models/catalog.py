from collections.abc import Iterable
from dataclasses import dataclass

FREE_CELL_ID = "FREE_SPOT"


@dataclass(frozen=True)
class CatalogItem:
    """
    One selectable song from the catalog.

    Immutable once loaded; identity is `item_id`.
    """

    item_id: str
    display_title: str
    short_label: str | None = None

    @property
    def is_free_cell(self) -> bool:
        return self.item_id == FREE_CELL_ID

    def label(self, compact: bool = False) -> str:
        """Title to render, preferring the short label when compact."""
        if compact and self.short_label:
            return self.short_label
        return self.display_title


# Occupant of the fixed centre cell. Never part of a catalog.
FREE_CELL = CatalogItem(item_id=FREE_CELL_ID, display_title="FREE")


def catalog_sort_key(item: CatalogItem) -> tuple[int, int, str]:
    """
    Sort key for catalog listings.

    Numeric ids sort numerically and ahead of non-numeric ids, which
    sort lexicographically.
    """
    try:
        return (0, int(item.item_id), "")
    except ValueError:
        return (1, 0, item.item_id)


def dedupe_items(items: Iterable[CatalogItem]) -> list[CatalogItem]:
    """
    Drop repeated item_ids, keeping the first occurrence.

    The free cell is never a selectable item and is dropped as well.
    """
    seen: set[str] = set()
    unique: list[CatalogItem] = []
    for item in items:
        if item.is_free_cell or item.item_id in seen:
            continue
        seen.add(item.item_id)
        unique.append(item)
    return unique
