"""
Cell editing service.

Applies one user-directed mutation to a card: swapping two cells or
replacing one cell's song with another catalog song.

INVARIANTS:
- The FREE cell is never a source or target of an edit
- No song appears twice on the card
- A refused edit leaves the card untouched

Refusals are returned in an EditResult, never raised to the caller.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from songbingo.models.card import CELL_COUNT, CardArrangement
from songbingo.models.catalog import CatalogItem
from songbingo.models.failure import (
    CardEditError,
    DuplicateItemError,
    FixedCellViolation,
    InvalidPositionError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EditResult:
    """Outcome of one edit: applied, or refused with the reason."""

    applied: bool
    rejection: CardEditError | None = None

    @classmethod
    def accepted(cls) -> "EditResult":
        return cls(applied=True)

    @classmethod
    def refused(cls, error: CardEditError) -> "EditResult":
        logger.debug(
            "CARD_EDIT_REFUSED",
            extra={"kind": error.kind.value, "detail": error.detail},
        )
        return cls(applied=False, rejection=error)


@dataclass(frozen=True)
class PickerEntry:
    """A song offered as a replacement, disabled when already on the card."""

    item: CatalogItem
    already_on_card: bool


def _check_editable_position(arrangement: CardArrangement, position: int) -> None:
    if not 0 <= position < CELL_COUNT:
        raise InvalidPositionError(f"position {position} outside 0..{CELL_COUNT - 1}")
    if arrangement[position].is_fixed:
        raise FixedCellViolation(position)


def swap_cells(arrangement: CardArrangement, position_a: int, position_b: int) -> EditResult:
    """
    Exchange the songs at two positions, in place.

    Positions keep their index; only occupants move.
    """
    try:
        _check_editable_position(arrangement, position_a)
        _check_editable_position(arrangement, position_b)
        if position_a == position_b:
            raise InvalidPositionError(f"cannot swap position {position_a} with itself")
    except CardEditError as e:
        return EditResult.refused(e)

    cell_a = arrangement[position_a]
    cell_b = arrangement[position_b]
    cell_a.occupant, cell_b.occupant = cell_b.occupant, cell_a.occupant
    return EditResult.accepted()


def replace_cell(arrangement: CardArrangement, position: int, item: CatalogItem) -> EditResult:
    """
    Put `item` at `position`, in place.

    The item may come from anywhere in the catalog but must not already
    sit in another cell. Re-selecting the current song is accepted.
    """
    try:
        _check_editable_position(arrangement, position)
        if item.is_free_cell:
            raise FixedCellViolation(position)
        existing = arrangement.position_of(item.item_id)
        if existing is not None and existing != position:
            raise DuplicateItemError(item.item_id, existing)
    except CardEditError as e:
        return EditResult.refused(e)

    arrangement[position].occupant = item
    return EditResult.accepted()


def picker_entries(
    catalog: Iterable[CatalogItem],
    arrangement: CardArrangement | None,
    search: str = "",
) -> list[PickerEntry]:
    """
    Catalog songs offered for replacement.

    Filters by case-insensitive title substring and marks songs already
    on the card so they can be shown disabled.
    """
    needle = search.strip().lower()
    on_card = set(arrangement.item_ids()) if arrangement is not None else set()
    return [
        PickerEntry(item=item, already_on_card=item.item_id in on_card)
        for item in catalog
        if not needle or needle in item.display_title.lower()
    ]
