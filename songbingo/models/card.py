"""
CardArrangement: the 5x5 bingo card.

A card is 25 cells in row-major order. The centre cell is fixed and always
holds the FREE cell; the other 24 cells hold distinct catalog songs.

INVARIANTS (checked by `CardArrangement.validate()`):
1. Exactly 25 cells, positions 0..24 in order
2. Only the centre cell is fixed, and it holds FREE_CELL
3. The other 24 cells hold catalog items with pairwise distinct item_ids
"""

from collections.abc import Iterator
from dataclasses import dataclass, field

from songbingo.models.catalog import CatalogItem
from songbingo.models.failure import FailureKind

GRID_SIZE = 5
CELL_COUNT = GRID_SIZE * GRID_SIZE
FREE_CELL_INDEX = CELL_COUNT // 2
ITEMS_PER_CARD = CELL_COUNT - 1


class ArrangementInvariantError(Exception):
    """
    Raised when a card breaks one of its structural invariants.

    This is an internal error: the composer and editor never produce
    such a card.
    """

    kind = FailureKind.INVARIANT_VIOLATION

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Card invariant violated: {reason}")


@dataclass
class CardCell:
    """One position on the card. Identity follows position, not occupant."""

    position_index: int
    occupant: CatalogItem

    @property
    def is_fixed(self) -> bool:
        return self.position_index == FREE_CELL_INDEX

    @property
    def row(self) -> int:
        return self.position_index // GRID_SIZE

    @property
    def column(self) -> int:
        return self.position_index % GRID_SIZE


@dataclass
class CardArrangement:
    """The ordered cells of one generated card."""

    cells: list[CardCell] = field(default_factory=list)

    @classmethod
    def from_occupants(cls, occupants: list[CatalogItem]) -> "CardArrangement":
        """Build a card from 25 occupants in position order and validate it."""
        arrangement = cls(
            cells=[CardCell(position_index=i, occupant=item) for i, item in enumerate(occupants)]
        )
        arrangement.validate()
        return arrangement

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[CardCell]:
        return iter(self.cells)

    def __getitem__(self, position: int) -> CardCell:
        return self.cells[position]

    def occupant_at(self, position: int) -> CatalogItem:
        return self.cells[position].occupant

    def items(self) -> list[CatalogItem]:
        """Songs on the card in position order, without the free cell."""
        return [cell.occupant for cell in self.cells if not cell.is_fixed]

    def item_ids(self) -> list[str]:
        return [item.item_id for item in self.items()]

    def position_of(self, item_id: str) -> int | None:
        """Position holding `item_id`, or None if the song is not on the card."""
        for cell in self.cells:
            if not cell.is_fixed and cell.occupant.item_id == item_id:
                return cell.position_index
        return None

    def contains_item(self, item_id: str) -> bool:
        return self.position_of(item_id) is not None

    def rows(self) -> list[list[CatalogItem]]:
        """Occupants grouped into GRID_SIZE rows."""
        occupants = [cell.occupant for cell in self.cells]
        return [occupants[i : i + GRID_SIZE] for i in range(0, CELL_COUNT, GRID_SIZE)]

    def copy(self) -> "CardArrangement":
        """Independent copy; occupants are immutable and shared."""
        return CardArrangement(
            cells=[CardCell(cell.position_index, cell.occupant) for cell in self.cells]
        )

    def validate(self) -> None:
        """
        Check every card invariant.

        Raises:
            ArrangementInvariantError: On the first violated invariant
        """
        if len(self.cells) != CELL_COUNT:
            raise ArrangementInvariantError(f"expected {CELL_COUNT} cells, got {len(self.cells)}")

        seen: set[str] = set()
        for expected, cell in enumerate(self.cells):
            if cell.position_index != expected:
                raise ArrangementInvariantError(
                    f"cell {expected} has position_index {cell.position_index}"
                )
            if cell.is_fixed:
                if not cell.occupant.is_free_cell:
                    raise ArrangementInvariantError(
                        f"fixed cell {expected} holds {cell.occupant.item_id}"
                    )
                continue
            if cell.occupant.is_free_cell:
                raise ArrangementInvariantError(f"free cell found at position {expected}")
            if cell.occupant.item_id in seen:
                raise ArrangementInvariantError(f"duplicate item {cell.occupant.item_id}")
            seen.add(cell.occupant.item_id)
