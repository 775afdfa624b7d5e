"""
Drag-to-swap gestures.

DragController is the one capability both pointer and touch input use to
drive a swap. Touch input first resolves coordinates to a cell with
`locate_cell()`; a release outside every tracked cell cancels the gesture.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from songbingo.services.card_session import (
    BeginDrag,
    CancelDrag,
    CardSession,
    CommitDrag,
    HoverDrag,
    Transition,
)


@dataclass(frozen=True)
class CellBounds:
    """Screen rectangle of one rendered cell."""

    position: int
    left: float
    top: float
    right: float
    bottom: float

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x <= self.right and self.top <= y <= self.bottom


def locate_cell(x: float, y: float, bounds: Sequence[CellBounds]) -> int | None:
    """Position of the cell under (x, y), or None outside tracked bounds."""
    hit: int | None = None
    for cell in bounds:
        if cell.contains(x, y):
            # Later cells win, matching paint order
            hit = cell.position
    return hit


class DragController:
    """Drag capability over a card session."""

    def __init__(self, session: CardSession):
        self.session = session

    def begin_drag(self, position: int) -> Transition:
        return self.session.dispatch(BeginDrag(position))

    def hover_drag(self, position: int | None) -> Transition:
        return self.session.dispatch(HoverDrag(position))

    def commit_drag(self, position: int | None) -> Transition:
        """Drop on `position`; None (released outside the card) cancels."""
        if position is None:
            return self.cancel_drag()
        return self.session.dispatch(CommitDrag(position))

    def cancel_drag(self) -> Transition:
        return self.session.dispatch(CancelDrag())

    # Touch input

    def touch_move(self, x: float, y: float, bounds: Sequence[CellBounds]) -> Transition:
        return self.hover_drag(locate_cell(x, y, bounds))

    def touch_end(self, x: float, y: float, bounds: Sequence[CellBounds]) -> Transition:
        return self.commit_drag(locate_cell(x, y, bounds))
