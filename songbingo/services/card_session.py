"""
Card session state.

One session owns one live card. All session state lives in a single
immutable CardSessionState and changes only through named actions applied
by `reduce_session()`, so card invariants are enforced in one place.

State machine:
    VIEWING --ToggleEditing--> EDITING --ToggleEditing/FinishEditing--> VIEWING

Swaps and replacements are accepted only while EDITING. A refused action
returns the unchanged state together with the refusal.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum

from songbingo.models.card import CELL_COUNT, CardArrangement
from songbingo.models.catalog import CatalogItem
from songbingo.models.failure import (
    CardEditError,
    FixedCellViolation,
    InvalidPositionError,
    NotEditableError,
)
from songbingo.services.cell_editor import EditResult, replace_cell, swap_cells

logger = logging.getLogger(__name__)


class EditMode(str, Enum):
    VIEWING = "viewing"
    EDITING = "editing"


@dataclass(frozen=True)
class DragState:
    """Transient drag presentation state. Not part of the card."""

    dragging_index: int | None = None
    hover_index: int | None = None

    @property
    def active(self) -> bool:
        return self.dragging_index is not None


@dataclass(frozen=True)
class CardSessionState:
    """Everything a card session knows, in one place."""

    arrangement: CardArrangement | None = None
    catalog: tuple[CatalogItem, ...] = ()
    catalog_loaded: bool = False
    mode: EditMode = EditMode.VIEWING
    drag: DragState = field(default_factory=DragState)
    picker_position: int | None = None
    error: str | None = None

    @property
    def is_editing(self) -> bool:
        return self.mode is EditMode.EDITING


# =============================================================================
# ACTIONS
# =============================================================================


@dataclass(frozen=True)
class CatalogLoaded:
    items: tuple[CatalogItem, ...]


@dataclass(frozen=True)
class CardGenerated:
    arrangement: CardArrangement


@dataclass(frozen=True)
class GenerationFailed:
    message: str


@dataclass(frozen=True)
class ToggleEditing:
    pass


@dataclass(frozen=True)
class FinishEditing:
    """Leave editing, e.g. before export or share."""


@dataclass(frozen=True)
class SwapCells:
    position_a: int
    position_b: int


@dataclass(frozen=True)
class ReplaceCell:
    position: int
    item: CatalogItem


@dataclass(frozen=True)
class OpenPicker:
    position: int


@dataclass(frozen=True)
class ClosePicker:
    pass


@dataclass(frozen=True)
class BeginDrag:
    position: int


@dataclass(frozen=True)
class HoverDrag:
    position: int | None


@dataclass(frozen=True)
class CommitDrag:
    position: int


@dataclass(frozen=True)
class CancelDrag:
    pass


SessionAction = (
    CatalogLoaded
    | CardGenerated
    | GenerationFailed
    | ToggleEditing
    | FinishEditing
    | SwapCells
    | ReplaceCell
    | OpenPicker
    | ClosePicker
    | BeginDrag
    | HoverDrag
    | CommitDrag
    | CancelDrag
)


@dataclass(frozen=True)
class Transition:
    """Result of applying one action."""

    state: CardSessionState
    rejection: CardEditError | None = None

    @property
    def applied(self) -> bool:
        return self.rejection is None


# =============================================================================
# REDUCER
# =============================================================================


def _leave_editing(state: CardSessionState) -> CardSessionState:
    return replace(state, mode=EditMode.VIEWING, drag=DragState(), picker_position=None)


def _apply_edit(state: CardSessionState, action: SwapCells | ReplaceCell) -> Transition:
    if state.arrangement is None:
        return Transition(state, NotEditableError("no card has been generated"))
    if not state.is_editing:
        return Transition(state, NotEditableError())

    arrangement = state.arrangement.copy()
    result: EditResult
    if isinstance(action, SwapCells):
        result = swap_cells(arrangement, action.position_a, action.position_b)
    else:
        result = replace_cell(arrangement, action.position, action.item)

    if not result.applied:
        return Transition(state, result.rejection)
    return Transition(replace(state, arrangement=arrangement))


def _drag_target_ok(state: CardSessionState, position: int | None) -> bool:
    """A hover/drop target must be a real, non-fixed cell other than the source."""
    if position is None or state.arrangement is None:
        return False
    if not 0 <= position < CELL_COUNT:
        return False
    return not state.arrangement[position].is_fixed and position != state.drag.dragging_index


def reduce_session(state: CardSessionState, action: SessionAction) -> Transition:
    """
    Apply one action to a session state.

    Pure: the input state (and its card) is never mutated.
    """
    if isinstance(action, CatalogLoaded):
        if state.catalog_loaded:
            return Transition(state)
        return Transition(replace(state, catalog=tuple(action.items), catalog_loaded=True))

    if isinstance(action, CardGenerated):
        action.arrangement.validate()
        return Transition(
            CardSessionState(
                arrangement=action.arrangement.copy(),
                catalog=state.catalog,
                catalog_loaded=state.catalog_loaded,
            )
        )

    if isinstance(action, GenerationFailed):
        return Transition(
            CardSessionState(
                catalog=state.catalog,
                catalog_loaded=state.catalog_loaded,
                error=action.message,
            )
        )

    if isinstance(action, ToggleEditing):
        if state.is_editing:
            return Transition(_leave_editing(state))
        if state.arrangement is None:
            return Transition(state, NotEditableError("no card has been generated"))
        return Transition(replace(state, mode=EditMode.EDITING))

    if isinstance(action, FinishEditing):
        return Transition(_leave_editing(state))

    if isinstance(action, (SwapCells, ReplaceCell)):
        transition = _apply_edit(state, action)
        if isinstance(action, ReplaceCell) and transition.applied:
            return Transition(replace(transition.state, picker_position=None))
        return transition

    if isinstance(action, OpenPicker):
        if state.arrangement is None or not state.is_editing:
            return Transition(state, NotEditableError())
        if not 0 <= action.position < CELL_COUNT:
            return Transition(state, InvalidPositionError(f"position {action.position}"))
        if state.arrangement[action.position].is_fixed:
            return Transition(state, FixedCellViolation(action.position))
        return Transition(replace(state, picker_position=action.position))

    if isinstance(action, ClosePicker):
        return Transition(replace(state, picker_position=None))

    if isinstance(action, BeginDrag):
        if state.arrangement is None or not state.is_editing:
            return Transition(state, NotEditableError())
        if not 0 <= action.position < CELL_COUNT:
            return Transition(state, InvalidPositionError(f"position {action.position}"))
        if state.arrangement[action.position].is_fixed:
            return Transition(state, FixedCellViolation(action.position))
        return Transition(replace(state, drag=DragState(dragging_index=action.position)))

    if isinstance(action, HoverDrag):
        if not state.drag.active:
            return Transition(state)
        hover = action.position if _drag_target_ok(state, action.position) else None
        return Transition(replace(state, drag=replace(state.drag, hover_index=hover)))

    if isinstance(action, CommitDrag):
        source = state.drag.dragging_index
        released = replace(state, drag=DragState())
        if source is None:
            return Transition(released)
        if source == action.position:
            return Transition(released)
        transition = _apply_edit(released, SwapCells(source, action.position))
        if transition.applied:
            return transition
        return Transition(released, transition.rejection)

    if isinstance(action, CancelDrag):
        return Transition(replace(state, drag=DragState()))

    raise TypeError(f"Unknown session action: {action!r}")


class CardSession:
    """
    Holder of one session's state.

    Dispatch runs to completion; there are no suspension points, so no
    locking is needed within a session.
    """

    def __init__(self, session_id: str, state: CardSessionState | None = None):
        self.session_id = session_id
        self.state = state or CardSessionState()

    def dispatch(self, action: SessionAction) -> Transition:
        transition = reduce_session(self.state, action)
        self.state = transition.state
        if transition.rejection is not None:
            logger.info(
                "SESSION_ACTION_REFUSED",
                extra={
                    "session_id": self.session_id,
                    "action": type(action).__name__,
                    "kind": transition.rejection.kind.value,
                },
            )
        return transition
