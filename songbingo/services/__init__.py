"""
SongBingo services.

Card composition, editing, and session state.
"""

from songbingo.services.card_composer import arrange_items, compose_card, draw_items
from songbingo.services.card_session import (
    BeginDrag,
    CancelDrag,
    CardGenerated,
    CardSession,
    CardSessionState,
    CatalogLoaded,
    ClosePicker,
    CommitDrag,
    DragState,
    EditMode,
    FinishEditing,
    GenerationFailed,
    HoverDrag,
    OpenPicker,
    ReplaceCell,
    SessionAction,
    SwapCells,
    ToggleEditing,
    Transition,
    reduce_session,
)
from songbingo.services.cell_editor import (
    EditResult,
    PickerEntry,
    picker_entries,
    replace_cell,
    swap_cells,
)
from songbingo.services.drag import CellBounds, DragController, locate_cell

__all__ = [
    "BeginDrag",
    "CancelDrag",
    "CardGenerated",
    "CardSession",
    "CardSessionState",
    "CatalogLoaded",
    "CellBounds",
    "ClosePicker",
    "CommitDrag",
    "DragController",
    "DragState",
    "EditMode",
    "EditResult",
    "FinishEditing",
    "GenerationFailed",
    "HoverDrag",
    "OpenPicker",
    "PickerEntry",
    "ReplaceCell",
    "SessionAction",
    "SwapCells",
    "ToggleEditing",
    "Transition",
    "arrange_items",
    "compose_card",
    "draw_items",
    "locate_cell",
    "picker_entries",
    "reduce_session",
    "replace_cell",
    "swap_cells",
]
