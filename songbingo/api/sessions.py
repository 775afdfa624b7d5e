"""
Card session endpoints.

A session holds one live card and its editing state. Every mutation is a
session action; refused actions return HTTP 200 with `applied: false`, the
refusal, and the unchanged card.
"""

from typing import Annotated, Literal

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel, ConfigDict, Field

from songbingo.api.deps import Catalog, Registry
from songbingo.api.schemas import CellResponse, RejectionResponse, SongResponse, card_snapshot
from songbingo.models.failure import InsufficientPoolError
from songbingo.services.card_composer import compose_card
from songbingo.services.card_session import (
    CardGenerated,
    CardSession,
    CatalogLoaded,
    ClosePicker,
    EditMode,
    FinishEditing,
    GenerationFailed,
    OpenPicker,
    ReplaceCell,
    SwapCells,
    ToggleEditing,
    Transition,
)
from songbingo.services.cell_editor import picker_entries
from songbingo.services.drag import DragController

router = APIRouter(prefix="/sessions", tags=["sessions"])


class DragResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    dragging_index: int | None = Field(default=None, alias="draggingIndex")
    hover_index: int | None = Field(default=None, alias="hoverIndex")
    active: bool = False


class SessionResponse(BaseModel):
    """Snapshot of a session for the rendering client."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId")
    mode: EditMode
    cells: list[CellResponse] = Field(default_factory=list)
    drag: DragResponse
    picker_position: int | None = Field(default=None, alias="pickerPosition")
    error: str | None = None


class ActionResponse(BaseModel):
    """Result of one session action."""

    applied: bool
    rejection: RejectionResponse | None = None
    session: SessionResponse


class SwapRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    position_a: int = Field(..., alias="positionA")
    position_b: int = Field(..., alias="positionB")


class ReplaceRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    position: int
    song_id: str = Field(..., alias="songId")


class PositionRequest(BaseModel):
    position: int | None = None


class PickerEntryResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    song: SongResponse
    already_on_card: bool = Field(..., alias="alreadyOnCard")


class PickerResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    position: int | None
    entries: list[PickerEntryResponse]


def _session_response(session: CardSession) -> SessionResponse:
    state = session.state
    return SessionResponse(
        session_id=session.session_id,
        mode=state.mode,
        cells=card_snapshot(state.arrangement) if state.arrangement is not None else [],
        drag=DragResponse(
            dragging_index=state.drag.dragging_index,
            hover_index=state.drag.hover_index,
            active=state.drag.active,
        ),
        picker_position=state.picker_position,
        error=state.error,
    )


def _action_response(session: CardSession, transition: Transition) -> ActionResponse:
    return ActionResponse(
        applied=transition.applied,
        rejection=(
            RejectionResponse.from_error(transition.rejection)
            if transition.rejection is not None
            else None
        ),
        session=_session_response(session),
    )


def _load_catalog(session: CardSession, catalog: Catalog) -> None:
    # An empty catalog has not been seeded yet; the session waits for songs
    if catalog:
        session.dispatch(CatalogLoaded(catalog))


def _open_session(registry: Registry, catalog: Catalog, session_id: str) -> CardSession:
    session = registry.get(session_id)
    _load_catalog(session, catalog)
    return session


@router.post("", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session(registry: Registry, catalog: Catalog) -> SessionResponse:
    """Start a session with no card, in viewing mode."""
    session = registry.create()
    _load_catalog(session, catalog)
    return _session_response(session)


@router.get("/{session_id}", response_model=SessionResponse)
async def get_card_session(session_id: str, registry: Registry) -> SessionResponse:
    """Current card and editing state."""
    return _session_response(registry.get(session_id))


@router.post("/{session_id}/generate", response_model=SessionResponse)
async def generate_session_card(
    session_id: str, registry: Registry, catalog: Catalog
) -> SessionResponse:
    """
    Replace the session's card with a newly composed one.

    Returns 503 when the catalog holds fewer than 24 songs; the previous
    card is discarded and the session records the error.
    """
    session = _open_session(registry, catalog, session_id)
    try:
        arrangement = compose_card(session.state.catalog)
    except InsufficientPoolError as e:
        session.dispatch(GenerationFailed(e.message))
        raise
    session.dispatch(CardGenerated(arrangement))
    return _session_response(session)


@router.post("/{session_id}/editing", response_model=ActionResponse)
async def toggle_editing(session_id: str, registry: Registry) -> ActionResponse:
    """Switch between viewing and editing."""
    session = registry.get(session_id)
    return _action_response(session, session.dispatch(ToggleEditing()))


@router.post("/{session_id}/finish", response_model=ActionResponse)
async def finish_editing(session_id: str, registry: Registry) -> ActionResponse:
    """Leave editing; the card is stable for export or sharing."""
    session = registry.get(session_id)
    return _action_response(session, session.dispatch(FinishEditing()))


@router.post("/{session_id}/swap", response_model=ActionResponse)
async def swap(session_id: str, request: SwapRequest, registry: Registry) -> ActionResponse:
    """Exchange the songs at two cells."""
    session = registry.get(session_id)
    transition = session.dispatch(SwapCells(request.position_a, request.position_b))
    return _action_response(session, transition)


@router.post("/{session_id}/replace", response_model=ActionResponse)
async def replace_song(
    session_id: str, request: ReplaceRequest, registry: Registry, catalog: Catalog
) -> ActionResponse:
    """
    Put a catalog song into a cell.

    Returns 404 if the song is not in the catalog.
    """
    session = _open_session(registry, catalog, session_id)
    item = next((i for i in session.state.catalog if i.item_id == request.song_id), None)
    if item is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Song '{request.song_id}' not found",
        )
    transition = session.dispatch(ReplaceCell(request.position, item))
    return _action_response(session, transition)


@router.post("/{session_id}/picker", response_model=ActionResponse)
async def open_picker(
    session_id: str, registry: Registry, request: PositionRequest | None = None
) -> ActionResponse:
    """Choose the cell a replacement will go into; no position closes the picker."""
    session = registry.get(session_id)
    position = request.position if request is not None else None
    if position is None:
        return _action_response(session, session.dispatch(ClosePicker()))
    return _action_response(session, session.dispatch(OpenPicker(position)))


@router.get("/{session_id}/picker", response_model=PickerResponse)
async def list_picker_entries(
    session_id: str,
    registry: Registry,
    catalog: Catalog,
    search: Annotated[str, Query(max_length=200)] = "",
) -> PickerResponse:
    """Catalog songs for replacement, with songs already on the card flagged."""
    session = _open_session(registry, catalog, session_id)
    entries = picker_entries(session.state.catalog, session.state.arrangement, search)
    return PickerResponse(
        position=session.state.picker_position,
        entries=[
            PickerEntryResponse(
                song=SongResponse.from_item(entry.item),
                already_on_card=entry.already_on_card,
            )
            for entry in entries
        ],
    )


@router.post("/{session_id}/drag/{phase}", response_model=ActionResponse)
async def drag(
    session_id: str,
    phase: Literal["begin", "hover", "commit", "cancel"],
    registry: Registry,
    request: PositionRequest | None = None,
) -> ActionResponse:
    """
    Drive a drag-to-swap gesture.

    `begin` needs a position; `commit` with no position cancels the gesture.
    """
    session = registry.get(session_id)
    controller = DragController(session)
    position = request.position if request is not None else None

    if phase == "begin":
        if position is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="position is required to begin a drag",
            )
        transition = controller.begin_drag(position)
    elif phase == "hover":
        transition = controller.hover_drag(position)
    elif phase == "commit":
        transition = controller.commit_drag(position)
    else:
        transition = controller.cancel_drag()

    return _action_response(session, transition)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def end_session(session_id: str, registry: Registry) -> None:
    """Discard the session and its card."""
    if not registry.discard(session_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session '{session_id}' not found",
        )
