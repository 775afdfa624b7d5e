"""
Card generation and sharing endpoints.

The server is the source of randomness: /generate-card draws 24 songs
from the whole catalog. Placement around the FREE cell is positional only.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession

from songbingo.api.deps import Catalog, ImageStore
from songbingo.api.schemas import SongResponse
from songbingo.db.database import get_session
from songbingo.db.operations import get_shared_cards_by_guest
from songbingo.services.card_composer import draw_items
from songbingo.services.share import build_share_intent_url, share_card_image

logger = logging.getLogger(__name__)

router = APIRouter(tags=["cards"])


class ShareCardRequest(BaseModel):
    """Request model for sharing an exported card image."""

    model_config = ConfigDict(populate_by_name=True)

    image_data: str | None = Field(
        default=None,
        alias="imageData",
        description="Base64 PNG, optionally prefixed with data:image/png;base64,",
    )
    guest_id: str | None = Field(default=None, alias="guestId")


class ShareCardResponse(BaseModel):
    """Response model for a shared card."""

    model_config = ConfigDict(populate_by_name=True)

    image_url: str = Field(..., alias="imageUrl")


class SharedCardResponse(BaseModel):
    """One card a guest has shared."""

    model_config = ConfigDict(populate_by_name=True)

    card_id: str = Field(..., alias="cardId")
    image_url: str = Field(..., alias="imageUrl")
    created_at: str | None = Field(default=None, alias="createdAt")


class SharedCardListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    guest_id: str = Field(..., alias="guestId")
    cards: list[SharedCardResponse]
    count: int


class ShareIntentResponse(BaseModel):
    url: str


@router.post("/generate-card", response_model=list[SongResponse])
async def generate_card(catalog: Catalog) -> list[SongResponse]:
    """
    Draw 24 distinct songs at random for a new card.

    Returns 503 when the catalog holds fewer than 24 songs.
    """
    drawn = draw_items(catalog)
    logger.info("Generated card from catalog of %d songs", len(catalog))
    return [SongResponse.from_item(item) for item in drawn]


@router.post("/share-card", response_model=ShareCardResponse)
async def share_card(
    request: ShareCardRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
    store: ImageStore,
) -> ShareCardResponse:
    """
    Store an exported card image and return its public URL.

    Returns 400 if imageData or guestId is missing.
    """
    if not request.image_data or not request.guest_id or not request.guest_id.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="imageData and guestId are required.",
        )

    shared = await share_card_image(
        session,
        store,
        guest_id=request.guest_id.strip(),
        image_data=request.image_data,
    )
    return ShareCardResponse(image_url=shared.image_url)


@router.get("/share-card/{guest_id}", response_model=SharedCardListResponse)
async def list_shared_cards(
    guest_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
    limit: Annotated[int, Query(ge=1, le=100)] = 50,
) -> SharedCardListResponse:
    """Cards a guest has shared, newest first."""
    shared = await get_shared_cards_by_guest(session, guest_id, limit=limit)
    cards = [
        SharedCardResponse(
            card_id=card.card_id,
            image_url=card.image_url,
            created_at=card.created_at.isoformat() if card.created_at else None,
        )
        for card in shared
    ]
    return SharedCardListResponse(guest_id=guest_id, cards=cards, count=len(cards))


@router.get("/share-intent", response_model=ShareIntentResponse)
async def share_intent(
    image_url: Annotated[str | None, Query(alias="imageUrl")] = None,
) -> ShareIntentResponse:
    """Link that opens X with the share text, hashtags and optional card image."""
    return ShareIntentResponse(url=build_share_intent_url(image_url=image_url))
