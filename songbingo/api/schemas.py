"""
Wire models shared by the API routers.

Song records use the camelCase keys the browser client expects
(`songId`, `title`, `shortTitle`).
"""

from pydantic import BaseModel, ConfigDict, Field

from songbingo.models.card import CardArrangement
from songbingo.models.catalog import CatalogItem
from songbingo.models.failure import CardEditError, FailureKind


class SongResponse(BaseModel):
    """One catalog song."""

    model_config = ConfigDict(populate_by_name=True)

    song_id: str = Field(..., alias="songId")
    title: str
    short_title: str | None = Field(default=None, alias="shortTitle")

    @classmethod
    def from_item(cls, item: CatalogItem) -> "SongResponse":
        return cls(song_id=item.item_id, title=item.display_title, short_title=item.short_label)


class CellResponse(BaseModel):
    """One cell of a card snapshot."""

    model_config = ConfigDict(populate_by_name=True)

    position: int
    song_id: str = Field(..., alias="songId")
    title: str
    short_title: str | None = Field(default=None, alias="shortTitle")
    is_free_spot: bool = Field(default=False, alias="isFreeSpot")


def card_snapshot(arrangement: CardArrangement) -> list[CellResponse]:
    """Read-only, ordered view of a card for rendering and export."""
    return [
        CellResponse(
            position=cell.position_index,
            song_id=cell.occupant.item_id,
            title=cell.occupant.display_title,
            short_title=cell.occupant.short_label,
            is_free_spot=cell.is_fixed,
        )
        for cell in arrangement
    ]


class RejectionResponse(BaseModel):
    """Why an edit was refused."""

    kind: FailureKind
    message: str
    detail: str | None = None

    @classmethod
    def from_error(cls, error: CardEditError) -> "RejectionResponse":
        return cls(kind=error.kind, message=error.message, detail=error.detail)
