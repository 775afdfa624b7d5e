"""
Song catalog endpoints.

Serves the full catalog, used by the replacement picker.
"""

from fastapi import APIRouter

from songbingo.api.deps import Catalog
from songbingo.api.schemas import SongResponse

router = APIRouter(tags=["songs"])


@router.get("/songs", response_model=list[SongResponse])
async def list_songs(catalog: Catalog) -> list[SongResponse]:
    """
    Get every song in the catalog.

    Sorted by songId: numeric ids numerically, others lexicographically.
    """
    return [SongResponse.from_item(item) for item in catalog]
