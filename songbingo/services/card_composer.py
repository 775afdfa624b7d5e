"""
Card composition service.

Draws songs from a pool and places them around the fixed FREE cell.
Randomness comes from an unbiased shuffle of the whole pool, so there
are no duplicate-collision retries.
"""

import logging
import random
from collections.abc import Iterable

from songbingo.models.card import FREE_CELL_INDEX, ITEMS_PER_CARD, CardArrangement
from songbingo.models.catalog import FREE_CELL, CatalogItem, dedupe_items
from songbingo.models.failure import DuplicateItemError, InsufficientPoolError

logger = logging.getLogger(__name__)


def draw_items(
    pool: Iterable[CatalogItem],
    count: int = ITEMS_PER_CARD,
    rng: random.Random | None = None,
) -> list[CatalogItem]:
    """
    Draw `count` distinct items uniformly at random, in random order.

    Args:
        pool: Candidate items (duplicate item_ids are collapsed)
        count: Number of items to draw
        rng: Random source; defaults to the module-level generator

    Returns:
        A new list of `count` items

    Raises:
        InsufficientPoolError: If the pool has fewer than `count` distinct items
    """
    candidates = dedupe_items(pool)
    if len(candidates) < count:
        logger.warning(
            "INSUFFICIENT_POOL",
            extra={"pool_size": len(candidates), "required": count},
        )
        raise InsufficientPoolError(required=count, available=len(candidates))

    # Fisher-Yates over the whole pool, then truncate
    (rng or random).shuffle(candidates)
    return candidates[:count]


def arrange_items(items: list[CatalogItem]) -> CardArrangement:
    """
    Place 24 drawn items around the FREE cell.

    The first 12 items fill positions 0..11, the FREE cell sits at 12 and
    the remaining 12 fill positions 13..24. The input order is kept.

    Raises:
        InsufficientPoolError: If `items` does not hold exactly 24 items
        DuplicateItemError: If an item_id appears twice
    """
    if len(items) != ITEMS_PER_CARD:
        raise InsufficientPoolError(required=ITEMS_PER_CARD, available=len(items))

    seen: dict[str, int] = {}
    for index, item in enumerate(items):
        if item.is_free_cell:
            raise DuplicateItemError(item.item_id, FREE_CELL_INDEX)
        if item.item_id in seen:
            raise DuplicateItemError(item.item_id, seen[item.item_id])
        seen[item.item_id] = index

    occupants = [*items[:FREE_CELL_INDEX], FREE_CELL, *items[FREE_CELL_INDEX:]]
    return CardArrangement.from_occupants(occupants)


def compose_card(
    pool: Iterable[CatalogItem],
    rng: random.Random | None = None,
) -> CardArrangement:
    """
    Compose a new card from a pool.

    Raises:
        InsufficientPoolError: If fewer than 24 distinct items are available
    """
    arrangement = arrange_items(draw_items(pool, ITEMS_PER_CARD, rng))
    logger.debug("Composed card with items %s", arrangement.item_ids())
    return arrangement
