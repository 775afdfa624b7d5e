from songbingo.models.card import (
    CELL_COUNT,
    FREE_CELL_INDEX,
    GRID_SIZE,
    ITEMS_PER_CARD,
    ArrangementInvariantError,
    CardArrangement,
    CardCell,
)
from songbingo.models.catalog import FREE_CELL, CatalogItem, catalog_sort_key, dedupe_items
from songbingo.models.failure import (
    ApiResponse,
    CardEditError,
    DuplicateItemError,
    FailureDetail,
    FailureKind,
    FixedCellViolation,
    InsufficientPoolError,
    InvalidPositionError,
    KnownError,
    NotEditableError,
    OutcomeType,
    RefusalError,
    create_unknown_failure,
    finalize_response,
    is_finalized,
)

__all__ = [
    "ApiResponse",
    "ArrangementInvariantError",
    "CELL_COUNT",
    "CardArrangement",
    "CardCell",
    "CardEditError",
    "CatalogItem",
    "DuplicateItemError",
    "FREE_CELL",
    "FREE_CELL_INDEX",
    "FailureDetail",
    "FailureKind",
    "FixedCellViolation",
    "GRID_SIZE",
    "ITEMS_PER_CARD",
    "InsufficientPoolError",
    "InvalidPositionError",
    "KnownError",
    "NotEditableError",
    "OutcomeType",
    "RefusalError",
    "catalog_sort_key",
    "create_unknown_failure",
    "dedupe_items",
    "finalize_response",
    "is_finalized",
]
