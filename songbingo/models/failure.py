"""
Failure Envelope: Unified Response Classification.

Every failure that reaches a client is classified and explained through the
envelope defined here.

Response types:
- Success: Operation completed successfully
- Refusal: The card refused a mutation (fixed cell, duplicate song, not editing)
- KnownFailure: The service knows why it failed (e.g. catalog too small)
- UnknownFailure: The service does not know why it failed

All envelopes leaving the API pass through `finalize_response()`.
"""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"

    # Resource failures
    NOT_FOUND = "not_found"
    INSUFFICIENT_POOL = "insufficient_pool"

    # Card edit refusals
    FIXED_CELL = "fixed_cell"
    DUPLICATE_ITEM = "duplicate_item"
    NOT_EDITABLE = "not_editable"

    # Service failures
    SERVICE_UNAVAILABLE = "service_unavailable"
    STORAGE_ERROR = "storage_error"

    # Internal errors
    INVARIANT_VIOLATION = "invariant_violation"

    # Unknown
    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    """High-level outcome classification."""

    SUCCESS = "success"
    REFUSAL = "refusal"
    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


T = TypeVar("T")


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


class ApiResponse(BaseModel, Generic[T]):
    """
    Response envelope for failures and successes.

    Every response is classified into one of four outcome types.
    """

    outcome: OutcomeType = Field(
        ...,
        description="High-level classification of the result",
    )
    data: T | None = Field(
        default=None,
        description="Response data (present on success)",
    )
    failure: FailureDetail | None = Field(
        default=None,
        description="Failure details (present on non-success)",
    )

    @classmethod
    def success(cls, data: T) -> "ApiResponse[T]":
        """Create a success response."""
        return cls(outcome=OutcomeType.SUCCESS, data=data)

    @classmethod
    def refusal(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> "ApiResponse[Any]":
        """
        Create a refusal response.

        Use when a card mutation was refused to keep the card valid.
        """
        return cls(
            outcome=OutcomeType.REFUSAL,
            failure=FailureDetail(
                kind=kind,
                message=message,
                detail=detail,
                suggestion=suggestion,
            ),
        )

    @classmethod
    def known_failure(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> "ApiResponse[Any]":
        """
        Create a known failure response.

        Use when the service knows exactly why the operation failed.
        """
        return cls(
            outcome=OutcomeType.KNOWN_FAILURE,
            failure=FailureDetail(
                kind=kind,
                message=message,
                detail=detail,
                suggestion=suggestion,
            ),
        )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the service knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code
        super().__init__(message)

    def to_response(self) -> ApiResponse[Any]:
        """Convert to an ApiResponse."""
        return ApiResponse.known_failure(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class RefusalError(Exception):
    """
    Exception for constraint-based refusals.

    Use when a mutation is refused because it would break a card invariant.
    """

    status_code = 409

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        super().__init__(message)

    def to_response(self) -> ApiResponse[Any]:
        """Convert to an ApiResponse."""
        return ApiResponse.refusal(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


# =============================================================================
# RESPONSE BOUNDARY
# =============================================================================

STANDARD_MESSAGES: dict[OutcomeType, str] = {
    OutcomeType.REFUSAL: "The card cannot be changed that way.",
    OutcomeType.KNOWN_FAILURE: "The operation failed due to a known issue.",
    OutcomeType.UNKNOWN_FAILURE: "Something went wrong. Please try again.",
}

# Track finalized responses by id()
_finalized_responses: set[int] = set()


def finalize_response(response: ApiResponse[Any]) -> ApiResponse[Any]:
    """
    Finalize a response through the boundary.

    Raises:
        ValueError: If response structure is invalid
    """
    if response.outcome == OutcomeType.SUCCESS:
        if response.failure is not None:
            raise ValueError("Success response must not have failure details")
    else:
        if response.failure is None:
            raise ValueError(f"{response.outcome.value} response must have failure details")

    _finalized_responses.add(id(response))

    return response


def is_finalized(response: ApiResponse[Any]) -> bool:
    """Check if a response has passed through the boundary."""
    return id(response) in _finalized_responses


def create_unknown_failure(exception: Exception) -> ApiResponse[Any]:
    """
    Create a finalized unknown failure response from an exception.

    The message is fixed; only the exception type is reported as detail.
    """
    response: ApiResponse[Any] = ApiResponse(
        outcome=OutcomeType.UNKNOWN_FAILURE,
        failure=FailureDetail(
            kind=FailureKind.UNKNOWN,
            message=STANDARD_MESSAGES[OutcomeType.UNKNOWN_FAILURE],
            detail=type(exception).__name__,
            suggestion="If this persists, please report the issue.",
        ),
    )
    return finalize_response(response)


# =============================================================================
# CARD ERRORS
# =============================================================================


class InsufficientPoolError(KnownError):
    """
    Raised when the pool cannot fill a card.

    A card needs 24 distinct songs (the 25th cell is the free cell).
    No partial card is ever produced.
    """

    def __init__(self, required: int, available: int):
        self.required = required
        self.available = available
        super().__init__(
            kind=FailureKind.INSUFFICIENT_POOL,
            message=(
                f"Unable to build a bingo card. Need {required} different songs, "
                f"only {available} available."
            ),
            detail=f"pool size {available} < {required}",
            suggestion="Add more songs to the catalog and try again.",
            status_code=503,
        )


class CardEditError(RefusalError):
    """Base class for refused card mutations."""


class FixedCellViolation(CardEditError):
    """The free cell was the source or target of an edit."""

    def __init__(self, position: int):
        self.position = position
        super().__init__(
            kind=FailureKind.FIXED_CELL,
            message="The FREE cell cannot be moved or replaced.",
            detail=f"position {position} is fixed",
        )


class DuplicateItemError(CardEditError):
    """The replacement song is already on the card."""

    def __init__(self, item_id: str, existing_position: int):
        self.item_id = item_id
        self.existing_position = existing_position
        super().__init__(
            kind=FailureKind.DUPLICATE_ITEM,
            message="That song is already on the card.",
            detail=f"item {item_id} already at position {existing_position}",
            suggestion="Pick a song that is not on the card yet.",
        )


class NotEditableError(CardEditError):
    """An edit was attempted while the card is not in editing mode."""

    def __init__(self, reason: str = "card is not in editing mode"):
        super().__init__(
            kind=FailureKind.NOT_EDITABLE,
            message="Turn on editing to change the card.",
            detail=reason,
        )


class InvalidPositionError(CardEditError):
    """An edit referenced a position outside the grid, or the same cell twice."""

    def __init__(self, detail: str):
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message="That cell does not exist on the card.",
            detail=detail,
        )
