"""
Failure Envelope: Unified Response Classification.

This module defines the envelope in which every failed API call reports
its outcome. Successful calls return their own response models. Every
user-visible failure is classified and explained.

Failure types:
- Refusal: System chose not to proceed (expected, explainable)
- KnownFailure: System knows why it failed
- UnknownFailure: System does not know why it failed

All game errors are recoverable. After any of them the session is idle
and accepts new actions.
"""

from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"
    INVALID_SELECTION = "invalid_selection"

    # Resource failures
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    BAD_CREDENTIALS = "bad_credentials"

    # Game rule violations
    INSUFFICIENT_FUNDS = "insufficient_funds"
    SESSION_BUSY = "session_busy"

    # Service failures
    SERVICE_UNAVAILABLE = "service_unavailable"
    GENERATION_FAILED = "generation_failed"

    # Unknown
    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    """High-level outcome classification."""

    REFUSAL = "refusal"
    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


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


class ApiResponse(BaseModel):
    """
    Response envelope for failed API calls.

    Every failure is classified into one of three outcome types,
    ensuring no failure reaches the user unexplained.
    """

    outcome: OutcomeType = Field(
        ...,
        description="High-level classification of the result",
    )
    failure: FailureDetail = Field(
        ...,
        description="What went wrong",
    )

    @classmethod
    def refusal(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> "ApiResponse":
        """
        Create a refusal response.

        Use when the system chose not to proceed due to a game rule.
        Example: pairing two max-rarity dragons.
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
    ) -> "ApiResponse":
        """
        Create a known failure response.

        Use when the system knows exactly why the operation failed.
        Example: not enough gold, account not found.
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

    @classmethod
    def unknown_failure(
        cls,
        detail: str | None = None,
    ) -> "ApiResponse":
        """
        Create an unknown failure response.

        This is the catch-all for unexpected exceptions.
        """
        return cls(
            outcome=OutcomeType.UNKNOWN_FAILURE,
            failure=FailureDetail(
                kind=FailureKind.UNKNOWN,
                message="Something went wrong and the cause is unknown. Please retry.",
                detail=detail,
                suggestion="If this persists, please report the issue.",
            ),
        )


# Standard exception types that map to known failures


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
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

    def to_response(self) -> ApiResponse:
        """Convert to an ApiResponse."""
        return ApiResponse.known_failure(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class RefusalError(Exception):
    """
    Exception for rule-based refusals.

    Use when the system refuses to proceed and nothing changed.
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

    def to_response(self) -> ApiResponse:
        """Convert to an ApiResponse."""
        return ApiResponse.refusal(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class GenerationFailedError(KnownError):
    """
    Exception raised when the content generator fails.

    Covers transport errors, missing payloads and payloads that do not
    match the expected shape.
    """

    def __init__(self, detail: str | None = None):
        super().__init__(
            kind=FailureKind.GENERATION_FAILED,
            message="The summoning failed. The dragon did not answer the call.",
            detail=detail,
            suggestion="Try again in a moment.",
            status_code=502,
        )


class SessionBusyError(KnownError):
    """Exception raised when an action arrives while another is still running."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(
            kind=FailureKind.SESSION_BUSY,
            message="Another ritual is still in progress.",
            detail=f"Rejected action: {action}",
            suggestion="Wait for the current chest or breeding to finish.",
            status_code=409,
        )
