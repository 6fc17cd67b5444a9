# =============================================================================
# core/models/submission.py - Listing Submission State Machine
# =============================================================================
# One submission attempt moves through these states:
#
#   IDLE --unauthenticated--> BLOCKED
#   IDLE --has uploads------> UPLOADING --done--> INSERTING --ok--> SUCCEEDED
#   IDLE --no uploads-------> INSERTING
#   UPLOADING / INSERTING --error--> FAILED
#
# BLOCKED, SUCCEEDED and FAILED are terminal. A new attempt starts from IDLE.
# =============================================================================

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field


class SubmissionState(str, Enum):
    """State of a single listing submission attempt."""
    IDLE = "idle"
    BLOCKED = "blocked"
    UPLOADING = "uploading"
    INSERTING = "inserting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATES

    @property
    def is_in_flight(self) -> bool:
        return self in (SubmissionState.UPLOADING, SubmissionState.INSERTING)


class SubmissionEvent(str, Enum):
    """Things that happen to a submission attempt."""
    SUBMIT_UNAUTHENTICATED = "submit_unauthenticated"
    SUBMIT_WITH_UPLOADS = "submit_with_uploads"
    SUBMIT_WITHOUT_UPLOADS = "submit_without_uploads"
    UPLOADS_COMPLETE = "uploads_complete"
    INSERT_ACCEPTED = "insert_accepted"
    FAILURE = "failure"


TERMINAL_STATES = frozenset({
    SubmissionState.BLOCKED,
    SubmissionState.SUCCEEDED,
    SubmissionState.FAILED,
})

_TRANSITIONS: dict[tuple[SubmissionState, SubmissionEvent], SubmissionState] = {
    (SubmissionState.IDLE, SubmissionEvent.SUBMIT_UNAUTHENTICATED): SubmissionState.BLOCKED,
    (SubmissionState.IDLE, SubmissionEvent.SUBMIT_WITH_UPLOADS): SubmissionState.UPLOADING,
    (SubmissionState.IDLE, SubmissionEvent.SUBMIT_WITHOUT_UPLOADS): SubmissionState.INSERTING,
    (SubmissionState.UPLOADING, SubmissionEvent.UPLOADS_COMPLETE): SubmissionState.INSERTING,
    (SubmissionState.UPLOADING, SubmissionEvent.FAILURE): SubmissionState.FAILED,
    (SubmissionState.INSERTING, SubmissionEvent.INSERT_ACCEPTED): SubmissionState.SUCCEEDED,
    (SubmissionState.INSERTING, SubmissionEvent.FAILURE): SubmissionState.FAILED,
}


class InvalidTransitionError(Exception):
    """Raised when an event is not allowed in the current state."""

    def __init__(self, state: SubmissionState, event: SubmissionEvent):
        super().__init__(f"Cannot apply {event.value} while {state.value}")
        self.state = state
        self.event = event


class SubmissionClosedError(Exception):
    """Raised when a finished or running attempt is submitted again."""

    def __init__(self, state: SubmissionState):
        super().__init__(
            f"Submission attempt is {state.value}; start a new attempt to submit again"
        )
        self.state = state


def transition(state: SubmissionState, event: SubmissionEvent) -> SubmissionState:
    """Return the next state, or raise InvalidTransitionError."""
    try:
        return _TRANSITIONS[(state, event)]
    except KeyError:
        raise InvalidTransitionError(state, event) from None


# =============================================================================
# Outcome Models
# =============================================================================

class Notification(BaseModel):
    """Toast shown to the user when an attempt ends."""
    title: str
    description: str
    variant: Literal["default", "destructive"] = "default"


class SubmissionResult(BaseModel):
    """
    What the client should do after a submission attempt.

    Example (failure):
        {
            "state": "failed",
            "notification": {"title": "Error", "description": "The resource already exists", "variant": "destructive"},
            "redirect_to": null,
            "draft": {"name": "Joe's Cafe", ...}
        }
    """

    state: SubmissionState = Field(..., description="Terminal state of the attempt")
    notification: Notification
    redirect_to: str | None = Field(
        default=None,
        description="Screen to navigate to, or null to stay on the form"
    )
    draft: dict[str, Any] | None = Field(
        default=None,
        description="Form values to restore after a failure"
    )
    business: dict[str, Any] | None = Field(
        default=None,
        description="Row returned by the backend after a successful insert"
    )
