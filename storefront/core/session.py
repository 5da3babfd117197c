"""Checkout session state"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class SubmissionState(str, Enum):
    """Where the checkout is in its single submission"""
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


class ErrorKind(str, Enum):
    NETWORK = "network"
    REJECTED = "rejected"


# Allowed moves of the checkout state machine
TRANSITIONS: dict[SubmissionState, set[SubmissionState]] = {
    SubmissionState.IDLE: {SubmissionState.SUBMITTING},
    SubmissionState.SUBMITTING: {SubmissionState.SUCCESS, SubmissionState.ERROR},
    SubmissionState.ERROR: {SubmissionState.SUBMITTING, SubmissionState.IDLE},
    SubmissionState.SUCCESS: set(),
}


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class CheckoutSession:
    """Checkout state shown to the user"""
    state: SubmissionState = SubmissionState.IDLE
    order_number: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    error_message: Optional[str] = None
    attempts: int = 0
    updated_at: datetime = field(default_factory=_now)

    def can_move_to(self, new_state: SubmissionState) -> bool:
        return new_state in TRANSITIONS[self.state]

    def update_state(self, new_state: SubmissionState) -> None:
        """Update session state"""
        self.state = new_state
        self.updated_at = _now()
