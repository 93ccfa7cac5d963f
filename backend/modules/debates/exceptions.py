"""
Debates module exceptions.
"""

from shared.exceptions import (
    NotFoundError,
    InvalidTransitionError,
)


class DebateNotFoundError(NotFoundError):
    """Raised when a debate is not found."""

    def __init__(self, debate_id: str):
        super().__init__(
            f"Debate not found: {debate_id}",
            code="DEBATE_NOT_FOUND",
            details={"debate_id": debate_id},
        )


class DebateNotActiveError(InvalidTransitionError):
    """Raised when pausing a debate that is not active."""

    def __init__(self, debate_id: str, status: str):
        super().__init__(
            "Can only pause active debates",
            code="DEBATE_NOT_ACTIVE",
            details={"debate_id": debate_id, "status": status},
        )


class DebateNotPausedError(InvalidTransitionError):
    """Raised when resuming a debate that is not paused."""

    def __init__(self, debate_id: str, status: str):
        super().__init__(
            "Can only resume paused debates",
            code="DEBATE_NOT_PAUSED",
            details={"debate_id": debate_id, "status": status},
        )


class DebateAlreadyFinishedError(InvalidTransitionError):
    """Raised when skipping a debate that is completed or errored."""

    def __init__(self, debate_id: str, status: str):
        super().__init__(
            f"Debate already finished: {debate_id}",
            code="DEBATE_ALREADY_FINISHED",
            details={"debate_id": debate_id, "status": status},
        )


class ArgumentNotFoundError(NotFoundError):
    """Raised when an argument is not part of the given debate."""

    def __init__(self, argument_id: str, debate_id: str):
        super().__init__(
            f"Argument not found: {argument_id}",
            code="ARGUMENT_NOT_FOUND",
            details={"argument_id": argument_id, "debate_id": debate_id},
        )
