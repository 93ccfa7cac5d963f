"""
Votes module exceptions.
"""

from shared.exceptions import ConflictError, InvalidTransitionError


class DuplicateVoteError(ConflictError):
    """Raised when a fingerprint has already voted on an argument."""

    def __init__(self, argument_id: str, voter_fingerprint: str):
        super().__init__(
            "Already voted on this argument",
            code="DUPLICATE_VOTE",
            details={
                "argument_id": argument_id,
                "voter_fingerprint": voter_fingerprint,
            },
        )


class VotingClosedError(InvalidTransitionError):
    """Raised when voting on a completed or errored debate."""

    def __init__(self, debate_id: str, status: str):
        super().__init__(
            f"Voting is closed for debate: {debate_id}",
            code="VOTING_CLOSED",
            details={"debate_id": debate_id, "status": status},
        )
