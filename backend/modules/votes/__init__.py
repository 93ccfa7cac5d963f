"""
Votes module.

Records spectator votes on arguments, at most one per argument and voter
fingerprint.

Public API:
- IVoteLedger: Interface for voting
- Vote, CastVoteRequest, CastVoteResponse: Vote models
- DuplicateVoteError, VotingClosedError: Rejected votes
"""

from .interfaces import IVoteLedger
from .models import Vote, CastVoteRequest, CastVoteResponse
from .exceptions import DuplicateVoteError, VotingClosedError

__all__ = [
    "IVoteLedger",
    "Vote",
    "CastVoteRequest",
    "CastVoteResponse",
    "DuplicateVoteError",
    "VotingClosedError",
]
