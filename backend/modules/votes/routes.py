"""
Vote API endpoints.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_vote_ledger

from .interfaces import IVoteLedger
from .models import CastVoteRequest, CastVoteResponse

router = APIRouter()


@router.post("", response_model=CastVoteResponse, status_code=201)
async def cast_vote(
    request: CastVoteRequest,
    ledger: IVoteLedger = Depends(get_vote_ledger),
) -> CastVoteResponse:
    """
    Vote for an argument.

    A voter fingerprint can vote on each argument once; a repeat vote is
    rejected with 409.
    """
    return await ledger.cast_vote(request)


@router.get("/debates/{debate_id}", response_model=dict[str, int])
async def get_vote_counts(
    debate_id: str,
    ledger: IVoteLedger = Depends(get_vote_ledger),
) -> dict[str, int]:
    """Vote counts keyed by argument id."""
    return await ledger.vote_counts(debate_id)
