# src/stackit/schemas/vote.py
"""Vote-related Pydantic schemas."""

from pydantic import BaseModel, Field


class VoteCreate(BaseModel):
    """Schema for casting a vote.

    The enum fields are plain strings; the vote ledger rejects unknown values
    with a structured failure.
    """

    target_id: int
    target_type: str = Field(..., description="'question' or 'answer'")
    vote_type: str = Field(..., description="'upvote' or 'downvote'")


class VoteResponse(BaseModel):
    """Result of a successful vote cast."""

    success: bool
    message: str
    vote_change: int
    action: str


class VoteTarget(BaseModel):
    id: int
    type: str


class BulkVoteRequest(BaseModel):
    """Targets whose vote state the caller wants to know."""

    targets: list[VoteTarget] = Field(default_factory=list, max_length=200)
