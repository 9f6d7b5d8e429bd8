"""Answer-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AnswerCreate(BaseModel):
    """Schema for posting an answer."""

    question_id: int
    content: str = Field(..., min_length=1, max_length=10000)


class AnswerUpdate(BaseModel):
    content: str = Field(..., min_length=1, max_length=10000)


class AnswerResponse(BaseModel):
    """Schema for answer information returned by the API."""

    id: int
    question_id: int
    user_id: int
    content: str
    votes: int
    is_accepted: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None
    user_vote: str | None = Field(None, description="Caller's vote on this answer")

    model_config = ConfigDict(from_attributes=True)
