"""Question-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class QuestionCreate(BaseModel):
    """Schema for asking a question."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=5000)


class QuestionUpdate(BaseModel):
    """Schema for editing a question; omitted fields are left unchanged."""

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, min_length=1, max_length=5000)


class AcceptAnswerRequest(BaseModel):
    answer_id: int


class QuestionResponse(BaseModel):
    """Schema for question information returned by the API."""

    id: int
    title: str
    description: str
    user_id: int
    accepted_answer_id: int | None
    votes: int
    view_count: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
    user_vote: str | None = Field(None, description="Caller's vote on this question")

    model_config = ConfigDict(from_attributes=True)
