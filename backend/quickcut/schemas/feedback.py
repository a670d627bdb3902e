"""Schemas for project feedback."""
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class FeedbackCreate(BaseModel):
    message: str = Field(..., min_length=1)

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Feedback message cannot be blank")
        return value


class FeedbackResponse(BaseModel):
    id: str
    project_id: str
    user_id: str
    message: str
    monday_feedback_id: Optional[str]
    created_at: Optional[str]

    @classmethod
    def from_orm(cls, obj) -> "FeedbackResponse":
        return cls(
            id=str(obj.id),
            project_id=str(obj.project_id),
            user_id=str(obj.user_id),
            message=obj.message,
            monday_feedback_id=obj.monday_feedback_id,
            created_at=obj.created_at.isoformat() if obj.created_at else None,
        )
