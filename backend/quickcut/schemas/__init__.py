"""Pydantic schemas for request/response validation."""
from quickcut.schemas.project import (
    CreateProjectRequest,
    ProjectSubmitRequest,
    ProjectResponse,
    DeliverableResponse,
    UploadResponse,
)
from quickcut.schemas.feedback import FeedbackCreate, FeedbackResponse
from quickcut.schemas.profile import ProfileCreate, ProfileUpdate, ProfileResponse

__all__ = [
    "CreateProjectRequest",
    "ProjectSubmitRequest",
    "ProjectResponse",
    "DeliverableResponse",
    "UploadResponse",
    "FeedbackCreate",
    "FeedbackResponse",
    "ProfileCreate",
    "ProfileUpdate",
    "ProfileResponse",
]
