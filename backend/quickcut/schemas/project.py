"""Schemas for projects."""
from datetime import date
from typing import Optional
from pydantic import BaseModel, Field

from quickcut.constants import DEFAULT_PRIORITY


class CreateProjectRequest(BaseModel):
    """Request schema for /api/create-project (column names as stored)."""
    user_id: str = Field(..., description="Owning profile ID")
    name: str = Field(..., min_length=1)
    monday_item_id: Optional[str] = Field(None, description="Board item ID, if already created")
    priority: Optional[str] = None
    due_date: Optional[date] = None
    file_url: Optional[str] = None
    file_name: Optional[str] = None


class ProjectSubmitRequest(BaseModel):
    """Request schema for a client submitting a new project."""
    name: str = Field(..., min_length=1)
    priority: str = DEFAULT_PRIORITY
    due_date: Optional[date] = None
    file_url: Optional[str] = None
    file_name: Optional[str] = None


class ProjectResponse(BaseModel):
    id: str
    user_id: str
    monday_item_id: Optional[str]
    name: str
    status: str
    priority: str
    due_date: Optional[date]
    file_url: Optional[str]
    file_name: Optional[str]
    grant_view: bool
    created_at: Optional[str]
    updated_at: Optional[str]

    class Config:
        from_attributes = True

    @classmethod
    def from_orm(cls, obj) -> "ProjectResponse":
        """Convert SQLAlchemy model to response model."""
        return cls(
            id=str(obj.id),
            user_id=str(obj.user_id),
            monday_item_id=obj.monday_item_id,
            name=obj.name,
            status=obj.status,
            priority=obj.priority,
            due_date=obj.due_date,
            file_url=obj.file_url,
            file_name=obj.file_name,
            grant_view=bool(obj.grant_view),
            created_at=obj.created_at.isoformat() if obj.created_at else None,
            updated_at=obj.updated_at.isoformat() if obj.updated_at else None,
        )


class DeliverableResponse(BaseModel):
    """A completed deliverable the owner has been granted access to."""
    project_id: str
    file_url: Optional[str]
    file_name: Optional[str]
    file_type: Optional[str]


class UploadResponse(BaseModel):
    file_url: str
    file_name: str
