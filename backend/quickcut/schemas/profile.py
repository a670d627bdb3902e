"""Schemas for account profiles."""
from typing import Optional
from pydantic import BaseModel


class ProfileCreate(BaseModel):
    id: str
    email: str
    full_name: Optional[str] = None


class ProfileUpdate(BaseModel):
    email: Optional[str] = None
    full_name: Optional[str] = None


class ProfileResponse(BaseModel):
    id: str
    email: str
    full_name: Optional[str]
    created_at: Optional[str]
    updated_at: Optional[str]

    @classmethod
    def from_orm(cls, obj) -> "ProfileResponse":
        return cls(
            id=str(obj.id),
            email=obj.email,
            full_name=obj.full_name,
            created_at=obj.created_at.isoformat() if obj.created_at else None,
            updated_at=obj.updated_at.isoformat() if obj.updated_at else None,
        )
