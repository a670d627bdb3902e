"""Account profile model, one row per identity-provider user."""
from sqlalchemy import Column, String, DateTime, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from quickcut.database import Base


class Profile(Base):
    """Display name and contact email for an authenticated user."""
    __tablename__ = "profiles"

    # Same value as auth.users.id; no local default
    id = Column(UUID(as_uuid=True), primary_key=True)
    email = Column(String, nullable=False)
    full_name = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    projects = relationship("Project", back_populates="owner", cascade="all, delete-orphan", passive_deletes=True)
