"""Project model for client video-editing engagements."""
from sqlalchemy import Column, String, Date, Boolean, DateTime, ForeignKey, func, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid
from quickcut.constants import ProjectStatus, DEFAULT_PRIORITY
from quickcut.database import Base


class Project(Base):
    """Client project, optionally mirrored as an item on the Monday.com board."""
    __tablename__ = "projects"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    monday_item_id = Column(String, unique=True, nullable=True, index=True)  # Board item (pulse) ID
    name = Column(String, nullable=False)
    status = Column(String, default=ProjectStatus.NOT_STARTED, server_default=ProjectStatus.NOT_STARTED)
    priority = Column(String, default=DEFAULT_PRIORITY, server_default=DEFAULT_PRIORITY)
    due_date = Column(Date, nullable=True)
    file_url = Column(String, nullable=True)
    file_name = Column(String, nullable=True)
    grant_view = Column(Boolean, default=False, server_default=text("false"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    owner = relationship("Profile", back_populates="projects")
    feedback = relationship(
        "Feedback",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Feedback.created_at",
    )
