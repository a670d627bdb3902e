"""Project creation, approval and feedback.

Local persistence is the primary effect of every operation here. Calls to the
Monday.com board are best-effort: a failure is logged and the local write
still happens, so a project or feedback row may exist without its board
counterpart.
"""
import uuid
from typing import List, Optional

from sqlalchemy.orm import Session

from quickcut.constants import DEFAULT_PRIORITY, ProjectStatus, UNKNOWN_USER_NAME
from quickcut.models import Feedback, Profile, Project
from quickcut.schemas import CreateProjectRequest, ProjectSubmitRequest
from quickcut.services.monday import MondayClient, best_effort
from quickcut.utils.logger import logger


def create_project(db: Session, request: CreateProjectRequest) -> Project:
    """
    Insert a project with the initial status.

    Not idempotent: each call inserts a new row.

    Raises:
        ValueError: If user_id is not a UUID
        SQLAlchemyError: If the insert fails
    """
    project = Project(
        user_id=uuid.UUID(request.user_id),
        name=request.name,
        status=ProjectStatus.NOT_STARTED,
        priority=request.priority or DEFAULT_PRIORITY,
        monday_item_id=request.monday_item_id,
        due_date=request.due_date,
        file_url=request.file_url,
        file_name=request.file_name,
    )

    try:
        db.add(project)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(project)
    logger.info(f"Created project {project.id} (monday_item_id={project.monday_item_id})")
    return project


def board_item_name(db: Session, user_id: uuid.UUID, project_name: str) -> str:
    """Item name shown on the board: "<first name> - <project name>"."""
    profile = db.query(Profile).filter(Profile.id == user_id).first()
    first_name = None
    if profile and profile.full_name and profile.full_name.strip():
        first_name = profile.full_name.split()[0]
    return f"{first_name or UNKNOWN_USER_NAME} - {project_name}"


async def submit_project(
    db: Session,
    monday: Optional[MondayClient],
    user_id: uuid.UUID,
    request: ProjectSubmitRequest,
) -> Project:
    """Create the board item (best-effort), then the local project."""
    monday_item_id = None
    if monday is not None:
        monday_item_id = await best_effort(
            monday.create_item(
                name=board_item_name(db, user_id, request.name),
                status=ProjectStatus.NOT_STARTED,
                priority=request.priority,
                due_date=request.due_date,
                file_url=request.file_url,
                file_name=request.file_name,
            ),
            "create item",
        )

    logger.info(f"Creating project with Monday Item ID: {monday_item_id}")
    return create_project(
        db,
        CreateProjectRequest(
            user_id=str(user_id),
            name=request.name,
            monday_item_id=monday_item_id,
            priority=request.priority,
            due_date=request.due_date,
            file_url=request.file_url,
            file_name=request.file_name,
        ),
    )


def list_projects(db: Session, user_id: uuid.UUID) -> List[Project]:
    """All projects owned by a user, newest first."""
    return (
        db.query(Project)
        .filter(Project.user_id == user_id)
        .order_by(Project.created_at.desc())
        .all()
    )


async def approve_project(
    db: Session,
    monday: Optional[MondayClient],
    project: Project,
) -> Project:
    """Mark a project completed locally and mirror the status to the board."""
    try:
        project.status = ProjectStatus.COMPLETED
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(project)

    if monday is not None and project.monday_item_id:
        await best_effort(
            monday.set_status(project.monday_item_id, ProjectStatus.COMPLETED),
            "status update",
        )

    return project


def list_feedback(db: Session, project: Project) -> List[Feedback]:
    return (
        db.query(Feedback)
        .filter(Feedback.project_id == project.id)
        .order_by(Feedback.created_at.asc())
        .all()
    )


async def submit_feedback(
    db: Session,
    monday: Optional[MondayClient],
    project: Project,
    user_id: uuid.UUID,
    message: str,
) -> Feedback:
    """Post the message to the board item (best-effort), then store it."""
    monday_feedback_id = None
    if monday is not None and project.monday_item_id:
        monday_feedback_id = await best_effort(
            monday.add_update(project.monday_item_id, message.strip()),
            "add feedback",
        )

    feedback = Feedback(
        project_id=project.id,
        user_id=user_id,
        message=message,
        monday_feedback_id=monday_feedback_id,
    )
    try:
        db.add(feedback)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(feedback)
    return feedback
