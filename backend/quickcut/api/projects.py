"""Projects API endpoints used by the client portal."""
import uuid
from typing import Optional
from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from sqlalchemy.orm import Session

from quickcut.database import get_db
from quickcut.models import Project
from quickcut.schemas import (
    DeliverableResponse,
    FeedbackCreate,
    FeedbackResponse,
    ProjectResponse,
    ProjectSubmitRequest,
    UploadResponse,
)
from quickcut.services import projects as project_service
from quickcut.services.file_type import detect_file_type
from quickcut.services.monday import MondayClient, create_monday_client
from quickcut.services.storage import StorageService, build_storage_path
from quickcut.utils.db import get_by_id, parse_uuid
from quickcut.utils.exceptions import (
    ConfigurationError,
    forbidden_error,
    handle_database_error,
    upstream_error,
)
from quickcut.utils.logger import logger

router = APIRouter(prefix="/api/projects", tags=["projects"])


def get_storage_service() -> StorageService:
    """Dependency returning the storage service, or 503 if it is not configured."""
    try:
        return StorageService()
    except ConfigurationError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


def get_owned_project(db: Session, project_id: str, user_id: uuid.UUID) -> Project:
    """Load a project and verify that it belongs to the user."""
    project = get_by_id(db, Project, project_id)
    if project.user_id != user_id:
        raise forbidden_error("Access denied: You don't have permission to access this project")
    return project


@router.get("", response_model=list[ProjectResponse])
async def get_projects(
    user_id: str = Query(..., description="User ID"),
    db: Session = Depends(get_db),
) -> list[ProjectResponse]:
    """Get all projects for a user, newest first."""
    owner_id = parse_uuid(user_id, "user ID")
    try:
        projects = project_service.list_projects(db, owner_id)
    except Exception as e:
        logger.error(f"Failed to get projects for user {user_id}: {e}", exc_info=True)
        raise handle_database_error(e, "get_projects")
    return [ProjectResponse.from_orm(p) for p in projects]


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def submit_project(
    project: ProjectSubmitRequest,
    user_id: str = Query(..., description="User ID"),
    db: Session = Depends(get_db),
    monday: Optional[MondayClient] = Depends(create_monday_client),
) -> ProjectResponse:
    """
    Submit a new project.

    The board item is created first; if that fails the project is still
    stored, without a monday_item_id.
    """
    owner_id = parse_uuid(user_id, "user ID")
    try:
        created = await project_service.submit_project(db, monday, owner_id, project)
    except Exception as e:
        logger.error(f"Failed to create project: {e}", exc_info=True)
        raise handle_database_error(e, "create_project")
    return ProjectResponse.from_orm(created)


@router.post("/uploads", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_project_file(
    user_id: str = Query(..., description="User ID"),
    file: UploadFile = File(...),
    storage: StorageService = Depends(get_storage_service),
) -> UploadResponse:
    """Upload a source file to storage and return its public URL."""
    parse_uuid(user_id, "user ID")
    file_name = file.filename or "upload"
    content = await file.read()

    result = await storage.upload_bytes(
        content,
        build_storage_path(user_id, file_name),
        content_type=file.content_type,
    )
    if not result.success:
        raise upstream_error(result.error or "Upload failed")

    return UploadResponse(file_url=result.url, file_name=file_name)


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: str,
    user_id: str = Query(..., description="User ID"),
    db: Session = Depends(get_db),
) -> ProjectResponse:
    """Get a specific project owned by the user."""
    project = get_owned_project(db, project_id, parse_uuid(user_id, "user ID"))
    return ProjectResponse.from_orm(project)


@router.post("/{project_id}/approve", response_model=ProjectResponse)
async def approve_project(
    project_id: str,
    user_id: str = Query(..., description="User ID"),
    db: Session = Depends(get_db),
    monday: Optional[MondayClient] = Depends(create_monday_client),
) -> ProjectResponse:
    """Approve the delivered work, marking the project completed."""
    project = get_owned_project(db, project_id, parse_uuid(user_id, "user ID"))
    try:
        project = await project_service.approve_project(db, monday, project)
    except Exception as e:
        logger.error(f"Failed to approve project {project_id}: {e}", exc_info=True)
        raise handle_database_error(e, "approve_project")
    return ProjectResponse.from_orm(project)


@router.get("/{project_id}/deliverable", response_model=DeliverableResponse)
async def get_deliverable(
    project_id: str,
    user_id: str = Query(..., description="User ID"),
    db: Session = Depends(get_db),
) -> DeliverableResponse:
    """Get the delivered file, if the owner has been granted access to it."""
    project = get_owned_project(db, project_id, parse_uuid(user_id, "user ID"))
    if not project.grant_view:
        raise forbidden_error("Deliverable is not available for viewing yet")

    file_type = None
    if project.file_url:
        file_type = await detect_file_type(project.file_url, project.file_name)

    return DeliverableResponse(
        project_id=str(project.id),
        file_url=project.file_url,
        file_name=project.file_name,
        file_type=file_type,
    )


@router.get("/{project_id}/feedback", response_model=list[FeedbackResponse])
async def get_feedback(
    project_id: str,
    user_id: str = Query(..., description="User ID"),
    db: Session = Depends(get_db),
) -> list[FeedbackResponse]:
    """List feedback on a project, oldest first."""
    project = get_owned_project(db, project_id, parse_uuid(user_id, "user ID"))
    return [FeedbackResponse.from_orm(f) for f in project_service.list_feedback(db, project)]


@router.post("/{project_id}/feedback", response_model=FeedbackResponse, status_code=status.HTTP_201_CREATED)
async def create_feedback(
    project_id: str,
    feedback: FeedbackCreate,
    user_id: str = Query(..., description="User ID"),
    db: Session = Depends(get_db),
    monday: Optional[MondayClient] = Depends(create_monday_client),
) -> FeedbackResponse:
    """Leave feedback on a project; it is also posted to the board item."""
    owner_id = parse_uuid(user_id, "user ID")
    project = get_owned_project(db, project_id, owner_id)
    try:
        created = await project_service.submit_feedback(db, monday, project, owner_id, feedback.message)
    except Exception as e:
        logger.error(f"Failed to submit feedback on project {project_id}: {e}", exc_info=True)
        raise handle_database_error(e, "create_feedback")
    return FeedbackResponse.from_orm(created)
