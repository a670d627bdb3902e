"""Project creation endpoint called by the client after the board item exists."""
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from quickcut.database import get_db
from quickcut.schemas import CreateProjectRequest
from quickcut.services.projects import create_project
from quickcut.services.webhook import parse_payload
from quickcut.utils.logger import logger

router = APIRouter(prefix="/api", tags=["projects"])


def _describe(error: PydanticValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"Invalid field {location}: {first.get('msg')}" if location else first.get("msg", "Invalid request")


@router.api_route(
    "/create-project",
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
)
async def create_project_endpoint(
    request: Request,
    db: Session = Depends(get_db),
) -> JSONResponse:
    """Insert a project row with the initial status."""
    if request.method != "POST":
        return JSONResponse(
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
            content={"error": "Method not allowed"},
        )

    try:
        body = CreateProjectRequest.model_validate(parse_payload(await request.body()))
    except PydanticValidationError as e:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": _describe(e)})

    try:
        create_project(db, body)
    except ValueError:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid field user_id: must be a UUID"},
        )
    except Exception as e:
        logger.error(f"API error: {e}", exc_info=True)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": str(e)})

    return JSONResponse(status_code=status.HTTP_200_OK, content={"success": True})
