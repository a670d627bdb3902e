"""Monday.com webhook endpoint."""
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from quickcut.config import settings
from quickcut.database import get_db
from quickcut.services.webhook import (
    ColumnField,
    InvalidWebhookPayload,
    ProjectNotFound,
    build_column_dispatch,
    parse_payload,
    process_event,
)
from quickcut.utils.logger import logger

router = APIRouter(prefix="/api/projects/monday", tags=["webhooks"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

# Built once at import; a missing column ID stops the app from starting.
column_dispatch = build_column_dispatch(settings)


def get_column_dispatch() -> Dict[str, ColumnField]:
    """Dependency returning the column ID dispatch table."""
    return column_dispatch


def _respond(status_code: int, content: Dict[str, Any]) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=content, headers=CORS_HEADERS)


@router.api_route("/webhook", methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"])
async def monday_webhook(
    request: Request,
    db: Session = Depends(get_db),
    dispatch: Dict[str, ColumnField] = Depends(get_column_dispatch),
) -> JSONResponse:
    """
    Receive a column-change notification from the board.

    The verification challenge is echoed before the method is checked, since
    the board sends it when the webhook is registered.
    """
    if request.method == "OPTIONS":
        return _respond(status.HTTP_200_OK, {"ok": True})

    payload = parse_payload(await request.body())

    if payload.get("challenge"):
        return _respond(status.HTTP_200_OK, {"challenge": payload["challenge"]})

    if request.method != "POST":
        return _respond(status.HTTP_405_METHOD_NOT_ALLOWED, {"error": "Method not allowed"})

    try:
        result = process_event(db, payload, dispatch)
    except InvalidWebhookPayload as e:
        return _respond(status.HTTP_400_BAD_REQUEST, {"error": str(e)})
    except ProjectNotFound as e:
        return _respond(
            status.HTTP_404_NOT_FOUND,
            {
                "error": "Project not found",
                "pulseId": e.pulse_id,
                "message": "Check if monday_item_id is correctly stored for this project",
            },
        )
    except Exception as e:
        logger.error(f"Webhook error: {e}", exc_info=True)
        return _respond(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            {"error": str(e) or "Internal Server Error"},
        )

    return _respond(
        status.HTTP_200_OK,
        {
            "success": True,
            "message": "Webhook processed successfully",
            "projectId": result.project_id,
            "updates": jsonable_encoder(result.updates),
        },
    )
