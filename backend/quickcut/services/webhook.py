"""Reconcile Monday.com column-change webhooks with local project rows.

The board sends one notification per changed column. Each notification names
the board item (``pulseId``) and the column (``columnId``); the value payload
shape depends on the column type. This module locates the matching project,
translates the value into project attributes through a dispatch table built
from configuration, and applies them as a single partial update.
"""
import json
import unicodedata
import uuid
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from sqlalchemy.orm import Session

from quickcut.config import Settings
from quickcut.constants import DEFAULT_FILE_NAME
from quickcut.models import Project
from quickcut.utils.db import get_by_field
from quickcut.utils.exceptions import ConfigurationError, NotFoundError, ValidationError
from quickcut.utils.logger import logger

# Emoji presentation selectors, combining keycap and zero-width joiner
_EMOJI_JOINERS = frozenset("\ufe0e\ufe0f\u20e3\u200d")
# Symbols, format and private-use characters and marks count as decoration
# at the start of a label, e.g. "🔥 Urgent", "↑ High", "▶️ Low"
_LEADING_GLYPH_CATEGORIES = frozenset({"Cf", "Co", "Mn", "Me"})
# Pictographs are dropped wherever they appear in a label
_EMBEDDED_GLYPH_CATEGORIES = frozenset({"So", "Co", "Cf"})


class ColumnField(str, Enum):
    """Project attributes that can be driven from a board column."""
    NAME = "name"
    STATUS = "status"
    PRIORITY = "priority"
    FILE = "file"
    DUE_DATE = "due_date"
    GRANT_VIEW = "grant_view"
    FEEDBACK = "feedback"


class InvalidWebhookPayload(ValidationError):
    """Raised when the webhook body has no usable ``event.pulseId``."""
    pass


class ProjectNotFound(NotFoundError):
    """Raised when no project matches the board item ID."""

    def __init__(self, pulse_id: str):
        self.pulse_id = pulse_id
        super().__init__("Project", pulse_id)


@dataclass
class WebhookResult:
    """Outcome of a processed column-change event."""
    project_id: str
    updates: Dict[str, Any] = field(default_factory=dict)


def safe_parse(value: Any) -> Any:
    """Decode a JSON string, returning the input unchanged if it is not JSON."""
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8", errors="replace")
    if isinstance(value, str):
        try:
            return json.loads(value)
        except ValueError:
            return value
    return value


def parse_payload(body: Any) -> Dict[str, Any]:
    """
    Normalize a webhook body into a dict.

    The board may deliver the payload as an object or as a JSON string, and
    proxies sometimes double-encode it. Anything that does not end up as an
    object is treated as an empty payload.
    """
    payload = safe_parse(body)
    if isinstance(payload, str):
        payload = safe_parse(payload)
    return payload if isinstance(payload, dict) else {}


# --- Extractors ------------------------------------------------------------
#
# Each extractor receives the parsed column value and the raw value as sent,
# and returns the project attributes it resolved (possibly none).

def _get(value: Any, key: str) -> Any:
    return value.get(key) if isinstance(value, dict) else None


def _label_text(value: Any) -> Optional[str]:
    text = _get(_get(value, "label"), "text")
    return text if isinstance(text, str) else None


def _is_leading_glyph(text: str, index: int) -> bool:
    char = text[index]
    if char in _EMOJI_JOINERS:
        return True
    category = unicodedata.category(char)
    if category[0] in "SZ" or category in _LEADING_GLYPH_CATEGORIES:
        return True
    # "‼️" is punctuation rendered as an emoji
    return text[index + 1:index + 2] == "\ufe0f"


def _is_embedded_glyph(char: str) -> bool:
    return (
        char in _EMOJI_JOINERS
        or ord(char) > 0xFFFF
        or unicodedata.category(char) in _EMBEDDED_GLYPH_CATEGORIES
    )


def clean_label(text: str) -> str:
    """Strip decorative glyphs and surrounding whitespace from a board label."""
    start = 0
    while start < len(text) and _is_leading_glyph(text, start):
        start += 1
    return "".join(char for char in text[start:] if not _is_embedded_glyph(char)).strip()


def _extract_status(value: Any, raw: Any) -> Dict[str, Any]:
    text = _label_text(value)
    return {"status": text} if text else {}


def _extract_priority(value: Any, raw: Any) -> Dict[str, Any]:
    text = _label_text(value)
    if not text:
        return {}
    cleaned = clean_label(text)
    return {"priority": cleaned} if cleaned else {}


def _extract_file(value: Any, raw: Any) -> Dict[str, Any]:
    if not value:
        return {}
    url = _get(value, "url") or _get(value, "text") or raw
    if not isinstance(url, str):
        url = json.dumps(url)
    return {
        "file_url": url,
        "file_name": _get(value, "text") or DEFAULT_FILE_NAME,
    }


def _extract_due_date(value: Any, raw: Any) -> Dict[str, Any]:
    text = _get(value, "date")
    if not text:
        return {}
    try:
        return {"due_date": date.fromisoformat(text)}
    except (TypeError, ValueError):
        logger.warning(f"Ignoring unparseable due date from board: {text!r}")
        return {}


def _extract_grant_view(value: Any, raw: Any) -> Dict[str, Any]:
    checked = _get(value, "checked")
    return {"grant_view": checked is True or checked == "true"}


def _extract_feedback(value: Any, raw: Any) -> Dict[str, Any]:
    # Projects have no feedback column; client feedback lives in its own table.
    text = _get(value, "text")
    if text:
        logger.info(f"Feedback column changed on board, not stored on project: {text!r}")
    return {}


def _extract_name(value: Any, raw: Any) -> Dict[str, Any]:
    text = _get(value, "text")
    return {"name": text} if text else {}


EXTRACTORS: Dict[ColumnField, Callable[[Any, Any], Dict[str, Any]]] = {
    ColumnField.NAME: _extract_name,
    ColumnField.STATUS: _extract_status,
    ColumnField.PRIORITY: _extract_priority,
    ColumnField.FILE: _extract_file,
    ColumnField.DUE_DATE: _extract_due_date,
    ColumnField.GRANT_VIEW: _extract_grant_view,
    ColumnField.FEEDBACK: _extract_feedback,
}


def build_column_dispatch(config: Settings) -> Dict[str, ColumnField]:
    """
    Map configured board column IDs to the project field they drive.

    Raises:
        ConfigurationError: If a column ID is blank or shared by two fields
    """
    configured = {
        ColumnField.NAME: config.monday_name_col_id,
        ColumnField.STATUS: config.monday_status_col_id,
        ColumnField.PRIORITY: config.monday_priority_col_id,
        ColumnField.FILE: config.monday_file_col_id,
        ColumnField.DUE_DATE: config.monday_duedate_col_id,
        ColumnField.GRANT_VIEW: config.monday_grant_access_col_id,
        ColumnField.FEEDBACK: config.monday_feedback_col_id,
    }

    dispatch: Dict[str, ColumnField] = {}
    for column_field, column_id in configured.items():
        column_id = (column_id or "").strip()
        if not column_id:
            raise ConfigurationError(f"Missing Monday.com column ID for {column_field.value}")
        if column_id in dispatch:
            raise ConfigurationError(
                f"Monday.com column ID {column_id!r} is configured for both "
                f"{dispatch[column_id].value} and {column_field.value}"
            )
        dispatch[column_id] = column_field
    return dispatch


def resolve_updates(
    dispatch: Dict[str, ColumnField],
    column_id: Any,
    raw_value: Any,
) -> Dict[str, Any]:
    """
    Translate one column change into project attribute updates.

    Column IDs that are not strings or numbers can never match the dispatch
    table and are treated as unknown columns.
    """
    column_field = None
    if isinstance(column_id, (str, int)) and not isinstance(column_id, bool):
        column_field = dispatch.get(str(column_id))
    if column_field is None:
        logger.info(f"Unhandled columnId: {column_id}")
        return {}

    value = safe_parse(raw_value)
    logger.debug(f"Processing columnId {column_id} ({column_field.value}) with value: {value!r}")
    return EXTRACTORS[column_field](value, raw_value)


# --- Project lookup --------------------------------------------------------

def _by_monday_item_id(db: Session, pulse_id: str) -> Optional[Project]:
    return get_by_field(db, Project, "monday_item_id", pulse_id)


def _by_project_id(db: Session, pulse_id: str) -> Optional[Project]:
    try:
        project_id = uuid.UUID(pulse_id)
    except ValueError:
        return None
    return get_by_field(db, Project, "id", project_id)


# Tried in order; some event types carry the local project ID instead.
LOOKUP_STRATEGIES: Tuple[Tuple[str, Callable[[Session, str], Optional[Project]]], ...] = (
    ("monday_item_id", _by_monday_item_id),
    ("id", _by_project_id),
)


def find_project(db: Session, pulse_id: str) -> Project:
    """
    Locate the project a board item refers to.

    Raises:
        ProjectNotFound: If no strategy matches
    """
    for column, lookup in LOOKUP_STRATEGIES:
        project = lookup(db, pulse_id)
        if project is not None:
            logger.info(f"Found project {project.id} by {column} for pulseId {pulse_id}")
            return project
        logger.debug(f"No project with {column} = {pulse_id}")

    logger.warning(
        f"Project not found for pulseId {pulse_id}. "
        f"Checked fields: {', '.join(column for column, _ in LOOKUP_STRATEGIES)}"
    )
    raise ProjectNotFound(pulse_id)


def extract_pulse_id(payload: Dict[str, Any]) -> str:
    """
    Return the board item ID from a parsed payload.

    Raises:
        InvalidWebhookPayload: If ``event.pulseId`` is missing or empty
    """
    event = payload.get("event")
    pulse_id = event.get("pulseId") if isinstance(event, dict) else None
    if pulse_id is None or isinstance(pulse_id, bool) or not str(pulse_id).strip():
        logger.error(f"Invalid payload - no pulseId found: {json.dumps(event, default=str)}")
        raise InvalidWebhookPayload("Invalid webhook payload - missing pulseId")
    return str(pulse_id).strip()


def process_event(
    db: Session,
    payload: Dict[str, Any],
    dispatch: Dict[str, ColumnField],
) -> WebhookResult:
    """
    Apply one board column-change event to its project.

    Args:
        db: Database session
        payload: Parsed webhook body containing ``event``
        dispatch: Column ID to field mapping from ``build_column_dispatch``

    Returns:
        WebhookResult with the project ID and the attributes written. An empty
        update set means the event was valid but changed nothing.

    Raises:
        InvalidWebhookPayload: If the payload has no pulseId
        ProjectNotFound: If no project matches
        SQLAlchemyError: If the lookup or update fails
    """
    pulse_id = extract_pulse_id(payload)
    event = payload["event"]
    logger.info(f"Looking for pulseId: {pulse_id}")

    project = find_project(db, pulse_id)
    updates = resolve_updates(dispatch, event.get("columnId"), event.get("value"))
    logger.info(f"Updates to apply to project {project.id}: {updates}")

    if updates:
        try:
            db.query(Project).filter(Project.id == project.id).update(
                updates, synchronize_session=False
            )
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(f"Updated project {project.id}")
    else:
        logger.warning(f"No updates to apply for project {project.id}")

    return WebhookResult(project_id=str(project.id), updates=updates)
