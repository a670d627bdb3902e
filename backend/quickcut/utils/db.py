"""Database query utility functions."""
from typing import Optional, TypeVar, Type, Any
from uuid import UUID
from sqlalchemy.orm import Session
from fastapi import HTTPException, status

T = TypeVar("T")


def get_by_id(
    db: Session,
    model: Type[T],
    id_value: str | UUID,
    error_message: Optional[str] = None,
) -> T:
    """
    Get a model instance by ID.

    Args:
        db: Database session
        model: SQLAlchemy model class
        id_value: ID value (UUID string or UUID object)
        error_message: Custom error message if not found

    Returns:
        Model instance

    Raises:
        HTTPException: If the ID is malformed (400) or no row matches (404)
    """
    try:
        if isinstance(id_value, str):
            id_value = UUID(id_value)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {model.__name__} ID format",
        )

    instance = db.query(model).filter(model.id == id_value).first()
    if not instance:
        message = error_message or f"{model.__name__} not found"
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=message)

    return instance


def get_by_field(
    db: Session,
    model: Type[T],
    field_name: str,
    field_value: Any,
) -> Optional[T]:
    """
    Get a model instance by a specific field.

    Args:
        db: Database session
        model: SQLAlchemy model class
        field_name: Name of the field to filter by
        field_value: Value to filter by

    Returns:
        Model instance or None
    """
    field = getattr(model, field_name)
    return db.query(model).filter(field == field_value).first()


def parse_uuid(value: str, label: str = "ID") -> UUID:
    """Parse a UUID string, raising a 400 error if it is malformed."""
    try:
        return UUID(value)
    except (TypeError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {label} format",
        )
