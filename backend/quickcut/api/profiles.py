"""Profile API endpoints.

Sign-in is handled by the identity provider; these endpoints only manage the
profile row that belongs to the signed-in user.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from quickcut.database import get_db
from quickcut.models import Profile
from quickcut.schemas import ProfileCreate, ProfileResponse, ProfileUpdate
from quickcut.utils.db import get_by_id, parse_uuid
from quickcut.utils.exceptions import handle_database_error
from quickcut.utils.logger import logger

router = APIRouter(prefix="/api/profiles", tags=["profiles"])


@router.post("", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED)
async def create_profile(
    profile: ProfileCreate,
    db: Session = Depends(get_db),
) -> ProfileResponse:
    """Create the profile for a newly signed-up user."""
    profile_id = parse_uuid(profile.id, "profile ID")
    if db.query(Profile).filter(Profile.id == profile_id).first():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Profile already exists")

    new_profile = Profile(id=profile_id, email=profile.email, full_name=profile.full_name)
    try:
        db.add(new_profile)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create profile {profile.id}: {e}", exc_info=True)
        raise handle_database_error(e, "create_profile")

    db.refresh(new_profile)
    return ProfileResponse.from_orm(new_profile)


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    user_id: str = Query(..., description="User ID"),
    db: Session = Depends(get_db),
) -> ProfileResponse:
    profile = get_by_id(db, Profile, parse_uuid(user_id, "user ID"))
    return ProfileResponse.from_orm(profile)


@router.put("/me", response_model=ProfileResponse)
async def update_my_profile(
    update: ProfileUpdate,
    user_id: str = Query(..., description="User ID"),
    db: Session = Depends(get_db),
) -> ProfileResponse:
    """Update the signed-in user's display name or email."""
    profile = get_by_id(db, Profile, parse_uuid(user_id, "user ID"))

    changes = update.model_dump(exclude_unset=True)
    for field_name, value in changes.items():
        if field_name == "email" and not value:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email cannot be empty")
        setattr(profile, field_name, value)

    try:
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update profile {user_id}: {e}", exc_info=True)
        raise handle_database_error(e, "update_profile")

    db.refresh(profile)
    return ProfileResponse.from_orm(profile)
