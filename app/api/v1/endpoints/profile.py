from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app import crud
from app.api import deps
from app.models.user import User
from app.schemas.profile import Profile, ProfileUpdate


router = APIRouter()


@router.get("/me", response_model=Profile)
def get_my_profile(
    *,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    return crud.profile.get_or_create(db, user=current_user)


@router.put("/me", response_model=Profile)
def update_my_profile(
    *,
    db: Session = Depends(deps.get_db),
    payload: ProfileUpdate,
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    """Update location and timezone. The timezone drives reminder due checks."""
    profile = crud.profile.get_or_create(db, user=current_user)
    return crud.profile.update(db, profile=profile, obj_in=payload)
