import logging
from datetime import timedelta
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordRequestForm
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app import crud
from app.api import deps
from app.core import security
from app.core.config import settings
from app.schemas.user import Token, UserCreate

logger = logging.getLogger(__name__)

router = APIRouter()

MIN_PASSWORD_LENGTH = 6


@router.post("/login", response_model=Token)
def login(
    db: Session = Depends(deps.get_db),
    form_data: OAuth2PasswordRequestForm = Depends(),
) -> Any:
    """
    OAuth2 compatible token login. An unknown email signs the user up
    (creating the profile document) and logs them in.
    """
    created = False
    user = crud.user.get_by_email(db, email=form_data.username)
    if user:
        if not security.verify_password(form_data.password, user.hashed_password):
            raise HTTPException(status_code=400, detail="Incorrect password. Please try again.")
        if not crud.user.is_active(user):
            raise HTTPException(status_code=400, detail="Inactive user")
    else:
        try:
            user_in = UserCreate(email=form_data.username, password=form_data.password)
        except ValidationError:
            raise HTTPException(status_code=400, detail="The email address is not valid.")
        if len(user_in.password) < MIN_PASSWORD_LENGTH:
            raise HTTPException(
                status_code=400,
                detail=f"Password should be at least {MIN_PASSWORD_LENGTH} characters.",
            )
        user = crud.user.create(db, obj_in=user_in)
        created = True
        logger.info(f"New user signed up: id={user.id}")

    access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return Token(
        access_token=security.create_access_token(user.id, expires_delta=access_token_expires),
        token_type="bearer",
        user_type="user",
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        created=created,
    )
