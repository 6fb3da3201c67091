from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api import deps
from app.crud.feedback import feedback as feedback_crud
from app.models.user import User
from app.schemas.feedback import Feedback, FeedbackCreate

router = APIRouter()


@router.post("/", response_model=Feedback, status_code=201)
def create_feedback(
    *,
    db: Session = Depends(deps.get_db),
    feedback_in: FeedbackCreate,
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    return feedback_crud.create_for_user(db, obj_in=feedback_in, user_id=current_user.id)
