from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from app import crud
from app.api import deps
from app.models.user import User
from app.schemas.dosage import Dosage, DosageCreate, DosageUpdate

router = APIRouter()


@router.get("/", response_model=List[Dosage])
def list_dosages(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user),
    skip: int = 0,
    limit: int = 100,
) -> Any:
    """Current user's medication schedule, newest first."""
    return crud.dosage.list_for_user(db, user_id=current_user.id, skip=skip, limit=limit)


@router.post("/", response_model=Dosage, status_code=201)
def create_dosage(
    *,
    db: Session = Depends(deps.get_db),
    dosage_in: DosageCreate,
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    return crud.dosage.create_for_user(db, obj_in=dosage_in, user_id=current_user.id)


@router.put("/{dosage_id}", response_model=Dosage)
def update_dosage(
    *,
    db: Session = Depends(deps.get_db),
    dosage_id: str,
    dosage_in: DosageUpdate,
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    dosage = crud.dosage.get_for_user(db, user_id=current_user.id, id=dosage_id)
    if not dosage:
        raise HTTPException(status_code=404, detail="Dosage not found")
    return crud.dosage.update(db, db_obj=dosage, obj_in=dosage_in)


@router.delete("/{dosage_id}", status_code=204)
def delete_dosage(
    *,
    db: Session = Depends(deps.get_db),
    dosage_id: str,
    current_user: User = Depends(deps.get_current_active_user),
):
    dosage = crud.dosage.get_for_user(db, user_id=current_user.id, id=dosage_id)
    if not dosage:
        raise HTTPException(status_code=404, detail="Dosage not found")
    crud.dosage.remove(db, db_obj=dosage)
    return Response(status_code=204)
