from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from app import crud
from app.api import deps
from app.models.user import User
from app.schemas.refill import (
    RefillItem, RefillItemCreate, RefillItemUpdate,
    RefillSuggestion, RefillSuggestionRequest,
)
from app.services.refill_suggestion import (
    RefillSuggestionError, RefillSuggestionService, get_refill_suggestion_service,
)

router = APIRouter()


@router.get("/", response_model=List[RefillItem])
def list_refill_items(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user),
    skip: int = 0,
    limit: int = 100,
) -> Any:
    """Inventory ordered by name; each item carries its low-stock flag."""
    return crud.refill_item.list_for_user(db, user_id=current_user.id, skip=skip, limit=limit)


@router.post("/", response_model=RefillItem, status_code=201)
def create_refill_item(
    *,
    db: Session = Depends(deps.get_db),
    item_in: RefillItemCreate,
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    return crud.refill_item.create_for_user(db, obj_in=item_in, user_id=current_user.id)


@router.put("/{item_id}", response_model=RefillItem)
def update_refill_item(
    *,
    db: Session = Depends(deps.get_db),
    item_id: str,
    item_in: RefillItemUpdate,
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    item = crud.refill_item.get_for_user(db, user_id=current_user.id, id=item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Refill item not found")
    return crud.refill_item.update(db, db_obj=item, obj_in=item_in)


@router.delete("/{item_id}", status_code=204)
def delete_refill_item(
    *,
    db: Session = Depends(deps.get_db),
    item_id: str,
    current_user: User = Depends(deps.get_current_active_user),
):
    item = crud.refill_item.get_for_user(db, user_id=current_user.id, id=item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Refill item not found")
    crud.refill_item.remove(db, db_obj=item)
    return Response(status_code=204)


@router.post("/suggestion", response_model=RefillSuggestion)
async def suggest_retailer(
    payload: RefillSuggestionRequest,
    current_user: User = Depends(deps.get_current_active_user),
    service: RefillSuggestionService = Depends(get_refill_suggestion_service),
) -> Any:
    try:
        return await service.suggest(payload)
    except RefillSuggestionError:
        raise HTTPException(status_code=502, detail="Could not get a suggestion at this time.")
