from typing import Any, Dict, Generic, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    CRUD object with default methods for per-user document collections.

    Every query is scoped by user_id; a document owned by someone else is
    treated as missing.
    """

    def __init__(self, model: Type[ModelType]):
        self.model = model

    def get_for_user(self, db: Session, *, user_id: int, id: Any) -> Optional[ModelType]:
        return (
            db.query(self.model)
            .filter(self.model.id == id, self.model.user_id == user_id)
            .first()
        )

    def list_for_user(self, db: Session, *, user_id: int, skip: int = 0, limit: int = 100) -> List[ModelType]:
        return (
            db.query(self.model)
            .filter(self.model.user_id == user_id)
            .order_by(*self.default_order())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def default_order(self) -> tuple:
        return (self.model.created_at.desc(),)

    def create_for_user(self, db: Session, *, obj_in: CreateSchemaType, user_id: int) -> ModelType:
        data = obj_in.model_dump()
        data["user_id"] = user_id
        db_obj = self.model(**data)  # type: ignore
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update(
        self, db: Session, *, db_obj: ModelType, obj_in: Union[UpdateSchemaType, Dict[str, Any]]
    ) -> ModelType:
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(db_obj, field, value)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def remove(self, db: Session, *, db_obj: ModelType) -> None:
        db.delete(db_obj)
        db.commit()
