from app.crud.base import CRUDBase
from app.models.refill import RefillItem
from app.schemas.refill import RefillItemCreate, RefillItemUpdate


class CRUDRefillItem(CRUDBase[RefillItem, RefillItemCreate, RefillItemUpdate]):
    def default_order(self) -> tuple:
        return (self.model.name.asc(),)


refill_item = CRUDRefillItem(RefillItem)
