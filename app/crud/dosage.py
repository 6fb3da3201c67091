from app.crud.base import CRUDBase
from app.models.dosage import Dosage
from app.schemas.dosage import DosageCreate, DosageUpdate


class CRUDDosage(CRUDBase[Dosage, DosageCreate, DosageUpdate]):
    pass


dosage = CRUDDosage(Dosage)
