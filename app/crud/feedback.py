from app.crud.base import CRUDBase
from app.models.feedback import Feedback
from app.schemas.feedback import FeedbackCreate


class CRUDFeedback(CRUDBase[Feedback, FeedbackCreate, FeedbackCreate]):
    pass


feedback = CRUDFeedback(Feedback)
