from .user import user
from .profile import profile
from .dosage import dosage
from .refill import refill_item
from .feedback import feedback

__all__ = ["user", "profile", "dosage", "refill_item", "feedback"]
