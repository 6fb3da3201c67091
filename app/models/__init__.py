from .user import User
from .user_profile import UserProfile
from .dosage import Dosage
from .refill import RefillItem
from .feedback import Feedback
from app.reminders.models import Reminder
