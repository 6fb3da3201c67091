from .user import UserCreate, Token, TokenPayload
from .profile import Profile, ProfileUpdate
from .dosage import Dosage, DosageCreate, DosageUpdate
from .refill import RefillItem, RefillItemCreate, RefillItemUpdate, RefillSuggestion, RefillSuggestionRequest
from .feedback import Feedback, FeedbackCreate
