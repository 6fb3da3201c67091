from fastapi import APIRouter

from app.api.v1.endpoints import auth
from app.api.v1.endpoints import profile
from app.api.v1.endpoints import dosage
from app.api.v1.endpoints import refill
from app.api.v1.endpoints import feedback
from app.reminders.api import router as reminders_router

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(profile.router, prefix="/profile", tags=["profile"])
api_router.include_router(dosage.router, prefix="/dosage", tags=["dosage"])
api_router.include_router(reminders_router, prefix="/reminders", tags=["reminders"])
api_router.include_router(refill.router, prefix="/refill", tags=["refill"])
api_router.include_router(feedback.router, prefix="/feedback", tags=["feedback"])
