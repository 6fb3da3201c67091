from sqlalchemy.orm import Session
from app.models.user import User
from app.models.user_profile import UserProfile
from app.schemas.profile import ProfileUpdate


class CRUDProfile:
    def get_or_create(self, db: Session, *, user: User) -> UserProfile:
        profile = db.query(UserProfile).filter(UserProfile.user_id == user.id).first()
        if profile:
            return profile
        profile = UserProfile(user_id=user.id, email=user.email)
        db.add(profile)
        db.commit()
        db.refresh(profile)
        return profile

    def update(self, db: Session, *, profile: UserProfile, obj_in: ProfileUpdate) -> UserProfile:
        for field, value in obj_in.model_dump(exclude_unset=True).items():
            setattr(profile, field, value)
        db.add(profile)
        db.commit()
        db.refresh(profile)
        return profile


profile = CRUDProfile()
