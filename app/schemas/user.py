from typing import Optional
from pydantic import BaseModel, EmailStr


class UserBase(BaseModel):
    email: EmailStr


class UserCreate(UserBase):
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str
    user_type: str = "user"
    expires_in: int
    created: bool = False


class TokenPayload(BaseModel):
    sub: Optional[int] = None
