from pydantic import EmailStr, Field
from typing import Literal
from datetime import datetime
from surveydesk.schemas.base import CamelModel


Role = Literal["user", "admin"]


class UserCreate(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    name: str = Field(..., min_length=1)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserPublic(CamelModel):
    id: str
    email: str
    name: str
    role: Role = "user"


class UserInDB(UserPublic):
    password_hash: str
    created_at: datetime


class Principal(CamelModel):
    """Identity carried by a bearer token."""
    id: str
    email: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class AuthResponse(CamelModel):
    token: str
    user: UserPublic
