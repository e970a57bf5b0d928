"""Pydantic schemas for User resources"""
import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field


class User(BaseModel):
    """Public user profile - never carries credentials"""
    id: str
    email: str
    name: str
    phone: Optional[str] = None
    avatar: Optional[str] = None
    created_at: dt.datetime = Field(default_factory=dt.datetime.utcnow)

    class Config:
        from_attributes = True


class UserRecord(User):
    """Stored user including the password hash; stays inside stores and services"""
    password_hash: str

    def to_public(self) -> User:
        return User.model_validate(self.model_dump(exclude={"password_hash"}))


class UserCreate(BaseModel):
    name: str = ""
    email: str = ""
    phone: Optional[str] = None
    password: str = ""


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class UserUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    avatar: Optional[str] = None


class LoginResponse(BaseModel):
    user: User
    token: str
