"""
User Pydantic schemas.
"""
from typing import Annotated, Optional

from pydantic import BaseModel, EmailStr, Field

from ..core.roles import Role
from .common import Payload, Timestamps


class UserCreate(Payload):
    """Schema for registering a user."""
    name: Annotated[str, Field(min_length=3, max_length=255)]
    email: EmailStr
    password: Annotated[str, Field(min_length=6)]
    role: Role


class UserUpdate(UserCreate):
    """Schema for updating a user; the password is always replaced."""
    pass


class UserRead(Timestamps):
    """Schema for reading user data."""
    id: int
    name: str
    email: str
    role: Optional[str] = None


class LoginRequest(BaseModel):
    """Login request schema."""
    email: EmailStr
    password: Annotated[str, Field(min_length=1)]


class LoginUser(BaseModel):
    id: int
    name: str
    email: str
    role: Optional[str] = None
