"""User schema definitions.

This module defines the User data model and the auth request/response bodies.
"""

import uuid
from datetime import datetime
from typing import Optional

import pytz
from pydantic import Field

from schemas.base import CamelModel


class User(CamelModel):
    """structure of user"""
    id: str = Field(
        description="The unique identifier for the user.",
        default_factory=lambda: str(uuid.uuid4()),
    )
    email: str = Field(description="Lower-cased login email.")
    student_id: Optional[str] = Field(
        default=None,
        description="Registrar student number. Only set for students.",
    )
    first_name: str
    last_name: str
    role: str = Field(description="'student' or 'admin'.")
    created_at: str = Field(
        default_factory=lambda: datetime.now(pytz.utc).isoformat()
    )
    password_hash: Optional[str] = Field(default=None, exclude=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class SignupRequest(CamelModel):
    # All optional so that missing fields produce the domain error message
    email: Optional[str] = None
    student_id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    password: Optional[str] = None


class SeedAdminRequest(CamelModel):
    admin_token: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserResponse(CamelModel):
    success: bool = True
    user: User


class LoginResponse(CamelModel):
    success: bool = True
    access_token: str
    user: User


class CurrentUserResponse(CamelModel):
    user: User
