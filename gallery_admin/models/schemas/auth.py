"""Authentication schemas."""
from typing import Literal

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Credentials posted to the login endpoint."""

    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)


class User(BaseModel):
    """Back-office user."""

    id: str
    email: str
    role: Literal["admin", "editor"] = "editor"


class LoginResponse(BaseModel):
    """Token and user returned by a successful login."""

    token: str = Field(..., min_length=1)
    user: User
