"""
Pydantic models for user registration.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .email import validate_address


class UserCreate(BaseModel):
    """Schema for registering a user."""

    email: str = Field(..., description="Unique address; also receives the welcome email")
    full_name: Optional[str] = Field(None, max_length=200)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return validate_address(v).lower()


class UserRead(BaseModel):
    """Schema for reading a user from the API."""

    id: int
    email: str
    full_name: Optional[str] = None
    created_at: Optional[str] = None


class RegistrationRead(UserRead):
    """A freshly registered user plus the status of the welcome email."""

    welcome_email_status: str
