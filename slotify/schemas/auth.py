from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from uuid import UUID

from slotify.models.user import Role


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    employee_id: str = Field(min_length=1)
    vehicle_id: str = Field(min_length=1)
    phone_number: str = Field(min_length=10, max_length=15)


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    token: str = Field(min_length=1)
    new_password: str = Field(min_length=6)


class PasswordConfirmation(BaseModel):
    """Admin password re-entry for destructive bulk operations."""
    password: str = Field(min_length=1)


class AuthResponse(BaseModel):
    token: str
    role: Role
    user_id: UUID


class ForgotPasswordResponse(BaseModel):
    message: str
    reset_token: Optional[str] = None   # only outside production


class MessageResponse(BaseModel):
    message: str
