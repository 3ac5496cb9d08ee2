# slotify/routers/auth.py
"""Login, employee registration and password reset endpoints (no token required)."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from slotify.database import get_db
from slotify.models.user import Role
from slotify.schemas.auth import (
    AuthResponse,
    ForgotPasswordRequest,
    ForgotPasswordResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    ResetPasswordRequest,
)
from slotify.services import auth_service

router = APIRouter()


@router.post("/auth/login", response_model=AuthResponse, summary="Admin + security login")
def login(body: LoginRequest, db: Session = Depends(get_db)):
    return auth_service.login(db, body.email, body.password, [Role.ADMIN, Role.SECURITY])


@router.post("/auth/signin", response_model=AuthResponse, summary="Employee sign-in")
def signin(body: LoginRequest, db: Session = Depends(get_db)):
    return auth_service.login(db, body.email, body.password, [Role.EMPLOYEE])


@router.post("/auth/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED,
             summary="Employee self-registration")
def register(body: RegisterRequest, db: Session = Depends(get_db)):
    """Creates the user and its employee profile together and signs the employee in."""
    return auth_service.register_employee(db, body)


@router.post("/auth/forgot-password", response_model=ForgotPasswordResponse,
             response_model_exclude_none=True, summary="Request a password reset token")
def forgot_password(body: ForgotPasswordRequest, db: Session = Depends(get_db)):
    """Same response whether or not the email is registered."""
    return auth_service.forgot_password(db, body.email)


@router.post("/auth/reset-password", response_model=MessageResponse, summary="Reset password with a token")
def reset_password(body: ResetPasswordRequest, db: Session = Depends(get_db)):
    auth_service.reset_password(db, body.token, body.new_password)
    return {"message": "Password updated successfully"}
