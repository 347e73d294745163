"""Pydantic schemas for account endpoints."""

from typing import Optional

from pydantic import BaseModel, EmailStr


class RegisterRequest(BaseModel):
    """Request schema for user registration."""

    email: Optional[EmailStr] = None
    password: Optional[str] = None
    name: Optional[str] = None


class LoginRequest(BaseModel):
    """Request schema for user login."""

    email: Optional[EmailStr] = None
    password: Optional[str] = None
