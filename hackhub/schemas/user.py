"""
Account Request/Response Models
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime

from hackhub.auth.password import MIN_PASSWORD_LENGTH


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    role: str
    created_at: Optional[datetime] = None


class LoginResponse(BaseModel):
    status: str
    message: str
    access_token: str
    role: str
    dashboard: str
