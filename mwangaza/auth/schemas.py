from typing import Literal
from pydantic import BaseModel, EmailStr, Field, validator

Role = Literal["admin", "social_worker", "psychologist", "educator"]


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    username: str  # email address
    full_name: str
    role: Role


class Principal(BaseModel):
    """Authenticated staff member, resolved once per request"""
    id: str
    name: str
    email: str
    role: Role
    department: str


class StaffCreateRequest(BaseModel):
    full_name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=8)
    role: Role

    @validator('password')
    def validate_password(cls, v):
        if not any(c.isdigit() for c in v):
            raise ValueError('Password must contain at least one digit')
        return v


class Department(BaseModel):
    id: str
    name: str
    description: str
