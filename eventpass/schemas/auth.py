# eventpass/schemas/auth.py
from typing import Literal

from pydantic import EmailStr, Field

from eventpass.schemas.base import CamelModel
from eventpass.schemas.token import SessionClaims


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=6)
    tenant_slug: str = Field(min_length=1)


class AdminUserCreate(CamelModel):
    email: EmailStr
    password: str = Field(min_length=6)
    name: str = Field(min_length=1)
    tenant_slug: str = Field(min_length=1)
    role: Literal["admin", "manager", "staff"] = "admin"


class TenantSummary(CamelModel):
    id: str
    slug: str
    name: str


class AdminUserSummary(CamelModel):
    id: str
    email: str
    name: str
    role: str
    tenant: TenantSummary


class LoginResponse(CamelModel):
    success: bool = True
    user: AdminUserSummary
    token: str


class AuthStatusResponse(CamelModel):
    success: bool = True
    user: SessionClaims


class AdminUserCreatedResponse(CamelModel):
    success: bool = True
    user: AdminUserSummary


class LogoutResponse(CamelModel):
    success: bool = True
    message: str = "Logged out successfully"
