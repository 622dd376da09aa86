# eventpass/schemas/token.py
from typing import Optional

from pydantic import Field

from eventpass.schemas.base import CamelModel


class SessionClaims(CamelModel):
    """Claims embedded in an admin session token."""

    user_id: str = Field(alias="userId")
    tenant_id: str = Field(alias="tenantId")
    role: str
    email: str
    exp: Optional[int] = None
