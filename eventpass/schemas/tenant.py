# eventpass/schemas/tenant.py
from typing import Dict, List, Optional

from pydantic import Field

from eventpass.schemas.base import CamelModel
from eventpass.schemas.event import Event


class ThemeUpdate(CamelModel):
    primary_color: Optional[str] = Field(default=None, pattern=r"^#[0-9A-Fa-f]{6}$")
    secondary_color: Optional[str] = Field(default=None, pattern=r"^#[0-9A-Fa-f]{6}$")
    accent_color: Optional[str] = Field(default=None, pattern=r"^#[0-9A-Fa-f]{6}$")
    font_family: Optional[str] = None
    logo_url: Optional[str] = None
    hide_platform_branding: Optional[bool] = None


class TenantSettingsUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = None
    domains: Optional[List[str]] = None
    theme: Optional[ThemeUpdate] = None
    allow_registration: Optional[bool] = None
    timezone: Optional[str] = None
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)


class Tenant(CamelModel):
    id: str
    slug: str
    name: str
    email: str
    domains: List[str] = []
    theme: Dict = {}
    settings: Dict = {}


class PublicTenant(CamelModel):
    slug: str
    name: str
    theme: Dict = {}
    theme_vars: Dict[str, str]


class PublicEventPage(CamelModel):
    tenant: PublicTenant
    event: Event
