# eventpass/models/tenant.py
from sqlalchemy import Column, String, DateTime, JSON, func
from sqlalchemy.orm import relationship
from eventpass.db.base_class import Base
import uuid

DEFAULT_THEME = {
    "primaryColor": "#6366F1",
    "secondaryColor": "#EC4899",
    "accentColor": "#10B981",
    "fontFamily": "Inter",
    "hidePlatformBranding": False,
}

DEFAULT_SETTINGS = {
    "allowRegistration": True,
    "timezone": "UTC",
    "currency": "USD",
}


class Tenant(Base):
    """An isolated customer organization owning its own events and admins."""
    __tablename__ = "tenants"

    id = Column(
        String, primary_key=True, default=lambda: f"ten_{uuid.uuid4().hex[:12]}"
    )
    slug = Column(String(100), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    domains = Column(JSON, nullable=False, default=list)
    theme = Column(JSON, nullable=False, default=lambda: dict(DEFAULT_THEME))
    settings = Column(JSON, nullable=False, default=lambda: dict(DEFAULT_SETTINGS))

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    events = relationship("Event", back_populates="tenant")
    admin_users = relationship("AdminUser", back_populates="tenant")

    @property
    def allows_registration(self) -> bool:
        return bool((self.settings or {}).get("allowRegistration", True))
