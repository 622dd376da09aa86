# eventpass/services/tenant_resolver.py
from typing import Dict, Optional

from sqlalchemy.orm import Session

from eventpass import crud
from eventpass.core.exceptions import NotFoundError
from eventpass.models.tenant import DEFAULT_THEME, Tenant


def get_by_slug(db: Session, slug: str) -> Optional[Tenant]:
    if not slug:
        return None
    return crud.tenant.get_by_slug(db, slug=slug)


def resolve_or_404(db: Session, slug: str) -> Tenant:
    tenant = get_by_slug(db, slug)
    if not tenant:
        raise NotFoundError("Tenant not found")
    return tenant


def theme_vars(tenant: Tenant) -> Dict[str, str]:
    """CSS custom properties for the tenant's theme, with platform defaults."""
    theme = {**DEFAULT_THEME, **(tenant.theme or {})}
    return {
        "--color-primary": theme["primaryColor"],
        "--color-secondary": theme["secondaryColor"],
        "--color-accent": theme["accentColor"],
        "--font-family": theme["fontFamily"],
    }
