# eventpass/core/config.py

from typing import List, Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "dev-secret-key"


class Settings(BaseSettings):
    # Values come from the process environment (Docker Compose / the shell).
    model_config = SettingsConfigDict(extra="ignore")

    # The environment mode: 'development', 'test' or 'production'
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    DATABASE_URL: str = "sqlite:///./eventpass.db"

    # --- Admin sessions ---
    JWT_SECRET: str = DEFAULT_JWT_SECRET
    JWT_ISSUER: str = "event-platform"
    SESSION_COOKIE_NAME: str = "auth-token"
    SESSION_TTL_DAYS: int = 7

    # --- Stripe ---
    STRIPE_SECRET_KEY: Optional[str] = None
    STRIPE_PUBLISHABLE_KEY: Optional[str] = None
    STRIPE_WEBHOOK_SECRET: Optional[str] = None
    STRIPE_API_VERSION: str = "2024-06-20"

    # --- Email (Resend) ---
    RESEND_API_KEY: Optional[str] = None
    RESEND_FROM_EMAIL: str = "noreply@example.com"

    BASE_URL: str = "http://localhost:5000"
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # Check-in opens this many hours before the event starts
    CHECKIN_OPENS_HOURS_BEFORE: int = 2

    @model_validator(mode="after")
    def check_production_secrets(self):
        if self.ENV == "production" and self.JWT_SECRET == DEFAULT_JWT_SECRET:
            raise ValueError("JWT_SECRET must be set in production")
        return self

    # --- Dynamic Properties ---
    @property
    def IS_PRODUCTION(self) -> bool:
        return self.ENV == "production"

    @property
    def STRIPE_CONFIGURED(self) -> bool:
        return bool(self.STRIPE_SECRET_KEY and self.STRIPE_PUBLISHABLE_KEY)

    @property
    def EMAIL_CONFIGURED(self) -> bool:
        return bool(self.RESEND_API_KEY)


# Create a single instance of the settings
settings = Settings()
