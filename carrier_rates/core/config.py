"""
Application configuration

Carrier credentials and transport settings, read from the environment
or a .env file. Credentials have no defaults that work upstream; in
production missing credentials are a hard failure.
"""
import os
import logging
from typing import Optional
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

UPS_SANDBOX_URL = "https://wwwcie.ups.com"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # App
    APP_NAME: str = "Carrier Rates"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # UPS
    UPS_BASE_URL: str = UPS_SANDBOX_URL
    UPS_CLIENT_ID: str = ""
    UPS_CLIENT_SECRET: str = ""
    UPS_ACCOUNT_NUMBER: Optional[str] = None
    UPS_TRANSACTION_SRC: str = "carrier-rates"

    # Transport
    REQUEST_TIMEOUT_MS: int = 10000

    @field_validator("UPS_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, v):
        if not v.startswith(("http://", "https://")):
            raise ValueError("UPS_BASE_URL must be an http(s) URL")
        return v.rstrip("/")

    @field_validator("REQUEST_TIMEOUT_MS")
    @classmethod
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError("REQUEST_TIMEOUT_MS must be positive")
        return v

    @model_validator(mode="after")
    def validate_production_credentials(self):
        """Refuse to start in production without UPS credentials."""
        if self.ENVIRONMENT == "production":
            errors = []
            if not self.UPS_CLIENT_ID:
                errors.append("UPS_CLIENT_ID is required in production")
            if not self.UPS_CLIENT_SECRET:
                errors.append("UPS_CLIENT_SECRET is required in production")
            if errors:
                raise ValueError(
                    "CONFIGURATION ERRORS:\n" + "\n".join(f"  - {e}" for e in errors)
                )
        return self

    @property
    def request_timeout_seconds(self) -> float:
        return self.REQUEST_TIMEOUT_MS / 1000


# Try to load settings, provide helpful error on failure
try:
    settings = Settings()
except Exception:
    if os.getenv("ENVIRONMENT", "development") == "development":
        logger.warning(
            "Settings validation failed, using development defaults. "
            "Set UPS_CLIENT_ID and UPS_CLIENT_SECRET in .env file."
        )
        settings = Settings.model_construct()
    else:
        raise
