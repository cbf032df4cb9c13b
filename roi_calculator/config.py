"""
Application configuration using Pydantic Settings.
"""

import os
from functools import lru_cache
from pydantic_settings import BaseSettings


def get_env_file() -> str:
    """Determine which env file to use based on environment."""
    env = os.getenv("APP_ENV", "development")
    if env == "production":
        return ".env.production"
    return ".env.development"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite:///./leads.db"

    # App settings
    app_name: str = "PowerShops ROI Calculator"
    debug: bool = False
    log_level: str = "INFO"
    app_env: str = "development"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Lead tracking (Google Apps Script web app backing the leads sheet)
    google_apps_script_url: str = ""
    webhook_timeout_seconds: float = 10.0

    # SendGrid Email
    sendgrid_api_key: str = ""
    sendgrid_from_email: str = "noreply@createone.com"
    sendgrid_from_name: str = "PowerShops ROI Calculator"
    lead_notification_email: str = ""

    # Gemini insights
    google_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"

    # Company details shown in reports and demo requests
    company_name: str = "Create One"
    company_website: str = "www.createone.com"
    contact_email: str = "success@createone.com"

    class Config:
        env_file = get_env_file()
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
