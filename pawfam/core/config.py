"""Storefront Configuration"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    # Application
    app_name: str = "PawFam Storefront"
    debug: bool = True
    host: str = "0.0.0.0"
    port: int = 8000

    # REST backend
    api_base_url: str = "https://paw-fam-backend.vercel.app/api"
    request_timeout: float = 30.0

    # Durable client-side storage for the auth token and cached user
    credentials_path: str = "config/credentials.json"

    # Cart "item added" notice lifetime
    cart_notice_seconds: float = 3.0

    # Password reset OTP countdown
    otp_countdown_seconds: int = 600

    # Idle storefront sessions are dropped after this many hours
    session_max_age_hours: float = 24.0

    class Config:
        env_file = "config/.env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
