"""
Application Configuration
Loads settings from environment variables
"""

from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from .env file"""

    # Application
    APP_ENV: str = "development"
    APP_NAME: str = "HackHub"
    APP_URL: str = "http://localhost:8000"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./hackhub.db"

    # JWT
    JWT_SECRET_KEY: str = "temp-jwt-secret-change-later"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_HOURS: int = 24

    # Public files (certificate artifacts, template backgrounds)
    PUBLIC_DIR: str = "public"
    CERTIFICATES_DIR_NAME: str = "certificates"
    BACKGROUND_FETCH_TIMEOUT: float = 10.0

    # Pages
    LOGIN_PATH: str = "/login"

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def public_path(self) -> Path:
        return Path(self.PUBLIC_DIR)

    @property
    def certificates_path(self) -> Path:
        return self.public_path / self.CERTIFICATES_DIR_NAME


# Create global settings instance
settings = Settings()
