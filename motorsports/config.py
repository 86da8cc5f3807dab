"""Application configuration."""
from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.
    
    Environment variables take precedence over .env file.
    This makes it compatible with Docker (uses env vars) and 
    local development (uses .env file).
    """
    
    APP_NAME: str = "Motorsports Management API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    PORT: int = 3000
    CORS_ORIGINS: List[str] = ["*"]
    
    # Database
    DATABASE_URL: str = "sqlite:///./motorsports.db"
    
    # JWT Settings - no default secret, an unset secret is a deployment error
    JWT_SECRET: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_MINUTES: int = 60 * 24 * 7
    
    # S3-compatible object storage (AWS S3, MinIO, R2, B2)
    S3_ENDPOINT: Optional[str] = None
    S3_REGION: str = "us-east-1"
    S3_ACCESS_KEY_ID: str = ""
    S3_SECRET_ACCESS_KEY: str = ""
    S3_BUCKET_NAME: str = "motorsports-uploads"
    S3_PUBLIC_BASE_URL: Optional[str] = None
    PRESIGNED_URL_EXPIRES_IN: int = 3600
    DOWNLOAD_URL_EXPIRES_IN: int = 900
    
    # Open-Meteo (no API key required)
    GEOCODING_API_URL: str = "https://geocoding-api.open-meteo.com/v1/search"
    FORECAST_API_URL: str = "https://api.open-meteo.com/v1/forecast"
    WEATHER_TIMEOUT_SECONDS: float = 10.0
    
    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True
    
    model_config = SettingsConfigDict(
        # Only load .env file if it exists (for local dev)
        # Docker will use environment variables directly
        env_file=".env" if Path(".env").exists() else None,
        env_file_encoding="utf-8",
        # Environment variables take precedence over .env file
        extra="ignore",
    )


settings = Settings()
