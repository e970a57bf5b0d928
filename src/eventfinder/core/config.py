"""
Application configuration using Pydantic Settings
"""
from pathlib import Path
from typing import List, Optional, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    APP_NAME: str = "EventFinder"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Storage
    STORAGE_BACKEND: str = "memory"  # 'memory' or 'sql'
    DATABASE_URL: str = "sqlite+aiosqlite:///./eventfinder.db"
    SEED_DEMO_DATA: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True
    LOG_FILE: Optional[str] = None

    # Catalog defaults
    DEFAULT_CURRENCY: str = "INR"
    DEFAULT_COUNTRY: str = "India"
    DEFAULT_EVENT_IMAGE: str = (
        "https://images.unsplash.com/photo-1540575467063-178a50c2df87?w=800&h=400&fit=crop"
    )

    # Booking Settings
    MAX_TICKETS_PER_BOOKING: int = 10
    PENDING_BOOKING_TTL_MINUTES: int = 30

    # Background Workers
    BOOKING_EXPIRY_ENABLED: bool = True
    BOOKING_EXPIRY_CHECK_INTERVAL_SECONDS: int = 60

    # Payments (simulated gateway)
    PAYMENT_KEY_ID: str = "rzp_test_demo"
    PAYMENT_KEY_SECRET: Optional[str] = None

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_STORAGE_URI: str = "memory://"
    LOGIN_RATE_LIMIT: str = "10/minute"
    REGISTER_RATE_LIMIT: str = "5/minute"
    BOOKING_RATE_LIMIT: str = "20/minute"

    # CORS
    CORS_ORIGINS: Union[List[str], str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    @field_validator('CORS_ORIGINS', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',') if origin.strip()]
        return v

    @field_validator('STORAGE_BACKEND')
    @classmethod
    def check_storage_backend(cls, v: str) -> str:
        v = v.lower()
        if v not in ("memory", "sql"):
            raise ValueError("STORAGE_BACKEND must be 'memory' or 'sql'")
        return v

    class Config:
        env_file = None  # Will be set dynamically
        env_file_encoding = 'utf-8'
        case_sensitive = True
        extra = 'ignore'


def find_env_file() -> Optional[str]:
    """Search for .env file in the working directory and the project root"""
    locations = [
        Path.cwd() / '.env',
        Path(__file__).resolve().parents[3] / '.env',
    ]
    for loc in locations:
        if loc.exists():
            return str(loc)
    return None


Settings.model_config['env_file'] = find_env_file()

# Global settings instance
settings = Settings()
