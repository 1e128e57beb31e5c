"""Application configuration via environment variables."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from .env or environment."""

    DATABASE_URL: str = "sqlite:///./sparkbytes.db"
    CORS_ORIGINS: str = "http://localhost:3000"
    LOG_LEVEL: str = "INFO"

    # Tokens are issued by the external auth provider; we only verify them.
    JWT_SECRET: str = "your_jwt_secret"
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: str = ""

    ALLOWED_EMAIL_DOMAIN: str = "bu.edu"
    VERIFICATION_CODE_TTL_MINUTES: int = 30
    EMAIL_FROM: str = '"Spark! Bytes" <noreply@sparkbytes.bu.edu>'

    CAMPUS_TIMEZONE: str = "America/New_York"
    EVENTS_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    class Config:
        env_file = ".env"


settings = Settings()
