import os
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables
load_dotenv()

DEFAULT_ISSUER = "TaskManagementAPI"


class Settings(BaseModel):
    """Runtime configuration for the Task Management API"""
    jwt_secret_key: str = Field(..., min_length=32)
    jwt_issuer: str = DEFAULT_ISSUER
    jwt_audience: str = DEFAULT_ISSUER
    database_url: str = "sqlite://"
    bcrypt_rounds: int = Field(12, ge=4, le=31)
    seed_demo_data: bool = True
    cors_origins: List[str] = ["https://localhost:54768"]
    log_level: str = "INFO"


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def load_settings() -> Settings:
    """
    Build settings from the environment

    Raises:
        ValueError: If JWT_SECRET_KEY is missing or shorter than 32 characters
    """
    secret_key = os.getenv("JWT_SECRET_KEY")

    if not secret_key:
        raise ValueError("JWT_SECRET_KEY environment variable is not set")
    if len(secret_key) < 32:
        raise ValueError("JWT_SECRET_KEY must be at least 32 characters long")

    return Settings(
        jwt_secret_key=secret_key,
        jwt_issuer=os.getenv("JWT_ISSUER", DEFAULT_ISSUER),
        jwt_audience=os.getenv("JWT_AUDIENCE", DEFAULT_ISSUER),
        database_url=os.getenv("DATABASE_URL", "sqlite://"),
        bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", "12")),
        seed_demo_data=os.getenv("SEED_DEMO_DATA", "true").lower() in ("1", "true", "yes"),
        cors_origins=_split_origins(os.getenv("CORS_ORIGINS", "https://localhost:54768")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
