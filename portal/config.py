from functools import lru_cache
from typing import Literal
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_NAME: str = "Quiz Portal"

    ROOT_PATH: str = ""
    ADMIN_PREFIX: str = "/admin"

    SECRET_KEY: str = Field(..., description="Secret key for JWT encoding")
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    DATABASE_URL: str = "mongodb://localhost:27017"
    DATABASE_NAME: str = "quiz_portal"

    # every store call is cut off after this many seconds, no retries
    STORE_TIMEOUT_SECONDS: float = 5.0

    POINTS_STEP: int = 10

    # "positional" keeps the legacy q0, q1, ... answer keys
    ANSWER_KEY_SCHEME: Literal["positional", "question_id"] = "positional"

    CORS_ORIGINS: list[str] = ["*"]

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings: # caching settings
    return Settings()


settings = get_settings()
