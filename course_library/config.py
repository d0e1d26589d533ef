from functools import lru_cache
from typing import Any
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_parse_none_str="none",
    )

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./course_library.db"

    # API
    API_TITLE: str = "Course Library API"
    API_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "info"

    # CORS
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]

    # Environment
    ENV: str = "development"

    # Paging
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 20

    # Cache-Control max-age (seconds) for course resources
    COURSES_CACHE_MAX_AGE: int = 240
    COURSE_CACHE_MAX_AGE: int = 120

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: Any) -> list[str]:
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        elif isinstance(v, list):
            return v
        return []


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
