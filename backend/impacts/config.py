from pydantic_settings import BaseSettings
from pydantic import Field
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings."""

    # Database
    database_url: str = Field(default="sqlite+aiosqlite:///./impacts.db", env="DATABASE_URL")
    sql_echo: bool = Field(default=False, env="SQL_ECHO")

    # Auth
    jwt_secret: str = Field(default="change-me-in-production", env="JWT_SECRET")
    jwt_expire_seconds: int = Field(default=86400, env="JWT_EXPIRE_SECONDS")

    # HTTP
    cors_origins: list[str] = Field(default=["*"], env="CORS_ORIGINS")

    # Logging
    log_level: str = Field(default="INFO", env="LOG_LEVEL")

    # Startup
    seed_reference_data: bool = Field(default=True, env="SEED_REFERENCE_DATA")

    # Client-side storage helper
    api_base_url: str = Field(default="http://localhost:8080", env="API_BASE_URL")
    client_storage_dir: str = Field(default=".impacts_storage", env="CLIENT_STORAGE_DIR")

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
