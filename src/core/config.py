"""Application configuration using pydantic-settings."""
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Database
    database_url: str
    db_pool_size: int = Field(default=5, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=10, validation_alias="DB_MAX_OVERFLOW")

    # Static bearer token every /api request must present
    api_token: str = Field(validation_alias="API_TOKEN")

    # "production" hides exception details in 500 responses
    environment: str = Field(default="development", validation_alias="ENVIRONMENT")

    # Logging
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")

    # CORS - comma-separated list of allowed origins (stored as string, parsed via property)
    cors_origins_str: str = Field(
        default="http://localhost:3000",
        validation_alias="CORS_ORIGINS",
    )

    # Field length limits
    max_title_length: int = Field(default=500, validation_alias="MAX_TITLE_LENGTH")
    max_description_length: int = Field(
        default=2000, validation_alias="MAX_DESCRIPTION_LENGTH",
    )

    @field_validator("api_token")
    @classmethod
    def check_api_token(cls, v: str) -> str:
        """Reject an empty token, which would make every request unauthorized."""
        if not v.strip():
            raise ValueError("API_TOKEN must not be empty")
        return v

    @property
    def cors_origins(self) -> list[str]:
        """Parse comma-separated CORS origins string into a list."""
        if not self.cors_origins_str:
            return []
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        """Whether the app runs in production mode."""
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
