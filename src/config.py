"""Configuration management for the application."""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = Field(default="sqlite:///./portfolio.db")
    create_tables_on_startup: bool = Field(default=False)

    # JWT
    jwt_secret: str = Field(default="change-me-in-production")
    jwt_algorithm: str = Field(default="HS256")
    jwt_expiration_minutes: int = Field(default=10080)  # 7 days

    # Cloudinary media host
    cloudinary_cloud_name: str = Field(default="")
    cloudinary_api_key: str = Field(default="")
    cloudinary_api_secret: str = Field(default="")
    media_timeout_seconds: float = Field(default=60.0)

    # Uploads
    max_upload_bytes: int = Field(default=10 * 1024 * 1024)
    max_item_files: int = Field(default=10)

    # Delete files dropped from a section item's keep list on the media host
    reconcile_removed_attachments: bool = Field(default=False)

    # Requests without a resolvable profile id edit this user's data
    legacy_default_tenant: bool = Field(default=True)
    legacy_default_user_id: int = Field(default=1)

    # API
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")
    cors_origins: list[str] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
        ]
    )

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production has secure settings."""
        if self.environment == "production":
            if self.jwt_secret == "change-me-in-production":  # noqa: S105
                raise ValueError("JWT_SECRET must be changed in production")
            if not (
                self.cloudinary_cloud_name
                and self.cloudinary_api_key
                and self.cloudinary_api_secret
            ):
                raise ValueError("CLOUDINARY_* credentials are required in production")
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
