from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

DEFAULT_SESSION_SECRET = "change-me-in-production"

class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = "Agent Portal API"
    app_env: str = "development"
    app_port: int = 8000
    frontend_url: str = "http://localhost:3000"
    max_upload_size_mb: int = 50

    # Database (SQLite for local dev, any async SQLAlchemy URL in production)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./agent_portal.db",
        alias="DATABASE_URL",
    )
    seed_demo_data: bool = Field(default=False, alias="SEED_DEMO_DATA")

    # Shared login secrets
    admin_password: str = Field(default="admin123", alias="ADMIN_PASSWORD")
    agent_passcode: str = Field(default="agent123", alias="AGENT_PASSCODE")

    # Session cookie
    session_secret: str = Field(
        default=DEFAULT_SESSION_SECRET, alias="SESSION_SECRET",
    )
    session_cookie_name: str = Field(
        default="agent-portal-session", alias="SESSION_COOKIE_NAME",
    )
    session_max_age_days: int = Field(default=7, alias="SESSION_MAX_AGE_DAYS")

    # Blob storage (local directory served under storage_base_url)
    storage_dir: str = Field(default="./storage", alias="STORAGE_DIR")
    storage_base_url: str = Field(default="/files", alias="STORAGE_BASE_URL")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    @model_validator(mode="after")
    def _secret_set_in_production(self) -> "Settings":
        if self.app_env == "production" and self.session_secret == DEFAULT_SESSION_SECRET:
            raise ValueError("SESSION_SECRET must be set when APP_ENV=production")
        return self

    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024

    @property
    def session_max_age_seconds(self) -> int:
        return self.session_max_age_days * 24 * 60 * 60

    @property
    def cookie_secure(self) -> bool:
        """Secure cookies only outside local development."""
        return self.app_env == "production"

settings = Settings()
