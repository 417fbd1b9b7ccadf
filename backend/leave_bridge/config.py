from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "Leave Bridge"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"
    log_level: str = "INFO"
    database_url: str = "postgresql+asyncpg://leave_bridge:leave_bridge@db:5432/leave_bridge"
    cors_origins: list[str] = ["*"]

    # External HR platform.
    oracle_base_url: str = "http://localhost:8080"
    oracle_token: str = ""
    hr_project_name: str = "MOBILEAPP"
    hr_employer: str = "ADQ"
    hr_create_absence_path: str = "/ADQ_CREATE_ABSENCE_SYNC/1.0/createAbsence"
    hr_leave_balance_path: str = "/ADQ_EMP_GET_ABSEN_BALAN_SYNC/1.0/leavebalance"
    hr_timeout_seconds: float = 30.0

    approval_id_max_attempts: int = 5


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
