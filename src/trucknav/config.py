"""Client configuration and settings management."""

from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="TRUCKNAV_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    api_base_url: str = Field(
        default="http://localhost:8080",
        description="Base URL of the truck navigation backend (e.g., https://nav.example.com).",
    )
    request_timeout_seconds: float = Field(default=30.0, gt=0.0)
    connect_timeout_seconds: float = Field(default=10.0, gt=0.0)
    default_max_profiles: int = Field(
        default=10,
        ge=1,
        description="Profile quota assumed when the backend omits maxProfiles.",
    )
    currency_symbol: str = Field(default="₹", description="Prefix used when rendering cost estimates.")
    enforce_axle_capacity: bool = Field(
        default=False,
        description="Reject profiles whose axle capacity is below the gross weight instead of warning.",
    )
    enforce_legal_limits: bool = Field(
        default=False,
        description="Reject profiles exceeding road dimension/weight limits instead of warning.",
    )
    export_root: Path = Field(default=Path("data"), description="Root directory for saved route results.")

    @field_validator("api_base_url", mode="before")
    @classmethod
    def _strip_trailing_slash(cls, value: Any) -> str:
        return str(value).strip().rstrip("/")

    @field_validator("export_root", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()


settings = Settings()
