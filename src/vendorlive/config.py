"""Application configuration and settings management."""

from pathlib import Path
from typing import Annotated, Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="VL_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Vendor Live Engine API"
    api_prefix: str = "/api"
    data_root: Path = Field(default=Path("data"), description="Root directory for the file-backed store.")
    storage_backend: Literal["memory", "file", "supabase"] = Field(
        default="file",
        description="Durable store used to persist engine state.",
    )
    storage_key_prefix: str = Field(
        default="@smartdealsiq_",
        description="Prefix applied to every persisted collection key.",
    )

    nominatim_base_url: str = Field(
        default="https://nominatim.openstreetmap.org",
        description="Base URL for reverse geocoding lookups.",
    )
    nominatim_user_agent: str = Field(default="vendorlive/0.1")
    geocode_timeout_seconds: float = Field(default=10.0, ge=0.0)
    geocode_enabled: bool = Field(
        default=True,
        description="Disable to skip reverse geocoding and store coordinates only.",
    )

    notifications_enabled: bool = Field(
        default=True,
        description="When false the notification dispatcher is a no-op (web targets).",
    )
    geofence_debounce: bool = Field(
        default=False,
        description="Track zone membership so enter alerts fire once per crossing and exit alerts fire.",
    )
    analytics_timezone: str = Field(
        default="UTC",
        description="IANA timezone used to derive weekdays and hours for location analytics.",
    )
    frontend_allowed_origins: Annotated[tuple[str, ...], NoDecode] = Field(
        default=(
            "http://localhost:8081",
            "http://127.0.0.1:8081",
            "http://localhost:19006",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )
    supabase_table: str = Field(
        default="engine_state",
        description="Key/value table holding serialized engine collections.",
    )

    @field_validator("data_root", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            # Try JSON first
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
