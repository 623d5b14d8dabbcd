"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="OFFICES_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Constituency Office Locator API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root logging level.")

    # NocoDB table holding the office records
    nocodb_url: str = Field(
        default="http://localhost:8080",
        description="Base URL of the NocoDB instance.",
    )
    nocodb_token: str = Field(default="", description="API token sent as the xc-token header.")
    nocodb_base_id: Optional[str] = Field(default=None, description="NocoDB base (project) id.")
    nocodb_table_id: Optional[str] = Field(default=None, description="NocoDB table id.")
    nocodb_timeout_seconds: float = Field(default=15.0, gt=0.0)
    nocodb_page_size: int = Field(default=100, ge=1, le=1000)
    offices_file: Optional[Path] = Field(
        default=None,
        description="CSV or XLSX export of the office table, used when NocoDB is not configured.",
    )

    geocoder_url: str = Field(
        default="https://nominatim.openstreetmap.org/search",
        description="Nominatim-compatible search endpoint for address lookups.",
    )
    geocoder_user_agent: str = Field(default="office-locator/1.0")
    geocoder_country_codes: str = Field(default="za")
    geocoder_timeout_seconds: float = Field(default=10.0, gt=0.0)

    default_center: tuple[float, float] = Field(
        default=(-30.5595, 22.9375),
        description="Fallback map center (lat, lon) when nothing can be fitted.",
    )
    default_zoom: int = Field(default=6, ge=0, le=22)
    single_item_zoom: int = Field(default=12, ge=0, le=22)
    focused_zoom: int = Field(default=14, ge=0, le=22)
    bounds_padding_factor: float = Field(default=1.2, ge=1.0)
    min_bounds_span_degrees: float = Field(default=0.01, gt=0.0)
    region_box: tuple[float, float, float, float] = Field(
        default=(-35.0, 16.0, -22.0, 33.0),
        description="Deployment region as (min_lat, min_lon, max_lat, max_lon).",
    )
    nearest_count: int = Field(default=3, ge=1)
    max_sessions: int = Field(default=1000, ge=1)
    session_idle_seconds: float = Field(default=3600.0, gt=0.0)

    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("offices_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Optional[Path]:
        if value is None or value == "":
            return None
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

    @field_validator("default_center", "region_box", mode="before")
    @classmethod
    def _parse_float_tuple_from_env(cls, value: Any) -> Any:
        """Accept "a,b" or a JSON array for numeric tuples."""
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(float(item) for item in parsed)
            except (json.JSONDecodeError, TypeError, ValueError):
                pass
            return tuple(float(item.strip()) for item in value.split(",") if item.strip())
        return value

    @field_validator("region_box")
    @classmethod
    def _validate_region_box(cls, value: tuple[float, float, float, float]) -> tuple[float, float, float, float]:
        min_lat, min_lon, max_lat, max_lon = value
        if min_lat > max_lat or min_lon > max_lon:
            raise ValueError("region_box minimums must not exceed maximums")
        return value


settings = Settings()
