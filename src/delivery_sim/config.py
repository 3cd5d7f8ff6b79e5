"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Literal, Optional

import json
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="DSIM_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Delivery Simulation API"
    api_prefix: str = "/api"
    data_root: Path = Field(default=Path("data"), description="Root directory for seed data and run outputs.")
    drivers_file: Path = Field(
        default=Path("data/drivers.csv"),
        description="Driver roster with name, shift_hours and past_week_hours columns.",
    )
    routes_file: Path = Field(
        default=Path("data/routes.csv"),
        description="Routes with route_id, distance_km, traffic_level and base_time_min columns.",
    )
    orders_file: Path = Field(
        default=Path("data/orders.csv"),
        description="Order backlog with order_id, value_rs, route_id and delivery_time columns.",
    )
    reference_backend: Literal["csv", "supabase"] = Field(
        default="csv",
        description="Where drivers, routes and orders are read from.",
    )
    simulation_backend: Literal["file", "supabase"] = Field(
        default="file",
        description="Where completed simulation runs are stored.",
    )
    history_page_size: int = Field(default=10, ge=1)
    history_max_page_size: int = Field(default=100, ge=1)
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:5173",
            "http://127.0.0.1:5173",
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

    @field_validator("data_root", "drivers_file", "routes_file", "orders_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> tuple[str, ...]:
        """Accept a JSON array, a comma-separated string or an existing sequence."""
        if isinstance(value, str):
            text = value.strip()
            if text.startswith("["):
                try:
                    value = json.loads(text)
                except json.JSONDecodeError as exc:
                    raise ValueError(f"frontend_allowed_origins is not a valid JSON array: {exc}") from exc
            else:
                value = text.split(",")
        if not isinstance(value, (list, tuple)):
            return ()
        return tuple(str(origin).strip() for origin in value if str(origin).strip())

    @model_validator(mode="after")
    def _check_page_sizes(self) -> "Settings":
        if self.history_page_size > self.history_max_page_size:
            raise ValueError("history_page_size cannot exceed history_max_page_size")
        return self


settings = Settings()
