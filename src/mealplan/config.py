"""Application configuration helpers."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

ENV_FILE_CANDIDATES = (Path(".env"), Path(".env.local"))


class Settings(BaseModel):
    """Global application settings loaded from environment variables or .env files."""

    database_path: Path = Field(
        default=Path("./data/mealplan.db"),
        description="SQLite database location.",
    )
    api_token: Optional[str] = Field(
        default=None,
        description="Bearer token required for authenticated endpoints.",
    )
    log_level: str = Field(default="INFO", description="Logging level (DEBUG/INFO/WARNING/ERROR)")
    log_format: str = Field(
        default="plain",
        description="Logging format (plain/json).",
    )
    log_requests: bool = Field(
        default=True,
        description="Emit request access logs when true.",
    )
    image_dir: Path = Field(
        default=Path("./data/images"),
        description="Directory where uploaded recipe and meal images are stored.",
    )
    image_base_url: str = Field(
        default="/images",
        description="URL prefix under which stored images are served.",
    )
    max_image_bytes: int = Field(
        default=5 * 1024 * 1024,
        description="Maximum accepted image upload size in bytes.",
    )
    join_code_ttl_minutes: int = Field(
        default=60,
        description="Minutes a household join code stays valid.",
    )
    join_code_purge_enabled: bool = Field(
        default=False,
        description="Periodically delete expired household join codes when true.",
    )
    join_code_purge_interval: float = Field(
        default=900.0,
        description="Seconds between expired join code purges.",
    )
    api_base_url: str = Field(
        default="http://localhost:8000/api",
        description="Base URL used by the HTTP client adapter.",
    )
    client_timeout: float = Field(
        default=10.0,
        description="Timeout in seconds for client adapter requests.",
    )

    model_config = ConfigDict(frozen=True)


def _coerce_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _parse_env_file(path: Path) -> dict[str, str]:
    payload: dict[str, str] = {}
    try:
        with path.open("r", encoding="utf-8") as handle:
            for raw_line in handle:
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, raw_value = line.split("=", 1)
                payload[key.strip()] = raw_value.strip()
    except FileNotFoundError:
        return {}
    return payload


def _load_env_file_values() -> dict[str, str]:
    values: dict[str, str] = {}
    for candidate in ENV_FILE_CANDIDATES:
        values.update(_parse_env_file(candidate))
    return values


def _load_from_env() -> dict[str, object]:
    """Load optional overrides from env vars (with .env fallbacks)."""

    file_values = _load_env_file_values()

    def _env(key: str) -> Optional[str]:
        return os.environ.get(key) or file_values.get(key)

    payload: dict[str, object] = {}
    if (db_path := _env("MEALPLAN_DATABASE_PATH")):
        payload["database_path"] = Path(db_path)
    if (api_token := _env("MEALPLAN_API_TOKEN")):
        payload["api_token"] = api_token
    if (log_level := _env("MEALPLAN_LOG_LEVEL")):
        payload["log_level"] = log_level
    if (log_format := _env("MEALPLAN_LOG_FORMAT")):
        payload["log_format"] = log_format
    if (log_requests := _env("MEALPLAN_LOG_REQUESTS")):
        payload["log_requests"] = _coerce_bool(log_requests)
    if (image_dir := _env("MEALPLAN_IMAGE_DIR")):
        payload["image_dir"] = Path(image_dir)
    if (image_base_url := _env("MEALPLAN_IMAGE_BASE_URL")):
        payload["image_base_url"] = image_base_url.rstrip("/")
    if (max_image_bytes := _env("MEALPLAN_MAX_IMAGE_BYTES")):
        try:
            payload["max_image_bytes"] = int(max_image_bytes)
        except ValueError:
            pass
    if (join_code_ttl := _env("MEALPLAN_JOIN_CODE_TTL_MINUTES")):
        try:
            payload["join_code_ttl_minutes"] = int(join_code_ttl)
        except ValueError:
            pass
    if (purge_enabled := _env("MEALPLAN_JOIN_CODE_PURGE_ENABLED")):
        payload["join_code_purge_enabled"] = _coerce_bool(purge_enabled)
    if (purge_interval := _env("MEALPLAN_JOIN_CODE_PURGE_INTERVAL")):
        try:
            payload["join_code_purge_interval"] = float(purge_interval)
        except ValueError:
            pass
    if (api_base_url := _env("MEALPLAN_API_BASE_URL")):
        payload["api_base_url"] = api_base_url.rstrip("/")
    if (client_timeout := _env("MEALPLAN_CLIENT_TIMEOUT")):
        try:
            payload["client_timeout"] = float(client_timeout)
        except ValueError:
            pass
    return payload


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings(**_load_from_env())
