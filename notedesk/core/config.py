"""
Configuration Management.

Loads settings from config/settings/*.yaml and optional environment
overrides (NOTEDESK_* variables or config/.env).

Settings (YAML):
    application.yaml   - App identity, server
    database.yaml      - SQLite data directory and file name
    logging.yaml       - Logging configuration

Environment overrides:
    NOTEDESK_DATABASE_URL  - Full SQLAlchemy URL, replaces the file-derived one
    NOTEDESK_DATA_DIR      - Replaces database.yaml data_dir
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from notedesk.core.config_schema import (
    ApplicationSchema,
    DatabaseSchema,
    LoggingSchema,
)


def find_project_root() -> Path:
    """Find project root by looking for .project_root marker file."""
    current = Path.cwd()
    while current != current.parent:
        if (current / ".project_root").exists():
            return current
        current = current.parent
    raise RuntimeError("Project root not found. Ensure .project_root file exists.")


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML configuration file from config/settings/."""
    project_root = find_project_root()
    config_path = project_root / "config" / "settings" / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Environment overrides. Every field is optional."""

    database_url: str | None = None
    data_dir: str | None = None

    model_config = SettingsConfigDict(
        env_prefix="NOTEDESK_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def _load_validated(schema_cls: type, filename: str) -> Any:
    """Load YAML and validate against schema. Returns typed model instance."""
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ValueError(
            f"Invalid configuration in {filename}:\n{e}"
        ) from e


class AppConfig:
    """
    Application configuration loaded from YAML files.

    Each YAML file is validated against its Pydantic schema at load time.
    Properties return typed Pydantic model instances with attribute access.
    """

    def __init__(self) -> None:
        self._application = _load_validated(ApplicationSchema, "application.yaml")
        self._database = _load_validated(DatabaseSchema, "database.yaml")
        self._logging = _load_validated(LoggingSchema, "logging.yaml")

    @property
    def application(self) -> ApplicationSchema:
        """Application settings."""
        return self._application

    @property
    def database(self) -> DatabaseSchema:
        """Database settings."""
        return self._database

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging


@lru_cache
def get_settings() -> Settings:
    """Get cached overrides. A missing config/.env is not an error."""
    try:
        env_path = find_project_root() / "config" / ".env"
    except RuntimeError:
        return Settings()
    return Settings(_env_file=str(env_path))


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def get_database_path() -> Path:
    """
    Resolve the SQLite file location.

    The data directory is relative to the process's working directory,
    matching where the desktop client is launched from.
    """
    db = get_app_config().database
    data_dir = get_settings().data_dir or db.data_dir
    return Path.cwd() / data_dir / db.filename


def get_database_url() -> str:
    """
    Construct the async database URL.

    Returns:
        NOTEDESK_DATABASE_URL when set, otherwise an aiosqlite URL
        pointing at the configured data file.
    """
    override = get_settings().database_url
    if override:
        return override
    return f"sqlite+aiosqlite:///{get_database_path()}"


def get_server_address() -> tuple[str, int]:
    """Get the server host and port from application.yaml."""
    server = get_app_config().application.server
    return server.host, server.port
