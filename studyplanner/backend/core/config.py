"""
Configuration Management.

Two sources, nothing hardcoded:

    config/.env             secrets (DB_PASSWORD, JWT_SECRET); environment
                            variables of the same name take precedence
    config/settings/*.yaml  everything else, one file per section

Each YAML section is validated by its schema in config_schema.py when
AppConfig is built, so a typo in a settings file stops the process at
startup.

Paths are resolved from the directory holding the ``.project_root``
marker, which lets run.py, uvicorn and pytest start from any subdirectory.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from studyplanner.backend.core.config_schema import (
    ApplicationSchema,
    DatabaseSchema,
    FeaturesSchema,
    LoggingSchema,
    SecuritySchema,
)

MARKER_FILE = ".project_root"
SETTINGS_DIR = Path("config") / "settings"
ENV_FILE = Path("config") / ".env"


def find_project_root() -> Path:
    """Walk up from the working directory to the first one holding the marker."""
    for directory in (Path.cwd(), *Path.cwd().parents):
        if (directory / MARKER_FILE).exists():
            return directory
    raise RuntimeError(f"Project root not found. Ensure {MARKER_FILE} file exists.")


def validate_project_root() -> Path:
    """find_project_root for entry scripts: exits instead of raising."""
    try:
        return find_project_root()
    except RuntimeError as e:
        raise SystemExit(f"Error: {e}") from e


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Raw mapping from config/settings/<filename>. An empty file reads as {}."""
    path = find_project_root() / SETTINGS_DIR / filename
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with path.open(encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Secrets only. Everything that can be committed lives in YAML."""

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    db_password: str
    jwt_secret: str


def _load_section(filename: str, schema: type[BaseModel]) -> Any:
    try:
        return schema(**load_yaml_config(filename))
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {filename}:\n{e}") from e


class AppConfig:
    """Validated YAML settings, one typed attribute per file."""

    SECTIONS: dict[str, type[BaseModel]] = {
        "application": ApplicationSchema,
        "database": DatabaseSchema,
        "logging": LoggingSchema,
        "features": FeaturesSchema,
        "security": SecuritySchema,
    }

    application: ApplicationSchema
    database: DatabaseSchema
    logging: LoggingSchema
    features: FeaturesSchema
    security: SecuritySchema

    def __init__(self) -> None:
        for section, schema in self.SECTIONS.items():
            setattr(self, section, _load_section(f"{section}.yaml", schema))


@lru_cache
def get_settings() -> Settings:
    return Settings(_env_file=str(find_project_root() / ENV_FILE))


@lru_cache
def get_app_config() -> AppConfig:
    return AppConfig()


def get_database_url(async_driver: bool = True) -> str:
    """
    PostgreSQL URL assembled from database.yaml and DB_PASSWORD.

    Args:
        async_driver: asyncpg URL for the application, plain driver
            name for synchronous tooling.
    """
    db = get_app_config().database
    scheme = "postgresql+asyncpg" if async_driver else "postgresql"
    credentials = f"{db.user}:{get_settings().db_password}"
    return f"{scheme}://{credentials}@{db.host}:{db.port}/{db.name}"


def get_server_base_url() -> str:
    server = get_app_config().application.server
    return f"http://{server.host}:{server.port}"
