"""
Schemas for config/settings/*.yaml.

One top-level model per file, named after it (application.yaml is
ApplicationSchema, and so on). Unknown keys are rejected so a misspelled
setting fails at startup rather than silently falling back.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class _Section(BaseModel):
    model_config = ConfigDict(extra="forbid")


# application.yaml


class ServerSchema(_Section):
    host: str
    port: int = Field(gt=0, lt=65536)


class CorsSchema(_Section):
    origins: list[str]


class TimeoutsSchema(_Section):
    """Seconds."""

    database: int = Field(gt=0)
    health_check: int = Field(gt=0)


class ApplicationSchema(_Section):
    name: str
    version: str
    description: str
    environment: str
    debug: bool
    api_prefix: str
    docs_enabled: bool
    server: ServerSchema
    cors: CorsSchema
    timeouts: TimeoutsSchema


# database.yaml


class DatabaseSchema(_Section):
    """Connection target and pool sizing. The password is a secret, see Settings."""

    host: str
    port: int = Field(gt=0, lt=65536)
    name: str
    user: str
    pool_size: int = Field(ge=1)
    max_overflow: int = Field(ge=0)
    pool_timeout: int = Field(gt=0)
    pool_recycle: int
    echo: bool


# logging.yaml


class ConsoleHandlerSchema(_Section):
    enabled: bool


class FileHandlerSchema(_Section):
    enabled: bool
    path: str
    max_bytes: int = Field(gt=0)
    backup_count: int = Field(ge=0)


class HandlersSchema(_Section):
    console: ConsoleHandlerSchema
    file: FileHandlerSchema


class LoggingSchema(_Section):
    level: LogLevel
    format: Literal["json", "console"]
    handlers: HandlersSchema


# features.yaml


class FeaturesSchema(_Section):
    registration_enabled: bool
    api_request_logging: bool


# security.yaml


class JwtSchema(_Section):
    """Verification settings for bearer tokens issued by the identity provider."""

    algorithm: str
    access_token_expire_minutes: int = Field(gt=0)
    audience: str


class CorsEnforcementSchema(_Section):
    allow_methods: list[str]
    allow_headers: list[str]


class SecuritySchema(_Section):
    jwt: JwtSchema
    cors: CorsEnforcementSchema
