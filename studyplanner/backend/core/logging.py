"""
Structured Logging.

Every module logs through ``get_logger(__name__)``. ``setup_logging`` is
called once per process (app lifespan or ``run.py``) and routes both
structlog and stdlib records through the same formatter chain.

Settings come from config/settings/logging.yaml; keyword arguments to
``setup_logging`` override them.

Fields carried by each record:
    timestamp, level, logger, event, func_name, lineno
    source      - who is calling (web, mobile, cli, ...), never inferred
    request_id  - bound per HTTP request by RequestContextMiddleware
    owner_id    - bound once the bearer token is resolved

Usage:
    from studyplanner.backend.core.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Note archived", extra={"note_id": note.id})
"""

import logging
import sys
from functools import lru_cache
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.typing import Processor

from studyplanner.backend.core.config import find_project_root, load_yaml_config
from studyplanner.backend.core.config_schema import FileHandlerSchema, LoggingSchema

VALID_SOURCES = frozenset({
    "web",
    "mobile",
    "api",
    "cli",
    "internal",
    "unknown",
})
"""Values accepted for the ``source`` field. Anything else is logged as unknown."""

# Libraries that are too chatty at INFO.
_QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine")


@lru_cache
def _load_logging_config() -> LoggingSchema:
    """Read and validate logging.yaml once per process."""
    return LoggingSchema(**load_yaml_config("logging.yaml"))


def _resolve_log_path(configured_path: str) -> Path:
    """Log file paths in YAML are relative to the project root."""
    return find_project_root() / configured_path


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
    ]


def _formatter(renderer: Processor, pre_chain: list[Processor]) -> logging.Formatter:
    return structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=pre_chain,
    )


def _file_handler(file_config: FileHandlerSchema, formatter: logging.Formatter) -> logging.Handler:
    """Rotating JSONL file; the directory is created if missing."""
    log_path = _resolve_log_path(file_config.path)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        filename=str(log_path),
        maxBytes=file_config.max_bytes,
        backupCount=file_config.backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    enable_console: bool | None = None,
    enable_file_logging: bool | None = None,
) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        format_type: "json" or "console" for the console handler.
            The file handler always writes JSON.
        enable_console: Write to stdout
        enable_file_logging: Write to the rotating JSONL file
    """
    config = _load_logging_config()
    handlers = config.handlers

    level = level or config.level
    format_type = format_type or config.format
    if enable_console is None:
        enable_console = handlers.console.enabled
    if enable_file_logging is None:
        enable_file_logging = handlers.file.enabled

    pre_chain = _shared_processors()
    structlog.configure(
        processors=pre_chain + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    json_formatter = _formatter(structlog.processors.JSONRenderer(), pre_chain)

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper()))
    for handler in list(root.handlers):
        root.removeHandler(handler)

    if enable_console:
        console = logging.StreamHandler(sys.stdout)
        if format_type == "console":
            console.setFormatter(_formatter(structlog.dev.ConsoleRenderer(colors=True), pre_chain))
        else:
            console.setFormatter(json_formatter)
        root.addHandler(console)

    if enable_file_logging:
        root.addHandler(_file_handler(handlers.file, json_formatter))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """structlog logger named after the calling module."""
    return structlog.get_logger(name)


def log_with_source(logger: Any, source: str, level: str, message: str, **kwargs: Any) -> None:
    """
    Log with an explicit ``source`` outside of a request.

    Example:
        log_with_source(logger, "cli", "info", "Tables created", tables=["notes"])
    """
    getattr(logger, level.lower())(message, source=source, **kwargs)
