#!/usr/bin/env python3
"""
Study Planner command line.

    python run.py                                   show info
    python run.py --action server --reload -v       development server
    python run.py --action init-db                  create missing tables
    python run.py --action token --user-id alice    bearer token for curl
    python run.py --action health                   import and config checks
    python run.py --action config                   dump YAML settings
    python run.py --action test --test-type unit    run pytest
"""

import asyncio
import subprocess
import sys
from collections.abc import Callable
from pathlib import Path

import click

PROJECT_ROOT = Path(__file__).parent

from studyplanner.backend.core.logging import get_logger, log_with_source, setup_logging

ACTION_HELP = {
    "server": "Start the API server",
    "init-db": "Create database tables",
    "token": "Mint a development bearer token",
    "health": "Check application health",
    "config": "Display configuration",
    "test": "Run test suite",
    "info": "Show this information",
}

TEST_PATHS = {
    "unit": "tests/unit",
    "integration": "tests/integration",
    "all": "tests/",
}


def validate_project_root() -> Path:
    """Exit with status 1 unless run.py sits next to the .project_root marker."""
    if (PROJECT_ROOT / ".project_root").exists():
        return PROJECT_ROOT
    click.secho("Error: .project_root not found. Run from project root.", fg="red", err=True)
    sys.exit(1)


def _log_level(verbose: bool, debug: bool) -> str:
    if debug:
        return "DEBUG"
    return "INFO" if verbose else "WARNING"


@click.command()
@click.option("--action", type=click.Choice(list(ACTION_HELP)), default="info", help="Action to perform.")
@click.option("--verbose", "-v", is_flag=True, help="INFO level logging.")
@click.option("--debug", "-d", is_flag=True, help="DEBUG level logging.")
@click.option("--host", default=None, help="Bind address (server).")
@click.option("--port", default=None, type=int, help="Bind port (server).")
@click.option("--reload", is_flag=True, help="Restart on code changes (server).")
@click.option("--user-id", default=None, help="Token subject, i.e. the owner id (token).")
@click.option("--email", default=None, help="Email claim (token).")
@click.option("--test-type", type=click.Choice(list(TEST_PATHS)), default="all", help="Suite to run (test).")
@click.option("--coverage", is_flag=True, help="Collect coverage (test).")
def main(
    action: str,
    verbose: bool,
    debug: bool,
    host: str | None,
    port: int | None,
    reload: bool,
    user_id: str | None,
    email: str | None,
    test_type: str,
    coverage: bool,
) -> None:
    """
    Study Planner Entry Point.

    Serve the API, prepare the database, mint a token for manual
    testing, or inspect the configuration.

    Examples:

        python run.py --action server --reload --verbose

        python run.py --action token --user-id alice --email alice@example.edu

        python run.py --action test --test-type unit --coverage
    """
    validate_project_root()

    log_level = _log_level(verbose, debug)
    setup_logging(level=log_level, format_type="console")
    logger = get_logger(__name__)
    logger.debug("Starting application", extra={"action": action, "log_level": log_level})

    handlers: dict[str, Callable[[], None]] = {
        "server": lambda: run_server(logger, host, port, reload),
        "init-db": lambda: init_database(logger),
        "token": lambda: mint_token(logger, user_id, email),
        "health": lambda: check_health(logger),
        "config": lambda: show_config(logger),
        "test": lambda: run_tests(logger, test_type, coverage),
        "info": lambda: show_info(logger),
    }
    handlers[action]()


def run_server(logger, host: str | None, port: int | None, reload: bool) -> None:
    """uvicorn in a child process, bound to application.yaml unless overridden."""
    from studyplanner.backend.core.config import get_app_config

    server = get_app_config().application.server
    bind_host = host or server.host
    bind_port = port or server.port

    log_with_source(logger, "cli", "info", "Starting server", host=bind_host, port=bind_port, reload=reload)
    click.echo(f"Serving on http://{bind_host}:{bind_port} (Ctrl+C to stop)\n")

    cmd = [
        sys.executable, "-m", "uvicorn", "studyplanner.backend.main:app",
        "--host", bind_host, "--port", str(bind_port),
    ]
    if reload:
        cmd.append("--reload")

    try:
        subprocess.run(cmd, check=True)
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except subprocess.CalledProcessError as e:
        logger.error("Server failed to start", extra={"exit_code": e.returncode})
        sys.exit(e.returncode)


def init_database(logger) -> None:
    from studyplanner.backend.core.database import (
        create_tables,
        describe_engine,
        dispose_engine,
        get_engine,
    )

    async def create_and_close() -> list[str]:
        try:
            return await create_tables()
        finally:
            await dispose_engine()

    click.echo(f"Database: {describe_engine(get_engine())}")
    try:
        tables = asyncio.run(create_and_close())
    except Exception as e:
        logger.error("Table creation failed", extra={"error": str(e)})
        click.secho(f"Error creating tables: {e}", fg="red")
        sys.exit(1)

    log_with_source(logger, "cli", "info", "Tables created", tables=tables)
    click.secho(f"Tables ready: {', '.join(tables)}", fg="green")


def mint_token(logger, user_id: str | None, email: str | None) -> None:
    """Token signed with JWT_SECRET, accepted by the running API."""
    if not user_id:
        click.secho("Error: --user-id is required for the token action.", fg="red")
        sys.exit(1)

    from studyplanner.backend.core.security import create_access_token

    claims = {"sub": user_id}
    if email:
        claims["email"] = email

    log_with_source(logger, "cli", "debug", "Token minted", user_id=user_id)
    click.echo(create_access_token(claims))


# Health checks return an optional detail string and raise on failure.


def _check_imports() -> None:
    import studyplanner.backend.core.config  # noqa: F401


def _check_yaml() -> str:
    from studyplanner.backend.core.config import get_app_config

    return f"App: {get_app_config().application.name}"


def _check_secrets() -> None:
    from studyplanner.backend.core.config import get_settings

    get_settings()


def _check_app() -> str:
    from studyplanner.backend.main import create_app

    return f"Title: {create_app().title}"


def _check_models() -> str:
    from studyplanner.backend.models import Base

    return f"Tables: {', '.join(sorted(Base.metadata.tables))}"


HEALTH_CHECKS: list[tuple[str, Callable[[], str | None]]] = [
    ("Core imports", _check_imports),
    ("YAML configuration", _check_yaml),
    ("Secrets (config/.env)", _check_secrets),
    ("FastAPI application", _check_app),
    ("Database models", _check_models),
]


def check_health(logger) -> None:
    click.echo("Checking application health...\n")
    click.echo("Health Check Results:")
    click.echo("-" * 50)

    failures = 0
    for name, check in HEALTH_CHECKS:
        try:
            detail = check()
        except Exception as e:
            failures += 1
            logger.warning("Health check failed", extra={"check": name, "error": str(e)})
            click.echo(f"  {click.style('✗ FAIL', fg='red')}  {name} ({e})")
        else:
            suffix = f" ({detail})" if detail else ""
            click.echo(f"  {click.style('✓ PASS', fg='green')}  {name}{suffix}")

    click.echo("-" * 50)
    if failures:
        click.secho(f"\n{failures} check(s) failed. See details above.", fg="yellow")
        click.echo("Note: secrets require config/.env (see config/.env.example).")
    else:
        click.secho("\nAll checks passed!", fg="green")


def show_config(logger) -> None:
    from studyplanner.backend.core.config import AppConfig, get_app_config

    try:
        app_config = get_app_config()
    except Exception as e:
        logger.error("Failed to load configuration", extra={"error": str(e)})
        click.secho(f"Error loading configuration: {e}", fg="red")
        sys.exit(1)

    click.echo("Application Configuration:\n")
    for section in AppConfig.SECTIONS:
        click.echo(f"{section.capitalize()} Settings ({section}.yaml):")
        click.echo("-" * 40)
        for key, value in getattr(app_config, section).model_dump().items():
            click.echo(f"  {key}: {value}")
        click.echo()


def run_tests(logger, test_type: str, coverage: bool) -> None:
    cmd = [sys.executable, "-m", "pytest", TEST_PATHS[test_type], "-v"]
    if coverage:
        cmd += ["--cov=studyplanner", "--cov-report=term-missing"]

    logger.info("Running tests", extra={"type": test_type, "coverage": coverage})
    click.echo(f"Running: {' '.join(cmd)}\n")
    sys.exit(subprocess.run(cmd).returncode)


def show_info(logger) -> None:
    click.echo("Study Planner Backend")
    click.echo("=" * 40)

    try:
        from studyplanner.backend.core.config import get_app_config, get_server_base_url

        app = get_app_config().application
        click.echo(f"Name: {app.name}")
        click.echo(f"Version: {app.version}")
        click.echo(f"Description: {app.description}")
        click.echo(f"API: {get_server_base_url()}{app.api_prefix}")
    except Exception as e:
        logger.debug("Configuration unavailable", extra={"error": str(e)})
        click.echo("Name: Study Planner")

    click.echo("\nAvailable Actions:")
    for name, text in ACTION_HELP.items():
        click.echo(f"  --action {name:<8} {text}")
    click.echo("\nLogging Options:")
    click.echo("  --verbose, -v     INFO level logging")
    click.echo("  --debug, -d       DEBUG level logging")


if __name__ == "__main__":
    main()
