import logging
from pathlib import Path
from types import ModuleType
from typing import NoReturn, Optional, Type
import typer
from .checks import alive as alive_check
from .checks import connections as connections_check
from .config import CheckConfig, ConnectionsCheckConfig
from .domain.models import CheckResult, Severity
from .exceptions import ConfigError
from .log import setup_logger

app = typer.Typer(help="PostgreSQL health checks for monitoring agents", add_completion=False)
alive_app = typer.Typer(help="postgres alive check", add_completion=False)
connections_app = typer.Typer(help="postgres connections check", add_completion=False)

def _report(result: CheckResult) -> NoReturn:
    """Print the message for the monitoring agent and exit with the severity code."""
    typer.echo(result.message)
    raise typer.Exit(code=int(result.severity))

def _run(check: ModuleType, config_cls: Type[CheckConfig], config_path: Optional[Path], options: dict) -> CheckResult:
    try:
        config = config_cls.load(config_path, **options)
    except ConfigError as e:
        return CheckResult(severity=Severity.CRITICAL, message=str(e))

    validation = check.validate(config)
    if not validation.ok:
        return CheckResult(severity=Severity.CRITICAL, message=str(validation.error))

    return check.execute(config)

def run_check(check: ModuleType, config_cls: Type[CheckConfig], config_path: Optional[Path], verbose: bool, **options) -> NoReturn:
    """
    Validate, execute, report. Anything that goes wrong before or during
    the check ends as CRITICAL with a message, never as a traceback.
    """
    logger = setup_logger(logging.DEBUG if verbose else logging.WARNING)

    try:
        result = _run(check, config_cls, config_path, options)
    except Exception as e:
        logger.debug("%s failed unexpectedly", check.NAME, exc_info=True)
        result = CheckResult(severity=Severity.CRITICAL, message=f"error executing {check.NAME}: {e}")

    logger.debug("%s finished with %s", check.NAME, result.severity.name)
    _report(result)

@app.command("alive")
@alive_app.command()
def alive(
    user: Optional[str] = typer.Option(None, "--user", "-u", help="postgres user to connect"),
    password: Optional[str] = typer.Option(None, "--password", "-p", help="Password for user"),
    pgpass: Optional[Path] = typer.Option(None, "--pgpass", "-f", help="Location of .pgpass file for access to postgres"),
    pgpass_match: bool = typer.Option(False, "--pgpass-match", help="Pick the .pgpass entry matching hostname/port/database/user instead of the last one"),
    port: Optional[int] = typer.Option(None, "--port", help="Port to connect to (default: 5432)"),
    hostname: Optional[str] = typer.Option(None, "--hostname", help="Hostname to login to (default: localhost)"),
    database: Optional[str] = typer.Option(None, "--database", "-d", help="Database schema to connect to (default: postgres)"),
    sslmode: Optional[str] = typer.Option(None, "--sslmode", "-s", help="SSL mode for connecting to postgres (default: prefer)"),
    timeout: Optional[int] = typer.Option(None, "--timeout", help="Seconds allowed for connecting and for each query (default: 10)"),
    config: Optional[Path] = typer.Option(None, "--config", "-C", help="YAML file with option values"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log diagnostics to stderr"),
):
    """
    Verify the server accepts a connection and answers a ping.
    """
    run_check(
        alive_check, CheckConfig, config, verbose,
        user=user, password=password, pgpass=pgpass, pgpass_match=pgpass_match or None,
        port=port, hostname=hostname, database=database, sslmode=sslmode, timeout=timeout,
    )

@app.command("connections")
@connections_app.command()
def connections(
    user: Optional[str] = typer.Option(None, "--user", "-u", help="postgres user to connect"),
    password: Optional[str] = typer.Option(None, "--password", "-p", help="Password for user"),
    pgpass: Optional[Path] = typer.Option(None, "--pgpass", "-f", help="Location of .pgpass file for access to postgres"),
    pgpass_match: bool = typer.Option(False, "--pgpass-match", help="Pick the .pgpass entry matching hostname/port/database/user instead of the last one"),
    port: Optional[int] = typer.Option(None, "--port", help="Port to connect to (default: 5432)"),
    hostname: Optional[str] = typer.Option(None, "--hostname", help="Hostname to login to (default: localhost)"),
    database: Optional[str] = typer.Option(None, "--database", "-d", help="Database schema to connect to (default: postgres)"),
    sslmode: Optional[str] = typer.Option(None, "--sslmode", "-s", help="SSL mode for connecting to postgres (default: prefer)"),
    timeout: Optional[int] = typer.Option(None, "--timeout", help="Seconds allowed for connecting and for each query (default: 10)"),
    warning: Optional[int] = typer.Option(None, "--warning", "-w", help="Warning threshold number or % of connections. (default: 200 connections)"),
    critical: Optional[int] = typer.Option(None, "--critical", "-c", help="Critical threshold number or % of connections. (default: 250 connections)"),
    percentage: bool = typer.Option(False, "--percentage", help="Use percentage of defined max connections instead of absolute value"),
    config: Optional[Path] = typer.Option(None, "--config", "-C", help="YAML file with option values"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log diagnostics to stderr"),
):
    """
    Grade the number of open connections against warning/critical thresholds.
    """
    run_check(
        connections_check, ConnectionsCheckConfig, config, verbose,
        user=user, password=password, pgpass=pgpass, pgpass_match=pgpass_match or None,
        port=port, hostname=hostname, database=database, sslmode=sslmode, timeout=timeout,
        warning=warning, critical=critical, percentage=percentage or None,
    )

if __name__ == "__main__":
    app()
