"""Command line interface for marshall."""

import asyncio
import logging
import signal
import sys
from contextlib import suppress

import click
import typer

from marshall.config import Settings, describe_config
from marshall.dependencies import Dependencies
from marshall.errors import InvalidThresholdValue
from marshall.models import STATUS_INVALID_ARGUMENTS, DispatchReport, VerdictStatus
from marshall.services.dispatcher import Dispatcher
from marshall.utils.console import configure_logging

logger = logging.getLogger(__name__)

app = typer.Typer(
    add_completion=False,
    help=(
        "Send a command to a list of predefined hosts. The run passes when at "
        "least the configured threshold percentage of hosts succeed, or always "
        "when no threshold is set."
    ),
)
hosts_app = typer.Typer(help="Manage marshalled hosts.")
threshold_app = typer.Typer(help="Manage the success threshold.")
app.add_typer(hosts_app, name="hosts")
app.add_typer(threshold_app, name="threshold")


def _fail(message: str, code: int = STATUS_INVALID_ARGUMENTS) -> typer.Exit:
    typer.echo(message, err=True)
    return typer.Exit(code=code)


async def _dispatch(dispatcher: Dispatcher, command: str) -> DispatchReport:
    """Run the dispatcher, turning SIGINT into a graceful stop."""
    cancel_event = asyncio.Event()
    loop = asyncio.get_running_loop()

    def interrupt() -> None:
        logger.warning("Interrupt received, waiting for in-flight hosts to finish")
        cancel_event.set()

    # Signal handlers are unavailable on some platforms and off the main thread
    with suppress(NotImplementedError, RuntimeError, ValueError):
        loop.add_signal_handler(signal.SIGINT, interrupt)
    try:
        return await dispatcher.dispatch(command, cancel_event)
    finally:
        with suppress(NotImplementedError, RuntimeError, ValueError):
            loop.remove_signal_handler(signal.SIGINT)


def _print_report(report: DispatchReport) -> None:
    if report.status is VerdictStatus.NO_HOSTS:
        typer.echo(
            "No hosts detected. Run 'marshall hosts add HOST' to register one.",
            err=True,
        )
        return

    for outcome in report.outcomes:
        for line in outcome.output.splitlines():
            typer.echo(f"[{outcome.host}] {line}")

    verdict = report.verdict
    if verdict is None:
        return

    typer.echo(
        f"{verdict.succeeded}/{verdict.total} host(s) succeeded "
        f"({float(verdict.success_rate):.2f}%)"
    )
    if verdict.threshold is None:
        typer.echo("Threshold: not set")
    else:
        typer.echo(f"Threshold: {verdict.threshold}%")

    failed = report.failed_outcomes
    if failed:
        typer.echo("Failed hosts:", err=True)
        for outcome in failed:
            typer.echo(f"  {outcome.host}: {outcome.detail or 'unknown error'}", err=True)

    if report.status is VerdictStatus.THRESHOLD_NOT_MET:
        typer.echo("Threshold unmet; see above output", err=True)


@app.command(
    context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False}
)
def run(
    command: list[str] = typer.Argument(..., help="Command to execute over SSH."),
    concurrency: int | None = typer.Option(
        None, "--concurrency", "-c", min=1, help="Hosts worked on at once."
    ),
    timeout: float | None = typer.Option(
        None, "--timeout", "-t", min=0, help="Per-host timeout in seconds (0 disables)."
    ),
) -> None:
    """Send COMMAND to every configured host and report the verdict."""
    command_text = " ".join(command).strip()
    if not command_text:
        raise _fail("No command provided")

    deps = Dependencies.create()
    # No hosts takes precedence over host key and threshold problems
    if not deps.registry.list():
        report = DispatchReport(status=VerdictStatus.NO_HOSTS)
        _print_report(report)
        raise typer.Exit(code=report.exit_code)

    try:
        executor = deps.executor()
    except FileNotFoundError as e:
        raise _fail(str(e)) from e

    dispatcher = deps.dispatcher(executor, concurrency=concurrency, timeout=timeout)
    try:
        report = asyncio.run(_dispatch(dispatcher, command_text))
    except InvalidThresholdValue as e:
        raise _fail(f"Stored threshold is invalid: {e}") from e

    _print_report(report)
    raise typer.Exit(code=report.exit_code)


@hosts_app.command("add")
def add_host(host: str = typer.Argument(..., help="Host address or name.")) -> None:
    """Add a host to marshall commands to."""
    registry = Dependencies.create().registry
    try:
        added = registry.add(host)
    except ValueError as e:
        raise _fail(str(e)) from e

    if added:
        typer.echo(f"Adding '{host.strip()}' to marshalled hosts")
    else:
        typer.echo(f"'{host.strip()}' is already a marshalled host")


@hosts_app.command("remove")
def remove_host(host: str = typer.Argument(..., help="Host to remove.")) -> None:
    """Remove a currently marshall'able host."""
    registry = Dependencies.create().registry
    if registry.remove(host):
        typer.echo(f"Removed '{host.strip()}' from marshalled hosts")
    else:
        typer.echo(f"'{host.strip()}' is not a marshalled host, nothing to remove")


@hosts_app.command("list")
def list_hosts() -> None:
    """List marshalled hosts."""
    hosts = Dependencies.create().registry.list()
    if not hosts:
        typer.echo("No hosts registered")
        return
    for host in hosts:
        typer.echo(host)


@threshold_app.command("set")
def set_threshold(
    value: str = typer.Argument(..., help="Percentage between 0 and 100, e.g. 80 or 80%."),
) -> None:
    """Set the percentage of hosts that must succeed for a run to pass."""
    store = Dependencies.create().threshold_store
    try:
        threshold = store.set(value)
    except InvalidThresholdValue as e:
        raise _fail(f"Invalid threshold '{value}' provided") from e
    typer.echo(f"Threshold now set to {threshold}")


@threshold_app.command("clear")
def clear_threshold() -> None:
    """Delete the threshold so every run with at least one host passes."""
    store = Dependencies.create().threshold_store
    if store.clear():
        typer.echo("Deleting old threshold")
    else:
        typer.echo("No threshold was set. Noop")


@app.command("config")
def display_config() -> None:
    """Show current configuration of this utility."""
    deps = Dependencies.create()
    try:
        typer.echo(describe_config(deps.registry, deps.threshold_store))
    except InvalidThresholdValue as e:
        raise _fail(f"Stored threshold is invalid: {e}") from e


def main() -> None:
    """Console script entry point.

    Usage errors exit with the invalid-arguments status instead of click's
    default, which would collide with the no-hosts status.
    """
    settings = Settings.from_env()
    configure_logging(settings.log_level, settings.log_colors)

    try:
        exit_code = app(standalone_mode=False)
    except click.UsageError as e:
        e.show()
        sys.exit(STATUS_INVALID_ARGUMENTS)
    except click.Abort:
        typer.echo("Aborted!", err=True)
        sys.exit(130)
    sys.exit(exit_code or 0)
