"""Click command-line interface for the log relay.

Purpose
-------
Offer a quick way to inspect package metadata and to watch the admission
pipeline at work against a Rich console receiver.

Contents
--------
* :func:`cli` - root group with ``--traceback`` and ``--use-dotenv`` toggles.
* ``info`` - prints the metadata banner.
* ``demo`` - wires an adapter to a console receiver and emits one event per level.
* :func:`main` - entry point running the group through :mod:`lib_cli_exit_tools`.
"""

from __future__ import annotations

import os
from datetime import datetime, timezone
from typing import Any, Sequence

import click
import lib_cli_exit_tools
from rich.console import Console

from . import __init__conf__
from . import config as relay_config
from .adapters import InMemorySettingsStore, ProcessRegistry, RichConsoleReceiver
from .domain import LogEvent, LogLevel
from .runtime import emit, flush, init, reconfigure, shutdown

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
DEMO_ADAPTER = "cli-demo"
DEMO_RECEIVER = "demo-console"


def summary_info() -> str:
    """Return the metadata banner used by ``info`` and the bare command."""

    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)


def _parse_metadata(pairs: Sequence[str]) -> dict[str, str]:
    metadata: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(f"expected KEY=VALUE, got {pair!r}", param_hint="--meta")
        metadata[key.strip()] = value
    return metadata


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=None,
    help="Load environment variables from the nearest .env before running commands.",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool | None) -> None:
    """Root command storing global flags."""

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback

    if relay_config.should_use_dotenv(explicit=use_dotenv, env_value=os.getenv(relay_config.DOTENV_ENV_VAR)):
        relay_config.enable_dotenv()

    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print resolved metadata so users can inspect installation details."""

    click.echo(summary_info(), nl=False)


@cli.command("demo", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--level",
    "level",
    type=click.Choice([level.severity for level in LogLevel], case_sensitive=False),
    default="warning",
    show_default=True,
    help="Threshold configured on the demo adapter.",
)
@click.option("--meta", "meta", multiple=True, metavar="KEY=VALUE", help="Extra metadata merged into every event.")
@click.option("--formatter", default=None, metavar="MODULE:FUNCTION", help="Formatter applied before forwarding.")
@click.option("--no-color", is_flag=True, default=False, help="Disable coloured output.")
def cli_demo(level: str, meta: tuple[str, ...], formatter: str | None, no_color: bool) -> None:
    """Emit one sample event per level and show what reaches the receiver."""

    console = Console(no_color=no_color, highlight=False)
    result = _demo(
        level=level,
        metadata=_parse_metadata(meta),
        formatter=formatter,
        console=console,
    )
    click.echo(f"forwarded {result['forwarded']} of {result['emitted']} events (threshold {result['level']}), flushes={result['flushes']}")


def _demo(
    *,
    level: str,
    metadata: dict[str, str],
    formatter: str | None,
    console: Console | None = None,
) -> dict[str, Any]:
    registry = ProcessRegistry()
    receiver = RichConsoleReceiver(console=console)
    registry.register(DEMO_RECEIVER, receiver)
    init(DEMO_ADAPTER, registry=registry, store=InMemorySettingsStore(), queue_enabled=True)
    try:
        applied = reconfigure(
            DEMO_ADAPTER,
            destination=DEMO_RECEIVER,
            level=level,
            metadata=metadata,
            formatter=formatter,
        )
        emitted = 0
        for index, event_level in enumerate(LogLevel):
            event = LogEvent(
                level=event_level,
                message=f"{event_level.severity} sample event",
                timestamp=datetime.now(timezone.utc),
                metadata={"sample": index},
            )
            emit(DEMO_ADAPTER, event)
            emitted += 1
        flush(DEMO_ADAPTER)
    finally:
        shutdown(DEMO_ADAPTER)
    return {
        "level": applied.level.severity,
        "emitted": emitted,
        "forwarded": receiver.received,
        "flushes": receiver.flushes,
    }


def main(argv: Sequence[str] | None = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with error handling from :mod:`lib_cli_exit_tools`.

    Traceback preferences touched by ``--traceback`` are restored afterwards
    unless ``restore_traceback`` is ``False``.
    """

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main", "summary_info"]
