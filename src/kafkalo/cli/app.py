"""CLI application entry point and command routing for kafkalo.

This module is the **sole error boundary** for the entire application.
It catches :class:`~kafkalo.exceptions.KafkaloError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core/service
  and infrastructure layers.
* The settings file is loaded once per invocation and handed down
  explicitly; nothing reads it through a global.
* Connect errors are reported by the command that hit them; settings and
  pattern errors end the invocation through :func:`cli`.
"""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Callable

from rich.markup import escape

from kafkalo.cli import exit_codes
from kafkalo.cli.console import configure_logging, console, out
from kafkalo.core.connect_service import ConnectService
from kafkalo.core.models import Configuration
from kafkalo.exceptions import ConnectError, KafkaloError
from kafkalo.version import __version__

DEFAULT_CONFIG_PATH: str = "kafkalo.yaml"
CONFIG_ENV_VAR: str = "KAFKALO_CONFIG"


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Commands:
    * ``kafkalo connect list``
    * ``kafkalo connect describe --connector NAME``
    * ``kafkalo inputs [PATTERN ...]``
    * ``kafkalo doctor``
    """
    parser = argparse.ArgumentParser(
        prog="kafkalo",
        description="Administer Kafka topics, schemas, ACLs and connectors from a settings file.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH),
        help=f"Settings file (default: ${CONFIG_ENV_VAR} or {DEFAULT_CONFIG_PATH}).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug).",
    )

    commands = parser.add_subparsers(dest="command")

    connect = commands.add_parser("connect", help="Kafka Connect operations.")
    connect_commands = connect.add_subparsers(dest="connect_command", required=True)
    connect_commands.add_parser("list", help="List configured connectors.")
    describe = connect_commands.add_parser("describe", help="Describe connector.")
    describe.add_argument("--connector", required=True, help="Connector name.")

    inputs = commands.add_parser("inputs", help="Show the input files kafkalo would read.")
    inputs.add_argument(
        "patterns",
        nargs="*",
        help="Glob or literal patterns (default: kafkalo.input_dirs).",
    )

    commands.add_parser("doctor", help="Check the runtime environment.")
    return parser


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _load_configuration(path: str) -> Configuration:
    from kafkalo.infra.config_loader import ConfigLoader

    return ConfigLoader().load(path)


def _report(exc: KafkaloError) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}", highlight=False)
    if exc.hint:
        console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}", highlight=False)


def _with_connect(config: Configuration, command: Callable[[ConnectService], int]) -> int:
    """Run *command* against a ConnectService, reporting Connect errors."""
    from kafkalo.infra.connect_client import HttpConnectAdmin

    with HttpConnectAdmin(config.connections.connect) as admin:
        service = ConnectService(
            admin,
            sensitive_keys_regex=config.kafkalo.sensitive_keys_regex,
        )
        try:
            return command(service)
        except ConnectError as exc:
            _report(exc)
            return exit_codes.REMOTE_ERROR


# ---------------------------------------------------------------------------
# Command dispatch (no business logic)
# ---------------------------------------------------------------------------

def _handle_connect_list(config: Configuration) -> int:
    from kafkalo.cli.tables import render_connector_list

    def run(service: ConnectService) -> int:
        render_connector_list(service.list_connectors())
        return exit_codes.SUCCESS

    return _with_connect(config, run)


def _handle_connect_describe(config: Configuration, connector: str) -> int:
    from kafkalo.cli.tables import render_connector_config, render_tasks

    def run(service: ConnectService) -> int:
        info = service.get_connector_info(connector)
        out.print(f"Connector: {info.name}", markup=False, highlight=False)
        render_connector_config(service.masked_config(info))
        render_tasks(service.list_tasks_for_connector(connector))
        return exit_codes.SUCCESS

    return _with_connect(config, run)


def _handle_inputs(config: Configuration, patterns: list[str]) -> int:
    from kafkalo.cli.tables import render_input_files
    from kafkalo.infra.input_resolver import resolve_input_files

    files = resolve_input_files(patterns or config.kafkalo.input_dirs)
    render_input_files(files)
    return exit_codes.SUCCESS


def _handle_doctor(config_path: str) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from kafkalo.cli.doctor import run_doctor

    return run_doctor(config_path)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the kafkalo CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    if args.command == "doctor":
        return _handle_doctor(args.config)

    config = _load_configuration(args.config)

    if args.command == "inputs":
        return _handle_inputs(config, args.patterns)
    if args.connect_command == "list":
        return _handle_connect_list(config)
    return _handle_connect_describe(config, args.connector)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except KafkaloError as exc:
        _report(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}",
            highlight=False,
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
