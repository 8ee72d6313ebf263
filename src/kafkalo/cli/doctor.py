"""``kafkalo doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment can load the settings file.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.  No business logic resides
here; it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import os
import platform
import sys

from rich.table import Table

from kafkalo.cli import exit_codes
from kafkalo.cli.console import console
from kafkalo.infra.sops_decryptor import detect_sops
from kafkalo.version import __version__

OK = "[green]OK[/green]"
WARN = "[yellow]WARN[/yellow]"
FAIL = "[red]FAIL[/red]"


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _kafkalo_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the kafkalo version row."""
    return "kafkalo", __version__, OK


def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 11)
    return "Python", version, OK if ok else "[red]FAIL (>=3.11 required)[/red]"


def _sops_check() -> tuple[str, str, str]:
    """Only encrypted settings files need sops, so a miss is a warning."""
    status = detect_sops()
    if status.found:
        return "sops", str(status.path) if status.path else "found", OK
    return "sops", "not found", WARN


def _config_check(config_path: str) -> tuple[str, str, str]:
    if not os.path.exists(config_path):
        return "settings", f"{config_path} (missing)", FAIL
    if not os.path.isfile(config_path):
        return "settings", f"{config_path} (not a file)", FAIL
    if not os.access(config_path, os.R_OK):
        return "settings", f"{config_path} (unreadable)", FAIL
    return "settings", config_path, OK


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(config_path: str) -> int:
    """Execute all diagnostic checks and render a Rich summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
    """
    checks = [
        _kafkalo_version_check(),
        _python_version_check(),
        _sops_check(),
        _config_check(config_path),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)

    table = Table(
        title="kafkalo doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=10)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, value, status)

    console.print()
    console.print(table)
    console.print()

    sops_status = detect_sops()
    if not sops_status.found and sops_status.install_commands:
        console.print("[yellow]sops is not installed; encrypted settings files cannot be read.[/yellow]")
        console.print("Install using one of the following commands:\n")
        for cmd in sops_status.install_commands:
            console.print(f"  [bold]{cmd}[/bold]")
        console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
