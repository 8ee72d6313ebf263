"""Rich table rendering for command results.

Row builders are plain functions so the table contents can be tested
without a terminal; the ``render_*`` helpers only wrap them in Rich
tables.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from kafkalo.cli.console import out
from kafkalo.core.models import TaskDescriptor


def connector_rows(names: Sequence[str]) -> list[tuple[int, str]]:
    """Index each connector name from 0, keeping the remote order."""
    return list(enumerate(names))


def config_rows(config: Mapping[str, str]) -> list[tuple[str, str]]:
    """Config entries sorted by key for stable output."""
    return sorted(config.items())


def task_rows(tasks: Sequence[TaskDescriptor]) -> list[tuple[int, str, str, bool]]:
    return [(task.id, task.status, task.worker_id, task.is_running) for task in tasks]


def _table(*headers: str) -> Table:
    table = Table(box=box.SQUARE, show_header=True, header_style="bold cyan")
    for header in headers:
        table.add_column(header)
    return table


def render_connector_list(names: Sequence[str], *, target: Console = out) -> None:
    table = _table("#", "Connector name")
    for index, name in connector_rows(names):
        table.add_row(str(index), Text(name))
    target.print(table)


def render_connector_config(config: Mapping[str, str], *, target: Console = out) -> None:
    table = _table("Config name", "Config value")
    for key, value in config_rows(config):
        table.add_row(Text(key), Text(value))
    target.print(table)


def render_tasks(tasks: Sequence[TaskDescriptor], *, target: Console = out) -> None:
    table = _table("ID", "STATUS", "WORKER", "Is running")
    for task_id, status, worker, running in task_rows(tasks):
        table.add_row(str(task_id), Text(status), Text(worker), str(running).lower())
    target.print(table)


def render_input_files(files: Sequence[str], *, target: Console = out) -> None:
    table = _table("#", "Input file")
    for index, path in enumerate(files):
        table.add_row(str(index), Text(path))
    target.print(table)
