import json
from collections.abc import Sequence
from dataclasses import asdict

from rich.console import Console
from rich.table import Table

from task_updates.models import ReportRow

HEADERS = ["Namespace", "Job", "Group", "Task", "Image", "Latest", "Current", "UpdateAvailable"]


def build_table(rows: Sequence[ReportRow]) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    for header in HEADERS:
        table.add_column(header, no_wrap=True)

    for row in rows:
        table.add_row(
            row.namespace,
            row.job,
            row.group,
            row.task,
            row.image_name,
            row.latest_version,
            row.current_version,
            "true" if row.update_available else "false",
            style="bold yellow" if row.update_available else None,
        )
    return table


def render_table(rows: Sequence[ReportRow], console: Console | None = None) -> None:
    console = console or Console()
    console.print(build_table(rows))


def render_json(rows: Sequence[ReportRow]) -> str:
    return json.dumps([asdict(row) for row in rows], indent=2)
