from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from rich.console import Console

    from ...application.models import ExportResponse

MAX_FAILURE_ROWS = 20


@dataclass(frozen=True, slots=True)
class SummaryRequest:
    response: ExportResponse
    record_file: str


class SummaryPresenter:
    pass

    def __init__(self, console: Console) -> None:
        super().__init__()
        self.console = console

    def present(self, request: SummaryRequest) -> None:
        response = request.response
        self.console.print()
        self.console.print(self._build_summary_table(request))
        self.console.print()
        if response.success:
            self._print_output_information(request)
        else:
            error = escape(response.error or "")
            self.console.print(f"[bold red]Export failed:[/bold red] {error}")
        self._print_failure_details(request)

    def _build_summary_table(self, request: SummaryRequest) -> Table:
        response = request.response
        stats = response.stats
        table = Table(
            title="📜 EAD Export Summary",
            show_header=True,
            header_style="bold cyan",
            border_style="bright_blue",
            title_style="bold magenta",
        )
        table.add_column("Metric", style="cyan", no_wrap=True)
        table.add_column("Value", justify="right", style="yellow")
        table.add_row("Record file", escape(request.record_file))
        table.add_row("Resource", escape(response.resource_title or "-"))
        table.add_row("Components", f"{stats.components:,}")
        table.add_row("Skipped (unpublished)", f"{stats.skipped_components:,}")
        table.add_row("Containers", f"{stats.containers:,}")
        table.add_row("Digital objects", f"{stats.digital_objects:,}")
        table.add_row("CDATA fallbacks", f"{stats.cdata_fallbacks:,}")
        failure_style = "red" if stats.failure_count else "green"
        table.add_row(
            "Render failures", f"[{failure_style}]{stats.failure_count}[/{failure_style}]"
        )
        return table

    def _print_output_information(self, request: SummaryRequest) -> None:
        response = request.response
        if response.output_path is None:
            return
        output = escape(str(response.output_path))
        self.console.print(f"[bold]Output:[/bold] {output}")
        self.console.print(f"[dim]{response.stats.characters:,} characters written[/dim]")

    def _print_failure_details(self, request: SummaryRequest) -> None:
        failures = request.response.stats.failures
        if not failures:
            return
        table = Table(title="Contained failures", border_style="red")
        table.add_column("Scope", style="magenta", no_wrap=True)
        table.add_column("Record", style="cyan")
        table.add_column("Message", overflow="fold")
        for failure in failures[:MAX_FAILURE_ROWS]:
            table.add_row(
                failure.scope, escape(failure.record_id), escape(failure.message)
            )
        self.console.print(table)
        if len(failures) > MAX_FAILURE_ROWS:
            remaining = len(failures) - MAX_FAILURE_ROWS
            self.console.print(f"[dim]... {remaining} more failure(s) not shown[/dim]")
