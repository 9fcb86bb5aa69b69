from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, override

from rich.console import Console
from rich.markup import escape

from ...application.ports.services import LoggerPort

if TYPE_CHECKING:
    from pathlib import Path

    from ...application.models import ExportStats


class LogLevel(IntEnum):
    NORMAL = 0
    VERBOSE = 1
    DEBUG = 2


@dataclass(slots=True)
class LogContext:
    resource_id: str = ""
    record_id: str = ""
    operation: str = ""


def _fresh_stats() -> dict[str, int]:
    return {
        "resources_exported": 0,
        "components_rendered": 0,
        "component_failures": 0,
        "warnings": 0,
        "errors": 0,
    }


class ConsoleLogger(LoggerPort):
    pass

    def __init__(self, console: Console | None = None, verbosity: int = 0) -> None:
        super().__init__()
        self.console = console or Console()
        self.verbosity = verbosity
        self._context: LogContext | None = None
        self._stats: dict[str, int] = _fresh_stats()

    def set_context(self, **kwargs: str) -> None:
        if self._context is None:
            self._context = LogContext()
        for key, value in kwargs.items():
            if hasattr(self._context, key):
                setattr(self._context, key, value)

    def clear_context(self) -> None:
        self._context = None

    @override
    def info(self, message: str, *, level: int = LogLevel.NORMAL) -> None:
        if self.verbosity >= level:
            prefix = self._get_prefix()
            self.console.print(f"{prefix}{message}")

    @override
    def verbose(self, message: str) -> None:
        if self.verbosity >= LogLevel.VERBOSE:
            prefix = self._get_prefix()
            self.console.print(f"[dim]{prefix}{escape(message)}[/dim]")

    @override
    def debug(self, message: str) -> None:
        if self.verbosity >= LogLevel.DEBUG:
            prefix = self._get_prefix()
            self.console.print(f"[dim cyan]{prefix}{escape(message)}[/dim cyan]")

    @override
    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {escape(message)}")

    @override
    def warning(self, message: str) -> None:
        self._stats["warnings"] += 1
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}")

    @override
    def error(self, message: str) -> None:
        self._stats["errors"] += 1
        self.console.print(f"[red]✗[/red] {escape(message)}")

    @override
    def log_export_start(self, source: Path, output_path: Path) -> None:
        self.set_context(operation="export")
        self.console.print()
        self.console.print(f"[bold]Exporting {escape(source.name)}[/bold]")
        self.verbose(f"Record file: {source}")
        self.verbose(f"Output file: {output_path}")

    @override
    def log_resource_loaded(self, title: str | None, child_count: int) -> None:
        self.set_context(resource_id=title or "")
        label = title or "(untitled resource)"
        self.verbose(f"Loaded resource {label} with {child_count:,} top-level components")

    @override
    def log_component_failure(self, record_id: str, message: str) -> None:
        self._stats["component_failures"] += 1
        self.warning(
            f"Component {record_id} replaced by an error block: {message}"
        )

    @override
    def log_export_complete(self, output_path: Path, stats: ExportStats) -> None:
        self._stats["resources_exported"] += 1
        self._stats["components_rendered"] += stats.components
        self.success(
            f"Wrote {output_path.name} ({stats.components:,} components, "
            f"{stats.characters:,} characters)"
        )
        if stats.cdata_fallbacks:
            self.verbose(f"  {stats.cdata_fallbacks} values written as CDATA")
        if self.verbosity >= LogLevel.DEBUG:
            self.debug(
                f"  Containers: {stats.containers}, "
                f"digital objects: {stats.digital_objects}, "
                f"skipped components: {stats.skipped_components}"
            )

    @override
    def log_final_stats(self) -> None:
        if self.verbosity >= LogLevel.VERBOSE:
            self.console.print()
            self.console.print("[dim]Export Statistics:[/dim]")
            self.console.print(
                f"[dim]  Resources exported: {self._stats['resources_exported']}[/dim]"
            )
            self.console.print(
                f"[dim]  Components rendered: {self._stats['components_rendered']:,}[/dim]"
            )
            if self._stats["component_failures"] > 0:
                self.console.print(
                    f"[dim yellow]  Component failures: "
                    f"{self._stats['component_failures']}[/dim yellow]"
                )
            if self._stats["warnings"] > 0:
                self.console.print(
                    f"[dim yellow]  Warnings: {self._stats['warnings']}[/dim yellow]"
                )
            if self._stats["errors"] > 0:
                self.console.print(
                    f"[dim red]  Errors: {self._stats['errors']}[/dim red]"
                )

    def get_stats(self) -> dict[str, int]:
        return self._stats.copy()

    def reset_stats(self) -> None:
        self._stats = _fresh_stats()

    def _get_prefix(self) -> str:
        if self._context is None or self.verbosity < LogLevel.DEBUG:
            return ""
        parts: list[str] = []
        if self._context.resource_id:
            parts.append(self._context.resource_id)
        if self._context.record_id:
            parts.append(self._context.record_id)
        return escape(f"[{':'.join(parts)}] ") if parts else ""
