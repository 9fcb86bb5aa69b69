from __future__ import annotations

from typing import TYPE_CHECKING, override

from ...application.ports.services import LoggerPort

if TYPE_CHECKING:
    from pathlib import Path

    from ...application.models import ExportStats


class NullLogger(LoggerPort):
    pass

    @override
    def info(self, message: str) -> None:
        return

    @override
    def success(self, message: str) -> None:
        return

    @override
    def warning(self, message: str) -> None:
        return

    @override
    def error(self, message: str) -> None:
        return

    @override
    def debug(self, message: str) -> None:
        return

    @override
    def verbose(self, message: str) -> None:
        return

    @override
    def log_export_start(self, source: Path, output_path: Path) -> None:
        return None

    @override
    def log_resource_loaded(self, title: str | None, child_count: int) -> None:
        return None

    @override
    def log_component_failure(self, record_id: str, message: str) -> None:
        return None

    @override
    def log_export_complete(self, output_path: Path, stats: ExportStats) -> None:
        return None

    @override
    def log_final_stats(self) -> None:
        return None
