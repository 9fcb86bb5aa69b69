from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from pathlib import Path

    from ...domain.entities.records import Resource
    from ..models import ExportStats


@runtime_checkable
class LoggerPort(Protocol):
    pass

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def debug(self, message: str) -> None: ...

    def verbose(self, message: str) -> None: ...

    def log_export_start(self, source: Path, output_path: Path) -> None: ...

    def log_resource_loaded(self, title: str | None, child_count: int) -> None: ...

    def log_component_failure(self, record_id: str, message: str) -> None: ...

    def log_export_complete(self, output_path: Path, stats: ExportStats) -> None: ...

    def log_final_stats(self) -> None: ...


@runtime_checkable
class TranslatorPort(Protocol):
    pass

    def translate(self, key: str, default: str) -> str: ...


@runtime_checkable
class RenderedExportPort(Protocol):
    pass

    @property
    def stats(self) -> ExportStats: ...

    def __iter__(self) -> Iterator[str]: ...


@runtime_checkable
class EADSerializerPort(Protocol):
    pass

    def stream(self, resource: Resource) -> RenderedExportPort: ...


@runtime_checkable
class EADWriterPort(Protocol):
    pass

    def write(self, chunks: Iterable[str], output_path: Path) -> int: ...
