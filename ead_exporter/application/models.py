from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..constants import Defaults


def _empty_failure_list() -> list[RenderFailure]:
    return []


def _empty_str_list() -> list[str]:
    return []


@dataclass(frozen=True, slots=True)
class RenderFailure:
    scope: str
    record_id: str
    message: str


@dataclass(slots=True)
class ExportStats:
    components: int = 0
    skipped_components: int = 0
    containers: int = 0
    digital_objects: int = 0
    cdata_fallbacks: int = 0
    characters: int = 0
    failures: list[RenderFailure] = field(default_factory=_empty_failure_list)

    @property
    def failure_count(self) -> int:
        return len(self.failures)

    def record_failure(self, scope: str, record_id: str, message: str) -> None:
        self.failures.append(RenderFailure(scope, record_id, message))


@dataclass(slots=True)
class ExportRequest:
    record_path: Path
    output_path: Path | None = None
    verbose: int = 0

    def resolve_output_path(self) -> Path:
        if self.output_path is not None:
            return self.output_path
        return self.record_path.with_name(
            f"{self.record_path.stem}{Defaults.OUTPUT_SUFFIX}"
        )


@dataclass(slots=True)
class ExportResponse:
    success: bool = True
    output_path: Path | None = None
    resource_title: str | None = None
    stats: ExportStats = field(default_factory=ExportStats)
    error: str | None = None
    warnings: list[str] = field(default_factory=_empty_str_list)

    def to_dict(self) -> dict[str, object]:
        return {
            "success": self.success,
            "output_path": str(self.output_path) if self.output_path else None,
            "resource_title": self.resource_title,
            "components": self.stats.components,
            "failures": self.stats.failure_count,
            "error": self.error,
            "warnings": list(self.warnings),
        }
