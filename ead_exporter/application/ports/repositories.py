from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pathlib import Path

    from ...domain.entities.records import Resource


@runtime_checkable
class RecordRepositoryPort(Protocol):
    pass

    def load_resource(self, source: str | Path) -> Resource: ...
