from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ...domain.entities.records import ArchivalObject
    from ...infrastructure.io.ead.stream import AppendOnlyWriter, FragmentStore


class HookContext(StrEnum):
    DID = "did"
    ARCHDESC = "archdesc"


@runtime_checkable
class SerializeStep(Protocol):
    """Extension step run at the end of a record's ``did`` and body.

    Steps run in the order they are passed to the serializer. They may only
    append to the writer; whatever they raise is contained like any other
    rendering failure of that record.
    """

    def __call__(
        self,
        record: ArchivalObject,
        writer: AppendOnlyWriter,
        fragments: FragmentStore,
        context: HookContext,
    ) -> None: ...
