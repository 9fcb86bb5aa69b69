"""Port interfaces for external dependencies.

Adapters in ``infrastructure`` implement these protocols; the use case and
the serializer only depend on them.
"""

from .repositories import RecordRepositoryPort
from .services import (
    EADSerializerPort,
    EADWriterPort,
    LoggerPort,
    RenderedExportPort,
    TranslatorPort,
)
from .steps import HookContext, SerializeStep

__all__ = [
    "EADSerializerPort",
    "EADWriterPort",
    "HookContext",
    "LoggerPort",
    "RecordRepositoryPort",
    "RenderedExportPort",
    "SerializeStep",
    "TranslatorPort",
]
