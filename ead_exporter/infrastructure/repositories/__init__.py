"""Repository implementations for record and label access."""

from .label_repository import DEFAULT_LABELS, LabelLoadError, LabelRepository
from .record_repository import JsonRecordRepository

__all__ = [
    "DEFAULT_LABELS",
    "JsonRecordRepository",
    "LabelLoadError",
    "LabelRepository",
]
