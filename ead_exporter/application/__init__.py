"""Application layer: request/response models, ports and the export use case."""

from .export_use_case import ExportDependencies, ExportResourceUseCase
from .models import ExportRequest, ExportResponse, ExportStats, RenderFailure

__all__ = [
    "ExportDependencies",
    "ExportRequest",
    "ExportResourceUseCase",
    "ExportResponse",
    "ExportStats",
    "RenderFailure",
]
