from __future__ import annotations

from dataclasses import dataclass
import traceback
from typing import TYPE_CHECKING

from .models import ExportResponse

if TYPE_CHECKING:
    from .models import ExportRequest
    from .ports.repositories import RecordRepositoryPort
    from .ports.services import EADSerializerPort, EADWriterPort, LoggerPort

VERBOSE_TRACEBACK_LEVEL = 2


@dataclass(slots=True)
class ExportDependencies:
    logger: LoggerPort
    record_repository: RecordRepositoryPort
    serializer: EADSerializerPort
    writer: EADWriterPort


class ExportResourceUseCase:
    """Load one resource tree, serialize it to EAD and write the document.

    Rendering failures inside the tree are contained by the serializer and
    only reported through the response statistics. Loading and writing
    failures end the export with ``success=False``.
    """

    def __init__(self, dependencies: ExportDependencies) -> None:
        super().__init__()
        self.logger = dependencies.logger
        self._record_repository = dependencies.record_repository
        self._serializer = dependencies.serializer
        self._writer = dependencies.writer

    def execute(self, request: ExportRequest) -> ExportResponse:
        response = ExportResponse()
        output_path = request.resolve_output_path()
        try:
            self.logger.log_export_start(request.record_path, output_path)
            resource = self._record_repository.load_resource(request.record_path)
            response.resource_title = resource.title
            self.logger.log_resource_loaded(resource.title, len(resource.children))

            export = self._serializer.stream(resource)
            self._writer.write(export, output_path)

            response.stats = export.stats
            response.output_path = output_path
            for failure in export.stats.failures:
                response.warnings.append(
                    f"{failure.scope} {failure.record_id}: {failure.message}"
                )
            self.logger.log_export_complete(output_path, export.stats)
        except Exception as exc:
            response.success = False
            response.error = str(exc)
            self.logger.error(f"{request.record_path}: {exc}")
            if request.verbose >= VERBOSE_TRACEBACK_LEVEL:
                self.logger.error(traceback.format_exc())
        return response
