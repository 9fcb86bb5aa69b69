from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console

from ..application.export_use_case import ExportDependencies, ExportResourceUseCase
from ..config import ExporterConfig
from .io.ead.serializer import EADSerializer
from .io.ead_writer import EADFileWriter
from .logging.console_logger import ConsoleLogger
from .logging.null_logger import NullLogger
from .repositories.label_repository import LabelRepository
from .repositories.record_repository import JsonRecordRepository

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..application.ports.repositories import RecordRepositoryPort
    from ..application.ports.services import (
        EADSerializerPort,
        EADWriterPort,
        LoggerPort,
        TranslatorPort,
    )
    from ..application.ports.steps import SerializeStep


class DependencyContainer:
    pass

    def __init__(
        self,
        config: ExporterConfig | None = None,
        verbose: int = 0,
        console: Console | None = None,
        use_null_logger: bool = False,
        steps: Sequence[SerializeStep] = (),
    ) -> None:
        super().__init__()
        self.config = config or ExporterConfig()
        self.verbose = verbose
        self.console = console or Console()
        self.use_null_logger = use_null_logger
        self.steps = tuple(steps)
        self._logger_instance: LoggerPort | None = None
        self._record_repository_instance: RecordRepositoryPort | None = None
        self._label_repository_instance: TranslatorPort | None = None
        self._serializer_instance: EADSerializerPort | None = None
        self._writer_instance: EADWriterPort | None = None

    def create_logger(self) -> LoggerPort:
        if self._logger_instance is None:
            if self.use_null_logger:
                self._logger_instance = NullLogger()
            else:
                self._logger_instance = ConsoleLogger(
                    console=self.console, verbosity=self.verbose
                )
        return self._logger_instance

    def create_record_repository(self) -> RecordRepositoryPort:
        if self._record_repository_instance is None:
            self._record_repository_instance = JsonRecordRepository()
        return self._record_repository_instance

    def create_label_repository(self) -> TranslatorPort:
        if self._label_repository_instance is None:
            labels_file = self.config.labels_file
            if labels_file is not None:
                self._label_repository_instance = LabelRepository.from_toml(labels_file)
            else:
                self._label_repository_instance = LabelRepository()
        return self._label_repository_instance

    def create_serializer(self) -> EADSerializerPort:
        if self._serializer_instance is None:
            self._serializer_instance = EADSerializer(
                config=self.config,
                steps=self.steps,
                translator=self.create_label_repository(),
                logger=self.create_logger(),
            )
        return self._serializer_instance

    def create_writer(self) -> EADWriterPort:
        if self._writer_instance is None:
            self._writer_instance = EADFileWriter()
        return self._writer_instance

    def create_export_use_case(self) -> ExportResourceUseCase:
        dependencies = ExportDependencies(
            logger=self.create_logger(),
            record_repository=self.create_record_repository(),
            serializer=self.create_serializer(),
            writer=self.create_writer(),
        )
        return ExportResourceUseCase(dependencies)

    def reset_singletons(self) -> None:
        self._logger_instance = None
        self._record_repository_instance = None
        self._label_repository_instance = None
        self._serializer_instance = None
        self._writer_instance = None

    def override_logger(self, logger: LoggerPort) -> None:
        self._logger_instance = logger

    def override_record_repository(self, repository: RecordRepositoryPort) -> None:
        self._record_repository_instance = repository

    def override_writer(self, writer: EADWriterPort) -> None:
        self._writer_instance = writer


def create_default_container(verbose: int = 0) -> DependencyContainer:
    return DependencyContainer(verbose=verbose)
