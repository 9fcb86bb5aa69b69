"""Contract tests for repository port interfaces.

Any record source must load a resource tree from a path, raising
RecordNotFoundError for missing sources and RecordLoadError for unreadable
ones.
"""

import json

import pytest

from ead_exporter.application.ports import RecordRepositoryPort
from ead_exporter.domain.entities.records import Resource
from ead_exporter.infrastructure.io import (
    RecordLoadError,
    RecordNotFoundError,
    RecordSourceError,
)
from ead_exporter.infrastructure.repositories import JsonRecordRepository


class InMemoryRecordRepository:
    """Minimal repository used to check the protocol shape."""

    def __init__(self, resources):
        self.resources = resources

    def load_resource(self, source):
        try:
            return self.resources[str(source)]
        except KeyError:
            raise RecordNotFoundError(str(source)) from None


class TestRecordRepositoryContract:
    @pytest.fixture(params=["json", "memory"])
    def repository_and_source(self, request, tmp_path, resource_payload):
        if request.param == "json":
            source = tmp_path / "resource.json"
            source.write_text(json.dumps(resource_payload), encoding="utf-8")
            return JsonRecordRepository(), source
        resource = Resource.model_validate(resource_payload)
        return InMemoryRecordRepository({"ms042": resource}), "ms042"

    def test_implements_protocol(self, repository_and_source):
        repository, _ = repository_and_source
        assert isinstance(repository, RecordRepositoryPort)

    def test_load_resource_returns_resource(self, repository_and_source):
        repository, source = repository_and_source
        resource = repository.load_resource(source)

        assert isinstance(resource, Resource)
        assert resource.title == "Harbour Commission Papers"

    def test_missing_source_raises(self, repository_and_source, tmp_path):
        repository, _ = repository_and_source
        with pytest.raises(RecordNotFoundError):
            repository.load_resource(tmp_path / "missing.json")


def test_load_errors_share_a_base():
    assert issubclass(RecordLoadError, RecordSourceError)
    assert issubclass(RecordNotFoundError, RecordSourceError)
