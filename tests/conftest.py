from __future__ import annotations

from collections.abc import Callable, Sequence
import copy
from dataclasses import dataclass
from datetime import UTC, datetime
import os
from typing import Any

from lxml import etree
import pytest

from ead_exporter.application.models import ExportStats
from ead_exporter.config import ExporterConfig
from ead_exporter.constants import ConfigFiles, Namespaces
from ead_exporter.domain.entities.records import Resource
from ead_exporter.infrastructure.io.ead.serializer import EADSerializer

GENERATED_AT = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
NS = {"ead": Namespaces.EAD, "xlink": Namespaces.XLINK, "xsi": Namespaces.XSI}

BASE_RESOURCE: dict[str, Any] = {
    "uri": "/repositories/2/resources/1",
    "title": "Harbour Commission Papers",
    "level": "collection",
    "publish": True,
    "language": "eng",
    "id_0": "MS",
    "id_1": "042",
    "ead_id": "ms042",
    "ead_location": "https://example.org/ead/ms042",
    "finding_aid_status": "completed",
    "repository": {
        "name": "City Archives",
        "country": "CA",
        "repo_code": "CTA",
        "url": "https://archives.example.org",
    },
    "address_lines": ["100 Queen St W", "Toronto, ON"],
}


@dataclass(frozen=True, slots=True)
class RenderedDocument:
    text: str
    root: etree._Element
    stats: ExportStats

    def xpath(self, expression: str) -> list[Any]:
        return self.root.xpath(expression, namespaces=NS)


@pytest.fixture(autouse=True)
def _isolate_exporter_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep EAD_* variables from the developer's shell out of the tests."""
    for name in list(os.environ):
        if name.startswith(ConfigFiles.ENV_PREFIX):
            monkeypatch.delenv(name)


@pytest.fixture
def resource_payload() -> dict[str, Any]:
    return copy.deepcopy(BASE_RESOURCE)


@pytest.fixture
def make_resource() -> Callable[..., Resource]:
    def _make(**overrides: Any) -> Resource:
        payload = copy.deepcopy(BASE_RESOURCE)
        payload.update(overrides)
        return Resource.model_validate(payload)

    return _make


@pytest.fixture
def render_ead() -> Callable[..., RenderedDocument]:
    """Render a resource and parse the result with lxml."""

    def _render(
        resource: Resource,
        *,
        steps: Sequence[Any] = (),
        logger: Any = None,
        translator: Any = None,
        **config_overrides: Any,
    ) -> RenderedDocument:
        serializer = EADSerializer(
            config=ExporterConfig(**config_overrides),
            steps=steps,
            translator=translator,
            logger=logger,
            generated_at=GENERATED_AT,
        )
        export = serializer.stream(resource)
        text = "".join(export)
        root = etree.fromstring(text.encode("utf-8"))
        return RenderedDocument(text=text, root=root, stats=export.stats)

    return _render
