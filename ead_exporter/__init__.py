"""EAD Exporter package.

Serializes archival description records (a resource and its nested
components) into EAD 2002 finding aids.

Features:
- Streamed output; components render one subtree at a time
- Sanitized mixed content with raw, escaped and CDATA emission paths
- Per-component failure containment with in-document diagnostics
- Configurable unpublished, digital object and numbered component output
"""

from importlib.metadata import PackageNotFoundError, version

try:  # pragma: no cover
    __version__ = version("ead-exporter")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

from ead_exporter.config import ConfigLoader, ExporterConfig
from ead_exporter.domain.entities.records import ArchivalObject, Resource
from ead_exporter.infrastructure.io.ead.serializer import EADExport, EADSerializer

__all__ = [
    "ArchivalObject",
    "ConfigLoader",
    "EADExport",
    "EADSerializer",
    "ExporterConfig",
    "Resource",
    "__version__",
]
