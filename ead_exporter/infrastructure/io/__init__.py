"""Infrastructure I/O layer.

Adapters for writing EAD documents and the exceptions raised while loading
records or rendering them.

Internal modules import from the defining modules to avoid cycles.
"""

from .ead_writer import EADFileWriter, write_ead_file
from .exceptions import (
    EADExportError,
    EADWriteError,
    ExporterInfrastructureError,
    InvalidCharacterError,
    InvalidElementError,
    RecordLoadError,
    RecordNotFoundError,
    RecordSourceError,
)

__all__ = [
    "EADExportError",
    "EADFileWriter",
    "EADWriteError",
    "ExporterInfrastructureError",
    "InvalidCharacterError",
    "InvalidElementError",
    "RecordLoadError",
    "RecordNotFoundError",
    "RecordSourceError",
    "write_ead_file",
]
