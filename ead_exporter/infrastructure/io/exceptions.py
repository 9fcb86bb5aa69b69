class ExporterInfrastructureError(Exception):
    pass


class RecordSourceError(ExporterInfrastructureError):
    pass


class RecordNotFoundError(RecordSourceError):
    pass


class RecordLoadError(RecordSourceError):
    pass


class EADExportError(RuntimeError):
    """Raised when an EAD document cannot be rendered."""


class InvalidElementError(EADExportError):
    """Raised for element or attribute names outside the EAD vocabulary."""


class InvalidCharacterError(EADExportError, ValueError):
    pass


class EADWriteError(ExporterInfrastructureError):
    pass
