import json
from pathlib import Path

from pydantic import ValidationError

from ...domain.entities.records import Resource
from ..io.exceptions import RecordLoadError, RecordNotFoundError


class JsonRecordRepository:
    """Loads a resource tree from a JSON export of the record store.

    Child components stay as raw payloads on the resource and are validated
    one at a time while the document is rendered.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        super().__init__()
        self.encoding = encoding

    def load_resource(self, source: str | Path) -> Resource:
        file_path = Path(source)
        if not file_path.exists():
            raise RecordNotFoundError(f"Record file not found: {file_path}")
        try:
            with file_path.open("r", encoding=self.encoding) as handle:
                data = json.load(handle)
        except json.JSONDecodeError as exc:
            raise RecordLoadError(f"Invalid JSON in {file_path}: {exc}") from exc
        except OSError as exc:
            raise RecordLoadError(f"Failed to read {file_path}: {exc}") from exc
        return self.parse_resource(data, origin=str(file_path))

    def parse_resource(self, data: object, *, origin: str = "<memory>") -> Resource:
        if not isinstance(data, dict):
            raise RecordLoadError(
                f"{origin}: expected a JSON object, got {type(data).__name__}"
            )
        try:
            return Resource.model_validate(data)
        except ValidationError as exc:
            raise RecordLoadError(
                f"{origin}: invalid resource record ({exc.error_count()} errors)\n{exc}"
            ) from exc
