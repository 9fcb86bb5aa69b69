from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
import os
from pathlib import Path
import tomllib
from typing import cast
import warnings

from .constants import ConfigFiles, Defaults

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True, slots=True)
class ExporterConfig:
    include_unpublished: bool = Defaults.INCLUDE_UNPUBLISHED
    include_daos: bool = Defaults.INCLUDE_DAOS
    use_numbered_c_tags: bool = Defaults.USE_NUMBERED_C_TAGS
    sort_controlaccess: bool = Defaults.SORT_CONTROLACCESS
    emit_component_ids: bool = Defaults.EMIT_COMPONENT_IDS
    generate_container_ids: bool = Defaults.GENERATE_CONTAINER_IDS
    id_prefix: str = Defaults.ID_PREFIX
    chunk_size: int = Defaults.CHUNK_SIZE
    creation_application: str = Defaults.CREATION_APPLICATION
    labels_file: Path | None = None

    def __post_init__(self) -> None:
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")
        if not self.id_prefix.strip():
            raise ValueError("id_prefix must not be blank")

    @classmethod
    def from_env(cls) -> ExporterConfig:
        prefix = ConfigFiles.ENV_PREFIX
        raw_labels = os.getenv(f"{prefix}LABELS_FILE")
        return cls(
            include_unpublished=_env_flag(
                f"{prefix}INCLUDE_UNPUBLISHED", Defaults.INCLUDE_UNPUBLISHED
            ),
            include_daos=_env_flag(f"{prefix}INCLUDE_DAOS", Defaults.INCLUDE_DAOS),
            use_numbered_c_tags=_env_flag(
                f"{prefix}USE_NUMBERED_C_TAGS", Defaults.USE_NUMBERED_C_TAGS
            ),
            sort_controlaccess=_env_flag(
                f"{prefix}SORT_CONTROLACCESS", Defaults.SORT_CONTROLACCESS
            ),
            emit_component_ids=_env_flag(
                f"{prefix}EMIT_COMPONENT_IDS", Defaults.EMIT_COMPONENT_IDS
            ),
            generate_container_ids=_env_flag(
                f"{prefix}GENERATE_CONTAINER_IDS", Defaults.GENERATE_CONTAINER_IDS
            ),
            id_prefix=os.getenv(f"{prefix}ID_PREFIX", Defaults.ID_PREFIX),
            chunk_size=int(os.getenv(f"{prefix}CHUNK_SIZE", str(Defaults.CHUNK_SIZE))),
            creation_application=os.getenv(
                f"{prefix}CREATION_APPLICATION", Defaults.CREATION_APPLICATION
            ),
            labels_file=Path(raw_labels) if raw_labels else None,
        )

    def with_overrides(self, **overrides: object) -> ExporterConfig:
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)


class ConfigLoader:
    pass

    @staticmethod
    def load(config_file: Path | None = None) -> ExporterConfig:
        config = ExporterConfig.from_env()
        if config_file is None:
            config_file = Path(ConfigFiles.DEFAULT_NAME)
        if config_file.exists():
            try:
                config = ConfigLoader._load_from_toml(config_file, config)
            except (OSError, ValueError, tomllib.TOMLDecodeError) as e:
                warnings.warn(
                    f"Failed to load config from {config_file}: {e}", stacklevel=2
                )
        return config

    @staticmethod
    def _load_from_toml(
        config_file: Path, base_config: ExporterConfig
    ) -> ExporterConfig:
        with config_file.open("rb") as handle:
            data = tomllib.load(handle)
        export = _get_table(data, "export")
        identifiers = _get_table(data, "identifiers")
        paths = _get_table(data, "paths")

        changes: dict[str, object] = {}
        for key in (
            "include_unpublished",
            "include_daos",
            "use_numbered_c_tags",
            "sort_controlaccess",
        ):
            if (value := export.get(key)) is not None:
                changes[key] = _coerce_bool(value, key=f"export.{key}")
        if (value := export.get("chunk_size")) is not None:
            changes["chunk_size"] = _coerce_int(value, key="export.chunk_size")
        if (value := export.get("creation_application")) is not None:
            changes["creation_application"] = str(value)

        for key in ("emit_component_ids", "generate_container_ids"):
            if (value := identifiers.get(key)) is not None:
                changes[key] = _coerce_bool(value, key=f"identifiers.{key}")
        if (value := identifiers.get("id_prefix")) is not None:
            changes["id_prefix"] = str(value)

        if value := paths.get("labels_file"):
            labels_file = Path(str(value))
            if not labels_file.is_absolute():
                labels_file = config_file.parent / labels_file
            changes["labels_file"] = labels_file

        return replace(base_config, **changes)


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return _coerce_bool(raw, key=name)


def _get_table(data: Mapping[str, object], key: str) -> Mapping[str, object]:
    value = data.get(key)
    if isinstance(value, Mapping):
        return cast("Mapping[str, object]", value)
    return {}


def _coerce_bool(value: object, *, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        cleaned = value.strip().lower()
        if cleaned in _TRUE_VALUES:
            return True
        if cleaned in _FALSE_VALUES:
            return False
    raise ValueError(f"{key} must be a boolean, got {value!r}")


def _coerce_int(value: object, *, key: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{key} must be an int, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        return int(value)
    raise ValueError(f"{key} must be int-like or string, got {type(value).__name__}")
