from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
import tomllib
from types import MappingProxyType
from typing import Final

from ..io.exceptions import RecordLoadError

DEFAULT_LABELS: Final[Mapping[str, str]] = MappingProxyType(
    {
        "enumerations._note_types.abstract": "Abstract",
        "enumerations._note_types.accessrestrict": "Conditions Governing Access",
        "enumerations._note_types.accruals": "Accruals",
        "enumerations._note_types.acqinfo": "Immediate Source of Acquisition",
        "enumerations._note_types.altformavail": "Existence and Location of Copies",
        "enumerations._note_types.appraisal": "Appraisal",
        "enumerations._note_types.arrangement": "Arrangement",
        "enumerations._note_types.bibliography": "Bibliography",
        "enumerations._note_types.bioghist": "Biographical / Historical",
        "enumerations._note_types.custodhist": "Custodial History",
        "enumerations._note_types.dimensions": "Dimensions",
        "enumerations._note_types.fileplan": "File Plan",
        "enumerations._note_types.index": "Index",
        "enumerations._note_types.langmaterial": "Language of Materials",
        "enumerations._note_types.legalstatus": "Legal Status",
        "enumerations._note_types.materialspec": "Materials Specific Details",
        "enumerations._note_types.odd": "General",
        "enumerations._note_types.originalsloc": "Existence and Location of Originals",
        "enumerations._note_types.otherfindaid": "Other Finding Aids",
        "enumerations._note_types.physdesc": "Physical Description",
        "enumerations._note_types.physfacet": "Physical Facet",
        "enumerations._note_types.physloc": "Physical Location",
        "enumerations._note_types.phystech": (
            "Physical Characteristics and Technical Requirements"
        ),
        "enumerations._note_types.prefercite": "Preferred Citation",
        "enumerations._note_types.processinfo": "Processing Information",
        "enumerations._note_types.relatedmaterial": "Related Materials",
        "enumerations._note_types.scopecontent": "Scope and Contents",
        "enumerations._note_types.separatedmaterial": "Separated Materials",
        "enumerations._note_types.userestrict": "Conditions Governing Use",
        "enumerations.instance_instance_type.audio": "Audio",
        "enumerations.instance_instance_type.books": "Books",
        "enumerations.instance_instance_type.computer_disks": "Computer Disks",
        "enumerations.instance_instance_type.digital_object": "Digital Object",
        "enumerations.instance_instance_type.graphic_materials": "Graphic Materials",
        "enumerations.instance_instance_type.maps": "Maps",
        "enumerations.instance_instance_type.microform": "Microform",
        "enumerations.instance_instance_type.mixed_materials": "Mixed Materials",
        "enumerations.instance_instance_type.moving_images": "Moving Images",
        "enumerations.instance_instance_type.realia": "Realia",
        "enumerations.instance_instance_type.text": "Text",
        "enumerations.language_iso639_2.eng": "English",
        "enumerations.language_iso639_2.fre": "French",
        "enumerations.language_iso639_2.ger": "German",
        "enumerations.language_iso639_2.spa": "Spanish",
    }
)


class LabelLoadError(RecordLoadError):
    pass


class LabelRepository:
    """Translates enumeration keys such as ``enumerations._note_types.odd``.

    Unknown keys fall back to the caller's default, so a missing label never
    stops an export.
    """

    def __init__(
        self, labels: Mapping[str, str] | None = None, *, use_defaults: bool = True
    ) -> None:
        super().__init__()
        self._labels: dict[str, str] = dict(DEFAULT_LABELS) if use_defaults else {}
        if labels:
            self._labels.update(labels)

    @classmethod
    def from_toml(cls, path: str | Path, *, use_defaults: bool = True) -> LabelRepository:
        file_path = Path(path)
        try:
            with file_path.open("rb") as handle:
                data = tomllib.load(handle)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise LabelLoadError(f"Failed to load labels from {file_path}: {exc}") from exc
        return cls(_flatten(data), use_defaults=use_defaults)

    def translate(self, key: str, default: str) -> str:
        return self._labels.get(key, default)

    def __contains__(self, key: object) -> bool:
        return key in self._labels

    def __len__(self) -> int:
        return len(self._labels)


def _flatten(data: Mapping[str, object], prefix: str = "") -> dict[str, str]:
    flat: dict[str, str] = {}
    for key, value in data.items():
        dotted = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(_flatten(value, dotted))
        else:
            flat[dotted] = str(value)
    return flat
