"""Read-only archival description records consumed by the EAD serializer.

Records are validated snapshots of the JSON payloads supplied by the record
store. Child components are kept as raw payloads and validated one at a time
through :meth:`ArchivalObject.get_child`, so a large tree is never
materialized as models all at once.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..services.vocabulary import (
    ARCHDESC_NOTE_TYPES,
    DID_NOTE_TYPES,
    INDEX_ITEM_TYPE_MAP,
    ORIGINATION_ROLES,
)


class RecordModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class ExternalId(RecordModel):
    external_id: str
    source: str | None = None


class TextSubnote(RecordModel):
    jsonmodel_type: Literal["note_text"] = "note_text"
    content: str = ""
    publish: bool | None = None


class ChronologyItem(RecordModel):
    event_date: str | None = None
    events: list[str] = Field(default_factory=list)


class ChronologySubnote(RecordModel):
    jsonmodel_type: Literal["note_chronology"] = "note_chronology"
    title: str | None = None
    items: list[ChronologyItem] = Field(default_factory=list)
    publish: bool | None = None


class DefinedListItem(RecordModel):
    label: str | None = None
    value: str | None = None


class DefinedListSubnote(RecordModel):
    jsonmodel_type: Literal["note_definedlist"] = "note_definedlist"
    title: str | None = None
    items: list[DefinedListItem] = Field(default_factory=list)
    publish: bool | None = None


class OrderedListSubnote(RecordModel):
    jsonmodel_type: Literal["note_orderedlist"] = "note_orderedlist"
    title: str | None = None
    enumeration: str | None = None
    items: list[str | OrderedListSubnote | DefinedListSubnote | ChronologySubnote] = (
        Field(default_factory=list)
    )
    publish: bool | None = None


Subnote = Annotated[
    TextSubnote | ChronologySubnote | OrderedListSubnote | DefinedListSubnote,
    Field(discriminator="jsonmodel_type"),
]


class Note(RecordModel):
    jsonmodel_type: Literal["note_singlepart", "note_multipart"] = "note_multipart"
    type: str | None = None
    label: str | None = None
    content: list[str] = Field(default_factory=list)
    subnotes: list[Subnote] = Field(default_factory=list)
    publish: bool | None = None
    internal: bool = False
    persistent_id: str | None = None

    @field_validator("content", mode="before")
    @classmethod
    def _wrap_single_content(cls, value: object) -> object:
        if isinstance(value, str):
            return [value]
        return value


class BibliographyNote(Note):
    jsonmodel_type: Literal["note_bibliography"] = "note_bibliography"
    items: list[str] = Field(default_factory=list)


class IndexItem(RecordModel):
    type: str
    value: str | None = None
    reference: str | None = None
    reference_text: str | None = None


class IndexNote(Note):
    jsonmodel_type: Literal["note_index"] = "note_index"
    items: list[IndexItem] = Field(default_factory=list)


class Extent(RecordModel):
    number: str
    extent_type: str
    portion: str | None = None
    container_summary: str | None = None
    physical_details: str | None = None
    dimensions: str | None = None
    publish: bool | None = None

    @field_validator("number", mode="before")
    @classmethod
    def _stringify_number(cls, value: object) -> object:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @property
    def quantity(self) -> float:
        try:
            return float(self.number)
        except ValueError:
            return 0.0


class DateRecord(RecordModel):
    content: str
    attributes: dict[str, str] = Field(default_factory=dict)
    publish: bool | None = None

    @property
    def date_type(self) -> str | None:
        return self.attributes.get("type")


class AgentDisplayName(RecordModel):
    sort_name: str
    rules: str | None = None
    source: str | None = None
    authority_id: str | None = None


class Agent(RecordModel):
    agent_type: str
    display_name: AgentDisplayName
    publish: bool | None = None


class OriginationLink(RecordModel):
    role: str
    relator: str | None = None
    agent: Agent


class ControlAccessTerm(RecordModel):
    node_name: str
    content: str
    attributes: dict[str, str] = Field(default_factory=dict)


class ContainerProfile(RecordModel):
    name: str | None = None
    url: str | None = None


class TopContainer(RecordModel):
    type: str | None = None
    indicator: str | None = None
    barcode: str | None = None
    container_profile: ContainerProfile | None = None


class SubContainer(RecordModel):
    top_container: TopContainer
    type_2: str | None = None
    indicator_2: str | None = None
    type_3: str | None = None
    indicator_3: str | None = None

    def levels(self) -> list[tuple[str | None, str | None]]:
        """Return ``(type, indicator)`` pairs from the top container down."""
        return [
            (self.top_container.type, self.top_container.indicator),
            (self.type_2, self.indicator_2),
            (self.type_3, self.indicator_3),
        ]


class DigitalObjectDate(RecordModel):
    expression: str | None = None
    begin: str | None = None
    end: str | None = None


class FileVersion(RecordModel):
    file_uri: str | None = None
    use_statement: str | None = None
    caption: str | None = None
    xlink_actuate_attribute: str | None = None
    xlink_show_attribute: str | None = None
    publish: bool | None = None


class DigitalObject(RecordModel):
    digital_object_id: str
    title: str | None = None
    dates: list[DigitalObjectDate] = Field(default_factory=list)
    file_versions: list[FileVersion] = Field(default_factory=list)
    publish: bool | None = None
    suppressed: bool = False


class Instance(RecordModel):
    instance_type: str = "mixed_materials"
    sub_container: SubContainer | None = None
    digital_object: DigitalObject | None = None


class ArchivalObject(RecordModel):
    uri: str | None = None
    level: str | None = None
    other_level: str | None = None
    title: str | None = None
    publish: bool | None = None
    suppressed: bool = False
    ref_id: str | None = None
    component_id: str | None = None
    external_ids: list[ExternalId] = Field(default_factory=list)
    instances: list[Instance] = Field(default_factory=list)
    notes: list[Note] = Field(default_factory=list)
    extents: list[Extent] = Field(default_factory=list)
    dates: list[DateRecord] = Field(default_factory=list)
    linked_agents: list[OriginationLink] = Field(default_factory=list)
    controlaccess_subjects: list[ControlAccessTerm] = Field(default_factory=list)
    controlaccess_linked_agents: list[ControlAccessTerm] = Field(default_factory=list)
    bibliographies: list[BibliographyNote] = Field(default_factory=list)
    indexes: list[IndexNote] = Field(default_factory=list)
    children: list[dict[str, Any]] = Field(default_factory=list, repr=False)

    @property
    def creators_and_sources(self) -> list[OriginationLink]:
        return [link for link in self.linked_agents if link.role in ORIGINATION_ROLES]

    @property
    def instances_with_sub_containers(self) -> list[Instance]:
        return [inst for inst in self.instances if inst.sub_container is not None]

    @property
    def digital_objects(self) -> list[DigitalObject]:
        return [
            inst.digital_object
            for inst in self.instances
            if inst.digital_object is not None
        ]

    @property
    def did_note_types(self) -> frozenset[str]:
        return DID_NOTE_TYPES

    @property
    def archdesc_note_types(self) -> frozenset[str]:
        return ARCHDESC_NOTE_TYPES

    @property
    def index_item_type_map(self) -> dict[str, str]:
        return dict(INDEX_ITEM_TYPE_MAP)

    @property
    def children_indexes(self) -> range:
        return range(len(self.children))

    def get_child(self, index: int) -> ArchivalObject:
        return ArchivalObject.model_validate(self.children[index])


class Repository(RecordModel):
    name: str | None = None
    country: str | None = None
    repo_code: str | None = None
    url: str | None = None
    image_url: str | None = None


class RevisionStatement(RecordModel):
    date: str | None = None
    description: str | None = None


class Resource(ArchivalObject):
    language: str | None = None
    repository: Repository = Field(default_factory=Repository)
    id_0: str | None = None
    id_1: str | None = None
    id_2: str | None = None
    id_3: str | None = None
    ead_id: str | None = None
    ead_location: str | None = None
    finding_aid_title: str | None = None
    finding_aid_subtitle: str | None = None
    finding_aid_author: str | None = None
    finding_aid_sponsor: str | None = None
    finding_aid_edition_statement: str | None = None
    finding_aid_series_statement: str | None = None
    finding_aid_note: str | None = None
    finding_aid_date: str | None = None
    finding_aid_language: str | None = None
    finding_aid_status: str | None = None
    finding_aid_description_rules: str | None = None
    revision_statements: list[RevisionStatement] = Field(default_factory=list)
    address_lines: list[str] = Field(default_factory=list)

    @property
    def identifier(self) -> str:
        parts = (self.id_0, self.id_1, self.id_2, self.id_3)
        return ".".join(part for part in parts if part)


OrderedListSubnote.model_rebuild()
