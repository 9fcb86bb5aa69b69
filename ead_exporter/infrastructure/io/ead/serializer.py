"""EAD 2002 serializer.

Walks a :class:`Resource` top-down (``ead -> eadheader -> archdesc/did ->
archdesc body -> dsc -> c...``) and records events on an
:class:`XmlWriter`. The eadheader and every component are rendered through
:meth:`StreamHandler.buffer`, so each child is only validated and rendered
when the output reaches it.

Two containment boundaries keep a bad record from aborting the export: the
archdesc body as a whole and each component. A failure inside either is
rolled back to the boundary and replaced by a diagnostic text block.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from datetime import datetime
from functools import partial
from itertools import count
import traceback
from typing import TYPE_CHECKING

from ....application.models import ExportStats
from ....application.ports.steps import HookContext
from ....config import ExporterConfig
from ....constants import (
    Constraints,
    EncodingAnalogs,
    ErrorMessages,
    HeaderEncodings,
    Labels,
    Namespaces,
)
from ....domain.entities.records import (
    ChronologySubnote,
    DefinedListSubnote,
    OrderedListSubnote,
    TextSubnote,
)
from ....domain.services.content_sanitizer import (
    EmissionPath,
    emit_mixed_content,
    extract_head_text,
    extract_note_text,
    strip_illegal_chars,
)
from ....domain.services.vocabulary import (
    PHYSDESC_WRAPPED_NOTE_TYPES,
    date_encoding_analog,
    format_extent_type,
    include_paragraphs,
    is_headless_note,
    note_encoding_analog,
    origination_encoding_analog,
    origination_node_name,
    partition_controlaccess,
    upcase_initial_char,
)
from ...logging import NullLogger
from ...repositories.label_repository import LabelRepository
from .elements import EADElement, component_element
from .stream import AppendOnlyWriter, FragmentStore, StreamHandler, XmlWriter

if TYPE_CHECKING:
    from ....application.ports.services import LoggerPort, TranslatorPort
    from ....application.ports.steps import SerializeStep
    from ....domain.entities.records import (
        ArchivalObject,
        DigitalObject,
        FileVersion,
        Instance,
        Note,
        Resource,
        Subnote,
    )

E = EADElement


def _audience(publish: bool | None) -> str | None:
    return "internal" if publish is False else None


def _record_id(record: ArchivalObject) -> str:
    return record.ref_id or record.component_id or record.uri or record.title or "?"


class EADSerializer:
    pass

    def __init__(
        self,
        config: ExporterConfig | None = None,
        steps: Sequence[SerializeStep] = (),
        translator: TranslatorPort | None = None,
        logger: LoggerPort | None = None,
        generated_at: datetime | None = None,
    ) -> None:
        super().__init__()
        self.config = config or ExporterConfig()
        self.steps = tuple(steps)
        self.translator = translator or LabelRepository()
        self.logger = logger or NullLogger()
        self.generated_at = generated_at

    def stream(self, resource: Resource) -> EADExport:
        """Return a single-pass iterator over the document's text chunks."""
        return EADExport(self, resource)


class EADExport:
    """One export run.

    Holds everything that lives for the duration of a single document: the
    stream handler, the container id sequence and the render statistics.
    Iterating it renders the document; it can only be iterated once.
    """

    def __init__(self, serializer: EADSerializer, resource: Resource) -> None:
        super().__init__()
        self._serializer = serializer
        self._resource = resource
        self.config = serializer.config
        self.steps = serializer.steps
        self.translator = serializer.translator
        self.logger = serializer.logger
        self.handler = StreamHandler(serializer.config.chunk_size)
        self.stats = ExportStats()
        self._container_ids = count(1)
        self._chunks: Iterator[str] | None = None

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        if self._chunks is None:
            self._chunks = self._generate()
        return next(self._chunks)

    def _generate(self) -> Iterator[str]:
        writer = XmlWriter()
        fragments = FragmentStore()
        self._render_document(self._resource, writer, fragments)
        for chunk in self.handler.stream_out(writer):
            self.stats.characters += len(chunk)
            yield chunk

    # -- shared helpers ---------------------------------------------------

    def _hidden(self, publish: bool | None, suppressed: bool = False) -> bool:
        if suppressed:
            return True
        return publish is False and not self.config.include_unpublished

    def _emit(
        self,
        content: str | None,
        writer: XmlWriter,
        fragments: FragmentStore,
        allow_paragraphs: bool = False,
    ) -> None:
        path = emit_mixed_content(content, writer, fragments, allow_paragraphs)
        if path is EmissionPath.CDATA:
            self.stats.cdata_fallbacks += 1
            self.logger.debug(f"Wrote value as CDATA: {(content or '')[:60]!r}")

    def _prefix_id(self, value: str | None) -> str | None:
        if not self.config.emit_component_ids:
            return None
        if not value or value == "null":
            return None
        prefix = self.config.id_prefix
        return value if value.startswith(prefix) else f"{prefix}{value}"

    def _translate(self, group: str, code: str) -> str:
        return self.translator.translate(f"enumerations.{group}.{code}", code)

    def _run_steps(
        self,
        record: ArchivalObject,
        writer: XmlWriter,
        fragments: FragmentStore,
        context: HookContext,
    ) -> None:
        if not self.steps:
            return
        view = AppendOnlyWriter(writer)
        for step in self.steps:
            step(record, view, fragments, context)

    def _write_diagnostic(
        self, writer: XmlWriter, headline: str, exc: BaseException
    ) -> None:
        trace = [
            f"{frame.filename}:{frame.lineno}:in `{frame.name}'"
            for frame in traceback.extract_tb(exc.__traceback__)
        ]
        writer.text(
            strip_illegal_chars(
                f"{headline}\nMESSAGE: {str(exc)!r}\nTRACE: {trace!r}\n"
            )
        )

    # -- document ---------------------------------------------------------

    def _render_document(
        self, resource: Resource, writer: XmlWriter, fragments: FragmentStore
    ) -> None:
        attributes = {
            "xmlns": Namespaces.EAD,
            "xmlns:xsi": Namespaces.XSI,
            "xsi:schemaLocation": Namespaces.SCHEMA_LOCATION,
            "xmlns:xlink": Namespaces.XLINK,
            "audience": _audience(resource.publish),
        }
        with writer.element(E.EAD, attributes):
            writer.text(self.handler.buffer(partial(self._render_header_section, resource)))
            mark = writer.mark()
            try:
                self._render_archdesc(resource, writer, fragments)
            except Exception as exc:
                writer.rollback(mark)
                self._write_diagnostic(writer, ErrorMessages.RESOURCE_HEADLINE, exc)
                self.stats.record_failure("resource", _record_id(resource), str(exc))
                self.logger.error(f"Resource {_record_id(resource)} failed to render: {exc}")

    def _render_header_section(
        self, resource: Resource, writer: XmlWriter, fragments: FragmentStore
    ) -> None:
        mark = writer.mark()
        try:
            self._render_eadheader(resource, writer, fragments)
        except Exception as exc:
            writer.rollback(mark)
            self._write_diagnostic(writer, ErrorMessages.HEADER_HEADLINE, exc)
            self.stats.record_failure("eadheader", _record_id(resource), str(exc))
            self.logger.error(f"EAD header failed to render: {exc}")

    def _render_archdesc(
        self, resource: Resource, writer: XmlWriter, fragments: FragmentStore
    ) -> None:
        with writer.element(
            E.ARCHDESC, {"level": resource.level, "otherlevel": resource.other_level}
        ):
            with writer.element(E.DID):
                self._render_resource_did(resource, writer, fragments)
                self._run_steps(resource, writer, fragments, HookContext.DID)
            self._render_description_body(resource, writer, fragments, include_daos=True)
            self._run_steps(resource, writer, fragments, HookContext.ARCHDESC)
            with writer.element(E.DSC):
                for index in resource.children_indexes:
                    writer.text(
                        self.handler.buffer(
                            partial(self._render_child_section, resource, index, 1)
                        )
                    )

    def _render_resource_did(
        self, resource: Resource, writer: XmlWriter, fragments: FragmentStore
    ) -> None:
        if language := resource.language:
            with writer.element(E.LANGMATERIAL):
                with writer.element(E.LANGUAGE, {"langcode": language}):
                    writer.text(self._translate("language_iso639_2", language))

        repository = resource.repository
        if repository.name:
            with writer.element(
                E.REPOSITORY,
                {"label": Labels.REPOSITORY, "encodinganalog": EncodingAnalogs.REPOSITORY},
            ):
                with writer.element(E.CORPNAME):
                    self._emit(repository.name, writer, fragments)

        if resource.title:
            with writer.element(
                E.UNITTITLE, {"label": Labels.TITLE, "encodinganalog": EncodingAnalogs.TITLE}
            ):
                self._emit(resource.title, writer, fragments)

        self._render_origination(resource, writer, fragments)

        if identifier := resource.identifier:
            unitid_attributes = {
                "countrycode": repository.country,
                "repositorycode": repository.repo_code,
                "encodinganalog": EncodingAnalogs.UNITID,
                "label": Labels.IDENTIFICATION,
            }
            with writer.element(E.UNITID, unitid_attributes):
                writer.text(identifier)

        self._render_external_ids(resource, writer)
        self._render_extents(resource, writer, fragments, drop_zero=True, combine=False)
        self._render_dates(resource, writer, fragments)
        self._render_did_notes(resource, writer, fragments)
        self._render_containers(resource, writer, fragments)

    def _render_description_body(
        self,
        record: ArchivalObject,
        writer: XmlWriter,
        fragments: FragmentStore,
        *,
        include_daos: bool,
    ) -> None:
        # Resource-level digital objects are always exported; the config
        # switch only governs components.
        if include_daos:
            for digital_object in record.digital_objects:
                self._render_digital_object(digital_object, writer, fragments)
        self._render_nondid_notes(record, writer, fragments)
        self._render_bibliographies(record, writer, fragments)
        self._render_indexes(record, writer, fragments)
        self._render_controlaccess(record, writer, fragments)

    # -- components -------------------------------------------------------

    def _render_child_section(
        self,
        parent: ArchivalObject,
        index: int,
        depth: int,
        writer: XmlWriter,
        fragments: FragmentStore,
    ) -> None:
        mark = writer.mark()
        record_id = f"{_record_id(parent)}/{index}"
        try:
            child = parent.get_child(index)
            record_id = _record_id(child)
            self._render_component(child, writer, fragments, depth)
        except Exception as exc:
            writer.rollback(mark)
            self._write_diagnostic(writer, ErrorMessages.COMPONENT_HEADLINE, exc)
            self.stats.record_failure("component", record_id, str(exc))
            self.logger.log_component_failure(record_id, str(exc))

    def _render_component(
        self,
        record: ArchivalObject,
        writer: XmlWriter,
        fragments: FragmentStore,
        depth: int,
    ) -> None:
        if self._hidden(record.publish, record.suppressed):
            self.stats.skipped_components += 1
            return

        tag = component_element(depth, self.config.use_numbered_c_tags)
        attributes = {
            "level": record.level,
            "otherlevel": record.other_level,
            "id": self._prefix_id(record.ref_id),
            "audience": _audience(record.publish),
        }
        with writer.element(tag, attributes):
            with writer.element(E.DID):
                if record.title:
                    with writer.element(E.UNITTITLE):
                        self._emit(record.title, writer, fragments)
                if record.component_id:
                    with writer.element(E.UNITID):
                        writer.text(record.component_id)
                self._render_external_ids(record, writer)
                self._render_origination(record, writer, fragments)
                self._render_extents(record, writer, fragments, drop_zero=False, combine=True)
                self._render_dates(record, writer, fragments)
                self._render_did_notes(record, writer, fragments)
                self._render_containers(record, writer, fragments)
                self._run_steps(record, writer, fragments, HookContext.DID)
            self._render_description_body(
                record, writer, fragments, include_daos=self.config.include_daos
            )
            self._run_steps(record, writer, fragments, HookContext.ARCHDESC)
            for index in record.children_indexes:
                writer.text(
                    self.handler.buffer(
                        partial(self._render_child_section, record, index, depth + 1)
                    )
                )
        self.stats.components += 1

    # -- did content ------------------------------------------------------

    def _render_external_ids(self, record: ArchivalObject, writer: XmlWriter) -> None:
        if not self.config.include_unpublished:
            return
        for external_id in record.external_ids:
            attributes = {
                "audience": "internal",
                "type": external_id.source,
                "identifier": external_id.external_id,
            }
            with writer.element(E.UNITID, attributes):
                writer.text(external_id.external_id)

    def _render_origination(
        self, record: ArchivalObject, writer: XmlWriter, fragments: FragmentStore
    ) -> None:
        for link in record.creators_and_sources:
            agent = link.agent
            if self._hidden(agent.publish):
                continue
            node_name = origination_node_name(agent.agent_type)
            if node_name is None:
                self.logger.debug(f"Skipping origination with agent type {agent.agent_type!r}")
                continue
            name = agent.display_name
            attributes = {
                "role": link.relator,
                "source": name.source,
                "rules": name.rules,
                "authfilenumber": name.authority_id,
                "encodinganalog": origination_encoding_analog(node_name),
            }
            with writer.element(E.ORIGINATION, {"label": upcase_initial_char(link.role)}):
                with writer.element(node_name, attributes):
                    self._emit(name.sort_name, writer, fragments)

    def _extent_statements(self, record: ArchivalObject, drop_zero: bool) -> list[str]:
        statements: list[str] = []
        for extent in record.extents:
            if self._hidden(extent.publish):
                continue
            quantity = extent.quantity
            if drop_zero and quantity == 0.0:
                continue
            statement = f"{extent.number} {format_extent_type(quantity, extent.extent_type)}"
            details = [
                detail
                for detail in (
                    extent.container_summary,
                    extent.physical_details,
                    extent.dimensions,
                )
                if detail
            ]
            if details:
                statement += f" ({'; '.join(details)})"
            statements.append(statement)
        return statements

    def _render_extents(
        self,
        record: ArchivalObject,
        writer: XmlWriter,
        fragments: FragmentStore,
        *,
        drop_zero: bool,
        combine: bool,
    ) -> None:
        statements = self._extent_statements(record, drop_zero)
        if not statements:
            return
        if combine:
            statements = [", ".join(statements)]
        attributes = {"label": Labels.EXTENT, "encodinganalog": EncodingAnalogs.EXTENT}
        for statement in statements:
            with writer.element(E.PHYSDESC, attributes):
                with writer.element(E.EXTENT):
                    self._emit(statement, writer, fragments)

    def _render_dates(
        self, record: ArchivalObject, writer: XmlWriter, fragments: FragmentStore
    ) -> None:
        dates = [date for date in record.dates if not self._hidden(date.publish)]
        last = len(dates) - 1
        for position, date in enumerate(dates):
            attributes: dict[str, object] = dict(date.attributes)
            attributes["audience"] = _audience(date.publish)
            attributes["encodinganalog"] = date_encoding_analog(date.date_type)
            content = date.content if position == last else f"{date.content}, "
            with writer.element(E.UNITDATE, attributes):
                self._emit(content, writer, fragments)

    def _render_did_notes(
        self, record: ArchivalObject, writer: XmlWriter, fragments: FragmentStore
    ) -> None:
        for note in record.notes:
            if self._hidden(note.publish) or note.type not in record.did_note_types:
                continue
            content = extract_note_text(note, self.config.include_unpublished)
            allow_paragraphs = include_paragraphs(note.type)
            attributes = {"encodinganalog": note_encoding_analog(note.type)}
            audience = {"audience": _audience(note.publish)}
            if note.type in PHYSDESC_WRAPPED_NOTE_TYPES:
                with writer.element(E.PHYSDESC, audience):
                    with writer.element(note.type, attributes):
                        self._emit(content, writer, fragments, allow_paragraphs)
            else:
                with writer.element(note.type, attributes | audience):
                    self._emit(content, writer, fragments, allow_paragraphs)

    def _render_containers(
        self, record: ArchivalObject, writer: XmlWriter, fragments: FragmentStore
    ) -> None:
        for instance in record.instances_with_sub_containers:
            self._render_container(instance, writer, fragments)

    def _render_container(
        self, instance: Instance, writer: XmlWriter, fragments: FragmentStore
    ) -> None:
        sub_container = instance.sub_container
        if sub_container is None:
            return
        top = sub_container.top_container
        levels = sub_container.levels()[: Constraints.MAX_CONTAINER_LEVELS]
        parent_id: str | None = None
        for level, (container_type, indicator) in enumerate(levels, 1):
            if not container_type or not indicator:
                continue
            container_id = None
            if self.config.generate_container_ids:
                container_id = f"{self.config.id_prefix}container_{next(self._container_ids)}"
            attributes: dict[str, object] = {
                "id": container_id,
                "parent": parent_id,
                "type": container_type,
            }
            text = indicator
            if level == 1:
                attributes["label"] = self._translate(
                    "instance_instance_type", instance.instance_type
                )
                if top.barcode:
                    text = f"{indicator} [{top.barcode}]"
                if profile := top.container_profile:
                    attributes["altrender"] = profile.url or profile.name
            with writer.element(E.CONTAINER, attributes):
                self._emit(text, writer, fragments)
            self.stats.containers += 1
            parent_id = container_id

    # -- digital objects --------------------------------------------------

    def _file_version_audience(self, file_version: FileVersion) -> str:
        if (
            file_version.file_uri
            and file_version.publish is False
            and self.config.include_unpublished
        ):
            return "internal"
        return "external"

    @staticmethod
    def _digital_object_description(digital_object: DigitalObject) -> str:
        description = digital_object.title or ""
        date = digital_object.dates[0] if digital_object.dates else None
        if date is None or not (date.expression or date.begin):
            return description
        description += ": "
        if date.expression:
            return description + date.expression
        description += date.begin or ""
        if date.end and date.end != date.begin:
            description += f"-{date.end}"
        return description

    def _render_digital_object(
        self, digital_object: DigitalObject, writer: XmlWriter, fragments: FragmentStore
    ) -> None:
        if self._hidden(digital_object.publish, digital_object.suppressed):
            return
        versions = [
            version
            for version in digital_object.file_versions
            if not self._hidden(version.publish)
        ]
        description = self._digital_object_description(digital_object)
        base: dict[str, object] = {
            "audience": _audience(digital_object.publish),
            "xlink:title": digital_object.title,
        }

        if len(versions) <= 1:
            if not versions:
                attributes = base | {
                    "xlink:type": "simple",
                    "xlink:href": digital_object.digital_object_id,
                    "xlink:actuate": "onRequest",
                    "xlink:show": "new",
                }
            else:
                version = versions[0]
                attributes = base | {
                    "xlink:type": "simple",
                    "xlink:actuate": version.xlink_actuate_attribute or "onRequest",
                    "xlink:show": version.xlink_show_attribute or "new",
                    "xlink:role": version.use_statement,
                    "xlink:href": version.file_uri,
                    "xlink:audience": self._file_version_audience(version),
                }
            with writer.element(E.DAO, attributes):
                self._render_daodesc(description, writer, fragments)
        else:
            with writer.element(E.DAOGRP, base | {"xlink:type": "extended"}):
                self._render_daodesc(description, writer, fragments)
                for version in versions:
                    writer.empty(
                        E.DAOLOC,
                        {
                            "audience": base["audience"],
                            "xlink:type": "locator",
                            "xlink:href": version.file_uri,
                            "xlink:role": version.use_statement,
                            "xlink:title": version.caption or digital_object.title,
                            "xlink:audience": self._file_version_audience(version),
                        },
                    )
        self.stats.digital_objects += 1

    def _render_daodesc(
        self, description: str, writer: XmlWriter, fragments: FragmentStore
    ) -> None:
        if not description:
            return
        with writer.element(E.DAODESC):
            self._emit(description, writer, fragments, True)

    # -- notes ------------------------------------------------------------

    def _render_nondid_notes(
        self, record: ArchivalObject, writer: XmlWriter, fragments: FragmentStore
    ) -> None:
        for note in record.notes:
            if self._hidden(note.publish) or note.internal or note.type is None:
                continue
            if note.type not in record.archdesc_note_types:
                continue
            if note.type == "legalstatus":
                with writer.element(E.ACCESSRESTRICT, {"audience": _audience(note.publish)}):
                    self._render_note_content(note, writer, fragments)
            else:
                self._render_note_content(note, writer, fragments)

    def _render_note_content(
        self, note: Note, writer: XmlWriter, fragments: FragmentStore
    ) -> None:
        note_type = note.type or "odd"
        allow_paragraphs = include_paragraphs(note_type)
        head_text = note.label or self._translate("_note_types", note_type)
        content, head_text = extract_head_text("\n\n".join(note.content), head_text)
        attributes = {
            "id": self._prefix_id(note.persistent_id),
            "encodinganalog": note_encoding_analog(note_type),
            "audience": _audience(note.publish),
        }
        with writer.element(note_type, attributes):
            if not is_headless_note(note_type, content):
                with writer.element(E.HEAD):
                    self._emit(head_text, writer, fragments)
            self._emit(content, writer, fragments, allow_paragraphs)
            self._render_subnotes(note.subnotes, writer, fragments, allow_paragraphs)

    def _render_subnotes(
        self,
        subnotes: Sequence[Subnote],
        writer: XmlWriter,
        fragments: FragmentStore,
        allow_paragraphs: bool,
    ) -> None:
        for subnote in subnotes:
            if self._hidden(subnote.publish):
                continue
            audience = _audience(subnote.publish)
            match subnote:
                case TextSubnote():
                    self._emit(subnote.content, writer, fragments, allow_paragraphs)
                case ChronologySubnote():
                    self._render_chronology(subnote, audience, writer, fragments)
                case OrderedListSubnote():
                    self._render_ordered_list(subnote, audience, writer, fragments)
                case DefinedListSubnote():
                    self._render_defined_list(subnote, audience, writer, fragments)

    def _render_list_head(
        self, title: str | None, writer: XmlWriter, fragments: FragmentStore
    ) -> None:
        if title:
            with writer.element(E.HEAD):
                self._emit(title, writer, fragments)

    def _render_chronology(
        self,
        subnote: ChronologySubnote,
        audience: str | None,
        writer: XmlWriter,
        fragments: FragmentStore,
    ) -> None:
        with writer.element(E.CHRONLIST, {"audience": audience}):
            self._render_list_head(subnote.title, writer, fragments)
            for item in subnote.items:
                with writer.element(E.CHRONITEM):
                    if item.event_date:
                        with writer.element(E.DATE):
                            self._emit(item.event_date, writer, fragments)
                    if item.events:
                        with writer.element(E.EVENTGRP):
                            for event in item.events:
                                with writer.element(E.EVENT):
                                    self._emit(event, writer, fragments)

    def _render_ordered_list(
        self,
        subnote: OrderedListSubnote,
        audience: str | None,
        writer: XmlWriter,
        fragments: FragmentStore,
    ) -> None:
        numeration = subnote.enumeration if subnote.enumeration != "null" else None
        attributes = {"type": "ordered", "numeration": numeration, "audience": audience}
        with writer.element(E.LIST, attributes):
            self._render_list_head(subnote.title, writer, fragments)
            for item in subnote.items:
                with writer.element(E.ITEM):
                    if isinstance(item, str):
                        self._emit(item, writer, fragments)
                    else:
                        self._render_subnotes([item], writer, fragments, False)

    def _render_defined_list(
        self,
        subnote: DefinedListSubnote,
        audience: str | None,
        writer: XmlWriter,
        fragments: FragmentStore,
    ) -> None:
        with writer.element(E.LIST, {"type": "deflist", "audience": audience}):
            self._render_list_head(subnote.title, writer, fragments)
            for item in subnote.items:
                with writer.element(E.DEFITEM):
                    if item.label:
                        with writer.element(E.LABEL):
                            self._emit(item.label, writer, fragments)
                    if item.value:
                        with writer.element(E.ITEM):
                            self._emit(item.value, writer, fragments)

    def _render_bibliographies(
        self, record: ArchivalObject, writer: XmlWriter, fragments: FragmentStore
    ) -> None:
        for note in record.bibliographies:
            if self._hidden(note.publish):
                continue
            note_type = note.type or "bibliography"
            content = extract_note_text(note, self.config.include_unpublished)
            head_text = note.label or self._translate("_note_types", note_type)
            attributes = {
                "id": self._prefix_id(note.persistent_id),
                "encodinganalog": note_encoding_analog("bibliography"),
                "audience": _audience(note.publish),
            }
            with writer.element(E.BIBLIOGRAPHY, attributes):
                with writer.element(E.HEAD):
                    self._emit(head_text, writer, fragments)
                self._emit(content, writer, fragments, True)
                for item in note.items:
                    if not item:
                        continue
                    with writer.element(E.BIBREF):
                        self._emit(item, writer, fragments)

    def _render_indexes(
        self, record: ArchivalObject, writer: XmlWriter, fragments: FragmentStore
    ) -> None:
        item_types = record.index_item_type_map
        for note in record.indexes:
            if self._hidden(note.publish):
                continue
            content = extract_note_text(note, self.config.include_unpublished)
            head_text: str | None = None
            if note.label:
                head_text = note.label
            elif note.type:
                head_text = self._translate("_note_types", note.type)
            content, head_text = extract_head_text(content, head_text or "")
            attributes = {
                "id": self._prefix_id(note.persistent_id),
                "audience": _audience(note.publish),
            }
            with writer.element(E.INDEX, attributes):
                if head_text:
                    with writer.element(E.HEAD):
                        self._emit(head_text, writer, fragments)
                self._emit(content, writer, fragments, True)
                for item in note.items:
                    node_name = item_types.get(item.type)
                    if node_name is None:
                        continue
                    with writer.element(E.INDEXENTRY):
                        if item.value:
                            with writer.element(node_name):
                                self._emit(item.value, writer, fragments)
                        if item.reference_text:
                            with writer.element(
                                E.REF, {"target": self._prefix_id(item.reference)}
                            ):
                                self._emit(item.reference_text, writer, fragments)

    def _render_controlaccess(
        self, record: ArchivalObject, writer: XmlWriter, fragments: FragmentStore
    ) -> None:
        partitions = partition_controlaccess(
            record.controlaccess_subjects,
            record.controlaccess_linked_agents,
            sort=self.config.sort_controlaccess,
        )
        if not partitions:
            return
        with writer.element(E.CONTROLACCESS):
            with writer.element(E.HEAD):
                writer.text(Labels.INDEX_TERMS)
            for bucket, members in partitions:
                with writer.element(E.CONTROLACCESS):
                    with writer.element(E.HEAD):
                        writer.text(bucket.head)
                    for term in members:
                        attributes = term.attributes | {
                            "encodinganalog": bucket.encoding_analog
                        }
                        with writer.element(term.node_name, attributes):
                            self._emit(
                                term.content,
                                writer,
                                fragments,
                                include_paragraphs(term.node_name),
                            )

    # -- eadheader --------------------------------------------------------

    def _creation_statement(self) -> str:
        generated_at = self._serializer.generated_at or datetime.now().astimezone()
        timestamp = generated_at.isoformat(sep=" ", timespec="seconds")
        return (
            f"This finding aid was produced using {self.config.creation_application} "
            f"on <date>{timestamp}</date>."
        )

    def _render_eadheader(
        self, resource: Resource, writer: XmlWriter, fragments: FragmentStore
    ) -> None:
        repository = resource.repository
        header_attributes = {
            "findaidstatus": resource.finding_aid_status,
            "repositoryencoding": HeaderEncodings.REPOSITORY,
            "countryencoding": HeaderEncodings.COUNTRY,
            "dateencoding": HeaderEncodings.DATE,
            "langencoding": HeaderEncodings.LANGUAGE,
        }
        with writer.element(E.EADHEADER, header_attributes):
            eadid_attributes = {
                "countrycode": repository.country,
                "url": resource.ead_location,
                "mainagencycode": repository.repo_code,
                "encodinganalog": EncodingAnalogs.EADID,
            }
            with writer.element(E.EADID, eadid_attributes):
                writer.text(resource.ead_id or "")

            with writer.element(E.FILEDESC):
                self._render_titlestmt(resource, writer, fragments)
                if resource.finding_aid_edition_statement is not None:
                    with writer.element(E.EDITIONSTMT):
                        self._emit(
                            resource.finding_aid_edition_statement, writer, fragments, True
                        )
                self._render_publicationstmt(resource, writer, fragments)
                if resource.finding_aid_series_statement:
                    with writer.element(E.SERIESSTMT):
                        self._emit(
                            resource.finding_aid_series_statement, writer, fragments, True
                        )
                if resource.finding_aid_note:
                    with writer.element(E.NOTESTMT):
                        with writer.element(E.NOTE):
                            self._emit(resource.finding_aid_note, writer, fragments, True)

            with writer.element(E.PROFILEDESC):
                with writer.element(E.CREATION):
                    self._emit(self._creation_statement(), writer, fragments)
                if resource.finding_aid_language:
                    with writer.element(E.LANGUSAGE):
                        self._emit(resource.finding_aid_language, writer, fragments)
                if resource.finding_aid_description_rules:
                    with writer.element(E.DESCRULES):
                        self._emit(resource.finding_aid_description_rules, writer, fragments)

            if resource.revision_statements:
                with writer.element(E.REVISIONDESC):
                    for revision in resource.revision_statements:
                        description = revision.description
                        if description and description.strip().startswith("<"):
                            self._emit(description, writer, fragments)
                            continue
                        with writer.element(E.CHANGE):
                            with writer.element(E.DATE):
                                self._emit(revision.date, writer, fragments)
                            if description:
                                with writer.element(E.ITEM):
                                    self._emit(description, writer, fragments)

    def _render_titlestmt(
        self, resource: Resource, writer: XmlWriter, fragments: FragmentStore
    ) -> None:
        with writer.element(E.TITLESTMT):
            with writer.element(E.TITLEPROPER):
                self._emit(
                    resource.finding_aid_title or resource.title, writer, fragments
                )
            optional = (
                (E.SUBTITLE, resource.finding_aid_subtitle),
                (E.AUTHOR, resource.finding_aid_author),
                (E.SPONSOR, resource.finding_aid_sponsor),
            )
            for element, value in optional:
                if value is None:
                    continue
                with writer.element(element):
                    self._emit(value, writer, fragments)

    def _render_publicationstmt(
        self, resource: Resource, writer: XmlWriter, fragments: FragmentStore
    ) -> None:
        repository = resource.repository
        with writer.element(E.PUBLICATIONSTMT):
            with writer.element(E.PUBLISHER):
                self._emit(repository.name, writer, fragments)
            if repository.image_url:
                with writer.element(E.P, {"id": "logostmt"}):
                    writer.empty(
                        E.EXTREF,
                        {
                            "xlink:href": repository.image_url,
                            "xlink:actuate": "onLoad",
                            "xlink:show": "embed",
                            "xlink:type": "simple",
                        },
                    )
            if resource.finding_aid_date:
                with writer.element(E.P):
                    with writer.element(E.DATE):
                        self._emit(resource.finding_aid_date, writer, fragments)
            if resource.address_lines:
                with writer.element(E.ADDRESS):
                    for line in resource.address_lines:
                        with writer.element(E.ADDRESSLINE):
                            self._emit(line, writer, fragments)
                    if repository.url:
                        with writer.element(E.ADDRESSLINE):
                            writer.text(Labels.URL_PREFIX)
                            writer.empty(
                                E.EXTPTR,
                                {
                                    "xlink:href": repository.url,
                                    "xlink:title": repository.url,
                                    "xlink:type": "simple",
                                    "xlink:show": "new",
                                },
                            )
