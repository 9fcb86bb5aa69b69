"""Controlled-vocabulary tables for the EAD export.

Every mapping from the flexible record vocabulary (note, date, extent and
agent types) to EAD element names and MARC encoding analogs lives here, so
the archdesc and component render paths share one table.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
import re
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from ..entities.records import ControlAccessTerm


# The two historical copies of this table disagreed; this is their union.
# "bibliography" appeared twice (581 and 510) and the first entry won.
NOTE_ENCODING_ANALOGS: Final[Mapping[str, str]] = MappingProxyType(
    {
        "bioghist": "545",
        "scopecontent": "520",
        "abstract": "520$a",
        "accessrestrict": "506",
        "prefercite": "524",
        "arrangement": "351",
        "altformavail": "530",
        "userestrict": "540",
        "acqinfo": "541",
        "relatedmaterial": "545",
        "langmaterial": "546",
        "custodhist": "561",
        "bibliography": "581",
        "processinfo": "583",
        "accruals": "584",
        "legalstatus": "355",
        "odd": "500",
        "note": "500",
        "materialspec": "254",
        "physdesc": "300",
        "physfacet": "300",
        "physloc": "300",
        "appraisal": "583",
        "separatedmaterial": "544",
    }
)

DATE_ENCODING_ANALOGS: Final[Mapping[str, str]] = MappingProxyType(
    {"inclusive": "245$f", "bulk": "245$g"}
)
DEFAULT_DATE_ENCODING_ANALOG: Final = "245"

SINGULAR_EXTENT_TYPES: Final[Mapping[str, str]] = MappingProxyType(
    {
        "linear_feet": "linear foot",
        "oversize folders": "oversize folder",
        "oversize volumes": "oversize volume",
        "volumes": "volume",
        "folders": "folder",
        "videotapes": "videotape",
        "audiotapes": "audiotape",
        "boxes": "box",
        "phonograph records": "phonograph record",
    }
)

AGENT_NODE_NAMES: Final[Mapping[str, str]] = MappingProxyType(
    {
        "agent_person": "persname",
        "agent_family": "famname",
        "agent_corporate_entity": "corpname",
    }
)
ORIGINATION_ROLES: Final = frozenset({"creator", "source"})

DID_NOTE_TYPES: Final = frozenset(
    {
        "abstract",
        "dimensions",
        "physdesc",
        "langmaterial",
        "physloc",
        "materialspec",
        "physfacet",
    }
)
ARCHDESC_NOTE_TYPES: Final = frozenset(
    {
        "accruals",
        "appraisal",
        "arrangement",
        "bioghist",
        "accessrestrict",
        "userestrict",
        "custodhist",
        "altformavail",
        "originalsloc",
        "fileplan",
        "odd",
        "acqinfo",
        "otherfindaid",
        "phystech",
        "prefercite",
        "processinfo",
        "relatedmaterial",
        "scopecontent",
        "separatedmaterial",
        "legalstatus",
    }
)
# did notes that EAD only allows inside <physdesc>
PHYSDESC_WRAPPED_NOTE_TYPES: Final = frozenset({"dimensions", "physfacet"})

PARAGRAPH_NOTE_TYPES: Final = frozenset(
    {
        "accessrestrict",
        "accruals",
        "acqinfo",
        "altformavail",
        "appraisal",
        "arrangement",
        "bibliography",
        "bioghist",
        "custodhist",
        "fileplan",
        "index",
        "odd",
        "originalsloc",
        "otherfindaid",
        "phystech",
        "prefercite",
        "processinfo",
        "relatedmaterial",
        "scopecontent",
        "separatedmaterial",
        "userestrict",
    }
)
HEADLESS_NOTE_TYPES: Final = frozenset(
    {
        "abstract",
        "langmaterial",
        "materialspec",
        "physloc",
        "legalstatus",
        "dimensions",
        "physfacet",
    }
)

INDEX_ITEM_TYPE_MAP: Final[Mapping[str, str]] = MappingProxyType(
    {
        "corporate_entity": "corpname",
        "genre_form": "genreform",
        "name": "name",
        "occupation": "occupation",
        "person": "persname",
        "subject": "subject",
        "family": "famname",
        "function": "function",
        "geographic_name": "geogname",
        "title": "title",
    }
)

_INITIAL_LOWER = re.compile(r"^([a-z])(.*)", re.DOTALL)
_HEAD_PREFIX = re.compile(r"^\s*<head[\s/>]")


@dataclass(frozen=True, slots=True)
class ControlAccessBucket:
    node_name: str
    head: str
    encoding_analog: str


CONTROLACCESS_BUCKETS: Final[tuple[ControlAccessBucket, ...]] = (
    ControlAccessBucket("persname", "Personal Names", "600"),
    ControlAccessBucket("famname", "Family Names", "600"),
    ControlAccessBucket("corpname", "Corporate Names", "610"),
    ControlAccessBucket("subject", "Subjects", "650"),
    ControlAccessBucket("geogname", "Places", "651"),
    ControlAccessBucket("genreform", "Document Types", "655"),
)
_BUCKETS_BY_NODE: Final = {bucket.node_name: bucket for bucket in CONTROLACCESS_BUCKETS}
SUBJECT_TERM_NODES: Final = frozenset({"subject", "geogname", "genreform"})
AGENT_TERM_NODES: Final = frozenset({"persname", "famname", "corpname"})


def note_encoding_analog(note_type: str | None) -> str | None:
    if note_type is None:
        return None
    return NOTE_ENCODING_ANALOGS.get(note_type)


def date_encoding_analog(date_type: str | None) -> str:
    if date_type is None:
        return DEFAULT_DATE_ENCODING_ANALOG
    return DATE_ENCODING_ANALOGS.get(date_type, DEFAULT_DATE_ENCODING_ANALOG)


def origination_node_name(agent_type: str) -> str | None:
    return AGENT_NODE_NAMES.get(agent_type)


def origination_encoding_analog(node_name: str) -> str:
    return "110" if node_name == "corpname" else "100"


def singularize_extent(extent_type: str) -> str:
    return SINGULAR_EXTENT_TYPES.get(extent_type, extent_type)


def prettify_missing_enumeration(enumeration: str) -> str:
    """Turn a machine enumeration code into a display label.

    Only meant for codes that have no translated label.
    """
    return enumeration.lower().replace("_", " ")


def format_extent_type(quantity: float, extent_type: str) -> str:
    if quantity == 1.0:
        extent_type = singularize_extent(extent_type)
    return prettify_missing_enumeration(extent_type)


def upcase_initial_char(value: str) -> str:
    match = _INITIAL_LOWER.match(value)
    if match is None:
        return value
    return match.group(1).upper() + match.group(2)


def include_paragraphs(note_type: str | None) -> bool:
    return note_type in PARAGRAPH_NOTE_TYPES


def is_headless_note(note_type: str | None, content: str | None) -> bool:
    if content and _HEAD_PREFIX.match(content):
        return True
    return note_type in HEADLESS_NOTE_TYPES


def controlaccess_bucket(node_name: str) -> ControlAccessBucket | None:
    return _BUCKETS_BY_NODE.get(node_name)


def partition_controlaccess(
    subjects: Iterable[ControlAccessTerm],
    linked_agents: Iterable[ControlAccessTerm] = (),
    *,
    sort: bool = True,
) -> list[tuple[ControlAccessBucket, list[ControlAccessTerm]]]:
    """Group terms into the fixed buckets, keeping only non-empty ones.

    Subjects only feed the subject, place and genre buckets; linked agents
    only feed the name buckets. Anything else is dropped.
    """
    grouped: dict[str, list[ControlAccessTerm]] = {
        bucket.node_name: [] for bucket in CONTROLACCESS_BUCKETS
    }
    for terms, accepted in (
        (subjects, SUBJECT_TERM_NODES),
        (linked_agents, AGENT_TERM_NODES),
    ):
        for term in terms:
            if term.node_name in accepted:
                grouped[term.node_name].append(term)
    partitions: list[tuple[ControlAccessBucket, list[ControlAccessTerm]]] = []
    for bucket in CONTROLACCESS_BUCKETS:
        members = grouped[bucket.node_name]
        if not members:
            continue
        if sort:
            members = sorted(members, key=lambda term: term.content)
        partitions.append((bucket, members))
    return partitions
