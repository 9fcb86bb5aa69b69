from collections.abc import Mapping
from enum import StrEnum
import re

from ....constants import Constraints
from ..exceptions import InvalidElementError

_ATTRIBUTE_NAME = re.compile(r"^[A-Za-z_][\w.\-]*(:[A-Za-z_][\w.\-]*)?$")


class EADElement(StrEnum):
    EAD = "ead"
    EADHEADER = "eadheader"
    EADID = "eadid"
    FILEDESC = "filedesc"
    TITLESTMT = "titlestmt"
    TITLEPROPER = "titleproper"
    SUBTITLE = "subtitle"
    AUTHOR = "author"
    SPONSOR = "sponsor"
    EDITIONSTMT = "editionstmt"
    PUBLICATIONSTMT = "publicationstmt"
    PUBLISHER = "publisher"
    ADDRESS = "address"
    ADDRESSLINE = "addressline"
    EXTREF = "extref"
    EXTPTR = "extptr"
    SERIESSTMT = "seriesstmt"
    NOTESTMT = "notestmt"
    PROFILEDESC = "profiledesc"
    CREATION = "creation"
    LANGUSAGE = "langusage"
    DESCRULES = "descrules"
    REVISIONDESC = "revisiondesc"
    CHANGE = "change"

    ARCHDESC = "archdesc"
    DID = "did"
    DSC = "dsc"
    HEAD = "head"
    P = "p"
    DATE = "date"
    NOTE = "note"
    LANGMATERIAL = "langmaterial"
    LANGUAGE = "language"
    REPOSITORY = "repository"
    UNITTITLE = "unittitle"
    UNITID = "unitid"
    UNITDATE = "unitdate"
    ORIGINATION = "origination"
    PHYSDESC = "physdesc"
    EXTENT = "extent"
    CONTAINER = "container"

    DAO = "dao"
    DAOGRP = "daogrp"
    DAODESC = "daodesc"
    DAOLOC = "daoloc"

    CONTROLACCESS = "controlaccess"
    PERSNAME = "persname"
    FAMNAME = "famname"
    CORPNAME = "corpname"
    SUBJECT = "subject"
    GEOGNAME = "geogname"
    GENREFORM = "genreform"
    NAME = "name"
    OCCUPATION = "occupation"
    FUNCTION = "function"
    TITLE = "title"

    BIBLIOGRAPHY = "bibliography"
    BIBREF = "bibref"
    INDEX = "index"
    INDEXENTRY = "indexentry"
    REF = "ref"

    CHRONLIST = "chronlist"
    CHRONITEM = "chronitem"
    EVENTGRP = "eventgrp"
    EVENT = "event"
    LIST = "list"
    ITEM = "item"
    DEFITEM = "defitem"
    LABEL = "label"

    ABSTRACT = "abstract"
    DIMENSIONS = "dimensions"
    PHYSLOC = "physloc"
    MATERIALSPEC = "materialspec"
    PHYSFACET = "physfacet"
    ACCRUALS = "accruals"
    APPRAISAL = "appraisal"
    ARRANGEMENT = "arrangement"
    BIOGHIST = "bioghist"
    ACCESSRESTRICT = "accessrestrict"
    USERESTRICT = "userestrict"
    CUSTODHIST = "custodhist"
    ALTFORMAVAIL = "altformavail"
    ORIGINALSLOC = "originalsloc"
    FILEPLAN = "fileplan"
    ODD = "odd"
    ACQINFO = "acqinfo"
    OTHERFINDAID = "otherfindaid"
    PHYSTECH = "phystech"
    PREFERCITE = "prefercite"
    PROCESSINFO = "processinfo"
    RELATEDMATERIAL = "relatedmaterial"
    SCOPECONTENT = "scopecontent"
    SEPARATEDMATERIAL = "separatedmaterial"
    LEGALSTATUS = "legalstatus"

    C = "c"
    C01 = "c01"
    C02 = "c02"
    C03 = "c03"
    C04 = "c04"
    C05 = "c05"
    C06 = "c06"
    C07 = "c07"
    C08 = "c08"
    C09 = "c09"
    C10 = "c10"
    C11 = "c11"
    C12 = "c12"


def resolve_element(name: str) -> EADElement:
    if isinstance(name, EADElement):
        return name
    try:
        return EADElement(name)
    except ValueError:
        raise InvalidElementError(f"<{name}> is not an EAD element") from None


def component_element(depth: int, numbered: bool) -> EADElement:
    """Return the component tag for a nesting ``depth`` (1 = under dsc)."""
    if depth < 1:
        raise InvalidElementError(f"component depth must be >= 1, got {depth}")
    if not numbered:
        return EADElement.C
    if depth > Constraints.MAX_NUMBERED_C_DEPTH:
        raise InvalidElementError(
            f"numbered components stop at c{Constraints.MAX_NUMBERED_C_DEPTH}, "
            f"got depth {depth}"
        )
    return EADElement(f"c{depth:0{Constraints.NUMBERED_C_WIDTH}d}")


def filter_attributes(
    attributes: Mapping[str, object] | None,
) -> tuple[tuple[str, str], ...]:
    """Drop ``None``/empty values and stringify the rest, preserving order."""
    if not attributes:
        return ()
    kept: list[tuple[str, str]] = []
    for key, value in attributes.items():
        if value is None or value == "":
            continue
        if not _ATTRIBUTE_NAME.match(key):
            raise InvalidElementError(f"invalid attribute name {key!r}")
        kept.append((key, str(value)))
    return tuple(kept)
