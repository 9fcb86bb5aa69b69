from typing import ClassVar


class Defaults:
    ID_PREFIX = "aspace_"
    CHUNK_SIZE = 8192
    CREATION_APPLICATION = "ArchivesSpace"
    INCLUDE_UNPUBLISHED = False
    INCLUDE_DAOS = False
    USE_NUMBERED_C_TAGS = False
    SORT_CONTROLACCESS = True
    EMIT_COMPONENT_IDS = False
    GENERATE_CONTAINER_IDS = True
    OUTPUT_SUFFIX = "_ead.xml"


class Namespaces:
    EAD = "urn:isbn:1-931666-22-9"
    XSI = "http://www.w3.org/2001/XMLSchema-instance"
    XLINK = "http://www.w3.org/1999/xlink"
    SCHEMA_LOCATION = "urn:isbn:1-931666-22-9 http://www.loc.gov/ead/ead.xsd"


class Constraints:
    MAX_CONTAINER_LEVELS = 3
    MAX_NUMBERED_C_DEPTH = 12
    NUMBERED_C_WIDTH = 2


class HeaderEncodings:
    REPOSITORY = "iso15511"
    COUNTRY = "iso3166-1"
    DATE = "iso8601"
    LANGUAGE = "iso639-2b"


class Labels:
    REPOSITORY = "Repository:"
    TITLE = "Title:"
    IDENTIFICATION = "Identification:"
    EXTENT = "Extent:"
    INDEX_TERMS = "Index Terms"
    URL_PREFIX = "URL: "


class EncodingAnalogs:
    REPOSITORY = "852$a"
    TITLE = "245"
    UNITID = "099"
    EXTENT = "300"
    EADID = "852$a"


class ErrorMessages:
    RESOURCE_HEADLINE = (
        "EAD EXPORT ERROR : YOU HAVE A PROBLEM WITH YOUR EXPORT OF YOUR RESOURCE. "
        "THE FOLLOWING INFORMATION MAY HELP:"
    )
    COMPONENT_HEADLINE = (
        "EAD EXPORT ERROR : YOU HAVE A PROBLEM WITH YOUR EXPORT OF ARCHIVAL OBJECTS. "
        "THE FOLLOWING INFORMATION MAY HELP:"
    )
    HEADER_HEADLINE = (
        "EAD EXPORT ERROR : YOU HAVE A PROBLEM WITH YOUR EXPORT OF THE EAD HEADER. "
        "THE FOLLOWING INFORMATION MAY HELP:"
    )


class ConfigFiles:
    DEFAULT_NAME = "ead_exporter.toml"
    ENV_PREFIX = "EAD_"
    SECTIONS: ClassVar[tuple[str, ...]] = ("export", "identifiers", "paths")
