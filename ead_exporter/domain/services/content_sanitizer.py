"""Mixed-content sanitizer.

Note and title content arrives as a mix of plain text, stray HTML and
half-escaped entities. This module turns it into something that can be
placed inside an EAD element without breaking well-formedness:

1. smart quotes and ``<br>`` variants are normalized;
2. paragraph markup is either stripped or added, depending on whether the
   target element admits ``<p>`` children;
3. the result is checked with lxml and rolled back to the input when the
   paragraph pass introduced new parser errors.

:func:`emit_mixed_content` then decides how the sanitized value reaches the
output: as a raw fragment, as escaped text, or as a CDATA block.
"""

from __future__ import annotations

from enum import StrEnum
import re
from typing import Protocol

from lxml import etree

from ..entities.records import Note, TextSubnote

_SMART_QUOTES = str.maketrans(
    {"\u201c": '"', "\u201d": '"', "\u2018": "'", "\u2019": "'"}
)
_ENTITY_REFERENCE = re.compile(r"&(?=\w+;|#\d{4}|#\d{3})")
_ENTITY_SENTINEL = "\x00"
_PARAGRAPH_PREFIX = re.compile(r"^<p(\s|/|>)")
_MARKUP = re.compile(r"<[^>]+>")
_HEAD = re.compile(r"<head( [^<>]+)?>(.+?)</head>", re.DOTALL)
_BENIGN_ERRORS = (
    re.compile(r"Namespace prefix .* is not defined"),
    re.compile(r"The prefix .* is not bound"),
)
_ILLEGAL_XML_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


class EmissionPath(StrEnum):
    RAW = "raw"
    TEXT = "text"
    CDATA = "cdata"


class TextSink(Protocol):
    def text(self, value: object) -> None: ...

    def cdata(self, value: str) -> None: ...


class FragmentSink(Protocol):
    def append(self, markup: str) -> object: ...


def remove_smart_quotes(content: str) -> str:
    return content.translate(_SMART_QUOTES)


def escape_content(content: str) -> str:
    """Escape bare ampersands, leaving entity references alone.

    Existing references (``&amp;``, ``&#8220``) are marked with a sentinel,
    every remaining ``&`` is escaped, and the sentinel is turned back.
    """
    marked = _ENTITY_REFERENCE.sub(_ENTITY_SENTINEL, content)
    return marked.replace("&", "&amp;").replace(_ENTITY_SENTINEL, "&")


def strip_p(content: str) -> str:
    return content.replace("<p>", "").replace("</p>", "").replace("<p/>", "")


def has_html(content: str) -> bool:
    return _MARKUP.search(content) is not None


def has_illegal_chars(content: str) -> bool:
    return _ILLEGAL_XML_CHARS.search(content) is not None


def strip_illegal_chars(content: str) -> str:
    return _ILLEGAL_XML_CHARS.sub("", content)


def xml_errors(content: str) -> list[str]:
    """Parse ``content`` inside a synthetic root and return parser messages.

    Undeclared namespace prefixes are reported by libxml2 but are expected
    in note markup (``xlink:href`` on ``extref``), so they are filtered out.
    """
    parser = etree.XMLParser(recover=True)
    payload = f"<wrap>{strip_illegal_chars(content)}</wrap>".encode()
    try:
        etree.fromstring(payload, parser)
    except etree.XMLSyntaxError as e:
        return [str(e)]
    return [
        entry.message
        for entry in parser.error_log
        if not any(pattern.search(entry.message) for pattern in _BENIGN_ERRORS)
    ]


def wrap_paragraphs(content: str) -> str:
    """Wrap blank-line separated blocks in ``<p>`` elements.

    Content that already starts with a paragraph is returned as is. When the
    wrapped result has parser errors the input did not have, the input is
    returned instead.
    """
    content = content.replace("\n\t", "\n\n")
    stripped = content.strip()
    if not stripped or _PARAGRAPH_PREFIX.match(stripped):
        return content

    blocks = [block for block in content.split("\n\n") if block.strip()]
    if len(blocks) > 1:
        wrapped = "".join(
            f"<p>{escape_content(block.rstrip())}</p>" for block in blocks
        )
    else:
        wrapped = f"<p>{escape_content(stripped)}</p>"

    introduced = set(xml_errors(wrapped)) - set(xml_errors(content))
    return content if introduced else wrapped


def sanitize(content: str, allow_paragraphs: bool) -> str:
    content = remove_smart_quotes(content)
    content = content.replace("<br>", "<br/>").replace("</br>", "")
    if allow_paragraphs:
        return wrap_paragraphs(content)
    return strip_p(content)


def emit_mixed_content(
    content: str | None,
    writer: TextSink,
    fragments: FragmentSink,
    allow_paragraphs: bool = False,
) -> EmissionPath | None:
    """Sanitize ``content`` and write it through the cheapest safe path.

    Returns the path taken, or ``None`` when there was nothing to write.
    """
    if not content:
        return None
    content = sanitize(content, allow_paragraphs)
    try:
        if has_html(content) and not has_illegal_chars(content):
            markup = content if not xml_errors(content) else escape_content(content)
            if not xml_errors(markup):
                writer.text(fragments.append(markup))
                return EmissionPath.RAW
        writer.text(content.replace("&amp;", "&"))
        return EmissionPath.TEXT
    except ValueError:
        writer.cdata(content)
        return EmissionPath.CDATA


def extract_head_text(content: str, backup: str = "") -> tuple[str, str]:
    """Split an inline ``<head>`` out of note content.

    Returns ``(content_without_head, head_text)``; ``backup`` is used as the
    head text when the content carries none.
    """
    match = _HEAD.search(content.strip())
    if match is None:
        return content, backup
    return content.replace(match.group(0), ""), match.group(2)


def extract_note_text(note: Note, include_unpublished: bool = False) -> str:
    """Join note content with the text of its plain-text subnotes."""
    parts = list(note.content)
    for subnote in note.subnotes:
        if not isinstance(subnote, TextSubnote):
            continue
        if subnote.publish is False and not include_unpublished:
            continue
        parts.append(subnote.content)
    return "\n\n".join(part for part in parts if part)
