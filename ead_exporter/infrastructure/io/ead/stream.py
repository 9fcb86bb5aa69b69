"""Two-phase XML emission.

Rendering records a flat list of events on an :class:`XmlWriter`; nothing is
turned into text until :meth:`StreamHandler.stream_out` walks the events.
Two kinds of placeholder can sit in the event list:

* :class:`FragmentRef` points at pre-rendered markup held in a
  :class:`FragmentStore`. It is written verbatim, never escaped again.
* :class:`DeferredSection` holds a render function. The function runs
  against a fresh writer/store pair only when the output reaches it, so a
  large component tree is rendered one subtree at a time.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from xml.sax.saxutils import escape, quoteattr

from ....constants import Defaults
from ....domain.services.content_sanitizer import (
    has_illegal_chars,
    strip_illegal_chars,
)
from ..exceptions import InvalidCharacterError
from .elements import EADElement, filter_attributes, resolve_element

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

RenderFn = Callable[["XmlWriter", "FragmentStore"], None]


@dataclass(frozen=True, slots=True)
class StartTag:
    name: EADElement
    attributes: tuple[tuple[str, str], ...] = ()
    empty: bool = False


@dataclass(frozen=True, slots=True)
class EndTag:
    name: EADElement


@dataclass(frozen=True, slots=True)
class Text:
    value: str


@dataclass(frozen=True, slots=True)
class CData:
    value: str


@dataclass(frozen=True, slots=True)
class FragmentRef:
    store: FragmentStore
    index: int

    def resolve(self) -> str:
        return self.store.get(self.index)


@dataclass(frozen=True, slots=True)
class Mark:
    events: int
    open_elements: int


class FragmentStore:
    """Append-only holder for markup that must reach the output unescaped."""

    def __init__(self) -> None:
        super().__init__()
        self._fragments: list[str] = []

    def append(self, markup: str) -> FragmentRef:
        self._fragments.append(markup)
        return FragmentRef(self, len(self._fragments) - 1)

    def get(self, index: int) -> str:
        return self._fragments[index]

    def __len__(self) -> int:
        return len(self._fragments)


class DeferredSection:
    """Placeholder for a subtree rendered on first materialization.

    The section renders exactly once; materializing it a second time is an
    error, matching the single-pass output sequence.
    """

    def __init__(self, render_fn: RenderFn) -> None:
        super().__init__()
        self._render_fn = render_fn
        self._consumed = False

    @property
    def consumed(self) -> bool:
        return self._consumed

    def render(self) -> XmlWriter:
        if self._consumed:
            raise RuntimeError("deferred section was already materialized")
        self._consumed = True
        writer = XmlWriter()
        self._render_fn(writer, FragmentStore())
        return writer


Event = StartTag | EndTag | Text | CData | FragmentRef | DeferredSection


class XmlWriter:
    pass

    def __init__(self) -> None:
        super().__init__()
        self._events: list[Event] = []
        self._open: list[EADElement] = []

    @property
    def events(self) -> tuple[Event, ...]:
        return tuple(self._events)

    @property
    def depth(self) -> int:
        return len(self._open)

    @contextmanager
    def element(
        self, name: str, attributes: Mapping[str, object] | None = None
    ) -> Iterator[XmlWriter]:
        tag = resolve_element(name)
        mark = self.mark()
        self._events.append(StartTag(tag, filter_attributes(attributes)))
        self._open.append(tag)
        try:
            yield self
        except BaseException:
            # An element that did not close never reaches the output.
            self.rollback(mark)
            raise
        self._open.pop()
        self._events.append(EndTag(tag))

    def empty(self, name: str, attributes: Mapping[str, object] | None = None) -> None:
        tag = resolve_element(name)
        self._events.append(StartTag(tag, filter_attributes(attributes), empty=True))

    def text(self, value: object) -> None:
        if isinstance(value, (FragmentRef, DeferredSection)):
            self._events.append(value)
            return
        content = str(value)
        if not content:
            return
        if has_illegal_chars(content):
            raise InvalidCharacterError(
                f"text contains characters not allowed in XML: {content[:40]!r}"
            )
        self._events.append(Text(content))

    def cdata(self, value: str) -> None:
        self._events.append(CData(strip_illegal_chars(value)))

    def mark(self) -> Mark:
        return Mark(len(self._events), len(self._open))

    def rollback(self, mark: Mark) -> None:
        """Discard every event recorded since ``mark``."""
        del self._events[mark.events :]
        del self._open[mark.open_elements :]


class AppendOnlyWriter:
    """Writer view handed to extension steps.

    Steps can add elements and text after the current position but cannot
    roll back or inspect what was already written.
    """

    def __init__(self, writer: XmlWriter) -> None:
        super().__init__()
        self._writer = writer

    @contextmanager
    def element(
        self, name: str, attributes: Mapping[str, object] | None = None
    ) -> Iterator[AppendOnlyWriter]:
        with self._writer.element(name, attributes):
            yield self

    def empty(self, name: str, attributes: Mapping[str, object] | None = None) -> None:
        self._writer.empty(name, attributes)

    def text(self, value: object) -> None:
        self._writer.text(value)

    def cdata(self, value: str) -> None:
        self._writer.cdata(value)


def _format_attributes(attributes: tuple[tuple[str, str], ...]) -> str:
    return "".join(
        f" {key}={quoteattr(strip_illegal_chars(value))}"
        for key, value in attributes
    )


def _format_cdata(value: str) -> str:
    return "<![CDATA[" + value.replace("]]>", "]]]]><![CDATA[>") + "]]>"


def iter_markup(events: tuple[Event, ...] | list[Event]) -> Iterator[str]:
    """Linearize events into text, expanding deferred sections in place."""
    for event in events:
        match event:
            case StartTag(name=name, attributes=attributes, empty=True):
                yield f"<{name}{_format_attributes(attributes)}/>"
            case StartTag(name=name, attributes=attributes):
                yield f"<{name}{_format_attributes(attributes)}>"
            case EndTag(name=name):
                yield f"</{name}>"
            case Text(value=value):
                yield escape(value)
            case CData(value=value):
                yield _format_cdata(value)
            case FragmentRef():
                yield event.resolve()
            case DeferredSection():
                yield from iter_markup(event.render().events)


class StreamHandler:
    pass

    def __init__(self, chunk_size: int = Defaults.CHUNK_SIZE) -> None:
        super().__init__()
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.chunk_size = chunk_size
        self._sections = 0

    @property
    def sections_created(self) -> int:
        return self._sections

    def buffer(self, render_fn: RenderFn) -> DeferredSection:
        self._sections += 1
        return DeferredSection(render_fn)

    def stream_out(
        self, writer: XmlWriter, *, declaration: bool = True
    ) -> Iterator[str]:
        """Yield the document in chunks of at least ``chunk_size`` characters.

        Only the last chunk may be shorter. The generator is single-pass:
        deferred sections render while it runs and cannot render again.
        """
        pending: list[str] = [XML_DECLARATION] if declaration else []
        size = sum(len(piece) for piece in pending)
        for piece in iter_markup(writer.events):
            pending.append(piece)
            size += len(piece)
            if size >= self.chunk_size:
                yield "".join(pending)
                pending = []
                size = 0
        if pending:
            yield "".join(pending)
