"""EAD 2002 rendering: element vocabulary, deferred event stream, serializer."""

from .elements import EADElement, component_element, filter_attributes
from .serializer import EADExport, EADSerializer
from .stream import AppendOnlyWriter, FragmentStore, StreamHandler, XmlWriter

__all__ = [
    "AppendOnlyWriter",
    "EADElement",
    "EADExport",
    "EADSerializer",
    "FragmentStore",
    "StreamHandler",
    "XmlWriter",
    "component_element",
    "filter_attributes",
]
