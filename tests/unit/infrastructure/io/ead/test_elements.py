"""Unit tests for the EAD element vocabulary."""

from __future__ import annotations

import pytest

from ead_exporter.infrastructure.io.ead.elements import (
    EADElement,
    component_element,
    filter_attributes,
    resolve_element,
)
from ead_exporter.infrastructure.io.exceptions import EADExportError, InvalidElementError


class TestResolveElement:
    def test_known_names(self):
        assert resolve_element("scopecontent") is EADElement.SCOPECONTENT
        assert resolve_element(EADElement.DID) is EADElement.DID

    def test_unknown_name_is_rejected(self):
        with pytest.raises(InvalidElementError, match="<script>"):
            resolve_element("script")

    def test_invalid_element_is_an_export_error(self):
        assert issubclass(InvalidElementError, EADExportError)


class TestComponentElement:
    @pytest.mark.parametrize(
        ("depth", "tag"), [(1, "c01"), (2, "c02"), (10, "c10"), (12, "c12")]
    )
    def test_numbered(self, depth, tag):
        assert component_element(depth, numbered=True) == tag

    def test_flat_mode_ignores_depth(self):
        assert component_element(1, numbered=False) is EADElement.C
        assert component_element(40, numbered=False) is EADElement.C

    def test_numbered_mode_stops_at_twelve(self):
        with pytest.raises(InvalidElementError):
            component_element(13, numbered=True)

    def test_depth_starts_at_one(self):
        with pytest.raises(InvalidElementError):
            component_element(0, numbered=False)


class TestFilterAttributes:
    def test_drops_missing_values_and_keeps_order(self):
        attributes = {
            "id": None,
            "type": "Box",
            "label": "",
            "parent": 3,
            "xlink:href": "https://example.org",
        }
        assert filter_attributes(attributes) == (
            ("type", "Box"),
            ("parent", "3"),
            ("xlink:href", "https://example.org"),
        )

    def test_empty(self):
        assert filter_attributes(None) == ()
        assert filter_attributes({}) == ()

    def test_invalid_attribute_name(self):
        with pytest.raises(InvalidElementError):
            filter_attributes({"bad name": "x"})
