"""Unit tests for the EAD vocabulary tables."""

from __future__ import annotations

import pytest

from ead_exporter.domain.entities.records import ControlAccessTerm
from ead_exporter.domain.services.vocabulary import (
    ARCHDESC_NOTE_TYPES,
    CONTROLACCESS_BUCKETS,
    DID_NOTE_TYPES,
    controlaccess_bucket,
    date_encoding_analog,
    format_extent_type,
    include_paragraphs,
    is_headless_note,
    note_encoding_analog,
    origination_encoding_analog,
    origination_node_name,
    partition_controlaccess,
    prettify_missing_enumeration,
    singularize_extent,
    upcase_initial_char,
)


class TestEncodingAnalogs:
    @pytest.mark.parametrize(
        ("note_type", "analog"),
        [
            ("bioghist", "545"),
            ("scopecontent", "520"),
            ("abstract", "520$a"),
            ("bibliography", "581"),
            ("physfacet", "300"),
            ("separatedmaterial", "544"),
        ],
    )
    def test_known_note_types(self, note_type, analog):
        assert note_encoding_analog(note_type) == analog

    def test_unknown_note_type_has_no_analog(self):
        assert note_encoding_analog("fileplan") is None
        assert note_encoding_analog(None) is None

    @pytest.mark.parametrize(
        ("date_type", "analog"),
        [("inclusive", "245$f"), ("bulk", "245$g"), ("single", "245"), (None, "245")],
    )
    def test_date_analogs(self, date_type, analog):
        assert date_encoding_analog(date_type) == analog

    def test_origination_analogs(self):
        assert origination_encoding_analog("corpname") == "110"
        assert origination_encoding_analog("persname") == "100"
        assert origination_encoding_analog("famname") == "100"

    def test_origination_node_names(self):
        assert origination_node_name("agent_person") == "persname"
        assert origination_node_name("agent_family") == "famname"
        assert origination_node_name("agent_corporate_entity") == "corpname"
        assert origination_node_name("agent_software") is None


class TestExtentFormatting:
    def test_singular_form_used_for_exactly_one(self):
        assert format_extent_type(1.0, "boxes") == "box"
        assert format_extent_type(1.0, "linear_feet") == "linear foot"

    def test_plural_kept_for_other_quantities(self):
        assert format_extent_type(2.0, "boxes") == "boxes"
        assert format_extent_type(0.5, "linear_feet") == "linear feet"

    def test_unmapped_type_passes_through(self):
        assert singularize_extent("reels") == "reels"
        assert format_extent_type(1.0, "Cubic_Metres") == "cubic metres"

    def test_prettify(self):
        assert prettify_missing_enumeration("Mixed_Materials") == "mixed materials"


class TestRoleAndNoteRules:
    def test_upcase_initial_char_leaves_rest_alone(self):
        assert upcase_initial_char("creator") == "Creator"
        assert upcase_initial_char("sOURCE") == "SOURCE"
        assert upcase_initial_char("Already") == "Already"
        assert upcase_initial_char("") == ""

    def test_did_and_archdesc_note_types_are_disjoint(self):
        assert not DID_NOTE_TYPES & ARCHDESC_NOTE_TYPES

    def test_include_paragraphs(self):
        assert include_paragraphs("scopecontent")
        assert include_paragraphs("bibliography")
        assert not include_paragraphs("abstract")
        assert not include_paragraphs(None)

    def test_headless_notes(self):
        assert is_headless_note("abstract", "text")
        assert is_headless_note("legalstatus", None)
        assert not is_headless_note("scopecontent", "text")
        assert is_headless_note("scopecontent", "<head>Own head</head>text")


class TestControlAccess:
    def test_six_fixed_buckets(self):
        assert [bucket.node_name for bucket in CONTROLACCESS_BUCKETS] == [
            "persname",
            "famname",
            "corpname",
            "subject",
            "geogname",
            "genreform",
        ]
        assert controlaccess_bucket("geogname").head == "Places"
        assert controlaccess_bucket("geogname").encoding_analog == "651"
        assert controlaccess_bucket("occupation") is None

    def test_partition_keeps_only_non_empty_buckets_sorted(self):
        subjects = [
            ControlAccessTerm(node_name="subject", content="Zoology"),
            ControlAccessTerm(node_name="subject", content="Art"),
            ControlAccessTerm(node_name="occupation", content="Ignored"),
        ]
        agents = [ControlAccessTerm(node_name="persname", content="Doe, Jane")]
        partitions = partition_controlaccess(subjects, agents)
        assert [bucket.head for bucket, _ in partitions] == [
            "Personal Names",
            "Subjects",
        ]
        assert [term.content for term in partitions[1][1]] == ["Art", "Zoology"]

    def test_terms_only_fill_buckets_of_their_source(self):
        subjects = [
            ControlAccessTerm(node_name="geogname", content="Toronto"),
            ControlAccessTerm(node_name="persname", content="Mis-tagged subject"),
        ]
        agents = [
            ControlAccessTerm(node_name="corpname", content="Acme Ltd."),
            ControlAccessTerm(node_name="subject", content="Mis-tagged agent"),
        ]
        partitions = partition_controlaccess(subjects, agents)
        contents = {
            bucket.node_name: [term.content for term in members]
            for bucket, members in partitions
        }
        assert contents == {"corpname": ["Acme Ltd."], "geogname": ["Toronto"]}

    def test_partition_can_keep_input_order(self):
        terms = [
            ControlAccessTerm(node_name="subject", content="Zoology"),
            ControlAccessTerm(node_name="subject", content="Art"),
        ]
        ((_, members),) = partition_controlaccess(terms, sort=False)
        assert [term.content for term in members] == ["Zoology", "Art"]

    def test_partition_of_nothing(self):
        assert partition_controlaccess([]) == []
