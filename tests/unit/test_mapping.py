#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_mapping.py
"""Unit tests for the tag vocabulary and attribute codecs."""

import itertools

import pytest

from cmark_translate import mapping


@pytest.mark.unit
class TestTagNames:
    """Tests for element naming helpers."""

    def test_qualified_uses_markdown_namespace(self):
        assert mapping.qualified("p") == "{markdown}p"

    def test_local_name_strips_namespace(self):
        assert mapping.local_name("{markdown}blockquote") == "blockquote"
        assert mapping.local_name("{other}p") == "p"
        assert mapping.local_name("p") == "p"

    def test_local_name_of_non_string_tag(self):
        assert mapping.local_name(object()) == ""

    def test_heading_tags(self):
        assert mapping.HEADING_TAGS == ("h1", "h2", "h3", "h4", "h5", "h6")
        assert mapping.heading_tag(3) == "h3"

    def test_list_tag(self):
        assert mapping.list_tag("ordered") == "ol"
        assert mapping.list_tag("bullet") == "ul"


@pytest.mark.unit
class TestTagContract:
    """Tests for the tag lists sent to the translation service."""

    def test_ignore_tags(self):
        assert set(mapping.IGNORE_TAGS) == {"header", "embed", "object"}

    def test_splitting_tags(self):
        assert mapping.SPLITTING_TAGS == (
            "blockquote",
            "li",
            "dt",
            "dd",
            "p",
            "h1",
            "h2",
            "h3",
            "h4",
            "h5",
            "h6",
            "th",
            "td",
        )

    def test_non_splitting_tags(self):
        assert mapping.NON_SPLITTING_TAGS == ("embed", "em", "strong", "del", "a", "img")


@pytest.mark.unit
class TestNumberCodec:
    """Tests for integer attributes."""

    @pytest.mark.parametrize("value", [0, 1, 7, 42, 123456])
    def test_round_trip(self, value):
        assert mapping.decode_int(mapping.encode_int(value)) == value

    @pytest.mark.parametrize("raw", [None, "", "abc", "-3", "1.5", "0x10", "3a"])
    def test_malformed_values_default_to_zero(self, raw):
        assert mapping.decode_int(raw) == 0

    def test_surrounding_whitespace_is_ignored(self):
        assert mapping.decode_int(" 12 ") == 12

    def test_explicit_plus_sign(self):
        assert mapping.decode_int("+5") == 5


@pytest.mark.unit
class TestBooleanCodec:
    """Tests for flag attributes."""

    def test_encode(self):
        assert mapping.encode_bool(True) == "1"
        assert mapping.encode_bool(False) == "0"

    @pytest.mark.parametrize("raw", [None, "", "0", "true", "yes", "01", " 1"])
    def test_only_exact_one_is_true(self, raw):
        assert mapping.decode_bool(raw) is False

    def test_one_is_true(self):
        assert mapping.decode_bool("1") is True


@pytest.mark.unit
class TestListCodecs:
    """Tests for list kind and delimiter attributes."""

    def test_delimiter_round_trip(self):
        assert mapping.encode_delimiter("period") == "."
        assert mapping.encode_delimiter("paren") == ")"
        assert mapping.decode_delimiter(")") == "paren"
        assert mapping.decode_delimiter(".") == "period"

    def test_unknown_delimiter_is_period(self):
        assert mapping.decode_delimiter(None) == "period"
        assert mapping.decode_delimiter("]") == "period"

    def test_list_type_round_trip(self):
        for list_type in ("ordered", "bullet"):
            assert mapping.decode_list_type(mapping.encode_list_type(list_type)) == list_type

    def test_missing_list_type_falls_back_to_tag(self):
        assert mapping.decode_list_type(None, "ol") == "ordered"
        assert mapping.decode_list_type(None, "ul") == "bullet"

    def test_attribute_wins_over_tag(self):
        assert mapping.decode_list_type("u", "ol") == "bullet"


@pytest.mark.unit
class TestAlignmentCodec:
    """Tests for table alignment attributes."""

    @pytest.mark.parametrize("length", range(0, 7))
    def test_every_sequence_round_trips(self, length):
        for alignments in itertools.product(("none", "left", "center", "right"), repeat=length):
            encoded = mapping.encode_alignments(list(alignments))
            assert len(encoded) == length
            assert mapping.decode_alignments(encoded) == list(alignments)

    def test_unknown_character_is_none(self):
        assert mapping.decode_alignments("lxr") == ["left", "none", "right"]

    def test_missing_attribute_has_no_columns(self):
        assert mapping.decode_alignments(None) == []


@pytest.mark.unit
class TestHeadingLevel:
    """Tests for resolving heading levels."""

    @pytest.mark.parametrize("level", range(1, 7))
    def test_matching_tag_and_attribute(self, level):
        assert mapping.decode_heading_level(f"h{level}", str(level)) == level

    def test_attribute_wins_on_disagreement(self):
        assert mapping.decode_heading_level("h2", "4") == 4

    @pytest.mark.parametrize("raw", [None, "0", "9", "x"])
    def test_invalid_attribute_falls_back_to_tag(self, raw):
        assert mapping.decode_heading_level("h5", raw) == 5
