#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_shortcodes.py
"""Unit tests for shortcode escaping."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from cmark_translate.shortcodes import escape_shortcodes, unescape_shortcodes


@pytest.mark.unit
class TestEscapeShortcodes:
    """Tests for escape_shortcodes."""

    def test_both_kinds_are_disguised(self):
        text = "See {{ shortcode a }} and {% tag b %} here."
        assert escape_shortcodes(text) == "See <!--{{ shortcode a }}--> and <!--{% tag b %}--> here."

    def test_text_without_shortcodes_is_unchanged(self):
        text = "Plain *markdown* with {single} braces and 100% effort."
        assert escape_shortcodes(text) == text

    def test_unterminated_shortcode_swallows_the_rest(self):
        assert escape_shortcodes("prefix {{ oops") == "prefix <!--{{ oops}}-->"

    def test_unterminated_tag_swallows_the_rest(self):
        assert escape_shortcodes("a {% if x\nb") == "a <!--{% if x\nb%}-->"

    def test_multiple_shortcodes_on_one_line(self):
        assert escape_shortcodes("{{a}}{{b}}") == "<!--{{a}}--><!--{{b}}-->"

    def test_multiline_shortcode(self):
        text = "{{< figure\n  src=\"a.png\" >}}\n"
        assert escape_shortcodes(text) == "<!--{{< figure\n  src=\"a.png\" >}}-->\n"

    def test_empty_string(self):
        assert escape_shortcodes("") == ""


@pytest.mark.unit
class TestUnescapeShortcodes:
    """Tests for unescape_shortcodes."""

    def test_disguise_is_removed(self):
        text = "See <!--{{ shortcode a }}--> and <!--{% tag b %}--> here."
        assert unescape_shortcodes(text) == "See {{ shortcode a }} and {% tag b %} here."

    def test_unterminated_shortcode_is_restored_closed(self):
        assert unescape_shortcodes("prefix <!--{{ oops}}-->") == "prefix {{ oops}}"

    def test_directive_at_end_of_input_keeps_closer(self):
        text = "footer {{ partial 'x' }}"
        assert unescape_shortcodes(escape_shortcodes(text)) == text

    def test_tag_at_end_of_input_keeps_closer(self):
        assert unescape_shortcodes("a <!--{% endif %}-->") == "a {% endif %}"

    def test_ordinary_comments_are_kept(self):
        text = "<!-- note -->\n"
        assert unescape_shortcodes(text) == text

    def test_disguise_without_closer_is_closed_at_end(self):
        assert unescape_shortcodes("x <!--{{ a") == "x {{ a}}"


_plain = st.text(
    alphabet=st.characters(blacklist_characters="{}%<>-", blacklist_categories=("Cs",)),
    max_size=20,
)
_body = st.text(
    alphabet=st.characters(blacklist_characters="{}%<>-", blacklist_categories=("Cs",)),
    max_size=10,
)
_shortcode = st.one_of(
    _body.map(lambda body: "{{" + body + "}}"),
    _body.map(lambda body: "{%" + body + "%}"),
)


@pytest.mark.unit
class TestShortcodeRoundTrip:
    """Property tests for escape followed by unescape."""

    @given(st.lists(st.one_of(_plain, _shortcode), max_size=8))
    def test_round_trip_restores_source(self, segments):
        text = "".join(segments)
        assert unescape_shortcodes(escape_shortcodes(text)) == text

    @given(_plain, _body)
    def test_unterminated_source_comes_back_closed(self, prefix, body):
        text = prefix + "{{" + body
        assert unescape_shortcodes(escape_shortcodes(text)) == text + "}}"

    @given(_plain)
    def test_plain_text_is_untouched(self, text):
        assert escape_shortcodes(text) == text
        assert unescape_shortcodes(text) == text
