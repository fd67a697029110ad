#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/integration/test_translate.py
"""Integration tests for the translation pipeline with a fake translator."""

import pytest

from cmark_translate.deepl import Formality, Language
from cmark_translate.exceptions import FileError, FrontmatterError
from cmark_translate.options import TranslateOptions
from cmark_translate.translate import translate_cmark, translate_cmark_file, translate_frontmatter


@pytest.mark.integration
class TestTranslateCmark:
    """Tests for translate_cmark."""

    def test_structure_survives_translation(self, fake_translator):
        text = "# Hello *world*\n\n- one\n- two\n\nSee [the docs](https://example.com) now.\n"
        result = translate_cmark(fake_translator, Language.EN, Language.DE, Formality.DEFAULT, text)
        assert result == "# HELLO *WORLD*\n\n- ONE\n- TWO\n\nSEE [THE DOCS](https://example.com) NOW.\n"

    def test_xml_is_sent_once(self, fake_translator):
        translate_cmark(fake_translator, Language.EN, Language.JA, Formality.MORE, "Hello.\n")
        assert len(fake_translator.xml_calls) == 1
        from_lang, to_lang, formality, xml = fake_translator.xml_calls[0]
        assert (from_lang, to_lang, formality) == (Language.EN, Language.JA, Formality.MORE)
        assert xml == '<body xmlns="markdown"><p>Hello.</p></body>'

    def test_shortcodes_are_not_translated(self, fake_translator):
        text = "See {{ figure src=\"a.png\" }} here.\n"
        result = translate_cmark(fake_translator, Language.EN, Language.DE, Formality.DEFAULT, text)
        assert result == "SEE {{ figure src=\"a.png\" }} HERE.\n"

    def test_shortcode_escaping_can_be_disabled(self, fake_translator):
        options = TranslateOptions(escape_shortcodes=False)
        result = translate_cmark(fake_translator, Language.EN, Language.DE, Formality.DEFAULT, "a {{ b }}\n", options)
        assert result == "A {{ B }}\n"

    def test_inline_code_is_not_translated(self, fake_translator):
        result = translate_cmark(fake_translator, Language.EN, Language.DE, Formality.DEFAULT, "run `ls` now\n")
        assert result == "RUN `ls` NOW\n"


@pytest.mark.integration
class TestTranslateFrontmatter:
    """Tests for translate_frontmatter."""

    def test_toml_values(self, fake_translator):
        raw = '\ntitle = "Hello"\ndraft = true\n\n[extra]\ntime = "5 min"\n'
        result = translate_frontmatter(fake_translator, Language.EN, Language.DE, Formality.DEFAULT, raw, "toml")
        assert result == 'title = "HELLO"\ndraft = true\n\n[extra]\ntime = "5 MIN"\n'
        assert fake_translator.string_calls[0][3] == ["Hello", "5 min"]

    def test_yaml_values(self, fake_translator):
        raw = "\ntitle: Hello\ndescription: A page\n"
        result = translate_frontmatter(fake_translator, Language.EN, Language.DE, Formality.DEFAULT, raw, "yaml")
        assert result == "title: HELLO\ndescription: A PAGE\n"

    def test_nothing_to_translate(self, fake_translator):
        raw = "\ndraft = true\n"
        result = translate_frontmatter(fake_translator, Language.EN, Language.DE, Formality.DEFAULT, raw, "toml")
        assert result == raw
        assert fake_translator.string_calls == []

    def test_custom_keys(self, fake_translator):
        raw = '\ntitle = "Hello"\nsummary = "Short"\n'
        result = translate_frontmatter(
            fake_translator, Language.EN, Language.DE, Formality.DEFAULT, raw, "toml", ("summary",)
        )
        assert result == 'title = "Hello"\nsummary = "SHORT"\n'


@pytest.mark.integration
class TestTranslateCmarkFile:
    """Tests for translate_cmark_file."""

    def test_toml_document(self, fake_translator, tmp_path):
        source = tmp_path / "index.md"
        target = tmp_path / "index.de.md"
        source.write_text('+++\ntitle = "Hello"\n+++\n# Body text\n', encoding="utf-8")

        result = translate_cmark_file(
            fake_translator, Language.EN, Language.DE, Formality.DEFAULT, source, target
        )

        assert result == '+++\ntitle = "HELLO"\n+++\n# BODY TEXT\n'
        assert target.read_text(encoding="utf-8") == result

    def test_yaml_document_keeps_delimiter(self, fake_translator, tmp_path):
        source = tmp_path / "index.md"
        target = tmp_path / "out.md"
        source.write_text("---\ntitle: Hello\ndescription: A page\n---\nText.\n", encoding="utf-8")

        translate_cmark_file(fake_translator, Language.EN, Language.DE, Formality.DEFAULT, source, target)

        assert target.read_text(encoding="utf-8") == "---\ntitle: HELLO\ndescription: A PAGE\n---\nTEXT.\n"

    def test_document_without_frontmatter(self, fake_translator, tmp_path):
        source = tmp_path / "plain.md"
        target = tmp_path / "out.md"
        source.write_text("Just text.\n", encoding="utf-8")

        assert translate_cmark_file(fake_translator, Language.EN, Language.DE, Formality.DEFAULT, source, target) == (
            "JUST TEXT.\n"
        )

    def test_unterminated_frontmatter(self, fake_translator, tmp_path):
        source = tmp_path / "broken.md"
        source.write_text('+++\ntitle = "Hello"\n', encoding="utf-8")
        with pytest.raises(FrontmatterError):
            translate_cmark_file(
                fake_translator, Language.EN, Language.DE, Formality.DEFAULT, source, tmp_path / "out.md"
            )
        assert fake_translator.xml_calls == []

    def test_missing_input(self, fake_translator, tmp_path):
        with pytest.raises(FileError):
            translate_cmark_file(
                fake_translator, Language.EN, Language.DE, Formality.DEFAULT, tmp_path / "absent.md", tmp_path / "o.md"
            )

    def test_unwritable_output(self, fake_translator, tmp_path):
        source = tmp_path / "index.md"
        source.write_text("Text.\n", encoding="utf-8")
        with pytest.raises(FileError):
            translate_cmark_file(fake_translator, Language.EN, Language.DE, Formality.DEFAULT, source, tmp_path)
