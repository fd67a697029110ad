#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/conftest.py
"""Pytest configuration and shared fixtures for the cmark-translate test suite."""

import os
from pathlib import Path
from typing import Any, Sequence

import pytest

from cmark_translate.deepl import Formality, Language

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Verbosity, settings

    settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=50)
    settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
except ImportError:
    # Hypothesis not installed, property tests are skipped by importorskip
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


class FakeTranslator:
    """Translator double that upper-cases text and records its calls.

    XML is "translated" by upper-casing everything outside tags, which keeps
    the markup intact the way DeepL does with tag handling enabled.
    """

    def __init__(self) -> None:
        self.xml_calls: list[tuple[Language, Language, Formality, str]] = []
        self.string_calls: list[tuple[Language, Language, Formality, list[str]]] = []

    def translate_strings(
        self, from_lang: Language, to_lang: Language, formality: Formality, texts: Sequence[str]
    ) -> list[str]:
        self.string_calls.append((from_lang, to_lang, formality, list(texts)))
        return [text.upper() for text in texts]

    def translate_xml(self, from_lang: Language, to_lang: Language, formality: Formality, xml_body: str) -> str:
        self.xml_calls.append((from_lang, to_lang, formality, xml_body))
        return _upper_text_outside_tags(xml_body)


def _upper_text_outside_tags(xml_body: str) -> str:
    out: list[str] = []
    in_tag = False
    for char in xml_body:
        if char == "<":
            in_tag = True
        elif char == ">":
            in_tag = False
            out.append(char)
            continue
        out.append(char if in_tag else char.upper())
    return "".join(out)


@pytest.fixture
def fake_translator() -> FakeTranslator:
    """Provide a fresh FakeTranslator."""
    return FakeTranslator()


@pytest.fixture
def deepl_config_file(tmp_path: Path) -> Path:
    """Write a DeepL configuration file with a free-plan key and one glossary."""
    path = tmp_path / "deepl.toml"
    path.write_text('api_key = "test-key:fx"\n\n[glossaries]\nen_de = "glossary-en-de"\n', encoding="utf-8")
    return path


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Any:
    """Remove configuration environment variables for the duration of a test."""
    monkeypatch.delenv("CMARK_TRANSLATE_CONFIG", raising=False)
    monkeypatch.delenv("DEEPL_API_KEY", raising=False)
    return monkeypatch
