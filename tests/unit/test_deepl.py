#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_deepl.py
"""Unit tests for the DeepL client, using an in-memory HTTP transport."""

import json
from urllib.parse import parse_qs

import httpx
import pytest

from cmark_translate.config import DeeplConfig
from cmark_translate.deepl import (
    Deepl,
    DeeplGlossary,
    DeeplUsage,
    Formality,
    Language,
    glossary_tsv,
)
from cmark_translate.exceptions import TranslationError, ValidationError


class Recorder:
    """Transport handler that records requests and replies with canned responses."""

    def __init__(self, response: httpx.Response | None = None):
        self.requests: list[httpx.Request] = []
        self.response = response or httpx.Response(200, json={"translations": []})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def form(self) -> dict[str, list[str]]:
        return parse_qs(self.last.content.decode("utf-8"))


def make_client(recorder: Recorder, api_key: str = "secret:fx", **kwargs) -> Deepl:
    config = DeeplConfig(api_key=api_key, glossaries={"en_de": "gloss-1"})
    return Deepl(config, client=httpx.Client(transport=httpx.MockTransport(recorder)), **kwargs)


@pytest.mark.unit
class TestLanguage:
    """Tests for Language and Formality."""

    def test_from_code_ignores_case(self):
        assert Language.from_code("DE") is Language.DE
        assert Language.from_code("pt-BR") is Language.PT_BR

    def test_portuguese_is_sent_as_brazilian(self):
        assert Language.PT.langcode == "pt-br"
        assert Language.JA.langcode == "ja"

    def test_unknown_code(self):
        with pytest.raises(ValidationError):
            Language.from_code("xx")

    def test_formality_from_value(self):
        assert Formality.from_value("prefer-less") is Formality.PREFER_LESS
        assert Formality.from_value("MORE") is Formality.MORE

    def test_unknown_formality(self):
        with pytest.raises(ValidationError):
            Formality.from_value("casual")


@pytest.mark.unit
class TestGlossaryTsv:
    """Tests for glossary_tsv."""

    def test_pairs_are_stripped_and_blanks_dropped(self):
        assert glossary_tsv([(" cat ", "Katze"), ("dog", ""), ("", "x"), ("mouse", "Maus")]) == "cat\tKatze\nmouse\tMaus"

    def test_empty(self):
        assert glossary_tsv([]) == ""


@pytest.mark.unit
class TestRequests:
    """Tests for endpoint selection and request encoding."""

    def test_free_key_uses_free_endpoint(self):
        recorder = Recorder(httpx.Response(200, json={"character_count": 1, "character_limit": 2}))
        with make_client(recorder) as deepl:
            deepl.get_usage()
        assert str(recorder.last.url) == "https://api-free.deepl.com/v2/usage"
        assert recorder.last.method == "GET"

    def test_pro_key_uses_pro_endpoint(self):
        recorder = Recorder(httpx.Response(200, json={"character_count": 1, "character_limit": 2}))
        with make_client(recorder, api_key="secret") as deepl:
            deepl.get_usage()
        assert str(recorder.last.url) == "https://api.deepl.com/v2/usage"

    def test_authorization_header(self):
        recorder = Recorder(httpx.Response(200, json={"character_count": 0, "character_limit": 0}))
        with make_client(recorder) as deepl:
            deepl.get_usage()
        assert recorder.last.headers["Authorization"] == "DeepL-Auth-Key secret:fx"
        assert recorder.last.headers["User-Agent"] == "cmark-translate"

    def test_translate_strings(self):
        recorder = Recorder(httpx.Response(200, json={"translations": [{"text": "Hallo"}, {"text": "Welt"}]}))
        with make_client(recorder) as deepl:
            result = deepl.translate_strings(Language.EN, Language.DE, Formality.LESS, ["Hello", "World"])
        assert result == ["Hallo", "Welt"]
        form = recorder.form()
        assert recorder.last.method == "POST"
        assert str(recorder.last.url).endswith("/v2/translate")
        assert form["text"] == ["Hello", "World"]
        assert form["source_lang"] == ["en"]
        assert form["target_lang"] == ["de"]
        assert form["formality"] == ["less"]
        assert form["preserve_formatting"] == ["1"]
        assert form["glossary_id"] == ["gloss-1"]

    def test_no_glossary_for_other_pairs(self):
        recorder = Recorder(httpx.Response(200, json={"translations": [{"text": "Hola"}]}))
        with make_client(recorder) as deepl:
            deepl.translate_strings(Language.EN, Language.ES, Formality.DEFAULT, ["Hello"])
        assert "glossary_id" not in recorder.form()

    def test_preserve_formatting_can_be_disabled(self):
        recorder = Recorder(httpx.Response(200, json={"translations": [{"text": "x"}]}))
        with make_client(recorder, preserve_formatting=False) as deepl:
            deepl.translate("x")
        assert recorder.form()["preserve_formatting"] == ["0"]

    def test_empty_input_sends_nothing(self):
        recorder = Recorder()
        with make_client(recorder) as deepl:
            assert deepl.translate_strings(Language.EN, Language.DE, Formality.DEFAULT, []) == []
        assert recorder.requests == []

    def test_translate_single_string(self):
        recorder = Recorder(httpx.Response(200, json={"translations": [{"text": "Bonjour"}]}))
        with make_client(recorder) as deepl:
            assert deepl.translate("Hello", Language.EN, Language.FR) == "Bonjour"

    def test_translate_empty_response(self):
        recorder = Recorder(httpx.Response(200, json={"translations": []}))
        with make_client(recorder) as deepl:
            assert deepl.translate("Hello") == ""

    def test_translate_xml_passes_tag_contract(self):
        xml = '<body xmlns="markdown"><p>Hello</p></body>'
        recorder = Recorder(httpx.Response(200, json={"translations": [{"text": xml.replace("Hello", "Hallo")}]}))
        with make_client(recorder) as deepl:
            result = deepl.translate_xml(Language.EN, Language.DE, Formality.DEFAULT, xml)
        assert result == '<body xmlns="markdown"><p>Hallo</p></body>'
        form = recorder.form()
        assert form["tag_handling"] == ["xml"]
        assert form["ignore_tags"] == ["header,embed,object"]
        assert form["splitting_tags"] == ["blockquote,li,dt,dd,p,h1,h2,h3,h4,h5,h6,th,td"]
        assert form["non_splitting_tags"] == ["embed,em,strong,del,a,img"]
        assert form["text"] == [xml]


@pytest.mark.unit
class TestErrors:
    """Tests for error translation."""

    def test_http_error_status(self):
        recorder = Recorder(httpx.Response(403, text="Forbidden"))
        with make_client(recorder) as deepl:
            with pytest.raises(TranslationError) as exc_info:
                deepl.translate("Hello")
        assert exc_info.value.status_code == 403
        assert exc_info.value.response_text == "Forbidden"

    def test_quota_exceeded(self):
        recorder = Recorder(httpx.Response(456, json={"message": "Quota exceeded"}))
        with make_client(recorder) as deepl:
            with pytest.raises(TranslationError) as exc_info:
                deepl.get_usage()
        assert exc_info.value.status_code == 456

    def test_transport_error(self):
        def fail(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        config = DeeplConfig(api_key="k:fx")
        with Deepl(config, client=httpx.Client(transport=httpx.MockTransport(fail))) as deepl:
            with pytest.raises(TranslationError) as exc_info:
                deepl.translate("Hello")
        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.original_error, httpx.ConnectError)

    def test_invalid_json(self):
        recorder = Recorder(httpx.Response(200, text="not json"))
        with make_client(recorder) as deepl:
            with pytest.raises(TranslationError):
                deepl.translate("Hello")

    def test_missing_translations(self):
        recorder = Recorder(httpx.Response(200, json={"unexpected": True}))
        with make_client(recorder) as deepl:
            with pytest.raises(TranslationError):
                deepl.translate("Hello")


@pytest.mark.unit
class TestGlossaries:
    """Tests for glossary management and usage."""

    GLOSSARY_JSON = {
        "glossary_id": "def3a26b",
        "name": "My Glossary",
        "ready": True,
        "source_lang": "en",
        "target_lang": "de",
        "creation_time": "2021-08-03T14:16:18.329Z",
        "entry_count": 2,
    }

    def test_register_glossary(self):
        recorder = Recorder(httpx.Response(201, json=self.GLOSSARY_JSON))
        with make_client(recorder) as deepl:
            glossary = deepl.register_glossary("My Glossary", Language.EN, Language.DE, [("cat", "Katze"), ("dog", "Hund")])
        assert glossary.glossary_id == "def3a26b"
        assert glossary.entry_count == 2
        form = recorder.form()
        assert str(recorder.last.url).endswith("/v2/glossaries")
        assert form["entries_format"] == ["tsv"]
        assert form["entries"] == ["cat\tKatze\ndog\tHund"]
        assert form["name"] == ["My Glossary"]

    def test_list_glossaries(self):
        recorder = Recorder(httpx.Response(200, json={"glossaries": [self.GLOSSARY_JSON]}))
        with make_client(recorder) as deepl:
            glossaries = deepl.list_glossaries()
        assert glossaries == [DeeplGlossary.from_json(self.GLOSSARY_JSON)]
        assert glossaries[0].ready is True

    def test_remove_glossary(self):
        recorder = Recorder(httpx.Response(204))
        with make_client(recorder) as deepl:
            assert deepl.remove_glossary("def3a26b") is None
        assert recorder.last.method == "DELETE"
        assert str(recorder.last.url) == "https://api-free.deepl.com/v2/glossaries/def3a26b"

    def test_get_usage(self):
        recorder = Recorder(httpx.Response(200, content=json.dumps({"character_count": 180118, "character_limit": 1250000})))
        with make_client(recorder) as deepl:
            assert deepl.get_usage() == DeeplUsage(character_count=180118, character_limit=1250000)


@pytest.mark.unit
class TestClientOwnership:
    """Tests for HTTP client lifetime."""

    def test_injected_client_is_not_closed(self):
        client = httpx.Client(transport=httpx.MockTransport(Recorder()))
        with Deepl(DeeplConfig(api_key="k"), client=client):
            pass
        assert client.is_closed is False
        client.close()

    def test_owned_client_is_closed(self):
        deepl = Deepl(DeeplConfig(api_key="k"))
        deepl.close()
        assert deepl._client.is_closed is True
