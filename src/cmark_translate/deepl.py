#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/cmark_translate/deepl.py
"""Synchronous client for the DeepL REST API.

Only the calls the translation pipeline needs are wrapped: text and XML
translation, glossary management and usage. Requests are form encoded
and authenticated with the ``DeepL-Auth-Key`` scheme; the endpoint is
chosen from the key (free plan keys end with ``:fx``).

Examples
--------
    >>> from cmark_translate.config import DeeplConfig
    >>> with Deepl(DeeplConfig(api_key="...:fx")) as deepl:  # doctest: +SKIP
    ...     deepl.translate_strings(Language.EN, Language.DE, Formality.DEFAULT, ["Hello"])
    ['Hallo']

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional, Sequence

from cmark_translate.config import DeeplConfig
from cmark_translate.constants import (
    DEEPL_AUTH_SCHEME,
    DEEPL_DEFAULT_TIMEOUT,
    DEEPL_USER_AGENT,
    DEFAULT_PRESERVE_FORMATTING,
    DEPS_DEEPL,
)
from cmark_translate.exceptions import TranslationError, ValidationError
from cmark_translate.mapping import IGNORE_TAGS, NON_SPLITTING_TAGS, SPLITTING_TAGS
from cmark_translate.utils.decorators import debug_timer, requires_dependencies

logger = logging.getLogger(__name__)


class Language(Enum):
    """Languages supported by the translation commands."""

    DE = "de"
    ES = "es"
    EN = "en"
    FR = "fr"
    IT = "it"
    JA = "ja"
    NL = "nl"
    PT = "pt"
    PT_BR = "pt-br"
    RU = "ru"

    @property
    def langcode(self) -> str:
        """Language code sent to DeepL; plain Portuguese maps to Brazilian."""
        if self is Language.PT:
            return Language.PT_BR.value
        return self.value

    @classmethod
    def from_code(cls, code: str) -> Language:
        """Look up a language by its code, ignoring case.

        Raises
        ------
        ValidationError
            If the code is not supported

        """
        try:
            return cls(code.strip().lower())
        except ValueError:
            supported = ", ".join(lang.value for lang in cls)
            raise ValidationError(
                f"Unsupported language code {code!r} (supported: {supported})",
                parameter_name="language",
                parameter_value=code,
            ) from None


class Formality(Enum):
    """Formality levels accepted by DeepL."""

    DEFAULT = "default"
    MORE = "more"
    LESS = "less"
    PREFER_MORE = "prefer_more"
    PREFER_LESS = "prefer_less"

    @classmethod
    def from_value(cls, value: str) -> Formality:
        """Parse a formality name such as ``"prefer_less"`` or ``"prefer-less"``.

        Raises
        ------
        ValidationError
            If the name is unknown

        """
        try:
            return cls(value.strip().lower().replace("-", "_"))
        except ValueError:
            supported = ", ".join(f.value for f in cls)
            raise ValidationError(
                f"Unknown formality {value!r} (supported: {supported})",
                parameter_name="formality",
                parameter_value=value,
            ) from None


@dataclass(frozen=True)
class DeeplGlossary:
    """A glossary registered with DeepL."""

    glossary_id: str
    name: str
    ready: bool
    source_lang: str
    target_lang: str
    creation_time: str
    entry_count: int

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> DeeplGlossary:
        return cls(
            glossary_id=str(data.get("glossary_id", "")),
            name=str(data.get("name", "")),
            ready=bool(data.get("ready", False)),
            source_lang=str(data.get("source_lang", "")),
            target_lang=str(data.get("target_lang", "")),
            creation_time=str(data.get("creation_time", "")),
            entry_count=int(data.get("entry_count", 0)),
        )


@dataclass(frozen=True)
class DeeplUsage:
    """Characters translated in the current billing period."""

    character_count: int
    character_limit: int


def glossary_tsv(entries: Iterable[tuple[str, str]]) -> str:
    """Format glossary pairs as TSV, dropping pairs with a blank side.

    Examples
    --------
        >>> glossary_tsv([(" cat ", "Katze"), ("dog", ""), ("mouse", "Maus")])
        'cat\\tKatze\\nmouse\\tMaus'

    """
    lines = []
    for source, target in entries:
        source, target = source.strip(), target.strip()
        if source and target:
            lines.append(f"{source}\t{target}")
    return "\n".join(lines)


class Deepl:
    """DeepL API client.

    Parameters
    ----------
    config : DeeplConfig
        API key and glossary ids
    client : httpx.Client or None, default None
        HTTP client to send requests with. When omitted, a client is
        created and owned by this instance; :meth:`close` closes it.
    timeout : float, default 30.0
        Request timeout in seconds for an owned client
    preserve_formatting : bool, default True
        Ask DeepL not to correct punctuation or capitalisation

    """

    @requires_dependencies("deepl", DEPS_DEEPL)
    def __init__(
        self,
        config: DeeplConfig,
        client: Any = None,
        timeout: float = DEEPL_DEFAULT_TIMEOUT,
        preserve_formatting: bool = DEFAULT_PRESERVE_FORMATTING,
    ):
        import httpx

        self.config = config
        self.preserve_formatting = preserve_formatting
        self._owns_client = client is None
        self._client: httpx.Client = client or httpx.Client(timeout=timeout)
        self._headers = {
            "Authorization": f"{DEEPL_AUTH_SCHEME} {config.api_key}",
            "User-Agent": DEEPL_USER_AGENT,
        }

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> Deepl:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _request(self, method: str, api: str, data: Optional[dict[str, Any]] = None) -> Any:
        import httpx

        url = self.config.endpoint(api)
        logger.debug("DeepL %s %s", method, url)
        try:
            response = self._client.request(method, url, data=data, headers=self._headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise TranslationError(
                f"DeepL {api} request failed with HTTP {status}",
                status_code=status,
                response_text=e.response.text,
                original_error=e,
            ) from e
        except httpx.HTTPError as e:
            raise TranslationError(f"DeepL {api} request failed: {e}", original_error=e) from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise TranslationError(
                f"DeepL {api} returned invalid JSON",
                status_code=response.status_code,
                response_text=response.text,
                original_error=e,
            ) from e

    def _translation_params(self, from_lang: Language, to_lang: Language, formality: Formality) -> dict[str, Any]:
        params: dict[str, Any] = {
            "source_lang": from_lang.langcode,
            "target_lang": to_lang.langcode,
            "preserve_formatting": "1" if self.preserve_formatting else "0",
            "formality": formality.value,
        }
        glossary_id = self.config.glossary(from_lang.langcode, to_lang.langcode)
        if glossary_id:
            logger.debug("Using glossary %s", glossary_id)
            params["glossary_id"] = glossary_id
        return params

    @staticmethod
    def _translated_texts(payload: Any) -> list[str]:
        if not isinstance(payload, dict) or not isinstance(payload.get("translations"), list):
            raise TranslationError("DeepL response has no 'translations' list")
        return [str(item.get("text", "")) for item in payload["translations"]]

    def translate_strings(
        self,
        from_lang: Language,
        to_lang: Language,
        formality: Formality,
        texts: Sequence[str],
    ) -> list[str]:
        """Translate several plain strings in one request.

        Returns
        -------
        list of str
            Translations in the order of ``texts``

        Raises
        ------
        TranslationError
            If the request fails

        """
        if not texts:
            return []
        params = self._translation_params(from_lang, to_lang, formality)
        params["text"] = list(texts)
        with debug_timer(logger, f"Translation of {len(texts)} strings"):
            payload = self._request("POST", "translate", params)
        return self._translated_texts(payload)

    def translate(
        self,
        text: str,
        from_lang: Language = Language.EN,
        to_lang: Language = Language.DE,
        formality: Formality = Formality.DEFAULT,
    ) -> str:
        """Translate a single string; an empty response yields ``""``."""
        translations = self.translate_strings(from_lang, to_lang, formality, [text])
        return translations[0] if translations else ""

    def translate_xml(self, from_lang: Language, to_lang: Language, formality: Formality, xml_body: str) -> str:
        """Translate an XML document produced by the transcoder.

        The request enables XML tag handling and passes the tag contract of
        :mod:`cmark_translate.mapping`: literal elements are ignored, block
        elements split sentences, inline elements do not.

        Raises
        ------
        TranslationError
            If the request fails

        """
        params = self._translation_params(from_lang, to_lang, formality)
        params.update(
            {
                "tag_handling": "xml",
                "ignore_tags": ",".join(IGNORE_TAGS),
                "splitting_tags": ",".join(SPLITTING_TAGS),
                "non_splitting_tags": ",".join(NON_SPLITTING_TAGS),
                "text": xml_body,
            }
        )
        with debug_timer(logger, "XML translation"):
            payload = self._request("POST", "translate", params)
        translations = self._translated_texts(payload)
        return translations[0] if translations else ""

    def register_glossary(
        self,
        name: str,
        from_lang: Language,
        to_lang: Language,
        entries: Iterable[tuple[str, str]],
    ) -> DeeplGlossary:
        """Register a glossary from ``(source, target)`` pairs."""
        params = {
            "name": name,
            "source_lang": from_lang.langcode,
            "target_lang": to_lang.langcode,
            "entries_format": "tsv",
            "entries": glossary_tsv(entries),
        }
        return DeeplGlossary.from_json(self._request("POST", "glossaries", params) or {})

    def list_glossaries(self) -> list[DeeplGlossary]:
        """List the glossaries registered for this account."""
        payload = self._request("GET", "glossaries") or {}
        return [DeeplGlossary.from_json(item) for item in payload.get("glossaries", [])]

    def remove_glossary(self, glossary_id: str) -> None:
        """Delete a registered glossary."""
        self._request("DELETE", f"glossaries/{glossary_id}")

    def get_usage(self) -> DeeplUsage:
        """Return the character usage of the current billing period."""
        payload = self._request("GET", "usage") or {}
        return DeeplUsage(
            character_count=int(payload.get("character_count", 0)),
            character_limit=int(payload.get("character_limit", 0)),
        )
