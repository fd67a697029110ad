#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/cmark_translate/config.py
"""DeepL configuration file discovery and loading.

The configuration is a small TOML file::

    api_key = "xxxxxxxx-xxxx-xxxx-xxxx-xxxxxxxxxxxx:fx"

    [glossaries]
    en_de = "a1b2c3d4-..."

Glossary ids are keyed by ``<source>_<target>`` language codes.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

from cmark_translate.constants import (
    API_KEY_ENV_VAR,
    CONFIG_ENV_VAR,
    DEEPL_FREE_ENDPOINT,
    DEEPL_FREE_KEY_SUFFIX,
    DEEPL_PRO_ENDPOINT,
    DEFAULT_CONFIG_FILENAME,
)
from cmark_translate.exceptions import ConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeeplConfig:
    """Credentials and glossary ids for the DeepL API.

    Parameters
    ----------
    api_key : str
        DeepL authentication key. Keys ending in ``:fx`` belong to the free plan.
    glossaries : dict of str to str
        Glossary ids keyed by ``"<source>_<target>"`` language codes

    """

    api_key: str
    glossaries: Dict[str, str] = field(default_factory=dict)

    @property
    def is_free_plan(self) -> bool:
        return self.api_key.endswith(DEEPL_FREE_KEY_SUFFIX)

    @property
    def base_url(self) -> str:
        """API base URL for the plan the key belongs to."""
        return DEEPL_FREE_ENDPOINT if self.is_free_plan else DEEPL_PRO_ENDPOINT

    def endpoint(self, api: str) -> str:
        """Return the full URL of an API method, e.g. ``endpoint("usage")``."""
        return self.base_url + api

    def glossary(self, from_code: str, to_code: str) -> Optional[str]:
        """Return the glossary id registered for a language pair, if any."""
        return self.glossaries.get(f"{from_code}_{to_code}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any], config_path: Optional[str] = None) -> DeeplConfig:
        """Build a configuration from parsed TOML data.

        Raises
        ------
        ConfigError
            If ``api_key`` is missing or a value has the wrong type

        """
        api_key = data.get("api_key")
        if not isinstance(api_key, str) or not api_key:
            raise ConfigError("Configuration must define a non-empty 'api_key'", config_path=config_path)

        glossaries = data.get("glossaries", {})
        if not isinstance(glossaries, dict) or not all(isinstance(v, str) for v in glossaries.values()):
            raise ConfigError("'glossaries' must be a table of string glossary ids", config_path=config_path)

        return cls(api_key=api_key, glossaries=dict(glossaries))


def candidate_config_paths(explicit_path: Optional[str | Path] = None) -> list[Path]:
    """List configuration files in the order they are tried.

    An explicit path (``--config``) or ``$CMARK_TRANSLATE_CONFIG`` replaces
    the search; otherwise ``./deepl.toml`` then ``~/.deepl.toml`` are tried.
    """
    if explicit_path:
        return [Path(explicit_path)]

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return [Path(env_path)]

    return [Path.cwd() / DEFAULT_CONFIG_FILENAME, Path.home() / f".{DEFAULT_CONFIG_FILENAME}"]


def load_config_file(config_path: str | Path) -> DeeplConfig:
    """Load a DeepL configuration from a TOML file.

    Parameters
    ----------
    config_path : str or Path
        Path to the TOML file

    Returns
    -------
    DeeplConfig
        Parsed configuration

    Raises
    ------
    ConfigError
        If the file cannot be read, is not valid TOML or lacks ``api_key``

    """
    path = Path(config_path)
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Configuration file not found: {path}", config_path=str(path), original_error=e) from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}", config_path=str(path), original_error=e) from e
    except OSError as e:
        raise ConfigError(f"Cannot read configuration {path}: {e}", config_path=str(path), original_error=e) from e

    return DeeplConfig.from_dict(data, config_path=str(path))


def load_config(explicit_path: Optional[str | Path] = None) -> DeeplConfig:
    """Find and load the DeepL configuration.

    Parameters
    ----------
    explicit_path : str, Path or None, default None
        Configuration file given on the command line

    Returns
    -------
    DeeplConfig
        The first configuration found. ``$DEEPL_API_KEY`` overrides its key;
        when no file exists but the variable is set, a configuration
        without glossaries is returned.

    Raises
    ------
    ConfigError
        If no configuration is found or the one found is invalid

    """
    env_key = os.environ.get(API_KEY_ENV_VAR)
    candidates = candidate_config_paths(explicit_path)

    for path in candidates:
        if not path.is_file():
            logger.debug("Config file %s not found", path)
            continue
        logger.debug("Reading config file %s", path)
        config = load_config_file(path)
        if env_key:
            return DeeplConfig(api_key=env_key, glossaries=config.glossaries)
        return config

    if env_key and not explicit_path:
        logger.debug("No config file found; using API key from $%s", API_KEY_ENV_VAR)
        return DeeplConfig(api_key=env_key)

    searched = ", ".join(str(p) for p in candidates)
    raise ConfigError(f"No DeepL configuration found (searched: {searched})")
