# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""Process-wide settings for entitree and their YAML loader."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

import yaml

# ###############
# Public Interface
# ###############

SUPPORTED_LANGUAGES: tuple[str, ...] = ("en", "ru")


class EntityConfigError(Exception):
    """Raised when an entitree configuration is invalid or cannot be loaded."""


@dataclass(frozen=True)
class EntityConfig:
    """Settings shared by every model and collection in the process.

    Attributes:
        lang: Language of error messages (one of ``SUPPORTED_LANGUAGES``).
        model_id_prefix: Prefix of the opaque ``cid`` given to models.
        collection_id_prefix: Prefix of the opaque ``cid`` given to collections.
    """

    lang: str = "en"
    model_id_prefix: str = "mod"
    collection_id_prefix: str = "coll"


def get_config() -> EntityConfig:
    """Return the active configuration."""
    return _active_config


def configure(config: EntityConfig | None = None, **overrides: str) -> EntityConfig:
    """Replace the active configuration.

    Args:
        config: A full configuration to install. Defaults to the active one.
        overrides: Individual attributes to change on top of *config*.

    Returns:
        The configuration now in effect.

    Raises:
        EntityConfigError: If an override is unknown or a value is invalid.
    """
    global _active_config

    base = config if config is not None else _active_config
    try:
        candidate = replace(base, **overrides)
    except TypeError as exc:
        raise EntityConfigError(f"Unknown configuration option: {exc}") from exc

    _check_config(candidate, source_label="configure()")
    _active_config = candidate
    return candidate


def set_lang(lang: str) -> None:
    """Switch the language used for error messages."""
    configure(lang=lang)


def load_config(path: Path) -> EntityConfig:
    """Load an entitree configuration file.

    Args:
        path: Path to a YAML file with optional ``lang``, ``model-id-prefix``
            and ``collection-id-prefix`` keys.

    Returns:
        An EntityConfig populated from the file (missing keys keep defaults).

    Raises:
        EntityConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise EntityConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise EntityConfigError(f"Cannot read config file: {exc}") from exc

    return _parse_config(text, source_label=str(path))


# ################
# Implementation
# ################

_active_config = EntityConfig()

_YAML_KEYS: dict[str, str] = {
    "lang": "lang",
    "model-id-prefix": "model_id_prefix",
    "collection-id-prefix": "collection_id_prefix",
}


def _parse_config(text: str, source_label: str = "<string>") -> EntityConfig:
    """Parse config YAML text into an EntityConfig."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise EntityConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return EntityConfig()
    if not isinstance(data, dict):
        raise EntityConfigError(f"{source_label}: config must be a YAML mapping")

    values: dict[str, str] = {}
    for yaml_key, value in data.items():
        if yaml_key not in _YAML_KEYS:
            raise EntityConfigError(f"{source_label}: unknown option '{yaml_key}'")
        if not isinstance(value, str):
            raise EntityConfigError(f"{source_label}: '{yaml_key}' must be a string")
        values[_YAML_KEYS[yaml_key]] = value

    config = EntityConfig(**values)
    _check_config(config, source_label)
    return config


def _check_config(config: EntityConfig, source_label: str) -> None:
    if config.lang not in SUPPORTED_LANGUAGES:
        raise EntityConfigError(
            f"{source_label}: unsupported language '{config.lang}', expected one of {', '.join(SUPPORTED_LANGUAGES)}"
        )
    for name in ("model_id_prefix", "collection_id_prefix"):
        if not getattr(config, name):
            raise EntityConfigError(f"{source_label}: '{name}' must not be empty")
