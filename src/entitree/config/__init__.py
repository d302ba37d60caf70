# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""Configuration and logging setup for entitree."""

from entitree.config.logging import LOGGER_NAME, configure_logging
from entitree.config.settings import (
    SUPPORTED_LANGUAGES,
    EntityConfig,
    EntityConfigError,
    configure,
    get_config,
    load_config,
    set_lang,
)

__all__ = [
    "EntityConfig",
    "EntityConfigError",
    "LOGGER_NAME",
    "SUPPORTED_LANGUAGES",
    "configure",
    "configure_logging",
    "get_config",
    "load_config",
    "set_lang",
]
