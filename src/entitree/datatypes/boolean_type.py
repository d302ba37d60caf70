# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""The ``boolean`` type."""

from __future__ import annotations

from typing import Any

from entitree.datatypes.base import Type
from entitree.errors import InvalidBooleanError
from entitree.utils import invalid_value_as_string

# ###############
# Public Interface
# ###############


class BooleanType(Type):
    """Accepts ``True``, ``False`` or None; no truthiness coercion."""

    @classmethod
    def normalize_declaration(cls, declaration: dict[str, Any], key: str) -> dict[str, Any]:
        if declaration.get("type") is bool:
            return {**declaration, "type": "boolean"}
        return declaration

    def prepare_value(self, value: Any, key: str, model: Any) -> Any:
        if value is None or isinstance(value, bool):
            return value
        raise InvalidBooleanError(key=key, invalid_value=invalid_value_as_string(value))
