# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""Base class of all type variants and the parameters every variant accepts."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic import Field as _Field

from entitree.errors import InvalidKeyValidatorError, InvalidTypeParamsError, InvalidValidatorError
from entitree.utils import invalid_value_as_string

# ###############
# Public Interface
# ###############


class TypeParams(BaseModel):
    """Parameters shared by every type declaration.

    Variants extend this model with their own options. Unknown keys are
    rejected so that a misspelled option fails at schema-compile time.
    """

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True, populate_by_name=True)

    type: str
    description: str | None = None
    required: bool = False
    primary: bool = False
    const: bool = False
    enum: list[Any] | None = None
    default: Any = None
    prepare: Callable[..., Any] | None = None
    to_json: Callable[..., Any] | None = None
    clone: Callable[..., Any] | None = None
    equal: Callable[..., Any] | None = None
    validator: Any = _Field(default=None, alias="validate")
    key: Any = None


class Type:
    """A resolved, frozen field type.

    Subclasses customise behaviour through the ``*_value`` methods; the
    public capability methods layer the schema author's overrides on top:

    - a custom ``prepare`` runs after the built-in coercion, on non-null results only;
    - a custom ``validate`` (callable or compiled pattern) is AND-ed with the
      built-in check and only sees non-null values;
    - custom ``to_json``, ``clone`` and ``equal`` replace the built-in ones.
    """

    params_model: ClassVar[type[TypeParams]] = TypeParams

    def __init__(self, params: Mapping[str, Any]) -> None:
        try:
            parsed = self.params_model.model_validate(dict(params))
        except ValidationError as exc:
            raise InvalidTypeParamsError(reason=_describe_validation_error(exc)) from exc

        self.params = parsed
        self.type: str = parsed.type
        self.description = parsed.description
        self.primary: bool = parsed.primary
        # A primary key identifies the entity, so it can be neither absent nor changed.
        self.required: bool = parsed.required or parsed.primary
        self.const: bool = parsed.const or parsed.primary
        self.enum: tuple[Any, ...] | None = tuple(parsed.enum) if parsed.enum is not None else None

        self._default_factory: Callable[[], Any] | None = None
        if "default" in parsed.model_fields_set:
            default = parsed.default
            self._default_factory = default if callable(default) else (lambda: default)

        self._custom_prepare = parsed.prepare
        self._custom_to_json = parsed.to_json
        self._custom_clone = parsed.clone
        self._custom_equal = parsed.equal
        self._custom_validate = _value_validator(parsed) if "validator" in parsed.model_fields_set else None
        self._custom_validate_key = _key_validator(parsed) if "key" in parsed.model_fields_set else None

    @classmethod
    def normalize_declaration(cls, declaration: dict[str, Any], key: str) -> dict[str, Any]:
        """Rewrite shorthand declarations this variant recognises.

        Called for every registered variant before the tag is looked up.
        The default implementation returns *declaration* unchanged.
        """
        return declaration

    def freeze(self) -> None:
        """Forbid any further attribute assignment."""
        self._frozen = True

    def __setattr__(self, name: str, value: Any) -> None:
        if self.__dict__.get("_frozen", False):
            raise AttributeError(f"{type(self).__name__} is frozen, cannot set '{name}'")
        super().__setattr__(name, value)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.type_as_string()}>"

    # Capability set

    def default(self) -> Any:
        """Value used when the field is absent from the input."""
        if self._default_factory is None:
            return None
        return self._default_factory()

    def prepare(self, value: Any, key: str, model: Any = None) -> Any:
        """Coerce raw input into the stored form; None means absent."""
        value = self.prepare_value(value, key, model)
        if value is not None and self._custom_prepare is not None:
            value = self._custom_prepare(value, key, model)
        return value

    def validate(self, value: Any, key: str) -> bool:
        """Return True if the prepared *value* is acceptable."""
        if not self.validate_value(value, key):
            return False
        if value is None or self._custom_validate is None:
            return True
        return bool(self._custom_validate(value, key))

    def validate_key(self, key: str) -> bool:
        """Return True if *key* may be stored under a catch-all declaration."""
        if self._custom_validate_key is None:
            return True
        return bool(self._custom_validate_key(key))

    def to_json(self, value: Any, stack: list[Any]) -> Any:
        """Return a plain-data rendering of *value*."""
        if self._custom_to_json is not None:
            return self._custom_to_json(value, stack)
        return self.value_to_json(value, stack)

    def clone(self, value: Any, stack: Any, parent: Any = None) -> Any:
        """Return a structurally independent copy of *value*."""
        if self._custom_clone is not None:
            return self._custom_clone(value, stack)
        return self.clone_value(value, stack, parent)

    def equal(self, self_value: Any, other_value: Any, stack: Any) -> bool:
        """Return True if both values are structurally equal."""
        if self._custom_equal is not None:
            return bool(self._custom_equal(self_value, other_value, stack))
        return self.equal_value(self_value, other_value, stack)

    def type_as_string(self) -> str:
        return self.type

    # Variant hooks

    def prepare_value(self, value: Any, key: str, model: Any) -> Any:
        return value

    def validate_value(self, value: Any, key: str) -> bool:
        if self.enum is not None and value is not None:
            return value in self.enum
        return True

    def value_to_json(self, value: Any, stack: list[Any]) -> Any:
        return value

    def clone_value(self, value: Any, stack: Any, parent: Any) -> Any:
        return self.to_json(value, stack)

    def equal_value(self, self_value: Any, other_value: Any, stack: Any) -> bool:
        return self_value == other_value


# ################
# Implementation
# ################


def _describe_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "<root>"
    return f"{location}: {first['msg']}"


def _value_validator(params: TypeParams) -> Callable[[Any, str], bool]:
    validator = params.validator
    if isinstance(validator, re.Pattern):
        pattern = validator
        return lambda value, key: pattern.search(str(value)) is not None
    if callable(validator):
        return validator
    raise InvalidValidatorError(invalid_value=invalid_value_as_string(validator))


def _key_validator(params: TypeParams) -> Callable[[str], bool]:
    validator = params.key
    if isinstance(validator, re.Pattern):
        pattern = validator
        return lambda key: pattern.search(key) is not None
    if callable(validator):
        return validator
    raise InvalidKeyValidatorError(invalid_value=invalid_value_as_string(validator))
