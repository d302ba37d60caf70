# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""Error kinds raised by the entitree type system and entities.

Every error is an :class:`EntityError` carrying a stable ``code`` and the
structured ``data`` it was raised with (field key, diagnostic rendering of
the offending value, expected vs. actual kind). The human-readable message
is rendered from a per-language template catalog at raise time; the active
language comes from :func:`entitree.config.get_config`.

Four category bases group the kinds:

- :class:`SchemaDefinitionError`: the declared structure itself is wrong.
- :class:`InputShapeError`: the input does not have the expected shape.
- :class:`ValueValidationError`: a value was rejected by its field.
- :class:`SerializationError`: a structure cannot be exported.
"""

from __future__ import annotations

from typing import Any, ClassVar

from entitree.config.settings import get_config

# ###############
# Public Interface
# ###############


class EntityError(Exception):
    """Base class of all entitree errors."""

    code: ClassVar[str] = "entity_error"

    def __init__(self, **data: Any) -> None:
        self.data: dict[str, Any] = data
        super().__init__(_render(self.code, data))

    @property
    def message(self) -> str:
        """The rendered, possibly key-prefixed, message."""
        return str(self.args[0]) if self.args else ""

    def with_key_prefix(self, key: str) -> EntityError:
        """Prefix the message with a field key and return the same error."""
        self.data.setdefault("field", key)
        self.args = (f"{key}: {self.message}",)
        return self


class SchemaDefinitionError(EntityError):
    """The declared structure of a model, collection or type is invalid."""

    code = "schema_definition"


class InputShapeError(EntityError):
    """Input has the wrong shape for the receiving entity."""

    code = "input_shape"


class ValueValidationError(EntityError):
    """A value was rejected by the type of its field."""

    code = "value_validation"


class SerializationError(EntityError):
    """A structure cannot be exported to plain data."""

    code = "serialization"


# Schema definition errors


class UnknownTypeError(SchemaDefinitionError):
    code = "unknown_type"


class ReservedPrimaryKeyError(SchemaDefinitionError):
    code = "reserved_primary_key"


class InvalidValidatorError(SchemaDefinitionError):
    code = "invalid_validator"


class InvalidKeyValidatorError(SchemaDefinitionError):
    code = "invalid_key_validator"


class InvalidTypeParamsError(SchemaDefinitionError):
    code = "invalid_type_params"


class ConflictNullAndEmptyStringParameterError(SchemaDefinitionError):
    code = "conflict_null_and_empty_string"


class ConflictLowerUpperParameterError(SchemaDefinitionError):
    code = "conflict_lower_upper"


class ConflictNullAndZeroParameterError(SchemaDefinitionError):
    code = "conflict_null_and_zero"


class ConflictRoundingParameterError(SchemaDefinitionError):
    code = "conflict_rounding"


class ConflictNullAndEmptyArrayParameterError(SchemaDefinitionError):
    code = "conflict_null_and_empty_array"


class ModelWithoutStructureError(SchemaDefinitionError):
    code = "model_without_structure"


class CollectionWithoutModelError(SchemaDefinitionError):
    code = "collection_without_model"


# Input shape errors


class UnknownFieldError(InputShapeError):
    code = "unknown_field"


class InvalidKeyError(InputShapeError):
    code = "invalid_key"


class NonObjectInputError(InputShapeError):
    code = "non_object_input"


class WrongModelKindError(InputShapeError):
    code = "wrong_model_kind"


class InvalidRowError(InputShapeError):
    code = "invalid_row"


class InvalidSortParamsError(InputShapeError):
    code = "invalid_sort_params"


# Value validation errors


class InvalidValueError(ValueValidationError):
    code = "invalid_value"


class RequiredFieldError(ValueValidationError):
    code = "required_field"


class ConstValueError(ValueValidationError):
    code = "const_value"


class InvalidStringError(ValueValidationError):
    code = "invalid_string"


class InvalidNumberError(ValueValidationError):
    code = "invalid_number"


class InvalidBooleanError(ValueValidationError):
    code = "invalid_boolean"


class InvalidDateError(ValueValidationError):
    code = "invalid_date"


class InvalidArrayError(ValueValidationError):
    code = "invalid_array"


class DuplicateValueForUniqueArrayError(ValueValidationError):
    code = "duplicate_array_value"


class InvalidObjectError(ValueValidationError):
    code = "invalid_object"


class InvalidModelError(ValueValidationError):
    code = "invalid_model"


class InvalidCollectionError(ValueValidationError):
    code = "invalid_collection"


class InvalidCustomClassError(ValueValidationError):
    code = "invalid_custom_class"


class InvalidOrValueError(ValueValidationError):
    code = "invalid_or_value"


# Serialization errors


class CircularReferenceError(SerializationError):
    code = "circular_reference"


# ################
# Implementation
# ################

_MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "entity_error": "entity error",
        "schema_definition": "invalid structure definition",
        "input_shape": "invalid input shape",
        "value_validation": "invalid value",
        "serialization": "cannot serialize value",
        "unknown_type": "unknown type: {type}",
        "reserved_primary_key": "cannot use reserved word as primary key: {key}",
        "invalid_validator": "invalid validation: {invalid_value}",
        "invalid_key_validator": "invalid key validation: {invalid_value}",
        "invalid_type_params": "invalid type parameters: {reason}",
        "conflict_null_and_empty_string": "conflicting parameters: null_as_empty and empty_as_null",
        "conflict_null_and_zero": "conflicting parameters: null_as_zero and zero_as_null",
        "conflict_lower_upper": "conflicting parameters: lower and upper",
        "conflict_rounding": "conflicting parameters: use only one of round, floor, ceil",
        "conflict_null_and_empty_array": "conflicting parameters: null_as_empty and empty_as_null",
        "model_without_structure": "model {class_name} must declare structure()",
        "collection_without_model": "collection {class_name} must declare model_class()",
        "unknown_field": "unknown property: {property_name}",
        "invalid_key": "invalid key: {key}",
        "non_object_input": "data must be an object",
        "wrong_model_kind": "{owner}: expected {expected}, got {invalid}",
        "invalid_row": "invalid row for {model}: {invalid_value}",
        "invalid_sort_params": "invalid sort parameters: {invalid_value}",
        "invalid_value": "invalid value for {key}: {value}",
        "required_field": "required field: {key}",
        "const_value": "cannot change constant field: {key}",
        "invalid_string": "invalid string for {key}: {invalid_value}",
        "invalid_number": "invalid number for {key}: {invalid_value}",
        "invalid_boolean": "invalid boolean for {key}: {invalid_value}",
        "invalid_date": "invalid date for {key}: {invalid_value}",
        "invalid_array": "invalid array for {key}: {invalid_value}",
        "duplicate_array_value": "{key}: duplicate value in unique array: {invalid_value}",
        "invalid_object": "invalid object for {key}: {invalid_value}",
        "invalid_model": "invalid {model} for {key}: {invalid_value}",
        "invalid_collection": "invalid {collection} for {key}: {invalid_value}",
        "invalid_custom_class": "invalid {class_name} for {key}: {invalid_value}",
        "invalid_or_value": "{key}: expected {expected}, got {invalid_value}",
        "circular_reference": "cannot serialize circular structure",
    },
    "ru": {
        "entity_error": "ошибка сущности",
        "schema_definition": "некорректное описание структуры",
        "input_shape": "некорректная форма данных",
        "value_validation": "некорректное значение",
        "serialization": "невозможно сериализовать значение",
        "unknown_type": "неизвестный тип: {type}",
        "reserved_primary_key": "нельзя использовать зарезервированное слово как первичный ключ: {key}",
        "invalid_validator": "некорректная валидация: {invalid_value}",
        "invalid_key_validator": "некорректная валидация ключа: {invalid_value}",
        "invalid_type_params": "некорректные параметры типа: {reason}",
        "conflict_null_and_empty_string": "конфликт параметров: null_as_empty и empty_as_null",
        "conflict_null_and_zero": "конфликт параметров: null_as_zero и zero_as_null",
        "conflict_lower_upper": "конфликт параметров: lower и upper",
        "conflict_rounding": "конфликт параметров: используйте только один из round, floor, ceil",
        "conflict_null_and_empty_array": "конфликт параметров: null_as_empty и empty_as_null",
        "model_without_structure": "модель {class_name} должна объявить structure()",
        "collection_without_model": "коллекция {class_name} должна объявить model_class()",
        "unknown_field": "неизвестное свойство: {property_name}",
        "invalid_key": "некорректный ключ: {key}",
        "non_object_input": "данные должны быть объектом",
        "wrong_model_kind": "{owner}: ожидался {expected}, получен {invalid}",
        "invalid_row": "некорректная строка для {model}: {invalid_value}",
        "invalid_sort_params": "некорректные параметры сортировки: {invalid_value}",
        "invalid_value": "некорректное значение {key}: {value}",
        "required_field": "обязательное поле: {key}",
        "const_value": "нельзя изменить константное поле: {key}",
        "invalid_string": "некорректная строка {key}: {invalid_value}",
        "invalid_number": "некорректное число {key}: {invalid_value}",
        "invalid_boolean": "некорректное логическое значение {key}: {invalid_value}",
        "invalid_date": "некорректная дата {key}: {invalid_value}",
        "invalid_array": "некорректный массив {key}: {invalid_value}",
        "duplicate_array_value": "{key}: повторяющееся значение в уникальном массиве: {invalid_value}",
        "invalid_object": "некорректный объект {key}: {invalid_value}",
        "invalid_model": "некорректная модель {model} для {key}: {invalid_value}",
        "invalid_collection": "некорректная коллекция {collection} для {key}: {invalid_value}",
        "invalid_custom_class": "некорректный {class_name} для {key}: {invalid_value}",
        "invalid_or_value": "{key}: ожидалось {expected}, получено {invalid_value}",
        "circular_reference": "невозможно сериализовать циклическую структуру",
    },
}


class _MissingKeys(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def _render(code: str, data: dict[str, Any]) -> str:
    catalog = _MESSAGES.get(get_config().lang, _MESSAGES["en"])
    template = catalog.get(code) or _MESSAGES["en"].get(code, code)
    return template.format_map(_MissingKeys(data))
