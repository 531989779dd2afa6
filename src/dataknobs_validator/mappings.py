"""Dictionary and record validators.

Both validate a fixed set of named fields, each with its own validator
node. Every field is processed, so one call reports all failing fields at
once. Output is sparse: a field appears only if it was present in the input
or its validator substituted a default. Keys not named in the schema are
dropped.

Example:
    ```python
    from dataknobs_validator import is_dict, is_int, is_string

    user = is_dict({
        "name": is_string().required(),
        "age": is_int().coerce().min(0),
        "role": is_string().default("member"),
    })
    user.validate({"name": "Ada", "age": "36"})
    # {'name': 'Ada', 'age': 36, 'role': 'member'}
    ```
"""

from __future__ import annotations

import logging
from abc import abstractmethod
from collections.abc import Mapping, Sequence
from types import ModuleType, SimpleNamespace
from typing import Any

from .base import Validator
from .errors import ErrorKind
from .exceptions import FieldFailure

logger = logging.getLogger(__name__)


def is_property_bag(value: Any) -> bool:
    """True for plain attribute-holding objects.

    Mappings, sequences, classes, modules and callables are not records.
    """
    if isinstance(value, (Mapping, Sequence, type, ModuleType)) or callable(value):
        return False
    return hasattr(value, "__dict__")


class SchemaValidator(Validator):
    """Shared field processing for dictionary and record validators."""

    type_error_kind = ErrorKind.STRUCTURE

    def __init__(self, schema: Mapping[str, Validator] | None = None):
        super().__init__()
        self._schema: dict[str, Validator] = {}
        self._coerce_all = False
        for name, validator in (schema or {}).items():
            if not isinstance(validator, Validator):
                raise TypeError(
                    f"Field '{name}' must be a Validator, got {type(validator).__name__}"
                )
            self._schema[name] = validator

    @property
    def fields(self) -> dict[str, Validator]:
        return dict(self._schema)

    def coerce_all(self) -> SchemaValidator:
        """Coerce every declared field, whether or not its validator enables coercion.

        The field validators themselves are not modified.
        """
        self._coerce_all = True
        return self

    def _validate_children(self, value: Any, key: Any, input: Any) -> Any:
        output: dict[str, Any] = {}
        errors: dict[str, Any] = {}

        for name, validator in self._schema.items():
            present = self._has_field(value, name)
            raw = self._get_field(value, name) if present else None
            result = validator._evaluate(raw, name, value, force_coerce=self._coerce_all)
            if not result.valid:
                errors[name] = result.errors
            elif present or result.defaulted:
                output[validator.output_name(name)] = result.value

        if errors:
            logger.debug(
                f"{self.type_name} validator {key!r}: {len(errors)} of {len(self._schema)} "
                f"field(s) failed"
            )
            raise FieldFailure(ErrorKind.NESTED, errors)
        return self._build_output(output)

    @abstractmethod
    def _has_field(self, value: Any, name: str) -> bool:
        """Whether the field is present in the (type-checked) input."""

    @abstractmethod
    def _get_field(self, value: Any, name: str) -> Any:
        """Read a present field from the input."""

    @abstractmethod
    def _build_output(self, fields: dict[str, Any]) -> Any:
        """Wrap validated fields in the output container."""


class DictValidator(SchemaValidator):
    """Validator for mappings; produces a ``dict``."""

    type_name = "dict"

    def _coerce_value(self, value: Any) -> Any:
        if isinstance(value, Mapping):
            return dict(value)
        if isinstance(value, str) and value == "":
            return {}
        if is_property_bag(value):
            return dict(vars(value))
        return value

    def _check_type(self, value: Any) -> Any:
        if not isinstance(value, Mapping):
            raise self._fail("Input must be a dictionary")
        return value

    def _has_field(self, value: Any, name: str) -> bool:
        return name in value

    def _get_field(self, value: Any, name: str) -> Any:
        return value[name]

    def _build_output(self, fields: dict[str, Any]) -> Any:
        return fields


class RecordValidator(SchemaValidator):
    """Validator for attribute-holding objects; produces a ``SimpleNamespace``."""

    type_name = "record"

    def _coerce_value(self, value: Any) -> Any:
        if isinstance(value, Mapping):
            return SimpleNamespace(**{str(name): item for name, item in value.items()})
        if isinstance(value, str) and value == "":
            return SimpleNamespace()
        return value

    def _check_type(self, value: Any) -> Any:
        if not is_property_bag(value):
            raise self._fail("Input must be an object")
        return value

    def _has_field(self, value: Any, name: str) -> bool:
        return name in vars(value)

    def _get_field(self, value: Any, name: str) -> Any:
        return vars(value)[name]

    def _build_output(self, fields: dict[str, Any]) -> Any:
        return SimpleNamespace(**fields)
