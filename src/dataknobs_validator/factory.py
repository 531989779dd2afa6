"""Construction functions for validator nodes.

These are the public entry points for building schemas; each returns a new,
unconfigured node ready for chaining.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .combinators import all_of, any_of, not_
from .mappings import DictValidator, RecordValidator
from .scalars import BoolValidator, FloatValidator, IntValidator, StringValidator
from .sequences import ListValidator

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .base import Validator


def is_string() -> StringValidator:
    return StringValidator()


def is_int() -> IntValidator:
    return IntValidator()


def is_float() -> FloatValidator:
    return FloatValidator()


def is_bool() -> BoolValidator:
    return BoolValidator()


def is_list(items: Validator | None = None) -> ListValidator:
    """Create a list validator, optionally with an item validator."""
    return ListValidator(items)


def is_dict(schema: Mapping[str, Validator] | None = None) -> DictValidator:
    """Create a dictionary validator.

    Args:
        schema: Field name to validator; fields not listed are dropped from output

    Returns:
        DictValidator
    """
    return DictValidator(schema)


def is_object(schema: Mapping[str, Validator] | None = None) -> RecordValidator:
    """Create a record validator producing a ``SimpleNamespace``."""
    return RecordValidator(schema)


__all__ = [
    "all_of",
    "any_of",
    "is_bool",
    "is_dict",
    "is_float",
    "is_int",
    "is_list",
    "is_object",
    "is_string",
    "not_",
]
