"""Declarative data validation with composable validator nodes.

This package provides:
- Fluent validator nodes with a fixed pipeline order (transform, presence,
  coercion, type, children, constraints, output transforms)
- Scalar, list, dictionary and record validators
- Logical combinators (``any_of``, ``all_of``, ``not_``)
- Path-addressable error trees and flattening helpers

Example:
    ```python
    from dataknobs_validator import is_dict, is_int, is_list, is_string

    schema = is_dict({
        "name": is_string().pipe(str.strip).nullify_empty().required(),
        "tags": is_list(is_string().not_empty()).default([]),
        "age": is_int().coerce().between(0, 150),
    })

    valid, data, errors = schema.try_validate({"name": "  Ada ", "age": "36"})
    # (True, {'name': 'Ada', 'tags': [], 'age': 36}, None)
    ```
"""

from .base import Validator
from .combinators import MixedValidator, all_of, any_of, not_
from .config import (
    ValidatorSettings,
    configure,
    get_settings,
    reset_settings,
    use_settings,
)
from .errors import ErrorKind, ErrorTree, error_count, flatten_errors
from .exceptions import FieldFailure, ValidationError
from .factory import is_bool, is_dict, is_float, is_int, is_list, is_object, is_string
from .formats import Base64Variant, IpVersion, UuidVariant
from .mappings import DictValidator, RecordValidator, SchemaValidator
from .predicates import Transform
from .result import ValidationResult
from .scalars import (
    BoolValidator,
    FloatValidator,
    IntValidator,
    NumericConstraintsMixin,
    OneOfMixin,
    StringValidator,
)
from .sequences import ListValidator

__version__ = "1.0.0"

__all__ = [
    # Construction
    "is_string",
    "is_int",
    "is_float",
    "is_bool",
    "is_list",
    "is_dict",
    "is_object",
    "any_of",
    "all_of",
    "not_",
    # Validator nodes
    "Validator",
    "StringValidator",
    "IntValidator",
    "FloatValidator",
    "BoolValidator",
    "ListValidator",
    "SchemaValidator",
    "DictValidator",
    "RecordValidator",
    "MixedValidator",
    "NumericConstraintsMixin",
    "OneOfMixin",
    "Transform",
    # Format variants
    "UuidVariant",
    "IpVersion",
    "Base64Variant",
    # Results and errors
    "ValidationResult",
    "ValidationError",
    "FieldFailure",
    "ErrorKind",
    "ErrorTree",
    "flatten_errors",
    "error_count",
    # Settings
    "ValidatorSettings",
    "get_settings",
    "configure",
    "reset_settings",
    "use_settings",
]
