"""List validator.

Items are validated in order and the first failing item aborts the list;
the error tree then holds only that item's errors, keyed by its index.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .base import Validator
from .config import get_settings
from .errors import ErrorKind
from .exceptions import FieldFailure
from .predicates import AnyItem, as_rule, strictly_equal

logger = logging.getLogger(__name__)


class ListValidator(Validator):
    """Validator for ordered, zero-indexed lists.

    Example:
        ```python
        from dataknobs_validator import is_int, is_list

        ids = is_list().coerce().filter_empty().items(is_int().coerce()).min_items(1)
        ids.validate(("1", "", "3"))  # [1, 3]
        ```
    """

    type_name = "list"
    type_error_kind = ErrorKind.STRUCTURE

    def __init__(self, item_validator: Validator | None = None):
        super().__init__()
        self._item_validator: Validator | None = None
        self._filter_empty = False
        if item_validator is not None:
            self.items(item_validator)

    @property
    def item_validator(self) -> Validator | None:
        return self._item_validator

    def items(self, validator: Validator) -> ListValidator:
        """Validate every element with ``validator``.

        Raises:
            TypeError: If ``validator`` is not a validator node
        """
        if not isinstance(validator, Validator):
            raise TypeError(
                f"Item validator must be a Validator, got {type(validator).__name__}"
            )
        self._item_validator = validator
        return self

    def filter_empty(self) -> ListValidator:
        """Drop ``""`` and ``None`` elements before item validation."""
        self._filter_empty = True
        return self

    def min_items(self, count: int, message: str | None = None) -> ListValidator:
        if count < 0:
            raise ValueError(f"min_items must be non-negative, got {count}")
        return self.satisfies(
            lambda value: len(value) >= count,
            message or f"Value must contain at least {count} items",
        )

    def max_items(self, count: int, message: str | None = None) -> ListValidator:
        if count < 0:
            raise ValueError(f"max_items must be non-negative, got {count}")
        return self.satisfies(
            lambda value: len(value) <= count,
            message or f"Value must contain at most {count} items",
        )

    def contains(self, expected: Any, message: str | None = None) -> ListValidator:
        """Require at least one element matching ``expected``.

        Args:
            expected: A literal compared by type and value, or a validator node
                that must accept at least one element
            message: Failure message

        Returns:
            Self for chaining
        """
        if isinstance(expected, Validator):
            message = message or "Value must contain an item matching the validation rule"
            return self.satisfies(AnyItem(as_rule(expected, message), message))
        return self.satisfies(
            lambda value: any(strictly_equal(item, expected) for item in value),
            message or f"Value must contain {expected!r}",
        )

    def _coerce_value(self, value: Any) -> Any:
        if value is None or isinstance(value, list):
            return value
        if isinstance(value, tuple):
            return list(value)
        if isinstance(value, Mapping):
            return list(value.values())
        if isinstance(value, str) and value == "":
            return []
        return [value]

    def _check_type(self, value: Any) -> Any:
        if not isinstance(value, list):
            raise self._fail("Value must be a list")
        return value

    def _validate_children(self, value: Any, key: Any, input: Any) -> Any:
        if self._filter_empty:
            value = [item for item in value if item is not None and item != ""]
        if self._item_validator is None:
            return list(value)

        separator = get_settings().path_separator
        output = []
        for index, item in enumerate(value):
            item_key = index if key is None else f"{key}{separator}{index}"
            result = self._item_validator.try_validate(item, item_key, value)
            if not result.valid:
                logger.debug(f"List {key!r} aborted at item {index}: {result.kind.value}")
                raise FieldFailure(ErrorKind.NESTED, {index: result.errors})
            output.append(result.value)
        return output
