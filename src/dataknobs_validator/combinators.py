"""Validators built purely from logical composition of other validators.

Example:
    ```python
    from dataknobs_validator import any_of, is_int, is_string

    identifier = any_of([is_int(), is_string().uuid()]).required()
    identifier.validate(42)  # 42
    ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .base import Validator

if TYPE_CHECKING:
    from collections.abc import Iterable


class MixedValidator(Validator):
    """Validator accepting any type; checks come only from its rules."""

    type_name = "mixed"

    def _coerce_value(self, value: Any) -> Any:
        return value

    def _check_type(self, value: Any) -> Any:
        return value


def any_of(validators: Iterable[Any], message: str | None = None) -> MixedValidator:
    """Pass when at least one of ``validators`` accepts the value."""
    return MixedValidator().satisfies_any(validators, message)


def all_of(validators: Iterable[Any], message: str | None = None) -> MixedValidator:
    """Pass when every one of ``validators`` accepts the value."""
    return MixedValidator().satisfies_all(validators, message)


def not_(validator: Any, message: str | None = None) -> MixedValidator:
    """Pass when ``validator`` rejects the value.

    Args:
        validator: Validator node or predicate callable
        message: Failure message

    Returns:
        MixedValidator holding the negated rule
    """
    return MixedValidator().satisfies_none(
        [validator], message or "Value must not satisfy the validation rule"
    )
