"""Validator node: the pipeline engine shared by every validator kind.

A node is configured with chained calls and then run any number of times.
Whatever order the configuration calls were made in, a value always goes
through the same stages:

1. ``pipe`` transforms, in registration order (skipped for None)
2. empty normalization (``nullify_empty``)
3. presence: required failure, default substitution, or early None success
4. coercion (``coerce`` or a parent's ``coerce_all``)
5. type assertion
6. child validation (composites only)
7. constraints; every failing rule is reported, none short-circuit
8. output ``transform`` functions, on success only

A default substituted in stage 3 continues through stages 4-8 like any
supplied value, so constraints also apply to defaults.

Example:
    ```python
    from dataknobs_validator import is_string

    name = is_string().pipe(str.strip).nullify_empty().required().min_length(2)
    valid, value, errors = name.try_validate("  Ada ")
    # (True, 'Ada', None)
    ```
"""

from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, TypeVar

from .config import get_settings
from .errors import ErrorKind
from .exceptions import FieldFailure, ValidationError
from .predicates import Rule, Transform, as_rule, combine
from .result import ValidationResult

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

logger = logging.getLogger(__name__)

V = TypeVar("V", bound="Validator")


def _is_empty(value: Any) -> bool:
    return (isinstance(value, str) and value == "") or (isinstance(value, list) and not value)


class Validator(ABC):
    """Base class for all validator nodes.

    Subclasses provide the type-specific parts of the pipeline:
    ``_coerce_value``, ``_check_type`` and ``type_name``; composites also
    override ``_validate_children``.
    """

    type_name = "mixed"
    type_error_kind = ErrorKind.TYPE

    def __init__(self) -> None:
        self._pipes: list[Transform] = []
        self._transforms: list[Transform] = []
        self._rules: list[Rule] = []
        self._nullify_empty = False
        self._required = False
        self._required_message: str | None = None
        self._coerce = False
        self._default: Any = None
        self._has_default = False
        self._output_key: str | None = None

    def __repr__(self) -> str:
        flags = [
            name
            for name, enabled in (
                ("required", self._required),
                ("coerce", self._coerce),
                ("default", self._has_default),
                ("nullify_empty", self._nullify_empty),
            )
            if enabled
        ]
        return f"{type(self).__name__}(rules={len(self._rules)}, flags={flags})"

    # -- configuration -----------------------------------------------------

    def pipe(self: V, *fns: Callable[[Any], Any]) -> V:
        """Queue transforms that run before any check (fluent API).

        Args:
            *fns: Single-argument callables applied in order

        Returns:
            Self for chaining
        """
        self._pipes.extend(Transform(fn) for fn in fns)
        return self

    def transform(self: V, fn: Callable[[Any], Any]) -> V:
        """Queue a transform applied to the validated output (fluent API).

        Output transforms run only when every check passed, and may change
        the type of the value.

        Args:
            fn: Single-argument callable

        Returns:
            Self for chaining
        """
        self._transforms.append(Transform(fn))
        return self

    def nullify_empty(self: V) -> V:
        """Treat an empty string (or empty list) as an absent value."""
        self._nullify_empty = True
        return self

    def required(self: V, message: str | None = None) -> V:
        """Make an absent value a failure.

        Args:
            message: Failure message; the settings default when omitted

        Returns:
            Self for chaining
        """
        self._required = True
        self._required_message = message
        return self

    def default(self: V, value: Any) -> V:
        """Substitute ``value`` when the input is absent.

        A deep copy of the default is used on every call, so a mutable
        default is never shared between results.
        """
        self._default = value
        self._has_default = True
        return self

    def coerce(self: V) -> V:
        """Enable best-effort conversion toward the target type."""
        self._coerce = True
        return self

    def output_key(self: V, key: str) -> V:
        """Store this field under ``key`` in a parent dictionary/record output."""
        self._output_key = key
        return self

    def satisfies(self: V, predicate: Any, message: str | None = None) -> V:
        """Queue a constraint rule.

        Args:
            predicate: Callable ``(value[, key[, input]]) -> bool`` or a validator node
            message: Failure message; the settings default when omitted

        Returns:
            Self for chaining
        """
        self._rules.append(as_rule(predicate, message or get_settings().custom_message))
        return self

    def satisfies_any(self: V, predicates: Iterable[Any], message: str | None = None) -> V:
        """Queue a rule passing when at least one candidate passes."""
        self._rules.append(
            combine("any", predicates, message or "Value must satisfy at least one validation rule")
        )
        return self

    def satisfies_all(self: V, predicates: Iterable[Any], message: str | None = None) -> V:
        """Queue a rule passing when every candidate passes."""
        self._rules.append(
            combine("all", predicates, message or "Value must satisfy all validation rules")
        )
        return self

    def satisfies_none(self: V, predicates: Iterable[Any], message: str | None = None) -> V:
        """Queue a rule passing when no candidate passes."""
        self._rules.append(
            combine(
                "none", predicates, message or "Value must not satisfy any of the validation rules"
            )
        )
        return self

    # -- introspection -------------------------------------------------------

    @property
    def is_required(self) -> bool:
        return self._required

    @property
    def has_default(self) -> bool:
        return self._has_default

    @property
    def coerces(self) -> bool:
        return self._coerce

    def output_name(self, field_key: Any) -> Any:
        """Key under which a parent stores this node's value."""
        return self._output_key if self._output_key is not None else field_key

    def clone(self: V) -> V:
        """Deep copy this node and every node it owns.

        Flags, the default value, and the transform and rule lists are
        duplicated; nested nodes (schema fields, item validators, nodes used
        as predicates) are cloned recursively. Plain callables are shared.
        """
        return copy.deepcopy(self)

    # -- validation ----------------------------------------------------------

    def try_validate(self, value: Any, key: Any = None, input: Any = None) -> ValidationResult:
        """Validate a value without raising.

        Args:
            value: Value to validate
            key: Key of the value within its parent, passed to rules
            input: Whole enclosing input, passed to rules

        Returns:
            ValidationResult, unpackable as ``(valid, value, errors)``
        """
        return self._evaluate(value, key, input, force_coerce=False)

    def validate(self, value: Any, key: Any = None, input: Any = None) -> Any:
        """Validate a value, raising on failure.

        Args:
            value: Value to validate
            key: Key of the value within its parent, passed to rules
            input: Whole enclosing input, passed to rules

        Returns:
            The validated value

        Raises:
            ValidationError: If the value is invalid
        """
        result = self.try_validate(value, key, input)
        if not result.valid:
            raise ValidationError(result.errors, result.kind)
        return result.value

    def _evaluate(
        self, value: Any, key: Any, input: Any, force_coerce: bool
    ) -> ValidationResult:
        """Run the full pipeline; ``force_coerce`` is set by a parent's ``coerce_all``."""
        current = value
        for pipe in self._pipes:
            if current is not None:
                current = pipe(current)

        if self._nullify_empty and _is_empty(current):
            current = None

        defaulted = False
        if current is None:
            outcome = self._absent_outcome(value, key)
            if outcome is not None:
                return outcome
            current, defaulted = copy.deepcopy(self._default), True
            logger.debug(f"Substituted default for {self.type_name} field {key!r}")

        if self._coerce or force_coerce:
            current = self._coerce_value(current)
            if current is None and not defaulted:
                # Form-safe coercions map "" to None
                outcome = self._absent_outcome(value, key)
                if outcome is not None:
                    return outcome
                current, defaulted = self._coerce_value(copy.deepcopy(self._default)), True

        try:
            current = self._check_type(current)
            current = self._validate_children(current, key, input)
        except FieldFailure as failure:
            logger.debug(
                f"{self.type_name} validator failed for key {key!r}: {failure.kind.value}"
            )
            return ValidationResult.failure(value, failure.errors, failure.kind)

        messages = [rule.message for rule in self._rules if not rule.test(current, key, input)]
        if messages:
            logger.debug(
                f"{self.type_name} validator failed {len(messages)} constraint(s) for key {key!r}"
            )
            return ValidationResult.failure(value, messages, ErrorKind.CONSTRAINT)

        for transform in self._transforms:
            current = transform(current)

        return ValidationResult.success(current, defaulted=defaulted)

    def _absent_outcome(self, value: Any, key: Any) -> ValidationResult | None:
        """Result for an absent value, or None when the default should be used."""
        if self._required:
            message = self._required_message or get_settings().required_message
            logger.debug(f"Required {self.type_name} field {key!r} is absent")
            return ValidationResult.failure(value, [message], ErrorKind.REQUIRED)
        if not self._has_default:
            return ValidationResult.success(None)
        if self._default is None:
            return ValidationResult.success(None, defaulted=True)
        return None

    def _fail(self, message: str, kind: ErrorKind | None = None) -> FieldFailure:
        """Build a stage failure carrying a single message."""
        return FieldFailure(kind or self.type_error_kind, [message])

    # -- type-specific stages --------------------------------------------------

    @abstractmethod
    def _coerce_value(self, value: Any) -> Any:
        """Best-effort conversion toward the target type; never raises.

        Returns the value unchanged when it cannot be converted, so the type
        assertion can report a precise error.
        """

    @abstractmethod
    def _check_type(self, value: Any) -> Any:
        """Assert the value's type, returning the (possibly normalized) value.

        Raises:
            FieldFailure: If the value has the wrong type or shape
        """

    def _validate_children(self, value: Any, key: Any, input: Any) -> Any:
        """Validate nested values; composites override this."""
        return value
