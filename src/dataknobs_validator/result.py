"""Validation result type returned by ``try_validate``.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from .errors import ErrorKind, ErrorTree, flatten_errors


@dataclass
class ValidationResult:
    """Outcome of validating one value against one validator node.

    Unpacks as the ``(valid, value, errors)`` tri-tuple, so both styles work:

        ```python
        result = schema.try_validate(data)
        if result:
            use(result.value)

        valid, value, errors = schema.try_validate(data)
        ```

    On success ``errors`` is None and ``value`` is the normalized value. On
    failure ``value`` is the original input and ``errors`` is a non-empty
    error tree.
    """

    valid: bool
    value: Any
    errors: ErrorTree | None = None
    kind: ErrorKind | None = None
    defaulted: bool = False

    def __bool__(self) -> bool:
        """Allow 'if result:' usage to check validity."""
        return self.valid

    def __iter__(self) -> Iterator[Any]:
        return iter((self.valid, self.value, self.errors))

    @property
    def flattened(self) -> list[dict[str, str]]:
        """Path-addressed error messages (empty on success)."""
        return flatten_errors(self.errors)

    @classmethod
    def success(cls, value: Any, defaulted: bool = False) -> ValidationResult:
        """Create a successful validation result.

        Args:
            value: The validated value
            defaulted: True when the value came from the node's default

        Returns:
            Successful ValidationResult
        """
        return cls(valid=True, value=value, errors=None, kind=None, defaulted=defaulted)

    @classmethod
    def failure(cls, value: Any, errors: ErrorTree, kind: ErrorKind) -> ValidationResult:
        """Create a failed validation result.

        Args:
            value: The input value that failed validation
            errors: Non-empty error tree
            kind: Why the node failed

        Returns:
            Failed ValidationResult
        """
        return cls(valid=False, value=value, errors=errors, kind=kind)
