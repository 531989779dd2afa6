"""Exceptions for the dataknobs_validator package.

Built on the common exception framework from dataknobs_common, so a caller
catching ``DataknobsError`` or ``dataknobs_common.ValidationError`` also
catches validation failures raised here.
"""

from __future__ import annotations

import json

from dataknobs_common import ValidationError as BaseValidationError

from .errors import ErrorKind, ErrorTree, flatten_errors


class ValidationError(BaseValidationError):
    """Raised by ``Validator.validate`` when the value is invalid.

    The message is the error tree rendered as indented JSON, so every
    failure message appears in ``str(error)``.

    Attributes:
        errors: The error tree
        kind: Why the top-level node failed
    """

    def __init__(self, errors: ErrorTree, kind: ErrorKind = ErrorKind.CONSTRAINT):
        self.errors = errors
        self.kind = kind
        super().__init__(
            json.dumps(errors, indent=2, ensure_ascii=False, default=str),
            context={"errors": errors, "kind": kind.value},
        )

    @property
    def flattened(self) -> list[dict[str, str]]:
        """Path-addressed error messages."""
        return flatten_errors(self.errors)

    def get_flattened_errors(self) -> list[dict[str, str]]:
        """Return the error tree as a list of ``{"path", "message"}`` dicts."""
        return self.flattened

    @staticmethod
    def flatten_errors(errors: ErrorTree | None) -> list[dict[str, str]]:
        """Flatten any error tree, e.g. one returned by ``try_validate``."""
        return flatten_errors(errors)


class FieldFailure(Exception):
    """A pipeline stage rejected the value.

    Internal to the engine: raised by type assertion and child validation,
    and turned into a failed ``ValidationResult`` at the node boundary.
    """

    def __init__(self, kind: ErrorKind, errors: ErrorTree):
        super().__init__(kind.value)
        self.kind = kind
        self.errors = errors
