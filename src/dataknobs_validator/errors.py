"""Error tree representation and flattening.

An error tree mirrors the shape of the schema that produced it. A leaf is an
ordered list of messages; a composite is a dict keyed by field name or list
index whose values are nested trees:

    ```python
    {
        "name": ["Value is required"],
        "tags": {0: ["Value must be at least 2 characters long"]},
    }
    ```

``flatten_errors`` turns that tree into an ordered list of
``{"path": ..., "message": ...}`` entries.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Union

from .config import get_settings

ErrorTree = Union[list[str], dict[Any, "ErrorTree"]]


class ErrorKind(Enum):
    """Why a validator node failed.

    Attributes:
        STRUCTURE: Input is not the expected container shape
        TYPE: Value still fails the primitive assertion after coercion
        REQUIRED: Value is absent and no default is configured
        CONSTRAINT: One or more predicates failed
        NESTED: One or more child nodes of a composite failed
    """

    STRUCTURE = "structure"
    TYPE = "type"
    REQUIRED = "required"
    CONSTRAINT = "constraint"
    NESTED = "nested"


def flatten_errors(errors: ErrorTree | None, prefix: str = "") -> list[dict[str, str]]:
    """Flatten an error tree into path-addressed messages.

    Messages that belong to the top-level value are reported under the
    settings' root path (``"_root"`` by default).

    Args:
        errors: Error tree, or None for a successful result
        prefix: Path of the subtree being flattened

    Returns:
        List of dicts with ``path`` and ``message`` keys, in tree order

    Example:
        ```python
        flatten_errors({"user": {"email": ["Value is required"]}})
        # [{'path': 'user.email', 'message': 'Value is required'}]
        ```
    """
    if not errors:
        return []

    settings = get_settings()
    flattened: list[dict[str, str]] = []

    if isinstance(errors, Mapping):
        for key, subtree in errors.items():
            path = f"{prefix}{settings.path_separator}{key}" if prefix else str(key)
            flattened.extend(flatten_errors(subtree, path))
    else:
        for message in errors:
            flattened.append({"path": prefix or settings.root_path, "message": str(message)})

    return flattened


def error_count(errors: ErrorTree | None) -> int:
    """Count the leaf messages in an error tree."""
    if not errors:
        return 0
    if isinstance(errors, Mapping):
        return sum(error_count(subtree) for subtree in errors.values())
    return len(errors)
