"""Process-wide settings for the validator engine.

Settings hold the few defaults that are not tied to a single validator node:
the sentinel path used for top-level errors, the separator used when building
dotted paths, and the fallback messages for ``required()`` and
``satisfies()``.

Example:
    ```python
    from dataknobs_validator import configure, get_settings

    configure(path_separator="/")
    get_settings().path_separator
    # '/'
    ```
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from typing import Any

from dataknobs_common import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "DATAKNOBS_VALIDATOR_"


@dataclass(frozen=True)
class ValidatorSettings:
    """Defaults shared by every validator node.

    Attributes:
        root_path: Path reported for errors that belong to the top-level value
        path_separator: Joins field names and list indexes into a path
        required_message: Message used when ``required()`` is given none
        custom_message: Message used when ``satisfies()`` is given none
    """

    root_path: str = "_root"
    path_separator: str = "."
    required_message: str = "Value is required"
    custom_message: str = "Custom validation failed"

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to a dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ValidatorSettings:
        """Create settings from a dictionary.

        Args:
            data: Mapping of setting names to values

        Returns:
            ValidatorSettings instance

        Raises:
            ConfigurationError: If the mapping names an unknown setting
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(
                f"Unknown validator settings: {', '.join(sorted(unknown))}",
                context={"unknown": sorted(unknown), "available": sorted(known)},
            )
        return cls(**{key: str(value) for key, value in data.items()})

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX) -> ValidatorSettings:
        """Create settings from environment variables.

        Variables are named ``<prefix><SETTING>``, e.g.
        ``DATAKNOBS_VALIDATOR_ROOT_PATH``. Variables naming an unknown
        setting are skipped.

        Args:
            prefix: Environment variable prefix

        Returns:
            ValidatorSettings instance
        """
        known = {f.name for f in fields(cls)}
        overrides: dict[str, Any] = {}
        for key, value in os.environ.items():
            if not key.startswith(prefix):
                continue
            name = key[len(prefix):].lower()
            if name not in known:
                logger.warning(f"Ignoring unknown validator setting in environment: {key}")
                continue
            overrides[name] = value

        if overrides:
            logger.info(f"Loaded validator settings from environment: {sorted(overrides)}")
        return cls(**overrides)


_settings = ValidatorSettings()


def get_settings() -> ValidatorSettings:
    """Return the active settings."""
    return _settings


def configure(**overrides: Any) -> ValidatorSettings:
    """Replace selected settings.

    Args:
        **overrides: Setting names and their new values

    Returns:
        The new active settings

    Raises:
        ConfigurationError: If an override names an unknown setting
    """
    global _settings
    merged = {**_settings.to_dict(), **overrides}
    _settings = ValidatorSettings.from_dict(merged)
    return _settings


def reset_settings() -> ValidatorSettings:
    """Restore the default settings."""
    global _settings
    _settings = ValidatorSettings()
    return _settings


def use_settings(settings: ValidatorSettings) -> ValidatorSettings:
    """Install an already-built settings object (e.g. from ``from_env``)."""
    global _settings
    _settings = replace(settings)
    return _settings
