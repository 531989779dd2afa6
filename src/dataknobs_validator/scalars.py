"""Scalar validators: strings, integers, floats and booleans.

Each validator adds its coercion and type assertion to the base pipeline,
plus the fluent constraint methods that make sense for its type.

Example:
    ```python
    from dataknobs_validator import is_int, is_string

    age = is_int().coerce().between(0, 150)
    age.validate("42")  # 42

    email = is_string().pipe(str.strip, str.lower).email()
    email.validate(" Ada@Example.com ")  # 'ada@example.com'
    ```
"""

from __future__ import annotations

import json
import math
import re
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from .base import V, Validator
from .formats import (
    Base64Variant,
    IpVersion,
    UuidVariant,
    is_base64,
    is_domain,
    is_email,
    is_hex,
    is_hostname,
    is_ip,
    is_time,
    is_url,
    is_uuid,
    matches_format,
)
from .predicates import strictly_equal

if TYPE_CHECKING:
    from collections.abc import Iterable

Number = int | float

_TRUE_STRINGS = frozenset({"true", "on", "1"})
_FALSE_STRINGS = frozenset({"false", "off", "0"})

_UUID_MESSAGES = {
    UuidVariant.ANY: "Value must be a valid UUID",
    UuidVariant.V1: "Value must be a valid UUID version 1",
    UuidVariant.V2: "Value must be a valid UUID version 2",
    UuidVariant.V3: "Value must be a valid UUID version 3",
    UuidVariant.V4: "Value must be a valid UUID version 4",
    UuidVariant.V5: "Value must be a valid UUID version 5",
    UuidVariant.V7: "Value must be a valid UUID version 7",
}
_IP_MESSAGES = {
    IpVersion.ANY: "Value must be a valid IP address",
    IpVersion.IPV4: "Value must be a valid IPv4 address",
    IpVersion.IPV6: "Value must be a valid IPv6 address",
}
_BASE64_MESSAGES = {
    Base64Variant.STANDARD: "Value must be a valid Base64 encoded string",
    Base64Variant.URL_SAFE: "Value must be a valid URL-safe Base64 encoded string",
    Base64Variant.ANY: "Value must be a valid Base64 encoded string",
}


_INTEGER_RE = re.compile(r"^\s*[+-]?\d+\s*$")
# Plain decimal or exponent notation; no "nan", "inf" or digit separators
_DECIMAL_RE = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*$")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _parse_decimal(text: str) -> float | None:
    """Parse a numeric string to a finite float, or None when it is not one."""
    if not _DECIMAL_RE.match(text):
        return None
    number = float(text)
    return number if math.isfinite(number) else None


class OneOfMixin:
    """Strict-equality allowlist for scalar validators."""

    def one_of(self: V, values: Iterable[Any], message: str | None = None) -> V:
        """Require the value to be one of ``values``.

        Comparison is by type and value, so ``1``, ``1.0`` and ``True`` are
        all distinct.

        Args:
            values: Allowed values
            message: Failure message; lists the allowed values when omitted

        Returns:
            Self for chaining

        Raises:
            ValueError: If ``values`` is empty
        """
        allowed = list(values)
        if not allowed:
            raise ValueError("one_of requires at least one allowed value")
        return self.satisfies(
            lambda value: any(strictly_equal(value, candidate) for candidate in allowed),
            message or f"Value must be one of: {json.dumps(allowed, default=str)}",
        )


class NumericConstraintsMixin:
    """Range, sign and divisibility checks shared by int and float validators."""

    def min(self: V, minimum: Number, message: str | None = None) -> V:
        return self.satisfies(
            lambda value: value >= minimum, message or f"Value must be at least {minimum}"
        )

    def max(self: V, maximum: Number, message: str | None = None) -> V:
        return self.satisfies(
            lambda value: value <= maximum, message or f"Value must be at most {maximum}"
        )

    def gt(self: V, threshold: Number, message: str | None = None) -> V:
        return self.satisfies(
            lambda value: value > threshold,
            message or f"Value must be greater than {threshold}",
        )

    def gte(self: V, threshold: Number, message: str | None = None) -> V:
        return self.satisfies(
            lambda value: value >= threshold, message or f"Value must be at least {threshold}"
        )

    def lt(self: V, threshold: Number, message: str | None = None) -> V:
        return self.satisfies(
            lambda value: value < threshold, message or f"Value must be less than {threshold}"
        )

    def lte(self: V, threshold: Number, message: str | None = None) -> V:
        return self.satisfies(
            lambda value: value <= threshold, message or f"Value must be at most {threshold}"
        )

    def between(self: V, minimum: Number, maximum: Number, message: str | None = None) -> V:
        """Require ``minimum <= value <= maximum``.

        Raises:
            ValueError: If ``minimum`` is greater than ``maximum``
        """
        if minimum > maximum:
            raise ValueError(f"between() minimum {minimum} is greater than maximum {maximum}")
        return self.satisfies(
            lambda value: minimum <= value <= maximum,
            message or f"Value must be between {minimum} and {maximum}",
        )

    def multiple_of(self: V, divisor: Number, message: str | None = None) -> V:
        """Require the value to be a multiple of ``divisor``.

        Integers use exact modulo; anything involving a float is compared
        with a 1e-9 tolerance.

        Raises:
            ValueError: If ``divisor`` is zero
        """
        if divisor == 0:
            raise ValueError("multiple_of() divisor must be non-zero")

        def check(value: Number) -> bool:
            if isinstance(value, int) and isinstance(divisor, int):
                return value % divisor == 0
            remainder = math.fmod(float(value), float(divisor))
            return abs(remainder) < 1e-9 or abs(abs(remainder) - abs(divisor)) < 1e-9

        return self.satisfies(check, message or f"Value must be a multiple of {divisor}")

    def positive(self: V, message: str | None = None) -> V:
        return self.satisfies(lambda value: value > 0, message or "Value must be positive")

    def negative(self: V, message: str | None = None) -> V:
        return self.satisfies(lambda value: value < 0, message or "Value must be negative")

    def non_negative(self: V, message: str | None = None) -> V:
        return self.gte(0, message or "Value must be non-negative")

    def non_positive(self: V, message: str | None = None) -> V:
        return self.lte(0, message or "Value must be non-positive")

    def clamp_to_range(self: V, minimum: Number, maximum: Number) -> V:
        """Clamp the validated value into ``[minimum, maximum]`` (output transform).

        Raises:
            ValueError: If ``minimum`` is greater than ``maximum``
        """
        if minimum > maximum:
            raise ValueError("Minimum cannot be greater than maximum for clamp")
        return self.transform(lambda value: min(max(value, minimum), maximum))


class StringValidator(OneOfMixin, Validator):
    """Validator for text values."""

    type_name = "string"

    def _coerce_value(self, value: Any) -> Any:
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float, Decimal)):
            return str(value)
        return value

    def _check_type(self, value: Any) -> Any:
        if not isinstance(value, str):
            raise self._fail("Value must be a string")
        return value

    def min_length(self, length: int, message: str | None = None) -> StringValidator:
        if length < 0:
            raise ValueError(f"min_length must be non-negative, got {length}")
        return self.satisfies(
            lambda value: len(value) >= length,
            message or f"Value must be at least {length} characters long",
        )

    def max_length(self, length: int, message: str | None = None) -> StringValidator:
        if length < 0:
            raise ValueError(f"max_length must be non-negative, got {length}")
        return self.satisfies(
            lambda value: len(value) <= length,
            message or f"Value must be at most {length} characters long",
        )

    def length(self, length: int, message: str | None = None) -> StringValidator:
        if length < 0:
            raise ValueError(f"length must be non-negative, got {length}")
        return self.satisfies(
            lambda value: len(value) == length,
            message or f"Value must be exactly {length} characters long",
        )

    def not_empty(self, message: str | None = None) -> StringValidator:
        return self.min_length(1, message or "Value must not be empty")

    def pattern(self, pattern: str | re.Pattern[str], message: str | None = None) -> StringValidator:
        """Require a regular expression match anywhere in the value.

        Args:
            pattern: Regex source or compiled pattern; anchor it to match the whole value
            message: Failure message

        Returns:
            Self for chaining
        """
        compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
        return self.satisfies(
            lambda value: compiled.search(value) is not None,
            message or "Value does not match the required pattern",
        )

    regex = pattern

    def email(self, message: str | None = None) -> StringValidator:
        return self.satisfies(is_email, message or "Value must be a valid email address")

    def url(self, message: str | None = None) -> StringValidator:
        return self.satisfies(is_url, message or "Value must be a valid URL")

    def uuid(
        self, variant: UuidVariant | str = UuidVariant.ANY, message: str | None = None
    ) -> StringValidator:
        """Require a canonical UUID, optionally of a specific version."""
        variant = UuidVariant(variant)
        return self.satisfies(
            lambda value: is_uuid(value, variant), message or _UUID_MESSAGES[variant]
        )

    def ip(self, version: IpVersion | str = IpVersion.ANY, message: str | None = None) -> StringValidator:
        """Require an IP address, optionally of one family."""
        version = IpVersion(version)
        return self.satisfies(lambda value: is_ip(value, version), message or _IP_MESSAGES[version])

    def date(self, fmt: str = "%Y-%m-%d", message: str | None = None) -> StringValidator:
        """Require a date string in ``strftime`` format ``fmt``."""
        return self.satisfies(
            lambda value: matches_format(value, fmt),
            message or f"Value must be a valid date in format '{fmt}'",
        )

    def datetime(self, fmt: str = "%Y-%m-%dT%H:%M:%S", message: str | None = None) -> StringValidator:
        """Require a date-time string in ``strftime`` format ``fmt``."""
        return self.satisfies(
            lambda value: matches_format(value, fmt),
            message or f"Value must be a valid datetime in format '{fmt}'",
        )

    def hostname(self, message: str | None = None) -> StringValidator:
        return self.satisfies(is_hostname, message or "Value must be a valid hostname")

    def domain(self, message: str | None = None) -> StringValidator:
        return self.satisfies(is_domain, message or "Value must be a valid domain name")

    def time(self, message: str | None = None) -> StringValidator:
        return self.satisfies(
            is_time, message or "Value must be a valid time in format HH:MM or HH:MM:SS"
        )

    def base64(
        self, variant: Base64Variant | str = Base64Variant.STANDARD, message: str | None = None
    ) -> StringValidator:
        variant = Base64Variant(variant)
        return self.satisfies(
            lambda value: is_base64(value, variant), message or _BASE64_MESSAGES[variant]
        )

    def hex(self, message: str | None = None) -> StringValidator:
        return self.satisfies(is_hex, message or "Value must be a valid hexadecimal string")


class IntValidator(NumericConstraintsMixin, OneOfMixin, Validator):
    """Validator for integers (booleans are rejected)."""

    type_name = "int"

    def _coerce_value(self, value: Any) -> Any:
        if isinstance(value, bool):
            return value
        if isinstance(value, float):
            return int(value) if value.is_integer() else value
        if isinstance(value, str):
            if value == "":
                return None
            if _INTEGER_RE.match(value):
                try:
                    return int(value)
                except ValueError:
                    # Exceeds the interpreter's integer string length limit
                    return value
            number = _parse_decimal(value)
            if number is not None and number.is_integer():
                return int(number)
        return value

    def _check_type(self, value: Any) -> Any:
        if not isinstance(value, int) or isinstance(value, bool):
            raise self._fail("Value must be an integer")
        return value

    def port(self, message: str | None = None) -> IntValidator:
        """Require a TCP/UDP port number (1-65535)."""
        return self.satisfies(
            lambda value: 1 <= value <= 65535,
            message or "Value must be a valid port number (1-65535)",
        )


class FloatValidator(NumericConstraintsMixin, OneOfMixin, Validator):
    """Validator for real numbers; integers are accepted and returned as floats."""

    type_name = "float"

    def _coerce_value(self, value: Any) -> Any:
        if isinstance(value, bool):
            return value
        if isinstance(value, int):
            try:
                return float(value)
            except OverflowError:
                return value
        if isinstance(value, str):
            if value == "":
                return None
            number = _parse_decimal(value)
            return value if number is None else number
        return value

    def _check_type(self, value: Any) -> Any:
        if not _is_number(value):
            raise self._fail("Value must be a float")
        try:
            return float(value)
        except OverflowError:
            raise self._fail("Value must be a float") from None


class BoolValidator(OneOfMixin, Validator):
    """Validator for booleans."""

    type_name = "bool"

    def _coerce_value(self, value: Any) -> Any:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            if value == "":
                return None
            lowered = value.strip().lower()
            if lowered in _TRUE_STRINGS:
                return True
            if lowered in _FALSE_STRINGS:
                return False
            return value
        if isinstance(value, int):
            if value == 1:
                return True
            if value == 0:
                return False
        return value

    def _check_type(self, value: Any) -> Any:
        if not isinstance(value, bool):
            raise self._fail("Value must be a boolean")
        return value
