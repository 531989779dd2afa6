"""Leaf format predicates for text values.

Each function takes a string and returns a bool; none of them raise for a
malformed value. ``StringValidator`` wraps them as constraint rules, and they
are usable on their own, e.g. inside ``satisfies()``.
"""

from __future__ import annotations

import base64
import binascii
import ipaddress
import re
from datetime import datetime
from enum import Enum
from urllib.parse import urlparse


class UuidVariant(Enum):
    """Accepted UUID versions."""

    ANY = "any"
    V1 = "v1"
    V2 = "v2"
    V3 = "v3"
    V4 = "v4"
    V5 = "v5"
    V7 = "v7"


class IpVersion(Enum):
    """Accepted IP address families."""

    ANY = "any"
    IPV4 = "ipv4"
    IPV6 = "ipv6"


class Base64Variant(Enum):
    """Accepted Base64 alphabets.

    Attributes:
        STANDARD: ``+`` and ``/`` with ``=`` padding
        URL_SAFE: ``-`` and ``_``, padding optional; standard input also accepted
        ANY: Either alphabet
    """

    STANDARD = "standard"
    URL_SAFE = "urlsafe"
    ANY = "any"


_EMAIL_RE = re.compile(
    r"^[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)+$"
)
_HOST_LABEL_RE = re.compile(r"^(?!-)[A-Za-z0-9-]{1,63}(?<!-)$")
_TIME_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)(:([0-5]\d))?$")
_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")
_BASE64_STANDARD_RE = re.compile(r"^[A-Za-z0-9+/]*={0,2}$")
_BASE64_URL_SAFE_RE = re.compile(r"^[A-Za-z0-9_-]*={0,2}$")

_UUID_VERSION_DIGITS = {
    UuidVariant.ANY: "1-7",
    UuidVariant.V1: "1",
    UuidVariant.V2: "2",
    UuidVariant.V3: "3",
    UuidVariant.V4: "4",
    UuidVariant.V5: "5",
    UuidVariant.V7: "7",
}
_UUID_PATTERNS = {
    variant: re.compile(
        rf"^[0-9a-f]{{8}}-[0-9a-f]{{4}}-[{digits}][0-9a-f]{{3}}-[89ab][0-9a-f]{{3}}-[0-9a-f]{{12}}$",
        re.IGNORECASE,
    )
    for variant, digits in _UUID_VERSION_DIGITS.items()
}


def is_email(value: str) -> bool:
    """Check for an ``local@domain.tld`` address."""
    if len(value) > 254 or ".." in value:
        return False
    local = value.rsplit("@", 1)[0]
    if len(local) > 64 or local.startswith(".") or local.endswith("."):
        return False
    return _EMAIL_RE.match(value) is not None


def is_url(value: str) -> bool:
    """Check for an absolute URL with a scheme and a network location."""
    if any(ch.isspace() for ch in value):
        return False
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    if not parsed.scheme or not re.match(r"^[A-Za-z][A-Za-z0-9+.-]*$", parsed.scheme):
        return False
    if parsed.scheme.lower() in ("mailto", "news", "file"):
        return bool(parsed.path)
    return bool(parsed.netloc)


def is_uuid(value: str, variant: UuidVariant = UuidVariant.ANY) -> bool:
    """Check for a canonical hyphenated UUID of the given version."""
    return _UUID_PATTERNS[variant].match(value) is not None


def is_ip(value: str, version: IpVersion = IpVersion.ANY) -> bool:
    """Check for an IPv4 or IPv6 address."""
    try:
        address = ipaddress.ip_address(value)
    except ValueError:
        return False
    if version is IpVersion.IPV4:
        return address.version == 4
    if version is IpVersion.IPV6:
        return address.version == 6
    return True


def is_hostname(value: str) -> bool:
    """Check for a DNS hostname (single labels such as ``localhost`` allowed)."""
    if not value or len(value) > 253:
        return False
    labels = value[:-1].split(".") if value.endswith(".") else value.split(".")
    return all(_HOST_LABEL_RE.match(label) for label in labels)


def is_domain(value: str) -> bool:
    """Check for a hostname with at least two labels."""
    return "." in value.strip(".") and is_hostname(value)


def is_time(value: str) -> bool:
    """Check for ``HH:MM`` or ``HH:MM:SS`` (24-hour clock)."""
    return _TIME_RE.match(value) is not None


def is_hex(value: str) -> bool:
    """Check for a non-empty hexadecimal string."""
    return _HEX_RE.match(value) is not None


def _decodes_standard(value: str) -> bool:
    if not _BASE64_STANDARD_RE.match(value):
        return False
    try:
        decoded = base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        return False
    return base64.b64encode(decoded).decode("ascii") == value


def _decodes_url_safe(value: str) -> bool:
    if not _BASE64_URL_SAFE_RE.match(value):
        return False
    padded = value + "=" * (-len(value) % 4)
    try:
        base64.urlsafe_b64decode(padded)
    except (binascii.Error, ValueError):
        return False
    return True


def is_base64(value: str, variant: Base64Variant = Base64Variant.STANDARD) -> bool:
    """Check for a Base64-encoded string."""
    if variant is Base64Variant.STANDARD:
        return _decodes_standard(value)
    return _decodes_standard(value) or _decodes_url_safe(value)


def matches_format(value: str, fmt: str) -> bool:
    """Check that a date/time string parses with ``fmt`` and formats back identically.

    Args:
        value: Candidate string
        fmt: ``strftime`` format, e.g. ``"%Y-%m-%d"``

    Returns:
        True if ``value`` is exactly ``datetime.strptime(value, fmt).strftime(fmt)``
    """
    try:
        parsed = datetime.strptime(value, fmt)
    except ValueError:
        return False
    return parsed.strftime(fmt) == value
