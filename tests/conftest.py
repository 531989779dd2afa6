"""Pytest configuration for dataknobs_validator tests."""

import sys
from pathlib import Path

import pytest

# Add the package source to path for testing
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from dataknobs_validator import is_dict, is_int, is_list, is_string, reset_settings  # noqa: E402


@pytest.fixture(autouse=True)
def default_settings():
    """Each test starts and ends with default settings."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def user_schema():
    """A small user schema mixing required, defaulted and coerced fields."""
    return is_dict({
        "name": is_string().pipe(str.strip).nullify_empty().required(),
        "email": is_string().email().required(),
        "age": is_int().coerce().between(0, 150),
        "tags": is_list(is_string().not_empty()).default([]),
    })
