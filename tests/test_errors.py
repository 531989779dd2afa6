"""Tests for error trees, flattening and the raised exception."""

import json

import pytest
from dataknobs_common import DataknobsError

from dataknobs_validator import (
    ErrorKind,
    ValidationError,
    configure,
    error_count,
    flatten_errors,
    is_dict,
    is_int,
    is_list,
    is_string,
)


class TestFlattenErrors:
    """Test path-addressed flattening."""

    def test_success_flattens_to_nothing(self):
        """None and empty trees have no entries."""
        assert flatten_errors(None) == []
        assert flatten_errors({}) == []

    def test_top_level_messages_use_root_path(self):
        """Messages for the top-level value use the root sentinel."""
        assert flatten_errors(["a", "b"]) == [
            {"path": "_root", "message": "a"},
            {"path": "_root", "message": "b"},
        ]

    def test_nested_paths(self):
        """Field names and list indexes are joined with dots."""
        tree = {
            "user": {"email": ["Value is required"]},
            "tags": {1: ["Value must be a string"]},
        }

        assert flatten_errors(tree) == [
            {"path": "user.email", "message": "Value is required"},
            {"path": "tags.1", "message": "Value must be a string"},
        ]

    def test_configured_paths(self):
        """The root sentinel and separator come from settings."""
        configure(root_path="$", path_separator="/")

        assert flatten_errors(["bad"]) == [{"path": "$", "message": "bad"}]
        assert flatten_errors({"a": {0: ["bad"]}}) == [{"path": "a/0", "message": "bad"}]

    def test_error_count(self):
        """Leaf messages are counted across the tree."""
        assert error_count({"a": ["x", "y"], "b": {0: ["z"]}}) == 3
        assert error_count(None) == 0

    def test_list_item_tree(self):
        """A failing list item is addressed by its index."""
        result = is_dict({"ids": is_list(is_int())}).try_validate({"ids": [1, 2, "x", "y"]})

        assert result.flattened == [{"path": "ids.2", "message": "Value must be an integer"}]


class TestValidationError:
    """Test the exception raised by validate()."""

    @pytest.fixture
    def error(self):
        schema = is_dict({"name": is_string().required(), "age": is_int()})
        with pytest.raises(ValidationError) as exc_info:
            schema.validate({"age": "x"})
        return exc_info.value

    def test_attributes(self, error):
        """The tree and kind are exposed on the exception."""
        assert error.errors == {
            "name": ["Value is required"],
            "age": ["Value must be an integer"],
        }
        assert error.kind is ErrorKind.NESTED

    def test_context(self, error):
        """The common error context carries the tree and kind."""
        assert error.context == {"errors": error.errors, "kind": "nested"}
        assert isinstance(error, DataknobsError)

    def test_message_is_json(self, error):
        """The message is the tree rendered as JSON."""
        assert json.loads(str(error)) == error.errors

    def test_flattened(self, error):
        """Flattened errors are available in three equivalent ways."""
        expected = [
            {"path": "name", "message": "Value is required"},
            {"path": "age", "message": "Value must be an integer"},
        ]

        assert error.flattened == expected
        assert error.get_flattened_errors() == expected
        assert ValidationError.flatten_errors(error.errors) == expected

    def test_scalar_error(self):
        """Errors on a scalar validator flatten to the root path."""
        with pytest.raises(ValidationError, match="Value must be at least 3") as exc_info:
            is_int().min(3).validate(1)

        assert exc_info.value.flattened == [
            {"path": "_root", "message": "Value must be at least 3"}
        ]
