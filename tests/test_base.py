"""Tests for the validator node pipeline shared by every validator kind."""

import copy
import itertools

import dataknobs_common
import pytest

from dataknobs_validator import (
    ErrorKind,
    ValidationError,
    ValidationResult,
    Validator,
    configure,
    is_dict,
    is_float,
    is_int,
    is_list,
    is_string,
)


class TestPipelineOrder:
    """The stage order is fixed, whatever order the node was configured in."""

    def test_configuration_order_is_irrelevant(self):
        """Every permutation of the flag setters yields identical outcomes."""
        setters = [
            lambda node: node.coerce(),
            lambda node: node.nullify_empty(),
            lambda node: node.default(7),
            lambda node: node.min(0),
        ]
        inputs = ["", "5", None, "x", -3]

        outcomes = set()
        for order in itertools.permutations(setters):
            node = is_int()
            for setter in order:
                setter(node)
            outcomes.add(tuple(
                (result.valid, result.value, str(result.errors))
                for result in (node.try_validate(value) for value in inputs)
            ))

        assert len(outcomes) == 1

    def test_pipe_runs_before_presence(self):
        """A whitespace-only value trimmed to empty counts as absent."""
        name = (
            is_string()
            .pipe(str.strip)
            .nullify_empty()
            .required("Name is required")
            .min_length(2)
        )

        valid, value, errors = name.try_validate("  ")

        assert valid is False
        assert value == "  "
        assert errors == ["Name is required"]
        assert name.try_validate("  ").kind is ErrorKind.REQUIRED

    def test_pipe_functions_run_in_order(self):
        """Pre-transforms are applied in registration order."""
        node = is_string().pipe(str.strip).pipe(str.upper, lambda v: v + "!")
        assert node.validate("  hi ") == "HI!"

    def test_pipe_skipped_for_absent_value(self):
        """Pipe functions are never called with None."""
        node = is_string().pipe(str.upper)
        assert tuple(node.try_validate(None)) == (True, None, None)

    def test_empty_string_default_with_coercion(self):
        """An empty form value falls back to the default."""
        node = is_float().coerce().nullify_empty().min(0.0).default(5.0)
        assert node.validate("") == 5.0

    def test_nullify_empty_list(self):
        """An empty list is absent when nullify_empty is on."""
        assert is_list().nullify_empty().try_validate([]).value is None
        assert is_list().try_validate([]).value == []

    def test_absent_optional_value_succeeds_with_none(self):
        """Without required or default, None skips every later stage."""
        node = is_int().min(10).transform(lambda v: v * 2)
        assert tuple(node.try_validate(None)) == (True, None, None)

    def test_type_failure_stops_constraints(self):
        """Constraints never see a value of the wrong type."""
        result = is_string().min_length(5).try_validate(5)

        assert result.errors == ["Value must be a string"]
        assert result.kind is ErrorKind.TYPE

    def test_constraints_accumulate(self):
        """Every failing constraint is reported, in registration order."""
        node = is_string().min_length(5).pattern(r"^\d+$").max_length(10)

        result = node.try_validate("ab")

        assert result.errors == [
            "Value must be at least 5 characters long",
            "Value does not match the required pattern",
        ]
        assert result.kind is ErrorKind.CONSTRAINT

    def test_output_transform_runs_on_success_only(self):
        """Output transforms see validated values and may change the type."""
        node = is_string().min_length(2).transform(len)

        assert node.validate("abcd") == 4
        assert node.try_validate("a").value == "a"

    def test_failure_returns_original_input(self):
        """The original value is returned untouched on failure."""
        valid, value, errors = is_int().coerce().min(10).try_validate("5")

        assert valid is False
        assert value == "5"
        assert errors == ["Value must be at least 10"]


class TestPresence:
    """Test required, default and coercion-to-None handling."""

    def test_required_default_message(self):
        """Required uses the settings message when none is given."""
        assert is_int().required().try_validate(None).errors == ["Value is required"]

    def test_required_message_from_settings(self):
        """The fallback message is read from the active settings."""
        configure(required_message="Missing")
        assert is_int().required().try_validate(None).errors == ["Missing"]

    def test_default_is_marked(self):
        """A substituted default is flagged on the result."""
        result = is_int().default(3).try_validate(None)

        assert result.value == 3
        assert result.defaulted is True
        assert is_int().default(3).try_validate(4).defaulted is False

    def test_default_is_deep_copied(self):
        """Mutable defaults are never shared between results."""
        node = is_list().default([])

        first = node.validate(None)
        first.append("x")

        assert node.validate(None) == []

    def test_default_reenters_constraints(self):
        """A default that violates a constraint fails."""
        result = is_int().default(-1).positive().try_validate(None)

        assert result.valid is False
        assert result.errors == ["Value must be positive"]

    def test_default_is_coerced(self):
        """A default passes through coercion like a supplied value."""
        assert is_int().coerce().default("12").validate(None) == 12

    def test_coercion_to_none_is_required_failure(self):
        """Empty form input coerced to None hits the required check."""
        result = is_int().coerce().required().try_validate("")

        assert result.kind is ErrorKind.REQUIRED
        assert result.errors == ["Value is required"]

    def test_coercion_to_none_uses_default(self):
        """Empty form input coerced to None falls back to the default."""
        assert is_int().coerce().default(3).validate("") == 3
        assert tuple(is_int().coerce().try_validate("")) == (True, None, None)


class TestPredicates:
    """Test satisfies() and the combination helpers."""

    def test_default_custom_message(self):
        """satisfies() reports the generic message when none is given."""
        result = is_int().satisfies(lambda v: v % 2 == 0).try_validate(3)
        assert result.errors == ["Custom validation failed"]

    def test_predicate_receives_key_and_input(self):
        """Predicates taking more parameters get the key and enclosing input."""
        seen = []

        def record(value, key, input):
            seen.append((value, key, input))
            return True

        is_dict({"a": is_int().satisfies(record)}).validate({"a": 1})

        assert seen == [(1, "a", {"a": 1})]

    def test_cross_field_predicate(self):
        """A predicate can compare against a sibling field."""
        schema = is_dict({
            "low": is_int(),
            "high": is_int().satisfies(lambda v, k, i: v > i["low"], "high must exceed low"),
        })

        assert schema.try_validate({"low": 1, "high": 2}).valid is True
        assert schema.try_validate({"low": 3, "high": 2}).errors == {
            "high": ["high must exceed low"]
        }

    def test_builtin_predicate(self):
        """Builtin methods without Python signatures work as predicates."""
        node = is_string().satisfies(str.isdigit, "Digits only")
        assert node.try_validate("12").valid is True
        assert node.try_validate("1a").errors == ["Digits only"]

    def test_defaulted_parameter_keeps_default(self):
        """Parameters with defaults are not filled with the key or input."""
        schema = is_dict({"n": is_int().satisfies(lambda v, limit=10: v < limit, "Too big")})

        assert schema.validate({"n": 5}) == {"n": 5}
        assert schema.try_validate({"n": 12}).errors == {"n": ["Too big"]}

    def test_defaulted_key_and_input_are_passed(self):
        """Optional parameters named key and input still receive them."""
        seen = []

        def record(value, key=None, input=None, extra="kept"):
            seen.append((key, input, extra))
            return True

        is_dict({"a": is_int().satisfies(record)}).validate({"a": 1})

        assert seen == [("a", {"a": 1}, "kept")]

    def test_validator_as_predicate(self):
        """A validator node passes as a predicate when it accepts the value."""
        node = is_string().satisfies(is_string().email(), "Bad address")

        assert node.validate("ada@example.com") == "ada@example.com"
        assert node.try_validate("ada").errors == ["Bad address"]

    def test_predicate_exception_propagates(self):
        """Exceptions raised by predicates are not swallowed."""
        node = is_int().satisfies(lambda v: 1 / v > 0)
        with pytest.raises(ZeroDivisionError):
            node.try_validate(0)

    def test_transform_exception_propagates(self):
        """Exceptions raised by pipe functions are not swallowed."""
        node = is_string().pipe(int)
        with pytest.raises(ValueError):
            node.try_validate("abc")

    @pytest.mark.parametrize(
        "method, value, expected",
        [
            ("satisfies_any", 4, None),
            ("satisfies_any", 7, ["Value must satisfy at least one validation rule"]),
            ("satisfies_all", 12, None),
            ("satisfies_all", 4, ["Value must satisfy all validation rules"]),
            ("satisfies_none", 7, None),
            ("satisfies_none", 4, ["Value must not satisfy any of the validation rules"]),
        ],
    )
    def test_combination_messages(self, method, value, expected):
        """Combination rules report a single aggregate message."""
        candidates = [lambda v: v % 2 == 0, is_int().min(10)]
        node = getattr(is_int(), method)(candidates)
        assert node.try_validate(value).errors == expected

    def test_combination_custom_message(self):
        """A combination rule can carry its own message."""
        node = is_int().satisfies_all([is_int().min(1), is_int().max(5)], "Out of range")
        assert node.try_validate(9).errors == ["Out of range"]

    def test_empty_combination_rejected(self):
        """A combination needs at least one candidate."""
        with pytest.raises(ValueError):
            is_int().satisfies_any([])

    def test_non_callable_predicate_rejected(self):
        """Only callables and validator nodes are accepted as predicates."""
        with pytest.raises(TypeError):
            is_int().satisfies(42)

    def test_non_callable_transform_rejected(self):
        """Transforms must be callable."""
        with pytest.raises(TypeError):
            is_int().pipe("upper")


class TestValidate:
    """Test the raising entry point."""

    def test_returns_value(self):
        """validate() returns the normalized value."""
        assert is_int().coerce().validate("42") == 42

    def test_raises_validation_error(self):
        """validate() raises with the error tree and kind attached."""
        with pytest.raises(ValidationError) as exc_info:
            is_int().min(10).validate(5)

        error = exc_info.value
        assert error.errors == ["Value must be at least 10"]
        assert error.kind is ErrorKind.CONSTRAINT
        assert "Value must be at least 10" in str(error)

    def test_error_is_dataknobs_error(self):
        """Callers catching dataknobs errors also catch validation failures."""
        with pytest.raises(dataknobs_common.DataknobsError):
            is_int().validate("x")
        with pytest.raises(dataknobs_common.ValidationError):
            is_int().validate("x")


class TestResult:
    """Test ValidationResult behavior."""

    def test_unpacks_as_tri_tuple(self):
        """A result unpacks to (valid, value, errors)."""
        valid, value, errors = ValidationResult.success(1)
        assert (valid, value, errors) == (True, 1, None)

    def test_truthiness(self):
        """A result is truthy exactly when valid."""
        assert bool(ValidationResult.success(None)) is True
        assert bool(ValidationResult.failure(1, ["bad"], ErrorKind.TYPE)) is False

    def test_flattened(self):
        """Failed results flatten their error tree."""
        result = ValidationResult.failure({}, {"a": ["bad"]}, ErrorKind.NESTED)
        assert result.flattened == [{"path": "a", "message": "bad"}]
        assert ValidationResult.success(1).flattened == []


class TestIntrospection:
    """Test the read-only views of a node's configuration."""

    def test_flags(self):
        """Properties reflect the configured flags."""
        node = is_int()
        assert (node.is_required, node.has_default, node.coerces) == (False, False, False)

        node.required().default(1).coerce()
        assert (node.is_required, node.has_default, node.coerces) == (True, True, True)

    def test_output_name(self):
        """The output name falls back to the field key."""
        assert is_int().output_name("a") == "a"
        assert is_int().output_key("b").output_name("a") == "b"

    def test_repr(self):
        """The repr names the class, rule count and enabled flags."""
        node = is_string().required().min_length(1)
        assert repr(node) == "StringValidator(rules=1, flags=['required'])"


class TestClone:
    """Test deep-copy semantics for reusing configured nodes."""

    def test_abstract_base(self):
        """The base node cannot be instantiated."""
        with pytest.raises(TypeError):
            Validator()

    def test_clone_flags_are_independent(self):
        """Changing a flag on a clone leaves the original unchanged."""
        original = is_int()
        cloned = original.clone().required()

        assert original.try_validate(None).valid is True
        assert cloned.try_validate(None).valid is False

    def test_clone_rules_are_independent(self):
        """Rules added to a clone are not added to the original."""
        original = is_int().min(0)
        cloned = original.clone().max(5)

        assert original.validate(10) == 10
        assert cloned.try_validate(10).errors == ["Value must be at most 5"]

    def test_clone_copies_default(self):
        """The default value is duplicated, not shared."""
        original = is_list().default(["a"])
        cloned = original.clone()

        cloned._default.append("b")

        assert original.validate(None) == ["a"]

    def test_clone_copies_schema_fields(self):
        """Field validators are cloned with their parent."""
        original = is_dict({"a": is_int()})
        cloned = original.clone()

        cloned.fields["a"].required()

        assert original.try_validate({}).valid is True
        assert cloned.try_validate({}).errors == {"a": ["Value is required"]}

    def test_clone_copies_predicate_nodes(self):
        """A validator used as a predicate is cloned too."""
        inner = is_string()
        original = is_string().satisfies(inner, "Rejected")
        cloned = original.clone()

        inner.min_length(3)

        assert original.try_validate("ab").valid is False
        assert cloned.try_validate("ab").valid is True

    def test_deepcopy_matches_clone(self):
        """copy.deepcopy produces an independent node as well."""
        original = is_string().required()
        copied = copy.deepcopy(original)

        assert copied is not original
        assert copied.try_validate(None).errors == ["Value is required"]
