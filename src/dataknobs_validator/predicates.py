"""Constraint rules and transforms stored on validator nodes.

A rule is a boolean check paired with the message reported when it fails.
Rules are built from plain callables, from validator nodes (which pass when
their own ``try_validate`` succeeds), or from other rules combined with
any/all/none logic.

Callables may take one, two or three positional parameters; they are called
as ``fn(value)``, ``fn(value, key)`` or ``fn(value, key, input)`` accordingly.
"""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable


def _positional_arity(fn: Callable[..., Any]) -> int:
    """Number of positional arguments (1-3) a predicate accepts.

    Parameters with defaults are left to their defaults unless they are
    named ``key`` or ``input``, so ``lambda v, limit=10: v < limit`` is
    called with the value only.
    """
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        # Some builtins have no introspectable signature
        return 1

    count = 0
    for parameter in signature.parameters.values():
        if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
            return 3
        if parameter.kind not in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            continue
        if parameter.default is not inspect.Parameter.empty and parameter.name not in (
            "key",
            "input",
        ):
            break
        count += 1
    return max(1, min(count, 3))


class Rule(ABC):
    """Base class for constraint rules."""

    message: str

    @abstractmethod
    def test(self, value: Any, key: Any = None, input: Any = None) -> bool:
        """Return True when the value satisfies this rule.

        Args:
            value: The typed value under validation
            key: Key of the value within its parent, if any
            input: The whole enclosing input, if any

        Returns:
            True if the rule passes
        """


class Check(Rule):
    """Rule backed by a plain callable."""

    def __init__(self, fn: Callable[..., Any], message: str):
        self.fn = fn
        self.message = message
        self._arity = _positional_arity(fn)

    def test(self, value: Any, key: Any = None, input: Any = None) -> bool:
        args = (value, key, input)[: self._arity]
        return bool(self.fn(*args))

    def __deepcopy__(self, memo: dict[int, Any]) -> Check:
        # The callable is shared; it may be a bound method of a live collaborator
        return Check(self.fn, self.message)


class NodeCheck(Rule):
    """Rule that passes when a validator node accepts the value."""

    def __init__(self, node: Any, message: str):
        self.node = node
        self.message = message

    def test(self, value: Any, key: Any = None, input: Any = None) -> bool:
        return self.node.try_validate(value, key, input).valid


class Combination(Rule):
    """Rule combining candidate rules with any/all/none logic."""

    def __init__(self, rules: list[Rule], message: str):
        self.rules = rules
        self.message = message

    def results(self, value: Any, key: Any, input: Any) -> Iterable[bool]:
        return (rule.test(value, key, input) for rule in self.rules)


class AnyRule(Combination):
    """At least one candidate must pass (OR logic)."""

    def test(self, value: Any, key: Any = None, input: Any = None) -> bool:
        return any(self.results(value, key, input))


class AllRule(Combination):
    """Every candidate must pass (AND logic)."""

    def test(self, value: Any, key: Any = None, input: Any = None) -> bool:
        return all(self.results(value, key, input))


class NoneRule(Combination):
    """No candidate may pass (NOT logic)."""

    def test(self, value: Any, key: Any = None, input: Any = None) -> bool:
        return not any(self.results(value, key, input))


def as_rule(candidate: Any, message: str) -> Rule:
    """Wrap a callable, validator node or rule as a Rule.

    Args:
        candidate: Callable predicate, validator node, or Rule
        message: Failure message for the wrapped rule

    Returns:
        Rule instance

    Raises:
        TypeError: If the candidate is none of the supported kinds
    """
    if isinstance(candidate, Rule):
        return candidate
    if hasattr(candidate, "try_validate"):
        return NodeCheck(candidate, message)
    if callable(candidate):
        return Check(candidate, message)
    raise TypeError(
        f"Predicate must be a callable or a validator, got {type(candidate).__name__}"
    )


def combine(mode: str, candidates: Iterable[Any], message: str) -> Combination:
    """Build an any/all/none rule over candidate predicates.

    Args:
        mode: One of "any", "all", "none"
        candidates: Callables, validator nodes or rules
        message: Aggregate failure message

    Returns:
        Combination rule
    """
    rule_types: dict[str, type[Combination]] = {
        "any": AnyRule,
        "all": AllRule,
        "none": NoneRule,
    }
    if mode not in rule_types:
        raise ValueError(f"Unknown combination mode: {mode}")

    rules = [as_rule(candidate, message) for candidate in candidates]
    if not rules:
        raise ValueError(f"satisfies_{mode} requires at least one candidate")
    return rule_types[mode](rules, message)


class Transform:
    """A value-reshaping function queued on a node."""

    def __init__(self, fn: Callable[[Any], Any]):
        if not callable(fn):
            raise TypeError(f"Transform must be callable, got {type(fn).__name__}")
        self.fn = fn

    def __call__(self, value: Any) -> Any:
        return self.fn(value)

    def __deepcopy__(self, memo: dict[int, Any]) -> Transform:
        return Transform(self.fn)


class AnyItem(Rule):
    """Rule passing when ``rule`` accepts at least one element of a list."""

    def __init__(self, rule: Rule, message: str):
        self.rule = rule
        self.message = message

    def test(self, value: Any, key: Any = None, input: Any = None) -> bool:
        return any(self.rule.test(item, key, value) for item in value)


def strictly_equal(left: Any, right: Any) -> bool:
    """Equality that also requires identical types (``1 != 1.0 != True``)."""
    return type(left) is type(right) and left == right
