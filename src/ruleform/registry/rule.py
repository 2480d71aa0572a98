# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Rule base classes and the per-call handles the interpreter works with.

A rule instance holds only the arguments it was built from. Everything that
varies per call (bound model, attribute, placeholders, custom messages) lives
in an immutable RuleContext, so rules stay stateless and a handle never
shares configuration with another attribute or another model.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any, ClassVar

__all__ = (
    "RuleContext",
    "SanitizerHandle",
    "SanitizerRule",
    "ValidatorHandle",
    "ValidatorRule",
    "format_message",
    "is_empty",
)


def is_empty(value: Any) -> bool:
    """True for None, empty strings and empty containers. Zero is not empty."""
    if value is None:
        return True
    if isinstance(value, (str, bytes, list, tuple, dict, set, frozenset)):
        return len(value) == 0
    return False


class _KeepMissing(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def format_message(template: str, placeholders: Mapping[str, Any]) -> str:
    """Interpolate ``{key}`` placeholders, leaving unknown keys untouched."""
    try:
        return template.format_map(_KeepMissing(placeholders))
    except (AttributeError, IndexError, KeyError, TypeError, ValueError):
        # Positional fields, stray braces or field access in a custom message
        return template


@dataclass(frozen=True, slots=True)
class RuleContext:
    """Configuration record for one rule invocation.

    Attributes:
        model: Model being validated (None outside a validation pass).
        attribute: Attribute the rule is applied to.
        placeholders: Message substitutions; ``name`` is the display label.
        messages: Rule name -> custom message template.
    """

    model: Any = None
    attribute: str | None = None
    placeholders: Mapping[str, Any] = field(default_factory=dict)
    messages: Mapping[str, str] = field(default_factory=dict)


class ValidatorRule:
    """Base class for validators.

    Subclasses implement ``check``. Constructor arguments are the directive's
    argument list. Values that are ``is_empty`` pass without calling ``check``
    unless ``skip_empty`` is False.
    """

    message: ClassVar[str] = "{name} is invalid"
    skip_empty: ClassVar[bool] = True

    def check(self, value: Any, context: RuleContext) -> bool:
        raise NotImplementedError("Subclasses must implement check method")

    def template(self) -> str:
        """Message template for a failure. May depend on arguments."""
        return self.message

    def placeholders(self, context: RuleContext) -> dict[str, Any]:
        """Rule-specific substitutions (e.g. ``min``, ``max``)."""
        return {}


class SanitizerRule:
    """Base class for sanitizers. ``apply`` returns the new value."""

    def apply(self, value: Any, context: RuleContext) -> Any:
        raise NotImplementedError("Subclasses must implement apply method")


class ValidatorHandle:
    """A validator bound to one call's context; collects its own errors."""

    __slots__ = ("name", "rule", "context", "_errors")

    def __init__(self, name: str, rule: ValidatorRule, context: RuleContext):
        self.name = name
        self.rule = rule
        self.context = context
        self._errors: list[str] = []

    def configure(
        self,
        placeholders: Mapping[str, Any] | None = None,
        messages: Mapping[str, str] | None = None,
    ) -> ValidatorHandle:
        """Return a new handle with replaced placeholders/messages."""
        context = self.context
        if placeholders is not None:
            context = replace(context, placeholders=dict(placeholders))
        if messages is not None:
            context = replace(context, messages=dict(messages))
        return ValidatorHandle(self.name, self.rule, context)

    def validate(self, value: Any) -> bool:
        self._errors = []
        if self.rule.skip_empty and is_empty(value):
            return True
        if self.rule.check(value, self.context):
            return True
        self._errors.append(self._render())
        return False

    @property
    def errors(self) -> list[str]:
        return list(self._errors)

    @property
    def first_error(self) -> str | None:
        return self._errors[0] if self._errors else None

    def _render(self) -> str:
        template = self.context.messages.get(self.name, self.rule.template())
        values = {"name": "value", **self.rule.placeholders(self.context)}
        values.update(self.context.placeholders)
        return format_message(template, values)

    def __repr__(self) -> str:
        return f"ValidatorHandle({self.name!r}, attribute={self.context.attribute!r})"


class SanitizerHandle:
    """A sanitizer bound to one call's context."""

    __slots__ = ("name", "rule", "context")

    def __init__(self, name: str, rule: SanitizerRule, context: RuleContext):
        self.name = name
        self.rule = rule
        self.context = context

    def sanitize(self, value: Any) -> Any:
        return self.rule.apply(value, self.context)

    def __repr__(self) -> str:
        return f"SanitizerHandle({self.name!r}, attribute={self.context.attribute!r})"
