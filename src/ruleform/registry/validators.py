# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Built-in validators.

Each class is registered under the name in ``BUILTIN_VALIDATORS``. The
directive argument list is passed to the constructor, so
``{"length": [6, 20]}`` builds ``LengthRule(6, 20)``.
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Any

from email_validator import EmailNotValidError, validate_email

from .rule import RuleContext, ValidatorRule, is_empty

__all__ = (
    "BUILTIN_VALIDATORS",
    "BoolRule",
    "EmailRule",
    "InRule",
    "IntRule",
    "LengthRule",
    "LowercaseRule",
    "MaxRule",
    "MinRule",
    "NumericRule",
    "RegexRule",
    "RequiredRule",
    "SameAsRule",
    "StringRule",
    "UppercaseRule",
)

_INT_PATTERN = re.compile(r"[-+]?\d+")
_BOOL_STRINGS = frozenset({"0", "1", "true", "false", "yes", "no", "on", "off"})


def _to_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


class RequiredRule(ValidatorRule):
    message = "{name} must not be empty"
    skip_empty = False

    def check(self, value: Any, context: RuleContext) -> bool:
        return not is_empty(value)


class LengthRule(ValidatorRule):
    """Length of a string or container within [min, max].

    Args:
        min: Lower bound, or None.
        max: Upper bound, or None.
        inclusive: Whether bounds themselves are allowed.
    """

    def __init__(
        self, min: int | None = None, max: int | None = None, inclusive: bool = True
    ):
        if min is None and max is None:
            raise TypeError("length requires at least one of min or max")
        self.min = min
        self.max = max
        self.inclusive = inclusive

    def check(self, value: Any, context: RuleContext) -> bool:
        try:
            size = len(value)
        except TypeError:
            size = len(str(value))
        if self.min is not None:
            if size < self.min or (not self.inclusive and size == self.min):
                return False
        if self.max is not None:
            if size > self.max or (not self.inclusive and size == self.max):
                return False
        return True

    def template(self) -> str:
        if self.min is not None and self.max is not None:
            return "{name} must have a length between {min} and {max}"
        if self.min is not None:
            return "{name} must have a length greater than {min}"
        return "{name} must have a length lower than {max}"

    def placeholders(self, context: RuleContext) -> dict[str, Any]:
        return {"min": self.min, "max": self.max}


class EmailRule(ValidatorRule):
    """Syntactic e-mail check. No DNS lookups."""

    message = "{name} must be a valid email"

    def check(self, value: Any, context: RuleContext) -> bool:
        if not isinstance(value, str):
            return False
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            return False
        return True


class RegexRule(ValidatorRule):
    message = "{name} contains invalid characters"

    def __init__(self, pattern: str | re.Pattern[str], flags: int = 0):
        self.pattern = (
            pattern if isinstance(pattern, re.Pattern) else re.compile(pattern, flags)
        )

    def check(self, value: Any, context: RuleContext) -> bool:
        if not isinstance(value, (str, int, float)) or isinstance(value, bool):
            return False
        return self.pattern.search(str(value)) is not None


class IntRule(ValidatorRule):
    """Integer or integer-like string. Empty values fail."""

    message = "{name} must be an integer"
    skip_empty = False

    def check(self, value: Any, context: RuleContext) -> bool:
        if isinstance(value, bool):
            return False
        if isinstance(value, int):
            return True
        if isinstance(value, str):
            return _INT_PATTERN.fullmatch(value.strip()) is not None
        return False


class NumericRule(ValidatorRule):
    message = "{name} must be numeric"

    def check(self, value: Any, context: RuleContext) -> bool:
        return _to_number(value) is not None


class BoolRule(ValidatorRule):
    message = "{name} must be a boolean"
    skip_empty = False

    def check(self, value: Any, context: RuleContext) -> bool:
        if isinstance(value, bool):
            return True
        if isinstance(value, int):
            return value in (0, 1)
        if isinstance(value, str):
            return value.strip().lower() in _BOOL_STRINGS
        return False


class StringRule(ValidatorRule):
    message = "{name} must be a string"

    def check(self, value: Any, context: RuleContext) -> bool:
        return isinstance(value, str)


class MinRule(ValidatorRule):
    def __init__(self, min: float, inclusive: bool = True):
        self.min = min
        self.inclusive = inclusive

    def check(self, value: Any, context: RuleContext) -> bool:
        number = _to_number(value)
        if number is None:
            return False
        return number >= self.min if self.inclusive else number > self.min

    def template(self) -> str:
        if self.inclusive:
            return "{name} must be greater than or equal to {min}"
        return "{name} must be greater than {min}"

    def placeholders(self, context: RuleContext) -> dict[str, Any]:
        return {"min": self.min}


class MaxRule(ValidatorRule):
    def __init__(self, max: float, inclusive: bool = True):
        self.max = max
        self.inclusive = inclusive

    def check(self, value: Any, context: RuleContext) -> bool:
        number = _to_number(value)
        if number is None:
            return False
        return number <= self.max if self.inclusive else number < self.max

    def template(self) -> str:
        if self.inclusive:
            return "{name} must be lower than or equal to {max}"
        return "{name} must be lower than {max}"

    def placeholders(self, context: RuleContext) -> dict[str, Any]:
        return {"max": self.max}


class InRule(ValidatorRule):
    message = "{name} must be in {haystack}"

    def __init__(self, haystack: list[Any] | tuple[Any, ...] | set[Any]):
        self.haystack = haystack

    def check(self, value: Any, context: RuleContext) -> bool:
        try:
            return value in self.haystack
        except TypeError:
            return False

    def placeholders(self, context: RuleContext) -> dict[str, Any]:
        return {"haystack": ", ".join(str(item) for item in self.haystack)}


class LowercaseRule(ValidatorRule):
    message = "{name} must be lowercase"

    def check(self, value: Any, context: RuleContext) -> bool:
        return isinstance(value, str) and value == value.lower()


class UppercaseRule(ValidatorRule):
    message = "{name} must be uppercase"

    def check(self, value: Any, context: RuleContext) -> bool:
        return isinstance(value, str) and value == value.upper()


class SameAsRule(ValidatorRule):
    """Value equals another attribute of the bound model (e.g. password repeat)."""

    message = "{name} must be equal to {other}"

    def __init__(self, other: str):
        self.other = other

    def check(self, value: Any, context: RuleContext) -> bool:
        if context.model is None:
            return False
        return value == getattr(context.model, self.other, None)

    def placeholders(self, context: RuleContext) -> dict[str, Any]:
        label = getattr(context.model, "get_attribute_label", None)
        return {"other": label(self.other) if label is not None else self.other}


BUILTIN_VALIDATORS: dict[str, type[ValidatorRule]] = {
    "required": RequiredRule,
    "length": LengthRule,
    "email": EmailRule,
    "regex": RegexRule,
    "int": IntRule,
    "numeric": NumericRule,
    "bool": BoolRule,
    "string": StringRule,
    "min": MinRule,
    "max": MaxRule,
    "in": InRule,
    "lowercase": LowercaseRule,
    "uppercase": UppercaseRule,
    "same_as": SameAsRule,
}
