# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Built-in sanitizers.

Sanitizers only touch values of the type they understand and return any
other value unchanged, so ``trim`` on ``None`` stays ``None``.
"""

from __future__ import annotations

from typing import Any

import bleach

from .rule import RuleContext, SanitizerRule, is_empty

__all__ = (
    "BUILTIN_SANITIZERS",
    "DefaultSanitizer",
    "FloatSanitizer",
    "IntSanitizer",
    "LeftTrimSanitizer",
    "LowercaseSanitizer",
    "RemoveTagsSanitizer",
    "RightTrimSanitizer",
    "TrimSanitizer",
    "TruncateSanitizer",
    "UppercaseSanitizer",
)


class TrimSanitizer(SanitizerRule):
    """Strip ``chars`` (default whitespace) from one or both ends."""

    side = "both"

    def __init__(self, chars: str | None = None):
        self.chars = chars

    def apply(self, value: Any, context: RuleContext) -> Any:
        if not isinstance(value, str):
            return value
        if self.side == "left":
            return value.lstrip(self.chars)
        if self.side == "right":
            return value.rstrip(self.chars)
        return value.strip(self.chars)


class LeftTrimSanitizer(TrimSanitizer):
    side = "left"


class RightTrimSanitizer(TrimSanitizer):
    side = "right"


class LowercaseSanitizer(SanitizerRule):
    def apply(self, value: Any, context: RuleContext) -> Any:
        return value.lower() if isinstance(value, str) else value


class UppercaseSanitizer(SanitizerRule):
    def apply(self, value: Any, context: RuleContext) -> Any:
        return value.upper() if isinstance(value, str) else value


class RemoveTagsSanitizer(SanitizerRule):
    """Strip HTML tags, keeping their text. ``allowed`` tags survive.

    Text is escaped by bleach, so ``&`` becomes ``&amp;``.
    """

    def __init__(self, allowed: list[str] | tuple[str, ...] = ()):
        self.allowed = frozenset(allowed)

    def apply(self, value: Any, context: RuleContext) -> Any:
        if not isinstance(value, str):
            return value
        return bleach.clean(value, tags=self.allowed, attributes={}, strip=True)


class IntSanitizer(SanitizerRule):
    """Cast to int. Unparseable input becomes 0, like a C-style cast."""

    def apply(self, value: Any, context: RuleContext) -> Any:
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, int):
            return value
        try:
            return int(float(str(value).strip()))
        except (TypeError, ValueError, OverflowError):
            return 0


class FloatSanitizer(SanitizerRule):
    def apply(self, value: Any, context: RuleContext) -> Any:
        if isinstance(value, float):
            return value
        try:
            return float(str(value).strip())
        except (TypeError, ValueError):
            return 0.0


class DefaultSanitizer(SanitizerRule):
    """Replace an empty value with ``default``."""

    def __init__(self, default: Any):
        self.default = default

    def apply(self, value: Any, context: RuleContext) -> Any:
        return self.default if is_empty(value) else value


class TruncateSanitizer(SanitizerRule):
    def __init__(self, length: int, suffix: str = ""):
        if length < 0:
            raise TypeError("truncate length must be non-negative")
        self.length = length
        self.suffix = suffix

    def apply(self, value: Any, context: RuleContext) -> Any:
        if not isinstance(value, str) or len(value) <= self.length:
            return value
        return value[: self.length] + self.suffix


BUILTIN_SANITIZERS: dict[str, type[SanitizerRule]] = {
    "trim": TrimSanitizer,
    "ltrim": LeftTrimSanitizer,
    "rtrim": RightTrimSanitizer,
    "lowercase": LowercaseSanitizer,
    "uppercase": UppercaseSanitizer,
    "remove_tags": RemoveTagsSanitizer,
    "int": IntSanitizer,
    "float": FloatSanitizer,
    "default": DefaultSanitizer,
    "truncate": TruncateSanitizer,
}
