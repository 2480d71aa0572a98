# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Exception hierarchy for ruleform.

Validation failures are never raised; they are recorded on the model's
error store. Exceptions here signal programming mistakes in a rule table
or misuse of a registry, and propagate out of ``Model.validate()``.
"""

from __future__ import annotations

from typing import Any

__all__ = (
    "ConfigurationError",
    "ExistsError",
    "NotFoundError",
    "RuleArgumentError",
    "RuleformError",
    "UnknownRuleError",
)


class RuleformError(Exception):
    """Base error carrying a message, structured details and a retry hint.

    Attributes:
        message: Human-readable description.
        details: Extra context (rule name, attribute, available names, ...).
        retryable: Whether repeating the call could succeed.
    """

    default_message: str = "ruleform error"
    default_retryable: bool = False

    def __init__(
        self,
        message: str | None = None,
        *,
        details: dict[str, Any] | None = None,
        retryable: bool | None = None,
        cause: BaseException | None = None,
    ):
        self.message = message or self.default_message
        self.details = details or {}
        self.retryable = (
            self.default_retryable if retryable is None else retryable
        )
        super().__init__(self.message)
        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> dict[str, Any]:
        """Serialize for logging or API responses."""
        return {
            "error": type(self).__name__,
            "message": self.message,
            "retryable": self.retryable,
            **({"details": self.details} if self.details else {}),
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class ConfigurationError(RuleformError):
    """Rule table is malformed. Never recorded as a validation error."""

    default_message = "Invalid rule configuration"


class UnknownRuleError(ConfigurationError):
    """Directive name matches no handler, validator or sanitizer."""

    default_message = "Unknown rule"


class RuleArgumentError(ConfigurationError):
    """Directive arguments have the wrong shape."""

    default_message = "Rule arguments must be a list or tuple"


class ExistsError(RuleformError):
    """Name already registered."""

    default_message = "Already exists"


class NotFoundError(RuleformError):
    """Name not registered."""

    default_message = "Not found"
