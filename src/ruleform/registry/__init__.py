# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Registry module: named validators and sanitizers.

Core exports:
- RuleRegistry: name -> validator/sanitizer factories
- ValidatorRule, SanitizerRule: base classes for custom rules
- ValidatorHandle, SanitizerHandle, RuleContext: per-call handles
- get_default_registry, reset_default_registry: process-wide defaults
"""

from .registry import RuleRegistry, get_default_registry, reset_default_registry
from .rule import (
    RuleContext,
    SanitizerHandle,
    SanitizerRule,
    ValidatorHandle,
    ValidatorRule,
    format_message,
    is_empty,
)
from .sanitizers import BUILTIN_SANITIZERS
from .validators import BUILTIN_VALIDATORS

__all__ = (
    # Base classes
    "SanitizerRule",
    "ValidatorRule",
    # Handles
    "RuleContext",
    "SanitizerHandle",
    "ValidatorHandle",
    # Registry
    "BUILTIN_SANITIZERS",
    "BUILTIN_VALIDATORS",
    "RuleRegistry",
    "get_default_registry",
    "reset_default_registry",
    # Helpers
    "format_message",
    "is_empty",
)
