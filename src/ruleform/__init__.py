# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""ruleform - declarative, scenario-aware validation for data models.

Top-level re-exports (lazily loaded):
- Model, ModelEvent, directive, ErrorStore -> ruleform.model
- RuleGroup, RuleGroupInterpreter, compile_rules, ... -> ruleform.rules
- RuleRegistry, ValidatorRule, SanitizerRule, ... -> ruleform.registry
- RulesConfig -> ruleform.config
- ConfigurationError, UnknownRuleError, ... -> ruleform.errors
"""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

# Lazy import mapping
_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    # model
    "AFTER_VALIDATE": ("ruleform.model", "AFTER_VALIDATE"),
    "BEFORE_VALIDATE": ("ruleform.model", "BEFORE_VALIDATE"),
    "ErrorStore": ("ruleform.model", "ErrorStore"),
    "Model": ("ruleform.model", "Model"),
    "ModelEvent": ("ruleform.model", "ModelEvent"),
    "directive": ("ruleform.model", "directive"),
    # rules
    "RuleGroup": ("ruleform.rules", "RuleGroup"),
    "RuleGroupInterpreter": ("ruleform.rules", "RuleGroupInterpreter"),
    "active_groups": ("ruleform.rules", "active_groups"),
    "compile_rules": ("ruleform.rules", "compile_rules"),
    "is_attribute_required": ("ruleform.rules", "is_attribute_required"),
    # registry
    "RuleContext": ("ruleform.registry", "RuleContext"),
    "RuleRegistry": ("ruleform.registry", "RuleRegistry"),
    "SanitizerRule": ("ruleform.registry", "SanitizerRule"),
    "ValidatorRule": ("ruleform.registry", "ValidatorRule"),
    "get_default_registry": ("ruleform.registry", "get_default_registry"),
    "reset_default_registry": ("ruleform.registry", "reset_default_registry"),
    # config
    "RulesConfig": ("ruleform.config", "RulesConfig"),
    # errors
    "ConfigurationError": ("ruleform.errors", "ConfigurationError"),
    "RuleArgumentError": ("ruleform.errors", "RuleArgumentError"),
    "RuleformError": ("ruleform.errors", "RuleformError"),
    "UnknownRuleError": ("ruleform.errors", "UnknownRuleError"),
}

_LOADED: dict[str, object] = {}


def __getattr__(name: str) -> object:
    """Lazy import attributes on first access."""
    if name in _LOADED:
        return _LOADED[name]

    if name in _LAZY_IMPORTS:
        from importlib import import_module

        module_name, attr_name = _LAZY_IMPORTS[name]
        module = import_module(module_name)
        value = getattr(module, attr_name)
        _LOADED[name] = value
        return value

    raise AttributeError(f"module 'ruleform' has no attribute {name!r}")


def __dir__() -> list[str]:
    """Return all available attributes for autocomplete."""
    return list(__all__)


if TYPE_CHECKING:
    from ruleform.config import RulesConfig
    from ruleform.errors import (
        ConfigurationError,
        RuleArgumentError,
        RuleformError,
        UnknownRuleError,
    )
    from ruleform.model import (
        AFTER_VALIDATE,
        BEFORE_VALIDATE,
        ErrorStore,
        Model,
        ModelEvent,
        directive,
    )
    from ruleform.registry import (
        RuleContext,
        RuleRegistry,
        SanitizerRule,
        ValidatorRule,
        get_default_registry,
        reset_default_registry,
    )
    from ruleform.rules import (
        RuleGroup,
        RuleGroupInterpreter,
        active_groups,
        compile_rules,
        is_attribute_required,
    )

__all__ = [
    # constants
    "AFTER_VALIDATE",
    "BEFORE_VALIDATE",
    # classes
    "ConfigurationError",
    "ErrorStore",
    "Model",
    "ModelEvent",
    "RuleArgumentError",
    "RuleContext",
    "RuleGroup",
    "RuleGroupInterpreter",
    "RuleRegistry",
    "RuleformError",
    "RulesConfig",
    "SanitizerRule",
    "UnknownRuleError",
    "ValidatorRule",
    # functions
    "active_groups",
    "compile_rules",
    "directive",
    "get_default_registry",
    "is_attribute_required",
    "reset_default_registry",
]
