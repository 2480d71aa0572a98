# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Rules module: rule table parsing, filtering and execution.

Core exports:
- RuleGroup, DirectiveBlock: parsed rule table entries
- BareDirective, NamedDirective, InlineDirective: directive variants
- compile_rules, parse_rule_group, active_groups: rule table compiler
- RuleGroupInterpreter: executes one group against a model
- is_attribute_required: static required-ness check
"""

from .interpreter import RuleGroupInterpreter
from .introspect import REQUIRED_RULE, is_attribute_required
from .table import (
    GATE_MARKER,
    RESERVED_KEYS,
    SANITIZE_ONLY_PREFIX,
    BareDirective,
    Directive,
    DirectiveBlock,
    Gate,
    InlineDirective,
    NamedDirective,
    RuleGroup,
    active_groups,
    compile_rules,
    parse_directives,
    parse_rule_group,
)

__all__ = (
    # Constants
    "GATE_MARKER",
    "REQUIRED_RULE",
    "RESERVED_KEYS",
    "SANITIZE_ONLY_PREFIX",
    # Parsed structures
    "BareDirective",
    "Directive",
    "DirectiveBlock",
    "Gate",
    "InlineDirective",
    "NamedDirective",
    "RuleGroup",
    # Compiler
    "active_groups",
    "compile_rules",
    "parse_directives",
    "parse_rule_group",
    # Execution
    "RuleGroupInterpreter",
    "is_attribute_required",
)
