# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Execution of one rule group against a model's attributes.

Per attribute, directives run in declaration order and dispatch as:
    1. inline callable      func(model, value, attribute)
    2. model handler        @directive method (value, attribute, *args)
    3. registry rule        validate (unless "!"), then sanitize if the
                            attribute has no error yet

After each attribute the `one` gate may end the group early; after all
attributes a `when` block runs only if this group added no error.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from ruleform.config import RulesConfig
from ruleform.errors import RuleArgumentError, UnknownRuleError
from ruleform.registry import RuleContext, RuleRegistry, get_default_registry

from .table import (
    SANITIZE_ONLY_PREFIX,
    DirectiveBlock,
    Gate,
    InlineDirective,
    NamedDirective,
    RuleGroup,
)

if TYPE_CHECKING:
    from ruleform.model import Model

__all__ = ("RuleGroupInterpreter",)

logger = logging.getLogger(__name__)


class RuleGroupInterpreter:
    """Runs rule groups for one model during one validation pass.

    The interpreter only appends to the model's error store and assigns
    sanitized values; it never replaces the store.

    Attributes:
        model: Model being validated.
        registry: Source of named validators and sanitizers.
        config: Label/placeholder settings.
    """

    def __init__(
        self,
        model: Model,
        registry: RuleRegistry | None = None,
        config: RulesConfig | None = None,
    ):
        self.model = model
        self.registry = registry if registry is not None else get_default_registry()
        self.config = config or RulesConfig()

    def execute(self, attributes: Sequence[str], group: RuleGroup | DirectiveBlock) -> bool:
        """Run group over attributes.

        Returns:
            False if the `one` gate fired, otherwise True (also when errors
            were recorded). Nested `when` blocks return their own result.

        Raises:
            ConfigurationError: Unknown rule or malformed arguments.
        """
        block = group.block if isinstance(group, RuleGroup) else group
        store = self.model.error_store
        entry = store.snapshot()

        for attribute in attributes:
            placeholders = self._placeholders_for(attribute, block)
            for directive in block.directives:
                self._apply(directive, attribute, placeholders, block.messages)

            if block.one is None:
                continue
            if (block.one is Gate.ANY or block.one == attribute) and (
                store.snapshot() != entry
            ):
                logger.debug(f"Gate stopped group at '{attribute}'")
                return False

        if block.when is not None and store.snapshot() == entry:
            logger.debug(f"Running when-block for {list(attributes)}")
            return self.execute(attributes, block.when)
        return True

    def _placeholders_for(self, attribute: str, block: DirectiveBlock) -> dict[str, Any]:
        placeholders = dict(block.placeholders)
        if "name" not in placeholders:
            label = None
            if self.config.use_labels_as_placeholders:
                label = self.model.attribute_labels().get(attribute)
            placeholders["name"] = label if label is not None else self.config.fallback_label
        return placeholders

    def _apply(
        self,
        directive: Any,
        attribute: str,
        placeholders: dict[str, Any],
        messages: Any,
    ) -> None:
        if isinstance(directive, InlineDirective):
            directive.func(self.model, getattr(self.model, attribute), attribute)
            return

        name = directive.name
        args: Sequence[Any] = ()
        if isinstance(directive, NamedDirective):
            args = self._resolve_args(directive)

        sanitize_only = name.startswith(SANITIZE_ONLY_PREFIX)
        if sanitize_only:
            name = name.lstrip(SANITIZE_ONLY_PREFIX)

        handler = self.model.get_directive_handler(name)
        if handler is not None:
            handler(getattr(self.model, attribute), attribute, *args)
            return

        self._apply_rule(name, args, attribute, sanitize_only, placeholders, messages)

    def _resolve_args(self, directive: NamedDirective) -> Sequence[Any]:
        if not callable(directive.args):
            return directive.args
        args = directive.args(self.model)
        if not isinstance(args, (list, tuple)):
            raise RuleArgumentError(
                f"Arguments for rule '{directive.name}' must be a list or tuple",
                details={"rule": directive.name, "resolved": repr(args)},
            )
        return args

    def _apply_rule(
        self,
        name: str,
        args: Sequence[Any],
        attribute: str,
        sanitize_only: bool,
        placeholders: dict[str, Any],
        messages: Any,
    ) -> None:
        registry = self.registry
        if not registry.exists_rule(name):
            raise UnknownRuleError(
                f"Unknown rule: {name}",
                details={
                    "rule": name,
                    "attribute": attribute,
                    "model": type(self.model).__name__,
                },
            )

        context = RuleContext(
            model=self.model,
            attribute=attribute,
            placeholders=placeholders,
            messages=messages,
        )

        if not sanitize_only and registry.has_validator(name):
            validator = registry.validator(name, args, context)
            if not validator.validate(getattr(self.model, attribute)):
                self.model.add_error(attribute, validator.first_error)

        if not registry.has_sanitizer(name):
            return
        if self.model.has_errors(attribute):
            logger.debug(f"Skipping sanitizer '{name}' on '{attribute}': has errors")
            return
        sanitizer = registry.sanitizer(name, args, context)
        setattr(self.model, attribute, sanitizer.sanitize(getattr(self.model, attribute)))
