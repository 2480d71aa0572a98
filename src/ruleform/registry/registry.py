# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Name -> validator/sanitizer factory registry.

A name may be registered as a validator, a sanitizer, or both (``lowercase``
checks case as a validator and lowers it as a sanitizer). Every lookup builds
a fresh rule instance from its factory, so per-call configuration never
leaks between attributes or between models sharing a registry.

Handler signature for factories: ``factory(*args) -> rule``; classes work.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from ruleform.errors import ExistsError, NotFoundError, RuleArgumentError

from .rule import (
    RuleContext,
    SanitizerHandle,
    SanitizerRule,
    ValidatorHandle,
    ValidatorRule,
)

__all__ = (
    "RuleRegistry",
    "SanitizerFactory",
    "ValidatorFactory",
    "get_default_registry",
    "reset_default_registry",
)

ValidatorFactory = Callable[..., ValidatorRule]
SanitizerFactory = Callable[..., SanitizerRule]


class RuleRegistry:
    """Map rule names to validator and sanitizer factories.

    Example:
        registry = RuleRegistry()
        registry.register_validator("slug", SlugRule)
        registry.register_sanitizer("slug", Slugify)

        handle = registry.validator("slug", (), RuleContext(attribute="path"))
        if not handle.validate(value):
            print(handle.first_error)
    """

    def __init__(self):
        self._validators: dict[str, ValidatorFactory] = {}
        self._sanitizers: dict[str, SanitizerFactory] = {}

    @classmethod
    def with_builtins(cls) -> RuleRegistry:
        """Create a registry pre-loaded with the built-in rules."""
        from .sanitizers import BUILTIN_SANITIZERS
        from .validators import BUILTIN_VALIDATORS

        registry = cls()
        for name, factory in BUILTIN_VALIDATORS.items():
            registry.register_validator(name, factory)
        for name, factory in BUILTIN_SANITIZERS.items():
            registry.register_sanitizer(name, factory)
        return registry

    def register_validator(
        self, name: str, factory: ValidatorFactory, *, override: bool = False
    ) -> None:
        """Register validator factory under name.

        Raises:
            ExistsError: If name has a validator and override=False.
        """
        self._register(self._validators, "Validator", name, factory, override)

    def register_sanitizer(
        self, name: str, factory: SanitizerFactory, *, override: bool = False
    ) -> None:
        """Register sanitizer factory under name.

        Raises:
            ExistsError: If name has a sanitizer and override=False.
        """
        self._register(self._sanitizers, "Sanitizer", name, factory, override)

    @staticmethod
    def _register(
        table: dict[str, Any], kind: str, name: str, factory: Any, override: bool
    ) -> None:
        if not name or name.startswith("!"):
            raise ValueError(f"Invalid rule name: {name!r}")
        if name in table and not override:
            raise ExistsError(
                f"{kind} '{name}' already registered. Use override=True to replace.",
                details={"name": name},
            )
        table[name] = factory

    def unregister(self, name: str) -> bool:
        """Remove both sides of name. Returns True if anything existed."""
        found = self._validators.pop(name, None) is not None
        return self._sanitizers.pop(name, None) is not None or found

    def has_validator(self, name: str) -> bool:
        return name in self._validators

    def has_sanitizer(self, name: str) -> bool:
        return name in self._sanitizers

    def exists_rule(self, name: str) -> bool:
        """True if name is a validator, a sanitizer, or both."""
        return name in self._validators or name in self._sanitizers

    def list_names(self) -> list[str]:
        """All registered names, validators first, without duplicates."""
        return list(dict.fromkeys([*self._validators, *self._sanitizers]))

    def validator(
        self,
        name: str,
        args: Sequence[Any] = (),
        context: RuleContext | None = None,
    ) -> ValidatorHandle:
        """Build a fresh validator for one call.

        Raises:
            NotFoundError: If name has no validator.
            RuleArgumentError: If the factory rejects args.
        """
        if name not in self._validators:
            raise NotFoundError(
                f"Validator '{name}' not registered",
                details={"available": sorted(self._validators)},
            )
        rule = self._build(name, self._validators[name], args)
        return ValidatorHandle(name, rule, context or RuleContext())

    def sanitizer(
        self,
        name: str,
        args: Sequence[Any] = (),
        context: RuleContext | None = None,
    ) -> SanitizerHandle:
        """Build a fresh sanitizer for one call.

        Raises:
            NotFoundError: If name has no sanitizer.
            RuleArgumentError: If the factory rejects args.
        """
        if name not in self._sanitizers:
            raise NotFoundError(
                f"Sanitizer '{name}' not registered",
                details={"available": sorted(self._sanitizers)},
            )
        rule = self._build(name, self._sanitizers[name], args)
        return SanitizerHandle(name, rule, context or RuleContext())

    @staticmethod
    def _build(name: str, factory: Callable[..., Any], args: Sequence[Any]) -> Any:
        try:
            return factory(*args)
        except TypeError as e:
            raise RuleArgumentError(
                f"Invalid arguments for rule '{name}': {e}",
                details={"rule": name, "args": list(args)},
                cause=e,
            ) from e

    def copy(self) -> RuleRegistry:
        """Independent registry with the same registrations."""
        other = type(self)()
        other._validators = dict(self._validators)
        other._sanitizers = dict(self._sanitizers)
        return other

    def __contains__(self, name: str) -> bool:
        """Support 'name in registry' syntax."""
        return self.exists_rule(name)

    def __len__(self) -> int:
        """Count of distinct registered names."""
        return len(self.list_names())

    def __repr__(self) -> str:
        return (
            f"RuleRegistry(validators={len(self._validators)}, "
            f"sanitizers={len(self._sanitizers)})"
        )


_default_registry: RuleRegistry | None = None


def get_default_registry() -> RuleRegistry:
    """Process-wide registry with the built-in rules, created on first use."""
    global _default_registry
    if _default_registry is None:
        _default_registry = RuleRegistry.with_builtins()
    return _default_registry


def reset_default_registry() -> None:
    """Drop custom registrations on the default registry (mainly for tests)."""
    global _default_registry
    _default_registry = None
