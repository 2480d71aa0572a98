# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""@directive - mark Model methods as inline rule handlers.

Example:
    class Signup(Model):
        username: str | None = None

        @directive
        def no_admin(self, value, attribute):
            if value == "admin":
                self.add_error(attribute, "reserved name")

        @directive("suffix")
        def add_suffix(self, value, attribute, suffix=""):
            if not self.has_errors():
                setattr(self, attribute, f"{value}{suffix}")

        def rules(self):
            return [["username", "no_admin", {"suffix": ["."]}]]

Handlers are collected once per class; the interpreter only looks names up
in that table.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar, overload

__all__ = ("collect_directives", "directive")

F = TypeVar("F", bound=Callable[..., Any])

_DIRECTIVE_ATTR = "_directive_name"


@overload
def directive(name: F) -> F: ...


@overload
def directive(name: str | None = None) -> Callable[[F], F]: ...


def directive(name: Any = None) -> Any:
    """Register a method as a directive handler.

    Args:
        name: Directive name used in rule tables. Defaults to the method name.
            May be omitted entirely: ``@directive``.

    Handler signature: ``(self, value, attribute, *args) -> None``. Handlers
    report problems through ``add_error`` and may assign new values.
    """

    def decorator(func: F) -> F:
        setattr(func, _DIRECTIVE_ATTR, name or func.__name__)
        return func

    if callable(name):
        func, name = name, None
        return decorator(func)
    return decorator


def collect_directives(cls: type) -> dict[str, str]:
    """Scan cls and its bases for handlers. Returns directive -> method name."""
    handlers: dict[str, str] = {}
    for klass in reversed(cls.__mro__):
        for attr_name, attr in vars(klass).items():
            if attr_name.startswith("__"):
                continue
            directive_name = getattr(attr, _DIRECTIVE_ATTR, None)
            if isinstance(directive_name, str):
                handlers[directive_name] = attr_name
    return handlers
