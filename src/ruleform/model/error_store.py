# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Per-attribute error lists owned by a Model."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

__all__ = ("ErrorSnapshot", "ErrorStore")

ErrorSnapshot = tuple[tuple[str, tuple[str, ...]], ...]


class ErrorStore:
    """Attribute name -> ordered error messages.

    Messages keep insertion order and duplicates are allowed. An attribute
    without messages is simply absent: there is no observable difference
    between "never had errors" and "has an empty list".
    """

    __slots__ = ("_errors",)

    def __init__(self) -> None:
        self._errors: dict[str, list[str]] = {}

    def add(self, attribute: str, message: str = "") -> None:
        self._errors.setdefault(attribute, []).append(message)

    def add_many(self, items: Mapping[str, str | Iterable[str]]) -> None:
        """Add errors from {attr: message} or {attr: [messages]}."""
        for attribute, messages in items.items():
            if isinstance(messages, str):
                self.add(attribute, messages)
                continue
            for message in messages:
                self.add(attribute, message)

    def get(self, attribute: str) -> list[str]:
        return list(self._errors.get(attribute, ()))

    def all(self) -> dict[str, list[str]]:
        return {attr: list(messages) for attr, messages in self._errors.items()}

    def first(self, attribute: str) -> str | None:
        messages = self._errors.get(attribute)
        return messages[0] if messages else None

    def firsts(self) -> dict[str, str]:
        """First message per attribute, skipping attributes whose first is blank."""
        return {
            attr: messages[0] for attr, messages in self._errors.items() if messages[0]
        }

    def has(self, attribute: str | None = None) -> bool:
        if attribute is None:
            return bool(self._errors)
        return attribute in self._errors

    def clear(self, attribute: str | None = None) -> None:
        if attribute is None:
            self._errors.clear()
        else:
            self._errors.pop(attribute, None)

    def copy(self) -> ErrorStore:
        """Independent store holding the same messages."""
        other = ErrorStore()
        other._errors = {attr: list(messages) for attr, messages in self._errors.items()}
        return other

    def snapshot(self) -> ErrorSnapshot:
        """Immutable copy of the current state, for change detection."""
        return tuple((attr, tuple(messages)) for attr, messages in self._errors.items())

    def __contains__(self, attribute: object) -> bool:
        return attribute in self._errors

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._errors))

    def __len__(self) -> int:
        """Number of attributes with errors."""
        return len(self._errors)

    def __repr__(self) -> str:
        return f"ErrorStore({self._errors!r})"
