# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Rule table DSL: parsing into RuleGroups and scenario/attribute filtering.

A rule table is a list of raw groups. Each raw group is a list or tuple whose
first item names the attribute(s) and whose remaining items are directives:

    [["email", "username"], "trim"]
    ["email", "required", {"length": [6, 80]}, "!lowercase"]
    ["username", {"length": lambda model: [6, 20]}, {"placeholders": {"name": "login"}}]
    [["phone", "email"], "required", "one"]
    ["age", "required", {"when": ["int", {"min": [18]}], "scenarios": ["signup"]}]

Item forms:
    str       bare directive; "!name" is sanitize-only; "one" is the gate marker
    callable  inline directive, called as func(model, value, attribute)
    mapping   keyed entries in insertion order; reserved keys are modifiers,
              any other key is a directive whose value is its argument list
              (list/tuple) or a thunk func(model) returning one

Reserved keys: scenarios, placeholders, messages, one, when.
A bare "one" gates on any attribute and overrides a keyed {"one": attr}.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Union

from ruleform.errors import RuleArgumentError

__all__ = (
    "BareDirective",
    "Directive",
    "DirectiveBlock",
    "GATE_MARKER",
    "Gate",
    "InlineDirective",
    "NamedDirective",
    "RESERVED_KEYS",
    "RuleGroup",
    "SANITIZE_ONLY_PREFIX",
    "active_groups",
    "compile_rules",
    "parse_directives",
    "parse_rule_group",
)

SANITIZE_ONLY_PREFIX = "!"
GATE_MARKER = "one"
RESERVED_KEYS = frozenset({"scenarios", "placeholders", "messages", "one", "when"})


class Gate(Enum):
    """Gate value meaning 'stop at the first attribute that fails'."""

    ANY = "any"


@dataclass(frozen=True, slots=True)
class BareDirective:
    """Positional directive name, no arguments."""

    name: str


@dataclass(frozen=True, slots=True)
class NamedDirective:
    """Keyed directive: name plus argument tuple or a thunk producing one."""

    name: str
    args: tuple[Any, ...] | Callable[[Any], Sequence[Any]] = ()


@dataclass(frozen=True, slots=True)
class InlineDirective:
    """Anonymous callable: func(model, value, attribute)."""

    func: Callable[..., Any]


Directive = Union[BareDirective, NamedDirective, InlineDirective]


@dataclass(frozen=True, slots=True)
class DirectiveBlock:
    """Ordered directives plus the modifiers shared by all of them.

    Attributes:
        directives: Executed in declaration order for every attribute.
        messages: Rule name -> custom error message.
        placeholders: Message substitutions overriding the defaults.
        one: Gate.ANY, a specific attribute name, or None for no gate.
        when: Block run on the same attributes only if this one added no error.
    """

    directives: tuple[Directive, ...] = ()
    messages: Mapping[str, str] = field(default_factory=dict)
    placeholders: Mapping[str, Any] = field(default_factory=dict)
    one: Gate | str | None = None
    when: DirectiveBlock | None = None

    def has_bare(self, name: str) -> bool:
        """True if name appears as a positional (non-keyed) directive."""
        return any(
            isinstance(d, BareDirective) and d.name == name for d in self.directives
        )


@dataclass(frozen=True, slots=True)
class RuleGroup:
    """One entry of a rule table.

    Attributes:
        attributes: Declared attribute names, in declaration order.
        block: Directives and modifiers.
        scenarios: Scenarios the group is limited to; None means all.
    """

    attributes: tuple[str, ...]
    block: DirectiveBlock = field(default_factory=DirectiveBlock)
    scenarios: frozenset[str] | None = None

    def applies_to(self, scenario: str) -> bool:
        return self.scenarios is None or scenario in self.scenarios

    def covers(self, attributes: Iterable[str]) -> bool:
        """True if at least one of attributes is declared by this group."""
        return not set(self.attributes).isdisjoint(attributes)


def parse_rule_group(raw: RuleGroup | Sequence[Any]) -> RuleGroup:
    """Parse one raw group. RuleGroup instances pass through.

    Raises:
        RuleArgumentError: If the group shape or a static argument is invalid.
    """
    if isinstance(raw, RuleGroup):
        return raw
    if not isinstance(raw, (list, tuple)) or not raw:
        raise RuleArgumentError(
            "Rule group must be a non-empty list or tuple",
            details={"group": repr(raw)},
        )
    attributes = _parse_attributes(raw[0])
    block, scenarios = _parse_block(raw[1:], allow_scenarios=True)
    return RuleGroup(attributes=attributes, block=block, scenarios=scenarios)


def parse_directives(items: Sequence[Any] | Mapping[str, Any]) -> DirectiveBlock:
    """Parse a directive list without leading attributes (a `when` body)."""
    block, _ = _parse_block(_as_items(items), allow_scenarios=False)
    return block


def compile_rules(table: Iterable[RuleGroup | Sequence[Any]]) -> tuple[RuleGroup, ...]:
    """Parse a whole rule table, keeping declaration order."""
    return tuple(parse_rule_group(raw) for raw in table)


def active_groups(
    groups: Iterable[RuleGroup],
    scenario: str,
    attributes: str | Iterable[str] | None = None,
) -> list[RuleGroup]:
    """Groups active under scenario, optionally limited to ones covering attributes.

    Kept groups have their scenario restriction stripped. Declaration order is
    preserved. Groups are only selected here; narrowing each group's attribute
    set is up to the caller.
    """
    wanted: set[str] | None = None
    if attributes:
        wanted = {attributes} if isinstance(attributes, str) else set(attributes)

    active = []
    for group in groups:
        if group.scenarios is not None:
            if scenario not in group.scenarios:
                continue
            group = replace(group, scenarios=None)
        if wanted is not None and not group.covers(wanted):
            continue
        active.append(group)
    return active


def _parse_attributes(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple, set, frozenset)) and all(
        isinstance(v, str) for v in value
    ):
        # dict.fromkeys drops duplicates but keeps order
        return tuple(dict.fromkeys(value))
    raise RuleArgumentError(
        "Rule group attributes must be a name or a list of names",
        details={"attributes": repr(value)},
    )


def _parse_scenarios(value: Any) -> frozenset[str]:
    if isinstance(value, str):
        return frozenset({value})
    if isinstance(value, Iterable):
        return frozenset(value)
    raise RuleArgumentError(
        "scenarios must be a name or a list of names",
        details={"scenarios": repr(value)},
    )


def _parse_gate(value: Any) -> Gate | str | None:
    if value is None or isinstance(value, (Gate, str)):
        return value
    return Gate.ANY


def _parse_args(name: str, value: Any) -> tuple[Any, ...] | Callable[[Any], Sequence[Any]]:
    if isinstance(value, (list, tuple)):
        return tuple(value)
    if callable(value):
        return value
    raise RuleArgumentError(
        f"Arguments for rule '{name}' must be a list or tuple",
        details={"rule": name, "args": repr(value)},
    )


def _as_items(value: Any) -> Sequence[Any]:
    if isinstance(value, (str, Mapping)) or callable(value):
        return [value]
    if isinstance(value, (list, tuple)):
        return value
    raise RuleArgumentError(
        "Directive list must be a list or tuple",
        details={"directives": repr(value)},
    )


def _parse_block(
    items: Sequence[Any], *, allow_scenarios: bool
) -> tuple[DirectiveBlock, frozenset[str] | None]:
    directives: list[Directive] = []
    messages: dict[str, str] = {}
    placeholders: dict[str, Any] = {}
    one: Gate | str | None = None
    bare_gate = False
    when: DirectiveBlock | None = None
    scenarios: frozenset[str] | None = None

    for item in items:
        if isinstance(item, str):
            if item == GATE_MARKER:
                bare_gate = True
            else:
                directives.append(BareDirective(item))
        elif isinstance(item, Mapping):
            for key, value in item.items():
                if not isinstance(key, str):
                    raise RuleArgumentError(
                        "Directive keys must be strings",
                        details={"key": repr(key)},
                    )
                if key == "scenarios":
                    if not allow_scenarios:
                        raise RuleArgumentError(
                            "scenarios is only allowed at rule group level"
                        )
                    scenarios = _parse_scenarios(value)
                elif key == "placeholders":
                    placeholders.update(value)
                elif key == "messages":
                    messages.update(value)
                elif key == "one":
                    one = _parse_gate(value)
                elif key == "when":
                    when, _ = _parse_block(_as_items(value), allow_scenarios=False)
                else:
                    directives.append(NamedDirective(key, _parse_args(key, value)))
        elif callable(item):
            directives.append(InlineDirective(item))
        else:
            raise RuleArgumentError(
                f"Unsupported directive: {item!r}",
                details={"directive": repr(item)},
            )

    block = DirectiveBlock(
        directives=tuple(directives),
        messages=messages,
        placeholders=placeholders,
        one=Gate.ANY if bare_gate else one,
        when=when,
    )
    return block, scenarios
