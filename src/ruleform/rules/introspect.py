# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Static required-ness check for form building. Nothing is executed."""

from __future__ import annotations

from collections.abc import Iterable

from .table import RuleGroup

__all__ = ("REQUIRED_RULE", "is_attribute_required")

REQUIRED_RULE = "required"


def is_attribute_required(groups: Iterable[RuleGroup], attribute: str) -> bool:
    """True if a group covering attribute has a bare `required` and no `when`.

    A `when` block makes required-ness depend on runtime values, so such a
    group never counts, even if `required` sits outside the `when` body.
    Keyed (`{"required": [...]}`) forms do not count either.
    """
    for group in groups:
        if attribute not in group.attributes:
            continue
        if group.block.when is None and group.block.has_bare(REQUIRED_RULE):
            return True
    return False
