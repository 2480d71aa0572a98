# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Validation behaviour settings shared by a model class."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

__all__ = ("DEFAULT_SCENARIO", "RulesConfig")

DEFAULT_SCENARIO = "default"


class RulesConfig(BaseModel):
    """Configuration for rule execution on a Model class.

    Attributes:
        use_labels_as_placeholders: Inject the attribute label as the
            ``name`` placeholder when a group does not set one.
        default_scenario: Scenario a fresh model starts in.
        fallback_label: ``name`` placeholder used when no label applies.
    """

    model_config = ConfigDict(frozen=True)

    use_labels_as_placeholders: bool = Field(default=True)
    default_scenario: str = Field(default=DEFAULT_SCENARIO, min_length=1)
    fallback_label: str = Field(default="value")
