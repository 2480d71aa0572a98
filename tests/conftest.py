# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Shared model fixtures."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import PrivateAttr

from ruleform.model import Model, directive
from ruleform.registry import reset_default_registry


class FooModel(Model):
    """Model whose rule table is set per test."""

    username: Any = None
    email: Any = None
    age: Any = None
    password: Any = None

    _rule_table: list = PrivateAttr(default_factory=list)

    def rules(self):
        return self._rule_table

    def safe_attributes(self):
        return ["username", "email", "age"]

    def attribute_labels(self):
        return {"email": "e-mail", "username": "username"}

    @directive
    def custom_filter(self, value, attribute, punctuation=""):
        if not self.has_errors():
            setattr(self, attribute, f"{value}{punctuation}")

    @directive
    def custom_validate(self, value, attribute):
        if value == "" or not isinstance(value, str):
            return
        label = self.attribute_labels().get(attribute, "value")
        self.add_error(attribute, f"{label} must be valid")


class Speaker(Model):
    firstName: Any = None
    lastName: Any = None
    customLabel: Any = None
    underscore_style: Any = None

    def attribute_labels(self):
        return {"customLabel": "This is the custom label"}


class Singer(Model):
    firstName: Any = None
    lastName: Any = None
    test: Any = None

    def rules(self):
        return [
            [["lastName"], {"default": ["Lennon"]}],
            [["lastName"], "required"],
            [
                ["test"],
                "required",
                {"when": [lambda model, value, attribute: None]},
            ],
        ]


@pytest.fixture
def make_foo():
    """Factory: FooModel with the given rule table and safe values assigned."""

    def _make(rules: list, **values: Any) -> FooModel:
        model = FooModel()
        model._rule_table = rules
        model.set_attributes(values)
        return model

    return _make


@pytest.fixture
def speaker() -> Speaker:
    return Speaker()


@pytest.fixture
def singer() -> Singer:
    return Singer()


@pytest.fixture(autouse=True)
def _fresh_default_registry():
    """Custom registrations on the default registry never leak between tests."""
    reset_default_registry()
    yield
    reset_default_registry()
