# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for Model attribute, loading, error, event and rule helpers."""

from __future__ import annotations

import re
from typing import Any, ClassVar

import pytest

from ruleform.config import RulesConfig
from ruleform.model import AFTER_VALIDATE, BEFORE_VALIDATE, Model
from ruleform.registry import RuleContext, RuleRegistry, ValidatorRule, get_default_registry


class SlugRule(ValidatorRule):
    message = "{name} is not a slug"

    def check(self, value: Any, context: RuleContext) -> bool:
        return re.fullmatch(r"[a-z0-9-]+", str(value)) is not None


_slug_registry = RuleRegistry.with_builtins()
_slug_registry.register_validator("slug", SlugRule)


class Article(Model):
    slug: Any = None
    title: Any = None

    rule_registry: ClassVar[RuleRegistry] = _slug_registry

    def rules(self):
        return [["slug", "slug"], ["title", "required"]]

    def attribute_hints(self):
        return {"slug": "lowercase letters, digits and dashes"}


class Terse(Model):
    code: Any = None

    rules_config: ClassVar[RulesConfig] = RulesConfig(
        use_labels_as_placeholders=False,
        fallback_label="field",
        default_scenario="create",
    )

    def attribute_labels(self):
        return {"code": "Code"}

    def rules(self):
        return [
            ["code", "required"],
            ["code", {"length": [3, 3], "scenarios": "update"}],
        ]


# =============================================================================
# Attributes and labels
# =============================================================================


class TestAttributes:
    """Declared attributes, labels and bulk assignment."""

    def test_attributes_in_declaration_order(self, speaker):
        assert speaker.attributes() == [
            "firstName",
            "lastName",
            "customLabel",
            "underscore_style",
        ]

    def test_generated_and_custom_labels(self, speaker):
        """Labels come from attribute_labels() or are generated from the name."""
        assert speaker.get_attribute_label("firstName") == "First Name"
        assert speaker.get_attribute_label("underscore_style") == "Underscore Style"
        assert speaker.get_attribute_label("customLabel") == "This is the custom label"
        assert Model.generate_attribute_label("lastName") == "Last Name"

    def test_attribute_hints(self):
        article = Article()
        assert article.get_attribute_hint("slug") == "lowercase letters, digits and dashes"
        assert article.get_attribute_hint("title") == ""

    def test_get_attributes_only_and_exclude(self, speaker):
        speaker.firstName = "John"
        speaker.lastName = "Lennon"

        assert speaker.get_attributes(only=["firstName"]) == {"firstName": "John"}
        assert speaker.get_attributes(exclude=["customLabel", "underscore_style"]) == {
            "firstName": "John",
            "lastName": "Lennon",
        }

    def test_set_attributes_drops_unsafe(self, make_foo):
        """Safe-only assignment ignores attributes outside safe_attributes()."""
        model = make_foo([], username="tom", password="secret")

        assert model.username == "tom"
        assert model.password is None
        assert not model.is_attribute_safe("password")

    def test_set_attributes_unsafe_allowed(self, make_foo):
        model = make_foo([])
        model.set_attributes({"password": "secret", "unknown": 1}, safe_only=False)

        assert model.password == "secret"
        assert not hasattr(model, "unknown")

    def test_all_attributes_safe_by_default(self, speaker):
        speaker.set_attributes({"firstName": "John", "underscore_style": "x"})
        assert speaker.firstName == "John"
        assert speaker.underscore_style == "x"


# =============================================================================
# Loading
# =============================================================================


class TestLoad:
    """load() and load_multiple()."""

    def test_load_scoped_by_form_name(self, make_foo):
        model = make_foo([])

        assert model.load({"FooModel": {"username": "tom", "password": "x"}}) is True
        assert model.is_loaded
        assert model.username == "tom"
        assert model.password is None

    def test_load_unscoped(self, make_foo):
        model = make_foo([])

        assert model.load({"email": "tom@site.com"}, "") is True
        assert model.email == "tom@site.com"

    def test_load_missing_scope(self, make_foo):
        model = make_foo([])

        assert model.load({"Other": {"username": "tom"}}) is False
        assert not model.is_loaded
        assert model.username is None

    def test_load_empty_unscoped(self, make_foo):
        assert make_foo([]).load({}, "") is False

    def test_load_multiple_by_position(self, make_foo):
        first, second = make_foo([]), make_foo([])
        data = {"FooModel": [{"username": "tom"}, {"username": "jane"}]}

        assert Model.load_multiple([first, second], data) is True
        assert first.username == "tom"
        assert second.username == "jane"

    def test_load_multiple_unscoped_and_short_data(self, make_foo):
        first, second = make_foo([]), make_foo([])

        assert Model.load_multiple([first, second], [{"age": 30}], "") is True
        assert first.age == 30
        assert not second.is_loaded

    def test_load_multiple_nothing(self, make_foo):
        assert Model.load_multiple([], {"FooModel": []}) is False
        assert Model.load_multiple([make_foo([])], {"Other": []}) is False


# =============================================================================
# Errors
# =============================================================================


class TestErrors:
    """Error accessors on the model."""

    def test_add_and_read(self, make_foo):
        model = make_foo([])
        model.add_error("email", "e-mail error first")
        model.add_error("email", "e-mail error last")
        model.add_error("password", "password error first")

        assert model.has_errors()
        assert model.has_errors("email")
        assert not model.has_errors("username")
        assert model.get_errors("email") == ["e-mail error first", "e-mail error last"]
        assert model.get_errors("username") == []
        assert model.get_first_error("email") == "e-mail error first"
        assert model.get_first_error("username") is None
        assert model.get_first_errors() == {
            "email": "e-mail error first",
            "password": "password error first",
        }
        assert model.errors == model.get_errors()
        assert model.first_errors == model.get_first_errors()

    def test_add_errors(self, make_foo):
        model = make_foo([])
        model.add_errors({"email": "e-mail error", "password": ["a", "b"]})

        assert model.get_errors() == {"email": ["e-mail error"], "password": ["a", "b"]}

    def test_clear_errors(self, make_foo):
        model = make_foo([])
        model.add_errors({"email": "x", "password": "y"})

        model.clear_errors("email")
        assert model.get_errors() == {"password": ["y"]}
        model.clear_errors()
        assert not model.has_errors()

    def test_errors_are_per_instance(self, make_foo):
        first, second = make_foo([]), make_foo([])
        first.add_error("email", "x")
        assert not second.has_errors()

    @pytest.mark.parametrize("deep", [False, True])
    def test_copy_owns_its_errors(self, make_foo, deep):
        """A copy starts with the same errors but never writes into the original."""
        model = make_foo([["email", "required"]], email="tom@site.com")
        model.add_error("username", "taken")

        other = model.model_copy(deep=deep)
        other.email = None
        assert other.get_errors() == {"username": ["taken"]}
        assert other.validate() is False

        assert model.get_errors() == {"username": ["taken"]}
        assert other.get_errors() == {"email": ["e-mail must not be empty"]}

    def test_copy_owns_its_handlers(self, make_foo):
        seen = []
        model = make_foo([])
        model.on(AFTER_VALIDATE, lambda event: seen.append("original"))

        other = model.model_copy()
        other.on(AFTER_VALIDATE, lambda event: seen.append("copy"))

        assert model.validate() is True
        assert seen == ["original"]
        assert other.validate() is True
        assert seen == ["original", "original", "copy"]


# =============================================================================
# Scenarios and rules
# =============================================================================


class TestScenarioAndRules:
    """Scenario handling and rule introspection."""

    def test_scenario_default_and_assignment(self, make_foo):
        model = make_foo([])
        assert model.scenario == "default"

        model.set_scenario("signup")
        assert model.get_scenario() == "signup"
        model.scenario = "login"
        assert model.scenario == "login"

    def test_configured_default_scenario(self):
        terse = Terse()
        assert terse.scenario == "create"
        assert len(terse.get_active_rules()) == 1

        terse.scenario = "update"
        assert len(terse.get_active_rules()) == 2

    def test_get_active_rules_for_attribute(self, make_foo):
        model = make_foo(
            [
                [["email", "username"], "trim"],
                ["email", "email"],
                ["username", "required", {"scenarios": ["signup"]}],
            ]
        )

        assert [g.attributes for g in model.get_active_rules("username")] == [
            ("email", "username")
        ]
        model.scenario = "signup"
        active = model.get_active_rules("username")
        assert len(active) == 2
        assert all(g.scenarios is None for g in active)

    def test_is_attribute_required(self, make_foo, singer):
        model = make_foo(
            [
                [["email", "username"], "trim"],
                [["email", "username"], "required"],
                ["email", {"truncate": [100]}, "remove_tags"],
            ]
        )

        assert model.is_attribute_required("username")
        assert not model.is_attribute_required("age")
        assert singer.is_attribute_required("lastName")
        assert not singer.is_attribute_required("test")
        assert not singer.is_attribute_required("firstName")

    def test_sanitizer_default_then_required(self, singer):
        """default fills the value before required checks it."""
        assert singer.validate() is False
        assert singer.lastName == "Lennon"
        assert singer.get_errors() == {"test": ["value must not be empty"]}

    def test_labels_not_used_as_placeholders(self):
        terse = Terse()
        assert terse.validate() is False
        assert terse.get_errors() == {"code": ["field must not be empty"]}

    def test_class_registry(self):
        """A model-level registry serves rules the default registry lacks."""
        article = Article(slug="Not A Slug", title="Hello")

        assert not get_default_registry().exists_rule("slug")
        assert article.get_rule_registry() is _slug_registry
        assert article.validate() is False
        assert article.get_errors() == {"slug": ["value is not a slug"]}

        article.slug = "hello-world"
        assert article.validate() is True


# =============================================================================
# Events and batch validation
# =============================================================================


class TestEvents:
    """before/after validate hooks."""

    def test_before_validate_veto(self, make_foo):
        model = make_foo([["username", "required"]])
        model.on(BEFORE_VALIDATE, lambda event: setattr(event, "is_valid", False))

        assert model.validate() is False
        assert model.get_errors() == {}

    def test_after_validate_only_on_success(self, make_foo):
        seen = []
        model = make_foo([["username", "required"]])
        model.on(AFTER_VALIDATE, lambda event: seen.append(event.model))

        assert model.validate() is False
        assert seen == []

        model.username = "tom"
        assert model.validate() is True
        assert seen == [model]

    def test_unknown_event(self, make_foo):
        with pytest.raises(ValueError):
            make_foo([]).on("on_save", lambda event: None)

    def test_validate_multiple(self, make_foo):
        """Every model is validated even after a failure."""
        rules = [["username", "required"]]
        ok, bad, also_bad = make_foo(rules, username="tom"), make_foo(rules), make_foo(rules)

        assert Model.validate_multiple([ok, bad, also_bad]) is False
        assert bad.has_errors()
        assert also_bad.has_errors()
        assert Model.validate_multiple([ok]) is True


# =============================================================================
# Mapping access
# =============================================================================


class TestMappingAccess:
    """Item access over declared attributes."""

    def test_get_and_set_item(self, make_foo):
        model = make_foo([], username="tom")

        assert model["username"] == "tom"
        model["email"] = "tom@site.com"
        assert model.email == "tom@site.com"

    def test_undeclared_key(self, make_foo):
        model = make_foo([])
        with pytest.raises(KeyError):
            model["nope"]
        with pytest.raises(KeyError):
            model["nope"] = 1

    def test_del_item_resets_to_none(self, make_foo):
        model = make_foo([], username="tom")

        del model["username"]
        assert model.username is None
        assert "username" not in model
        with pytest.raises(KeyError):
            del model["nope"]

    def test_contains(self, make_foo):
        model = make_foo([], username="tom")

        assert "username" in model
        assert "email" not in model
        assert "nope" not in model
