# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Model - data object with declarative, scenario-aware validation.

Attributes are the pydantic fields a subclass declares. ``rules()`` returns
the rule table (see ``ruleform.rules.table``), and ``validate()`` runs it:

    class Signup(Model):
        username: str | None = None
        email: str | None = None

        def attribute_labels(self):
            return {"email": "e-mail"}

        def rules(self):
            return [
                [["username", "email"], "trim", "required"],
                ["email", "email", "!lowercase"],
                ["username", {"length": [3, 20]}, {"scenarios": ["signup"]}],
            ]

    form = Signup()
    form.set_attributes({"username": " tom ", "email": "Tom@Site.com"})
    if not form.validate():
        print(form.get_first_errors())
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, PrivateAttr

from ruleform.config import RulesConfig
from ruleform.registry import RuleRegistry, get_default_registry
from ruleform.rules import (
    RuleGroup,
    RuleGroupInterpreter,
    active_groups,
    compile_rules,
    is_attribute_required,
)
from ruleform.utils import camel_to_words

from .directives import collect_directives
from .error_store import ErrorStore

__all__ = ("AFTER_VALIDATE", "BEFORE_VALIDATE", "Model", "ModelEvent")

logger = logging.getLogger(__name__)

BEFORE_VALIDATE = "before_validate"
AFTER_VALIDATE = "after_validate"

ModelEventHandler = Callable[["ModelEvent"], None]


@dataclass
class ModelEvent:
    """Passed to validation event handlers.

    Attributes:
        name: BEFORE_VALIDATE or AFTER_VALIDATE.
        model: Model being validated.
        is_valid: Set to False in a before-handler to cancel validation.
    """

    name: str
    model: Model
    is_valid: bool = True


class Model(BaseModel):
    """Base class for validated data models.

    Class-level settings:
        rules_config: Label/placeholder/scenario defaults.
        rule_registry: Registry for named rules. None uses the default one.
        directive_handlers: Directive name -> method name, filled from
            @directive methods when the subclass is created.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    rules_config: ClassVar[RulesConfig] = RulesConfig()
    rule_registry: ClassVar[RuleRegistry | None] = None
    directive_handlers: ClassVar[dict[str, str]] = {}

    _errors: ErrorStore = PrivateAttr(default_factory=ErrorStore)
    _scenario: str | None = PrivateAttr(default=None)
    _is_loaded: bool = PrivateAttr(default=False)
    _event_handlers: dict[str, list[ModelEventHandler]] = PrivateAttr(
        default_factory=dict
    )

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        cls.directive_handlers = collect_directives(cls)

    def __copy__(self) -> Model:
        """Shallow copy with its own error store and handler lists."""
        clone = super().__copy__()
        clone._errors = self._errors.copy()
        clone._event_handlers = {
            event: list(handlers) for event, handlers in self._event_handlers.items()
        }
        return clone

    # -- declarations (override in subclasses) ------------------------------

    def rules(self) -> Sequence[RuleGroup | Sequence[Any]]:
        """Rule table for this model. Empty by default."""
        return []

    def attribute_labels(self) -> dict[str, str]:
        return {}

    def attribute_hints(self) -> dict[str, str]:
        return {}

    def safe_attributes(self) -> list[str]:
        """Attributes accepted by bulk assignment. All attributes by default."""
        return self.attributes()

    # -- attributes ---------------------------------------------------------

    def attributes(self) -> list[str]:
        """Declared attribute names in declaration order."""
        return list(type(self).model_fields)

    def get_attribute_label(self, attribute: str) -> str:
        labels = self.attribute_labels()
        if attribute in labels:
            return labels[attribute]
        return self.generate_attribute_label(attribute)

    @staticmethod
    def generate_attribute_label(name: str) -> str:
        """'firstName' -> 'First Name', 'underscore_style' -> 'Underscore Style'."""
        return camel_to_words(name)

    def get_attribute_hint(self, attribute: str) -> str:
        return self.attribute_hints().get(attribute, "")

    def is_attribute_safe(self, attribute: str) -> bool:
        return attribute in self.safe_attributes()

    def get_attributes(
        self, only: Iterable[str] = (), exclude: Iterable[str] = ()
    ) -> dict[str, Any]:
        """Attribute values, limited to only (if given) and minus exclude."""
        names = list(only) or self.attributes()
        excluded = set(exclude)
        return {name: getattr(self, name) for name in names if name not in excluded}

    def set_attributes(self, values: Mapping[str, Any], safe_only: bool = True) -> None:
        """Bulk-assign values. Names outside the allowed set are ignored."""
        allowed = set(self.safe_attributes() if safe_only else self.attributes())
        for name, value in values.items():
            if name in allowed:
                setattr(self, name, value)
            elif safe_only:
                self.on_unsafe_attribute(name, value)

    def on_unsafe_attribute(self, name: str, value: Any) -> None:
        """Called for each value dropped by a safe-only bulk assignment."""
        logger.debug(
            f"Ignored unsafe attribute '{name}' on {type(self).__name__} "
            f"(scenario={self.scenario!r})"
        )

    # -- scenario -----------------------------------------------------------

    @property
    def scenario(self) -> str:
        if self._scenario is None:
            return self.rules_config.default_scenario
        return self._scenario

    @scenario.setter
    def scenario(self, value: str) -> None:
        self._scenario = value

    def get_scenario(self) -> str:
        return self.scenario

    def set_scenario(self, value: str) -> None:
        self._scenario = value

    # -- loading ------------------------------------------------------------

    def form_name(self) -> str:
        """Key under which load() looks for this model's data."""
        return type(self).__name__

    @property
    def is_loaded(self) -> bool:
        return self._is_loaded

    def load(self, data: Mapping[str, Any], form_name: str | None = None) -> bool:
        """Assign safe attributes from data[form_name], or from data itself if ''.

        Returns:
            True if data for this model was found and assigned.
        """
        scope = self.form_name() if form_name is None else form_name
        if scope == "" and data:
            self.set_attributes(data)
            self._is_loaded = True
        elif scope and scope in data:
            self.set_attributes(data[scope])
            self._is_loaded = True
        else:
            self._is_loaded = False
        return self._is_loaded

    @staticmethod
    def load_multiple(
        models: Sequence[Model],
        data: Mapping[str, Any] | Sequence[Any],
        form_name: str | None = None,
    ) -> bool:
        """Load tabular data into models by position.

        With form_name '' the i-th entry of data goes to the i-th model,
        otherwise data[form_name][i] does. Returns True if any model loaded.
        """
        if not models:
            return False
        if form_name is None:
            form_name = models[0].form_name()

        rows = data if form_name == "" else data.get(form_name, ())  # type: ignore[union-attr]
        success = False
        for i, model in enumerate(models):
            row = rows[i] if i < len(rows) else None
            if row:
                model.load(row, "")
                success = True
        return success

    # -- errors -------------------------------------------------------------

    @property
    def error_store(self) -> ErrorStore:
        return self._errors

    @property
    def errors(self) -> dict[str, list[str]]:
        return self._errors.all()

    @property
    def first_errors(self) -> dict[str, str]:
        return self._errors.firsts()

    def has_errors(self, attribute: str | None = None) -> bool:
        return self._errors.has(attribute)

    def get_errors(self, attribute: str | None = None) -> Any:
        """All errors as {attr: [messages]}, or one attribute's list."""
        if attribute is None:
            return self._errors.all()
        return self._errors.get(attribute)

    def get_first_errors(self) -> dict[str, str]:
        return self._errors.firsts()

    def get_first_error(self, attribute: str) -> str | None:
        return self._errors.first(attribute)

    def add_error(self, attribute: str, error: str = "") -> None:
        self._errors.add(attribute, error)

    def add_errors(self, items: Mapping[str, str | Iterable[str]]) -> None:
        self._errors.add_many(items)

    def clear_errors(self, attribute: str | None = None) -> None:
        self._errors.clear(attribute)

    # -- rules --------------------------------------------------------------

    def get_rule_registry(self) -> RuleRegistry:
        if self.rule_registry is None:
            return get_default_registry()
        return self.rule_registry

    def get_directive_handler(self, name: str) -> Callable[..., Any] | None:
        """Bound @directive method for name, or None."""
        method_name = type(self).directive_handlers.get(name)
        if method_name is None:
            return None
        return getattr(self, method_name)

    def get_active_rules(self, attribute: str | None = None) -> list[RuleGroup]:
        """Rule groups active in the current scenario, optionally for one attribute.

        The whole table is compiled before filtering, so a malformed group
        raises RuleArgumentError even when its scenarios are inactive.
        """
        return active_groups(compile_rules(self.rules()), self.scenario, attribute)

    def is_attribute_required(self, attribute: str) -> bool:
        """Static hint for form rendering; see ruleform.rules.introspect."""
        return is_attribute_required(self.get_active_rules(attribute), attribute)

    # -- events -------------------------------------------------------------

    def on(self, event: str, handler: ModelEventHandler) -> None:
        """Attach a handler for BEFORE_VALIDATE or AFTER_VALIDATE."""
        if event not in (BEFORE_VALIDATE, AFTER_VALIDATE):
            raise ValueError(f"Unknown model event: {event!r}")
        self._event_handlers.setdefault(event, []).append(handler)

    def _trigger(self, name: str) -> ModelEvent:
        event = ModelEvent(name=name, model=self)
        for handler in self._event_handlers.get(name, ()):
            handler(event)
        return event

    def before_validate(self) -> bool:
        """Runs before rules. Return False to cancel validation."""
        return self._trigger(BEFORE_VALIDATE).is_valid

    def after_validate(self) -> None:
        """Runs after a successful validation."""
        self._trigger(AFTER_VALIDATE)

    # -- validation ---------------------------------------------------------

    def validate(  # type: ignore[override]
        self,
        attribute_names: str | Iterable[str] | None = None,
        clear_errors: bool = True,
    ) -> bool:
        """Run active rules over attribute_names (all attributes if omitted).

        A single attribute may be passed as a plain name.

        Returns:
            True if no errors were recorded. False on errors or when
            before_validate() cancels (errors may then be empty).

        Raises:
            ConfigurationError: The rule table is malformed.
        """
        if clear_errors:
            self.clear_errors()
        names = _attribute_list(attribute_names) or self.attributes()

        if not self.before_validate():
            logger.debug(f"Validation of {type(self).__name__} cancelled")
            return False

        interpreter = RuleGroupInterpreter(
            self, registry=self.get_rule_registry(), config=self.rules_config
        )
        wanted = set(names)
        for group in self.get_active_rules():
            attributes = [name for name in group.attributes if name in wanted]
            if not attributes:
                continue
            if not interpreter.execute(attributes, group):
                break

        if self.has_errors():
            return False
        self.after_validate()
        return True

    @classmethod
    def validate_multiple(
        cls,
        models: Iterable[Model],
        attribute_names: str | Iterable[str] | None = None,
    ) -> bool:
        """Validate every model; True only if all pass."""
        names = _attribute_list(attribute_names)
        valid = True
        for model in models:
            valid = model.validate(names) and valid
        return valid

    # -- mapping access -----------------------------------------------------

    def __getitem__(self, attribute: str) -> Any:
        if attribute not in type(self).model_fields:
            raise KeyError(attribute)
        return getattr(self, attribute)

    def __setitem__(self, attribute: str, value: Any) -> None:
        if attribute not in type(self).model_fields:
            raise KeyError(attribute)
        setattr(self, attribute, value)

    def __delitem__(self, attribute: str) -> None:
        """Reset attribute to None."""
        self[attribute] = None

    def __contains__(self, attribute: object) -> bool:
        """True if attribute is declared and not None."""
        return (
            isinstance(attribute, str)
            and attribute in type(self).model_fields
            and getattr(self, attribute) is not None
        )


def _attribute_list(names: str | Iterable[str] | None) -> list[str]:
    if names is None:
        return []
    if isinstance(names, str):
        return [names]
    return list(names)
