# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Model module: the validated data object and its error store.

Core exports:
- Model: pydantic base class with rules(), validate() and the error API
- ModelEvent, BEFORE_VALIDATE, AFTER_VALIDATE: validation hooks
- ErrorStore: per-attribute error lists
- directive: decorator for inline rule handlers
"""

from .base import AFTER_VALIDATE, BEFORE_VALIDATE, Model, ModelEvent
from .directives import collect_directives, directive
from .error_store import ErrorSnapshot, ErrorStore

__all__ = (
    "AFTER_VALIDATE",
    "BEFORE_VALIDATE",
    "ErrorSnapshot",
    "ErrorStore",
    "Model",
    "ModelEvent",
    "collect_directives",
    "directive",
)
