"""
In-process feature toggle registry.

A process-wide default registry is created at import time; the module-level
helpers below delegate to it. Code that wants isolation constructs its own
ToggleRegistry and passes it around instead.
"""

from toggle_registry.exceptions import ToggleError, UndefinedToggle
from toggle_registry.logger import configure_logging, reset_logging
from toggle_registry.registry import (
    Fixed,
    Predicate,
    ToggleDefinition,
    ToggleRegistry,
    ToggleSource,
)

VERSION = "0.1.0"

default_registry = ToggleRegistry()


def set_toggle(key, value, body=None):
    return default_registry.set(key, value, body)


def override(key, value):
    return default_registry.override(key, value)


def is_enabled(key, true_result=None, false_result=None, **kwargs):
    return default_registry.is_enabled(key, true_result, false_result, **kwargs)


def is_disabled(key, true_result=None, false_result=None, **kwargs):
    return default_registry.is_disabled(key, true_result, false_result, **kwargs)


__all__ = [
    "VERSION",
    "Fixed",
    "Predicate",
    "ToggleDefinition",
    "ToggleRegistry",
    "ToggleSource",
    "ToggleError",
    "UndefinedToggle",
    "configure_logging",
    "reset_logging",
    "default_registry",
    "set_toggle",
    "override",
    "is_enabled",
    "is_disabled",
]
