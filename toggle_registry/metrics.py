from __future__ import annotations

from typing import Hashable

from prometheus_client import CollectorRegistry, Counter
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest


_registry = CollectorRegistry()

TOGGLE_EVALUATIONS = Counter(
    "toggle_evaluations_total",
    "Toggle evaluations by check kind and truthiness of the resolved value",
    ["toggle", "check", "outcome"],
    registry=_registry,
)
TOGGLE_UNDEFINED_LOOKUPS = Counter(
    "toggle_undefined_lookups_total",
    "Lookups of toggles that have no definition",
    ["toggle"],
    registry=_registry,
)
TOGGLE_OVERRIDES = Counter(
    "toggle_overrides_total",
    "Scoped toggle overrides entered",
    ["toggle"],
    registry=_registry,
)


def record_evaluation(key: Hashable, check: str, truthy: bool) -> None:
    TOGGLE_EVALUATIONS.labels(
        toggle=str(key), check=check, outcome="true" if truthy else "false"
    ).inc()


def record_undefined_lookup(key: Hashable) -> None:
    TOGGLE_UNDEFINED_LOOKUPS.labels(toggle=str(key)).inc()


def record_override(key: Hashable) -> None:
    TOGGLE_OVERRIDES.labels(toggle=str(key)).inc()


def get_sample_value(name: str, labels: dict) -> float:
    """Current value of a sample in the toggle metrics registry (0.0 if absent)."""
    value = _registry.get_sample_value(name, labels)
    return value if value is not None else 0.0


def render_latest() -> bytes:
    """Text exposition of the toggle metrics, served as CONTENT_TYPE_LATEST."""
    return generate_latest(_registry)


__all__ = [
    "CONTENT_TYPE_LATEST",
    "record_evaluation",
    "record_undefined_lookup",
    "record_override",
    "get_sample_value",
    "render_latest",
]
