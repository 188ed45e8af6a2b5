import pytest

from toggle_registry import ToggleRegistry, UndefinedToggle
from toggle_registry import metrics


def _value(name, **labels):
    return metrics.get_sample_value(name, labels)


def test_evaluations_are_counted_by_check_and_outcome():
    registry = ToggleRegistry(toggles={"metrics_eval": True})
    before_enabled = _value("toggle_evaluations_total", toggle="metrics_eval", check="enabled", outcome="true")
    before_disabled = _value("toggle_evaluations_total", toggle="metrics_eval", check="disabled", outcome="true")

    registry.is_enabled("metrics_eval")
    registry.is_enabled("metrics_eval")
    registry.is_disabled("metrics_eval")

    assert _value("toggle_evaluations_total", toggle="metrics_eval", check="enabled", outcome="true") == before_enabled + 2
    assert _value("toggle_evaluations_total", toggle="metrics_eval", check="disabled", outcome="true") == before_disabled + 1


def test_undefined_lookups_are_counted():
    registry = ToggleRegistry()
    before = _value("toggle_undefined_lookups_total", toggle="metrics_missing")
    with pytest.raises(UndefinedToggle):
        registry.is_enabled("metrics_missing")
    assert _value("toggle_undefined_lookups_total", toggle="metrics_missing") == before + 1


def test_overrides_are_counted():
    registry = ToggleRegistry(toggles={"metrics_override": False})
    before = _value("toggle_overrides_total", toggle="metrics_override")
    registry.set("metrics_override", True, lambda: None)
    with registry.override("metrics_override", True):
        pass
    assert _value("toggle_overrides_total", toggle="metrics_override") == before + 2


def test_render_latest_exposes_toggle_metrics():
    ToggleRegistry(toggles={"metrics_render": 1}).is_enabled("metrics_render")
    body = metrics.render_latest()
    assert isinstance(body, bytes)
    assert b"toggle_evaluations_total" in body
    assert b'toggle="metrics_render"' in body
