import pytest

from toggle_registry import ToggleRegistry


@pytest.fixture
def registry():
    """Registry pre-loaded with a truthy, a falsy and a parameterized toggle."""
    return ToggleRegistry(
        toggles={
            "enabled_toggle": True,
            "disabled_toggle": False,
            "is_foo_user": lambda params: params.get("user_email") == "foo@example.com",
        }
    )
