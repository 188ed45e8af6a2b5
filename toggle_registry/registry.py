from __future__ import annotations

import inspect
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Iterator, List, Mapping, Optional, Union

from toggle_registry import metrics
from toggle_registry.config import DEFAULT_PREFIX, load_env_toggles
from toggle_registry.exceptions import UndefinedToggle
from toggle_registry.logger import get_logger


logger = get_logger()


@dataclass(frozen=True)
class Fixed:
    """A toggle backed by a constant value."""
    value: Any


@dataclass(frozen=True)
class Predicate:
    """A toggle computed on every evaluation from the caller's params."""
    fn: Callable[..., Any]


ToggleSource = Union[Fixed, Predicate]


@dataclass(frozen=True)
class ToggleDefinition:
    key: Hashable
    source: ToggleSource


def _as_source(value: Any) -> ToggleSource:
    if isinstance(value, (Fixed, Predicate)):
        return value
    if callable(value):
        return Predicate(value)
    return Fixed(value)


def _call_predicate(fn: Callable[..., Any], params: Dict[str, Any]) -> Any:
    """
    Invoke a predicate in the shape it was declared with:

    - a required positional parameter or *args: fn(params) with the whole mapping
    - **kwargs: fn(**params)
    - named parameters that are keyword-only or have defaults: fn(**subset),
      only the params it names; a predicate with no parameters gets fn()
    """
    try:
        parameters = list(inspect.signature(fn).parameters.values())
    except (TypeError, ValueError):
        # builtins without an introspectable signature
        return fn(params)

    P = inspect.Parameter
    if any(
        p.kind == P.VAR_POSITIONAL
        or (p.kind in (P.POSITIONAL_ONLY, P.POSITIONAL_OR_KEYWORD) and p.default is P.empty)
        for p in parameters
    ):
        return fn(params)
    if any(p.kind == P.VAR_KEYWORD for p in parameters):
        return fn(**params)
    names = {p.name for p in parameters if p.kind in (P.POSITIONAL_OR_KEYWORD, P.KEYWORD_ONLY)}
    return fn(**{k: v for k, v in params.items() if k in names})


class ToggleRegistry:
    """
    In-process registry of named feature toggles.

    Each key maps to either a fixed value or a predicate evaluated against the
    params given at the call site. Undefined keys raise UndefinedToggle instead
    of reading as falsy.

    Not thread-safe: scoped overrides snapshot and restore without locking, so
    a registry instance should only be mutated from one thread (typically test
    setup and teardown).
    """

    def __init__(self, toggles: Optional[Mapping[Hashable, Any]] = None):
        self._toggles: Dict[Hashable, ToggleDefinition] = {}
        for key, value in (toggles or {}).items():
            self.set(key, value)

    @classmethod
    def from_env(
        cls,
        prefix: str = DEFAULT_PREFIX,
        environ: Optional[Mapping[str, str]] = None,
        defaults: Optional[Mapping[Hashable, Any]] = None,
    ) -> "ToggleRegistry":
        """Build a registry from defaults, with environment toggles applied on top."""
        registry = cls(toggles=defaults)
        for key, value in load_env_toggles(prefix, environ).items():
            registry.set(key, value)
        return registry

    # ---- definitions ----
    def set(self, key: Hashable, value: Any, body: Optional[Callable[[], Any]] = None) -> Any:
        """
        Define `key` as a fixed value or a predicate.

        With `body`, the definition only holds while body() runs; the previous
        definition (or its absence) is restored afterwards and body's result
        is returned.
        """
        if body is not None:
            with self.override(key, value):
                return body()
        self._toggles[key] = ToggleDefinition(key, _as_source(value))
        logger.debug(f"Toggle {key} set to {self._toggles[key].source}")
        return None

    @contextmanager
    def override(self, key: Hashable, value: Any) -> Iterator["ToggleRegistry"]:
        """Temporarily redefine `key`, restoring the prior state on every exit path."""
        previous = self._toggles.get(key)
        metrics.record_override(key)
        self.set(key, value)
        try:
            yield self
        finally:
            if previous is None:
                self._toggles.pop(key, None)
                logger.debug(f"Toggle {key} override ended, back to undefined")
            else:
                self._toggles[key] = previous
                logger.debug(f"Toggle {key} override ended, restored {previous.source}")

    def definition(self, key: Hashable) -> Optional[ToggleDefinition]:
        return self._toggles.get(key)

    def is_defined(self, key: Hashable) -> bool:
        return key in self._toggles

    def keys(self) -> List[Hashable]:
        return list(self._toggles)

    def clear(self) -> None:
        self._toggles.clear()

    def __contains__(self, key: Hashable) -> bool:
        return self.is_defined(key)

    def __len__(self) -> int:
        return len(self._toggles)

    # ---- evaluation ----
    def _resolve(self, key: Hashable, check: str, params: Optional[Mapping[str, Any]], kwargs: Dict[str, Any]) -> Any:
        definition = self._toggles.get(key)
        if definition is None:
            logger.warning(f"Toggle {key} queried but not set")
            metrics.record_undefined_lookup(key)
            raise UndefinedToggle(key)

        source = definition.source
        if isinstance(source, Predicate):
            merged = dict(params or {})
            merged.update(kwargs)
            value = _call_predicate(source.fn, merged)
        else:
            value = source.value

        metrics.record_evaluation(key, check, bool(value))
        logger.debug(f"Toggle {key} resolved to {value!r}")
        return value

    def is_enabled(
        self,
        key: Hashable,
        true_result: Any = None,
        false_result: Any = None,
        *,
        params: Optional[Mapping[str, Any]] = None,
        callback: Optional[Callable[[], Any]] = None,
        **kwargs: Any,
    ) -> Any:
        """
        Evaluate `key`.

        Truthy: runs callback (if any) and returns true_result, or the resolved
        value itself when true_result is None. Falsy: returns false_result, or
        the resolved value. Extra keyword arguments are merged into params;
        params named key, true_result, false_result, params or callback collide
        with this signature and must go through the params mapping.
        """
        value = self._resolve(key, "enabled", params, kwargs)
        if value:
            if callback is not None:
                callback()
            return true_result if true_result is not None else value
        return false_result if false_result is not None else value

    def is_disabled(
        self,
        key: Hashable,
        true_result: Any = None,
        false_result: Any = None,
        *,
        params: Optional[Mapping[str, Any]] = None,
        callback: Optional[Callable[[], Any]] = None,
        **kwargs: Any,
    ) -> Any:
        """
        Inverse of is_enabled. The callback fires when the toggle is falsy, and
        without substitutes the result is the boolean negation of the resolved
        value (not the value itself).
        """
        value = self._resolve(key, "disabled", params, kwargs)
        if value:
            return false_result if false_result is not None else not value
        if callback is not None:
            callback()
        return true_result if true_result is not None else not value
