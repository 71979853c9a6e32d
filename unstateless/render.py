"""Render phase tracking.

Consumers that turn store reads into re-renders mark their render functions
with the render phase. While it is active, shared state must be created with
an explicit key: a generated key would change on every render and the value
would never be found again.

Usage:
    with render_phase():
        value, set_value = shared_state(0, key="counter")()
"""

from contextlib import contextmanager
from contextvars import ContextVar
from functools import wraps
from typing import Any, Callable


_rendering: ContextVar[bool] = ContextVar('rendering', default=False)


def is_render_phase() -> bool:
    """Check if currently inside a render function."""
    return _rendering.get()


@contextmanager
def render_phase():
    """Context manager marking the enclosed code as render code."""
    token = _rendering.set(True)
    try:
        yield
    finally:
        _rendering.reset(token)


def component(func: Callable[..., Any]) -> Callable[..., Any]:
    """
    Mark a function as a render function.

    Every call runs inside render_phase(), so anonymous shared state created
    in its body raises InvalidIdentityError.

    Usage:
        @component
        def Counter(props):
            count, set_count = shared_state(0, key="count")()
            return f"Count: {count}"
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        with render_phase():
            return func(*args, **kwargs)

    wrapper._unstateless_component = True
    wrapper._component_name = func.__name__
    return wrapper


__all__ = ["is_render_phase", "render_phase", "component"]
