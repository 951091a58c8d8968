"""
Tracing for repository operations.

Spans go to whatever tracer provider the embedding process installs; without
one the OpenTelemetry API hands out no-op spans.
"""

import functools
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

from opentelemetry import trace

tracer = trace.get_tracer("photostore")

P = ParamSpec("P")
R = TypeVar("R")


def traced(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
    """Run a coroutine method inside a span named ``Class.method``."""
    name = func.__qualname__

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        with tracer.start_as_current_span(name):
            return await func(*args, **kwargs)

    return wrapper
