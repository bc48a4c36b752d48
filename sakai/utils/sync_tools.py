"""Run coroutines from synchronous entry points (click commands)."""

from __future__ import annotations

import asyncio
import functools
from typing import TYPE_CHECKING, ParamSpec, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine
    from typing import Any

P = ParamSpec("P")
T = TypeVar("T")


def run_(async_function: Callable[P, Coroutine[Any, Any, T]]) -> Callable[P, T]:
    """Wrap ``async_function`` so that calling it runs it to completion on a new event loop."""

    @functools.wraps(async_function)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        return asyncio.run(async_function(*args, **kwargs))

    return wrapper
