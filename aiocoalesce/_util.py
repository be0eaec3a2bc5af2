"""
AIOCoalesce utility module.

These functions are not part of the public API.
"""
import asyncio
from typing import Any, Optional


def resolve_loop(loop: Optional[asyncio.AbstractEventLoop] = None
                 ) -> asyncio.AbstractEventLoop:
    """
    Get the event loop to schedule deferred work on.

    :param loop: Explicit event loop to use (optional)
    :return: `loop` if given, otherwise the currently running event loop
    :raises RuntimeError: If no loop was given and none is running
    """
    if loop is not None:
        return loop
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        raise RuntimeError(
            "No running event loop; pass 'loop' or call from a coroutine"
        ) from None


def check_callable(**kwargs: Any):
    """
    Check that parameter values are callable. Multiple parameters can be
    checked at once.

    :param kwargs: Parameter names mapped to their values
    :raises TypeError: If a parameter value is not callable
    """
    for key, value in kwargs.items():
        if not callable(value):
            raise TypeError(
                f"'{key}' must be callable, got {type(value).__name__}"
            )
