from __future__ import annotations

import inspect
from typing import Any, Awaitable, Callable, Union

Step = Callable[[Any], Union[Any, Awaitable[Any]]]


def async_pipe(*steps: Step) -> Callable[[Any], Awaitable[Any]]:
    """
    Compose steps left to right into a single async callable.

    Each step receives the (awaited) result of the previous one. Steps may be
    sync or async. With no steps the composed callable returns its input.

    The first exception raised by a step propagates unchanged and no later
    step runs.

        pipeline = async_pipe(add1, multiply2)
        await pipeline(5)  # -> 12
    """
    for step in steps:
        if not callable(step):
            raise TypeError(f"async_pipe step is not callable: {step!r}")

    chain = tuple(steps)

    async def run(value: Any) -> Any:
        for step in chain:
            value = step(value)
            if inspect.isawaitable(value):
                value = await value
        return value

    return run
