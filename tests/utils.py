"""Utils for tests."""

import asyncio
from collections.abc import AsyncIterator, Callable
from typing import Any


async def wait_and_return[T](result: T, delay: float = 0.001) -> T:
    """Return the result after a short suspension."""
    await asyncio.sleep(delay)
    return result


async def generate_numbers(count: int, start: int = 0) -> AsyncIterator[int]:
    """Generate consecutive numbers, suspending before each one."""
    for number in range(start, start + count):
        yield await wait_and_return(number)


class CallCounter:
    """Callable wrapper recording every call of the wrapped function."""

    def __init__(self, function: Callable[..., Any]) -> None:
        """Initialize the call counter."""
        self.function = function
        self.arguments: list[Any] = []

    @property
    def calls(self) -> int:
        """Number of calls so far."""
        return len(self.arguments)

    def __call__(self, *arguments: Any) -> Any:
        """Record the call and delegate to the wrapped function."""
        self.arguments.append(arguments[0] if len(arguments) == 1 else arguments)
        return self.function(*arguments)
