"""Small helpers for composing plain functions."""

from collections.abc import Callable
from typing import Any


def pipe(value: Any, *functions: Callable[[Any], Any]) -> Any:
    """Pass a value through functions, left to right.

    Example:
        ```python
        assert pipe(10, lambda x: x**2, lambda x: x + 1) == 101
        ```

    """
    for function in functions:
        value = function(value)
    return value


def compose[T, U, R](outer: Callable[[U], R], inner: Callable[[T], U]) -> Callable[[T], R]:
    """Compose two functions: `compose(f, g)(x) == f(g(x))`."""
    return lambda value: outer(inner(value))


def then[T, U, R](first: Callable[[T], U], second: Callable[[U], R]) -> Callable[[T], R]:
    """Chain two functions: `then(f, g)(x) == g(f(x))`."""
    return compose(second, first)


def curry(function: Callable[..., Any], argument: Any) -> Callable[..., Any]:
    """Bind the last positional argument of a function.

    Example:
        ```python
        multiply_by_3 = curry(lambda x, n: x * n, 3)
        assert multiply_by_3(3) == 9
        assert curry(multiply_by_3, 2)() == 6
        ```

    """
    return lambda *arguments: function(*arguments, argument)


def if_none[T](value: T | None, fallback: T) -> T:
    """Return `fallback` when `value` is None."""
    return fallback if value is None else value


def if_match[T](value: T, expected: T, function: Callable[[T], T]) -> T:
    """Apply `function` only when `value` equals `expected`."""
    return function(value) if value == expected else value
