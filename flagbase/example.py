"""Small demonstration helpers: greeting and integer arithmetic."""

from __future__ import annotations


def greet(name: str) -> str:
    """Return a simple greeting for ``name``."""
    return f"Hello, {name}!"


def _truncating_divide(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b >= 0) else -quotient


def calculate(a: int, b: int, operation: str) -> int:
    """Apply ``operation`` (add, subtract, multiply, divide) to ``a`` and ``b``.

    Division truncates toward zero. Raises ZeroDivisionError when dividing by
    zero and ValueError for an unknown operation.
    """
    if operation == "add":
        return a + b
    if operation == "subtract":
        return a - b
    if operation == "multiply":
        return a * b
    if operation == "divide":
        if b == 0:
            raise ZeroDivisionError("division by zero")
        return _truncating_divide(a, b)
    raise ValueError(f"unknown operation: {operation}")