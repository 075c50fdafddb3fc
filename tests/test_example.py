import pytest

from flagbase.example import calculate, greet


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Alice", "Hello, Alice!"),
        ("Bob", "Hello, Bob!"),
        ("", "Hello, !"),
    ],
)
def test_greet(name, expected):
    assert greet(name) == expected


def test_calculate_add():
    assert calculate(5, 3, "add") == 8


def test_calculate_subtract():
    assert calculate(10, 4, "subtract") == 6


def test_calculate_multiply():
    assert calculate(6, 7, "multiply") == 42


def test_calculate_divide():
    assert calculate(20, 4, "divide") == 5


def test_calculate_divide_by_zero():
    with pytest.raises(ZeroDivisionError):
        calculate(10, 0, "divide")


def test_calculate_invalid_operation():
    with pytest.raises(ValueError):
        calculate(5, 3, "invalid")


@pytest.mark.parametrize(
    "a, b, operation, expected",
    [
        (5, 3, "add", 8),
        (-5, 3, "add", -2),
        (10, 4, "subtract", 6),
        (6, 7, "multiply", 42),
        (20, 4, "divide", 5),
    ],
)
def test_calculate_all_operations(a, b, operation, expected):
    assert calculate(a, b, operation) == expected


@pytest.mark.parametrize(
    "a, b, operation, error",
    [
        (10, 0, "divide", ZeroDivisionError),
        (5, 3, "modulo", ValueError),
    ],
)
def test_calculate_all_operations_errors(a, b, operation, error):
    with pytest.raises(error):
        calculate(a, b, operation)


def test_divide_truncates_toward_zero():
    assert calculate(-7, 2, "divide") == -(7 // 2)
    assert calculate(7, -2, "divide") == -(7 // 2)
    assert calculate(-7, -2, "divide") == 7 // 2