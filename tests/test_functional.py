import pytest

from core.functional import Some, Nothing, Either, Left, Right, pipe


def test_maybe_map():
    doubled = Some(5).map(lambda x: x * 2)
    assert not doubled.is_none()
    assert doubled.get_or_else(0) == 10

    mapped_nothing = Nothing().map(lambda x: x * 2)
    assert mapped_nothing.is_none()
    assert mapped_nothing.get_or_else(0) == 0


def test_maybe_get_or_else_after_map():
    def name_length(name: str) -> int:
        return len(name)

    assert Some("Food").map(name_length).get_or_else(0) == 4
    assert Nothing().map(name_length).get_or_else(0) == 0
    assert repr(Some(1)) == "Some(1)"


def test_maybe_equality():
    assert Some(1) == Some(1)
    assert Some(1) != Some(2)
    assert Nothing() == Nothing()
    assert Some(None) != Nothing()


def test_either_map_and_bind():
    def safe_divide(x: int) -> Either[str, int]:
        if x == 0:
            return Left("Division by zero")
        return Right(10 // x)

    assert Right(5).map(lambda x: x * 2).get_or_else(0) == 10
    assert Right(2).bind(safe_divide).get_or_else(0) == 5

    result_error = Right(0).bind(safe_divide)
    assert result_error.is_left()
    assert result_error.get_error() == "Division by zero"

    left = Left("original error")
    assert left.map(lambda x: x * 2).get_error() == "original error"
    assert left.bind(safe_divide).get_error() == "original error"


def test_right_has_no_error():
    with pytest.raises(ValueError):
        Right(1).get_error()


def test_pipe():
    def add1(x):
        return x + 1

    def mul2(x):
        return x * 2

    # pipe(3, add1, mul2) -> mul2(add1(3)) = 8
    assert pipe(3, add1, mul2) == 8
    assert pipe(3) == 3
