"""Tests for relver.core.result module."""

import pytest

from relver.core.result import Err, Ok, Result, is_err, is_ok


def test_ok_carries_value() -> None:
    result: Result[int, str] = Ok(42)
    assert is_ok(result)
    assert not is_err(result)
    assert result.unwrap() == 42
    assert result.unwrap_or(0) == 42
    assert result.map(lambda v: v + 1) == Ok(43)


def test_err_carries_error() -> None:
    result: Result[int, str] = Err("boom")
    assert is_err(result)
    assert result.unwrap_or(7) == 7
    assert result.map(lambda v: v + 1) == Err("boom")
    with pytest.raises(ValueError, match="called unwrap on Err"):
        result.unwrap()


def test_pattern_matching() -> None:
    match Err("bad"):
        case Ok(value):
            pytest.fail(f"unexpected Ok({value})")
        case Err(error):
            assert error == "bad"
