"""Tests for bflow.core.result module."""

import pytest

from bflow.core.result import Err, Ok, Result, is_err, is_ok


class TestOk:
    def test_unwrap(self) -> None:
        assert Ok("out").unwrap() == "out"

    def test_unwrap_or_ignores_default(self) -> None:
        assert Ok(1).unwrap_or(0) == 1

    def test_map(self) -> None:
        assert Ok(" main\n").map(str.strip) == Ok("main")

    def test_map_err_is_noop(self) -> None:
        assert Ok(1).map_err(lambda e: f"wrapped {e}") == Ok(1)

    def test_flat_map_runs_next_step(self) -> None:
        result: Result[int, str] = Ok(2)
        assert result.flat_map(lambda x: Ok(x * 2)) == Ok(4)
        assert result.flat_map(lambda _: Err("later failure")) == Err("later failure")


class TestErr:
    def test_unwrap_raises(self) -> None:
        with pytest.raises(ValueError, match="called unwrap on Err"):
            Err("boom").unwrap()

    def test_unwrap_or_returns_default(self) -> None:
        assert Err("boom").unwrap_or(7) == 7

    def test_map_err_transforms_error(self) -> None:
        assert Err("boom").map_err(str.upper) == Err("BOOM")

    def test_flat_map_short_circuits(self) -> None:
        called: list[int] = []

        def step(value: int) -> Result[int, str]:
            called.append(value)
            return Ok(value)

        result: Result[int, str] = Err("first")
        assert result.flat_map(step) == Err("first")
        assert called == []


def test_type_guards() -> None:
    assert is_ok(Ok(1)) and not is_err(Ok(1))
    assert is_err(Err("x")) and not is_ok(Err("x"))
    assert Ok(1).is_ok() and Err("x").is_err()


def test_repr() -> None:
    assert repr(Ok("a")) == "Ok('a')"
    assert repr(Err("b")) == "Err('b')"
