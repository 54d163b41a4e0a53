from __future__ import annotations

import pytest

from relkit.core.result import Err, Ok, Result


def _half(n: int) -> Result[int, str]:
    if n % 2:
        return Err(f"{n} is odd")
    return Ok(n // 2)


def test_ok_and_err_compare_by_payload() -> None:
    assert _half(4) == Ok(2)
    assert _half(3) == Err("3 is odd")
    assert Ok(1) != Err(1)


def test_repr_shows_payload() -> None:
    assert repr(Ok("x")) == "Ok('x')"
    assert repr(Err(3)) == "Err(3)"


def test_pattern_matching() -> None:
    match _half(8):
        case Ok(value):
            assert value == 4
        case Err(_):
            pytest.fail("expected Ok")
