# tests/test_result.py

import pytest

from result_command import Failure, Result, Success


def test_fold_picks_branch():
    assert Success(2).fold(lambda v: v * 10, lambda e: -1) == 20
    assert Failure(ValueError("x")).fold(lambda v: v, lambda e: str(e)) == "x"


def test_map_and_map_error():
    assert Success(2).map(lambda v: v + 1) == Success(3)
    error = ValueError("x")
    assert Failure(error).map(lambda v: v + 1) == Failure(error)

    wrapped = Failure(error).map_error(lambda e: RuntimeError(f"wrapped {e}"))
    assert isinstance(wrapped.error, RuntimeError)
    assert Success(1).map_error(lambda e: RuntimeError()) == Success(1)


def test_accessors():
    error = KeyError("k")
    assert Success("v").is_success and not Success("v").is_failure
    assert Failure(error).is_failure
    assert Success("v").get_or_none() == "v"
    assert Failure(error).get_or_none() is None
    assert Failure(error).exception_or_none() is error
    assert Success("v").exception_or_none() is None


def test_result_base_is_abstract():
    with pytest.raises(TypeError):
        Result()
