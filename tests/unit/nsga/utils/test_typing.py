import pytest
import numpy as np
from numba import int64, float64, boolean

from nsga.utils import typing

integers = [0, -1, np.int32(3.0), np.int64(4), np.uint16(5e0), int64(9)]
finite_floats = [0.0, float("-3"), np.float32(5.6789), np.float64(6.0123), float64(-8.8888)]
infinite_floats = [np.nan, np.inf, -np.inf]
booleans = [True, False, np.True_, np.False_, boolean(True)]
array_likes = [(), [], np.array([1.0, 2.0]), [1, 2, 3], (True, False)]
other_collections = [{}, {1, 2}, {"a": 1}, "abc"]


@pytest.mark.parametrize("obj", integers + finite_floats + infinite_floats)
def test_is_numeric_true(obj):
    assert typing.is_numeric(obj)


@pytest.mark.parametrize("obj", booleans + array_likes + other_collections)
def test_is_numeric_false(obj):
    assert not typing.is_numeric(obj)


@pytest.mark.parametrize("obj", integers)
def test_is_integer_true(obj):
    assert typing.is_integer(obj)


@pytest.mark.parametrize("obj", finite_floats + booleans + array_likes)
def test_is_integer_false(obj):
    assert not typing.is_integer(obj)


@pytest.mark.parametrize("obj", finite_floats + integers + booleans)
def test_is_finite_true(obj):
    assert typing.is_finite(obj)


@pytest.mark.parametrize("obj", infinite_floats + array_likes + other_collections)
def test_is_finite_false(obj):
    assert not typing.is_finite(obj)


@pytest.mark.parametrize("obj", array_likes)
def test_is_arraylike_true(obj):
    assert typing.is_array_like(obj)


@pytest.mark.parametrize("obj", finite_floats + booleans + other_collections)
def test_is_arraylike_false(obj):
    assert not typing.is_array_like(obj)


@pytest.mark.parametrize("obj", [len, lambda x: x, typing.is_none])
def test_callable_dtype(obj):
    assert typing.sanitize_type(obj, "callable", "obj")


@pytest.mark.parametrize(
    "obj, dtype",
    [(1.0, "integer"), (None, ("integer", "float")), ("a", "numeric"), (1, str), (1, "callable")],
)
def test_sanitize_type_raises(obj, dtype):
    with pytest.raises(TypeError):
        typing.sanitize_type(obj, dtype, "obj")


def test_sanitize_type_unknown_dtype():
    with pytest.raises(NotImplementedError):
        typing.sanitize_type(1, "complex", "obj")


@pytest.mark.parametrize(
    "kwargs, passes",
    [
        ({"ge": 1}, True),
        ({"gt": 1}, False),
        ({"le": 1}, True),
        ({"lt": 1}, False),
        ({"ge": 0, "le": 2}, True),
        ({"ge": 2}, False),
    ],
)
def test_sanitize_range(kwargs, passes):
    if passes:
        assert typing.sanitize_range(1, "obj", **kwargs)
    else:
        with pytest.raises(ValueError):
            typing.sanitize_range(1, "obj", **kwargs)


def test_sanitize_matrix():
    matrix = typing.sanitize_matrix([[1, 2], [3, 4]], "obj", ncols=2)
    assert matrix.dtype == np.float64
    assert matrix.shape == (2, 2)


@pytest.mark.parametrize(
    "obj, error",
    [
        (1.0, TypeError),
        ([["a", "b"]], TypeError),
        ([[1.0, 2.0], [3.0]], TypeError),
        (np.zeros(2), ValueError),
        (np.zeros((0, 2)), ValueError),
        (np.zeros((2, 3)), ValueError),
        ([[1.0, np.inf]], ValueError),
    ],
)
def test_sanitize_matrix_raises(obj, error):
    with pytest.raises(error):
        typing.sanitize_matrix(obj, "obj", ncols=2)
