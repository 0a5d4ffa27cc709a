"""
Argument sanitizers used by the public constructors.

Type problems raise TypeError, out of range values raise ValueError.
String dtypes are looked up in `CHECKS`; a python type is checked with isinstance.
"""
import numpy as np
import numbers


def sanitize_type(obj, dtype, name):
    """Raise TypeError unless `obj` matches `dtype` (or any dtype of a tuple/list)"""
    options = dtype if isinstance(dtype, (tuple, list)) else (dtype,)
    if not any(is_dtype(obj, option) for option in options):
        expected = f"one of {options}" if len(options) > 1 else f"'{options[0]}'"
        raise TypeError(f"'{name}' expected type {expected}. Got: '{type(obj)}'")
    return True


def sanitize_array_type(obj, dtype, name):
    """Raise TypeError unless `obj` is array-like with every element matching `dtype`"""
    if not is_array_like(obj):
        raise TypeError(f"'{name}' expected array-like. Got: {type(obj)}")
    if not array_dtype_is(obj, dtype):
        found = obj.dtype if hasattr(obj, "dtype") else type(obj[0])
        raise TypeError(f"Array-like '{name}' expected elements of dtype: {dtype}. Got: {found}")
    return True


def sanitize_range(obj, name, lt=None, le=None, ge=None, gt=None):
    bounds = (
        (lt, lambda bound: obj < bound, "less than"),
        (le, lambda bound: obj <= bound, "less than or equal to"),
        (ge, lambda bound: obj >= bound, "greater than or equal to"),
        (gt, lambda bound: obj > bound, "greater than"),
    )
    for bound, check, phrase in bounds:
        if bound is not None and not check(bound):
            raise ValueError(f"'{name}' should be {phrase} {bound}. Got: {obj}")
    return True


def sanitize_matrix(obj, name, ncols=None, dtype=np.float64):
    """
    Cast a 2-d array-like of finite numbers to an ndarray, checking its width
    """
    if not is_array_like(obj):
        raise TypeError(f"'{name}' expected array-like. Got: {type(obj)}")
    try:
        array = np.array(obj, dtype=dtype)
    except (TypeError, ValueError) as e:
        raise TypeError(f"'{name}' could not be cast to a numeric matrix") from e
    if array.ndim != 2:
        raise ValueError(f"'{name}' expected 2 dimensions. Got: {array.ndim}")
    if array.shape[0] == 0:
        raise ValueError(f"'{name}' must have at least one row")
    if ncols is not None and array.shape[1] != ncols:
        raise ValueError(f"'{name}' expected {ncols} columns. Got: {array.shape[1]}")
    if not np.isfinite(array).all():
        raise ValueError(f"'{name}' must be finite")
    return array


def is_dtype(obj, dtype):
    if isinstance(dtype, type):
        return isinstance(obj, dtype)
    if dtype not in CHECKS:
        raise NotImplementedError(f"string dtype: {dtype} not Implemented. Supported: {tuple(CHECKS)}")
    return CHECKS[dtype](obj)


def array_dtype_is(obj, dtype):
    """
    check every element of an array-like. Empty arrays match any dtype.
    """
    if not is_array_like(obj):
        raise TypeError(f"'obj' must be array-like. Supplied a {type(obj)}")
    if isinstance(dtype, str):
        dtype = dtype.lower()
        if dtype not in CHECKS:
            raise ValueError(f"Supported string dtypes: {tuple(CHECKS)}. Supplied: '{dtype}'")
    elif not isinstance(dtype, type):
        raise TypeError(f"'dtype' must be a string or a type. Supplied a {type(dtype)}.")
    return all(is_dtype(element, dtype) for element in obj)


# predicates

def is_none(obj):
    return obj is None


def is_boolean(obj):
    return isinstance(obj, (bool, np.bool_))


def is_numeric(obj):
    """numbers, excluding booleans"""
    return isinstance(obj, numbers.Number) and not is_boolean(obj)


def is_integer(obj):
    return isinstance(obj, numbers.Integral) and not is_boolean(obj)


def is_float(obj):
    return is_numeric(obj) and not is_integer(obj)


def is_finite(obj):
    """numeric or boolean, and neither nan nor inf"""
    if not (is_numeric(obj) or is_boolean(obj)):
        return False
    return bool(np.isfinite(obj))


def is_array_like(obj):
    """sized, iterable and indexable, excluding str and dict"""
    if isinstance(obj, (str, dict)):
        return False
    return all(hasattr(obj, attr) for attr in ("__len__", "__iter__", "__getitem__"))


CHECKS = {
    "numeric": is_numeric,
    "boolean": is_boolean,
    "arraylike": is_array_like,
    "float": is_float,
    "integer": is_integer,
    "finite": is_finite,
    "none": is_none,
    "callable": callable,
}
