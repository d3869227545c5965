import functools as _ft

import numpy as _np


def obj_str_insert(__str__):
    """
    Decorator to insert the return value of __str__ into '<classname {returnvalue} at 0x...>'
    """

    @_ft.wraps(__str__)
    def wrapper(self):
        obj_str = object.__repr__(self)
        return obj_str.replace("at 0x", f"{__str__(self)} at 0x")

    return wrapper


def sanitize_ndarray(arr_input, shape, dtype=None, copy=False):
    """
    Convert an object to an ndarray of the given shape. Only the first dimension may be
    ``-1`` (any length), the trailing dimensions have to match exactly. Empty input of
    any nesting becomes an empty array of the requested shape.

    :raises ValueError: if the data does not fit the shape.
    """
    arr = _np.array(arr_input, dtype=dtype) if copy else _np.asarray(arr_input, dtype)
    if arr.size == 0:
        return _np.empty((0, *shape[1:]), dtype=arr.dtype)
    if arr.ndim != len(shape) or arr.shape[1:] != tuple(shape[1:]):
        raise ValueError(f"expected shape {_fmt_shape(shape)}, got {arr.shape}")
    return arr


def _fmt_shape(shape):
    return "(" + ", ".join("N" if s == -1 else str(s) for s in shape) + ")"


def freeze(*arrs):
    """
    Mark arrays as read-only, in place. Views created afterwards are read-only too.
    """
    for arr in arrs:
        arr.flags.writeable = False
    return arrs[0] if len(arrs) == 1 else arrs


def samelen(*args):
    """
    Check whether all input arguments have the same length.
    """
    return len({len(arg) for arg in args}) < 2
