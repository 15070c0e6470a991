"""Helpers for inspecting geometry objects and attaching attributes to them.

The objects handled throughout the package are:

* vectors: one-dimensional numpy arrays (a single coordinate / POINT),
* matrices: two-dimensional numpy arrays (one coordinate per row),
* lists: Python lists or tuples of other objects,
* named lists: dicts mapping names to columns,
* data frames: :class:`pandas.DataFrame`.

Matrix column names live in the ``"dimnames"`` attribute as a
``(row_names, column_names)`` pair; vector and list names live in ``"names"``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import numpy as np
import pandas as pd

CLOSED_ATTRIBUTE = "closed"
HAS_BEEN_CLOSED = "has_been_closed"


class GeometryArray(np.ndarray):
    """A numpy array that carries a dictionary of attributes.

    Arrays derived from it (slices, copies, arithmetic) start with no
    attributes of their own.
    """

    def __new__(cls, data, attrs=None, dtype=None):
        obj = np.asarray(data, dtype=dtype).view(cls)
        obj.attrs = dict(attrs or {})
        return obj

    def __array_finalize__(self, obj):
        self.attrs = {}


class GeometryList(list):
    """A list that carries a dictionary of attributes."""

    def __init__(self, iterable=(), attrs=None):
        super().__init__(iterable)
        self.attrs = dict(attrs or {})

    def __repr__(self):
        return f"GeometryList({list.__repr__(self)}, attrs={self.attrs!r})"


def _is_matrix(x) -> bool:
    return isinstance(x, np.ndarray) and x.ndim == 2


def _is_list(x) -> bool:
    return isinstance(x, (list, tuple, Mapping))


def _matrix_column_names(x) -> list | None:
    dimnames = get_attribute(x, "dimnames")
    if dimnames is None or len(dimnames) < 2 or dimnames[1] is None:
        return None
    return list(dimnames[1])


def attach_attributes(obj, attributes: Mapping[str, Any]):
    """Return ``obj`` with every entry of ``attributes`` attached to it.

    Plain numpy arrays become :class:`GeometryArray` views and plain lists
    become :class:`GeometryList` objects; data frames and objects that already
    carry attributes are updated in place.
    """
    if isinstance(obj, (GeometryArray, GeometryList, pd.DataFrame)):
        target = obj
    elif isinstance(obj, np.ndarray):
        target = obj.view(GeometryArray)
    elif isinstance(obj, (list, tuple)):
        target = GeometryList(obj)
    else:
        raise TypeError("geometries - can't attach attributes to this object")
    target.attrs.update(attributes)
    return target


def get_attribute(obj, name: str):
    """Return the attribute ``name`` of ``obj``, or ``None`` if it has none."""
    attrs = getattr(obj, "attrs", None)
    if isinstance(attrs, Mapping):
        return attrs.get(name)
    return None


def has_been_closed_attribute(x) -> bool:
    """True if ``x`` is marked as having been closed."""
    value = get_attribute(x, CLOSED_ATTRIBUTE)
    if value is None:
        return False
    if not isinstance(value, str):
        values = list(np.atleast_1d(value))
        if not values:
            return False
        value = values[0]
    return value == HAS_BEEN_CLOSED


def name_attributes(x) -> list:
    """Return the names of ``x``; raise ``ValueError`` if it has none."""
    if isinstance(x, pd.DataFrame):
        return list(x.columns)
    if isinstance(x, Mapping):
        return list(x.keys())
    names = get_attribute(x, "names")
    if names is not None:
        return list(names)
    raise ValueError("geometries - object does not have names")


def sexp_col_names(x) -> list:
    """Column names of a matrix (empty if unnamed), otherwise the object's names."""
    if _is_matrix(x):
        return _matrix_column_names(x) or []
    return name_attributes(x)


def sexp_length(x) -> int:
    """The number of elements: cells of an array, columns of a data frame, items of a list."""
    if x is None:
        return 0
    if isinstance(x, pd.DataFrame):
        return x.shape[1]
    if isinstance(x, np.ndarray):
        return int(x.size)
    if isinstance(x, (str, bytes)):
        return 1
    if isinstance(x, (list, tuple, Mapping, pd.Series, pd.Categorical)):
        return len(x)
    return 1


def sexp_n_col(x) -> int:
    """Number of columns of a matrix, otherwise the length of ``x``."""
    if _is_matrix(x):
        return x.shape[1]
    return sexp_length(x)


def sexp_n_row(x) -> int:
    """Number of rows: matrix rows, data-frame rows, length of a list's first item, 1 for vectors."""
    if isinstance(x, pd.DataFrame):
        return x.shape[0] if x.shape[1] > 0 else 0
    if _is_list(x):
        if len(x) == 0:
            return 0
        first = next(iter(x.values())) if isinstance(x, Mapping) else x[0]
        return sexp_length(first)
    if _is_matrix(x):
        return x.shape[0]
    if x is None:
        raise TypeError("geometries - object has no rows")
    return 1


def _index_kind(v) -> str | None:
    if isinstance(v, (bool, np.bool_)):
        return None
    if isinstance(v, (int, np.integer)):
        return "int"
    if isinstance(v, str):
        return "str"
    arr = np.asarray(v)
    if arr.size == 0:
        return "int"
    if arr.dtype.kind in "iu":
        return "int"
    if arr.dtype.kind == "U":
        return "str"
    if arr.dtype.kind == "O" and all(isinstance(e, str) for e in arr.ravel()):
        return "str"
    return None


def sexp_col_int(x, v) -> np.ndarray:
    """Convert column indices or column names ``v`` into integer positions in ``x``.

    Integer indices are returned unchanged. A name that cannot be found maps
    to position 0.
    """
    kind = _index_kind(v)
    if kind == "int":
        return np.atleast_1d(np.asarray(v, dtype=np.int64))
    if kind == "str":
        wanted = [v] if isinstance(v, str) else [str(s) for s in np.asarray(v).ravel()]
        names = list(sexp_col_names(x))
        return np.array(
            [names.index(name) if name in names else 0 for name in wanted],
            dtype=np.int64,
        )
    raise TypeError("geometries - require either integer or string column indices")


def matrix_names(m) -> list:
    """Column names of matrix ``m``; raise ``ValueError`` if it has none."""
    names = _matrix_column_names(m)
    if names is None:
        raise ValueError(
            "geometries - could not find matrix names. Perhaps your matrix does not have names"
        )
    return names


def _as_column(c):
    if isinstance(c, (pd.Categorical, pd.Series)):
        return c.array if isinstance(c, pd.Series) else c
    return np.atleast_1d(np.asarray(c))


def make_dataframe(columns, n_rows: int, column_names) -> pd.DataFrame:
    """Build a data frame from ``columns`` with row labels ``1..n_rows``."""
    cols = list(columns)
    names = list(column_names)
    if len(names) != len(cols):
        raise ValueError("geometries - number of column names does not match number of columns")
    index = pd.RangeIndex(1, n_rows + 1) if n_rows > 0 else pd.RangeIndex(0)
    df = pd.DataFrame({i: _as_column(c) for i, c in enumerate(cols)}, index=index)
    df.columns = names
    return df


def matrix_to_df(mat) -> pd.DataFrame:
    """Convert a matrix to a data frame, naming unnamed columns ``V0``, ``V1``, ..."""
    names = _matrix_column_names(mat) or []
    values = np.asarray(mat)
    n_row, n_col = values.shape
    if not names:
        names = [f"V{i}" for i in range(n_col)]
    return make_dataframe([values[:, i] for i in range(n_col)], n_row, names)


def is_null_geometry(v) -> bool:
    """True if the vector is empty or either of its first two values is missing."""
    values = np.asarray(v).ravel()
    if values.size == 0:
        return True
    return bool(np.any(pd.isna(values[:2])))