"""Building numeric geometry matrices from vectors, matrices, lists and data frames."""

from __future__ import annotations

from collections.abc import Mapping

import numpy as np
import pandas as pd

from geometries.sexp import attach_attributes, sexp_col_names, sexp_length

_NOT_LINES = "geometries - lines need to be matrices or data.frames"
_TOO_MANY = "geometries - number of columns requested is greater than those available"
_INVALID_INDEX = "geometries - invalid column index"
_EMPTY_LIST = "geometries - 0-length list found"
_UNKNOWN_COLUMNS = "geometries - unknown column types"


def _column_spec(cols) -> tuple[str | None, list]:
    """Classify ``cols`` as no columns, integer positions or column names."""
    if cols is None:
        return None, []
    if isinstance(cols, (bool, np.bool_)):
        raise TypeError(_UNKNOWN_COLUMNS)
    if isinstance(cols, str):
        return "str", [cols]
    if isinstance(cols, (int, np.integer, float, np.floating)):
        return "int", [int(cols)]
    arr = np.atleast_1d(np.asarray(cols))
    if arr.size == 0:
        return None, []
    kind = arr.dtype.kind
    if kind in "iuf":
        return "int", [int(c) for c in arr.ravel()]
    if kind == "U" or (kind == "O" and all(isinstance(e, str) for e in arr.ravel())):
        return "str", [str(c) for c in arr.ravel()]
    raise TypeError(_UNKNOWN_COLUMNS)


def _is_numeric_array(x) -> bool:
    return isinstance(x, np.ndarray) and x.dtype.kind in "iuf"


def _stack(columns: list, n_rows: int) -> np.ndarray:
    nm = np.empty((n_rows, len(columns)), dtype=np.float64)
    for i, column in enumerate(columns):
        nm[:, i] = np.asarray(column, dtype=np.float64)
    return nm


def _named(nm: np.ndarray, names) -> np.ndarray:
    return attach_attributes(nm, {"dimnames": (None, list(names))})


def _list_parts(lst) -> tuple[list | None, list]:
    if isinstance(lst, Mapping):
        return list(lst.keys()), list(lst.values())
    return None, list(lst)


def _frame_parts(df: pd.DataFrame) -> tuple[list, list]:
    return list(df.columns), [df.iloc[:, i] for i in range(df.shape[1])]


def _check_indices(cols: list, n_available: int) -> None:
    if len(cols) > n_available:
        raise ValueError(_TOO_MANY)
    if cols and (max(cols) > n_available - 1 or min(cols) < 0):
        raise IndexError(_INVALID_INDEX)


def _list_rows(columns: list) -> int:
    if not columns:
        raise ValueError(_EMPTY_LIST)
    return sexp_length(columns[0])


def _whole(x, keep_names: bool):
    if isinstance(x, pd.DataFrame):
        names, columns = _frame_parts(x)
        nm = _stack(columns, x.shape[0])
        return _named(nm, names) if keep_names else nm
    if isinstance(x, (list, tuple, Mapping)):
        names, columns = _list_parts(x)
        nm = _stack(columns, _list_rows(columns))
        if keep_names:
            if names is None:
                raise ValueError("geometries - object does not have names")
            return _named(nm, names)
        return nm
    if _is_numeric_array(x):
        if x.ndim == 2:
            return x
        if x.ndim == 1:
            return np.asarray(x).reshape(1, -1)
    raise TypeError(_NOT_LINES)


def _by_index(x, cols: list, keep_names: bool):
    if _is_numeric_array(x) and x.ndim == 2:
        _check_indices(cols, x.shape[1])
        return np.asarray(x)[:, cols]
    if _is_numeric_array(x) and x.ndim == 1:
        _check_indices(cols, x.shape[0])
        return np.asarray(x)[cols].reshape(1, -1)
    if isinstance(x, pd.DataFrame):
        names, columns = _frame_parts(x)
        _check_indices(cols, len(columns))
        nm = _stack([columns[c] for c in cols], x.shape[0])
        return _named(nm, [names[c] for c in cols]) if keep_names else nm
    if isinstance(x, (list, tuple, Mapping)):
        _, columns = _list_parts(x)
        n_rows = _list_rows(columns)
        _check_indices(cols, len(columns))
        return _stack([columns[c] for c in cols], n_rows)
    raise TypeError(_NOT_LINES)


def _select_by_name(names, columns, wanted, n_rows, keep_names):
    if len(wanted) > len(columns):
        raise ValueError(_TOO_MANY)
    if names is None:
        raise KeyError("geometries - object does not have names")
    picked = []
    for name in wanted:
        if name not in names:
            raise KeyError(f"geometries - column {name!r} not found")
        picked.append(columns[names.index(name)])
    nm = _stack(picked, n_rows)
    return _named(nm, wanted) if keep_names else nm


def _by_name(x, cols: list, keep_names: bool):
    if _is_numeric_array(x) and x.ndim == 2:
        values = np.asarray(x)
        columns = [values[:, i] for i in range(values.shape[1])]
        return _select_by_name(list(sexp_col_names(x)), columns, cols, values.shape[0], False)
    if isinstance(x, pd.DataFrame):
        names, columns = _frame_parts(x)
        return _select_by_name(names, columns, cols, x.shape[0], keep_names)
    if isinstance(x, (list, tuple, Mapping)):
        names, columns = _list_parts(x)
        n_rows = _list_rows(columns)
        return _select_by_name(names, columns, cols, n_rows, keep_names)
    raise TypeError(_NOT_LINES)


def to_geometry_matrix(x, geometry_cols=None, keep_names=False):
    """Turn ``x`` into a matrix holding one coordinate per row.

    A vector becomes a one-row matrix and a matrix is returned as it is; data
    frames and lists of columns become float matrices. ``geometry_cols``
    selects columns by position or by name (``None`` or empty selects them
    all). With ``keep_names`` the column names of data frames and named lists
    are kept in the ``"dimnames"`` attribute.
    """
    kind, cols = _column_spec(geometry_cols)
    if kind is None:
        return _whole(x, keep_names)
    if kind == "int":
        return _by_index(x, cols, keep_names)
    return _by_name(x, cols, keep_names)