"""Checking, finding and excluding columns of matrices and data frames."""

from __future__ import annotations

import numpy as np
import pandas as pd

from geometries.sexp import matrix_names, sexp_col_names, sexp_length, sexp_n_col
from geometries.vectors import concatenate_vectors, where_is


def _id_kind(cols) -> str | None:
    if isinstance(cols, (bool, np.bool_)):
        return None
    if isinstance(cols, (int, np.integer)):
        return "int"
    if isinstance(cols, str):
        return "str"
    arr = np.asarray(cols)
    if arr.dtype.kind in "iu":
        return "int"
    if arr.dtype.kind == "U":
        return "str"
    if arr.dtype.kind == "O" and arr.size and all(isinstance(e, str) for e in arr.ravel()):
        return "str"
    return None


def column_check(x, cols) -> None:
    """Raise if ``cols`` asks for more columns than ``x`` has, or for a missing index."""
    n_col = sexp_n_col(x)
    if sexp_length(cols) > n_col:
        raise ValueError(
            "geometries - number of columns requested is greater than those available"
        )
    if _id_kind(cols) == "int":
        idx = np.atleast_1d(np.asarray(cols))
        if idx.size:
            m = int(idx.max())
            if m > n_col - 1 or m < 0:
                raise IndexError("geometries - invalid geometry column index")


def column_exists(x, cols) -> None:
    """Raise ``IndexError`` if the largest integer index in ``cols`` is not a column of ``x``."""
    n_col = sexp_n_col(x)
    idx = np.atleast_1d(np.asarray(cols))
    if idx.size and int(idx.max()) > n_col - 1:
        raise IndexError("geometries - column index doesn't exist")


def _all_columns(x, kind: str) -> list:
    if isinstance(x, np.ndarray) and x.ndim == 2:
        if kind == "int":
            return list(range(x.shape[1]))
        return list(matrix_names(x))
    if isinstance(x, pd.DataFrame):
        if kind == "int":
            return list(range(x.shape[1]))
        return list(x.columns)
    raise TypeError("geometries - unsupported object")


def _other_columns(x, id_cols) -> np.ndarray:
    kind = _id_kind(id_cols)
    if kind is None:
        raise TypeError("geometries - unsupported column types")

    ids = np.unique(np.atleast_1d(np.asarray(id_cols))).tolist()
    remaining = _all_columns(x, kind)
    for c in ids:
        if c in remaining:
            remaining.remove(c)

    if kind == "int":
        return np.array(remaining, dtype=np.int64)
    return np.array(remaining, dtype=np.str_)


def other_columns(x, *args) -> np.ndarray:
    """Columns of ``x`` that are not among the given id columns.

    Up to three groups of id columns may be given, as positions or as names
    (all groups of the same kind); ``None`` groups are ignored. With no id
    columns every column position of ``x`` is returned.
    """
    if len(args) > 3:
        raise TypeError("geometries - at most three groups of id columns are supported")

    given = [a for a in args if a is not None]
    if not given:
        return np.arange(sexp_n_col(x), dtype=np.int64)

    cols = given[0]
    for extra in given[1:]:
        cols = concatenate_vectors(cols, extra)
    return _other_columns(x, cols)


def column_positions(x, cols) -> np.ndarray:
    """Positions of the named columns ``cols`` in ``x``, -1 for names not found."""
    if cols is None:
        raise TypeError("geometries - column indexes need to be a vector")
    if _id_kind(cols) != "str":
        raise TypeError(
            "geometries - expecting string vector of column names when finding column positions"
        )
    names = list(sexp_col_names(x))
    wanted = [cols] if isinstance(cols, str) else [str(c) for c in np.asarray(cols).ravel()]
    return np.array([where_is(c, names) for c in wanted], dtype=np.int64)