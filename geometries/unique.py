"""Unique values in order of first appearance, and unique ids of a column."""

from __future__ import annotations

import numpy as np
import pandas as pd

from geometries.sexp import sexp_col_names, sexp_n_col


def _is_str_array(arr: np.ndarray) -> bool:
    if arr.dtype.kind == "U":
        return True
    return arr.dtype.kind == "O" and all(isinstance(e, str) for e in arr)


def get_sexp_unique(x):
    """Return the unique values of a vector in the order they first appear.

    Categorical input keeps all of its categories. The input is not modified.
    """
    if isinstance(x, pd.Series):
        x = x.array if isinstance(x.dtype, pd.CategoricalDtype) else x.to_numpy()
    if isinstance(x, pd.Categorical):
        codes = pd.unique(np.asarray(x.codes))
        return pd.Categorical.from_codes(codes, categories=x.categories, ordered=x.ordered)

    arr = np.asarray(x)
    if arr.ndim == 0:
        arr = arr.reshape(1)
    if arr.ndim != 1:
        raise TypeError("geometries - unknown vector type")
    if arr.dtype.kind not in "biuf" and not _is_str_array(arr):
        raise TypeError("geometries - unknown vector type")
    return np.asarray(pd.unique(arr), dtype=arr.dtype)


def _column_by_index(x, index: int):
    n_col = sexp_n_col(x)
    if index < 0 or index >= n_col:
        raise IndexError("geometries - column index out of range")
    if isinstance(x, np.ndarray) and x.ndim == 2:
        return np.asarray(x)[:, index]
    if isinstance(x, pd.DataFrame):
        return x.iloc[:, index]
    raise TypeError("geometries - could not get id column")


def _column_by_name(x, name: str):
    if isinstance(x, np.ndarray) and x.ndim == 2:
        names = sexp_col_names(x) or [f"V{i + 1}" for i in range(x.shape[1])]
        if name not in names:
            raise KeyError(f"geometries - column {name!r} not found")
        return np.asarray(x)[:, names.index(name)]
    if isinstance(x, pd.DataFrame):
        if name not in x.columns:
            raise KeyError(f"geometries - column {name!r} not found")
        return x[name]
    raise TypeError("geometries - could not get id column")


def get_ids(x, id_col):
    """Unique values of the id column of a matrix or data frame.

    ``id_col`` is a column position or a column name (only its first element
    is used). With no id column the single id ``1`` is returned.
    """
    if id_col is None:
        return np.array([1])
    if isinstance(id_col, str):
        return get_sexp_unique(_column_by_name(x, id_col))
    if isinstance(id_col, (bool, np.bool_)):
        raise TypeError("geometries - can't determine id column type")

    cols = np.atleast_1d(np.asarray(id_col))
    if cols.size == 0:
        raise ValueError("geometries - no id column given")
    if cols.dtype.kind in "iu":
        return get_sexp_unique(_column_by_index(x, int(cols[0])))
    if _is_str_array(cols.ravel()):
        return get_sexp_unique(_column_by_name(x, str(cols[0])))
    raise TypeError("geometries - can't determine id column type")