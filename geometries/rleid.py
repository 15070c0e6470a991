"""Run-length ids over one or more id columns."""

from __future__ import annotations

from collections.abc import Mapping

import numpy as np
import pandas as pd

from geometries.sexp import sexp_n_row


def _as_vector(col) -> np.ndarray:
    if isinstance(col, pd.Series):
        col = col.array if isinstance(col.dtype, pd.CategoricalDtype) else col.to_numpy()
    if isinstance(col, pd.Categorical):
        return np.asarray(col.codes)
    return np.asarray(col)


def _changes(col) -> np.ndarray:
    """Boolean array, True at ``i`` where element ``i + 1`` differs from element ``i``."""
    v = _as_vector(col)
    if v.ndim != 1:
        raise TypeError("geometries - unsupported id column type")
    kind = v.dtype.kind
    if kind in "biu":
        return v[1:] != v[:-1]
    if kind == "f":
        # floating point values are compared by their bit patterns
        bits = np.ascontiguousarray(v, dtype=np.float64).view(np.int64)
        return bits[1:] != bits[:-1]
    if kind == "U" or (kind == "O" and all(isinstance(e, str) for e in v)):
        return np.asarray(v[1:] != v[:-1], dtype=bool)
    raise TypeError("geometries - unsupported id column type")


def _columns(df) -> list:
    if isinstance(df, pd.DataFrame):
        return [df.iloc[:, i] for i in range(df.shape[1])]
    if isinstance(df, Mapping):
        return list(df.values())
    if isinstance(df, (list, tuple)):
        return list(df)
    raise TypeError("geometries - expecting a data frame or a list of columns")


def _column(cols: list, index: int):
    if index < 0 or index >= len(cols):
        raise IndexError("geometries - column index doesn't exist")
    return cols[index]


def rleid(df, ids) -> np.ndarray:
    """Run-length group number (starting at 1) of each row over the ``ids`` columns."""
    cols = _columns(df)
    id_idx = np.atleast_1d(np.asarray(ids, dtype=np.int64))
    n_rows = sexp_n_row(df)
    if n_rows == 0:
        return np.zeros(0, dtype=np.int64)
    changed = np.zeros(n_rows - 1, dtype=bool)
    for j in id_idx:
        changed |= _changes(_column(cols, int(j)))
    return np.concatenate(([1], 1 + np.cumsum(changed))).astype(np.int64)


def rleid_indices(x, col=None) -> np.ndarray:
    """Positions where each run of equal values starts.

    ``x`` is a vector, or, when ``col`` is given, a data frame or list of
    columns whose column ``col`` (its first element) is used.
    """
    if col is not None:
        x = _column(_columns(x), int(np.atleast_1d(np.asarray(col))[0]))
    changed = _changes(x)
    if len(_as_vector(x)) == 0:
        return np.zeros(0, dtype=np.int64)
    return np.concatenate(([0], np.flatnonzero(changed) + 1)).astype(np.int64)