"""Closing shapes so that their last coordinate repeats the first."""

from __future__ import annotations

from collections.abc import Mapping

import numpy as np

from geometries.sexp import GeometryList

MIN_CLOSED_ROWS = 4


def check_closed_rows(n_row) -> None:
    """Raise ``ValueError`` if a closed shape has fewer than four rows."""
    if n_row < MIN_CLOSED_ROWS:
        raise ValueError("geometries - closed shapes must have at least 4 rows")


def matrix_is_closed(mat) -> bool:
    """True if the first and last rows of the matrix are equal."""
    arr = np.asarray(mat)
    if arr.ndim != 2:
        raise TypeError("geometries - closing shapes requires matrices")
    if arr.shape[0] == 0:
        raise ValueError("geometries - can't close an empty matrix")
    return bool(np.all(arr[0] == arr[-1]))


def _close(mat):
    if matrix_is_closed(mat):
        check_closed_rows(mat.shape[0])
        return mat
    arr = np.asarray(mat)
    closed = np.vstack([arr, arr[:1]])
    check_closed_rows(closed.shape[0])
    return closed


def close_matrix(x):
    """Close a matrix, or every matrix inside a (nested) list.

    A matrix whose last row differs from its first gets the first row
    appended; closed matrices are returned as they are. Every closed shape
    must have at least four rows.
    """
    if isinstance(x, np.ndarray):
        if x.ndim != 2 or x.dtype.kind not in "iuf":
            raise TypeError("geometries - closing shapes requires matrices")
        return _close(x)
    if isinstance(x, Mapping):
        return {name: close_matrix(item) for name, item in x.items()}
    if isinstance(x, (list, tuple)):
        closed = [close_matrix(item) for item in x]
        if isinstance(x, GeometryList):
            return GeometryList(closed, attrs=x.attrs)
        return closed
    raise TypeError("geometries - closing shapes requires matrices")