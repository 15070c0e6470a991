"""Finding values in vectors, and combining and expanding vectors."""

from __future__ import annotations

import numpy as np
import pandas as pd

from geometries.sexp import sexp_col_names, sexp_length
from geometries.unique import get_sexp_unique

NOT_FOUND = -1


def _as_vector(v) -> np.ndarray:
    if isinstance(v, pd.Series):
        v = v.to_numpy()
    return np.atleast_1d(np.asarray(v))


def _vector_kind(arr: np.ndarray) -> str:
    kind = arr.dtype.kind
    if kind == "b":
        return "logical"
    if kind in "iu":
        return "integer"
    if kind == "f":
        return "double"
    if kind == "c":
        return "complex"
    if kind == "U":
        return "character"
    if kind == "O":
        if arr.size and all(isinstance(e, str) for e in arr.ravel()):
            return "character"
        return "list"
    return "other"


def where_is(to_find, values) -> int:
    """Position of the first element of ``values`` equal to ``to_find``, or -1."""
    return next((i for i, v in enumerate(values) if v == to_find), NOT_FOUND)


def where_is_all(values_to_find, x) -> np.ndarray:
    """Positions of several values in ``x``, -1 for each one not found.

    Names are looked up among the column names of ``x``; integer (or real)
    values are looked up among the positions ``0 .. n - 1`` of ``x``.
    """
    values = _as_vector(values_to_find)
    kind = _vector_kind(values)
    if kind in ("integer", "double"):
        look_in = range(sexp_length(x))
        found = [where_is(int(v), look_in) for v in values]
    elif kind == "character":
        look_in = list(sexp_col_names(x))
        found = [where_is(str(v), look_in) for v in values]
    else:
        raise TypeError("geometries - error trying to find values in a vector")
    return np.array(found, dtype=np.int64)


def concatenate_vectors(vec_1, vec_2):
    """Join two vectors of the same type and drop repeated values.

    Values keep the order in which they first appear. If either vector is
    ``None`` the other is returned unchanged; logical vectors are joined as
    integers.
    """
    if vec_1 is None and vec_2 is None:
        return None
    if vec_1 is None:
        return vec_2
    if vec_2 is None:
        return vec_1

    a, b = _as_vector(vec_1), _as_vector(vec_2)
    kind = _vector_kind(a)
    if kind != _vector_kind(b):
        raise TypeError("geometries - different vector types found")

    if kind in ("logical", "integer"):
        combined = np.concatenate([a, b]).astype(np.int64)
    elif kind == "double":
        combined = np.concatenate([a, b]).astype(np.float64)
    elif kind == "character":
        combined = np.concatenate([a.astype(str), b.astype(str)])
    else:
        raise TypeError("geometries - can't combine columns")
    return get_sexp_unique(combined)


def expand_vector(v, expanded_index):
    """Return the elements of ``v`` at the integer positions ``expanded_index``."""
    idx = np.atleast_1d(np.asarray(expanded_index))
    if idx.size == 0:
        idx = idx.astype(np.int64)
    if idx.dtype.kind not in "iu":
        raise TypeError("geometries - Expecting an integer vector for indexing")

    if isinstance(v, pd.Series):
        v = v.to_numpy()

    n = len(v) if isinstance(v, (bytes, bytearray, list, tuple)) else None
    if n is None:
        if not isinstance(v, np.ndarray) or v.ndim != 1 or v.dtype.kind not in "biufcUSO":
            raise TypeError("geometries - unsupported column type when expanding vectors")
        n = v.shape[0]

    if idx.size and (idx.min() < 0 or idx.max() >= n):
        raise IndexError("geometries - index out of bounds when expanding vectors")

    positions = [int(i) for i in idx]
    if isinstance(v, (bytes, bytearray)):
        return bytes(v[i] for i in positions)
    if isinstance(v, (list, tuple)):
        return [v[i] for i in positions]
    return v[idx]