"""Start and end positions of each run of ids."""

from __future__ import annotations

import numpy as np
import pandas as pd

from geometries.unique import get_sexp_unique


def _id_vector(x) -> tuple[np.ndarray, str]:
    if isinstance(x, pd.Series):
        x = x.array if isinstance(x.dtype, pd.CategoricalDtype) else x.to_numpy()
    if isinstance(x, pd.Categorical):
        return np.asarray(x.codes), "integer"
    arr = np.atleast_1d(np.asarray(x))
    kind = arr.dtype.kind
    if arr.ndim == 1:
        if kind == "b":
            return arr, "logical"
        if kind in "iu":
            return arr, "integer"
        if kind == "f":
            return arr, "double"
        if kind == "U" or (kind == "O" and all(isinstance(e, str) for e in arr)):
            return arr, "character"
    raise TypeError("geometries - unsupported vector type for determining id positions")


def id_positions(line_ids, unique_ids=None) -> np.ndarray:
    """Matrix with one row per unique id giving the start and end of its run.

    ``line_ids`` must be grouped: each id forms one contiguous run. Without
    ``unique_ids`` the unique values of ``line_ids`` are used. Rows for
    unique ids beyond the runs found stay zero.
    """
    if unique_ids is None:
        unique_ids = get_sexp_unique(line_ids)
    ids, kind = _id_vector(line_ids)
    uniq, unique_kind = _id_vector(unique_ids)
    if kind != unique_kind:
        raise TypeError("geometries - line_ids and unique_ids are not the same type")

    result = np.zeros((len(uniq), 2), dtype=np.int64)
    n = len(ids)
    if n == 0:
        return result

    changed = np.asarray(ids[1:] != ids[:-1], dtype=bool)
    starts = np.concatenate(([0], np.flatnonzero(changed) + 1))
    if len(starts) > len(uniq):
        raise ValueError(
            "geometries - error indexing lines, perhaps caused by un-ordered data?"
        )
    ends = np.append(starts[1:] - 1, n - 1)
    result[: len(starts), 0] = starts
    result[: len(starts), 1] = ends
    return result