"""Bounding boxes of geometries, as ``[xmin, ymin, xmax, ymax]``."""

from __future__ import annotations

from collections.abc import Mapping

import numpy as np
import pandas as pd

from geometries.columns import column_check
from geometries.sexp import sexp_col_names

_BAD_SIZE = "geometries - incorrect size of bounding box"
_BAD_TYPE = "geometries - can't calculate bounding box for this type"


def _empty_bbox() -> np.ndarray:
    return np.full(4, np.nan)


def _lower(value, current):
    # keeps ``current`` only when it is strictly smaller, so a missing
    # ``current`` is always replaced
    return current if current < value else value


def _upper(value, current):
    return current if value < current else value


def _as_float(values) -> np.ndarray:
    if isinstance(values, pd.Series):
        values = values.to_numpy()
    return np.atleast_1d(np.asarray(values, dtype=np.float64))


def _vmin(values: np.ndarray) -> float:
    return float(np.min(values)) if values.size else np.inf


def _vmax(values: np.ndarray) -> float:
    return float(np.max(values)) if values.size else -np.inf


def _update(bbox: np.ndarray, xmin, ymin, xmax, ymax) -> None:
    bbox[0] = _lower(xmin, bbox[0])
    bbox[2] = _upper(xmax, bbox[2])
    bbox[1] = _lower(ymin, bbox[1])
    bbox[3] = _upper(ymax, bbox[3])


def _extend(bbox: np.ndarray, x, y) -> None:
    xs, ys = _as_float(x), _as_float(y)
    _update(bbox, _vmin(xs), _vmin(ys), _vmax(xs), _vmax(ys))


def _extend_point(bbox: np.ndarray, x, y) -> None:
    x, y = float(x), float(y)
    _update(bbox, x, y, x, y)


def make_bbox(x, y, bbox=None) -> np.ndarray:
    """Extend ``bbox`` (missing values if not given) to cover the ``x`` and ``y`` values.

    A new array is returned; the given ``bbox`` is not modified.
    """
    result = _empty_bbox() if bbox is None else np.array(bbox, dtype=np.float64)
    if result.shape != (4,):
        raise ValueError(_BAD_SIZE)
    _extend(result, x, y)
    return result


def _check_size(n: int) -> None:
    if n < 2:
        raise ValueError(_BAD_SIZE)


def _column_spec(geometry_cols):
    if geometry_cols is None:
        return None, None
    if isinstance(geometry_cols, (bool, np.bool_)):
        raise TypeError(_BAD_TYPE)
    if isinstance(geometry_cols, str):
        return "str", np.array([geometry_cols])
    arr = np.atleast_1d(np.asarray(geometry_cols))
    kind = arr.dtype.kind
    if kind in "iuf":
        return "int", arr.astype(np.int64)
    if kind == "U" or (kind == "O" and arr.size and all(isinstance(e, str) for e in arr.ravel())):
        return "str", arr.astype(str)
    raise TypeError(_BAD_TYPE)


def _numeric_array(x) -> np.ndarray | None:
    if isinstance(x, (bool, np.bool_)):
        return None
    if isinstance(x, (int, float, np.integer, np.floating)):
        return np.atleast_1d(np.asarray(x))
    if isinstance(x, pd.Series):
        x = x.to_numpy()
    if isinstance(x, np.ndarray) and x.dtype.kind in "iuf":
        return x
    return None


def _vector(bbox, v: np.ndarray, kind, cols) -> None:
    values = np.asarray(v).ravel()
    if kind == "int":
        column_check(values, cols)
        _check_size(len(cols))
        _extend_point(bbox, values[cols[0]], values[cols[1]])
    else:
        # column names have no meaning for a single point
        _check_size(values.size)
        _extend_point(bbox, values[0], values[1])


def _matrix(bbox, m: np.ndarray, kind, cols) -> None:
    if kind is None:
        _check_size(m.shape[1])
        x, y = m[:, 0], m[:, 1]
    elif kind == "int":
        column_check(m, cols)
        _check_size(len(cols))
        x, y = m[:, cols[0]], m[:, cols[1]]
    else:
        column_check(m, cols)
        _check_size(len(cols))
        names = list(sexp_col_names(m))
        positions = []
        for name in cols[:2]:
            if name not in names:
                raise KeyError(f"geometries - column {name!r} not found")
            positions.append(names.index(name))
        x, y = m[:, positions[0]], m[:, positions[1]]
    _extend(bbox, np.asarray(x), np.asarray(y))


def _frame(bbox, df: pd.DataFrame, kind, cols) -> None:
    if kind is None:
        _check_size(df.shape[1])
        x, y = df.iloc[:, 0], df.iloc[:, 1]
    elif kind == "int":
        column_check(df, cols)
        _check_size(len(cols))
        x, y = df.iloc[:, int(cols[0])], df.iloc[:, int(cols[1])]
    else:
        column_check(df, cols)
        _check_size(len(cols))
        x, y = df[cols[0]], df[cols[1]]
    _extend(bbox, x, y)


def _accumulate(bbox, x, kind, cols) -> None:
    if isinstance(x, pd.DataFrame):
        _frame(bbox, x, kind, cols)
        return
    if isinstance(x, (list, tuple, Mapping)):
        for item in (x.values() if isinstance(x, Mapping) else x):
            _accumulate(bbox, item, kind, cols)
        return
    arr = _numeric_array(x)
    if arr is None:
        raise TypeError(_BAD_TYPE)
    if arr.ndim == 2:
        _matrix(bbox, arr, kind, cols)
    else:
        _vector(bbox, arr, kind, cols)


def calculate_bbox(x, geometry_cols=None) -> np.ndarray:
    """Bounding box ``[xmin, ymin, xmax, ymax]`` of a geometry or a list of geometries.

    Without ``geometry_cols`` the first two columns (or values, for a point)
    are the x and y coordinates. ``geometry_cols`` gives their positions or,
    for matrices and data frames, their names. A list with no geometries
    gives a box of missing values.
    """
    kind, cols = _column_spec(geometry_cols)
    bbox = _empty_bbox()
    _accumulate(bbox, x, kind, cols)
    return bbox