"""Flattening, splitting and collapsing lists of vectors.

Vector types follow the usual type codes, ordered so that a later type can
hold every value of an earlier one: logical < integer < double < character.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from enum import IntEnum

import numpy as np
import pandas as pd

from geometries.sexp import get_attribute


class VectorType(IntEnum):
    """Type codes of the vectors that a list can be flattened into."""

    LOGICAL = 10
    INTEGER = 13
    DOUBLE = 14
    CHARACTER = 16


_VALID_TYPES = frozenset(int(t) for t in VectorType)
_NULL_TYPE = 0
_COMPLEX_TYPE = 15
_LIST_TYPE = 19


def vector_type(new_type, existing_type) -> VectorType:
    """The type a vector must have to hold values of both types.

    Character can never be changed; an unknown type forces character.
    """
    new_type, existing_type = int(new_type), int(existing_type)
    if existing_type == VectorType.CHARACTER:
        return VectorType.CHARACTER

    new_is_valid = new_type in _VALID_TYPES
    existing_is_valid = existing_type in _VALID_TYPES

    if new_type == existing_type and new_is_valid:
        return VectorType(existing_type)
    if new_type < existing_type and existing_is_valid:
        return VectorType(existing_type)
    if new_type > existing_type and new_is_valid:
        return VectorType(new_type)
    if new_type > existing_type and not new_is_valid:
        return VectorType.CHARACTER
    if existing_is_valid:
        return VectorType(existing_type)
    return VectorType.CHARACTER


def _is_nested(x) -> bool:
    return isinstance(x, (list, tuple, Mapping, pd.DataFrame))


def _items(x) -> list:
    if isinstance(x, pd.DataFrame):
        return [x.iloc[:, i].to_numpy() for i in range(x.shape[1])]
    if isinstance(x, Mapping):
        return list(x.values())
    if isinstance(x, (list, tuple)):
        return list(x)
    raise TypeError("geometries - expecting a list")


def _leaf_values(x) -> np.ndarray:
    if x is None:
        return np.zeros(0)
    if isinstance(x, pd.Series):
        x = x.to_numpy()
    if isinstance(x, np.ndarray):
        return x.ravel(order="F")
    return np.atleast_1d(np.asarray(x))


def _leaf_type(x) -> int:
    if x is None:
        return _NULL_TYPE
    if isinstance(x, (bool, np.bool_)):
        return VectorType.LOGICAL
    if isinstance(x, (int, np.integer)):
        return VectorType.INTEGER
    if isinstance(x, (float, np.floating)):
        return VectorType.DOUBLE
    if isinstance(x, (complex, np.complexfloating)):
        return _COMPLEX_TYPE
    if isinstance(x, str):
        return VectorType.CHARACTER
    if isinstance(x, pd.Series):
        x = x.to_numpy()
    if isinstance(x, np.ndarray):
        kind = x.dtype.kind
        if kind == "b":
            return VectorType.LOGICAL
        if kind in "iu":
            return VectorType.INTEGER
        if kind == "f":
            return VectorType.DOUBLE
        if kind == "c":
            return _COMPLEX_TYPE
        if kind in "US":
            return VectorType.CHARACTER
        if kind == "O" and x.size and all(isinstance(e, str) for e in x.ravel()):
            return VectorType.CHARACTER
        return _LIST_TYPE
    raise TypeError("geometries - couldn't unlist this object")


def list_sizes(lst):
    """Sizes of every element of a (nested) list.

    Returns ``(sizes, total_size, vector_type)``: ``sizes`` mirrors the
    nesting of ``lst`` with the length of each vector, ``total_size`` is the
    sum of those lengths and ``vector_type`` the :class:`VectorType` able to
    hold every value.
    """
    if not _is_nested(lst):
        raise TypeError("geometries - expecting a list")
    total = 0
    vtype = VectorType.LOGICAL

    def walk(obj) -> list:
        nonlocal total, vtype
        sizes = []
        for item in _items(obj):
            if _is_nested(item):
                sizes.append(walk(item))
            else:
                vtype = vector_type(_leaf_type(item), vtype)
                n = _leaf_values(item).size
                sizes.append(n)
                total += n
        return sizes

    return walk(lst), total, vtype


def _iter_leaves(obj) -> Iterator[np.ndarray]:
    for item in _items(obj):
        if _is_nested(item):
            yield from _iter_leaves(item)
        else:
            yield _leaf_values(item)


def _as_string(v) -> str:
    if isinstance(v, str):
        return v
    if isinstance(v, (bool, np.bool_)):
        return "TRUE" if v else "FALSE"
    if isinstance(v, (int, np.integer)):
        return str(int(v))
    if isinstance(v, (float, np.floating)):
        return "NA" if np.isnan(v) else format(float(v), ".15g")
    return str(v)


def _convert(values: np.ndarray, vtype: VectorType) -> np.ndarray:
    if vtype is VectorType.LOGICAL:
        return values.astype(bool)
    if vtype is VectorType.INTEGER:
        return values.astype(np.int64)
    if vtype is VectorType.DOUBLE:
        return values.astype(np.float64)
    return np.array([_as_string(v) for v in values], dtype=str)


def unlist_list(lst) -> np.ndarray:
    """Flatten a nested list into a single vector of the widest type found.

    Values keep their order; matrices contribute their values column by column.
    """
    _, _, vtype = list_sizes(lst)
    parts = [_convert(leaf, vtype) for leaf in _iter_leaves(lst)]
    parts = [p for p in parts if p.size]
    if not parts:
        return _convert(np.zeros(0), vtype)
    return np.concatenate(parts)


def as_list(x):
    """Split an object into a list of its columns.

    A numeric vector becomes a list of its values, a matrix a list of its
    columns (a dict keyed by column name when the matrix has names), and a
    list is returned as it is.
    """
    if isinstance(x, pd.DataFrame):
        return {name: x[name].to_numpy() for name in x.columns}
    if isinstance(x, Mapping):
        return x
    if isinstance(x, (list, tuple)):
        return list(x)

    arr = x if isinstance(x, np.ndarray) else np.asarray(x)
    if arr.dtype.kind not in "iuf":
        raise TypeError("geometries - unknown object type for converting to list")
    if arr.ndim == 2:
        columns = [arr[:, i].copy() for i in range(arr.shape[1])]
        dimnames = get_attribute(x, "dimnames")
        if dimnames is not None and len(dimnames) > 1 and dimnames[1] is not None:
            return dict(zip(list(dimnames[1]), columns))
        return columns
    return list(np.atleast_1d(arr))


def fill_list(v, line_positions) -> list:
    """Split vector ``v`` into pieces that start at each of ``line_positions``."""
    if isinstance(v, pd.Series):
        v = v.to_numpy()
    values = np.atleast_1d(np.asarray(v))
    kind = values.dtype.kind
    is_str = kind == "U" or (
        kind == "O" and all(isinstance(e, str) for e in values.ravel())
    )
    if values.ndim != 1 or (kind not in "biuf" and not is_str):
        raise TypeError("geometries - unknown column type")

    starts = [int(p) for p in np.atleast_1d(np.asarray(line_positions))]
    ends = [p - 1 for p in starts[1:]] + [len(values) - 1]
    pieces = []
    for start, end in zip(starts, ends):
        if end < start:
            raise ValueError("geometries - line positions must be increasing")
        if start < 0 or end >= len(values):
            raise IndexError("geometries - line position out of range")
        pieces.append(values[start : end + 1])
    return pieces


def fill_vector(vec_1, vec_2, start_idx):
    """Copy ``vec_2`` into ``vec_1`` from position ``start_idx``; return ``vec_1``."""
    values = np.atleast_1d(np.asarray(vec_2))
    start = int(start_idx)
    end = start + len(values)
    if start < 0 or end > len(vec_1):
        raise IndexError("geometries - vector is too short to be filled")
    vec_1[start:end] = values if isinstance(vec_1, np.ndarray) else list(values)
    return vec_1


def matrix_to_list(mat, id=None) -> list:
    """Columns of a matrix, preceded by a column of ``id`` when one is given."""
    m = np.asarray(mat)
    if m.ndim != 2:
        raise TypeError("geometries - expecting a matrix")
    columns = [m[:, i].copy() for i in range(m.shape[1])]
    if id is None:
        return columns
    return [np.full(m.shape[0], id, dtype=m.dtype), *columns]


def vector_to_list(v, id=None) -> list:
    """Values of a vector, preceded by ``id`` when one is given."""
    values = list(np.atleast_1d(np.asarray(v)))
    if id is None:
        return values
    return [id, *values]


def collapse_list(lst, total_rows, id=None) -> list:
    """Collapse a list of lists of columns into one list of columns.

    Every inner list must have the same number of columns. The result has a
    leading id column (starting at ``id``, or 1, and incremented for each
    inner list) and is padded with NaN up to ``total_rows``.
    """
    inner_lists = [_items(inner) for inner in lst]
    if not inner_lists:
        return []

    n_cols = len(inner_lists[0])
    result = [np.full(int(total_rows), np.nan) for _ in range(n_cols + 1)]
    next_id = 1.0 if id is None else float(id)
    row = 0
    size = 0
    for inner in inner_lists:
        if len(inner) != n_cols:
            raise ValueError("geometries - inner lists have differing numbers of columns")
        for j, column in enumerate(inner):
            values = np.atleast_1d(np.asarray(column, dtype=np.float64))
            size = len(values)
            fill_vector(result[j + 1], values, row)
        fill_vector(result[0], np.full(size, next_id), row)
        row += size
        next_id += 1
    return result