"""Building nested lists of geometry matrices from columns of ids and coordinates."""

from __future__ import annotations

import numpy as np

from geometries.lists import as_list
from geometries.matrix import to_geometry_matrix
from geometries.sexp import attach_attributes, is_null_geometry, sexp_col_int
from geometries.split import split_by_id


def _column_kind(cols) -> str:
    if isinstance(cols, str):
        return "str"
    arr = np.atleast_1d(np.asarray(cols))
    if arr.size == 0:
        return "int"
    kind = arr.dtype.kind
    if kind in "iu":
        return "int"
    if kind == "f":
        return "double"
    if kind == "U" or (kind == "O" and all(isinstance(e, str) for e in arr.ravel())):
        return "str"
    return kind


def _build(lst, ids, geometry_cols, attributes, close, closed_attribute) -> list:
    n_id_cols = len(ids)
    if n_id_cols == 0:
        raise ValueError("geometries - at least one id column is required")
    outer_attributes = bool(attributes) and n_id_cols != 1

    level: list = []
    inner_sums = None
    # work from the innermost id outwards; each level groups the one inside it
    for i in reversed(range(n_id_cols)):
        last = i == n_id_cols - 1
        split = split_by_id(
            lst, ids[: i + 1], geometry_cols, last, attributes, close, closed_attribute
        )
        if last:
            level = list(split.coords)
        else:
            ends = np.searchsorted(inner_sums, split.sums)
            starts = np.concatenate(([0], ends[:-1] + 1))
            level = [level[s : e + 1] for s, e in zip(starts, ends)]
            if i == 0 and outer_attributes:
                level = [attach_attributes(obj, attributes) for obj in level]
        inner_sums = split.sums
    return level


def make_geometries(
    x, id_cols, geometry_cols, attributes=None, close=False, closed_attribute=False
) -> list:
    """Build geometries from the columns of a matrix, data frame or list of columns.

    Rows are grouped by runs of equal values over ``id_cols`` (outermost id
    first); each group of the innermost id becomes a matrix of the
    ``geometry_cols`` and each outer id a list of the groups inside it.
    ``id_cols`` and ``geometry_cols`` are both positions or both names.
    ``attributes`` go on the matrices when there is one id column, otherwise
    on the outermost lists. ``close`` and ``closed_attribute`` are as for
    :func:`geometries.split.split_by_id`.
    """
    if _column_kind(id_cols) != _column_kind(geometry_cols):
        raise TypeError("geometries - id_columns and geometry_columns must be the same type")
    int_ids = sexp_col_int(x, id_cols)
    int_geom = sexp_col_int(x, geometry_cols)
    lst = as_list(x)
    return _build(lst, int_ids, int_geom, dict(attributes or {}), close, closed_attribute)


def make_geometry_collection(lst, attributes=None) -> tuple[list, int]:
    """Make one point per row of a list of columns.

    Returns the points, each carrying ``attributes``, and the number of them
    that are empty (a missing x or y value).
    """
    attributes = dict(attributes or {})
    nm = np.asarray(to_geometry_matrix(lst))
    points = []
    n_empty = 0
    for row in nm:
        point = row.copy()
        if is_null_geometry(point):
            n_empty += 1
        if attributes:
            point = attach_attributes(point, attributes)
        points.append(point)
    return points, n_empty