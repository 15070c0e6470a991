"""Flattening geometries into data frames of ids and coordinates."""

from __future__ import annotations

from collections.abc import Mapping

import numpy as np
import pandas as pd

from geometries.dimensions import END, START, geometry_dimensions
from geometries.lists import collapse_list, fill_vector
from geometries.sexp import make_dataframe

_NO_COORDINATES = "geometries - can't access coordinates for this object"
_UNSUPPORTED = "geometries - only vectors, matrices and lists are supported"


def _is_list(x) -> bool:
    return isinstance(x, (list, tuple, Mapping))


def _items(x) -> list:
    if isinstance(x, Mapping):
        return list(x.values())
    return list(x)


def _numeric(x) -> np.ndarray:
    if isinstance(x, pd.Series):
        x = x.to_numpy()
    arr = np.asarray(x)
    if arr.dtype.kind not in "biuf" or arr.ndim > 2:
        raise TypeError(_NO_COORDINATES)
    return arr.astype(np.float64)


def coordinate_column_names(nest, dim) -> list:
    """Column names ``id``, ``id1`` .. ``id<nest>``, ``c1`` .. ``c<dim>``."""
    return (
        ["id"]
        + [f"id{i + 1}" for i in range(int(nest))]
        + [f"c{i + 1}" for i in range(int(dim))]
    )


def _columns_and_rows(geometry) -> tuple[list, int]:
    if _is_list(geometry):
        parts = []
        rows = 0
        for inner in _items(geometry):
            columns, n = _columns_and_rows(inner)
            parts.append(columns)
            rows += n
        return collapse_list(parts, rows), rows

    arr = _numeric(geometry)
    if arr.ndim == 2:
        n_row = arr.shape[0]
        return [np.ones(n_row), *(arr[:, i].copy() for i in range(arr.shape[1]))], n_row
    values = np.atleast_1d(arr)
    return [np.ones(1), *(np.array([v]) for v in values)], 1


def coordinates(geometry) -> list:
    """Columns of a single geometry: an id column followed by one column per coordinate.

    A vector gives one row and a matrix one row per coordinate, both with
    id 1. A list of geometries is collapsed, with a leading id column
    numbering its elements from 1.
    """
    columns, _ = _columns_and_rows(geometry)
    return columns


def _fill(geometry, res: list, start_row: int, coord_col: int, id_value: float):
    """Write ``geometry`` into ``res`` from ``start_row``; return the next row and id."""
    if _is_list(geometry):
        for inner in _items(geometry):
            dims = geometry_dimensions(inner)
            total = int(dims.dimensions[-1, END]) + 1
            id_col = coord_col - 2 - dims.max_nest
            fill_vector(res[id_col], np.full(total, id_value), start_row)
            # the id carries on from wherever the inner geometry left it
            start_row, id_value = _fill(inner, res, start_row, coord_col, id_value)
            id_value += 1
        return start_row, id_value

    arr = _numeric(geometry)
    if arr.ndim == 2:
        n_row = arr.shape[0]
        fill_vector(res[coord_col - 1], np.full(n_row, id_value), start_row)
        for i in range(arr.shape[1]):
            fill_vector(res[coord_col + i], arr[:, i], start_row)
        return start_row + n_row, id_value

    for i, value in enumerate(np.atleast_1d(arr)):
        res[coord_col + i][start_row] = value
    return start_row + 1, id_value


def _list_coordinates(geometries: list) -> pd.DataFrame:
    if not geometries:
        raise ValueError("geometries - no geometries found")
    dims = geometry_dimensions(geometries)
    table = dims.dimensions
    total = int(table[-1, END]) + 1
    coord_col = dims.max_nest + 1
    n_cols = dims.max_nest + dims.max_dimension + 1
    res = [np.full(total, np.nan) for _ in range(n_cols)]

    for geometry, row in zip(geometries, table):
        _fill(geometry, res, int(row[START]), coord_col, 1.0)

    shape_id = np.empty(total)
    for i, row in enumerate(table):
        shape_id[int(row[START]) : int(row[END]) + 1] = i + 1
    res[0] = shape_id

    names = coordinate_column_names(dims.max_nest, dims.max_dimension)
    return make_dataframe(res, total, names)


def gm_coordinates(geometries) -> pd.DataFrame:
    """Data frame of the coordinates of a vector, a matrix or a list of geometries.

    The ``id`` column numbers the geometries of a list from 1; the ``id1``,
    ``id2``, ... columns number the elements at each level of nesting; the
    ``c1``, ``c2``, ... columns hold the coordinates, missing where a
    geometry has fewer dimensions than the widest one.
    """
    if isinstance(geometries, pd.DataFrame):
        geometries = [geometries.iloc[:, i].to_numpy() for i in range(geometries.shape[1])]
    if _is_list(geometries):
        return _list_coordinates(_items(geometries))
    if isinstance(geometries, np.ndarray):
        arr = _numeric(geometries)
        columns, rows = _columns_and_rows(arr)
        dim = arr.shape[1] if arr.ndim == 2 else np.atleast_1d(arr).size
        return make_dataframe(columns, rows, coordinate_column_names(0, dim))
    raise TypeError(_UNSUPPORTED)