"""Counting the coordinates, dimension and nesting of geometries."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

import numpy as np
import pandas as pd

from geometries.lists import VectorType

START, END, DIMENSION, NEST, RTYPE = range(5)

_UNSUPPORTED_COORDINATE = "geometries - unsupported coordinate type"
_UNSUPPORTED_TYPE = "geometries - unsupported type for counting coordinates"


@dataclass
class GeometryDimensions:
    """Per-geometry rows of ``[start, end, dimension, nest, type]`` and their maxima.

    ``start`` and ``end`` are the positions of a geometry's first and last
    coordinate when all coordinates are stacked; ``type`` is a
    :class:`~geometries.lists.VectorType` code.
    """

    dimensions: np.ndarray
    max_dimension: int
    max_nest: int


def _leaf_type(x) -> int | None:
    if isinstance(x, (bool, np.bool_)):
        return int(VectorType.LOGICAL)
    if isinstance(x, (int, np.integer)):
        return int(VectorType.INTEGER)
    if isinstance(x, (float, np.floating)):
        return int(VectorType.DOUBLE)
    if isinstance(x, str):
        return int(VectorType.CHARACTER)
    if isinstance(x, pd.Series):
        x = x.to_numpy()
    if isinstance(x, np.ndarray):
        kind = x.dtype.kind
        if kind == "b":
            return int(VectorType.LOGICAL)
        if kind in "iu":
            return int(VectorType.INTEGER)
        if kind == "f":
            return int(VectorType.DOUBLE)
        if kind == "U":
            return int(VectorType.CHARACTER)
        if kind == "O" and x.size and all(isinstance(e, str) for e in x.ravel()):
            return int(VectorType.CHARACTER)
    return None


def _is_list(x) -> bool:
    return isinstance(x, (list, tuple, Mapping))


def _items(x) -> list:
    if isinstance(x, pd.DataFrame):
        return [x.iloc[:, i].to_numpy() for i in range(x.shape[1])]
    if isinstance(x, Mapping):
        return list(x.values())
    return list(x)


def _as_array(x) -> np.ndarray:
    if isinstance(x, pd.Series):
        return x.to_numpy()
    return np.asarray(x)


class _Walker:
    """Walks one geometry; maxima are kept across geometries."""

    def __init__(self):
        self.max_dimension = 0
        self.max_nest = 0
        self.reset()

    def reset(self) -> None:
        self.count = 0
        self.dimension = 0
        self.nest = 1
        self.rtype = 0

    def visit(self, geom, loop_counter: int = 0, list_counter: int = 0) -> None:
        if isinstance(geom, pd.DataFrame):
            raise TypeError(_UNSUPPORTED_COORDINATE)
        if _is_list(geom):
            # lists at the same level as an earlier list sibling do not add nesting
            if loop_counter == 0 or list_counter == 0:
                self.nest += 1
            list_counter = 0
            for i, item in enumerate(_items(geom)):
                self.visit(item, i, list_counter)
                if _is_list(item):
                    list_counter += 1
        else:
            code = _leaf_type(geom)
            if code is None:
                raise TypeError(_UNSUPPORTED_COORDINATE)
            self.rtype = code
            arr = _as_array(geom)
            if arr.ndim == 2:
                self.count += arr.shape[0]
                self.dimension = arr.shape[1]
            else:
                self.count += 1
                self.dimension = int(arr.size)
        self.max_dimension = max(self.max_dimension, self.dimension)
        self.max_nest = max(self.max_nest, self.nest)


def _list_dimensions(items: list) -> GeometryDimensions:
    walker = _Walker()
    rows = []
    cumulative = 0
    for geom in items:
        walker.reset()
        walker.visit(geom)
        start = cumulative
        cumulative += walker.count
        rows.append((start, cumulative - 1, walker.dimension, walker.nest, walker.rtype))
    dims = np.array(rows, dtype=np.int64).reshape(-1, 5)
    return GeometryDimensions(dims, walker.max_dimension, walker.max_nest)


def geometry_dimensions(geometries) -> GeometryDimensions:
    """Coordinate counts of a matrix, a vector, or each geometry in a list.

    A matrix or vector is a single geometry with no nesting. Each geometry in
    a list must hold its coordinates at one level of nesting; a geometry that
    is a matrix has nest 1, a list of matrices nest 2, and so on.
    """
    code = _leaf_type(geometries)
    if isinstance(geometries, np.ndarray) and geometries.ndim == 2:
        if code is None:
            raise TypeError(_UNSUPPORTED_TYPE)
        n_row, n_col = geometries.shape
        dims = np.array([[0, n_row - 1, n_col, 0, code]], dtype=np.int64)
        return GeometryDimensions(dims, int(n_col), 0)
    if _is_list(geometries) or isinstance(geometries, pd.DataFrame):
        return _list_dimensions(_items(geometries))
    if code is not None:
        length = int(_as_array(geometries).size)
        dims = np.array([[0, 0, length, 0, code]], dtype=np.int64)
        return GeometryDimensions(dims, length, 0)
    raise TypeError(_UNSUPPORTED_TYPE)