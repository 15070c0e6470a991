"""Splitting columns of coordinates into one matrix per run of ids."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from geometries.close import close_matrix, matrix_is_closed
from geometries.matrix import to_geometry_matrix
from geometries.rleid import rleid
from geometries.sexp import CLOSED_ATTRIBUTE, HAS_BEEN_CLOSED, attach_attributes, sexp_n_row


@dataclass
class SplitResult:
    """Run lengths of the id groups, their running totals and, optionally, the geometries."""

    nelems: np.ndarray
    sums: np.ndarray
    coords: list | None = None


def _finish_geometry(mat, close, closed_attribute, attributes):
    if close:
        was_closed = matrix_is_closed(mat)
        mat = close_matrix(mat)
        if closed_attribute and not was_closed:
            mat = attach_attributes(mat, {CLOSED_ATTRIBUTE: HAS_BEEN_CLOSED})
    if attributes:
        mat = attach_attributes(mat, attributes)
    return mat


def split_by_id(
    lst,
    ids,
    geometry_cols,
    last,
    attributes=None,
    close=False,
    closed_attribute=False,
) -> SplitResult:
    """Split the rows of ``lst`` into runs of equal values over the ``ids`` columns.

    ``nelems`` holds the number of rows in each run and ``sums`` their running
    total. When ``last`` is true the geometry columns of each run are also
    returned as matrices in ``coords``: closed when ``close`` is set (marked
    ``"has_been_closed"`` when ``closed_attribute`` is set and closing changed
    them), and given ``attributes`` when there is exactly one id column.
    """
    attributes = dict(attributes or {})
    id_idx = np.atleast_1d(np.asarray(ids, dtype=np.int64))
    geometry_idx = np.atleast_1d(np.asarray(geometry_cols, dtype=np.int64))

    geometry_mat = np.asarray(to_geometry_matrix(lst, geometry_idx))
    n_rows = sexp_n_row(lst)
    if n_rows == 0:
        raise ValueError("geometries - can't split an object with no rows")

    groups = rleid(lst, id_idx)
    starts = np.concatenate(([0], np.flatnonzero(np.diff(groups)) + 1))
    ends = np.append(starts[1:], n_rows)
    nelems = (ends - starts).astype(np.int64)
    sums = np.cumsum(nelems).astype(np.int64)

    if not last:
        return SplitResult(nelems, sums)

    geometry_attributes = attributes if len(id_idx) == 1 else {}
    coords = [
        _finish_geometry(
            geometry_mat[start:end].copy(), close, closed_attribute, geometry_attributes
        )
        for start, end in zip(starts, ends)
    ]
    return SplitResult(nelems, sums, coords)