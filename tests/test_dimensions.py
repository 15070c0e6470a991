import numpy as np
import pandas as pd
import pytest

from geometries.dimensions import (
    DIMENSION,
    END,
    NEST,
    RTYPE,
    START,
    GeometryDimensions,
    geometry_dimensions,
)
from geometries.lists import VectorType


def _matrix(n_row, n_col, dtype=float):
    return np.arange(n_row * n_col, dtype=dtype).reshape(n_row, n_col)


def test_single_matrix():
    m = _matrix(4, 2)
    result = geometry_dimensions(m)
    assert isinstance(result, GeometryDimensions)
    assert result.dimensions.tolist() == [[0, m.shape[0] - 1, m.shape[1], 0, VectorType.DOUBLE]]
    assert result.max_dimension == m.shape[1]
    assert result.max_nest == 0


def test_integer_matrix_type():
    result = geometry_dimensions(_matrix(3, 2, dtype=np.int64))
    assert result.dimensions[0, RTYPE] == VectorType.INTEGER


def test_single_vector():
    v = np.array([1.0, 2.0, 3.0])
    result = geometry_dimensions(v)
    assert result.dimensions.tolist() == [[0, 0, v.size, 0, VectorType.DOUBLE]]
    assert result.max_dimension == v.size
    assert result.max_nest == 0


def test_list_of_matrices():
    m1, m2 = _matrix(3, 2), _matrix(2, 3)
    result = geometry_dimensions([m1, m2])
    dims = result.dimensions
    assert dims.shape == (2, 5)
    assert dims[0, START] == 0
    assert dims[0, END] - dims[0, START] + 1 == m1.shape[0]
    assert dims[1, END] - dims[1, START] + 1 == m2.shape[0]
    assert dims[1, START] == dims[0, END] + 1
    assert dims[:, DIMENSION].tolist() == [m1.shape[1], m2.shape[1]]
    assert dims[:, NEST].tolist() == [1, 1]
    assert result.max_dimension == m2.shape[1]
    assert result.max_nest == 1


def test_list_of_vectors_counts_one_each():
    result = geometry_dimensions([np.array([1.0, 2.0]), np.array([3.0, 4.0, 5.0])])
    dims = result.dimensions
    assert dims[:, START].tolist() == [0, 1]
    assert dims[:, END].tolist() == [0, 1]
    assert result.max_nest == 1


def test_nested_geometries_increase_nest():
    m = _matrix(4, 2)
    result = geometry_dimensions([[m], [[m]]])
    assert result.dimensions[:, NEST].tolist() == [2, 3]
    assert result.max_nest == 3


def test_list_siblings_share_nesting_level():
    m = _matrix(4, 2)
    shallow = geometry_dimensions([[[m]]])
    siblings = geometry_dimensions([[[m], [m], [m]]])
    assert siblings.dimensions[0, NEST] == shallow.dimensions[0, NEST]
    assert siblings.dimensions[0, END] + 1 == 3 * m.shape[0]


def test_coordinates_are_counted_across_inner_list():
    m1, m2 = _matrix(4, 2), _matrix(5, 2)
    result = geometry_dimensions([[m1, m2]])
    assert result.dimensions[0, END] + 1 == m1.shape[0] + m2.shape[0]


def test_rows_are_contiguous():
    geoms = [_matrix(3, 2), [_matrix(2, 2), _matrix(4, 2)], np.array([1.0, 2.0])]
    dims = geometry_dimensions(geoms).dimensions
    assert (dims[1:, START] == dims[:-1, END] + 1).all()


def test_empty_list():
    result = geometry_dimensions([])
    assert result.dimensions.shape == (0, 5)
    assert result.max_dimension == 0
    assert result.max_nest == 0


def test_character_vector_type():
    result = geometry_dimensions(np.array(["a", "b"]))
    assert result.dimensions[0, RTYPE] == VectorType.CHARACTER


def test_dataframe_columns_are_vectors():
    df = pd.DataFrame({"x": [1.0, 2.0], "y": [3.0, 4.0]})
    result = geometry_dimensions(df)
    assert result.dimensions.shape[0] == df.shape[1]
    assert result.dimensions[:, DIMENSION].tolist() == [len(df), len(df)]


def test_dataframe_inside_list_is_rejected():
    df = pd.DataFrame({"x": [1.0], "y": [2.0]})
    with pytest.raises(TypeError):
        geometry_dimensions([df])


@pytest.mark.parametrize("x", [None, object(), np.array([1 + 2j])])
def test_unsupported_types(x):
    with pytest.raises(TypeError):
        geometry_dimensions(x)


def test_unsupported_element_in_list():
    with pytest.raises(TypeError):
        geometry_dimensions([_matrix(2, 2), None])