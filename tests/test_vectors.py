import numpy as np
import pandas as pd
import pytest

from geometries.sexp import GeometryArray
from geometries.vectors import (
    concatenate_vectors,
    expand_vector,
    where_is,
    where_is_all,
)


def test_where_is_finds_first_position():
    values = ["a", "b", "c", "b"]
    assert where_is("b", values) == values.index("b")


def test_where_is_missing_is_minus_one():
    assert where_is("z", ["a", "b"]) == -1
    assert where_is(7, [1, 2, 3]) == -1


def test_where_is_all_names_in_data_frame():
    df = pd.DataFrame({"x": [1.0], "y": [2.0], "z": [3.0]})
    res = where_is_all(["z", "x", "q"], df)
    assert res.tolist() == [2, 0, -1]


def test_where_is_all_names_in_matrix():
    m = GeometryArray(np.zeros((2, 2)), attrs={"dimnames": (None, ["lon", "lat"])})
    assert where_is_all(["lat"], m).tolist() == [1]


def test_where_is_all_integer_positions():
    m = np.zeros((3, 2))
    res = where_is_all([0, 5], m)
    assert res[0] == 0
    assert res[1] == -1


def test_where_is_all_rejects_other_types():
    with pytest.raises(TypeError):
        where_is_all([1 + 2j], np.zeros((2, 2)))


def test_concatenate_none_handling():
    assert concatenate_vectors(None, None) is None
    v = np.array([1, 2])
    assert concatenate_vectors(None, v) is v
    assert concatenate_vectors(v, None) is v


def test_concatenate_integers_keeps_first_appearance_order():
    res = concatenate_vectors([3, 1], [1, 2])
    assert res.tolist() == [3, 1, 2]
    assert res.dtype.kind == "i"


def test_concatenate_scalar_integers():
    res = concatenate_vectors(4, 4)
    assert res.tolist() == [4]


def test_concatenate_doubles_unique():
    a = np.array([1.5, 2.5])
    b = np.array([2.5, 0.5])
    res = concatenate_vectors(a, b)
    assert len(res) == len(set(a.tolist()) | set(b.tolist()))
    assert res.tolist()[: len(a)] == a.tolist()


def test_concatenate_strings():
    res = concatenate_vectors(["x", "y"], "x")
    assert list(res) == ["x", "y"]


def test_concatenate_logical_as_integers():
    res = concatenate_vectors(np.array([True, True]), np.array([False]))
    assert res.dtype.kind == "i"
    assert res.tolist() == [int(True), int(False)]


def test_concatenate_type_mismatch_raises():
    with pytest.raises(TypeError):
        concatenate_vectors([1, 2], ["a"])
    with pytest.raises(TypeError):
        concatenate_vectors(np.array([True]), np.array([1]))


def test_concatenate_unsupported_type_raises():
    with pytest.raises(TypeError):
        concatenate_vectors(np.array([1j]), np.array([2j]))


def test_expand_vector_numeric():
    v = np.array([10.0, 20.0, 30.0])
    res = expand_vector(v, [0, 0, 2])
    assert res.tolist() == [v[0], v[0], v[2]]


def test_expand_vector_strings_and_lists():
    assert list(expand_vector(np.array(["a", "b"]), [1, 0])) == ["b", "a"]
    lst = [[1], [2, 3]]
    assert expand_vector(lst, [1, 1]) == [lst[1], lst[1]]


def test_expand_vector_bytes():
    assert expand_vector(b"ab", [1, 0]) == b"ba"


def test_expand_vector_float_index_raises():
    with pytest.raises(TypeError):
        expand_vector(np.array([1, 2]), np.array([0.0, 1.0]))


def test_expand_vector_out_of_range_raises():
    with pytest.raises(IndexError):
        expand_vector(np.array([1, 2]), [2])
    with pytest.raises(IndexError):
        expand_vector([1, 2], [-1])


def test_expand_vector_unsupported_type_raises():
    with pytest.raises(TypeError):
        expand_vector(np.array(["2020-01-01"], dtype="datetime64[D]"), [0])