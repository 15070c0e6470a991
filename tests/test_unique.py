import numpy as np
import pandas as pd
import pytest

from geometries.sexp import attach_attributes
from geometries.unique import get_ids, get_sexp_unique


def test_preserves_first_appearance_order():
    res = get_sexp_unique(np.array([3, 1, 3, 2, 1]))
    assert res.tolist() == [3, 1, 2]


def test_integer_dtype_preserved():
    values = np.array([5, 5, 4], dtype=np.int32)
    assert get_sexp_unique(values).dtype == values.dtype


def test_strings():
    values = np.array(["b", "a", "b"])
    res = get_sexp_unique(values)
    assert res.tolist() == ["b", "a"]
    assert res.dtype == values.dtype


def test_input_not_modified():
    values = np.array([2.0, 2.0, 1.0])
    get_sexp_unique(values)
    assert values.tolist() == [2.0, 2.0, 1.0]


def test_unique_invariants():
    values = np.array([2.5, 2.5, 1.0, 2.5, 0.0, 1.0])
    res = get_sexp_unique(values)
    assert len(res) == len(set(values.tolist()))
    assert set(res.tolist()) == set(values.tolist())
    first_positions = [values.tolist().index(v) for v in res.tolist()]
    assert first_positions == sorted(first_positions)


def test_categorical_keeps_categories():
    cat = pd.Categorical(["b", "a", "b"], categories=["a", "b", "c"])
    res = get_sexp_unique(cat)
    assert list(res) == ["b", "a"]
    assert list(res.categories) == ["a", "b", "c"]


def test_unsupported_type():
    with pytest.raises(TypeError):
        get_sexp_unique(np.array([1 + 2j, 3 + 4j]))


def test_get_ids_without_column():
    assert get_ids(np.zeros((3, 2)), None).tolist() == [1]


def test_get_ids_dataframe_index_and_name_agree():
    df = pd.DataFrame({"id": [1, 1, 2, 3, 3], "x": [0.0, 1.0, 2.0, 3.0, 4.0]})
    by_index = get_ids(df, 0)
    by_name = get_ids(df, "id")
    assert by_index.tolist() == by_name.tolist()
    assert by_index.tolist() == get_sexp_unique(df["id"]).tolist()


def test_get_ids_matrix():
    m = np.array([[1.0, 9.0], [1.0, 8.0], [2.0, 7.0]])
    assert get_ids(m, [0]).tolist() == get_sexp_unique(m[:, 0]).tolist()


def test_get_ids_named_matrix():
    m = attach_attributes(
        np.array([[1.0, 9.0], [2.0, 9.0]]), {"dimnames": (None, ["x", "id"])}
    )
    assert get_ids(m, "id").tolist() == [9.0]


def test_get_ids_unnamed_matrix_uses_default_names():
    m = np.array([[1.0, 9.0], [2.0, 9.0]])
    assert get_ids(m, "V2").tolist() == get_ids(m, 1).tolist()


@pytest.mark.parametrize("index", [2, -1])
def test_get_ids_out_of_range(index):
    with pytest.raises(IndexError):
        get_ids(np.zeros((3, 2)), index)


def test_get_ids_vector_is_rejected():
    with pytest.raises(TypeError):
        get_ids(np.arange(3.0), 0)


def test_get_ids_float_column_rejected():
    with pytest.raises(TypeError):
        get_ids(np.zeros((3, 2)), 0.0)


def test_get_ids_missing_name():
    df = pd.DataFrame({"id": [1, 2]})
    with pytest.raises(KeyError):
        get_ids(df, "nope")