import numpy as np
import pandas as pd
import pytest

from geometries.builder import make_geometries, make_geometry_collection
from geometries.sexp import get_attribute, has_been_closed_attribute

CLASS_ATTR = {"class": ["XY", "LINESTRING", "sfg"]}


@pytest.fixture
def frame():
    x = np.arange(7.0)
    return pd.DataFrame({"id": [1, 1, 1, 2, 2, 2, 2], "x": x, "y": x * 10})


@pytest.fixture
def polygons():
    x = np.arange(8.0)
    return pd.DataFrame(
        {
            "poly": [1, 1, 1, 1, 1, 2, 2, 2],
            "ring": [1, 1, 2, 2, 2, 1, 1, 1],
            "x": x,
            "y": x + 100,
        }
    )


def test_single_id_splits_rows(frame):
    res = make_geometries(frame, [0], [1, 2])
    assert len(res) == frame["id"].nunique()
    for mat, key in zip(res, frame["id"].unique()):
        np.testing.assert_array_equal(mat, frame.loc[frame["id"] == key, ["x", "y"]].to_numpy())


def test_names_match_positions(frame):
    by_pos = make_geometries(frame, [0], [1, 2])
    by_name = make_geometries(frame, ["id"], ["x", "y"])
    assert len(by_pos) == len(by_name)
    for a, b in zip(by_pos, by_name):
        np.testing.assert_array_equal(a, b)


def test_matrix_input_matches_frame(frame):
    from_frame = make_geometries(frame, [0], [1, 2])
    from_matrix = make_geometries(frame.to_numpy(dtype=float), [0], [1, 2])
    for a, b in zip(from_frame, from_matrix):
        np.testing.assert_array_equal(a, b)


def test_mixed_column_types_raise(frame):
    with pytest.raises(TypeError):
        make_geometries(frame, [0], ["x", "y"])


def test_no_id_columns_raise(frame):
    with pytest.raises(ValueError):
        make_geometries(frame, [], [1, 2])


def test_two_ids_nest(polygons):
    res = make_geometries(polygons, [0, 1], [2, 3])
    assert len(res) == polygons["poly"].nunique()
    assert [len(p) for p in res] == [2, 1]
    stacked = np.vstack([ring for poly in res for ring in poly])
    np.testing.assert_array_equal(stacked, polygons[["x", "y"]].to_numpy())


def test_attributes_on_matrices_with_one_id(frame):
    res = make_geometries(frame, [0], [1, 2], attributes=CLASS_ATTR)
    assert all(get_attribute(m, "class") == CLASS_ATTR["class"] for m in res)


def test_attributes_on_outer_lists_with_two_ids(polygons):
    res = make_geometries(polygons, [0, 1], [2, 3], attributes=CLASS_ATTR)
    assert all(get_attribute(p, "class") == CLASS_ATTR["class"] for p in res)
    assert get_attribute(res[0][0], "class") is None


def test_close_and_mark():
    df = pd.DataFrame(
        {
            "id": [1, 1, 1, 2, 2, 2, 2],
            "x": [0.0, 1.0, 1.0, 0.0, 2.0, 2.0, 0.0],
            "y": [0.0, 0.0, 1.0, 0.0, 0.0, 2.0, 0.0],
        }
    )
    res = make_geometries(df, [0], [1, 2], close=True, closed_attribute=True)
    assert res[0].shape[0] == 4
    np.testing.assert_array_equal(res[0][0], res[0][-1])
    assert has_been_closed_attribute(res[0])
    assert not has_been_closed_attribute(res[1])
    np.testing.assert_array_equal(res[1], df.loc[df["id"] == 2, ["x", "y"]].to_numpy())


def test_close_too_few_rows_raises():
    df = pd.DataFrame({"id": [1, 1], "x": [0.0, 1.0], "y": [0.0, 1.0]})
    with pytest.raises(ValueError):
        make_geometries(df, [0], [1, 2], close=True)


def test_geometry_collection_counts_empty_points():
    lst = {"x": np.array([1.0, np.nan, 3.0]), "y": np.array([4.0, 5.0, 6.0])}
    points, n_empty = make_geometry_collection(lst)
    assert n_empty == 1
    assert len(points) == len(lst["x"])
    np.testing.assert_array_equal(points[0], [lst["x"][0], lst["y"][0]])
    np.testing.assert_array_equal(points[2], [lst["x"][2], lst["y"][2]])


def test_geometry_collection_attributes():
    lst = {"x": np.array([1.0, 2.0]), "y": np.array([3.0, 4.0])}
    points, n_empty = make_geometry_collection(lst, CLASS_ATTR)
    assert n_empty == 0
    assert all(get_attribute(p, "class") == CLASS_ATTR["class"] for p in points)