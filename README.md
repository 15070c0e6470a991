# geometries

Tools for turning tables of ids and coordinates into nested geometry
structures and back again. The package also has the small utilities those
conversions need.

The package works with these kinds of geometry:

- a **point** is a numeric vector (a one-dimensional numpy array);
- a **line** or **ring** is a numeric matrix (a two-dimensional numpy array)
  with one coordinate per row;
- a **polygon**, **multi-polygon** and so on is a list that nests such
  matrices.

Input tables can be pandas data frames, numpy matrices, or plain lists or
dicts of columns.

## Installation

```
pip install geometries
```

## Building geometries from a table

`geometries.builder.make_geometries(x, id_cols, geometry_cols, attributes=None, close=False, closed_attribute=False)`
groups rows into runs of equal values over the id columns. The outermost id
comes first.

- Each run of the innermost id becomes a float matrix of the geometry
  columns.
- Each outer id becomes a list of the groups inside it.
- `id_cols` and `geometry_cols` must both be positions or both be names.

```python
import pandas as pd
from geometries.builder import make_geometries

df = pd.DataFrame({
    "id": [1, 1, 1, 2, 2, 2],
    "x":  [0, 1, 1, 5, 6, 6],
    "y":  [0, 0, 1, 5, 5, 6],
})

lines = make_geometries(df, ["id"], ["x", "y"])          # two 3x2 matrices
rings = make_geometries(df, ["id"], ["x", "y"], close=True)  # two 4x2 matrices
```

**Closing rings.** With `close=True`, a matrix whose last row differs from
its first gets the first row appended. A closed ring must have at least four
rows, otherwise `ValueError` is raised. With `closed_attribute=True`, each
matrix that had to be closed also carries the attribute
`{"closed": "has_been_closed"}`.

**Attributes.** The `attributes` mapping goes on the geometry matrices when
there is a single id column. When there are several id columns, it goes on
the outermost lists instead.

Attributes live in an `.attrs` dictionary. `geometries.sexp.attach_attributes`
returns arrays as `GeometryArray` and lists as `GeometryList`, and both carry
that dictionary. `geometries.sexp.get_attribute(obj, name)` reads one
attribute back.

`geometries.builder.make_geometry_collection(lst, attributes=None)` turns
each row of a list of columns into a point. It returns the points together
with the number of empty ones, meaning points with a missing x or y.

The lower-level step is `geometries.split.split_by_id`. It returns a
`SplitResult`, which has three fields:

- `nelems`: the row count of each run;
- `sums`: the running totals of those counts;
- `coords`: optionally, the matrices of each run.

## Getting coordinates back out

`geometries.coordinates.gm_coordinates(geometries)` flattens a vector, a
matrix or a list of geometries into a data frame with these columns:

- `id` numbers the geometries of a list from 1;
- `id1`, `id2`, ... number the elements at each level of nesting;
- `c1`, `c2`, ... hold the coordinates. A value is missing where a geometry
  has fewer dimensions than the widest one.

```python
from geometries.coordinates import gm_coordinates

coords = gm_coordinates(lines)   # columns: id, id1, c1, c2
```

`geometries.coordinates.coordinates(geometry)` returns the same information
for a single geometry, as a list of columns.

## Other utilities

**Geometry shape**

- `geometries.bbox.calculate_bbox(x, geometry_cols=None)` returns
  `[xmin, ymin, xmax, ymax]` for a vector, a matrix, a data frame or a list
  of them. For example, `calculate_bbox(df, ["x", "y"])` gives
  `[0., 0., 6., 6.]`. `make_bbox(x, y, bbox=None)` extends a box to cover
  the given values.
- `geometries.dimensions.geometry_dimensions(geometries)` returns a
  `GeometryDimensions`. It holds one row `[start, end, dimension, nest, type]`
  per geometry, plus `max_dimension` and `max_nest`.
- `geometries.nest.nest_to_depth(x, depth)` nests or unnests a list geometry
  so that its deepest nesting equals `depth`. `nest` and `unnest` add or
  remove a given number of levels.
- `geometries.close.close_matrix(x)` closes a matrix, or every matrix inside
  a nested list. `matrix_is_closed(mat)` checks whether a matrix is already
  closed.

**Building matrices**

- `geometries.matrix.to_geometry_matrix(x, geometry_cols=None, keep_names=False)`
  builds a coordinate matrix from a vector, matrix, list or data frame.

**Ids and runs**

- `geometries.rleid.rleid(df, ids)` gives run-length group numbers over id
  columns.
- `geometries.rleid.rleid_indices(x, col=None)` gives the positions where
  the runs start.
- `geometries.lines.id_positions(line_ids, unique_ids=None)` gives the start
  and end row of each id's run.
- `geometries.unique.get_sexp_unique(x)` returns unique values in the order
  they are first seen.
- `geometries.unique.get_ids(x, id_col)` returns the unique values of an id
  column.

**Lists**

- `geometries.lists.unlist_list(lst)` flattens a nested list into one vector
  of the widest type found. `list_sizes`, `as_list`, `fill_list`,
  `collapse_list`, `matrix_to_list` and `vector_to_list` are the related list
  helpers.

**Columns and vectors**

- `geometries.columns.other_columns(x, *args)` returns the columns of `x`
  that are not among up to three groups of id columns.
- `column_positions(x, cols)` finds named columns. `column_check` and
  `column_exists` check that requested columns exist.
- `geometries.vectors.concatenate_vectors`, `where_is`, `where_is_all` and
  `expand_vector` combine vectors and look values up in them.

**Inspection helpers**

- `geometries.sexp` has helpers for inspecting objects, such as
  `sexp_n_row`, `sexp_n_col`, `sexp_col_names` and `sexp_col_int`.
- It also has helpers for building data frames: `make_dataframe` and
  `matrix_to_df`.

Invalid input raises `ValueError`, `TypeError`, `IndexError` or `KeyError`,
with a message beginning `geometries -`.

## What the package does not do

This is a library only. It has no command-line tool.

It does not read or write spatial file formats. It has no coordinate
reference systems and does no geometric operations such as area, distance or
intersection. It works only on the arrays, lists and data frames you pass
in.

## Running the tests

```
pip install -e ".[test]"
pytest
```