"""Nesting and unnesting geometry lists to a given depth."""

from __future__ import annotations

from collections.abc import Mapping

from geometries.dimensions import geometry_dimensions


def _is_list(x) -> bool:
    return isinstance(x, (list, tuple, Mapping))


def _items(x) -> list:
    if isinstance(x, Mapping):
        return list(x.values())
    return list(x)


def nest(x, depth):
    """Wrap ``x`` in ``depth`` single-element lists; ``depth < 1`` returns ``x``."""
    for _ in range(int(depth)):
        x = [x]
    return x


def unnest(x, depth):
    """Remove ``depth`` levels of list nesting (at least one).

    At each level the elements of inner lists are spliced into their parent;
    elements that are not lists are kept as they are.
    """
    if not _is_list(x):
        raise TypeError("geometries - can only unnest list objects")
    result = x
    for _ in range(max(int(depth), 1)):
        flat = []
        for item in _items(result):
            if _is_list(item):
                flat.extend(_items(item))
            else:
                flat.append(item)
        result = flat
    return result


def nest_to_depth(x, depth):
    """Nest or unnest ``x`` so that its deepest nesting equals ``depth``.

    The depth is measured as by :func:`geometries.dimensions.geometry_dimensions`;
    it is the depth of the result, not an amount to add.
    """
    current = geometry_dimensions(x).max_nest
    if current == depth:
        return x
    if current > depth:
        return unnest(x, current - depth)
    return nest(x, depth - current)