"""Collection utility functions."""

from collections.abc import Callable, Iterable
from typing import TypeVar

_K = TypeVar("_K")
_V = TypeVar("_V")


def group_by(values: Iterable[_V], key: Callable[[_V], _K]) -> dict[_K, list[_V]]:
    """Group values into a dict of lists by key.

    Both the keys and the values within each group keep the order in which
    they first appear in ``values``.

    Example:
        >>> group_by(["apple", "bean", "avocado"], key=lambda it: it[0])
        {'a': ['apple', 'avocado'], 'b': ['bean']}
    """
    groups: dict[_K, list[_V]] = {}
    for value in values:
        groups.setdefault(key(value), []).append(value)
    return groups
