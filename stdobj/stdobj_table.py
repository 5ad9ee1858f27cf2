"""
Table primitives shared by the object model: key ordering, shallow merges
and conversion of call arguments into tables.

A "table" here is any mapping, a Container (read through its public data),
or a list/tuple, which reads as one-based positional entries.
"""
from typing import Any, Dict, List, Mapping, Optional
import collections.abc

from stdobj.stdobj_datatypes import Container, is_positional


def is_table(value: Any) -> bool:
    return isinstance(value, (collections.abc.Mapping, list, tuple))


def as_table(value: Any) -> Dict[Any, Any]:
    """Return a new dict with the entries of a table-like ``value``."""
    if isinstance(value, Container):
        return dict(value._data)
    if isinstance(value, collections.abc.Mapping):
        return dict(value)
    if isinstance(value, (list, tuple)):
        return pack(*value)
    raise TypeError(f"expected a table (mapping, list or tuple), got {type(value).__name__}")


def pack(*values: Any) -> Dict[int, Any]:
    """Return ``values`` as a one-based positional table."""
    return {i: v for i, v in enumerate(values, start=1)}


def positional_length(table: Mapping[Any, Any]) -> int:
    """Length of the contiguous run of positional keys starting at 1."""
    n = 0
    while (n + 1) in table:
        n += 1
    return n


def okeys(table: Mapping[Any, Any]) -> List[Any]:
    """Public keys of ``table`` in a stable order.

    Integer keys come first in ascending order, then every other key
    ordered by its string form.
    """
    numeric, other = [], []
    for key in table.keys():
        if isinstance(key, int) and not isinstance(key, bool):
            numeric.append(key)
        else:
            other.append(key)
    numeric.sort()
    other.sort(key=str)
    return numeric + other


def instantiate(proto: Mapping[Any, Any], extra: Optional[Mapping[Any, Any]] = None) -> Dict[Any, Any]:
    """A new dict with the fields of ``proto`` and then ``extra`` merged in."""
    obj = dict(proto)
    if extra:
        obj.update(extra)
    return obj


def merge(dest: collections.abc.MutableMapping, src: Mapping[Any, Any]) -> collections.abc.MutableMapping:
    """Copy every entry of ``src`` into ``dest`` and return ``dest``."""
    for key, value in src.items():
        dest[key] = value
    return dest


def positional_values(table: Mapping[Any, Any]) -> List[Any]:
    """Values of the contiguous positional run, in order."""
    return [table[i] for i in range(1, positional_length(table) + 1)]


__all__ = [
    "as_table",
    "instantiate",
    "is_positional",
    "is_table",
    "merge",
    "okeys",
    "pack",
    "positional_length",
    "positional_values",
]
