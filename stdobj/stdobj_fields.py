"""
The field classifier: splits a clone's argument table into public object
data and private behavior fields.
"""
from typing import Any, Dict, Mapping, Optional

from stdobj.stdobj_datatypes import Container, FieldMap, Fields, is_private
from stdobj.stdobj_debug import argscheck
from stdobj.stdobj_table import as_table


@argscheck("stdobj.mapfields (table, table, ?table)")
def mapfields(new: Any, src: Any, rename: Optional[Any] = None) -> Fields:
    """Return ``new``'s public fields with ``src`` merged in, plus ``src``'s private fields.

    Keys starting with ``_`` in ``src`` are collected verbatim into the
    private partition. Every other key is renamed through ``rename``
    (a sequence of names for positional keys 1, 2, ..., or an
    ``{old: new}`` mapping) when it has an entry there. Positional keys
    past the end of ``rename`` keep their position. An entry renamed to an
    underscore name joins the private partition, unless ``src`` names that
    private field itself. A ``None`` value removes the key from the result.

    Neither ``new`` nor ``src`` is modified. Call it from an ``_init``
    function to get the default field handling for a table argument:

        def bag_init(new, *args):
            if args and isinstance(args[0], dict):
                return mapfields(new, args[0])
            ...
    """
    public: Dict[Any, Any] = as_table(new)
    private: Dict[str, Any] = {}
    field_map = FieldMap(rename) if rename is not None else None

    # Renamed entries are applied before directly named ones, so an
    # explicit `car=` beats a positional value mapped onto `car`.
    renamed: Dict[Any, Any] = {}
    direct: Dict[Any, Any] = {}
    for key, value in _entries(src).items():
        if is_private(key):
            private[key] = value
        elif field_map is not None and key in field_map:
            renamed[field_map.get(key)] = value
        else:
            direct[key] = value

    for key in [k for k in renamed if is_private(k)]:
        private.setdefault(key, renamed.pop(key))

    for entries in (renamed, direct):
        for key, value in entries.items():
            if value is None:
                public.pop(key, None)
            else:
                public[key] = value

    return Fields(public, private)


def _entries(src: Any) -> Mapping[Any, Any]:
    # Objects only expose their public view.
    if isinstance(src, Container):
        return src._data
    return as_table(src)


__all__ = ["mapfields"]
