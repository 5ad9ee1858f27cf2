"""
Container prototype.

The root prototype from which every other object is descended. There are
no classes as such: new objects are made by calling (cloning) an existing
object and then changing or adding to the clone. Further objects can then
be made by cloning the changed object, and so on.

    Cons = prototype({"_type": "Cons", "_init": ["car", "cdr"]})
    lst = Cons(["head", Cons(["tail"])])
    str(lst)  # 'Cons {car=head, cdr=Cons {car=tail}}'

Fields whose names start with an underscore go into the clone's behavior
record; everything else becomes the clone's data. ``_type`` names the
object, ``_init`` is either a sequence of names for positional arguments or
an initializer function, ``_methods`` holds named methods, and dunder fields
(``__str__``, ``__add__``, ``__eq__``, ``__len__``, ``__call__``) supply
the corresponding operators.
"""
import collections.abc
import logging
from typing import Any

from stdobj.stdobj_datatypes import Behavior, Container, Fields, FieldMap, Initializer
from stdobj.stdobj_debug import ArgumentCountError, argcheck, extramsg_toomany, getdebug
from stdobj.stdobj_fields import mapfields
from stdobj.stdobj_printer import render
from stdobj.stdobj_table import as_table, instantiate, merge

logger = logging.getLogger(__name__)


def clone(proto: Container, /, *args, **kwargs) -> Container:
    """Return a new object cloned from ``proto``.

    The clone starts with a shallow copy of ``proto``'s data. If the
    behavior record has an initializer, it receives the nascent clone and
    every argument, and returns the final fields. Otherwise the single
    argument table (merged with any keyword arguments) is split by the
    field classifier, renaming positional entries through ``_init``.

    Private fields brought by the call give the clone a new behavior
    record derived from ``proto``'s; without them the record is shared.
    """
    behavior = proto._behavior
    spec = behavior.init_spec

    if not isinstance(spec, Initializer) and getdebug().argcheck:
        _check_table_args(behavior.type_name or "Container", args)

    obj = Container(instantiate(proto._data), behavior)

    if isinstance(spec, Initializer):
        fields = _as_fields(spec(obj, *args, **kwargs), behavior)
    else:
        table = args[0] if args else {}
        if kwargs:
            table = _with_keywords(table, kwargs)
        rename = spec.mapping if isinstance(spec, FieldMap) else None
        classify = behavior.methods.get("mapfields", mapfields)
        fields = classify(obj, table, rename)

    child = behavior.derive(fields.private)
    if child is not behavior:
        logger.debug("derived behavior %r from %r with %s",
                     child.type_name, behavior.type_name, sorted(fields.private))
    return Container(fields.public, child)


def _check_table_args(name: str, args: tuple):
    # `self` is the object being called, so the table is argument #1.
    if args:
        argcheck(name, 1, "table", args[0])
    if len(args) > 1:
        raise ArgumentCountError(name, 2, extramsg_toomany("argument", 1, len(args)))


def _with_keywords(table: Any, kwargs: dict) -> dict:
    return merge(as_table(table), kwargs)


def _as_fields(result: Any, behavior: Behavior) -> Fields:
    """Normalise whatever an initializer returned into public/private fields."""
    if isinstance(result, Fields):
        return result
    if isinstance(result, Container):
        return Fields(dict(result._data), {})
    if isinstance(result, collections.abc.Mapping):
        return mapfields({}, result)
    raise TypeError(
        f"initializer of '{behavior.type_name}' must return a mapping, "
        f"an object or mapfields() output, not {type(result).__name__}")


ROOT_BEHAVIOR = Behavior({
    "_type": "Container",
    "__call__": clone,
    "__str__": render,
})

#: The root object. Call it with a table to make a new prototype.
prototype = Container({}, ROOT_BEHAVIOR)


__all__ = ["ROOT_BEHAVIOR", "clone", "prototype"]
