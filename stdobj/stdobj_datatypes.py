"""
Defines the core data types for the stdobj object model.

An object is a two-field struct: its public data (a plain dict) and its
behavior record (an immutable mapping of private fields shared by every
object cloned from the same lineage).
"""

from types import MappingProxyType, MethodType
from typing import Any, Callable, Dict, Iterator, Mapping, NamedTuple, Optional
import collections.abc

PRIVATE_MARKER = "_"


def is_private(key: Any) -> bool:
    """True for keys that belong in a behavior record rather than object data."""
    return isinstance(key, str) and key.startswith(PRIVATE_MARKER)


def is_positional(key: Any) -> bool:
    """True for one-based integer keys. bool is an int subclass and never positional."""
    return isinstance(key, int) and not isinstance(key, bool) and key >= 1


# =================================================================
# Initialisation specs
# =================================================================

class FieldMap:
    """Renames call-argument keys to field names during cloning.

    Built from a sequence of names (``["car", "cdr"]`` maps positional key
    1 to ``car`` and 2 to ``cdr``) or from an explicit ``{old: new}`` mapping.
    """
    def __init__(self, spec: Any):
        if isinstance(spec, FieldMap):
            mapping = dict(spec.mapping)
        elif isinstance(spec, collections.abc.Mapping):
            mapping = dict(spec)
        elif isinstance(spec, (list, tuple)):
            mapping = {i: name for i, name in enumerate(spec, start=1)}
        else:
            raise TypeError(f"field map must be a sequence or mapping, not {type(spec).__name__}")
        self.mapping: Mapping[Any, Any] = MappingProxyType(mapping)

    def get(self, key: Any, default: Any = None) -> Any:
        return self.mapping.get(key, default)

    def __contains__(self, key: Any) -> bool:
        return key in self.mapping

    def __len__(self) -> int:
        return len(self.mapping)

    def __repr__(self) -> str:
        return f"FieldMap({dict(self.mapping)!r})"

    def __eq__(self, other):
        return isinstance(other, FieldMap) and dict(self.mapping) == dict(other.mapping)

    def __hash__(self):
        return hash(tuple(sorted(self.mapping.items(), key=lambda kv: str(kv[0]))))


class Initializer:
    """Wraps a callable ``_init``: called as ``fn(new_object, *args, **kwargs)``."""
    def __init__(self, fn: Callable[..., Any]):
        if not callable(fn):
            raise TypeError(f"initializer must be callable, not {type(fn).__name__}")
        self.fn = fn

    def __call__(self, obj: 'Container', /, *args, **kwargs) -> Any:
        return self.fn(obj, *args, **kwargs)

    def __repr__(self) -> str:
        return f"Initializer({getattr(self.fn, '__name__', self.fn)!r})"

    def __eq__(self, other):
        return isinstance(other, Initializer) and self.fn is other.fn

    def __hash__(self):
        return hash(self.fn)


class Fields(NamedTuple):
    """The public and private partitions produced by the field classifier."""
    public: Dict[Any, Any]
    private: Dict[str, Any]


def init_spec_of(raw: Any) -> Optional['FieldMap | Initializer']:
    """Normalise a raw ``_init`` value into its tagged form."""
    if raw is None:
        return None
    if isinstance(raw, (FieldMap, Initializer)):
        return raw
    if callable(raw):
        return Initializer(raw)
    return FieldMap(raw)


# =================================================================
# Behavior record
# =================================================================

class Behavior(collections.abc.Mapping):
    """The shared, read-only record of an object's private fields.

    Holds the type name (``_type``), the initialisation spec (``_init``),
    the named method table (``_methods``) and any dunder metamethods
    (``__call__``, ``__str__``, ``__add__``, ``__eq__``, ...).

    Records are never changed once built. ``derive`` produces a new record
    for a child instead, so a record can be shared by any number of objects.
    """
    def __init__(self, fields: Optional[Mapping[str, Any]] = None):
        frozen: Dict[str, Any] = {}
        for key, value in (fields or {}).items():
            if not is_private(key):
                raise KeyError(f"behavior record keys must start with {PRIVATE_MARKER!r}: {key!r}")
            if key == "_init" and isinstance(value, list):
                value = tuple(value)
            elif key == "_init" and isinstance(value, collections.abc.Mapping):
                value = MappingProxyType(dict(value))
            elif key == "_methods":
                value = MappingProxyType(dict(value or {}))
            frozen[key] = value
        self._fields: Mapping[str, Any] = MappingProxyType(frozen)

    def __getitem__(self, key: str) -> Any:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    @property
    def type_name(self) -> Optional[str]:
        return self._fields.get("_type")

    @property
    def init_spec(self) -> Optional['FieldMap | Initializer']:
        return init_spec_of(self._fields.get("_init"))

    @property
    def methods(self) -> Mapping[str, Any]:
        return self._fields.get("_methods") or MappingProxyType({})

    def derive(self, private: Mapping[str, Any]) -> 'Behavior':
        """Return the record for a child object that brought ``private`` fields.

        An empty ``private`` reuses this record. Otherwise the child record is
        this one overlaid with ``private``; when both define ``_methods`` the
        two method tables are merged, child entries winning.
        """
        if not private:
            return self
        fields = dict(self._fields)
        fields.update(private)
        parent_methods = self._fields.get("_methods")
        child_methods = private.get("_methods")
        if isinstance(parent_methods, collections.abc.Mapping) and \
                isinstance(child_methods, collections.abc.Mapping):
            merged = dict(parent_methods)
            merged.update(child_methods)
            fields["_methods"] = merged
        return Behavior(fields)

    def __repr__(self) -> str:
        keys = ', '.join(self._fields.keys())
        return f"<Behavior type={self.type_name!r} fields=[{keys}]>"


# =================================================================
# Objects
# =================================================================

class Container(collections.abc.MutableMapping):
    """An object: public data bound to a behavior record.

    Item access works on public data. Attribute access reads public data
    first, then the record's ``_methods`` table, bound to this object.
    Calling an object clones it. Stringification, concatenation, equality
    and length are looked up in the behavior record.
    """
    __slots__ = ("_data", "_behavior")

    def __init__(self, data: Optional[Mapping[Any, Any]] = None, behavior: Optional[Behavior] = None):
        public = {}
        for key, value in (data or {}).items():
            if is_private(key):
                raise KeyError(f"{key!r} is private and cannot be object data.")
            if value is not None:
                public[key] = value
        object.__setattr__(self, "_data", public)
        object.__setattr__(self, "_behavior", behavior if behavior is not None else Behavior())

    # -- mapping protocol over public data --

    def __getitem__(self, key: Any) -> Any:
        return self._data[key]

    def __setitem__(self, key: Any, value: Any):
        if is_private(key):
            raise KeyError(f"{key!r} is private; clone with it to change behavior.")
        if value is None:
            self._data.pop(key, None)
        else:
            self._data[key] = value

    def __delitem__(self, key: Any):
        del self._data[key]

    def __iter__(self) -> Iterator[Any]:
        return iter(self._data)

    def __contains__(self, key: Any) -> bool:
        return key in self._data

    def __len__(self) -> int:
        length = self._behavior.get("__len__")
        if length is not None:
            return length(self)
        return len(self._data)

    # -- behavior dispatch --

    def __call__(self, /, *args, **kwargs):
        call = self._behavior.get("__call__")
        if call is None:
            raise TypeError(f"'{self._behavior.type_name}' object is not callable")
        return call(self, *args, **kwargs)

    def __str__(self) -> str:
        to_str = self._behavior.get("__str__")
        if to_str is None:
            from stdobj.stdobj_printer import render
            return render(self)
        return to_str(self)

    def __repr__(self) -> str:
        return self.__str__()

    def __add__(self, other):
        concat = self._behavior.get("__add__")
        if concat is None:
            return NotImplemented
        return concat(self, other)

    def __radd__(self, other):
        concat = self._behavior.get("__radd__")
        if concat is None:
            return NotImplemented
        return concat(self, other)

    def __eq__(self, other):
        equals = self._behavior.get("__eq__")
        if equals is None:
            return self is other
        return equals(self, other)

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return id(self)

    def __bool__(self) -> bool:
        return True

    def __getattr__(self, name: str):
        # Internal and dunder names never resolve through object data.
        if name.startswith(PRIVATE_MARKER):
            raise AttributeError(name)
        data = object.__getattribute__(self, "_data")
        if name in data:
            return data[name]
        method = object.__getattribute__(self, "_behavior").methods.get(name)
        if method is not None:
            if callable(method):
                return MethodType(method, self)
            return method
        raise AttributeError(name)

    def __setattr__(self, name: str, value: Any):
        raise AttributeError(f"use item assignment to set fields: obj[{name!r}] = ...")
