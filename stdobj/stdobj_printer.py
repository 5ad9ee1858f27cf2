"""
A printer for stdobj values.
"""
import collections.abc

from stdobj.stdobj_datatypes import Container, is_positional
from stdobj.stdobj_table import okeys, positional_length


class Printer:
    """Formats objects and plain values as display text."""

    def __init__(self):
        self._handlers = self._create_handlers()

    def pformat(self, obj):
        """Public entry point to format a value."""
        handler = self._get_handler(obj)
        return handler(obj)

    def render(self, obj):
        """Format an object as ``<type> {<body>}`` from its public data."""
        type_name = obj._behavior.type_name or "Container"
        return f"{type_name} {{{self._format_body(obj._data)}}}"

    def _get_handler(self, obj):
        """Dispatcher to find the correct formatting method."""
        obj_type = type(obj)
        if obj_type in self._handlers:
            return self._handlers[obj_type]
        if isinstance(obj, Container): return self._pformat_container
        if isinstance(obj, bool): return self._pformat_bool
        if isinstance(obj, str): return self._pformat_str
        if isinstance(obj, collections.abc.Mapping): return self._pformat_table
        if isinstance(obj, (list, tuple)): return self._pformat_sequence
        # Default to Python's repr for unknown types
        return repr

    def _create_handlers(self):
        return {
            str: self._pformat_str,
            int: self._pformat_primitive,
            float: self._pformat_primitive,
            bool: self._pformat_bool,
            type(None): self._pformat_none,
            dict: self._pformat_table,
            list: self._pformat_sequence,
            tuple: self._pformat_sequence,
        }

    def _pformat_primitive(self, obj):
        return str(obj)

    def _pformat_str(self, obj):
        return str(obj)

    def _pformat_bool(self, obj):
        return 'true' if obj else 'false'

    def _pformat_none(self, obj):
        return 'nil'

    def _pformat_container(self, obj):
        # Goes through the object's own __str__ behavior.
        return str(obj)

    def _pformat_table(self, obj):
        return f"{{{self._format_body(obj)}}}"

    def _pformat_sequence(self, obj):
        return "{" + ", ".join(self.pformat(v) for v in obj) + "}"

    def _format_body(self, table):
        # Only an unbroken run 1, 2, ..., n renders as bare values; every
        # other key, including 0 and negatives, renders as key=value.
        n = positional_length(table)
        rest = [k for k in okeys(table) if not (is_positional(k) and k <= n)]

        array = [self.pformat(table[i]) for i in range(1, n + 1)]
        pairs = [f"{self.pformat(k)}={self.pformat(table[k])}" for k in rest]
        if array and pairs:
            return ", ".join(array) + "; " + ", ".join(pairs)
        return ", ".join(array or pairs)


_printer = Printer()


def tostring(value) -> str:
    """Display text for any value."""
    return _printer.pformat(value)


def render(obj) -> str:
    """Default ``__str__`` behavior of objects."""
    return _printer.render(obj)


__all__ = ["Printer", "render", "tostring"]
