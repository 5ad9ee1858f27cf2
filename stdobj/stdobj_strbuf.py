"""
String buffers.

    buf = StrBuf(["initial buffer contents"])
    buf = buf + " append to buffer"
    str(buf)  # 'initial buffer contents append to buffer'

Prototype chain: Container -> Object -> StrBuf
"""
from stdobj.stdobj_debug import argscheck
from stdobj.stdobj_object import Object
from stdobj.stdobj_printer import tostring
from stdobj.stdobj_table import positional_length, positional_values


@argscheck("stdobj.strbuf.concat (StrBuf, str)")
def concat(buf, s):
    """Append ``s`` to ``buf`` and return the (modified) buffer."""
    buf[positional_length(buf) + 1] = s
    return buf


def _tostring(buf):
    return "".join(tostring(v) for v in positional_values(buf))


StrBuf = Object({
    "_type": "StrBuf",
    "_methods": {"concat": concat},
    "__add__": concat,
    "__str__": _tostring,
})


__all__ = ["StrBuf", "concat"]
