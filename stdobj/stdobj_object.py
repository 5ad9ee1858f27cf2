"""
Object prototype.

Derive from ``Object`` rather than the bare container prototype when your
objects are used through named methods (``obj.method()``) instead of only
through ``obj[key]``. Methods live in the ``_methods`` table of the
behavior record; a clone that brings its own ``_methods`` keeps every
inherited method it does not replace.

    Point = Object({
        "_type": "Point",
        "_init": ["x", "y"],
        "_methods": {"norm": lambda self: (self.x ** 2 + self.y ** 2) ** 0.5},
    })
    Point([3, 4]).norm()  # 5.0
"""
from stdobj.stdobj_container import clone, prototype
from stdobj.stdobj_debug import typename
from stdobj.stdobj_fields import mapfields


def type_of(self):
    """The object's ``_type`` name."""
    return typename(self)


Object = prototype({
    "_type": "Object",
    "_methods": {
        "clone": clone,
        "prototype": type_of,
        "mapfields": mapfields,
    },
})


__all__ = ["Object"]
