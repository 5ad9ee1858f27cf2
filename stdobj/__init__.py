"""
stdobj: a prototype-based object system.

Objects are made by calling an existing object with a table of fields.
Underscore-prefixed fields define behavior; the rest is data.
"""
from stdobj.stdobj_datatypes import Behavior, Container, Fields, FieldMap, Initializer
from stdobj.stdobj_debug import (
    ArgumentCountError, ArgumentError, ArgumentTypeError,
    argcheck, argscheck, getdebug, setdebug, typename,
)
from stdobj.stdobj_table import okeys
from stdobj.stdobj_fields import mapfields
from stdobj.stdobj_printer import Printer, render, tostring
from stdobj.stdobj_container import clone, prototype
from stdobj.stdobj_object import Object
from stdobj.stdobj_strbuf import StrBuf
from stdobj.stdobj_serialize import deserialize, load, serialize

__version__ = "0.1.0"

__all__ = [
    "ArgumentCountError",
    "ArgumentError",
    "ArgumentTypeError",
    "Behavior",
    "Container",
    "FieldMap",
    "Fields",
    "Initializer",
    "Object",
    "Printer",
    "StrBuf",
    "argcheck",
    "argscheck",
    "clone",
    "deserialize",
    "getdebug",
    "load",
    "mapfields",
    "okeys",
    "prototype",
    "render",
    "serialize",
    "setdebug",
    "tostring",
    "typename",
]
