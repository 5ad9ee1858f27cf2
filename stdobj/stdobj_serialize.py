"""
Text serialization of objects.

Objects are written out through their public data only: a table holding
nothing but the positional run 1..n becomes a list, any other table a
mapping with string keys. ``load`` goes the other way and clones a
prototype from a document, so the prototype's ``_init`` applies.
"""
from __future__ import annotations

import json
import logging
import re
import tomllib
from typing import Any, Callable, Dict, Optional, Tuple, Type
from xml.parsers.expat import ExpatError
import collections.abc

import toml
import xmltodict
import yaml

from stdobj.stdobj_datatypes import Container
from stdobj.stdobj_table import okeys, positional_length

logger = logging.getLogger(__name__)

FORMATS = ("json", "yaml", "toml", "xml")

_CHARSET = re.compile(r'charset\s*=\s*"?([^\s;"]+)', re.IGNORECASE)
_POSITIONAL_KEY = re.compile(r'^[1-9][0-9]*$')


# =================================================================
# Conversion to and from plain values
# =================================================================

def to_builtin(obj: Any) -> Any:
    """Convert objects and nested tables to plain dicts, lists and scalars.

    Object data is written in ``okeys`` order; other mappings keep their
    own order, so parsed documents round-trip unchanged.
    """
    if isinstance(obj, (list, tuple)):
        return [to_builtin(v) for v in obj]
    if isinstance(obj, collections.abc.Mapping):
        data = obj._data if isinstance(obj, Container) else obj
        n = positional_length(data)
        if n and n == len(data):
            return [to_builtin(data[i]) for i in range(1, n + 1)]
        keys = okeys(data) if isinstance(obj, Container) else list(data)
        return {str(k): to_builtin(data[k]) for k in keys}
    return obj


def _restore_keys(value: Any) -> Any:
    # Text formats stringify keys; give positional keys back their ints.
    if not isinstance(value, collections.abc.Mapping):
        return value
    return {
        (int(k) if isinstance(k, str) and _POSITIONAL_KEY.match(k) else k): v
        for k, v in value.items()
    }


# =================================================================
# Format codecs
# =================================================================

def _xml_loads(text: str) -> Any:
    return to_builtin(xmltodict.parse(text))


def _xml_dumps(built: Any, pretty: bool, root: str) -> str:
    if isinstance(built, dict) and len(built) == 1:
        document = built
    elif isinstance(built, list):
        document = {root: {"item": built}}
    else:
        document = {root: built}
    return xmltodict.unparse(document, pretty=pretty)


def _toml_dumps(built: Any, pretty: bool, root: str) -> str:
    if not isinstance(built, dict):
        raise ValueError("TOML serialization requires a mapping at the top level")
    return toml.dumps(built)


# Each reader pairs a parse function with the errors meaning "not this format".
_READERS: Dict[str, Tuple[Callable[[str], Any], Tuple[Type[Exception], ...]]] = {
    "json": (json.loads, (json.JSONDecodeError,)),
    "yaml": (yaml.safe_load, (yaml.YAMLError,)),
    "toml": (tomllib.loads, (tomllib.TOMLDecodeError,)),
    "xml": (_xml_loads, (ExpatError,)),
}

_WRITERS: Dict[str, Callable[[Any, bool, str], str]] = {
    "json": lambda built, pretty, root: json.dumps(built, ensure_ascii=False, indent=2 if pretty else None),
    "yaml": lambda built, pretty, root: yaml.safe_dump(built, sort_keys=False),
    "toml": _toml_dumps,
    "xml": _xml_dumps,
}

# JSON that fails to parse is retried as YAML, which accepts most of it.
_FALLBACKS = {"json": "yaml"}


def _decode_text(data: bytes | bytearray | str, content_type: Optional[str]) -> str:
    if isinstance(data, str):
        return data
    if not isinstance(data, (bytes, bytearray)):
        return str(data)
    m = _CHARSET.search(content_type or "")
    encoding = m.group(1) if m else "utf-8"
    try:
        return data.decode(encoding, errors="replace")
    except LookupError:
        logger.debug("unknown charset %r, decoding as utf-8", encoding)
        return data.decode("utf-8", errors="replace")


def detect_format(content_type: Optional[str] = None, data_hint: Optional[str] = None) -> Optional[str]:
    """Name the format of a document from its content type, else its first character.

    Returns one of ``FORMATS`` or None. TOML is only recognised by content type.
    """
    ct = (content_type or "").lower()
    for name, markers in (("json", ("json",)), ("yaml", ("yaml",)),
                          ("toml", ("toml",)), ("xml", ("xml", "html"))):
        if any(marker in ct for marker in markers):
            return name
    head = (data_hint or "").lstrip()[:1]
    if head in ("{", "["):
        return "json"
    if head == "<":
        return "xml"
    return None


# =================================================================
# Public API
# =================================================================

def deserialize(data: bytes | bytearray | str,
                *,
                content_type: Optional[str] = None,
                fmt: Optional[str] = None) -> Any:
    """Parse a document into plain Python values.

    The format is ``fmt`` when given, else detected from ``content_type``
    and the text itself. Text that no reader accepts is returned unchanged.
    """
    text = _decode_text(data, content_type)
    name = fmt or detect_format(content_type, text)
    while name in _READERS:
        parse, errors = _READERS[name]
        try:
            return parse(text)
        except errors as e:
            logger.debug("document is not valid %s: %s", name, e)
            name = _FALLBACKS.get(name)
    return text


def serialize(value: Any,
              *,
              fmt: str,
              pretty: bool = True,
              xml_root: str = "root") -> str:
    """Write an object or plain value as ``fmt`` text.

    XML documents need a single root element: a one-key mapping is used as
    is, a list becomes repeated ``<item>`` elements under ``xml_root``, and
    anything else is wrapped in ``xml_root``.
    """
    writer = _WRITERS.get((fmt or "").lower())
    if writer is None:
        raise ValueError(f"Unsupported serialization format: {fmt!r}")
    return writer(to_builtin(value), pretty, xml_root)


def load(data: bytes | bytearray | str,
         proto: Container,
         *,
         content_type: Optional[str] = None,
         fmt: Optional[str] = None) -> Container:
    """Deserialize ``data`` and clone ``proto`` with the result as its argument table."""
    value = deserialize(data, content_type=content_type, fmt=fmt)
    return proto(_restore_keys(value))


__all__ = [
    "FORMATS",
    "deserialize",
    "detect_format",
    "load",
    "serialize",
    "to_builtin",
]
