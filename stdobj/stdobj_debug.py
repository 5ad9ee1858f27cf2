"""
Runtime argument checking and the debug settings that switch it on or off.

Checking is on by default. Set ``STDOBJ_DEBUG=0`` in the environment to
start with every check disabled, or call ``setdebug(argcheck=False)``.
"""
from dataclasses import dataclass, asdict, replace
from functools import wraps
from typing import Any, Callable, Dict, List
import collections.abc
import os
import re

from stdobj.stdobj_datatypes import Container
from stdobj.stdobj_table import is_table


class ArgumentError(TypeError):
    """A call received an argument it cannot accept."""
    def __init__(self, name: str, position: int, message: str):
        super().__init__(f"bad argument #{position} to '{name}' ({message})")
        self.name = name
        self.position = position
        self.detail = message


class ArgumentTypeError(ArgumentError):
    pass


class ArgumentCountError(ArgumentError):
    pass


# =================================================================
# Settings
# =================================================================

@dataclass
class DebugSettings:
    argcheck: bool = True


_FALSEY = {"0", "false", "off", "no"}


def _settings_from_env() -> DebugSettings:
    raw = os.environ.get("STDOBJ_DEBUG")
    if raw is None:
        return DebugSettings()
    enabled = raw.strip().lower() not in _FALSEY
    return DebugSettings(argcheck=enabled)


_settings = _settings_from_env()


def getdebug() -> DebugSettings:
    return _settings


def setdebug(**changes: Any) -> Dict[str, Any]:
    """Update the live debug settings, returning the previous values."""
    global _settings
    previous = asdict(_settings)
    _settings = replace(_settings, **changes)
    return previous


# =================================================================
# Type descriptors
# =================================================================

def typename(value: Any) -> str:
    if isinstance(value, Container):
        return value._behavior.type_name or "Container"
    if value is None:
        return "None"
    return type(value).__name__


_MATCHERS: Dict[str, Callable[[Any], bool]] = {
    "any": lambda v: True,
    "None": lambda v: v is None,
    "table": is_table,
    "mapping": lambda v: isinstance(v, collections.abc.Mapping),
    "sequence": lambda v: isinstance(v, (list, tuple)),
    "str": lambda v: isinstance(v, str),
    "int": lambda v: isinstance(v, int) and not isinstance(v, bool),
    "float": lambda v: isinstance(v, float),
    "number": lambda v: isinstance(v, (int, float)) and not isinstance(v, bool),
    "bool": lambda v: isinstance(v, bool),
    "callable": callable,
    "Container": lambda v: isinstance(v, Container),
}


def _matches(alternative: str, value: Any) -> bool:
    matcher = _MATCHERS.get(alternative)
    if matcher is not None:
        return matcher(value)
    # Any other name is an object type name, e.g. 'StrBuf'.
    return isinstance(value, Container) and value._behavior.type_name == alternative


def _alternatives(expected: str) -> List[str]:
    alts = [a.strip() for a in expected.split("|") if a.strip()]
    optional = False
    out = []
    for a in alts:
        if a.startswith("?"):
            optional = True
            a = a[1:]
        out.append(a)
    if optional and "None" not in out:
        out.append("None")
    return out


def extramsg_mismatch(expected: str, actual: Any) -> str:
    alts = _alternatives(expected)
    if len(alts) > 1:
        want = ", ".join(alts[:-1]) + " or " + alts[-1]
    else:
        want = alts[0] if alts else "nothing"
    return f"{want} expected, got {typename(actual)}"


def extramsg_toomany(kind: str, limit: int, got: int) -> str:
    plural = "" if limit == 1 else "s"
    return f"no more than {limit} {kind}{plural} expected, got {got}"


def argerror(name: str, position: int, extramsg: str):
    raise ArgumentTypeError(name, position, extramsg)


def argcheck(name: str, position: int, expected: str, actual: Any):
    """Raise ArgumentTypeError unless ``actual`` matches the ``expected`` descriptor."""
    if not _settings.argcheck:
        return
    for alternative in _alternatives(expected):
        if _matches(alternative, actual):
            return
    argerror(name, position, extramsg_mismatch(expected, actual))


# =================================================================
# Declarations
# =================================================================

_DECL = re.compile(r"^\s*(?P<name>[\w.]+)\s*\((?P<params>.*)\)\s*$")


@dataclass(frozen=True)
class ArgsDecl:
    name: str
    params: tuple

    @property
    def required(self) -> int:
        count = 0
        for i, p in enumerate(self.params):
            if not p.startswith("?"):
                count = i + 1
        return count


def parse_decl(decl: str) -> ArgsDecl:
    """Parse ``"pkg.fn (table, ?str|int)"`` into its name and parameter types."""
    m = _DECL.match(decl)
    if not m:
        raise ValueError(f"malformed argument declaration: {decl!r}")
    params_src = m.group("params").strip()
    params = tuple(p.strip() for p in params_src.split(",")) if params_src else ()
    if any(not p for p in params):
        raise ValueError(f"empty parameter type in declaration: {decl!r}")
    return ArgsDecl(m.group("name"), params)


def argscheck(decl: str):
    """Decorator checking positional arguments against ``decl`` on every call."""
    spec = parse_decl(decl)

    def decorator(fn):
        @wraps(fn)
        def checked(*args, **kwargs):
            if _settings.argcheck:
                n = len(args)
                if n > len(spec.params):
                    raise ArgumentCountError(
                        spec.name, len(spec.params) + 1,
                        extramsg_toomany("argument", len(spec.params), n))
                for i, expected in enumerate(spec.params):
                    value = args[i] if i < n else None
                    if i >= n and i >= spec.required:
                        break
                    argcheck(spec.name, i + 1, expected, value)
            return fn(*args, **kwargs)
        checked.__argsdecl__ = spec
        return checked
    return decorator


__all__ = [
    "ArgumentCountError",
    "ArgumentError",
    "ArgumentTypeError",
    "DebugSettings",
    "argcheck",
    "argerror",
    "argscheck",
    "extramsg_mismatch",
    "extramsg_toomany",
    "getdebug",
    "parse_decl",
    "setdebug",
    "typename",
]
