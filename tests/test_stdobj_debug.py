import pytest

from stdobj import stdobj_debug
from stdobj.stdobj_container import prototype
from stdobj.stdobj_debug import (
    ArgumentCountError, ArgumentError, ArgumentTypeError, DebugSettings,
    argcheck, argerror, argscheck, extramsg_mismatch, extramsg_toomany,
    getdebug, parse_decl, setdebug, typename,
)


@pytest.fixture
def restore_debug():
    previous = setdebug()
    yield
    setdebug(**previous)


@pytest.mark.parametrize("value, expected", [
    (None, "None"),
    (1, "int"),
    (True, "bool"),
    ("s", "str"),
    ({}, "dict"),
    ([], "list"),
])
def test_typename(value, expected):
    assert typename(value) == expected


def test_typename_of_objects():
    assert typename(prototype) == "Container"
    assert typename(prototype({"_type": "Thing"})) == "Thing"


@pytest.mark.parametrize("expected, value", [
    ("any", object()),
    ("table", {}),
    ("table", []),
    ("mapping", {}),
    ("sequence", ()),
    ("str", ""),
    ("int", 0),
    ("float", 0.5),
    ("number", 1),
    ("number", 1.5),
    ("bool", False),
    ("callable", len),
    ("None", None),
    ("?str", None),
    ("str|int", 3),
    ("Container", prototype),
])
def test_argcheck_accepts(expected, value):
    argcheck("fn", 1, expected, value)


@pytest.mark.parametrize("expected, value, message", [
    ("table", "x", "table expected, got str"),
    ("int", True, "int expected, got bool"),
    ("number", False, "number expected, got bool"),
    ("?str", 1, "str or None expected, got int"),
    ("str|int|float", None, "str, int or float expected, got None"),
    ("Thing", prototype, "Thing expected, got Container"),
])
def test_argcheck_rejects(expected, value, message):
    with pytest.raises(ArgumentTypeError) as excinfo:
        argcheck("fn", 2, expected, value)
    assert str(excinfo.value) == f"bad argument #2 to 'fn' ({message})"
    assert excinfo.value.name == "fn"
    assert excinfo.value.position == 2
    assert excinfo.value.detail == message


def test_argcheck_matches_object_type_names():
    Thing = prototype({"_type": "Thing"})
    argcheck("fn", 1, "Thing", Thing())


def test_extramsg_helpers():
    assert extramsg_toomany("argument", 1, 3) == "no more than 1 argument expected, got 3"
    assert extramsg_toomany("argument", 2, 3) == "no more than 2 arguments expected, got 3"
    assert extramsg_mismatch("table", 1) == "table expected, got int"


def test_argerror():
    with pytest.raises(ArgumentError, match=r"bad argument #4 to 'f' \(oops\)"):
        argerror("f", 4, "oops")


def test_parse_decl():
    decl = parse_decl("pkg.fn (table, ?str|int)")
    assert decl.name == "pkg.fn"
    assert decl.params == ("table", "?str|int")
    assert decl.required == 1
    assert parse_decl("f ()").params == ()


@pytest.mark.parametrize("bad", ["no parens", "f (a,, b)", "(table)"])
def test_parse_decl_rejects_malformed(bad):
    with pytest.raises(ValueError):
        parse_decl(bad)


def test_argscheck_decorator():
    @argscheck("demo.join (str, ?str)")
    def join(a, b=None):
        return a + (b or "")

    assert join("a") == "a"
    assert join("a", "b") == "ab"
    assert join.__name__ == "join"

    with pytest.raises(ArgumentTypeError, match=r"#1 to 'demo.join' \(str expected, got int\)"):
        join(1)
    with pytest.raises(ArgumentTypeError, match="#2"):
        join("a", 2)
    with pytest.raises(ArgumentTypeError, match=r"#1 to 'demo.join' \(str expected, got None\)"):
        join()
    with pytest.raises(ArgumentCountError, match="#3"):
        join("a", "b", "c")


def test_argscheck_can_be_disabled(restore_debug):
    @argscheck("demo.double (int)")
    def double(n):
        return n * 2

    setdebug(argcheck=False)
    assert getdebug().argcheck is False
    assert double("ab") == "abab"
    setdebug(argcheck=True)
    with pytest.raises(ArgumentTypeError):
        double("ab")


def test_setdebug_returns_previous(restore_debug):
    assert setdebug(argcheck=False) == {"argcheck": True}
    assert setdebug(argcheck=True) == {"argcheck": False}


def test_setdebug_rejects_unknown_settings(restore_debug):
    with pytest.raises(TypeError):
        setdebug(bogus=True)


@pytest.mark.parametrize("raw, expected", [
    (None, True),
    ("0", False),
    ("off", False),
    ("False", False),
    ("1", True),
    ("yes", True),
])
def test_settings_from_env(monkeypatch, raw, expected):
    if raw is None:
        monkeypatch.delenv("STDOBJ_DEBUG", raising=False)
    else:
        monkeypatch.setenv("STDOBJ_DEBUG", raw)
    assert stdobj_debug._settings_from_env() == DebugSettings(argcheck=expected)
