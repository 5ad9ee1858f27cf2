import pytest

from stdobj.stdobj_debug import ArgumentTypeError
from stdobj.stdobj_object import Object
from stdobj.stdobj_strbuf import StrBuf, concat


def test_empty_buffer():
    assert str(StrBuf()) == ""
    assert StrBuf.prototype() == "StrBuf"


def test_initial_contents_and_concatenation():
    buf = StrBuf(["initial buffer contents"])
    buf = buf + " append to buffer"
    assert str(buf) == "initial buffer contents append to buffer"


def test_concat_mutates_and_returns_buffer():
    buf = StrBuf()
    assert concat(buf, "a") is buf
    assert buf.concat("b") is buf
    assert (buf + "c") is buf
    assert dict(buf) == {1: "a", 2: "b", 3: "c"}
    assert str(buf) == "abc"


def test_non_string_elements_are_stringified():
    buf = StrBuf([1, True, None, "x"])
    # None never makes it into the buffer, so the run stops after `true`.
    assert str(buf) == "1true"


def test_clones_are_independent_at_top_level():
    base = StrBuf(["a"])
    other = base()
    other + "b"
    assert str(base) == "a"
    assert str(other) == "ab"


def test_concat_checks_its_arguments():
    buf = StrBuf()
    with pytest.raises(ArgumentTypeError, match=r"bad argument #2 to 'stdobj.strbuf.concat' \(str expected, got int\)"):
        buf + 1
    with pytest.raises(ArgumentTypeError, match=r"#1 to 'stdobj.strbuf.concat' \(StrBuf expected, got Object\)"):
        concat(Object(), "x")


def test_strbuf_inherits_object_methods():
    buf = StrBuf(["x"])
    assert buf.clone(["y"]).concat("z").prototype() == "StrBuf"
