import pytest

from stdobj.stdobj_container import prototype
from stdobj.stdobj_table import (
    as_table, instantiate, is_table, merge, okeys, pack,
    positional_length, positional_values,
)


def test_okeys_orders_integers_first_then_by_string_form():
    table = {"b": 1, 2: 1, "a": 1, 1: 1, "10": 1, 10: 1}
    assert okeys(table) == [1, 2, 10, "10", "a", "b"]


def test_okeys_treats_bools_as_non_positional():
    assert okeys({True: 1, 1.5: 2, "a": 3}) == [1.5, True, "a"]


def test_okeys_on_objects():
    obj = prototype({"_type": "T", "z": 1, 1: "a"})
    assert okeys(obj) == [1, "z"]


def test_positional_length():
    assert positional_length({}) == 0
    assert positional_length({1: "a", 2: "b", 4: "d"}) == 2
    assert positional_length({2: "b"}) == 0
    assert positional_values({1: "a", 2: "b", 4: "d", "x": 1}) == ["a", "b"]


def test_pack():
    assert pack() == {}
    assert pack("a", None, "c") == {1: "a", 2: None, 3: "c"}


@pytest.mark.parametrize("value, expected", [
    ({"a": 1}, {"a": 1}),
    (["x", "y"], {1: "x", 2: "y"}),
    (("x",), {1: "x"}),
])
def test_as_table(value, expected):
    result = as_table(value)
    assert result == expected
    assert result is not value


def test_as_table_reads_object_data():
    obj = prototype({"_type": "T", "_hidden": 1, "x": 2})
    assert as_table(obj) == {"x": 2}


def test_as_table_rejects_scalars():
    with pytest.raises(TypeError, match="expected a table"):
        as_table("abc")
    assert not is_table("abc")
    assert is_table([])


def test_instantiate_and_merge():
    proto = {"a": 1, "b": 2}
    obj = instantiate(proto, {"b": 3})
    assert obj == {"a": 1, "b": 3}
    assert proto == {"a": 1, "b": 2}
    dest = {"a": 1}
    assert merge(dest, {"c": 3}) is dest
    assert dest == {"a": 1, "c": 3}
