#
# Valrepr - Container Formatter Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import array
import collections
import collections.abc

from collections import deque

# Third party ----------------------------------------------------------------------------------------------------------
import numpy as np
import pytest
from frozendict import frozendict

# Local ----------------------------------------------------------------------------------------------------------------
from valrepr.representation import render
from valrepr.types import entry


# Tests ----------------------------------------------------------------------------------------------------------------

class Bag(collections.abc.Collection):
    """Minimal user collection, iterated in insertion order."""

    def __init__(self, *items):
        self._items = list(items)

    def __contains__(self, item):
        return any(item is x for x in self._items)

    def __iter__(self):
        return iter(self._items)

    def __len__(self):
        return len(self._items)


class TestArrays:
    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param([], "[]", id="empty"),
            pytest.param([1, 2], "[1, 2]", id="ints"),
            pytest.param(["a", None, 2.5], '["a", null, 2.5]', id="mixed"),
            pytest.param([None], "[null]", id="only-null"),
            pytest.param([[1], [], [2, [3]]], "[[1], [], [2, [3]]]", id="nested"),
            pytest.param([(1, "a")], '[(1, "a")]', id="tuple-element"),
            pytest.param([{"k": 1}], '[{"k"=1}]', id="mapping-element"),
        ],
    )
    def test_list(self, value, expected):
        assert render(value) == expected

    def test_object_ndarray(self):
        value = np.empty(3, dtype=object)
        value[:] = ["a", None, np.int64(1)]
        assert render(value) == '["a", null, 1L]'

    def test_two_dimensional(self):
        """Rows of a numeric matrix are primitive arrays."""
        assert render(np.array([[1, 2], [3, 4]], dtype=np.int32)) == "[[1, 2], [3, 4]]"

    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(np.matrix([[1, 2], [3, 4]], dtype=np.int32), "[[1, 2], [3, 4]]", id="matrix"),
            pytest.param(np.matrix([[1.5]], dtype=np.float32), "[[1.5f]]", id="matrix-float32"),
            pytest.param(np.matrix(np.zeros((0, 2))), "[]", id="matrix-empty"),
        ],
    )
    def test_ndarray_subclass(self, value, expected):
        """Subclasses whose rows stay two dimensional are rendered as plain arrays."""
        assert render(value) == expected

    def test_string_ndarray(self):
        """Arrays of strings longer than one character are rendered element by element."""
        assert render(np.array(["ab", "c"])) == '["ab", "c"]'


class TestPrimitiveArrays:
    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(np.array(["a", "b"]), "['a', 'b']", id="chars"),
            pytest.param(np.array([1, 2], dtype=np.int64), "[1L, 2L]", id="int64"),
            pytest.param(np.array([1, 2], dtype=np.int16), "[1, 2]", id="int16"),
            pytest.param(np.array([1.5, 2.0], dtype=np.float32), "[1.5f, 2.0f]", id="float32"),
            pytest.param(np.array([1.5], dtype=np.float64), "[1.5]", id="float64"),
            pytest.param(np.array([True, False]), "[True, False]", id="bool"),
            pytest.param(np.array([], dtype=np.int32), "[]", id="empty"),
            pytest.param(array.array("q", [1, -2]), "[1L, -2L]", id="array-q"),
            pytest.param(array.array("f", [2.5, 0.1]), "[2.5f, 0.1f]", id="array-f"),
            pytest.param(array.array("i", [1, 2]), "[1, 2]", id="array-i"),
            pytest.param(array.array("d", [0.5]), "[0.5]", id="array-d"),
            pytest.param(array.array("b", []), "[]", id="array-empty"),
        ],
    )
    def test_flat(self, value, expected):
        assert render(value) == expected

    def test_native_long(self):
        """Platform 'l' items carry the long suffix where they are 64 bits wide."""
        value = array.array("l", [1, -2])
        expected = "[1L, -2L]" if value.itemsize == 8 else "[1, -2]"
        assert render(value) == expected

    def test_unsigned_not_boxed(self):
        assert render(array.array("Q", [1])) == "[1]"

    def test_nested_in_list(self):
        assert render([np.array([1, 2], dtype=np.int64), "x"]) == '[[1L, 2L], "x"]'


class TestCollections:
    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(deque([1, "a"]), '[1, "a"]', id="deque"),
            pytest.param(deque(), "[]", id="empty-deque"),
            pytest.param(frozenset({3}), "[3]", id="frozenset"),
            pytest.param(set(), "[]", id="empty-set"),
            pytest.param({1: "a"}.keys(), "[1]", id="keys-view"),
            pytest.param({1: "a"}.items(), '[(1, "a")]', id="items-view"),
            pytest.param(Bag(None, [1]), "[null, [1]]", id="user-collection"),
        ],
    )
    def test_iteration_order(self, value, expected):
        assert render(value) == expected

    def test_generator_is_not_consumed(self):
        """Iterators are rendered by their own text form, never iterated."""
        gen = (i for i in range(3))
        assert render(gen) == str(gen)
        assert list(gen) == [0, 1, 2]


class TestTuples:
    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param((1, "a", None), '(1, "a", null)', id="mixed"),
            pytest.param((), "()", id="empty"),
            pytest.param((1,), "(1)", id="singleton"),
            pytest.param(((1, 2), [3]), "((1, 2), [3])", id="nested"),
            pytest.param(collections.namedtuple("Point", "x y")(1, 2), "(1, 2)", id="namedtuple"),
        ],
    )
    def test_format(self, value, expected):
        assert render(value) == expected


class TestMapEntries:
    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(entry("k", 1), 'MapEntry[key="k", value=1]', id="simple"),
            pytest.param(entry(None, None), "MapEntry[key=null, value=null]", id="nulls"),
            pytest.param(entry(np.int64(1), [1, 2]), "MapEntry[key=1L, value=[1, 2]]", id="nested"),
        ],
    )
    def test_format(self, value, expected):
        assert render(value) == expected


class TestMappings:
    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param({}, "{}", id="empty"),
            pytest.param({2: "b", 1: "a"}, '{1="a", 2="b"}', id="sorted-int-keys"),
            pytest.param({"b": 1, "a": None}, '{"a"=null, "b"=1}', id="sorted-str-keys"),
            pytest.param({"x": {"b": 2, "a": 1}}, '{"x"={"a"=1, "b"=2}}', id="nested-sorted"),
            pytest.param({"k": [1, 2]}, '{"k"=[1, 2]}', id="list-value"),
            pytest.param(frozendict({"b": 1, "a": 2}), '{"a"=2, "b"=1}', id="frozendict"),
            pytest.param(collections.OrderedDict([(3, "c"), (1, "a")]), '{1="a", 3="c"}', id="ordered-dict"),
        ],
    )
    def test_format(self, value, expected):
        assert render(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param({"b": 1, 1: "a"}, '{"b"=1, 1="a"}', id="mixed-types"),
            pytest.param({None: 1, 0: 2}, "{null=1, 0=2}", id="none-key"),
            pytest.param({2: 1, None: 0}, "{2=1, null=0}", id="none-key-last"),
            pytest.param({(1, "a"): 1, (1, 2): 2}, '{(1, "a")=1, (1, 2)=2}', id="incomparable-tuples"),
        ],
    )
    def test_insertion_order_when_keys_not_orderable(self, value, expected):
        """Keys that cannot be ordered keep the mapping's own order, without raising."""
        assert render(value) == expected

    def test_mapping_never_multiline(self):
        value = {i: "x" * 10 for i in range(20)}
        assert "\n" not in render(value)
