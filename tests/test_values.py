import pytest

from mallet.errors import ParserError
from mallet.types.atom import Atom
from mallet.types.collections import HashMap, List, Vector, equals
from mallet.types.nil import Nil
from mallet.types.predicates import is_number, is_truthy
from mallet.types.symbol import Keyword, Symbol


def test_symbols_compare_by_name():
    assert Symbol("abc") == Symbol("abc")
    assert Symbol("abc") is not Symbol("abc")
    assert hash(Symbol("abc")) == hash(Symbol("abc"))
    assert Symbol("a") != Keyword("a")


def test_keyword_text():
    kw = Keyword("name")
    assert kw.id == "name"
    assert str(kw) == ":name"


@pytest.mark.parametrize(
    "a,b,expected",
    [
        (List([1.0, 2.0]), Vector([1.0, 2.0]), True),
        (Vector([List([1.0])]), List([Vector([1.0])]), True),
        (List([1.0, 2.0]), List([1.0]), False),
        (List(), Vector(), True),
        (1.0, 1, True),
        (True, 1.0, False),
        (False, Nil, False),
        (Nil, Nil, True),
        ("a", Keyword("a"), False),
        (Keyword("a"), Keyword("a"), True),
        (Symbol("a"), Symbol("a"), True),
        ("abc", "abc", True),
    ],
)
def test_equals(a, b, expected):
    assert equals(a, b) is expected
    assert equals(b, a) is expected


def test_atoms_are_never_equal():
    a = Atom(1.0)
    assert not equals(a, a)
    assert not equals(a, Atom(1.0))
    assert not equals(List([a]), List([a]))


def test_maps_compare_regardless_of_insertion_order():
    m1 = HashMap.from_arguments([Keyword("a"), 1.0, "b", List([2.0])])
    m2 = HashMap.from_arguments(["b", Vector([2.0]), Keyword("a"), 1.0])
    assert equals(m1, m2)
    assert not equals(m1, HashMap.from_arguments([Keyword("a"), 1.0]))
    assert not equals(m1, HashMap.from_arguments([Keyword("a"), 1.0, Keyword("b"), List([2.0])]))


def test_string_and_keyword_keys_stay_distinct():
    m = HashMap.from_arguments(["a", 1.0, Keyword("a"), 2.0])
    assert len(m) == 2
    assert m.get("a") == 1.0
    assert m.get(Keyword("a")) == 2.0


def test_later_keys_replace_earlier_ones():
    m = HashMap.from_arguments([Keyword("a"), 1.0, Keyword("a"), 2.0])
    assert len(m) == 1
    assert m.get(Keyword("a")) == 2.0


def test_map_updates_leave_the_original_alone():
    m = HashMap.from_arguments([Keyword("a"), 1.0])
    bigger = m.assoc([Keyword("b"), 2.0])
    smaller = bigger.dissoc([Keyword("a"), Keyword("missing")])
    assert len(m) == 1
    assert len(bigger) == 2
    assert smaller.keys() == [Keyword("b")]
    assert m.get(Keyword("b")) is Nil


def test_map_iteration_follows_insertion_order():
    m = HashMap.from_arguments([Keyword("z"), 1.0, Keyword("a"), 2.0])
    assert m.keys() == [Keyword("z"), Keyword("a")]
    assert m.values() == [1.0, 2.0]


@pytest.mark.parametrize(
    "arguments",
    [
        [Keyword("a")],
        [1.0, 2.0],
        [Symbol("a"), 1.0],
        [Nil, 1.0],
    ],
)
def test_invalid_map_arguments(arguments):
    with pytest.raises(ParserError):
        HashMap.from_arguments(arguments)


def test_sequence_slices_keep_their_kind():
    v = Vector([1.0, 2.0, 3.0])
    assert isinstance(v[1:], Vector)
    assert isinstance(List(v)[1:], List)


def test_with_meta_returns_a_copy():
    v = Vector([1.0])
    tagged = v.with_meta(Keyword("m"))
    assert tagged.meta == Keyword("m")
    assert v.meta is Nil
    assert equals(v, tagged)


@pytest.mark.parametrize(
    "value,expected",
    [(Nil, False), (False, False), (True, True), (0.0, True), ("", True), (List(), True)],
)
def test_truthiness(value, expected):
    assert is_truthy(value) is expected


def test_booleans_are_not_numbers():
    assert is_number(1.0)
    assert not is_number(True)
    assert not is_number("1")
