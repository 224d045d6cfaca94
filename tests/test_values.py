import pytest
from hypothesis import HealthCheck, given, settings, strategies as st

from cky.errors import CkyRefcountError
from cky.reader.parser import parse
from cky.types import Atom, Builtin, Closure, FuncCall, Identifier, Integer, List, live_values


def test_fresh_value_holds_one_reference():
    value = Integer(7)
    assert value.refcount == 1
    assert value.incref() is value
    assert value.refcount == 2
    value.decref()
    value.decref()
    assert value.refcount == 0


def test_decref_of_released_value_raises():
    value = Atom("x")
    value.decref()
    with pytest.raises(CkyRefcountError, match="decref of released atom"):
        value.decref()
    with pytest.raises(CkyRefcountError, match="incref of released atom"):
        value.incref()


def test_container_releases_children_when_released():
    head = Integer(1)
    lst = List(head, List())
    head.incref()
    lst.decref()
    assert head.refcount == 1
    head.decref()


def test_shared_child_survives_container():
    before = live_values()
    shared = Integer(5)
    a = List.from_values([shared.incref()])
    b = List.from_values([shared.incref()])
    a.decref()
    assert shared.refcount == 2
    b.decref()
    shared.decref()
    assert live_values() == before


def test_long_list_is_released_without_recursion():
    before = live_values()
    lst = List.from_values(Integer(i) for i in range(100_000))
    assert len(lst) == 100_000
    lst.decref()
    assert live_values() == before


def test_live_values_by_type():
    before = live_values("atom")
    atom = Atom("a")
    assert live_values("atom") == before + 1
    atom.decref()
    assert live_values("atom") == before


def test_empty_list_cannot_have_a_tail():
    tail = List()
    with pytest.raises(ValueError):
        List(None, tail)
    tail.decref()


def test_cell_without_a_tail_ends_the_list(balanced):
    lst = List(Integer(1))
    try:
        assert lst.tail.is_empty
        assert len(lst) == 1
        assert str(lst) == "'(1)"
    finally:
        lst.decref()


@pytest.mark.parametrize(
    "make, printed",
    [
        (lambda: Integer(42), "42"),
        (lambda: Integer(-3), "-3"),
        (lambda: Atom("foo"), "'foo"),
        (lambda: Identifier("foo"), "foo"),
        (lambda: List(), "'()"),
        (lambda: List.from_values([Integer(1), Atom("a"), List.from_values([Integer(2), Integer(3)])]), "'(1 'a (2 3))"),
        (lambda: List.from_values([List()]), "'(())"),
        (lambda: FuncCall(Identifier("f"), List.from_values([Integer(1), Integer(2)])), "(f 1 2)"),
        (lambda: FuncCall(Identifier("f"), List()), "(f)"),
        (lambda: Builtin("+", lambda scope, args: None), "#<builtin +>"),
        (
            lambda: Closure(
                List.from_values([Identifier("a"), Identifier("b")]),
                FuncCall(Identifier("+"), List.from_values([Identifier("a"), Identifier("b")])),
            ),
            "(lambda (a b) (+ a b))",
        ),
    ],
)
def test_printed_forms(make, printed):
    value = make()
    try:
        assert str(value) == printed
    finally:
        value.decref()


def test_repr_shows_type_and_refcount():
    value = Integer(3)
    assert repr(value) == "<int 3 refcount=1>"
    value.decref()


def test_closure_formals():
    closure = Closure(List.from_values([Identifier("x"), Identifier("y")]), Integer(0))
    assert closure.formals == ["x", "y"]
    closure.decref()


def test_values_compare_by_content_and_are_unhashable():
    a, b, c = Atom("x"), Atom("x"), Identifier("x")
    assert a == b
    assert a != c
    with pytest.raises(TypeError):
        hash(a)
    for value in (a, b, c):
        value.decref()


_printable = st.recursive(
    st.one_of(
        st.integers(min_value=0, max_value=10**9).map(lambda n: ("int", n)),
        st.from_regex(r"[a-z][a-z0-9?!-]{0,6}", fullmatch=True).map(lambda s: ("atom", s)),
    ),
    lambda children: st.lists(children, max_size=4).map(lambda xs: ("list", xs)),
    max_leaves=10,
)


def _build(shape):
    kind, payload = shape
    if kind == "int":
        return Integer(payload)
    if kind == "atom":
        return Atom(payload)
    return List.from_values(_build(item) for item in payload)


@settings(suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(_printable)
def test_printed_literal_reads_back_equal(shape):
    # Only non-negative integers are literals: "-3" reads as an identifier.
    value = _build(shape)
    read_back = parse(str(value))
    try:
        assert read_back == value
    finally:
        value.decref()
        read_back.decref()
