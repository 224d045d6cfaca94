import re

import pytest

from cky import errors
from cky.builtin.arguments import get_args
from cky.builtin.env_builtin import BUILTINS
from cky.evaluation.special_forms import SPECIAL_FORMS
from cky.types import Atom, Integer, List


@pytest.mark.parametrize(
    "code, expected",
    [
        ("(+)", "0"),
        ("(+ 5)", "5"),
        ("(+ 1 2 3 4)", "10"),
        ("(- 5)", "-5"),
        ("(- 10 3)", "7"),
        ("(- 10 3 2)", "5"),
        ("(+ 99999999999999999999 1)", "100000000000000000000"),
        ("(= 2 2)", "1"),
        ("(= 2 3)", "0"),
        ("(< 1 2)", "1"),
        ("(< 2 1)", "0"),
        ("(> 2 1)", "1"),
        ("(<= 2 2)", "1"),
        ("(<= 3 2)", "0"),
        ("(>= 2 2)", "1"),
        ("(>= 1 2)", "0"),
        ("(length '())", "0"),
        ("(length '(a b c))", "3"),
        ("(car '(a b))", "'a"),
        ("(cdr '(a b))", "'('b)"),
        ("(cdr '(a))", "'()"),
        ("(cons 'x '())", "'('x)"),
        ("(cons '(1) '(2))", "'((1) 2)"),
        ("(null? 0)", "0"),
        ("(null? '())", "1"),
        ("(null? (cdr '(1)))", "1"),
    ],
)
def test_builtin_results(run_code, code, expected):
    assert run_code(code) == expected


@pytest.mark.parametrize(
    "code, message",
    [
        ("(-)", r"-: wrong number of args \(expected at least 1, got 0\)"),
        ("(= 1)", r"=: wrong number of args \(expected 2, got 1\)"),
        ("(car)", r"car: wrong number of args \(expected 1, got 0\)"),
        ("(cons 1)", r"cons: wrong number of args \(expected 2, got 1\)"),
        ("(null? 1 2)", r"null\?: wrong number of args \(expected 1, got 2\)"),
        ("(exit 1 2)", r"exit: wrong number of args \(expected at most 1, got 2\)"),
    ],
)
def test_arity_errors(interp, code, message):
    with pytest.raises(errors.CkyArityError, match=message):
        interp.eval(code)


@pytest.mark.parametrize(
    "code, message",
    [
        ("(+ 1 'a)", "+: argument 1: expected type int, got type atom"),
        ("(- '(1))", "-: argument 0: expected type int, got type list"),
        ("(< 1 'a)", "<: argument 1: expected type int, got type atom"),
        ("(car 1)", "car: argument 0: expected type list, got type int"),
        ("(length 'a)", "length: argument 0: expected type list, got type atom"),
        ("(cons 1 2)", "cons: argument 1: expected type list, got type int"),
        ("(car '())", "car: argument 0: expected a non-empty list"),
        ("(cdr '())", "cdr: argument 0: expected a non-empty list"),
    ],
)
def test_type_errors(interp, code, message):
    with pytest.raises(errors.CkyTypeError, match=re.escape(message)):
        interp.eval(code)


def test_builtin_table_covers_the_global_names(interp):
    for name in [*BUILTINS, *SPECIAL_FORMS]:
        assert name in interp.globals


def test_get_args_borrows_values(balanced):
    args = List.from_values([Integer(1), Atom("a")])
    n, a = get_args("f", args, "da")
    assert n.refcount == 1 and a.refcount == 1
    args.decref()


def test_get_args_wildcard_accepts_anything():
    args = List.from_values([Atom("a"), List()])
    get_args("f", args, "??")
    args.decref()


def test_cdr_of_a_cell_built_without_a_tail(interp, run_code):
    interp.globals.bind("xs", List(Integer(1)))
    assert run_code("(cdr xs)") == "'()"
    assert run_code("(null? (cdr xs))") == "1"
