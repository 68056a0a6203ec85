import math

import pytest

from mallet.errors import NativeFunctionError


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(+ 1 2)", 3.0),
        ("(- 10 4)", 6.0),
        ("(* 3 4)", 12.0),
        ("(/ 7 2)", 3.5),
        ("(+ 0.5 0.25)", 0.75),
        ("(- 1 3)", -2.0),
        ("(+ 5 (* 2 3))", 11.0),
        ("(- (+ 5 (* 2 3)) 3)", 8.0),
        ("(/ (- (+ 515 (* 87 311)) 302) 27)", 1010.0),
    ],
)
def test_arithmetic(run, source, expected):
    assert run(source) == expected


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(< 1 2)", True),
        ("(< 2 1)", False),
        ("(<= 2 2)", True),
        ("(> 3 2)", True),
        ("(>= 1 2)", False),
        ("(= 1 1)", True),
        ("(= 1 2)", False),
        ('(= "a" "a")', True),
        ("(= (list 1 2) [1 2])", True),
        ("(= :a :a)", True),
        ('(= :a "a")', False),
        ("(= nil false)", False),
        ("(= {:a [1]} {:a (list 1)})", True),
    ],
)
def test_comparison(run, source, expected):
    assert run(source) is expected


def test_division_by_zero_follows_ieee(run):
    assert run("(/ 1 0)") == math.inf
    assert run("(/ -1 0)") == -math.inf
    assert math.isnan(run("(/ 0 0)"))


@pytest.mark.parametrize(
    "source,message",
    [
        ("(+ 1)", "Expected 2 arguments, got 1"),
        ("(* 1 2 3)", "Expected 2 arguments, got 3"),
        ("(= 1)", "Expected 2 arguments, got 1"),
        ('(+ 1 "2")', "Argument must be a number"),
        ("(< true 1)", "Argument must be a number"),
        ("(- nil 1)", "Argument must be a number"),
    ],
)
def test_arithmetic_errors(run, source, message):
    with pytest.raises(NativeFunctionError) as excinfo:
        run(source)
    assert str(excinfo.value) == f"Error when calling native function: {message}"


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(+ 1 2)", "3"),
        ("(/ 1 4)", "0.25"),
        ("(* -2 3)", "-6"),
    ],
)
def test_numbers_print_compactly(interp, source, expected):
    assert interp.rep(source) == expected


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(let* (f (fn* (a) a)) (= f (with-meta f 1)))", True),
        ("(let* (f (fn* (a) a)) (= f f))", True),
        ("(= (fn* (a) a) (fn* (a) a))", True),
        ("(= (fn* (a) a) (fn* (b) b))", False),
        ("(= (fn* (a) a) (fn* (a) (+ a 1)))", False),
        ("(= ((fn* (x) (fn* (a) a)) 1) ((fn* (x) (fn* (a) a)) 1))", False),
        ("(= + +)", True),
        ("(= + (with-meta + :m))", True),
        ("(= + -)", False),
        ("(= + (fn* (a b) (+ a b)))", False),
    ],
)
def test_function_equality(run, source, expected):
    assert run(source) is expected
