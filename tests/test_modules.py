import math

import pytest

from onion.errors import OnionTypeError, OnionZeroDivisionError
from onion.types import ExprList, Nil, Ref, Symbol


def L(*items):
    return ExprList(items)


@pytest.mark.parametrize(
    "source, expected",
    [
        ("(Math.abs (- 0 10))", 10),
        ("(Math.sqrt 16.0)", 4.0),
        ("(Math.max 1 2 5 3)", 5),
        ("(Math.min 10 (- 0 2) 5)", -2),
        ("(Math.floor 2.7)", 2),
        ("(Math.ceil 2.1)", 3),
        ("(Math.round 2.5)", 3),
        ("(Math.round (- 0 2.5))", -3),
        ("(Math.round 7)", 7),
        ("(Math.sign (- 0 3))", -1),
        ("(Math.clamp 15 0 10)", 10.0),
        ("(Math.pow 2 3)", 8.0),
        ("(Math.rand_int 3 4)", 3),
        ("(Math.to_degrees Math.PI)", 180.0),
    ],
)
def test_math(run, source, expected):
    assert run(source) == pytest.approx(expected)


def test_math_constants(run):
    assert run("Math.PI") == math.pi
    assert run("Math.TAU") == math.tau
    assert math.isinf(run("Math.INF"))
    assert math.isnan(run("(Math.sqrt (- 0 1))"))
    assert run("(Math.log 8 2)") == pytest.approx(3.0)
    assert 0.0 <= run("(Math.rand)") < 1.0


@pytest.mark.parametrize(
    "source, expected",
    [
        ('(String.len "hello")', 5),
        ('(String.to_upper "hello")', "HELLO"),
        ('(String.to_lower "HeLLo")', "hello"),
        ('(String.trim "  x ")', "x"),
        ('(String.substring "hello world" 0 5)', "hello"),
        ('(String.substring "hello world" 6)', "world"),
        ('(String.substring "abc" 10)', ""),
        ('(String.fmt "Hello {}!" "World")', "Hello World!"),
        ('(String.fmt "{} + {} = {}" 1 2 3)', "1 + 2 = 3"),
        ('(String.fmt "{} and {}" 1)', "1 and {}"),
        ('(String.split "a,b,c" ",")', L("a", "b", "c")),
        ('(String.join (list "a" "b") "-")', "a-b"),
        ('(String.join (list 1 2) ", ")', "1, 2"),
        ('(String.replace "aaa" "a" "b")', "bbb"),
        ('(String.chars "ab")', L("a", "b")),
        ('(String.lines "a\\nb")', L("a", "b")),
        ('(String.repeat "ab" 3)', "ababab"),
        ('(String.pad_left "7" 3 "0")', "007"),
        ('(String.pad_right "7" 3)', "7  "),
        ('(String.starts_with "onion" "on")', 1),
        ('(String.ends_with "onion" "on")', 1),
        ('(String.contains "onion" "z")', Nil),
        ('(String.is_empty "")', 1),
        ('(String.is_empty "x")', Nil),
    ],
)
def test_string(run, source, expected):
    assert run(source) == expected


@pytest.mark.parametrize(
    "source, expected",
    [
        ("(Type.of 123)", "int"),
        ("(Type.of 1.5)", "float"),
        ('(Type.of "s")', "string"),
        ("(Type.of 'a)", "symbol"),
        ("(Type.of ''a)", "quoted"),
        ("(Type.of (list))", "list"),
        ("(Type.of (vector))", "vector"),
        ("(Type.of [])", "map"),
        ("(Type.of #[])", "map"),
        ("(Type.of nil)", "nil"),
        ("(Type.of (new 1))", "ref"),
        ("(Type.of Math)", "ref"),
        ("(Type.of (tag 't 1))", "tagged"),
        ("(Type.of Math.sqrt)", "fn"),
        ("(Type.of (fun (x) x))", "fn"),
        ('(Type.to_int "123")', 123),
        ("(Type.to_int 2.9)", 2),
        ('(Type.to_int "abc")', Nil),
        ("(Type.to_float 2)", 2.0),
        ("(Type.to_str 123)", "123"),
        ('(Type.to_str (list 1 "a"))', "(1 a)"),
        ('(Type.to_sym "abc")', Symbol("abc")),
        ("(Type.is_int 1)", 1),
        ("(Type.is_int 1.0)", Nil),
        ("(Type.is_float 1.0)", 1),
        ("(Type.is_list (list))", 1),
        ("(Type.is_vector (list))", Nil),
        ("(Type.is_map #[])", 1),
        ("(Type.is_nil nil)", 1),
        ('(Type.is_string "")', 1),
    ],
)
def test_type(run, source, expected):
    assert run(source) == expected


@pytest.mark.parametrize(
    "source, expected",
    [
        ('(String.join (Collections.push (list "a" "b") "c") ",")', "a,b,c"),
        ("(len (Collections.push (list) 1))", 1),
        ("(Collections.peek (list 1 2 3))", 3),
        ("(Collections.pop (list 1 2 3))", L(1, 2)),
        ("(first (Collections.reverse (list 1 2 3)))", 3),
        ("(Collections.sort (list 3 1 2))", L(1, 2, 3)),
        ('(Collections.sort (list "b" 2 nil))', L(Nil, 2, "b")),
        ("(Collections.range 0 5)", L(0, 1, 2, 3, 4)),
        ("(Collections.range 5 0 (- 0 2))", L(5, 3, 1)),
        ("(Collections.range 0 5 0)", Nil),
        ('(Collections.zip (list 1 2 3) (list "a" "b"))', L(L(1, "a"), L(2, "b"))),
        ("(Collections.flatten (list 1 (list 2 (list 3)) 4))", L(1, 2, 3, 4)),
        ("(Collections.dedup (list 1 1.0 1 2))", L(1, 1.0, 2)),
        ('(Collections.enumerate (list "a" "b"))', L(L(0, "a"), L(1, "b"))),
        ("(Collections.get (list 1 2 3) (- 0 1))", 3),
        ('(Collections.get "abc" 1)', "b"),
        ("(Collections.get [a 1] 'a)", 1),
        ("(Collections.get (list 1) 5)", Nil),
        ("(len (Collections.keys #[ a 1 b 2 ]))", 2),
        ("(Collections.values [a 1 b 2])", L(1, 2)),
        ('(Collections.contains_key #[ "a" 1 ] "a")', 1),
        ('(Collections.contains_key #[ a 1 ] "a")', Nil),
        ("(len (Collections.merge [a 1] [b 2]))", 2),
        ("(Collections.merge [a 1] #[b 2])", Nil),
        ("(Collections.map (list 1 2 3) (fun (x) (* x 2)))", L(2, 4, 6)),
        ("(Collections.map (list 1 4 9) Math.sqrt)", L(1.0, 2.0, 3.0)),
        ("(Collections.filter (list 1 2 3 4) (fun (x) (> x 2)))", L(3, 4)),
        ("(Collections.fold (list 1 2 3) 0 (fun (acc x) (+ acc x)))", 6),
        ("(Collections.fold (list 1 2 3) 10 (fun (acc x) (- acc x)))", 4),
        ("(Collections.find (list 1 2 3) (fun (x) (> x 1)))", 2),
        ("(Collections.find (list 1 2 3) (fun (x) (> x 5)))", Nil),
        ("(Collections.any (list 1 2 3) (fun (x) (== x 2)))", 1),
        ("(Collections.all (list 1 2 3) (fun (x) (> x 1)))", Nil),
    ],
)
def test_collections(run, source, expected):
    assert run(source) == expected


def test_callbacks_close_over_their_context(run):
    program = """
    (def factor 3)
    (Collections.map (list 1 2) (fun (x) (* x factor)))
    """
    assert run(program) == L(3, 6)


@pytest.mark.parametrize(
    "source, expected",
    [
        ('(Math.sqrt "x")', Nil),
        ("(Math.abs)", Nil),
        ("(Math.floor 'x)", Nil),
        ("(String.to_upper 5)", Nil),
        ('(String.split "abc" "")', Nil),
        ("(String.len 5)", Nil),
        ("(Type.to_int (list))", Nil),
        ("(Collections.reverse 5)", Nil),
        ("(Collections.map 5 (fun (x) x))", ExprList()),
        ("(Collections.filter (list 1) 5)", ExprList()),
        ("(Collections.fold 5 0 (fun (acc x) (+ acc x)))", 0),
        ("(Collections.keys (list))", Nil),
    ],
)
def test_library_natives_return_nil_on_bad_input(run, source, expected):
    assert run(source) == expected


@pytest.mark.parametrize("source", ['(sqrt "x")', "(pow 'a 2)", "(+ 'a 1)"])
def test_core_natives_raise_where_library_natives_do_not(run, source):
    with pytest.raises(OnionTypeError):
        run(source)


def test_errors_inside_callbacks_propagate(run):
    with pytest.raises(OnionZeroDivisionError):
        run("(Collections.map (list 1) (fun (x) (/ x 0)))")


def test_modules_are_shared_references(run):
    module = run("Math")
    assert isinstance(module, Ref)
    run("Math.answer = 42")
    assert run("Math.answer") == 42
    assert module.get().get(Symbol("answer")) == 42
