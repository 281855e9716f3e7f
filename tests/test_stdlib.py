import math

import pytest

from onion.errors import OnionArityError, OnionTypeError, OnionZeroDivisionError
from onion.evaluation.apply import apply_value
from onion.stack import run_with_large_stack
from onion.types import ExprList, NativeFunction, Nil, OrderedMap, Ref, Symbol, Tagged


@pytest.mark.parametrize(
    "source, expected",
    [
        ("3 + 4 * 5", 23),
        ("(defun fact (n) (if (< n 2) 1 (* n (fact (- n 1))))) (fact 5)", 120),
        ("(def p (new #[x 1 y 2])) (. p 'x 99) (. p 'x)", 99),
        ("(module M (def k 7)) M.k", 7),
    ],
)
def test_end_to_end(run, source, expected):
    assert run(source) == expected


@pytest.mark.parametrize(
    "source, expected",
    [
        ("(+ 1 2 3)", 6),
        ("(+ 1 2.5)", 3.5),
        ("(+)", Nil),
        ('(+ "on" "ion")', "onion"),
        ("(+ (list 1) (list 2 3))", ExprList([1, 2, 3])),
        ("(- 5)", -5),
        ("(- 10 3 2)", 5),
        ("(*)", 1),
        ("(* 2 3 4)", 24),
        ("(/ 7 2)", 3),
        ("(/ (- 0 7) 2)", -3),
        ("(/ 7.0 2)", 3.5),
        ("(% 7 3)", 1),
        ("(% (- 0 7) 2)", -1),
        ("(% 7 (- 0 2))", 1),
        ("(* 9223372036854775807 2)", -2),
        ("(+ 9223372036854775807 1)", -(2 ** 63)),
        ("(! 5)", -5),
        ("(! nil)", 1),
        ("(! 'x)", Nil),
    ],
)
def test_arithmetic(run, source, expected):
    assert run(source) == expected


def test_map_addition_merges(run):
    result = run("(+ [a 1 b 2] [b 3 c 4])")
    assert isinstance(result, OrderedMap)
    assert result.keys() == [Symbol("a"), Symbol("b"), Symbol("c")]
    assert result.get(Symbol("b")) == 3


@pytest.mark.parametrize(
    "source, expected",
    [
        ("(< 1 2 3)", 1),
        ("(< 1 3 2)", Nil),
        ("(> 3 2 1)", 1),
        ('(< "a" "b")', 1),
        ("(<= 2 2)", 1),
        ("(>= 1 2)", Nil),
        ("(== 1 1 1)", 1),
        ("(== 1 1.0)", Nil),
        ("(== (list 1 2) (list 1 2))", 1),
        ("(!= 1 2)", 1),
        ("(!= 'a 'a)", Nil),
    ],
)
def test_comparisons(run, source, expected):
    assert run(source) == expected


@pytest.mark.parametrize(
    "source, error",
    [
        ('(+ 1 "a")', OnionTypeError),
        ("(- 'x)", OnionTypeError),
        ("(-)", OnionArityError),
        ("(/ 1 0)", OnionZeroDivisionError),
        ("(/ 1.5 0)", OnionZeroDivisionError),
        ("(% 1 0)", OnionZeroDivisionError),
        ("(/ 1)", OnionArityError),
        ("(<= 1 2 3)", OnionArityError),
        ('(< 1 "a")', OnionTypeError),
        ("(cons 1 2)", OnionTypeError),
        ("(tag 1 2)", OnionTypeError),
        ("(def x)", OnionArityError),
        ("(if)", OnionArityError),
        ("(1 = 2)", OnionTypeError),
    ],
)
def test_core_natives_raise_on_misuse(run, source, error):
    with pytest.raises(error):
        run(source)


@pytest.mark.parametrize(
    "source, expected",
    [
        ("(len (list 1 2 3))", 3),
        ('(len "héllo")', 5),
        ("(len [a 1])", 1),
        ("(length (vector))", 0),
        ("(len 5)", Nil),
        ("(first (list 1 2))", 1),
        ("(first (list))", Nil),
        ("(first 5)", Nil),
        ("(rest (list 1 2 3))", ExprList([2, 3])),
        ("(rest 5)", Nil),
        ("(nth 1 (list 1 2 3))", 2),
        ("(nth 5 (list 1 2 3))", Nil),
        ("(take 2 (list 1 2 3))", ExprList([1, 2])),
        ("(drop 2 (list 1 2 3))", ExprList([3])),
        ("(take 'x (list 1))", Nil),
        ("(cons 0 (list 1))", ExprList([0, 1])),
        ("(cons 1 nil)", ExprList([1])),
        ("(sqrt 16)", 4.0),
        ("(pow 2 10)", 1024.0),
    ],
)
def test_list_helpers_and_math(run, source, expected):
    assert run(source) == expected


def test_constants(run):
    assert run("PI") == math.pi
    assert run("E") == math.e


def test_tag(run):
    assert run("(tag 'point 5)") == Tagged(Symbol("point"), 5)


def test_print_and_println(run, capsys):
    assert run('(print "a" 1) (println "b" (list 1 "c") [k 2])') == OrderedMap([(Symbol("k"), 2)])
    assert capsys.readouterr().out == "a 1b (1 c) [k 2]\n"


def test_defop_defines_an_infix_operator_for_later_statements(run):
    program = """
    (defop "<>" 5 (fun (a b) (list b a)))
    1 <> 2
    """
    assert run(program) == ExprList([2, 1])


def test_defop_right_associative_and_unary(run):
    assert run('(defop "**" 30 pow \'right) 2 ** 3 ** 2') == 512.0
    assert run("(defop \"~\" 15 (fun (x) (* x 10)) 'unary) ~4 + 1") == 41


def test_defop_inside_a_function_outlives_the_call(run):
    program = """
    (defun install () (defop "<>" 5 (fun (a b) (+ a b))))
    (install)
    1 <> 2
    """
    assert run(program) == 3


def test_defop_rejects_bad_arguments(run):
    with pytest.raises(OnionTypeError):
        run('(defop "<>" 5 3)')
    with pytest.raises(OnionTypeError):
        run("(defop \"<>\" 5 pow 'sideways)")


def test_operators_are_callable_by_name(interp, run):
    assert run("(+ 1 2)") == run("1 + 2")
    plus = interp.ctx.resolve(Symbol("+"))
    assert isinstance(plus, NativeFunction)
    assert apply_value(plus, [2, 3], interp.ctx) == 5
    assert run("(def f (fun (a b) (+ a b))) (f 2 3)") == 5


# -------------------------------
# Objects, structs and modules
# -------------------------------
def test_objects_with_methods(run):
    program = """
    {
        (def obj (new #[]))
        (. obj 'x 10)
        (. obj 'x 20)
        (def counter_cls (new #[
            'count 0
            'inc (fun () (. self 'count (+ (. self 'count) 1)))
            'get (fun () (. self 'count))
        ]))
        ((. counter_cls 'inc))
        ((. counter_cls 'inc))
        (list (. obj 'x) ((. counter_cls 'get)))
    }
    """
    assert run(program) == ExprList([20, 2])


def test_infix_property_chains(run):
    program = """
    (def point (new #[ 'x 10 'y 20 ]))
    (def rect (new #[
        'origin point
        'area (fun () (* (self.origin.x) (self.origin.y)))
    ]))
    (def val (rect.origin.x + rect.origin.y))
    (list val ((rect.area)))
    """
    assert run(program) == ExprList([30, 200])


def test_nested_mutation_is_shared(run):
    program = """
    (def p (new #[ 'x 1 'y 2 ]))
    (def r (new #[ 'origin p ]))
    (. (r.origin) 'x 999)
    (list (r.origin.x) (p.x))
    """
    assert run(program) == ExprList([999, 999])


def test_assignment(run):
    program = """
    {
        (def p (new #[ 'x 0 'y 0 ]))
        val = 42
        p.x = 100
        (def r (new #[ 'origin p ]))
        r.origin.y = 200
        (val + p.x + r.origin.y)
    }
    """
    assert run(program) == 342


def test_assignment_names_the_property_literally(run):
    program = """
    (def x 'elsewhere)
    (def o (new []))
    o.x = 5
    (list o.x (. o 'elsewhere))
    """
    assert run(program) == ExprList([5, Nil])


def test_struct_fields_and_methods(run):
    program = """
    (struct Point (x y)
        (area () self.x * self.y)
        (move (dx dy) {
            (self.x = (self.x) + dx)
            (self.y = (self.y) + dy)
        })
    )
    (def p (Point 10 20))
    (p.move 5 5)
    (list (p.x) (p.y) (p.area))
    """
    assert run(program) == ExprList([15, 25, 375])


def test_struct_counter(run):
    program = """
    (struct Counter (count)
        (inc () (self.count = self.count + 1))
        (get () self.count)
    )
    (def c (Counter 0))
    (c.inc)
    (c.inc)
    (c.inc)
    (list (c.get))
    """
    assert run(program) == ExprList([3])


def test_struct_instances_are_independent(run):
    program = """
    (struct Box (v) (bump () (self.v = self.v + 1)))
    (def a (Box 1))
    (def b (Box 10))
    (a.bump)
    (list a.v b.v)
    """
    assert run(program) == ExprList([2, 10])


def test_struct_constructor_arity(run):
    with pytest.raises(OnionArityError):
        run("(struct P (x y)) (P 1)")


def test_method_binding_does_not_touch_the_defining_frame(run):
    program = """
    (def o (new #[ 'get (fun () self) ]))
    (def m o.get)
    (list (== (m) o) self)
    """
    assert run(program) == ExprList([1, Symbol("self")])


def test_modules(run, capsys):
    program = """
    {
        (module MathLib
            (def PI 3.14159)
            (defun square (x) (* x x))
            (defun area (r) (* PI (square r)))

            (struct Point (x y)
                (distance (other) {
                    (sqrt
                        (self.x - other.x) * (self.x - other.x)
                        + (self.y - other.y) * (self.y - other.y)
                    )
                })
                (add (other) {
                    (Point
                        self.x + other.x
                        self.y + other.y)
                }))
        )

        (println "Module loaded:" MathLib)
        (def sq MathLib.square)
        (def ar MathLib.area)
        (def p1 (MathLib.Point 1 2))
        (def p2 (MathLib.Point 4 6))
        (list MathLib.PI (sq 4) (p1.distance p2) (p1.add p2) (ar 2))
    }
    """
    result = run(program)
    assert result[0] == pytest.approx(3.14159)
    assert result[1] == 16
    assert result[2] == pytest.approx(5.0)
    assert isinstance(result[3], Ref)
    assert result[3].get().get(Symbol("x")) == 5
    assert result[4] == pytest.approx(3.14159 * 4)
    assert capsys.readouterr().out.startswith("Module loaded:")
    # The module's PI does not leak into the global frame
    assert run("PI") == math.pi


def test_self_referential_objects_display(run):
    assert str(run("(def r (new #[])) (. r 'me r) r")) == "#[me <ref ...>]"


def test_mergesort_with_large_stack(interp):
    program = """
    {
        (defun merge (left right)
            (if ((length left) == 0) right
              (if ((length right) == 0) left
                (if ((first left) < (first right))
                    (cons (first left) (merge (rest left) right))
                    (cons (first right) (merge left (rest right)))))))

        (defun mergesort (lst)
            (if ((length lst) < 2) lst
                {
                    (def len (length lst))
                    (def mid (len / 2))
                    (def left (take mid lst))
                    (def right (drop mid lst))
                    (merge (mergesort left) (mergesort right))
                }))

        (defun gen_descending (n)
            (if (n < 1) {} (cons n (gen_descending (n - 1)))))

        (def sorted (mergesort (gen_descending 200)))
        (list (length sorted) (first sorted) (nth 199 sorted))
    }
    """
    result = run_with_large_stack(interp.eval, program, stack_size_mb=64, recursion_limit=50_000)
    assert result == ExprList([200, 1, 200])
