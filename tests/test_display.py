import pytest

from onion.debug_utils.pprint import to_display, to_source
from onion.types import ExprList, Nil, OrderedMap, Quoted, Ref, Symbol, Tagged, UnorderedMap, Vector


@pytest.mark.parametrize(
    "value, expected",
    [
        (Nil, "nil"),
        (42, "42"),
        (1.5, "1.5"),
        (2.0, "2.0"),
        ("raw text", "raw text"),
        (Symbol("sym"), "sym"),
        (ExprList([1, "a", ExprList()]), "(1 a ())"),
        (Vector([1, 2]), "(vector 1 2)"),
        (Vector(), "(vector)"),
        (OrderedMap([(Symbol("b"), 2), (Symbol("a"), 1)]), "[a 1 b 2]"),
        (UnorderedMap([(Symbol("a"), 1)]), "#[a 1]"),
        (Tagged(Symbol("point"), 5), "point 5"),
        (Quoted(Symbol("x")), "'x"),
        (Ref(ExprList([1])), "(1)"),
    ],
)
def test_display(value, expected):
    assert to_display(value) == expected


def test_source_form_quotes_strings():
    assert to_source(ExprList(["a\"b", 1])) == '("a\\"b" 1)'


def test_native_and_function_display(run):
    assert to_display(run("+")) == "<extern: +>"
    assert to_display(run("(fun (x) (x + 1))")) == "<function params: (x) body: ((+ x 1))>"


def test_cyclic_refs_terminate():
    r = Ref(Nil)
    r.set(ExprList([1, r]))
    assert to_display(r) == "(1 <ref ...>)"
