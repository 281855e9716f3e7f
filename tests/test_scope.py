import gc

from onion.types import ExprList, Symbol
from onion.types.context import Context
from onion.types.operators import Assoc, OpInfo
from onion.types.scope import Scope


def test_define_and_lookup_walks_outward():
    root = Scope()
    root.define(Symbol("x"), 1)
    inner = Scope(Scope(root))
    assert inner.lookup(Symbol("x")) == (True, 1)
    assert inner.lookup(Symbol("missing")) == (False, None)
    assert inner.find(Symbol("x")) is root


def test_inner_definition_shadows():
    root = Scope()
    root.define(Symbol("x"), 1)
    inner = Scope(root)
    inner.define(Symbol("x"), 2)
    assert inner.resolve(Symbol("x")) == 2
    assert root.resolve(Symbol("x")) == 1


def test_any_expression_can_be_a_key():
    scope = Scope()
    key = ExprList([Symbol("a"), 1])
    scope.define(key, "bound")
    assert scope.resolve(ExprList([Symbol("a"), 1])) == "bound"


def test_int_and_float_keys_do_not_collide():
    scope = Scope()
    scope.define(1, "int")
    scope.define(1.0, "float")
    assert scope.resolve(1) == "int"
    assert scope.resolve(1.0) == "float"
    assert len(scope.items()) == 2


def test_items_is_a_snapshot_of_one_frame():
    root = Scope()
    root.define(Symbol("outer"), 1)
    inner = Scope(root)
    inner.define(Symbol("inner"), 2)
    assert inner.items() == [(Symbol("inner"), 2)]


def test_long_chain_teardown_does_not_recurse():
    scope = Scope()
    for _ in range(100_000):
        scope = Scope(scope)
    assert scope.depth() == 100_000
    del scope
    gc.collect()


def test_shared_parent_survives_child_teardown():
    root = Scope()
    root.define(Symbol("x"), 1)
    middle = Scope(root)
    leaf = Scope(middle)
    del leaf
    assert middle.parent is root
    assert middle.resolve(Symbol("x")) == 1


def test_child_context_aliases_the_operator_table():
    ctx = Context()
    child = ctx.child()
    assert child.operators is ctx.operators
    assert child.scope.parent is ctx.scope
    clone = ctx.clone()
    clone.define(Symbol("seen"), 1)
    assert ctx.resolve(Symbol("seen")) == 1


def test_root_is_the_outermost_frame():
    root = Scope()
    leaf = Scope(Scope(root))
    assert leaf.root() is root
    assert root.root() is root


def test_operator_defined_in_a_child_is_bound_at_the_root():
    ctx = Context()
    child = ctx.child().child()
    child.define_op("<>", OpInfo(5, Assoc.LEFT), 7)
    assert ctx.get_op("<>") is not None
    assert ctx.resolve(Symbol("<>")) == 7
    assert Symbol("<>") not in [k for k, _ in child.scope.items()]
