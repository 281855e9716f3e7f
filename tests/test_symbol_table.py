import pickle
import threading
import uuid

from hypothesis import given, strategies as st

from onion.types.symbol import Symbol, intern, table_size


@given(st.text(min_size=1))
def test_interning_returns_same_object(text):
    assert Symbol(text) is Symbol(text)
    assert intern(text) is Symbol(text)
    assert str(Symbol(text)) == text


@given(st.text(min_size=1), st.text(min_size=1))
def test_distinct_text_gives_distinct_symbols(a, b):
    if a != b:
        assert Symbol(a) is not Symbol(b)
        assert Symbol(a) != Symbol(b)


def test_symbol_is_hashable_by_identity():
    d = {Symbol("alpha"): 1}
    assert d[Symbol("alpha")] == 1


def test_table_only_grows():
    name = f"fresh-{uuid.uuid4()}"
    before = table_size()
    Symbol(name)
    Symbol(name)
    assert table_size() == before + 1


def test_pickle_round_trip_keeps_identity():
    s = Symbol("pickled")
    assert pickle.loads(pickle.dumps(s)) is s


def test_concurrent_interning():
    results = []

    def worker():
        results.append(Symbol("contended-name"))

    threads = [threading.Thread(target=worker) for _ in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert all(s is results[0] for s in results)
