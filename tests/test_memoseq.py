"""
Tests for the lazy sequence substrate in memoseq.py.
"""

from itertools import count

import pytest

from memoseq import (
    LazySequence,
    concat,
    cons,
    count_from,
    fmap,
    lazy,
    repeat,
    take,
    zipwith,
)


def recording(limit=None):
    """Generator function over the naturals that records each term it yields."""
    yielded = []

    def gen():
        for n in count():
            if limit is not None and n >= limit:
                return
            yielded.append(n)
            yield n
    return gen, yielded


class TestLazySequence:

    def test_construction_computes_nothing(self):
        gen, yielded = recording()
        seq = LazySequence(gen)
        assert yielded == []
        assert seq.forced == 0

    def test_each_term_computed_once(self):
        gen, yielded = recording()
        seq = LazySequence(gen)
        assert seq[3] == 3
        assert take(5, seq) == [0, 1, 2, 3, 4]
        assert take(5, seq) == [0, 1, 2, 3, 4]
        assert yielded == [0, 1, 2, 3, 4]

    def test_independent_iterators_share_the_cache(self):
        gen, yielded = recording()
        seq = LazySequence(gen)
        a = iter(seq)
        b = iter(seq)
        assert next(a) == 0
        assert next(b) == 0
        assert next(b) == 1
        assert next(a) == 1
        assert yielded == [0, 1]

    def test_finite_sequence(self):
        gen, _ = recording(limit=3)
        seq = LazySequence(gen)
        assert list(seq) == [0, 1, 2]
        with pytest.raises(IndexError):
            seq[3]
        assert seq.nonempty()

    def test_negative_and_non_integer_indexes(self):
        seq = count_from(0)
        with pytest.raises(IndexError):
            seq[-1]
        with pytest.raises(TypeError):
            seq["1"]

    def test_rest_shares_cache(self):
        gen, yielded = recording()
        seq = LazySequence(gen)
        tail = seq.rest()
        assert tail.first == 1
        assert seq.forced == 2
        assert tail.forced == 1
        assert tail.rest()[0] == 2
        assert yielded == [0, 1, 2]

    def test_rest_is_cached(self):
        seq = count_from(0)
        assert seq.rest() is seq.rest()

    def test_failed_term_keeps_failing(self):
        def gen():
            yield 1
            raise ZeroDivisionError("bad term")
        seq = LazySequence(gen)
        assert seq[0] == 1
        with pytest.raises(ZeroDivisionError):
            seq[1]
        with pytest.raises(ZeroDivisionError):
            seq[1]
        assert seq[0] == 1

    def test_failed_term_keeps_failing_when_iterated(self):
        def gen():
            yield 1
            raise ZeroDivisionError("bad term")
        seq = LazySequence(gen)
        it = iter(seq)
        assert next(it) == 1
        with pytest.raises(ZeroDivisionError):
            next(it)
        with pytest.raises(ZeroDivisionError):
            list(seq)
        assert seq.forced == 1

    def test_long_chain_of_rests(self):
        seq = count_from(0)
        for n in range(3000):
            seq = seq.rest()
        assert take(2, seq) == [3000, 3001]

    def test_first_of_empty(self):
        with pytest.raises(IndexError):
            lazy([]).first

    def test_repr(self):
        seq = count_from(0)
        seq[1]
        assert repr(seq) == "<LazySequence: 2 terms forced>"


class TestCombinators:

    def test_cons_defers_tail(self):
        calls = []

        def tail():
            calls.append(1)
            return repeat(0)
        seq = cons(9, tail)
        assert seq.first == 9
        assert calls == []
        assert take(3, seq) == [9, 0, 0]
        assert calls == [1]

    def test_concat(self):
        assert take(5, concat((1, 2), count_from(10))) == [1, 2, 10, 11, 12]

    def test_fmap_and_zipwith(self):
        squares = fmap(lambda n: n * n, count_from(0))
        assert take(4, zipwith(lambda a, b: a - b, squares, count_from(0))) == [0, 0, 2, 6]

    def test_zipwith_stops_at_shortest(self):
        assert list(zipwith(max, lazy([1, 5]), count_from(3))) == [3, 5]

    def test_lazy_returns_lazy_sequences_unchanged(self):
        seq = count_from(0)
        assert lazy(seq) is seq

    def test_take_negative(self):
        with pytest.raises(ValueError):
            take(-2, count_from(0))
