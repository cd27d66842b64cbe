#! /usr/bin/env python
"""
Copyright (C) 2026 by the lazyseries authors.
Released under the open source MIT license:
http://www.opensource.org/licenses/MIT

Memoized, indexable lazy sequences built from generators.

This is the substrate that the ``Series`` class in ``lazyseries.py``
stands on. A ``LazySequence`` wraps a generator *function* (not a
realized generator); nothing is computed when the sequence is built,
and each term is computed at most once, the first time anything asks
for it (after that it is simply returned from a cache). Any number of
iterations over the same sequence share that single computation, which
matters a great deal for the series kernels: a Cauchy product, for
example, walks the same operand prefixes over and over.

Typical usage:

    >>> def gen():
    ...     for n in range(3):
    ...         print("Yielding", n)
    ...         yield n
    ...
    >>> seq = LazySequence(gen)
    >>> seq.forced
    0
    >>> seq[1]
    Yielding 0
    Yielding 1
    1
    >>> list(seq)
    Yielding 2
    [0, 1, 2]

Iterating again only reads the cache:

    >>> list(seq)
    [0, 1, 2]
    >>> seq[3]
    Traceback (most recent call last):
    ...
    IndexError: sequence index out of range

Taking the ``rest`` of a sequence does not copy anything; the rest is
a view that shares its parent's cache, so forcing a term through either
one forces it for both:

    >>> naturals = count_from(0)
    >>> tail = naturals.rest()
    >>> tail[2]
    3
    >>> naturals.forced
    4
    >>> tail is naturals.rest()
    True

Infinite sequences are fine as long as nobody asks for all of them:

    >>> take(5, fmap(lambda n: n * n, count_from(1)))
    [1, 4, 9, 16, 25]
    >>> take(4, concat([7, 8], repeat(0)))
    [7, 8, 0, 0]
    >>> take(3, zipwith(lambda a, b: a + b, count_from(0), repeat(10)))
    [10, 11, 12]
"""

from itertools import count, islice, repeat as _repeat


class _Memo(object):
    # One realization of a generator function plus the cache of
    # everything it has yielded so far; shared by a sequence and all
    # of its ``rest`` views

    sentinel = object()

    def __init__(self, gen):
        self.__gen = gen
        self.__cache = []
        self.__iter = None
        self.__empty = False
        self.__error = None

    def __len__(self):
        return len(self.__cache)

    def retrieve(self, n):
        # Return the nth term, advancing the generator if necessary;
        # return ``sentinel`` if the generator runs out first. A term
        # whose computation raised raises the same error every time
        # it is asked for again.
        if n < len(self.__cache):
            return self.__cache[n]
        if self.__error is not None:
            raise self.__error
        if self.__iter is None and not self.__empty:
            self.__iter = iter(self.__gen())
        while (not self.__empty) and (n >= len(self.__cache)):
            try:
                term = next(self.__iter)
            except StopIteration:
                self.__empty = True
                self.__iter = None
            except Exception as e:
                self.__error = e
                self.__iter = None
                raise
            else:
                self.__cache.append(term)
        if n >= len(self.__cache):
            return self.sentinel
        return self.__cache[n]

    def terms(self, n):
        # Yield the terms from the nth on. This advances the generator
        # itself instead of going through ``retrieve``, so a sequence
        # built on another one costs a single extra frame per term
        # forced through the chain.
        cache = self.__cache
        while True:
            if n < len(cache):
                yield cache[n]
                n += 1
                continue
            if self.__error is not None:
                raise self.__error
            if self.__empty:
                return
            if self.__iter is None:
                self.__iter = iter(self.__gen())
            try:
                term = next(self.__iter)
            except StopIteration:
                self.__empty = True
                self.__iter = None
                return
            except Exception as e:
                self.__error = e
                self.__iter = None
                raise
            cache.append(term)


class LazySequence(object):
    """A lazily evaluated, memoized, possibly infinite sequence.

    Supports indexing with non-negative integers (which forces the
    prefix up to the index), iteration (from the cache first, then by
    advancing the generator), ``first`` and ``rest``.

    Like the generators it wraps, this class is *not* thread-safe; it
    assumes that a given sequence is only forced from one thread at a
    time.
    """

    def __init__(self, gen):
        """Construct a sequence whose terms are yielded by ``gen()``.

        ``gen`` must be a zero-argument callable returning an iterable,
        normally a generator function. It is not called until the first
        term is needed.
        """
        self.__memo = _Memo(gen)
        self.__offset = 0
        self.__rest = None

    @classmethod
    def _view(cls, memo, offset):
        # A sequence that starts ``offset`` terms into ``memo``
        seq = cls.__new__(cls)
        seq.__memo = memo
        seq.__offset = offset
        seq.__rest = None
        return seq

    def __iter__(self):
        return self.__memo.terms(self.__offset)

    def __getitem__(self, index):
        if not isinstance(index, int):
            raise TypeError("lazy sequence indices must be integers, not %s" % type(index).__name__)
        if index < 0:
            raise IndexError("lazy sequences do not support negative indexes")
        term = self.__memo.retrieve(self.__offset + index)
        if term is self.__memo.sentinel:
            raise IndexError("sequence index out of range")
        return term

    def __repr__(self):
        return "<%s: %d terms forced>" % (self.__class__.__name__, self.forced)

    @property
    def forced(self):
        """The number of terms of this sequence computed so far."""
        return max(0, len(self.__memo) - self.__offset)

    @property
    def first(self):
        return self[0]

    def rest(self):
        """Return this sequence without its first term.

        The result shares our cache, and asking for it again returns the
        same object, so repeated ``rest`` calls cost nothing.
        """
        if self.__rest is None:
            self.__rest = self._view(self.__memo, self.__offset + 1)
        return self.__rest

    def nonempty(self):
        return self.__memo.retrieve(self.__offset) is not self.__memo.sentinel


def lazy(iterable):
    """Wrap an existing iterable as a ``LazySequence``.
    """
    if isinstance(iterable, LazySequence):
        return iterable
    return LazySequence(lambda: iterable)


def cons(head, thunk):
    """A sequence starting with ``head`` followed by the terms of ``thunk()``.

    ``head`` is an already computed value; only the tail is deferred.

    >>> seq = cons(1, lambda: 1 / 0)
    >>> seq.first
    1
    """
    def _c():
        yield head
        for term in thunk():
            yield term
    return LazySequence(_c)


def concat(values, seq):
    def _c():
        for term in values:
            yield term
        for term in seq:
            yield term
    return LazySequence(_c)


def repeat(value):
    return LazySequence(lambda: _repeat(value))


def count_from(start=0):
    return LazySequence(lambda: count(start))


def fmap(f, seq):
    """Apply ``f`` to each term of ``seq``, lazily.
    """
    def _m():
        for term in seq:
            yield f(term)
    return LazySequence(_m)


def zipwith(f, *seqs):
    """Combine corresponding terms of ``seqs`` with ``f``, lazily.

    Stops at the end of the shortest sequence, which for the infinite
    sequences we deal with means it never stops.
    """
    def _z():
        for terms in zip(*seqs):
            yield f(*terms)
    return LazySequence(_z)


def take(n, seq):
    """Return a list of the first ``n`` terms of ``seq``.

    Only those terms are forced:

    >>> def noisy():
    ...     for n in count():
    ...         if n > 2:
    ...             raise RuntimeError("forced too far")
    ...         yield n
    ...
    >>> take(3, LazySequence(noisy))
    [0, 1, 2]
    """
    if n < 0:
        raise ValueError("Cannot take a negative number of terms: %d" % n)
    return list(islice(seq, n))


if __name__ == '__main__':
    import doctest
    doctest.testmod()
