#! /usr/bin/env python
"""
Copyright (C) 2026 by the lazyseries authors.
Released under the open source MIT license:
http://www.opensource.org/licenses/MIT

Formal power series as lazy, infinite sequences of coefficients.

A ``Series`` is an arity tag plus a lazily evaluated, memoized sequence
of coefficients (see ``memoseq.py``); the nth coefficient is the one
that multiplies x**n. Coefficients can be anything the generic
arithmetic in ``genericarith.py`` knows how to handle: Python numbers,
sympy symbols and expressions, functions, or other series. Every
operation builds a new series out of generator functions in terms of
existing ones, so nothing is computed until somebody asks for terms,
and then only the terms they ask for.

Series take part in the generic arithmetic like any other value:

    >>> from fractions import Fraction
    >>> s = starting_with(1, 1)
    >>> t = starting_with(1, 2, 3)
    >>> take(5, mul(s, t))
    [1, 3, 5, 3, 0]
    >>> take(4, add(s, t))
    [2, 3, 3, 0]
    >>> take(4, sub(s, t))
    [0, -1, -3, 0]
    >>> take(4, mul(2, t)), take(4, mul(t, 3))
    ([2, 4, 6, 0], [3, 6, 9, 0])
    >>> take(5, square(s))
    [1, 2, 1, 0, 0]

The usual operators work too, since they go through the same generic
functions:

    >>> take(4, s * t - 2 * s)
    [-1, 1, 5, 3]

Series can be infinite, of course; printing one only ever looks at the
first four terms:

    >>> N = generate(lambda n: n)
    >>> N
    ('Series', ('exactly', 0), 0, 1, 2, 3, '...')
    >>> take(6, partial_sums(N))
    [0, 1, 3, 6, 10, 15]
    >>> sum(N, 3)
    6

Coefficients can be symbolic:

    >>> import sympy
    >>> x, y = sympy.symbols('x y')
    >>> take(3, mul(starting_with(x, y), starting_with(x, y)))
    [x**2, 2*x*y, y**2]
    >>> take(3, partial_derivative(generate(lambda n: x**n), [x]))
    [0, 1, 2*x]

A series whose coefficients are functions can be applied to arguments,
giving the series of the values:

    >>> F = generate(lambda n: (lambda a: a ** n))
    >>> take(4, F(2))
    [1, 2, 4, 8]
    >>> take(4, value(F, 3))
    [1, 3, 9, 27]

We can also check the identities the formal calculus should satisfy.
The self-referential definitions of exp, sin and cos in terms of their
own integrals only work because nothing is evaluated before it is
needed:

    >>> EXP = exp_series()
    >>> SIN = sin_series()
    >>> COS = cos_series()
    >>> ONE = nthpower(0)
    >>> X = nthpower(1)
    >>> def agree(s, t, n=10):
    ...     return take(n, s) == take(n, t)
    ...
    >>> agree(EXP, derivative(EXP))
    True
    >>> agree(derivative(SIN), COS)
    True
    >>> agree(derivative(COS), negate(SIN))
    True
    >>> agree(add(square(SIN), square(COS)), ONE)
    True
    >>> agree(mul(X, X), nthpower(2))
    True
    >>> all(agree(s, integral(derivative(s), s[0])) for s in (EXP, SIN, COS))
    True
"""

import logging
from fractions import Fraction
from itertools import islice

import memoseq
from genericarith import (
    NATIVE_NUMERIC, NUMERICAL_EXPRESSION, SEQUENCE, SYMBOL,
    add, derive, freeze, mul, negate, partial_derivative, simplify, square,
    sub, zero_like)
from memoseq import LazySequence

logger = logging.getLogger(__name__)

__all__ = [
    'ArityMismatch', 'CallableMismatch', 'ConstructionError', 'EXACTLY_ZERO',
    'Series', 'SeriesError', 'UnsupportedArity', 'cos_series', 'derivative',
    'exactly', 'exp_series', 'fmap', 'generate', 'integral', 'is_series',
    'make', 'nthpower', 'partial_sums', 'scalar_times_series',
    'series_minus_series', 'series_plus_series', 'series_sum',
    'series_times_scalar', 'series_times_series', 'sin_series',
    'starting_with', 'take', 'value',
    'add', 'freeze', 'mul', 'negate', 'partial_derivative', 'square', 'sub',
]

SERIES = 'series'
COSERIES = 'coseries'


class SeriesError(Exception): pass

class ArityMismatch(SeriesError, ValueError): pass

class UnsupportedArity(SeriesError, ValueError): pass

class CallableMismatch(SeriesError, TypeError): pass

class ConstructionError(SeriesError, TypeError): pass


def exactly(n):
    """The arity tag of a series applied to exactly ``n`` arguments.
    """
    arity = ('exactly', n)
    _check_arity(arity)
    return arity


def _check_arity(arity):
    if not (isinstance(arity, tuple) and len(arity) == 2 and
            arity[0] == 'exactly' and isinstance(arity[1], int) and
            0 <= arity[1] <= 3):
        raise ValueError("Malformed arity tag: %r" % (arity,))


EXACTLY_ZERO = exactly(0)


class Series(object):
    """Formal power series encapsulation.

    Holds an arity tag and a ``LazySequence`` of coefficients; the nth
    term is the coefficient of x**n. Instances are never mutated;
    every operation returns a new series.

    Series have no ``__eq__``: two infinite sequences can't be
    compared in general, so series compare (and hash) by identity. Use
    ``take`` to compare finite prefixes.
    """

    kind = SERIES

    # How many terms ``freeze`` (and so ``str`` and ``repr``) shows
    freezelimit = 4
    # Default number of terms printed by ``showterms``
    showlimit = 10

    def __init__(self, arity, elements):
        _check_arity(arity)
        self.__arity = arity
        self.__elements = memoseq.lazy(elements)

    @property
    def arity(self):
        return self.__arity

    @property
    def elements(self):
        """The underlying lazy sequence of coefficients."""
        return self.__elements

    def __iter__(self):
        return iter(self.__elements)

    def __getitem__(self, n):
        return self.__elements[n]

    def __call__(self, *args):
        """Apply every coefficient to ``args``, giving a new series.

        Each coefficient must be callable with the given arguments; if
        one isn't, that only comes to light when its term is forced:

        >>> S = starting_with(abs, 5)
        >>> S(-3)[0]
        3
        >>> S(-3)[1]  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        lazyseries.CallableMismatch: Series coefficient 5 is not callable
        """
        if not 1 <= len(args) <= 3:
            raise TypeError("A series applies to 1, 2 or 3 arguments, not %d" % len(args))
        def _apply(term):
            if not callable(term):
                raise CallableMismatch("Series coefficient %r is not callable" % (term,))
            return term(*args)
        return Series(self.__arity, memoseq.fmap(_apply, self.__elements))

    def __str__(self):
        return str(freeze(self))

    __repr__ = __str__

    def is_zero(self):
        """True only if the series has no terms at all.

        Every series built by this module is infinite, so this is
        ``False`` for all of them, even one whose terms are all zero.
        """
        return not self.__elements.nonempty()

    def is_one(self):
        return False

    def showterms(self, num=None):
        """Convenience method to print the first ``num`` terms.

        If ``num`` is not given, it defaults to ``self.showlimit``.

        >>> starting_with(Fraction(1, 2)).showterms(3)
        1/2
        0
        0
        """
        for term in islice(self, num or self.showlimit):
            print(term)

    def __add__(self, other):
        return add(self, other)

    def __radd__(self, other):
        return add(other, self)

    def __sub__(self, other):
        return sub(self, other)

    def __rsub__(self, other):
        return sub(other, self)

    def __mul__(self, other):
        return mul(self, other)

    def __rmul__(self, other):
        return mul(other, self)

    def __neg__(self):
        return negate(self)


def make(arity, elements):
    """Wrap an arity tag and a sequence of coefficients as a series.
    """
    return Series(arity, elements)


def is_series(x):
    return isinstance(x, Series)


# Construction and extraction

def starting_with(*xs):
    """The infinite series starting with the given values.

    The rest of the series is filled with the zero corresponding to
    the first value, so a truncated polynomial can be used anywhere an
    infinite series can:

    >>> take(5, starting_with(Fraction(1, 2), 3))
    [Fraction(1, 2), 3, Fraction(0, 1), Fraction(0, 1), Fraction(0, 1)]
    >>> starting_with()  # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
    ...
    lazyseries.ConstructionError: starting_with needs at least one value
    """
    if not xs:
        raise ConstructionError("starting_with needs at least one value")
    return Series(EXACTLY_ZERO, memoseq.concat(xs, memoseq.repeat(zero_like(xs[0]))))


def generate(f):
    """The series whose nth term is ``f(n)``, for n = 0, 1, 2, ...
    """
    return Series(EXACTLY_ZERO, memoseq.fmap(f, memoseq.count_from(0)))


def partial_sums(s):
    """The series of running totals of ``s``.

    Each total is the previous one plus the next term of ``s``, so
    producing n totals costs n additions.
    """
    def _sums():
        total = None
        for n, term in enumerate(s):
            total = add(total, term) if n else term
            yield total
    return Series(s.arity, LazySequence(_sums))


def take(n, s):
    """Return a list of the first ``n`` terms of a series or sequence.
    """
    if is_series(s):
        s = s.elements
    return memoseq.take(n, s)


def fmap(f, s):
    """Apply ``f`` to each term of ``s``, giving a series of the same arity.
    """
    return Series(s.arity, memoseq.fmap(f, s.elements))


def series_sum(s, n):
    """The nth partial sum of ``s``; forces terms 0 through n and no more.
    """
    return partial_sums(s)[n]

sum = series_sum


# Arithmetic kernels. The private helpers work on bare lazy sequences;
# the public functions check arities and wrap the result as a series.

def _c_times_s(c, s):
    return memoseq.fmap(lambda term: mul(c, term), s)


def _s_times_c(s, c):
    return memoseq.fmap(lambda term: mul(term, c), s)


def _s_plus_s(s, t):
    return memoseq.zipwith(add, s, t)


def _s_times_s(s, t):
    # The Cauchy product, co-recursively: the head is s0 * t0, and the
    # tail is s0 times the tail of t plus the product of the tail of s
    # with all of t. Term n forces only terms 0 through n of s and t.
    def _step():
        s0 = s.first
        yield mul(s0, t.first)
        for a, b in zip(t.rest(), _s_times_s(s.rest(), t)):
            yield add(mul(s0, a), b)
    return LazySequence(_step)


def _same_arity(s, t):
    if s.arity != t.arity:
        raise ArityMismatch("Series arities differ: %s and %s" % (s.arity, t.arity))
    return s.arity


def scalar_times_series(c, s):
    """Multiply each term of ``s`` by ``c`` on the left.

    Left and right multiplication are kept apart since coefficients
    need not commute:

    >>> import sympy
    >>> A, B = sympy.symbols('A B', commutative=False)
    >>> take(2, scalar_times_series(A, starting_with(B)))
    [A*B, 0]
    >>> take(2, series_times_scalar(starting_with(B), A))
    [B*A, 0]
    """
    return Series(s.arity, _c_times_s(c, s.elements))


def series_times_scalar(s, c):
    """Multiply each term of ``s`` by ``c`` on the right.
    """
    return Series(s.arity, _s_times_c(s.elements, c))


def series_plus_series(s, t):
    """Add two series of the same arity term by term.

    A mismatch in arity is caught before anything is computed:

    >>> f = make(exactly(1), memoseq.repeat(abs))
    >>> series_plus_series(starting_with(1), f)  # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
    ...
    lazyseries.ArityMismatch: Series arities differ: ('exactly', 0) and ('exactly', 1)
    """
    return Series(_same_arity(s, t), _s_plus_s(s.elements, t.elements))


def series_minus_series(s, t):
    return Series(_same_arity(s, t), _s_plus_s(s.elements, memoseq.fmap(negate, t.elements)))


def series_times_series(s, t):
    """The Cauchy product of two series of the same arity.

    The nth term is the sum of s[i] * t[n - i] for i = 0 .. n, but it
    is computed without any indexing at all (see ``_s_times_s``), so it
    works on series of any length, including infinite ones. Producing
    the nth term takes O(n) multiplications.
    """
    arity = _same_arity(s, t)
    logger.debug("building Cauchy product of series with arity %s", arity)
    return Series(arity, _s_times_s(s.elements, t.elements))


def value(S, x):
    """Find the value of the series S applied to the argument x.

    This assumes that S is a series of functions. If those functions
    themselves return series, the result is a layered sum of their
    values: writing the values as

        [[A0 A1 A2 ...] [B0 B1 B2 ...] [C0 C1 C2 ...] ...]

    the result is the series

        [A0 (A1 + B0) (A2 + B1 + C0) ...]

    i.e. the jth term of the ith value lands in position i + j. A
    function that returns a plain value contributes only to its own
    position.

    >>> S = generate(lambda i: (lambda a: starting_with(a * i, 10)))
    >>> take(5, value(S, 1))
    [0, 11, 12, 13, 14]

    Only series of arity exactly 0 can be applied this way:

    >>> value(make(exactly(2), memoseq.repeat(max)), 1)  # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
    ...
    lazyseries.UnsupportedArity: Cannot apply series of arity ('exactly', 2)
    """
    if S.arity != EXACTLY_ZERO:
        raise UnsupportedArity("Cannot apply series of arity %s" % (S.arity,))
    def collect(remaining):
        def _walk():
            # Plain values are emitted in one flat loop; only a series
            # value starts a new layer over the rest of the walk
            current = remaining
            while True:
                result = current.first(x)
                if is_series(result):
                    terms = result.elements
                    yield terms.first
                    for a, b in zip(terms.rest(), collect(current.rest())):
                        yield add(a, b)
                    return
                yield result
                current = current.rest()
        return LazySequence(_walk)
    return Series(S.arity, collect(S.elements))


# Formal calculus on the series variable

def derivative(s):
    """The formal derivative of ``s`` with respect to the series variable.

    >>> take(4, derivative(starting_with(5, 1, 1, 1)))
    [1, 2, 3, 0]
    """
    def _d():
        for n, term in enumerate(s.elements.rest()):
            yield mul(n + 1, term)
    return Series(s.arity, LazySequence(_d))


def integral(s, constant=0):
    """The formal integral of ``s``, with ``constant`` as its zeroth term.

    >>> take(4, integral(starting_with(1, 1, 1), 7))
    [7, Fraction(1, 1), Fraction(1, 2), Fraction(1, 3)]
    """
    def _i():
        yield constant
        for n, term in enumerate(s):
            yield mul(Fraction(1, n + 1), term)
    return Series(s.arity, LazySequence(_i))


def nthpower(n, coeff=1):
    """The series of ``coeff * x**n``.
    """
    return starting_with(*([zero_like(coeff)] * n + [coeff]))


def exp_series():
    """The exponential function as a series.

    Uses the fact that exp is the unique solution of dy/dx = y with
    y(0) = 1, so the series is the integral of itself; it appears in
    its own generator, which works because the integral yields its
    constant before it needs anything from the series.

    >>> take(5, exp_series())
    [1, Fraction(1, 1), Fraction(1, 2), Fraction(1, 6), Fraction(1, 24)]
    """
    def _exp():
        for term in integral(EXP, 1):
            yield term
    EXP = Series(EXACTLY_ZERO, LazySequence(_exp))
    return EXP


def sin_series():
    """The sine function, as the solution of y'' = -y with y(0) = 0, y'(0) = 1.
    """
    def _sin():
        for term in integral(integral(negate(SIN), 1)):
            yield term
    SIN = Series(EXACTLY_ZERO, LazySequence(_sin))
    return SIN


def cos_series():
    """The cosine function, as the solution of y'' = -y with y(0) = 1, y'(0) = 0.
    """
    def _cos():
        for term in integral(integral(negate(COS)), 1):
            yield term
    COS = Series(EXACTLY_ZERO, LazySequence(_cos))
    return COS


# Bindings into the generic arithmetic

def _differentiate(s, selectors):
    if s.arity != EXACTLY_ZERO:
        raise UnsupportedArity("Can't differentiate series with arity %s" % (s.arity,))
    return fmap(lambda term: partial_derivative(term, selectors), s)


def _freeze(s):
    terms = take(s.freezelimit, s)
    return ('Series', s.arity) + tuple(simplify(term) for term in terms) + ('...',)


for _tag in (NUMERICAL_EXPRESSION, SYMBOL, NATIVE_NUMERIC):
    derive(_tag, COSERIES)

mul.register(COSERIES, SERIES)(scalar_times_series)
mul.register(SERIES, COSERIES)(series_times_scalar)
mul.register(SERIES, SERIES)(series_times_series)
add.register(SERIES, SERIES)(series_plus_series)
sub.register(SERIES, SERIES)(series_minus_series)
negate.register(SERIES)(lambda s: fmap(negate, s))
square.register(SERIES)(lambda s: series_times_series(s, s))
partial_derivative.register(SERIES, SEQUENCE)(_differentiate)
freeze.register(SERIES)(_freeze)
simplify.register(SERIES)(lambda s: fmap(simplify, s))
zero_like.register(SERIES)(lambda s: fmap(zero_like, s))


if __name__ == '__main__':
    import doctest
    doctest.testmod()
