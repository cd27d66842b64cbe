#! /usr/bin/env python
"""
Copyright (C) 2026 by the lazyseries authors.
Released under the open source MIT license:
http://www.opensource.org/licenses/MIT

Generic arithmetic dispatched on the classifications of the operands.

Each operand has a classification (its ``kind``): plain Python numbers
are ``native-numeric``, sympy symbols are ``symbol``, other sympy
expressions are ``numerical-expression``, lists and tuples are
``sequence``, other callables are ``function``, and any object can
declare its own classification with a class attribute named ``kind``
(the ``Series`` class does this). Classifications form an open
hierarchy built with ``derive``, and a generic function picks the most
specific implementation registered for the classifications of its
arguments, trying ancestors of the leftmost argument last. Everything
ends up deriving from ``any``.

Other modules extend the generic functions here by registering more
implementations; nothing here assumes it is the only registrant.

    >>> import sympy
    >>> x = sympy.Symbol('x')
    >>> kind(3), kind(x), kind(x + 1), kind([x])
    ('native-numeric', 'symbol', 'numerical-expression', 'sequence')
    >>> add(2, 3), mul(x, 2), negate(x)
    (5, 2*x, -x)
    >>> zero_like(Fraction(3, 4))
    Fraction(0, 1)
    >>> partial_derivative(x**3, [x, x])
    6*x

Functions add and multiply pointwise:

    >>> f = add(lambda t: t + 1, lambda t: 2 * t)
    >>> f(10)
    31

Asking for a combination nobody has registered raises ``NoMethodError``:

    >>> try:
    ...     add(1, "one")
    ... except NoMethodError as e:
    ...     print(e)
    No add method for ('native-numeric', 'str')
"""

import logging
import numbers
from fractions import Fraction
from itertools import product

import sympy

logger = logging.getLogger(__name__)

ANY = 'any'
NUMBER = 'number'
NATIVE_NUMERIC = 'native-numeric'
SYMBOL = 'symbol'
NUMERICAL_EXPRESSION = 'numerical-expression'
FUNCTION = 'function'
SEQUENCE = 'sequence'


class NoMethodError(TypeError): pass


_parents = {}


def derive(child, parent):
    """Declare that classification ``child`` is a kind of ``parent``.

    A classification may have any number of parents; they are searched
    in the order they were derived.
    """
    parents = _parents.setdefault(child, [])
    if parent not in parents:
        parents.append(parent)


def ancestors(tag):
    """Return ``tag`` followed by all its ancestors, nearest first.

    >>> ancestors(SYMBOL)[:2]
    ['symbol', 'number']
    >>> ancestors('unheard-of')
    ['unheard-of', 'any']
    """
    result = [tag]
    for t in result:
        for parent in _parents.get(t, ()):
            if parent not in result:
                result.append(parent)
    if ANY in result:
        result.remove(ANY)
    result.append(ANY)
    return result


def isa(child, parent):
    return parent in ancestors(child)


def kind(x):
    """Return the classification of ``x``.
    """
    # sympy objects carry a ``kind`` attribute of their own, so they
    # have to be recognized before we look for ours
    if isinstance(x, sympy.Symbol):
        return SYMBOL
    if isinstance(x, sympy.Expr):
        return NUMERICAL_EXPRESSION
    if isinstance(x, numbers.Number):
        return NATIVE_NUMERIC
    tag = getattr(type(x), 'kind', None)
    if isinstance(tag, str):
        return tag
    if isinstance(x, (list, tuple)):
        return SEQUENCE
    if callable(x):
        return FUNCTION
    return type(x).__name__


class GenericFunction(object):
    """A function that dispatches on the classifications of its arguments.

    Implementations are added with the ``register`` decorator, keyed by
    one classification per dispatched argument:

    >>> describe = GenericFunction('describe')
    >>> @describe.register(NUMBER)
    ... def _(n):
    ...     return "a number"
    ...
    >>> @describe.register(ANY)
    ... def _(obj):
    ...     return "something"
    ...
    >>> describe(1), describe(sympy.Symbol('y')), describe("text")
    ('a number', 'a number', 'something')
    """

    def __init__(self, name):
        self.__name__ = name
        self.__methods = {}

    def __repr__(self):
        return "<generic %s>" % self.__name__

    def register(self, *kinds):
        def _register(method):
            if kinds in self.__methods:
                logger.debug("replacing %s method for %s", self.__name__, kinds)
            else:
                logger.debug("registering %s method for %s", self.__name__, kinds)
            self.__methods[kinds] = method
            return method
        return _register

    def dispatch(self, *kinds):
        """Return the implementation that handles ``kinds``.
        """
        for candidate in product(*[ancestors(k) for k in kinds]):
            method = self.__methods.get(candidate)
            if method is not None:
                return method
        raise NoMethodError("No %s method for %s" % (self.__name__, kinds))

    def __call__(self, *args):
        return self.dispatch(*[kind(arg) for arg in args])(*args)


add = GenericFunction('add')
sub = GenericFunction('sub')
mul = GenericFunction('mul')
negate = GenericFunction('negate')
square = GenericFunction('square')
zero_like = GenericFunction('zero_like')
simplify = GenericFunction('simplify')
freeze = GenericFunction('freeze')
# Called as partial_derivative(value, selectors), selectors being a list
# or tuple; for sympy values they are the symbols to differentiate by
partial_derivative = GenericFunction('partial_derivative')


# The numeric tower: native numbers and sympy expressions

derive(NATIVE_NUMERIC, NUMBER)
derive(SYMBOL, NUMBER)
derive(NUMERICAL_EXPRESSION, NUMBER)

add.register(NUMBER, NUMBER)(lambda a, b: a + b)
sub.register(NUMBER, NUMBER)(lambda a, b: a - b)
mul.register(NUMBER, NUMBER)(lambda a, b: a * b)
negate.register(NUMBER)(lambda a: -a)
square.register(NUMBER)(lambda a: a * a)


@zero_like.register(NATIVE_NUMERIC)
def _zero_native(x):
    return type(x)(0)


@zero_like.register(NUMBER)
def _zero_expression(x):
    return sympy.S.Zero


@simplify.register(NUMERICAL_EXPRESSION)
def _simplify_expression(x):
    return sympy.simplify(x)


@simplify.register(ANY)
def _simplify_any(x):
    return x


@freeze.register(ANY)
def _freeze_any(x):
    return x


@partial_derivative.register(NATIVE_NUMERIC, SEQUENCE)
def _differentiate_native(x, selectors):
    return zero_like(x)


@partial_derivative.register(NUMBER, SEQUENCE)
def _differentiate_expression(x, selectors):
    result = x
    for selector in selectors:
        result = sympy.diff(result, selector)
    return result


# Functions combine pointwise, so series of functions can be summed
# and multiplied like any other series

@add.register(FUNCTION, FUNCTION)
def _add_functions(f, g):
    return lambda *args: add(f(*args), g(*args))


@sub.register(FUNCTION, FUNCTION)
def _sub_functions(f, g):
    return lambda *args: sub(f(*args), g(*args))


@mul.register(FUNCTION, FUNCTION)
def _mul_functions(f, g):
    return lambda *args: mul(f(*args), g(*args))


@mul.register(NUMBER, FUNCTION)
def _mul_number_function(c, f):
    return lambda *args: mul(c, f(*args))


@mul.register(FUNCTION, NUMBER)
def _mul_function_number(f, c):
    return lambda *args: mul(f(*args), c)


@negate.register(FUNCTION)
def _negate_function(f):
    return lambda *args: negate(f(*args))


@zero_like.register(FUNCTION)
def _zero_function(f):
    return lambda *args: 0


if __name__ == '__main__':
    import doctest
    doctest.testmod()
