"""
Tests for classification and dispatch in genericarith.py.
"""

from fractions import Fraction

import pytest
import sympy

import genericarith
import lazyseries
from genericarith import (
    ANY,
    FUNCTION,
    NATIVE_NUMERIC,
    NUMBER,
    NUMERICAL_EXPRESSION,
    SEQUENCE,
    SYMBOL,
    GenericFunction,
    NoMethodError,
    add,
    ancestors,
    derive,
    isa,
    kind,
    mul,
    negate,
    partial_derivative,
    simplify,
    square,
    sub,
    zero_like,
)


class TestClassification:

    @pytest.mark.parametrize("value, expected", [
        (3, NATIVE_NUMERIC),
        (2.5, NATIVE_NUMERIC),
        (Fraction(1, 2), NATIVE_NUMERIC),
        (sympy.Symbol('x'), SYMBOL),
        (sympy.Symbol('x') + 1, NUMERICAL_EXPRESSION),
        (sympy.Integer(4), NUMERICAL_EXPRESSION),
        ([1], SEQUENCE),
        ((1, 2), SEQUENCE),
        (abs, FUNCTION),
        (lambda: 0, FUNCTION),
        ("text", "str"),
    ])
    def test_kind(self, value, expected):
        assert kind(value) == expected

    def test_series_declare_their_own_kind(self):
        assert kind(lazyseries.starting_with(1)) == lazyseries.SERIES

    def test_scalars_are_coseries(self):
        for tag in (NATIVE_NUMERIC, SYMBOL, NUMERICAL_EXPRESSION):
            assert isa(tag, lazyseries.COSERIES)
            assert isa(tag, NUMBER)
        assert not isa(lazyseries.SERIES, lazyseries.COSERIES)

    def test_ancestors_end_with_any(self):
        assert ancestors(NATIVE_NUMERIC)[0] == NATIVE_NUMERIC
        assert ancestors(NATIVE_NUMERIC)[-1] == ANY
        assert ancestors(ANY) == [ANY]


class TestDispatch:

    def test_most_specific_method_wins(self):
        describe = GenericFunction('describe')
        describe.register(ANY, ANY)(lambda a, b: "anything")
        describe.register(NUMBER, NUMBER)(lambda a, b: "numbers")
        describe.register(NATIVE_NUMERIC, NUMBER)(lambda a, b: "native first")
        assert describe(1, sympy.Symbol('y')) == "native first"
        assert describe(sympy.Symbol('y'), 1) == "numbers"
        assert describe("a", 1) == "anything"

    def test_leftmost_argument_takes_precedence(self):
        pick = GenericFunction('pick')
        pick.register(NATIVE_NUMERIC, ANY)(lambda a, b: "left")
        pick.register(ANY, NATIVE_NUMERIC)(lambda a, b: "right")
        assert pick(1, 2) == "left"

    def test_registration_is_additive(self):
        op = GenericFunction('op')
        op.register(NUMBER)(lambda a: "number")
        op.register('widget')(lambda a: "widget")
        assert op(1) == "number"

    def test_new_classifications_can_be_derived(self):
        derive('test-quantity', NUMBER)
        op = GenericFunction('op')
        op.register(NUMBER)(lambda a: "number")
        assert op.dispatch('test-quantity')(None) == "number"

    def test_missing_method(self):
        with pytest.raises(NoMethodError, match="No mul method"):
            mul("a", "b")
        assert issubclass(NoMethodError, TypeError)


class TestNumericTower:

    def test_native_arithmetic(self):
        assert add(2, 3) == 5
        assert sub(2, 3) == -1
        assert mul(Fraction(1, 2), 4) == 2
        assert negate(7) == -7
        assert square(3) == 9

    def test_symbolic_arithmetic(self):
        x = sympy.Symbol('x')
        assert add(x, x) == 2 * x
        assert mul(x, 3) == 3 * x
        assert square(x + 1) == (x + 1) ** 2

    def test_zero_like(self):
        assert zero_like(5) == 0 and isinstance(zero_like(5), int)
        assert isinstance(zero_like(2.5), float)
        assert isinstance(zero_like(Fraction(3)), Fraction)
        assert zero_like(sympy.Symbol('x')) is sympy.S.Zero
        assert zero_like(abs)(10) == 0

    def test_simplify(self):
        x = sympy.Symbol('x')
        assert simplify(sympy.sin(x) ** 2 + sympy.cos(x) ** 2) == 1
        assert simplify(3) == 3

    def test_partial_derivative(self):
        x, y = sympy.symbols('x y')
        assert partial_derivative(x ** 2 * y, [x]) == 2 * x * y
        assert partial_derivative(x ** 2 * y, (x, y)) == 2 * x
        assert partial_derivative(x, [y]) == 0
        assert partial_derivative(9, [x]) == 0

    def test_function_arithmetic(self):
        f = lambda t: t * 2
        g = lambda t: t + 1
        assert add(f, g)(3) == 10
        assert sub(f, g)(3) == 2
        assert mul(f, g)(3) == 24
        assert negate(f)(3) == -6

    def test_scaling_a_function(self):
        assert mul(2, abs)(-4) == 8
        assert mul(abs, 3)(-2) == 6
        assert mul(Fraction(1, 2), lambda a, b: a + b)(3, 5) == 4

    def test_module_logger(self):
        assert genericarith.logger.name == 'genericarith'
