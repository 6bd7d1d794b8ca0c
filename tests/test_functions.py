'''
Calculator function tests
'''

import math

from fxcalc import functions as f
from fxcalc.context import AngleUnit, Context, DisplayDigits, SetupSettings
from fxcalc.util import DomainError

from pytest import approx, raises


def in_unit(unit):
    return Context(setup=SetupSettings(angle=unit))


def test_division_by_zero(context):
    with raises(DomainError, match='Division by 0'):
        f.divide(context, 1, 0)
    with raises(DomainError, match='Division by 0'):
        f.reciprocal(context, 0)
    with raises(DomainError, match='Division by 0'):
        f.mixed_fraction(context, 1, 2, 0)


def test_overflow(context):
    with raises(DomainError, match='Overflow'):
        f.multiply(context, 1e50, 1e50)
    assert f.multiply(context, 1e49, 9.9e50) == approx(9.9e99)
    with raises(DomainError):
        f.e_exp(context, 1000)


def test_math_errors_converted(context):
    # Errors raised by the math module itself
    with raises(DomainError):
        f.ln(context, 0)
    with raises(DomainError):
        f.cosh(context, 1000)


def test_permutation_combination(context):
    assert f.permutation(context, 5, 2) == 20
    assert f.combination(context, 5, 2) == 10
    assert f.combination(context, 5, 0) == 1
    for n, r in (5.5, 2), (5, -1), (2, 5), (1e10, 1):
        with raises(DomainError):
            f.permutation(context, n, r)


def test_relations(context):
    assert f.equal(context, 2, 2) == 1
    assert f.not_equal(context, 2, 2) == 0
    assert f.greater_equal(context, 3, 2) == 1
    assert f.less(context, 3, 2) == 0


def test_mixed_fraction(context):
    assert f.mixed_fraction(context, 1, 3, 2) == 2.5
    assert f.mixed_fraction(context, -1, 1, 2) == -1.5
    assert f.mixed_fraction(context, 0, 1, 4) == 0.25
    assert f.mixed_fraction(context, 3, 0, 4) == 3


def test_fold_degrees(context):
    assert f.fold_degrees(context, [1, 30]) == 1.5
    assert f.fold_degrees(context, [6, 360, 1800]) == 12.5


def test_factorial(context):
    assert f.factorial(context, 0) == 1
    assert f.factorial(context, 5) == 120
    assert f.factorial(context, 69) == float(math.factorial(69))
    for x in 70, -1, 2.5:
        with raises(DomainError):
            f.factorial(context, x)


def test_angle_conversion():
    context = in_unit(AngleUnit.DEG)
    assert f.from_radians(context, math.pi) == approx(180)
    assert f.from_gradians(context, 100) == approx(90)
    assert f.from_degrees(context, 90) == approx(90)
    context = in_unit(AngleUnit.RAD)
    assert f.from_degrees(context, 180) == approx(math.pi)


def test_exact_quarter_turns():
    deg, rad, gra = map(in_unit, AngleUnit)
    assert f.sin(deg, 90) == 1
    assert f.sin(deg, 180) == 0
    assert f.cos(deg, 90) == 0
    assert f.cos(gra, 200) == -1
    assert f.sin(rad, math.pi / 2) == 1
    assert f.sin(deg, 30) == approx(0.5)
    assert f.tan(deg, 45) == approx(1)
    assert f.tan(deg, 180) == 0
    with raises(DomainError):
        f.tan(deg, 90)
    with raises(DomainError):
        f.tan(deg, -270)


def test_trig_limits():
    deg, rad, gra = map(in_unit, AngleUnit)
    f.sin(deg, 8.9e9)
    with raises(DomainError):
        f.sin(deg, 9e9)
    with raises(DomainError):
        f.cos(rad, 5e7 * math.pi)
    with raises(DomainError):
        f.tan(gra, -1e10)


def test_inverse_trig():
    deg, rad, gra = map(in_unit, AngleUnit)
    assert f.asin(deg, 1) == approx(90)
    assert f.acos(gra, -1) == approx(200)
    assert f.atan(rad, 1) == approx(math.pi / 4)
    with raises(DomainError):
        f.asin(deg, 1.5)
    with raises(DomainError):
        f.acos(deg, -2)


def test_hyperbolic(context):
    assert f.tanh(context, 0) == 0
    assert f.acosh(context, 1) == 0
    with raises(DomainError):
        f.acosh(context, 0.5)
    with raises(DomainError):
        f.atanh(context, 1)


def test_powers_and_roots(context):
    assert f.power(context, 2, 10) == 1024
    assert f.power(context, -8, 1 / 3) == approx(-2)
    with raises(DomainError):
        f.power(context, -8, 0.5)
    with raises(DomainError):
        f.power(context, 0, 0)
    assert f.root(context, 3, 27) == 3
    assert f.root(context, 3, -27) == -3
    with raises(DomainError):
        f.root(context, 2, -4)
    assert f.cbrt(context, -64) == -4
    with raises(DomainError):
        f.sqrt(context, -1)


def test_log(context):
    assert f.log(context, 1000) == approx(3)
    assert f.log(context, 2, 8) == approx(3)
    for args in (0,), (1, 5), (-2, 5), (2, 0):
        with raises(DomainError):
            f.log(context, *args)


def test_polar_rectangular(context):
    assert f.polar(context, 3, 4) == 5
    assert context.variables['X'] == 5
    assert context.variables['Y'] == approx(math.degrees(math.atan2(4, 3)))
    assert f.rectangular(context, 2, 90) == 0
    assert context.variables['X'] == 0
    assert context.variables['Y'] == 2


def test_rnd():
    context = Context()
    assert f.rnd(context, 1 / 3) == 0.3333333333
    context.setup.display_digits = DisplayDigits.fix(2)
    assert f.rnd(context, 2.345678) == 2.35
    context.setup.display_digits = DisplayDigits.sci(2)
    assert f.rnd(context, 12345) == 12000


def test_random_number(context):
    for _ in range(100):
        x = f.random_number(context)
        assert 0 <= x <= 0.999
        assert x * 1000 == approx(round(x * 1000))


def test_registers():
    context = Context()
    context.variables['B'] = 7
    assert f.register('B')(context) == 7
    assert f.constant(1.5)(context) == 1.5
