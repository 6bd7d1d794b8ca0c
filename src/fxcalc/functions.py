'''
Calculator functions.

Everything here takes the calculator context first: angle unit dependent
functions read it, Pol( and Rec( write X and Y into it, the rest ignore it.
Domain violations raise DomainError, without any notion of tokens.
'''

import operator
import math
import random

from .context import AngleUnit, DisplayDigitsKind
from .util import DomainError, checked, wrap_math_errors


FACTORIAL_MAX = 69
COMBINATORIC_N_LIMIT = 10 ** 10

# |x| trigonometric functions accept, in each angle unit.
TRIG_LIMITS = {
    AngleUnit.DEG: 9e9,
    AngleUnit.RAD: 5e7 * math.pi,
    AngleUnit.GRA: 1e10,
}
# A quarter turn, in each angle unit.
QUARTER_TURNS = {
    AngleUnit.DEG: 90,
    AngleUnit.RAD: math.pi / 2,
    AngleUnit.GRA: 100,
}


# Arithmetic

@wrap_math_errors('Cannot add {1} and {2}')
def add(context, left, right):
    return left + right


@wrap_math_errors('Cannot subtract {2} from {1}')
def subtract(context, left, right):
    return left - right


@wrap_math_errors('Cannot multiply {1} by {2}')
def multiply(context, left, right):
    return left * right


@wrap_math_errors('Cannot divide {1} by {2}')
def divide(context, left, right):
    if right == 0:
        raise DomainError('Division by 0')
    return left / right


def negate(context, x):
    return -x


def _combinatoric(n, r, combination):
    if not (float(n).is_integer() and float(r).is_integer()):
        raise DomainError('n and r must be integers')
    if r < 0:
        raise DomainError('r cannot be negative')
    if r > n:
        raise DomainError('n must be no less than r')
    if n >= COMBINATORIC_N_LIMIT:
        raise DomainError('n must be less than 10^10')
    result = 1
    for k in range(int(r)):
        result *= n - k
        if combination:
            result /= k + 1
    return result


@wrap_math_errors('Cannot compute {1}P{2}')
def permutation(context, n, r):
    return float(_combinatoric(n, r, combination=False))


@wrap_math_errors('Cannot compute {1}C{2}')
def combination(context, n, r):
    return float(_combinatoric(n, r, combination=True))


def _relation(compare):
    def relation(context, left, right):
        return 1.0 if compare(left, right) else 0.0
    relation.__name__ = compare.__name__
    return relation


equal = _relation(operator.eq)
not_equal = _relation(operator.ne)
greater = _relation(operator.gt)
less = _relation(operator.lt)
greater_equal = _relation(operator.ge)
less_equal = _relation(operator.le)


# Fractions and sexagesimal entry

@wrap_math_errors('Cannot divide {1} by {2}')
def fraction(context, numerator, denominator):
    if denominator == 0:
        raise DomainError('Division by 0')
    return numerator / denominator


@wrap_math_errors('Bad mixed fraction {1}/{2}/{3}')
def mixed_fraction(context, whole, numerator, denominator):
    '''
    whole/numerator/denominator, signed by the product of all three signs.
    '''
    if denominator == 0:
        raise DomainError('Division by 0')
    if numerator == 0:
        return whole
    if whole == 0:
        return numerator / denominator
    sign = (math.copysign(1, whole) *
            math.copysign(1, numerator) *
            math.copysign(1, denominator))
    return sign * (abs(whole) + abs(numerator) / abs(denominator))


@wrap_math_errors('Bad degrees, minutes, seconds')
def fold_degrees(context, parts):
    '''
    Fold degrees, minutes, seconds into degrees, last component first.
    '''
    value = parts[-1]
    for part in reversed(parts[:-1]):
        value = part + value / 60
    return value


# Suffix functions

@wrap_math_errors('Cannot take the reciprocal of {1}')
def reciprocal(context, x):
    if x == 0:
        raise DomainError('Division by 0')
    return 1 / x


@wrap_math_errors('Cannot take the factorial of {1}')
def factorial(context, x):
    if not float(x).is_integer():
        raise DomainError('Cannot take the factorial of a non-integer')
    if x < 0:
        raise DomainError('Cannot take the factorial of a negative value')
    if x > FACTORIAL_MAX:
        raise DomainError('Cannot take the factorial of an integer larger '
                          'than {}'.format(FACTORIAL_MAX))
    return float(math.factorial(int(x)))


@wrap_math_errors('Cannot square {1}')
def square(context, x):
    return x * x


@wrap_math_errors('Cannot cube {1}')
def cube(context, x):
    return x * x * x


def percentage(context, x):
    return x / 100


def _angle_from(unit):
    @wrap_math_errors('Cannot convert {1}')
    def convert(context, x):
        return x * unit.to_rad / context.setup.angle.to_rad
    convert.__name__ = 'from_' + unit.name.lower()
    return convert


from_degrees = _angle_from(AngleUnit.DEG)
from_radians = _angle_from(AngleUnit.RAD)
from_gradians = _angle_from(AngleUnit.GRA)


# Parenthesised functions

def identity(context, x):
    return x


@wrap_math_errors('Cannot raise {1} to the power of {2}')
def power(context, base, exponent):
    if base == 0 and exponent <= 0:
        raise DomainError('0 cannot be raised to a non-positive power')
    if base < 0 and not float(exponent).is_integer():
        # Odd roots of negative values, (-8)^(1/3)
        inverse = 1 / exponent
        if _is_odd(inverse):
            return -((-base) ** exponent)
        raise DomainError('Cannot raise a negative value to a non-integer '
                          'power')
    return float(base) ** exponent


@wrap_math_errors('Cannot take the {1}th root of {2}')
def root(context, index, radicand):
    if index == 0:
        raise DomainError('Cannot take the 0th root')
    if radicand < 0:
        if _is_odd(index):
            return -_exact_root(-radicand, index)
        raise DomainError('Cannot take an even root of a negative value')
    return _exact_root(radicand, index)


def _exact_root(x, index):
    '''
    x ** (1 / index), snapped to a whole number when that one is exact.
    '''
    result = x ** (1 / index)
    nearest = round(result)
    if nearest and float(nearest) ** index == x:
        return float(nearest)
    return result


def _is_odd(x):
    nearest = round(x)
    return abs(x - nearest) < 1e-9 and nearest % 2 == 1


@wrap_math_errors('Cannot take the cube root of {1}')
def cbrt(context, x):
    return math.copysign(_exact_root(abs(x), 3), x)


@wrap_math_errors('Cannot take the square root of {1}')
def sqrt(context, x):
    if x < 0:
        raise DomainError('Cannot take the square root of a negative value')
    return math.sqrt(x)


@wrap_math_errors('Cannot take the log of {1}')
def log(context, *args):
    '''
    log(x) is the common logarithm, log(b, x) the base b logarithm.
    '''
    if len(args) == 1:
        x, = args
        if x <= 0:
            raise DomainError('Cannot take the log of a non-positive value')
        return math.log10(x)
    base, x = args
    if base == 1:
        raise DomainError('Base of log cannot be 1')
    if base <= 0:
        raise DomainError('Base of log cannot be non-positive')
    if x <= 0:
        raise DomainError('Cannot take the log of a non-positive value')
    return math.log(x) / math.log(base)


@wrap_math_errors('Cannot raise 10 to the power of {1}')
def ten_exp(context, x):
    return 10.0 ** x


@wrap_math_errors('Cannot take the ln of {1}')
def ln(context, x):
    if x <= 0:
        raise DomainError('Cannot take the ln of a non-positive value')
    return math.log(x)


@wrap_math_errors('Cannot raise e to the power of {1}')
def e_exp(context, x):
    return math.exp(x)


def _quarter_turns(context, x):
    '''
    Return x in radians, and x in quarter turns modulo 4 if a whole number.
    '''
    unit = context.setup.angle
    if abs(x) >= TRIG_LIMITS[unit]:
        raise DomainError('Angle out of range')
    turns = x / QUARTER_TURNS[unit]
    exact = int(turns) % 4 if float(turns).is_integer() else None
    return x * unit.to_rad, exact


def _sin(context, x):
    radians, exact = _quarter_turns(context, x)
    if exact is not None:
        return (0.0, 1.0, 0.0, -1.0)[exact]
    return math.sin(radians)


def _cos(context, x):
    radians, exact = _quarter_turns(context, x)
    if exact is not None:
        return (1.0, 0.0, -1.0, 0.0)[exact]
    return math.cos(radians)


@wrap_math_errors('Cannot take the sine of {1}')
def sin(context, x):
    return _sin(context, x)


@wrap_math_errors('Cannot take the cosine of {1}')
def cos(context, x):
    return _cos(context, x)


@wrap_math_errors('Cannot take the tangent of {1}')
def tan(context, x):
    radians, exact = _quarter_turns(context, x)
    if exact in (1, 3):
        raise DomainError('Tangent of an odd multiple of 90 degrees')
    if exact is not None:
        return 0.0
    return math.tan(radians)


def _inverse_trig(f, name):
    @wrap_math_errors('Cannot take the {} of {{1}}'.format(name))
    def inverse(context, x):
        if f is not math.atan and not -1 <= x <= 1:
            raise DomainError('Cannot take the {} of a value outside '
                              '[-1, 1]'.format(name))
        return f(x) / context.setup.angle.to_rad
    inverse.__name__ = f.__name__
    return inverse


asin = _inverse_trig(math.asin, 'arcsine')
acos = _inverse_trig(math.acos, 'arccosine')
atan = _inverse_trig(math.atan, 'arctangent')


@wrap_math_errors('Cannot take the sinh of {1}')
def sinh(context, x):
    return math.sinh(x)


@wrap_math_errors('Cannot take the cosh of {1}')
def cosh(context, x):
    return math.cosh(x)


def tanh(context, x):
    return math.tanh(x)


@wrap_math_errors('Cannot take the asinh of {1}')
def asinh(context, x):
    return math.asinh(x)


@wrap_math_errors('Cannot take the acosh of {1}')
def acosh(context, x):
    if x < 1:
        raise DomainError('Cannot take the acosh of a value less than 1')
    return math.acosh(x)


@wrap_math_errors('Cannot take the atanh of {1}')
def atanh(context, x):
    if not -1 < x < 1:
        raise DomainError('Cannot take the atanh of a value outside (-1, 1)')
    return math.atanh(x)


@wrap_math_errors('Cannot convert ({1}, {2}) to polar')
def polar(context, x, y):
    '''
    Pol(x, y): X becomes r, Y becomes theta in the active angle unit.
    '''
    r = math.hypot(x, y)
    theta = math.atan2(y, x) / context.setup.angle.to_rad
    context.variables['X'] = checked(r)
    context.variables['Y'] = checked(theta)
    return r


@wrap_math_errors('Cannot convert ({1}, {2}) to rectangular')
def rectangular(context, r, theta):
    '''
    Rec(r, theta): X and Y become the rectangular coordinates.
    '''
    x = r * _cos(context, theta)
    y = r * _sin(context, theta)
    context.variables['X'] = checked(x)
    context.variables['Y'] = checked(y)
    return x


def rnd(context, x):
    '''
    Round to what the display shows.
    '''
    digits = context.setup.display_digits
    if digits.kind is DisplayDigitsKind.FIX:
        return float('{:.{}f}'.format(x, digits.digits))
    elif digits.kind is DisplayDigitsKind.SCI:
        return float('{:.{}e}'.format(x, digits.digits - 1))
    return float('{:.9e}'.format(x))


def absolute(context, x):
    return abs(x)


# Valued tokens

def random_number(context):
    '''
    Ran#: a pseudo random number from 0.000 to 0.999.
    '''
    return random.randrange(1000) / 1000


def constant(value):
    def valued(context):
        return value
    return valued


def register(name):
    def valued(context):
        return context.variables[name]
    valued.__name__ = name
    return valued
