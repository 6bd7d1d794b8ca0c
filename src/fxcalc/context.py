'''
Calculator state threaded through evaluation and interpretation.
'''

from enum import Enum
import math


class CalculationMode(Enum):
    '''
    Calculator mode, as (mode index, regression sub-index).
    '''
    COMP = (1, None)
    CMPLX = (2, None)
    BASE = (3, None)
    SD = (4, None)
    REG_LIN = (5, 1)
    REG_LOG = (5, 2)
    REG_EXP = (5, 3)
    REG_PWR = (5, 4)
    REG_INV = (5, 5)
    REG_QUAD = (5, 6)
    REG_AB_EXP = (5, 7)

    @property
    def index(self):
        return self.value[0]

    @property
    def sub_index(self):
        return self.value[1]


class AngleUnit(Enum):
    DEG = 'Deg'
    RAD = 'Rad'
    GRA = 'Gra'

    @property
    def to_rad(self):
        '''
        Radians in one of this unit.
        '''
        return _TO_RAD[self]


_TO_RAD = {
    AngleUnit.DEG: math.pi / 180,
    AngleUnit.RAD: 1,
    AngleUnit.GRA: math.pi / 200,
}


class DisplayDigitsKind(Enum):
    FIX = 'Fix'
    SCI = 'Sci'
    NORM = 'Norm'


class DisplayDigits:
    '''
    Display digit policy: Fix 0-9 decimals, Sci 1-10 significant digits, or
    Norm 1-2.
    '''
    RANGES = {
        DisplayDigitsKind.FIX: range(0, 10),
        DisplayDigitsKind.SCI: range(1, 11),
        DisplayDigitsKind.NORM: range(1, 3),
    }

    def __init__(self, kind, digits):
        if digits not in type(self).RANGES[kind]:
            raise ValueError('{} does not take {} digits'.format(kind.value,
                                                               digits))
        self.kind = kind
        self.digits = digits

    @classmethod
    def fix(cls, digits):
        return cls(DisplayDigitsKind.FIX, digits)

    @classmethod
    def sci(cls, digits):
        return cls(DisplayDigitsKind.SCI, digits)

    @classmethod
    def norm(cls, digits):
        return cls(DisplayDigitsKind.NORM, digits)

    def __eq__(self, other):
        if not isinstance(other, DisplayDigits):
            return NotImplemented
        return (self.kind, self.digits) == (other.kind, other.digits)

    def __repr__(self):
        return '{}({})'.format(self.kind.value, self.digits)


class FractionFormat(Enum):
    MIXED = 'Mixed'
    IMPROPER = 'Improper'


class ComplexFormat(Enum):
    RECTANGULAR = 'Rectangular'
    POLAR = 'Polar'


class SetupSettings:
    def __init__(self, angle=AngleUnit.DEG, display_digits=None,
                 fraction_format=FractionFormat.MIXED,
                 complex_format=ComplexFormat.RECTANGULAR,
                 frequency_on=True):
        self.angle = angle
        if display_digits is None:
            display_digits = DisplayDigits.norm(2)
        self.display_digits = display_digits
        self.fraction_format = fraction_format
        self.complex_format = complex_format
        self.frequency_on = frequency_on

    def _key(self):
        return (self.angle, self.display_digits, self.fraction_format,
                self.complex_format, self.frequency_on)

    def __eq__(self, other):
        if not isinstance(other, SetupSettings):
            return NotImplemented
        return self._key() == other._key()

    def __repr__(self):
        return 'SetupSettings({}, {!r}, {}, {}, frequency_on={})'.format(
            self.angle.value, self.display_digits, self.fraction_format.value,
            self.complex_format.value, self.frequency_on)


class Variables:
    '''
    The calculator's registers. Ans always holds the last computed value.
    '''
    NAMES = ('A', 'B', 'C', 'D', 'X', 'Y', 'M', 'Ans')

    def __init__(self, **values):
        self._values = dict.fromkeys(type(self).NAMES, 0.0)
        for name, value in values.items():
            self[name] = value

    def __getitem__(self, name):
        return self._values[name]

    def __setitem__(self, name, value):
        if name not in self._values:
            raise KeyError(name)
        self._values[name] = float(value)

    def clear(self):
        '''
        Zero every register but Ans.
        '''
        for name in type(self).NAMES:
            if name != 'Ans':
                self._values[name] = 0.0

    def items(self):
        return self._values.items()

    def __eq__(self, other):
        if not isinstance(other, Variables):
            return NotImplemented
        return self._values == other._values

    def __repr__(self):
        return 'Variables({})'.format(', '.join(
            '{}={}'.format(name, value)
            for name, value
            in self._values.items()
            if value or name == 'Ans'))


class Context:
    '''
    Mode, setup and registers of one calculator.

    Shared by reference between the interpreter and every evaluation it
    runs; evaluation reads the angle unit and registers, and writes Ans, X,
    Y and M.
    '''

    def __init__(self, mode=CalculationMode.COMP, setup=None, variables=None):
        self.mode = mode
        self.setup = setup if setup is not None else SetupSettings()
        self.variables = variables if variables is not None else Variables()

    def __eq__(self, other):
        if not isinstance(other, Context):
            return NotImplemented
        return (self.mode == other.mode and
                self.setup == other.setup and
                self.variables == other.variables)

    def __repr__(self):
        return 'Context({}, {!r}, {!r})'.format(self.mode.name, self.setup,
                                              self.variables)


def _trim(mantissa):
    if '.' in mantissa:
        mantissa = mantissa.rstrip('0').rstrip('.')
    return mantissa


def _exponential(value, significant):
    mantissa, exponent = '{:.{}e}'.format(value, significant - 1).split('e')
    return '{}E{}'.format(_trim(mantissa), int(exponent))


def format_number(value, display_digits):
    '''
    Render value the way the calculator's display does.
    '''
    kind, digits = display_digits.kind, display_digits.digits
    if kind is DisplayDigitsKind.FIX:
        return '{:.{}f}'.format(value, digits)
    elif kind is DisplayDigitsKind.SCI:
        mantissa, exponent = '{:.{}e}'.format(value, digits - 1).split('e')
        return '{}E{}'.format(mantissa, int(exponent))
    if value == 0:
        return '0'
    # Norm 1 switches to exponent form sooner than Norm 2
    lower = 1e-2 if digits == 1 else 1e-9
    if not lower <= abs(value) < 1e10:
        return _exponential(value, 10)
    integral = math.floor(math.log10(abs(value))) + 1
    return _trim('{:.{}f}'.format(value, max(10 - integral, 0)))
