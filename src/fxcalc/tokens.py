'''
The calculator's fixed catalog of token types.

Token types are interned singletons, compared by identity. Each carries its
source spelling, its shown (pretty printed) spelling, its Kind and only the
payload that kind needs.
'''

from enum import Enum, IntEnum

from . import functions


class Kind(Enum):
    DIGIT = 'digit'
    DOT = 'dot'
    EXP = 'exp'
    VARIABLE = 'variable'
    VALUED = 'valued'
    SUFFIX = 'suffix'
    INFIX = 'infix'
    INFIX_PAREN = 'infix paren'
    PAREN_FUNC = 'paren func'
    FRAC = 'frac'
    PLUS = 'plus'
    MINUS = 'minus'
    NEG = 'neg'
    DEG = 'deg'
    CLOSE_BRACKET = 'close bracket'
    COMMA = 'comma'
    MEMORY = 'memory'
    CLR_MEMORY = 'clr memory'
    SETUP = 'setup'
    PROGRAM = 'program'


class Precedence(IntEnum):
    '''
    When deferred commands run, lowest first.

    A command runs once the precedence requested of the command stack is no
    higher than its own.
    '''
    LOWEST = 0
    COMMA = 1
    CLOSE_BRACKET = 2
    # Or, Xor of base-n mode
    L1 = 3
    # And of base-n mode
    L2 = 4
    # =, <>, >, <, >=, <=
    L3 = 5
    # +, -
    L4 = 6
    # *, div
    L5 = 7
    # Per, Com, omitted multiplication
    L6 = 8
    # Regression estimates
    L7 = 9
    # Unit conversions
    L8 = 10
    # Prefix negation
    L9 = 11
    # Fraction
    L10 = 12
    # Suffix functions, ^(, rt(
    L11 = 13


class TokenType:
    __slots__ = ('name', 'source', 'shown', 'kind', 'value', 'var_name', 'fn',
                 'arity', 'precedence', 'sign')

    def __init__(self, name, source, kind, shown=None, *, value=None,
                 var_name=None, fn=None, arity=None, precedence=None,
                 sign=None):
        self.name = name
        self.source = source
        self.shown = source if shown is None else shown
        self.kind = kind
        self.value = value
        self.var_name = var_name
        self.fn = fn
        self.arity = arity
        self.precedence = precedence
        self.sign = sign

    def __repr__(self):
        return '<TokenType {} {!r}>'.format(self.name, self.source)


def _paren(name, source, fn, shown=None, arity=(1,)):
    return TokenType(name, source, Kind.PAREN_FUNC, shown, fn=fn,
                     arity=frozenset(arity))


def _infix(name, source, fn, precedence, shown=None):
    return TokenType(name, source, Kind.INFIX, shown, fn=fn,
                     precedence=precedence)


def _program(name, source, shown=None):
    return TokenType(name, source, Kind.PROGRAM, shown)


# Literals
DIGITS = tuple(TokenType('num{}'.format(d), str(d), Kind.DIGIT, value=d)
               for d in range(10))
EXP = TokenType('exp', 'E', Kind.EXP)
DOT = TokenType('dot', '.', Kind.DOT)

# Registers
VAR_A, VAR_B, VAR_C, VAR_D, VAR_X, VAR_Y, VAR_M, ANS = VARIABLES = tuple(
    TokenType('var' + name if name != 'Ans' else 'ans', name, Kind.VARIABLE,
              var_name=name, fn=functions.register(name))
    for name in ('A', 'B', 'C', 'D', 'X', 'Y', 'M', 'Ans'))

# Constants, CODATA 2010 as the calculator has them.
_CONSTANTS = (
    ('pi', 'pi', '\N{GREEK SMALL LETTER PI}', 3.141592653589793),
    ('e', 'e', None, 2.718281828459045),
    ('massProton', 'mp', 'm_p', 1.672621777e-27),
    ('massNeutron', 'mn', 'm_n', 1.674927351e-27),
    ('massElectron', 'me', 'm_e', 9.10938291e-31),
    ('massMuon', 'mmu', 'm_\N{GREEK SMALL LETTER MU}', 1.883531475e-28),
    ('bohrRadius', 'a0', 'a_0', 0.52917721092e-10),
    ('planckConst', 'h', None, 6.62606957e-34),
    ('nuclearMagneton', 'muN', '\N{GREEK SMALL LETTER MU}_N', 5.05078353e-27),
    ('bohrMagneton', 'muB', '\N{GREEK SMALL LETTER MU}_B', 9.27400968e-24),
    ('reducedPlanckConst', 'hbar', '\N{LATIN SMALL LETTER H WITH STROKE}',
     1.054571726e-34),
    ('fineStructureConst', 'alpha', '\N{GREEK SMALL LETTER ALPHA}',
     7.2973525698e-3),
    ('classicalElectronRadius', 're', 'r_e', 2.8179403267e-15),
    ('comptonWavelength', 'lambdac', '\N{GREEK SMALL LETTER LAMDA}_c',
     2.4263102389e-12),
    ('protonGyromagneticRatio', 'gammap', '\N{GREEK SMALL LETTER GAMMA}_p',
     2.675222005e8),
    ('protonComptonWavelength', 'lambdacp',
     '\N{GREEK SMALL LETTER LAMDA}_cp', 1.32140985623e-15),
    ('neutronComptonWavelength', 'lambdacn',
     '\N{GREEK SMALL LETTER LAMDA}_cn', 1.3195909068e-15),
    ('rydbergConst', 'Rinf', 'R_\N{INFINITY}', 10973731.568539),
    ('atomicMassUnit', 'u', None, 1.660538921e-27),
    ('protonMagneticMoment', 'mup', '\N{GREEK SMALL LETTER MU}_p',
     1.410606743e-26),
    ('electronMagneticMoment', 'mue', '\N{GREEK SMALL LETTER MU}_e',
     -928.476430e-26),
    ('neutronMagneticMoment', 'mun', '\N{GREEK SMALL LETTER MU}_n',
     -0.96623647e-26),
    ('muonMagneticMoment', 'mumu',
     '\N{GREEK SMALL LETTER MU}_\N{GREEK SMALL LETTER MU}', -4.49044807e-26),
    ('faradayConst', 'F', None, 96485.3365),
    ('elementaryCharge', 'eC', '\N{MATHEMATICAL ITALIC SMALL E}',
     1.602176565e-19),
    ('avogadroConst', 'NA', 'N_A', 6.02214129e23),
    ('boltzmannConst', 'k', None, 1.3806488e-23),
    ('idealGasMolarVolume', 'Vm', 'V_m', 22.413968e-3),
    ('molarGasConst', 'R', None, 8.3144621),
    ('vacuumLightSpeed', 'c0', 'c_0', 299792458.0),
    ('firstRadiationConst', 'c1', 'c_1', 3.74177153e-16),
    ('secondRadiationConst', 'c2', 'c_2', 1.4387770e-2),
    ('stefanBoltzmannConst', 'sigma', '\N{GREEK SMALL LETTER SIGMA}',
     5.670373e-8),
    ('electricConst', 'epsilon0', '\N{GREEK SMALL LETTER EPSILON}_0',
     8.854187817e-12),
    ('magneticConst', 'mu0', '\N{GREEK SMALL LETTER MU}_0', 12.566370614e-7),
    ('magneticFluxQuantum', 'phi0', '\N{GREEK SMALL LETTER PHI}_0',
     2.067833758e-15),
    ('gravitationalAccel', 'g', None, 9.80665),
    ('conductanceQuantum', 'G0', 'G_0', 7.7480917346e-5),
    ('vacuumImpedance', 'Z0', 'Z_0', 376.730313461),
    ('celsiusTemperature', 't', None, 273.15),
    ('gravitationalConst', 'G', None, 6.67384e-11),
    ('atmosphere', 'atm', None, 101325.0),
)
CONSTANTS = tuple(TokenType(name, source, Kind.VALUED, shown,
                            fn=functions.constant(value))
                  for name, source, shown, value in _CONSTANTS)
PI, E = CONSTANTS[:2]
RAN = TokenType('ran', 'Ran#', Kind.VALUED, fn=functions.random_number)

# Suffix functions
RECIPROCAL = TokenType('reciprocal', '^-1', Kind.SUFFIX,
                       '\N{SUPERSCRIPT MINUS}\N{SUPERSCRIPT ONE}',
                       fn=functions.reciprocal)
FACT = TokenType('fact', '!', Kind.SUFFIX, fn=functions.factorial)
CUBE = TokenType('cube', '^3', Kind.SUFFIX, '\N{SUPERSCRIPT THREE}',
                 fn=functions.cube)
SQUARE = TokenType('square', '^2', Kind.SUFFIX, '\N{SUPERSCRIPT TWO}',
                   fn=functions.square)
PERCENTAGE = TokenType('percentage', '%', Kind.SUFFIX,
                       fn=functions.percentage)
AS_D = TokenType('asD', 'asD', Kind.SUFFIX, '\N{DEGREE SIGN}',
                 fn=functions.from_degrees)
AS_R = TokenType('asR', 'asR', Kind.SUFFIX,
                 '\N{MODIFIER LETTER SMALL R}', fn=functions.from_radians)
AS_G = TokenType('asG', 'asG', Kind.SUFFIX,
                 '\N{MODIFIER LETTER SMALL G}', fn=functions.from_gradians)
SUFFIX_FUNCS = (RECIPROCAL, FACT, CUBE, SQUARE, PERCENTAGE, AS_D, AS_R, AS_G)

# Infix functions
EQ = _infix('eq', '=', functions.equal, Precedence.L3)
NEQ = _infix('neq', '<>', functions.not_equal, Precedence.L3,
             '\N{NOT EQUAL TO}')
GREATER = _infix('greater', '>', functions.greater, Precedence.L3)
LESS = _infix('less', '<', functions.less, Precedence.L3)
GEQ = _infix('geq', '>=', functions.greater_equal, Precedence.L3,
             '\N{GREATER-THAN OR EQUAL TO}')
LEQ = _infix('leq', '<=', functions.less_equal, Precedence.L3,
             '\N{LESS-THAN OR EQUAL TO}')
RELATIONS = (EQ, NEQ, GREATER, LESS, GEQ, LEQ)

MULTIPLY = _infix('multiply', '*', functions.multiply, Precedence.L5)
DIVIDE = _infix('divide', 'div', functions.divide, Precedence.L5,
                '\N{DIVISION SIGN}')
PERMUTATION = _infix('permutation', 'Per', functions.permutation,
                     Precedence.L6, '\N{MATHEMATICAL BOLD CAPITAL P}')
COMBINATION = _infix('combination', 'Com', functions.combination,
                     Precedence.L6, '\N{MATHEMATICAL BOLD CAPITAL C}')
INFIX_FUNCS = RELATIONS + (MULTIPLY, DIVIDE, PERMUTATION, COMBINATION)

# Infix functions closed like parenthesised ones: x^(y), x rt(y)
POWER = TokenType('power', '^(', Kind.INFIX_PAREN, fn=functions.power,
                  arity=frozenset((1,)))
ROOT = TokenType('root', 'rt(', Kind.INFIX_PAREN,
                 'x\N{SQUARE ROOT}(', fn=functions.root,
                 arity=frozenset((1,)))
INFIX_PARENS = (POWER, ROOT)

# Parenthesised functions
CBRT = _paren('cbrt', 'cbrt(', functions.cbrt,
              '\N{CUBE ROOT}(')
SQRT = _paren('sqrt', 'sqrt(', functions.sqrt, '\N{SQUARE ROOT}(')
LOG = _paren('log', 'log(', functions.log, arity=(1, 2))
TEN_EXP = _paren('tenExp', '10^(', functions.ten_exp)
LN = _paren('ln', 'ln(', functions.ln)
E_EXP = _paren('eExp', 'e^(', functions.e_exp)
SIN = _paren('sin', 'sin(', functions.sin)
ASIN = _paren('asin', 'asin(', functions.asin, 'sin^-1(')
SINH = _paren('sinh', 'sinh(', functions.sinh)
ASINH = _paren('asinh', 'asinh(', functions.asinh, 'sinh^-1(')
COS = _paren('cos', 'cos(', functions.cos)
ACOS = _paren('acos', 'acos(', functions.acos, 'cos^-1(')
COSH = _paren('cosh', 'cosh(', functions.cosh)
ACOSH = _paren('acosh', 'acosh(', functions.acosh, 'cosh^-1(')
TAN = _paren('tan', 'tan(', functions.tan)
ATAN = _paren('atan', 'atan(', functions.atan, 'tan^-1(')
TANH = _paren('tanh', 'tanh(', functions.tanh)
ATANH = _paren('atanh', 'atanh(', functions.atanh, 'tanh^-1(')
POLAR = _paren('polar', 'Pol(', functions.polar, arity=(2,))
RECT = _paren('rect', 'Rec(', functions.rectangular, arity=(2,))
RND = _paren('rnd', 'Rnd(', functions.rnd)
ABS = _paren('abs', 'Abs(', functions.absolute)
OPEN_BRACKET = _paren('openBracket', '(', functions.identity)
PAREN_FUNCS = (CBRT, SQRT, LOG, TEN_EXP, LN, E_EXP, SIN, ASIN, SINH, ASINH,
               COS, ACOS, COSH, ACOSH, TAN, ATAN, TANH, ATANH, POLAR, RECT,
               RND, ABS, OPEN_BRACKET)

FRAC = TokenType('frac', '/', Kind.FRAC, '\N{BOX DRAWINGS LIGHT UP AND LEFT}')
NEG = TokenType('neg', 'neg', Kind.NEG, '-')
DEG = TokenType('deg', 'deg', Kind.DEG, '\N{DEGREE SIGN}')
CLOSE_BRACKET = TokenType('closeBracket', ')', Kind.CLOSE_BRACKET)
COMMA = TokenType('comma', ',', Kind.COMMA)
M_PLUS = TokenType('mPlus', 'M+', Kind.MEMORY, sign=1)
M_MINUS = TokenType('mMinus', 'M-', Kind.MEMORY, sign=-1)
PLUS = TokenType('plus', '+', Kind.PLUS)
MINUS = TokenType('minus', '-', Kind.MINUS)
CLR_MEMORY = TokenType('clrMemory', 'ClrMemory', Kind.CLR_MEMORY)

LITERALS = DIGITS + (EXP, DOT)

EXPRESSION_TOKEN_TYPES = (
    LITERALS + VARIABLES + CONSTANTS + SUFFIX_FUNCS + INFIX_FUNCS +
    PAREN_FUNCS + INFIX_PARENS +
    (RAN, FRAC, NEG, DEG, CLOSE_BRACKET, COMMA, M_PLUS, M_MINUS, PLUS, MINUS,
     CLR_MEMORY)
)

# Setup statements
DEG_MODE = TokenType('degMode', 'Deg', Kind.SETUP)
RAD_MODE = TokenType('radMode', 'Rad', Kind.SETUP)
GRA_MODE = TokenType('graMode', 'Gra', Kind.SETUP)
FIX_MODE = TokenType('fixMode', 'Fix', Kind.SETUP, 'Fix ')
SCI_MODE = TokenType('sciMode', 'Sci', Kind.SETUP, 'Sci ')
NORM_MODE = TokenType('normMode', 'Norm', Kind.SETUP, 'Norm ')
FREQ_ON = TokenType('freqOn', 'FreqOn', Kind.SETUP)
FREQ_OFF = TokenType('freqOff', 'FreqOff', Kind.SETUP)
SETUP_TOKEN_TYPES = (DEG_MODE, RAD_MODE, GRA_MODE, FIX_MODE, SCI_MODE,
                     NORM_MODE, FREQ_ON, FREQ_OFF)

# Program commands
PROMPT = _program('prompt', '?')
ASSIGN = _program('assign', '->', '\N{RIGHTWARDS ARROW}')
SEPARATOR = _program('separator', ':', ': ')
DISP = _program('disp', 'disp', '\N{BLACK LOWER RIGHT TRIANGLE} ')
FAT_ARROW = _program('fatArrow', '=>', '\N{RIGHTWARDS DOUBLE ARROW}')
GOTO = _program('goto', 'Goto', 'Goto ')
LBL = _program('lbl', 'Lbl', 'Lbl ')
WHILE = _program('while', 'While', 'While ')
WHILE_END = _program('whileEnd', 'WhileEnd')
NEXT = _program('next', 'Next')
BREAK = _program('break', 'Break')
FOR = _program('for', 'For', 'For ')
TO = _program('to', 'To', ' To ')
STEP = _program('step', 'Step', ' Step ')
ELSE = _program('else', 'Else', 'Else ')
IF_END = _program('ifEnd', 'IfEnd')
IF = _program('if', 'If', 'If ')
THEN = _program('then', 'Then', 'Then ')
PROGRAM_TOKEN_TYPES = SETUP_TOKEN_TYPES + (
    PROMPT, ASSIGN, SEPARATOR, DISP, FAT_ARROW, GOTO, LBL, WHILE, WHILE_END,
    NEXT, BREAK, FOR, TO, STEP, ELSE, IF_END, IF, THEN)

ALL_TOKEN_TYPES = EXPRESSION_TOKEN_TYPES + PROGRAM_TOKEN_TYPES

BY_SOURCE = {type_.source: type_ for type_ in ALL_TOKEN_TYPES}
assert len(BY_SOURCE) == len(ALL_TOKEN_TYPES), 'token sources must be unique'
BY_NAME = {type_.name: type_ for type_ in ALL_TOKEN_TYPES}

_EXPRESSION = frozenset(EXPRESSION_TOKEN_TYPES)
_SETUP = frozenset(SETUP_TOKEN_TYPES)


def is_expression(type_):
    return type_ in _EXPRESSION


def is_setup(type_):
    return type_ in _SETUP
