from functools import wraps
import math


# Results at or beyond this magnitude overflow the calculator.
OVERFLOW = 1e100


class CalcError(Exception):
    pass


class CalcRuntimeError(CalcError):
    '''
    Error raised while evaluating or interpreting a program.

    Pinned to the token index evaluation was positioned at when the failure
    was detected, which is not necessarily the token that caused it.
    '''
    KIND = 'Runtime'

    def __init__(self, source_pos, token_index, message):
        super().__init__(message)
        self.source_pos = source_pos
        self.token_index = token_index
        self.message = message

    def __str__(self):
        return '{} ERROR at {}:{} ({})'.format(type(self).KIND,
                                              self.source_pos.line + 1,
                                              self.source_pos.column + 1,
                                              self.message)


class CalcSyntaxError(CalcRuntimeError):
    KIND = 'Syntax'


class CalcMathError(CalcRuntimeError):
    KIND = 'Math'


class CalcStackError(CalcRuntimeError):
    KIND = 'Stack'


class CalcArgumentError(CalcRuntimeError):
    KIND = 'Argument'


class CalcGotoError(CalcRuntimeError):
    KIND = 'Goto'


class DomainError(CalcError):
    '''
    Raised by calculator functions, which know nothing of tokens.

    The evaluator turns it into a CalcMathError at its current token.
    '''


class InternalError(Exception):
    '''
    Evaluator invariant violated. A bug, never the user's fault.
    '''


class InterpreterProtocolError(CalcError):
    '''
    The interpreter's driver did not answer a prompt.
    '''


def checked(value):
    '''
    Return value, unless it overflows the calculator.
    '''
    if not math.isfinite(value) or abs(value) >= OVERFLOW:
        raise DomainError('Overflow')
    return value


def wrap_math_errors(fmt):
    '''
    Decorator that converts math module exceptions to DomainErrors.

    Passes through DomainErrors. Results are checked for overflow.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                result = f(*args, **kwargs)
            except DomainError:
                raise
            except (ArithmeticError, ValueError) as e:
                raise DomainError(fmt.format(*args, **kwargs)) from e
            return checked(result)
        return wrapper
    return decorator
