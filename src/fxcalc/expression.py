'''
Expression evaluation.

A single left to right pass over the tokens with two bounded stacks: one of
operands, one of deferred commands. Commands run when the precedence
requested of the command stack drops to or below their own, reproducing the
calculator's precedence table, stack limits and quirks.
'''

from enum import Enum

from . import functions
from .stack import BoundedStack, StackEmpty, StackOverflow
from .tokens import (
    CLR_MEMORY, DEG, DIGITS, DISP, DOT, EXP, FAT_ARROW, LITERALS, MINUS, NEG,
    PLUS, SEPARATOR, Kind, Precedence, is_expression,
)
from .util import (
    CalcMathError, CalcStackError, CalcSyntaxError, DomainError,
    InternalError, checked,
)


NUMERIC_STACK_CAPACITY = 11
COMMAND_STACK_CAPACITY = 24

# Tokens ending an expression that is evaluated on its own
TERMINATORS = frozenset((SEPARATOR, FAT_ARROW, DISP))
MAX_DEGREE_COMPONENTS = 3
MAX_EXPONENT_DIGITS = 2

_DIGITS = frozenset(DIGITS)
_LITERALS = frozenset(LITERALS)
_EXPONENT_SIGNS = {PLUS: 1, MINUS: -1, NEG: -1}


class _Placeholder:
    '''
    Operand stack marker: a number is expected here.
    '''

    def __repr__(self):
        return 'PLACEHOLDER'


PLACEHOLDER = _Placeholder()


class CommandKind(Enum):
    BINARY = 'binary'
    UNARY = 'unary'
    FRAC_OPEN = 'frac open'
    FRAC_CLOSE = 'frac close'
    PAREN = 'paren'


class Command:
    '''
    A deferred operation on the command stack.

    type is the token type that produced it, None for an inserted omitted
    multiplication. start_depth is the operand stack depth when a
    parenthesised command opened.
    '''
    __slots__ = ('kind', 'type', 'precedence', 'fn', 'start_depth')

    def __init__(self, kind, type_, precedence=None, fn=None,
                 start_depth=None):
        self.kind = kind
        self.type = type_
        self.precedence = precedence
        self.fn = fn
        self.start_depth = start_depth

    def __repr__(self):
        return '<Command {} {}>'.format(
            self.kind.value,
            self.type.source if self.type is not None else '(omitted *)')


class Evaluator:
    '''
    Evaluates one expression starting at the cursor.

    In isolated mode, the expression must be followed by the end of input,
    ':', '=>' or 'disp'. Otherwise any non-expression token ends it, for the
    caller to deal with. Either way the cursor is left on the token that
    ended the expression.
    '''

    def __init__(self, cursor, context, isolated=True):
        self.cursor = cursor
        self.context = context
        self.isolated = isolated
        self.numbers = BoundedStack(NUMERIC_STACK_CAPACITY)
        self.commands = BoundedStack(COMMAND_STACK_CAPACITY)
        self.expect_number = True

    def evaluate(self):
        cursor = self.cursor
        if cursor.cur_type() is CLR_MEMORY:
            return self._clear_memory()
        while cursor.in_bound():
            type_ = cursor.cur_type()
            if not is_expression(type_):
                if self.isolated and type_ not in TERMINATORS:
                    cursor.fail(CalcSyntaxError,
                                'Unexpected {}'.format(type_.source))
                break
            if type_.kind is Kind.MEMORY:
                return self._memory(type_)
            type(self)._HANDLERS[type_.kind](self, type_)
            cursor.next()
        return self._finish()

    # Stack helpers

    def _depth(self):
        '''
        Operand stack depth, not counting a pending placeholder.
        '''
        depth = len(self.numbers)
        if depth and self.numbers.peek() is PLACEHOLDER:
            depth -= 1
        return depth

    def _push_number(self, value):
        if self.numbers and self.numbers.peek() is PLACEHOLDER:
            self.numbers.pop()
        try:
            self.numbers.push(value)
        except StackOverflow:
            self.cursor.fail(CalcStackError, 'Too many pending numbers')

    def _push_command(self, command):
        try:
            self.commands.push(command)
        except StackOverflow:
            self.cursor.fail(CalcStackError, 'Too many pending commands')

    def _guard(self, f, *args):
        '''
        Call f(context, *args), reporting domain violations at the cursor.
        '''
        try:
            return checked(f(self.context, *args))
        except DomainError as e:
            self.cursor.fail(CalcMathError, str(e))

    def _eval_until(self, precedence):
        '''
        Run pending commands down to the requested precedence.
        '''
        try:
            while self.commands:
                command = self.commands.peek()
                if not type(self)._ATTEMPTS[command.kind](self, command,
                                                          precedence):
                    break
        except StackEmpty as e:
            raise InternalError('Missing operand for pending command') from e

    def _has_open_paren(self):
        return any(command.kind is CommandKind.PAREN
                   for command in self.commands)

    def _omitted_multiply(self):
        self._eval_until(Precedence.L6)
        self._push_command(Command(CommandKind.BINARY, None, Precedence.L6,
                                   functions.multiply))

    # Command attempts, returning whether to go on with the next command

    def _attempt_binary(self, command, precedence):
        if precedence > command.precedence:
            return False
        self.commands.pop()
        right = self.numbers.pop()
        left = self.numbers.pop()
        self._push_number(self._guard(command.fn, left, right))
        return True

    def _attempt_unary(self, command, precedence):
        if precedence > command.precedence:
            return False
        self.commands.pop()
        self._push_number(self._guard(command.fn, self.numbers.pop()))
        return True

    def _attempt_frac_open(self, command, precedence):
        # A later fraction runs first, then prefix negation, then this one.
        if precedence >= Precedence.L9:
            return False
        self.commands.pop()
        denominator = self.numbers.pop()
        numerator = self.numbers.pop()
        self._push_number(self._guard(functions.fraction, numerator,
                                      denominator))
        return True

    def _attempt_frac_close(self, command, precedence):
        if precedence >= Precedence.L9:
            return False
        self.commands.pop()
        opening = self.commands.pop()
        if opening.kind is not CommandKind.FRAC_OPEN:
            raise InternalError('Mixed fraction without its first frac')
        denominator = self.numbers.pop()
        numerator = self.numbers.pop()
        whole = self.numbers.pop()
        self._push_number(self._guard(functions.mixed_fraction, whole,
                                      numerator, denominator))
        return True

    def _attempt_paren(self, command, precedence):
        if precedence is Precedence.CLOSE_BRACKET:
            self._close_paren(command)
            return False
        elif precedence is Precedence.LOWEST:
            self._close_paren(command)
            return True
        return False

    def _close_paren(self, command):
        type_ = command.type
        count = len(self.numbers) - command.start_depth
        if count not in type_.arity:
            self.cursor.fail(CalcSyntaxError,
                             '{} takes {} arguments, not {}'.format(
                                 type_.source,
                                 ' or '.join(map(str, sorted(type_.arity))),
                                 count))
        self.commands.pop()
        args = [self.numbers.pop() for _ in range(count)]
        args.reverse()
        if type_.kind is Kind.INFIX_PAREN:
            args.insert(0, self.numbers.pop())
        self._push_number(self._guard(command.fn, *args))

    _ATTEMPTS = {
        CommandKind.BINARY: _attempt_binary,
        CommandKind.UNARY: _attempt_unary,
        CommandKind.FRAC_OPEN: _attempt_frac_open,
        CommandKind.FRAC_CLOSE: _attempt_frac_close,
        CommandKind.PAREN: _attempt_paren,
    }

    # Literals

    def _accept_literal(self):
        '''
        Accept digits(.digits)?(E[sign run]d[d])? and return its value.

        Leaves the cursor on the last token of the literal.
        '''
        cursor = self.cursor
        leading_exp = cursor.cur_type() is EXP
        significand = ''
        while cursor.cur_type() in _DIGITS:
            significand += cursor.cur().source
            cursor.next()
        if cursor.cur_type() is DOT:
            significand += '.'
            cursor.next()
            while cursor.cur_type() in _DIGITS:
                significand += cursor.cur().source
                cursor.next()
        if leading_exp:
            significand = '1'
        elif not significand.strip('.'):
            significand = '0'

        exponent = ''
        if cursor.cur_type() is EXP:
            cursor.next()
            sign = 1
            while cursor.cur_type() in _EXPONENT_SIGNS:
                sign *= _EXPONENT_SIGNS[cursor.cur_type()]
                cursor.next()
            if cursor.cur_type() not in _DIGITS:
                cursor.fail(CalcSyntaxError, 'Missing number after exp')
            while cursor.cur_type() in _DIGITS:
                if len(exponent) == MAX_EXPONENT_DIGITS:
                    cursor.fail(CalcSyntaxError,
                                'Exponents cannot have more than {} '
                                'numbers'.format(MAX_EXPONENT_DIGITS))
                exponent += cursor.cur().source
                cursor.next()
            exponent = 'e' + ('-' if sign < 0 else '') + exponent

        if cursor.cur_type() is DOT:
            cursor.fail(CalcSyntaxError,
                        'Dot is not allowed in exponent or after another dot')
        if cursor.cur_type() is EXP:
            cursor.fail(CalcSyntaxError, 'Literal cannot have more than one '
                                         'Exp')
        cursor.prev()
        try:
            return checked(float(significand + exponent))
        except DomainError as e:
            cursor.fail(CalcMathError, str(e))

    def _accept_degrees(self, first):
        '''
        Accept the minutes and seconds following degrees, if any.

        Leaves the cursor on the last token consumed.
        '''
        cursor = self.cursor
        parts = [first]
        while True:
            cursor.next()
            if cursor.cur_type() is not DEG:
                cursor.prev()
                break
            cursor.next()
            if cursor.cur_type() is DEG:
                cursor.fail(CalcSyntaxError, 'deg cannot follow deg')
            if cursor.cur_type() not in _LITERALS:
                cursor.prev()
                break
            if len(parts) == MAX_DEGREE_COMPONENTS:
                cursor.fail(CalcSyntaxError,
                            'Degrees take at most {} components'.format(
                                MAX_DEGREE_COMPONENTS))
            parts.append(self._accept_literal())
        if len(parts) == 1:
            return first
        return self._guard(functions.fold_degrees, parts)

    # Token handlers, the cursor on the token

    def _literal(self, type_):
        if not self.expect_number:
            self.cursor.fail(CalcSyntaxError, 'Unexpected number')
        value = self._accept_degrees(self._accept_literal())
        self._push_number(value)
        self.expect_number = False

    def _valued(self, type_):
        if not self.expect_number:
            self._omitted_multiply()
        self._push_number(self._guard(type_.fn))
        self.expect_number = False

    def _plus(self, type_):
        # A leading + is absorbed, so any number of them fit.
        if self.expect_number:
            return
        self._binary(type_, Precedence.L4, functions.add)

    def _minus(self, type_):
        if self.expect_number:
            self._negate(type_)
        else:
            self._binary(type_, Precedence.L4, functions.subtract)

    def _neg(self, type_):
        if not self.expect_number:
            self.cursor.fail(CalcSyntaxError,
                             'Negative sign cannot follow a number')
        self._negate(type_)

    def _negate(self, type_):
        self._push_command(Command(CommandKind.UNARY, type_, Precedence.L9,
                                   functions.negate))

    def _infix(self, type_):
        self._binary(type_, type_.precedence, type_.fn)

    def _binary(self, type_, precedence, fn):
        if self.expect_number:
            self.cursor.fail(CalcSyntaxError,
                             'Expected number but found {}'.format(
                                 type_.source))
        self._eval_until(precedence)
        self._push_command(Command(CommandKind.BINARY, type_, precedence, fn))
        self.expect_number = True

    def _frac(self, type_):
        if self.expect_number:
            self.cursor.fail(CalcSyntaxError,
                             'Expected number but found frac')
        self._eval_until(Precedence.L10)
        top = self.commands.peek() if self.commands else None
        if top is not None and top.kind is CommandKind.FRAC_CLOSE:
            self.cursor.fail(CalcSyntaxError, '3 Frac not allowed')
        elif top is not None and top.kind is CommandKind.FRAC_OPEN:
            kind = CommandKind.FRAC_CLOSE
        else:
            kind = CommandKind.FRAC_OPEN
        self._push_command(Command(kind, type_, Precedence.L10))
        self.expect_number = True

    def _suffix(self, type_):
        if self.expect_number:
            self.cursor.fail(CalcSyntaxError,
                             'Expected number but found {}'.format(
                                 type_.source))
        self._push_command(Command(CommandKind.UNARY, type_, Precedence.L11,
                                   type_.fn))
        self._eval_until(Precedence.L11)

    def _paren_func(self, type_):
        if not self.expect_number:
            self._omitted_multiply()
        self._push_command(Command(CommandKind.PAREN, type_, fn=type_.fn,
                                   start_depth=self._depth()))
        self.expect_number = True

    def _infix_paren(self, type_):
        if self.expect_number:
            self.cursor.fail(CalcSyntaxError,
                             'Expected number but found {}'.format(
                                 type_.source))
        self._eval_until(Precedence.L11)
        self._push_command(Command(CommandKind.PAREN, type_, fn=type_.fn,
                                   start_depth=self._depth()))
        self.expect_number = True

    def _comma(self, type_):
        if self.expect_number:
            self.cursor.fail(CalcSyntaxError,
                             'Expected number but found comma')
        if not self._has_open_paren():
            self.cursor.fail(CalcSyntaxError,
                             'Comma outside of a function')
        self._eval_until(Precedence.COMMA)
        try:
            self.numbers.push(PLACEHOLDER)
        except StackOverflow:
            self.cursor.fail(CalcStackError, 'Too many pending numbers')
        self.expect_number = True

    def _close_bracket(self, type_):
        if self.expect_number:
            self.cursor.fail(CalcSyntaxError,
                             'Expected number but found )')
        if not self._has_open_paren():
            self.cursor.fail(CalcSyntaxError, 'Unmatched )')
        self._eval_until(Precedence.CLOSE_BRACKET)

    def _deg(self, type_):
        self.cursor.fail(CalcSyntaxError, 'deg must follow a number')

    def _misplaced_clr_memory(self, type_):
        self.cursor.fail(CalcSyntaxError, 'ClrMemory must stand alone')

    _HANDLERS = {
        Kind.DIGIT: _literal,
        Kind.DOT: _literal,
        Kind.EXP: _literal,
        Kind.VARIABLE: _valued,
        Kind.VALUED: _valued,
        Kind.PLUS: _plus,
        Kind.MINUS: _minus,
        Kind.NEG: _neg,
        Kind.INFIX: _infix,
        Kind.FRAC: _frac,
        Kind.SUFFIX: _suffix,
        Kind.PAREN_FUNC: _paren_func,
        Kind.INFIX_PAREN: _infix_paren,
        Kind.COMMA: _comma,
        Kind.CLOSE_BRACKET: _close_bracket,
        Kind.DEG: _deg,
        Kind.CLR_MEMORY: _misplaced_clr_memory,
    }

    # Ending the expression

    def _finish(self):
        if self.expect_number:
            self.cursor.fail(CalcSyntaxError, 'Expected number')
        self._eval_until(Precedence.LOWEST)
        if self.commands:
            raise InternalError('Commands left after evaluation: {!r}'.format(
                list(self.commands)))
        if len(self.numbers) != 1 or self.numbers.peek() is PLACEHOLDER:
            raise InternalError('Expected a single number, got {!r}'.format(
                list(self.numbers)))
        return self.numbers.pop()

    def _expect_end(self):
        cursor = self.cursor
        if not cursor.in_bound():
            return
        type_ = cursor.cur_type()
        if is_expression(type_) or (self.isolated and
                                    type_ not in TERMINATORS):
            cursor.fail(CalcSyntaxError, 'Ending expected')

    def _memory(self, type_):
        '''
        M+, M-: end the expression and add its value to, or subtract it
        from, M.
        '''
        value = self._finish()
        variables = self.context.variables
        variables['M'] = self._guard(functions.add, variables['M'],
                                     type_.sign * value)
        self.cursor.next()
        self._expect_end()
        return value

    def _clear_memory(self):
        self.cursor.next()
        self._expect_end()
        self.context.variables.clear()
        return self.context.variables['Ans']


def evaluate_expression(cursor, context, isolated=True):
    '''
    Evaluate the expression at the cursor and return its value.
    '''
    return Evaluator(cursor, context, isolated).evaluate()
