'''
Program interpretation.

A program is a sequence of line units separated by ':' or 'disp'. Once its
end is reached it runs again from the start, forever; the only ways out are
a runtime error, or the driver no longer resuming the interpreter.
'''

from .context import AngleUnit, DisplayDigits
from .expression import evaluate_expression
from .lexer import Cursor, SourcePosition
from .tokens import (
    ASSIGN, BREAK, DEG_MODE, DIGITS, DISP, FAT_ARROW, FIX_MODE, FREQ_OFF,
    FREQ_ON, GOTO, GRA_MODE, LBL, NORM_MODE, PROMPT, RAD_MODE, SCI_MODE,
    SEPARATOR, STEP, TO, VARIABLES, ANS, is_expression, is_setup,
)
from .util import (
    CalcArgumentError, CalcGotoError, CalcStackError, CalcSyntaxError,
    InterpreterProtocolError,
)


_DIGITS = frozenset(DIGITS)
_VARIABLES = frozenset(VARIABLES)
# Besides expressions and setup, what may follow a false '=>'
_SKIPPABLE = frozenset((PROMPT, GOTO, LBL, BREAK, TO, STEP))

_ANGLES = {
    DEG_MODE: AngleUnit.DEG,
    RAD_MODE: AngleUnit.RAD,
    GRA_MODE: AngleUnit.GRA,
}
_FREQUENCIES = {
    FREQ_ON: True,
    FREQ_OFF: False,
}


class InterpreterEvent:
    def __init__(self, context):
        self.context = context


class DisplayEvent(InterpreterEvent):
    '''
    A value to show, with the tokens of the line unit that produced it.

    is_disp tells an explicit 'disp' apart from the end of the program.
    '''

    def __init__(self, context, tokens, value, is_disp):
        super().__init__(context)
        self.tokens = tokens
        self.value = value
        self.is_disp = is_disp

    @property
    def shown(self):
        return ''.join(token.shown for token in self.tokens)

    def __repr__(self):
        return 'DisplayEvent({!r}, {}, is_disp={})'.format(
            self.shown, self.value, self.is_disp)


class PromptEvent(InterpreterEvent):
    '''
    A request for the value of var_name. Answer it with send().
    '''

    def __init__(self, context, var_name):
        super().__init__(context)
        self.var_name = var_name

    def __repr__(self):
        return 'PromptEvent({!r})'.format(self.var_name)


class Interpreter:
    '''
    Runs a program, yielding PromptEvents and DisplayEvents.
    '''

    def __init__(self, tokens, context):
        self.tokens = tokens
        self.context = context
        self._restart()

    def _restart(self):
        self.cursor = Cursor(self.tokens)
        self.display_from = 0
        self.value = 0.0

    def run(self):
        if not self.tokens:
            raise CalcSyntaxError(SourcePosition(0, 0, 0), 0, 'Empty program')
        while True:
            self._restart()
            yield from self._run_pass()

    def _run_pass(self):
        cursor = self.cursor
        while cursor.in_bound():
            self.display_from = cursor.i
            yield from self._command()

            displayed = self.tokens[self.display_from:cursor.i]
            value = self.value
            type_ = cursor.cur_type()
            if not cursor.in_bound():
                yield DisplayEvent(self.context, displayed, value, False)
            elif type_ is SEPARATOR:
                cursor.next()
                if not cursor.in_bound():
                    yield DisplayEvent(self.context, displayed, value, False)
            elif type_ is DISP:
                yield DisplayEvent(self.context, displayed, value, True)
                cursor.next()
                if not cursor.in_bound():
                    yield DisplayEvent(self.context, [], value, False)
            else:
                cursor.fail(CalcSyntaxError, 'Ending expected')

    # Helpers

    def _expect_next(self, types, message, error_cls=CalcSyntaxError):
        '''
        Consume the current token if one of types, and return its type.
        '''
        type_ = self.cursor.cur_type()
        if type_ is None or type_ not in types:
            self.cursor.fail(error_cls, message)
        self.cursor.next()
        return type_

    def _expect_end(self, message, error_cls=CalcSyntaxError):
        type_ = self.cursor.cur_type()
        if type_ is not None and type_ is not SEPARATOR and type_ is not DISP:
            self.cursor.fail(error_cls, message)

    def _accept_assignment(self):
        '''
        Accept '-> variable' and return the variable's name.
        '''
        cursor = self.cursor
        self._expect_next((ASSIGN,), 'Expects assignment')
        type_ = cursor.cur_type()
        if type_ not in _VARIABLES:
            cursor.fail(CalcSyntaxError, 'Assignment expects variable')
        if type_ is ANS:
            cursor.fail(CalcSyntaxError, 'Cannot perform assignment to Ans')
        cursor.next()
        self._expect_end('Assignment expects ending after variable')
        return type_.var_name

    # Commands, the cursor on their first token

    def _command(self):
        cursor = self.cursor
        type_ = cursor.cur_type()
        if is_expression(type_):
            yield from self._expression()
        elif is_setup(type_):
            self._setup()
        elif type_ is FAT_ARROW:
            cursor.fail(CalcSyntaxError,
                        'Fat arrow can only be used after expression')
        elif type_ in type(self)._COMMANDS:
            yield from type(self)._COMMANDS[type_](self)
        else:
            cursor.fail(CalcStackError, 'Unexpected token')

    def _prompt(self):
        self.display_from = self.cursor.i
        self.cursor.next()
        var_name = self._accept_assignment()

        answer = yield PromptEvent(self.context, var_name)
        if answer is None:
            raise InterpreterProtocolError('Prompt event must be answered')
        self.context.variables[var_name] = answer
        self.value = self.context.variables[var_name]

    def _expression(self):
        cursor = self.cursor
        value = evaluate_expression(cursor, self.context, isolated=False)
        self.context.variables['Ans'] = value
        self.value = value
        type_ = cursor.cur_type()
        if type_ is ASSIGN:
            self.context.variables[self._accept_assignment()] = value
        elif type_ is FAT_ARROW:
            yield from self._fat_arrow()

    def _fat_arrow(self):
        cursor = self.cursor
        cursor.next()
        if not cursor.in_bound():
            cursor.fail(CalcSyntaxError, 'Fat arrow expects statement')
        type_ = cursor.cur_type()
        if self.context.variables['Ans'] == 0:
            if not (is_expression(type_) or is_setup(type_) or
                    type_ in _SKIPPABLE):
                cursor.fail(CalcSyntaxError,
                            'Unexpected token after fat arrow (a false '
                            'result only accepts expression, setup, prompt, '
                            'goto, lbl, break, to, step)')
            while cursor.in_bound() and cursor.cur_type() not in (SEPARATOR,
                                                                  DISP):
                cursor.next()
            if cursor.cur_type() is DISP:
                cursor.next()
                self.display_from = cursor.i
                if cursor.in_bound():
                    yield from self._command()
        elif is_expression(type_):
            yield from self._expression()
        elif is_setup(type_):
            self._setup()
        elif type_ is BREAK:
            cursor.fail(CalcSyntaxError, 'Break is only valid inside a loop')
        elif type_ in type(self)._COMMANDS:
            yield from type(self)._COMMANDS[type_](self)
        else:
            cursor.fail(CalcSyntaxError,
                        'Unexpected token after fat arrow (a true result '
                        'only accepts expression, setup, prompt, goto, lbl)')

    def _lbl(self):
        self.cursor.next()
        self._expect_next(_DIGITS, 'Expects 0-9 after Lbl', CalcArgumentError)
        self._expect_end('Lbl expects ending after 0-9', CalcArgumentError)
        # Generator, like every other command
        yield from ()

    def _goto(self):
        cursor = self.cursor
        tokens = self.tokens
        cursor.next()
        label = self._expect_next(_DIGITS, 'Expects 0-9 after Goto',
                                  CalcArgumentError)
        self._expect_end('Goto expects ending after 0-9', CalcArgumentError)
        if cursor.cur_type() is DISP:
            yield DisplayEvent(self.context,
                               tokens[self.display_from:cursor.i],
                               self.value, True)

        for i in range(len(tokens) - 1):
            if tokens[i].type is LBL and tokens[i + 1].type is label:
                break
        else:
            cursor.prev()
            cursor.fail(CalcGotoError, 'Label not found')
        cursor.i = i
        self.display_from = i
        yield from self._lbl()

    _COMMANDS = {
        PROMPT: _prompt,
        LBL: _lbl,
        GOTO: _goto,
    }

    def _setup(self):
        '''
        Deg, Rad, Gra, Fix d, Sci d, Norm d, FreqOn, FreqOff.

        Changes settings only; the last value stays.
        '''
        cursor = self.cursor
        setup = self.context.setup
        type_ = cursor.cur_type()
        cursor.next()
        if type_ in _ANGLES:
            setup.angle = _ANGLES[type_]
        elif type_ in _FREQUENCIES:
            setup.frequency_on = _FREQUENCIES[type_]
        else:
            digit_type = self._expect_next(
                _DIGITS, '{} expects a digit'.format(type_.source),
                CalcArgumentError)
            digits = digit_type.value
            try:
                if type_ is FIX_MODE:
                    display_digits = DisplayDigits.fix(digits)
                elif type_ is SCI_MODE:
                    display_digits = DisplayDigits.sci(digits or 10)
                elif type_ is NORM_MODE:
                    display_digits = DisplayDigits.norm(digits)
            except ValueError as e:
                cursor.prev()
                cursor.fail(CalcArgumentError, str(e))
            setup.display_digits = display_digits
        self._expect_end('{} expects ending'.format(type_.source))


def interpret(tokens, context):
    '''
    Return a generator running the program in tokens.

    It yields PromptEvents, to be answered with send(value), and
    DisplayEvents, to be resumed with next().
    '''
    return Interpreter(tokens, context).run()
