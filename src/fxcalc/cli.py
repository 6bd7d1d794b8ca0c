from sys import stdin, stdout, stderr, exit
from argparse import ArgumentParser, REMAINDER, OPTIONAL, FileType
import traceback

from prompt_toolkit import PromptSession

from .context import AngleUnit, Context, DisplayDigits, format_number
from .expression import evaluate_expression
from .interpreter import DisplayEvent, PromptEvent, interpret
from .lexer import Cursor, Lexer
from .tokens import EXPRESSION_TOKEN_TYPES
from .util import CalcError, CalcRuntimeError


class InteractiveInput:
    def __init__(self, prompt):
        self.prompt = prompt
        self._session = None

    @property
    def session(self):
        if self._session is None:
            self._session = PromptSession(message=self.prompt,
                                          enable_suspend=True,
                                          enable_open_in_editor=True,
                                          history=None,
                                          prompt_continuation=' ' * len(
                                              self.prompt),
                                          erase_when_done=False)
        return self._session

    def ask(self, message=None):
        '''
        Return one line, or None at end of input.
        '''
        try:
            return self.session.prompt(message or self.prompt)
        except EOFError:
            return None

    def __iter__(self):
        while True:
            line = self.ask()
            if line is None:
                return
            yield line


class StreamInput:
    '''
    Non-interactive counterpart of InteractiveInput.
    '''

    def __init__(self, stream):
        self.stream = stream

    def ask(self, message=None):
        line = self.stream.readline()
        if not line:
            return None
        return line.rstrip('\n')

    def __iter__(self):
        return (line.rstrip('\n') for line in self.stream)


class CLI:
    '''
    Command line interface to the calculator.
    '''

    DEFAULT_PROMPT = '> '
    DEFAULT_PASSES = 1
    ANSWER_PROMPT = '{}? '
    DISP_MARKER = '-Disp-'

    def dumper(self):
        '''
        Dump all lexemes: kind, source, and shown spelling.
        '''
        lexer = Lexer()
        print('<kind>\t<repr(source)>\t<shown>')
        for source in self._sources():
            for token in self._lex(lexer, source):
                print(token.type.kind.value,
                      repr(token.source),
                      token.shown,
                      sep='\t')

    def raw_grammar(self):
        '''
        Print the lexer's alternation of every token source.
        '''
        lexer = Lexer()
        print(lexer.pattern)

    def executor(self):
        '''
        Run programs, or evaluate each input line as an expression.
        '''
        if self.args.programs is None and self.args.file is None:
            self.calculator()
            return
        for program in self._sources():
            try:
                self._run_program(program)
            except CalcError as e:
                self._report(e)

    def calculator(self):
        '''
        Evaluate every line on its own, like the calculator's COMP mode.
        '''
        lexer = Lexer(EXPRESSION_TOKEN_TYPES)
        for line in self.input:
            tokens = self._lex(lexer, line)
            if not tokens:
                continue
            try:
                value = evaluate_expression(Cursor(tokens), self.context)
            except CalcError as e:
                self._report(e)
                continue
            self.context.variables['Ans'] = value
            print(self._format(value))

    def _run_program(self, program):
        tokens = self._lex(Lexer(), program)
        events = interpret(tokens, self.context)
        passes = 0
        event = next(events)
        while True:
            if isinstance(event, PromptEvent):
                answer = self._answer(event.var_name)
                if answer is None:
                    return
                event = events.send(answer)
                continue
            assert isinstance(event, DisplayEvent)
            self._display(event)
            if not event.is_disp:
                passes += 1
                if passes >= self.args.passes:
                    return
            event = next(events)

    def _answer(self, var_name):
        '''
        Ask for var_name's value until it evaluates, None at end of input.
        '''
        lexer = Lexer(EXPRESSION_TOKEN_TYPES)
        while True:
            line = self.input.ask(self.ANSWER_PROMPT.format(var_name))
            if line is None:
                return None
            tokens = self._lex(lexer, line)
            if not tokens:
                return self.context.variables[var_name]
            try:
                return evaluate_expression(Cursor(tokens), self.context)
            except CalcError as e:
                self._report(e)

    def _display(self, event):
        if event.tokens:
            print(event.shown)
        value = self._format(event.value)
        if event.is_disp:
            print(value, self.DISP_MARKER)
        else:
            print(value)

    def _format(self, value):
        return format_number(value, self.context.setup.display_digits)

    def _lex(self, lexer, source):
        tokens, error_positions = lexer.lex(source)
        for position in error_positions:
            print('{}:{} Unknown symbol {!r} (skipped)'.format(
                      position.line + 1, position.column + 1,
                      source[position.index]),
                  file=stderr)
        return tokens

    def _report(self, error):
        print(error, file=stderr)
        if self.args.verbose:
            if isinstance(error, CalcRuntimeError):
                print('at token', error.token_index, file=stderr)
            traceback.print_exc()

    def _sources(self):
        if self.args.file is not None:
            with self.args.file as fp:
                yield fp.read()
        elif self.args.programs is not None:
            yield from self.args.programs
        else:
            yield from self.input

    def _prompting_input(self):
        '''
        Answer prompts interactively when --prompt is given, or when both
        stdin and stdout are ttys. Otherwise read plain lines from stdin.
        '''
        if self.args.prompt or \
           stdin.isatty() and stdout.isatty():
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT)
        else:
            return StreamInput(stdin)

    def _context(self):
        context = Context()
        setup = context.setup
        if self.args.angle is not None:
            setup.angle = AngleUnit(self.args.angle)
        try:
            for kind in 'fix', 'sci', 'norm':
                digits = getattr(self.args, kind)
                if digits is not None:
                    setup.display_digits = getattr(DisplayDigits, kind)(digits)
        except ValueError as e:
            self.argument_parser.error(str(e))
        return context

    def __init__(self):
        '''
        Build the argument parser; nothing is parsed or run yet.
        '''
        self.argument_parser = ArgumentParser(
            description='Programmable scientific calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        source_groups = self.argument_parser.add_mutually_exclusive_group()
        source_groups.add_argument('-e', '--expression',
                                   nargs=REMAINDER,
                                   dest='programs',
                                   metavar='PROGRAM')
        source_groups.add_argument('-f', '--file',
                                   type=FileType('r'))
        self.argument_parser.add_argument('-p', '--prompt',
                                          nargs=OPTIONAL,
                                          const=self.DEFAULT_PROMPT)
        self.argument_parser.add_argument('-n', '--passes',
                                          type=int,
                                          default=self.DEFAULT_PASSES,
                                          help='stop programs after this '
                                               'many runs')
        self.argument_parser.add_argument('--angle',
                                          choices=[unit.value
                                                   for unit in AngleUnit])
        digits_groups = self.argument_parser.add_mutually_exclusive_group()
        for kind in 'fix', 'sci', 'norm':
            digits_groups.add_argument('--' + kind, type=int, metavar='N')
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        self.context = self._context()
        self.input = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            exit(1)
