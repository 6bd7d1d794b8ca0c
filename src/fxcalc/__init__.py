'''
Programmable scientific calculator.

Lexes calculator key sequences, evaluates expressions with the calculator's
own precedence rules, stack limits and quirks, and runs its small line based
programming language: '?' prompts, '->' assignment, '=>' conditional
continuation, 'Lbl' and 'Goto'.
'''

from .cli import CLI
from .context import Context
from .expression import evaluate_expression
from .interpreter import interpret
from .lexer import Cursor, Lexer


__all__ = 'CLI', 'Context', 'Cursor', 'Lexer', 'evaluate_expression', \
          'interpret'
