from pytest import Item, fixture

from fxcalc.context import Context
from fxcalc.expression import evaluate_expression
from fxcalc.lexer import Cursor, Lexer


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, in case we later need to audit a run.

    Needs enable_assertion_pass_hook; use with pytest -rP.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))
    print('actual', item.name + ':' + str(lineno),
          '\n'.join(str(expl).splitlines()[:-2]))


def lex(source):
    '''
    Tokens of source, which must lex cleanly.
    '''
    tokens, error_positions = Lexer().lex(source)
    assert not error_positions, source
    return tokens


@fixture
def context():
    return Context()


@fixture
def evaluate(context):
    '''
    Evaluate an expression against the test's context.
    '''
    def evaluate(source, isolated=True):
        return evaluate_expression(Cursor(lex(source)), context, isolated)
    return evaluate
