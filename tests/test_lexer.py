'''
Lexer tests
'''

import regex

from fxcalc import tokens as t
from fxcalc.lexer import Cursor, Lexer, SourcePosition
from fxcalc.util import CalcSyntaxError

from pytest import raises


def types(lexicalization):
    return [token.type for token in lexicalization.tokens]


def test_longest_match():
    l = Lexer()
    assert types(l.lex('sinh(')) == [t.SINH]
    assert types(l.lex('asinh(')) == [t.ASINH]
    assert types(l.lex('^-1')) == [t.RECIPROCAL]
    assert types(l.lex('>=')) == [t.GEQ]
    assert types(l.lex('=>')) == [t.FAT_ARROW]
    assert types(l.lex('10^(')) == [t.TEN_EXP]
    assert types(l.lex('lambdacp')) == [t.CONSTANTS[15]]


def test_adjacent_lexemes():
    l = Lexer()
    assert types(l.lex('1+2->A')) == [t.DIGITS[1], t.PLUS, t.DIGITS[2],
                                      t.ASSIGN, t.VAR_A]
    assert types(l.lex('5pi')) == [t.DIGITS[5], t.PI]
    assert types(l.lex('Ans')) == [t.ANS]


def test_positions():
    l = Lexer()
    tokens, error_positions = l.lex('12 +\n sqrt(3')
    assert error_positions == []
    assert [token.start for token in tokens] == [
        SourcePosition(0, 0, 0),
        SourcePosition(1, 0, 1),
        SourcePosition(3, 0, 3),
        SourcePosition(6, 1, 1),
        SourcePosition(11, 1, 6),
    ]
    assert tokens[3].end == SourcePosition(11, 1, 6)


def test_unknown_symbols_skipped():
    l = Lexer()
    tokens, error_positions = l.lex('1 @ 2\n$')
    assert [token.type for token in tokens] == [t.DIGITS[1], t.DIGITS[2]]
    assert error_positions == [SourcePosition(2, 0, 2),
                               SourcePosition(6, 1, 0)]


def test_restricted_token_types():
    l = Lexer(t.EXPRESSION_TOKEN_TYPES)
    tokens, error_positions = l.lex('1:2')
    assert [token.type for token in tokens] == [t.DIGITS[1], t.DIGITS[2]]
    assert error_positions == [SourcePosition(1, 0, 1)]


def test_shown():
    tokens, _ = Lexer().lex('pi div 2 -> A')
    assert ''.join(token.shown for token in tokens) == \
        '\N{GREEK SMALL LETTER PI}\N{DIVISION SIGN}2\N{RIGHTWARDS ARROW}A'
    assert tokens[0].source == 'pi'


def test_pattern_is_escaped():
    l = Lexer()
    assert regex.escape('^(') in l.pattern
    assert l.pattern.index(regex.escape('asinh(')) < \
        l.pattern.index(regex.escape('sinh('))


def test_cursor_position():
    tokens, _ = Lexer().lex('1 +\n2')
    cursor = Cursor(tokens)
    assert cursor.position() == SourcePosition(0, 0, 0)
    cursor.i = 2
    assert cursor.position() == SourcePosition(4, 1, 0)
    cursor.next()
    assert not cursor.in_bound()
    assert cursor.cur() is None
    assert cursor.position() == SourcePosition(5, 1, 1)
    assert Cursor([]).position() == SourcePosition(0, 0, 0)


def test_cursor_fail():
    tokens, _ = Lexer().lex('1 + 2')
    cursor = Cursor(tokens, 2)
    with raises(CalcSyntaxError, match=regex.escape('1:5 (oops)')) as e:
        cursor.fail(CalcSyntaxError, 'oops')
    assert e.value.token_index == 2
    assert str(e.value) == 'Syntax ERROR at 1:5 (oops)'
