from collections import namedtuple
from functools import reduce
import operator

import regex

from .tokens import ALL_TOKEN_TYPES


SourcePosition = namedtuple('SourcePosition', 'index line column')


class Token(namedtuple('Token', 'type start end')):
    '''
    A lexeme: its token type and where it sits in the source.
    '''
    __slots__ = ()

    @property
    def source(self):
        return self.type.source

    @property
    def shown(self):
        return self.type.shown


Lexicalization = namedtuple('Lexicalization', 'tokens error_positions')


class Cursor:
    '''
    Position in a token list.

    Owned by a single evaluation or interpretation. Routines that consume
    tokens leave it on the last token they consumed.
    '''

    def __init__(self, tokens, i=0):
        self.tokens = tokens
        self.i = i

    def cur(self):
        '''
        Return the current token, or None when out of bounds.
        '''
        if self.in_bound():
            return self.tokens[self.i]
        return None

    def cur_type(self):
        token = self.cur()
        return token.type if token is not None else None

    def next(self):
        self.i += 1

    def prev(self):
        self.i -= 1

    def in_bound(self):
        return 0 <= self.i < len(self.tokens)

    def position(self):
        if not self.tokens:
            return SourcePosition(0, 0, 0)
        if self.i >= len(self.tokens):
            return self.tokens[-1].end
        return self.tokens[max(self.i, 0)].start

    def fail(self, error_cls, message):
        '''
        Raise error_cls pinned at the current token.
        '''
        raise error_cls(self.position(), self.i, message)

    def __repr__(self):
        return 'Cursor({}/{})'.format(self.i, len(self.tokens))


class Lexer:
    '''
    Lexer for calculator programs.

    Lexemes are the sources of a fixed set of token types, matched longest
    first. Spaces and newlines separate lexemes and are otherwise ignored;
    unknown characters are skipped one at a time and their positions
    collected.
    '''
    SPACE = ' '
    NEWLINE = '\n'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.POSIX,
                    regex.VERSION1},
                   0)

    def __init__(self, token_types=ALL_TOKEN_TYPES):
        self.by_source = {type_.source: type_ for type_ in token_types}
        # POSIX matching already prefers the longest alternative, but
        # ordering them longest first keeps the pattern readable as such.
        sources = sorted(self.by_source, key=len, reverse=True)
        self.pattern = r'(?:' + r'|'.join(map(regex.escape, sources)) + r')'
        self._regex = regex.compile(self.pattern, flags=type(self).FLAGS)

    def scan(self, source):
        '''
        Yield a Token per lexeme, and a SourcePosition per unknown symbol.
        '''
        i = line = column = 0
        while i < len(source):
            char = source[i]
            if char == type(self).SPACE:
                i += 1
                column += 1
                continue
            elif char == type(self).NEWLINE:
                i += 1
                line += 1
                column = 0
                continue
            match = self._regex.match(source, i)
            if match is None:
                yield SourcePosition(i, line, column)
                i += 1
                column += 1
                continue
            lexeme = match.group()
            start = SourcePosition(i, line, column)
            i += len(lexeme)
            column += len(lexeme)
            yield Token(self.by_source[lexeme], start,
                        SourcePosition(i, line, column))

    def lex(self, source):
        '''
        Take a program and return its tokens and unknown symbol positions.
        '''
        tokens = []
        error_positions = []
        for lexeme in self.scan(source):
            if isinstance(lexeme, Token):
                tokens.append(lexeme)
            else:
                error_positions.append(lexeme)
        return Lexicalization(tokens, error_positions)
