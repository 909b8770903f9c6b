## stackline — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import lark

from .types import Token, TokenKind, fits_int64
from .errors import LineParseError, LineAssertionError


# A segment is INTEGER only if, after an optional sign, all of its characters
# are ASCII digits; the lookahead stops `12a` from being split into `12` and `a`.
GRAMMAR = r"""start: (INTEGER | WORD)*

INTEGER.2: /[+-]?[0-9]+(?!\S)/
WORD: /\S+/

WS: /\s+/
%ignore WS
"""

_PARSER = lark.Lark(GRAMMAR, parser="lalr", lexer="basic")

SENTINEL = " "


class Lexer:
    """Lazy, single-pass tokenizer over one line of source text.

    Tokens are produced on demand by `next()`, left to right, exactly once.
    The caller knows when to stop from `token_count()`, which is computed
    upfront and never changes.
    """

    def __init__(self, line: str, filename: str | None = None):
        self.source = line
        self.filename = filename
        self.text = line + SENTINEL
        self.position = 0
        self.tokens: list[Token] = []

        self._count = len(line.split())
        self._stream = _PARSER.lex(self.text)

    def token_count(self) -> int:
        return self._count

    @property
    def exhausted(self) -> bool:
        return len(self.tokens) >= self._count

    def next(self) -> Token:
        if self.position >= len(self.text) or self.exhausted:
            raise LineAssertionError(f"Lexer read past the end of the line at position {self.position}.",
                                     line_meta={'filename': self.filename, 'column': self.position + 1})

        try:
            raw = next(self._stream)
        except StopIteration:
            raise LineAssertionError(f"Lexer found {len(self.tokens)} of {self._count} expected tokens.",
                                     line_meta={'filename': self.filename}) from None
        except lark.exceptions.UnexpectedInput as exc:
            raise LineParseError(str(exc), filename=self.filename, line=1,
                                 column=getattr(exc, 'column', None), token='') from None

        column = raw.start_pos + 1
        # Consume the whitespace that terminated this segment too.
        self.position = raw.start_pos + len(raw.value) + 1

        if raw.type == 'INTEGER':
            value = int(raw.value)
            if not fits_int64(value):
                raise LineParseError(f"Integer literal `{raw.value}` does not fit in 64 bits.",
                                     filename=self.filename, line=1, column=column, token=raw.value)
            token = Token(TokenKind.INTEGER, value, column)
        else:
            token = Token(TokenKind.WORD, str(raw.value), column)

        self.tokens.append(token)
        return token

    def __iter__(self):
        while not self.exhausted:
            yield self.next()


def tokenize(line: str, filename: str | None = None) -> list[Token]:
    return list(Lexer(line, filename=filename))
