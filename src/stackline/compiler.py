## stackline — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .types import Operation, OpKind, Program, Token, TokenKind
from .errors import LineNameError, LineAssertionError
from .lexer import Lexer


WORDS: dict[str, OpKind] = {
    'print': OpKind.PRINT,
    '+': OpKind.ADD,
}


class Compiler:
    """Translates tokens one-to-one into operations, owning the program until it's handed out."""

    def __init__(self, filename: str | None = None):
        self.filename = filename
        self.program: list[Operation] = []

    def compile_token(self, token: Token) -> Operation:
        match token.kind:
            case TokenKind.INTEGER:
                op = Operation(OpKind.PUSH_INT, token.value, token)
            case TokenKind.WORD:
                if (kind := WORDS.get(token.value)) is None:
                    raise LineNameError(f"Unknown word `{token.value}`.", line_token=token.value,
                                        line_meta={'filename': self.filename, 'column': token.column})
                op = Operation(kind, None, token)
            case _:
                raise LineAssertionError(f"Unreachable token kind {token.kind!r}.", line_token=token)

        self.program.append(op)
        return op

    def compile(self, lexer: Lexer) -> Program:
        while len(lexer.tokens) < lexer.token_count():
            self.compile_token(lexer.next())
        return tuple(self.program)


def compile_tokens(lexer: Lexer) -> Program:
    return Compiler(filename=lexer.filename).compile(lexer)

def compile_source(line: str, filename: str | None = None) -> Program:
    return compile_tokens(Lexer(line, filename=filename))
