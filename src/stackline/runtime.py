## stackline — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .types import Operation, OpKind, Program, Stack, Token, TokenKind
from .lexer import Lexer
from .compiler import Compiler, WORDS
from .formatting import list_to_stack as _list_to_stack, stack_to_list as _stack_to_list
from .interpreter import interpret, interpret_step, can_execute


class Runtime:
    """Minimal runtime facade focused on embedding: lex, compile and run single lines."""

    # Assembly ────────────────────────────────────────────────────────────────────────────────
    def operation(self, name: str | int) -> Operation:
        if isinstance(name, int):
            return Operation(OpKind.PUSH_INT, name)
        return Compiler().compile_token(Token(TokenKind.WORD, name))

    def tokenize(self, source: str, filename: str | None = None) -> list[Token]:
        return list(Lexer(source, filename=filename))

    def compile(self, source: str, filename: str | None = None) -> Program:
        return Compiler(filename=filename).compile(Lexer(source, filename=filename))

    def is_operation(self, x) -> bool:
        return isinstance(x, Operation)

    def words(self) -> list[str]:
        return sorted(WORDS)

    # Execution ───────────────────────────────────────────────────────────────────────────────
    def run(self, source: str, stack: Stack | None = None, filename: str | None = None,
            verbosity: int = 0, validate: bool = False, stats: dict | None = None, file=None) -> Stack:
        program = self.compile(source, filename=filename)
        return interpret(program, stack=stack, file=file, verbosity=verbosity, validate=validate, stats=stats)

    def execute(self, program: Program, stack: Stack | None = None, validate: bool = False, file=None) -> Stack:
        return interpret(program, stack=stack, file=file, validate=validate)

    def can_step(self, op: Operation, stack: Stack) -> tuple[bool, str]:
        return can_execute(op, stack)

    def do_step(self, queue, stack, file=None):
        queue = tuple(queue)
        return interpret_step(queue[0], stack, file=file), queue[1:]

    def apply(self, op_or_name: Operation | str, stack: Stack, file=None) -> Stack:
        op = op_or_name if isinstance(op_or_name, Operation) else self.operation(op_or_name)
        stack, _ = self.do_step([op], stack, file=file)
        return stack

    # Introspection ───────────────────────────────────────────────────────────────────────────
    def to_stack(self, values: list) -> Stack:
        return _list_to_stack(values)

    def from_stack(self, stack: Stack) -> list:
        return _stack_to_list(stack)
