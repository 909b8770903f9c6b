## stackline — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import enum
from collections import namedtuple
from dataclasses import dataclass, field

class stack_list(list): pass


INT64_MIN, INT64_MAX = -2**63, 2**63 - 1

def fits_int64(value: int) -> bool:
    return INT64_MIN <= value <= INT64_MAX


# Stack type is a namedtuple to save memory, yet provide tail/head accessors.
class Stack(namedtuple('Stack', ['tail', 'head'])):
    __slots__ = ()
    _nil_singleton = None

    def __new__(cls, tail, head):
        if tail is None and head is None:
            # Only one singleton creation is allowed, and it's the one just below.
            if cls._nil_singleton is None:
                self = super(Stack, cls).__new__(cls, tail, head)
                cls._nil_singleton = self
                return self
            # By convention, all other code should use `nil` explicitly.
            raise ValueError("Use the canonical `nil` instance for empty stacks")
        return super(Stack, cls).__new__(cls, tail, head)

    def __repr__(self):
        if self is nil:
            return "< nil >"

        items = []
        current = self
        while current is not nil:
            items.append(repr(current.head))
            current = current.tail
        return "< " + " ".join(reversed(items)) + " >"

    def __bool__(self):
        raise TypeError("Stack truth value is ambiguous; compare with `is nil` or `is not nil`.")

    def pushed(self, *items):
        """Push items in order of tail (left) to head (right) onto new Stack and return."""
        stack = self
        for it in items:
            stack = Stack(stack, it)
        return stack

    def depth(self) -> int:
        count, current = 0, self
        while current is not nil:
            count, current = count + 1, current.tail
        return count


# All checks for empty stack must be done by comparing to this.
nil = Stack(None, None)


class TokenKind(enum.Enum):
    INTEGER = "integer"
    WORD = "word"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: int | str
    column: int = field(default=0, compare=False)   # 1-based, diagnostics only

    def __post_init__(self):
        expected = int if self.kind is TokenKind.INTEGER else str
        if not isinstance(self.value, expected) or isinstance(self.value, bool):
            raise TypeError(f"{self.kind.name} token requires a {expected.__name__} value, got {self.value!r}.")

    def __repr__(self):
        return f"{self.kind.name}:{self.value}"

    @property
    def text(self) -> str:
        return str(self.value)


class OpKind(enum.Enum):
    NOP = 0           # Bootstrapping placeholder, never emitted by the compiler.
    PUSH_INT = 1
    ADD = 2
    PRINT = 3


@dataclass(frozen=True)
class Operation:
    kind: OpKind
    operand: int | None = None
    token: Token | None = field(default=None, compare=False)

    def __post_init__(self):
        if (self.kind is OpKind.PUSH_INT) != (self.operand is not None):
            raise TypeError(f"Operand is required by PUSH_INT only, got {self.kind.name} with {self.operand!r}.")

    def __repr__(self):
        match self.kind:
            case OpKind.PUSH_INT: return str(self.operand)
            case OpKind.ADD: return "+"
            case OpKind.PRINT: return "print"
            case _: return self.kind.name.lower()


Program = tuple[Operation, ...]
