## stackline — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .types import Operation, OpKind, Stack, nil, fits_int64
from .errors import LineStackError, LineOverflowError, LineAssertionError
from .formatting import show_program_and_stack


# Number of items each operation pops, and pushes back.
ARITY = {OpKind.PUSH_INT: (0, 1), OpKind.ADD: (2, 1), OpKind.PRINT: (1, 0)}


def _effect(op: Operation) -> tuple[int, int]:
    if not isinstance(op, Operation) or op.kind not in ARITY:
        raise LineAssertionError(f"Unreachable operation `{op!r}` reached the interpreter.", line_op=op)
    return ARITY[op.kind]

def _underflow(op: Operation, depth: int, stack: Stack | None) -> LineStackError:
    # Static checks know only the depth, so they pass no stack.
    need = ARITY[op.kind][0]
    token = op.token
    return LineStackError(f"`{op!r}` needs at least {need} item(s) on the stack, but {depth} available.",
                          line_op=op, line_token=token.text if token else repr(op), line_stack=stack,
                          line_meta={'column': token.column if token else None, 'depth': depth})


def can_execute(op: Operation, stack: Stack) -> tuple[bool, str]:
    """Check if operation can execute on stack using its stack effect."""
    need, _ = _effect(op)
    depth = stack.depth()
    if depth < need:
        return False, f"`{op!r}` needs at least {need} item(s) on the stack, but {depth} available."
    return True, ""


def check_program(program, stack: Stack = None) -> int:
    """Statically verify that no operation would underflow, returning the final depth."""
    stack = nil if stack is None else stack
    depth = stack.depth()
    for op in program:
        need, produced = _effect(op)
        if depth < need:
            raise _underflow(op, depth, None)
        depth += produced - need
    return depth


def _pop(op: Operation, stack: Stack) -> tuple[Stack, int]:
    if stack is nil:
        raise _underflow(op, 0, stack)
    return stack.tail, stack.head


def interpret_step(op: Operation, stack: Stack, file=None) -> Stack:
    match getattr(op, 'kind', None):
        case OpKind.PUSH_INT:
            return Stack(stack, op.operand)
        case OpKind.ADD:
            if stack is nil or stack.tail is nil:
                raise _underflow(op, stack.depth(), stack)
            rest, a = _pop(op, stack)
            rest, b = _pop(op, rest)
            if not fits_int64(total := b + a):
                raise LineOverflowError(f"`{b} + {a}` overflows a 64-bit integer.", line_op=op, line_token='+')
            return Stack(rest, total)
        case OpKind.PRINT:
            rest, value = _pop(op, stack)
            print(value, file=file)
            return rest
        case _:
            raise LineAssertionError(f"Unreachable operation `{op!r}` reached the interpreter.", line_op=op)


def interpret(program, stack=None, file=None, verbosity=0, validate=False, stats=None) -> Stack:
    stack = nil if stack is None else stack
    if validate:
        check_program(program, stack)

    program = tuple(program)
    for step, op in enumerate(program):
        if verbosity >= 2:
            print(f"\033[90m{step:>3} :\033[0m  ", end='')
            show_program_and_stack(program[step:], stack)
        stack = interpret_step(op, stack, file=file)

    step = len(program)
    if verbosity >= 2:
        print(f"\033[90m{step:>3} :\033[0m  ", end='')
        show_program_and_stack((), stack)
    if stats is not None:
        stats['steps'] = stats.get('steps', 0) + step

    return stack
