## stackline — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re

from .types import stack_list, Stack, nil


def stack_to_list(stk: Stack) -> stack_list:
    """Top-first list of the items on the stack."""
    result = []
    while stk is not nil:
        stk, head = stk
        result.append(head)
    return stack_list(result)

def list_to_stack(values: list, base=None) -> Stack:
    """Build a stack from a top-first list, on top of an optional base stack."""
    return (nil if base is None else base).pushed(*reversed(values))


def write_without_ansi(write_fn):
    """Wrapper function that strips ANSI codes before calling the original writer."""
    ansi_re = re.compile(r'\033\[[0-9;]*m')
    return lambda text: write_fn(ansi_re.sub('', text))

def format_item(it) -> str:
    return str(it)

def format_stack(stack: Stack, width=None) -> str:
    if stack is nil: return '∅'
    stack_str = ' '.join(format_item(s) for s in reversed(stack_to_list(stack)))
    if width is not None and len(stack_str) > width:
        stack_str = '… ' + stack_str[-width+2:]
    return stack_str

def show_stack(stack, width=72, end='\n', file=None):
    stack_str = format_stack(stack, width=width)
    print(f"{stack_str:>{width}}" if width else stack_str, end=end, file=file)

def show_program_and_stack(program, stack, width=72, file=None):
    prog_str = ' '.join(format_item(p) for p in program) if program else '∅'
    if len(prog_str) > width:
        prog_str = prog_str[:+width-2] + ' …'
    show_stack(stack, width=width, end='', file=file)
    print(f" \033[36m <=> \033[0m {prog_str:<{width}}", file=file)


def format_source_context(source: str, column: int | None, token_value: str, filename: str | None = None) -> str:
    """Render the source line with the offending token highlighted."""
    header = f"\033[97m  File \"{filename or '<INPUT>'}\", column {column if column else '?'}\033[0m"
    line = source.rstrip('\n')
    if column and 0 < column <= len(line):
        width = len(token_value) if token_value else 1
        line = (line[:column-1] +
                f"\033[48;5;30m\033[1;97m{line[column-1:column-1+width]}\033[0m" +
                line[column-1+width:])
    return '\n'.join((header, f"\033[97m    1 |\033[0m {line}")) + '\n'
