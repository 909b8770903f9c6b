## stackline — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# stackline — Lex, compile and run one line of a tiny integer stack language.
#

import sys
import time
import itertools
from dataclasses import dataclass

import click

from .types import Stack
from .errors import LineError, LineParseError, LineNameError, LineStackError, LineAssertionError
from .formatting import write_without_ansi, format_source_context, format_stack

from . import api


DEFAULT_SOURCE = "34 35 + print"

EXIT_USER_ERROR = 1
EXIT_RUNTIME_ERROR = 2


@dataclass(frozen=True)
class RuntimeConfig:
    verbose: int
    validate: bool
    stats: bool
    plain: bool


class LineRunner:
    def __init__(self, config: RuntimeConfig):
        self.verbose = config.verbose
        self.validate = config.validate
        self.stats_enabled = config.stats
        self.plain = config.plain

        if self.plain:
            writer = write_without_ansi(sys.stdout.write)
            sys.stdout.write, sys.stderr.write = writer, writer

        self.runtime = api._RUNTIME
        self.total_stats = {'steps': 0, 'start': time.time()} if self.stats_enabled else None
        self.status = 0

    def _fatal_error(self, message: str, detail: str, exc_type: str, context: str, status: int) -> None:
        print(f'\033[30;43m {message} \033[0m {detail} (Exception: \033[33m{exc_type}\033[0m)\n{context}', file=sys.stderr)
        self.status = status

    def _handle_exception(self, exc: LineError, filename: str, source: str) -> None:
        if isinstance(exc, LineParseError):
            context = format_source_context(source, exc.column, exc.token, filename)
            self._fatal_error("SYNTAX ERROR.", f"Parsing `\033[97m{filename}\033[0m` caused a problem! {exc}",
                              type(exc).__name__, context, EXIT_USER_ERROR)
        elif isinstance(exc, LineNameError):
            detail = f"Word `\033[1;97m{exc.line_token}\033[0m` from `\033[97m{filename}\033[0m` is not recognized!"
            context = format_source_context(source, exc.line_meta.get('column'), exc.line_token, filename)
            self._fatal_error("COMPILE ERROR.", detail, type(exc).__name__, context, EXIT_USER_ERROR)
        elif isinstance(exc, LineStackError):
            detail = f"Operation \033[1;97m`{exc.line_token}`\033[0m ran out of values. {exc}"
            context = format_source_context(source, exc.line_meta.get('column'), exc.line_token, filename)
            if exc.line_stack is not None:
                context += f"\033[1;33m  Stack content is\033[0;33m\n    {format_stack(exc.line_stack)}\033[0m\n"
            else:
                context += f"\033[1;33m  Stack depth would be \033[0;33m{exc.line_meta.get('depth')}\033[0m\n"
            self._fatal_error("STACK UNDERFLOW.", detail, type(exc).__name__, context, EXIT_RUNTIME_ERROR)
        else:
            detail = f"Operation \033[1;97m`{exc.line_token}`\033[0m caused an error in interpret! {exc}"
            self._fatal_error("RUNTIME ERROR.", detail, type(exc).__name__, '', EXIT_RUNTIME_ERROR)

    def _show_compiled(self, source: str, filename: str) -> None:
        tokens = self.runtime.tokenize(source, filename=filename)
        print(f"\033[90mtokens  :\033[0m  {' '.join(repr(t) for t in tokens) or '∅'}")
        program = self.runtime.compile(source, filename=filename)
        print(f"\033[90mprogram :\033[0m  {' '.join(repr(op) for op in program) or '∅'}")

    def execute_line(self, source: str, filename: str) -> Stack | None:
        try:
            if self.verbose > 0:
                self._show_compiled(source, filename)
            return self.runtime.run(source, filename=filename, verbosity=self.verbose,
                                    validate=self.validate, stats=self.total_stats)
        except LineAssertionError:
            raise
        except LineError as exc:
            self._handle_exception(exc, filename, source)
            return None

    def finalize(self) -> int:
        if self.total_stats and self.status == 0:
            elapsed_time = time.time() - self.total_stats['start']
            print(f"\n\033[97m\033[48;5;30m STATISTICS. \033[0m")
            print(f"step\t\033[97m{self.total_stats['steps']:,}\033[0m")
            print(f"time\t\033[97m{elapsed_time:.3f}s\033[0m")
        return self.status


def _read_stdin_line(stream) -> str:
    return stream.readline().rstrip('\r\n')


@click.group(invoke_without_command=True)
@click.option('--verbose', '-v', default=0, count=True, help='Show tokens and program; twice to trace every step.')
@click.option('--validate', is_flag=True, help='Check the whole program for stack underflow before running it.')
@click.option('--stats', is_flag=True, help='Display execution statistics (e.g., number of steps).')
@click.option('--plain', '-p', is_flag=True, help='Strip ANSI color codes and redirect stderr to stdout.')
@click.pass_context
def cli(ctx: click.Context, verbose: int, validate: bool, stats: bool, plain: bool) -> None:
    ctx.ensure_object(dict)
    ctx.obj['config'] = RuntimeConfig(verbose=verbose, validate=validate, stats=stats, plain=plain)


@cli.command('run-line')
@click.argument('words', nargs=-1, required=True)
@click.pass_context
def run_line(ctx: click.Context, words: tuple[str, ...]) -> None:
    runner = LineRunner(ctx.obj['config'])
    runner.execute_line(' '.join(words), '<INPUT>')
    ctx.exit(runner.finalize())


@cli.command('run-stdin')
@click.argument('stream', type=click.File('r', encoding='utf-8'), default='-')
@click.pass_context
def run_stdin(ctx: click.Context, stream) -> None:
    runner = LineRunner(ctx.obj['config'])
    runner.execute_line(_read_stdin_line(stream), '<STDIN>')
    ctx.exit(runner.finalize())


def _is_global_flag(token: str) -> bool:
    return token in ('--validate', '--stats', '--plain', '-p', '--verbose') or (token.startswith('-v') and set(token[1:]) == {'v'})


def main(argv: list[str] | None = None) -> None:
    a = list(sys.argv[1:] if argv is None else argv)
    # Global flags are only recognized before the first word of the source line.
    g = list(itertools.takewhile(_is_global_flag, a))
    r = a[len(g):]

    if r and r[0] in ('-c', '--command'):
        if len(r) < 2: raise SystemExit("Expected source line after -c/--command.")
        cmd, tail = 'run-line', ['--', *r[1:]]
    elif r == ['-'] or (len(r) == 0 and not sys.stdin.isatty()):
        cmd, tail = 'run-stdin', ['-']
    elif len(r) == 0:
        cmd, tail = 'run-line', ['--', DEFAULT_SOURCE]
    else:
        cmd, tail = 'run-line', ['--', *r]

    cli.main(args=[*g, cmd, *tail], prog_name='stackline', auto_envvar_prefix='STACKLINE')


if __name__ == "__main__":
    main()
