## stackline — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import pytest

from stackline.compiler import compile_source
from stackline.interpreter import interpret, interpret_step, can_execute, check_program
from stackline.formatting import stack_to_list, list_to_stack
from stackline.types import Operation, OpKind, nil, INT64_MIN, INT64_MAX
from stackline.errors import LineStackError, LineOverflowError, LineAssertionError


def run(source: str, **kwargs):
    return interpret(compile_source(source), **kwargs)


@pytest.mark.parametrize("source, expected", [
    ("34 35 + print", "69\n"),
    ("1 2 3 + + print", "6\n"),
    ("5 print 7 print", "5\n7\n"),
    (f"{INT64_MAX} print", f"{INT64_MAX}\n"),
    (f"{INT64_MIN} print", f"{INT64_MIN}\n"),
    ("-5 3 + print", "-2\n"),
])
def test_programs_print_expected_output(capsys, source, expected):
    stack = run(source)
    assert capsys.readouterr().out == expected
    assert stack is nil


def test_final_stack_is_returned_without_implicit_print(capsys):
    stack = run("1 2 3 +")
    assert capsys.readouterr().out == ""
    assert stack_to_list(stack) == [5, 1]


def test_print_on_empty_stack_underflows():
    with pytest.raises(LineStackError) as excinfo:
        run("print")
    assert excinfo.value.line_token == "print"
    assert excinfo.value.line_stack is nil


@pytest.mark.parametrize("source", ["+", "1 +"])
def test_add_needs_two_values(source):
    with pytest.raises(LineStackError):
        run(source)


def test_add_underflow_does_not_push_partial_result():
    stack = list_to_stack([1])
    with pytest.raises(LineStackError):
        interpret_step(Operation(OpKind.ADD), stack)


def test_output_before_underflow_is_emitted(capsys):
    with pytest.raises(LineStackError):
        run("5 print print")
    assert capsys.readouterr().out == "5\n"


def test_validate_rejects_program_before_running(capsys):
    with pytest.raises(LineStackError) as excinfo:
        run("5 print print", validate=True)
    assert capsys.readouterr().out == ""
    assert "needs at least 1 item" in str(excinfo.value)


def test_validate_reports_depth_without_stale_stack():
    with pytest.raises(LineStackError) as excinfo:
        run("1 2 + +", validate=True)
    assert "but 1 available" in str(excinfo.value)
    assert excinfo.value.line_stack is None
    assert excinfo.value.line_meta == {'column': 7, 'depth': 1}


def test_runtime_underflow_carries_actual_stack():
    with pytest.raises(LineStackError) as excinfo:
        run("1 2 + +")
    assert stack_to_list(excinfo.value.line_stack) == [3]
    assert excinfo.value.line_meta['depth'] == 1


def test_check_program_returns_final_depth():
    assert check_program(compile_source("1 2 3 + print")) == 1
    assert check_program(compile_source("+"), stack=list_to_stack([1, 2])) == 1


def test_add_overflow_is_fatal():
    with pytest.raises(LineOverflowError):
        run(f"{INT64_MAX} 1 +")


def test_nop_is_unreachable():
    with pytest.raises(LineAssertionError):
        interpret([Operation(OpKind.NOP)])


def test_foreign_operation_is_unreachable():
    with pytest.raises(LineAssertionError):
        interpret(["print"])


def test_can_execute_reports_depth():
    ok, msg = can_execute(Operation(OpKind.ADD), list_to_stack([1]))
    assert ok is False and "needs at least 2 item(s)" in msg
    assert can_execute(Operation(OpKind.PUSH_INT, 3), nil) == (True, "")


def test_print_writes_to_given_file(tmp_path):
    path = tmp_path / "out.txt"
    with open(path, "w") as f:
        run("3 4 + print", file=f)
    assert path.read_text() == "7\n"


def test_stats_count_steps_and_verbose_trace(capsys):
    stats = {}
    run("1 2 + print", stats=stats, verbosity=2)
    assert stats['steps'] == 4
    out = capsys.readouterr().out
    assert "<=>" in out and "3\n" in out
