from __future__ import annotations

import io

from stackvm.config import Settings
from stackvm.errors import StackUnderflow, UnknownToken
from stackvm.repl import BANNER, Session, TurnStatus, format_stack, run_repl


def _session() -> tuple[Session, list[int]]:
    out: list[int] = []
    return Session(Settings(), emit=out.append), out


def test_turns_are_cumulative() -> None:
    session, out = _session()
    r1 = session.feed("1")
    assert r1.status == TurnStatus.OK
    assert r1.stack == [1]
    r2 = session.feed("2 + print")
    assert r2.status == TurnStatus.OK
    assert out == [3]
    assert r2.stack == []


def test_turns_are_deterministic_across_sessions() -> None:
    outputs = []
    for _ in range(2):
        session, out = _session()
        session.feed("1")
        session.feed("2 + print")
        outputs.append(out)
    assert outputs[0] == outputs[1] == [3]


def test_each_turn_reexecutes_from_empty_stack() -> None:
    session, _ = _session()
    session.feed("5")
    r = session.feed("6")
    assert r.stack == [5, 6]


def test_assembly_error_does_not_extend_program() -> None:
    session, out = _session()
    session.feed("1 print")
    r = session.feed("2 wat")
    assert r.status == TurnStatus.ASSEMBLY_ERROR
    assert isinstance(r.error, UnknownToken)
    assert len(session.program) == 1
    assert out == [1]


def test_execution_error_keeps_line_and_fails_later_turns() -> None:
    session, _ = _session()
    session.feed("1")
    r = session.feed("+")
    assert r.status == TurnStatus.EXECUTION_ERROR
    assert isinstance(r.error, StackUnderflow)
    assert r.error.line == 1
    assert len(session.program) == 2

    r = session.feed("2")
    assert r.status == TurnStatus.EXECUTION_ERROR
    assert len(session.program) == 3


def test_failed_print_on_empty_session_is_committed() -> None:
    session, out = _session()
    r = session.feed("print")
    assert r.status == TurnStatus.EXECUTION_ERROR
    assert len(session.program) == 1
    assert session.program[0].index == 0
    assert out == []


def test_blank_comment_and_exit() -> None:
    session, _ = _session()
    assert session.feed("   ").status == TurnStatus.SKIPPED
    assert session.feed("# note").status == TurnStatus.SKIPPED
    assert session.feed("exit").status == TurnStatus.EXIT
    assert len(session.program) == 0


def test_format_stack() -> None:
    assert format_stack([1, 2, 3]) == ":- 1, 2, 3"


def test_run_repl_transcript() -> None:
    stdin = io.StringIO("1\n2\n+ print\nbad\nexit\n9\n")
    stdout = io.StringIO()
    program = run_repl(stdin, stdout, Settings())
    assert len(program) == 3
    assert stdout.getvalue().splitlines() == [
        BANNER,
        "> :- 1",
        "> :- 1, 2",
        "> 3",
        "> ERROR: unknown token: `bad`",
        "> ",
    ]


def test_run_repl_stops_at_eof_and_honours_settings() -> None:
    stdin = io.StringIO("4 5\n")
    stdout = io.StringIO()
    run_repl(stdin, stdout, Settings(prompt="$ ", banner=False))
    assert stdout.getvalue() == "$ :- 4, 5\n$ "
