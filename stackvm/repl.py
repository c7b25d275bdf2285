from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TextIO

from stackvm.assembler import assemble_line, split_tokens
from stackvm.config import Settings
from stackvm.errors import StackVMError
from stackvm.machine import StackMachine
from stackvm.program import Program

BANNER = "Interactive REPL. Type `exit` to quit."
EXIT_TOKEN = "exit"


class TurnStatus(str, Enum):
    OK = "ok"
    SKIPPED = "skipped"
    EXIT = "exit"
    ASSEMBLY_ERROR = "assembly_error"
    EXECUTION_ERROR = "execution_error"


@dataclass(frozen=True)
class TurnResult:
    status: TurnStatus
    stack: list[int] = field(default_factory=list)
    error: StackVMError | None = None


def format_stack(stack: list[int]) -> str:
    return ":- " + ", ".join(str(n) for n in stack)


class Session:
    """One interactive session: a Program that grows by one Line per accepted turn.

    Every turn re-executes the whole Program on a fresh stack. A Line that
    assembles is committed even if executing it fails, so later turns fail too.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        emit: Callable[[int], None] | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.program = Program()
        self.machine = StackMachine(reserved=self.settings.reserved, emit=emit)

    def feed(self, raw_line: str) -> TurnResult:
        if raw_line.strip() == EXIT_TOKEN:
            return TurnResult(status=TurnStatus.EXIT)
        tokens = split_tokens(raw_line)
        if tokens is None:
            return TurnResult(status=TurnStatus.SKIPPED)

        try:
            assemble_line(self.program, tokens)
        except StackVMError as e:
            return TurnResult(status=TurnStatus.ASSEMBLY_ERROR, error=e)

        try:
            stack = self.machine.run(self.program)
        except StackVMError as e:
            return TurnResult(status=TurnStatus.EXECUTION_ERROR, error=e)

        return TurnResult(status=TurnStatus.OK, stack=stack)


def run_repl(stdin: TextIO, stdout: TextIO, settings: Settings | None = None) -> Program:
    settings = settings or Settings()

    def emit(value: int) -> None:
        print(value, file=stdout)

    session = Session(settings, emit=emit)
    if settings.banner:
        print(BANNER, file=stdout)

    while True:
        stdout.write(settings.prompt)
        stdout.flush()
        raw = stdin.readline()
        if not raw:
            break
        result = session.feed(raw)
        if result.status == TurnStatus.EXIT:
            break
        if result.error is not None:
            print(f"ERROR: {result.error}", file=stdout)
            continue
        if result.stack:
            print(format_stack(result.stack), file=stdout)

    return session.program
