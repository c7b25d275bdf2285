from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import cast

from stackvm.errors import StackUnderflow, UnimplementedInstruction
from stackvm.instructions import Instruction, InstructionKind, wrap_int64
from stackvm.program import Line

Emit = Callable[[int], None]


def _print_value(value: int) -> None:
    print(value)


class StackMachine:
    """Executes Lines in program order against one operand stack.

    The returned stack is ordered bottom first: index 0 holds the oldest value.
    Kinds listed in `reserved` assemble normally but refuse to execute.
    """

    def __init__(
        self,
        *,
        reserved: Iterable[InstructionKind] = (),
        emit: Emit | None = None,
    ) -> None:
        self.reserved = frozenset(reserved)
        self.emit = emit or _print_value
        self._handlers: dict[InstructionKind, Callable[[list[int], Instruction], None]] = {
            InstructionKind.PUSH_INT: self._push_int,
            InstructionKind.PLUS: self._plus,
            InstructionKind.MINUS: self._minus,
            InstructionKind.PRINT: self._print,
        }

    def run(self, lines: Iterable[Line], *, stack: list[int] | None = None) -> list[int]:
        stack = [] if stack is None else stack
        for line in lines:
            for ins in line.instructions:
                self.step(stack, ins, line=line.index)
        return stack

    def step(self, stack: list[int], ins: Instruction, *, line: int | None = None) -> None:
        kind = ins.kind
        handler = self._handlers.get(kind)
        if handler is None or kind in self.reserved:
            raise UnimplementedInstruction(kind, line=line)
        if len(stack) < kind.pops:
            raise StackUnderflow(kind, required=kind.pops, available=len(stack), line=line)
        handler(stack, ins)

    def _push_int(self, stack: list[int], ins: Instruction) -> None:
        stack.append(cast(int, ins.operand))

    def _plus(self, stack: list[int], ins: Instruction) -> None:
        b = stack.pop()
        a = stack.pop()
        stack.append(wrap_int64(a + b))

    def _minus(self, stack: list[int], ins: Instruction) -> None:
        # a was pushed before b: `3 1 -` leaves 2.
        b = stack.pop()
        a = stack.pop()
        stack.append(wrap_int64(a - b))

    def _print(self, stack: list[int], ins: Instruction) -> None:
        self.emit(stack.pop())


_unhandled = set(InstructionKind) - set(StackMachine()._handlers)
if _unhandled:
    raise AssertionError(f"no execution handler for: {sorted(k.name for k in _unhandled)}")
del _unhandled


def run_program(
    lines: Iterable[Line],
    *,
    stack: list[int] | None = None,
    reserved: Iterable[InstructionKind] = (),
    emit: Emit | None = None,
) -> list[int]:
    return StackMachine(reserved=reserved, emit=emit).run(lines, stack=stack)
