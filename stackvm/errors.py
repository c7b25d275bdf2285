from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from stackvm.instructions import InstructionKind


class StackVMError(Exception):
    # Assembly errors point at 1-based source lines; execution errors at the
    # 0-based Program index printed as `Line N:` by the listing dump.
    line_label = "line"

    def __init__(self, message: str, *, line: int | None = None) -> None:
        self.line = line
        self.message = str(message)
        prefix = f"{self.line_label} {line}: " if line is not None else ""
        super().__init__(prefix + self.message)


class AssemblyError(StackVMError):
    pass


class UnknownToken(AssemblyError):
    def __init__(self, token: str, *, line: int | None = None) -> None:
        self.token = token
        super().__init__(f"unknown token: `{token}`", line=line)


class ExecutionError(StackVMError):
    line_label = "Line"


class StackUnderflow(ExecutionError):
    def __init__(
        self,
        kind: InstructionKind,
        *,
        required: int,
        available: int,
        line: int | None = None,
    ) -> None:
        self.kind = kind
        self.required = required
        self.available = available
        super().__init__(
            f"not enough values on stack for '{kind.display}' "
            f"(needs {required}, has {available})",
            line=line,
        )


class UnimplementedInstruction(ExecutionError):
    def __init__(self, kind: InstructionKind, *, line: int | None = None) -> None:
        self.kind = kind
        super().__init__(f"unimplemented instruction '{kind.display}'", line=line)
