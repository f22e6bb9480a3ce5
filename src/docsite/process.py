"""External process execution with typed outcomes.

Each call spawns exactly one child process and waits for it. There is no retry
and no timeout: a child that never exits blocks the caller.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from docsite.errors import ProcessError
from docsite.observability import StructuredLogger


@dataclass(frozen=True, slots=True)
class Success:
    exit_code: int = 0
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Failure:
    """A child that could not start (``exit_code is None``) or exited non-zero."""

    exit_code: int | None = None
    reason: str = ""
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return False


ProcessOutcome = Success | Failure


class Runner(Protocol):
    def run(
        self,
        executable: str,
        args: Sequence[str],
        *,
        cwd: Path | None = None,
        accept_exit_codes: Sequence[int] = (),
    ) -> ProcessOutcome:
        """Run *executable* with *args* and report how it terminated."""


@dataclass(slots=True)
class ProcessRunner:
    logger: StructuredLogger = field(default_factory=StructuredLogger)

    def run(
        self,
        executable: str,
        args: Sequence[str],
        *,
        cwd: Path | None = None,
        accept_exit_codes: Sequence[int] = (),
    ) -> ProcessOutcome:
        command = [executable, *args]
        try:
            completed = subprocess.run(
                command,
                cwd=str(cwd) if cwd is not None else None,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            self.logger.log(
                operation="run",
                module=None,
                step=executable,
                message=f"Could not start process: {exc}",
                level="error",
                extra={"command": command},
            )
            return Failure(reason=str(exc))

        code = completed.returncode
        if code == 0 or code in accept_exit_codes:
            self.logger.log(
                operation="run",
                module=None,
                step=executable,
                message=f"Process exited with code {code}.",
                extra={"command": command},
            )
            return Success(exit_code=code, stdout=completed.stdout, stderr=completed.stderr)

        self.logger.log(
            operation="run",
            module=None,
            step=executable,
            message=f"Process exited with code {code}.",
            level="error",
            extra={"command": command},
        )
        return Failure(
            exit_code=code,
            reason=f"The process returned with exit code {code}",
            stdout=completed.stdout,
            stderr=completed.stderr,
        )


def require_success(
    outcome: ProcessOutcome,
    *,
    operation: str,
    command: Sequence[str],
) -> Success:
    """Return *outcome* if it succeeded, otherwise raise :class:`ProcessError`."""
    if isinstance(outcome, Success):
        return outcome
    if outcome.exit_code is None:
        raise ProcessError(
            "External process could not be started.",
            hint="Ensure the executable is installed and available in PATH.",
            context={
                "operation": operation,
                "command": " ".join(command),
                "reason": outcome.reason,
            },
        )
    raise ProcessError(
        "External process failed.",
        hint="Inspect the process output for details.",
        context={
            "operation": operation,
            "command": " ".join(command),
            "returncode": str(outcome.exit_code),
            "stderr": outcome.stderr.strip()[:2000],
        },
    )
