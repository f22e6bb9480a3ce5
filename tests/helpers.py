"""Test doubles shared across test modules."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from docsite.config import SiteConfig
from docsite.process import Failure, ProcessOutcome, Runner, Success
from docsite.redirect import generate_module_redirects


@dataclass(slots=True)
class FakeRunner:
    """Runner double that simulates `git clone`.

    The docs-rel-links child runs in-process unless `child_runner` is set.
    """

    config: SiteConfig
    clone_exit_code: int = 0
    with_examples: bool = True
    links_outcome: ProcessOutcome | None = None
    child_runner: Runner | None = None
    calls: list[tuple[str, tuple[str, ...], tuple[int, ...]]] = field(default_factory=list)

    def run(
        self,
        executable: str,
        args: Sequence[str],
        *,
        cwd: Path | None = None,
        accept_exit_codes: Sequence[int] = (),
    ) -> ProcessOutcome:
        self.calls.append((executable, tuple(args), tuple(accept_exit_codes)))
        if executable == self.config.git_executable:
            return self._clone(Path(args[-1]), accept_exit_codes)
        if executable == sys.executable:
            if self.links_outcome is not None:
                return self.links_outcome
            if self.child_runner is not None:
                return self.child_runner.run(executable, args, cwd=cwd)
            generate_module_redirects(args[-1], self.config)
            return Success()
        return Failure(reason=f"unexpected executable {executable}")

    def _clone(self, destination: Path, accept_exit_codes: Sequence[int]) -> ProcessOutcome:
        code = self.clone_exit_code
        if code == 0:
            (destination / "docs" / "html").mkdir(parents=True)
            (destination / "docs" / "html" / "index.html").write_text("<h1>docs</h1>\n")
            if self.with_examples:
                (destination / "examples").mkdir(parents=True)
                (destination / "examples" / "hello.js").write_text("console.log('hi');\n")
            return Success()
        if code in accept_exit_codes:
            return Success(exit_code=code)
        return Failure(exit_code=code, reason=f"exit code {code}", stderr="fatal: clone failed")


