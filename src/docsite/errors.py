"""Error taxonomy for the site build scripts.

Every error carries a stable code, so callers (and ``--log-file`` consumers)
can branch on the category without parsing messages.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import ClassVar


class ErrorCode(StrEnum):
    VALIDATION = "E_VALIDATION"
    PROCESS = "E_PROCESS"
    IO = "E_IO"
    CONFIG = "E_CONFIG"


class DocsiteError(Exception):
    """Failure with a category code, an optional remedy, and string context."""

    error_code: ClassVar[ErrorCode]

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.hint = hint
        self.context: dict[str, str] = dict(context or {})

    @property
    def code(self) -> str:
        return self.error_code.value

    @property
    def message(self) -> str:
        return str(self.args[0]) if self.args else ""

    def __str__(self) -> str:
        lines = [self.message]
        if self.hint:
            lines.append(f"Hint: {self.hint}")
        lines.extend(f"  {key}: {value}" for key, value in self.context.items() if value)
        return "\n".join(lines)

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "code": self.code,
            "message": str(self),
            "context": dict(self.context),
        }
        if self.hint is not None:
            payload["hint"] = self.hint
        return payload


class ValidationError(DocsiteError):
    """Bad, missing, or conflicting arguments; raised before any work starts."""

    error_code = ErrorCode.VALIDATION


class ProcessError(DocsiteError):
    """An external process failed or could not be started."""

    error_code = ErrorCode.PROCESS


class FilesystemError(DocsiteError):
    """An expected path is missing or a filesystem operation failed."""

    error_code = ErrorCode.IO


class ConfigError(DocsiteError):
    error_code = ErrorCode.CONFIG


__all__ = [
    "ConfigError",
    "DocsiteError",
    "ErrorCode",
    "FilesystemError",
    "ProcessError",
    "ValidationError",
]
