"""Structured logging helpers.

Records are kept in memory so a finished (or failed) run can be written out as
JSON lines or CBOR. When ``stream`` is set, each record is also echoed as a single
human-readable line while the build is running.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TextIO

import cbor2


@dataclass(slots=True)
class StructuredLogger:
    records: list[dict[str, Any]] = field(default_factory=list)
    stream: TextIO | None = None

    def log(
        self,
        *,
        operation: str,
        module: str | None,
        step: str | None,
        message: str,
        level: str = "info",
        extra: dict[str, Any] | None = None,
    ) -> None:
        record: dict[str, Any] = {
            "level": level,
            "operation": operation,
            "module": module,
            "step": step,
            "message": message,
        }
        if extra is not None:
            record["extra"] = extra
        self.records.append(record)
        if self.stream is not None:
            print(format_record(record), file=self.stream)

    def records_for_module(self, module: str) -> list[dict[str, Any]]:
        return [record for record in self.records if record.get("module") == module]

    def records_at_level(self, level: str) -> list[dict[str, Any]]:
        return [record for record in self.records if record.get("level") == level]

    def to_json_lines(self, path: str | Path) -> Path:
        output_path = Path(path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        lines = [json.dumps(record, sort_keys=True, default=str) for record in self.records]
        output_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return output_path

    def to_cbor(self, path: str | Path) -> Path:
        output_path = Path(path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(cbor2.dumps(self.records, canonical=True, default=_encode_unknown))
        return output_path

    def write(self, path: str | Path) -> Path:
        """Persist records, as CBOR for a ``.cbor`` suffix and JSON lines otherwise."""
        if Path(path).suffix == ".cbor":
            return self.to_cbor(path)
        return self.to_json_lines(path)


def _encode_unknown(encoder: cbor2.CBOREncoder, value: Any) -> None:
    encoder.encode(str(value))


def format_record(record: dict[str, Any]) -> str:
    scope = "/".join(str(part) for part in (record.get("module"), record.get("step")) if part)
    prefix = f"[{record['level']}] {record['operation']}"
    if scope:
        prefix = f"{prefix} ({scope})"
    return f"{prefix}: {record['message']}"
