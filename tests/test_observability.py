import io
import json
from pathlib import Path

import cbor2

from docsite.observability import StructuredLogger, format_record


def test_records_keep_operation_module_and_step() -> None:
    logger = StructuredLogger()
    logger.log(operation="fetch", module="foo", step="clone", message="Cloning.")
    logger.log(operation="clean", module=None, step=None, message="Removed dist.")

    records = logger.records_for_module("foo")
    assert records == [
        {
            "level": "info",
            "operation": "fetch",
            "module": "foo",
            "step": "clone",
            "message": "Cloning.",
        }
    ]


def test_stream_receives_formatted_lines() -> None:
    stream = io.StringIO()
    logger = StructuredLogger(stream=stream)

    logger.log(operation="relocate", module="foo", step="docs", message="Moved.", level="warning")
    logger.log(operation="clean", module=None, step=None, message="Removed.")

    assert stream.getvalue().splitlines() == [
        "[warning] relocate (foo/docs): Moved.",
        "[info] clean: Removed.",
    ]


def test_json_lines_export_is_sorted_and_creates_parents(tmp_path: Path) -> None:
    logger = StructuredLogger()
    logger.log(
        operation="fetch",
        module="foo",
        step="clone",
        message="Cloning.",
        extra={"path": Path("packages/foo")},
    )

    output = logger.to_json_lines(tmp_path / "nested" / "log.jsonl")

    line = output.read_text(encoding="utf-8").strip()
    assert json.loads(line)["extra"]["path"] == str(Path("packages/foo"))
    assert line.startswith('{"extra"')


def test_cbor_export_round_trips_records(tmp_path: Path) -> None:
    logger = StructuredLogger()
    logger.log(operation="clean", module=None, step=None, message="Removed.")

    output = logger.write(tmp_path / "log.cbor")

    assert cbor2.loads(output.read_bytes()) == logger.records


def test_format_record_without_scope() -> None:
    record = {"level": "error", "operation": "build", "module": None, "step": None, "message": "x"}

    assert format_record(record) == "[error] build: x"
